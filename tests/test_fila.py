from datetime import datetime, timedelta

from servicos.fila import Prioridade, StatusFila, ordenar_fila, transicao_valida

BASE = datetime(2024, 1, 7, 8, 0)


def entrada(id_fila, prioridade, minutos):
    return {'id_fila': id_fila, 'prioridade': prioridade, 'data_entrada': BASE + timedelta(minutes=minutos)}


def test_urgente_antes_de_normal_e_fifo_dentro_da_prioridade():
    fila = [entrada(1, 'Normal', 2), entrada(2, 'Urgente', 5), entrada(3, 'Urgente', 1)]
    assert [e['id_fila'] for e in ordenar_fila(fila)] == [3, 2, 1]


def test_nao_altera_a_lista_original():
    fila = [entrada(1, 'Normal', 2), entrada(2, 'Urgente', 5)]
    copia = list(fila)
    ordenar_fila(fila)
    assert fila == copia


def test_empates_mantem_ordem_original():
    fila = [entrada(1, 'Normal', 0), entrada(2, 'Normal', 0), entrada(3, 'Normal', 0)]
    assert [e['id_fila'] for e in ordenar_fila(fila)] == [1, 2, 3]


def test_datas_em_texto_como_vem_do_banco():
    fila = [
        {'id_fila': 1, 'prioridade': 'Normal', 'data_entrada': '2024-01-07 09:00:00'},
        {'id_fila': 2, 'prioridade': 'Normal', 'data_entrada': '2024-01-07 08:30:00'},
        {'id_fila': 3, 'prioridade': Prioridade.URGENTE, 'data_entrada': '2024-01-07 10:00:00'},
    ]
    assert [e['id_fila'] for e in ordenar_fila(fila)] == [3, 2, 1]


def test_resultado_e_permutacao_ordenada():
    fila = [entrada(i, 'Urgente' if i % 3 == 0 else 'Normal', (i * 7) % 11) for i in range(20)]
    ordenada = ordenar_fila(fila)
    assert sorted(e['id_fila'] for e in ordenada) == list(range(20))
    for a, b in zip(ordenada, ordenada[1:]):
        if a['prioridade'] == b['prioridade']:
            assert a['data_entrada'] <= b['data_entrada']
        else:
            assert (a['prioridade'], b['prioridade']) == ('Urgente', 'Normal')


def test_fila_vazia():
    assert ordenar_fila([]) == []


def test_transicoes_de_status():
    assert transicao_valida('Aguardando', 'Notificado')
    assert transicao_valida(StatusFila.NOTIFICADO, 'Notificado')
    assert not transicao_valida('Notificado', 'Aguardando')
    assert not transicao_valida('Aguardando', 'Concluido')
    assert not transicao_valida('Aguardando', None)
