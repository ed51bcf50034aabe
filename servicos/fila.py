from datetime import datetime
from enum import Enum


class Prioridade(str, Enum):
    NORMAL = 'Normal'
    URGENTE = 'Urgente'


class StatusFila(str, Enum):
    AGUARDANDO = 'Aguardando'
    NOTIFICADO = 'Notificado'


# A única transição permitida é Aguardando -> Notificado.
# Sair da fila (atendimento concluído) é a remoção da entrada.
_TRANSICOES = {
    StatusFila.AGUARDANDO: {StatusFila.AGUARDANDO, StatusFila.NOTIFICADO},
    StatusFila.NOTIFICADO: {StatusFila.NOTIFICADO},
}


def transicao_valida(atual, novo):
    """Indica se uma entrada da fila pode passar de `atual` para `novo`."""
    try:
        atual, novo = StatusFila(atual), StatusFila(novo)
    except ValueError:
        return False
    return novo in _TRANSICOES[atual]


def _momento(valor):
    if isinstance(valor, datetime):
        return valor
    try:
        return datetime.fromisoformat(str(valor))
    except ValueError:
        return datetime.max


def _chave(entrada):
    urgente = entrada.get('prioridade') == Prioridade.URGENTE.value
    return (0 if urgente else 1, _momento(entrada.get('data_entrada')))


def ordenar_fila(entradas):
    """Ordena a fila de espera: Urgente antes de Normal, depois por chegada.

    Devolve uma nova lista (a entrada não é alterada). Empates mantêm a
    ordem original, pois `sorted` é estável.
    """
    return sorted(entradas, key=_chave)
