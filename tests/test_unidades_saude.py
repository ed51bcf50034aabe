from db import consultar, executar


def _segundo_profissional(client, admin):
    return client.post('/api/profissionais', headers=admin, json={
        'nome_completo': 'Dra. Beatriz Ramos', 'cpf': '123.456.789-09', 'especialidade': 'Pediatria'
    }).get_json()['id']


def test_cria_unidade_com_vinculos(client, admin, profissional_id):
    outro = _segundo_profissional(client, admin)
    resp = client.post('/api/unidades_saude', headers=admin, json={
        'nome_unidade': 'UBS Centro', 'telefone': '1133334444',
        'profissionaisIds': [str(profissional_id), outro]
    })
    assert resp.status_code == 201

    unidades = client.get('/api/unidades_saude', headers=admin).get_json()['data']
    assert unidades[0]['nome_unidade'] == 'UBS Centro'
    nomes = [p['nome'] for p in unidades[0]['profissionaisVinculados']]
    assert nomes == ['Dr. João Souza', 'Dra. Beatriz Ramos']


def test_atualizacao_substitui_vinculos(client, admin, profissional_id):
    outro = _segundo_profissional(client, admin)
    unidade = client.post('/api/unidades_saude', headers=admin, json={
        'nome_unidade': 'UBS Norte', 'profissionaisIds': [profissional_id]
    }).get_json()['id']

    resp = client.put(f'/api/unidades_saude/{unidade}', headers=admin, json={
        'nome_unidade': 'UBS Norte II', 'profissionaisIds': [outro]
    })
    assert resp.status_code == 200

    unidades = client.get('/api/unidades_saude', headers=admin).get_json()['data']
    assert unidades[0]['nome_unidade'] == 'UBS Norte II'
    assert [p['id_profissional'] for p in unidades[0]['profissionaisVinculados']] == [outro]


def test_vinculo_invalido_desfaz_a_unidade(app, client, admin):
    resp = client.post('/api/unidades_saude', headers=admin, json={
        'nome_unidade': 'UBS Fantasma', 'profissionaisIds': [999]
    })
    assert resp.status_code == 400
    with app.app_context():
        assert consultar('SELECT * FROM unidade_saude') == []


def test_nome_obrigatorio_e_unidade_inexistente(client, admin):
    assert client.post('/api/unidades_saude', headers=admin, json={}).status_code == 400
    resp = client.put('/api/unidades_saude/42', headers=admin, json={'nome_unidade': 'X'})
    assert resp.status_code == 404


def test_exclusao_bloqueada_por_acesso_interunidades(app, client, admin, paciente_id):
    unidade = client.post('/api/unidades_saude', headers=admin, json={'nome_unidade': 'UBS Sul'}).get_json()['id']
    with app.app_context():
        executar(
            'INSERT INTO acesso_interunidades (id_paciente, id_unidade_origem, id_unidade_destino) VALUES (?, ?, ?)',
            (paciente_id, unidade, unidade)
        )

    acessos = client.get('/api/acessos-interunidades', headers=admin).get_json()['data']
    assert acessos[0]['nome_unidade_origem'] == 'UBS Sul'
    assert acessos[0]['nome_paciente'] == 'Maria da Silva'

    resp = client.delete(f'/api/unidades_saude/{unidade}', headers=admin)
    assert resp.status_code == 409


def test_somente_admin(client, recepcao):
    assert client.get('/api/unidades_saude', headers=recepcao).status_code == 403
