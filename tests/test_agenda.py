def _agendar(client, headers, paciente_id, profissional_id, data_hora, **extra):
    return client.post('/api/agendamentos', headers=headers, json={
        'id_paciente': paciente_id, 'id_profissional': profissional_id, 'data_hora': data_hora, **extra
    })


def test_agendamento_pendente_por_padrao(client, recepcao, paciente_id, profissional_id):
    resp = _agendar(client, recepcao, paciente_id, profissional_id, '2030-01-10T09:00')
    assert resp.status_code == 201

    agendamentos = client.get('/api/agendamentos', headers=recepcao).get_json()['data']
    assert agendamentos[0]['status'] == 'Pendente'
    assert agendamentos[0]['nome_profissional'] == 'Dr. João Souza'
    assert agendamentos[0]['cpf_paciente'] == '52998224725'


def test_horario_ocupado(client, recepcao, paciente_id, profissional_id):
    _agendar(client, recepcao, paciente_id, profissional_id, '2030-01-10T09:00')
    resp = _agendar(client, recepcao, paciente_id, profissional_id, '2030-01-10T09:00')
    assert resp.status_code == 409


def test_horario_ocupado_em_outro_formato(client, recepcao, paciente_id, profissional_id):
    assert _agendar(client, recepcao, paciente_id, profissional_id, '2030-01-10T09:00').status_code == 201
    resp = _agendar(client, recepcao, paciente_id, profissional_id, '2030-01-10 09:00:00')
    assert resp.status_code == 409


def test_horario_de_agendamento_cancelado_fica_livre(client, recepcao, paciente_id, profissional_id):
    _agendar(client, recepcao, paciente_id, profissional_id, '2030-01-10T09:00', status='Cancelado')
    resp = _agendar(client, recepcao, paciente_id, profissional_id, '2030-01-10T09:00')
    assert resp.status_code == 201


def test_status_invalido(client, recepcao, paciente_id, profissional_id):
    resp = _agendar(client, recepcao, paciente_id, profissional_id, '2030-01-10T09:00', status='Talvez')
    assert resp.status_code == 400


def test_paciente_inexistente(client, recepcao, profissional_id):
    resp = _agendar(client, recepcao, 999, profissional_id, '2030-01-10T09:00')
    assert resp.status_code == 400


def test_cancelamento_gera_notificacao(client, recepcao, admin, paciente_id, profissional_id):
    agendamento = _agendar(client, recepcao, paciente_id, profissional_id, '2030-01-10T09:00').get_json()['id']
    resp = client.put(f'/api/agendamentos/{agendamento}', headers=recepcao, json={
        'id_paciente': paciente_id, 'id_profissional': profissional_id,
        'data_hora': '2030-01-10T09:00', 'status': 'Cancelado'
    })
    assert resp.status_code == 200

    tipos = [n['tipo'] for n in client.get('/api/dashboard/notificacoes', headers=recepcao).get_json()['data']]
    assert tipos == ['cancelamento', 'agendamento']

    assert client.delete(f'/api/agendamentos/{agendamento}', headers=recepcao).status_code == 403
    assert client.delete(f'/api/agendamentos/{agendamento}', headers=admin).status_code == 200


def test_reagendar_inexistente(client, recepcao, paciente_id, profissional_id):
    resp = client.put('/api/agendamentos/77', headers=recepcao, json={
        'id_paciente': paciente_id, 'id_profissional': profissional_id, 'data_hora': '2030-01-10T09:00'
    })
    assert resp.status_code == 404


def test_preferencias_de_horario(client, recepcao, paciente_id):
    resp = client.post('/api/preferencia_horario', headers=recepcao, json={
        'id_paciente': paciente_id, 'data_hora_preferida': '2030-02-01T14:00'
    })
    assert resp.status_code == 201
    pref = resp.get_json()['id']

    client.put(f'/api/preferencia_horario/{pref}', headers=recepcao, json={
        'id_paciente': paciente_id, 'data_hora_preferida': '2030-02-02T15:00'
    })
    preferencias = client.get('/api/preferencia_horario', headers=recepcao).get_json()['data']
    assert preferencias[0]['data_hora_preferida'] == '2030-02-02T15:00'
    assert preferencias[0]['nome_paciente'] == 'Maria da Silva'

    assert client.delete(f'/api/preferencia_horario/{pref}', headers=recepcao).status_code == 200


def test_instrucoes_pos_atendimento(client, medico, admin, paciente_id, profissional_id):
    resp = client.post('/api/instrucoes_pos', headers=medico, json={
        'id_paciente': paciente_id, 'id_profissional': profissional_id,
        'texto_instrucao': 'Tomar bastante água', 'canal_envio': 'WhatsApp'
    })
    assert resp.status_code == 201

    instrucoes = client.get('/api/instrucoes_pos', headers=medico).get_json()['data']
    assert instrucoes[0]['canal_envio'] == 'WhatsApp'
    assert instrucoes[0]['id_atendimento'] is None

    assert client.delete(f"/api/instrucoes_pos/{resp.get_json()['id']}", headers=admin).status_code == 200


def test_materiais_e_acessos(client, admin, medico):
    material = client.post('/api/materiais_treinamento', headers=admin, json={
        'titulo': 'Protocolo de triagem', 'categoria': 'Protocolos', 'url_arquivo': 'https://example.com/triagem.pdf'
    }).get_json()['id']

    for _ in range(2):
        resp = client.post('/api/materiais_treinamento/acesso', headers=medico, json={'id_material': material})
        assert resp.status_code == 201
    assert client.post('/api/materiais_treinamento/acesso', headers=medico,
                       json={'id_material': 999}).status_code == 404

    materiais = client.get('/api/materiais_treinamento', headers=medico).get_json()['data']
    assert materiais[0]['acessos'] == 2

    assert client.delete(f'/api/materiais_treinamento/{material}', headers=admin).status_code == 200
    assert client.get('/api/materiais_treinamento', headers=medico).get_json()['data'] == []
