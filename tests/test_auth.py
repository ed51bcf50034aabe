from app import configurar_logging
from db import consultar


def test_login_devolve_token_sem_senha(client):
    resp = client.post('/api/login', json={'nome_usuario': 'adm', 'senha': 'senha123'})
    body = resp.get_json()
    assert resp.status_code == 200
    assert body['success'] is True
    assert body['token']
    assert body['user']['papel'] == 'Administrador'
    assert 'senha' not in body['user']


def test_login_campos_obrigatorios(client):
    resp = client.post('/api/login', json={'nome_usuario': 'adm'})
    assert resp.status_code == 400


def test_login_usuario_inexistente(client):
    resp = client.post('/api/login', json={'nome_usuario': 'ninguem', 'senha': 'x'})
    assert resp.status_code == 401


def test_senha_errada_fica_registrada(app, client):
    resp = client.post('/api/login', json={'nome_usuario': 'adm', 'senha': 'errada'})
    assert resp.status_code == 401
    with app.app_context():
        acoes = [r['acao'] for r in consultar('SELECT acao FROM log_acesso')]
    assert acoes == ['Tentativa de Login Falhou']


def test_rota_protegida_sem_token(client):
    assert client.get('/api/pacientes').status_code == 401


def test_token_invalido(client):
    resp = client.get('/api/pacientes', headers={'Authorization': 'Bearer abc.def.ghi'})
    assert resp.status_code == 401


def test_me(client, medico):
    resp = client.get('/api/me', headers=medico)
    assert resp.status_code == 200
    assert resp.get_json()['data']['nome_usuario'] == 'medico'


def test_papel_sem_permissao(client, recepcao):
    resp = client.get('/api/usuarios', headers=recepcao)
    assert resp.status_code == 403
    assert resp.get_json()['success'] is False


def test_logs_de_acesso(client, admin):
    resp = client.get('/api/logs', headers=admin)
    assert resp.status_code == 200
    logs = resp.get_json()['data']
    assert logs[0]['acao'] == 'Login com Sucesso'
    assert logs[0]['nome_usuario'] == 'adm'


def test_crud_de_usuarios(client, admin):
    resp = client.post('/api/usuarios', headers=admin, json={
        'nome_usuario': 'nova', 'senha': 'abc123', 'papel': 'Recepcionista'
    })
    assert resp.status_code == 201
    novo_id = resp.get_json()['id']

    duplicado = client.post('/api/usuarios', headers=admin, json={
        'nome_usuario': 'nova', 'senha': 'x', 'papel': 'Recepcionista'
    })
    assert duplicado.status_code == 409

    papel_invalido = client.post('/api/usuarios', headers=admin, json={
        'nome_usuario': 'outra', 'senha': 'x', 'papel': 'Paciente'
    })
    assert papel_invalido.status_code == 400

    # sem senha: mantém a anterior
    resp = client.put(f'/api/usuarios/{novo_id}', headers=admin, json={
        'nome_usuario': 'nova', 'senha': '', 'papel': 'Administrador'
    })
    assert resp.status_code == 200
    login = client.post('/api/login', json={'nome_usuario': 'nova', 'senha': 'abc123'})
    assert login.get_json()['user']['papel'] == 'Administrador'

    assert client.delete(f'/api/usuarios/{novo_id}', headers=admin).status_code == 200
    assert client.delete(f'/api/usuarios/{novo_id}', headers=admin).status_code == 404


def test_health(client):
    resp = client.get('/health')
    assert resp.status_code == 200
    assert '/api/fila_espera' in resp.get_json()['endpoints']


def test_endpoint_inexistente(client):
    resp = client.get('/api/nada')
    assert resp.status_code == 404
    assert resp.get_json()['success'] is False


def test_logger_continua_ativo_apos_nova_configuracao(app):
    configurar_logging('WARNING')
    assert not app.logger.disabled
