import pytest

from app import create_app
from auth.utils import hash_password
from config import TestConfig
from db import executar

SENHA = 'senha123'
CPF_VALIDO = '529.982.247-25'
OUTRO_CPF_VALIDO = '111.444.777-35'


@pytest.fixture
def app(tmp_path):
    class Config(TestConfig):
        DATABASE = str(tmp_path / 'clinica.db')

    app = create_app(Config)
    with app.app_context():
        senha_hash = hash_password(SENHA)
        for nome, papel in (('adm', 'Administrador'), ('recepcao', 'Recepcionista'), ('medico', 'Profissional')):
            executar(
                'INSERT INTO usuario (nome_usuario, senha, papel) VALUES (?, ?, ?)',
                (nome, senha_hash, papel)
            )
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, nome_usuario):
    resp = client.post('/api/login', json={'nome_usuario': nome_usuario, 'senha': SENHA})
    assert resp.status_code == 200, resp.get_json()
    return {'Authorization': f"Bearer {resp.get_json()['token']}"}


@pytest.fixture
def admin(client):
    return _login(client, 'adm')


@pytest.fixture
def recepcao(client):
    return _login(client, 'recepcao')


@pytest.fixture
def medico(client):
    return _login(client, 'medico')


@pytest.fixture
def paciente_id(client, admin):
    resp = client.post('/api/pacientes', headers=admin, json={
        'nome_completo': 'Maria da Silva', 'cpf': CPF_VALIDO, 'email': 'maria@example.com'
    })
    return resp.get_json()['id']


@pytest.fixture
def profissional_id(client, admin):
    resp = client.post('/api/profissionais', headers=admin, json={
        'nome_completo': 'Dr. João Souza', 'cpf': OUTRO_CPF_VALIDO, 'especialidade': 'Clínico Geral'
    })
    return resp.get_json()['id']
