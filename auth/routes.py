from flask import Blueprint, request, jsonify, current_app
from auth.utils import check_password, generate_token, token_required
from db import consultar_um, executar

auth_bp = Blueprint('auth', __name__, url_prefix='/api')

def registrar_acesso(id_usuario, acao):
    executar(
        'INSERT INTO log_acesso (id_usuario, acao, ip_origem) VALUES (?, ?, ?)',
        (id_usuario, acao, request.remote_addr)
    )

@auth_bp.route('/login', methods=['POST'])
def login():
    """Login de usuário - retorna token JWT"""
    data = request.get_json(silent=True) or {}

    if not data.get('nome_usuario') or not data.get('senha'):
        return jsonify({'success': False, 'error': 'Nome de usuário e senha são obrigatórios'}), 400

    usuario = consultar_um('SELECT * FROM usuario WHERE nome_usuario = ?', (data['nome_usuario'],))
    if not usuario:
        return jsonify({'success': False, 'error': 'Usuário não encontrado'}), 401

    if not check_password(data['senha'], usuario['senha']):
        current_app.logger.warning('Tentativa de login falhou para %s', usuario['nome_usuario'])
        registrar_acesso(usuario['id_usuario'], 'Tentativa de Login Falhou')
        return jsonify({'success': False, 'error': 'Senha incorreta'}), 401

    registrar_acesso(usuario['id_usuario'], 'Login com Sucesso')
    executar(
        "UPDATE usuario SET ultimo_acesso = datetime('now', 'localtime') WHERE id_usuario = ?",
        (usuario['id_usuario'],)
    )

    token = generate_token(usuario)
    del usuario['senha']

    return jsonify({'success': True, 'token': token, 'user': usuario}), 200

@auth_bp.route('/me', methods=['GET'])
@token_required
def get_me():
    """Obtém informações do usuário logado"""
    usuario = consultar_um(
        '''SELECT u.id_usuario, u.nome_usuario, u.papel, u.id_profissional, u.ultimo_acesso,
                  p.nome_completo AS nome_profissional, p.especialidade
           FROM usuario u
           LEFT JOIN profissional p ON u.id_profissional = p.id_profissional
           WHERE u.id_usuario = ?''',
        (request.user_id,)
    )
    if not usuario:
        return jsonify({'success': False, 'error': 'Usuário não encontrado'}), 404

    return jsonify({'success': True, 'data': usuario}), 200
