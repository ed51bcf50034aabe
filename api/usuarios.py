from flask import Blueprint, jsonify
from auth.utils import token_required, admin_required, hash_password, PAPEIS
from api.comum import dados_requisicao, exigir, ou_none, ErroValidacao, NaoEncontrado, Conflito
from db import consultar, executar
import sqlite3

usuarios_bp = Blueprint('usuarios', __name__, url_prefix='/api/usuarios')

def _validar_papel(papel):
    if papel not in PAPEIS:
        raise ErroValidacao(f"Papel inválido. Use um de: {', '.join(PAPEIS)}.")

@usuarios_bp.route('', methods=['GET'])
@token_required
@admin_required
def get_usuarios():
    usuarios = consultar(
        'SELECT id_usuario, nome_usuario, papel, id_profissional, ultimo_acesso FROM usuario ORDER BY nome_usuario'
    )
    return jsonify({'success': True, 'data': usuarios}), 200

@usuarios_bp.route('', methods=['POST'])
@token_required
@admin_required
def create_usuario():
    data = dados_requisicao()
    exigir(data, ['nome_usuario', 'senha', 'papel'], 'Nome de usuário, senha e papel são obrigatórios.')
    _validar_papel(data['papel'])

    try:
        cur = executar(
            'INSERT INTO usuario (nome_usuario, senha, papel, id_profissional) VALUES (?, ?, ?, ?)',
            (data['nome_usuario'], hash_password(data['senha']), data['papel'], ou_none(data.get('id_profissional')))
        )
    except sqlite3.IntegrityError as e:
        if 'UNIQUE' in str(e):
            raise Conflito('Este nome de usuário já está em uso.')
        raise

    return jsonify({'success': True, 'id': cur.lastrowid}), 201

@usuarios_bp.route('/<int:usuario_id>', methods=['PUT'])
@token_required
@admin_required
def update_usuario(usuario_id):
    """Atualiza usuário; a senha só muda se vier preenchida"""
    data = dados_requisicao()
    exigir(data, ['nome_usuario', 'papel'], 'Nome de usuário e papel são obrigatórios.')
    _validar_papel(data['papel'])

    senha = (data.get('senha') or '').strip()
    try:
        if senha:
            cur = executar(
                'UPDATE usuario SET nome_usuario=?, senha=?, papel=?, id_profissional=? WHERE id_usuario=?',
                (data['nome_usuario'], hash_password(senha), data['papel'], ou_none(data.get('id_profissional')), usuario_id)
            )
        else:
            cur = executar(
                'UPDATE usuario SET nome_usuario=?, papel=?, id_profissional=? WHERE id_usuario=?',
                (data['nome_usuario'], data['papel'], ou_none(data.get('id_profissional')), usuario_id)
            )
    except sqlite3.IntegrityError as e:
        if 'UNIQUE' in str(e):
            raise Conflito('Este nome de usuário já está em uso.')
        raise

    if cur.rowcount == 0:
        raise NaoEncontrado('Usuário não encontrado')

    return jsonify({'success': True, 'message': 'Usuário atualizado'}), 200

@usuarios_bp.route('/<int:usuario_id>', methods=['DELETE'])
@token_required
@admin_required
def delete_usuario(usuario_id):
    cur = executar('DELETE FROM usuario WHERE id_usuario=?', (usuario_id,))
    if cur.rowcount == 0:
        raise NaoEncontrado('Usuário não encontrado')
    return jsonify({'success': True, 'message': 'Usuário excluído'}), 200
