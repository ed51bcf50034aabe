from flask import Blueprint, jsonify
from auth.utils import token_required, admin_required
from api.comum import dados_requisicao, validar_email, exigir, ou_none, ErroValidacao, NaoEncontrado, Conflito
from db import consultar, executar
from servicos.cpf import validar_cpf, limpar_cpf
import sqlite3

profissionais_bp = Blueprint('profissionais', __name__, url_prefix='/api/profissionais')

@profissionais_bp.route('', methods=['GET'])
@token_required
def get_profissionais():
    profissionais = consultar('SELECT * FROM profissional ORDER BY nome_completo')
    return jsonify({'success': True, 'data': profissionais}), 200

@profissionais_bp.route('', methods=['POST'])
@token_required
@admin_required
def create_profissional():
    """Cadastra um profissional de saúde (apenas Administrador)"""
    data = dados_requisicao()
    exigir(data, ['nome_completo', 'cpf', 'especialidade'], 'Nome, CPF e Especialidade são obrigatórios.')
    if not validar_cpf(data['cpf']):
        raise ErroValidacao('O CPF fornecido é inválido.')
    validar_email(data.get('email'))

    try:
        cur = executar(
            '''INSERT INTO profissional (nome_completo, cpf, especialidade, email, telefone, status)
               VALUES (?, ?, ?, ?, ?, ?)''',
            (data['nome_completo'], limpar_cpf(data['cpf']), data['especialidade'],
             ou_none(data.get('email')), ou_none(data.get('telefone')), data.get('status') or 'Ativo')
        )
    except sqlite3.IntegrityError as e:
        if 'UNIQUE' in str(e):
            raise Conflito('Este CPF já está cadastrado no sistema.')
        raise

    return jsonify({'success': True, 'id': cur.lastrowid}), 201

@profissionais_bp.route('/<int:profissional_id>', methods=['PUT'])
@token_required
@admin_required
def update_profissional(profissional_id):
    data = dados_requisicao()
    exigir(data, ['nome_completo', 'especialidade'], 'Nome e Especialidade são obrigatórios.')
    validar_email(data.get('email'))

    cur = executar(
        'UPDATE profissional SET nome_completo=?, especialidade=?, email=?, telefone=?, status=? WHERE id_profissional=?',
        (data['nome_completo'], data['especialidade'], ou_none(data.get('email')),
         ou_none(data.get('telefone')), data.get('status') or 'Ativo', profissional_id)
    )
    if cur.rowcount == 0:
        raise NaoEncontrado('Profissional não encontrado')

    return jsonify({'success': True, 'message': 'Profissional atualizado'}), 200

@profissionais_bp.route('/<int:profissional_id>', methods=['DELETE'])
@token_required
@admin_required
def delete_profissional(profissional_id):
    cur = executar('DELETE FROM profissional WHERE id_profissional=?', (profissional_id,))
    if cur.rowcount == 0:
        raise NaoEncontrado('Profissional não encontrado')
    return jsonify({'success': True, 'message': 'Profissional excluído'}), 200
