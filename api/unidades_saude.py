from flask import Blueprint, jsonify
from auth.utils import token_required, admin_required
from api.comum import dados_requisicao, exigir, ou_none, ErroValidacao, NaoEncontrado, Conflito
from db import consultar, executar, transacao
import sqlite3

unidades_bp = Blueprint('unidades_saude', __name__, url_prefix='/api/unidades_saude')

def _ids_profissionais(data):
    ids = data.get('profissionaisIds') or []
    if not isinstance(ids, list):
        raise ErroValidacao('profissionaisIds deve ser uma lista.')
    try:
        return sorted({int(i) for i in ids})
    except (TypeError, ValueError):
        raise ErroValidacao('profissionaisIds contém um ID inválido.')

def _vincular(db, unidade_id, ids):
    db.executemany(
        'INSERT INTO profissional_unidade (id_unidade, id_profissional) VALUES (?, ?)',
        [(unidade_id, i) for i in ids]
    )

@unidades_bp.route('', methods=['GET'])
@token_required
@admin_required
def get_unidades():
    """Lista unidades com os profissionais vinculados"""
    unidades = consultar('SELECT * FROM unidade_saude ORDER BY nome_unidade')
    for unidade in unidades:
        unidade['profissionaisVinculados'] = consultar(
            '''SELECT p.id_profissional, p.nome_completo AS nome
               FROM profissional p
               JOIN profissional_unidade pu ON p.id_profissional = pu.id_profissional
               WHERE pu.id_unidade = ?
               ORDER BY p.nome_completo''', (unidade['id_unidade'],)
        )
    return jsonify({'success': True, 'data': unidades}), 200

@unidades_bp.route('', methods=['POST'])
@token_required
@admin_required
def create_unidade():
    """Cria a unidade e seus vínculos numa única transação"""
    data = dados_requisicao()
    exigir(data, ['nome_unidade'], 'Nome da Unidade é obrigatório')
    ids = _ids_profissionais(data)

    with transacao() as db:
        cur = db.execute(
            'INSERT INTO unidade_saude (nome_unidade, endereco, telefone, email) VALUES (?, ?, ?, ?)',
            (data['nome_unidade'], ou_none(data.get('endereco')), ou_none(data.get('telefone')), ou_none(data.get('email')))
        )
        unidade_id = cur.lastrowid
        _vincular(db, unidade_id, ids)

    return jsonify({'success': True, 'id': unidade_id}), 201

@unidades_bp.route('/<int:unidade_id>', methods=['PUT'])
@token_required
@admin_required
def update_unidade(unidade_id):
    """Atualiza a unidade e substitui todos os vínculos"""
    data = dados_requisicao()
    exigir(data, ['nome_unidade'], 'Nome da Unidade é obrigatório')
    ids = _ids_profissionais(data)

    with transacao() as db:
        cur = db.execute(
            'UPDATE unidade_saude SET nome_unidade=?, endereco=?, telefone=?, email=? WHERE id_unidade=?',
            (data['nome_unidade'], ou_none(data.get('endereco')), ou_none(data.get('telefone')),
             ou_none(data.get('email')), unidade_id)
        )
        if cur.rowcount == 0:
            raise NaoEncontrado('Unidade não encontrada')
        db.execute('DELETE FROM profissional_unidade WHERE id_unidade = ?', (unidade_id,))
        _vincular(db, unidade_id, ids)

    return jsonify({'success': True, 'message': 'Unidade e vínculos atualizados com sucesso'}), 200

@unidades_bp.route('/<int:unidade_id>', methods=['DELETE'])
@token_required
@admin_required
def delete_unidade(unidade_id):
    try:
        cur = executar('DELETE FROM unidade_saude WHERE id_unidade = ?', (unidade_id,))
    except sqlite3.IntegrityError:
        raise Conflito('Não é possível excluir. A unidade está vinculada a outros registros (como acessos interunidades).')
    if cur.rowcount == 0:
        raise NaoEncontrado('Unidade não encontrada')
    return jsonify({'success': True, 'message': 'Unidade excluída'}), 200
