from flask import Blueprint, jsonify
from auth.utils import token_required, roles_required, admin_required
from api.comum import dados_requisicao, exigir, ou_none, NaoEncontrado
from db import consultar, executar

evolucao_bp = Blueprint('evolucao_medica', __name__, url_prefix='/api/evolucao_medica')

def _valores(data):
    exigir(data, ['id_paciente', 'id_profissional', 'observacoes'],
           'Paciente, profissional e observações são obrigatórios.')
    return (data['id_paciente'], data['id_profissional'], ou_none(data.get('id_atendimento')), data['observacoes'])

@evolucao_bp.route('', methods=['GET'])
@token_required
def get_evolucoes():
    evolucoes = consultar(
        '''SELECT e.*, p.nome_completo AS nome_paciente, p.cpf AS cpf_paciente, pr.nome_completo AS nome_profissional
           FROM evolucao_medica e
           JOIN paciente p ON e.id_paciente = p.id_paciente
           JOIN profissional pr ON e.id_profissional = pr.id_profissional
           ORDER BY e.data_registro DESC'''
    )
    return jsonify({'success': True, 'data': evolucoes}), 200

@evolucao_bp.route('', methods=['POST'])
@token_required
@roles_required('Administrador', 'Profissional')
def create_evolucao():
    cur = executar(
        'INSERT INTO evolucao_medica (id_paciente, id_profissional, id_atendimento, observacoes) VALUES (?, ?, ?, ?)',
        _valores(dados_requisicao())
    )
    return jsonify({'success': True, 'id': cur.lastrowid}), 201

@evolucao_bp.route('/<int:evolucao_id>', methods=['PUT'])
@token_required
@roles_required('Administrador', 'Profissional')
def update_evolucao(evolucao_id):
    cur = executar(
        'UPDATE evolucao_medica SET id_paciente=?, id_profissional=?, id_atendimento=?, observacoes=? WHERE id_evolucao=?',
        (*_valores(dados_requisicao()), evolucao_id)
    )
    if cur.rowcount == 0:
        raise NaoEncontrado('Evolução não encontrada')
    return jsonify({'success': True, 'message': 'Evolução atualizada'}), 200

@evolucao_bp.route('/<int:evolucao_id>', methods=['DELETE'])
@token_required
@admin_required
def delete_evolucao(evolucao_id):
    cur = executar('DELETE FROM evolucao_medica WHERE id_evolucao=?', (evolucao_id,))
    if cur.rowcount == 0:
        raise NaoEncontrado('Evolução não encontrada')
    return jsonify({'success': True, 'message': 'Evolução excluída'}), 200
