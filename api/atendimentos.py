from flask import Blueprint, jsonify
from auth.utils import token_required, roles_required, admin_required
from api.comum import dados_requisicao, exigir, ou_none, NaoEncontrado
from db import consultar, executar

atendimentos_bp = Blueprint('atendimentos', __name__, url_prefix='/api/atendimentos')

def _valores(data):
    exigir(data, ['id_paciente', 'id_profissional', 'tipo_atendimento', 'data_atendimento', 'status'],
           'Paciente, profissional, tipo, data e status do atendimento são obrigatórios.')
    return (data['id_paciente'], data['id_profissional'], data['tipo_atendimento'],
            data['data_atendimento'], data['status'], ou_none(data.get('observacoes')))

@atendimentos_bp.route('', methods=['GET'])
@token_required
def get_atendimentos():
    atendimentos = consultar(
        '''SELECT a.*, p.nome_completo AS nome_paciente, p.cpf AS cpf_paciente, pr.nome_completo AS nome_profissional
           FROM atendimento a
           JOIN paciente p ON a.id_paciente = p.id_paciente
           JOIN profissional pr ON a.id_profissional = pr.id_profissional
           ORDER BY a.data_atendimento DESC'''
    )
    return jsonify({'success': True, 'data': atendimentos}), 200

@atendimentos_bp.route('', methods=['POST'])
@token_required
@roles_required('Administrador', 'Profissional')
def create_atendimento():
    cur = executar(
        '''INSERT INTO atendimento (id_paciente, id_profissional, tipo_atendimento, data_atendimento, status, observacoes)
           VALUES (?, ?, ?, ?, ?, ?)''',
        _valores(dados_requisicao())
    )
    return jsonify({'success': True, 'id': cur.lastrowid}), 201

@atendimentos_bp.route('/<int:atendimento_id>', methods=['PUT'])
@token_required
@roles_required('Administrador', 'Profissional')
def update_atendimento(atendimento_id):
    cur = executar(
        '''UPDATE atendimento SET id_paciente=?, id_profissional=?, tipo_atendimento=?, data_atendimento=?, status=?, observacoes=?
           WHERE id_atendimento=?''',
        (*_valores(dados_requisicao()), atendimento_id)
    )
    if cur.rowcount == 0:
        raise NaoEncontrado('Atendimento não encontrado')
    return jsonify({'success': True, 'message': 'Atendimento atualizado'}), 200

@atendimentos_bp.route('/<int:atendimento_id>', methods=['DELETE'])
@token_required
@admin_required
def delete_atendimento(atendimento_id):
    cur = executar('DELETE FROM atendimento WHERE id_atendimento=?', (atendimento_id,))
    if cur.rowcount == 0:
        raise NaoEncontrado('Atendimento não encontrado')
    return jsonify({'success': True, 'message': 'Atendimento excluído'}), 200
