from flask import Blueprint, jsonify
from auth.utils import token_required, roles_required, admin_required
from api.comum import dados_requisicao, exigir, ou_none, NaoEncontrado
from db import consultar, executar

instrucoes_bp = Blueprint('instrucoes_pos', __name__, url_prefix='/api/instrucoes_pos')

@instrucoes_bp.route('', methods=['GET'])
@token_required
def get_instrucoes():
    instrucoes = consultar(
        '''SELECT i.*, p.nome_completo AS nome_paciente, p.cpf AS cpf_paciente, pr.nome_completo AS nome_profissional
           FROM instrucao_pos_atendimento i
           JOIN paciente p ON i.id_paciente = p.id_paciente
           JOIN profissional pr ON i.id_profissional = pr.id_profissional
           ORDER BY i.data_envio DESC'''
    )
    return jsonify({'success': True, 'data': instrucoes}), 200

@instrucoes_bp.route('', methods=['POST'])
@token_required
@roles_required('Administrador', 'Profissional')
def create_instrucao():
    """Registra instruções pós-atendimento (Impresso, SMS, WhatsApp, Email)"""
    data = dados_requisicao()
    exigir(data, ['id_paciente', 'id_profissional', 'texto_instrucao'],
           'Paciente, profissional e texto da instrução são obrigatórios.')
    cur = executar(
        '''INSERT INTO instrucao_pos_atendimento (id_paciente, id_profissional, id_atendimento, texto_instrucao, canal_envio)
           VALUES (?, ?, ?, ?, ?)''',
        (data['id_paciente'], data['id_profissional'], ou_none(data.get('id_atendimento')),
         data['texto_instrucao'], ou_none(data.get('canal_envio')))
    )
    return jsonify({'success': True, 'id': cur.lastrowid}), 201

@instrucoes_bp.route('/<int:instrucao_id>', methods=['DELETE'])
@token_required
@admin_required
def delete_instrucao(instrucao_id):
    cur = executar('DELETE FROM instrucao_pos_atendimento WHERE id_instrucao=?', (instrucao_id,))
    if cur.rowcount == 0:
        raise NaoEncontrado('Instrução não encontrada')
    return jsonify({'success': True, 'message': 'Instrução excluída'}), 200
