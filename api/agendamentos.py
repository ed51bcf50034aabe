from flask import Blueprint, jsonify
from auth.utils import token_required, roles_required, admin_required
from api.comum import dados_requisicao, exigir, notificar, ErroValidacao, NaoEncontrado, Conflito
from db import consultar, consultar_um, executar

agendamentos_bp = Blueprint('agendamentos', __name__, url_prefix='/api/agendamentos')

STATUS_AGENDAMENTO = ('Pendente', 'Confirmado', 'Realizado', 'Não Compareceu', 'Cancelado')

def _validar(data):
    exigir(data, ['id_paciente', 'id_profissional', 'data_hora'],
           'Paciente, profissional e data/hora são obrigatórios.')
    if data.get('status') and data['status'] not in STATUS_AGENDAMENTO:
        raise ErroValidacao('Status de agendamento inválido.')

def _verificar_conflito(id_profissional, data_hora, ignorar_id=None):
    """Um profissional não pode ter dois agendamentos ativos no mesmo horário"""
    conflito = consultar_um(
        '''SELECT id_agendamento FROM agendamento
           WHERE id_profissional = ? AND datetime(data_hora) = datetime(?) AND status <> 'Cancelado'
             AND id_agendamento IS NOT ?''',
        (id_profissional, data_hora, ignorar_id)
    )
    if conflito:
        raise Conflito('Horário ocupado para este profissional')

@agendamentos_bp.route('', methods=['GET'])
@token_required
def get_agendamentos():
    agendamentos = consultar(
        '''SELECT a.*, p.nome_completo AS nome_paciente, p.cpf AS cpf_paciente, pr.nome_completo AS nome_profissional
           FROM agendamento a
           JOIN paciente p ON a.id_paciente = p.id_paciente
           JOIN profissional pr ON a.id_profissional = pr.id_profissional
           ORDER BY a.data_hora DESC'''
    )
    return jsonify({'success': True, 'data': agendamentos}), 200

@agendamentos_bp.route('', methods=['POST'])
@token_required
@roles_required('Administrador', 'Recepcionista')
def create_agendamento():
    data = dados_requisicao()
    _validar(data)
    status = data.get('status') or 'Pendente'
    if status != 'Cancelado':
        _verificar_conflito(data['id_profissional'], data['data_hora'])

    cur = executar(
        'INSERT INTO agendamento (id_paciente, id_profissional, data_hora, status) VALUES (?, ?, ?, ?)',
        (data['id_paciente'], data['id_profissional'], data['data_hora'], status)
    )
    notificar('agendamento', f"Consulta agendada para {data['data_hora']}")
    return jsonify({'success': True, 'id': cur.lastrowid}), 201

@agendamentos_bp.route('/<int:agendamento_id>', methods=['PUT'])
@token_required
@roles_required('Administrador', 'Recepcionista')
def update_agendamento(agendamento_id):
    data = dados_requisicao()
    _validar(data)
    anterior = consultar_um('SELECT status FROM agendamento WHERE id_agendamento = ?', (agendamento_id,))
    if not anterior:
        raise NaoEncontrado('Agendamento não encontrado')

    status = data.get('status') or 'Pendente'
    if status != 'Cancelado':
        _verificar_conflito(data['id_profissional'], data['data_hora'], agendamento_id)

    executar(
        'UPDATE agendamento SET id_paciente=?, id_profissional=?, data_hora=?, status=? WHERE id_agendamento=?',
        (data['id_paciente'], data['id_profissional'], data['data_hora'], status, agendamento_id)
    )
    if status == 'Cancelado' and anterior['status'] != 'Cancelado':
        notificar('cancelamento', f"Consulta de {data['data_hora']} cancelada")

    return jsonify({'success': True, 'message': 'Agendamento atualizado'}), 200

@agendamentos_bp.route('/<int:agendamento_id>', methods=['DELETE'])
@token_required
@admin_required
def delete_agendamento(agendamento_id):
    cur = executar('DELETE FROM agendamento WHERE id_agendamento=?', (agendamento_id,))
    if cur.rowcount == 0:
        raise NaoEncontrado('Agendamento não encontrado')
    return jsonify({'success': True, 'message': 'Agendamento excluído'}), 200
