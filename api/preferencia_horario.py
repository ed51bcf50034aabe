from flask import Blueprint, jsonify
from auth.utils import token_required, roles_required
from api.comum import dados_requisicao, exigir, NaoEncontrado
from db import consultar, executar

preferencia_bp = Blueprint('preferencia_horario', __name__, url_prefix='/api/preferencia_horario')

PODE_EDITAR = ('Administrador', 'Recepcionista')

def _valores(data):
    exigir(data, ['id_paciente', 'data_hora_preferida'], 'Paciente e horário preferido são obrigatórios.')
    return (data['id_paciente'], data['data_hora_preferida'])

@preferencia_bp.route('', methods=['GET'])
@token_required
def get_preferencias():
    preferencias = consultar(
        '''SELECT ph.*, p.nome_completo AS nome_paciente, p.cpf AS cpf_paciente
           FROM preferencia_horario ph
           JOIN paciente p ON ph.id_paciente = p.id_paciente
           ORDER BY ph.data_hora_preferida DESC'''
    )
    return jsonify({'success': True, 'data': preferencias}), 200

@preferencia_bp.route('', methods=['POST'])
@token_required
@roles_required(*PODE_EDITAR)
def create_preferencia():
    cur = executar(
        'INSERT INTO preferencia_horario (id_paciente, data_hora_preferida) VALUES (?, ?)',
        _valores(dados_requisicao())
    )
    return jsonify({'success': True, 'id': cur.lastrowid}), 201

@preferencia_bp.route('/<int:preferencia_id>', methods=['PUT'])
@token_required
@roles_required(*PODE_EDITAR)
def update_preferencia(preferencia_id):
    cur = executar(
        'UPDATE preferencia_horario SET id_paciente=?, data_hora_preferida=? WHERE id_preferencia=?',
        (*_valores(dados_requisicao()), preferencia_id)
    )
    if cur.rowcount == 0:
        raise NaoEncontrado('Preferência não encontrada')
    return jsonify({'success': True, 'message': 'Preferência atualizada'}), 200

@preferencia_bp.route('/<int:preferencia_id>', methods=['DELETE'])
@token_required
@roles_required(*PODE_EDITAR)
def delete_preferencia(preferencia_id):
    cur = executar('DELETE FROM preferencia_horario WHERE id_preferencia=?', (preferencia_id,))
    if cur.rowcount == 0:
        raise NaoEncontrado('Preferência não encontrada')
    return jsonify({'success': True, 'message': 'Preferência excluída'}), 200
