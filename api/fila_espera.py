from flask import Blueprint, jsonify, current_app
from auth.utils import token_required, roles_required
from api.comum import dados_requisicao, exigir, ou_none, notificar, ErroValidacao, NaoEncontrado
from db import consultar, consultar_um, executar
from servicos.fila import Prioridade, StatusFila, ordenar_fila, transicao_valida

fila_bp = Blueprint('fila_espera', __name__, url_prefix='/api/fila_espera')

@fila_bp.route('', methods=['GET'])
@token_required
def get_fila():
    """Fila de espera já ordenada (Urgente primeiro, depois por chegada)"""
    entradas = consultar(
        '''SELECT f.*, p.nome_completo AS nome_paciente, p.cpf AS cpf_paciente, pr.nome_completo AS nome_profissional
           FROM fila_espera f
           JOIN paciente p ON f.id_paciente = p.id_paciente
           JOIN profissional pr ON f.id_profissional = pr.id_profissional
           ORDER BY f.id_fila'''
    )
    return jsonify({'success': True, 'data': ordenar_fila(entradas)}), 200

@fila_bp.route('', methods=['POST'])
@token_required
@roles_required('Administrador', 'Recepcionista')
def entrar_na_fila():
    data = dados_requisicao()
    exigir(data, ['id_paciente', 'id_profissional'], 'Paciente e profissional são obrigatórios.')
    prioridade = data.get('prioridade') or Prioridade.NORMAL.value
    if prioridade not in [p.value for p in Prioridade]:
        raise ErroValidacao('Prioridade inválida. Use Normal ou Urgente.')

    cur = executar(
        'INSERT INTO fila_espera (id_paciente, id_profissional, prioridade, canal_notificacao, status) VALUES (?, ?, ?, ?, ?)',
        (data['id_paciente'], data['id_profissional'], prioridade,
         ou_none(data.get('canal_notificacao')), StatusFila.AGUARDANDO.value)
    )
    if prioridade == Prioridade.URGENTE.value:
        notificar('fila', 'Paciente urgente adicionado à fila de espera')
    return jsonify({'success': True, 'id': cur.lastrowid}), 201

@fila_bp.route('/<int:fila_id>', methods=['PUT'])
@token_required
@roles_required('Administrador', 'Recepcionista')
def atualizar_status(fila_id):
    """Marca o paciente como notificado"""
    data = dados_requisicao()
    entrada = consultar_um('SELECT status FROM fila_espera WHERE id_fila = ?', (fila_id,))
    if not entrada:
        raise NaoEncontrado('Entrada da fila não encontrada')

    novo = data.get('status')
    if not transicao_valida(entrada['status'], novo):
        raise ErroValidacao(f"Transição de status inválida: {entrada['status']} -> {novo}")

    executar('UPDATE fila_espera SET status=? WHERE id_fila=?', (novo, fila_id))
    return jsonify({'success': True, 'message': 'Status da fila atualizado'}), 200

@fila_bp.route('/<int:fila_id>', methods=['DELETE'])
@token_required
@roles_required('Administrador', 'Recepcionista')
def sair_da_fila(fila_id):
    """Remove a entrada: o paciente foi atendido"""
    cur = executar('DELETE FROM fila_espera WHERE id_fila=?', (fila_id,))
    if cur.rowcount == 0:
        raise NaoEncontrado('Entrada da fila não encontrada')
    current_app.logger.info('Entrada %s removida da fila de espera', fila_id)
    return jsonify({'success': True, 'message': 'Paciente atendido e removido da fila'}), 200
