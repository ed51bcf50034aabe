from flask import Blueprint, jsonify
from auth.utils import token_required, admin_required
from db import consultar

logs_bp = Blueprint('logs', __name__, url_prefix='/api')

LIMITE = 100

@logs_bp.route('/logs', methods=['GET'])
@token_required
@admin_required
def get_logs():
    """Últimos acessos ao sistema (logins e tentativas)"""
    logs = consultar(
        '''SELECT l.id_log, l.acao, l.data_acao, l.ip_origem, u.nome_usuario
           FROM log_acesso l
           LEFT JOIN usuario u ON l.id_usuario = u.id_usuario
           ORDER BY l.data_acao DESC, l.id_log DESC
           LIMIT ?''', (LIMITE,)
    )
    return jsonify({'success': True, 'data': logs}), 200

@logs_bp.route('/acessos-interunidades', methods=['GET'])
@token_required
@admin_required
def get_acessos_interunidades():
    acessos = consultar(
        '''SELECT ai.id_acesso, ai.data_acesso,
                  p.nome_completo AS nome_paciente,
                  pr.nome_completo AS nome_profissional,
                  uo.nome_unidade AS nome_unidade_origem,
                  ud.nome_unidade AS nome_unidade_destino
           FROM acesso_interunidades ai
           LEFT JOIN paciente p ON ai.id_paciente = p.id_paciente
           LEFT JOIN profissional pr ON ai.id_profissional = pr.id_profissional
           LEFT JOIN unidade_saude uo ON ai.id_unidade_origem = uo.id_unidade
           LEFT JOIN unidade_saude ud ON ai.id_unidade_destino = ud.id_unidade
           ORDER BY ai.data_acesso DESC
           LIMIT ?''', (LIMITE,)
    )
    return jsonify({'success': True, 'data': acessos}), 200
