from datetime import date, datetime
from flask import Blueprint, jsonify
from auth.utils import token_required
from api.relatorios import atendimentos_semana, evolucao_noshow
from db import consultar, consultar_um
from servicos.agregacao import taxa

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/api/dashboard')

def tempo_relativo(momento, agora=None):
    """'12 min atrás', '3 h atrás' ou 'dd/mm HH:MM' para eventos mais antigos"""
    agora = agora or datetime.now()
    if not isinstance(momento, datetime):
        momento = datetime.fromisoformat(str(momento))
    minutos = int((agora - momento).total_seconds() // 60)
    if minutos < 60:
        return f'{max(minutos, 0)} min atrás'
    if minutos < 24 * 60:
        return f'{minutos // 60} h atrás'
    return momento.strftime('%d/%m %H:%M')

@dashboard_bp.route('/stats', methods=['GET'])
@token_required
def get_stats():
    pacientes = consultar_um("SELECT COUNT(*) AS total FROM paciente WHERE status = 'Ativo'")
    agendamentos = consultar_um(
        "SELECT COUNT(*) AS total FROM agendamento WHERE date(data_hora) = date('now', 'localtime')"
    )
    atendimentos = consultar_um(
        "SELECT COUNT(*) AS total FROM atendimento WHERE date(data_atendimento) = date('now', 'localtime')"
    )
    # Presença: realizados sobre (realizados + faltas) dos dias anteriores
    presenca = consultar_um(
        '''SELECT SUM(CASE WHEN status = 'Realizado' THEN 1 ELSE 0 END) AS realizados,
                  COUNT(*) AS total
           FROM agendamento
           WHERE date(data_hora) < date('now', 'localtime')
             AND status IN ('Realizado', 'Não Compareceu')'''
    )
    proximos = consultar(
        '''SELECT a.id_agendamento, a.data_hora, p.nome_completo AS nome_paciente, pr.nome_completo AS nome_profissional
           FROM agendamento a
           JOIN paciente p ON a.id_paciente = p.id_paciente
           JOIN profissional pr ON a.id_profissional = pr.id_profissional
           WHERE datetime(a.data_hora) >= datetime('now', 'localtime') AND a.status = 'Confirmado'
           ORDER BY datetime(a.data_hora) ASC
           LIMIT 5'''
    )

    return jsonify({
        'success': True,
        'pacientesAtivos': pacientes['total'],
        'agendamentosHoje': agendamentos['total'],
        'atendimentosHoje': atendimentos['total'],
        'taxaPresenca': round(taxa(presenca['realizados'] or 0, presenca['total']), 1),
        'proximosAgendamentos': proximos
    }), 200

@dashboard_bp.route('/atendimentos-semana', methods=['GET'])
@token_required
def get_atendimentos_semana():
    return jsonify({'success': True, 'data': atendimentos_semana(date.today())}), 200

@dashboard_bp.route('/no-show', methods=['GET'])
@token_required
def get_no_show():
    return jsonify({'success': True, 'data': evolucao_noshow(date.today())}), 200

@dashboard_bp.route('/notificacoes', methods=['GET'])
@token_required
def get_notificacoes():
    """Cinco notificações mais recentes"""
    notificacoes = consultar(
        '''SELECT id_notificacao AS id, tipo, mensagem, data_criacao
           FROM notificacoes
           ORDER BY data_criacao DESC, id_notificacao DESC
           LIMIT 5'''
    )
    agora = datetime.now()
    for n in notificacoes:
        n['tempo'] = tempo_relativo(n.pop('data_criacao'), agora)
    return jsonify({'success': True, 'data': notificacoes}), 200
