from datetime import date
from flask import Blueprint, jsonify
from auth.utils import token_required
from db import consultar
from servicos.agregacao import janela_dias, janela_meses, contar_por_dia, buckets_diarios, buckets_mensais_taxa

relatorios_bp = Blueprint('relatorios', __name__, url_prefix='/api/relatorios')

NAO_COMPARECEU = 'Não Compareceu'
CANCELADO = 'Cancelado'

def _inicio_semana(hoje):
    return janela_dias(hoje)[0].isoformat()

def datas_atendimentos(hoje):
    rows = consultar(
        'SELECT data_atendimento FROM atendimento WHERE date(data_atendimento) BETWEEN ? AND ?',
        (_inicio_semana(hoje), hoje.isoformat())
    )
    return [r['data_atendimento'] for r in rows]

def datas_agendamentos(hoje):
    """Agendamentos dos últimos 7 dias, sem os cancelados"""
    rows = consultar(
        'SELECT data_hora FROM agendamento WHERE date(data_hora) BETWEEN ? AND ? AND status <> ?',
        (_inicio_semana(hoje), hoje.isoformat(), CANCELADO)
    )
    return [r['data_hora'] for r in rows]

def atendimentos_semana(hoje):
    return buckets_diarios(hoje, datas_atendimentos(hoje))

def evolucao_noshow(hoje):
    """Taxa de não comparecimento por mês: faltas / agendamentos não cancelados"""
    ano, mes = janela_meses(hoje)[0]
    agendamentos = consultar(
        'SELECT data_hora, status FROM agendamento WHERE date(data_hora) >= ?',
        (date(ano, mes, 1).isoformat(),)
    )
    return buckets_mensais_taxa(
        hoje,
        numerador=lambda a: a['status'] == NAO_COMPARECEU,
        denominador=lambda a: a['status'] != CANCELADO,
        eventos=agendamentos
    )

@relatorios_bp.route('/atendimentos-por-profissional', methods=['GET'])
@token_required
def get_atendimentos_por_profissional():
    rows = consultar(
        '''SELECT pr.nome_completo AS name, COUNT(a.id_atendimento) AS value
           FROM atendimento a
           JOIN profissional pr ON a.id_profissional = pr.id_profissional
           GROUP BY pr.id_profissional, pr.nome_completo
           ORDER BY value DESC, name'''
    )
    return jsonify({'success': True, 'data': rows}), 200

@relatorios_bp.route('/distribuicao-tipo', methods=['GET'])
@token_required
def get_distribuicao_tipo():
    rows = consultar(
        '''SELECT tipo_atendimento AS name, COUNT(id_atendimento) AS value
           FROM atendimento
           GROUP BY tipo_atendimento
           ORDER BY value DESC, name'''
    )
    return jsonify({'success': True, 'data': rows}), 200

@relatorios_bp.route('/atendimentos-semana', methods=['GET'])
@token_required
def get_atendimentos_semana():
    """Agendados x realizados em cada um dos últimos 7 dias"""
    hoje = date.today()
    dados = contar_por_dia(hoje, {
        'agendados': datas_agendamentos(hoje),
        'realizados': datas_atendimentos(hoje)
    })
    return jsonify({'success': True, 'data': dados}), 200

@relatorios_bp.route('/evolucao-noshow', methods=['GET'])
@token_required
def get_evolucao_noshow():
    return jsonify({'success': True, 'data': evolucao_noshow(date.today())}), 200
