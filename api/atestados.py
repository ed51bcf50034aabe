from flask import Blueprint, jsonify
from auth.utils import token_required, roles_required
from api.comum import dados_requisicao, exigir, ou_none, ErroValidacao, NaoEncontrado
from db import consultar_um, executar
from servicos.cpf import formatar_cpf

atestados_bp = Blueprint('atestados', __name__, url_prefix='/api/atestados')

@atestados_bp.route('', methods=['POST'])
@token_required
@roles_required('Administrador', 'Profissional')
def create_atestado():
    """Emite um atestado médico"""
    data = dados_requisicao()
    exigir(data, ['id_paciente', 'id_profissional', 'dias_afastamento', 'texto_atestado'],
           'Paciente, Profissional, Dias de Afastamento e Texto são obrigatórios.')
    try:
        dias = int(data['dias_afastamento'])
    except (TypeError, ValueError):
        raise ErroValidacao('Dias de afastamento deve ser um número inteiro.')
    if dias <= 0:
        raise ErroValidacao('Dias de afastamento deve ser maior que zero.')

    cur = executar(
        '''INSERT INTO atestados (id_paciente, id_profissional, id_atendimento, dias_afastamento, cid, texto_atestado)
           VALUES (?, ?, ?, ?, ?, ?)''',
        (data['id_paciente'], data['id_profissional'], ou_none(data.get('id_atendimento')),
         dias, ou_none(data.get('cid')), data['texto_atestado'])
    )
    return jsonify({'success': True, 'id_atestado': cur.lastrowid, 'message': 'Atestado salvo com sucesso.'}), 201

@atestados_bp.route('/<int:atestado_id>', methods=['GET'])
@token_required
def get_atestado(atestado_id):
    """Dados do atestado prontos para impressão"""
    atestado = consultar_um(
        '''SELECT a.*,
                  p.nome_completo AS nome_paciente,
                  p.cpf AS cpf_paciente,
                  pr.nome_completo AS nome_profissional,
                  pr.especialidade AS especialidade_profissional
           FROM atestados a
           JOIN paciente p ON a.id_paciente = p.id_paciente
           JOIN profissional pr ON a.id_profissional = pr.id_profissional
           WHERE a.id_atestado = ?''', (atestado_id,)
    )
    if not atestado:
        raise NaoEncontrado('Atestado não encontrado')

    atestado['cpf_paciente'] = formatar_cpf(atestado['cpf_paciente'])
    return jsonify({'success': True, 'data': atestado}), 200
