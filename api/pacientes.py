from flask import Blueprint, jsonify
from auth.utils import token_required, roles_required, admin_required
from api.comum import dados_requisicao, validar_email, exigir, ou_none, ErroValidacao, NaoEncontrado, Conflito
from db import consultar, consultar_um, executar
from servicos.cpf import validar_cpf, limpar_cpf
import sqlite3

pacientes_bp = Blueprint('pacientes', __name__, url_prefix='/api/pacientes')

CAMPOS = ('nome_completo', 'data_nascimento', 'sexo', 'telefone', 'email', 'convenio')

@pacientes_bp.route('', methods=['GET'])
@token_required
def get_pacientes():
    """Lista todos os pacientes"""
    pacientes = consultar('SELECT * FROM paciente ORDER BY nome_completo')
    return jsonify({'success': True, 'data': pacientes}), 200

@pacientes_bp.route('', methods=['POST'])
@token_required
@roles_required('Administrador', 'Recepcionista')
def create_paciente():
    """Cadastra um paciente"""
    data = dados_requisicao()
    exigir(data, ['nome_completo', 'cpf'], 'Nome completo e CPF são obrigatórios.')
    if not validar_cpf(data['cpf']):
        raise ErroValidacao('O CPF fornecido é inválido.')
    validar_email(data.get('email'))

    try:
        cur = executar(
            '''INSERT INTO paciente (nome_completo, cpf, data_nascimento, sexo, telefone, email, convenio, status)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)''',
            (data['nome_completo'], limpar_cpf(data['cpf']),
             *(ou_none(data.get(c)) for c in CAMPOS[1:]),
             data.get('status') or 'Ativo')
        )
    except sqlite3.IntegrityError as e:
        if 'UNIQUE' in str(e):
            raise Conflito('Este CPF já está cadastrado no sistema.')
        raise

    return jsonify({'success': True, 'id': cur.lastrowid}), 201

@pacientes_bp.route('/<int:paciente_id>', methods=['PUT'])
@token_required
@roles_required('Administrador', 'Recepcionista', 'Profissional')
def update_paciente(paciente_id):
    """Atualiza dados de um paciente (o CPF não muda)"""
    data = dados_requisicao()
    exigir(data, ['nome_completo'], 'Nome completo é obrigatório.')
    validar_email(data.get('email'))

    cur = executar(
        '''UPDATE paciente SET nome_completo=?, data_nascimento=?, sexo=?, telefone=?, email=?, convenio=?, status=?
           WHERE id_paciente=?''',
        (data['nome_completo'], *(ou_none(data.get(c)) for c in CAMPOS[1:]),
         data.get('status') or 'Ativo', paciente_id)
    )
    if cur.rowcount == 0:
        raise NaoEncontrado('Paciente não encontrado')

    return jsonify({'success': True, 'message': 'Paciente atualizado'}), 200

@pacientes_bp.route('/<int:paciente_id>', methods=['DELETE'])
@token_required
@admin_required
def delete_paciente(paciente_id):
    cur = executar('DELETE FROM paciente WHERE id_paciente=?', (paciente_id,))
    if cur.rowcount == 0:
        raise NaoEncontrado('Paciente não encontrado')
    return jsonify({'success': True, 'message': 'Paciente excluído'}), 200

@pacientes_bp.route('/<int:paciente_id>/ficha-completa', methods=['GET'])
@token_required
def get_ficha_completa(paciente_id):
    """Ficha médica: paciente, atendimentos, evoluções e atestados"""
    paciente = consultar_um('SELECT * FROM paciente WHERE id_paciente = ?', (paciente_id,))
    if not paciente:
        raise NaoEncontrado('Paciente não encontrado')

    atendimentos = consultar(
        '''SELECT a.*, p.nome_completo AS nome_profissional
           FROM atendimento a
           LEFT JOIN profissional p ON a.id_profissional = p.id_profissional
           WHERE a.id_paciente = ?
           ORDER BY a.data_atendimento DESC''', (paciente_id,)
    )
    evolucoes = consultar(
        '''SELECT e.*, p.nome_completo AS nome_profissional
           FROM evolucao_medica e
           LEFT JOIN profissional p ON e.id_profissional = p.id_profissional
           WHERE e.id_paciente = ?
           ORDER BY e.data_registro DESC''', (paciente_id,)
    )
    atestados = consultar(
        '''SELECT at.*, p.nome_completo AS nome_profissional
           FROM atestados at
           LEFT JOIN profissional p ON at.id_profissional = p.id_profissional
           WHERE at.id_paciente = ?
           ORDER BY at.data_emissao DESC''', (paciente_id,)
    )

    return jsonify({
        'success': True,
        'data': {
            'paciente': paciente,
            'atendimentos': atendimentos,
            'evolucoes': evolucoes,
            'atestados': atestados
        }
    }), 200
