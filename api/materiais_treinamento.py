from flask import Blueprint, request, jsonify
from auth.utils import token_required, admin_required
from api.comum import dados_requisicao, exigir, ou_none, NaoEncontrado
from db import consultar, consultar_um, executar, transacao

materiais_bp = Blueprint('materiais_treinamento', __name__, url_prefix='/api/materiais_treinamento')

@materiais_bp.route('', methods=['GET'])
@token_required
def get_materiais():
    """Lista materiais com o número de acessos de cada um"""
    materiais = consultar(
        '''SELECT m.id_material, m.titulo, m.categoria, m.url_arquivo, m.data_upload,
                  COUNT(ma.id_acesso_material) AS acessos
           FROM material_treinamento m
           LEFT JOIN material_treinamento_acesso ma ON m.id_material = ma.id_material
           GROUP BY m.id_material, m.titulo, m.categoria, m.url_arquivo, m.data_upload
           ORDER BY m.data_upload DESC, m.id_material DESC'''
    )
    return jsonify({'success': True, 'data': materiais}), 200

@materiais_bp.route('', methods=['POST'])
@token_required
@admin_required
def create_material():
    data = dados_requisicao()
    exigir(data, ['titulo'], 'Título é obrigatório.')
    cur = executar(
        'INSERT INTO material_treinamento (titulo, categoria, url_arquivo) VALUES (?, ?, ?)',
        (data['titulo'], ou_none(data.get('categoria')), ou_none(data.get('url_arquivo')))
    )
    return jsonify({'success': True, 'id': cur.lastrowid}), 201

@materiais_bp.route('/<int:material_id>', methods=['DELETE'])
@token_required
@admin_required
def delete_material(material_id):
    with transacao() as db:
        db.execute('DELETE FROM material_treinamento_acesso WHERE id_material = ?', (material_id,))
        cur = db.execute('DELETE FROM material_treinamento WHERE id_material = ?', (material_id,))
        if cur.rowcount == 0:
            raise NaoEncontrado('Material não encontrado')
    return jsonify({'success': True, 'message': 'Material excluído'}), 200

@materiais_bp.route('/acesso', methods=['POST'])
@token_required
def registrar_acesso_material():
    """Registra que o usuário logado abriu o material"""
    data = dados_requisicao()
    exigir(data, ['id_material'], 'Material é obrigatório.')
    if not consultar_um('SELECT 1 FROM material_treinamento WHERE id_material = ?', (data['id_material'],)):
        raise NaoEncontrado('Material não encontrado')

    cur = executar(
        'INSERT INTO material_treinamento_acesso (id_material, id_usuario) VALUES (?, ?)',
        (data['id_material'], request.user_id)
    )
    return jsonify({'success': True, 'id': cur.lastrowid}), 201
