import sqlite3
from logging.config import dictConfig

from flask import Flask, jsonify, request
from flask_cors import CORS

import db
from config import Config
from api.comum import ErroAPI

# Importar blueprints
from auth.routes import auth_bp
from api.pacientes import pacientes_bp
from api.profissionais import profissionais_bp
from api.usuarios import usuarios_bp
from api.agendamentos import agendamentos_bp
from api.atendimentos import atendimentos_bp
from api.evolucao_medica import evolucao_bp
from api.fila_espera import fila_bp
from api.preferencia_horario import preferencia_bp
from api.instrucoes_pos import instrucoes_bp
from api.atestados import atestados_bp
from api.unidades_saude import unidades_bp
from api.materiais_treinamento import materiais_bp
from api.logs import logs_bp
from api.dashboard import dashboard_bp
from api.relatorios import relatorios_bp

VERSION = '3.0.0'

BLUEPRINTS = (
    auth_bp, pacientes_bp, profissionais_bp, usuarios_bp, agendamentos_bp,
    atendimentos_bp, evolucao_bp, fila_bp, preferencia_bp, instrucoes_bp,
    atestados_bp, unidades_bp, materiais_bp, logs_bp, dashboard_bp, relatorios_bp,
)

def configurar_logging(nivel):
    dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'default': {
                'format': '[%(asctime)s] %(levelname)s in %(module)s:%(lineno)s - %(funcName)20s(): %(message)s',
            }
        },
        'handlers': {
            'wsgi': {
                'class': 'logging.StreamHandler',
                'stream': 'ext://flask.logging.wsgi_errors_stream',
                'formatter': 'default',
            }
        },
        'root': {'level': nivel, 'handlers': ['wsgi']},
    })

def registrar_erros(app):
    @app.errorhandler(ErroAPI)
    def erro_api(error):
        return jsonify({'success': False, 'error': error.mensagem}), error.status_code

    @app.errorhandler(sqlite3.IntegrityError)
    def erro_integridade(error):
        app.logger.warning('Violação de integridade: %s', error)
        mensagem = str(error)
        if 'UNIQUE' in mensagem:
            return jsonify({'success': False, 'error': 'Violação de entrada duplicada (ex: CPF ou usuário já existe)'}), 409
        if 'FOREIGN KEY' in mensagem:
            if request.method == 'DELETE':
                return jsonify({'success': False, 'error': 'Não é possível excluir: o registro está vinculado a outros dados'}), 409
            return jsonify({'success': False, 'error': 'Erro de chave estrangeira (ID de vínculo não encontrado)'}), 400
        return jsonify({'success': False, 'error': 'Dados inválidos', 'details': mensagem}), 400

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'success': False, 'error': 'Endpoint não encontrado'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'success': False, 'error': 'Método não permitido'}), 405

    @app.errorhandler(500)
    def internal_error(error):
        app.logger.error('Erro interno: %s', getattr(error, 'original_exception', error))
        return jsonify({'success': False, 'error': 'Erro interno do servidor'}), 500

def create_app(config_object=Config):
    configurar_logging(config_object.LOG_LEVEL)

    app = Flask(__name__)
    app.config.from_object(config_object)
    CORS(app, origins=app.config['CORS_ORIGINS'])

    db.init_app(app)

    # Registrar blueprints
    for bp in BLUEPRINTS:
        app.register_blueprint(bp)

    registrar_erros(app)

    # Health check
    @app.route('/health', methods=['GET'])
    def health_check():
        return jsonify({
            'status': 'online',
            'version': VERSION,
            'endpoints': sorted(
                rule.rule for rule in app.url_map.iter_rules() if rule.rule.startswith('/api')
            ),
            'notas': {
                'autenticacao': 'Todos os endpoints (exceto /api/login e /health) requerem token JWT no header Authorization: Bearer {token}',
                'papeis': {
                    'Administrador': 'Acesso completo, incluindo usuários, unidades e logs',
                    'Recepcionista': 'Pacientes, agendamentos, fila de espera e preferências de horário',
                    'Profissional': 'Atendimentos, evolução médica, instruções e atestados'
                }
            }
        }), 200

    app.logger.info('API Clínica %s iniciada (banco: %s)', VERSION, app.config['DATABASE'])
    return app

if __name__ == '__main__':
    app = create_app()
    app.run(debug=True, port=4000, host='0.0.0.0')
