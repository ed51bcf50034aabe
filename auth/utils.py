import jwt
import bcrypt
from datetime import datetime, timezone
from functools import wraps
from flask import request, jsonify, current_app

PAPEIS = ('Administrador', 'Recepcionista', 'Profissional')

def hash_password(password):
    """Gera hash da senha usando bcrypt"""
    salt = bcrypt.gensalt(rounds=10)
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')

def check_password(password, hashed):
    """Verifica se a senha corresponde ao hash"""
    try:
        return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))
    except ValueError:
        # hash gravado fora do formato bcrypt
        return False

def generate_token(usuario):
    """Gera token JWT"""
    agora = datetime.now(timezone.utc)
    payload = {
        'id_usuario': usuario['id_usuario'],
        'nome_usuario': usuario['nome_usuario'],
        'papel': usuario['papel'],
        'exp': agora + current_app.config['JWT_ACCESS_TOKEN_EXPIRES'],
        'iat': agora
    }
    return jwt.encode(payload, current_app.config['JWT_SECRET_KEY'], algorithm='HS256')

def verify_token(token):
    """Verifica e decodifica token JWT"""
    try:
        return jwt.decode(token, current_app.config['JWT_SECRET_KEY'], algorithms=['HS256'])
    except jwt.ExpiredSignatureError:
        current_app.logger.info('Token expirado')
        return None
    except jwt.InvalidTokenError as e:
        current_app.logger.warning('Token inválido: %s', e)
        return None

# Decorators para proteção de rotas
def token_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        token = None

        auth_header = request.headers.get('Authorization')
        if auth_header and auth_header.startswith('Bearer '):
            token = auth_header.split(' ')[1]

        if not token:
            return jsonify({'success': False, 'error': 'Token de autenticação ausente'}), 401

        payload = verify_token(token)
        if not payload:
            return jsonify({'success': False, 'error': 'Token inválido ou expirado'}), 401

        request.user_id = payload['id_usuario']
        request.user_nome = payload['nome_usuario']
        request.user_papel = payload['papel']

        return f(*args, **kwargs)

    return decorated

def roles_required(*papeis):
    """Restringe a rota aos papéis informados (usar depois de token_required)."""
    def wrapper(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            if getattr(request, 'user_papel', None) not in papeis:
                return jsonify({'success': False, 'error': 'Acesso não autorizado para este papel'}), 403
            return f(*args, **kwargs)
        return decorated
    return wrapper

admin_required = roles_required('Administrador')
