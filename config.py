import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()

class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'clinica-super-secret-key-change-in-production')
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', SECRET_KEY)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.getenv('JWT_EXPIRES_HOURS', '8')))

    # Banco SQLite
    DATA_DIR = os.getenv('DATA_DIR', 'database')
    DATABASE = os.getenv('DATABASE', os.path.join(DATA_DIR, 'clinica.db'))

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

    # Usuário administrador criado por `flask create-admin`
    ADMIN_USUARIO = os.getenv('ADMIN_USUARIO', 'adm')
    ADMIN_SENHA = os.getenv('ADMIN_SENHA', 'senha123')

class TestConfig(Config):
    TESTING = True
    JWT_SECRET_KEY = 'test-secret'
    LOG_LEVEL = 'WARNING'
