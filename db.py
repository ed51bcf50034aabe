import os
import sqlite3
from contextlib import contextmanager

import click
from flask import current_app, g

SCHEMA = """
CREATE TABLE IF NOT EXISTS profissional (
    id_profissional INTEGER PRIMARY KEY AUTOINCREMENT,
    nome_completo   TEXT NOT NULL,
    cpf             TEXT NOT NULL UNIQUE,
    especialidade   TEXT NOT NULL,
    email           TEXT,
    telefone        TEXT,
    status          TEXT NOT NULL DEFAULT 'Ativo'
);

CREATE TABLE IF NOT EXISTS usuario (
    id_usuario      INTEGER PRIMARY KEY AUTOINCREMENT,
    nome_usuario    TEXT NOT NULL UNIQUE,
    senha           TEXT NOT NULL,
    papel           TEXT NOT NULL,  -- Administrador, Recepcionista, Profissional
    id_profissional INTEGER REFERENCES profissional (id_profissional) ON DELETE SET NULL,
    ultimo_acesso   TEXT
);

CREATE TABLE IF NOT EXISTS paciente (
    id_paciente     INTEGER PRIMARY KEY AUTOINCREMENT,
    nome_completo   TEXT NOT NULL,
    cpf             TEXT NOT NULL UNIQUE,
    data_nascimento TEXT,
    sexo            TEXT,
    telefone        TEXT,
    email           TEXT,
    convenio        TEXT,
    status          TEXT NOT NULL DEFAULT 'Ativo'
);

CREATE TABLE IF NOT EXISTS agendamento (
    id_agendamento  INTEGER PRIMARY KEY AUTOINCREMENT,
    id_paciente     INTEGER NOT NULL REFERENCES paciente (id_paciente),
    id_profissional INTEGER NOT NULL REFERENCES profissional (id_profissional),
    data_hora       TEXT NOT NULL,
    status          TEXT NOT NULL DEFAULT 'Pendente'
);

CREATE TABLE IF NOT EXISTS atendimento (
    id_atendimento   INTEGER PRIMARY KEY AUTOINCREMENT,
    id_paciente      INTEGER NOT NULL REFERENCES paciente (id_paciente),
    id_profissional  INTEGER NOT NULL REFERENCES profissional (id_profissional),
    tipo_atendimento TEXT,
    data_atendimento TEXT NOT NULL,
    status           TEXT,
    observacoes      TEXT
);

CREATE TABLE IF NOT EXISTS evolucao_medica (
    id_evolucao     INTEGER PRIMARY KEY AUTOINCREMENT,
    id_paciente     INTEGER NOT NULL REFERENCES paciente (id_paciente),
    id_profissional INTEGER NOT NULL REFERENCES profissional (id_profissional),
    id_atendimento  INTEGER REFERENCES atendimento (id_atendimento),
    observacoes     TEXT,
    data_registro   TEXT NOT NULL DEFAULT (datetime('now', 'localtime'))
);

CREATE TABLE IF NOT EXISTS fila_espera (
    id_fila           INTEGER PRIMARY KEY AUTOINCREMENT,
    id_paciente       INTEGER NOT NULL REFERENCES paciente (id_paciente),
    id_profissional   INTEGER NOT NULL REFERENCES profissional (id_profissional),
    prioridade        TEXT NOT NULL DEFAULT 'Normal',
    canal_notificacao TEXT,
    status            TEXT NOT NULL DEFAULT 'Aguardando',
    data_entrada      TEXT NOT NULL DEFAULT (datetime('now', 'localtime'))
);

CREATE TABLE IF NOT EXISTS preferencia_horario (
    id_preferencia      INTEGER PRIMARY KEY AUTOINCREMENT,
    id_paciente         INTEGER NOT NULL REFERENCES paciente (id_paciente),
    data_hora_preferida TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS instrucao_pos_atendimento (
    id_instrucao    INTEGER PRIMARY KEY AUTOINCREMENT,
    id_paciente     INTEGER NOT NULL REFERENCES paciente (id_paciente),
    id_profissional INTEGER NOT NULL REFERENCES profissional (id_profissional),
    id_atendimento  INTEGER REFERENCES atendimento (id_atendimento),
    texto_instrucao TEXT NOT NULL,
    canal_envio     TEXT,
    data_envio      TEXT NOT NULL DEFAULT (datetime('now', 'localtime'))
);

CREATE TABLE IF NOT EXISTS atestados (
    id_atestado      INTEGER PRIMARY KEY AUTOINCREMENT,
    id_paciente      INTEGER NOT NULL REFERENCES paciente (id_paciente),
    id_profissional  INTEGER NOT NULL REFERENCES profissional (id_profissional),
    id_atendimento   INTEGER REFERENCES atendimento (id_atendimento),
    dias_afastamento INTEGER NOT NULL,
    cid              TEXT,
    texto_atestado   TEXT NOT NULL,
    data_emissao     TEXT NOT NULL DEFAULT (datetime('now', 'localtime'))
);

CREATE TABLE IF NOT EXISTS unidade_saude (
    id_unidade   INTEGER PRIMARY KEY AUTOINCREMENT,
    nome_unidade TEXT NOT NULL,
    endereco     TEXT,
    telefone     TEXT,
    email        TEXT
);

CREATE TABLE IF NOT EXISTS profissional_unidade (
    id_unidade      INTEGER NOT NULL REFERENCES unidade_saude (id_unidade) ON DELETE CASCADE,
    id_profissional INTEGER NOT NULL REFERENCES profissional (id_profissional) ON DELETE CASCADE,
    PRIMARY KEY (id_unidade, id_profissional)
);

CREATE TABLE IF NOT EXISTS acesso_interunidades (
    id_acesso          INTEGER PRIMARY KEY AUTOINCREMENT,
    id_paciente        INTEGER REFERENCES paciente (id_paciente),
    id_profissional    INTEGER REFERENCES profissional (id_profissional),
    id_unidade_origem  INTEGER REFERENCES unidade_saude (id_unidade),
    id_unidade_destino INTEGER REFERENCES unidade_saude (id_unidade),
    data_acesso        TEXT NOT NULL DEFAULT (datetime('now', 'localtime'))
);

CREATE TABLE IF NOT EXISTS material_treinamento (
    id_material INTEGER PRIMARY KEY AUTOINCREMENT,
    titulo      TEXT NOT NULL,
    categoria   TEXT,
    url_arquivo TEXT,
    data_upload TEXT NOT NULL DEFAULT (datetime('now', 'localtime'))
);

CREATE TABLE IF NOT EXISTS material_treinamento_acesso (
    id_acesso_material INTEGER PRIMARY KEY AUTOINCREMENT,
    id_material        INTEGER NOT NULL REFERENCES material_treinamento (id_material),
    id_usuario         INTEGER NOT NULL REFERENCES usuario (id_usuario) ON DELETE CASCADE,
    data_acesso        TEXT NOT NULL DEFAULT (datetime('now', 'localtime'))
);

CREATE TABLE IF NOT EXISTS log_acesso (
    id_log     INTEGER PRIMARY KEY AUTOINCREMENT,
    id_usuario INTEGER REFERENCES usuario (id_usuario) ON DELETE SET NULL,
    acao       TEXT NOT NULL,
    ip_origem  TEXT,
    data_acao  TEXT NOT NULL DEFAULT (datetime('now', 'localtime'))
);

CREATE TABLE IF NOT EXISTS notificacoes (
    id_notificacao INTEGER PRIMARY KEY AUTOINCREMENT,
    tipo           TEXT NOT NULL,
    mensagem       TEXT NOT NULL,
    data_criacao   TEXT NOT NULL DEFAULT (datetime('now', 'localtime'))
);
"""


def get_db():
    """Abre conexão com o SQLite para a requisição atual."""
    if 'db' not in g:
        g.db = sqlite3.connect(current_app.config['DATABASE'])
        g.db.row_factory = sqlite3.Row
        g.db.execute('PRAGMA foreign_keys = ON')
    return g.db


def close_db(exception=None):
    """Fecha a conexão ao final do ciclo da requisição."""
    db = g.pop('db', None)
    if db is not None:
        db.close()


def init_db():
    """Cria as tabelas, se ainda não existirem."""
    db = get_db()
    db.executescript(SCHEMA)
    db.commit()


def consultar(sql, params=()):
    """Executa um SELECT e devolve as linhas como dicionários."""
    cur = get_db().execute(sql, params)
    return [dict(row) for row in cur.fetchall()]


def consultar_um(sql, params=()):
    row = get_db().execute(sql, params).fetchone()
    return dict(row) if row is not None else None


def executar(sql, params=()):
    with transacao() as db:
        return db.execute(sql, params)


@contextmanager
def transacao():
    """Agrupa vários comandos: commit no fim, rollback se algo falhar."""
    db = get_db()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


@click.command('init-db')
def init_db_command():
    """Cria o esquema do banco."""
    init_db()
    click.echo('Banco de dados inicializado.')


@click.command('create-admin')
def create_admin_command():
    """Cria (ou redefine a senha de) o usuário administrador."""
    from auth.utils import hash_password

    usuario = current_app.config['ADMIN_USUARIO']
    senha_hash = hash_password(current_app.config['ADMIN_SENHA'])
    existente = consultar_um('SELECT id_usuario FROM usuario WHERE nome_usuario = ?', (usuario,))
    if existente:
        executar('UPDATE usuario SET senha = ? WHERE id_usuario = ?', (senha_hash, existente['id_usuario']))
        click.echo(f'Senha do usuário {usuario} redefinida.')
    else:
        executar(
            'INSERT INTO usuario (nome_usuario, senha, papel) VALUES (?, ?, ?)',
            (usuario, senha_hash, 'Administrador')
        )
        click.echo(f'Usuário {usuario} criado.')


def init_app(app):
    os.makedirs(os.path.dirname(app.config['DATABASE']) or '.', exist_ok=True)
    app.teardown_appcontext(close_db)
    app.cli.add_command(init_db_command)
    app.cli.add_command(create_admin_command)
    with app.app_context():
        init_db()
