import re
from flask import request
from db import executar

EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

class ErroAPI(Exception):
    status_code = 500

    def __init__(self, mensagem, status_code=None):
        super().__init__(mensagem)
        self.mensagem = mensagem
        if status_code is not None:
            self.status_code = status_code

class ErroValidacao(ErroAPI):
    status_code = 400

class NaoEncontrado(ErroAPI):
    status_code = 404

class Conflito(ErroAPI):
    status_code = 409

def dados_requisicao():
    """Corpo JSON da requisição (dicionário vazio se não houver)"""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}

def validar_email(email):
    if email and not EMAIL_RE.match(email):
        raise ErroValidacao('O formato do e-mail fornecido é inválido.')

def exigir(data, campos, mensagem):
    if any(not data.get(campo) for campo in campos):
        raise ErroValidacao(mensagem)

def ou_none(valor):
    """Campos opcionais vazios ('' ou ausentes) viram NULL"""
    return valor if valor not in ('', None) else None

def notificar(tipo, mensagem):
    """Registra uma notificação exibida no dashboard"""
    executar('INSERT INTO notificacoes (tipo, mensagem) VALUES (?, ?)', (tipo, mensagem))
