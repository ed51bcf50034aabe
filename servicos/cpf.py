import re

_NAO_DIGITO = re.compile(r'\D')


def limpar_cpf(cpf):
    """Remove pontos, traços e espaços, mantendo só dígitos."""
    if not isinstance(cpf, str):
        return ''
    return _NAO_DIGITO.sub('', cpf)


def _digito_verificador(digitos, peso_inicial):
    soma = sum(d * peso for d, peso in zip(digitos, range(peso_inicial, 1, -1)))
    resto = soma % 11
    return 0 if resto < 2 else 11 - resto


def validar_cpf(cpf):
    """Valida um CPF pelos dois dígitos verificadores (módulo 11).

    Aceita o número com ou sem máscara. Nunca levanta exceção: qualquer
    entrada fora do formato devolve False.
    """
    limpo = limpar_cpf(cpf)
    if len(limpo) != 11:
        return False

    # Sequências repetidas (000..., 111...) passam no cálculo mas são inválidas
    if len(set(limpo)) == 1:
        return False

    digitos = [int(c) for c in limpo]
    if _digito_verificador(digitos[:9], 10) != digitos[9]:
        return False
    if _digito_verificador(digitos[:10], 11) != digitos[10]:
        return False
    return True


def formatar_cpf(cpf):
    """Formata CPF como 000.000.000-00, se tiver 11 dígitos."""
    limpo = limpar_cpf(cpf)
    if len(limpo) == 11:
        return f"{limpo[:3]}.{limpo[3:6]}.{limpo[6:9]}-{limpo[9:]}"
    return cpf or ''
