import pytest

from servicos.cpf import validar_cpf, limpar_cpf, formatar_cpf


@pytest.mark.parametrize('cpf', ['52998224725', '529.982.247-25', '123.456.789-09', '111.444.777-35'])
def test_cpf_valido(cpf):
    assert validar_cpf(cpf) is True


@pytest.mark.parametrize('cpf', [
    '11111111111',
    '000.000.000-00',
    '1234567890',
    '123456789012',
    '52998224724',
    '52998224735',
    '',
    'abc',
])
def test_cpf_invalido(cpf):
    assert validar_cpf(cpf) is False


def test_entrada_que_nao_e_texto():
    assert validar_cpf(None) is False
    assert validar_cpf(52998224725) is False


def test_qualquer_alteracao_nos_digitos_verificadores_invalida():
    valido = '52998224725'
    for posicao in (9, 10):
        for digito in '0123456789':
            if digito == valido[posicao]:
                continue
            alterado = valido[:posicao] + digito + valido[posicao + 1:]
            assert not validar_cpf(alterado), alterado


def test_limpar_e_formatar():
    assert limpar_cpf(' 529.982.247-25 ') == '52998224725'
    assert formatar_cpf('52998224725') == '529.982.247-25'
    assert formatar_cpf('123') == '123'


def test_mesma_entrada_mesmo_resultado():
    assert validar_cpf('529.982.247-25') == validar_cpf('529.982.247-25')
