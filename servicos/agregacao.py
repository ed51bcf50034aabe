"""Séries por dia e por mês usadas no dashboard e nos relatórios.

Cada janela tem tamanho fixo (7 dias, 6 meses) e todo bucket aparece uma
única vez, em ordem cronológica, mesmo quando não há eventos nele.
"""
from datetime import date, datetime, timedelta

# Indexados por date.weekday() (segunda = 0) e por date.month (janeiro = 1)
DIAS_SEMANA = ('Seg', 'Ter', 'Qua', 'Qui', 'Sex', 'Sáb', 'Dom')
MESES = ('Jan', 'Fev', 'Mar', 'Abr', 'Mai', 'Jun', 'Jul', 'Ago', 'Set', 'Out', 'Nov', 'Dez')


def rotulo_dia(dia):
    return DIAS_SEMANA[dia.weekday()]


def rotulo_mes(mes):
    return MESES[mes - 1]


def para_data(valor):
    """Converte date, datetime ou string ISO em date; None se não der."""
    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, date):
        return valor
    if not valor:
        return None
    try:
        return datetime.fromisoformat(str(valor)).date()
    except ValueError:
        try:
            return date.fromisoformat(str(valor)[:10])
        except ValueError:
            return None


def janela_dias(hoje, n=7):
    """Os `n` dias terminando em `hoje`, do mais antigo ao mais recente."""
    hoje = para_data(hoje)
    return [hoje - timedelta(days=i) for i in range(n - 1, -1, -1)]


def janela_meses(hoje, n=6):
    """Pares (ano, mês) dos `n` meses terminando no mês de `hoje`."""
    hoje = para_data(hoje)
    meses = []
    ano, mes = hoje.year, hoje.month
    for _ in range(n):
        meses.append((ano, mes))
        mes -= 1
        if mes == 0:
            ano, mes = ano - 1, 12
    meses.reverse()
    return meses


def contar_por_dia(hoje, series):
    """Conta várias séries de datas nos mesmos 7 dias.

    `series` mapeia o nome do campo de saída para uma lista de datas. O
    resultado tem um dicionário por dia com `label` e um contador por série.
    """
    dias = janela_dias(hoje)
    contagens = {nome: dict.fromkeys(dias, 0) for nome in series}
    for nome, datas in series.items():
        for valor in datas:
            dia = para_data(valor)
            if dia in contagens[nome]:
                contagens[nome][dia] += 1

    resultado = []
    for dia in dias:
        linha = {'label': rotulo_dia(dia)}
        for nome in series:
            linha[nome] = contagens[nome][dia]
        resultado.append(linha)
    return resultado


def buckets_diarios(hoje, datas):
    """Quantidade de eventos em cada um dos últimos 7 dias."""
    return contar_por_dia(hoje, {'count': datas})


def taxa(numerador, denominador):
    """Percentual sem arredondamento; 0.0 quando não há denominador."""
    if denominador <= 0:
        return 0.0
    return numerador / denominador * 100


def buckets_mensais_taxa(hoje, numerador, denominador, eventos, campo_data='data_hora'):
    """Taxa mensal (%) dos últimos 6 meses.

    Para cada mês, D são os eventos que satisfazem `denominador` e N os que
    também satisfazem `numerador`. A taxa vai arredondada a uma casa.
    """
    meses = janela_meses(hoje)
    totais = {chave: [0, 0] for chave in meses}
    for evento in eventos:
        dia = para_data(evento.get(campo_data))
        if dia is None:
            continue
        chave = (dia.year, dia.month)
        if chave not in totais or not denominador(evento):
            continue
        totais[chave][1] += 1
        if numerador(evento):
            totais[chave][0] += 1

    return [
        {'label': rotulo_mes(mes), 'rate': round(taxa(*totais[(ano, mes)]), 1)}
        for ano, mes in meses
    ]
