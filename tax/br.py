#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#

"""Brazilian payroll and Simples Nacional constants."""


# Bands are (upper limit, rate, amount to deduct).  A None limit is unbounded.


# https://www.gov.br/inss/pt-br/direitos-e-deveres/inscricao-e-contribuicao/tabela-de-contribuicao-mensal
# Portaria Interministerial MPS/MF Nº 2, de 11 de janeiro de 2024
inss_bands_2024 = [
    ( 1412.00, 0.075,   0.00 ),
    ( 2666.68, 0.09,   21.18 ),
    ( 4000.03, 0.12,  101.18 ),
    ( 7786.02, 0.14,  181.18 ),
]

# Portaria Interministerial MPS/MF Nº 6, de 10 de janeiro de 2025
inss_bands_2025 = [
    ( 1518.00, 0.075,   0.00 ),
    ( 2793.88, 0.09,   22.77 ),
    ( 4190.83, 0.12,  106.59 ),
    ( 8157.41, 0.14,  190.40 ),
]


# https://www.gov.br/receitafederal/pt-br/assuntos/meu-imposto-de-renda/tabelas/2024
# Lei 14.848/2024, from February 2024
irrf_bands_2024 = [
    ( 2259.20, 0.0,      0.00 ),
    ( 2826.65, 0.075,  169.44 ),
    ( 3751.05, 0.15,   381.44 ),
    ( 4664.68, 0.225,  662.77 ),
    (    None, 0.275,  896.00 ),
]
irrf_dependent_deduction_2024 = 189.59

# https://www.gov.br/receitafederal/pt-br/assuntos/meu-imposto-de-renda/tabelas/2025
# MP 1.294/2025, from May 2025
irrf_bands_2025 = [
    ( 2428.80, 0.0,      0.00 ),
    ( 2826.65, 0.075,  182.16 ),
    ( 3751.05, 0.15,   394.16 ),
    ( 4664.68, 0.225,  675.49 ),
    (    None, 0.275,  908.73 ),
]
irrf_dependent_deduction_2025 = 189.59


# Salário-família: (remuneration limit, quota per dependent)
family_allowance_2024 = (1819.26, 62.04)
family_allowance_2025 = (1906.04, 65.00)


minimum_wage_2024 = 1412.00
minimum_wage_2025 = 1518.00


# https://www.planalto.gov.br/ccivil_03/leis/l8036consol.htm
fgts_rate = 0.08
fgts_penalty_rate = 0.40

# Contribuinte individual (pro-labore) retained by the company
pro_labore_inss_rate = 0.11


# https://www8.receita.fazenda.gov.br/SimplesNacional/Arquivos/manual/Anexo_I.pdf
# LC 123/2006, Anexos I to V, as amended by LC 155/2016.  Bands are
# (RBT12 upper limit, nominal rate, amount to deduct).
simples_annexes = {
    'I': [  # Comércio
        (  180000, 0.04,        0 ),
        (  360000, 0.073,    5940 ),
        (  720000, 0.095,   13860 ),
        ( 1800000, 0.107,   22500 ),
        ( 3600000, 0.143,   87300 ),
        ( 4800000, 0.19,   378000 ),
    ],
    'II': [  # Indústria
        (  180000, 0.045,       0 ),
        (  360000, 0.078,    5940 ),
        (  720000, 0.10,    13860 ),
        ( 1800000, 0.112,   22500 ),
        ( 3600000, 0.147,   85500 ),
        ( 4800000, 0.30,   720000 ),
    ],
    'III': [  # Serviços e locação de bens móveis
        (  180000, 0.06,        0 ),
        (  360000, 0.112,    9360 ),
        (  720000, 0.135,   17640 ),
        ( 1800000, 0.16,    35640 ),
        ( 3600000, 0.21,   125640 ),
        ( 4800000, 0.33,   648000 ),
    ],
    'IV': [  # Limpeza, obras, vigilância, advocacia
        (  180000, 0.045,       0 ),
        (  360000, 0.09,     8100 ),
        (  720000, 0.102,   12420 ),
        ( 1800000, 0.14,    39780 ),
        ( 3600000, 0.22,   183780 ),
        ( 4800000, 0.33,   828000 ),
    ],
    'V': [  # Auditoria, tecnologia, publicidade, engenharia
        (  180000, 0.155,       0 ),
        (  360000, 0.18,     4500 ),
        (  720000, 0.195,    9900 ),
        ( 1800000, 0.205,   17100 ),
        ( 3600000, 0.23,    62100 ),
        ( 4800000, 0.305,  540000 ),
    ],
}


# Percentage of the DAS that goes to each tax, per annex and RBT12 band.
# https://www.planalto.gov.br/ccivil_03/leis/lcp/lcp123.htm (Anexos, "Percentual de Repartição dos Tributos")
simples_distribution = {
    'I': [
        (  180000, {'IRPJ':  5.5, 'CSLL':  3.5, 'COFINS': 12.74, 'PIS/PASEP': 2.76, 'CPP': 41.5, 'ICMS': 34.0}),
        (  360000, {'IRPJ':  5.5, 'CSLL':  3.5, 'COFINS': 12.74, 'PIS/PASEP': 2.76, 'CPP': 41.5, 'ICMS': 34.0}),
        (  720000, {'IRPJ':  5.5, 'CSLL':  3.5, 'COFINS': 12.74, 'PIS/PASEP': 2.76, 'CPP': 42.0, 'ICMS': 33.5}),
        ( 1800000, {'IRPJ':  5.5, 'CSLL':  3.5, 'COFINS': 12.74, 'PIS/PASEP': 2.76, 'CPP': 42.0, 'ICMS': 33.5}),
        ( 3600000, {'IRPJ':  5.5, 'CSLL':  3.5, 'COFINS': 12.74, 'PIS/PASEP': 2.76, 'CPP': 42.0, 'ICMS': 33.5}),
        ( 4800000, {'IRPJ': 13.5, 'CSLL': 10.0, 'COFINS': 28.27, 'PIS/PASEP': 6.13, 'CPP': 42.1, 'ICMS':  0.0}),
    ],
    'II': [
        (  180000, {'IRPJ':  5.5, 'CSLL':  3.5, 'COFINS': 11.51, 'PIS/PASEP': 2.49, 'CPP': 37.5, 'IPI':  7.5, 'ICMS': 32.0}),
        (  360000, {'IRPJ':  5.5, 'CSLL':  3.5, 'COFINS': 11.51, 'PIS/PASEP': 2.49, 'CPP': 37.5, 'IPI':  7.5, 'ICMS': 32.0}),
        (  720000, {'IRPJ':  5.5, 'CSLL':  3.5, 'COFINS': 11.51, 'PIS/PASEP': 2.49, 'CPP': 37.5, 'IPI':  7.5, 'ICMS': 32.0}),
        ( 1800000, {'IRPJ':  5.5, 'CSLL':  3.5, 'COFINS': 11.51, 'PIS/PASEP': 2.49, 'CPP': 37.5, 'IPI':  7.5, 'ICMS': 32.0}),
        ( 3600000, {'IRPJ':  5.5, 'CSLL':  3.5, 'COFINS': 11.51, 'PIS/PASEP': 2.49, 'CPP': 37.5, 'IPI':  7.5, 'ICMS': 32.0}),
        ( 4800000, {'IRPJ':  8.5, 'CSLL':  7.5, 'COFINS': 20.96, 'PIS/PASEP': 4.54, 'CPP': 23.5, 'IPI': 35.0, 'ICMS':  0.0}),
    ],
    'III': [
        (  180000, {'IRPJ':  4.0, 'CSLL':  3.5, 'COFINS': 12.82, 'PIS/PASEP': 2.78, 'CPP': 43.4, 'ISS': 33.5}),
        (  360000, {'IRPJ':  4.0, 'CSLL':  3.5, 'COFINS': 14.05, 'PIS/PASEP': 3.05, 'CPP': 43.4, 'ISS': 32.0}),
        (  720000, {'IRPJ':  4.0, 'CSLL':  3.5, 'COFINS': 13.64, 'PIS/PASEP': 2.96, 'CPP': 43.4, 'ISS': 32.5}),
        ( 1800000, {'IRPJ':  4.0, 'CSLL':  3.5, 'COFINS': 13.64, 'PIS/PASEP': 2.96, 'CPP': 43.4, 'ISS': 32.5}),
        ( 3600000, {'IRPJ':  4.0, 'CSLL':  3.5, 'COFINS': 12.82, 'PIS/PASEP': 2.78, 'CPP': 43.4, 'ISS': 33.5}),
        ( 4800000, {'IRPJ': 35.0, 'CSLL': 15.0, 'COFINS': 16.03, 'PIS/PASEP': 3.47, 'CPP': 30.5, 'ISS':  0.0}),
    ],
    'IV': [
        (  180000, {'IRPJ': 18.8, 'CSLL': 15.2, 'COFINS': 17.67, 'PIS/PASEP': 3.83, 'ISS': 44.5}),
        (  360000, {'IRPJ': 19.8, 'CSLL': 15.2, 'COFINS': 20.55, 'PIS/PASEP': 4.45, 'ISS': 40.0}),
        (  720000, {'IRPJ': 20.8, 'CSLL': 15.2, 'COFINS': 19.73, 'PIS/PASEP': 4.27, 'ISS': 40.0}),
        ( 1800000, {'IRPJ': 17.8, 'CSLL': 19.2, 'COFINS': 18.90, 'PIS/PASEP': 4.10, 'ISS': 40.0}),
        ( 3600000, {'IRPJ': 18.8, 'CSLL': 19.2, 'COFINS': 18.08, 'PIS/PASEP': 3.92, 'ISS': 40.0}),
        ( 4800000, {'IRPJ': 53.5, 'CSLL': 21.5, 'COFINS': 20.55, 'PIS/PASEP': 4.45, 'ISS':  0.0}),
    ],
    'V': [
        (  180000, {'IRPJ': 25.0, 'CSLL': 15.0, 'COFINS': 14.10, 'PIS/PASEP': 3.05, 'CPP': 28.85, 'ISS': 14.0}),
        (  360000, {'IRPJ': 23.0, 'CSLL': 15.0, 'COFINS': 14.10, 'PIS/PASEP': 3.05, 'CPP': 27.85, 'ISS': 17.0}),
        (  720000, {'IRPJ': 24.0, 'CSLL': 15.0, 'COFINS': 14.92, 'PIS/PASEP': 3.23, 'CPP': 23.85, 'ISS': 19.0}),
        ( 1800000, {'IRPJ': 21.0, 'CSLL': 15.0, 'COFINS': 15.74, 'PIS/PASEP': 3.41, 'CPP': 23.85, 'ISS': 21.0}),
        ( 3600000, {'IRPJ': 23.0, 'CSLL': 12.5, 'COFINS': 14.10, 'PIS/PASEP': 3.05, 'CPP': 23.85, 'ISS': 23.5}),
        ( 4800000, {'IRPJ': 35.0, 'CSLL': 15.5, 'COFINS': 16.44, 'PIS/PASEP': 3.56, 'CPP': 29.50, 'ISS':  0.0}),
    ],
}


for _annex, _bands in simples_distribution.items():
    assert len(_bands) == len(simples_annexes[_annex])
    for _limit, _distribution in _bands:
        assert abs(sum(_distribution.values()) - 100.0) < 1e-6, (_annex, _limit)
del _annex, _bands, _limit, _distribution
