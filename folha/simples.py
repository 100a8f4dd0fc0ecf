#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#

"""Simples Nacional DAS (Documento de Arrecadação do Simples Nacional).

The effective rate of a month is derived from the nominal rate of the band
containing the revenue of the last 12 months (RBT12), less the band
deduction spread over the RBT12 (LC 123/2006, art. 18, § 1º-A):

    effective = (RBT12 × nominal − deduction) / RBT12

and the tax is the effective rate applied to the revenue of the month (RPA).
The tax is then apportioned among the unified taxes, according to the
distribution table of the annex and band.
"""


import dataclasses
import logging
import re

from decimal import Decimal

from tax import br

from .brackets import Bracket, BracketTable, lookup_bracket
from .common import ValidationError, ZERO, cents, format_brl, format_percent, money


__all__ = [
    'ANNEXES',
    'parse_annex',
    'annex_table',
    'distribution',
    'effective_rate',
    'DasShare',
    'DasResult',
    'calculate',
]


logger = logging.getLogger('folha')


ANNEXES = tuple(br.simples_annexes)

_roman = {'1': 'I', '2': 'II', '3': 'III', '4': 'IV', '5': 'V'}


def parse_annex(annex:str) -> str:
    """Normalize an annex given as 'III', '3', 'Anexo III' or 'anexo-iii'."""

    if not isinstance(annex, str):
        raise ValidationError(f'invalid annex {annex!r}')
    s = re.sub(r'^anexo[\s_-]*', '', annex.strip(), flags=re.IGNORECASE).upper()
    s = _roman.get(s, s)
    if s not in ANNEXES:
        raise ValidationError(f'invalid annex {annex!r}; expected one of {", ".join(ANNEXES)}')
    return s


_annex_tables = {
    annex: BracketTable.from_rows(bands, name=f'Anexo {annex}')
    for annex, bands in br.simples_annexes.items()
}


def annex_table(annex:str) -> BracketTable:
    return _annex_tables[parse_annex(annex)]


def distribution(annex:str, rbt12) -> dict[str, Decimal]:
    """Percentages of the DAS that go to each tax."""

    annex = parse_annex(annex)
    rbt12 = money(rbt12, 'RBT12')
    bands = br.simples_distribution[annex]
    for limit, percentages in bands:
        if rbt12 <= limit:
            break
    else:
        limit, percentages = bands[-1]
    return {tax: Decimal(str(percent)) for tax, percent in percentages.items()}


@dataclasses.dataclass(frozen=True)
class DasShare:
    tax: str
    percent: Decimal
    rate: Decimal
    amount: Decimal


@dataclasses.dataclass(frozen=True)
class DasResult:
    rpa: Decimal
    rbt12: Decimal
    annex: str
    band: int
    nominal_rate: Decimal
    deduction: Decimal
    effective_rate: Decimal
    tax: Decimal
    shares: tuple[DasShare, ...]
    company_id: str|None = None

    def write(self, report) -> None:
        title = f'DAS - Simples Nacional - Anexo {self.annex}'
        report.start(title)
        report.write_heading(title)

        rows = [
            ('Receita bruta do período (RPA)', format_brl(self.rpa)),
            ('Receita bruta dos últimos 12 meses (RBT12)', format_brl(self.rbt12)),
            ('Faixa', str(self.band)),
            ('Alíquota nominal', format_percent(self.nominal_rate)),
            ('Parcela a deduzir', format_brl(self.deduction)),
            ('Alíquota efetiva', format_percent(self.effective_rate, 4)),
        ]
        report.write_table(rows, just='lr')

        report.write_heading('Repartição dos tributos', level=2)
        rows = []
        for share in self.shares:
            rows.append((share.tax, format_percent(share.percent / 100), format_percent(share.rate, 4), format_brl(share.amount)))
        header = ('Tributo', 'Percentual', 'Alíquota', 'Valor')
        footer = ('Total', '', format_percent(self.effective_rate, 4), format_brl(sum((share.amount for share in self.shares), ZERO)))
        report.write_table(rows, header=header, footer=footer, just='lrrr')

        report.write_paragraph(f'Valor do DAS: {format_brl(self.tax, symbol=True)}')

        report.end()


def effective_rate(rbt12:Decimal, bracket:Bracket) -> Decimal:
    if rbt12 == ZERO:
        return bracket.rate
    return max((rbt12 * bracket.rate - bracket.deduction) / rbt12, ZERO)


def calculate(rpa, rbt12, annex:str, company_id:str|None=None) -> DasResult:
    rpa = money(rpa, 'RPA')
    rbt12 = money(rbt12, 'RBT12')
    annex = parse_annex(annex)

    table = _annex_tables[annex]
    bracket = lookup_bracket(table, rbt12)
    band = table.brackets.index(bracket) + 1
    if bracket.limit is not None and rbt12 > bracket.limit:
        logger.warning('RBT12 %s exceeds the Simples Nacional limit of %s', rbt12, bracket.limit)

    rate = effective_rate(rbt12, bracket)
    tax = cents(rpa * rate)

    percentages = distribution(annex, rbt12)
    total_percent = sum(percentages.values(), ZERO)
    shares = []
    for name, percent in percentages.items():
        share_rate = rate * percent / total_percent
        shares.append(DasShare(name, percent, share_rate, cents(rpa * share_rate)))

    logger.debug('DAS anexo %s: RBT12=%s band=%u effective=%s tax=%s', annex, rbt12, band, rate, tax)

    return DasResult(
        rpa=rpa,
        rbt12=rbt12,
        annex=annex,
        band=band,
        nominal_rate=bracket.rate,
        deduction=bracket.deduction,
        effective_rate=rate,
        tax=tax,
        shares=tuple(shares),
        company_id=company_id,
    )
