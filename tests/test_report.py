#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


import io

from datetime import date
from decimal import Decimal

import pytest

from folha import payroll, simples, vacation
from folha.events import CalculationResult, Employee, Kind
from folha.tables import tables_2025
from report import HtmlReport, TextReport


employee = Employee('Maria', Decimal('3000.00'), date(2020, 1, 1))


def test_text_table():
    stream = io.StringIO()
    report = TextReport(stream)
    report.write_table([['a', '1'], ['bb', '22']], header=['x', 'y'], just='lr')
    assert stream.getvalue() == (
        'x    y\n'
        '──────\n'
        'a    1\n'
        'bb  22\n'
        '\n'
    )


def test_text_table_no_header():
    stream = io.StringIO()
    report = TextReport(stream)
    report.write_table([['a', None, 'ccc']])
    assert stream.getvalue() == 'a    ccc\n\n'


def test_text_vacation():
    result = vacation.calculate(employee, date(2025, 7, 1), 30, tables=tables_2025)
    stream = io.StringIO()
    result.write(TextReport(stream))
    text = stream.getvalue()
    assert text.startswith('RECIBO DE FÉRIAS\n')
    assert '1/3 Constitucional de Férias' in text
    assert 'Totais' in text
    assert 'Valor líquido: R$ 3.476,76' in text


def test_text_several_documents():
    stream = io.StringIO()
    report = TextReport(stream)
    vacation.calculate(employee, date(2025, 7, 1), 30, tables=tables_2025).write(report)
    simples.calculate(90000, 1000000, 'I').write(report)
    text = stream.getvalue()
    assert text.count('═' * TextReport.width) == 1
    assert text.index('RECIBO DE FÉRIAS') < text.index('DAS - SIMPLES NACIONAL - ANEXO I')


def test_empty_result():
    result = CalculationResult.from_events(Kind.PAYROLL, [])
    stream = io.StringIO()
    result.write(TextReport(stream))
    text = stream.getvalue()
    assert 'Nenhum evento.' in text
    assert 'Valor líquido: R$ 0,00' in text


def test_das():
    stream = io.StringIO()
    simples.calculate(90000, 1000000, 'I').write(TextReport(stream))
    text = stream.getvalue()
    assert '8,4500%' in text
    assert 'ICMS' in text
    assert 'Valor do DAS: R$ 7.605,00' in text


def test_payroll_details():
    stream = io.StringIO()
    payroll.calculate(employee, tables=tables_2025).write(TextReport(stream))
    text = stream.getvalue()
    assert 'INSS sobre Salário' in text
    assert 'Base FGTS' in text
    assert '240,00' in text


@pytest.mark.parametrize("title", [None, 'Férias & Abono <2025>'])
def test_html(title):
    result = vacation.calculate(employee, date(2025, 7, 1), 30, sell_one_third=True, tables=tables_2025)
    stream = io.StringIO()
    result.write(HtmlReport(stream), title=title)
    text = stream.getvalue()
    assert text.startswith('<!doctype html>\n<html lang="pt-BR">')
    assert '<td class="text-left">Abono Pecuniário</td>' in text
    assert '<tfoot>' in text
    assert text.endswith('</section>\n</body>\n</html>\n')
    if title is not None:
        assert '<title>Férias &amp; Abono &lt;2025&gt;</title>' in text
        assert '<' + '2025>' not in text
