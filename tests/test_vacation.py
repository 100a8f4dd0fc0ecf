#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


from datetime import date
from decimal import Decimal

import pytest

from folha import vacation
from folha.common import ValidationError, cents
from folha.events import Employee, Kind
from folha.tables import tables_2024, tables_2025


employee = Employee('Maria', Decimal('3000.00'), date(2020, 1, 1), company_id='acme')


def amounts(result):
    return {event.description: event.earning or event.deduction for event in result.events}


def test_basic():
    result = vacation.calculate(employee, date(2025, 7, 1), 30, tables=tables_2025)

    assert result.kind is Kind.VACATION
    assert result.company_id == 'acme'
    assert [event.description for event in result.events] == [
        'Férias',
        '1/3 Constitucional de Férias',
        'INSS sobre Férias',
        'IRRF sobre Férias',
    ]
    assert amounts(result) == {
        'Férias': Decimal('3000.00'),
        '1/3 Constitucional de Férias': Decimal('1000.00'),
        'INSS sobre Férias': Decimal('373.41'),
        'IRRF sobre Férias': Decimal('149.83'),
    }
    assert result.total_earnings == Decimal('4000.00')
    assert result.total_deductions == Decimal('523.24')
    assert result.net_amount == Decimal('3476.76')
    assert result.net_amount == result.total_earnings - result.total_deductions


def test_basic_2024():
    result = vacation.calculate(employee, date(2024, 7, 1), 30, tables=tables_2024)
    assert amounts(result)['INSS sobre Férias'] == Decimal('378.82')
    assert amounts(result)['IRRF sobre Férias'] == Decimal('161.74')
    assert result.net_amount == Decimal('3459.44')


def test_default_tables():
    assert vacation.calculate(employee, date(2025, 7, 1), 30) == vacation.calculate(employee, date(2025, 7, 1), 30, tables=tables_2025)


def test_sell_one_third():
    result = vacation.calculate(employee, date(2025, 7, 1), 30, sell_one_third=True, tables=tables_2025)

    events = {event.description: event for event in result.events}
    assert events['Férias'].reference == '20 dias'
    assert events['Férias'].earning == Decimal('2000.00')
    assert events['1/3 Constitucional de Férias'].earning == Decimal('666.67')
    assert events['Abono Pecuniário'].reference == '10 dias'
    assert events['Abono Pecuniário'].earning == Decimal('1000.00')
    assert events['1/3 sobre Abono Pecuniário'].earning == Decimal('333.33')

    sale = events['Abono Pecuniário'].earning + events['1/3 sobre Abono Pecuniário'].earning
    assert float(sale) == pytest.approx(3000/30*10*4/3, abs=0.01)

    # The sale bears no withholding
    assert events['INSS sobre Férias'].deduction == Decimal('217.23')
    assert events['IRRF sobre Férias'].deduction == Decimal('1.55')


def test_sale_rounding():
    e = Employee('João', Decimal('3000.01'), date(2020, 1, 1))
    result = vacation.calculate(e, date(2025, 7, 1), 30, sell_one_third=True, tables=tables_2025)
    events = {event.description: event for event in result.events}
    assert events['Abono Pecuniário'].earning == Decimal('1000.00')
    assert events['1/3 sobre Abono Pecuniário'].earning == Decimal('333.34')
    sale = events['Abono Pecuniário'].earning + events['1/3 sobre Abono Pecuniário'].earning
    assert sale == cents(Decimal('3000.01') / 30 * 10 * 4 / 3)


@pytest.mark.parametrize("vacation_days,taken_days,sold_days", [
    (30, 20, 10),
    (20, 14, 6),
    (15, 10, 5),
])
def test_sold_days(vacation_days, taken_days, sold_days):
    result = vacation.calculate(employee, date(2025, 7, 1), vacation_days, sell_one_third=True, tables=tables_2025)
    events = {event.description: event for event in result.events}
    assert events['Férias'].reference == f'{taken_days} dias'
    assert events['Abono Pecuniário'].reference == f'{sold_days} dias'


def test_advance_thirteenth():
    result = vacation.calculate(employee, date(2025, 7, 1), 30, advance_thirteenth=True, tables=tables_2025)
    events = {event.description: event for event in result.events}
    assert events['Adiantamento 1ª Parcela 13º Salário'].earning == Decimal('875.00')
    assert events['Adiantamento 1ª Parcela 13º Salário'].reference == '7/12'

    # Not part of the INSS and IRRF bases
    assert events['INSS sobre Férias'].deduction == Decimal('373.41')
    assert events['IRRF sobre Férias'].deduction == Decimal('149.83')
    assert result.total_earnings == Decimal('4875.00')


def test_advance_thirteenth_admitted_this_year():
    recent = Employee('João', Decimal('3000.00'), date(2025, 3, 20))
    result = vacation.calculate(recent, date(2025, 7, 10), 30, advance_thirteenth=True, tables=tables_2025)
    events = {event.description: event for event in result.events}
    assert events['Adiantamento 1ª Parcela 13º Salário'].earning == Decimal('500.00')


def test_dependents():
    with_dependents = Employee.with_dependents('Maria', '3000.00', date(2020, 1, 1), irrf=2)
    result = vacation.calculate(with_dependents, date(2025, 7, 1), 30, tables=tables_2025)
    assert amounts(result)['IRRF sobre Férias'] == Decimal('92.95')


def test_no_irrf():
    low = Employee('José', Decimal('1518.00'), date(2020, 1, 1))
    result = vacation.calculate(low, date(2025, 7, 1), 30, tables=tables_2025)
    descriptions = [event.description for event in result.events]
    assert 'INSS sobre Férias' in descriptions
    assert 'IRRF sobre Férias' not in descriptions
    assert amounts(result)['INSS sobre Férias'] == Decimal('159.39')


@pytest.mark.parametrize("start_date,vacation_days", [
    (date(2025, 7, 1), 4),
    (date(2025, 7, 1), 31),
    (date(2025, 7, 1), 10.0),
    (date(2025, 7, 1), True),
    (date(2019, 12, 31), 30),
    ('2025-07-01', 30),
])
def test_invalid(start_date, vacation_days):
    with pytest.raises(ValidationError):
        vacation.calculate(employee, start_date, vacation_days, tables=tables_2025)


def test_idempotent():
    a = vacation.calculate(employee, date(2025, 7, 1), 30, sell_one_third=True, advance_thirteenth=True, tables=tables_2025)
    b = vacation.calculate(employee, date(2025, 7, 1), 30, sell_one_third=True, advance_thirteenth=True, tables=tables_2025)
    assert a == b
