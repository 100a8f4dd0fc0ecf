#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


from datetime import date
from decimal import Decimal

import pytest

from folha import payroll
from folha.common import ValidationError, cents
from folha.events import Employee, Kind
from folha.payroll import Entry, RUBRICS, rubric
from folha.tables import tables_2025


employee = Employee('Maria', Decimal('3000.00'), date(2020, 1, 1), company_id='acme')


def amounts(result):
    return {event.description: event.earning or event.deduction for event in result.events}


def test_catalog():
    for code, r in RUBRICS.items():
        assert r.code == code
    for code in ('0004', '0005', '0012', '0901', '0902'):
        assert not (RUBRICS[code].inss or RUBRICS[code].fgts or RUBRICS[code].irrf)
    assert not RUBRICS['0100'].fgts
    assert rubric('0001').description == 'Salário Base'
    with pytest.raises(ValidationError):
        rubric('9999')


def test_base_salary():
    result = payroll.calculate(employee, tables=tables_2025)
    assert result.kind is Kind.PAYROLL
    assert result.company_id == 'acme'
    assert amounts(result) == {
        'Salário Base': Decimal('3000.00'),
        'INSS sobre Salário': Decimal('253.41'),
        'IRRF sobre Salário': Decimal('23.83'),
    }
    assert result.net_amount == Decimal('2722.76')
    assert result.base_inss == result.base_irrf == result.base_fgts == Decimal('3000.00')
    assert result.inss == Decimal('253.41')
    assert result.irrf == Decimal('23.83')
    assert result.fgts == Decimal('240.00')


def test_overtime():
    entries = [Entry(rubric('0001')), Entry(rubric('0002'), quantity=10)]
    result = payroll.calculate(employee, entries, tables_2025)
    events = {event.description: event for event in result.events}
    assert events['Horas Extras 50%'].earning == Decimal('204.55')
    assert events['Horas Extras 50%'].reference == '10h'
    assert result.base_inss == Decimal('3204.55')
    assert result.inss == Decimal('277.96')
    assert result.irrf == Decimal('44.83')


@pytest.mark.parametrize("code,quantity,amount", [
    ('0002', 10, '204.55'),
    ('0003', 10, '27.27'),
    ('0004', None, '180.00'),
    ('0006', None, '900.00'),
    ('0007', None, '151.80'),
    ('0008', None, '303.60'),
    ('0009', None, '607.20'),
    ('0010', 2, '200.00'),
    ('0001', None, '3000.00'),
    ('0100', None, '3000.00'),
])
def test_automatic_entry(code, quantity, amount):
    entry = payroll.automatic_entry(Entry(rubric(code), quantity=quantity), employee, [], tables_2025)
    assert entry.amount == Decimal(amount)


def test_absences_reduce_bases():
    entries = [Entry(rubric('0001')), Entry(rubric('0010'), quantity=2)]
    result = payroll.calculate(employee, entries, tables_2025)
    assert result.base_inss == Decimal('2800.00')
    assert result.base_fgts == Decimal('2800.00')
    assert result.inss == Decimal('229.41')


def test_transport_voucher_not_in_bases():
    entries = [Entry(rubric('0001')), Entry(rubric('0004'))]
    result = payroll.calculate(employee, entries, tables_2025)
    assert amounts(result)['Vale-Transporte'] == Decimal('180.00')
    assert result.base_inss == Decimal('3000.00')
    assert result.net_amount == Decimal('2542.76')


@pytest.mark.parametrize("salary,family_dependents,amount", [
    ('1500.00', 2, Decimal('130.00')),
    ('1906.04', 1, Decimal('65.00')),
    ('1906.05', 1, None),
    ('1500.00', 0, None),
])
def test_family_allowance(salary, family_dependents, amount):
    e = Employee.with_dependents('João', salary, date(2020, 1, 1), family_allowance=family_dependents)
    # Listed first on purpose: it depends on the other entries
    entries = [Entry(rubric('0005')), Entry(rubric('0001'))]
    result = payroll.calculate(e, entries, tables_2025)
    assert amounts(result).get('Salário-Família') == amount
    assert result.base_inss == Decimal(salary)


def test_manual_entries():
    entries = [Entry(rubric('0001')), Entry(rubric('0011'), amount='500.00'), Entry(rubric('0012'), amount=1000)]
    result = payroll.calculate(employee, entries, tables_2025)
    assert result.base_inss == Decimal('3500.00')
    assert amounts(result)['Adiantamento Salarial'] == Decimal('1000.00')


@pytest.mark.parametrize("entries", [
    [Entry(rubric('0011'))],
    [Entry(rubric('0002'))],
    [Entry(rubric('0901'), amount=100)],
    [Entry(rubric('0001')), 'salary'],
])
def test_invalid_entries(entries):
    with pytest.raises(ValidationError):
        payroll.calculate(employee, entries, tables_2025)


def test_invalid_amount():
    with pytest.raises(ValidationError):
        Entry(rubric('0011'), amount=-1)


@pytest.mark.parametrize("salary,inss,irrf", [
    ('3000.00', '330.00', '18.09'),
    ('10000.00', '897.32', '1594.51'),
])
def test_pro_labore(salary, inss, irrf):
    partner = Employee.with_dependents('Sócio', salary, date(2020, 1, 1), irrf=2)
    result = payroll.calculate_pro_labore(partner, tables=tables_2025)
    assert result.kind is Kind.PRO_LABORE
    assert amounts(result)['Pró-labore'] == Decimal(salary)
    assert result.inss == Decimal(inss)
    # No dependents are deducted
    assert result.irrf == Decimal(irrf)
    assert result.fgts == 0
    assert result.inss <= cents(tables_2025.inss_ceiling * tables_2025.pro_labore_inss_rate)


def test_pro_labore_no_family_allowance():
    partner = Employee.with_dependents('Sócio', '1500.00', date(2020, 1, 1), family_allowance=1)
    with pytest.raises(ValidationError):
        payroll.calculate_pro_labore(partner, [Entry(rubric('0100')), Entry(rubric('0005'))], tables_2025)
