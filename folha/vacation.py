#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#

"""Vacation pay (férias).

Events are produced in the order they appear on the vacation receipt:

1. vacation pay for the days taken;
2. the constitutional one-third bonus (CF art. 7º, XVII);
3. optionally, the sale of one third of the days (abono pecuniário, CLT
   art. 143) and its own one-third bonus;
4. optionally, the first installment of the 13th salary (Lei 4.749/65,
   art. 2º, § 2º);
5. INSS over 1 and 2;
6. IRRF over 1 and 2, less INSS and dependents.

The sale and the 13th advance are not subject to INSS nor IRRF here: the
former is indemnification and the latter is taxed when the 13th is settled.
"""


import datetime
import logging

from decimal import Decimal

from .brackets import withhold
from .common import ValidationError, ZERO, cents, format_percent
from .dates import month_end, months_worked
from .events import CalculationResult, Employee, Kind, LineItem
from .tables import TaxTables, default_tables


__all__ = [
    'min_days',
    'max_days',
    'calculate',
]


logger = logging.getLogger('folha')


min_days = 5
max_days = 30


def _item(description:str, reference:str='', earning:Decimal=ZERO, deduction:Decimal=ZERO) -> LineItem:
    return LineItem(Kind.VACATION, description, reference, earning, deduction)


def calculate(employee:Employee, start_date:datetime.date, vacation_days:int, sell_one_third:bool=False, advance_thirteenth:bool=False, tables:TaxTables|None=None) -> CalculationResult:
    if tables is None:
        tables = default_tables()

    if isinstance(vacation_days, bool) or not isinstance(vacation_days, int):
        raise ValidationError(f'vacation days must be an integer, got {vacation_days!r}')
    if not min_days <= vacation_days <= max_days:
        raise ValidationError(f'vacation days must be between {min_days} and {max_days}, got {vacation_days}')
    if not isinstance(start_date, datetime.date):
        raise ValidationError(f'start date must be a date, got {start_date!r}')
    if start_date < employee.admission_date:
        raise ValidationError(f'vacation starting on {start_date} precedes admission on {employee.admission_date}')

    base_salary = employee.base_salary
    daily_salary = base_salary / 30

    if sell_one_third:
        sold_days = vacation_days // 3
    else:
        sold_days = 0
    taken_days = vacation_days - sold_days

    events = []

    vacation_pay = cents(daily_salary * taken_days)
    events.append(_item('Férias', f'{taken_days} dias', earning=vacation_pay))

    one_third = cents(vacation_pay / 3)
    events.append(_item('1/3 Constitucional de Férias', earning=one_third))

    if sold_days:
        sale = cents(daily_salary * sold_days)
        events.append(_item('Abono Pecuniário', f'{sold_days} dias', earning=sale))
        # The pair adds up to the rounded sale with its third
        events.append(_item('1/3 sobre Abono Pecuniário', earning=cents(daily_salary * sold_days * 4 / 3) - sale))

    if advance_thirteenth:
        year_start = datetime.date(start_date.year, 1, 1)
        months = months_worked(max(employee.admission_date, year_start), month_end(start_date))
        advance = cents(base_salary * months / 12 / 2)
        if advance:
            events.append(_item('Adiantamento 1ª Parcela 13º Salário', f'{months}/12', earning=advance))

    gross = vacation_pay + one_third

    inss = withhold(gross, tables.inss)
    if inss.amount:
        events.append(_item('INSS sobre Férias', format_percent(inss.effective_rate), deduction=inss.amount))

    irrf = withhold(gross - inss.amount, tables.irrf, tables.irrf_dependent_deduction, employee.irrf_dependents)
    if irrf.amount:
        events.append(_item('IRRF sobre Férias', format_percent(irrf.rate), deduction=irrf.amount))

    logger.debug('vacation of %s: %u days from %s, gross %s', employee.name, vacation_days, start_date, gross)

    return CalculationResult.from_events(Kind.VACATION, events, company_id=employee.company_id)
