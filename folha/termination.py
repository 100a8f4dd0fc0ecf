#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#

"""Termination of employment (rescisão, TRCT).

Severance items by reason of termination:

    ==========================  =========  ===========  ==========
    item                        no cause   with cause   resignation
    ==========================  =========  ===========  ==========
    salary balance              yes        yes          yes
    indemnified notice          yes        no           no
    overdue vacation + 1/3      yes        yes          yes
    proportional vacation + 1/3 yes        no           yes
    proportional 13th           yes        no           yes
    40% FGTS penalty            yes        no           no
    ==========================  =========  ===========  ==========

On resignation the employee who does not work the notice period has it
deducted (CLT art. 487, § 2º), up to the net amount otherwise owed
(CLT art. 477, § 5º), so the net is never negative.

Indemnified notice is projected into the length of service for the purpose
of vacation and 13th twelfths (CLT art. 487, § 1º).  When the projection
crosses into the next year, the twelfths of that year are a separate line.

INSS and IRRF are computed separately over the salary balance and over the
13th salary.  Indemnified notice, vacation paid on termination and the FGTS
penalty are indemnification and bear neither.
"""


import datetime
import enum
import logging

from decimal import Decimal

from .brackets import withhold
from .common import ValidationError, ZERO, cents, format_brl, format_percent, money
from .dates import days_in_month, full_years, months_worked, vacation_months
from .events import CalculationResult, Employee, Kind, LineItem
from .tables import TaxTables, default_tables


__all__ = [
    'Reason',
    'Notice',
    'notice_days',
    'calculate',
]


logger = logging.getLogger('folha')


class Reason(enum.Enum):
    DISMISSAL_WITHOUT_CAUSE = 'dispensa_sem_justa_causa'
    DISMISSAL_WITH_CAUSE = 'dispensa_com_justa_causa'
    RESIGNATION = 'pedido_demissao'


class Notice(enum.Enum):
    INDEMNIFIED = 'indenizado'
    WORKED = 'trabalhado'


# Lei 12.506/2011
notice_base_days = 30
notice_days_per_year = 3
notice_max_days = 90


def notice_days(admission_date:datetime.date, termination_date:datetime.date) -> int:
    years = full_years(admission_date, termination_date)
    return min(notice_base_days + notice_days_per_year * years, notice_max_days)


def _item(description:str, reference:str='', earning:Decimal=ZERO, deduction:Decimal=ZERO) -> LineItem:
    return LineItem(Kind.TERMINATION, description, reference, earning, deduction)


def calculate(employee:Employee, termination_date:datetime.date, reason:Reason|str, notice:Notice|str, fgts_balance=ZERO, overdue_vacation_periods:int=0, tables:TaxTables|None=None) -> CalculationResult:
    if tables is None:
        tables = default_tables()

    try:
        reason = Reason(reason)
    except ValueError:
        raise ValidationError(f'invalid termination reason {reason!r}') from None
    try:
        notice = Notice(notice)
    except ValueError:
        raise ValidationError(f'invalid notice type {notice!r}') from None
    fgts_balance = money(fgts_balance, 'FGTS balance')
    if isinstance(overdue_vacation_periods, bool) or not isinstance(overdue_vacation_periods, int) or overdue_vacation_periods < 0:
        raise ValidationError(f'overdue vacation periods must be a non-negative integer, got {overdue_vacation_periods!r}')
    if not isinstance(termination_date, datetime.date):
        raise ValidationError(f'termination date must be a date, got {termination_date!r}')
    if termination_date < employee.admission_date:
        raise ValidationError(f'termination on {termination_date} precedes admission on {employee.admission_date}')

    base_salary = employee.base_salary
    daily_salary = base_salary / 30
    with_cause = reason is Reason.DISMISSAL_WITH_CAUSE

    events = []

    # Salary balance
    month_days = days_in_month(termination_date.year, termination_date.month)
    first_day = 1
    if (employee.admission_date.year, employee.admission_date.month) == (termination_date.year, termination_date.month):
        first_day = employee.admission_date.day
    worked_days = termination_date.day - first_day + 1
    salary_balance = cents(base_salary / month_days * worked_days)
    events.append(_item('Saldo de Salário', f'{worked_days} dias', earning=salary_balance))

    # Notice
    projected_date = termination_date
    if reason is Reason.DISMISSAL_WITHOUT_CAUSE and notice is Notice.INDEMNIFIED:
        days = notice_days(employee.admission_date, termination_date)
        events.append(_item('Aviso Prévio Indenizado', f'{days} dias', earning=cents(daily_salary * days)))
        projected_date = termination_date + datetime.timedelta(days=days)

    # Vacation
    if overdue_vacation_periods:
        overdue = cents(base_salary * overdue_vacation_periods)
        events.append(_item('Férias Vencidas', f'{overdue_vacation_periods} período(s)', earning=overdue))
        events.append(_item('1/3 sobre Férias Vencidas', earning=cents(overdue / 3)))

    if not with_cause:
        months = vacation_months(employee.admission_date, projected_date)
        if months:
            vacation = cents(base_salary * months / 12)
            events.append(_item('Férias Proporcionais', f'{months}/12', earning=vacation))
            events.append(_item('1/3 sobre Férias Proporcionais', earning=cents(vacation / 3)))

    # 13th salary, one line per calendar year the projected notice reaches
    thirteenth = ZERO
    if not with_cause:
        for year in range(termination_date.year, projected_date.year + 1):
            start = max(employee.admission_date, datetime.date(year, 1, 1))
            end = min(projected_date, datetime.date(year, 12, 31))
            months = months_worked(start, end)
            amount = cents(base_salary * months / 12)
            if amount:
                if year == termination_date.year:
                    description = '13º Salário Proporcional'
                else:
                    description = '13º Salário (Aviso Prévio Indenizado)'
                events.append(_item(description, f'{months}/12', earning=amount))
            thirteenth += amount

    # FGTS penalty
    if reason is Reason.DISMISSAL_WITHOUT_CAUSE and fgts_balance:
        penalty = cents(fgts_balance * tables.fgts_penalty_rate)
        events.append(_item(f'Multa de {format_percent(tables.fgts_penalty_rate, 0)} sobre FGTS', format_brl(fgts_balance), earning=penalty))

    # Deductions
    withholdings = []
    dependents = employee.irrf_dependents
    for label, gross in (('Saldo de Salário', salary_balance), ('13º Salário', thirteenth)):
        inss = withhold(gross, tables.inss)
        if inss.amount:
            withholdings.append(_item(f'INSS sobre {label}', format_percent(inss.effective_rate), deduction=inss.amount))
        irrf = withhold(gross - inss.amount, tables.irrf, tables.irrf_dependent_deduction, dependents)
        if irrf.amount:
            withholdings.append(_item(f'IRRF sobre {label}', format_percent(irrf.rate), deduction=irrf.amount))

    if reason is Reason.RESIGNATION and notice is Notice.INDEMNIFIED:
        # Offset limited to what is owed to the employee (CLT art. 477, § 5º)
        owed = sum((event.earning for event in events), ZERO) - sum((event.deduction for event in withholdings), ZERO)
        unserved = min(cents(daily_salary * notice_base_days), max(owed, ZERO))
        if unserved:
            events.append(_item('Aviso Prévio Não Cumprido', f'{notice_base_days} dias', deduction=unserved))

    events.extend(withholdings)

    logger.debug('termination of %s on %s: %s, notice %s', employee.name, termination_date, reason.value, notice.value)

    return CalculationResult.from_events(Kind.TERMINATION, events, company_id=employee.company_id)
