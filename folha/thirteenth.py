#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#

"""13th salary (gratificação natalina, Lei 4.090/62 and Lei 4.749/65)."""


import datetime
import enum
import logging

from decimal import Decimal

from .brackets import withhold
from .common import ValidationError, ZERO, cents, format_percent, money
from .dates import months_worked
from .events import CalculationResult, Employee, Kind, LineItem
from .tables import TaxTables, default_tables


__all__ = [
    'Parcel',
    'gross_amount',
    'calculate',
]


logger = logging.getLogger('folha')


class Parcel(enum.Enum):
    FIRST = 'first'     # by 30 November, or with vacation
    SECOND = 'second'   # by 20 December
    UNIQUE = 'unique'   # whole amount at once, e.g. on termination


_parcel_labels = {
    Parcel.FIRST: '13º Salário - 1ª Parcela',
    Parcel.SECOND: '13º Salário - 2ª Parcela',
    Parcel.UNIQUE: '13º Salário - Parcela Única',
}


def _item(description:str, reference:str='', earning:Decimal=ZERO, deduction:Decimal=ZERO) -> LineItem:
    return LineItem(Kind.THIRTEENTH, description, reference, earning, deduction)


def gross_amount(base_salary:Decimal, months:int) -> Decimal:
    assert 0 <= months <= 12
    return cents(base_salary * months / 12)


def calculate(employee:Employee, year:int, parcel:Parcel|str, tables:TaxTables|None=None, advance_paid=None) -> CalculationResult:
    """13th salary for the given reference year.

    For the second parcel the full gross is an earning and the first parcel
    already paid (half the gross, unless given in advance_paid) is shown as a
    deduction, so that the net is what is actually due in December.  INSS and
    IRRF are due on the full gross.
    """

    if tables is None:
        tables = default_tables()

    try:
        parcel = Parcel(parcel)
    except ValueError:
        raise ValidationError(f'invalid parcel {parcel!r}') from None
    if isinstance(year, bool) or not isinstance(year, int):
        raise ValidationError(f'year must be an integer, got {year!r}')
    if advance_paid is not None:
        if parcel is not Parcel.SECOND:
            raise ValidationError('advance paid only applies to the second parcel')
        advance_paid = money(advance_paid, 'advance paid')

    year_start = datetime.date(year, 1, 1)
    year_end = datetime.date(year, 12, 31)
    if employee.admission_date > year_end:
        raise ValidationError(f'{employee.name} was admitted on {employee.admission_date}, after {year}')

    months = months_worked(max(employee.admission_date, year_start), year_end)
    gross = gross_amount(employee.base_salary, months)
    reference = f'{months}/12'

    events = []

    if parcel is Parcel.FIRST:
        events.append(_item(_parcel_labels[parcel], reference, earning=cents(gross / 2)))
        return CalculationResult.from_events(Kind.THIRTEENTH, events, company_id=employee.company_id)

    events.append(_item(_parcel_labels[parcel], reference, earning=gross))

    if parcel is Parcel.SECOND:
        if advance_paid is None:
            advance_paid = cents(gross / 2)
        if advance_paid > gross:
            raise ValidationError(f'advance paid {advance_paid} exceeds the gross 13th salary {gross}')
        if advance_paid:
            events.append(_item('Adiantamento 13º Salário (Pago na 1ª Parcela)', deduction=advance_paid))

    inss = withhold(gross, tables.inss)
    if inss.amount:
        events.append(_item('INSS sobre 13º Salário', format_percent(inss.effective_rate), deduction=inss.amount))

    irrf = withhold(gross - inss.amount, tables.irrf, tables.irrf_dependent_deduction, employee.irrf_dependents)
    if irrf.amount:
        events.append(_item('IRRF sobre 13º Salário', format_percent(irrf.rate), deduction=irrf.amount))

    logger.debug('13th salary of %s for %u: %u months, gross %s', employee.name, year, months, gross)

    return CalculationResult.from_events(Kind.THIRTEENTH, events, company_id=employee.company_id)
