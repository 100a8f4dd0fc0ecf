#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#

"""Monthly payslip (folha de pagamento) and partner pro-labore (RCI).

A payslip is a list of entries, each referring to a rubric of the catalog.
Rubrics flag whether they make up the INSS, FGTS and IRRF bases.  Some
rubrics are computed automatically from the employee record and the other
entries (e.g. overtime from a number of hours, family allowance from the
INSS base); the others take the amount as given.
"""


import dataclasses
import enum
import logging
import typing

from decimal import Decimal

from .brackets import withhold
from .common import ValidationError, ZERO, cents, format_brl, format_percent, money
from .events import CalculationResult, Employee, Kind, LineItem
from .tables import TaxTables, default_tables


__all__ = [
    'Nature',
    'Rubric',
    'Entry',
    'RUBRICS',
    'rubric',
    'automatic_entry',
    'PayrollResult',
    'calculate',
    'calculate_pro_labore',
]


logger = logging.getLogger('folha')


class Nature(enum.Enum):
    EARNING = 'provento'
    DEDUCTION = 'desconto'


@dataclasses.dataclass(frozen=True)
class Rubric:
    code: str
    description: str
    nature: Nature
    inss: bool = False
    fgts: bool = False
    irrf: bool = False
    automatic: bool = False


_E = Nature.EARNING
_D = Nature.DEDUCTION

RUBRICS = {r.code: r for r in [
    Rubric('0001', 'Salário Base',                 _E, inss=True, fgts=True, irrf=True, automatic=True),
    Rubric('0002', 'Horas Extras 50%',             _E, inss=True, fgts=True, irrf=True, automatic=True),
    Rubric('0003', 'Adicional Noturno',            _E, inss=True, fgts=True, irrf=True, automatic=True),
    Rubric('0004', 'Vale-Transporte',              _D, automatic=True),
    Rubric('0005', 'Salário-Família',              _E, automatic=True),
    Rubric('0006', 'Adicional de Periculosidade',  _E, inss=True, fgts=True, irrf=True, automatic=True),
    Rubric('0007', 'Insalubridade Grau Mínimo',    _E, inss=True, fgts=True, irrf=True, automatic=True),
    Rubric('0008', 'Insalubridade Grau Médio',     _E, inss=True, fgts=True, irrf=True, automatic=True),
    Rubric('0009', 'Insalubridade Grau Máximo',    _E, inss=True, fgts=True, irrf=True, automatic=True),
    Rubric('0010', 'Faltas',                       _D, inss=True, fgts=True, irrf=True, automatic=True),
    Rubric('0011', 'Comissões',                    _E, inss=True, fgts=True, irrf=True),
    Rubric('0012', 'Adiantamento Salarial',        _D),
    Rubric('0100', 'Pró-labore',                   _E, inss=True, irrf=True, automatic=True),
    Rubric('0901', 'INSS sobre Salário',           _D),
    Rubric('0902', 'IRRF sobre Salário',           _D),
]}

del _E, _D


def rubric(code:str) -> Rubric:
    try:
        return RUBRICS[code]
    except KeyError:
        raise ValidationError(f'unknown rubric {code!r}') from None


@dataclasses.dataclass(frozen=True)
class Entry:
    rubric: Rubric
    amount: Decimal|None = None       # None for automatic rubrics
    quantity: Decimal|None = None     # hours, days, etc.
    reference: str = ''

    def __post_init__(self):
        if self.amount is not None:
            object.__setattr__(self, 'amount', money(self.amount, self.rubric.description))
        if self.quantity is not None:
            object.__setattr__(self, 'quantity', money(self.quantity, self.rubric.description))

    @property
    def earning(self) -> Decimal:
        assert self.amount is not None
        return self.amount if self.rubric.nature is Nature.EARNING else ZERO

    @property
    def deduction(self) -> Decimal:
        assert self.amount is not None
        return self.amount if self.rubric.nature is Nature.DEDUCTION else ZERO

    def line_item(self, kind:Kind) -> LineItem:
        return LineItem(kind, self.rubric.description, self.reference, self.earning, self.deduction)


# CLT art. 58: 44 hours a week, 220 a month
monthly_hours = 220

overtime_premium = Decimal('1.5')     # CF art. 7º, XVI
night_shift_premium = Decimal('0.2')  # CLT art. 73
hazard_rate = Decimal('0.30')         # CLT art. 193, § 1º
transport_voucher_rate = Decimal('0.06')  # Lei 7.418/85, art. 4º

# CLT art. 192, over the minimum wage
unhealthy_rates = {
    '0007': Decimal('0.10'),
    '0008': Decimal('0.20'),
    '0009': Decimal('0.40'),
}


def _base(entries:typing.Iterable[Entry], flag:str) -> Decimal:
    """Earnings less deductions of the rubrics that make up a tax base."""
    total = ZERO
    for entry in entries:
        if getattr(entry.rubric, flag):
            total += entry.earning - entry.deduction
    return max(total, ZERO)


def _quantity(entry:Entry) -> Decimal:
    if entry.quantity is None:
        raise ValidationError(f'{entry.rubric.description}: a quantity is required')
    return entry.quantity


def automatic_entry(entry:Entry, employee:Employee, entries:typing.Sequence[Entry], tables:TaxTables) -> Entry:
    """Fill in the amount of an automatic rubric.

    The entries are the ones already resolved, and are needed by rubrics that
    depend on other amounts, like the family allowance.
    """

    code = entry.rubric.code
    base_salary = employee.base_salary
    hourly_rate = base_salary / monthly_hours

    if code in ('0001', '0100'):
        amount = base_salary
        reference = '30 dias'
    elif code == '0002':
        hours = _quantity(entry)
        amount = hourly_rate * overtime_premium * hours
        reference = f'{hours}h'
    elif code == '0003':
        hours = _quantity(entry)
        amount = hourly_rate * night_shift_premium * hours
        reference = f'{hours}h'
    elif code == '0004':
        amount = base_salary * transport_voucher_rate
        reference = format_percent(transport_voucher_rate, 0)
    elif code == '0005':
        dependents = employee.family_allowance_dependents
        if _base(entries, 'inss') <= tables.family_allowance_limit:
            amount = tables.family_allowance_quota * dependents
        else:
            amount = ZERO
        reference = f'{dependents} dep.'
    elif code == '0006':
        amount = base_salary * hazard_rate
        reference = format_percent(hazard_rate, 0)
    elif code in unhealthy_rates:
        rate = unhealthy_rates[code]
        amount = tables.minimum_wage * rate
        reference = format_percent(rate, 0)
    elif code == '0010':
        days = _quantity(entry)
        amount = base_salary / 30 * days
        reference = f'{days} dias'
    else:
        raise ValidationError(f'{entry.rubric.description} is not an automatic rubric')

    return dataclasses.replace(entry, amount=cents(amount), reference=entry.reference or reference)


def _resolve(employee:Employee, entries:typing.Iterable[Entry], tables:TaxTables) -> list[Entry]:
    entries = list(entries)
    for entry in entries:
        if not isinstance(entry, Entry):
            raise ValidationError(f'{entry!r} is not a payroll entry')
        if entry.rubric.code in ('0901', '0902'):
            raise ValidationError(f'{entry.rubric.description} is computed, not entered')

    # Family allowance depends on everything else, so it goes last
    resolved = []
    deferred = []
    for entry in entries:
        if entry.amount is not None:
            resolved.append(entry)
        elif entry.rubric.code == '0005':
            deferred.append(entry)
        elif entry.rubric.automatic:
            resolved.append(automatic_entry(entry, employee, resolved, tables))
        else:
            raise ValidationError(f'{entry.rubric.description}: an amount is required')
    for entry in deferred:
        resolved.append(automatic_entry(entry, employee, resolved, tables))

    return [entry for entry in resolved if entry.amount]


@dataclasses.dataclass(frozen=True)
class PayrollResult(CalculationResult):
    base_inss: Decimal = ZERO
    base_irrf: Decimal = ZERO
    base_fgts: Decimal = ZERO
    inss: Decimal = ZERO
    irrf: Decimal = ZERO
    fgts: Decimal = ZERO   # employer deposit, not deducted from the employee

    def write_details(self, report) -> None:
        rows = [
            ('Base INSS', format_brl(self.base_inss)),
            ('Base IRRF', format_brl(self.base_irrf)),
            ('Base FGTS', format_brl(self.base_fgts)),
            ('FGTS do mês', format_brl(self.fgts)),
        ]
        report.write_table(rows, just='lr')


def _payslip(kind:Kind, employee:Employee, entries:list[Entry], tables:TaxTables, inss_amount:Decimal, inss_reference:str, dependents:int, fgts_rate:Decimal) -> PayrollResult:
    base_inss = _base(entries, 'inss')
    base_irrf = _base(entries, 'irrf')
    base_fgts = _base(entries, 'fgts')

    events = [entry.line_item(kind) for entry in entries]

    if inss_amount:
        events.append(LineItem(kind, RUBRICS['0901'].description, inss_reference, deduction=inss_amount))

    irrf = withhold(max(base_irrf - inss_amount, ZERO), tables.irrf, tables.irrf_dependent_deduction, dependents)
    if irrf.amount:
        events.append(LineItem(kind, RUBRICS['0902'].description, format_percent(irrf.rate), deduction=irrf.amount))

    fgts = cents(base_fgts * fgts_rate)

    logger.debug('%s of %s: INSS base %s, IRRF base %s, FGTS base %s', kind.value, employee.name, base_inss, base_irrf, base_fgts)

    return PayrollResult.from_events(
        kind, events,
        company_id=employee.company_id,
        base_inss=base_inss,
        base_irrf=base_irrf,
        base_fgts=base_fgts,
        inss=inss_amount,
        irrf=irrf.amount,
        fgts=fgts,
    )


def calculate(employee:Employee, entries:typing.Iterable[Entry]|None=None, tables:TaxTables|None=None) -> PayrollResult:
    """Monthly payslip of an employee.

    Without entries, the payslip has just the base salary.
    """

    if tables is None:
        tables = default_tables()
    if entries is None:
        entries = [Entry(RUBRICS['0001'])]

    entries = _resolve(employee, entries, tables)

    inss = withhold(_base(entries, 'inss'), tables.inss)

    return _payslip(
        Kind.PAYROLL, employee, entries, tables,
        inss_amount=inss.amount,
        inss_reference=format_percent(inss.effective_rate),
        dependents=employee.irrf_dependents,
        fgts_rate=tables.fgts_rate,
    )


def calculate_pro_labore(partner:Employee, entries:typing.Iterable[Entry]|None=None, tables:TaxTables|None=None) -> PayrollResult:
    """Pro-labore of a partner (RCI).

    Partners contribute a flat 11% up to the contribution ceiling (Lei
    8.212/91, art. 21), have no FGTS, and no dependents are deducted.
    """

    if tables is None:
        tables = default_tables()
    if entries is None:
        entries = [Entry(RUBRICS['0100'])]

    entries = _resolve(partner, entries, tables)
    for entry in entries:
        if entry.rubric.code == '0005':
            raise ValidationError('partners are not entitled to family allowance')

    base_inss = min(_base(entries, 'inss'), tables.inss_ceiling)
    inss_amount = cents(base_inss * tables.pro_labore_inss_rate)

    return _payslip(
        Kind.PRO_LABORE, partner, entries, tables,
        inss_amount=inss_amount,
        inss_reference=format_percent(tables.pro_labore_inss_rate),
        dependents=0,
        fgts_rate=ZERO,
    )
