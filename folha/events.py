#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


import dataclasses
import datetime
import enum
import typing

from decimal import Decimal

from .common import ValidationError, ZERO, format_brl, money


__all__ = [
    'Kind',
    'LineItem',
    'CalculationResult',
    'Dependent',
    'Employee',
]


class Kind(enum.Enum):
    PAYROLL = 'Folha de Pagamento'
    PRO_LABORE = 'Pró-labore (RCI)'
    VACATION = 'Recibo de Férias'
    THIRTEENTH = '13º Salário'
    TERMINATION = 'Termo de Rescisão (TRCT)'


@dataclasses.dataclass(frozen=True)
class LineItem:
    kind: Kind
    description: str
    reference: str = ''
    earning: Decimal = ZERO
    deduction: Decimal = ZERO

    def __post_init__(self):
        assert self.earning >= ZERO and self.deduction >= ZERO
        assert not (self.earning and self.deduction)


@dataclasses.dataclass(frozen=True)
class CalculationResult:
    kind: Kind
    events: tuple[LineItem, ...]
    total_earnings: Decimal
    total_deductions: Decimal
    net_amount: Decimal
    company_id: str|None = None

    def __post_init__(self):
        assert all(event.kind is self.kind for event in self.events)
        assert self.net_amount == self.total_earnings - self.total_deductions

    @staticmethod
    def totals(events:typing.Sequence[LineItem]) -> dict[str, Decimal]:
        total_earnings = sum((event.earning for event in events), ZERO)
        total_deductions = sum((event.deduction for event in events), ZERO)
        return {
            'total_earnings': total_earnings,
            'total_deductions': total_deductions,
            'net_amount': total_earnings - total_deductions,
        }

    @classmethod
    def from_events(cls, kind:Kind, events:typing.Sequence[LineItem], company_id:str|None=None, **kwargs):
        return cls(kind, tuple(events), company_id=company_id, **cls.totals(events), **kwargs)

    def rows(self) -> list[tuple]:
        rows = []
        for event in self.events:
            rows.append((
                event.description,
                event.reference,
                format_brl(event.earning) if event.earning else '',
                format_brl(event.deduction) if event.deduction else '',
            ))
        return rows

    def write(self, report, title:str|None=None, subtitle:str|None=None) -> None:
        if title is None:
            title = self.kind.value

        report.start(title)

        report.write_heading(title)
        if subtitle:
            report.write_paragraph(subtitle)

        if self.events:
            header = ('Descrição', 'Referência', 'Proventos', 'Descontos')
            footer = ('Totais', '', format_brl(self.total_earnings), format_brl(self.total_deductions))
            report.write_table(self.rows(), header=header, footer=footer, just='lcrr')
        else:
            report.write_paragraph('Nenhum evento.')

        report.write_paragraph(f'Valor líquido: {format_brl(self.net_amount, symbol=True)}')

        self.write_details(report)

        report.end()

    def write_details(self, report) -> None:
        pass


@dataclasses.dataclass(frozen=True)
class Dependent:
    name: str
    irrf: bool = True
    family_allowance: bool = False


@dataclasses.dataclass(frozen=True)
class Employee:
    name: str
    base_salary: Decimal
    admission_date: datetime.date
    dependents: tuple[Dependent, ...] = ()
    company_id: str|None = None

    def __post_init__(self):
        # Validate eagerly so that calculators never see a bad record
        object.__setattr__(self, 'base_salary', money(self.base_salary, 'base salary'))
        if not isinstance(self.admission_date, datetime.date):
            raise ValidationError(f'admission date must be a date, got {self.admission_date!r}')
        object.__setattr__(self, 'dependents', tuple(self.dependents))

    @property
    def irrf_dependents(self) -> int:
        return sum(1 for dependent in self.dependents if dependent.irrf)

    @property
    def family_allowance_dependents(self) -> int:
        return sum(1 for dependent in self.dependents if dependent.family_allowance)

    @classmethod
    def with_dependents(cls, name:str, base_salary, admission_date:datetime.date, irrf:int=0, family_allowance:int=0, company_id:str|None=None) -> 'Employee':
        """Build an employee from dependent counts rather than a list of named dependents."""
        for label, count in (('IRRF dependents', irrf), ('family allowance dependents', family_allowance)):
            if isinstance(count, bool) or not isinstance(count, int) or count < 0:
                raise ValidationError(f'{label} must be a non-negative integer, got {count!r}')
        dependents = []
        for i in range(max(irrf, family_allowance)):
            dependents.append(Dependent(f'Dependente {i + 1}', irrf=i < irrf, family_allowance=i < family_allowance))
        return cls(name, base_salary, admission_date, tuple(dependents), company_id)
