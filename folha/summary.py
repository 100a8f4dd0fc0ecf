#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#

"""Payroll summary (resumo da folha) over a set of employees."""


import logging
import typing

import pandas as pd

from . import payroll
from .common import ValidationError, ZERO, format_brl, parse_brl
from .events import Employee
from .tables import TaxTables, default_tables


__all__ = [
    'read_employees',
    'payroll_summary',
    'write_summary',
]


logger = logging.getLogger('folha')


# CSV columns; the dependent counts and company are optional
required_columns = ['name', 'base_salary', 'admission_date']
optional_columns = ['irrf_dependents', 'family_allowance_dependents', 'company_id']

money_columns = ['earnings', 'deductions', 'net', 'base_inss', 'inss', 'base_irrf', 'irrf', 'base_fgts', 'fgts']

total_label = 'TOTAL'


def read_employees(stream:typing.TextIO, company_id:str|None=None) -> list[Employee]:
    """Employees from CSV; rows without a company_id get the given one."""

    df = pd.read_csv(stream, header=0, dtype=str, keep_default_na=False, skipinitialspace=True)

    missing = [column for column in required_columns if column not in df.columns]
    if missing:
        raise ValidationError(f'missing column(s) {", ".join(missing)}')

    for column in optional_columns:
        if column not in df.columns:
            df[column] = ''

    try:
        dates = pd.to_datetime(df['admission_date'], format='%Y-%m-%d')
    except ValueError as ex:
        raise ValidationError(f'invalid admission date: {ex}') from None
    if dates.isna().any():
        raise ValidationError('missing admission date')
    df['admission_date'] = dates.dt.date

    employees = []
    for row in df.itertuples(index=False):
        counts = {}
        for column in ('irrf_dependents', 'family_allowance_dependents'):
            value = getattr(row, column) or '0'
            try:
                counts[column] = int(value)
            except ValueError:
                raise ValidationError(f'{row.name}: invalid {column} {value!r}') from None
        employees.append(Employee.with_dependents(
            row.name,
            parse_brl(row.base_salary),
            row.admission_date,
            irrf=counts['irrf_dependents'],
            family_allowance=counts['family_allowance_dependents'],
            company_id=row.company_id or company_id,
        ))

    logger.info('read %u employees', len(employees))

    return employees


def payroll_summary(employees:typing.Iterable[Employee], tables:TaxTables|None=None) -> pd.DataFrame:
    """Run the monthly payslip of every employee, one row each plus a totals row."""

    if tables is None:
        tables = default_tables()

    data = []
    for employee in employees:
        entries = [payroll.Entry(payroll.RUBRICS['0001'])]
        if employee.family_allowance_dependents:
            entries.append(payroll.Entry(payroll.RUBRICS['0005']))
        result = payroll.calculate(employee, entries, tables)
        data.append({
            'name': employee.name,
            'earnings': result.total_earnings,
            'deductions': result.total_deductions,
            'net': result.net_amount,
            'base_inss': result.base_inss,
            'inss': result.inss,
            'base_irrf': result.base_irrf,
            'irrf': result.irrf,
            'base_fgts': result.base_fgts,
            'fgts': result.fgts,
        })

    df = pd.DataFrame(data, columns=['name'] + money_columns)

    totals: dict[str, typing.Any] = {'name': total_label}
    for column in money_columns:
        totals[column] = sum(df[column], ZERO)
    df = pd.concat([df, pd.DataFrame([totals])], ignore_index=True)

    return df


_headers = {
    'name': 'Funcionário',
    'earnings': 'Proventos',
    'deductions': 'Descontos',
    'net': 'Líquido',
    'base_inss': 'Base INSS',
    'inss': 'INSS',
    'base_irrf': 'Base IRRF',
    'irrf': 'IRRF',
    'base_fgts': 'Base FGTS',
    'fgts': 'FGTS',
}


def write_summary(df:pd.DataFrame, report, title:str='Resumo da Folha') -> None:
    columns = ['name'] + money_columns
    header = [_headers[column] for column in columns]

    body = df[df['name'] != total_label]
    rows = [[row['name']] + [format_brl(row[column]) for column in money_columns] for _, row in body.iterrows()]

    footer = None
    totals = df[df['name'] == total_label]
    if len(totals):
        total = totals.iloc[-1]
        footer = ['Totais'] + [format_brl(total[column]) for column in money_columns]

    report.start(title)
    report.write_heading(title)
    if rows:
        report.write_table(rows, header=header, footer=footer, just='l' + 'r'*len(money_columns))
    else:
        report.write_paragraph('Nenhum funcionário.')
    report.end()
