#!/usr/bin/env python3
#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#

"""Brazilian payroll calculator.

Prints vacation receipts, 13th salary, termination (TRCT), monthly payslips
and Simples Nacional DAS as text or HTML.
"""


import argparse
import datetime
import logging
import sys

from folha import ConfigurationError, Employee, ValidationError, default_tables, parse_brl
from folha import payroll, simples, summary, termination, thirteenth, vacation
from report import HtmlReport, Report, TextReport


logger = logging.getLogger('folhacalc')


def _date(s:str) -> datetime.date:
    try:
        return datetime.date.fromisoformat(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f'invalid date {s!r}, expected YYYY-MM-DD') from None


def _amount(s:str):
    try:
        return parse_brl(s)
    except ValidationError as ex:
        raise argparse.ArgumentTypeError(str(ex)) from None


def _employee(args) -> Employee:
    return Employee.with_dependents(
        args.name,
        args.salary,
        args.admission,
        irrf=args.dependents,
        family_allowance=args.family_dependents,
        company_id=args.company,
    )


def _vacation(args, tables):
    return vacation.calculate(
        _employee(args),
        args.start,
        args.days,
        sell_one_third=args.sell,
        advance_thirteenth=args.advance_13th,
        tables=tables,
    )


def _thirteenth(args, tables):
    return thirteenth.calculate(
        _employee(args),
        args.year,
        args.parcel,
        tables=tables,
        advance_paid=args.advance_paid,
    )


def _termination(args, tables):
    return termination.calculate(
        _employee(args),
        args.date,
        args.reason,
        args.notice,
        fgts_balance=args.fgts_balance,
        overdue_vacation_periods=args.overdue_periods,
        tables=tables,
    )


_unhealthy_rubrics = {
    'minimo': '0007',
    'medio': '0008',
    'maximo': '0009',
}


def _payroll(args, tables):
    employee = _employee(args)
    rubric = payroll.rubric

    if args.pro_labore:
        entries = [payroll.Entry(rubric('0100'))]
    else:
        entries = [payroll.Entry(rubric('0001'))]
    if args.overtime:
        entries.append(payroll.Entry(rubric('0002'), quantity=args.overtime))
    if args.night_hours:
        entries.append(payroll.Entry(rubric('0003'), quantity=args.night_hours))
    if args.hazard:
        entries.append(payroll.Entry(rubric('0006')))
    if args.unhealthy:
        entries.append(payroll.Entry(rubric(_unhealthy_rubrics[args.unhealthy])))
    if args.commission:
        entries.append(payroll.Entry(rubric('0011'), amount=args.commission))
    if args.absences:
        entries.append(payroll.Entry(rubric('0010'), quantity=args.absences))
    if args.transport_voucher:
        entries.append(payroll.Entry(rubric('0004')))
    if args.family_dependents and not args.pro_labore:
        entries.append(payroll.Entry(rubric('0005')))

    if args.pro_labore:
        return payroll.calculate_pro_labore(employee, entries, tables)
    else:
        return payroll.calculate(employee, entries, tables)


def _das(args, tables):
    return simples.calculate(args.rpa, args.rbt12, args.annex, company_id=args.company)


class _Summary:

    def __init__(self, df):
        self.df = df

    def write(self, report:Report) -> None:
        summary.write_summary(self.df, report)


def _summary(args, tables):
    with open(args.filename, 'rt', encoding='utf-8') as stream:
        employees = summary.read_employees(stream, company_id=args.company)
    return _Summary(summary.payroll_summary(employees, tables))


def main(argv=None):
    argparser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    argparser.add_argument('-v', '--verbose', action='count', default=0, help='increase verbosity')
    argparser.add_argument('--format', choices=['text', 'html'], default='text')
    argparser.add_argument('--tables', metavar='FILE', default=None, help='JSON file with the tax tables (default: $FOLHA_TABLES or the latest built-in tables)')
    argparser.add_argument('--company', metavar='ID', default=None, help='company identifier (summary: for rows without one)')

    employee_parser = argparse.ArgumentParser(add_help=False)
    employee_parser.add_argument('--name', default='Funcionário', help='employee name')
    employee_parser.add_argument('-s', '--salary', metavar='AMOUNT', type=_amount, required=True, help='base salary')
    employee_parser.add_argument('--admission', metavar='YYYY-MM-DD', type=_date, required=True, help='admission date')
    employee_parser.add_argument('-d', '--dependents', metavar='N', type=int, default=0, help='dependents for IRRF')
    employee_parser.add_argument('--family-dependents', metavar='N', type=int, default=0, help='dependents for family allowance')

    subparsers = argparser.add_subparsers(dest='command', required=True, metavar='COMMAND')

    parser = subparsers.add_parser('vacation', parents=[employee_parser], help='vacation receipt (férias)')
    parser.add_argument('--start', metavar='YYYY-MM-DD', type=_date, required=True, help='first day of vacation')
    parser.add_argument('--days', type=int, default=vacation.max_days, help='vacation days (%(default)s)')
    parser.add_argument('--sell', action='store_true', help='sell one third of the days (abono pecuniário)')
    parser.add_argument('--advance-13th', action='store_true', help='advance the first parcel of the 13th salary')
    parser.set_defaults(func=_vacation)

    parser = subparsers.add_parser('thirteenth', parents=[employee_parser], help='13th salary (décimo terceiro)')
    parser.add_argument('-y', '--year', type=int, default=datetime.date.today().year, help='reference year')
    parser.add_argument('--parcel', choices=[p.value for p in thirteenth.Parcel], default=thirteenth.Parcel.UNIQUE.value)
    parser.add_argument('--advance-paid', metavar='AMOUNT', type=_amount, default=None, help='first parcel actually paid (second parcel only)')
    parser.set_defaults(func=_thirteenth)

    parser = subparsers.add_parser('termination', parents=[employee_parser], help='termination (rescisão, TRCT)')
    parser.add_argument('--date', metavar='YYYY-MM-DD', type=_date, required=True, help='termination date')
    parser.add_argument('--reason', choices=[r.value for r in termination.Reason], default=termination.Reason.DISMISSAL_WITHOUT_CAUSE.value)
    parser.add_argument('--notice', choices=[n.value for n in termination.Notice], default=termination.Notice.INDEMNIFIED.value)
    parser.add_argument('--fgts-balance', metavar='AMOUNT', type=_amount, default=0, help='FGTS balance for the penalty')
    parser.add_argument('--overdue-periods', metavar='N', type=int, default=0, help='overdue vacation periods')
    parser.set_defaults(func=_termination)

    parser = subparsers.add_parser('payroll', parents=[employee_parser], help='monthly payslip (folha de pagamento)')
    parser.add_argument('--pro-labore', action='store_true', help='partner pro-labore (RCI) instead of an employee payslip')
    parser.add_argument('--overtime', metavar='HOURS', type=_amount, default=None, help='overtime hours at 50%%')
    parser.add_argument('--night-hours', metavar='HOURS', type=_amount, default=None, help='night shift hours')
    parser.add_argument('--hazard', action='store_true', help='hazard premium (periculosidade)')
    parser.add_argument('--unhealthy', choices=list(_unhealthy_rubrics), default=None, help='unhealthy work premium (insalubridade) grade')
    parser.add_argument('--commission', metavar='AMOUNT', type=_amount, default=None, help='commissions')
    parser.add_argument('--absences', metavar='DAYS', type=_amount, default=None, help='days of unjustified absence')
    parser.add_argument('--transport-voucher', action='store_true', help='deduct the transport voucher share')
    parser.set_defaults(func=_payroll)

    parser = subparsers.add_parser('das', help='Simples Nacional DAS')
    parser.add_argument('--annex', default='I', help='annex, I to V (%(default)s)')
    parser.add_argument('rpa', metavar='RPA', type=_amount, help='gross revenue of the month')
    parser.add_argument('rbt12', metavar='RBT12', type=_amount, help='gross revenue of the last 12 months')
    parser.set_defaults(func=_das)

    parser = subparsers.add_parser('summary', help='payroll summary of the employees in a CSV file')
    parser.add_argument('filename', metavar='FILENAME', help='CSV with name, base_salary, admission_date and optionally irrf_dependents, family_allowance_dependents, company_id')
    parser.set_defaults(func=_summary)

    args = argparser.parse_args(argv)

    logging.basicConfig(format='%(asctime)s %(name)s %(levelname)s %(message)s', level=logging.WARNING - 10*min(args.verbose, 2))

    try:
        tables = default_tables(args.tables)
        logger.info('using tax tables %s', tables.description)
        result = args.func(args, tables)
    except (ValidationError, ConfigurationError) as ex:
        argparser.error(str(ex))
    except OSError as ex:
        argparser.error(f'{ex.filename}: {ex.strerror}')

    stream = sys.stdout
    report: Report
    if args.format == 'text':
        report = TextReport(stream)
    else:
        assert args.format == 'html'
        report = HtmlReport(stream)
    result.write(report)


if __name__ == '__main__':
    main()
