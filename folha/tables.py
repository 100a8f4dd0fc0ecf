#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


import dataclasses
import json
import logging
import typing

from decimal import Decimal

import environ

from tax import br

from .brackets import BracketTable
from .common import ConfigurationError, money


__all__ = [
    'TaxTables',
    'tables_2024',
    'tables_2025',
    'default_tables',
]


logger = logging.getLogger('folha')


@dataclasses.dataclass(frozen=True)
class TaxTables:
    """A consistent set of payroll tables, as in force at some date."""

    description: str
    inss: BracketTable
    irrf: BracketTable
    irrf_dependent_deduction: Decimal
    family_allowance_limit: Decimal
    family_allowance_quota: Decimal
    minimum_wage: Decimal
    fgts_rate: Decimal = Decimal(str(br.fgts_rate))
    fgts_penalty_rate: Decimal = Decimal(str(br.fgts_penalty_rate))
    pro_labore_inss_rate: Decimal = Decimal(str(br.pro_labore_inss_rate))

    @property
    def inss_ceiling(self) -> Decimal:
        limit = self.inss.brackets[-1].limit
        assert limit is not None
        return limit

    @classmethod
    def from_dict(cls, obj:dict[str, typing.Any]) -> 'TaxTables':
        try:
            family_allowance_limit, family_allowance_quota = obj['family_allowance']
            kwargs = dict(
                description=str(obj.get('description', '')),
                inss=BracketTable.from_rows(obj['inss'], name='INSS', ceiling=True),
                irrf=BracketTable.from_rows(obj['irrf'], name='IRRF'),
                irrf_dependent_deduction=money(obj['irrf_dependent_deduction'], 'irrf_dependent_deduction'),
                family_allowance_limit=money(family_allowance_limit, 'family allowance limit'),
                family_allowance_quota=money(family_allowance_quota, 'family allowance quota'),
                minimum_wage=money(obj['minimum_wage'], 'minimum_wage'),
            )
            for key in ('fgts_rate', 'fgts_penalty_rate', 'pro_labore_inss_rate'):
                if key in obj:
                    kwargs[key] = money(obj[key], key)
        except KeyError as ex:
            raise ConfigurationError(f'missing {ex.args[0]!r} in tax tables') from None
        except (TypeError, ValueError) as ex:
            if isinstance(ex, ConfigurationError):
                raise
            raise ConfigurationError(f'invalid tax tables: {ex}') from None
        return cls(**kwargs)

    def to_dict(self) -> dict[str, typing.Any]:
        def num(d):
            return None if d is None else str(d)
        return {
            'description': self.description,
            'inss': [[num(limit), num(rate), num(deduction)] for limit, rate, deduction in self.inss.rows()],
            'irrf': [[num(limit), num(rate), num(deduction)] for limit, rate, deduction in self.irrf.rows()],
            'irrf_dependent_deduction': num(self.irrf_dependent_deduction),
            'family_allowance': [num(self.family_allowance_limit), num(self.family_allowance_quota)],
            'minimum_wage': num(self.minimum_wage),
            'fgts_rate': num(self.fgts_rate),
            'fgts_penalty_rate': num(self.fgts_penalty_rate),
            'pro_labore_inss_rate': num(self.pro_labore_inss_rate),
        }

    @classmethod
    def load(cls, stream:typing.TextIO) -> 'TaxTables':
        try:
            obj = json.load(stream)
        except json.JSONDecodeError as ex:
            raise ConfigurationError(f'invalid tax tables: {ex}') from None
        if not isinstance(obj, dict):
            raise ConfigurationError('tax tables must be a JSON object')
        return cls.from_dict(obj)

    def dump(self, stream:typing.TextIO) -> None:
        json.dump(self.to_dict(), stream, indent=2)
        stream.write('\n')


def _decimal(value) -> Decimal:
    return Decimal(str(value))


def _tables(description, inss_bands, irrf_bands, dependent_deduction, family_allowance, minimum_wage) -> TaxTables:
    limit, quota = family_allowance
    return TaxTables(
        description=description,
        inss=BracketTable.from_rows(inss_bands, name='INSS', ceiling=True),
        irrf=BracketTable.from_rows(irrf_bands, name='IRRF'),
        irrf_dependent_deduction=_decimal(dependent_deduction),
        family_allowance_limit=_decimal(limit),
        family_allowance_quota=_decimal(quota),
        minimum_wage=_decimal(minimum_wage),
    )


tables_2024 = _tables(
    '2024 (IRRF from February 2024)',
    br.inss_bands_2024,
    br.irrf_bands_2024,
    br.irrf_dependent_deduction_2024,
    br.family_allowance_2024,
    br.minimum_wage_2024,
)


tables_2025 = _tables(
    '2025 (IRRF from May 2025)',
    br.inss_bands_2025,
    br.irrf_bands_2025,
    br.irrf_dependent_deduction_2025,
    br.family_allowance_2025,
    br.minimum_wage_2025,
)


def default_tables(filename:str|None=None) -> TaxTables:
    """Tables from the given JSON file, or $FOLHA_TABLES, or the latest built-in ones."""

    if filename is None:
        filename = environ.tables_path
    if filename is None:
        return tables_2025
    logger.info('loading tax tables from %s', filename)
    try:
        with open(filename, 'rt', encoding='utf-8') as stream:
            return TaxTables.load(stream)
    except OSError as ex:
        raise ConfigurationError(f'{filename}: {ex.strerror}') from None
