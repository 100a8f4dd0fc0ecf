#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#

"""Progressive bracket tables and withholding.

Brazilian INSS and IRRF tables are published as bands of (upper limit, rate,
amount to deduct), so that the tax due is simply ``base * rate - deduction``
for the band containing the base.
"""


import dataclasses
import logging
import typing

from decimal import Decimal

from .common import ConfigurationError, ValidationError, ZERO, cents, money


__all__ = [
    'Bracket',
    'BracketTable',
    'Withholding',
    'lookup_bracket',
    'withhold',
]


logger = logging.getLogger('folha')


@dataclasses.dataclass(frozen=True)
class Bracket:
    limit: Decimal|None   # None means unbounded
    rate: Decimal
    deduction: Decimal = ZERO

    def contains(self, amount:Decimal) -> bool:
        return self.limit is None or amount <= self.limit


@dataclasses.dataclass(frozen=True)
class BracketTable:
    brackets: tuple[Bracket, ...]
    name: str = ''

    # Cap the taxable base at the last limit (INSS contribution ceiling)
    ceiling: bool = False

    def __post_init__(self):
        if not self.brackets:
            raise ConfigurationError(f'{self.name or "bracket table"}: no brackets')
        prev_limit = None
        for i, bracket in enumerate(self.brackets):
            if not isinstance(bracket, Bracket):
                raise ConfigurationError(f'{self.name}: bracket {i} is not a Bracket')
            if bracket.rate < ZERO:
                raise ConfigurationError(f'{self.name}: bracket {i} has negative rate {bracket.rate}')
            if bracket.limit is None:
                if i + 1 != len(self.brackets):
                    raise ConfigurationError(f'{self.name}: only the last bracket may be unbounded')
            else:
                if prev_limit is not None and bracket.limit <= prev_limit:
                    raise ConfigurationError(f'{self.name}: limits must be strictly increasing ({prev_limit} >= {bracket.limit})')
                prev_limit = bracket.limit
        if self.ceiling and self.brackets[-1].limit is None:
            raise ConfigurationError(f'{self.name}: a table with a ceiling needs a bounded last bracket')

    @classmethod
    def from_rows(cls, rows:typing.Iterable[typing.Sequence], name:str='', ceiling:bool=False) -> 'BracketTable':
        """Build from (limit, rate, deduction) rows, as kept in tax/br.py."""
        brackets = []
        for row in rows:
            try:
                limit, rate, deduction = row
            except (TypeError, ValueError):
                raise ConfigurationError(f'{name}: malformed bracket {row!r}') from None
            try:
                brackets.append(Bracket(
                    limit=None if limit is None else money(limit, 'limit'),
                    rate=money(rate, 'rate'),
                    deduction=money(deduction, 'deduction'),
                ))
            except ValidationError as ex:
                raise ConfigurationError(f'{name}: {ex}') from None
        return cls(tuple(brackets), name=name, ceiling=ceiling)

    def rows(self) -> list[tuple]:
        return [(b.limit, b.rate, b.deduction) for b in self.brackets]

    def __len__(self) -> int:
        return len(self.brackets)

    def __iter__(self) -> typing.Iterator[Bracket]:
        return iter(self.brackets)

    def __getitem__(self, index:int) -> Bracket:
        return self.brackets[index]

    def lookup(self, amount:Decimal) -> Bracket:
        return lookup_bracket(self, amount)


def lookup_bracket(table:BracketTable, amount:Decimal) -> Bracket:
    for bracket in table.brackets:
        if bracket.contains(amount):
            return bracket
    return table.brackets[-1]


class Withholding(typing.NamedTuple):

    amount: Decimal
    rate: Decimal   # nominal rate of the bracket used
    base: Decimal   # taxable base after deductions and ceiling

    @property
    def effective_rate(self) -> Decimal:
        if self.base <= ZERO:
            return ZERO
        return self.amount / self.base


def withhold(gross, table:BracketTable, dependent_deduction=ZERO, dependents:int=0) -> Withholding:
    """Tax withheld on a gross amount.

    The taxable base is the gross amount less the per-dependent deduction,
    capped at the table ceiling if it has one.  Negative bases and negative
    taxes are clamped to zero.
    """

    gross = money(gross, 'gross')
    dependent_deduction = money(dependent_deduction, 'dependent deduction')
    if isinstance(dependents, bool) or not isinstance(dependents, int) or dependents < 0:
        raise ValidationError(f'dependents must be a non-negative integer, got {dependents!r}')

    base = gross - dependent_deduction * dependents
    if table.ceiling:
        ceiling = table.brackets[-1].limit
        assert ceiling is not None
        base = min(base, ceiling)

    if base <= ZERO:
        return Withholding(ZERO, ZERO, max(base, ZERO))

    bracket = lookup_bracket(table, base)
    amount = cents(max(base * bracket.rate - bracket.deduction, ZERO))

    logger.debug('%s: base=%s rate=%s deduction=%s amount=%s', table.name, base, bracket.rate, bracket.deduction, amount)

    return Withholding(amount, bracket.rate, base)
