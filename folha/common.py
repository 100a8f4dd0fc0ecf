#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


import re

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP


__all__ = [
    'ValidationError',
    'ConfigurationError',
    'money',
    'cents',
    'parse_brl',
    'format_brl',
    'format_percent',
]


class ValidationError(ValueError):
    """Invalid calculation input."""


class ConfigurationError(ValueError):
    """Invalid or inconsistent tax table."""


ZERO = Decimal(0)
CENT = Decimal('0.01')


def money(value, name:str='value', negative:bool=False) -> Decimal:
    """Coerce a monetary input to Decimal, rejecting non-numeric and negative values."""

    # bool is an int subclass, but True is never a sensible amount
    if isinstance(value, bool):
        raise ValidationError(f'{name}: {value!r} is not a number')
    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, int):
        d = Decimal(value)
    elif isinstance(value, float):
        d = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            d = Decimal(value.strip())
        except InvalidOperation:
            raise ValidationError(f'{name}: {value!r} is not a number') from None
    else:
        raise ValidationError(f'{name}: {value!r} is not a number')

    if not d.is_finite():
        raise ValidationError(f'{name}: {value!r} is not a finite number')
    if d < ZERO and not negative:
        raise ValidationError(f'{name} must not be negative, got {value}')

    return d


def cents(d:Decimal) -> Decimal:
    assert isinstance(d, Decimal)
    return d.quantize(CENT, rounding=ROUND_HALF_UP)


def parse_brl(text:str) -> Decimal:
    """Parse amounts written either as 1234.56 or in Brazilian notation (R$ 1.234,56)."""

    if text is None:
        raise ValidationError('empty amount')
    raw = text.strip().replace('R$', '')
    raw = re.sub(r'\s+', '', raw)
    if ',' in raw:
        raw = raw.replace('.', '').replace(',', '.')
    return money(raw, name=repr(text))


def format_brl(d:Decimal, symbol:bool=False) -> str:
    d = cents(d)
    sign = '-' if d < ZERO else ''
    integer, fraction = f'{abs(d):.2f}'.split('.')
    integer = f'{int(integer):,}'.replace(',', '.')
    s = f'{sign}{integer},{fraction}'
    if symbol:
        s = 'R$ ' + s
    return s


def format_percent(rate:Decimal, places:int=2) -> str:
    percent = rate * 100
    return f'{percent:.{places}f}%'.replace('.', ',')
