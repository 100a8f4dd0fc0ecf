#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


from decimal import Decimal

import pytest

from contextlib import nullcontext

from folha import simples
from folha.brackets import Bracket
from folha.common import ValidationError


def test_annex_i():
    result = simples.calculate(90000, 1000000, 'I', company_id='acme')
    assert result.band == 4
    assert result.nominal_rate == Decimal('0.107')
    assert result.deduction == Decimal(22500)
    assert result.effective_rate == Decimal('0.0845')
    assert result.tax == Decimal('7605.00')
    assert result.company_id == 'acme'


@pytest.mark.parametrize("rpa,rbt12,annex,band,effective,tax", [
    (10000,       0, 'III', 1, '0.06',   '600.00'),
    (10000,  100000,   'I', 1, '0.04',   '400.00'),
    (50000, 1000000,   'V', 4, '0.1879', '9395.00'),
    (20000,  300000,  'II', 2, '0.0582', '1164.00'),
    (30000, 5000000,  'IV', 6, '0.1644', '4932.00'),
])
def test_effective_rate(rpa, rbt12, annex, band, effective, tax):
    result = simples.calculate(rpa, rbt12, annex)
    assert result.band == band
    assert result.effective_rate == Decimal(effective)
    assert result.tax == Decimal(tax)


def test_effective_rate_clamped():
    bracket = Bracket(Decimal(100), Decimal('0.01'), Decimal(10))
    assert simples.effective_rate(Decimal(50), bracket) == 0


@pytest.mark.parametrize("annex", simples.ANNEXES)
@pytest.mark.parametrize("rbt12", [0, 150000, 500000, 1000000, 2000000, 4000000])
def test_shares(annex, rbt12):
    result = simples.calculate(Decimal('123456.78'), rbt12, annex)
    assert sum(share.percent for share in result.shares) == 100
    assert float(sum(share.rate for share in result.shares)) == pytest.approx(float(result.effective_rate))
    total = sum(share.amount for share in result.shares)
    assert abs(total - result.tax) <= Decimal('0.01') * len(result.shares)


def test_distribution():
    shares = simples.distribution('III', 1000000)
    assert shares['ISS'] == Decimal('32.5')
    assert shares['CPP'] == Decimal('43.4')
    assert simples.distribution('III', 4800001) == simples.distribution('III', 4800000)


@pytest.mark.parametrize("annex,result", [
    ('I', 'I'),
    ('iii', 'III'),
    ('3', 'III'),
    (' 5 ', 'V'),
    ('Anexo IV', 'IV'),
    ('anexo-ii', 'II'),
    ('anexo_v', 'V'),
])
def test_parse_annex(annex, result):
    assert simples.parse_annex(annex) == result


@pytest.mark.parametrize("rpa,rbt12,annex,expectation", [
    (100, 1000, 'VI', pytest.raises(ValidationError)),
    (100, 1000, 3, pytest.raises(ValidationError)),
    (-100, 1000, 'I', pytest.raises(ValidationError)),
    (100, -1000, 'I', pytest.raises(ValidationError)),
    ('abc', 1000, 'I', pytest.raises(ValidationError)),
    (0, 0, 'I', nullcontext()),
    ('100.00', '1000.00', 'I', nullcontext()),
])
def test_invalid(rpa, rbt12, annex, expectation):
    with expectation:
        simples.calculate(rpa, rbt12, annex)
