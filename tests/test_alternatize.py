# Tests for alternatization

import logging
import math
import random
from fractions import Fraction

import pytest
import torch

from core import validation
from core.alternatize import alternatize, alternatization_terms, alternatization_vanishes
from core.errors import InvalidSwap, ShapeMismatch
from core.module import equal, is_zero, total
from core.multilinear import MultilinearMap
from functional.forms import determinant


@pytest.fixture
def gen():
    return torch.Generator().manual_seed(7)


def _vectors(gen, count, dim=3):
    return tuple(torch.randint(-4, 5, (dim,), generator=gen) for _ in range(count))


@pytest.fixture
def random_map(gen):
    coeffs = torch.randint(-3, 4, (3, 3, 3), generator=gen)
    return MultilinearMap.from_tensor(coeffs)


class TestScenarioA:
    """m(v0, v1) = v0[0] * v1[1] on pairs of vectors of Z^2."""

    @pytest.fixture
    def alt(self):
        return alternatize(MultilinearMap(2, lambda v0, v1: v0[0] * v1[1]))

    def test_standard_basis(self, alt):
        x = torch.tensor([1, 0])
        y = torch.tensor([0, 1])
        assert alt((x, y)).item() == 1

    def test_equal_arguments(self, alt):
        x = torch.tensor([3, -2])
        assert alt((x, x)).item() == 0

    def test_closed_form(self, alt, gen):
        for _ in range(10):
            x, y = _vectors(gen, 2, dim=2)
            expected = x[0] * y[1] - x[1] * y[0]
            assert alt((x, y)).item() == expected.item()

    def test_exact_over_rationals(self, alt):
        x = (Fraction(1, 3), Fraction(2, 5))
        y = (Fraction(-7, 2), Fraction(1, 9))
        assert alt((x, y)) == x[0] * y[1] - x[1] * y[0]


class TestAlternation:
    def test_vanishes_on_repeated_arguments(self, random_map, gen):
        alt = alternatize(random_map)
        for _ in range(5):
            u, v, _ = _vectors(gen, 3)
            for family in [(u, u, v), (u, v, u), (v, u, u)]:
                assert is_zero(alt(family))

    def test_pairing_cancels(self, random_map, gen):
        u, v = _vectors(gen, 2)
        assert is_zero(alternatization_vanishes(random_map, (u, v, u), 0, 2))
        assert is_zero(alternatization_vanishes(random_map, (v, u, u), 1, 2))

    def test_pairing_needs_distinct_indices(self, random_map, gen):
        u, v = _vectors(gen, 2)
        with pytest.raises(InvalidSwap):
            alternatization_vanishes(random_map, (u, v, u), 0, 0)

    def test_pairing_needs_equal_values(self, random_map):
        e = torch.eye(3, dtype=torch.int64)
        with pytest.raises(ShapeMismatch):
            alternatization_vanishes(random_map, (e[0], e[1], e[2]), 0, 1)

    def test_swap_law(self, random_map, gen):
        alt = alternatize(random_map)
        u, v, w = _vectors(gen, 3)
        assert equal(alt((v, u, w)), -alt((u, v, w)))
        assert equal(alt((w, v, u)), -alt((u, v, w)))


class TestScalingAndLinearity:
    def test_alternating_input_is_scaled_by_factorial(self, gen):
        det = determinant(3)
        values = _vectors(gen, 3)
        assert equal(alternatize(det)(values), math.factorial(3) * det(values))

    def test_scaling_for_alternatized_maps(self, random_map, gen):
        alt = alternatize(random_map)
        values = _vectors(gen, 3)
        assert equal(alternatize(alt)(values), 6 * alt(values))

    def test_additive(self, random_map, gen):
        other = MultilinearMap.from_tensor(torch.randint(-3, 4, (3, 3, 3), generator=gen))
        values = _vectors(gen, 3)
        lhs = alternatize(random_map + other)(values)
        rhs = alternatize(random_map)(values) + alternatize(other)(values)
        assert equal(lhs, rhs)

    def test_scalar_linear(self, random_map, gen):
        values = _vectors(gen, 3)
        assert equal(alternatize(5 * random_map)(values), 5 * alternatize(random_map)(values))

    def test_zero(self, gen):
        assert alternatize(MultilinearMap.zero(3))(_vectors(gen, 3)) == 0


class TestSummationOrder:
    def test_reordered_enumeration(self, random_map, gen):
        values = _vectors(gen, 3)
        expected = alternatize(random_map)(values)
        shuffle = lambda perms: random.Random(3).sample(perms, len(perms))
        assert equal(alternatize(random_map, order=lambda perms: perms[::-1])(values), expected)
        assert equal(alternatize(random_map, order=shuffle)(values), expected)

    def test_terms_sum_in_any_order(self, random_map, gen):
        values = _vectors(gen, 3)
        terms = [t for _, t in alternatization_terms(random_map, values)]
        assert len(terms) == 6
        assert equal(total(reversed(terms)), alternatize(random_map)(values))

    def test_order_must_cover_the_group(self, random_map):
        with pytest.raises(ShapeMismatch):
            alternatize(random_map, order=lambda perms: perms[1:])
        with pytest.raises(ShapeMismatch):
            alternatize(random_map, order=lambda perms: perms[:1] * len(perms))


class TestErrors:
    def test_shape_mismatch(self, random_map, gen):
        alt = alternatize(random_map)
        with pytest.raises(ShapeMismatch):
            alt(_vectors(gen, 2))

    def test_not_a_map(self):
        with pytest.raises(TypeError):
            alternatize(lambda x: x)

    def test_large_enumeration_warns(self, monkeypatch, caplog):
        monkeypatch.setattr(validation, "MAX_TERMS", 5)
        with caplog.at_level(logging.WARNING, logger="exterior"):
            alternatize(MultilinearMap.mk_pi_ring(3))
        assert any("grows factorially" in r.getMessage() for r in caplog.records)
