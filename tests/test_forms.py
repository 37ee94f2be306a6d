# Tests for forms, determinants and blade coordinates

import itertools

import pytest
import torch

from core.alternating import AlternatingMap
from core.module import equal, is_zero
from functional.blades import blade_bits, blade_coefficients, form_from_blades, grade_mask
from functional.forms import coordinate_form, det, determinant, elementary_form, wedge


@pytest.fixture
def gen():
    return torch.Generator().manual_seed(5)


def _vectors(gen, count, dim=3):
    return tuple(torch.randint(-6, 7, (dim,), generator=gen) for _ in range(count))


class TestDeterminant:
    @pytest.mark.parametrize("n", [1, 2, 3, 4])
    def test_matches_torch(self, gen, n):
        matrix = torch.randint(-6, 7, (n, n), generator=gen)
        expected = torch.linalg.det(matrix.double()).round().long()
        assert equal(det(matrix), expected)

    def test_identity(self):
        assert det(torch.eye(3, dtype=torch.int64)).item() == 1

    def test_not_square(self):
        with pytest.raises(ValueError):
            det(torch.zeros(2, 3, dtype=torch.int64))

    def test_wedge_of_coordinates(self, gen):
        frame = _vectors(gen, 3)
        full = wedge(coordinate_form(0), coordinate_form(1), coordinate_form(2))
        assert equal(full(frame), determinant(3)(frame))


class TestWedge:
    def test_minors(self, gen):
        x, y = _vectors(gen, 2)
        for i, j in itertools.combinations(range(3), 2):
            assert equal(elementary_form([i, j])((x, y)), x[i] * y[j] - x[j] * y[i])

    def test_anticommutes(self, gen):
        x, y = _vectors(gen, 2)
        dx0, dx1 = coordinate_form(0), coordinate_form(1)
        assert equal(wedge(dx0, dx1)((x, y)), -wedge(dx1, dx0)((x, y)))

    def test_square_of_one_form_vanishes(self, gen):
        dx1 = coordinate_form(1)
        assert is_zero(wedge(dx1, dx1)(_vectors(gen, 2)))

    def test_flattened_index(self):
        f = wedge(coordinate_form(0), coordinate_form(2), coordinate_form(1))
        assert f.index.labels == (0, 1, 2)

    def test_empty(self):
        with pytest.raises(ValueError):
            wedge()
        with pytest.raises(ValueError):
            elementary_form([])


class TestBlades:
    def test_bits(self):
        assert blade_bits(0b101, 3) == [0, 2]
        assert blade_bits(0, 3) == []

    def test_grade_mask(self):
        mask = grade_mask(3, 2)
        assert mask.shape == (8,)
        assert mask.nonzero().squeeze(-1).tolist() == [3, 5, 6]

    def test_elementary_coefficients(self):
        coeffs = blade_coefficients(elementary_form([0, 1]), 3)
        expected = torch.zeros(8, dtype=torch.int64)
        expected[3] = 1
        assert torch.equal(coeffs, expected)

    def test_round_trip(self):
        coeffs = torch.tensor([0, 0, 0, 2, 0, -1, 3, 0])
        f = form_from_blades(coeffs, 3, 2)
        assert isinstance(f, AlternatingMap)
        assert torch.equal(blade_coefficients(f, 3), coeffs)

    def test_round_trip_fractional(self):
        coeffs = torch.tensor([0, 0, 0, 0.5, 0, -1.5, 3.0, 0], dtype=torch.float64)
        f = form_from_blades(coeffs, 3, 2)
        assert torch.equal(blade_coefficients(f, 3), coeffs)

    def test_lossy_dtype_rejected(self):
        coeffs = torch.tensor([0, 0, 0, 0.5, 0, 0, 0, 0], dtype=torch.float64)
        f = form_from_blades(coeffs, 3, 2)
        with pytest.raises(ValueError):
            blade_coefficients(f, 3, dtype=torch.int64)

    def test_explicit_dtype(self):
        coeffs = blade_coefficients(elementary_form([1, 2]), 3, dtype=torch.float64)
        assert coeffs.dtype == torch.float64
        assert coeffs[6].item() == 1.0

    def test_grade_above_dimension(self):
        assert not blade_coefficients(determinant(4), 3).any()

    def test_bad_inputs(self):
        with pytest.raises(ValueError):
            form_from_blades(torch.zeros(4, dtype=torch.int64), 3, 1)
        with pytest.raises(ValueError):
            form_from_blades(torch.zeros(8, dtype=torch.int64), 3, 0)
