# Tests for MultilinearMap constructors and pointwise operations

import pytest
import torch

from core.errors import IndexSetMismatch
from core.index import IndexSet
from core.module import equal
from core.multilinear import Coordinate, MultilinearMap


def _bilinear(c, x, y):
    return sum(c[i, j] * x[i] * y[j] for i in range(len(x)) for j in range(len(y)))


class TestConstructors:
    def test_from_tensor(self):
        c = torch.tensor([[1, -2], [3, 4]])
        x, y = torch.tensor([2, 5]), torch.tensor([-1, 3])
        m = MultilinearMap.from_tensor(c)
        assert m.arity == 2
        assert equal(m((x, y)), _bilinear(c, x, y))

    def test_mk_pi_ring(self):
        assert MultilinearMap.mk_pi_ring(3)((2, -3, 5)) == -30

    def test_of_linear_forms(self):
        m = MultilinearMap.of_linear_forms([Coordinate(1), lambda v: v.sum()])
        x, y = torch.tensor([4, 7]), torch.tensor([1, 2])
        assert equal(m((x, y)), 21)

    def test_labelled_index(self):
        m = MultilinearMap(["u", "w"], lambda u, w: u - w)
        assert m.index == IndexSet(["u", "w"])
        assert m({"w": 3, "u": 10}) == 7


class TestPointwise:
    def test_linear_combination(self):
        m = MultilinearMap.mk_pi_ring(2)
        n = MultilinearMap(2, lambda a, b: a + 2 * b)
        assert (m + n)((3, 4)) == 12 + 11
        assert (m - n)((3, 4)) == 12 - 11
        assert (-m)((3, 4)) == -12
        assert (5 * m)((3, 4)) == 60

    def test_comp_linear_map(self):
        m = MultilinearMap.mk_pi_ring(2).comp_linear_map(lambda x: x + 1)
        assert m((1, 2)) == 6

    def test_mismatched_index(self):
        with pytest.raises(IndexSetMismatch):
            MultilinearMap.mk_pi_ring(2) + MultilinearMap.mk_pi_ring(3)
