# Exterior: Exact Alternating Multilinear Maps
# Copyright (C) 2026 The Exterior Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Multilinear maps ``(ι → M) → N``.

This is the plain algebra layer: closures that are additive and
scalar-linear in each argument separately, with pointwise operations.
Multilinearity is the constructor's promise and is not checked.
"""

from typing import Any, Callable, Sequence

import torch

from core.errors import IndexSetMismatch
from core.index import IndexSet
from core.module import signed
from core.validation import check_family


class MultilinearMap:
    """An n-ary multilinear function on argument families indexed by ``ι``.

    Attributes:
        index (IndexSet): Argument index set.
        fn (Callable): Underlying function, called as ``fn(*values)`` with the
            arguments in position order.
        name (str): Label used in ``repr`` and log messages.
    """

    def __init__(self, index, fn: Callable[..., Any], name: str = None):
        self.index = IndexSet.coerce(index)
        self.fn = fn
        self.name = name or getattr(fn, "__name__", "m")

    @property
    def arity(self) -> int:
        return len(self.index)

    def __repr__(self):
        return f"{type(self).__name__}({self.name}, arity={self.arity})"

    def apply(self, values) -> Any:
        """Evaluate on a family given as a sequence or a label mapping.

        Raises:
            ShapeMismatch: If *values* is not indexed by :attr:`index`.
        """
        return self.fn(*check_family(values, self.index, self.name))

    __call__ = apply

    def _evaluate(self, values: tuple) -> Any:
        # Position-ordered fast path for the summation kernels.
        return self.fn(*values)

    # ------------------------------------------------------------------
    # Pointwise algebra
    # ------------------------------------------------------------------

    def _check_same_index(self, other: "MultilinearMap") -> None:
        if other.index != self.index:
            raise IndexSetMismatch(
                f"cannot combine maps over {self.index!r} and {other.index!r}"
            )

    def add(self, other: "MultilinearMap") -> "MultilinearMap":
        self._check_same_index(other)
        f, g = self._evaluate, other._evaluate
        return MultilinearMap(self.index, lambda *v: f(v) + g(v),
                              name=f"({self.name} + {other.name})")

    def neg(self) -> "MultilinearMap":
        f = self._evaluate
        return MultilinearMap(self.index, lambda *v: -f(v), name=f"-{self.name}")

    def sub(self, other: "MultilinearMap") -> "MultilinearMap":
        return self.add(other.neg())

    def scalar_mul(self, c) -> "MultilinearMap":
        f = self._evaluate
        return MultilinearMap(self.index, lambda *v: c * f(v), name=f"{c} • {self.name}")

    def __add__(self, other):
        if not isinstance(other, MultilinearMap):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, MultilinearMap):
            return NotImplemented
        return self.sub(other)

    def __neg__(self):
        return self.neg()

    def __rmul__(self, c):
        return self.scalar_mul(c)

    def comp_linear_map(self, g: Callable[[Any], Any]) -> "MultilinearMap":
        """Precompose every argument with the linear map *g*."""
        f = self._evaluate
        return MultilinearMap(self.index, lambda *v: f(tuple(g(x) for x in v)),
                              name=f"{self.name} ∘ g")

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def zero(cls, index, value: Any = 0) -> "MultilinearMap":
        """The constant map onto the zero *value* of the codomain."""
        return cls(index, lambda *v: value, name="0")

    @classmethod
    def mk_pi_ring(cls, n: int) -> "MultilinearMap":
        """Product of ``n`` scalar arguments, ``(x_0, ..., x_{n-1}) ↦ Π x_i``."""
        def product(*v):
            out = 1
            for x in v:
                out = out * x
            return out
        return cls(n, product, name="Π")

    @classmethod
    def of_linear_forms(cls, forms: Sequence[Callable[[Any], Any]]) -> "MultilinearMap":
        """Product of linear functionals, ``v ↦ Π forms[i](v_i)``."""
        forms = tuple(forms)

        def product(*v):
            out = 1
            for form, x in zip(forms, v):
                out = out * form(x)
            return out
        return cls(len(forms), product, name="Π forms")

    @classmethod
    def coordinate_product(cls, n: int) -> "MultilinearMap":
        """``v ↦ v_0[0] * v_1[1] * ... * v_{n-1}[n-1]``.

        Alternatizing this map gives the determinant.
        """
        return cls.of_linear_forms([Coordinate(i) for i in range(n)])

    @classmethod
    def from_tensor(cls, coeffs: torch.Tensor) -> "MultilinearMap":
        """Contract a coefficient tensor against its arguments.

        ``m(v) = Σ C[i_0, ..., i_{k-1}] v_0[i_0] ... v_{k-1}[i_{k-1}]`` for a
        tensor ``C`` of shape ``[d] * k``. Integer dtypes keep it exact.
        """
        k = coeffs.dim()

        def contract(*v):
            out = coeffs
            for x in reversed(v):
                out = (out * x).sum(dim=-1)
            return out
        return cls(k, contract, name=f"C{tuple(coeffs.shape)}")


class Coordinate:
    """The linear functional ``x ↦ x[i]``."""

    __slots__ = ("i",)

    def __init__(self, i: int):
        self.i = i

    def __call__(self, x):
        return x[self.i]

    def __repr__(self):
        return f"dx{self.i}"


def permuted(m: MultilinearMap, values: tuple, sigma) -> Any:
    """Evaluate ``sign(σ) • m(v ∘ σ)`` on a position-ordered family."""
    return signed(sigma.sign(), m._evaluate(sigma.apply_to(values)))
