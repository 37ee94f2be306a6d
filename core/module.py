# Exterior: Exact Alternating Multilinear Maps
# Copyright (C) 2026 The Exterior Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Module arithmetic on duck-typed values.

Scalars and module elements are anything supporting ``+``, unary ``-`` and
``scalar * element``: Python ints, :class:`fractions.Fraction`, symbolic
values, or :class:`torch.Tensor` (integer dtypes keep arithmetic exact).
"""

import operator
from functools import reduce
from typing import Any, Iterable

import torch


def signed(sign: int, value: Any) -> Any:
    """Apply a permutation sign without promoting the value's dtype."""
    return value if sign > 0 else -value


def total(terms: Iterable[Any], zero: Any = 0) -> Any:
    """Sum *terms* with the module's own addition.

    Addition is assumed commutative and associative, so the order in which
    terms arrive never changes the result. *zero* is returned only for an
    empty sum.
    """
    terms = iter(terms)
    try:
        first = next(terms)
    except StopIteration:
        return zero
    return reduce(operator.add, terms, first)


def zero_like(value: Any) -> Any:
    """The zero of the module *value* lives in."""
    if isinstance(value, torch.Tensor):
        return torch.zeros_like(value)
    return value - value


def is_zero(value: Any) -> bool:
    if isinstance(value, torch.Tensor):
        return not bool(value.any())
    return value == 0


def equal(a: Any, b: Any) -> bool:
    """Exact equality of two module elements.

    Tensors compare by shape and value; a Python scalar compared with a
    tensor is broadcast to the tensor's shape first.
    """
    if isinstance(a, torch.Tensor) or isinstance(b, torch.Tensor):
        if not isinstance(a, torch.Tensor):
            a, b = b, a
        b = torch.as_tensor(b, device=a.device)
        if b.dim() == 0 and a.dim() > 0:
            b = b.expand_as(a)
        if a.shape != b.shape:
            return False
        return bool((a == b).all())
    return a == b
