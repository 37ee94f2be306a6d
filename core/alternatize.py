# Exterior: Exact Alternating Multilinear Maps
# Copyright (C) 2026 The Exterior Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Alternatization of multilinear maps.

    alternatize(m)(v) = Σ_{σ ∈ Perm(ι)} sign(σ) • m(v ∘ σ)

The sum vanishes on any family with ``v(i) = v(j)``, ``i ≠ j``: the map
``σ ↦ swap(i, j) ∘ σ`` pairs every permutation with one of opposite sign and
an identical argument tuple (see :func:`alternatization_vanishes`).

Cost:
    Every evaluation calls ``m`` once per permutation, ``|ι|!`` times. The
    growth is inherent to the construction; bound ``|ι|`` before calling.
"""

import math
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple

from core import validation
from core.alternating import AlternatingMap
from core.cancellation import cancelling_sum, left_swap
from core.errors import InvalidSwap, ShapeMismatch
from core.module import equal, total
from core.multilinear import MultilinearMap, permuted
from core.permutation import Permutation, PermutationGroup
from log import get_logger

logger = get_logger(__name__)

Order = Callable[[List[Permutation]], Iterable[Permutation]]


def alternatization_terms(m: MultilinearMap, values,
                          order: Optional[Order] = None) -> Iterator[Tuple[Permutation, Any]]:
    """Yield ``(σ, sign(σ) • m(v ∘ σ))`` for every permutation ``σ``.

    Args:
        m (MultilinearMap): The map being alternatized.
        values: Argument family indexed by ``m.index``.
        order (callable, optional): Reorders the enumerated permutations.
            The summed result does not depend on it.
    """
    values = validation.check_family(values, m.index, m.name)
    perms = list(PermutationGroup(m.index).enumerate())
    if order is not None:
        perms = list(order(perms))
    for sigma in perms:
        yield sigma, permuted(m, values, sigma)


def alternatize(m, order: Optional[Order] = None) -> AlternatingMap:
    """Build the alternating map ``Σ_σ sign(σ) • m(· ∘ σ)``.

    Args:
        m (MultilinearMap | AlternatingMap): Any multilinear map. An
            alternating input is treated as its underlying multilinear map,
            and the result is then ``|ι|! • m``.
        order (callable, optional): Reorders the permutation enumeration,
            e.g. to test summation-order invariance.

    Returns:
        AlternatingMap: Over the same index set as *m*.
    """
    if isinstance(m, AlternatingMap):
        m = m.to_multilinear()
    if not isinstance(m, MultilinearMap):
        raise TypeError(f"alternatize expects a multilinear map, got {type(m).__name__}")

    index = m.index
    perms = list(PermutationGroup(index).enumerate())
    if order is not None:
        perms = list(order(perms))
        if len(perms) != len(set(perms)) or len(perms) != math.factorial(len(index)):
            raise ShapeMismatch("order must return every permutation exactly once")
    validation.check_term_budget(len(perms), f"alternatize({m.name})")
    logger.debug("alternatize(%s): %d permutations of %d indices", m.name, len(perms), len(index))

    def alternated(*values):
        return total(permuted(m, values, sigma) for sigma in perms)

    return AlternatingMap(MultilinearMap(index, alternated, name=f"alt({m.name})"))


def alternatization_vanishes(m: MultilinearMap, values, i, j) -> Any:
    """Sum the alternatization of *m* at *values* through the swap pairing.

    Requires ``v(i) = v(j)`` with ``i ≠ j``. The permutations are paired by
    ``σ ↦ swap(i, j) ∘ σ`` and each pair is checked to cancel.

    Returns:
        The zero total.

    Raises:
        InvalidSwap: If ``i == j``.
        ShapeMismatch: If ``v(i) ≠ v(j)``.
        InvariantViolation: If some pair fails to cancel.
    """
    if isinstance(m, AlternatingMap):
        m = m.to_multilinear()
    if i == j:
        raise InvalidSwap(f"pairing needs two distinct indices, got {i!r} twice")
    values = validation.check_family(values, m.index, m.name)
    if not equal(values[m.index.position(i)], values[m.index.position(j)]):
        raise ShapeMismatch(f"arguments {i!r} and {j!r} differ; the pairing needs equal values")
    return cancelling_sum(
        PermutationGroup(m.index).enumerate(),
        left_swap(m.index, i, j),
        lambda sigma: permuted(m, values, sigma),
    )
