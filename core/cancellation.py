# Exterior: Exact Alternating Multilinear Maps
# Copyright (C) 2026 The Exterior Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Involution-pairing cancellation.

A finite sum ``Σ_x t(x)`` vanishes when there is a map ``φ`` on the summation
set that is its own inverse, has no fixed point, and satisfies
``t(φ(x)) = -t(x)``: the set splits into pairs ``{x, φ(x)}`` whose terms
cancel. This is the argument behind the alternation of both
:func:`~core.alternatize.alternatize` (``φ(σ) = swap(i, j) ∘ σ`` on the full
group) and :func:`~core.coproduct.dom_coprod` (the same ``φ`` acting on coset
classes). The helpers here carry the argument out explicitly and raise
:class:`~core.errors.InvariantViolation` on any step that fails.
"""

from typing import Any, Callable, Hashable, Iterable, List, Tuple

from core.errors import InvariantViolation
from core.module import is_zero, total
from core.permutation import Permutation


def involution_pairs(items: Iterable[Hashable],
                     involution: Callable[[Any], Any]) -> List[Tuple[Any, Any]]:
    """Split *items* into the orbits ``{x, φ(x)}`` of a fixed-point-free involution.

    Raises:
        InvariantViolation: If ``φ`` has a fixed point, leaves the set, or is
            not its own inverse.
    """
    items = list(items)
    members = set(items)
    seen = set()
    pairs = []
    for x in items:
        if x in seen:
            continue
        y = involution(x)
        if y == x:
            raise InvariantViolation(f"involution fixes {x!r}")
        if y not in members:
            raise InvariantViolation(f"involution sends {x!r} outside the summation set")
        if involution(y) != x:
            raise InvariantViolation(f"map is not an involution at {x!r}")
        seen.add(x)
        seen.add(y)
        pairs.append((x, y))
    return pairs


def cancelling_sum(items: Iterable[Hashable],
                   involution: Callable[[Any], Any],
                   term: Callable[[Any], Any],
                   zero: Any = 0) -> Any:
    """Sum *term* over *items* pair by pair, asserting every pair cancels.

    Returns:
        The (zero) total, built from the module's own addition.

    Raises:
        InvariantViolation: If the pairing is invalid or some pair
            ``t(x) + t(φ(x))`` is non-zero.
    """
    pair_sums = []
    for x, y in involution_pairs(items, involution):
        pair = term(x) + term(y)
        if not is_zero(pair):
            raise InvariantViolation(
                f"terms at {x!r} and {y!r} do not cancel: sum is {pair!r}"
            )
        pair_sums.append(pair)
    return total(pair_sums, zero)


def left_swap(index, i, j) -> Callable[[Permutation], Permutation]:
    """The involution ``σ ↦ swap(i, j) ∘ σ`` on ``Perm(ι)``; fixed-point-free when ``i ≠ j``."""
    swap = Permutation.swap(index, i, j)
    return lambda sigma: swap * sigma
