# Exterior: Exact Alternating Multilinear Maps
# Copyright (C) 2026 The Exterior Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Domain coproduct (wedge) of two alternating maps.

Given ``a`` on ``ιa``, ``b`` on ``ιb`` and a bilinear combiner ``⊗``::

    dom_coprod(a, b)(v) = Σ_{[σ] ∈ ModSumCongr(ιa, ιb)} sign(σ) • a(v∘σ∘inl) ⊗ b(v∘σ∘inr)

The sum runs over the cosets ``σH`` of the block-preserving subgroup
``H = Perm(ιa) × Perm(ιb)`` rather than the whole of ``Perm(ιa ⊕ ιb)``.
Every element of a coset contributes the same term: for ``h = (sl, sr)``
the extra ``sign(sl) · sign(sr)`` in ``sign(σh)`` is cancelled by the
permutation law of ``a`` and ``b``. Summing the full group would only repeat
each coset ``|ιa|! · |ιb|!`` times.

Canonical representatives are shuffles: the unique element of ``σH`` whose
image is increasing on the left block and increasing on the right block.

Alternation holds by three cases on where two equal arguments ``v(i) = v(j)``
land under a representative ``σ``:

1. both in the left block: ``a`` sees a repeated argument, the term is 0;
2. both in the right block: ``b`` does, the term is 0;
3. one in each: ``[σ] ↦ [swap(i, j) ∘ σ]`` pairs distinct cosets with
   cancelling terms.

:func:`coprod_vanishes` carries the case split out explicitly.

Cost:
    ``C(|ιa|+|ιb|, |ιa|)`` representatives per evaluation, each costing one
    call of ``a``, one of ``b`` and one of the combiner.
"""

import itertools
import math
from typing import Any, Callable, Iterator, List, Optional

from core import validation
from core.alternating import AlternatingMap
from core.cancellation import cancelling_sum
from core.combiners import ring_mul
from core.errors import IndexSetMismatch, InvalidSwap, InvariantViolation, ShapeMismatch
from core.index import IndexSet
from core.module import equal, is_zero, signed, total
from core.multilinear import MultilinearMap
from core.permutation import Permutation, PermutationGroup
from log import get_logger

logger = get_logger(__name__)

Combiner = Callable[[Any, Any], Any]


class ModSumCongr:
    """The quotient ``Perm(ιa ⊕ ιb) / H`` by canonical representatives.

    Attributes:
        index (SumIndexSet): The disjoint union ``ιa ⊕ ιb``.
        group (PermutationGroup): ``Perm(ιa ⊕ ιb)``.
    """

    def __init__(self, left, right):
        self.index = IndexSet.sum(IndexSet.coerce(left), IndexSet.coerce(right))
        self.group = PermutationGroup(self.index)

    def __repr__(self):
        return f"ModSumCongr({self.index.left!r}, {self.index.right!r})"

    def __len__(self) -> int:
        """``(|ιa| + |ιb|)! / (|ιa|! · |ιb|!)``."""
        return math.comb(len(self.index), self.index.split)

    def __iter__(self) -> Iterator[Permutation]:
        return self.representatives()

    def _check(self, sigma: Permutation) -> None:
        if sigma.index != self.index:
            raise IndexSetMismatch(f"{sigma!r} does not permute {self.index!r}")

    def canonical(self, sigma: Permutation) -> Permutation:
        """The shuffle representative of ``σH``.

        Right multiplication by ``h ∈ H`` only reorders the images within
        each block, so sorting them picks one element per coset.
        """
        self._check(sigma)
        k = self.index.split
        image = sorted(sigma.image[:k]) + sorted(sigma.image[k:])
        return Permutation(self.index, image)

    def is_canonical(self, sigma: Permutation) -> bool:
        return self.canonical(sigma) == sigma

    def same_class(self, sigma: Permutation, tau: Permutation) -> bool:
        """True if ``σ⁻¹τ ∈ H``."""
        self._check(sigma)
        self._check(tau)
        return self.group.is_sum_congr(sigma.inverse() * tau)

    def representatives(self) -> Iterator[Permutation]:
        """Canonical representatives, one per coset.

        A class is determined by which positions the left block lands on.
        """
        n, k = len(self.index), self.index.split
        for left in itertools.combinations(range(n), k):
            chosen = set(left)
            right = [p for p in range(n) if p not in chosen]
            yield Permutation(self.index, list(left) + right)

    def coset(self, sigma: Permutation) -> Iterator[Permutation]:
        """Every element ``σh`` of the class of *sigma*."""
        self._check(sigma)
        for h in self.group.sum_congr_subgroup():
            yield sigma * h

    def swap_mul(self, i, j, sigma: Permutation) -> Permutation:
        """Act on the class of *sigma* by ``swap(i, j)`` on the left."""
        return self.canonical(self.group.swap(i, j) * sigma)


def coprod_term(a: AlternatingMap, b: AlternatingMap, combiner: Combiner,
                values: tuple, sigma: Permutation) -> Any:
    """``sign(σ) • a(v∘σ∘inl) ⊗ b(v∘σ∘inr)`` for any permutation ``σ``.

    *values* is a position-ordered family on ``ιa ⊕ ιb``. The value only
    depends on the coset of ``σ``.
    """
    moved = sigma.apply_to(values)
    k = len(a.index)
    return signed(sigma.sign(), combiner(a._evaluate(moved[:k]), b._evaluate(moved[k:])))


def _check_pair(a, b) -> None:
    if not isinstance(a, AlternatingMap) or not isinstance(b, AlternatingMap):
        raise TypeError("dom_coprod combines two alternating maps")


def dom_coprod(a: AlternatingMap, b: AlternatingMap, combiner: Combiner = ring_mul,
               order: Optional[Callable[[List[Permutation]], Any]] = None,
               representative: Optional[Callable[[Permutation], Permutation]] = None) -> AlternatingMap:
    """Wedge two alternating maps onto the disjoint union of their index sets.

    Args:
        a (AlternatingMap): Map on ``ιa`` with values in ``N₁``.
        b (AlternatingMap): Map on ``ιb`` with values in ``N₂``.
        combiner (callable): Bilinear ``N₁ × N₂ → N₃``; defaults to
            :func:`~core.combiners.ring_mul`.
        order (callable, optional): Reorders the coset representatives.
        representative (callable, optional): Replaces each canonical
            representative by another element of the same coset. The result
            is unchanged; the choice is validated once at construction.

    Returns:
        AlternatingMap: On ``ιa ⊕ ιb`` (labels ``Inl``/``Inr``), arity
        ``|ιa| + |ιb|``.
    """
    _check_pair(a, b)
    quotient = ModSumCongr(a.index, b.index)
    reps = list(quotient.representatives())
    if order is not None:
        reps = list(order(reps))
        if len(reps) != len(quotient) or set(map(quotient.canonical, reps)) != set(quotient):
            raise ShapeMismatch("order must return every coset representative exactly once")
    if representative is not None:
        chosen = [representative(sigma) for sigma in reps]
        for sigma, tau in zip(reps, chosen):
            if not quotient.same_class(sigma, tau):
                raise InvariantViolation(f"{tau!r} is not in the coset of {sigma!r}")
        reps = chosen

    validation.check_term_budget(len(reps), f"dom_coprod({a.name}, {b.name})")
    logger.debug("dom_coprod(%s, %s): %d coset representatives", a.name, b.name, len(reps))

    def wedged(*values):
        return total(coprod_term(a, b, combiner, values, sigma) for sigma in reps)

    return AlternatingMap(MultilinearMap(
        quotient.index, wedged, name=f"({a.name} ∧ {b.name})",
    ))


def full_group_coprod(a: AlternatingMap, b: AlternatingMap, combiner: Combiner,
                      values) -> Any:
    """The same sum over all of ``Perm(ιa ⊕ ιb)``.

    Equals ``|ιa|! · |ιb|!`` times :func:`dom_coprod`; kept as a reference
    for the normalisation.
    """
    _check_pair(a, b)
    index = IndexSet.sum(a.index, b.index)
    values = validation.check_family(values, index)
    return total(
        coprod_term(a, b, combiner, values, sigma)
        for sigma in PermutationGroup(index).enumerate()
    )


def coprod_vanishes(a: AlternatingMap, b: AlternatingMap, combiner: Combiner,
                    values, i, j) -> Any:
    """Sum ``dom_coprod(a, b)`` at *values* through the three-case argument.

    Requires ``v(i) = v(j)`` with ``i ≠ j`` (labels of ``ιa ⊕ ιb``).
    Representatives sending both positions into one block must give a zero
    term on their own; the rest are paired by :meth:`ModSumCongr.swap_mul`
    and must cancel pairwise.

    Returns:
        The zero total.

    Raises:
        InvariantViolation: If a same-block term is non-zero or a pair fails
            to cancel.
    """
    _check_pair(a, b)
    if i == j:
        raise InvalidSwap(f"pairing needs two distinct indices, got {i!r} twice")
    quotient = ModSumCongr(a.index, b.index)
    index = quotient.index
    values = validation.check_family(values, index)
    p, q = index.position(i), index.position(j)
    if not equal(values[p], values[q]):
        raise ShapeMismatch(f"arguments {i!r} and {j!r} differ; the pairing needs equal values")

    def term(sigma):
        return coprod_term(a, b, combiner, values, sigma)

    crossing = []
    same_block = []
    for sigma in quotient.representatives():
        # Block of the slot that σ sends onto p and onto q.
        inv = sigma.inverse()
        if index.is_left(inv.image[p]) == index.is_left(inv.image[q]):
            same_block.append(sigma)
        else:
            crossing.append(sigma)

    for sigma in same_block:
        t = term(sigma)
        if not is_zero(t):
            raise InvariantViolation(
                f"term at {sigma!r} sees {i!r} and {j!r} in one block but is {t!r}"
            )
    logger.debug("coprod_vanishes: %d same-block, %d crossing representatives",
                 len(same_block), len(crossing))
    return cancelling_sum(crossing, lambda sigma: quotient.swap_mul(i, j, sigma), term)
