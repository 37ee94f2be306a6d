# Exterior: Exact Alternating Multilinear Maps
# Copyright (C) 2026 The Exterior Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Finite symmetric groups over an :class:`~core.index.IndexSet`.

Permutations are immutable bijections stored as a tuple of positions:
``image[p]`` is the position that ``p`` is sent to. Composition follows
function composition, ``(s * t)(i) = s(t(i))``.
"""

import itertools
import math
from typing import Iterable, Iterator, List, Mapping, Sequence, Tuple

from core.errors import IndexSetMismatch, InvalidSwap, ShapeMismatch
from core.index import IndexSet, SumIndexSet


class Permutation:
    """A bijection ``ι → ι``.

    Attributes:
        index (IndexSet): The set being permuted.
        image (tuple[int, ...]): Position image of each position.
    """

    __slots__ = ("index", "image", "_sign")

    def __init__(self, index: IndexSet, image: Sequence[int]):
        image = tuple(image)
        if len(image) != len(index) or sorted(image) != list(range(len(index))):
            raise ValueError(f"{image!r} is not a bijection on {len(index)} positions")
        self.index = index
        self.image = image
        self._sign = None

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def identity(cls, index: IndexSet) -> "Permutation":
        return cls(index, range(len(index)))

    @classmethod
    def swap(cls, index: IndexSet, i, j) -> "Permutation":
        """The transposition exchanging labels *i* and *j*.

        Raises:
            InvalidSwap: If ``i == j``.
        """
        if i == j:
            raise InvalidSwap(f"swap needs two distinct indices, got {i!r} twice")
        p, q = index.position(i), index.position(j)
        image = list(range(len(index)))
        image[p], image[q] = q, p
        return cls(index, image)

    @classmethod
    def from_mapping(cls, index: IndexSet, mapping: Mapping) -> "Permutation":
        """Build from a label mapping; labels not mentioned are fixed."""
        image = list(range(len(index)))
        for src, dst in mapping.items():
            image[index.position(src)] = index.position(dst)
        return cls(index, image)

    @classmethod
    def from_cycles(cls, index: IndexSet, *cycles: Sequence) -> "Permutation":
        """Build from disjoint cycles of labels, e.g. ``(0, 1, 2)`` sends 0→1→2→0."""
        mapping = {}
        for cycle in cycles:
            for src, dst in zip(cycle, tuple(cycle[1:]) + tuple(cycle[:1])):
                if src in mapping:
                    raise ValueError(f"cycles are not disjoint at {src!r}")
                mapping[src] = dst
        return cls.from_mapping(index, mapping)

    # ------------------------------------------------------------------
    # Group structure
    # ------------------------------------------------------------------

    def __call__(self, label):
        return self.index.label(self.image[self.index.position(label)])

    def __mul__(self, other: "Permutation") -> "Permutation":
        if not isinstance(other, Permutation):
            return NotImplemented
        if other.index != self.index:
            raise IndexSetMismatch(
                f"cannot compose permutations of {self.index!r} and {other.index!r}"
            )
        return Permutation(self.index, [self.image[p] for p in other.image])

    def inverse(self) -> "Permutation":
        inv = [0] * len(self.image)
        for p, q in enumerate(self.image):
            inv[q] = p
        return Permutation(self.index, inv)

    def sign(self) -> int:
        """Parity homomorphism into ``{+1, -1}``.

        A permutation with ``c`` cycles (fixed points included) on ``n``
        positions is a product of ``n - c`` transpositions.
        """
        if self._sign is None:
            n = len(self.image)
            self._sign = -1 if (n - len(self._position_cycles())) % 2 else 1
        return self._sign

    def is_identity(self) -> bool:
        return all(p == q for p, q in enumerate(self.image))

    @property
    def order(self) -> int:
        """Smallest ``k > 0`` with ``self ** k`` the identity."""
        return math.lcm(*(len(c) for c in self._position_cycles()))

    def _position_cycles(self) -> List[Tuple[int, ...]]:
        seen = [False] * len(self.image)
        cycles = []
        for start in range(len(self.image)):
            if seen[start]:
                continue
            cycle = []
            p = start
            while not seen[p]:
                seen[p] = True
                cycle.append(p)
                p = self.image[p]
            cycles.append(tuple(cycle))
        return cycles

    def cycles(self) -> Tuple[Tuple, ...]:
        """Non-trivial cycles, as label tuples."""
        return tuple(
            tuple(self.index.label(p) for p in cycle)
            for cycle in self._position_cycles()
            if len(cycle) > 1
        )

    def transpositions(self) -> List[Tuple]:
        """Decompose into a word of transpositions.

        Returns a list ``[(a1, b1), ..., (ak, bk)]`` of label pairs with
        ``swap(a1, b1) * ... * swap(ak, bk) == self``; its length has the
        parity of :meth:`sign`.
        """
        word = []
        for cycle in self.cycles():
            head = cycle[0]
            # (a1 a2 ... ak) = (a1 ak)(a1 ak-1)...(a1 a2)
            word.extend((head, other) for other in reversed(cycle[1:]))
        return word

    def apply_to(self, values: Sequence) -> tuple:
        """Reindex a position-ordered family: ``(v ∘ σ)[p] = v[σ(p)]``."""
        if len(values) != len(self.image):
            raise ShapeMismatch(
                f"cannot reindex a family of {len(values)} values by a "
                f"permutation of {len(self.image)} positions"
            )
        return tuple(values[q] for q in self.image)

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        if not isinstance(other, Permutation):
            return NotImplemented
        return self.index == other.index and self.image == other.image

    def __hash__(self) -> int:
        return hash((self.index, self.image))

    def __repr__(self):
        if self.is_identity():
            return "Permutation(id)"
        return f"Permutation({self.cycles()!r})"


class PermutationGroup:
    """The symmetric group ``Perm(ι)``.

    Enumeration grows as ``|ι|!``; callers bound ``|ι|`` before summing
    over the group.

    Attributes:
        index (IndexSet): The permuted index set.
    """

    def __init__(self, index):
        self.index = IndexSet.coerce(index)

    def __repr__(self):
        return f"PermutationGroup({self.index!r})"

    def __len__(self) -> int:
        return math.factorial(len(self.index))

    def __iter__(self) -> Iterator[Permutation]:
        return self.enumerate()

    def __contains__(self, sigma) -> bool:
        return isinstance(sigma, Permutation) and sigma.index == self.index

    def identity(self) -> Permutation:
        return Permutation.identity(self.index)

    def compose(self, sigma: Permutation, tau: Permutation) -> Permutation:
        """``sigma ∘ tau``."""
        return sigma * tau

    def inverse(self, sigma: Permutation) -> Permutation:
        return sigma.inverse()

    def swap(self, i, j) -> Permutation:
        return Permutation.swap(self.index, i, j)

    def sign(self, sigma: Permutation) -> int:
        return sigma.sign()

    def enumerate(self) -> Iterator[Permutation]:
        """Every permutation exactly once, in lexicographic image order."""
        for image in itertools.permutations(range(len(self.index))):
            yield Permutation(self.index, image)

    def product(self, perms: Iterable[Permutation]) -> Permutation:
        """Left-to-right composite of *perms*; the identity when empty."""
        result = self.identity()
        for sigma in perms:
            result = result * sigma
        return result

    # ------------------------------------------------------------------
    # Block-preserving subgroup H(ιa, ιb) of Perm(ιa ⊕ ιb)
    # ------------------------------------------------------------------

    def _require_sum(self) -> SumIndexSet:
        if not isinstance(self.index, SumIndexSet):
            raise IndexSetMismatch(
                f"{self.index!r} is not a disjoint union; H(ιa, ιb) is undefined"
            )
        return self.index

    def sum_congr(self, left: Permutation, right: Permutation) -> Permutation:
        """Pair a permutation of ``ιa`` with one of ``ιb``."""
        index = self._require_sum()
        if left.index != index.left or right.index != index.right:
            raise IndexSetMismatch(
                f"sum_congr expects permutations of {index.left!r} and {index.right!r}"
            )
        image = list(left.image) + [index.inr(q) for q in right.image]
        return Permutation(index, image)

    def sum_congr_subgroup(self) -> Iterator[Permutation]:
        """Every element of ``H``; there are ``|ιa|! · |ιb|!`` of them."""
        index = self._require_sum()
        lefts = PermutationGroup(index.left)
        rights = PermutationGroup(index.right)
        for left in lefts.enumerate():
            for right in rights.enumerate():
                yield self.sum_congr(left, right)

    def is_sum_congr(self, sigma: Permutation) -> bool:
        """True if *sigma* never moves a left label to a right slot."""
        index = self._require_sum()
        return all(
            index.is_left(p) == index.is_left(q) for p, q in enumerate(sigma.image)
        )
