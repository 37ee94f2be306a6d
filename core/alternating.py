# Exterior: Exact Alternating Multilinear Maps
# Copyright (C) 2026 The Exterior Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Alternating multilinear maps.

An :class:`AlternatingMap` is a :class:`~core.multilinear.MultilinearMap`
that vanishes whenever two distinct arguments are equal. The invariant is
guaranteed by construction: instances come from :func:`~core.alternatize.alternatize`,
:func:`~core.coproduct.dom_coprod`, :meth:`AlternatingMap.of_linear`, or the
operations below, all of which preserve it. :meth:`AlternatingMap.verified`
is the only entry point for an arbitrary multilinear map, and it checks
the law on sample families first.
"""

from typing import Any, Callable, Iterable, Mapping

from core import validation
from core.errors import IndexSetMismatch, InvalidSwap, ShapeMismatch
from core.index import IndexSet
from core.module import equal
from core.multilinear import MultilinearMap
from core.permutation import Permutation


class AlternatingMap:
    """Multilinear map ``(ι → M) → N`` vanishing on repeated arguments.

    Attributes:
        multilinear (MultilinearMap): The underlying map.
    """

    __slots__ = ("multilinear",)

    def __init__(self, multilinear: MultilinearMap):
        # Unchecked: only the invariant-preserving constructors call this.
        self.multilinear = multilinear

    @property
    def index(self) -> IndexSet:
        return self.multilinear.index

    @property
    def name(self) -> str:
        return self.multilinear.name

    @property
    def arity(self) -> int:
        return self.multilinear.arity

    def __repr__(self):
        return f"AlternatingMap({self.name}, arity={self.arity})"

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def of_linear(cls, form: Callable[[Any], Any], index=None, name: str = None) -> "AlternatingMap":
        """A linear map viewed as an alternating map of arity one.

        With a single argument there is no pair of distinct indices, so the
        alternation law holds vacuously.
        """
        index = IndexSet.coerce(1 if index is None else index)
        if len(index) != 1:
            raise ShapeMismatch(f"of_linear needs a one-element index set, got {index!r}")
        return cls(MultilinearMap(index, form, name=name or getattr(form, "__name__", repr(form))))

    @classmethod
    def zero(cls, index, value: Any = 0) -> "AlternatingMap":
        return cls(MultilinearMap.zero(index, value))

    @classmethod
    def verified(cls, multilinear: MultilinearMap, samples: Iterable) -> "AlternatingMap":
        """Promote *multilinear* after checking the alternation law on *samples*.

        Raises:
            InvariantViolation: If the law fails on any sample.
        """
        validation.check_alternating(multilinear, samples)
        return cls(multilinear)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def apply(self, values) -> Any:
        """Evaluate on a family given as a sequence or a label mapping.

        Raises:
            ShapeMismatch: If *values* is not indexed by :attr:`index`.
            InvariantViolation: Only with ``validation.CHECK_LAWS`` enabled.
        """
        values = validation.check_family(values, self.index, self.name)
        if validation.CHECK_LAWS:
            validation.check_alternating_at(self, values)
        return self._evaluate(values)

    __call__ = apply

    def _evaluate(self, values: tuple) -> Any:
        return self.multilinear._evaluate(values)

    def to_multilinear(self) -> MultilinearMap:
        """Forget the alternation invariant."""
        return self.multilinear

    def map_swap(self, values, i, j) -> Any:
        """Value of ``f(v ∘ swap(i, j))``, derived as ``-f(v)``.

        Raises:
            InvalidSwap: If ``i == j``.
        """
        if i == j:
            raise InvalidSwap(f"map_swap needs two distinct indices, got {i!r} twice")
        self.index.position(i)
        self.index.position(j)
        return -self.apply(values)

    def map_perm(self, values, sigma: Permutation) -> Any:
        """Value of ``f(v ∘ σ)``, derived as ``sign(σ) • f(v)``.

        The sign is accumulated by swap induction: ``σ`` is decomposed into
        transpositions and :meth:`map_swap` negates once per factor.
        """
        if sigma.index != self.index:
            raise IndexSetMismatch(f"{sigma!r} does not permute {self.index!r}")
        out = self.apply(values)
        for _ in sigma.transpositions():
            out = -out
        return out

    def map_update_self(self, values, i, j) -> Any:
        """Evaluate with argument *i* overwritten by argument *j*; zero when ``i ≠ j``."""
        values = list(validation.check_family(values, self.index, self.name))
        values[self.index.position(i)] = values[self.index.position(j)]
        return self.apply(tuple(values))

    def repeats(self, values) -> bool:
        """True when the family is not injective, in which case ``f(v) = 0``."""
        values = validation.check_family(values, self.index, self.name)
        for p in range(len(values)):
            for q in range(p + 1, len(values)):
                if equal(values[p], values[q]):
                    return True
        return False

    # ------------------------------------------------------------------
    # Invariant-preserving operations
    # ------------------------------------------------------------------

    def add(self, other: "AlternatingMap") -> "AlternatingMap":
        if not isinstance(other, AlternatingMap):
            raise TypeError(f"can only add alternating maps, got {type(other).__name__}")
        return AlternatingMap(self.multilinear.add(other.multilinear))

    def neg(self) -> "AlternatingMap":
        return AlternatingMap(self.multilinear.neg())

    def sub(self, other: "AlternatingMap") -> "AlternatingMap":
        return self.add(other.neg())

    def scalar_mul(self, c) -> "AlternatingMap":
        return AlternatingMap(self.multilinear.scalar_mul(c))

    def __add__(self, other):
        if isinstance(other, AlternatingMap):
            return self.add(other)
        if isinstance(other, MultilinearMap):
            return self.multilinear.add(other)
        return NotImplemented

    def __radd__(self, other):
        if isinstance(other, MultilinearMap):
            return other.add(self.multilinear)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, AlternatingMap):
            return self.sub(other)
        if isinstance(other, MultilinearMap):
            return self.multilinear.sub(other)
        return NotImplemented

    def __neg__(self):
        return self.neg()

    def __rmul__(self, c):
        return self.scalar_mul(c)

    def comp_linear_map(self, g: Callable[[Any], Any]) -> "AlternatingMap":
        """Precompose every argument with the linear map *g*.

        Equal arguments stay equal under ``g``, so alternation is preserved.
        """
        return AlternatingMap(self.multilinear.comp_linear_map(g))

    def dom_dom_congr(self, mapping, index=None) -> "AlternatingMap":
        """Reindex along a bijection ``e: ι → ι'``.

        The result is ``w ↦ f(w ∘ e)`` on families indexed by ``ι'``.

        Args:
            mapping: A :class:`Permutation` of :attr:`index` (then ``ι' = ι``)
                or a mapping from every old label to a new label.
            index: The target index set ``ι'``; defaults to the mapping's
                values in old position order.
        """
        if isinstance(mapping, Permutation):
            if mapping.index != self.index:
                raise IndexSetMismatch(f"{mapping!r} does not permute {self.index!r}")
            mapping = {label: mapping(label) for label in self.index}
            index = self.index if index is None else index
        if not isinstance(mapping, Mapping) or set(mapping) != set(self.index):
            raise ShapeMismatch(f"reindexing must be defined on every label of {self.index!r}")
        images = [mapping[label] for label in self.index]
        if len(set(images)) != len(images):
            raise ShapeMismatch(f"reindexing {mapping!r} is not injective")
        target = IndexSet.coerce(images if index is None else index)
        if len(target) != len(images) or set(images) != set(target):
            raise ShapeMismatch(f"reindexing onto {target!r} is not a bijection")
        # Old position p reads the new family at position of e(label_p).
        gather = tuple(target.position(mapping[label]) for label in self.index)
        f = self._evaluate
        return AlternatingMap(MultilinearMap(
            target, lambda *w: f(tuple(w[q] for q in gather)), name=self.name,
        ))

    def flatten(self) -> "AlternatingMap":
        """Reindex onto ``{0, ..., n-1}`` by position, e.g. after :func:`dom_coprod`."""
        return self.dom_dom_congr(
            {label: p for p, label in enumerate(self.index)}, IndexSet.range(self.arity)
        )

