# Exterior: Exact Alternating Multilinear Maps
# Copyright (C) 2026 The Exterior Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Finite index sets and their disjoint unions.

An :class:`IndexSet` is an ordered tuple of distinct hashable labels. Every
label has a *position* ``0..n-1``; permutations and argument families are
stored against positions, labels are only the user-facing names.
"""

from dataclasses import dataclass
from typing import Any, Hashable, Iterator, Mapping, Sequence, Tuple

from core.errors import ShapeMismatch


@dataclass(frozen=True)
class Inl:
    """Left-tagged label of a disjoint union."""
    value: Any

    def __repr__(self):
        return f"inl({self.value!r})"


@dataclass(frozen=True)
class Inr:
    """Right-tagged label of a disjoint union."""
    value: Any

    def __repr__(self):
        return f"inr({self.value!r})"


class IndexSet:
    """Finite index set with decidable equality.

    Attributes:
        labels (tuple): Labels in position order.
    """

    __slots__ = ("labels", "_positions")

    def __init__(self, labels: Sequence[Hashable]):
        labels = tuple(labels)
        positions = {}
        for pos, label in enumerate(labels):
            if label in positions:
                raise ValueError(f"duplicate label {label!r} in index set")
            positions[label] = pos
        self.labels = labels
        self._positions = positions

    @classmethod
    def range(cls, n: int) -> "IndexSet":
        """The standard index set ``{0, ..., n-1}``."""
        if n < 0:
            raise ValueError(f"index set size must be non-negative, got {n}")
        return cls(range(n))

    @staticmethod
    def sum(left: "IndexSet", right: "IndexSet") -> "SumIndexSet":
        """Disjoint union ``left ⊕ right``."""
        return SumIndexSet(left, right)

    @classmethod
    def coerce(cls, index) -> "IndexSet":
        """Accept an :class:`IndexSet`, a size, or a sequence of labels."""
        if isinstance(index, IndexSet):
            return index
        if isinstance(index, int):
            return cls.range(index)
        return cls(index)

    def __len__(self) -> int:
        return len(self.labels)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.labels)

    def __contains__(self, label) -> bool:
        return label in self._positions

    def __eq__(self, other) -> bool:
        if not isinstance(other, IndexSet):
            return NotImplemented
        return self.labels == other.labels

    def __hash__(self) -> int:
        return hash(self.labels)

    def __repr__(self):
        return f"IndexSet({list(self.labels)!r})"

    def position(self, label) -> int:
        """Position of *label*; raises :class:`ShapeMismatch` if absent."""
        try:
            return self._positions[label]
        except KeyError:
            raise ShapeMismatch(f"{label!r} is not an index of {self!r}") from None

    def label(self, position: int):
        return self.labels[position]

    def family(self, values, name: str = "v") -> Tuple[Any, ...]:
        """Normalise an argument family ``ι → M`` to a tuple in position order.

        Args:
            values: A sequence in index order, or a mapping keyed by label.
            name (str): Argument name used in error messages.

        Returns:
            tuple: The family's values ordered by position.

        Raises:
            ShapeMismatch: Wrong arity, or keys that are not exactly this
                index set. Never truncates or pads.
        """
        if isinstance(values, Mapping):
            keys = set(values.keys())
            if keys != set(self.labels):
                missing = [l for l in self.labels if l not in keys]
                extra = [k for k in keys if k not in self._positions]
                raise ShapeMismatch(
                    f"{name}: family keys do not match {self!r} "
                    f"(missing {missing!r}, unexpected {extra!r})"
                )
            return tuple(values[label] for label in self.labels)
        values = tuple(values)
        if len(values) != len(self.labels):
            raise ShapeMismatch(
                f"{name}: expected a family of {len(self.labels)} arguments, "
                f"got {len(values)}"
            )
        return values


class SumIndexSet(IndexSet):
    """Disjoint union ``ιa ⊕ ιb``.

    Left labels occupy positions ``0..|ιa|-1`` and right labels the
    positions after them.

    Attributes:
        left (IndexSet): The ``ιa`` block.
        right (IndexSet): The ``ιb`` block.
    """

    __slots__ = ("left", "right")

    def __init__(self, left: IndexSet, right: IndexSet):
        self.left = IndexSet.coerce(left)
        self.right = IndexSet.coerce(right)
        super().__init__(
            [Inl(l) for l in self.left] + [Inr(r) for r in self.right]
        )

    def __repr__(self):
        return f"SumIndexSet({self.left!r}, {self.right!r})"

    @property
    def split(self) -> int:
        """Position of the first right-block label."""
        return len(self.left)

    def inl(self, position: int) -> int:
        """Embed a left-block position."""
        return position

    def inr(self, position: int) -> int:
        """Embed a right-block position."""
        return self.split + position

    def is_left(self, position: int) -> bool:
        return position < self.split
