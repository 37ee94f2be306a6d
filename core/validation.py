# Exterior: Exact Alternating Multilinear Maps
# Copyright (C) 2026 The Exterior Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Input validation and debug law checks.

Shape checks on argument families are always on: a family indexed by the
wrong set raises :class:`~core.errors.ShapeMismatch` instead of being
truncated or padded.

The algebraic law checks cost one extra evaluation per pair of distinct
indices, so :meth:`AlternatingMap.apply` only runs them when ``CHECK_LAWS``
is set (``EXTERIOR_CHECK_LAWS=1`` in the environment, or assign the module
attribute). Property tests call them directly.

Environment variables:
    EXTERIOR_CHECK_LAWS  — 1 enables per-call alternation checks
    EXTERIOR_MAX_TERMS   — soft limit on summed terms before a warning (40320)
"""

import itertools
import os

from core.errors import InvariantViolation
from core.index import IndexSet
from core.module import equal, is_zero, signed
from core.permutation import Permutation
from log import get_logger

logger = get_logger(__name__)

CHECK_LAWS = os.environ.get("EXTERIOR_CHECK_LAWS", "0") not in ("", "0", "false", "False")
MAX_TERMS = int(os.environ.get("EXTERIOR_MAX_TERMS", "40320"))


def check_term_budget(terms: int, what: str) -> None:
    """Warn when one evaluation of *what* sums more than ``MAX_TERMS`` terms."""
    if terms > MAX_TERMS:
        logger.warning(
            "%s sums %d terms per evaluation (soft limit %d); runtime grows factorially",
            what, terms, MAX_TERMS,
        )


def check_family(values, index: IndexSet, name: str = "v") -> tuple:
    """Normalise *values* against *index*; see :meth:`IndexSet.family`."""
    return index.family(values, name=name)


def check_alternating_at(f, values, name: str = None) -> None:
    """Assert ``f`` vanishes when any two arguments of *values* are made equal.

    For each pair of positions ``p < q`` the family is copied with
    ``v[q] := v[p]`` and evaluated.

    Raises:
        InvariantViolation: On the first pair that does not vanish.
    """
    name = name or getattr(f, "name", "f")
    values = check_family(values, f.index, name)
    for p, q in itertools.combinations(range(len(values)), 2):
        repeated = list(values)
        repeated[q] = repeated[p]
        out = f._evaluate(tuple(repeated))
        if not is_zero(out):
            raise InvariantViolation(
                f"{name}: not alternating, value {out!r} at a family with "
                f"v[{f.index.label(q)!r}] = v[{f.index.label(p)!r}]"
            )


def check_alternating(f, samples) -> int:
    """Run :func:`check_alternating_at` on every family in *samples*.

    Returns:
        int: Number of families checked.
    """
    count = 0
    for values in samples:
        check_alternating_at(f, values)
        count += 1
    return count


def check_swap_law(f, values, i, j) -> None:
    """Assert ``f(v ∘ swap(i, j)) = -f(v)``."""
    swap = Permutation.swap(f.index, i, j)
    values = check_family(values, f.index)
    lhs = f._evaluate(swap.apply_to(values))
    rhs = -f._evaluate(values)
    if not equal(lhs, rhs):
        raise InvariantViolation(
            f"{f.name}: swap law fails for ({i!r} {j!r}): {lhs!r} != {rhs!r}"
        )


def check_perm_law(f, values, sigma) -> None:
    """Assert ``f(v ∘ σ) = sign(σ) • f(v)``."""
    values = check_family(values, f.index)
    lhs = f._evaluate(sigma.apply_to(values))
    rhs = signed(sigma.sign(), f._evaluate(values))
    if not equal(lhs, rhs):
        raise InvariantViolation(
            f"{f.name}: permutation law fails for {sigma!r}: {lhs!r} != {rhs!r}"
        )
