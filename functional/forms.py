# Exterior: Exact Alternating Multilinear Maps
# Copyright (C) 2026 The Exterior Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Differential-form style constructions on ``R^n``.

Everything here is assembled from the kernel combinators, so the results
are alternating by construction.
"""

from typing import Sequence

import torch

from core.alternating import AlternatingMap
from core.alternatize import alternatize
from core.combiners import ring_mul
from core.coproduct import dom_coprod
from core.multilinear import Coordinate, MultilinearMap


def coordinate_form(k: int) -> AlternatingMap:
    """The 1-form ``dx_k : v ↦ v[k]``."""
    return AlternatingMap.of_linear(Coordinate(k), name=f"dx{k}")


def wedge(*forms: AlternatingMap, combiner=ring_mul) -> AlternatingMap:
    """Fold :func:`dom_coprod` over *forms*, left to right.

    Each intermediate result is reindexed onto ``{0, ..., n-1}``, so a
    wedge of a ``p``-form and a ``q``-form takes ``p + q`` arguments in
    order: the first ``p`` feed the left factor's block.

    Raises:
        ValueError: If no forms are given.
    """
    if not forms:
        raise ValueError("wedge needs at least one form")
    result = forms[0].flatten()
    for form in forms[1:]:
        result = dom_coprod(result, form, combiner).flatten()
    return result


def elementary_form(indices: Sequence[int]) -> AlternatingMap:
    """``dx_{i1} ∧ ... ∧ dx_{ik}``; on vectors it is the ``k×k`` minor on *indices*."""
    indices = tuple(indices)
    if not indices:
        raise ValueError("elementary_form needs at least one index")
    return wedge(*(coordinate_form(i) for i in indices))


def determinant(n: int) -> AlternatingMap:
    """The determinant of ``n`` vectors of ``R^n``, as ``alternatize(v_0[0] ⋯ v_{n-1}[n-1])``."""
    return alternatize(MultilinearMap.coordinate_product(n))


def det(matrix: torch.Tensor):
    """Exact determinant of a square tensor, read row by row.

    Evaluates ``n!`` products; meant for small integer matrices.
    """
    if matrix.dim() != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"det expects a square matrix, got shape {tuple(matrix.shape)}")
    n = matrix.shape[0]
    return determinant(n)(tuple(matrix[i] for i in range(n)))
