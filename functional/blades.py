# Exterior: Exact Alternating Multilinear Maps
# Copyright (C) 2026 The Exterior Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Blade coordinates of k-forms on ``R^n``.

Basis blades are laid out by bitmask over ``2^n`` slots: ``e_i`` sits at
index ``1 << i`` and ``e_{i1} ∧ ... ∧ e_{ik}`` at the OR of its bits.
A k-form is determined by its values on ascending basis blades, which
gives the coefficient vector of the corresponding k-vector.
"""

from typing import List

import torch

from core.alternating import AlternatingMap
from functional.forms import elementary_form


def blade_bits(blade: int, dim: int) -> List[int]:
    """Basis vector indices of *blade*, ascending."""
    return [i for i in range(dim) if blade & (1 << i)]


def grade_mask(dim: int, k: int) -> torch.Tensor:
    """Boolean mask over the ``2^dim`` blades selecting grade *k*."""
    return torch.tensor(
        [bin(i).count('1') == k for i in range(2 ** dim)],
        dtype=torch.bool,
    )


def blade_coefficients(f: AlternatingMap, dim: int, dtype=None) -> torch.Tensor:
    """Coefficients of a scalar-valued k-form on the grade-k blades of ``R^dim``.

    Args:
        f (AlternatingMap): Form of arity ``k`` on vectors of length *dim*.
        dim (int): Ambient dimension.
        dtype: Coefficient dtype. Defaults to the promoted dtype of the
            values ``f`` takes on the basis blades.

    Returns:
        torch.Tensor: ``[2^dim]``, zero outside grade ``k``.

    Raises:
        ValueError: If a value does not fit *dtype* exactly.
    """
    k = f.arity
    basis = torch.eye(dim, dtype=torch.int64 if dtype is None else dtype)
    blades = grade_mask(dim, k).nonzero(as_tuple=False).squeeze(-1).tolist() if k <= dim else []
    values = []
    for blade in blades:
        frame = tuple(basis[i] for i in blade_bits(blade, dim))
        values.append(torch.as_tensor(f(frame)))

    if dtype is None:
        dtype = torch.int64
        for value in values:
            dtype = torch.promote_types(dtype, value.dtype)
    coeffs = torch.zeros(2 ** dim, dtype=dtype)
    for blade, value in zip(blades, values):
        converted = value.to(dtype)
        if not torch.equal(converted.to(value.dtype), value):
            raise ValueError(f"blade {blade} has value {value.item()!r}, not exact in {dtype}")
        coeffs[blade] = converted
    return coeffs


def form_from_blades(coeffs: torch.Tensor, dim: int, k: int) -> AlternatingMap:
    """The k-form ``Σ_I c_I dx_I`` from grade-k blade coefficients.

    Inverse of :func:`blade_coefficients` on grade ``k``; entries outside
    grade ``k`` are ignored. Values keep the dtype of *coeffs*.
    """
    if coeffs.shape[-1] != 2 ** dim:
        raise ValueError(f"expected {2 ** dim} blade coefficients, got {coeffs.shape[-1]}")
    if k == 0:
        raise ValueError("0-forms are scalars, not alternating maps of positive arity")
    result = AlternatingMap.zero(k, torch.zeros((), dtype=coeffs.dtype))
    for blade in grade_mask(dim, k).nonzero(as_tuple=False).squeeze(-1).tolist():
        c = coeffs[blade]
        if bool(c != 0):
            result = result + elementary_form(blade_bits(blade, dim)).scalar_mul(c)
    return result
