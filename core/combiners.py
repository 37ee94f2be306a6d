# Exterior: Exact Alternating Multilinear Maps
# Copyright (C) 2026 The Exterior Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Bilinear combiners ``N₁ × N₂ → N₃`` for :func:`~core.coproduct.dom_coprod`."""

from typing import Any

import torch


def ring_mul(x: Any, y: Any) -> Any:
    """Ring multiplication, for ``N₁ = N₂ = R``.

    Tensors are multiplied elementwise, so batched scalar outputs work too.
    """
    return x * y


def tensor_product(x: Any, y: Any) -> torch.Tensor:
    """Raw tensor product ``x ⊗ y``.

    The result has shape ``x.shape + y.shape`` and is never contracted, so
    ``x ⊗ y`` and ``y ⊗ x`` stay distinct even over a commutative ring.
    Python scalars are promoted to 0-d tensors.
    """
    x = torch.as_tensor(x)
    y = torch.as_tensor(y)
    return x.reshape(x.shape + (1,) * y.dim()) * y
