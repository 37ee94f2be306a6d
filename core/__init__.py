# Exterior: Exact Alternating Multilinear Maps
# Copyright (C) 2026 The Exterior Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Core kernel for exact alternating multilinear maps.

Provides permutation groups, multilinear and alternating maps,
alternatization, the domain coproduct over coset representatives, and
the involution-pairing cancellation helpers.
"""

from .errors import (
    ExteriorError,
    ShapeMismatch,
    IndexSetMismatch,
    InvalidSwap,
    InvariantViolation,
)
from .index import IndexSet, SumIndexSet, Inl, Inr
from .permutation import Permutation, PermutationGroup
from .multilinear import MultilinearMap, Coordinate
from .alternating import AlternatingMap
from .alternatize import alternatize, alternatization_terms, alternatization_vanishes
from .coproduct import ModSumCongr, dom_coprod, coprod_term, coprod_vanishes, full_group_coprod
from .combiners import ring_mul, tensor_product
from .cancellation import involution_pairs, cancelling_sum, left_swap

__all__ = [
    # errors
    "ExteriorError",
    "ShapeMismatch",
    "IndexSetMismatch",
    "InvalidSwap",
    "InvariantViolation",
    # index sets / groups
    "IndexSet",
    "SumIndexSet",
    "Inl",
    "Inr",
    "Permutation",
    "PermutationGroup",
    # maps
    "MultilinearMap",
    "Coordinate",
    "AlternatingMap",
    # alternatization
    "alternatize",
    "alternatization_terms",
    "alternatization_vanishes",
    # coproduct
    "ModSumCongr",
    "dom_coprod",
    "coprod_term",
    "coprod_vanishes",
    "full_group_coprod",
    "ring_mul",
    "tensor_product",
    # cancellation
    "involution_pairs",
    "cancelling_sum",
    "left_swap",
]
