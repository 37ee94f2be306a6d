# Exterior: Exact Alternating Multilinear Maps
# Copyright (C) 2026 The Exterior Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Error taxonomy for the exterior kernel.

All evaluation is pure, so none of these are retryable: they are raised
where detected and surfaced to the immediate caller.
"""


class ExteriorError(Exception):
    """Base class for every error raised by the kernel."""


class ShapeMismatch(ExteriorError, ValueError):
    """An argument family is indexed by the wrong index set."""


class IndexSetMismatch(ShapeMismatch):
    """Two maps or permutations live over different index sets."""


class InvalidSwap(ExteriorError, ValueError):
    """A transposition was requested on a single index."""


class InvariantViolation(ExteriorError, AssertionError):
    """A constructed map failed an algebraic law on a sampled input.

    Only raised by the debug validators in :mod:`core.validation` and
    :mod:`core.cancellation`; production evaluation never checks the
    alternation law.
    """
