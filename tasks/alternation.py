# Exterior: Exact Alternating Multilinear Maps
# Copyright (C) 2026 The Exterior Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

import math

from core.alternatize import alternatize, alternatization_vanishes
from core.errors import InvariantViolation
from core.module import equal
from core.multilinear import MultilinearMap
from core.validation import check_alternating_at, check_perm_law, check_swap_law
from functional.forms import determinant
from tasks.base import BaseTask
from log import get_logger

logger = get_logger(__name__)


class AlternationCheckTask(BaseTask):
    """Alternatize random integer multilinear maps and check the laws.

    Maps under test: the alternatization of a random coefficient tensor of
    arity ``check.arity`` on ``Z^dim``, and the ``dim × dim`` determinant.

    The scaling law alternatizes an alternatization, which costs ``(n!)²``
    evaluations of the source map, so it is only checked up to
    ``MAX_SCALING_ARITY``.
    """

    MAX_SCALING_ARITY = 5

    def setup_maps(self):
        arity = self.bound_arity("alt(random)", int(self.cfg.check.arity))
        self.bound_arity("det", self.dim)
        coeffs = self.random_coeffs(*([self.dim] * arity))
        self.source = MultilinearMap.from_tensor(coeffs)
        for name, n in (("alt(random)", arity), ("det", self.dim)):
            if n > self.MAX_SCALING_ARITY:
                logger.info("%s: arity %d, skipping the scaling law", name, n)
        return {
            "alt(random)": alternatize(self.source),
            "det": determinant(self.dim),
        }

    def check(self, name, f, values):
        laws = ["alternating"]
        check_alternating_at(f, values)
        if f.arity >= 2:
            i, j = self.random_pair(f.index)
            check_swap_law(f, values, i, j)
            check_perm_law(f, values, self.random_permutation(f.index))
            laws += ["swap", "perm"]

            if name == "alt(random)":
                repeated = list(values)
                repeated[f.index.position(j)] = repeated[f.index.position(i)]
                alternatization_vanishes(self.source, repeated, i, j)
                laws.append("pairing")

        if f.arity <= self.MAX_SCALING_ARITY:
            scaled = alternatize(f)(values)
            expected = math.factorial(f.arity) * f(values)
            if not equal(scaled, expected):
                raise InvariantViolation(
                    f"{name}: alternatize(f) = {scaled!r}, expected {f.arity}! • f = {expected!r}"
                )
            laws.append("scaling")
        return laws
