# Exterior: Exact Alternating Multilinear Maps
# Copyright (C) 2026 The Exterior Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

import math

from core.alternating import AlternatingMap
from core.coproduct import ModSumCongr, coprod_term, coprod_vanishes, dom_coprod, full_group_coprod
from core.combiners import ring_mul
from core.errors import InvariantViolation
from core.module import equal
from core.validation import check_alternating_at, check_perm_law, check_swap_law
from functional.forms import wedge
from tasks.base import BaseTask


class WedgeCheckTask(BaseTask):
    """Wedge random 1-forms into a ``left``-form and a ``right``-form and check
    their domain coproduct.

    Besides the alternating laws this checks degree additivity, that every
    element of a coset yields the canonical representative's term, and the
    ``|ιa|! · |ιb|!`` ratio to the full-group sum.
    """

    def setup_maps(self):
        left, right = int(self.cfg.check.left), int(self.cfg.check.right)
        if left < 1 or right < 1:
            raise ValueError(f"wedge factors need positive degree, got {left} and {right}")
        self.bound_arity("a ∧ b", left + right)
        self.a = wedge(*(self._random_form(f"a{k}") for k in range(left)))
        self.b = wedge(*(self._random_form(f"b{k}") for k in range(right)))
        self.quotient = ModSumCongr(self.a.index, self.b.index)
        w = dom_coprod(self.a, self.b, ring_mul)
        if w.arity != self.a.arity + self.b.arity:
            raise InvariantViolation(f"degree {w.arity} != {self.a.arity} + {self.b.arity}")
        return {"a ∧ b": w}

    def _random_form(self, name):
        c = self.random_coeffs(self.dim)
        return AlternatingMap.of_linear(lambda x: (c * x).sum(), name=name)

    def check(self, name, f, values):
        check_alternating_at(f, values)
        i, j = self.random_pair(f.index)
        check_swap_law(f, values, i, j)
        check_perm_law(f, values, self.random_permutation(f.index))
        laws = ["alternating", "swap", "perm"]

        for rep in self.quotient.representatives():
            canonical = coprod_term(self.a, self.b, ring_mul, values, rep)
            other = rep * self._random_block_permutation()
            if not equal(coprod_term(self.a, self.b, ring_mul, values, other), canonical):
                raise InvariantViolation(f"{name}: term differs between {rep!r} and {other!r}")
        laws.append("representative")

        repeated = list(values)
        repeated[f.index.position(j)] = repeated[f.index.position(i)]
        coprod_vanishes(self.a, self.b, ring_mul, repeated, i, j)
        laws.append("pairing")

        ratio = math.factorial(self.a.arity) * math.factorial(self.b.arity)
        if not equal(full_group_coprod(self.a, self.b, ring_mul, values), ratio * f(values)):
            raise InvariantViolation(f"{name}: full-group sum is not {ratio} • dom_coprod")
        laws.append("normalisation")
        return laws

    def _random_block_permutation(self):
        index = self.quotient.index
        return self.quotient.group.sum_congr(
            self.random_permutation(index.left), self.random_permutation(index.right),
        )
