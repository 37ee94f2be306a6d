# Exterior: Exact Alternating Multilinear Maps
# Copyright (C) 2026 The Exterior Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

import itertools
import unittest

from core.errors import IndexSetMismatch, InvalidSwap, ShapeMismatch
from core.index import IndexSet, Inl, Inr
from core.permutation import Permutation, PermutationGroup


class TestIndexSet(unittest.TestCase):
    def test_range_labels(self):
        index = IndexSet.range(3)
        self.assertEqual(index.labels, (0, 1, 2))
        self.assertEqual(len(index), 3)
        self.assertEqual(index.position(2), 2)

    def test_duplicate_labels_rejected(self):
        with self.assertRaises(ValueError):
            IndexSet(["a", "a"])

    def test_sum_tags_are_distinct(self):
        index = IndexSet.sum(IndexSet.range(2), IndexSet.range(1))
        self.assertNotEqual(Inl(0), Inr(0))
        self.assertEqual(index.labels, (Inl(0), Inl(1), Inr(0)))
        self.assertEqual(index.split, 2)
        self.assertEqual(index.inr(0), 2)
        self.assertTrue(index.is_left(1))
        self.assertFalse(index.is_left(2))

    def test_family_from_sequence_and_mapping(self):
        index = IndexSet(["x", "y"])
        self.assertEqual(index.family([1, 2]), (1, 2))
        self.assertEqual(index.family({"y": 2, "x": 1}), (1, 2))

    def test_family_shape_mismatch(self):
        index = IndexSet.range(2)
        with self.assertRaises(ShapeMismatch):
            index.family([1, 2, 3])
        with self.assertRaises(ShapeMismatch):
            index.family([1])
        with self.assertRaises(ShapeMismatch):
            index.family({0: 1, 5: 2})

    def test_unknown_label(self):
        with self.assertRaises(ShapeMismatch):
            IndexSet.range(2).position(7)


class TestPermutation(unittest.TestCase):
    def setUp(self):
        self.index = IndexSet.range(4)
        self.group = PermutationGroup(self.index)

    def test_identity_sign(self):
        self.assertEqual(self.group.sign(self.group.identity()), 1)
        self.assertTrue(self.group.identity().is_identity())

    def test_swap_sign_and_action(self):
        s = self.group.swap(0, 2)
        self.assertEqual(s.sign(), -1)
        self.assertEqual(s(0), 2)
        self.assertEqual(s(2), 0)
        self.assertEqual(s(1), 1)

    def test_swap_same_index_rejected(self):
        with self.assertRaises(InvalidSwap):
            self.group.swap(1, 1)
        with self.assertRaises(ValueError):
            Permutation.swap(self.index, 3, 3)

    def test_enumerate_is_the_whole_group(self):
        perms = list(self.group.enumerate())
        self.assertEqual(len(perms), 24)
        self.assertEqual(len(set(perms)), 24)
        self.assertEqual(len(self.group), 24)
        self.assertEqual(sum(p.sign() for p in perms), 0)

    def test_sign_is_a_homomorphism(self):
        group = PermutationGroup(3)
        for s, t in itertools.product(group.enumerate(), repeat=2):
            self.assertEqual((s * t).sign(), s.sign() * t.sign())

    def test_compose_is_function_composition(self):
        s = Permutation.from_cycles(self.index, (0, 1, 2))
        t = self.group.swap(2, 3)
        st = self.group.compose(s, t)
        for i in self.index:
            self.assertEqual(st(i), s(t(i)))

    def test_inverse(self):
        for s in self.group.enumerate():
            self.assertTrue((s * s.inverse()).is_identity())
            self.assertTrue((self.group.inverse(s) * s).is_identity())

    def test_from_cycles(self):
        s = Permutation.from_cycles(self.index, (0, 1, 2))
        self.assertEqual([s(i) for i in range(4)], [1, 2, 0, 3])
        self.assertEqual(s.sign(), 1)
        self.assertEqual(s.order, 3)
        self.assertEqual(s.cycles(), ((0, 1, 2),))

    def test_overlapping_cycles_rejected(self):
        with self.assertRaises(ValueError):
            Permutation.from_cycles(self.index, (0, 1), (1, 2))

    def test_transposition_word(self):
        for s in self.group.enumerate():
            word = s.transpositions()
            self.assertEqual(self.group.product(self.group.swap(*t) for t in word), s)
            self.assertEqual((-1) ** len(word), s.sign())

    def test_apply_to_reindexes(self):
        s = Permutation.from_cycles(self.index, (0, 1, 2))
        # (v ∘ σ)[p] = v[σ(p)]
        self.assertEqual(s.apply_to(("a", "b", "c", "d")), ("b", "c", "a", "d"))
        with self.assertRaises(ShapeMismatch):
            s.apply_to(("a", "b"))

    def test_mixed_index_sets_rejected(self):
        other = PermutationGroup(3).identity()
        with self.assertRaises(IndexSetMismatch):
            self.group.identity() * other

    def test_not_a_bijection(self):
        with self.assertRaises(ValueError):
            Permutation(self.index, [0, 0, 1, 2])


class TestSumCongr(unittest.TestCase):
    def setUp(self):
        self.index = IndexSet.sum(IndexSet.range(2), IndexSet.range(2))
        self.group = PermutationGroup(self.index)

    def test_subgroup_size(self):
        h = list(self.group.sum_congr_subgroup())
        self.assertEqual(len(h), 4)
        self.assertEqual(len(set(h)), 4)
        self.assertTrue(all(self.group.is_sum_congr(x) for x in h))

    def test_block_crossing_is_not_in_subgroup(self):
        crossing = self.group.swap(Inl(0), Inr(0))
        self.assertFalse(self.group.is_sum_congr(crossing))

    def test_sum_congr_sign(self):
        left = PermutationGroup(2).swap(0, 1)
        right = PermutationGroup(2).identity()
        h = self.group.sum_congr(left, right)
        self.assertEqual(h.sign(), left.sign() * right.sign())
        self.assertEqual(h(Inl(0)), Inl(1))
        self.assertEqual(h(Inr(1)), Inr(1))

    def test_requires_disjoint_union(self):
        with self.assertRaises(IndexSetMismatch):
            list(PermutationGroup(3).sum_congr_subgroup())


if __name__ == '__main__':
    unittest.main()
