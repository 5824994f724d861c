#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import unittest

from textlab.errors import InvalidArgument
from textlab.similarity import format_score, levenshtein_distance, similarity


class LevenshteinTests(unittest.TestCase):
    def test_classic_pair(self) -> None:
        self.assertEqual(levenshtein_distance("kitten", "sitting"), 3)

    def test_empty_side_is_other_length(self) -> None:
        self.assertEqual(levenshtein_distance("", "abc"), 3)
        self.assertEqual(levenshtein_distance("abcd", ""), 4)
        self.assertEqual(levenshtein_distance("", ""), 0)

    def test_counts_code_points_not_bytes(self) -> None:
        self.assertEqual(levenshtein_distance("привет", "привед"), 1)
        self.assertEqual(levenshtein_distance("a😊b", "ab"), 1)

    def test_case_sensitive(self) -> None:
        self.assertEqual(levenshtein_distance("World", "world"), 1)

    def test_rejects_non_text(self) -> None:
        with self.assertRaises(InvalidArgument):
            levenshtein_distance(b"abc", "abc")  # type: ignore[arg-type]


class SimilarityTests(unittest.TestCase):
    def test_identical_is_one(self) -> None:
        for s in ("", "a", "hello world", "привет 🚀"):
            self.assertEqual(similarity(s, s), 1.0)

    def test_both_empty_is_one(self) -> None:
        self.assertEqual(similarity("", ""), 1.0)

    def test_one_empty_is_zero(self) -> None:
        self.assertEqual(similarity("", "abc"), 0.0)
        self.assertEqual(similarity("abc", ""), 0.0)

    def test_symmetry(self) -> None:
        pairs = [("kitten", "sitting"), ("flaw", "lawn"), ("hello, world! 123", "world"), ("", "x")]
        for a, b in pairs:
            self.assertEqual(similarity(a, b), similarity(b, a))

    def test_rounded_to_two_decimals(self) -> None:
        # distance 3 over length 7
        self.assertEqual(similarity("kitten", "sitting"), 0.57)

    def test_range(self) -> None:
        self.assertEqual(similarity("abc", "xyz"), 0.0)
        score = similarity("abcdef", "abcxyz")
        self.assertGreaterEqual(score, 0.0)
        self.assertLessEqual(score, 1.0)

    def test_format_score(self) -> None:
        self.assertEqual(format_score(1.0), "1.00")
        self.assertEqual(format_score(similarity("kitten", "sitting")), "0.57")


if __name__ == "__main__":
    unittest.main()
