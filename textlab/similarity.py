#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import List

from textlab.errors import require_text


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance between a and b (insert, delete, substitute; all cost 1).

    The table has len(b)+1 rows and len(a)+1 columns: cell [j][i] is the cost of
    turning a[:i] into b[:j]. Comparison is by code point and case-sensitive.
    """
    require_text(a, "a")
    require_text(b, "b")
    if not a:
        return len(b)
    if not b:
        return len(a)

    matrix: List[List[int]] = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]
    for i in range(len(a) + 1):
        matrix[0][i] = i
    for j in range(len(b) + 1):
        matrix[j][0] = j

    for j in range(1, len(b) + 1):
        for i in range(1, len(a) + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            matrix[j][i] = min(
                matrix[j - 1][i] + 1,
                matrix[j][i - 1] + 1,
                matrix[j - 1][i - 1] + cost,
            )
    return matrix[len(b)][len(a)]


def similarity(a: str, b: str) -> float:
    """Normalized similarity in [0, 1], rounded to 2 decimals.

    similarity("", "") is 1.0. When only one side is empty the distance equals the
    other length, so the score is 0.0.
    """
    longest = max(len(require_text(a, "a")), len(require_text(b, "b")))
    if longest == 0:
        return 1.0
    score = 1.0 - levenshtein_distance(a, b) / float(longest)
    return round(min(1.0, max(0.0, score)), 2)


def format_score(score: float) -> str:
    return f"{float(score):.2f}"
