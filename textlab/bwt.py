#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Burrows-Wheeler transform over code points.

The encoder appends a sentinel that sorts before every character of the input,
so the decoder can find the original rotation without a separate index. "$" is
used when it qualifies; otherwise the low control characters below are tried in
order. Both directions are quadratic or worse and meant for short inputs.
"""

from __future__ import annotations

from typing import List, Optional

from textlab.errors import InvalidArgument, SentinelCollision, require_text

DEFAULT_SENTINEL = "$"
FALLBACK_SENTINELS = ("\x03", "\x02", "\x01", "\x00")
SENTINEL_CANDIDATES = (DEFAULT_SENTINEL,) + FALLBACK_SENTINELS


def _fits(sentinel: str, text: str) -> bool:
    return all(sentinel < ch for ch in text)


def choose_sentinel(text: str) -> str:
    require_text(text)
    for candidate in SENTINEL_CANDIDATES:
        if _fits(candidate, text):
            return candidate
    raise SentinelCollision("no sentinel sorts below every character of the input")


def bwt_encode(text: str, sentinel: Optional[str] = None) -> str:
    require_text(text)
    if not text:
        return ""
    if sentinel is None:
        sentinel = choose_sentinel(text)
    else:
        if not isinstance(sentinel, str) or len(sentinel) != 1:
            raise InvalidArgument("sentinel must be a single character")
        if not _fits(sentinel, text):
            raise SentinelCollision(f"sentinel {sentinel!r} is not smaller than every input character")

    marked = text + sentinel
    rotations = [marked[i:] + marked[:i] for i in range(len(marked))]
    rotations.sort()
    return "".join(rot[-1] for rot in rotations)


def bwt_decode(transformed: str, sentinel: Optional[str] = None) -> str:
    require_text(transformed)
    if not transformed:
        return ""
    if sentinel is None:
        # Every encoder output carries exactly one sentinel and it is the smallest code point.
        sentinel = min(transformed)
    count = transformed.count(sentinel)
    if count != 1:
        raise InvalidArgument(f"transformed text must contain the sentinel exactly once (found {count})")

    n = len(transformed)
    rows: List[str] = [""] * n
    for _ in range(n):
        rows = sorted(transformed[i] + rows[i] for i in range(n))
    for row in rows:
        if row.endswith(sentinel):
            return row[:-1]
    raise InvalidArgument("no rotation ends with the sentinel")
