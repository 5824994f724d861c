#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Run-length codec: "AABBBCCCC" <-> "2A3B4C".

Counts are written as plain decimal digits with no escaping, so text that already
contains digits does not survive a round trip ("3x" encodes to itself and decodes
to "xxx"). Use is_ambiguous() or rle_encode(..., strict=True) to detect that case.

Decoded size depends on the counts, not on the input length ("999999999a" is ten
characters), so rle_decode() refuses to build more than max_output characters.
"""

from __future__ import annotations

from typing import List, Optional

from textlab.errors import AmbiguousInput, InvalidArgument, require_text

DIGITS = frozenset("0123456789")
MIN_RUN = 2
DEFAULT_MAX_OUTPUT = 1000000


def is_ambiguous(text: str) -> bool:
    return any(ch in DIGITS for ch in require_text(text))


def rle_encode(text: str, strict: bool = False) -> str:
    require_text(text)
    if strict and is_ambiguous(text):
        raise AmbiguousInput("input contains decimal digits; run-length round trip is not guaranteed")
    out: List[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        j = i + 1
        while j < n and text[j] == ch:
            j += 1
        run = j - i
        if run >= MIN_RUN:
            out.append(f"{run}{ch}")
        else:
            out.append(ch)
        i = j
    return "".join(out)


def _run_count(digits: str, room: int) -> int:
    # Parse only as many digits as can fit; huge counts never reach int().
    significant = digits.lstrip("0")
    if len(significant) > len(str(room)):
        return room + 1
    return int(significant or "0")


def rle_decode(text: str, max_output: Optional[int] = None) -> str:
    require_text(text)
    limit = DEFAULT_MAX_OUTPUT if max_output is None else int(max_output)
    if limit < 0:
        raise InvalidArgument(f"max_output must be >= 0, got {limit}")
    out: List[str] = []
    total = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] not in DIGITS:
            piece = text[i]
            i += 1
        else:
            j = i
            while j < n and text[j] in DIGITS:
                j += 1
            if j >= n:
                # Digits at the very end have no character to repeat.
                piece = text[i:]
                i = n
            else:
                count = _run_count(text[i:j], limit - total)
                if count > limit - total:
                    raise InvalidArgument(f"decoded text would exceed {limit} chars")
                piece = text[j] * count
                i = j + 1
        total += len(piece)
        if total > limit:
            raise InvalidArgument(f"decoded text would exceed {limit} chars")
        out.append(piece)
    return "".join(out)
