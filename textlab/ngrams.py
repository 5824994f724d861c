#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import List

from textlab.errors import InvalidArgument, require_text

NGRAM_CHAR = "char"
NGRAM_WORD = "word"
NGRAM_MODES = (NGRAM_CHAR, NGRAM_WORD)

_JOINERS = {NGRAM_CHAR: "", NGRAM_WORD: " "}


def ngrams(text: str, n: int, mode: str = NGRAM_CHAR) -> List[str]:
    """Overlapping windows of n tokens, left to right.

    char mode uses code points as tokens; word mode uses whitespace-separated words
    (empty pieces dropped). Fewer than n tokens yields [].
    """
    require_text(text)
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidArgument(f"n must be int, got {type(n).__name__}")
    if n < 1:
        raise InvalidArgument(f"n must be >= 1, got {n}")
    if mode == NGRAM_CHAR:
        tokens = list(text)
    elif mode == NGRAM_WORD:
        tokens = text.split()
    else:
        raise InvalidArgument(f"unknown n-gram mode: {mode!r} (expected one of {', '.join(NGRAM_MODES)})")
    joiner = _JOINERS[mode]
    return [joiner.join(tokens[i : i + n]) for i in range(len(tokens) - n + 1)]
