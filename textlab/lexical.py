#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Small-lexicon text analysis: stopwords, suffix stemming, sentiment, word counts.

These are fixed heuristics, not linguistics. The stemmer turns "ring" into "r"
and "bus" into "bu"; that is the expected output of the rules.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, List, Tuple

from textlab.errors import require_text

STOPWORDS: FrozenSet[str] = frozenset(
    ("the", "is", "at", "which", "on", "a", "an", "and", "or", "but")
)
POSITIVE_WORDS: FrozenSet[str] = frozenset(
    ("good", "great", "awesome", "excellent", "happy", "love")
)
NEGATIVE_WORDS: FrozenSet[str] = frozenset(
    ("bad", "terrible", "awful", "horrible", "sad", "hate")
)

# Checked in order; the first matching suffix is stripped.
STEM_SUFFIXES: Tuple[str, ...] = ("ing", "ed", "s")

SENTENCE_TERMINATORS = frozenset(".!?")

SENTIMENT_POSITIVE = "Positive"
SENTIMENT_NEGATIVE = "Negative"
SENTIMENT_NEUTRAL = "Neutral"


def is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def tokenize_words(text: str) -> List[str]:
    """Maximal runs of word characters (letters, digits, underscore), case kept."""
    require_text(text)
    words: List[str] = []
    buf: List[str] = []
    for ch in text:
        if is_word_char(ch):
            buf.append(ch)
        elif buf:
            words.append("".join(buf))
            buf.clear()
    if buf:
        words.append("".join(buf))
    return words


def split_sentences(text: str) -> List[str]:
    """Sentences ending in one or more of . ! ?

    Leading whitespace stays attached to each sentence; trailing text with no
    terminator is not a sentence and is dropped.
    """
    require_text(text)
    sentences: List[str] = []
    buf: List[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch not in SENTENCE_TERMINATORS:
            buf.append(ch)
            i += 1
            continue
        j = i
        while j < n and text[j] in SENTENCE_TERMINATORS:
            j += 1
        if buf:
            sentences.append("".join(buf) + text[i:j])
            buf.clear()
        i = j
    return sentences


def remove_stopwords(text: str) -> str:
    words = require_text(text).lower().split()
    return " ".join(w for w in words if w not in STOPWORDS)


def _stem_word(word: str) -> str:
    for suffix in STEM_SUFFIXES:
        if word.endswith(suffix):
            return word[: -len(suffix)]
    return word


def stem(text: str) -> str:
    words = require_text(text).lower().split()
    return " ".join(_stem_word(w) for w in words)


def sentiment_counts(text: str) -> Tuple[int, int]:
    words = [w.lower() for w in tokenize_words(text)]
    positive = sum(1 for w in words if w in POSITIVE_WORDS)
    negative = sum(1 for w in words if w in NEGATIVE_WORDS)
    return positive, negative


def sentiment(text: str) -> str:
    positive, negative = sentiment_counts(text)
    if positive > negative:
        return SENTIMENT_POSITIVE
    if negative > positive:
        return SENTIMENT_NEGATIVE
    return SENTIMENT_NEUTRAL


def word_frequency(text: str) -> Dict[str, int]:
    freq: Dict[str, int] = {}
    for word in tokenize_words(text):
        key = word.lower()
        freq[key] = freq.get(key, 0) + 1
    return freq
