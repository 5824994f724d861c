#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Host-side dispatch for textlab functions.

Callers pick operations by name and always get an OperationResult back: failures
from the pure functions are turned into (error_kind, message) values here instead
of propagating. Inputs longer than Settings.max_input_chars are rejected before
any quadratic work starts, and decoders stop at Settings.max_output_chars.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from text_payload_compression import PayloadError, payload_from_json
from textlab.bwt import bwt_decode, bwt_encode
from textlab.config import Settings
from textlab.dictionary_codec import compress, decompress
from textlab.errors import AmbiguousInput, InvalidArgument, TextLabError
from textlab.lexical import (
    remove_stopwords,
    sentiment,
    split_sentences,
    stem,
    tokenize_words,
    word_frequency,
)
from textlab.metrics import character_distribution, compression_ratio
from textlab.ngrams import NGRAM_CHAR, NGRAM_WORD, ngrams
from textlab.rle import is_ambiguous, rle_decode, rle_encode
from textlab.similarity import format_score, levenshtein_distance, similarity


@dataclass(frozen=True)
class OperationResult:
    name: str
    ok: bool
    value: object = None
    error_kind: Optional[str] = None
    message: str = ""
    advisory: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        out: Dict[str, object] = {"name": self.name, "ok": self.ok}
        if self.ok:
            out["value"] = self.value
        else:
            out["error"] = {"kind": self.error_kind, "message": self.message}
        if self.advisory:
            out["advisory"] = self.advisory
        return out


Operation = Callable[[str, str, Settings], object]


def _similarity(primary: str, secondary: str, settings: Settings) -> object:
    if settings.similarity_ignore_case:
        primary, secondary = primary.lower(), secondary.lower()
    return format_score(similarity(primary, secondary))


def _levenshtein(primary: str, secondary: str, settings: Settings) -> object:
    return levenshtein_distance(primary, secondary)


def _bwt_encode(primary: str, secondary: str, settings: Settings) -> object:
    return bwt_encode(primary, sentinel=settings.bwt_sentinel)


def _bwt_decode(primary: str, secondary: str, settings: Settings) -> object:
    return bwt_decode(primary, sentinel=settings.bwt_sentinel)


def _bwt_roundtrip(primary: str, secondary: str, settings: Settings) -> object:
    return bwt_decode(bwt_encode(primary, sentinel=settings.bwt_sentinel))


def _dict_compress(primary: str, secondary: str, settings: Settings) -> object:
    dictionary, ids = compress(primary)
    return {"dictionary": dictionary, "compressed": ids}


def _dict_decompress(primary: str, secondary: str, settings: Settings) -> object:
    dictionary, ids = compress(primary)
    return decompress(dictionary, ids)


def _dict_unpack(primary: str, secondary: str, settings: Settings) -> object:
    try:
        dictionary, ids = payload_from_json(primary)
    except PayloadError as e:
        raise InvalidArgument(str(e)) from e
    text = decompress(dictionary, ids)
    if len(text) > settings.max_output_chars:
        raise InvalidArgument(f"decoded text is {len(text)} chars, limit is {settings.max_output_chars}")
    return text


def _rle_encode(primary: str, secondary: str, settings: Settings) -> object:
    return rle_encode(primary)


def _rle_decode(primary: str, secondary: str, settings: Settings) -> object:
    return rle_decode(primary, max_output=settings.max_output_chars)


def _rle_roundtrip(primary: str, secondary: str, settings: Settings) -> object:
    return rle_decode(rle_encode(primary), max_output=settings.max_output_chars)


def _compression_ratio(primary: str, secondary: str, settings: Settings) -> object:
    return compression_ratio(primary, rle_encode(primary))


def _char_ngrams(primary: str, secondary: str, settings: Settings) -> object:
    return ngrams(primary, settings.ngram_size, NGRAM_CHAR)


def _word_ngrams(primary: str, secondary: str, settings: Settings) -> object:
    return ngrams(primary, settings.ngram_size, NGRAM_WORD)


def _unary(fn: Callable[[str], object]) -> Operation:
    def run(primary: str, secondary: str, settings: Settings) -> object:
        return fn(primary)

    return run


OPERATIONS: Dict[str, Operation] = {
    "similarity": _similarity,
    "levenshtein": _levenshtein,
    "bwt_encode": _bwt_encode,
    "bwt_decode": _bwt_decode,
    "bwt_roundtrip": _bwt_roundtrip,
    "dict_compress": _dict_compress,
    "dict_decompress": _dict_decompress,
    "dict_unpack": _dict_unpack,
    "rle_encode": _rle_encode,
    "rle_decode": _rle_decode,
    "rle_roundtrip": _rle_roundtrip,
    "compression_ratio": _compression_ratio,
    "char_ngrams": _char_ngrams,
    "word_ngrams": _word_ngrams,
    "remove_stopwords": _unary(remove_stopwords),
    "stem": _unary(stem),
    "sentiment": _unary(sentiment),
    "word_frequency": _unary(word_frequency),
    "tokenize_words": _unary(tokenize_words),
    "split_sentences": _unary(split_sentences),
    "character_distribution": _unary(character_distribution),
}

# Operations whose output changes meaning when the input already holds digits.
RLE_OPERATIONS = frozenset(("rle_encode", "rle_roundtrip", "compression_ratio"))
# These expect an encoded form as input, so they only run when named explicitly.
EXPLICIT_OPERATIONS = frozenset(("bwt_decode", "dict_unpack"))
DEFAULT_OPERATIONS = tuple(name for name in OPERATIONS if name not in EXPLICIT_OPERATIONS)


def _check_inputs(primary: object, secondary: object, settings: Settings) -> None:
    for label, value in (("primary", primary), ("secondary", secondary)):
        if not isinstance(value, str):
            raise InvalidArgument(f"{label} input must be str, got {type(value).__name__}")
        if len(value) > settings.max_input_chars:
            raise InvalidArgument(
                f"{label} input is {len(value)} chars, limit is {settings.max_input_chars}"
            )


def run_operation(
    name: str,
    primary: str,
    secondary: str = "",
    settings: Optional[Settings] = None,
) -> OperationResult:
    if settings is None:
        settings = Settings()
    op = OPERATIONS.get(name)
    try:
        if op is None:
            raise InvalidArgument(f"unknown operation: {name!r}")
        _check_inputs(primary, secondary, settings)
        value = op(primary, secondary, settings)
    except TextLabError as e:
        return OperationResult(name=name, ok=False, error_kind=e.kind, message=str(e))
    advisory = None
    if name in RLE_OPERATIONS and is_ambiguous(primary):
        advisory = AmbiguousInput.kind
    return OperationResult(name=name, ok=True, value=value, advisory=advisory)


def run_all(
    primary: str,
    secondary: str = "",
    settings: Optional[Settings] = None,
    names: Optional[Iterable[str]] = None,
) -> List[OperationResult]:
    selected = list(names) if names is not None else list(DEFAULT_OPERATIONS)
    return [run_operation(name, primary, secondary, settings) for name in selected]
