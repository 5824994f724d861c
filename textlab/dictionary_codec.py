#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Tuple

from textlab.errors import InvalidArgument, UnknownId, require_text


def split_tokens(text: str) -> List[str]:
    """Split into alternating non-whitespace and whitespace runs.

    Separators are kept as tokens => "".join(split_tokens(text)) == text.
    """
    require_text(text)
    tokens: List[str] = []
    buf: List[str] = []
    in_space = False
    for ch in text:
        is_space = ch.isspace()
        if buf and is_space != in_space:
            tokens.append("".join(buf))
            buf.clear()
        buf.append(ch)
        in_space = is_space
    if buf:
        tokens.append("".join(buf))
    return tokens


def compress(text: str) -> Tuple[Dict[str, int], List[int]]:
    dictionary: Dict[str, int] = {}
    ids: List[int] = []
    for tok in split_tokens(text):
        token_id = dictionary.get(tok)
        if token_id is None:
            token_id = len(dictionary) + 1
            dictionary[tok] = token_id
        ids.append(token_id)
    return dictionary, ids


def invert_dictionary(dictionary: Mapping[str, int]) -> Dict[int, str]:
    if not isinstance(dictionary, Mapping):
        raise InvalidArgument("dictionary must be a mapping of token -> id")
    inverse: Dict[int, str] = {}
    for tok, token_id in dictionary.items():
        if not isinstance(tok, str):
            raise InvalidArgument(f"dictionary key must be str, got {type(tok).__name__}")
        if isinstance(token_id, bool) or not isinstance(token_id, int) or token_id < 1:
            raise InvalidArgument(f"dictionary id must be a positive int, got {token_id!r}")
        if token_id in inverse:
            raise InvalidArgument(f"dictionary id {token_id} is assigned to more than one token")
        inverse[token_id] = tok
    return inverse


def decompress(dictionary: Mapping[str, int], ids: Iterable[int]) -> str:
    inverse = invert_dictionary(dictionary)
    out: List[str] = []
    for token_id in ids:
        tok = inverse.get(token_id)
        if tok is None:
            raise UnknownId(token_id)
        out.append(tok)
    return "".join(out)
