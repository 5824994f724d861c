#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Dict

from textlab.errors import InvalidArgument, require_text


def compression_ratio(original: str, compressed: str) -> str:
    """Size of compressed relative to original, as a percentage string ("66.67%")."""
    require_text(original, "original")
    require_text(compressed, "compressed")
    if not original:
        raise InvalidArgument("compression ratio is undefined for empty original text")
    return f"{(len(compressed) / float(len(original))) * 100.0:.2f}%"


def character_distribution(text: str) -> Dict[str, int]:
    dist: Dict[str, int] = {}
    for ch in require_text(text):
        if ch.isspace():
            continue
        dist[ch] = dist.get(ch, 0) + 1
    return dist
