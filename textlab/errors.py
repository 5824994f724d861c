#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations


class TextLabError(ValueError):
    kind = "error"


class InvalidArgument(TextLabError):
    kind = "invalid_argument"


class SentinelCollision(TextLabError):
    kind = "sentinel_collision"


class UnknownId(TextLabError):
    kind = "unknown_id"

    def __init__(self, token_id: object) -> None:
        super().__init__(f"id {token_id!r} has no dictionary entry")
        self.token_id = token_id


class AmbiguousInput(TextLabError):
    """Run-length input holds decimal digits, so decode(encode(x)) may differ from x."""

    kind = "ambiguous_input"


def require_text(value: object, name: str = "text") -> str:
    if not isinstance(value, str):
        raise InvalidArgument(f"{name} must be str, got {type(value).__name__}")
    return value
