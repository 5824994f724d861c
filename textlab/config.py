#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from typing import Dict, Optional

DEFAULT_CONFIG_FILE = "textlab_config.json"
CONFIG_ENV_VAR = "TEXTLAB_CONFIG"

MAX_INPUT_CHARS_LIMIT = 100000
MAX_OUTPUT_CHARS_LIMIT = 10000000
MAX_NGRAM_SIZE = 64
PAYLOAD_MODE_NAMES = ("raw", "deflate", "zlib", "bz2", "lzma", "zstd")


@dataclass
class Settings:
    # Upper bound on each input; similarity and BWT decode grow quadratically or worse.
    max_input_chars: int = 2000
    # Upper bound on text an operation may build, e.g. run-length decoding "999999999a".
    max_output_chars: int = 100000
    ngram_size: int = 2
    similarity_ignore_case: bool = True
    bwt_sentinel: Optional[str] = None
    payload_mode: str = "zlib"


def config_path(path: Optional[str] = None) -> str:
    if path:
        return path
    env = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if env:
        return env
    return DEFAULT_CONFIG_FILE


def _as_int(value: object, default: int, lo: int, hi: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        v = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return max(lo, min(hi, v))


def _as_bool(value: object, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        v = value.strip().lower()
        if v in ("1", "true", "yes", "on"):
            return True
        if v in ("0", "false", "no", "off"):
            return False
    return default


def settings_from_dict(data: Dict[str, object]) -> Settings:
    """Build Settings from a loose dict (unknown keys ignored, bad values fall back)."""
    base = Settings()
    if not isinstance(data, dict):
        return base
    sentinel = data.get("bwt_sentinel", base.bwt_sentinel)
    if not (isinstance(sentinel, str) and len(sentinel) == 1):
        sentinel = None
    mode = str(data.get("payload_mode", base.payload_mode) or "").strip().lower()
    if mode not in PAYLOAD_MODE_NAMES:
        mode = base.payload_mode
    return Settings(
        max_input_chars=_as_int(data.get("max_input_chars"), base.max_input_chars, 1, MAX_INPUT_CHARS_LIMIT),
        max_output_chars=_as_int(data.get("max_output_chars"), base.max_output_chars, 1, MAX_OUTPUT_CHARS_LIMIT),
        ngram_size=_as_int(data.get("ngram_size"), base.ngram_size, 1, MAX_NGRAM_SIZE),
        similarity_ignore_case=_as_bool(data.get("similarity_ignore_case"), base.similarity_ignore_case),
        bwt_sentinel=sentinel,
        payload_mode=mode,
    )


def load_settings(path: Optional[str] = None) -> Settings:
    cfg_file = config_path(path)
    if not os.path.isfile(cfg_file):
        return Settings()
    try:
        with open(cfg_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return Settings()
    return settings_from_dict(data)


def save_settings(settings: Settings, path: Optional[str] = None) -> str:
    cfg_file = config_path(path)
    parent = os.path.dirname(cfg_file)
    if parent:
        os.makedirs(parent, exist_ok=True)
    tmp = cfg_file + ".tmp"
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(asdict(settings), f, ensure_ascii=False, indent=2, sort_keys=True)
    os.replace(tmp, cfg_file)
    return cfg_file