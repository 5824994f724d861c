#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
textLab.py: run text algorithms (similarity, BWT, dictionary and run-length codecs,
n-grams, lexical analysis) over a primary and a secondary input string.

Usage:
    python textLab.py "AABBBCCCC" --op rle_encode
    python textLab.py "kitten" --second "sitting" --op similarity --op levenshtein
    python textLab.py "hello world hello" --pack zstd
    python textLab.py 544c010301... --unpack
"""

from __future__ import annotations

import argparse
import datetime as _dt
import json
import sys
from typing import List, Optional

from text_payload_compression import (
    PayloadError,
    compress_text,
    decompress_text,
    mode_from_name,
    payload_stats,
    should_compress,
    unpack_payload,
)
from textlab import VERSION
from textlab.config import PAYLOAD_MODE_NAMES, Settings, config_path, load_settings, save_settings
from textlab.dictionary_codec import decompress, invert_dictionary
from textlab.operations import DEFAULT_OPERATIONS, OPERATIONS, OperationResult, run_all

DEFAULTS = {
    "text": "Hello, World! 123",
    "second": "world",
}


def ts_now() -> str:
    return _dt.datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def out(msg: str) -> None:
    sys.stdout.write(msg + "\n")
    sys.stdout.flush()


def err(msg: str) -> None:
    sys.stderr.write(f"{ts_now()} ERROR: {msg}\n")
    sys.stderr.flush()


def render_value(value: object) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def format_result(res: OperationResult) -> str:
    if not res.ok:
        return f"{res.name}: [{res.error_kind}] {res.message}"
    line = f"{res.name}: {render_value(res.value)}"
    if res.advisory:
        line += f"  ({res.advisory}: digits in input, round trip not guaranteed)"
    return line


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    if args.max_input is not None:
        settings.max_input_chars = args.max_input
    if args.max_output is not None:
        settings.max_output_chars = args.max_output
    if args.ngram is not None:
        settings.ngram_size = args.ngram
    if args.case_sensitive:
        settings.similarity_ignore_case = False
    if args.pack:
        settings.payload_mode = args.pack
    return settings


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="textLab.py",
        description="Text transformation and analysis playground.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    ap.add_argument("text", nargs="?", default=DEFAULTS["text"], help=f"primary input (default: {DEFAULTS['text']!r})")
    ap.add_argument("--second", default=DEFAULTS["second"], help=f"secondary input, used by similarity (default: {DEFAULTS['second']!r})")
    ap.add_argument(
        "--op",
        action="append",
        default=None,
        choices=sorted(OPERATIONS),
        metavar="NAME",
        help="operation to run, repeatable (default: all except bwt_decode and dict_unpack). See --list-ops.",
    )
    ap.add_argument("--list-ops", action="store_true", help="print operation names and exit")
    ap.add_argument("--config", default=None, help="JSON settings file (default: $TEXTLAB_CONFIG or textlab_config.json)")
    ap.add_argument("--save-config", action="store_true", help="write effective settings to the config file and exit")
    ap.add_argument("--max-input", type=int, default=None, help="reject inputs longer than this many characters")
    ap.add_argument("--max-output", type=int, default=None, help="refuse to build decoded text longer than this many characters")
    ap.add_argument("--ngram", type=int, default=None, help="n for char_ngrams / word_ngrams")
    ap.add_argument("--case-sensitive", action="store_true", help="do not fold case before similarity")
    ap.add_argument("--json", action="store_true", help="print results as one JSON document")
    ap.add_argument(
        "--pack",
        nargs="?",
        const="",
        default=None,
        metavar="MODE",
        help=f"print the dictionary payload of the primary input; MODE is one of {', '.join(PAYLOAD_MODE_NAMES)}\n(default: payload_mode from the config file)",
    )
    ap.add_argument("--unpack", action="store_true", help="treat the primary input as a hex payload from --pack and print the decoded text")
    ap.add_argument("--quiet", action="store_true", help="print only failed operations")
    ap.add_argument("--version", action="store_true", help="print version and exit")
    return ap


def run_pack(text: str, mode_label: str, as_json: bool) -> int:
    try:
        mode = mode_from_name(mode_label)
        blob = compress_text(text, mode=mode)
        if decompress_text(blob) != text:
            err("packed payload does not decode to the input")
            return 1
        stats = payload_stats(text, mode=mode)
        worth = should_compress(text, mode=mode)
    except PayloadError as e:
        err(f"pack failed: {e}")
        return 1
    if as_json:
        out(json.dumps({"payload_hex": blob.hex(), "stats": stats, "worth_packing": worth}, ensure_ascii=False))
        return 0
    out(f"payload[{stats['mode']}]: {blob.hex()}")
    out(
        f"plain={stats['plain_bytes']}B packed={stats['packed_bytes']}B "
        f"tokens={stats['tokens']} distinct={stats['distinct_tokens']} gain={stats['gain_pct']:.1f}%"
    )
    if not worth:
        out(f"{ts_now()} payload is not smaller than the plain text, send it as is")
    return 0


def run_unpack(payload_hex: str, max_output: int, as_json: bool) -> int:
    try:
        blob = bytes.fromhex(payload_hex.strip())
    except ValueError as e:
        err(f"payload is not hex: {e}")
        return 1
    try:
        dictionary, ids = unpack_payload(blob)
        inverse = invert_dictionary(dictionary)
        size = sum(len(inverse[token_id]) for token_id in ids)
        if size > max_output:
            err(f"decoded text would be {size} chars, limit is {max_output}")
            return 1
        text = decompress(dictionary, ids)
    except PayloadError as e:
        err(f"unpack failed: {e}")
        return 1
    if as_json:
        out(json.dumps({"text": text, "tokens": len(ids), "distinct_tokens": len(dictionary)}, ensure_ascii=False))
    else:
        out(text)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    if args.version:
        out(f"textLab.py v{VERSION}")
        return 0
    if args.list_ops:
        for name in OPERATIONS:
            marker = "" if name in DEFAULT_OPERATIONS else "  (explicit only)"
            out(f"{name}{marker}")
        return 0
    if args.max_input is not None and args.max_input < 1:
        err("--max-input must be >= 1")
        return 2
    if args.max_output is not None and args.max_output < 1:
        err("--max-output must be >= 1")
        return 2
    if args.ngram is not None and args.ngram < 1:
        err("--ngram must be >= 1")
        return 2
    if args.pack and args.pack not in PAYLOAD_MODE_NAMES:
        err(f"--pack must be one of: {', '.join(PAYLOAD_MODE_NAMES)}")
        return 2
    if args.unpack and args.pack is not None:
        err("--pack and --unpack are mutually exclusive")
        return 2

    settings = apply_overrides(load_settings(args.config), args)

    if args.save_config:
        try:
            path = save_settings(settings, args.config)
        except OSError as e:
            err(f"cannot write config {config_path(args.config)}: {e}")
            return 2
        out(f"{ts_now()} settings saved to {path}")
        return 0

    if args.pack is not None:
        if len(args.text) > settings.max_input_chars:
            err(f"input is {len(args.text)} chars, limit is {settings.max_input_chars}")
            return 2
        return run_pack(args.text, settings.payload_mode, args.json)

    if args.unpack:
        return run_unpack(args.text, settings.max_output_chars, args.json)

    results = run_all(args.text, args.second, settings, names=args.op)
    failed = [r for r in results if not r.ok]

    if args.json:
        out(json.dumps([r.to_dict() for r in results], ensure_ascii=False))
    else:
        for res in results:
            if args.quiet and res.ok:
                continue
            out(format_result(res))
        if failed and not args.quiet:
            out(f"{ts_now()} {len(failed)} of {len(results)} operations failed")
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
