#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Wire format for dictionary-compressed text.

A payload carries the (dictionary, ids) pair produced by textlab.dictionary_codec.compress
so it can leave the process and be decompressed elsewhere:

    MAGIC(2) VERSION(1) MODE(1) FLAGS(1) BODY(...) CRC8(1)

BODY is the serialized pair, optionally passed through a container codec
(deflate, zlib, bz2, lzma, zstd) selected by MODE:

    varint token_count
    token_count x (varint id, varint utf8_len, utf8 bytes)   # in id order
    varint id_count
    id_count x varint id

The container codecs are a transport option for the serialized pair only; the
dictionary codec itself does no entropy coding. FLAG_DENSE_IDS marks payloads whose
ids are exactly 1..token_count, which is what compress() produces; the decoder
holds such payloads to that promise.
"""

from __future__ import annotations

import bz2
import json
import lzma
import zlib
from typing import Dict, List, Mapping, Sequence, Tuple

import zstandard

from textlab.dictionary_codec import compress, decompress, invert_dictionary
from textlab.errors import TextLabError

MAGIC = b"TL"
VERSION = 1

MODE_RAW = 0
MODE_DEFLATE = 2
MODE_ZLIB = 3
MODE_BZ2 = 4
MODE_LZMA = 5
MODE_ZSTD = 9
SUPPORTED_MODES = (
    MODE_RAW,
    MODE_DEFLATE,
    MODE_ZLIB,
    MODE_BZ2,
    MODE_LZMA,
    MODE_ZSTD,
)
MODE_TO_NAME: Dict[int, str] = {
    MODE_RAW: "raw",
    MODE_DEFLATE: "deflate",
    MODE_ZLIB: "zlib",
    MODE_BZ2: "bz2",
    MODE_LZMA: "lzma",
    MODE_ZSTD: "zstd",
}
NAME_TO_MODE: Dict[str, int] = {name: mode for mode, name in MODE_TO_NAME.items()}

FLAG_DENSE_IDS = 1 << 0
KNOWN_FLAGS = FLAG_DENSE_IDS

MAX_TOKEN_BYTES = 1 << 20
HEADER_LEN = 5


class PayloadError(ValueError):
    pass


class PayloadFormatError(PayloadError):
    pass


class PayloadCRCError(PayloadError):
    pass


def _crc8(data: bytes, poly: int = 0x07, init: int = 0x00) -> int:
    crc = init & 0xFF
    for b in data:
        crc ^= b
        for _ in range(8):
            if crc & 0x80:
                crc = ((crc << 1) ^ poly) & 0xFF
            else:
                crc = (crc << 1) & 0xFF
    return crc & 0xFF


def _varint_encode(value: int) -> bytes:
    if value < 0:
        raise PayloadError("negative varint is not supported")
    out = bytearray()
    v = int(value)
    while True:
        b = v & 0x7F
        v >>= 7
        if v:
            out.append(b | 0x80)
        else:
            out.append(b)
            break
    return bytes(out)


def _varint_decode(data: bytes, offset: int) -> Tuple[int, int]:
    result = 0
    shift = 0
    pos = offset
    while pos < len(data):
        b = data[pos]
        pos += 1
        result |= (b & 0x7F) << shift
        if (b & 0x80) == 0:
            return result, pos
        shift += 7
        if shift > 35:
            break
    raise PayloadFormatError("invalid varint")


def _encode_body(dictionary: Mapping[str, int], ids: Sequence[int]) -> bytes:
    inverse = invert_dictionary(dictionary)
    out = bytearray()
    out.extend(_varint_encode(len(inverse)))
    for token_id in sorted(inverse):
        raw = inverse[token_id].encode("utf-8")
        if len(raw) > MAX_TOKEN_BYTES:
            raise PayloadError(f"token too long for payload (> {MAX_TOKEN_BYTES} bytes)")
        out.extend(_varint_encode(token_id))
        out.extend(_varint_encode(len(raw)))
        out.extend(raw)
    out.extend(_varint_encode(len(ids)))
    for token_id in ids:
        if token_id not in inverse:
            raise PayloadError(f"id {token_id!r} has no dictionary entry")
        out.extend(_varint_encode(token_id))
    return bytes(out)


def _is_dense(dictionary: Mapping[str, int]) -> bool:
    return sorted(dictionary.values()) == list(range(1, len(dictionary) + 1))


def _check_pair(dictionary: Mapping[str, int], ids: Sequence[object]) -> None:
    try:
        inverse = invert_dictionary(dictionary)
    except TextLabError as e:
        raise PayloadFormatError(str(e)) from e
    for token_id in ids:
        if isinstance(token_id, bool) or not isinstance(token_id, int):
            raise PayloadFormatError(f"compressed ids must be ints, got {token_id!r}")
        if token_id not in inverse:
            raise PayloadFormatError(f"id {token_id} has no dictionary entry")


def _decode_body(data: bytes, flags: int = 0) -> Tuple[Dict[str, int], List[int]]:
    pos = 0
    token_count, pos = _varint_decode(data, pos)
    dictionary: Dict[str, int] = {}
    for _ in range(token_count):
        token_id, pos = _varint_decode(data, pos)
        ln, pos = _varint_decode(data, pos)
        if ln > MAX_TOKEN_BYTES:
            raise PayloadFormatError(f"token too long: {ln}")
        end = pos + ln
        if end > len(data):
            raise PayloadFormatError("truncated token payload")
        try:
            tok = data[pos:end].decode("utf-8", errors="strict")
        except UnicodeDecodeError as e:
            raise PayloadFormatError(f"invalid utf-8 in token: {e}") from e
        pos = end
        if tok in dictionary:
            raise PayloadFormatError(f"duplicate token for id {token_id}")
        dictionary[tok] = token_id
    id_count, pos = _varint_decode(data, pos)
    ids: List[int] = []
    for _ in range(id_count):
        token_id, pos = _varint_decode(data, pos)
        ids.append(token_id)
    if pos != len(data):
        raise PayloadFormatError("trailing bytes in payload body")
    _check_pair(dictionary, ids)
    if flags & FLAG_DENSE_IDS and not _is_dense(dictionary):
        raise PayloadFormatError("dense-ids flag set but ids are not 1..token_count")
    return dictionary, ids


def _encode_binary_bytes(raw: bytes, mode: int) -> bytes:
    if mode == MODE_RAW:
        return raw
    if mode == MODE_DEFLATE:
        cobj = zlib.compressobj(level=9, wbits=-15)
        return cobj.compress(raw) + cobj.flush()
    if mode == MODE_ZLIB:
        return zlib.compress(raw, level=9)
    if mode == MODE_BZ2:
        return bz2.compress(raw, compresslevel=9)
    if mode == MODE_LZMA:
        return lzma.compress(raw, preset=9)
    if mode == MODE_ZSTD:
        cctx = zstandard.ZstdCompressor(level=10)
        return cctx.compress(raw)
    raise PayloadError(f"unsupported payload mode: {mode}")


def _decode_binary_bytes(data: bytes, mode: int) -> bytes:
    try:
        if mode == MODE_RAW:
            return data
        elif mode == MODE_DEFLATE:
            return zlib.decompress(data, wbits=-15)
        elif mode == MODE_ZLIB:
            return zlib.decompress(data)
        elif mode == MODE_BZ2:
            return bz2.decompress(data)
        elif mode == MODE_LZMA:
            return lzma.decompress(data)
        elif mode == MODE_ZSTD:
            dctx = zstandard.ZstdDecompressor()
            return dctx.decompress(data)
    except (zlib.error, OSError, lzma.LZMAError, zstandard.ZstdError, EOFError) as e:
        raise PayloadFormatError(f"{mode_name(mode)} body is corrupt: {e}") from e
    raise PayloadFormatError(f"unsupported mode: {mode}")


def mode_name(mode: int) -> str:
    return MODE_TO_NAME.get(int(mode), "unknown")


def mode_from_name(name: str) -> int:
    mode = NAME_TO_MODE.get(str(name or "").strip().lower())
    if mode is None:
        raise PayloadError(f"unknown payload mode: {name!r} (expected one of {', '.join(NAME_TO_MODE)})")
    return mode


def pack_payload(dictionary: Mapping[str, int], ids: Sequence[int], mode: int = MODE_RAW) -> bytes:
    if mode not in SUPPORTED_MODES:
        raise PayloadError(f"unsupported payload mode: {mode}")
    try:
        body = _encode_body(dictionary, list(ids))
    except TextLabError as e:
        raise PayloadError(str(e)) from e
    data = _encode_binary_bytes(body, mode)

    flags = 0
    if _is_dense(dictionary):
        flags |= FLAG_DENSE_IDS
    header = bytes([MAGIC[0], MAGIC[1], VERSION, mode & 0xFF, flags & 0xFF])
    crc = _crc8(header + data)
    return header + data + bytes([crc])


def unpack_payload(blob: bytes) -> Tuple[Dict[str, int], List[int]]:
    if not isinstance(blob, (bytes, bytearray)):
        raise PayloadFormatError("blob must be bytes")
    raw = bytes(blob)
    if len(raw) < HEADER_LEN + 1:
        raise PayloadFormatError("payload too short")
    if raw[:2] != MAGIC:
        raise PayloadFormatError("invalid MAGIC")
    ver = raw[2]
    if ver != VERSION:
        raise PayloadFormatError(f"unsupported version: {ver}")
    mode = raw[3]
    if mode not in SUPPORTED_MODES:
        raise PayloadFormatError(f"unsupported mode: {mode}")
    flags = raw[4]
    if flags & ~KNOWN_FLAGS:
        raise PayloadFormatError(f"unknown flags: 0x{flags:02x}")
    data = raw[HEADER_LEN:-1]
    if _crc8(raw[:-1]) != raw[-1]:
        raise PayloadCRCError("CRC8 mismatch")
    return _decode_body(_decode_binary_bytes(data, mode), flags)


def compress_text(text: str, mode: int = MODE_RAW) -> bytes:
    if not isinstance(text, str):
        raise PayloadError("text must be str")
    dictionary, ids = compress(text)
    return pack_payload(dictionary, ids, mode=mode)


def decompress_text(blob: bytes) -> str:
    dictionary, ids = unpack_payload(blob)
    try:
        return decompress(dictionary, ids)
    except TextLabError as e:
        raise PayloadFormatError(str(e)) from e


def should_compress(text: str, mode: int = MODE_ZLIB, min_gain_bytes: int = 2) -> bool:
    plain = text.encode("utf-8")
    if not plain:
        return False
    try:
        comp = compress_text(text, mode=mode)
    except PayloadError:
        return False
    return len(comp) < (len(plain) - int(min_gain_bytes))


def payload_stats(text: str, mode: int = MODE_ZLIB) -> Dict[str, object]:
    """Size telemetry for packing text in the given mode. Diagnostic only."""
    if not isinstance(text, str):
        text = str(text)
    dictionary, ids = compress(text)
    plain_bytes = len(text.encode("utf-8"))
    packed_bytes = len(pack_payload(dictionary, ids, mode=mode))
    gain_pct: float
    if plain_bytes > 0:
        gain_pct = ((plain_bytes - packed_bytes) / float(plain_bytes)) * 100.0
    else:
        gain_pct = 0.0
    return {
        "mode": mode_name(mode),
        "plain_bytes": plain_bytes,
        "packed_bytes": packed_bytes,
        "tokens": len(ids),
        "distinct_tokens": len(dictionary),
        "delta_bytes": plain_bytes - packed_bytes,
        "gain_pct": gain_pct,
    }


def payload_to_json(dictionary: Mapping[str, int], ids: Sequence[int]) -> str:
    return json.dumps(
        {"dictionary": dict(dictionary), "compressed": list(ids)},
        ensure_ascii=False,
        separators=(",", ":"),
    )


def payload_from_json(text: str) -> Tuple[Dict[str, int], List[int]]:
    try:
        data = json.loads(text)
    except ValueError as e:
        raise PayloadFormatError(f"invalid JSON payload: {e}") from e
    if not isinstance(data, dict):
        raise PayloadFormatError("JSON payload must be an object")
    dictionary = data.get("dictionary")
    ids = data.get("compressed")
    if not isinstance(dictionary, dict) or not isinstance(ids, list):
        raise PayloadFormatError("JSON payload needs 'dictionary' object and 'compressed' list")
    _check_pair(dictionary, ids)
    return dict(dictionary), list(ids)
