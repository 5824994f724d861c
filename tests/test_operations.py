#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import json
import threading
import unittest

from textlab.config import Settings
from textlab.operations import DEFAULT_OPERATIONS, EXPLICIT_OPERATIONS, OPERATIONS, run_all, run_operation

HELLO_JSON = '{"dictionary":{"hello":1," ":2,"world":3},"compressed":[1,2,3,2,1]}'

# name -> (primary, secondary, expected value)
EXPECTED = {
    "similarity": ("kitten", "sitting", "0.57"),
    "levenshtein": ("kitten", "sitting", 3),
    "bwt_encode": ("banana", "", "annb$aa"),
    "bwt_decode": ("annb$aa", "", "banana"),
    "bwt_roundtrip": ("banana", "", "banana"),
    "dict_compress": ("hello world hello", "", {"dictionary": {"hello": 1, " ": 2, "world": 3}, "compressed": [1, 2, 3, 2, 1]}),
    "dict_decompress": ("hello world hello", "", "hello world hello"),
    "dict_unpack": (HELLO_JSON, "", "hello world hello"),
    "rle_encode": ("AABBBCCCC", "", "2A3B4C"),
    "rle_decode": ("2A3B4C", "", "AABBBCCCC"),
    "rle_roundtrip": ("AABBBCCCC", "", "AABBBCCCC"),
    "compression_ratio": ("AABBBCCCC", "", "66.67%"),
    "char_ngrams": ("hello", "", ["he", "el", "ll", "lo"]),
    "word_ngrams": ("the cat sat", "", ["the cat", "cat sat"]),
    "remove_stopwords": ("The cat IS on the mat", "", "cat mat"),
    "stem": ("Jumping jumped jumps jump", "", "jump jump jump jump"),
    "sentiment": ("This is good and great", "", "Positive"),
    "word_frequency": ("Hello, hello! HELLO?", "", {"hello": 3}),
    "tokenize_words": ("Hello, World! 123", "", ["Hello", "World", "123"]),
    "split_sentences": ("Hi there. Bye!", "", ["Hi there.", " Bye!"]),
    "character_distribution": ("a b\ta!", "", {"a": 2, "b": 1, "!": 1}),
}

# name -> (primary, expected error kind)
EXPECTED_FAILURES = {
    "bwt_encode": ("abc\x00", "sentinel_collision"),
    "bwt_decode": ("a$$b", "invalid_argument"),
    "dict_unpack": ('{"dictionary":{"a":1},"compressed":[1,2]}', "invalid_argument"),
    "rle_decode": ("99999999999999999999a", "invalid_argument"),
    "compression_ratio": ("", "invalid_argument"),
}


class RunOperationTests(unittest.TestCase):
    def test_similarity_folds_case_by_default(self) -> None:
        res = run_operation("similarity", "World", "world")
        self.assertTrue(res.ok)
        self.assertEqual(res.value, "1.00")

    def test_similarity_case_sensitive(self) -> None:
        res = run_operation("similarity", "World", "world", Settings(similarity_ignore_case=False))
        self.assertEqual(res.value, "0.80")

    def test_dict_compress_value(self) -> None:
        res = run_operation("dict_compress", "hello world hello")
        self.assertEqual(res.value, {"dictionary": {"hello": 1, " ": 2, "world": 3}, "compressed": [1, 2, 3, 2, 1]})

    def test_roundtrip_operations(self) -> None:
        text = "Hello, World!"
        for name in ("bwt_roundtrip", "dict_decompress", "rle_roundtrip"):
            res = run_operation(name, text)
            self.assertTrue(res.ok, msg=name)
            self.assertEqual(res.value, text, msg=name)

    def test_bwt_decode_explicit(self) -> None:
        self.assertEqual(run_operation("bwt_decode", "annb$aa").value, "banana")

    def test_ngram_size_from_settings(self) -> None:
        res = run_operation("char_ngrams", "hello", settings=Settings(ngram_size=3))
        self.assertEqual(res.value, ["hel", "ell", "llo"])

    def test_unknown_operation(self) -> None:
        res = run_operation("to_upper", "abc")
        self.assertFalse(res.ok)
        self.assertEqual(res.error_kind, "invalid_argument")

    def test_non_text_input(self) -> None:
        res = run_operation("stem", 42)  # type: ignore[arg-type]
        self.assertEqual(res.error_kind, "invalid_argument")

    def test_input_limit(self) -> None:
        settings = Settings(max_input_chars=5)
        self.assertEqual(run_operation("levenshtein", "abcdef", "", settings).error_kind, "invalid_argument")
        self.assertEqual(run_operation("levenshtein", "abc", "abcdef", settings).error_kind, "invalid_argument")
        self.assertTrue(run_operation("levenshtein", "abcde", "abc", settings).ok)

    def test_rle_advisory_on_digits(self) -> None:
        res = run_operation("rle_encode", "Hello, World! 123")
        self.assertTrue(res.ok)
        self.assertEqual(res.advisory, "ambiguous_input")
        self.assertIsNone(run_operation("rle_encode", "aab").advisory)
        self.assertIsNone(run_operation("stem", "room 101").advisory)

    def test_rle_decode_output_limit(self) -> None:
        for text in ("99999999999999999999a", "999999999a", "9" * 1500 + "a"):
            res = run_operation("rle_decode", text)
            self.assertFalse(res.ok, msg=text[:12])
            self.assertEqual(res.error_kind, "invalid_argument")
        settings = Settings(max_output_chars=3)
        self.assertEqual(run_operation("rle_decode", "3a", settings=settings).value, "aaa")
        self.assertEqual(run_operation("rle_decode", "4a", settings=settings).error_kind, "invalid_argument")

    def test_dict_unpack_rejects_bad_payloads(self) -> None:
        for text in ("not json", "[]", '{"dictionary":{"a":1,"b":1},"compressed":[1]}'):
            res = run_operation("dict_unpack", text)
            self.assertEqual(res.error_kind, "invalid_argument", msg=text)
        res = run_operation("dict_unpack", HELLO_JSON, settings=Settings(max_output_chars=10))
        self.assertEqual(res.error_kind, "invalid_argument")

    def test_to_dict_is_json_ready(self) -> None:
        ok = run_operation("word_frequency", "the cat the").to_dict()
        self.assertEqual(ok, {"name": "word_frequency", "ok": True, "value": {"the": 2, "cat": 1}})
        bad = run_operation("bwt_encode", "\x00").to_dict()
        self.assertEqual(bad["error"]["kind"], "sentinel_collision")
        json.dumps([ok, bad])


class RunAllTests(unittest.TestCase):
    def test_default_selection(self) -> None:
        results = run_all("Hello, World! 123", "world")
        self.assertEqual([r.name for r in results], list(DEFAULT_OPERATIONS))
        self.assertNotIn("bwt_decode", DEFAULT_OPERATIONS)
        self.assertTrue(all(r.ok for r in results), msg=[r for r in results if not r.ok])

    def test_named_selection(self) -> None:
        results = run_all("AABBBCCCC", names=["rle_encode", "compression_ratio"])
        self.assertEqual([r.value for r in results], ["2A3B4C", "66.67%"])

    def test_every_registered_operation_has_a_known_answer(self) -> None:
        self.assertEqual(set(EXPECTED), set(OPERATIONS))
        for name, (primary, secondary, value) in EXPECTED.items():
            res = run_operation(name, primary, secondary)
            self.assertTrue(res.ok, msg=f"{name}: {res.message}")
            self.assertEqual(res.value, value, msg=name)

    def test_failures_come_back_as_values(self) -> None:
        for name, (primary, kind) in EXPECTED_FAILURES.items():
            res = run_operation(name, primary)
            self.assertFalse(res.ok, msg=name)
            self.assertEqual(res.error_kind, kind, msg=name)
            self.assertTrue(res.message, msg=name)

    def test_explicit_operations_are_not_defaults(self) -> None:
        for name in EXPLICIT_OPERATIONS:
            self.assertIn(name, OPERATIONS)
            self.assertNotIn(name, DEFAULT_OPERATIONS)

    def test_concurrent_calls_agree(self) -> None:
        expected = [r.to_dict() for r in run_all("the good cat sat on the mat", "the bad cat")]
        seen = []
        lock = threading.Lock()

        def worker() -> None:
            got = [r.to_dict() for r in run_all("the good cat sat on the mat", "the bad cat")]
            with lock:
                seen.append(got)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(len(seen), 8)
        for got in seen:
            self.assertEqual(got, expected)


if __name__ == "__main__":
    unittest.main()
