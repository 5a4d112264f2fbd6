# tests/test_unit_fixed_code.py

import sys, os
# Добавляем src/ в путь
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import math
import unittest
from unittest import mock

from FixedCode import *
from errors import *
from utils import *

# ======================================================================
#                        UNIT TESTS FOR ALPHABET / CODE TABLE
# ======================================================================

class TestCodeTable(unittest.TestCase):

    def test_alphabet_first_seen_order(self):
        self.assertEqual(extract_alphabet("abacab"), [97, 98, 99])
        self.assertEqual(extract_alphabet("zyxz"), [ord("z"), ord("y"), ord("x")])

    def test_alphabet_rejects_empty_text(self):
        with self.assertRaises(EmptyInputError):
            extract_alphabet("")

    def test_code_width_matches_ceil_log2(self):
        for k in range(2, 1025):
            self.assertEqual(code_width(k), math.ceil(math.log2(k)), k)

    def test_code_width_boundaries(self):
        self.assertEqual(code_width(2), 1)
        self.assertEqual(code_width(3), 2)
        self.assertEqual(code_width(4), 2)
        self.assertEqual(code_width(5), 3)
        self.assertEqual(code_width(256), 8)
        self.assertEqual(code_width(257), 9)

    def test_single_symbol_alphabet_gets_one_bit(self):
        # log2(1) = 0, но код нулевой длины не декодируется
        self.assertEqual(code_width(1), 1)
        table, width = build_code_table([ord("a")])
        self.assertEqual(table, {97: 0})
        self.assertEqual(width, 1)

    def test_build_code_table_assigns_codes_in_order(self):
        table, width = build_code_table([97, 98, 99])
        self.assertEqual(table, {97: 0, 98: 1, 99: 2})
        self.assertEqual(width, 2)

    def test_build_code_table_rejects_empty_alphabet(self):
        with self.assertRaises(EmptyInputError):
            build_code_table([])

    def test_alphabet_too_large(self):
        with mock.patch("FixedCode.MAX_WIDTH", 1):
            with self.assertRaises(AlphabetTooLargeError):
                build_code_table([97, 98, 99])

# ======================================================================
#                        UNIT TESTS FOR ENCODE / DECODE
# ======================================================================

class TestEncodeDecode(unittest.TestCase):

    def test_encode_example(self):
        table = {97: 0, 98: 1, 99: 2}
        bits = encode_symbols("aabc", table, 2)
        self.assertEqual(bits, [0,0, 0,0, 0,1, 1,0])

    def test_encode_unmapped_symbol(self):
        with self.assertRaises(UnmappedSymbolError) as cm:
            encode_symbols("abz", {97: 0, 98: 1}, 1)
        self.assertIsInstance(cm.exception, InputError)

    def test_pack_example(self):
        packed, table, padding, width = FixedCode().pack("aabc")
        self.assertEqual(packed, b"\x06")
        self.assertEqual(table, {97: 0, 98: 1, 99: 2})
        self.assertEqual(padding, 0)
        self.assertEqual(width, 2)

    def test_pack_padding(self):
        # 3 символа по 2 бита = 6 бит -> 2 бита добивки
        packed, _, padding, width = FixedCode().pack("abc")
        self.assertEqual(width, 2)
        self.assertEqual(padding, 2)
        self.assertEqual(packed, bytes([0b00011000]))

    def test_pack_rejects_empty_text(self):
        with self.assertRaises(InputError):
            FixedCode().pack("")

    def test_padding_formula(self):
        for text in ["a", "ab", "abc", "hello world", "x" * 13, "abcdefghij" * 7]:
            packed, table, padding, width = FixedCode().pack(text)
            total = width * len(text)
            self.assertTrue(0 <= padding <= 7)
            self.assertEqual(padding, 8 * math.ceil(total / 8) - total)
            self.assertEqual(len(packed), math.ceil(total / 8))

    def test_unpack_roundtrip(self):
        for text in ["aabc", "a", "aaaaaaaaa", "hello, world\n", "привет, мир", "😀 smile 😀", "a\r\nb\tc\x00"]:
            packed, table, padding, width = FixedCode().pack(text)
            chart = {code: symbol for symbol, code in table.items()}
            self.assertEqual(FixedCode().unpack(packed, chart, padding, width), text)

    def test_unpack_restores_table(self):
        fc = FixedCode()
        fc.unpack(b"\x06", {0: 97, 1: 98, 2: 99}, 0, 2)
        self.assertEqual(fc.table, {97: 0, 98: 1, 99: 2})
        self.assertEqual(fc.alphabet, [97, 98, 99])

    def test_decode_unknown_code(self):
        with self.assertRaises(UnknownCodeError) as cm:
            decode_payload(b"\xff", 0, {0: 97, 1: 98, 2: 99}, 2)
        self.assertIsInstance(cm.exception, FormatError)

    def test_decode_trailing_bits(self):
        # 8 бит при ширине 3: последние 2 бита не образуют код
        with self.assertRaises(TrailingBitsError):
            decode_payload(b"\x00", 0, {0: 97}, 3)

    def test_decode_padding_exceeds_payload(self):
        with self.assertRaises(InvalidHeaderError):
            decode_payload(b"", 3, {0: 97}, 1)

    def test_decode_zero_width(self):
        with self.assertRaises(InvalidHeaderError):
            decode_payload(b"\x00", 0, {0: 97}, 0)

    def test_decode_joins_surrogate_pairs(self):
        chart = {0: 0xD83D, 1: 0xDE00, 2: ord("a")}
        # коды 00 01 10 -> U+D83D U+DE00 'a'
        self.assertEqual(decode_payload(bytes([0b00011000]), 2, chart, 2), "😀a")

    def test_decode_keeps_lone_surrogate(self):
        self.assertEqual(decode_payload(b"\x00", 7, {0: 0xD83D}, 1), "\ud83d")

    def test_decode_empty_payload(self):
        self.assertEqual(decode_payload(b"", 0, {0: 97}, 1), "")

    def test_describe_chart(self):
        pairs = describe_chart({2: 99, 0: 97, 1: 98}, 2)
        self.assertEqual(pairs, [("00", "'a'"), ("01", "'b'"), ("10", "'c'")])

# ======================================================================
#                        UNIT TESTS FOR UTILS
# ======================================================================

class TestUtils(unittest.TestCase):

    def test_bit_conversion(self):
        bits = []
        int_to_bits(bits, 0b10101100, 8)
        self.assertEqual(bits, [1,0,1,0,1,1,0,0])

        out = bits_to_bytes(bits)
        self.assertEqual(out, b'\xac')

        back = bytes_to_bits(out)
        self.assertEqual(back, bits)

    def test_int_to_bits_fixed_width(self):
        bits = []
        int_to_bits(bits, 1, 3)
        int_to_bits(bits, 2, 3)
        self.assertEqual(bits, [0,0,1, 0,1,0])

    def test_pack_bits(self):
        self.assertEqual(pack_bits([1, 0, 1]), (b"\xa0", 5))
        self.assertEqual(pack_bits([1] * 8), (b"\xff", 0))
        self.assertEqual(pack_bits([1] * 9), (b"\xff\x80", 7))
        self.assertEqual(pack_bits([]), (b"", 0))

    def test_chart_to_bytes(self):
        chart = chart_to_bytes({97: 0, 98: 1, 99: 2}, 2)
        self.assertEqual(chart, b'{"00":"1100001","01":"1100010","10":"1100011"}')

    def test_chart_from_bytes(self):
        chart = chart_from_bytes(b'{"10":"1100011","00":"1100001","01":"1100010"}', 2)
        self.assertEqual(chart, {0: 97, 1: 98, 2: 99})

    def test_chart_from_bytes_malformed(self):
        bad = [
            b"not json",
            b"\xff\xfe",
            b"[]",
            b'{"0":"1100001"}',             # ширина кода не совпадает
            b'{"0a":"1100001"}',
            b'{"00":"12"}',
            b'{"00":""}',
            b'{"00":97}',
            b'{"00":"0b1"}',
            b'{"00":"1100001","01":"1100001"}',
            ('{"00":"' + "1" * 21 + '"}').encode(),
        ]
        for data in bad:
            with self.assertRaises(MalformedChartError, msg=data):
                chart_from_bytes(data, 2)


if __name__ == "__main__":
    unittest.main()
