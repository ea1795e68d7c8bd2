"""Unit tests for hex and unit helpers."""

import pytest

from abicodec.utils import (
    add0x, bytes_to_hex, format_units, hex_to_bytes, keccak_hex,
    normalize_address, parse_units, strip0x,
)


class TestHex:
    def test_add0x(self):
        assert add0x('abcd') == '0xabcd'
        assert add0x('0xabcd') == '0xabcd'
        assert add0x('0Xabcd') == '0Xabcd'

    def test_strip0x(self):
        assert strip0x('0xabcd') == 'abcd'
        assert strip0x('0XABCD') == 'ABCD'
        assert strip0x('abcd') == 'abcd'
        assert strip0x('0x0xab') == '0xab'

    def test_hex_to_bytes(self):
        assert hex_to_bytes('0x0102') == b'\x01\x02'
        assert hex_to_bytes('0102') == b'\x01\x02'
        assert hex_to_bytes(b'\x01') == b'\x01'
        assert hex_to_bytes('0x') == b''

    def test_bytes_to_hex(self):
        assert bytes_to_hex(b'\xab\xcd') == '0xabcd'
        assert bytes_to_hex(b'\xab\xcd', prefix=False) == 'abcd'

    def test_keccak_hex(self):
        assert keccak_hex(b'') == (
            'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
        )
        assert keccak_hex('transfer(address,uint256)').startswith('a9059cbb')

    def test_normalize_address(self):
        assert normalize_address('0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48') == (
            'a0b86991c6218b36c1d19d4a2e9eb0ce3606eb48'
        )


class TestUnits:
    @pytest.mark.parametrize("amount,decimals,text", [
        (1225724583682887052, 18, '1.225724583682887052'),
        (92047496716230633056, 18, '92.047496716230633056'),
        (186645483055776057720, 18, '186.64548305577605772'),
        (10 ** 18, 18, '1'),
        (1_500_000, 6, '1.5'),
        (1, 6, '0.000001'),
        (0, 18, '0'),
        (-2_500_000, 6, '-2.5'),
        (42, 0, '42'),
    ])
    def test_format_units(self, amount, decimals, text):
        assert format_units(amount, decimals) == text

    @pytest.mark.parametrize("text,decimals,amount", [
        ('1.225724583682887052', 18, 1225724583682887052),
        ('1', 18, 10 ** 18),
        ('1.5', 6, 1_500_000),
        ('.5', 6, 500_000),
        ('3.', 6, 3_000_000),
        ('-0.000001', 6, -1),
        (' 2 ', 0, 2),
    ])
    def test_parse_units(self, text, decimals, amount):
        assert parse_units(text, decimals) == amount

    @pytest.mark.parametrize("text", ['', '.', 'abc', '1.2.3', '1e18', '--1'])
    def test_parse_units_invalid(self, text):
        with pytest.raises(ValueError, match='Invalid decimal amount'):
            parse_units(text)

    def test_parse_units_too_precise(self):
        with pytest.raises(ValueError, match='max 6'):
            parse_units('0.0000001', 6)

    def test_inverse(self):
        for amount in (0, 1, 10 ** 18 - 1, 123456789012345678901234567890):
            assert parse_units(format_units(amount)) == amount
