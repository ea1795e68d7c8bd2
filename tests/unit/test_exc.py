"""Unit tests for the exception hierarchy."""

import pytest

from abicodec.exc import (
    AbiError, BoundsError, DecodingError, EncodingError, StructuralError, ValidationError,
)
from abicodec.net import Web3API


class TestHierarchy:
    @pytest.mark.parametrize("cls", [
        ValidationError, EncodingError, DecodingError, BoundsError, StructuralError,
    ])
    def test_rooted_at_abi_error(self, cls):
        assert issubclass(cls, AbiError)

    def test_bounds_error_both_directions(self):
        assert issubclass(BoundsError, EncodingError)
        assert issubclass(BoundsError, DecodingError)

    def test_bounds_error_attributes(self):
        err = BoundsError(-1, 8, False)
        assert (err.value, err.bits, err.signed) == (-1, 8, False)
        assert str(err) == 'value -1 out of bounds for uint8'

    def test_bounds_error_signed_message(self):
        assert str(BoundsError(128, 8, True)) == 'value 128 out of bounds for int8'


class TestWeb3API:
    def test_abstract(self):
        with pytest.raises(TypeError):
            Web3API()
