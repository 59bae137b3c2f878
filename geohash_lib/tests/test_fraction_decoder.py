"""
Tests for digest half decoding.
Tests rounding, normalization and the [0, 1] range under many inputs.
"""

from decimal import Decimal, localcontext

import pytest
from hypothesis import given, strategies as st

from geohash_lib.exceptions import InvalidInputError
from geohash_lib.hashing.fraction_decoder import decode_digest_half, digest_half_to_int


class TestDecodeDigestHalf:

    @pytest.mark.parametrize("half, expected", [
        # xkcd 426 example, 2005-05-26
        ("db9318c2259923d0", "0.857713267707"),
        ("8b672cb305440f97", "0.54454306955928"),
        # Leading zeros after the point
        ("00030e544ec51ea4", "0.00004663046163"),
        ("7bd4fc75e6e4203b", "0.48371866110291"),
        # Carry into the 12th digit, then trailing zeros dropped
        ("a3af8c0832bca1c9", "0.639397384645"),
        ("86df7b409d603e11", "0.52684755637654"),
    ])
    def test_default_precision(self, half, expected):
        assert str(decode_digest_half(half)) == expected

    def test_low_precision_matches_published_digits(self):
        assert decode_digest_half("db9318c2259923d0", 6) == Decimal("0.857713")
        assert decode_digest_half("8b672cb305440f97", 6) == Decimal("0.544543")

    def test_uppercase_hex_accepted(self):
        assert decode_digest_half("DB9318C2259923D0") == decode_digest_half("db9318c2259923d0")

    @pytest.mark.parametrize("half, precision, expected", [
        ("4000000000000000", 1, "0.3"),    # 0.25 -> half-up, not half-even
        ("2000000000000000", 2, "0.13"),   # 0.125
        ("c000000000000000", 1, "0.8"),    # 0.75
    ])
    def test_ties_round_half_up(self, half, precision, expected):
        assert decode_digest_half(half, precision) == Decimal(expected)

    def test_exact_values_are_normalized(self):
        result = decode_digest_half("8000000000000000")
        assert result == Decimal("0.5")
        assert str(result) == "0.5"

    def test_zero(self):
        assert decode_digest_half("0000000000000000") == 0

    def test_max_half_rounds_up_to_one(self):
        # Boundary: accepted, not clamped
        assert decode_digest_half("ffffffffffffffff") == Decimal(1)
        assert decode_digest_half("fffffffffffffff0", 14) == Decimal(1)

    def test_max_half_below_one_at_high_precision(self):
        result = decode_digest_half("ffffffffffffffff", 19)
        assert result == Decimal("0.9999999999999999999")

    def test_precision_beyond_exact_expansion_is_exact(self):
        # 2**-64 terminates after 64 digits; extra precision adds nothing
        result = decode_digest_half("0000000000000001", 100)
        assert result == Decimal("5.42101086242752217003726400434970855712890625E-20")

    @pytest.mark.parametrize("half", ["", "db9318c2", "db9318c2259923d08", "zz9318c2259923d0"])
    def test_rejects_malformed_half(self, half):
        with pytest.raises(InvalidInputError):
            decode_digest_half(half)

    @pytest.mark.parametrize("precision", [0, -1, 1.5, True])
    def test_rejects_bad_precision(self, precision):
        with pytest.raises(InvalidInputError):
            decode_digest_half("db9318c2259923d0", precision)

    @given(
        value=st.integers(min_value=0, max_value=2**64 - 1),
        precision=st.integers(min_value=1, max_value=30),
    )
    def test_offset_in_unit_interval(self, value, precision):
        half = format(value, "016x")
        result = decode_digest_half(half, precision)

        assert 0 <= result <= 1
        # Within half a unit in the last place of the exact quotient
        with localcontext() as ctx:
            ctx.prec = 100
            exact = Decimal(value) / Decimal(2) ** 64
            assert abs(result - exact) <= Decimal(1).scaleb(-precision) / 2
        # Never more fractional digits than requested
        assert -result.as_tuple().exponent <= precision

    @given(value=st.integers(min_value=0, max_value=2**64 - 1))
    def test_hex_parsing(self, value):
        assert digest_half_to_int(format(value, "016x")) == value
