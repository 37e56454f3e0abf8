from decimal import Decimal

import pytest
from web3 import Web3

from ethqr import ValidationError
from ethqr.amount import MAX_WHOLE_DIGITS, format_eth, to_wei
from ethqr.config import MAX_WEI


def test_one_eth():
    assert to_wei("1") == "1000000000000000000"


def test_smallest_unit():
    assert to_wei("0.000000000000000001") == "1"


def test_trailing_separator():
    assert to_wei("5.") == "5000000000000000000"


def test_leading_separator():
    assert to_wei(".5") == "500000000000000000"


def test_surrounding_whitespace_is_ignored():
    assert to_wei("  2.25 \n") == "2250000000000000000"


def test_leading_zeros_do_not_leak_into_result():
    assert to_wei("000.010") == "10000000000000000"


@pytest.mark.parametrize(
    "raw",
    ["0.1", "1.000000000000000001", "123456789.123456789123456789", "0.3", "42"],
)
def test_matches_web3_exactly(raw):
    assert to_wei(raw) == str(Web3.to_wei(Decimal(raw), "ether"))


def test_huge_amount_keeps_precision():
    raw = "98765432109876543210.000000000000000007"
    assert to_wei(raw) == "98765432109876543210000000000000000007"


@pytest.mark.parametrize(
    "raw, reason",
    [
        ("", "required"),
        ("   ", "required"),
        (".", "not a valid number"),
        ("abc", "not a valid number"),
        ("-1", "not a valid number"),
        ("1e18", "not a valid number"),
        ("1.2.3", "not a valid number"),
        ("1,5", "not a valid number"),
        ("+1", "not a valid number"),
        ("0.0000000000000000001", "too many decimal places"),
        ("0", "greater than zero"),
        ("0.0", "greater than zero"),
        ("0.000000000000000000", "greater than zero"),
    ],
)
def test_rejected_amounts(raw, reason):
    with pytest.raises(ValidationError) as excinfo:
        to_wei(raw)
    assert reason in str(excinfo.value).lower()
    assert excinfo.value.field == "amount"


def test_non_ascii_digits_are_rejected():
    with pytest.raises(ValidationError):
        to_wei("١")


def test_conversion_is_idempotent():
    assert to_wei("3.14159") == to_wei("3.14159")


def test_format_eth():
    assert format_eth("1500000000000000000") == "1.5"
    assert format_eth(1) == "0.000000000000000001"
    assert format_eth(0) == "0"
    assert format_eth(to_wei("12.0100")) == "12.01"


def test_format_eth_rejects_negative():
    with pytest.raises(ValueError):
        format_eth(-1)


def test_largest_uint256_amount_is_accepted():
    whole, fraction = divmod(MAX_WEI, 10**18)
    raw = f"{whole}.{str(fraction).rjust(18, '0')}"
    assert to_wei(raw) == str(MAX_WEI)


@pytest.mark.parametrize(
    "raw",
    [
        "1" * 5000,
        "1" * 4290,
        "9" * (MAX_WHOLE_DIGITS + 1),
        "9" * MAX_WHOLE_DIGITS,
    ],
)
def test_oversized_amounts_are_rejected(raw):
    with pytest.raises(ValidationError) as excinfo:
        to_wei(raw)
    assert "too large" in str(excinfo.value)
    assert excinfo.value.field == "amount"


def test_leading_zeros_do_not_count_towards_size():
    assert to_wei("0" * 5000 + "1") == "1000000000000000000"
