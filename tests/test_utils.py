"""Tests for validation and formatting helpers."""

from datetime import datetime, timezone

import pytest

from partfinder.utils import (
    fold_text,
    generate_request_id,
    is_valid_email,
    is_valid_vin,
    parse_float_prefix,
    parse_int_prefix,
    round_half_up,
    utc_timestamp,
)


@pytest.mark.parametrize(
    ("vin", "valid"),
    [
        ("WDB2020201F685790", True),
        ("wdb2020201f685790", True),
        ("WDB2020201F68579", False),
        ("WDB2020201F6857901", False),
        ("WDB2020201I685790", False),
        ("WDB2020201O685790", False),
        ("WDB2020201Q685790", False),
        ("WDB2020201F68579-", False),
        ("", False),
        (None, False),
    ],
)
def test_is_valid_vin(vin, valid):
    assert is_valid_vin(vin) is valid


@pytest.mark.parametrize(
    ("value", "valid"),
    [("user@example.com", True), ("user@example", False), ("user example@x.com", False), ("", False)],
)
def test_is_valid_email(value, valid):
    assert is_valid_email(value) is valid


def test_fold_text_strips_turkish_diacritics():
    """Dotted capital I must fold to a plain ``i`` for search filters."""

    assert fold_text("İstanbul, Ümraniye") == "istanbul, umraniye"
    assert fold_text("Fren Balatası") == "fren balatasi"
    assert fold_text(None) == ""


@pytest.mark.parametrize(("value", "expected"), [(0.5, 1), (1.49, 1), (2.5, 3), (358.8, 359), (299.67, 300)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_utc_timestamp_format():
    moment = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)

    assert utc_timestamp(moment) == "2024-01-02T03:04:05.678Z"


def test_generate_request_id(scripted_rng):
    assert generate_request_id(scripted_rng(randints=[42]), 1700000000000) == "req-1700000000000-42"


@pytest.mark.parametrize(
    ("value", "expected"),
    [("2019", 2019), ("2019abc", 2019), (" 12", 12), ("-3x", -3), ("abc", None), ("", None), (None, None)],
)
def test_parse_int_prefix(value, expected):
    assert parse_int_prefix(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [("4.5", 4.5), ("4.5x", 4.5), (".5", 0.5), ("4.", 4.0), ("1e1z", 10.0), ("x4.5", None), ("", None)],
)
def test_parse_float_prefix(value, expected):
    assert parse_float_prefix(value) == expected
