"""Tests für die Formular-Validierung."""

from decimal import Decimal

import pytest

from constants import t
from validation import FormData, is_valid_url, parse_form, sanitize_image_url, validate_form


def with_field(fields, **changes):
    updated = dict(fields)
    updated.update(changes)
    return updated


def test_valid_form_has_no_errors(valid_fields):
    assert validate_form(valid_fields) == {}


def test_empty_form_reports_every_field():
    errors = validate_form({}, "en")
    assert set(errors) == {"name", "symbol", "imageUrl", "initialSupply", "decimals"}
    assert errors["name"] == t("validation.name.required", "en")
    assert errors["decimals"] == t("validation.decimals.required", "en")


def test_validation_is_deterministic(valid_fields):
    fields = with_field(valid_fields, symbol="tst", decimals="12")
    assert validate_form(fields) == validate_form(fields)


@pytest.mark.parametrize("name, error_key", [
    ("", "validation.name.required"),
    ("A" * 33, "validation.name.tooLong"),
])
def test_name_errors(valid_fields, name, error_key):
    assert validate_form(with_field(valid_fields, name=name))["name"] == t(error_key)


def test_name_at_max_length_is_accepted(valid_fields):
    assert "name" not in validate_form(with_field(valid_fields, name="A" * 32))


@pytest.mark.parametrize("symbol, error_key", [
    ("", "validation.symbol.required"),
    ("ABCDEFGHIJK", "validation.symbol.tooLong"),
    ("tst", "validation.symbol.pattern"),
    ("TST1", "validation.symbol.pattern"),
    ("T ST", "validation.symbol.pattern"),
])
def test_symbol_errors(valid_fields, symbol, error_key):
    assert validate_form(with_field(valid_fields, symbol=symbol))["symbol"] == t(error_key)


@pytest.mark.parametrize("url", [
    "https://example.com/token.png",
    "http://example.com/a.png?size=64",
    "ipfs://bafybeigdyrzt5sfp7udm7hu76uh7y26nf3efuylqabf3oclgtqy55fbzdi",
    "ar://abc123",
])
def test_accepted_urls(url):
    assert is_valid_url(url)


@pytest.mark.parametrize("url", [
    "",
    "not a url",
    "example.com/token.png",
    "ftp://example.com/token.png",
    "javascript:alert(1)",
    "https://exa mple.com/a.png",
    "https://",
])
def test_rejected_urls(url):
    assert not is_valid_url(url)


def test_image_url_errors(valid_fields):
    assert validate_form(with_field(valid_fields, imageUrl="   "))["imageUrl"] == t("validation.imageUrl.required")
    assert validate_form(with_field(valid_fields, imageUrl="bild.png"))["imageUrl"] == t("validation.imageUrl.invalid")


@pytest.mark.parametrize("decimals, error_key", [
    ("abc", "validation.decimals.invalid"),
    ("1.5", "validation.decimals.invalid"),
    ("10", "validation.decimals.range"),
    ("-1", "validation.decimals.range"),
])
def test_decimals_errors(valid_fields, decimals, error_key):
    assert validate_form(with_field(valid_fields, decimals=decimals))["decimals"] == t(error_key)


@pytest.mark.parametrize("decimals", [str(d) for d in range(10)])
def test_every_decimals_value_in_range_is_accepted(valid_fields, decimals):
    assert validate_form(with_field(valid_fields, decimals=decimals)) == {}


@pytest.mark.parametrize("supply, error_key", [
    ("abc", "validation.initialSupply.invalid"),
    ("NaN", "validation.initialSupply.invalid"),
    ("Infinity", "validation.initialSupply.invalid"),
    ("0", "validation.initialSupply.positive"),
    ("-5", "validation.initialSupply.positive"),
    ("1.1234567", "validation.initialSupply.precision"),
])
def test_initial_supply_errors(valid_fields, supply, error_key):
    errors = validate_form(with_field(valid_fields, initialSupply=supply))
    assert errors["initialSupply"] == t(error_key)


def test_initial_supply_must_fit_into_u64():
    base = {"name": "Big", "symbol": "BIG", "imageUrl": "https://example.com/a.png", "decimals": "0"}
    assert validate_form(with_field(base, initialSupply=str(2**64 - 1))) == {}
    errors = validate_form(with_field(base, initialSupply=str(2**64)))
    assert errors["initialSupply"] == t("validation.initialSupply.tooLarge")


@pytest.mark.parametrize("supply, decimals", [
    ("1e999999", "9"),
    ("1E+30", "0"),
    ("18446744073.709551616", "9"),
])
def test_huge_supply_reports_too_large(valid_fields, supply, decimals):
    errors = validate_form(with_field(valid_fields, initialSupply=supply, decimals=decimals))
    assert errors == {"initialSupply": t("validation.initialSupply.tooLarge")}


@pytest.mark.parametrize("supply", ["1.0000000000000000000000000001", "1e-999999"])
def test_precision_beyond_decimal_context_is_rejected(valid_fields, supply):
    errors = validate_form(with_field(valid_fields, initialSupply=supply, decimals="9"))
    assert errors == {"initialSupply": t("validation.initialSupply.precision")}


def test_base_units_are_exact_for_long_inputs():
    data = FormData("Test", "TST", "https://example.com/a.png", "18446744073.709551615", "9")
    assert data.base_units == 2**64 - 1
    assert FormData("Test", "TST", "https://example.com/a.png", "1.5E+3", "2").base_units == 150000


def test_supply_precision_not_checked_against_invalid_decimals(valid_fields):
    errors = validate_form(with_field(valid_fields, initialSupply="1.123456789012", decimals="x"))
    assert "decimals" in errors
    assert "initialSupply" not in errors


def test_messages_follow_language(valid_fields):
    fields = with_field(valid_fields, symbol="abc")
    assert validate_form(fields, "en")["symbol"] == "Token symbol may only contain uppercase letters (A-Z)"
    assert validate_form(fields, "de")["symbol"] == "Token-Symbol darf nur Großbuchstaben (A-Z) enthalten"


def test_parse_form_returns_form_data(valid_fields):
    data, errors = parse_form(valid_fields)
    assert errors == {}
    assert data == FormData("Test", "TST", "https://example.com/token.png", "1000", "6")


def test_parse_form_returns_errors_only(valid_fields):
    data, errors = parse_form(with_field(valid_fields, name=""))
    assert data is None
    assert list(errors) == ["name"]


@pytest.mark.parametrize("supply, decimals, expected", [
    ("1000", "6", 1_000_000_000),
    ("0.5", "9", 500_000_000),
    ("1.25", "2", 125),
    ("7", "0", 7),
])
def test_base_units(supply, decimals, expected):
    data = FormData("Test", "TST", "https://example.com/a.png", supply, decimals)
    assert data.base_units == expected
    assert data.supply_value == Decimal(supply)


def test_sanitize_strips_markup_and_control_characters():
    assert sanitize_image_url(' https://example.com/<b>"a"</b>.png\x00 ') == "https://example.com/ba/b.png"


def test_sanitize_encodes_spaces_and_keeps_query():
    assert sanitize_image_url("https://example.com/my token.png?v=1&s=2") == "https://example.com/my%20token.png?v=1&s=2"


def test_sanitize_keeps_existing_escapes():
    url = "https://example.com/a%20b.png"
    assert sanitize_image_url(url) == url
