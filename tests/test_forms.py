"""Tests for input masking, parsing and validation."""

import pytest

import config as cfg
import forms
from mortgage import LoanInputs


def _valid_values(**overrides):
    values = {name: float(v) for name, v in cfg.DEFAULT_INPUTS.items()}
    values.update(overrides)
    return values


# ─── Masking ─────────────────────────────────────────────────────────

@pytest.mark.parametrize("raw, field, expected", [
    ("300000", "home_price", "300000"),
    ("$300,000", "home_price", "300000"),
    ("12a3b", "hoa_monthly", "123"),
    ("1.2.3", "home_price", "1.23"),
    ("1234.5678", "home_price", "1234.56"),
    ("3.14159", "interest_rate", "3.141"),
    ("0.5", "pmi_rate", "0.5"),
    ("", "home_price", ""),
    ("-250", "hoa_monthly", "250"),
])
def test_sanitize_number_input(raw, field, expected) -> None:
    assert forms.sanitize_number_input(raw, field) == expected


@pytest.mark.parametrize("value, expected", [
    ("300000", "300,000"),
    ("1234567.891", "1,234,567.891"),
    ("999", "999"),
    ("1,000", "1,000"),
    (60000, "60,000"),
    (3.5, "3.5"),
    ("1000.", "1,000."),
])
def test_format_number_with_commas(value, expected) -> None:
    assert forms.format_number_with_commas(value) == expected


def test_mask_input() -> None:
    assert forms.mask_input("1234567.899", "home_price") == "1,234,567.89"
    assert forms.mask_input("4.12345", "property_tax_rate") == "4.123"
    assert forms.mask_input("abc", "home_price") == ""
    assert forms.mask_input(".", "home_price") == "."


def test_decimal_places() -> None:
    assert forms.decimal_places("interest_rate") == 3
    assert forms.decimal_places("property_tax_rate") == 3
    assert forms.decimal_places("pmi_rate") == 3
    assert forms.decimal_places("home_price") == 2
    assert forms.decimal_places("hoa_monthly") == 2


# ─── Parsing ─────────────────────────────────────────────────────────

@pytest.mark.parametrize("value, expected", [
    ("300,000", 300_000.0),
    ("1,234.56", 1234.56),
    ("", 0.0),
    (None, 0.0),
    ("abc", 0.0),
    (42, 42.0),
    (3.5, 3.5),
    ("-10", -10.0),
    ("nan", 0.0),
    ("inf", 0.0),
    ("-Infinity", 0.0),
    ("1e400", 0.0),
    (float("nan"), 0.0),
])
def test_parse_amount(value, expected) -> None:
    assert forms.parse_amount(value) == expected


# ─── Validation ──────────────────────────────────────────────────────

def test_defaults_are_valid() -> None:
    assert forms.validate_inputs(_valid_values()) == {}


@pytest.mark.parametrize("field, value, message", [
    ("home_price", 0, "Home price is required"),
    ("down_payment", -1, "Down payment must be positive"),
    ("loan_term", 0, "Loan term must be at least 1 year"),
    ("interest_rate", -0.1, "Interest rate must be positive"),
    ("property_tax_rate", -1, "Property tax must be positive"),
    ("home_insurance_annual", -5, "Home insurance must be positive"),
    ("pmi_rate", -0.5, "PMI must be positive"),
    ("hoa_monthly", -250, "HOA must be positive"),
    ("utilities_monthly", -1, "Utilities must be positive"),
    ("maintenance_monthly", -1, "Maintenance must be positive"),
])
def test_field_messages(field, value, message) -> None:
    errors = forms.validate_inputs(_valid_values(**{field: value}))
    assert errors == {field: message}


def test_zero_is_allowed_for_costs_and_rates() -> None:
    values = _valid_values(
        down_payment=0, interest_rate=0, property_tax_rate=0,
        home_insurance_annual=0, pmi_rate=0, hoa_monthly=0,
        utilities_monthly=0, maintenance_monthly=0,
    )
    assert forms.validate_inputs(values) == {}


def test_fractional_loan_term_rejected() -> None:
    errors = forms.validate_inputs(_valid_values(loan_term=15.5))
    assert errors == {"loan_term": "Loan term must be a whole number of years"}


def test_down_payment_above_price_rejected() -> None:
    errors = forms.validate_inputs(_valid_values(down_payment=300_001))
    assert errors == {"down_payment": "Down payment cannot exceed home price"}
    assert forms.validate_inputs(_valid_values(down_payment=300_000)) == {}


def test_validate_field() -> None:
    assert forms.validate_field("home_price", 1) is None
    assert forms.validate_field("loan_term", 30.0) is None
    assert forms.validate_field("hoa_monthly", -1) == "HOA must be positive"


# ─── parse_form ──────────────────────────────────────────────────────

def test_parse_form_formatted_strings() -> None:
    form = {
        "home_price": "450,000",
        "down_payment": "90,000.50",
        "loan_term": "15",
        "interest_rate": "6.125",
        "property_tax_rate": "1.1",
        "home_insurance_annual": "1,800",
        "pmi_rate": "0",
        "hoa_monthly": "",
        "utilities_monthly": "175",
        "maintenance_monthly": "300",
    }
    inputs = forms.parse_form(form)
    assert inputs == LoanInputs(
        home_price=450_000.0,
        down_payment=90_000.5,
        loan_term=15,
        interest_rate=6.125,
        property_tax_rate=1.1,
        home_insurance_annual=1_800.0,
        pmi_rate=0.0,
        hoa_monthly=0.0,
        utilities_monthly=175.0,
        maintenance_monthly=300.0,
    )
    assert isinstance(inputs.loan_term, int)


def test_parse_form_missing_fields_use_defaults() -> None:
    inputs = forms.parse_form({"home_price": "500,000"})
    assert inputs.home_price == 500_000
    assert inputs.down_payment == 60_000
    assert inputs.loan_term == 30
    assert inputs.interest_rate == 3.5


def test_parse_form_reports_every_failing_field() -> None:
    with pytest.raises(forms.InputError) as exc_info:
        forms.parse_form({"home_price": "", "loan_term": "0", "hoa_monthly": "-5"})
    assert exc_info.value.errors == {
        "home_price": "Home price is required",
        "loan_term": "Loan term must be at least 1 year",
        "hoa_monthly": "HOA must be positive",
    }
    assert isinstance(exc_info.value, ValueError)
    assert "home_price: Home price is required" in str(exc_info.value)


def test_loan_term_upper_bound() -> None:
    assert forms.validate_field("loan_term", cfg.MAX_LOAN_TERM) is None
    errors = forms.validate_inputs(_valid_values(loan_term=cfg.MAX_LOAN_TERM + 1))
    assert errors == {"loan_term": "Loan term cannot exceed 50 years"}


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_validate_field_rejects_non_finite(value) -> None:
    assert forms.validate_field("loan_term", value) == "Loan term must be at least 1 year"
    assert forms.validate_field("interest_rate", value) == "Interest rate must be positive"


def test_parse_form_non_finite_text() -> None:
    with pytest.raises(forms.InputError) as exc_info:
        forms.parse_form({"home_price": "1e400", "loan_term": "nan"})
    assert exc_info.value.errors == {
        "home_price": "Home price is required",
        "loan_term": "Loan term must be at least 1 year",
    }

    inputs = forms.parse_form({"interest_rate": "nan"})
    assert inputs.interest_rate == 0.0
