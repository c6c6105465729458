"""
Form input handling for the Mortgage Payment Calculator.

Covers the three steps between a raw form field and a LoanInputs value:
masking what the user typed (digits, one decimal point, limited
precision, thousands separators), parsing it back to a number, and
validating the parsed set with per-field error messages.
"""

from __future__ import annotations

import math
import re
from typing import Any, Dict, Mapping, Optional

import config as cfg
from mortgage import LoanInputs


class InputError(ValueError):
    """Raised by parse_form() when one or more fields fail validation."""

    def __init__(self, errors: Dict[str, str]) -> None:
        self.errors = dict(errors)
        super().__init__("; ".join(f"{k}: {v}" for k, v in self.errors.items()))


# ─── Masking ─────────────────────────────────────────────────────────

_NON_NUMERIC = re.compile(r"[^\d.]")
_THOUSANDS = re.compile(r"\B(?=(\d{3})+(?!\d))")


def decimal_places(field: str) -> int:
    """Allowed fraction digits for *field*: 3 for rates, 2 for money."""
    return cfg.PERCENT_DECIMALS if field in cfg.PERCENT_FIELDS else cfg.CURRENCY_DECIMALS


def sanitize_number_input(raw: str, field: str) -> str:
    """Reduce *raw* to digits and a single decimal point.

    Extra decimal points after the first are dropped and the fraction
    is truncated (not rounded) to the field's precision.
    """
    value = _NON_NUMERIC.sub("", raw)

    first = value.find(".")
    if first != -1:
        value = value[:first + 1] + value[first + 1:].replace(".", "")

    places = decimal_places(field)
    whole, sep, frac = value.partition(".")
    if len(frac) > places:
        frac = frac[:places]
    return whole + sep + frac


def format_number_with_commas(value: Any) -> str:
    """Insert thousands separators into the whole part of *value*."""
    parts = str(value).replace(",", "").split(".")
    parts[0] = _THOUSANDS.sub(",", parts[0])
    return ".".join(parts)


def mask_input(raw: str, field: str) -> str:
    """Live input mask: sanitize, then add separators.

    Text that does not contain a usable number comes back sanitized but
    unformatted (an empty string, or a lone ".").
    """
    value = sanitize_number_input(raw, field)
    if not value:
        return value
    try:
        float(value)
    except ValueError:
        return value
    return format_number_with_commas(value)


# ─── Parsing ─────────────────────────────────────────────────────────

def parse_amount(value: Any) -> float:
    """Parse a masked field value.

    Blank or unparsable text gives 0.0, and so does anything that is not
    a finite number ("nan", "inf", "1e400").
    """
    if not value:
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).replace(",", ""))
        except ValueError:
            return 0.0
    return number if math.isfinite(number) else 0.0


# ─── Validation ──────────────────────────────────────────────────────

# field -> (minimum, message when below it)
FIELD_RULES = {
    "home_price": (1, "Home price is required"),
    "down_payment": (0, "Down payment must be positive"),
    "loan_term": (1, "Loan term must be at least 1 year"),
    "interest_rate": (0, "Interest rate must be positive"),
    "property_tax_rate": (0, "Property tax must be positive"),
    "home_insurance_annual": (0, "Home insurance must be positive"),
    "pmi_rate": (0, "PMI must be positive"),
    "hoa_monthly": (0, "HOA must be positive"),
    "utilities_monthly": (0, "Utilities must be positive"),
    "maintenance_monthly": (0, "Maintenance must be positive"),
}


def validate_field(name: str, value: float) -> Optional[str]:
    """Check one field in isolation.  Returns the error message or None."""
    minimum, message = FIELD_RULES[name]
    if not math.isfinite(value) or value < minimum:
        return message
    if name == "loan_term":
        if value != int(value):
            return "Loan term must be a whole number of years"
        if value > cfg.MAX_LOAN_TERM:
            return f"Loan term cannot exceed {cfg.MAX_LOAN_TERM} years"
    return None


def validate_inputs(values: Mapping[str, float]) -> Dict[str, str]:
    """Return a field -> message dict; empty when *values* are valid."""
    errors: Dict[str, str] = {}
    for name in FIELD_RULES:
        message = validate_field(name, values[name])
        if message:
            errors[name] = message

    if not errors.keys() & {"home_price", "down_payment"}:
        if values["down_payment"] > values["home_price"]:
            errors["down_payment"] = "Down payment cannot exceed home price"
    return errors


def parse_form(form: Mapping[str, Any]) -> LoanInputs:
    """Parse and validate a submitted form into LoanInputs.

    Fields missing from *form* take their default from
    config.DEFAULT_INPUTS.  Raises InputError listing every failing field.
    """
    values = {}
    for name, default in cfg.DEFAULT_INPUTS.items():
        raw = form.get(name)
        values[name] = float(default) if raw is None else parse_amount(raw)

    errors = validate_inputs(values)
    if errors:
        raise InputError(errors)

    values["loan_term"] = int(values["loan_term"])
    return LoanInputs(**values)
