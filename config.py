"""
Constants for the Mortgage Payment Calculator.

All monetary values in USD. Rates are annual percentages as typed
into the form (3.5 means 3.5%).
"""

import os

# ── Form defaults ────────────────────────────────────────────────────
DEFAULT_INPUTS = {
    "home_price": 300_000,
    "down_payment": 60_000,
    "loan_term": 30,
    "interest_rate": 3.5,
    "property_tax_rate": 1.2,
    "home_insurance_annual": 1_200,
    "pmi_rate": 0.5,
    "hoa_monthly": 250,
    "utilities_monthly": 200,
    "maintenance_monthly": 200,
}

# Display order matches the form layout.
FIELD_LABELS = {
    "home_price": "Home Price ($)",
    "down_payment": "Down Payment ($)",
    "loan_term": "Loan Term (years)",
    "interest_rate": "Interest Rate (%)",
    "property_tax_rate": "Property Tax Rate (%)",
    "home_insurance_annual": "Home Insurance ($/year)",
    "pmi_rate": "PMI Rate (%)",
    "hoa_monthly": "HOA ($/month)",
    "utilities_monthly": "Utilities ($/month)",
    "maintenance_monthly": "Maintenance ($/month)",
}

# ── Input precision ──────────────────────────────────────────────────
PERCENT_FIELDS = ("interest_rate", "property_tax_rate", "pmi_rate")
CURRENCY_DECIMALS = 2
PERCENT_DECIMALS = 3

# ── Calendar ─────────────────────────────────────────────────────────
MONTHS_PER_YEAR = 12

# Longest loan term the form accepts, in years.
MAX_LOAN_TERM = 50

# ── Rate sensitivity table ───────────────────────────────────────────
# Percentage-point offsets applied to the entered interest rate.
RATE_SENSITIVITY_DELTAS = (-1.0, -0.5, -0.25, 0.0, 0.25, 0.5, 1.0)

# ── Web server / report output ───────────────────────────────────────
HOST = os.environ.get("MORTGAGE_CALC_HOST", "127.0.0.1")
PORT = int(os.environ.get("MORTGAGE_CALC_PORT", "5000"))
PDF_PATH = "mortgage_report.pdf"
