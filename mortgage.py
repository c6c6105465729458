"""
Payment calculation engine for the Mortgage Payment Calculator.

Turns a set of loan and housing-cost parameters into a monthly cost
breakdown.  The breakdown itself is plain float arithmetic; the
month-by-month amortization schedule behind the balance chart is
vectorised with numpy using the closed-form remaining balance, so no
per-month Python loop is needed.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Sequence, Tuple

import numpy as np

import config as cfg


# ─── Data Classes ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class LoanInputs:
    """Validated calculator inputs (see forms.parse_form)."""

    home_price: float             # purchase price
    down_payment: float           # cash paid up front
    loan_term: int                # whole years
    interest_rate: float          # annual %, e.g. 3.5
    property_tax_rate: float      # annual % of home price
    home_insurance_annual: float  # per year
    pmi_rate: float               # annual % of loan amount
    hoa_monthly: float = 0.0
    utilities_monthly: float = 0.0
    maintenance_monthly: float = 0.0

    @property
    def loan_amount(self) -> float:
        return self.home_price - self.down_payment

    @property
    def num_payments(self) -> int:
        return int(self.loan_term * cfg.MONTHS_PER_YEAR)


@dataclass(frozen=True)
class PaymentBreakdown:
    """Monthly cost breakdown produced by calculate_mortgage()."""

    monthly_principal_and_interest: float
    monthly_property_tax: float
    monthly_insurance: float
    monthly_pmi: float
    monthly_hoa: float
    monthly_utilities: float
    monthly_maintenance: float
    total_monthly_payment: float
    total_loan_amount: float
    total_interest_paid: float

    def components(self) -> List[Tuple[str, float]]:
        """The seven monthly components in display order."""
        return [
            ("Principal & Interest", self.monthly_principal_and_interest),
            ("Property Tax", self.monthly_property_tax),
            ("Insurance", self.monthly_insurance),
            ("PMI", self.monthly_pmi),
            ("HOA", self.monthly_hoa),
            ("Utilities", self.monthly_utilities),
            ("Maintenance", self.monthly_maintenance),
        ]


@dataclass
class AmortizationSchedule:
    """Month-by-month and per-year amortization of the P&I payment."""

    payment: float

    # ── Per-month arrays: shape (num_payments,) ──
    months: np.ndarray = field(repr=False)      # 1 .. num_payments
    interest: np.ndarray = field(repr=False)
    principal: np.ndarray = field(repr=False)
    balance: np.ndarray = field(repr=False)     # after each payment

    # ── Per-year arrays: shape (loan_term,) ──
    years: np.ndarray = field(repr=False)       # 1 .. loan_term
    yearly_interest: np.ndarray = field(repr=False)
    yearly_principal: np.ndarray = field(repr=False)
    yearly_balance: np.ndarray = field(repr=False)  # ending balance

    @property
    def total_interest(self) -> float:
        return float(self.interest.sum())


@dataclass
class RateSensitivityRow:
    """One row of the rate sensitivity table."""

    interest_rate: float
    monthly_principal_and_interest: float
    total_monthly_payment: float
    total_interest_paid: float


# ─── Core Calculation ─────────────────────────────────────────────────

def monthly_payment(principal: float, annual_rate_pct: float, term_years: int) -> float:
    """Level monthly payment that amortizes *principal* over *term_years*.

        M = P * r(1+r)^n / ((1+r)^n - 1),  r = annual/100/12, n = years*12

    evaluated as P * r / (1 - (1+r)^-n), which tends to P * r for very
    high rates instead of overflowing.  At a zero rate the formula
    degenerates to 0/0, so the payment is the straight-line
    ``principal / n`` instead.
    """
    r = annual_rate_pct / 100 / cfg.MONTHS_PER_YEAR
    n = term_years * cfg.MONTHS_PER_YEAR
    if r == 0:
        return principal / n
    return principal * r / (1 - (1 + r) ** -n)


def calculate_mortgage(inputs: LoanInputs) -> PaymentBreakdown:
    """Compute the monthly payment breakdown for *inputs*.

    Pure and total over validated inputs: no errors are raised here,
    range checks live in forms.validate_inputs().
    """
    loan_amount = inputs.loan_amount
    num_payments = inputs.num_payments

    principal_and_interest = monthly_payment(
        loan_amount, inputs.interest_rate, inputs.loan_term
    )
    property_tax = inputs.property_tax_rate / 100 * inputs.home_price / cfg.MONTHS_PER_YEAR
    insurance = inputs.home_insurance_annual / cfg.MONTHS_PER_YEAR
    pmi = inputs.pmi_rate / 100 * loan_amount / cfg.MONTHS_PER_YEAR
    hoa = inputs.hoa_monthly
    utilities = inputs.utilities_monthly
    maintenance = inputs.maintenance_monthly

    total = (
        principal_and_interest
        + property_tax
        + insurance
        + pmi
        + hoa
        + utilities
        + maintenance
    )

    return PaymentBreakdown(
        monthly_principal_and_interest=principal_and_interest,
        monthly_property_tax=property_tax,
        monthly_insurance=insurance,
        monthly_pmi=pmi,
        monthly_hoa=hoa,
        monthly_utilities=utilities,
        monthly_maintenance=maintenance,
        total_monthly_payment=total,
        total_loan_amount=loan_amount,
        total_interest_paid=principal_and_interest * num_payments - loan_amount,
    )


# ─── Amortization ─────────────────────────────────────────────────────

def amortization_schedule(inputs: LoanInputs) -> AmortizationSchedule:
    """Build the amortization schedule for the P&I payment.

    Remaining balance after month k uses the closed form

        B_k = L(1+r)^k - M((1+r)^k - 1)/r      (B_k = L - M*k when r = 0)

    rewritten as B_k = L(1 - (1+r)^(k-n)) / (1 - (1+r)^-n) so that no
    power exceeds 1, and the whole schedule is computed with array
    operations.  Interest in month k accrues on B_{k-1}; principal is the
    drop in balance.
    """
    loan_amount = inputs.loan_amount
    n = inputs.num_payments
    r = inputs.interest_rate / 100 / cfg.MONTHS_PER_YEAR
    payment = monthly_payment(loan_amount, inputs.interest_rate, inputs.loan_term)

    months = np.arange(1, n + 1)
    if r == 0:
        balance = loan_amount - payment * months
    else:
        remaining = (1 + r) ** (months - n)
        balance = loan_amount * (1 - remaining) / (1 - (1 + r) ** -n)

    # The closed form lands on zero at n; clear float residue there.
    if loan_amount >= 0:
        balance = np.clip(balance, 0.0, None)
    balance[-1] = 0.0

    opening = np.concatenate([[loan_amount], balance[:-1]])
    interest = opening * r
    principal = opening - balance

    term = int(inputs.loan_term)
    per_year = (term, cfg.MONTHS_PER_YEAR)
    return AmortizationSchedule(
        payment=payment,
        months=months,
        interest=interest,
        principal=principal,
        balance=balance,
        years=np.arange(1, term + 1),
        yearly_interest=interest.reshape(per_year).sum(axis=1),
        yearly_principal=principal.reshape(per_year).sum(axis=1),
        yearly_balance=balance[cfg.MONTHS_PER_YEAR - 1::cfg.MONTHS_PER_YEAR],
    )


# ─── Rate Sensitivity ─────────────────────────────────────────────────

def rate_sensitivity(
    inputs: LoanInputs,
    deltas: Sequence[float] = cfg.RATE_SENSITIVITY_DELTAS,
) -> List[RateSensitivityRow]:
    """Recompute the breakdown at nearby interest rates.

    Each delta is a percentage-point offset from the entered rate.
    Offsets that would produce a negative rate are skipped.
    """
    rows = []
    for delta in sorted(deltas):
        rate = round(inputs.interest_rate + delta, 6)
        if rate < 0:
            continue
        b = calculate_mortgage(replace(inputs, interest_rate=rate))
        rows.append(RateSensitivityRow(
            interest_rate=rate,
            monthly_principal_and_interest=b.monthly_principal_and_interest,
            total_monthly_payment=b.total_monthly_payment,
            total_interest_paid=b.total_interest_paid,
        ))
    return rows
