"""
CLI interface and shared display-data computation for the
Mortgage Payment Calculator.
"""

from __future__ import annotations

import math
import sys
from typing import Any, Dict, List, Optional

import config as cfg
import forms
from mortgage import (
    AmortizationSchedule,
    LoanInputs,
    PaymentBreakdown,
    RateSensitivityRow,
    amortization_schedule,
    calculate_mortgage,
    rate_sensitivity,
)
import report


# ═══════════════════════════════════════════════════════════════════
# Formatting helpers
# ═══════════════════════════════════════════════════════════════════

def fmt(val: float, decimals: int = 2) -> str:
    """Format number as USD currency, e.g. $1,077.71 or -$12.50."""
    sign = "-" if val < 0 else ""
    return f"{sign}${abs(val):,.{decimals}f}"


def pct(val: float, decimals: int = 1) -> str:
    return f"{val:.{decimals}f}%"


# ═══════════════════════════════════════════════════════════════════
# Input collection (CLI)
# ═══════════════════════════════════════════════════════════════════

def _strip_symbols(s: str) -> str:
    """Remove currency and percent symbols, commas, spaces."""
    return s.replace("$", "").replace("%", "").replace(",", "").replace(" ", "")


def _prompt_field(name: str, default: float) -> float:
    label = cfg.FIELD_LABELS[name]
    shown = forms.format_number_with_commas(default)
    while True:
        raw = input(f"  {label} [{shown}]: ").strip()
        if not raw:
            return float(default)
        try:
            val = float(_strip_symbols(raw))
        except ValueError:
            val = math.nan
        if not math.isfinite(val):
            print("    Invalid number, try again.")
            continue
        error = forms.validate_field(name, val)
        if error:
            print(f"    {error}")
            continue
        return val


def collect_inputs() -> LoanInputs:
    """Prompt the user for all ten calculator fields."""
    print("\n  Enter your details (press Enter for defaults):\n")

    values = {name: _prompt_field(name, default)
              for name, default in cfg.DEFAULT_INPUTS.items()}

    errors = forms.validate_inputs(values)
    while "down_payment" in errors:
        print(f"    {errors['down_payment']}")
        values["down_payment"] = _prompt_field("down_payment", 0)
        errors = forms.validate_inputs(values)

    return forms.parse_form(values)


# ═══════════════════════════════════════════════════════════════════
# Shared display-data computation (used by CLI and web app)
# ═══════════════════════════════════════════════════════════════════

def compute_display_data(
    inputs: LoanInputs,
    breakdown: PaymentBreakdown,
    schedule: AmortizationSchedule,
    sensitivity: List[RateSensitivityRow],
) -> Dict[str, Any]:
    """Extract every metric needed for the result views."""
    total = breakdown.total_monthly_payment
    pi = breakdown.monthly_principal_and_interest
    down_pct = inputs.down_payment / inputs.home_price * 100

    # Year in which half the original principal has been repaid
    half_year: Optional[int] = None
    if breakdown.total_loan_amount > 0:
        halfway = schedule.yearly_balance <= breakdown.total_loan_amount / 2
        if halfway.any():
            half_year = int(schedule.years[halfway.argmax()])

    return {
        # Inputs echo
        "home_price": inputs.home_price,
        "down_payment": inputs.down_payment,
        "down_payment_pct": down_pct,
        "loan_term": inputs.loan_term,
        "interest_rate": inputs.interest_rate,
        "current_rate": round(inputs.interest_rate, 6),
        "num_payments": inputs.num_payments,
        # Monthly breakdown
        "components": breakdown.components(),
        "total_monthly_payment": total,
        "pi_share_pct": (pi / total * 100) if total > 0 else 0.0,
        "other_costs": total - pi,
        # Loan details
        "total_loan_amount": breakdown.total_loan_amount,
        "total_interest_paid": breakdown.total_interest_paid,
        "total_of_payments": pi * inputs.num_payments,
        "loan_to_value_pct": 100 - down_pct,
        "half_paid_year": half_year,
        "first_year_interest": float(schedule.yearly_interest[0]),
        "first_year_principal": float(schedule.yearly_principal[0]),
        # Rate sensitivity
        "sensitivity": sensitivity,
    }


def generate_summary_text(d: Dict[str, Any]) -> str:
    """Build a short plain-English summary of the result."""
    text = (
        f"Your estimated monthly cost is {fmt(d['total_monthly_payment'])}, "
        f"of which {fmt(d['components'][0][1])} "
        f"({pct(d['pi_share_pct'])}) is principal and interest. "
    )
    if d["total_loan_amount"] <= 0:
        return text + "With no loan balance, you pay no mortgage interest."
    text += (
        f"Over {d['loan_term']} years you would pay "
        f"{fmt(d['total_interest_paid'])} in interest on a "
        f"{fmt(d['total_loan_amount'])} loan"
    )
    if d["half_paid_year"] is not None:
        text += f", with half the principal repaid by year {d['half_paid_year']}"
    return text + "."


def run_calculation(inputs: LoanInputs) -> Dict[str, Any]:
    """Run every calculation for *inputs* and return the display dict."""
    breakdown = calculate_mortgage(inputs)
    schedule = amortization_schedule(inputs)
    sensitivity = rate_sensitivity(inputs)
    d = compute_display_data(inputs, breakdown, schedule, sensitivity)
    d["breakdown"] = breakdown
    d["schedule"] = schedule
    return d


# ═══════════════════════════════════════════════════════════════════
# Box-drawing CLI output
# ═══════════════════════════════════════════════════════════════════

W = 78  # box width (characters)
H = "═"


def _box_top(title: str) -> str:
    inner = W - 2
    return (
        f"╔{H * inner}╗\n"
        f"║  {title:<{inner - 2}}║\n"
        f"╠{H * inner}╣"
    )


def _box_line(text: str = "") -> str:
    inner = W - 4
    if len(text) > inner:
        text = text[:inner]
    return f"║  {text:<{inner}}║"


def _box_row(label: str, value: str, lw: int = 38) -> str:
    return _box_line(f"{label:<{lw}}{value}")


def _box_bottom() -> str:
    return f"╚{H * (W - 2)}╝"


def _print_section(title: str, rows: List[str]) -> None:
    """Print a titled box with content rows."""
    print(_box_top(title))
    for r in rows:
        print(r)
    print(_box_bottom())
    print()


# ═══════════════════════════════════════════════════════════════════
# CLI Section Printers
# ═══════════════════════════════════════════════════════════════════

def _print_inputs(d: Dict[str, Any]) -> None:
    rows = [
        _box_row("Home price", fmt(d["home_price"])),
        _box_row("Down payment", f"{fmt(d['down_payment'])} ({pct(d['down_payment_pct'])})"),
        _box_row("Loan term", f"{d['loan_term']} years ({d['num_payments']} payments)"),
        _box_row("Interest rate", pct(d["interest_rate"], 3)),
    ]
    _print_section("YOUR LOAN", rows)


def _print_breakdown(d: Dict[str, Any]) -> None:
    rows = [_box_row(label, fmt(value)) for label, value in d["components"]]
    rows.append(_box_line("─" * (W - 6)))
    rows.append(_box_row("TOTAL MONTHLY PAYMENT", fmt(d["total_monthly_payment"])))
    _print_section("MONTHLY PAYMENT BREAKDOWN", rows)


def _print_loan_details(d: Dict[str, Any]) -> None:
    rows = [
        _box_row("Total loan amount", fmt(d["total_loan_amount"])),
        _box_row("Total interest paid", fmt(d["total_interest_paid"])),
        _box_row("Total of P&I payments", fmt(d["total_of_payments"])),
        _box_row("Loan-to-value", pct(d["loan_to_value_pct"])),
        _box_line(),
        _box_row("First-year interest", fmt(d["first_year_interest"])),
        _box_row("First-year principal", fmt(d["first_year_principal"])),
    ]
    if d["half_paid_year"] is not None:
        rows.append(_box_row("Half of principal repaid by", f"year {d['half_paid_year']}"))

    rows.append(_box_line())
    summary = generate_summary_text(d)
    line_len = W - 6
    line = ""
    for word in summary.split():
        if len(line) + len(word) + 1 <= line_len:
            line = f"{line} {word}" if line else word
        else:
            rows.append(_box_line(line))
            line = word
    if line:
        rows.append(_box_line(line))

    _print_section("LOAN DETAILS", rows)


def _print_sensitivity(d: Dict[str, Any]) -> None:
    h1 = f"{'Rate':>8}  {'P&I':>12}  {'Total/mo':>12}  {'Total interest':>16}"
    rows = [_box_line(h1), _box_line("─" * (W - 6))]
    for r in d["sensitivity"]:
        marker = " <<" if r.interest_rate == d["current_rate"] else ""
        line = (
            f"{pct(r.interest_rate, 3):>8}  "
            f"{fmt(r.monthly_principal_and_interest):>12}  "
            f"{fmt(r.total_monthly_payment):>12}  "
            f"{fmt(r.total_interest_paid):>16}"
            f"{marker}"
        )
        rows.append(_box_line(line))
    _print_section("WHAT IF THE RATE CHANGES?", rows)


def _print_report(pdf_path: Optional[str]) -> None:
    rows = []
    if pdf_path:
        rows.append(_box_line(f"PDF report saved to: {pdf_path}"))
    else:
        rows.append(_box_line("Charts available in the web app:"))
        rows.append(_box_line("  python main.py  (opens localhost:5000)"))
    _print_section("REPORT", rows)


# ═══════════════════════════════════════════════════════════════════
# Main CLI entry point
# ═══════════════════════════════════════════════════════════════════

def run_cli(pdf_path: Optional[str] = cfg.PDF_PATH) -> None:
    """Run the full CLI workflow."""
    # Ensure box-drawing characters render on Windows
    try:
        sys.stdout.reconfigure(encoding="utf-8")
    except (AttributeError, OSError):
        pass
    print()
    print("=" * W)
    print("  Mortgage Payment Calculator")
    print("=" * W)

    inputs = collect_inputs()
    d = run_calculation(inputs)

    print()
    _print_inputs(d)
    _print_breakdown(d)
    _print_loan_details(d)
    _print_sensitivity(d)

    if pdf_path:
        print("  Generating PDF report...")
        report.generate_pdf(inputs, d, generate_summary_text(d), pdf_path)
        print(f"  Saved to {pdf_path}\n")

    _print_report(pdf_path)


if __name__ == "__main__":
    run_cli()
