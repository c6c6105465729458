"""
PDF report generation and reusable chart rendering for the
Mortgage Payment Calculator.

Provides:
  - Three-page PDF report (generate_pdf)
  - Base64-encoded chart images for web embedding (get_web_charts)
  - Individual chart renderers reusable by both CLI and web
"""

from __future__ import annotations

import base64
import io
import logging
from typing import Any, Dict, List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.ticker import FuncFormatter

from mortgage import AmortizationSchedule, LoanInputs, PaymentBreakdown

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════
# Style constants
# ═══════════════════════════════════════════════════════════════════

BG = "#ffffff"
CARD = "#f9fafb"
TEXT = "#111827"
TEXT2 = "#374151"
BLUE = "#2563eb"
BLUE_LIGHT = "#93c5fd"
SLATE = "#6b7280"
BORDER = "#d1d5db"

# One colour per monthly component, in PaymentBreakdown.components() order.
COMPONENT_COLORS = [
    "#2563eb",  # principal & interest
    "#f59e0b",  # property tax
    "#10b981",  # insurance
    "#ef4444",  # PMI
    "#8b5cf6",  # HOA
    "#06b6d4",  # utilities
    "#64748b",  # maintenance
]

LETTER_W, LETTER_H = 8.5, 11
WEB_W, WEB_H = 8, 6


# ═══════════════════════════════════════════════════════════════════
# Axis formatters
# ═══════════════════════════════════════════════════════════════════

def _usd_fmt(x, _):
    if abs(x) >= 1e6:
        return f"${x / 1e6:.1f}M"
    if abs(x) >= 1e3:
        return f"${x / 1e3:.0f}k"
    return f"${x:.0f}"


USD_FMT = FuncFormatter(_usd_fmt)


def _usd(value: float) -> str:
    """Dollar amount for figure text, escaped so matplotlib skips mathtext."""
    return rf"\${value:,.2f}"


def _style(fig, *axes):
    """Apply the report theme to figure and all axes."""
    fig.patch.set_facecolor(BG)
    for ax in axes:
        ax.set_facecolor(CARD)
        ax.tick_params(colors=TEXT2, labelsize=8)
        ax.xaxis.label.set_color(TEXT2)
        ax.yaxis.label.set_color(TEXT2)
        ax.title.set_color(TEXT)
        for spine in ax.spines.values():
            spine.set_color(BORDER)
        ax.grid(True, alpha=0.4, color=BORDER)


# ═══════════════════════════════════════════════════════════════════
# Charts
# ═══════════════════════════════════════════════════════════════════

def breakdown_doughnut(breakdown: PaymentBreakdown,
                       figsize=(WEB_W, WEB_H)) -> plt.Figure:
    """Doughnut of the monthly components, total in the centre."""
    fig, ax = plt.subplots(figsize=figsize)
    fig.patch.set_facecolor(BG)

    parts = [
        (label, value, color)
        for (label, value), color in zip(breakdown.components(), COMPONENT_COLORS)
        if value > 0
    ]
    if parts:
        labels, values, colors = zip(*parts)
        ax.pie(values, colors=colors, startangle=90, counterclock=False,
               wedgeprops={"width": 0.35, "edgecolor": BG, "linewidth": 2})
        ax.legend(
            [f"{lab}: {_usd(val)}" for lab, val in zip(labels, values)],
            loc="center left", bbox_to_anchor=(1.0, 0.5),
            fontsize=9, frameon=False, labelcolor=TEXT2,
        )
    else:
        ax.pie([1], colors=[BORDER], wedgeprops={"width": 0.35})

    ax.text(0, 0.08, _usd(breakdown.total_monthly_payment),
            ha="center", va="center", fontsize=15, color=TEXT, fontweight="bold")
    ax.text(0, -0.12, "per month", ha="center", va="center",
            fontsize=9, color=SLATE)
    ax.set_aspect("equal")
    ax.set_title("Monthly Payment Breakdown", fontsize=12, color=TEXT, pad=10)
    return fig


def balance_chart(schedule: AmortizationSchedule,
                  figsize=(WEB_W, WEB_H)) -> plt.Figure:
    """Yearly principal/interest bars with the remaining balance line."""
    fig, ax = plt.subplots(figsize=figsize, constrained_layout=True)
    _style(fig, ax)

    years = schedule.years
    ax.bar(years, schedule.yearly_principal, color=BLUE, label="Principal")
    ax.bar(years, schedule.yearly_interest, bottom=schedule.yearly_principal,
           color=BLUE_LIGHT, label="Interest")
    ax.set_xlabel("Year")
    ax.set_ylabel("Paid per year")
    ax.yaxis.set_major_formatter(USD_FMT)

    ax2 = ax.twinx()
    ax2.plot(years, schedule.yearly_balance, color=TEXT, linewidth=2,
             label="Remaining balance")
    ax2.set_ylim(bottom=0)
    ax2.yaxis.set_major_formatter(USD_FMT)
    ax2.tick_params(colors=TEXT2, labelsize=8)
    ax2.set_ylabel("Remaining balance", color=TEXT2)

    handles, labels = ax.get_legend_handles_labels()
    h2, l2 = ax2.get_legend_handles_labels()
    ax.legend(handles + h2, labels + l2, loc="upper right", fontsize=8,
              facecolor=BG, edgecolor=BORDER, labelcolor=TEXT2)
    ax.set_title("Amortization by Year", fontsize=12, pad=10)
    return fig


def _summary_page(inputs: LoanInputs, d: Dict[str, Any],
                  summary_text: str) -> plt.Figure:
    fig = plt.figure(figsize=(LETTER_W, LETTER_H))
    fig.patch.set_facecolor(BG)

    fig.text(0.50, 0.93, "Mortgage Payment Report",
             ha="center", fontsize=18, color=TEXT, fontweight="bold")

    y = 0.86
    fig.text(0.08, y, "Your Loan", fontsize=13, color=TEXT, fontweight="bold")
    y -= 0.03
    params = [
        f"Home price: {_usd(inputs.home_price)}  |  "
        f"Down payment: {_usd(inputs.down_payment)} ({d['down_payment_pct']:.1f}%)",
        f"Term: {inputs.loan_term} years  |  Interest rate: {inputs.interest_rate:.3f}%  |  "
        f"Property tax: {inputs.property_tax_rate:.3f}%  |  PMI: {inputs.pmi_rate:.3f}%",
    ]
    for p in params:
        fig.text(0.10, y, p, fontsize=9, color=TEXT2)
        y -= 0.024

    y -= 0.025
    fig.text(0.08, y, "Monthly Payment Breakdown",
             fontsize=13, color=BLUE, fontweight="bold")
    y -= 0.03
    for label, value in d["components"]:
        fig.text(0.10, y, label, fontsize=10, color=TEXT2)
        fig.text(0.60, y, _usd(value), fontsize=10, color=TEXT2, ha="right")
        y -= 0.024
    fig.text(0.10, y, "Total monthly payment", fontsize=11, color=TEXT,
             fontweight="bold")
    fig.text(0.60, y, _usd(d["total_monthly_payment"]), fontsize=11,
             color=TEXT, fontweight="bold", ha="right")

    y -= 0.05
    fig.text(0.08, y, "Loan Details", fontsize=13, color=BLUE, fontweight="bold")
    y -= 0.03
    details = [
        ("Total loan amount", d["total_loan_amount"]),
        ("Total interest paid", d["total_interest_paid"]),
        ("Total of P&I payments", d["total_of_payments"]),
    ]
    for label, value in details:
        fig.text(0.10, y, label, fontsize=10, color=TEXT2)
        fig.text(0.60, y, _usd(value), fontsize=10, color=TEXT2, ha="right")
        y -= 0.024

    # Word-wrap summary text
    y -= 0.03
    line = ""
    for word in summary_text.replace("$", r"\$").split():
        if len(line) + len(word) + 1 <= 85:
            line = f"{line} {word}" if line else word
        else:
            fig.text(0.08, y, line, fontsize=9, color=TEXT2)
            y -= 0.022
            line = word
    if line:
        fig.text(0.08, y, line, fontsize=9, color=TEXT2)

    fig.text(0.50, 0.03,
             "Estimates only. Actual rates, taxes and insurance vary by lender and location.",
             ha="center", fontsize=8, color=SLATE, style="italic")
    return fig


# ═══════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════

def figure_to_base64(fig: plt.Figure) -> str:
    """Convert a matplotlib figure to a base64-encoded PNG string."""
    buf = io.BytesIO()
    fig.savefig(buf, format="png", facecolor=fig.get_facecolor(),
                dpi=120, bbox_inches="tight")
    buf.seek(0)
    b64 = base64.b64encode(buf.read()).decode()
    buf.close()
    return b64


def generate_pdf(
    inputs: LoanInputs,
    d: Dict[str, Any],
    summary_text: str,
    path: str = "mortgage_report.pdf",
) -> str:
    """Generate the full PDF report. Returns the file path."""
    pages = [
        _summary_page(inputs, d, summary_text),
        breakdown_doughnut(d["breakdown"], figsize=(LETTER_W, LETTER_H * 0.6)),
        balance_chart(d["schedule"], figsize=(LETTER_W, LETTER_H * 0.6)),
    ]

    try:
        with PdfPages(path) as pdf:
            for fig in pages:
                pdf.savefig(fig, facecolor=fig.get_facecolor())
    finally:
        for fig in pages:
            plt.close(fig)
    logger.info("Wrote PDF report to %s", path)
    return path


def get_web_charts(d: Dict[str, Any]) -> List[str]:
    """Return base64-encoded PNG chart images for web embedding.

    Returns 2 charts:
      [0] Monthly Payment Breakdown  (doughnut)
      [1] Amortization by Year  (bars + balance line)
    """
    chart_figs = [
        breakdown_doughnut(d["breakdown"]),
        balance_chart(d["schedule"]),
    ]

    try:
        return [figure_to_base64(f) for f in chart_figs]
    finally:
        for f in chart_figs:
            plt.close(f)
