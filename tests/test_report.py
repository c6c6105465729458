"""Tests for chart rendering and PDF export."""

import base64
from dataclasses import replace

import matplotlib.pyplot as plt
import pytest

import cli
import report
from mortgage import LoanInputs, amortization_schedule, calculate_mortgage


@pytest.fixture
def inputs() -> LoanInputs:
    return LoanInputs(
        home_price=300_000,
        down_payment=60_000,
        loan_term=30,
        interest_rate=3.5,
        property_tax_rate=1.2,
        home_insurance_annual=1_200,
        pmi_rate=0.5,
        hoa_monthly=250,
        utilities_monthly=200,
        maintenance_monthly=200,
    )


def test_doughnut_skips_zero_components(inputs) -> None:
    b = calculate_mortgage(replace(inputs, pmi_rate=0, hoa_monthly=0))
    fig = report.breakdown_doughnut(b)
    ax = fig.axes[0]
    legend = [t.get_text() for t in ax.get_legend().get_texts()]
    assert len(legend) == 5
    assert not any(t.startswith("PMI") or t.startswith("HOA") for t in legend)
    assert r"Principal & Interest: \$1,077.71" in legend
    plt.close(fig)


def test_doughnut_with_all_zero_components(inputs) -> None:
    b = calculate_mortgage(replace(
        inputs, down_payment=inputs.home_price, property_tax_rate=0,
        home_insurance_annual=0, hoa_monthly=0, utilities_monthly=0,
        maintenance_monthly=0,
    ))
    fig = report.breakdown_doughnut(b)
    assert fig.axes[0].get_legend() is None
    plt.close(fig)


def test_balance_chart(inputs) -> None:
    fig = report.balance_chart(amortization_schedule(inputs))
    assert len(fig.axes) == 2
    plt.close(fig)


def test_web_charts_are_png(inputs) -> None:
    images = report.get_web_charts(cli.run_calculation(inputs))
    assert len(images) == 2
    for b64 in images:
        assert base64.b64decode(b64).startswith(b"\x89PNG")


def test_generate_pdf(inputs, tmp_path) -> None:
    d = cli.run_calculation(inputs)
    path = report.generate_pdf(inputs, d, cli.generate_summary_text(d),
                               str(tmp_path / "out.pdf"))
    with open(path, "rb") as f:
        assert f.read(4) == b"%PDF"


def test_generate_pdf_closes_figures_on_failure(inputs, tmp_path, monkeypatch) -> None:
    def failing_pdf(_path):
        raise OSError("disk full")

    plt.close("all")
    monkeypatch.setattr(report, "PdfPages", failing_pdf)
    d = cli.run_calculation(inputs)
    with pytest.raises(OSError):
        report.generate_pdf(inputs, d, cli.generate_summary_text(d),
                            str(tmp_path / "out.pdf"))
    assert plt.get_fignums() == []
