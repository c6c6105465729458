"""
Flask web application for the Mortgage Payment Calculator.

Single-file app using render_template_string.  Run via ``python main.py``
which starts the dev server on localhost:5000.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict

from flask import Flask, render_template_string, request, send_file

import config as cfg
import forms
from cli import fmt, generate_summary_text, pct, run_calculation
import report

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["PDF_PATH"] = cfg.PDF_PATH


# ═══════════════════════════════════════════════════════════════════
# Form state
# ═══════════════════════════════════════════════════════════════════

def default_form() -> Dict[str, str]:
    """Form values shown on first load, already comma-formatted."""
    return {name: forms.format_number_with_commas(value)
            for name, value in cfg.DEFAULT_INPUTS.items()}


def masked_form(form: Dict[str, str]) -> Dict[str, str]:
    """Echo submitted values back through the input mask."""
    masked = default_form()
    for name in cfg.FIELD_LABELS:
        if name in form:
            masked[name] = forms.mask_input(form[name], name)
    return masked


# ═══════════════════════════════════════════════════════════════════
# HTML Template
# ═══════════════════════════════════════════════════════════════════

HTML_TEMPLATE = r"""
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Mortgage Calculator</title>
<style>
  *{margin:0;padding:0;box-sizing:border-box}
  body{
    background:#f9fafb;color:#111827;min-height:100vh;
    font-family:system-ui,-apple-system,'Segoe UI',sans-serif;line-height:1.5;
  }
  .container{max-width:1152px;margin:0 auto;padding:2rem 1rem}
  h1{font-size:2.25rem;font-weight:700;text-align:center;margin-bottom:2rem}
  h2{font-size:1.5rem;font-weight:600;margin-bottom:1.5rem}
  h3{font-size:1.25rem;font-weight:600;margin-bottom:.75rem}

  .layout{display:grid;grid-template-columns:1fr 1fr;gap:2rem;align-items:start}
  .card{background:#fff;padding:1.5rem;border-radius:.5rem;box-shadow:0 10px 15px -3px rgba(0,0,0,.1)}

  /* ── form ── */
  .form-grid{display:grid;grid-template-columns:1fr 1fr;gap:1rem}
  .form-group{display:flex;flex-direction:column;gap:.25rem}
  .form-group label{font-size:.875rem;font-weight:500;color:#1f2937}
  .form-group input{
    padding:.5rem .75rem;border:1px solid #d1d5db;border-radius:.375rem;
    color:#111827;font-size:.95rem;font-family:inherit;
  }
  .form-group input:focus{outline:none;box-shadow:0 0 0 2px #3b82f6}
  .form-group input.invalid{border-color:#ef4444}
  .field-error{color:#ef4444;font-size:.75rem}

  .btn{
    display:block;width:100%;margin-top:1.5rem;padding:.5rem 1rem;
    background:#2563eb;color:#fff;border:none;border-radius:.375rem;
    font-size:1rem;cursor:pointer;text-align:center;text-decoration:none;
    transition:background .2s;
  }
  .btn:hover{background:#1d4ed8}
  .btn-secondary{background:#059669}
  .btn-secondary:hover{background:#047857}

  /* ── results ── */
  .total{background:#dbeafe;padding:1rem;border-radius:.5rem;margin-bottom:1rem}
  .total p{font-size:1.5rem;font-weight:700;color:#1e3a8a}
  .tiles{display:grid;grid-template-columns:1fr 1fr;gap:1rem}
  .tile{padding:1rem;background:#f3f4f6;border-radius:.5rem;transition:background .2s}
  .tile:hover{background:#f9fafb}
  .tile-label{font-size:.875rem;font-weight:500;margin-bottom:.25rem}
  .tile-value{font-size:1.125rem;font-weight:600;font-variant-numeric:tabular-nums}
  .details{margin-top:1.5rem;padding:1.25rem;background:#dbeafe;border-radius:.5rem}
  .summary{margin-top:1rem;font-size:.9rem;color:#374151}

  .rate-table{width:100%;border-collapse:collapse;font-size:.875rem;margin-top:.5rem}
  .rate-table th{text-align:left;padding:.5rem;border-bottom:1px solid #d1d5db;color:#4b5563}
  .rate-table td{padding:.4rem .5rem;border-bottom:1px solid #e5e7eb;font-variant-numeric:tabular-nums}
  .rate-table .current td{font-weight:600;background:#eff6ff}

  .chart-img{width:100%;border-radius:.5rem;margin-top:1rem}

  @media(max-width:1024px){.layout{grid-template-columns:1fr}}
  @media(max-width:768px){.form-grid,.tiles{grid-template-columns:1fr}}
</style>
</head>
<body>
<main class="container">
<h1>Mortgage Calculator</h1>

<div class="layout">
  <div class="card">
    <form method="POST" id="calc-form" novalidate>
      <div class="form-grid">
        {% for name, label in labels.items() %}
        <div class="form-group">
          <label for="{{ name }}">{{ label }}</label>
          <input type="text" id="{{ name }}" name="{{ name }}"
                 class="{{ 'invalid' if errors.get(name) }}"
                 data-decimals="{{ decimals[name] }}"
                 value="{{ form.get(name, '') }}" placeholder="{{ placeholders[name] }}"
                 inputmode="decimal" autocomplete="off">
          {% if errors.get(name) %}<span class="field-error">{{ errors[name] }}</span>{% endif %}
        </div>
        {% endfor %}
      </div>
      <button type="submit" class="btn">Calculate</button>
    </form>
  </div>

  {% if d %}
  <div class="card">
    <h2>Monthly Payment Breakdown</h2>
    <div class="total">
      <p>Total Monthly Payment: {{ fmt(d.total_monthly_payment) }}</p>
    </div>

    <div class="tiles">
      {% for label, value in d.components %}
      <div class="tile">
        <p class="tile-label">{{ label }}</p>
        <p class="tile-value">{{ fmt(value) }}</p>
      </div>
      {% endfor %}
    </div>

    <div class="details">
      <h3>Loan Details</h3>
      <div class="tiles">
        <div>
          <p class="tile-label">Total Loan Amount</p>
          <p class="tile-value">{{ fmt(d.total_loan_amount) }}</p>
        </div>
        <div>
          <p class="tile-label">Total Interest Paid</p>
          <p class="tile-value">{{ fmt(d.total_interest_paid) }}</p>
        </div>
      </div>
      <p class="summary">{{ summary_text }}</p>
    </div>

    {% if charts %}
    <img class="chart-img" src="data:image/png;base64,{{ charts[0] }}" alt="Monthly Payment Breakdown">
    <img class="chart-img" src="data:image/png;base64,{{ charts[1] }}" alt="Amortization by Year">
    {% endif %}

    <div class="details">
      <h3>What If the Rate Changes?</h3>
      <table class="rate-table">
        <thead>
          <tr><th>Rate</th><th>P&amp;I</th><th>Total / mo</th><th>Total interest</th></tr>
        </thead>
        <tbody>
          {% for r in d.sensitivity %}
          <tr class="{{ 'current' if r.interest_rate == d.current_rate }}">
            <td>{{ pct(r.interest_rate, 3) }}</td>
            <td>{{ fmt(r.monthly_principal_and_interest) }}</td>
            <td>{{ fmt(r.total_monthly_payment) }}</td>
            <td>{{ fmt(r.total_interest_paid) }}</td>
          </tr>
          {% endfor %}
        </tbody>
      </table>
    </div>

    <a href="/download-pdf" class="btn btn-secondary">Download PDF Report</a>
  </div>
  {% endif %}
</div>
</main>

<script>
/* Live input mask: digits and one decimal point, limited precision,
   thousands separators. */
(function(){
  function withCommas(v){
    var parts=v.replace(/,/g,'').split('.');
    parts[0]=parts[0].replace(/\B(?=(\d{3})+(?!\d))/g,',');
    return parts.join('.');
  }
  document.querySelectorAll('#calc-form input').forEach(function(el){
    el.addEventListener('focus',function(){el.select()});
    el.addEventListener('input',function(){
      var v=el.value.replace(/[^\d.]/g,'');
      var i=v.indexOf('.');
      if(i!==-1){v=v.slice(0,i+1)+v.slice(i+1).replace(/\./g,'')}
      var places=parseInt(el.dataset.decimals,10);
      var parts=v.split('.');
      if(parts[1]&&parts[1].length>places){parts[1]=parts[1].slice(0,places);v=parts.join('.')}
      if(v&&!isNaN(parseFloat(v))){v=withCommas(v)}
      el.value=v;
    });
  });
})();
</script>
</body>
</html>
"""


def _render(form: Dict[str, str], errors: Dict[str, str], d: Any = None,
            charts=None, summary_text: str = "") -> str:
    return render_template_string(
        HTML_TEMPLATE,
        labels=cfg.FIELD_LABELS,
        decimals={name: forms.decimal_places(name) for name in cfg.FIELD_LABELS},
        placeholders=default_form(),
        form=form,
        errors=errors,
        d=d,
        charts=charts or [],
        summary_text=summary_text,
        fmt=fmt,
        pct=pct,
    )


# ═══════════════════════════════════════════════════════════════════
# Routes
# ═══════════════════════════════════════════════════════════════════

@app.route("/", methods=["GET", "POST"])
def index():
    if request.method == "GET":
        return _render(default_form(), {})

    # POST — validate and calculate
    form = request.form.to_dict()
    try:
        inputs = forms.parse_form(form)
    except forms.InputError as exc:
        logger.info("Rejected form input: %s", exc)
        return _render(form, exc.errors), 400

    d = run_calculation(inputs)
    summary_text = generate_summary_text(d)

    # Generate charts for web display
    chart_images = report.get_web_charts(d)

    # Save PDF for download
    report.generate_pdf(inputs, d, summary_text, app.config["PDF_PATH"])

    return _render(masked_form(form), {}, d, chart_images, summary_text)


@app.route("/download-pdf")
def download_pdf():
    path = app.config["PDF_PATH"]
    if os.path.exists(path):
        return send_file(os.path.abspath(path), as_attachment=True,
                         download_name="mortgage_report.pdf")
    return "No report generated yet. Run a calculation first.", 404


# ═══════════════════════════════════════════════════════════════════
# Entry point
# ═══════════════════════════════════════════════════════════════════

def run_web(host: str = cfg.HOST, port: int = cfg.PORT,
            debug: bool = True, open_browser: bool = True) -> None:
    """Start the Flask development server and open browser."""
    import webbrowser
    import threading

    url = f"http://{host}:{port}"
    logger.info("Starting web app at %s", url)
    if open_browser:
        threading.Timer(1.0, lambda: webbrowser.open(url)).start()
    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    run_web()
