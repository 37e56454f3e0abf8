from __future__ import annotations

from html import escape
from typing import Optional
from urllib.parse import urlencode

from .models import PaymentForm
from .pipeline import GenerationResult

_STYLE = """
body { font-family: system-ui, sans-serif; background: #020617; color: #f8fafc;
       margin: 0; display: flex; min-height: 100vh; align-items: center; justify-content: center; }
main { display: grid; gap: 2rem; grid-template-columns: 2fr 3fr; max-width: 60rem; padding: 2rem;
       border-radius: 1.5rem; background: rgba(255,255,255,0.05); }
label { display: block; margin-bottom: 1rem; font-size: 0.9rem; }
input { width: 100%; padding: 0.75rem; border-radius: 1rem; border: 1px solid #334155;
        background: #0f172a; color: #f8fafc; }
button, a.button { display: inline-block; padding: 0.75rem 1rem; border-radius: 1rem; border: 0;
                   font-weight: 600; background: #34d399; color: #0f172a; text-decoration: none; }
.error { background: #7f1d1d; padding: 0.75rem; border-radius: 1rem; }
.preview img { background: #fff; padding: 1rem; border-radius: 1.5rem; max-width: 240px; }
pre { overflow-x: auto; color: #a7f3d0; background: #0f172a; padding: 1rem; border-radius: 1rem; }
"""


def _download_href(form: PaymentForm) -> str:
    query = {"address": form.address, "amount": form.amount}
    if form.note.strip():
        query["note"] = form.note
    return "/qr.png?" + urlencode(query)


def _preview(form: PaymentForm, result: Optional[GenerationResult]) -> str:
    if result is None:
        return (
            '<p class="placeholder">Provide details and tap "Generate QR Code" '
            "to preview and download your payment request.</p>"
        )
    return (
        f'<img src="{result.image.data_uri}" alt="Ethereum payment QR code">'
        f"<p>Scan to pay {escape(result.amount_eth)} ETH</p>"
        f"<h3>Encoded URI</h3><pre>{escape(result.uri)}</pre>"
        f'<a class="button" href="{escape(_download_href(form))}">Download QR</a>'
    )


def page_html(
    form: Optional[PaymentForm] = None,
    result: Optional[GenerationResult] = None,
    error: Optional[str] = None,
) -> str:
    """Render the generator page with the form, an optional error and preview."""
    form = form or PaymentForm()
    error_html = f'<p class="error" role="alert">{escape(error)}</p>' if error else ""
    return f"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Ethereum QR Generator</title>
<style>{_STYLE}</style>
</head>
<body>
<main>
  <form method="get" action="/">
    <h1>Ethereum QR Generator</h1>
    <p>Enter an address, amount, and optional note to get a ready-to-use payment QR.</p>
    {error_html}
    <label>Wallet Address
      <input name="address" placeholder="0x..." autocomplete="off" value="{escape(form.address)}" required>
    </label>
    <label>Amount (ETH) <small>auto converts to wei</small>
      <input name="amount" inputmode="decimal" placeholder="0.05" value="{escape(form.amount)}" required>
    </label>
    <label>Note (optional)
      <input name="note" placeholder="Latte Payment" value="{escape(form.note)}">
    </label>
    <button type="submit">Generate QR Code</button>
  </form>
  <section class="preview">
    <h2>Preview</h2>
    {_preview(form, result)}
  </section>
</main>
</body>
</html>
"""
