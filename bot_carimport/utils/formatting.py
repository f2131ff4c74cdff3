from __future__ import annotations

import html
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from tabulate import tabulate

from bot_carimport.constants import RATE_STATUS_LABELS
from bot_carimport.services.rates import ExchangeRateQuote
from bot_carimport.tariff.engine import TaxBreakdown

Number = Union[float, Decimal]


def _q(v: Number, places: str) -> Decimal:
    return Decimal(str(v)).quantize(Decimal(places), rounding=ROUND_HALF_UP)


def fmt_usd(v: Number) -> str:
    return f"${_q(v, '0.01'):,}"


def fmt_local(v: Number, code: str = "RWF") -> str:
    """Local currency amounts are shown without fractional units."""
    return f"{code} {_q(v, '1'):,}"


def fmt_pct(rate: Number) -> str:
    return f"{_q(Decimal(str(rate)) * 100, '1')}%"


def format_rate_line(quote: ExchangeRateQuote, code: str = "RWF") -> str:
    status = RATE_STATUS_LABELS.get(quote.source.value, "")
    return f"1 USD = {_q(quote.rate, '0.01')} {code} {status}".strip()


def breakdown_table(br: TaxBreakdown, code: str = "RWF") -> str:
    rows = [
        ["Value as new", fmt_usd(br.reference_price_usd)],
        ["Car age", f"{br.car_age} years"],
        ["Depreciation", fmt_pct(br.depreciation_rate)],
        ["Depreciated value", fmt_usd(br.depreciated_value_usd)],
        ["CIF value", fmt_usd(br.cif_value_usd)],
        ["Infrastructure levy", fmt_usd(br.infrastructure_levy_usd)],
        [f"Customs duty ({br.customs_duty_rate_label})", fmt_usd(br.customs_duty_usd)],
        [f"Excise duty ({br.excise_duty_rate_label})", fmt_usd(br.excise_duty_usd)],
    ]
    if br.withholding_tax_usd:
        rows.append(["Withholding tax", fmt_usd(br.withholding_tax_usd)])
    rows.extend([
        ["VAT", fmt_usd(br.vat_usd)],
        ["Registration fee", f"{fmt_local(br.registration_fee_local, code)} ({fmt_usd(br.registration_fee_usd)})"],
    ])
    return tabulate(rows, tablefmt="plain", disable_numparse=True)


def format_result_message(
    *,
    title: str,
    breakdown: TaxBreakdown,
    quote: ExchangeRateQuote,
    code: str = "RWF",
) -> str:
    """Build the HTML result message: header, totals and a line-item table."""
    br = breakdown
    lines: list[str] = [
        "\U0001F4CA <b>Import tax estimate</b>",
        f"\U0001F697 {html.escape(title)}",
        f"\U0001F4C8 {html.escape(format_rate_line(quote, code))}",
        "",
        f"\U0001F4B0 Total tax: <b>{fmt_local(br.total_tax_local, code)}</b> ({fmt_usd(br.total_tax_usd)})",
        f"✅ Total landed cost: <b>{fmt_local(br.total_landed_cost_local, code)}</b> "
        f"({fmt_usd(br.total_landed_cost_usd)})",
        "",
        f"<pre>{html.escape(breakdown_table(br, code))}</pre>",
    ]
    return "\n".join(lines)


__all__ = [
    "fmt_usd",
    "fmt_local",
    "fmt_pct",
    "format_rate_line",
    "breakdown_table",
    "format_result_message",
]
