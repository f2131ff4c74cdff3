from datetime import date
from decimal import Decimal
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bot_carimport.models import RateSource
from bot_carimport.services.rates import ExchangeRateQuote
from bot_carimport.tariff import TaxInput, compute_breakdown
from bot_carimport.utils.formatting import (
    breakdown_table,
    fmt_local,
    fmt_pct,
    fmt_usd,
    format_rate_line,
    format_result_message,
)


def _breakdown(fuel_type="Fuel", utility_type="Sedan"):
    return compute_breakdown(
        TaxInput(
            reference_price=Decimal("20000"),
            manufacturing_year=2022,
            fuel_type=fuel_type,
            exchange_rate=Decimal("1000"),
            utility_type=utility_type,
            engine_capacity_cc=1800,
            freight_cost_usd=Decimal("500"),
            insurance_cost_usd=Decimal("300"),
        ),
        current_year=2025,
    )


def test_number_formats():
    assert fmt_usd(Decimal("1234.565")) == "$1,234.57"
    assert fmt_local(Decimal("9483360.4"), "RWF") == "RWF 9,483,360"
    assert fmt_pct(Decimal("0.015")) == "2%"
    assert fmt_pct(Decimal("0.30")) == "30%"


def test_rate_line_shows_source():
    quote = ExchangeRateQuote(Decimal("1445"), date(2025, 3, 10), RateSource.FALLBACK)
    assert format_rate_line(quote) == "1 USD = 1445.00 RWF (Using Older Cache)"


def test_table_rows():
    table = breakdown_table(_breakdown())
    assert "Customs duty (25%)" in table
    assert "Excise duty (10% (by CC))" in table
    assert "$3,636.36" in table
    assert "Withholding tax" not in table

    hybrid = breakdown_table(_breakdown(fuel_type="Hybrid"))
    assert "Withholding tax" in hybrid


def test_result_message_escapes_title():
    quote = ExchangeRateQuote(Decimal("1000"), date(2025, 3, 10), RateSource.LIVE)
    text = format_result_message(title="Ford F<150> 2021", breakdown=_breakdown(), quote=quote)
    assert "F&lt;150&gt;" in text
    assert "RWF 9,483,360" in text
    assert "RWF 24,283,360" in text
    assert "(Live)" in text
    assert text.count("<pre>") == 1
