"""USD <-> local currency conversion at a caller-supplied rate.

No rounding happens here; amounts keep full ``Decimal`` precision until they
are formatted for display.
"""

from __future__ import annotations

from decimal import Decimal

from bot_carimport.errors import ValidationError


def _check_rate(exchange_rate: Decimal) -> None:
    if exchange_rate <= 0:
        raise ValidationError("Exchange rate must be positive")


def to_local(amount_usd: Decimal, exchange_rate: Decimal) -> Decimal:
    """Convert a USD amount using a local-currency-per-USD rate."""
    _check_rate(exchange_rate)
    return amount_usd * exchange_rate


def to_usd(amount_local: Decimal, exchange_rate: Decimal) -> Decimal:
    _check_rate(exchange_rate)
    return amount_local / exchange_rate


__all__ = ["to_local", "to_usd"]
