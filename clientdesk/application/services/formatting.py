"""Display formatting policy, applied once, at the presentation boundary.

Every value leaving the service as text goes through one of these helpers,
so empty values, missing dates and currency amounts render the same way on
every field.
"""

from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, Optional

from clientdesk.config import get_settings
from clientdesk.core.money import to_decimal
from clientdesk.domain.schemas.client_detail import InfoField


def format_currency(value: Any) -> str:
    settings = get_settings()
    amount = to_decimal(value)
    exponent = Decimal(1).scaleb(-settings.CURRENCY_DECIMALS)
    with localcontext() as ctx:
        # Room for every integer digit plus the decimals, however large the amount
        ctx.prec = max(ctx.prec, amount.adjusted() + settings.CURRENCY_DECIMALS + 2)
        amount = amount.quantize(exponent, rounding=ROUND_HALF_UP)
        digits = f"{abs(amount):,.{settings.CURRENCY_DECIMALS}f}"

    digits = (
        digits.replace(",", "\0")
        .replace(".", settings.DECIMAL_SEPARATOR)
        .replace("\0", settings.THOUSANDS_SEPARATOR)
    )
    sign = "-" if amount < 0 else ""
    return f"{sign}{digits} {settings.CURRENCY_SYMBOL}"


def _as_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def format_date(value: Any) -> str:
    """Format a date; absent or unparseable dates render the placeholder."""
    settings = get_settings()
    parsed = _as_date(value)
    if parsed is None:
        return settings.DATE_PLACEHOLDER
    return parsed.strftime(settings.DATE_FORMAT)


def display_value(value: Any) -> str:
    """Text for an info field; None, empty and zero show the placeholder."""
    if value is None or value == "" or (not isinstance(value, bool) and value == 0):
        return get_settings().EMPTY_PLACEHOLDER
    return str(value)


def client_info_fields(client) -> list[InfoField]:
    """The client card, in display order."""
    fields = [
        ("Client name", client.name),
        ("Contact person", client.contact_person),
        ("Email", client.email),
        ("Invoice email", client.invoice_email),
        ("Contract value", format_currency(client.contract_value)),
        ("Classification", client.classification),
        ("Source", client.source),
    ]
    return [InfoField(label=label, value=display_value(value)) for label, value in fields]
