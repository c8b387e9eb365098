"""
Display formatting for templates (PDF quotes, invoices, emails)

Template helpers never raise: a missing or unparseable amount renders as
"$0.00" so a document with a bad field still renders.
"""

from typing import Optional

from pottycrm.core.errors import InvalidArgument
from pottycrm.core.math.price_calculations import MoneyInput, parse_money_input, to_money


def format_currency(amount: Optional[MoneyInput]) -> str:
    """
    US dollar format with thousands separators.

    Examples:
        >>> format_currency(1234.5)
        '$1,234.50'
        >>> format_currency("-12")
        '-$12.00'
        >>> format_currency(None)
        '$0.00'
    """
    if amount is None or amount == "":
        return "$0.00"
    try:
        value = to_money(parse_money_input(amount, "amount"))
    except InvalidArgument:
        return "$0.00"

    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"
