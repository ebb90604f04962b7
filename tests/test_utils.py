from datetime import date
from decimal import Decimal

import pytest

from utils.currency import currency_symbol, format_currency
from utils.date_range import ALL_END, ALL_START, resolve_period


@pytest.mark.parametrize(
    "amount,currency,text",
    [
        (Decimal("-1234.5"), "USD", "-$1,234.50"),
        (Decimal("0"), "USD", "$0.00"),
        (148.7, "usd", "$148.70"),
        (Decimal("1000.5"), "JPY", "¥1,001"),
        (Decimal("2.005"), "EUR", "€2.01"),
    ],
)
def test_format_currency(amount, currency, text):
    assert format_currency(amount, currency) == text


def test_unknown_currency_uses_code():
    assert currency_symbol("SEK") == "SEK "


def test_periods():
    anchor = date(2024, 2, 14)  # Wednesday
    assert resolve_period("daily", anchor) == (anchor, anchor)
    assert resolve_period("weekly", anchor) == (date(2024, 2, 12), date(2024, 2, 18))
    assert resolve_period("monthly", anchor) == (date(2024, 2, 1), date(2024, 2, 29))
    assert resolve_period("yearly", anchor) == (date(2024, 1, 1), date(2024, 12, 31))
    assert resolve_period("all", anchor) == (ALL_START, ALL_END)


def test_december_month_end():
    assert resolve_period("monthly", date(2024, 12, 5)) == (date(2024, 12, 1), date(2024, 12, 31))


def test_unknown_period():
    with pytest.raises(ValueError):
        resolve_period("hourly", date(2024, 1, 1))
