"""
Display formatting for amounts and dates used in reminders and documents.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Union


class CurrencyFormatter:
    """Currency formatting utilities"""

    CURRENCY_SYMBOLS = {
        'INR': '₹',
        'USD': '$',
        'EUR': '€',
        'GBP': '£'
    }

    @classmethod
    def format_indian_currency(cls, amount: Union[Decimal, int, float]) -> str:
        """
        Group digits the Indian way (lakhs/crores): 150000 -> "1,50,000".

        Paise are shown only when non-zero.
        """
        value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        sign = "-" if value < 0 else ""
        whole, _, fraction = f"{abs(value):.2f}".partition(".")

        if len(whole) > 3:
            head, tail = whole[:-3], whole[-3:]
            groups = []
            while len(head) > 2:
                groups.insert(0, head[-2:])
                head = head[:-2]
            if head:
                groups.insert(0, head)
            whole = ",".join(groups + [tail])

        if fraction == "00":
            return f"{sign}{whole}"
        return f"{sign}{whole}.{fraction}"

    @classmethod
    def format_amount(cls, amount: Union[Decimal, int, float], currency: str = 'INR') -> str:
        """Format monetary amount with its currency symbol"""
        symbol = cls.CURRENCY_SYMBOLS.get(currency, f"{currency} ")
        return f"{symbol}{cls.format_indian_currency(amount)}"


class DateTimeFormatter:
    """Date formatting utilities"""

    COMMON_FORMATS = {
        'short_date': '%d/%m/%Y',
        'long_date': '%d %B %Y',
        'iso_date': '%Y-%m-%d',
        'month_key': '%Y-%m',
    }

    @classmethod
    def format_date(cls, date_obj: date, format_type: str = 'short_date') -> str:
        """Format date with predefined formats"""
        return date_obj.strftime(cls.COMMON_FORMATS[format_type])


__all__ = ["CurrencyFormatter", "DateTimeFormatter"]
