"""Display formatting for amounts in the smallest currency unit."""

from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings


def round_amount(value):
    """Round to the nearest whole unit, halves away from zero."""
    return int(Decimal(str(value or 0)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def group_digits(number):
    """
    Group digits the Indian way: last three, then pairs.

    Example:
        >>> group_digits(1234567)
        '12,34,567'
    """
    digits = str(abs(number))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        pairs = []
        while len(head) > 2:
            pairs.insert(0, head[-2:])
            head = head[:-2]
        if head:
            pairs.insert(0, head)
        digits = ','.join(pairs + [tail])
    return f"-{digits}" if number < 0 else digits


def format_amount(value, symbol=None):
    """Render an amount for display, e.g. ``₹1,23,456``."""
    if symbol is None:
        symbol = getattr(settings, 'CURRENCY_SYMBOL', '₹')
    return f"{symbol}{group_digits(round_amount(value))}"
