from decimal import Decimal, InvalidOperation


def format_omr(amount: Decimal) -> str:
    """Format an amount as OMR with three decimals: Decimal('2850.5') -> 'OMR 2,850.500'"""
    return f"OMR {Decimal(amount):,.3f}"


def parse_amount(text: str) -> Decimal | None:
    """Parse a user-entered amount into a Decimal. Returns None on invalid input.

    Accepts formats like '2850', '2850.500', '2,850.500'.
    """
    text = text.strip().replace(",", "")
    if not text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value
