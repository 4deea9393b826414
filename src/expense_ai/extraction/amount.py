import re
from decimal import Decimal, InvalidOperation
from typing import List

# Optional currency symbol, digits, optional decimal point, optional fraction.
# A match always starts with a digit, so a lone "." is never a candidate.
AMOUNT_PATTERN = re.compile(r"[$€£¥]?([0-9]+\.?[0-9]*)")

DEFAULT_DESCRIPTION = "Receipt scan"


def find_amounts(text: str) -> List[Decimal]:
    """
    Return every monetary-looking value in the text, in reading order.

    Args:
        text: Raw OCR text

    Returns:
        List of parsed candidates (may be empty)
    """
    amounts: List[Decimal] = []
    for match in AMOUNT_PATTERN.finditer(text or ""):
        try:
            amounts.append(Decimal(match.group(1)))
        except InvalidOperation:
            continue
    return amounts


def extract_amount(text: str) -> Decimal:
    """
    Pick the most plausible charge amount from receipt text.

    Receipts print subtotal, tax, line items and total; the total is
    nearly always the largest figure, so the maximum candidate wins.

    Args:
        text: Raw OCR text

    Returns:
        The largest candidate, or Decimal("0") if there is none

    Example:
        >>> extract_amount("Total $42.50 Tax $3.10")
        Decimal('42.50')
    """
    amounts = find_amounts(text)
    if not amounts:
        return Decimal("0")
    return max(amounts)


def extract_description(text: str) -> str:
    """First non-blank line of the text, or a placeholder"""
    for line in (text or "").splitlines():
        stripped = line.strip()
        if stripped:
            return stripped
    return DEFAULT_DESCRIPTION
