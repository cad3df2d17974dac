from __future__ import annotations
import re
from typing import Optional

from .domain import PatronType

ISBN_LENGTHS = (10, 13)

_DIGITS = re.compile(r"\d+")


def is_valid_isbn(isbn: Optional[str]) -> bool:
    """
    Accepts ISBN-10 / ISBN-13, with or without hyphens
    (e.g. "0123456789", "9780123456789", "978-0-1234-5678-9").
    """
    if not isbn:
        return False
    digits = isbn.replace("-", "")
    if not _DIGITS.fullmatch(digits):
        return False
    return len(digits) in ISBN_LENGTHS


def is_patron_type(text: Optional[str], expected: Optional[PatronType]) -> bool:
    if text is None or expected is None:
        return False
    return text == expected.name
