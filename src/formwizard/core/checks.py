"""
Chequeos individuales de validación.

Cada fábrica retorna un Check: una función que recibe el valor y retorna el
mensaje de error, o None si el valor pasa.
"""

import re
from datetime import date
from typing import Callable, Iterable, Optional

from formwizard.models.schema import AnswerValue


EMAIL_PATTERN = re.compile(r"^[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}$", re.IGNORECASE)

# Prefijo internacional opcional, área opcionalmente entre paréntesis y
# separadores guion, punto o espacio
PHONE_PATTERN = re.compile(
    r"^\+?(?:[0-9]{1,3}[-.\s]?)?\(?[0-9]{3}\)?[-.\s]?[0-9]{3}[-.\s]?[0-9]{4,6}$"
)

EMAIL_MESSAGE = "Invalid email address"
PHONE_MESSAGE = "Invalid phone number format"

Check = Callable[[AnswerValue], Optional[str]]


def min_length(label: str, minimum: int) -> Check:
    def check(value: AnswerValue) -> Optional[str]:
        if isinstance(value, str) and len(value) < minimum:
            return f"{label} must be at least {minimum} characters"
        return None
    return check


def max_length(label: str, maximum: int) -> Check:
    def check(value: AnswerValue) -> Optional[str]:
        if isinstance(value, str) and len(value) > maximum:
            return f"{label} must be no more than {maximum} characters"
        return None
    return check


def pattern(regex: re.Pattern, message: str) -> Check:
    def check(value: AnswerValue) -> Optional[str]:
        if not isinstance(value, str) or not regex.match(value):
            return message
        return None
    return check


def declared_option(label: str, option_ids: Iterable[str]) -> Check:
    allowed = frozenset(option_ids)

    def check(value: AnswerValue) -> Optional[str]:
        if value not in allowed:
            return f"{label} must be one of the listed options"
        return None
    return check


def valid_date(label: str) -> Check:
    def check(value: AnswerValue) -> Optional[str]:
        if not isinstance(value, date):
            return f"{label} must be a valid date"
        return None
    return check
