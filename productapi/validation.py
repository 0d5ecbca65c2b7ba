# productapi/validation.py
import math
from typing import Any

_TEXT_FIELDS = ("name", "description", "category")


def _is_number(value: Any) -> bool:
    # bool is an int subclass but is not a JSON number
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        # json.loads turns 1e400 into inf and accepts NaN/Infinity literals
        return math.isfinite(value)
    return isinstance(value, int)


def validate_product_payload(body: Any) -> bool:
    """Return True if ``body`` has the shape of a product payload.

    Only field shape is checked: non-empty ``name``, ``description`` and
    ``category`` strings, a finite numeric ``price`` and a boolean ``inStock``.
    Extra keys (including any client-sent ``id``) are ignored.
    """
    if not isinstance(body, dict):
        return False
    for field in _TEXT_FIELDS:
        value = body.get(field)
        if not isinstance(value, str) or not value:
            return False
    if not _is_number(body.get("price")):
        return False
    return isinstance(body.get("inStock"), bool)
