from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Annotated

from pydantic import BeforeValidator, WithJsonSchema

_NUMBER_RE = re.compile(r"^[+-]?\d+(?:\.\d+)?$")
_LENGTH_RE = re.compile(r"^\s*([+-]?\d+(?:\.\d+)?)\s*([a-zA-Z]+)\s*$")

_UNIT_SCALES_MM: dict[str, Decimal] = {
    "mm": Decimal(1),
    "cm": Decimal(10),
    "m": Decimal(1000),
}

_LENGTH_JSON_SCHEMA = {
    "anyOf": [
        {"type": "number", "minimum": 0},
        {"type": "string", "pattern": r"^\s*\d+(?:\.\d+)?\s*$"},
        {"type": "string", "pattern": r"^\s*\d+(?:\.\d+)?\s*(mm|cm|m)\s*$"},
    ],
    "title": "LengthMM",
    "description": "Millimetres (number or numeric string) or a string with mm/cm/m units.",
}


def parse_length_mm(value: str | int | float) -> float:
    """Parse a length value to millimetres as float.

    Accepts:
      - int/float: treated as millimetres
      - String "20", "20mm", "2cm", "0.75m": converted to millimetres

    Negative, NaN and infinite values are rejected.
    """
    if isinstance(value, bool):
        raise ValueError("LengthMM does not accept boolean values.")
    if isinstance(value, (int, float)):
        return _check_length(float(value))
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("LengthMM requires a numeric value.")
        if _NUMBER_RE.match(text):
            return _check_length(float(_decimal_from_text(text)))
        match = _LENGTH_RE.match(text)
        if not match:
            raise ValueError("LengthMM string must be formatted like '20mm', '2cm', or '0.75m'.")
        number_text, unit = match.groups()
        scale = _UNIT_SCALES_MM.get(unit.lower())
        if scale is None:
            raise ValueError(f"Unknown LengthMM unit: {unit!r}")
        return _check_length(float(_decimal_from_text(number_text) * scale))
    raise ValueError(f"Unsupported LengthMM value: {value!r}")


def _decimal_from_text(text: str) -> Decimal:
    try:
        return Decimal(text)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid numeric value for LengthMM: {text!r}") from exc


def _check_length(value: float) -> float:
    if not math.isfinite(value):
        raise ValueError("LengthMM must be finite.")
    if value < 0:
        raise ValueError("LengthMM must not be negative.")
    return value


def format_mm(value: float) -> str:
    """Render a millimetre value without a trailing '.0' for whole numbers."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


LengthMM = Annotated[float, BeforeValidator(parse_length_mm), WithJsonSchema(_LENGTH_JSON_SCHEMA)]
