"""Identifier and name helpers shared by the discovery services.

Tax identifiers are compared unmasked inside the engine; `mask_tax_id` is
applied only when building results that leave it.
"""

import re
from typing import Optional

from partner_network.errors import InvalidInput

PLACEHOLDER_PERSON_NAME = "Sócio não identificado"

TAX_ID_PREFIX_LENGTH = 6
CPF_LENGTH = 11

_FORMATTING_CHARS = re.compile(r"[.\-/\s]")
_NON_DIGITS = re.compile(r"\D")


def normalize_identifier(value: Optional[str], field: str = "id") -> str:
    """Strip formatting punctuation from a seed identifier.

    Raises:
        InvalidInput: if nothing is left once formatting is removed.
    """
    if not isinstance(value, str):
        raise InvalidInput(f"{field} is required")
    cleaned = _FORMATTING_CHARS.sub("", value)
    if not cleaned:
        raise InvalidInput(f"{field} must not be empty")
    return cleaned


def normalize_optional_identifier(value: Optional[str], field: str = "id") -> Optional[str]:
    """Like normalize_identifier, but None passes through."""
    if value is None:
        return None
    return normalize_identifier(value, field)


def extract_surname(name: Optional[str]) -> str:
    """Last whitespace-delimited token, upper-cased.

    Single-token and missing names have no surname.
    """
    if not name:
        return ""
    parts = name.split()
    return parts[-1].upper() if len(parts) > 1 else ""


def tax_id_prefix(tax_id: Optional[str]) -> str:
    """First characters of a partial tax identifier used for prefix matching."""
    return (tax_id or "")[:TAX_ID_PREFIX_LENGTH]


def mask_tax_id(tax_id: Optional[str]) -> str:
    """Redact a CPF to ``***.ddd.ddd-**``, keeping only digits 4 to 9."""
    digits = _NON_DIGITS.sub("", tax_id or "").rjust(CPF_LENGTH, "0")
    return f"***.{digits[3:6]}.{digits[6:9]}-**"


def is_placeholder_name(name: Optional[str]) -> bool:
    """True for missing names and the placeholder label."""
    return not name or not name.strip() or name.strip() == PLACEHOLDER_PERSON_NAME
