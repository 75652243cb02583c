"""
Bearer Charge Types Module

Who pays the fees of a cross-border transfer (SWIFT field 71A). Charge types
are bit flags: a bank may support several arrangements at once and a query
may accept several, so every comparison uses bitwise semantics.
"""

from enum import IntFlag
from typing import Any
import re


class BearerChargeType(IntFlag):
    """Bearer charge arrangements as combinable bit flags"""
    NONE = 0
    SHA = 1  # Shared: payer and beneficiary each pay their own bank
    OWN = 2  # Payer bears all charges (aka OUR)
    BEN = 4  # Beneficiary bears all charges


ALL_CHARGES = BearerChargeType.SHA | BearerChargeType.OWN | BearerChargeType.BEN

# Names accepted in persisted data besides the member names
_ALIASES = {
    "OUR": BearerChargeType.OWN,
    "NONE": BearerChargeType.NONE,
}

_SEPARATORS = re.compile(r"[|,\s]+")


def _from_int(value: int) -> BearerChargeType:
    if value < 0 or value & ~int(ALL_CHARGES):
        raise ValueError(f"Invalid bearer charge bits: {value}")
    return BearerChargeType(value)


def _from_name(name: str) -> BearerChargeType:
    key = name.strip().upper()
    if key.isdigit():
        return _from_int(int(key))
    if key in _ALIASES:
        return _ALIASES[key]
    try:
        return BearerChargeType[key]
    except KeyError:
        raise ValueError(f"Unknown bearer charge type: '{name}'") from None


def parse_charges(value: Any) -> BearerChargeType:
    """
    Convert a persisted charge representation into a flag combination.

    Accepts an existing flag, a raw bit combination, a member name
    (case-insensitive, "OUR" is an alias of OWN), a string of names joined
    by "|" or ",", or a list of any of these.

    Raises:
        ValueError: If the value holds unknown names or bits
    """
    if isinstance(value, BearerChargeType):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid bearer charge value: {value!r}")
    if isinstance(value, int):
        return _from_int(value)
    if isinstance(value, str):
        result = BearerChargeType.NONE
        for part in _SEPARATORS.split(value.strip()):
            if part:
                result |= _from_name(part)
        return result
    if isinstance(value, (list, tuple, set, frozenset)):
        result = BearerChargeType.NONE
        for item in value:
            result |= parse_charges(item)
        return result
    raise ValueError(f"Invalid bearer charge value: {value!r}")


def format_charges(charges: BearerChargeType) -> str:
    """Format for display, e.g. "SHA|OWN" or "None" """
    names = [member.name for member in (BearerChargeType.SHA, BearerChargeType.OWN, BearerChargeType.BEN)
             if charges & member]
    return "|".join(names) if names else "None"
