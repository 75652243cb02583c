"""
Bank Capabilities Module

Capability matrix per correspondent bank and the query value object used to
describe a desired payment route. Records are immutable once built and all
currency handling goes through normalize_currency, so currency matching is
case-insensitive everywhere.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional

from .charges import BearerChargeType, ALL_CHARGES, parse_charges


def normalize_currency(code: str) -> str:
    """Canonical form of an ISO 4217 code: stripped and upper case"""
    return code.strip().upper()


def normalize_currencies(codes: Iterable[str]) -> FrozenSet[str]:
    """
    Normalize a collection of currency codes, dropping blank entries.

    A bare string is a single code, not a sequence of characters.
    """
    if isinstance(codes, str):
        codes = (codes,)
    return frozenset(
        normalize_currency(code) for code in codes
        if code is not None and code.strip()
    )


@dataclass(frozen=True)
class BankCapabilities:
    """
    Capability matrix of one correspondent bank.

    bank_code is opaque (BIC or internal code) and not validated; it may be
    None when a persisted entry omits it. currencies accepts any iterable of
    codes, or a single code as a string, and is stored as a normalized
    frozenset. bearer_charge_types accepts anything parse_charges understands.
    """
    bank_code: Optional[str]
    currencies: FrozenSet[str] = field(default_factory=frozenset)
    same_day_transfer: bool = False
    bearer_charge_types: BearerChargeType = BearerChargeType.NONE

    def __post_init__(self):
        object.__setattr__(self, 'currencies', normalize_currencies(self.currencies or ()))
        object.__setattr__(self, 'same_day_transfer', bool(self.same_day_transfer))
        object.__setattr__(self, 'bearer_charge_types', parse_charges(self.bearer_charge_types))

    def supports_currency(self, iso4217: Optional[str]) -> bool:
        """True if the code is non-blank and supported"""
        if not iso4217 or not iso4217.strip():
            return False
        return normalize_currency(iso4217) in self.currencies

    def supports_all_currencies(self, iso4217s: Optional[Iterable[str]]) -> bool:
        """True if every code is supported (vacuously true when empty)"""
        if iso4217s is None:
            return False
        return all(self.supports_currency(code) for code in iso4217s)

    def supports_same_day(self, require_same_day: bool) -> bool:
        """Same-day is only checked when it is required"""
        return not require_same_day or self.same_day_transfer

    def supports_charge(self, charge: BearerChargeType) -> bool:
        """True if every bit of the given charge combination is supported"""
        return charge != BearerChargeType.NONE and (self.bearer_charge_types & charge) == charge

    def supports_any_charge(self, charges: BearerChargeType) -> bool:
        """True if at least one of the given charge types is supported"""
        return (self.bearer_charge_types & charges) != BearerChargeType.NONE

    def sorted_currencies(self, restrict_to: Optional[FrozenSet[str]] = None) -> List[str]:
        """
        Supported currencies sorted case-insensitively.

        Args:
            restrict_to: Normalized currency set to intersect with; None means
                no restriction

        Returns:
            Sorted list of currency codes
        """
        pool = self.currencies if restrict_to is None else self.currencies & restrict_to
        return sorted(pool, key=str.casefold)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "bank_code": self.bank_code,
            "currencies": self.sorted_currencies(),
            "same_day_transfer": self.same_day_transfer,
            "bearer_charge_types": int(self.bearer_charge_types),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BankCapabilities':
        """Create instance from dictionary"""
        return cls(
            bank_code=data.get("bank_code"),
            currencies=data.get("currencies") or (),
            same_day_transfer=data.get("same_day_transfer", False),
            bearer_charge_types=data.get("bearer_charge_types", BearerChargeType.NONE),
        )


@dataclass(frozen=True)
class CapabilityQuery:
    """A filter describing a desired payment route"""
    currency: str = "USD"
    require_same_day: bool = False
    allowed_charges: BearerChargeType = ALL_CHARGES  # one or more

    def __post_init__(self):
        object.__setattr__(self, 'allowed_charges', parse_charges(self.allowed_charges))
