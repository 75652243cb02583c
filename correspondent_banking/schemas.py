"""
Pydantic schemas for persisted capability entries
"""

import json
import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator

from .capabilities import BankCapabilities
from .charges import parse_charges


# Persisted field names are matched ignoring case and underscores, so both
# "bankCode" and "bank_code" land on the same field
_FIELD_KEYS = {
    "bankcode": "bank_code",
    "currencies": "currencies",
    "samedaytransfer": "same_day_transfer",
    "bearerchargetypes": "bearer_charge_types",
}

_STRING_OR_COMMENT = re.compile(r'("(?:\\.|[^"\\])*")|//[^\n]*|/\*.*?\*/', re.DOTALL)
_STRING_OR_TRAILING_COMMA = re.compile(r'("(?:\\.|[^"\\])*")|,(\s*[\]}])')


class BankCapabilitiesEntry(BaseModel):
    """One bank entry of a capabilities document"""
    model_config = ConfigDict(extra="ignore")

    bank_code: Optional[str] = None
    currencies: List[str] = Field(default_factory=list)
    same_day_transfer: bool = False
    bearer_charge_types: int = Field(0, description="Bit combination of bearer charge types")

    @model_validator(mode="before")
    @classmethod
    def normalize_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            raise ValueError("capability entry must be a JSON object")
        normalized: Dict[str, Any] = {}
        for key, value in data.items():
            field_name = _FIELD_KEYS.get(str(key).replace("_", "").lower())
            if field_name is not None:
                normalized[field_name] = value
        return normalized

    @field_validator("currencies", mode="before")
    @classmethod
    def default_currencies(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("bearer_charge_types", mode="before")
    @classmethod
    def parse_bearer_charges(cls, value: Any) -> int:
        if value is None:
            return 0
        return int(parse_charges(value))

    def to_capabilities(self) -> BankCapabilities:
        return BankCapabilities(
            bank_code=self.bank_code,
            currencies=self.currencies,
            same_day_transfer=self.same_day_transfer,
            bearer_charge_types=self.bearer_charge_types,
        )


_ENTRIES = TypeAdapter(List[BankCapabilitiesEntry])


def strip_json_extensions(text: str) -> str:
    """Remove // and /* */ comments and trailing commas outside of strings"""
    text = _STRING_OR_COMMENT.sub(lambda m: m.group(1) or "", text)
    return _STRING_OR_TRAILING_COMMA.sub(lambda m: m.group(1) or m.group(2), text)


def parse_capabilities_document(text: str) -> List[BankCapabilities]:
    """
    Parse a capabilities JSON document into normalized records.

    A null document yields an empty list.

    Raises:
        json.JSONDecodeError: If the text is not valid JSON
        pydantic.ValidationError: If the document or an entry has the wrong shape
    """
    data = json.loads(strip_json_extensions(text))
    if data is None:
        return []
    return [entry.to_capabilities() for entry in _ENTRIES.validate_python(data)]
