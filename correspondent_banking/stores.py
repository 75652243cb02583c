"""
Capabilities Store Module

Provides the abstract store interface the capability engine reads from, plus
an in-memory snapshot implementation and a JSON file backed implementation
with optional caching.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Union
from pathlib import Path
import json
import threading

from pydantic import ValidationError

from .capabilities import BankCapabilities
from .config import CapabilitiesConfig, get_config
from .exceptions import CapabilityParseError, CapabilitySourceNotFoundError
from .logging_config import get_logger, log_action
from .schemas import parse_capabilities_document


logger = get_logger("capabilities.stores")


class CapabilitiesStore(ABC):
    """Abstract interface for capability sources"""

    @abstractmethod
    def get_all(self) -> List[BankCapabilities]:
        """Return every capability record currently known, in a stable order"""
        pass

    def refresh(self) -> None:
        """Drop any cached records (default no-op)"""
        pass


class InMemoryCapabilitiesStore(CapabilitiesStore):
    """Fixed snapshot of capability records held in memory"""

    def __init__(self, banks: Iterable[Union[BankCapabilities, Dict[str, Any]]] = ()):
        # Clone so later changes to the caller's containers cannot leak in
        self._banks: List[BankCapabilities] = [self._clone(bank) for bank in banks]

    @staticmethod
    def _clone(bank: Union[BankCapabilities, Dict[str, Any]]) -> BankCapabilities:
        if isinstance(bank, BankCapabilities):
            return BankCapabilities.from_dict(bank.to_dict())
        return BankCapabilities.from_dict(dict(bank))

    def get_all(self) -> List[BankCapabilities]:
        """Return the snapshot"""
        return list(self._banks)

    def count(self) -> int:
        """Number of records in the snapshot"""
        return len(self._banks)


class JsonCapabilitiesStore(CapabilitiesStore):
    """
    Loads bank capabilities from a JSON file.

    Charge types may be names ("SHA", "SHA, OWN", ["SHA", "BEN"]) or numeric
    bit combinations. Field names match case-insensitively, extra properties
    are ignored, and comments and trailing commas are tolerated.
    """

    def __init__(self, path: Union[str, Path], reload_on_each_call: bool = False):
        if path is None:
            raise ValueError("path is required")
        self.path = Path(path)
        self.reload_on_each_call = reload_on_each_call
        self._cache: Optional[List[BankCapabilities]] = None
        self._lock = threading.RLock()

    def get_all(self) -> List[BankCapabilities]:
        """Return cached records, loading them from the file if needed"""
        with self._lock:
            if self.reload_on_each_call:
                self._cache = None

            if self._cache is None:
                self._cache = self._load()

            return list(self._cache)

    def refresh(self) -> None:
        """Invalidate the cache so the next read reloads the file"""
        with self._lock:
            self._cache = None

    def _load(self) -> List[BankCapabilities]:
        if not self.path.is_file():
            logger.error("Capabilities JSON file not found: %s", self.path)
            raise CapabilitySourceNotFoundError(f"Capabilities JSON file not found: {self.path}")

        try:
            banks = parse_capabilities_document(self.path.read_text(encoding="utf-8-sig"))
        except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
            logger.error("Failed to parse capabilities file %s: %s", self.path, e)
            raise CapabilityParseError(f"Invalid capabilities JSON in {self.path}: {e}") from e

        log_action(
            logger, "info", f"Loaded {len(banks)} bank capability records",
            action="load_capabilities", resource=str(self.path),
            extra={"count": len(banks)}
        )
        return banks


def build_store_from_config(config: Optional[CapabilitiesConfig] = None) -> JsonCapabilitiesStore:
    """Create the JSON store described by the configuration"""
    config = config or get_config()
    return JsonCapabilitiesStore(
        config.capabilities_path,
        reload_on_each_call=config.reload_on_each_call
    )
