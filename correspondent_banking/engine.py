"""
Capability Engine Module

Answers payment routing eligibility queries against the configured
capabilities store. Every query re-reads the store and is a pure function of
its snapshot; the only mutable state is the store reference itself.
"""

from typing import Callable, Iterable, List, NamedTuple, Optional
import threading

from .capabilities import BankCapabilities, CapabilityQuery, normalize_currencies
from .charges import BearerChargeType
from .exceptions import EngineNotConfiguredError
from .logging_config import get_logger
from .stores import CapabilitiesStore


logger = get_logger("capabilities.engine")


class RankedBank(NamedTuple):
    """Eligible bank with its routing score"""
    bank: BankCapabilities
    score: int


class BankCurrencies(NamedTuple):
    """Bank with the currencies it can route for a query"""
    bank: BankCapabilities
    currencies: List[str]


class BankCapabilitySnapshot(NamedTuple):
    """Bank with its same-day flag, charge types and routable currencies"""
    bank: BankCapabilities
    same_day: bool
    charges: BearerChargeType
    currencies: List[str]


ScoringFunction = Callable[[BankCapabilities, CapabilityQuery], int]


def default_score(bank: BankCapabilities, query: CapabilityQuery) -> int:
    """
    Example scoring: prefer same-day, prefer SHA when it is allowed.

    +10 when the bank offers same-day and the query requires it,
    +5 when SHA is both supported by the bank and allowed by the query.
    """
    score = 0
    if bank.same_day_transfer and query.require_same_day:
        score += 10
    if bank.bearer_charge_types & query.allowed_charges & BearerChargeType.SHA:
        score += 5
    return score


class CapabilityEngine:
    """
    Matches bank capability records against capability queries.

    The store is injected at construction or through configure(); a later
    configure() replaces it (last writer wins). Querying before a store is
    configured raises EngineNotConfiguredError.
    """

    def __init__(self, store: Optional[CapabilitiesStore] = None,
                 scorer: Optional[ScoringFunction] = None):
        self._store = store
        self._lock = threading.Lock()
        self.scorer: ScoringFunction = scorer or default_score

    def configure(self, store: CapabilitiesStore) -> None:
        """Set the store queries read from"""
        if store is None:
            raise ValueError("store is required")
        with self._lock:
            self._store = store
        logger.info("Capability engine configured with %s", type(store).__name__)

    @property
    def is_configured(self) -> bool:
        with self._lock:
            return self._store is not None

    def _get_all(self) -> List[BankCapabilities]:
        with self._lock:
            store = self._store
        if store is None:
            raise EngineNotConfiguredError("CapabilityEngine is not configured.")
        return store.get_all()

    def find_eligible_banks(self, query: CapabilityQuery) -> List[BankCapabilities]:
        """
        Return banks that satisfy the requested capability set.

        - Currency: must include the requested currency
        - SameDay: must be true if requested
        - Bearer charge: bank must support at least one of the allowed charges
        """
        source = self._get_all()

        eligible = [
            bank for bank in source
            if bank.supports_currency(query.currency)
            and bank.supports_same_day(query.require_same_day)
            and bank.supports_any_charge(query.allowed_charges)
        ]

        logger.debug("find_eligible_banks %s -> %d of %d banks", query, len(eligible), len(source))
        return eligible

    def rank_eligible_banks(self, query: CapabilityQuery,
                            scorer: Optional[ScoringFunction] = None,
                            sort: bool = False) -> List[RankedBank]:
        """
        Return eligible banks paired with a score.

        Args:
            query: Capability query
            scorer: Scoring function overriding the engine's scorer for this call
            sort: Order by descending score (stable, so store order breaks ties)

        Returns:
            List of (bank, score) pairs, in store order unless sort is set
        """
        scorer = scorer or self.scorer
        ranked = [RankedBank(bank, scorer(bank, query)) for bank in self.find_eligible_banks(query)]

        if sort:
            ranked.sort(key=lambda item: item.score, reverse=True)
        return ranked

    def get_eligible_currencies_per_bank(
        self,
        query: CapabilityQuery,
        restrict_to_currencies: Optional[Iterable[str]] = None
    ) -> List[BankCurrencies]:
        """
        For each bank matching the non-currency constraints (same-day,
        charges), return the sorted currencies it supports.

        The query's own currency is not applied. restrict_to_currencies limits
        the currencies considered: None means all of them, an empty iterable
        means none. Banks left without currencies are dropped.
        """
        return [
            BankCurrencies(bank, currencies)
            for bank, currencies in self._currencies_per_bank(query, restrict_to_currencies)
        ]

    def get_capabilities_per_bank(
        self,
        query: CapabilityQuery,
        restrict_to_currencies: Optional[Iterable[str]] = None
    ) -> List[BankCapabilitySnapshot]:
        """
        Aggregate same-day flag, bearer charge types and currencies for banks
        matching the non-currency constraints. Filtering and currency
        restriction behave as in get_eligible_currencies_per_bank.
        """
        return [
            BankCapabilitySnapshot(bank, bank.same_day_transfer, bank.bearer_charge_types, currencies)
            for bank, currencies in self._currencies_per_bank(query, restrict_to_currencies)
        ]

    def _currencies_per_bank(self, query: CapabilityQuery,
                             restrict_to_currencies: Optional[Iterable[str]]):
        source = self._get_all()

        restriction = None
        if restrict_to_currencies is not None:
            restriction = normalize_currencies(restrict_to_currencies)

        results = []
        for bank in source:
            if not (bank.supports_same_day(query.require_same_day)
                    and bank.supports_any_charge(query.allowed_charges)):
                continue
            currencies = bank.sorted_currencies(restriction)
            if currencies:
                results.append((bank, currencies))

        logger.debug("currencies per bank %s restricted to %s -> %d banks",
                     query, sorted(restriction) if restriction is not None else "all", len(results))
        return results


# Shared engine for callers that configure once at startup
_default_engine = CapabilityEngine()


def get_engine() -> CapabilityEngine:
    """Get the shared engine instance"""
    return _default_engine


def configure(store: CapabilitiesStore) -> None:
    """Configure the shared engine (last writer wins)"""
    _default_engine.configure(store)


def find_eligible_banks(query: CapabilityQuery) -> List[BankCapabilities]:
    return _default_engine.find_eligible_banks(query)


def rank_eligible_banks(query: CapabilityQuery, scorer: Optional[ScoringFunction] = None,
                        sort: bool = False) -> List[RankedBank]:
    return _default_engine.rank_eligible_banks(query, scorer=scorer, sort=sort)


def get_eligible_currencies_per_bank(query: CapabilityQuery,
                                     restrict_to_currencies: Optional[Iterable[str]] = None) -> List[BankCurrencies]:
    return _default_engine.get_eligible_currencies_per_bank(query, restrict_to_currencies)


def get_capabilities_per_bank(query: CapabilityQuery,
                              restrict_to_currencies: Optional[Iterable[str]] = None) -> List[BankCapabilitySnapshot]:
    return _default_engine.get_capabilities_per_bank(query, restrict_to_currencies)
