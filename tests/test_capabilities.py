"""
Test suite for bank capability records and queries

Tests currency normalization, the capability predicates and immutability.
"""

import dataclasses

import pytest

from correspondent_banking.capabilities import (
    BankCapabilities, CapabilityQuery, normalize_currency, normalize_currencies
)
from correspondent_banking.charges import BearerChargeType, ALL_CHARGES

SHA = BearerChargeType.SHA
OWN = BearerChargeType.OWN
BEN = BearerChargeType.BEN


class TestNormalization:
    """Test currency code normalization"""

    def test_normalize_currency(self):
        assert normalize_currency("usd") == "USD"
        assert normalize_currency(" Eur ") == "EUR"

    def test_normalize_currencies_drops_blanks(self):
        assert normalize_currencies(["usd", "USD", " ", "", "gbp"]) == frozenset({"USD", "GBP"})

    def test_normalize_single_code_string(self):
        """Test that a bare string is one code, not a sequence of letters"""
        assert normalize_currencies("eur") == frozenset({"EUR"})
        assert normalize_currencies("  ") == frozenset()


class TestBankCapabilities:
    """Test BankCapabilities construction and predicates"""

    def setup_method(self):
        """Set up test fixtures"""
        self.bank = BankCapabilities(
            bank_code="BANKA-GB2L",
            currencies=["usd", "EUR", "Gbp"],
            same_day_transfer=True,
            bearer_charge_types=SHA | OWN
        )

    def test_creation_normalizes_currencies(self):
        """Test that currencies are stored upper case in a frozenset"""
        assert self.bank.currencies == frozenset({"USD", "EUR", "GBP"})
        assert isinstance(self.bank.currencies, frozenset)

    def test_creation_accepts_charge_names(self):
        """Test that charge types may be given by name or number"""
        bank = BankCapabilities("X", ["USD"], False, "SHA, BEN")
        assert bank.bearer_charge_types == SHA | BEN

        bank = BankCapabilities("Y", ["USD"], False, 2)
        assert bank.bearer_charge_types == OWN

    def test_creation_with_single_currency_string(self):
        """Test that a single code given as a string is kept whole"""
        bank = BankCapabilities("B", "usd", True, SHA)
        assert bank.currencies == frozenset({"USD"})
        assert bank.supports_currency("USD")

    def test_missing_bank_code(self):
        """Test that the bank code is not validated"""
        bank = BankCapabilities.from_dict({"currencies": ["EUR"]})
        assert bank.bank_code is None
        assert bank.supports_currency("EUR")

    def test_defaults(self):
        """Test defaults of an otherwise empty record"""
        bank = BankCapabilities("EMPTY")
        assert bank.currencies == frozenset()
        assert bank.same_day_transfer is False
        assert bank.bearer_charge_types == BearerChargeType.NONE

    def test_immutable(self):
        """Test that records cannot be modified"""
        with pytest.raises(dataclasses.FrozenInstanceError):
            self.bank.same_day_transfer = False

    def test_supports_currency_case_insensitive(self):
        """Test currency matching in both directions of case"""
        assert self.bank.supports_currency("USD")
        assert self.bank.supports_currency("usd")
        assert self.bank.supports_currency("gBp")
        assert not self.bank.supports_currency("CHF")

        stored_lower = BankCapabilities("B", ["usd"], False, SHA)
        assert stored_lower.supports_currency("USD")

    def test_supports_currency_blank(self):
        """Test that blank or missing codes never match"""
        assert not self.bank.supports_currency("")
        assert not self.bank.supports_currency("   ")
        assert not self.bank.supports_currency(None)

    def test_supports_all_currencies(self):
        """Test the all-currencies predicate"""
        assert self.bank.supports_all_currencies(["usd", "EUR"])
        assert not self.bank.supports_all_currencies(["USD", "CHF"])
        assert self.bank.supports_all_currencies([])
        assert not self.bank.supports_all_currencies(None)

    def test_supports_same_day(self):
        """Test that same-day is only checked when required"""
        not_same_day = BankCapabilities("B", ["EUR"], False, SHA)

        for bank in (self.bank, not_same_day):
            assert bank.supports_same_day(False) is True
            assert bank.supports_same_day(True) == bank.same_day_transfer

    def test_supports_charge_requires_containment(self):
        """Test that supports_charge needs every requested bit"""
        assert self.bank.supports_charge(SHA)
        assert self.bank.supports_charge(SHA | OWN)
        assert not self.bank.supports_charge(SHA | BEN)
        assert not self.bank.supports_charge(BEN)
        assert not self.bank.supports_charge(BearerChargeType.NONE)

    def test_supports_any_charge_requires_overlap(self):
        """Test that supports_any_charge needs one shared bit"""
        assert self.bank.supports_any_charge(SHA | BEN)
        assert self.bank.supports_any_charge(ALL_CHARGES)
        assert not self.bank.supports_any_charge(BEN)
        assert not self.bank.supports_any_charge(BearerChargeType.NONE)

    def test_sorted_currencies(self):
        """Test sorted currency projection with and without restriction"""
        assert self.bank.sorted_currencies() == ["EUR", "GBP", "USD"]
        assert self.bank.sorted_currencies(frozenset({"USD", "EUR", "CHF"})) == ["EUR", "USD"]
        assert self.bank.sorted_currencies(frozenset()) == []

    def test_dict_conversion(self):
        """Test to_dict and from_dict"""
        data = self.bank.to_dict()
        assert data == {
            "bank_code": "BANKA-GB2L",
            "currencies": ["EUR", "GBP", "USD"],
            "same_day_transfer": True,
            "bearer_charge_types": 3,
        }
        assert BankCapabilities.from_dict(data) == self.bank


class TestCapabilityQuery:
    """Test CapabilityQuery defaults and parsing"""

    def test_defaults(self):
        query = CapabilityQuery()
        assert query.currency == "USD"
        assert query.require_same_day is False
        assert query.allowed_charges == ALL_CHARGES

    def test_allowed_charges_by_name(self):
        query = CapabilityQuery(currency="EUR", allowed_charges="SHA|OWN")
        assert query.allowed_charges == SHA | OWN

    def test_invalid_allowed_charges(self):
        with pytest.raises(ValueError):
            CapabilityQuery(allowed_charges="XYZ")
