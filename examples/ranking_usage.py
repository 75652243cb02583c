#!/usr/bin/env python3
"""
Example: Ranking eligible correspondent banks

Loads the bundled capability matrix and ranks the banks able to route a
same-day USD payment, first with the example scoring and then with a custom
scoring function preferring banks with wide currency coverage.
"""

import os
import sys

# Add the project root to the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from correspondent_banking.capabilities import CapabilityQuery
from correspondent_banking.charges import BearerChargeType, format_charges
from correspondent_banking.demo import SAMPLE_PATH
from correspondent_banking.engine import CapabilityEngine
from correspondent_banking.stores import JsonCapabilitiesStore


def coverage_score(bank, query):
    score = len(bank.currencies)
    if bank.supports_charge(query.allowed_charges):
        score += 10  # every allowed arrangement available
    return score


def main():
    print("🏦 Correspondent Bank Ranking Example")
    print("=" * 60)

    engine = CapabilityEngine(JsonCapabilitiesStore(SAMPLE_PATH))
    query = CapabilityQuery(
        currency="USD",
        require_same_day=True,
        allowed_charges=BearerChargeType.SHA | BearerChargeType.OWN
    )

    print("\n1. 📊 Example scoring")
    for bank, score in engine.rank_eligible_banks(query, sort=True):
        print(f"   {bank.bank_code:<12} score={score:>3}  charges={format_charges(bank.bearer_charge_types)}")

    print("\n2. 🌍 Currency coverage scoring")
    for bank, score in engine.rank_eligible_banks(query, scorer=coverage_score, sort=True):
        print(f"   {bank.bank_code:<12} score={score:>3}  currencies={', '.join(bank.sorted_currencies())}")


if __name__ == "__main__":
    main()
