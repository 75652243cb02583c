#!/usr/bin/env python3
"""
Capability Engine Benchmark

Times the two hot query paths against the five-bank sample set held in an
in-memory store.
"""

import sys
import timeit
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from correspondent_banking.capabilities import BankCapabilities, CapabilityQuery
from correspondent_banking.charges import BearerChargeType
from correspondent_banking.engine import CapabilityEngine
from correspondent_banking.stores import InMemoryCapabilitiesStore

SHA = BearerChargeType.SHA
OWN = BearerChargeType.OWN
BEN = BearerChargeType.BEN


def create_sample_banks():
    return [
        BankCapabilities("BANKA-GB2L", {"USD", "EUR", "GBP"}, True, SHA | OWN),
        BankCapabilities("BANKB-DEFF", {"EUR", "USD"}, False, SHA | BEN),
        BankCapabilities("BANKC-US33", {"USD", "CAD"}, True, OWN | BEN),
        BankCapabilities("BANKF-CHZZ", {"CHF", "EUR", "USD"}, True, SHA | OWN | BEN),
        BankCapabilities("BANKH-CA11", {"CAD", "USD", "GBP"}, True, OWN | BEN),
    ]


def main(number: int = 100_000):
    engine = CapabilityEngine(InMemoryCapabilitiesStore(create_sample_banks()))
    usd_same_day_sha = CapabilityQuery(currency="USD", require_same_day=True, allowed_charges=SHA)
    eur_any_day_own_sha = CapabilityQuery(currency="EUR", require_same_day=False, allowed_charges=SHA | OWN)

    benchmarks = {
        "find_eligible_usd_same_day_sha": lambda: engine.find_eligible_banks(usd_same_day_sha),
        "get_capabilities_for_euro": lambda: engine.get_capabilities_per_bank(eur_any_day_own_sha, ["EUR"]),
    }

    print(f"{'benchmark':<34} {'per call':>12}")
    print("-" * 47)
    for name, func in benchmarks.items():
        best = min(timeit.repeat(func, number=number, repeat=5))
        print(f"{name:<34} {best / number * 1e6:>9.3f} µs")


if __name__ == "__main__":
    main()
