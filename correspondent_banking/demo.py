"""
Console demo of the capability engine against a JSON capabilities file

Charge combinations print through format_charges as "SHA|OWN", not the
comma separated "SHA, OWN" form.
"""

import sys
from pathlib import Path
from typing import List, Optional

from .capabilities import CapabilityQuery
from .charges import BearerChargeType, format_charges
from .config import get_config
from .engine import CapabilityEngine
from .exceptions import CapabilityError
from .logging_config import setup_logging
from .stores import JsonCapabilitiesStore

SAMPLE_PATH = Path(__file__).parent / "data" / "capabilities.json"


def resolve_capabilities_path(explicit: Optional[str] = None) -> Path:
    """Explicit argument first, then the configured path, then the bundled sample"""
    if explicit:
        return Path(explicit)
    configured = Path(get_config().capabilities_path)
    if configured.is_file():
        return configured
    return SAMPLE_PATH


def run_demo(engine: CapabilityEngine) -> List[str]:
    """Run the demo queries and return the printed lines"""
    lines = []

    request = CapabilityQuery()
    for bank in engine.find_eligible_banks(request):
        lines.append(f"Eligible Bank: {bank.bank_code}")

    for bank, same_day, charges, currencies in engine.get_capabilities_per_bank(request):
        lines.append(
            f"{bank.bank_code} | SameDay: {same_day} | Charges: {format_charges(charges)} "
            f"| Ccy: [ {', '.join(currencies)} ]"
        )

    usd_query = CapabilityQuery(
        currency="USD",
        require_same_day=False,
        allowed_charges=BearerChargeType.SHA | BearerChargeType.OWN
    )
    lines.append("")
    lines.append("Capabilities restricted to USD (SHA or OWN charges):")
    for bank, same_day, charges, currencies in engine.get_capabilities_per_bank(usd_query, [usd_query.currency]):
        lines.append(
            f"{bank.bank_code} | SameDay: {same_day} | Charges: {format_charges(charges)} "
            f"| USD Supported: {'USD' in currencies}"
        )

    eur_query = CapabilityQuery(
        currency="EUR",
        require_same_day=True,
        allowed_charges=BearerChargeType.SHA
    )
    lines.append("")
    lines.append("Same-day EUR capability snapshot (SHA charges only):")
    for bank, same_day, charges, currencies in engine.get_capabilities_per_bank(eur_query, [eur_query.currency]):
        lines.append(
            f"{bank.bank_code} | SameDay: {same_day} | Charges: {format_charges(charges)} "
            f"| EUR Supported: {'EUR' in currencies}"
        )

    return lines


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    config = get_config()
    setup_logging(config.log_level, log_format=config.log_format, log_file=config.log_file)

    path = resolve_capabilities_path(argv[0] if argv else None)
    engine = CapabilityEngine(JsonCapabilitiesStore(path, reload_on_each_call=config.reload_on_each_call))

    try:
        for line in run_demo(engine):
            print(line)
    except CapabilityError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    return 0
