"""
Correspondent Banking Capabilities

Capability matrix of correspondent banks (currencies, same-day transfers,
bearer charge arrangements) and an engine answering payment routing
eligibility queries against it.
"""

__version__ = "1.0.0"
