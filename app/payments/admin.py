"""
Payment admin configuration.

This file imports admin configurations from the ledger submodule so
Django's admin autodiscovery registers them.
"""

from payments.ledger.admin import JournalEntryAdmin, LedgerAccountAdmin

__all__ = [
    "LedgerAccountAdmin",
    "JournalEntryAdmin",
]
