"""
Chart of accounts management.

Accounts are created lazily and idempotently: every lookup is an upsert by
account code. The unique constraint on LedgerAccount.code makes concurrent
first-time creation safe across processes - the losing insert fails with an
IntegrityError and re-reads the winner's row.

Fixed accounts:
    1000  Payment Clearing          ASSET
    2000  Payables to Farmers       LIABILITY
    4000  Platform Fees Revenue     REVENUE

Farmer sub-accounts:
    2000-<last 8 chars of farmer id>, child of 2000

Usage:
    from payments.ledger.chart import ChartOfAccounts

    accounts = ChartOfAccounts.ensure_base_accounts()
    farmer = ChartOfAccounts.ensure_farmer_subledger(
        farmer_id=str(user.id),
        farmer_name=user.get_full_name(),
        parent=accounts.payables_parent,
    )
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from django.db import IntegrityError, transaction

from .exceptions import AccountTypeConflict
from .models import AccountType, LedgerAccount
from .types import BaseAccounts

logger = logging.getLogger(__name__)


class AccountDefinition(NamedTuple):
    code: str
    name: str
    type: AccountType


CASH_CLEARING = AccountDefinition("1000", "Payment Clearing", AccountType.ASSET)
FARMER_PAYABLES = AccountDefinition("2000", "Payables to Farmers", AccountType.LIABILITY)
PLATFORM_FEES = AccountDefinition("4000", "Platform Fees Revenue", AccountType.REVENUE)

# Changing either value orphans every farmer sub-account created so far.
FARMER_SUBLEDGER_PREFIX = FARMER_PAYABLES.code
FARMER_ID_SUFFIX_LENGTH = 8


def farmer_subledger_code(farmer_id: str) -> str:
    """
    Derive the payable sub-account code for a farmer.

    Pure and deterministic: the same farmer id always yields the same code.

    Farmer ids are expected to be UUIDs. Only the last 8 characters are
    kept, so longer integer ids that share them (e.g. 100000001 and
    200000001) map to the same account, and each farmer then overwrites
    its name and owner_id.

    Example:
        farmer_subledger_code("c0ffee00-0000-4000-8000-00001a2b3c4d")
        # '2000-1a2b3c4d'
    """
    return f"{FARMER_SUBLEDGER_PREFIX}-{str(farmer_id)[-FARMER_ID_SUFFIX_LENGTH:]}"


class ChartOfAccounts:
    """
    Service class for the chart of accounts.

    All methods are static - no instance state is maintained.
    """

    @staticmethod
    def ensure_account(
        code: str,
        name: str,
        account_type: AccountType | str,
        parent: LedgerAccount | None = None,
        owner_id: str | None = None,
    ) -> LedgerAccount:
        """
        Create the account with this code, or update the existing one.

        Mutable fields (name, parent, owner_id) are overwritten when they
        differ - last writer wins. The type is write-once.

        Args:
            code: Unique account code
            name: Display label
            account_type: Account category
            parent: Optional parent account
            owner_id: Optional id of the user this account tracks

        Returns:
            The created or existing LedgerAccount

        Raises:
            AccountTypeConflict: If the code exists with another type
        """
        parent_id = parent.pk if parent is not None else None
        owner_id = str(owner_id) if owner_id is not None else None

        account = LedgerAccount.objects.filter(code=code).first()
        if account is None:
            try:
                # Savepoint keeps an outer transaction usable after a lost race
                with transaction.atomic():
                    account = LedgerAccount.objects.create(
                        code=code,
                        name=name,
                        type=account_type,
                        parent_id=parent_id,
                        owner_id=owner_id,
                    )
                logger.info(
                    f"Created ledger account {code} ({account_type})",
                    extra={"account_id": str(account.id), "code": code},
                )
                return account
            except IntegrityError:
                # Race: another process created it
                account = LedgerAccount.objects.filter(code=code).first()
                if account is None:
                    raise

        if account.type != account_type:
            raise AccountTypeConflict(
                f"Account {code} is {account.type}, not {account_type}",
                details={
                    "code": code,
                    "existing_type": str(account.type),
                    "requested_type": str(account_type),
                },
            )

        changed: list[str] = []
        if account.name != name:
            account.name = name
            changed.append("name")
        if account.parent_id != parent_id:
            account.parent_id = parent_id
            changed.append("parent")
        if account.owner_id != owner_id:
            account.owner_id = owner_id
            changed.append("owner_id")

        if changed:
            account.save(update_fields=[*changed, "updated_at"])
            logger.debug(f"Updated ledger account {code}: {', '.join(changed)}")

        return account

    @staticmethod
    def ensure_base_accounts() -> BaseAccounts:
        """
        Ensure the fixed top-level accounts exist.

        Returns:
            BaseAccounts(cash, payables_parent, fee_revenue)
        """
        return BaseAccounts(
            cash=ChartOfAccounts.ensure_account(*CASH_CLEARING),
            payables_parent=ChartOfAccounts.ensure_account(*FARMER_PAYABLES),
            fee_revenue=ChartOfAccounts.ensure_account(*PLATFORM_FEES),
        )

    @staticmethod
    def ensure_farmer_subledger(
        farmer_id: str,
        farmer_name: str | None,
        parent: LedgerAccount,
    ) -> LedgerAccount:
        """
        Ensure the payable sub-account of a farmer exists.

        Args:
            farmer_id: Id of the farmer
            farmer_name: Display name (falls back to the id when empty)
            parent: The farmer payables parent account

        Returns:
            The farmer's LedgerAccount
        """
        return ChartOfAccounts.ensure_account(
            code=farmer_subledger_code(farmer_id),
            name=f"Farmer Payable - {farmer_name or farmer_id}",
            account_type=AccountType.LIABILITY,
            parent=parent,
            owner_id=farmer_id,
        )
