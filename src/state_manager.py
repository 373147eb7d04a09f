import logging
from typing import Dict, Optional

from models import Transaction, TransactionRecord, ClientAccount, DisputeStatus

logger = logging.getLogger(__name__)


class StateManager:
    """
    Owned replay state: client accounts, plus the history of deposits and
    withdrawals with their dispute status for later lookups.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}
        self._transactions: Dict[int, TransactionRecord] = {}

    def get_or_create_account(self, client_id: int) -> ClientAccount:
        """Get existing account or create new one."""
        if client_id not in self._accounts:
            self._accounts[client_id] = ClientAccount(client_id=client_id)
        return self._accounts[client_id]

    def store_transaction(self, transaction: Transaction) -> bool:
        """
        Index a deposit or withdrawal for future dispute lookups.

        Returns False when the transaction id is already indexed; the first
        record for an id is kept.
        """
        if transaction.transaction_id in self._transactions:
            return False
        self._transactions[transaction.transaction_id] = TransactionRecord.from_transaction(transaction)
        return True

    def get_transaction(self, transaction_id: int) -> Optional[TransactionRecord]:
        """Retrieve indexed transaction by ID."""
        return self._transactions.get(transaction_id)

    def set_dispute_status(self, transaction_id: int, status: DisputeStatus) -> None:
        record = self._transactions[transaction_id]
        logger.debug(f"tx {transaction_id}: {record.status.value} -> {status.value}")
        record.status = status

    def get_all_accounts(self) -> Dict[int, ClientAccount]:
        """Return all accounts (for final output)."""
        return dict(self._accounts)

    @property
    def transaction_count(self) -> int:
        return len(self._transactions)
