import logging
from typing import Dict, Iterable, Optional

from models import Transaction, ClientAccount, ProcessingStats
from state_manager import StateManager
from transaction_parser import parse_file
from transaction_processor import TransactionProcessor

logger = logging.getLogger(__name__)


def replay(
    transactions: Iterable[Transaction],
    state: Optional[StateManager] = None,
    freeze_locked_accounts: bool = False,
    stats: Optional[ProcessingStats] = None,
) -> StateManager:
    """
    Apply transactions in order to state (a fresh one if not given) and
    return it. Every record is applied before the next is looked at.
    """
    if state is None:
        state = StateManager()
    processor = TransactionProcessor(state, freeze_locked_accounts=freeze_locked_accounts)

    for transaction in transactions:
        result = processor.process_transaction(transaction)
        if stats is not None:
            stats.record(result)

    return state


class PaymentsEngine:
    """
    Replays a CSV file of transactions into final account states.
    The whole file is parsed before anything is applied, so a parse
    failure produces no partial state.
    """

    def __init__(self, freeze_locked_accounts: bool = False, strict_amounts: bool = False):
        self._freeze_locked_accounts = freeze_locked_accounts
        self._strict_amounts = strict_amounts
        self._state = StateManager()
        self._stats = ProcessingStats()

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process_file(self, filepath: str) -> Dict[int, ClientAccount]:
        """Process CSV file and return final account states."""
        transactions = parse_file(filepath, strict_amounts=self._strict_amounts)
        logger.info(f"Parsed {len(transactions)} transactions from {filepath}")
        return self.process_transactions(transactions)

    def process_transactions(self, transactions: Iterable[Transaction]) -> Dict[int, ClientAccount]:
        replay(
            transactions,
            state=self._state,
            freeze_locked_accounts=self._freeze_locked_accounts,
            stats=self._stats,
        )
        logger.info(f"{self._stats}, indexed transactions: {self._state.transaction_count}")
        return self._state.get_all_accounts()
