import logging

from models import Transaction, TransactionType, ClientAccount, DisputeStatus, ProcessingResult
from state_manager import StateManager

logger = logging.getLogger(__name__)


class TransactionProcessor:
    """
    Applies transactions to account state, one at a time and in input order.
    Inconsistent records (unknown tx, wrong dispute state, insufficient funds)
    are ignored and reported through ProcessingResult, never raised.
    """

    def __init__(self, state: StateManager, freeze_locked_accounts: bool = False):
        self._state = state
        self._freeze_locked_accounts = freeze_locked_accounts

    def process_transaction(self, transaction: Transaction) -> ProcessingResult:
        """
        Process a single transaction.

        Returns:
            SUCCESS: Balances or dispute state changed
            IGNORED: Left every account untouched
        """
        account = self._state.get_or_create_account(transaction.client_id)

        if account.locked and self._freeze_locked_accounts:
            logger.info(f"{transaction}: account {account.client_id} is locked, ignoring")
            return ProcessingResult.IGNORED

        match transaction.transaction_type:
            case TransactionType.DEPOSIT:
                return self._handle_deposit(account, transaction)
            case TransactionType.WITHDRAWAL:
                return self._handle_withdrawal(account, transaction)
            case TransactionType.DISPUTE:
                return self._handle_dispute(account, transaction)
            case TransactionType.RESOLVE:
                return self._handle_resolve(account, transaction)
            case TransactionType.CHARGEBACK:
                return self._handle_chargeback(account, transaction)

        return ProcessingResult.IGNORED

    def _index(self, transaction: Transaction) -> None:
        if not self._state.store_transaction(transaction):
            logger.warning(f"{transaction.transaction_type.value.capitalize()} tx {transaction.transaction_id}: tx id already seen, keeping the first record for disputes")

    def _handle_deposit(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        account.credit(transaction.amount)
        self._index(transaction)
        return ProcessingResult.SUCCESS

    def _handle_withdrawal(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        # An exact-balance withdrawal counts as insufficient funds
        if account.available - transaction.amount <= 0:
            logger.warning(f"Withdrawal tx {transaction.transaction_id}: insufficient funds for client {account.client_id} (available {account.available}, requested {transaction.amount})")
            return ProcessingResult.IGNORED

        account.debit(transaction.amount)
        self._index(transaction)
        return ProcessingResult.SUCCESS

    def _handle_dispute(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        original = self._state.get_transaction(transaction.transaction_id)

        if original is None:
            logger.info(f"Dispute for tx {transaction.transaction_id}: transaction not found, assuming partner error")
            return ProcessingResult.IGNORED

        if original.status != DisputeStatus.NORMAL:
            logger.info(f"Dispute for tx {transaction.transaction_id}: transaction is {original.status.value}")
            return ProcessingResult.IGNORED

        account.hold(original.amount)
        self._state.set_dispute_status(transaction.transaction_id, DisputeStatus.DISPUTED)
        return ProcessingResult.SUCCESS

    def _handle_resolve(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        original = self._state.get_transaction(transaction.transaction_id)

        if original is None or original.status != DisputeStatus.DISPUTED:
            logger.info(f"Resolve for tx {transaction.transaction_id}: transaction not under dispute")
            return ProcessingResult.IGNORED

        account.release_hold(original.amount)
        self._state.set_dispute_status(transaction.transaction_id, DisputeStatus.NORMAL)
        return ProcessingResult.SUCCESS

    def _handle_chargeback(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        original = self._state.get_transaction(transaction.transaction_id)

        if original is None or original.status != DisputeStatus.DISPUTED:
            logger.info(f"Chargeback for tx {transaction.transaction_id}: transaction not under dispute")
            return ProcessingResult.IGNORED

        account.charge_back(original.amount)
        self._state.set_dispute_status(transaction.transaction_id, DisputeStatus.CHARGED_BACK)
        return ProcessingResult.SUCCESS
