from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def moves_funds(self) -> bool:
        return self in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


class DisputeStatus(Enum):
    NORMAL = "normal"
    DISPUTED = "disputed"
    CHARGED_BACK = "charged_back"


class ProcessingResult(Enum):
    SUCCESS = "success"
    IGNORED = "ignored"


@dataclass(frozen=True)
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Decimal = Decimal("0")

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class TransactionRecord:
    """History entry for a deposit or withdrawal that later records may dispute."""

    transaction_type: TransactionType
    client_id: int
    amount: Decimal
    status: DisputeStatus = DisputeStatus.NORMAL

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> "TransactionRecord":
        return cls(
            transaction_type=transaction.transaction_type,
            client_id=transaction.client_id,
            amount=transaction.amount,
        )


@dataclass
class ClientAccount:
    """
    Balances for one client.

    total is stored rather than derived; every mutator below keeps
    total == available + held.
    """

    client_id: int
    available: Decimal = Decimal("0")
    held: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    locked: bool = False

    @property
    def is_balanced(self) -> bool:
        return self.total == self.available + self.held

    def credit(self, amount: Decimal) -> None:
        self.available += amount
        self.total += amount

    def debit(self, amount: Decimal) -> None:
        self.available -= amount
        self.total = self.available + self.held

    def hold(self, amount: Decimal) -> None:
        self.available -= amount
        self.held += amount

    def release_hold(self, amount: Decimal) -> None:
        self.held -= amount
        self.available += amount

    def charge_back(self, amount: Decimal) -> None:
        self.held -= amount
        self.total -= amount
        self.locked = True


class ProcessingStats:
    """Counters for the end-of-run report."""

    def __init__(self):
        self.processed = 0
        self.ignored = 0

    def record(self, result: ProcessingResult) -> None:
        if result == ProcessingResult.SUCCESS:
            self.processed += 1
        else:
            self.ignored += 1

    def __repr__(self) -> str:
        return f"Processed: {self.processed}, Ignored: {self.ignored}"
