import csv
import logging
from decimal import Decimal, InvalidOperation, getcontext
from typing import Iterable, List, Optional

from models import Transaction, TransactionType

logger = logging.getLogger(__name__)

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1


class ParseError(ValueError):
    """A row that cannot be turned into a Transaction. Aborts the whole batch."""

    def __init__(self, line_number: int, message: str):
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number


def parse_file(filepath: str, strict_amounts: bool = False) -> List[Transaction]:
    """Read and parse a whole CSV file before any of it is applied."""
    with open(filepath, "r", encoding="utf-8", newline="") as f:
        try:
            return parse_transactions(f, strict_amounts=strict_amounts)
        except UnicodeDecodeError as e:
            raise ParseError(0, f"failed reading row: {e}") from e


def parse_transactions(lines: Iterable[str], strict_amounts: bool = False) -> List[Transaction]:
    """
    Parse `type, client, tx, amount` rows into transactions.

    The first row is a header and is skipped, as are rows with an empty type
    column. Malformed type, client or tx columns raise ParseError. A missing or
    malformed amount becomes 0 unless strict_amounts is set.
    """
    # One record per physical line; quotes have no special meaning
    reader = csv.reader(lines, quoting=csv.QUOTE_NONE)

    transactions = []
    try:
        next(reader, None)
        for row in reader:
            transaction = _parse_row(row, reader.line_num, strict_amounts)
            if transaction is not None:
                transactions.append(transaction)
    except csv.Error as e:
        raise ParseError(reader.line_num, f"unreadable row: {e}") from e
    return transactions


def _parse_row(row: List[str], line_number: int, strict_amounts: bool) -> Optional[Transaction]:
    columns = [column.strip() for column in row]
    if not columns or not columns[0]:
        return None

    try:
        transaction_type = TransactionType(columns[0])
    except ValueError:
        raise ParseError(line_number, f"invalid transaction type {columns[0]!r}") from None

    if len(columns) < 3:
        raise ParseError(line_number, "expected at least type, client and tx columns")

    client_id = _parse_id(columns[1], MAX_CLIENT_ID, "client ID", line_number)
    transaction_id = _parse_id(columns[2], MAX_TRANSACTION_ID, "transaction ID", line_number)

    amount = Decimal("0")
    if transaction_type.moves_funds and len(columns) > 3:
        amount = _parse_amount(columns[3], line_number, strict_amounts)

    return Transaction(
        transaction_type=transaction_type,
        client_id=client_id,
        transaction_id=transaction_id,
        amount=amount,
    )


def _parse_id(value: str, upper_bound: int, name: str, line_number: int) -> int:
    # int() would also accept "+5" and "1_000"
    if not (value.isascii() and value.isdigit()):
        raise ParseError(line_number, f"invalid {name} {value!r}")
    parsed = int(value)
    if parsed > upper_bound:
        raise ParseError(line_number, f"{name} {parsed} out of range")
    return parsed


def _parse_amount(value: str, line_number: int, strict: bool) -> Decimal:
    if not value:
        return Decimal("0")

    try:
        amount = Decimal(value)
    except InvalidOperation:
        amount = None

    if amount is not None and amount.is_finite() and amount >= 0 and _fits_precision(amount):
        return amount

    if strict:
        raise ParseError(line_number, f"invalid amount {value!r}")
    logger.warning(f"Line {line_number}: invalid amount {value!r}, using 0")
    return Decimal("0")


def _fits_precision(amount: Decimal) -> bool:
    """True if the amount written out in plain positional form fits the decimal context precision."""
    integer_digits = max(amount.adjusted() + 1, 1)
    fraction_digits = max(-amount.as_tuple().exponent, 0)
    return integer_digits + fraction_digits <= getcontext().prec
