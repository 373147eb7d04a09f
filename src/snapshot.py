import sys
from decimal import Decimal
from typing import Dict, TextIO

from models import ClientAccount

HEADER = "client,available,held,total,locked"


def format_decimal(value: Decimal) -> str:
    """Format decimal in its shortest plain form, removing trailing zeros."""
    normalized = value.normalize()
    if normalized.is_zero():
        return "0"
    return f"{normalized:f}"


def format_account(account: ClientAccount) -> str:
    return (
        f"{account.client_id},"
        f"{format_decimal(account.available)},"
        f"{format_decimal(account.held)},"
        f"{format_decimal(account.total)},"
        f"{str(account.locked).lower()}"
    )


def render_accounts(accounts: Dict[int, ClientAccount]) -> str:
    """Render the header and one row per account, ordered by client id."""
    lines = [HEADER]
    for client_id in sorted(accounts.keys()):
        lines.append(format_account(accounts[client_id]))
    return "\n".join(lines) + "\n"


def write_accounts(accounts: Dict[int, ClientAccount], stream: TextIO = sys.stdout) -> None:
    stream.write(render_accounts(accounts))
