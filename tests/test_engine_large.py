import sys
import os
from decimal import Decimal

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from payments_engine import PaymentsEngine


def run(tmp_path, rows):
    csv_file = tmp_path / "large_test.csv"
    csv_file.write_text('\n'.join(["type, client, tx, amount", *rows]))
    engine = PaymentsEngine()
    accounts = engine.process_file(str(csv_file))
    for account in accounts.values():
        assert account.is_balanced, f"Client {account.client_id} unbalanced: {account}"
    return engine, accounts


class TestPaymentsEngineLargeScale:
    def test_1000_accounts_6000_transactions(self, tmp_path):
        """Each client: deposits 100, 200, 300, withdrawals 50, 100, then a late deposit of 50."""
        num_clients = 1000
        rows = []
        tx_id = 1

        for client_id in range(1, num_clients + 1):
            for kind, amount in (("deposit", 100), ("deposit", 200), ("deposit", 300), ("withdrawal", 50), ("withdrawal", 100)):
                rows.append(f"{kind}, {client_id}, {tx_id}, {amount}")
                tx_id += 1

        for client_id in range(1, num_clients + 1):
            rows.append(f"deposit, {client_id}, {tx_id}, 50")
            tx_id += 1

        engine, accounts = run(tmp_path, rows)

        assert len(accounts) == num_clients
        assert engine.stats.processed == 6000
        assert engine.stats.ignored == 0
        for client_id in range(1, num_clients + 1):
            assert accounts[client_id].available == Decimal("500"), \
                f"Client {client_id}: expected 500, got {accounts[client_id].available}"
            assert accounts[client_id].held == Decimal("0")
            assert accounts[client_id].locked is False

    def test_withdrawing_whole_balance_rejected_at_scale(self, tmp_path):
        rows = []
        for client_id in range(1, 501):
            rows.append(f"deposit, {client_id}, {client_id}, 10.5")
        for client_id in range(1, 501):
            rows.append(f"withdrawal, {client_id}, {1000 + client_id}, 10.5")

        engine, accounts = run(tmp_path, rows)

        assert engine.stats.ignored == 500
        assert all(account.total == Decimal("10.5") for account in accounts.values())

    def test_with_disputes_resolves_chargebacks(self, tmp_path):
        rows = []

        def deposits(clients, amounts):
            for client_id in clients:
                for offset, amount in enumerate(amounts, start=1):
                    rows.append(f"deposit, {client_id}, {client_id * 100 + offset}, {amount}")

        def follow_up(kind, clients, offset):
            for client_id in clients:
                rows.append(f"{kind}, {client_id}, {client_id * 100 + offset},")

        plain = range(1, 11)
        resolved = range(11, 21)
        charged_back = range(21, 31)
        still_disputed = range(31, 41)
        disputed_withdrawal = range(41, 51)

        deposits(plain, [100, 150, 250])

        deposits(resolved, [100, 150, 250])
        follow_up("dispute", resolved, 1)
        follow_up("resolve", resolved, 1)

        deposits(charged_back, [100, 150, 250])
        follow_up("dispute", charged_back, 1)
        follow_up("chargeback", charged_back, 1)
        # Nothing is left under dispute, so these are ignored
        follow_up("resolve", charged_back, 1)
        follow_up("chargeback", charged_back, 1)

        for client_id in still_disputed:
            rows.append(f"deposit, {client_id}, {client_id * 100 + 1}, 150")
            rows.append(f"deposit, {client_id}, {client_id * 100 + 2}, 250")
            rows.append(f"withdrawal, {client_id}, {client_id * 100 + 3}, 100")
        follow_up("dispute", still_disputed, 1)

        for client_id in disputed_withdrawal:
            rows.append(f"deposit, {client_id}, {client_id * 100 + 1}, 300")
            rows.append(f"withdrawal, {client_id}, {client_id * 100 + 2}, 120")
        follow_up("dispute", disputed_withdrawal, 2)

        _, accounts = run(tmp_path, rows)

        for client_id in [*plain, *resolved]:
            assert accounts[client_id].available == Decimal("500"), f"Client {client_id}"
            assert accounts[client_id].held == Decimal("0")
            assert accounts[client_id].locked is False

        for client_id in charged_back:
            assert accounts[client_id].available == Decimal("400"), f"Client {client_id}"
            assert accounts[client_id].held == Decimal("0")
            assert accounts[client_id].total == Decimal("400")
            assert accounts[client_id].locked is True

        for client_id in still_disputed:
            assert accounts[client_id].available == Decimal("150"), f"Client {client_id}"
            assert accounts[client_id].held == Decimal("150")
            assert accounts[client_id].total == Decimal("300")
            assert accounts[client_id].locked is False

        for client_id in disputed_withdrawal:
            assert accounts[client_id].available == Decimal("60"), f"Client {client_id}"
            assert accounts[client_id].held == Decimal("120")
            assert accounts[client_id].total == Decimal("180")
