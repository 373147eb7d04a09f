import argparse
import logging
import sys

from payments_engine import PaymentsEngine
from snapshot import write_accounts


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="payments-engine",
        description="Replay a CSV of transactions and print final client balances.",
    )
    parser.add_argument("input", help="CSV file with type, client, tx, amount columns")
    parser.add_argument(
        "--freeze-locked",
        action="store_true",
        help="ignore every transaction for an account once it has been charged back",
    )
    parser.add_argument(
        "--strict-amounts",
        action="store_true",
        help="treat a malformed amount as a fatal parse error instead of 0",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log ignored transactions")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    engine = PaymentsEngine(
        freeze_locked_accounts=args.freeze_locked,
        strict_amounts=args.strict_amounts,
    )
    try:
        accounts = engine.process_file(args.input)
    except OSError as e:
        print(f"error: could not read transactions file: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"error: transactions could not be parsed: {e}", file=sys.stderr)
        return 1

    write_accounts(accounts, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
