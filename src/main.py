from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from config import config
from db.db import init_db
from db.repositories import TransactionRepository
from domain.reconciliation import reconcile
from importers.revolut_importer import RevolutImporter
from utils.report import render_transactions, write_legs_csv, write_transactions_csv

logger = logging.getLogger(__name__)


def run(
    csv_path: Path,
    currency: str,
    *,
    all_exchanges: bool = False,
    rows_only: bool = False,
    output_format: str = "table",
    db_file: Path | None = None,
) -> None:
    importer = RevolutImporter(csv_path, delimiter=config().csv_delimiter)

    logger.info("Importing exchange legs from %s", csv_path)
    if all_exchanges:
        legs = importer.read_exchanges()
    else:
        legs = importer.read_exchanges_in_currency(currency)

    if rows_only:
        write_legs_csv(legs, sys.stdout)
        return

    result = reconcile(legs, currency)
    if result.unpaired_leg is not None:
        print(
            f"Warning: dropped unpaired leg {result.unpaired_leg.date} ({result.unpaired_leg.description})",
            file=sys.stderr,
        )
    if result.conflicting_pairs:
        print(f"Warning: {result.conflicting_pairs} pairs had misaligned legs", file=sys.stderr)

    if db_file is not None:
        logger.info("Persisting %d transactions to %s", len(result.transactions), db_file)
        with init_db(db_file=db_file, reset=True) as session:
            TransactionRepository(session).create_many(result.transactions)

    if output_format == "csv":
        write_transactions_csv(result.transactions, sys.stdout)
    else:
        render_transactions(result.transactions)


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Reconcile Revolut exchange legs into buy/sell transactions.")
    parser.add_argument("--csv", type=Path, required=True)
    parser.add_argument("--currency", default=None, help="Target currency code, e.g. DOGE")
    parser.add_argument("--all-exchanges", action="store_true", help="Do not narrow legs to the target currency")
    parser.add_argument("--rows", action="store_true", help="Print the filtered legs as CSV and exit")
    parser.add_argument("--format", choices=("table", "csv"), default="table")
    parser.add_argument("--db", type=Path, default=None, help="Persist transactions into this SQLite file")
    args = parser.parse_args(argv)

    currency = args.currency or config().target_currency
    if not currency:
        parser.error("a target currency is required (--currency or TARGET_CURRENCY)")

    run(
        args.csv,
        currency.upper(),
        all_exchanges=args.all_exchanges,
        rows_only=args.rows,
        output_format=args.format,
        db_file=args.db,
    )


def cli() -> None:
    logging.basicConfig(level=config().log_level.upper(), format="%(asctime)s %(levelname)s %(name)s %(message)s")
    main()


if __name__ == "__main__":
    cli()
