from __future__ import annotations

from csv import DictWriter
from typing import Iterable, TextIO

from domain.legs import ExchangeLeg
from domain.transaction import Transaction

from .formatting import format_decimal, format_flag

TRANSACTION_FIELDNAMES = [
    "Type",
    "Date",
    "Paid Currency",
    "Paid Amount",
    "Exchanged Currency",
    "Exchanged Amount",
    "Vault",
]

LEG_FIELDNAMES = [
    "Type",
    "Started Date",
    "Completed Date",
    "Description",
    "Amount",
    "Fee",
    "Currency",
    "Original Amount",
    "Original Currency",
    "Settled Amount",
    "Settled Currency",
    "State",
    "Balance",
]


def _transaction_row(transaction: Transaction) -> dict[str, str]:
    return {
        "Type": transaction.type.value if transaction.type is not None else "",
        "Date": transaction.date,
        "Paid Currency": transaction.paid_currency,
        "Paid Amount": format_decimal(transaction.paid_amount),
        "Exchanged Currency": transaction.exchanged_currency,
        "Exchanged Amount": format_decimal(transaction.exchanged_amount),
        "Vault": format_flag(transaction.is_vault),
    }


def _leg_row(leg: ExchangeLeg) -> dict[str, str]:
    return {
        "Type": leg.type.value,
        "Started Date": leg.started_date,
        "Completed Date": leg.completed_date or "",
        "Description": leg.description,
        "Amount": format_decimal(leg.amount),
        "Fee": format_decimal(leg.fee),
        "Currency": leg.currency,
        "Original Amount": format_decimal(leg.original_amount),
        "Original Currency": leg.original_currency,
        "Settled Amount": format_decimal(leg.settled_amount),
        "Settled Currency": leg.settled_currency or "",
        "State": leg.state.value,
        "Balance": format_decimal(leg.balance),
    }


def write_transactions_csv(transactions: Iterable[Transaction], handle: TextIO) -> None:
    writer = DictWriter(handle, fieldnames=TRANSACTION_FIELDNAMES, lineterminator="\n")
    writer.writeheader()
    writer.writerows(_transaction_row(transaction) for transaction in transactions)


def write_legs_csv(legs: Iterable[ExchangeLeg], handle: TextIO) -> None:
    writer = DictWriter(handle, fieldnames=LEG_FIELDNAMES, lineterminator="\n")
    writer.writeheader()
    writer.writerows(_leg_row(leg) for leg in legs)


def render_transactions(transactions: Iterable[Transaction]) -> None:
    transactions_list = list(transactions)
    print("Transactions:")
    if not transactions_list:
        print("  (no transactions)")
        return

    rows = [_transaction_row(transaction) for transaction in transactions_list]
    widths = {name: max(len(name), max(len(row[name]) for row in rows)) for name in TRANSACTION_FIELDNAMES}
    right_aligned = {"Paid Amount", "Exchanged Amount"}

    def _line(values: dict[str, str]) -> str:
        return " ".join(
            f"{values[name]:>{widths[name]}}" if name in right_aligned else f"{values[name]:<{widths[name]}}"
            for name in TRANSACTION_FIELDNAMES
        ).rstrip()

    header = _line({name: name for name in TRANSACTION_FIELDNAMES})
    lines = [header, "-" * len(header)]
    lines.extend(_line(row) for row in rows)
    lines.append("-" * len(header))
    print("\n".join(lines))
