from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Sequence

from .legs import Direction, ExchangeLeg
from .transaction import Transaction, TransactionType

logger = logging.getLogger(__name__)


@dataclass
class TransactionDraft:
    """Accumulator filled by both legs of a pair before it is frozen.

    When both legs write the same side, or disagree on Buy/Sell, the later
    leg wins and the clash is counted in ``conflicts``.
    """

    date: str
    type: TransactionType | None = None
    paid_currency: str = ""
    paid_amount: Decimal = Decimal("0")
    exchanged_currency: str = ""
    exchanged_amount: Decimal = Decimal("0")
    is_vault: bool = False
    conflicts: int = 0
    _paid_by: ExchangeLeg | None = field(default=None, repr=False)
    _exchanged_by: ExchangeLeg | None = field(default=None, repr=False)
    _typed_by: ExchangeLeg | None = field(default=None, repr=False)

    def set_paid(self, leg: ExchangeLeg, tx_type: TransactionType, currency: str) -> None:
        if self._paid_by is not None:
            self._conflict("paid side", self._paid_by, leg)
        self._set_type(leg, tx_type)
        self.paid_amount = leg.net_amount
        self.paid_currency = currency
        self.date = leg.date
        self._paid_by = leg

    def set_exchanged(self, leg: ExchangeLeg, tx_type: TransactionType) -> None:
        if self._exchanged_by is not None:
            self._conflict("exchanged side", self._exchanged_by, leg)
        self._set_type(leg, tx_type)
        self.exchanged_amount = leg.net_amount
        self.exchanged_currency = leg.currency
        self._exchanged_by = leg

    def _set_type(self, leg: ExchangeLeg, tx_type: TransactionType) -> None:
        if self._typed_by is not None and self.type != tx_type:
            self._conflict(f"type ({self.type} -> {tx_type})", self._typed_by, leg)
        self.type = tx_type
        self._typed_by = leg

    def _conflict(self, what: str, earlier: ExchangeLeg, later: ExchangeLeg) -> None:
        self.conflicts += 1
        logger.warning(
            "Misaligned pair: %s set by leg %s %s %s (%r) is overwritten by leg %s %s %s (%r)",
            what,
            earlier.date,
            earlier.amount,
            earlier.currency,
            earlier.description,
            later.date,
            later.amount,
            later.currency,
            later.description,
        )

    def freeze(self) -> Transaction:
        return Transaction(
            type=self.type,
            paid_currency=self.paid_currency,
            paid_amount=self.paid_amount,
            exchanged_currency=self.exchanged_currency,
            exchanged_amount=self.exchanged_amount,
            date=self.date,
            is_vault=self.is_vault,
        )


# Target "BCH":
# 1. currency BCH, "Exchanged from SEK" -> bought BCH, paid side
# 2. currency BCH, "Exchanged to SEK"   -> sold BCH, paid side
# 3. currency SEK, "Exchanged from BCH" -> proceeds of selling BCH, exchanged side
# 4. currency SEK, "Exchanged to BCH"   -> cost of buying BCH, exchanged side
def classify_leg(leg: ExchangeLeg, draft: TransactionDraft, currency: str) -> None:
    exchange = leg.exchange
    if exchange.is_vault:
        draft.is_vault = True

    if exchange.direction is None:
        logger.debug("%s: leg %r has no exchange direction, skipped", leg.date, leg.description)
        return

    if leg.currency == currency:
        tx_type = TransactionType.BUY if exchange.direction == Direction.FROM else TransactionType.SELL
        logger.debug(
            "%s: %s %s %s %s %s, incl. fee %s",
            leg.date,
            "Bought" if tx_type == TransactionType.BUY else "Sold",
            leg.net_amount,
            leg.currency,
            exchange.direction,
            exchange.counter_currency,
            leg.fee,
        )
        draft.set_paid(leg, tx_type, currency)
    elif exchange.mentions_currency(currency):
        tx_type = TransactionType.SELL if exchange.direction == Direction.FROM else TransactionType.BUY
        logger.debug(
            "%s: %s of %s is %s %s (exchanged %s %s), incl. fee %s",
            leg.date,
            "Proceeds" if tx_type == TransactionType.SELL else "Cost",
            currency,
            leg.net_amount,
            leg.currency,
            exchange.direction,
            exchange.counter_currency,
            leg.fee,
        )
        draft.set_exchanged(leg, tx_type)


def fill_pair_draft(older: ExchangeLeg, newer: ExchangeLeg, currency: str) -> TransactionDraft:
    draft = TransactionDraft(date=older.date)
    classify_leg(older, draft, currency)
    classify_leg(newer, draft, currency)
    return draft


def pair_to_transaction(older: ExchangeLeg, newer: ExchangeLeg, currency: str) -> Transaction:
    return fill_pair_draft(older, newer, currency).freeze()


@dataclass(frozen=True)
class EmptySlot:
    pass


@dataclass(frozen=True)
class HoldingOlder:
    leg: ExchangeLeg


PendingSlot = EmptySlot | HoldingOlder


@dataclass(frozen=True)
class ReconciliationResult:
    transactions: list[Transaction]
    unpaired_leg: ExchangeLeg | None = None
    conflicting_pairs: int = 0


def reconcile(legs: Sequence[ExchangeLeg], currency: str) -> ReconciliationResult:
    """Pair adjacent legs into transactions.

    ``legs`` must be in export order (newest first). Transactions come back
    oldest first. A trailing leg without a partner is returned as
    ``unpaired_leg`` and produces no transaction. Pairs whose legs clash are
    still emitted and counted in ``conflicting_pairs``.
    """
    transactions: list[Transaction] = []
    conflicting_pairs = 0
    slot: PendingSlot = EmptySlot()

    for leg in reversed(legs):
        if isinstance(slot, HoldingOlder):
            draft = fill_pair_draft(slot.leg, leg, currency)
            if draft.conflicts:
                conflicting_pairs += 1
            transactions.append(draft.freeze())
            slot = EmptySlot()
        else:
            slot = HoldingOlder(leg)

    unpaired_leg = slot.leg if isinstance(slot, HoldingOlder) else None
    if unpaired_leg is not None:
        logger.warning(
            "Odd number of %s exchange legs (%d), dropping unpaired leg %s %s %s (%r)",
            currency,
            len(legs),
            unpaired_leg.date,
            unpaired_leg.amount,
            unpaired_leg.currency,
            unpaired_leg.description,
        )

    if conflicting_pairs:
        logger.warning("%d %s pairs had misaligned legs", conflicting_pairs, currency)

    logger.info("Reconciled %d %s transactions from %d legs", len(transactions), currency, len(legs))
    return ReconciliationResult(
        transactions=transactions,
        unpaired_leg=unpaired_leg,
        conflicting_pairs=conflicting_pairs,
    )


def to_transactions(legs: Sequence[ExchangeLeg], currency: str) -> list[Transaction]:
    return reconcile(legs, currency).transactions
