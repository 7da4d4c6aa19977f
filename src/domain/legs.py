from __future__ import annotations

import re
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

VAULT_MARKER = "Vault"

_DIRECTION_PATTERN = re.compile(r"Exchanged (?P<direction>from|to)\b\s*(?P<currency>\S+)?")


class LegType(StrEnum):
    EXCHANGE = "Exchange"
    TRANSFER = "Transfer"
    CASHBACK = "Cashback"
    CARD_PAYMENT = "Card Payment"
    TOPUP = "Topup"


class LegState(StrEnum):
    COMPLETED = "Completed"


class Direction(StrEnum):
    FROM = "from"
    TO = "to"


class ExchangeDescription(BaseModel):
    """Structured view of an exchange leg's free-text description.

    ``"Exchanged to DOGE DOGE Vault"`` parses to direction ``to``, counter
    currency ``DOGE``, mentions ``{"Exchanged", "to", "DOGE", "Vault"}`` and
    ``is_vault=True``.
    """

    model_config = ConfigDict(frozen=True)

    direction: Direction | None = None
    counter_currency: str | None = None
    mentions: frozenset[str] = frozenset()
    is_vault: bool = False

    @classmethod
    def parse(cls, description: str) -> ExchangeDescription:
        match = _DIRECTION_PATTERN.search(description)
        return cls(
            direction=Direction(match["direction"]) if match else None,
            counter_currency=match["currency"] if match else None,
            mentions=frozenset(description.split()),
            is_vault=VAULT_MARKER in description,
        )

    def mentions_currency(self, currency: str) -> bool:
        return currency in self.mentions


class ExchangeLeg(BaseModel):
    """One row of the export.

    Sign convention for ``amount`` and ``fee``:
    - Negative values leave this leg's currency.
    - Positive values enter it.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: LegType = Field(alias="Type")
    started_date: str = Field(alias="Started Date")
    completed_date: str | None = Field(default=None, alias="Completed Date")
    description: str = Field(alias="Description")
    amount: Decimal = Field(alias="Amount")
    fee: Decimal = Field(alias="Fee")
    currency: str = Field(alias="Currency")
    original_amount: Decimal = Field(alias="Original Amount")
    original_currency: str = Field(alias="Original Currency")
    settled_amount: Decimal | None = Field(default=None, alias="Settled Amount")
    settled_currency: str | None = Field(default=None, alias="Settled Currency")
    state: LegState = Field(alias="State")
    balance: Decimal | None = Field(default=None, alias="Balance")

    @field_validator(
        "completed_date", "settled_amount", "settled_currency", "balance", mode="before"
    )
    @classmethod
    def _empty_optional(cls, value: str | None) -> str | None:
        if value == "":
            return None
        return value

    @property
    def date(self) -> str:
        return self.started_date

    @property
    def net_amount(self) -> Decimal:
        """Amount including the fee, sign preserved."""
        return self.amount + self.fee

    @property
    def exchange(self) -> ExchangeDescription:
        return ExchangeDescription.parse(self.description)

    def references_currency(self, currency: str) -> bool:
        return self.currency == currency or self.exchange.mentions_currency(currency)
