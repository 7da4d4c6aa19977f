from __future__ import annotations

from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class TransactionType(StrEnum):
    BUY = "Buy"
    SELL = "Sell"


class Transaction(BaseModel):
    """A reconciled exchange seen from the target currency.

    ``paid_*`` is the side denominated in the target currency, ``exchanged_*``
    the counter currency. Both amounts include fees.
    """

    model_config = ConfigDict(frozen=True)

    type: TransactionType | None = None
    paid_currency: str = ""
    paid_amount: Decimal = Decimal("0")
    exchanged_currency: str = ""
    exchanged_amount: Decimal = Decimal("0")
    date: str = ""
    is_vault: bool = False
