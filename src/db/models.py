from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class DecimalAsString(TypeDecorator):
    impl = String
    cache_ok = True

    def process_bind_param(self, value: Decimal | None, dialect: object) -> str | None:
        if value is None:
            return None
        return str(value)

    def process_result_value(self, value: str | None, dialect: object) -> Decimal | None:
        if value is None:
            return None
        return Decimal(value)


class Base(DeclarativeBase):
    pass


class TransactionOrm(Base):
    __tablename__ = "transactions"

    # Autoincrement id keeps the reconciled (chronological) order.
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[str | None] = mapped_column(String, nullable=True)
    paid_currency: Mapped[str] = mapped_column(String, nullable=False)
    paid_amount: Mapped[Decimal] = mapped_column(DecimalAsString, nullable=False)
    exchanged_currency: Mapped[str] = mapped_column(String, nullable=False)
    exchanged_amount: Mapped[Decimal] = mapped_column(DecimalAsString, nullable=False)
    date: Mapped[str] = mapped_column(String, nullable=False)
    is_vault: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
