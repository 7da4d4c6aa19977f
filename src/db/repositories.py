from __future__ import annotations

from typing import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from db import models
from domain.transaction import Transaction, TransactionType


class TransactionRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def create_many(self, transactions: Iterable[Transaction]) -> None:
        self._session.add_all(self._to_orm(transaction) for transaction in transactions)
        self._session.commit()

    def list(self) -> list[Transaction]:
        stmt = select(models.TransactionOrm).order_by(models.TransactionOrm.id.asc())
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    @staticmethod
    def _to_orm(transaction: Transaction) -> models.TransactionOrm:
        return models.TransactionOrm(
            type=transaction.type.value if transaction.type is not None else None,
            paid_currency=transaction.paid_currency,
            paid_amount=transaction.paid_amount,
            exchanged_currency=transaction.exchanged_currency,
            exchanged_amount=transaction.exchanged_amount,
            date=transaction.date,
            is_vault=transaction.is_vault,
        )

    @staticmethod
    def _to_domain(orm_transaction: models.TransactionOrm) -> Transaction:
        return Transaction(
            type=TransactionType(orm_transaction.type) if orm_transaction.type is not None else None,
            paid_currency=orm_transaction.paid_currency,
            paid_amount=orm_transaction.paid_amount,
            exchanged_currency=orm_transaction.exchanged_currency,
            exchanged_amount=orm_transaction.exchanged_amount,
            date=orm_transaction.date,
            is_vault=orm_transaction.is_vault,
        )
