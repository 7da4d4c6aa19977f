"""Domain models and the reconciliation engine.

Legs and transactions are in-memory (Pydantic) models, independent from the
persistence models in ``db`` so pairing logic can be tested without a DB.
"""

__all__ = [
    "legs",
    "reconciliation",
    "transaction",
]
