from __future__ import annotations

import logging
from csv import DictReader
from pathlib import Path
from typing import Iterable

from pydantic import ValidationError

from domain.legs import ExchangeLeg, LegType

logger = logging.getLogger(__name__)


def exchange_legs(legs: Iterable[ExchangeLeg]) -> list[ExchangeLeg]:
    return [leg for leg in legs if leg.type == LegType.EXCHANGE]


def exchange_legs_in_currency(legs: Iterable[ExchangeLeg], currency: str) -> list[ExchangeLeg]:
    # Also keeps legs in an intermediate currency, e.g. a SEK leg "Exchanged to ETH".
    return [leg for leg in exchange_legs(legs) if leg.references_currency(currency)]


def _strip_row(row: dict[str | None, str | list[str] | None]) -> dict[str, str]:
    return {
        key.strip(): value.strip() if isinstance(value, str) else ""
        for key, value in row.items()
        if key is not None
    }


class RevolutImporter:
    """Reads a Revolut account statement export.

    Rows are returned in file order, which is newest first. Rows that fail
    validation are dropped and counted in ``skipped_rows``.
    """

    def __init__(self, source_path: str | Path, *, delimiter: str = ",") -> None:
        self._source_path = Path(source_path)
        self._delimiter = delimiter
        self.skipped_rows = 0

    def read_legs(self) -> list[ExchangeLeg]:
        legs: list[ExchangeLeg] = []
        skipped = 0
        with self._source_path.open(encoding="utf-8", newline="") as handle:
            reader = DictReader(handle, delimiter=self._delimiter)
            for line_number, row in enumerate(reader, start=2):
                try:
                    legs.append(ExchangeLeg.model_validate(_strip_row(row)))
                except ValidationError as exc:
                    skipped += 1
                    logger.debug("Skipping row %d of %s: %s", line_number, self._source_path, exc)

        self.skipped_rows = skipped
        if skipped:
            logger.warning("Dropped %d invalid rows from %s", skipped, self._source_path)
        logger.info("Read %d legs from %s", len(legs), self._source_path)
        return legs

    def read_exchanges(self) -> list[ExchangeLeg]:
        return exchange_legs(self.read_legs())

    def read_exchanges_in_currency(self, currency: str) -> list[ExchangeLeg]:
        legs = exchange_legs_in_currency(self.read_legs(), currency)
        logger.info("Kept %d exchange legs referencing %s", len(legs), currency)
        return legs
