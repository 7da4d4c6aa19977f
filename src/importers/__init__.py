"""Importers for ingesting exchange ledger exports."""

from importers.revolut_importer import RevolutImporter, exchange_legs, exchange_legs_in_currency

__all__ = ["RevolutImporter", "exchange_legs", "exchange_legs_in_currency"]
