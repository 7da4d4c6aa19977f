"""SQLite persistence for reconciled transactions."""
