"""Rendering helpers for transactions and legs."""
