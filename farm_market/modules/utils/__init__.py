"""Shared helpers for record models, identifiers and repositories."""
