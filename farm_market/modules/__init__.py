"""Marketplace domain modules (one package per record type)."""
