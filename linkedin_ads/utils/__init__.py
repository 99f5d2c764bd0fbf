"""Shared utilities: environment access, logging setup, URN and query helpers."""
