"""Referral ledger core: models, repositories and services."""
