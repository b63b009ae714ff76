"""HTTP API for the referral ledger service."""
