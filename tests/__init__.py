"""Test suite for the staking ledger."""
