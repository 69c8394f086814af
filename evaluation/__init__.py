"""Deterministic evaluation scenarios and harness."""
