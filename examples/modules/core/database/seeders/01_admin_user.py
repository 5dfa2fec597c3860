"""Seed the initial administrator account."""

ROWS = [{"email": "admin@example.com", "role": "admin"}]
