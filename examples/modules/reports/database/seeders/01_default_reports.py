"""Seed the built-in report definitions."""

ROWS = [{"slug": "monthly-revenue"}, {"slug": "aged-receivables"}]
