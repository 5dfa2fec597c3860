"""Route registrations for the billing module."""

ROUTES = [
    ("GET", "/api/billing/invoices"),
    ("POST", "/api/billing/invoices"),
]
