"""Create the invoices table."""

TABLE = "invoices"
