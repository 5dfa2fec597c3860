"""Create the report cache table."""

TABLE = "report_cache"
