"""Create the users table."""

TABLE = "users"
