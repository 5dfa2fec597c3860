"""Create the roles table."""

TABLE = "roles"
