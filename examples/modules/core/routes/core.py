"""Route registrations for the core module."""

ROUTES = [
    ("GET", "/api/core/users"),
    ("POST", "/api/core/login"),
]
