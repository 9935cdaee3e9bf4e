"""Security bounded context: user accounts and token authentication."""
