"""Gift attribution bounded context."""
