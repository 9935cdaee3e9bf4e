"""Gift request bounded context: residents asking for a specific gift."""
