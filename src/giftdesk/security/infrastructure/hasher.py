"""bcrypt password hashing."""

from __future__ import annotations

import bcrypt

DEFAULT_ROUNDS = 12


class BcryptPasswordHasher:
    """Hashes passwords with bcrypt.

    Example:
        ```python
        hasher = BcryptPasswordHasher(rounds=4)
        hashed = hasher.hash("s3cret")
        assert hasher.verify(hashed, "s3cret")
        ```
    """

    def __init__(self, *, rounds: int = DEFAULT_ROUNDS) -> None:
        """
        Args:
            rounds: bcrypt cost factor (4 to 31).
        """
        if not 4 <= rounds <= 31:
            raise ValueError("bcrypt rounds must be between 4 and 31")
        self.rounds = rounds

    def hash(self, plain_password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(plain_password.encode(), salt).decode()

    def verify(self, hashed_password: str, plain_password: str) -> bool:
        try:
            return bcrypt.checkpw(plain_password.encode(), hashed_password.encode())
        except ValueError:
            # Malformed hash
            return False

    def needs_rehash(self, hashed_password: str) -> bool:
        """True when *hashed_password* used fewer rounds than configured."""
        # bcrypt format: $2b$12$...
        parts = hashed_password.split("$")
        if len(parts) >= 3:
            try:
                return int(parts[2]) < self.rounds
            except ValueError:
                pass
        return False
