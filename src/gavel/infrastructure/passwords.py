"""Password hashing capability backed by bcrypt."""

from __future__ import annotations

import bcrypt


class PasswordHasher:
    """``hash(secret) -> digest`` and ``verify(secret, digest) -> bool``.

    Digests are standard ``$2b$`` bcrypt strings with the salt embedded.
    bcrypt only looks at the first 72 bytes of a secret; longer secrets are
    truncated before hashing so current bcrypt releases do not reject them.
    """

    _MAX_SECRET_BYTES = 72

    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def _encode(self, secret: str) -> bytes:
        return secret.encode("utf-8")[: self._MAX_SECRET_BYTES]

    def hash(self, secret: str) -> str:
        """Hash *secret* with a fresh salt."""
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(self._encode(secret), salt).decode("ascii")

    def verify(self, secret: str, digest: str) -> bool:
        """Check *secret* against *digest*. Malformed digests never match."""
        try:
            return bcrypt.checkpw(self._encode(secret), digest.encode("ascii"))
        except ValueError:
            return False
