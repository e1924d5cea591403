"""Password hashing service using bcrypt.

Provides salted, adaptive hashing and verification. Input rules (length,
emptiness) belong to the validation layer, not here.
"""

import bcrypt


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Uses bcrypt for password hashing with configurable work factor. Every
    call to ``hash`` draws a fresh salt, so hashing the same password twice
    gives two different strings.

    Examples
    --------
    >>> service = PasswordHashingService()
    >>> hash = service.hash("my_secure_password")
    >>> service.verify("my_secure_password", hash)
    True
    >>> service.verify("wrong_password", hash)
    False
    """

    def __init__(self, rounds: int = 12):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 12,
            which is a good balance of security and performance.
            Higher values are more secure but slower.
        """
        self._rounds = rounds
        self._dummy_hash: str | None = None

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Parameters
        ----------
        password
            The plaintext password to hash

        Returns
        -------
        The bcrypt hash as a string

        Raises
        ------
        ValueError
            If the password is longer than bcrypt accepts
        """
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        The comparison is done by bcrypt in constant time.

        Parameters
        ----------
        password
            The plaintext password to check
        password_hash
            The bcrypt hash to verify against

        Returns
        -------
        True if password matches, False otherwise
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError):
            # Invalid hash format or over-long input
            return False

    def verify_dummy(self, password: str) -> bool:
        """Spend the same effort as ``verify`` for an account that does not exist.

        Always returns False.
        """
        if self._dummy_hash is None:
            self._dummy_hash = self.hash("taskapi-dummy-password")
        self.verify(password, self._dummy_hash)
        return False

    def needs_rehash(self, password_hash: str) -> bool:
        """Check if a password hash was made with a different work factor.

        After changing the rounds setting, existing hashes are upgraded on
        the next successful login.

        Parameters
        ----------
        password_hash
            The existing hash to check

        Returns
        -------
        True if the hash should be regenerated
        """
        try:
            # bcrypt format: $2b$XX$...
            parts = password_hash.split("$")
            if len(parts) >= 3:
                return int(parts[2]) != self._rounds
        except ValueError:
            pass
        return True
