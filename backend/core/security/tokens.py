"""
JWT token service for the admin gate.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

ADMIN_ROLE = "admin"


@dataclass
class TokenPayload:
    """JWT token payload structure."""

    sub: str  # Subject (admin email)
    exp: datetime  # Expiration time
    iat: datetime  # Issued at
    type: str  # Token type: always "access"
    role: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


class TokenService:
    """Service for creating and validating JWT tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 720,
    ):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._access_token_expire_minutes = access_token_expire_minutes

    @property
    def expires_in(self) -> int:
        """Access token lifetime in seconds."""
        return self._access_token_expire_minutes * 60

    def create_access_token(self, subject: str, role: str | None = ADMIN_ROLE) -> str:
        """
        Create an access token.

        Args:
            subject: Identity to encode in the token
            role: Role claim; the admin gate only accepts ``"admin"``

        Returns:
            Encoded JWT access token
        """
        now = datetime.now(UTC)
        expire = now + timedelta(minutes=self._access_token_expire_minutes)

        payload = {
            "sub": subject,
            "exp": expire,
            "iat": now,
            "type": "access",
        }
        if role:
            payload["role"] = role

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def decode_token(self, token: str) -> TokenPayload | None:
        """
        Decode and validate a JWT token.

        Returns:
            TokenPayload if valid, None if invalid or expired
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )

            # Validate required fields exist before accessing them
            for field in ("sub", "exp", "type"):
                if field not in payload:
                    raise JWTError(f"Missing required field: {field}")

            return TokenPayload(
                sub=payload.get("sub"),
                exp=datetime.fromtimestamp(payload.get("exp"), tz=UTC),
                iat=datetime.fromtimestamp(payload.get("iat", 0), tz=UTC),
                type=payload.get("type"),
                role=payload.get("role"),
            )
        except JWTError:
            return None

    def verify_access_token(self, token: str) -> TokenPayload | None:
        """Return the payload of a valid access token, None otherwise."""
        payload = self.decode_token(token)
        if payload and payload.type == "access":
            return payload
        return None
