"""Bearer token verification.

The task tracker never inspects tokens itself beyond what a verifier does:
a verifier turns a token into a stable owner id or raises Unauthenticated.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
import requests
from flask import current_app

from task_tracker.exceptions import Unauthenticated


logger = logging.getLogger(__name__)


class IdentityVerifier(ABC):
    """Resolves a bearer token to an owner id."""

    @abstractmethod
    def verify(self, token: str) -> str:
        """Return the owner id for ``token``.

        Raises:
            Unauthenticated: If the token is rejected.
        """


class JWTIdentityVerifier(IdentityVerifier):
    """Validates HS256-style tokens locally with a shared secret.

    Supabase signs user access tokens with the project's JWT secret and
    puts the user id in ``sub``.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", audience: str | None = None) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.audience = audience

    def verify(self, token: str) -> str:
        options = {"require": ["sub", "exp"], "verify_aud": self.audience is not None}
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                options=options,
            )
        except jwt.InvalidTokenError as exc:
            logger.info(f"Token rejected: {exc}")
            raise Unauthenticated("Invalid or expired token") from exc

        owner = payload.get("sub")
        if not isinstance(owner, str) or not owner:
            raise Unauthenticated("Invalid token payload")
        return owner


class SupabaseIdentityVerifier(IdentityVerifier):
    """Asks the Supabase auth server who the token belongs to."""

    def __init__(
        self,
        url: str,
        anon_key: str,
        timeout: float = 5.0,
        session: requests.Session | None = None,
    ) -> None:
        if not url or not anon_key:
            raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY are required for supabase auth")
        self.user_endpoint = f"{url.rstrip('/')}/auth/v1/user"
        self.anon_key = anon_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def verify(self, token: str) -> str:
        headers = {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {token}",
        }
        try:
            response = self.session.get(self.user_endpoint, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning(f"Identity provider unreachable: {exc}")
            raise Unauthenticated("Unauthorized") from exc

        if response.status_code != 200:
            logger.info(f"Identity provider rejected token: HTTP {response.status_code}")
            raise Unauthenticated("Invalid or expired token")

        try:
            user = response.json()
        except ValueError as exc:
            raise Unauthenticated("Invalid or expired token") from exc

        owner = user.get("id") if isinstance(user, dict) else None
        if not isinstance(owner, str) or not owner:
            raise Unauthenticated("Invalid or expired token")
        return owner


def create_verifier(config: dict[str, Any]) -> IdentityVerifier:
    """Build the verifier named by the ``AUTH_PROVIDER`` setting.

    Args:
        config: Flask app config.

    Raises:
        ValueError: If the provider name is unknown or incompletely configured.
    """
    provider = config.get("AUTH_PROVIDER", "jwt")
    if provider == "jwt":
        return JWTIdentityVerifier(
            secret_key=config["JWT_SECRET_KEY"],
            algorithm=config.get("JWT_ALGORITHM", "HS256"),
            audience=config.get("JWT_AUDIENCE"),
        )
    if provider == "supabase":
        return SupabaseIdentityVerifier(
            url=config.get("SUPABASE_URL", ""),
            anon_key=config.get("SUPABASE_ANON_KEY", ""),
            timeout=config.get("AUTH_TIMEOUT_SECONDS", 5.0),
        )
    raise ValueError(f"Unknown AUTH_PROVIDER: {provider!r}")


def generate_token(owner: str) -> str:
    """Generate a JWT for ``owner`` that JWTIdentityVerifier accepts.

    Used for local development and tests; production tokens come from the
    identity provider.

    Args:
        owner: Owner id to put in the ``sub`` claim.

    Returns:
        JWT token string.
    """
    expiration_hours = current_app.config.get("JWT_EXPIRATION_HOURS", 24)
    secret_key = current_app.config["JWT_SECRET_KEY"]
    algorithm = current_app.config.get("JWT_ALGORITHM", "HS256")
    audience = current_app.config.get("JWT_AUDIENCE")

    payload: dict[str, Any] = {
        "sub": owner,
        "exp": datetime.now(timezone.utc) + timedelta(hours=expiration_hours),
        "iat": datetime.now(timezone.utc),
    }
    if audience:
        payload["aud"] = audience

    return jwt.encode(payload, secret_key, algorithm=algorithm)
