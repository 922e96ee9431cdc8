from __future__ import annotations

import logging
from functools import lru_cache

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from mindpath.config import get_auth0_audience, get_auth0_domain

logger = logging.getLogger(__name__)

ALGORITHMS = ["RS256"]

_bearer = HTTPBearer(auto_error=False)


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=message,
        headers={"WWW-Authenticate": "Bearer"},
    )


@lru_cache(maxsize=1)
def fetch_jwks(domain: str) -> dict[str, object]:
    response = httpx.get(f"https://{domain}/.well-known/jwks.json", timeout=10.0)
    response.raise_for_status()
    return response.json()


def _signing_key(kid: object, jwks: dict[str, object]) -> dict[str, str] | None:
    for key in jwks.get("keys", []):
        if key.get("kid") == kid:
            return {
                "kty": key["kty"],
                "kid": key["kid"],
                "use": key.get("use", "sig"),
                "n": key["n"],
                "e": key["e"],
            }
    return None


def _load_jwks(domain: str, *, refresh: bool = False) -> dict[str, object]:
    if refresh:
        fetch_jwks.cache_clear()
    try:
        return fetch_jwks(domain)
    except httpx.HTTPError as exc:
        logger.error("Could not fetch JWKS from %s: %s", domain, exc)
        raise _unauthorized("Unable to verify token") from exc


def verify_token(
    token: str,
    *,
    domain: str,
    audience: str,
    jwks: dict[str, object] | None = None,
) -> dict[str, object]:
    """Validate an Auth0 access token and return its claims."""
    if not domain or not audience:
        logger.error("AUTH0_DOMAIN and AUTH0_AUDIENCE must be configured")
        raise _unauthorized("Authentication is not configured")

    try:
        kid = jwt.get_unverified_header(token).get("kid")
    except JWTError as exc:
        raise _unauthorized("Invalid token header") from exc

    if jwks is not None:
        key = _signing_key(kid, jwks)
    else:
        key = _signing_key(kid, _load_jwks(domain))
        if key is None:
            # Unknown kid: the tenant may have rotated keys since the last fetch.
            logger.info("Signing key %s not cached; refetching JWKS", kid)
            key = _signing_key(kid, _load_jwks(domain, refresh=True))
    if key is None:
        raise _unauthorized("Unable to find appropriate signing key")

    try:
        return jwt.decode(
            token,
            key,
            algorithms=ALGORITHMS,
            audience=audience,
            issuer=f"https://{domain}/",
        )
    except JWTError as exc:
        raise _unauthorized("Invalid or expired token") from exc


def get_current_owner(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> str:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized("Authorization token required")

    claims = verify_token(
        credentials.credentials,
        domain=get_auth0_domain(),
        audience=get_auth0_audience(),
    )
    owner = claims.get("sub")
    if not isinstance(owner, str) or not owner:
        raise _unauthorized("Token has no subject")
    return owner
