"""
Tests for bearer-token verification.
"""

import time

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from fastapi import HTTPException
from fastapi.testclient import TestClient
from jose import jwk, jwt

from mindpath.core import auth
from mindpath.core.auth import verify_token
from mindpath.main import app

DOMAIN = "mindpath-test.auth0.com"
AUDIENCE = "https://mindpath-api"
KID = "test-key"


@pytest.fixture(scope="module")
def signing_keys():
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()
    public_jwk = jwk.construct(public_pem, algorithm="RS256").to_dict()
    public_jwk.update({"kid": KID, "use": "sig"})
    return private_pem, {"keys": [public_jwk]}


def _token(private_pem, **overrides):
    claims = {
        "sub": "auth0|user-1",
        "aud": AUDIENCE,
        "iss": f"https://{DOMAIN}/",
        "exp": int(time.time()) + 300,
    }
    claims.update(overrides)
    return jwt.encode(claims, private_pem, algorithm="RS256", headers={"kid": KID})


def test_verify_token_returns_claims(signing_keys):
    private_pem, jwks = signing_keys

    claims = verify_token(
        _token(private_pem), domain=DOMAIN, audience=AUDIENCE, jwks=jwks
    )

    assert claims["sub"] == "auth0|user-1"


@pytest.mark.parametrize(
    "overrides",
    [
        {"aud": "https://other-api"},
        {"iss": "https://evil.example.com/"},
        {"exp": int(time.time()) - 60},
    ],
)
def test_verify_token_rejects_bad_claims(signing_keys, overrides):
    private_pem, jwks = signing_keys

    with pytest.raises(HTTPException) as excinfo:
        verify_token(
            _token(private_pem, **overrides),
            domain=DOMAIN,
            audience=AUDIENCE,
            jwks=jwks,
        )

    assert excinfo.value.status_code == 401


def test_verify_token_rejects_unknown_key(signing_keys):
    private_pem, _ = signing_keys

    with pytest.raises(HTTPException) as excinfo:
        verify_token(
            _token(private_pem),
            domain=DOMAIN,
            audience=AUDIENCE,
            jwks={"keys": []},
        )

    assert excinfo.value.status_code == 401


def test_verify_token_rejects_garbage():
    with pytest.raises(HTTPException):
        verify_token("not-a-jwt", domain=DOMAIN, audience=AUDIENCE, jwks={"keys": []})


def test_verify_token_requires_configuration():
    with pytest.raises(HTTPException) as excinfo:
        verify_token("token", domain="", audience="", jwks={"keys": []})

    assert excinfo.value.status_code == 401


def test_endpoints_require_authentication():
    """Test requests without a bearer token are rejected."""
    with TestClient(app) as client:
        list_response = client.get("/api/notes")
        create_response = client.post(
            "/api/notes", json={"title": "t", "content": "c"}
        )

    assert list_response.status_code == 401
    assert list_response.json() == {
        "error": "Unauthorized",
        "message": "Authorization token required",
    }
    assert create_response.status_code == 401


def test_invalid_token_is_rejected():
    with TestClient(app) as client:
        response = client.get(
            "/api/notes", headers={"Authorization": "Bearer invalid-token"}
        )

    assert response.status_code == 401


class _JwksResponse:
    def __init__(self, payload):
        self.payload = payload

    def raise_for_status(self):
        return None

    def json(self):
        return self.payload


def test_rotated_signing_key_triggers_one_refetch(signing_keys, monkeypatch):
    """Test an unknown kid clears the cached key set and fetches it again."""
    private_pem, jwks = signing_keys
    served = [{"keys": []}, jwks]
    fetched_urls = []

    def fake_get(url, timeout):
        fetched_urls.append(url)
        return _JwksResponse(served[len(fetched_urls) - 1])

    monkeypatch.setattr(auth.httpx, "get", fake_get)
    auth.fetch_jwks.cache_clear()
    try:
        claims = verify_token(_token(private_pem), domain=DOMAIN, audience=AUDIENCE)
        assert claims["sub"] == "auth0|user-1"
        assert fetched_urls == [f"https://{DOMAIN}/.well-known/jwks.json"] * 2

        verify_token(_token(private_pem), domain=DOMAIN, audience=AUDIENCE)
        assert len(fetched_urls) == 2
    finally:
        auth.fetch_jwks.cache_clear()


def test_unknown_kid_after_refetch_is_rejected(signing_keys, monkeypatch):
    private_pem, _ = signing_keys
    fetched_urls = []

    def fake_get(url, timeout):
        fetched_urls.append(url)
        return _JwksResponse({"keys": []})

    monkeypatch.setattr(auth.httpx, "get", fake_get)
    auth.fetch_jwks.cache_clear()
    try:
        with pytest.raises(HTTPException) as excinfo:
            verify_token(_token(private_pem), domain=DOMAIN, audience=AUDIENCE)
    finally:
        auth.fetch_jwks.cache_clear()

    assert excinfo.value.status_code == 401
    assert len(fetched_urls) == 2
