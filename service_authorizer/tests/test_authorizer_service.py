"""
Tests for the authorizer HTTP service.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient

from service_authorizer.app.authorizer import GatewayAuthorizer
from service_authorizer.app.errors import TokenDecodeError
from service_authorizer.app.jwks.fetcher import KeySetFetcher
from service_authorizer.app.main import create_app
from service_authorizer.app.validation.token_verifier import TokenVerifier
from shared.test_helpers import MockJWKSEndpoint, create_jwks

JWKS_URL = "https://tenant.auth.test/.well-known/jwks.json"


@pytest.fixture
def endpoint(signing_key):
    return MockJWKSEndpoint(create_jwks(signing_key))


@pytest.fixture
def client(endpoint):
    """Create test client."""
    fetcher = KeySetFetcher(JWKS_URL, transport=endpoint.transport())
    app = create_app(GatewayAuthorizer(TokenVerifier(fetcher)))
    return TestClient(app)


def test_root_endpoint(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "authorizer"
    assert data["version"] == "1.0.0"


def test_health_check(client):
    """Health reports the JWKS dependency."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "authorizer"
    assert data["status"] == "ok"
    assert data["dependencies"] == {"jwks": "ok"}


def test_health_check_degraded(endpoint, client):
    endpoint.status_code = 500
    
    response = client.get("/health")
    
    assert response.status_code == 200
    assert response.json()["status"] == "degraded"
    assert response.json()["dependencies"] == {"jwks": "error"}


def test_authorize_allow(client, signing_key, token_generator):
    token = token_generator.generate_access_token(signing_key, subject="auth0|abc")
    
    response = client.post("/authorize", json={"authorizationToken": f"Bearer {token}"})
    
    assert response.status_code == 200
    data = response.json()
    assert data["principalId"] == "auth0|abc"
    assert data["policyDocument"]["Version"] == "2012-10-17"
    assert data["policyDocument"]["Statement"][0]["Effect"] == "Allow"


def test_authorize_deny(client):
    response = client.post("/authorize", json={})
    
    assert response.status_code == 200
    data = response.json()
    assert data["principalId"] == "user"
    assert data["policyDocument"]["Statement"][0]["Effect"] == "Deny"


def test_metrics_endpoint(client):
    client.post("/authorize", json={})
    
    response = client.get("/metrics")
    
    assert response.status_code == 200
    assert "http_requests_total" in response.text


def test_error_response_carries_code():
    """Verification errors render as the standard error response."""
    error = TokenDecodeError(details={"kid": "k1"})
    
    response = error.to_response()
    
    assert response.code == "TOKEN_DECODE_ERROR"
    assert response.message == "Token could not be decoded"
    assert response.details == {"kid": "k1"}


def test_unhandled_exception_returns_internal_error():
    """Errors escaping a route render as a 500 in the standard error format."""
    authorizer = MagicMock()
    authorizer.authorize = AsyncMock(side_effect=RuntimeError("boom"))
    client = TestClient(create_app(authorizer), raise_server_exceptions=False)
    
    response = client.post("/authorize", json={"authorizationToken": "Bearer x"})
    
    assert response.status_code == 500
    data = response.json()
    assert data["code"] == "INTERNAL_ERROR"
    assert data["message"] == "Internal server error"
    assert data["details"] == {}
