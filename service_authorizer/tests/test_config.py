"""
Tests for authorizer configuration.
"""

import pytest
from pydantic import ValidationError as SettingsValidationError

from shared.config import BaseConfig, get_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("AUTHZ_JWKS_URL", "AUTH0_JWKS_URL", "AUTHZ_CERTIFICATE_CACHE_MODE", "AUTHZ_TOKEN_AUDIENCE"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = BaseConfig()
    
    assert config.jwks_timeout_seconds == 5.0
    assert config.token_audience is None
    assert config.token_issuer is None
    assert config.certificate_cache_mode == "keyed"
    assert config.policy_resource == "*"


def test_prefixed_environment(monkeypatch):
    monkeypatch.setenv("AUTHZ_JWKS_URL", "https://a.test/jwks.json")
    monkeypatch.setenv("AUTHZ_TOKEN_AUDIENCE", "todo-api")
    monkeypatch.setenv("AUTHZ_CERTIFICATE_CACHE_MODE", "single")
    
    config = BaseConfig()
    
    assert config.jwks_url == "https://a.test/jwks.json"
    assert config.token_audience == "todo-api"
    assert config.certificate_cache_mode == "single"


def test_auth0_variable_accepted(monkeypatch):
    monkeypatch.setenv("AUTH0_JWKS_URL", "https://tenant.auth0.test/.well-known/jwks.json")
    
    assert BaseConfig().jwks_url == "https://tenant.auth0.test/.well-known/jwks.json"


def test_invalid_cache_mode(monkeypatch):
    monkeypatch.setenv("AUTHZ_CERTIFICATE_CACHE_MODE", "lru")
    
    with pytest.raises(SettingsValidationError):
        BaseConfig()


def test_get_config():
    config = get_config("authorizer", 8020)
    
    assert config.service_name == "authorizer"
    assert config.port == 8020
    assert config.host == "0.0.0.0"
