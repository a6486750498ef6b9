"""
Shared pytest fixtures for the authorizer test suites.
"""

import pytest

from shared.test_helpers import MockTokenGenerator, generate_signing_key


@pytest.fixture(scope="session")
def signing_key():
    """Primary RSA signing key published on the JWKS endpoint."""
    return generate_signing_key("test-key-1")


@pytest.fixture(scope="session")
def other_signing_key():
    """A second RSA signing key with a different kid."""
    return generate_signing_key("test-key-2", common_name="other.authorizer.test")


@pytest.fixture
def token_generator():
    """Token generator for signed test tokens."""
    return MockTokenGenerator()
