"""
Access-policy decisions returned to the API gateway.
"""

from .decision import (
    AuthorizationDecision,
    AuthorizationDecisionBuilder,
    Effect,
    PolicyDocument,
    PolicyStatement,
)

__all__ = [
    "AuthorizationDecision",
    "AuthorizationDecisionBuilder",
    "Effect",
    "PolicyDocument",
    "PolicyStatement",
]
