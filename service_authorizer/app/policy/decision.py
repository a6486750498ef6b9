"""
Allow/deny decisions and the IAM-style policy document the gateway expects.
"""

from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

POLICY_VERSION = "2012-10-17"
INVOKE_ACTION = "execute-api:Invoke"
ANONYMOUS_PRINCIPAL = "user"


class Effect(str, Enum):
    ALLOW = "Allow"
    DENY = "Deny"


class PolicyStatement(BaseModel):
    """Single statement of a policy document."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    action: str = Field(default=INVOKE_ACTION, alias="Action")
    effect: Effect = Field(alias="Effect")
    resource: str = Field(default="*", alias="Resource")


class PolicyDocument(BaseModel):
    """Policy document attached to an authorizer response."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    version: str = Field(default=POLICY_VERSION, alias="Version")
    statement: List[PolicyStatement] = Field(alias="Statement")


class AuthorizationDecision(BaseModel):
    """Outcome of an authorization attempt."""

    model_config = ConfigDict(frozen=True)

    principal_id: str
    effect: Effect
    resource: str = "*"

    @property
    def allowed(self) -> bool:
        return self.effect is Effect.ALLOW

    def policy_document(self) -> PolicyDocument:
        return PolicyDocument(
            statement=[PolicyStatement(effect=self.effect, resource=self.resource)]
        )

    def to_response(self) -> Dict[str, Any]:
        """Render the decision in the gateway's authorizer response shape."""
        return {
            "principalId": self.principal_id,
            "policyDocument": self.policy_document().model_dump(by_alias=True, mode="json"),
        }


class AuthorizationDecisionBuilder:
    """Builds decisions for a fixed policy resource.

    Deny decisions carry no failure detail; the reason is for the caller to log.
    """

    def __init__(self, resource: str = "*"):
        self.resource = resource

    def allow(self, subject: str) -> AuthorizationDecision:
        return AuthorizationDecision(
            principal_id=subject,
            effect=Effect.ALLOW,
            resource=self.resource,
        )

    def deny(self, reason: str = "") -> AuthorizationDecision:
        return AuthorizationDecision(
            principal_id=ANONYMOUS_PRINCIPAL,
            effect=Effect.DENY,
            resource=self.resource,
        )
