"""
Authorization boundary between the API gateway and the verification pipeline.
"""

from typing import Any, Dict, Mapping, Optional

from shared.config import BaseConfig
from shared.logging import clear_context, get_logger, set_principal_context, set_request_id
from shared.metrics import MetricsCollector
from .certificates.cache import create_certificate_cache
from .errors import VerificationError
from .jwks.fetcher import KeySetFetcher
from .policy.decision import AuthorizationDecision, AuthorizationDecisionBuilder
from .validation.token_verifier import TokenVerifier


class GatewayAuthorizer:
    """Turns an authorizer event into an allow/deny policy response.

    Every failure is caught here exactly once, logged, and converted into
    a deny decision; :meth:`authorize` never raises.
    """

    def __init__(
        self,
        verifier: TokenVerifier,
        decisions: Optional[AuthorizationDecisionBuilder] = None,
        *,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.verifier = verifier
        self.decisions = decisions or AuthorizationDecisionBuilder()
        self.metrics = metrics
        self.logger = get_logger("authorizer.gateway")

    async def authorize(self, event: Mapping[str, Any]) -> Dict[str, Any]:
        """Handle a ``{"authorizationToken": ...}`` event."""
        token = event.get("authorizationToken") if isinstance(event, Mapping) else None
        if not isinstance(token, str):
            token = None
        decision = await self.decide(token)
        return decision.to_response()

    async def decide(self, authorization_header: Optional[str]) -> AuthorizationDecision:
        """Verify the header and return the resulting decision."""
        clear_context()
        request_id = set_request_id()
        self.logger.info("Authorizing request", request_id=request_id)

        try:
            verified = await self.verifier.verify(authorization_header)
        except VerificationError as e:
            self.logger.warning(
                "Request not authorized",
                error_code=e.code,
                error=e.message,
                kid=e.details.get("kid"),
            )
            self._record_failure(e.code)
            return self._deny(e.code)
        except Exception as e:
            self.logger.error(
                "Unexpected error during authorization",
                error=str(e),
                exc_info=True,
            )
            self._record_failure("INTERNAL_ERROR")
            return self._deny("INTERNAL_ERROR")

        set_principal_context(verified.subject)
        self.logger.info(
            "Request authorized",
            principal_id=verified.subject,
            kid=verified.kid,
        )
        decision = self.decisions.allow(verified.subject)
        self._record_decision(decision)
        return decision

    def _deny(self, reason: str) -> AuthorizationDecision:
        decision = self.decisions.deny(reason)
        self._record_decision(decision)
        return decision

    def _record_decision(self, decision: AuthorizationDecision) -> None:
        if self.metrics is not None:
            self.metrics.record_decision(decision.effect.value)

    def _record_failure(self, error_code: str) -> None:
        if self.metrics is not None:
            self.metrics.record_verification_failure(error_code)


def build_authorizer(
    config: BaseConfig,
    *,
    metrics: Optional[MetricsCollector] = None,
) -> GatewayAuthorizer:
    """Wire a GatewayAuthorizer and its pipeline from configuration."""
    fetcher = KeySetFetcher(
        config.jwks_url,
        timeout=config.jwks_timeout_seconds,
        metrics=metrics,
    )
    verifier = TokenVerifier(
        fetcher,
        create_certificate_cache(config.certificate_cache_mode),
        audience=config.token_audience,
        issuer=config.token_issuer,
        leeway=config.token_leeway_seconds,
        metrics=metrics,
    )
    return GatewayAuthorizer(
        verifier,
        AuthorizationDecisionBuilder(resource=config.policy_resource),
        metrics=metrics,
    )
