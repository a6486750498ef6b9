"""
Authorizer HTTP service.

Exposes the gateway authorization boundary over HTTP for gateways that call
an external authorizer instead of invoking a function directly.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from shared.base_service import BaseService
from .authorizer import GatewayAuthorizer, build_authorizer
from .errors import VerificationError


class AuthorizationRequest(BaseModel):
    """Request body for ``POST /authorize``."""

    model_config = ConfigDict(populate_by_name=True)

    authorization_token: Optional[str] = Field(default=None, alias="authorizationToken")


class AuthorizerService(BaseService):
    """Authorizer service implementation."""
    
    def __init__(self, authorizer: Optional[GatewayAuthorizer] = None):
        super().__init__("authorizer", 8020)
        self.authorizer = authorizer or build_authorizer(
            self.config,
            metrics=self.metrics if self.config.enable_metrics else None,
        )
        self._setup_authorizer_routes()
    
    def _setup_authorizer_routes(self):
        """Set up authorizer-specific routes."""
        
        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": "authorizer",
                "message": "Gateway token authorizer",
                "version": "1.0.0"
            }
        
        @self.app.post("/authorize")
        async def authorize(request: AuthorizationRequest):
            """Return the allow/deny policy for a bearer token."""
            return await self.authorizer.authorize(
                {"authorizationToken": request.authorization_token}
            )
    
    async def _check_dependencies(self):
        """Check the JWKS endpoint is reachable and publishes keys."""
        dependencies = {}
        
        try:
            await self.authorizer.verifier.fetcher.fetch()
            dependencies["jwks"] = "ok"
        except VerificationError as e:
            self.logger.warning("JWKS dependency check failed", error_code=e.code)
            dependencies["jwks"] = "error"
        
        return dependencies


def create_app(authorizer: Optional[GatewayAuthorizer] = None):
    """Create FastAPI application."""
    service = AuthorizerService(authorizer)
    return service.app


if __name__ == "__main__":
    service = AuthorizerService()
    service.run()
