"""
Gateway token authorizer package.

Turns a bearer token into an allow/deny access-policy decision for an API
gateway by verifying the token against certificates published on a remote
JWKS endpoint.

- app.jwks: Fetching the published key set and selecting signing keys.
- app.certificates: PEM encoding of key certificates and their cache.
- app.validation: Token verification pipeline.
- app.policy: Access-policy decision documents.
- app.authorizer: The never-raising authorization boundary.
- app.handler: Managed-function entry point.
- app.main: HTTP service exposing the same boundary.

Design notes:
- Module import must not perform network calls; the key set is fetched
  lazily on the first cache miss.
- Use the shared/ utilities for logging, metrics, config, and errors.
"""
