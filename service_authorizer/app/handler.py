"""
Managed-function entry point for the gateway custom authorizer.

The authorizer, and with it the certificate cache, is created on the first
invocation and reused for the lifetime of the process.
"""

import asyncio
import threading
from typing import Any, Dict, Optional

from shared.config import BaseConfig
from shared.logging import configure_logging
from shared.metrics import get_metrics_collector
from .authorizer import GatewayAuthorizer, build_authorizer

SERVICE_NAME = "authorizer"

_authorizer: Optional[GatewayAuthorizer] = None
_authorizer_lock = threading.Lock()


def get_authorizer() -> GatewayAuthorizer:
    """Return the process-wide authorizer, building it on first use.

    Configuration is validated here, outside the deny-on-error boundary, so an
    invalid setting such as an unknown ``AUTHZ_CERTIFICATE_CACHE_MODE`` raises
    pydantic's ``ValidationError`` on the first invocation.
    """
    global _authorizer
    with _authorizer_lock:
        if _authorizer is None:
            config = BaseConfig()
            configure_logging(SERVICE_NAME, config.log_level)
            metrics = get_metrics_collector(SERVICE_NAME) if config.enable_metrics else None
            _authorizer = build_authorizer(config, metrics=metrics)
        return _authorizer


def reset_authorizer() -> None:
    """Drop the process-wide authorizer so the next call rebuilds it."""
    global _authorizer
    with _authorizer_lock:
        _authorizer = None


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """Authorize a gateway request event."""
    return asyncio.run(get_authorizer().authorize(event))
