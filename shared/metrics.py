"""
Shared metrics configuration for the gateway token authorizer.
"""

from prometheus_client import Counter, Histogram, Info, CollectorRegistry, REGISTRY
from typing import Dict, Any, Optional
import time
import threading
from contextlib import contextmanager


class MetricsCollector:
    """Centralized metrics collector for services."""
    
    def __init__(self, service_name: str, registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        self.registry = registry if registry is not None else REGISTRY
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()
    
    def _setup_metrics(self):
        """Set up common metrics for the service."""
        
        # Service info
        self._metrics["service_info"] = Info(
            "service_info",
            "Service information",
            registry=self.registry
        )
        self._metrics["service_info"].info({
            "service": self.service_name,
            "version": "1.0.0"
        })
        
        # HTTP metrics
        self._metrics["http_requests_total"] = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "endpoint", "status_code"],
            registry=self.registry
        )
        
        self._metrics["http_request_duration_seconds"] = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            registry=self.registry
        )
        
        # Health check metrics
        self._metrics["health_check_total"] = Counter(
            "health_check_total",
            "Total health check requests",
            ["status"],
            registry=self.registry
        )
        
        self._setup_authorizer_metrics()
    
    def _setup_authorizer_metrics(self):
        """Set up authorizer-specific metrics."""
        self._metrics["authorization_decisions_total"] = Counter(
            "authorization_decisions_total",
            "Total authorization decisions",
            ["effect"],
            registry=self.registry
        )
        
        self._metrics["token_verification_failures_total"] = Counter(
            "token_verification_failures_total",
            "Total token verification failures",
            ["error_code"],
            registry=self.registry
        )
        
        self._metrics["jwks_fetch_total"] = Counter(
            "jwks_fetch_total",
            "Total JWKS fetches",
            ["status"],
            registry=self.registry
        )
        
        self._metrics["jwks_fetch_duration_seconds"] = Histogram(
            "jwks_fetch_duration_seconds",
            "JWKS fetch duration in seconds",
            registry=self.registry
        )
        
        self._metrics["certificate_cache_lookups_total"] = Counter(
            "certificate_cache_lookups_total",
            "Total certificate cache lookups",
            ["result"],
            registry=self.registry
        )
    
    def get_metric(self, name: str):
        """Get a metric by name."""
        return self._metrics.get(name)
    
    def record_http_request(self, method: str, endpoint: str, status_code: int, duration: float):
        """Record HTTP request metrics."""
        self._metrics["http_requests_total"].labels(
            method=method,
            endpoint=endpoint,
            status_code=str(status_code)
        ).inc()
        
        self._metrics["http_request_duration_seconds"].labels(
            method=method,
            endpoint=endpoint
        ).observe(duration)
    
    def record_health_check(self, status: str):
        """Record health check metrics."""
        self._metrics["health_check_total"].labels(status=status).inc()
    
    def record_decision(self, effect: str):
        """Record an authorization decision."""
        self._metrics["authorization_decisions_total"].labels(effect=effect).inc()
    
    def record_verification_failure(self, error_code: str):
        """Record a failed token verification by error code."""
        self._metrics["token_verification_failures_total"].labels(error_code=error_code).inc()
    
    def record_cache_lookup(self, hit: bool):
        """Record a certificate cache lookup."""
        self._metrics["certificate_cache_lookups_total"].labels(
            result="hit" if hit else "miss"
        ).inc()
    
    @contextmanager
    def time_operation(self, operation_name: str, **labels):
        """Context manager to time an operation."""
        start_time = time.time()
        try:
            yield
        finally:
            duration = time.time() - start_time
            if operation_name in self._metrics:
                metric = self._metrics[operation_name]
                if labels:
                    metric = metric.labels(**labels)
                metric.observe(duration)
    
    def increment_counter(self, metric_name: str, **labels):
        """Increment a counter metric."""
        if metric_name in self._metrics:
            self._metrics[metric_name].labels(**labels).inc()


_collectors: Dict[str, MetricsCollector] = {}
_collectors_lock = threading.Lock()


def get_metrics_collector(service_name: str) -> MetricsCollector:
    """Get the process-wide metrics collector for a service.

    Collectors register on the default Prometheus registry, which rejects
    duplicate metric names, so one instance is shared per service name.
    """
    with _collectors_lock:
        collector = _collectors.get(service_name)
        if collector is None:
            collector = MetricsCollector(service_name)
            _collectors[service_name] = collector
        return collector
