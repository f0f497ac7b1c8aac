"""
Performance Monitoring
Prometheus-based metrics collection for the render cache
"""

from .metrics import MetricsCollector

__all__ = [
    "MetricsCollector",
]
