"""
Observability module for habitflow.

Provides Prometheus counters for gamification and persistence events.
"""

__all__ = ["metrics"]
