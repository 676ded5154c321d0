"""
Prometheus metrics definitions for habitflow.

- Gamification metrics: completions, reverts, achievements, shields
- Persistence metrics: write failures, state reloads

Metrics are exposed by start_metrics_server() for Prometheus scraping.
"""

import logging
from prometheus_client import Counter, start_http_server

from habitflow.config import ENABLE_METRICS, METRICS_PORT

logger = logging.getLogger(__name__)

# =============================================================================
# Gamification Metrics
# =============================================================================

completions_recorded_total = Counter(
    "habitflow_completions_recorded_total",
    "Habit completions rewarded by the gamification engine",
)

completions_reverted_total = Counter(
    "habitflow_completions_reverted_total",
    "Completions whose rewards were revoked",
)

xp_awarded_total = Counter(
    "habitflow_xp_awarded_total",
    "XP granted by recorded completions, including achievement rewards",
)

achievements_unlocked_total = Counter(
    "habitflow_achievements_unlocked_total",
    "Achievement unlocks",
    ["achievement_id"],
)

streak_shields_used_total = Counter(
    "habitflow_streak_shields_used_total",
    "Streak shields consumed",
)

# =============================================================================
# Persistence Metrics
# =============================================================================

persist_failures_total = Counter(
    "habitflow_persist_failures_total",
    "Game state writes that failed and were kept in memory only",
    ["operation"],
)

state_reloads_total = Counter(
    "habitflow_state_reloads_total",
    "Full game state reloads from the record store",
    ["reason"],  # reason: initial/remote_change/new_user/malformed
)


def start_metrics_server(port: int = METRICS_PORT) -> bool:
    """Expose /metrics over HTTP when metrics are enabled"""
    if not ENABLE_METRICS:
        logger.info("Metrics disabled")
        return False

    start_http_server(port)
    logger.info(f"Metrics server listening on port {port}")
    return True
