"""Readiness signal lookup.

The readiness score comes from an external assessment (the latest completed
virtual interview). This module only defines the collaborator contract and
the neutral default; it never computes readiness itself.
"""

import logging
from typing import Protocol

from models.schemas.candidate_profile import NEUTRAL_READINESS_SCORE

logger = logging.getLogger(__name__)


class ReadinessProvider(Protocol):
    async def latest_readiness_score(self, candidate_id: str) -> float | None:
        """Score of the latest completed assessment, None if there is none."""
        ...


async def resolve_readiness_score(
    provider: ReadinessProvider | None, candidate_id: str | None
) -> float:
    """Clamped readiness score, or the neutral 50 when no signal exists."""
    if provider is None or not candidate_id:
        return NEUTRAL_READINESS_SCORE

    try:
        score = await provider.latest_readiness_score(candidate_id)
    except Exception as e:
        logger.warning("Readiness lookup failed for %s: %s", candidate_id, e)
        return NEUTRAL_READINESS_SCORE

    if score is None:
        return NEUTRAL_READINESS_SCORE
    return max(0.0, min(100.0, float(score)))
