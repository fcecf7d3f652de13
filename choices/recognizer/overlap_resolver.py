"""
Overlap resolution for the choice recognizer.

Filters candidate value matches so that every choice index wins at most once
and no utterance token is claimed by two matches.
"""

import logging
from typing import List, Set

from .core import FoundValue, ModelResult

logger = logging.getLogger(__name__)


class OverlapResolver:
    """
    Handles overlap resolution for value matches.

    Matches still carry token positions in ``start``/``end`` at this stage;
    translating them to character offsets is left to the caller.
    """

    @staticmethod
    def resolve_overlaps(
        matches: List[ModelResult[FoundValue]],
    ) -> List[ModelResult[FoundValue]]:
        """
        Resolve overlapping matches using the priority rules.

        Priority rules (highest to lowest):
        1. Score (higher wins)
        2. Candidate order (longer candidate string wins, then input order)

        The second rule is carried by the stable sort, so callers must pass
        matches in candidate order.

        Args:
            matches: List of token-positioned ModelResult objects

        Returns:
            List of kept matches, in descending score order
        """
        if not matches:
            return []

        # Step 1: Sort by score, stable for equal scores
        sorted_matches = sorted(matches, key=lambda m: m.resolution.score, reverse=True)

        # Step 2: One-pass scan for duplicate indexes and claimed tokens
        result = []
        found_indexes: Set[int] = set()
        used_tokens: Set[int] = set()
        for match in sorted_matches:
            if match.resolution.index in found_indexes:
                continue
            span = range(match.start, match.end + 1)
            if any(pos in used_tokens for pos in span):
                continue
            found_indexes.add(match.resolution.index)
            used_tokens.update(span)
            result.append(match)

        logger.info("Overlap resolution: %s -> %s matches", len(matches), len(result))
        return result
