"""
Assignee recommendation by current workload.

A developer's workload is the sum of the priority weights of the issues
assigned to them that nobody has fixed yet. One BLOCKER (8) outweighs several
MINOR (1) issues. The least loaded developers are recommended first; equal
workloads are ordered by member id so the ranking is stable.
"""

from collections.abc import Iterable

from core.models import Issue


def score_workloads(candidate_ids: Iterable[str], issues: Iterable[Issue]) -> dict[str, int]:
    """
    Sum priority weights of open assigned work per candidate.

    Args:
        candidate_ids: Developers eligible for assignment; each starts at 0
        issues: Issues of the project

    Returns:
        Mapping of candidate id to workload. Issues assigned to someone outside
        the candidate pool are ignored.
    """
    scores = {member_id: 0 for member_id in candidate_ids}
    for issue in issues:
        if issue.fixer_id is not None or issue.assignee_id is None:
            continue
        if issue.assignee_id in scores:
            scores[issue.assignee_id] += issue.priority.to_value()
    return scores


def rank_candidates(scores: dict[str, int], limit: int = 5) -> list[str]:
    """Member ids ordered by ascending workload, then id; at most ``limit``."""
    ranked = sorted(scores.items(), key=lambda entry: (entry[1], entry[0]))
    return [member_id for member_id, _ in ranked[:limit]]


__all__ = ["score_workloads", "rank_candidates"]
