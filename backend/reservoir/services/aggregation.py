from __future__ import annotations
from typing import Iterable
from reservoir.schemas.reservoir import ReservoirState
from reservoir.schemas.submission import SubmissionRecord


def total_litres(submissions: Iterable[SubmissionRecord]) -> int:
    """Sum of litres over approved submissions; a missing value counts as 0."""
    return sum(int(s.litres or 0) for s in submissions if s.approved)


def fill_percentage(total: int, goal_litres: int) -> float:
    """Share of the goal reached, clamped to [0, 100]."""
    if goal_litres <= 0:
        return 100.0 if total > 0 else 0.0
    return max(0.0, min(100.0, total / goal_litres * 100))


def aggregate(submissions: Iterable[SubmissionRecord], goal_litres: int) -> ReservoirState:
    """
    Partition the full submission set and derive the gauge values.
    - approved: newest first by created_at
    - pending: input order
    Nothing is cached here; callers re-run this over a fresh read.
    """
    rows = list(submissions)
    approved = sorted((s for s in rows if s.approved), key=lambda s: s.created_at, reverse=True)
    pending = [s for s in rows if not s.approved]
    total = total_litres(approved)
    return ReservoirState(
        approved=approved,
        pending=pending,
        total_litres=total,
        fill_percentage=fill_percentage(total, goal_litres),
        goal_litres=goal_litres,
    )
