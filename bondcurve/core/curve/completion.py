"""Completion gate: the one-way ACTIVE -> COMPLETE transition.

The transition fires iff, after a successful ledger apply,
``real_quote_reserves >= graduation_threshold``. It is evaluated once per trade,
after the apply, never speculatively. Once complete, every pricing or ledger
call fails with ``CurveComplete`` before any arithmetic runs.

The gate only flips the flag. Bootstrapping external liquidity is the migration
collaborator's job; it receives `migration_handoff(snapshot)`.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ...errors import CurveComplete, CurveNotComplete
from .types import CurvePhase, MigrationHandoff, ReserveSnapshot

logger = logging.getLogger(__name__)


def ensure_active(snapshot: ReserveSnapshot) -> None:
    if snapshot.phase is CurvePhase.COMPLETE:
        raise CurveComplete("bonding curve is already complete")


def threshold_reached(snapshot: ReserveSnapshot) -> bool:
    return snapshot.real_quote_reserves >= snapshot.graduation_threshold


def evaluate(candidate: ReserveSnapshot) -> tuple[ReserveSnapshot, bool]:
    """Return ``(committed_snapshot, completed_this_trade)`` for a post-apply candidate."""
    if candidate.is_complete or not threshold_reached(candidate):
        return candidate, False

    logger.info(
        "curve complete: real_quote_reserves=%d graduation_threshold=%d",
        candidate.real_quote_reserves,
        candidate.graduation_threshold,
    )
    return replace(candidate, is_complete=True), True


def migration_handoff(snapshot: ReserveSnapshot) -> MigrationHandoff:
    if not snapshot.is_complete:
        raise CurveNotComplete("migration handoff requires a completed curve")
    return MigrationHandoff(
        real_base_reserves=snapshot.real_base_reserves,
        real_quote_reserves=snapshot.real_quote_reserves,
        circulating_supply=snapshot.circulating_supply,
        total_supply=snapshot.total_supply,
    )
