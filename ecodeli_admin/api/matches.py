"""
Match endpoints — list matches and apply admin status/price updates.

Status changes go through Match.transition_to, so an illegal move
(including any write out of CONFIRMED, REJECTED or CANCELLED) is
answered with 409 and leaves the row untouched.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ecodeli_admin.core.errors import InvalidTransitionError, NotFoundError
from ecodeli_admin.database import get_db
from ecodeli_admin.models import Match, MatchStatus, Package, Ride
from ecodeli_admin.schemas.delivery import MatchResponse, MatchUpdateRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def _with_parties(query):
    return query.options(
        selectinload(Match.package).selectinload(Package.user),
        selectinload(Match.ride).selectinload(Ride.user),
    )


def parse_status_filter(raw: str | None) -> list[MatchStatus] | None:
    """
    Parse ``status=A,B``; ``all`` or an empty value disables the filter.

    Unknown names raise ValueError.
    """
    if not raw or raw.strip().lower() == "all":
        return None
    return [MatchStatus(part.strip().upper()) for part in raw.split(",") if part.strip()]


@router.get("", response_model=list[MatchResponse])
async def list_matches(
    status_param: str | None = Query(None, alias="status"),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    """List matches newest first, with package, ride and their owners."""
    try:
        statuses = parse_status_filter(status_param)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown match status in '{status_param}'",
        )

    query = _with_parties(select(Match))
    if statuses:
        query = query.where(Match.status.in_(statuses))
    query = query.order_by(Match.created_at.desc()).limit(limit)

    matches = (await db.execute(query)).scalars().all()
    return [MatchResponse.model_validate(m) for m in matches]


@router.put("", response_model=MatchResponse)
async def update_match(payload: MatchUpdateRequest, db: AsyncSession = Depends(get_db)):
    """
    Update a match's status and/or price.

    The status must be a legal move from the current one. Terminal
    matches also refuse price changes.
    """
    result = await db.execute(_with_parties(select(Match)).where(Match.id == payload.id))
    match = result.scalar_one_or_none()
    if match is None:
        raise NotFoundError("Match not found")

    previous = match.status
    if payload.status is not None:
        match.transition_to(payload.status)
    elif payload.price is not None and match.is_terminal:
        raise InvalidTransitionError(match.status.value, match.status.value)

    if payload.price is not None:
        match.price = payload.price
    await db.flush()

    logger.info(
        "Match %s updated: %s -> %s, price=%s",
        match.id, previous.value, match.status.value, match.price,
    )
    return MatchResponse.model_validate(match)

