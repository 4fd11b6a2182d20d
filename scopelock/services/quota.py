"""Free-tier gating: a monthly cap on proposal creation for the default plan."""
import logging
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from scopelock.exceptions import QuotaExceededError
from scopelock.models.proposal import Proposal, utcnow
from scopelock.models.user import User, FREE_PLAN

logger = logging.getLogger(__name__)


def start_of_month(now: Optional[datetime] = None) -> datetime:
    now = now or utcnow()
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def count_proposals_this_month(db: Session, user_id: str, now: Optional[datetime] = None) -> int:
    return (
        db.query(Proposal)
        .filter(Proposal.user_id == user_id, Proposal.created_at >= start_of_month(now))
        .count()
    )


def check_creation_allowed(db: Session, user: User, limit: int, now: Optional[datetime] = None) -> None:
    """Refuse creation for free-plan users already at the monthly cap."""
    if (user.plan or FREE_PLAN) != FREE_PLAN:
        return

    used = count_proposals_this_month(db, user.id, now)
    if used >= limit:
        logger.info("Free limit reached for user %s (%d/%d this month)", user.id, used, limit)
        raise QuotaExceededError(details={"used": used, "limit": limit})


def usage_summary(db: Session, user: User, limit: int, now: Optional[datetime] = None) -> dict:
    used = count_proposals_this_month(db, user.id, now)
    plan = user.plan or FREE_PLAN
    if plan != FREE_PLAN:
        return {"plan": plan, "used_this_month": used, "monthly_limit": None, "remaining": None}
    return {
        "plan": plan,
        "used_this_month": used,
        "monthly_limit": limit,
        "remaining": max(limit - used, 0),
    }
