"""
Proposal Lifecycle
==================
Owns the status of a proposal record: draft → sent → signed.

Owners act through their authenticated session. Clients act through the
signing token alone: holding it grants read access to one record and a
single sign transition, nothing else.
"""

import logging
import secrets
from typing import List, Optional
from sqlalchemy.orm import Session
from scopelock.exceptions import (
    AlreadySignedError,
    InputValidationError,
    InvalidTransitionError,
    NotFoundError,
    PermissionDeniedError,
)
from scopelock.models.proposal import (
    Proposal,
    STATUS_DRAFT,
    STATUS_SENT,
    STATUS_SIGNED,
    STATUSES,
    utcnow,
)
from scopelock.services.composer import ProposalDraftInput

logger = logging.getLogger(__name__)


def new_signing_token() -> str:
    return secrets.token_urlsafe(32)


def create_proposal(db: Session, owner_id: str, draft: ProposalDraftInput, content: str) -> Proposal:
    """Persist a freshly generated proposal as a draft."""
    proposal = Proposal(
        user_id=owner_id,
        signing_token=new_signing_token(),
        client_name=draft.client_name,
        client_email=draft.client_email or None,
        title=draft.title,
        project_type=draft.project_type,
        deliverables=draft.deliverables,
        timeline=draft.timeline,
        payment_terms=draft.payment_terms,
        price=draft.numeric_price,
        revision_limit=draft.revision_limit_value,
        revisions_used=0,
        proposal_content=content,
        status=STATUS_DRAFT,
    )
    db.add(proposal)
    db.commit()
    db.refresh(proposal)
    logger.info("Created proposal %s for user %s (price=%.2f)", proposal.id, owner_id, proposal.price)
    return proposal


def list_proposals(db: Session, user_id: str, status: Optional[str] = None) -> List[Proposal]:
    query = db.query(Proposal).filter(Proposal.user_id == user_id)
    if status:
        if status not in STATUSES:
            raise InputValidationError(f"Unknown status '{status}'", error_code="invalid_status")
        query = query.filter(Proposal.status == status)
    return query.order_by(Proposal.created_at.desc()).all()


def get_owned_proposal(db: Session, proposal_id: str, user_id: str) -> Proposal:
    proposal = db.query(Proposal).filter(Proposal.id == proposal_id).first()

    if not proposal:
        raise NotFoundError("Proposal not found")

    if proposal.user_id != user_id:
        raise PermissionDeniedError("Not authorized to access this proposal")

    return proposal


def get_by_token(db: Session, token: str) -> Proposal:
    proposal = None
    if token:
        proposal = db.query(Proposal).filter(Proposal.signing_token == token).first()
    if not proposal:
        raise NotFoundError("Proposal not found")
    return proposal


def mark_sent(db: Session, proposal: Proposal) -> Proposal:
    if proposal.status == STATUS_SIGNED:
        raise InvalidTransitionError("A signed proposal cannot be marked as sent")
    if proposal.status == STATUS_SENT:
        return proposal

    proposal.status = STATUS_SENT
    proposal.sent_at = utcnow()
    db.commit()
    db.refresh(proposal)
    logger.info("Proposal %s marked as sent", proposal.id)
    return proposal


def sign(db: Session, token: str, signer_name: Optional[str]) -> Proposal:
    """Sign a proposal by token. At most one call per record succeeds."""
    name = (signer_name or "").strip()
    if not name:
        raise InputValidationError("Signature is required", error_code="signature_required")

    proposal = get_by_token(db, token)
    if proposal.status == STATUS_SIGNED:
        raise AlreadySignedError()

    # Conditional update: a concurrent signer that got there first leaves zero rows to match
    updated = (
        db.query(Proposal)
        .filter(Proposal.signing_token == token, Proposal.status != STATUS_SIGNED)
        .update(
            {
                Proposal.status: STATUS_SIGNED,
                Proposal.signed_at: utcnow(),
                Proposal.client_signature: name,
                Proposal.updated_at: utcnow(),
            },
            synchronize_session=False,
        )
    )
    db.commit()

    if updated == 0:
        logger.warning("Lost signing race on proposal %s", proposal.id)
        raise AlreadySignedError()

    db.refresh(proposal)
    logger.info("Proposal %s signed by '%s'", proposal.id, name)
    return proposal


def log_revision(db: Session, proposal: Proposal) -> Proposal:
    """Count one more revision round. Never clamped against revision_limit."""
    (
        db.query(Proposal)
        .filter(Proposal.id == proposal.id)
        .update(
            {
                Proposal.revisions_used: Proposal.revisions_used + 1,
                Proposal.updated_at: utcnow(),
            },
            synchronize_session=False,
        )
    )
    db.commit()
    db.refresh(proposal)

    if proposal.revision_limit_reached:
        logger.info(
            "Proposal %s at %d/%d revisions",
            proposal.id, proposal.revisions_used, proposal.revision_limit,
        )
    return proposal
