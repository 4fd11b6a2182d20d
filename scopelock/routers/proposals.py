import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from scopelock.config import settings
from scopelock.database import get_db
from scopelock.exceptions import ScopeLockError, UpstreamError
from scopelock.models.proposal import Proposal
from scopelock.models.user import User
from scopelock.schemas.proposal import (
    ProposalGenerateRequest,
    ProposalGenerateResponse,
    ProposalResponse,
    ProposalListResponse,
    UsageResponse,
)
from scopelock.services import lifecycle
from scopelock.services.auth import get_current_user
from scopelock.services.composer import ProposalDraftInput, compose_proposal
from scopelock.services.llm import get_llm
from scopelock.services.quota import check_creation_allowed, usage_summary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Proposals"])


def _to_response(proposal: Proposal) -> ProposalResponse:
    response = ProposalResponse.model_validate(proposal)
    return response.model_copy(update={"share_url": settings.share_url(proposal.signing_token)})


@router.post("/generate-proposal", response_model=ProposalGenerateResponse)
def generate_proposal(
    request: ProposalGenerateRequest,
    db: Session = Depends(get_db),
    llm=Depends(get_llm),
    current_user: User = Depends(get_current_user),
):
    """
    Draft a proposal with the LLM and store it as a draft.

    The quota and field checks run before the LLM is contacted.
    """
    check_creation_allowed(db, current_user, settings.FREE_PLAN_MONTHLY_LIMIT)

    draft = ProposalDraftInput.from_fields(
        request.model_dump(),
        freelancer_name=current_user.full_name,
        freelancer_email=current_user.email,
    )

    try:
        content = compose_proposal(
            llm,
            draft,
            max_tokens=settings.PROPOSAL_MAX_TOKENS,
            temperature=settings.LLM_TEMPERATURE,
        )
        proposal = lifecycle.create_proposal(db, current_user.id, draft, content)
    except ScopeLockError:
        raise
    except Exception as e:
        db.rollback()
        logger.error("Generate proposal failed: %s: %s", type(e).__name__, e, exc_info=True)
        raise UpstreamError()

    return ProposalGenerateResponse(
        id=proposal.id,
        proposal=proposal.proposal_content,
        signing_token=proposal.signing_token,
        share_url=settings.share_url(proposal.signing_token),
    )


@router.get("/proposals", response_model=ProposalListResponse)
def list_proposals(
    status: str | None = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List the caller's proposals, newest first."""
    proposals = lifecycle.list_proposals(db, current_user.id, status=status)
    return ProposalListResponse(proposals=[_to_response(p) for p in proposals], total=len(proposals))


@router.get("/proposals/usage", response_model=UsageResponse)
def get_usage(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Proposals created this month against the plan's cap."""
    return UsageResponse(**usage_summary(db, current_user, settings.FREE_PLAN_MONTHLY_LIMIT))


@router.get("/proposals/{proposal_id}", response_model=ProposalResponse)
def get_proposal(
    proposal_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    proposal = lifecycle.get_owned_proposal(db, proposal_id, current_user.id)
    return _to_response(proposal)


@router.post("/proposals/{proposal_id}/send", response_model=ProposalResponse)
def send_proposal(
    proposal_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Mark a draft as sent to the client."""
    proposal = lifecycle.get_owned_proposal(db, proposal_id, current_user.id)
    return _to_response(lifecycle.mark_sent(db, proposal))


@router.post("/proposals/{proposal_id}/revisions", response_model=ProposalResponse)
def log_revision(
    proposal_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Record one revision round. Going past the limit only flips revision_limit_reached."""
    proposal = lifecycle.get_owned_proposal(db, proposal_id, current_user.id)
    return _to_response(lifecycle.log_revision(db, proposal))
