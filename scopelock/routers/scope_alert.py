import logging
from dataclasses import replace
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from scopelock.config import settings
from scopelock.database import get_db
from scopelock.exceptions import ScopeLockError, UpstreamError
from scopelock.models.user import User
from scopelock.schemas.scope_alert import ScopeAlertRequest, ScopeAlertResponse
from scopelock.services import lifecycle
from scopelock.services.auth import get_current_user
from scopelock.services.composer import ScopeAlertInput, compose_scope_alert
from scopelock.services.llm import get_llm

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Scope alerts"])


@router.post("/scope-alert", response_model=ScopeAlertResponse)
def scope_alert(
    request: ScopeAlertRequest,
    db: Session = Depends(get_db),
    llm=Depends(get_llm),
    current_user: User = Depends(get_current_user),
):
    """
    Draft a reply to a client request that falls outside the agreed scope.

    With proposal_id, the project's own deliverables, price and revision
    numbers fill any field the request leaves out.
    """
    alert = ScopeAlertInput(**request.model_dump(exclude={"proposal_id"}))
    if request.proposal_id:
        proposal = lifecycle.get_owned_proposal(db, request.proposal_id, current_user.id)
        defaults = {
            "original_deliverables": proposal.deliverables,
            "price": proposal.price,
            "revision_limit": proposal.revision_limit,
            "revisions_used": proposal.revisions_used,
        }
        missing = {key: value for key, value in defaults.items() if getattr(alert, key) in (None, "")}
        alert = replace(alert, **missing)

    try:
        email = compose_scope_alert(
            llm,
            alert,
            max_tokens=settings.SCOPE_ALERT_MAX_TOKENS,
            temperature=settings.LLM_TEMPERATURE,
        )
    except ScopeLockError:
        raise
    except Exception as e:
        logger.error("Scope alert failed: %s: %s", type(e).__name__, e, exc_info=True)
        raise UpstreamError()

    return ScopeAlertResponse(email=email)
