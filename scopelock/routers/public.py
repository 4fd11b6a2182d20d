"""Token-gated endpoints used by the client's signing page. No user session."""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from scopelock.database import get_db
from scopelock.schemas.proposal import PublicProposal, PublicProposalResponse, SignRequest
from scopelock.services import lifecycle

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/proposal", tags=["Public signing"])


@router.get("/{token}", response_model=PublicProposalResponse)
def get_public_proposal(token: str, db: Session = Depends(get_db)):
    proposal = lifecycle.get_by_token(db, token)
    return PublicProposalResponse(project=PublicProposal.model_validate(proposal))


@router.post("/{token}")
def sign_proposal(token: str, body: SignRequest, db: Session = Depends(get_db)):
    lifecycle.sign(db, token, body.client_signature)
    return {"success": True}
