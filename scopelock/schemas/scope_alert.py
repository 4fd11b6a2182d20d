from pydantic import BaseModel
from typing import Optional

from scopelock.schemas.proposal import REQUEST_CONFIG


class ScopeAlertRequest(BaseModel):
    client_request: Optional[str] = None
    original_deliverables: Optional[str] = None
    price: Optional[str | float] = None
    revision_limit: Optional[int | str] = None
    revisions_used: Optional[int | str] = None
    proposal_id: Optional[str] = None

    model_config = REQUEST_CONFIG


class ScopeAlertResponse(BaseModel):
    email: str
