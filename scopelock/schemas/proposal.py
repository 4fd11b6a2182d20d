from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional, List

# Request bodies accept both snake_case and the web client's camelCase keys
REQUEST_CONFIG = {"alias_generator": to_camel, "populate_by_name": True}


class ProposalGenerateRequest(BaseModel):
    # Required fields are checked by the composer so a missing one is a 400, not a 422
    client_name: Optional[str] = None
    client_email: Optional[str] = None
    title: Optional[str] = None
    project_type: Optional[str] = None
    deliverables: Optional[str] = None
    timeline: Optional[str] = None
    price: Optional[str | int | float] = None
    revision_limit: Optional[int | str] = None
    payment_terms: Optional[str] = None

    model_config = REQUEST_CONFIG


class ProposalGenerateResponse(BaseModel):
    id: str
    proposal: str
    signing_token: str
    share_url: str


class ProposalResponse(BaseModel):
    id: str
    title: str
    client_name: str
    client_email: Optional[str] = None
    project_type: str
    deliverables: str
    timeline: Optional[str] = None
    price: float
    revision_limit: int
    revisions_used: int
    revision_limit_reached: bool
    payment_terms: Optional[str] = None
    proposal_content: str
    status: str
    signing_token: str
    share_url: Optional[str] = None
    client_signature: Optional[str] = None
    signed_at: Optional[datetime] = None
    sent_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProposalListResponse(BaseModel):
    proposals: List[ProposalResponse]
    total: int


class PublicProposal(BaseModel):
    """Fields visible to whoever holds the signing token."""

    id: str
    title: str
    client_name: str
    project_type: str
    deliverables: str
    timeline: Optional[str] = None
    price: float
    revision_limit: int
    payment_terms: Optional[str] = None
    proposal_content: str
    status: str
    created_at: datetime
    signed_at: Optional[datetime] = None
    client_signature: Optional[str] = None

    model_config = {"from_attributes": True}


class PublicProposalResponse(BaseModel):
    project: PublicProposal


class SignRequest(BaseModel):
    client_signature: Optional[str] = None

    model_config = REQUEST_CONFIG


class UsageResponse(BaseModel):
    plan: str
    used_this_month: int
    monthly_limit: Optional[int] = None
    remaining: Optional[int] = None
