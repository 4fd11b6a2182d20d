from .user import UserCreate, UserResponse, Token
from .proposal import (
    ProposalGenerateRequest,
    ProposalGenerateResponse,
    ProposalResponse,
    ProposalListResponse,
    PublicProposal,
    PublicProposalResponse,
    SignRequest,
    UsageResponse,
)
from .scope_alert import ScopeAlertRequest, ScopeAlertResponse

__all__ = [
    # User schemas
    "UserCreate",
    "UserResponse",
    "Token",
    # Proposal schemas
    "ProposalGenerateRequest",
    "ProposalGenerateResponse",
    "ProposalResponse",
    "ProposalListResponse",
    "PublicProposal",
    "PublicProposalResponse",
    "SignRequest",
    "UsageResponse",
    # Scope alert schemas
    "ScopeAlertRequest",
    "ScopeAlertResponse",
]
