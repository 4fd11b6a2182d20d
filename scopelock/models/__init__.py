from scopelock.models.user import User
from scopelock.models.proposal import Proposal

__all__ = [
    "User",
    "Proposal",
]
