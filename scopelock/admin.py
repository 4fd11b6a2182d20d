"""
SQLAdmin Configuration
======================
Web UI for browsing users and proposals. Moving a user off the free plan
is done here by editing their plan.
Access at: http://localhost:8000/admin (sign in with ADMIN_USERNAME / ADMIN_PASSWORD)
"""

import logging
import secrets

from sqladmin import Admin, ModelView
from sqladmin.authentication import AuthenticationBackend
from starlette.requests import Request

from scopelock.config import settings
from scopelock.models.user import User
from scopelock.models.proposal import Proposal

logger = logging.getLogger(__name__)

SESSION_KEY = "scopelock_admin"


class AdminAuth(AuthenticationBackend):
    """Single operator account taken from settings. An empty password disables sign-in."""

    def __init__(self, secret_key: str, username: str, password: str):
        super().__init__(secret_key=secret_key)
        self.username = username
        self.password = password

    def credentials_match(self, username: str, password: str) -> bool:
        if not self.password:
            return False
        same_user = secrets.compare_digest(username.encode(), self.username.encode())
        same_password = secrets.compare_digest(password.encode(), self.password.encode())
        return same_user and same_password

    async def login(self, request: Request) -> bool:
        form = await request.form()
        username = str(form.get("username") or "")
        if not self.credentials_match(username, str(form.get("password") or "")):
            logger.warning("Rejected admin sign-in for '%s'", username)
            return False
        request.session.update({SESSION_KEY: username})
        logger.info("Admin '%s' signed in", username)
        return True

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        return request.session.get(SESSION_KEY) == self.username and bool(self.password)


class UserAdmin(ModelView, model=User):
    column_list = [User.id, User.email, User.full_name, User.plan, User.is_active, User.created_at]
    column_details_exclude_list = [User.hashed_password]
    column_searchable_list = [User.email, User.full_name]
    column_sortable_list = [User.id, User.email, User.plan, User.created_at]
    form_columns = [User.email, User.full_name, User.plan, User.is_active]
    can_create = False
    can_delete = False
    name = "User"
    name_plural = "Users"
    icon = "fa-solid fa-user"


class ProposalAdmin(ModelView, model=Proposal):
    # Read-only: status and signature only move through the lifecycle endpoints
    column_list = [
        Proposal.id, Proposal.title, Proposal.client_name, Proposal.project_type,
        Proposal.price, Proposal.status, Proposal.revisions_used, Proposal.created_at,
    ]
    column_searchable_list = [Proposal.title, Proposal.client_name]
    column_sortable_list = [Proposal.id, Proposal.title, Proposal.price, Proposal.created_at]
    column_details_exclude_list = [Proposal.signing_token]
    can_create = False
    can_edit = False
    can_delete = False
    name = "Proposal"
    name_plural = "Proposals"
    icon = "fa-solid fa-file-contract"


def setup_admin(app, engine):
    """Mount SQLAdmin on the FastAPI app behind the settings-based login."""
    if not settings.ADMIN_PASSWORD:
        logger.warning("ADMIN_PASSWORD is not set; /admin will refuse every sign-in")

    auth_backend = AdminAuth(
        secret_key=settings.ADMIN_SESSION_SECRET,
        username=settings.ADMIN_USERNAME,
        password=settings.ADMIN_PASSWORD,
    )
    admin = Admin(
        app,
        engine,
        title="ScopeLock Admin",
        base_url="/admin",
        authentication_backend=auth_backend,
    )

    admin.add_view(UserAdmin)
    admin.add_view(ProposalAdmin)

    return admin
