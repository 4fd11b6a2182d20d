"""
Draft Composer
==============
Turns a structured project description into a prompt, asks the LLM for the
document and hands the text back untouched. Persistence is the caller's job.
"""

import logging
import math
import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

from scopelock.exceptions import InputValidationError
from scopelock.services.prompts import PROPOSAL_PROMPT, SCOPE_ALERT_PROMPT

logger = logging.getLogger(__name__)

DEFAULT_REVISION_LIMIT = 2
DEFAULT_OVERAGE_RATE = 75
OVERAGE_DIVISOR = 20

PROPOSAL_FALLBACK = "Failed to generate proposal."
SCOPE_ALERT_FALLBACK = "Failed to generate response."

REQUIRED_PROPOSAL_FIELDS = ("client_name", "title", "project_type", "deliverables", "price")

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")
_LEADING_DECIMAL_RE = re.compile(r"\d*\.?\d+")


class ProjectCategory(str, Enum):
    WEB_DESIGN = "Web Design"
    WEB_DEVELOPMENT = "Web Development"
    MOBILE_APP = "Mobile App"
    COPYWRITING = "Copywriting"
    GRAPHIC_DESIGN = "Graphic Design"
    SEO = "SEO"
    VIDEO_EDITING = "Video Editing"
    SOCIAL_MEDIA = "Social Media"

    @classmethod
    def from_label(cls, label: Optional[str]) -> "ProjectCategory":
        """Exact match on the display label; anything else is Web Design."""
        try:
            return cls(label)
        except ValueError:
            return cls.WEB_DESIGN

    @property
    def exclusions(self) -> List[str]:
        return EXCLUSIONS[self]


EXCLUSIONS: Dict[ProjectCategory, List[str]] = {
    ProjectCategory.WEB_DESIGN: [
        "Content writing or copywriting",
        "Stock photo licensing fees",
        "Domain registration or hosting fees",
        "Third-party plugin licenses",
        "Post-launch bug fixes after 14 days",
        "Social media graphics",
    ],
    ProjectCategory.WEB_DEVELOPMENT: [
        "UI/UX design unless specified",
        "Content population into CMS",
        "Third-party API costs or licenses",
        "Server setup beyond basic deployment",
        "Ongoing maintenance after delivery",
        "Browser testing beyond Chrome/Firefox/Safari",
    ],
    ProjectCategory.MOBILE_APP: [
        "App Store/Play Store submission fees",
        "Backend/API development unless specified",
        "UI/UX design unless specified",
        "Push notification service costs",
        "Third-party SDK licenses",
        "Post-launch updates or new features",
    ],
    ProjectCategory.COPYWRITING: [
        "Design or visual layout work",
        "SEO keyword research",
        "Translation to other languages",
        "Printing or production costs",
        "Distribution or publishing",
        "Social media management",
    ],
    ProjectCategory.GRAPHIC_DESIGN: [
        "Copywriting or text content",
        "Stock image licensing",
        "Printing or production costs",
        "Animation or motion graphics",
        "Website implementation",
        "Social media management",
    ],
    ProjectCategory.SEO: [
        "Content writing unless specified",
        "Paid advertising management",
        "Website development changes",
        "Link building outreach",
        "Social media management",
        "Guaranteed ranking results",
    ],
    ProjectCategory.VIDEO_EDITING: [
        "Original footage filming",
        "Script writing or voiceover",
        "Music licensing fees",
        "Motion graphics unless specified",
        "Color grading unless specified",
        "Distribution or publishing",
    ],
    ProjectCategory.SOCIAL_MEDIA: [
        "Paid advertising budget",
        "Content photography or videography",
        "Website updates or changes",
        "Customer service or DM responses",
        "Influencer outreach or fees",
        "Guaranteed follower growth",
    ],
}


# ── Derived values ──────────────────────────────────────────────────────

def _is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def _clean(value: Any) -> str:
    return "" if value is None else str(value).strip()


def validate_required(fields: Dict[str, Any], required=REQUIRED_PROPOSAL_FIELDS) -> None:
    """Raise InputValidationError naming every required field that is empty."""
    missing = [name for name in required if _is_blank(fields.get(name))]
    if missing:
        raise InputValidationError("Missing required fields", details={"missing": missing})


def parse_revision_limit(value: Any) -> int:
    """Leading integer of the value; 0 or anything unparsable means the default of 2."""
    if value is None:
        return DEFAULT_REVISION_LIMIT
    match = _LEADING_INT_RE.match(str(value))
    if not match:
        return DEFAULT_REVISION_LIMIT
    return int(match.group(1)) or DEFAULT_REVISION_LIMIT


def project_value(price: Any) -> int:
    """Whole-number project value: every non-digit character stripped."""
    digits = re.sub(r"\D", "", str(price or ""))
    return int(digits) if digits else 0


def overage_hourly_rate(price: Any) -> int:
    # half-up rounding, so 2030 / 20 = 101.5 → 102
    rate = math.floor(project_value(price) / OVERAGE_DIVISOR + 0.5)
    return rate or DEFAULT_OVERAGE_RATE


def parse_price(price: Any) -> float:
    """Stored decimal price, e.g. "$2,000" → 2000.0 and "$1,500.50" → 1500.5."""
    cleaned = re.sub(r"[^0-9.]", "", str(price or ""))
    match = _LEADING_DECIMAL_RE.match(cleaned)
    return float(match.group(0)) if match else 0.0


# ── Proposal drafts ─────────────────────────────────────────────────────

@dataclass
class ProposalDraftInput:
    client_name: str
    title: str
    project_type: str
    deliverables: str
    price: str
    timeline: str = ""
    revision_limit: Any = None
    payment_terms: str = ""
    client_email: str = ""
    freelancer_name: str = "Freelancer"
    freelancer_email: str = ""

    @classmethod
    def from_fields(cls, fields: Dict[str, Any], freelancer_name: Optional[str] = None,
                    freelancer_email: Optional[str] = None) -> "ProposalDraftInput":
        """Validate raw request fields and build the input; no external calls."""
        validate_required(fields)
        return cls(
            client_name=_clean(fields["client_name"]),
            title=_clean(fields["title"]),
            project_type=_clean(fields["project_type"]),
            deliverables=_clean(fields["deliverables"]),
            price=_clean(fields["price"]),
            timeline=_clean(fields.get("timeline")),
            revision_limit=fields.get("revision_limit"),
            payment_terms=_clean(fields.get("payment_terms")),
            client_email=_clean(fields.get("client_email")),
            freelancer_name=freelancer_name or "Freelancer",
            freelancer_email=freelancer_email or "",
        )

    @property
    def category(self) -> ProjectCategory:
        return ProjectCategory.from_label(self.project_type)

    @property
    def revision_limit_value(self) -> int:
        return parse_revision_limit(self.revision_limit)

    @property
    def overage_rate(self) -> int:
        return overage_hourly_rate(self.price)

    @property
    def numeric_price(self) -> float:
        return parse_price(self.price)


def build_proposal_prompt(draft: ProposalDraftInput, today: Optional[date] = None) -> str:
    today = today or date.today()
    exclusions = "\n".join(f"{i}. {item}" for i, item in enumerate(draft.category.exclusions, 1))
    revision_limit = draft.revision_limit_value
    return PROPOSAL_PROMPT.format(
        freelancer_name=draft.freelancer_name,
        freelancer_email=draft.freelancer_email,
        client_name=draft.client_name,
        title=draft.title,
        project_type=draft.project_type,
        deliverables=draft.deliverables,
        timeline=draft.timeline,
        price=draft.price,
        revision_limit=revision_limit,
        payment_terms=draft.payment_terms,
        date=today.strftime("%B %d, %Y"),
        exclusions=exclusions,
        first_billable_revision=revision_limit + 1,
        overage_rate=draft.overage_rate,
    )


def compose_proposal(llm, draft: ProposalDraftInput, max_tokens: int = 3000,
                     temperature: float = 0.7, today: Optional[date] = None) -> str:
    """Generate the proposal document text for a validated draft."""
    logger.info(
        "Composing proposal '%s' (category=%s, overage=$%d/h)",
        draft.title, draft.category.value, draft.overage_rate,
    )
    prompt = build_proposal_prompt(draft, today=today)
    content = llm.complete(prompt, max_tokens=max_tokens, temperature=temperature)
    if not content:
        logger.warning("LLM returned no content for proposal '%s'", draft.title)
        return PROPOSAL_FALLBACK
    return content


# ── Scope alerts ────────────────────────────────────────────────────────

@dataclass
class ScopeAlertInput:
    client_request: str
    original_deliverables: str = ""
    price: Any = ""
    revision_limit: Any = ""
    revisions_used: Any = ""

    def __post_init__(self):
        if _is_blank(self.client_request):
            raise InputValidationError(
                "Client request is required",
                details={"missing": ["client_request"]},
            )


def build_scope_alert_prompt(alert: ScopeAlertInput) -> str:
    def text(value):
        if value is None:
            return ""
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)

    return SCOPE_ALERT_PROMPT.format(
        original_deliverables=text(alert.original_deliverables),
        price=text(alert.price),
        revision_limit=text(alert.revision_limit),
        revisions_used=text(alert.revisions_used),
        client_request=alert.client_request.strip(),
    )


def compose_scope_alert(llm, alert: ScopeAlertInput, max_tokens: int = 500,
                        temperature: float = 0.7) -> str:
    """Draft the out-of-scope reply email."""
    prompt = build_scope_alert_prompt(alert)
    content = llm.complete(prompt, max_tokens=max_tokens, temperature=temperature)
    return content or SCOPE_ALERT_FALLBACK
