"""Draft Composer unit tests: derived values, category table, prompts, fallbacks."""

from datetime import date

import pytest

from scopelock.exceptions import InputValidationError
from scopelock.services.composer import (
    EXCLUSIONS,
    PROPOSAL_FALLBACK,
    SCOPE_ALERT_FALLBACK,
    ProjectCategory,
    ProposalDraftInput,
    ScopeAlertInput,
    build_proposal_prompt,
    build_scope_alert_prompt,
    compose_proposal,
    compose_scope_alert,
    overage_hourly_rate,
    parse_price,
    parse_revision_limit,
    project_value,
    validate_required,
)


def _fields(**overrides):
    fields = {
        "client_name": "Acme Corp",
        "title": "Marketing site",
        "project_type": "Web Design",
        "deliverables": "5 page website",
        "price": "$2,000",
        "timeline": "4 weeks",
        "revision_limit": "3",
        "payment_terms": "50% upfront",
        "client_email": "owner@acme.test",
    }
    fields.update(overrides)
    return fields


class TestValidateRequired:
    @pytest.mark.parametrize("field", ["client_name", "title", "project_type", "deliverables", "price"])
    def test_missing_required_field_is_rejected(self, field):
        with pytest.raises(InputValidationError) as exc_info:
            validate_required(_fields(**{field: None}))
        assert exc_info.value.error_code == "missing_fields"
        assert exc_info.value.details == {"missing": [field]}

    def test_whitespace_counts_as_empty(self):
        with pytest.raises(InputValidationError):
            validate_required(_fields(title="   "))

    def test_optional_fields_may_be_empty(self):
        validate_required(_fields(timeline="", payment_terms=None, client_email=None))

    def test_lists_every_missing_field(self):
        with pytest.raises(InputValidationError) as exc_info:
            validate_required({})
        assert exc_info.value.details["missing"] == [
            "client_name", "title", "project_type", "deliverables", "price",
        ]


class TestRevisionLimit:
    @pytest.mark.parametrize("value, expected", [
        ("3", 3),
        (5, 5),
        ("4 rounds", 4),
        (" 1", 1),
        (None, 2),
        ("", 2),
        ("unlimited", 2),
        ("0", 2),
    ])
    def test_parse(self, value, expected):
        assert parse_revision_limit(value) == expected


class TestPrice:
    def test_project_value_strips_non_digits(self):
        assert project_value("$2,000") == 2000

    def test_project_value_defaults_to_zero(self):
        assert project_value("call me") == 0
        assert project_value(None) == 0

    def test_overage_rate_is_one_twentieth(self):
        assert overage_hourly_rate("$2,000") == 100

    def test_overage_rate_rounds_half_up(self):
        assert overage_hourly_rate("$2,030") == 102

    def test_overage_rate_falls_back_to_75(self):
        assert overage_hourly_rate("TBD") == 75
        assert overage_hourly_rate("$5") == 75

    @pytest.mark.parametrize("value, expected", [
        ("$2,000", 2000.0),
        ("$1,500.50", 1500.5),
        ("USD 750", 750.0),
        ("free", 0.0),
        (None, 0.0),
    ])
    def test_parse_price(self, value, expected):
        assert parse_price(value) == expected


class TestProjectCategory:
    def test_exact_label_match(self):
        assert ProjectCategory.from_label("Mobile App") is ProjectCategory.MOBILE_APP

    def test_unknown_label_falls_back_to_web_design(self):
        assert ProjectCategory.from_label("Podcast Editing") is ProjectCategory.WEB_DESIGN
        assert ProjectCategory.from_label(None) is ProjectCategory.WEB_DESIGN

    def test_match_is_case_sensitive(self):
        assert ProjectCategory.from_label("seo") is ProjectCategory.WEB_DESIGN

    def test_every_category_has_six_exclusions(self):
        assert set(EXCLUSIONS) == set(ProjectCategory)
        assert all(len(items) == 6 for items in EXCLUSIONS.values())


class TestProposalPrompt:
    def test_web_design_prompt_embeds_derived_values(self):
        draft = ProposalDraftInput.from_fields(_fields(), freelancer_name="Ada", freelancer_email="ada@x.test")
        prompt = build_proposal_prompt(draft, today=date(2026, 10, 19))

        assert "1. Content writing or copywriting" in prompt
        assert "6. Social media graphics" in prompt
        assert "$100/hour" in prompt
        assert "Revision 4 and beyond" in prompt
        assert "Prepared by: Ada" in prompt
        assert "Date: October 19, 2026" in prompt

    def test_unknown_category_uses_web_design_exclusions_but_keeps_label(self):
        draft = ProposalDraftInput.from_fields(_fields(project_type="Podcast Editing"))
        prompt = build_proposal_prompt(draft)

        assert "Type: Podcast Editing" in prompt
        for item in EXCLUSIONS[ProjectCategory.WEB_DESIGN]:
            assert item in prompt

    def test_category_specific_exclusions(self):
        draft = ProposalDraftInput.from_fields(_fields(project_type="SEO"))
        prompt = build_proposal_prompt(draft)

        assert "Guaranteed ranking results" in prompt
        assert "Stock photo licensing fees" not in prompt

    def test_freelancer_name_defaults(self):
        draft = ProposalDraftInput.from_fields(_fields(), freelancer_name=None)
        assert draft.freelancer_name == "Freelancer"

    def test_prompt_is_deterministic(self):
        draft = ProposalDraftInput.from_fields(_fields())
        day = date(2026, 1, 2)
        assert build_proposal_prompt(draft, today=day) == build_proposal_prompt(draft, today=day)


class TestComposeProposal:
    def test_returns_generated_text_verbatim(self, fake_llm):
        fake_llm.reply = "  PROJECT PROPOSAL\n**bold** text  "
        draft = ProposalDraftInput.from_fields(_fields())

        assert compose_proposal(fake_llm, draft) == "  PROJECT PROPOSAL\n**bold** text  "

    def test_passes_generation_limits(self, fake_llm):
        draft = ProposalDraftInput.from_fields(_fields())
        compose_proposal(fake_llm, draft, max_tokens=3000, temperature=0.7)

        call = fake_llm.calls[0]
        assert call["max_tokens"] == 3000
        assert call["temperature"] == 0.7

    def test_empty_reply_uses_fallback(self, fake_llm):
        fake_llm.reply = ""
        draft = ProposalDraftInput.from_fields(_fields())

        assert compose_proposal(fake_llm, draft) == PROPOSAL_FALLBACK

    def test_llm_errors_propagate(self, fake_llm):
        fake_llm.reply = RuntimeError("provider down")
        draft = ProposalDraftInput.from_fields(_fields())

        with pytest.raises(RuntimeError):
            compose_proposal(fake_llm, draft)
        assert len(fake_llm.calls) == 1


class TestScopeAlert:
    def test_client_request_is_required(self):
        with pytest.raises(InputValidationError) as exc_info:
            ScopeAlertInput(client_request="  ")
        assert exc_info.value.details == {"missing": ["client_request"]}

    def test_prompt_embeds_project_numbers(self):
        alert = ScopeAlertInput(
            client_request="Can you also add a blog?",
            original_deliverables="5 page website",
            price="$2,000",
            revision_limit=2,
            revisions_used=3,
        )
        prompt = build_scope_alert_prompt(alert)

        assert "Client's new request: Can you also add a blog?" in prompt
        assert "Original price: $2,000" in prompt
        assert "Revisions used: 3" in prompt

    def test_missing_numbers_render_empty(self):
        prompt = build_scope_alert_prompt(ScopeAlertInput(client_request="Add a blog", revisions_used=None))
        assert "Revisions used: \n" in prompt

    def test_compose_uses_fallback_on_empty_reply(self, fake_llm):
        fake_llm.reply = None
        email = compose_scope_alert(fake_llm, ScopeAlertInput(client_request="Add a blog"), max_tokens=500)

        assert email == SCOPE_ALERT_FALLBACK
        assert fake_llm.calls[0]["max_tokens"] == 500

    def test_whole_number_price_renders_without_decimals(self):
        prompt = build_scope_alert_prompt(ScopeAlertInput(client_request="Add a blog", price=2000.0))
        assert "Original price: 2000\n" in prompt

    def test_fractional_price_is_kept(self):
        prompt = build_scope_alert_prompt(ScopeAlertInput(client_request="Add a blog", price=1500.5))
        assert "Original price: 1500.5\n" in prompt
