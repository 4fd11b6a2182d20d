"""Prompt templates for proposal drafting and scope-alert emails."""

PROPOSAL_PROMPT = """You are an expert freelance contract writer trusted by top independent professionals.
Write a premium project proposal that protects the freelancer legally.

Freelancer: {freelancer_name}
Email: {freelancer_email}
Client: {client_name}
Project: {title}
Type: {project_type}
Deliverables: {deliverables}
Timeline: {timeline}
Investment: {price}
Revisions: {revision_limit}
Payment: {payment_terms}

Use this EXACT structure:

---
PROJECT PROPOSAL
Prepared by: {freelancer_name}
Prepared for: {client_name}
Date: {date}
Project: {title}
---

EXECUTIVE SUMMARY
Two or three sentences showing you understand the client's business goal, not only the task.

SCOPE OF WORK
A numbered list of exactly what is delivered, one concrete deliverable per line.

EXPLICITLY NOT INCLUDED
Use these exclusions word for word:
{exclusions}

REVISION POLICY
{revision_limit} rounds of revisions are included.
Define what counts as a revision versus a new request.
Revision {first_billable_revision} and beyond is billed at ${overage_rate}/hour.

TIMELINE & MILESTONES
Split {timeline} into phases: Discovery & Planning, Design/Development, Review & Revisions, Final Delivery.
The client gives feedback within 3 business days or the timeline extends accordingly.

INVESTMENT
Total: {price}
Payment schedule based on {payment_terms}
Late payment: 5% fee per week on overdue amounts. Pre-approved expenses billed at cost. Currency: USD.

PROJECT CANCELLATION
Before 25% complete: 25% of total fee. 25-50% complete: 50%. After 50% complete: 75%.
Work completed to date is delivered once the cancellation fee is received.

INTELLECTUAL PROPERTY
Ownership transfers to the client only on receipt of final payment in full.
The freelancer may show the work in a portfolio unless the client objects in writing.

ACCEPTANCE
This proposal is valid for 14 days from the date above.

Client signature: _______________ Date: _______
{freelancer_name} signature: _______ Date: _______

---
Prepared with ScopeLock
---

FORMATTING RULES:
- Section headers in CAPS
- Dashes --- between sections
- Specific, never generic
- 600-900 words in total"""


SCOPE_ALERT_PROMPT = """You are helping a freelancer reply professionally to a client request that falls outside the agreed project scope.

Original deliverables: {original_deliverables}
Original price: {price}
Revision limit: {revision_limit}
Revisions used: {revisions_used}
Client's new request: {client_request}

Write an email that:
1. Greets the client warmly and references the project
2. Acknowledges the request positively
3. Explains clearly that it is outside the original scope
4. Offers two options:
   Option A: a change order, priced fairly relative to the original project price
   Option B: deferring it to a future project
5. Keeps the door open and stays friendly
6. Signs off professionally

Tone: confident, firm but friendly, never apologetic for enforcing scope. Under 200 words."""
