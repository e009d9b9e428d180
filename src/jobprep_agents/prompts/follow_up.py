"""Follow-up template and polish prompt templates (v1)."""

from __future__ import annotations

FOLLOW_UP_TYPE_DESCRIPTIONS: dict[str, str] = {
    "thank_you": "A professional thank-you email to be sent within 24 hours after the interview",
    "status_inquiry": (
        "A polite follow-up email to inquire about the application status "
        "when no response has been received"
    ),
    "feedback_request": (
        "A professional request for constructive feedback after a rejection "
        "or to improve for future opportunities"
    ),
    "networking": (
        "A warm networking follow-up email to maintain professional "
        "relationships after a rejection"
    ),
}

FOLLOW_UP_TYPE_GUIDANCE: dict[str, str] = {
    "thank_you": """\
- Thanks the interviewer for their time
- References 1-2 specific topics discussed (use placeholders)
- Reinforces interest in the role
- Mentions a key qualification or insight from the conversation""",
    "status_inquiry": """\
- Politely inquires about the hiring timeline
- Reiterates interest in the position
- Offers to provide additional information
- Maintains professionalism without seeming pushy""",
    "feedback_request": """\
- Gracefully acknowledges the outcome
- Requests constructive feedback for professional growth
- Thanks them for the opportunity
- Keeps the door open for future opportunities""",
    "networking": """\
- Thanks them for their time and insights
- Expresses interest in staying connected professionally
- Suggests LinkedIn connection or informational coffee chat
- Maintains a positive, forward-looking tone""",
}

FOLLOW_UP_SYSTEM = """\
You are an expert professional communication writer specializing in \
post-interview follow-ups.

<rules>
- Be professional but warm and authentic
- Keep it concise (200-300 words)
- Include bracketed placeholders like [SPECIFIC_TOPIC_DISCUSSED] for the user \
to personalize; use UPPER_SNAKE_CASE inside the brackets
- Express genuine interest and gratitude
- End with a clear call-to-action or next step
</rules>
"""

FOLLOW_UP_USER = """\
Generate a {follow_up_label} email template.

<interview>
Type: {interview_type}
Date: {interview_date}
Company: {company_name}
Role: {job_title}
Interviewer: {interviewer_name}
Outcome: {outcome}
Notes: {notes}
</interview>

Template Purpose: {purpose}
Additional Context: {custom_context}

Create a template that:
{guidance}
"""

POLISH_SYSTEM = """\
You are an editor. Integrate the user's filled-in details naturally into the \
email, fix grammar and flow, and keep it concise. Do not invent facts. Leave \
any remaining [BRACKETED] tokens exactly as they are.
"""

POLISH_USER = """\
Follow-up type: {follow_up_type}

<subject>
{subject}
</subject>

<content>
{content}
</content>

<details_provided>
{details}
</details_provided>
"""
