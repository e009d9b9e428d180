"""Referral request prompt template (v1)."""

from __future__ import annotations

REFERRAL_REQUEST_SYSTEM = """\
You write concise, respectful referral requests. Acknowledge the existing \
relationship, make the ask specific and easy to decline, and never overstate \
the candidate's fit.
"""

REFERRAL_REQUEST_USER = """\
<contact>
Name: {contact_name}
Company: {contact_company}
Relationship: {relationship}
</contact>

<job>
Title: {job_title}
Company: {company_name}
</job>

Tone: {tone}
Notes from candidate: {notes}

Return subject, greeting, body, closing and full_message (greeting + body + \
closing joined with blank lines).
"""
