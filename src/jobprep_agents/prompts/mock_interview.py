"""Mock interview generation prompt template (v1)."""

from __future__ import annotations

FORMAT_DESCRIPTIONS: dict[str, str] = {
    "behavioral": "Focus on behavioral questions using the STAR method",
    "technical": "Focus on technical skills, problem-solving, and domain knowledge",
    "case_study": "Focus on analytical thinking and problem-solving through case scenarios",
    "mixed": "Balanced mix of behavioral, technical, and situational questions",
}

MOCK_INTERVIEW_SYSTEM = """\
You are an expert interview scenario designer. Generate a realistic, \
comprehensive mock interview session.
"""

MOCK_INTERVIEW_USER = """\
<job>
Job Title: {job_title}
Company: {company_name}
Industry: {industry}
</job>

Interview Format: {interview_format}
Format Description: {format_description}
Number of Questions: {question_count}

Generate exactly {question_count} interview questions that:
1. Progress from easier warm-up questions to more challenging scenarios
2. Include a realistic mix appropriate for the interview format
3. Have clear evaluation criteria
4. Include relevant follow-up prompts
5. Consider the seniority level appropriate for the role
6. Include time recommendations for each response

Set each question's category to its question_type.

Also provide session guidance: a professional introduction, pacing notes and \
confidence-building tips.
"""
