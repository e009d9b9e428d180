"""Interview success narrative prompt template (v1)."""

from __future__ import annotations

SUCCESS_PREDICTION_SYSTEM = """\
You are an expert interview coach and data analyst. You receive preparation \
data with scores that have ALREADY been calculated. Never recalculate or \
contradict the scores; explain them and recommend specific, actionable next steps.
"""

SUCCESS_PREDICTION_USER = """\
<interview>
Type: {interview_type}
Date: {interview_date}
</interview>

<historical_performance>
Total Past Interviews: {history_count}
Historical Success Rate: {historical_success_rate:.1f}%
Recent Success Rate (last 5): {recent_success_rate:.1f}%
Performance Trend: {performance_trend}
</historical_performance>

<calculated_scores>
Overall Probability: {overall_probability}%
Confidence Level: {confidence_level}
Preparation Score: {preparation_score}%
Role Match Score: {role_match_score}%
Company Research Score: {company_research_score}%
Practice Hours Score: {practice_hours_score}%
</calculated_scores>

<preparation_tasks completed="{completed_tasks}" total="{total_tasks}">
{task_lines}
</preparation_tasks>

<practice>
Mock Sessions: {mock_interview_count}
Practice Hours: {practice_hours:.1f}
Questions Practiced: {question_count}
</practice>

Provide ONLY:
- improvement_recommendations: 3-5 specific, actionable recommendations
- prioritized_actions: top 3-5 immediate actions
- strength_areas: 2-4 things the candidate is doing well
- weakness_areas: 2-4 areas needing improvement
- predicted_outcome: "likely", "possible" or "uncertain"

Focus on incomplete tasks, low scores, and the historical pattern \
(encourage when improving, address it when declining).
"""
