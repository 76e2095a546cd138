"""
AI prompt templates for the digestive report narrative.

All prompts follow medical ethics guidelines:
- Use qualified language ("may be associated with", not "causes")
- Never diagnose conditions
- Recommend professional consultation
- Acknowledge limitations
"""
from typing import Sequence

# =============================================================================
# DIGESTIVE REPORT NARRATIVE
# =============================================================================

DIGESTIVE_NARRATIVE_SYSTEM_PROMPT = """You analyze a person's self-reported digestive logs together with a pre-computed scoring summary.

TASK: Write a short narrative for the user covering:
- Patterns across days (stool consistency, bloating, pain, reflux, stress, sleep)
- Top suspected triggers from the scoring summary
- Foods that look safe so far
- Practical, low-risk recommendations
- The overall trend over the period

GUIDELINES:
- Respond in Spanish
- Be concise, use short paragraphs or bullet points, emojis are welcome
- Use qualified language: "may be associated with", never "causes"
- The scoring is a simple before/after and window average, not a statistical test
- Never diagnose a medical condition

End with a one-line educational disclaimer recommending a healthcare professional for persistent symptoms."""


def _value(value, missing: str = "?") -> str:
    if value is None:
        return missing
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_log_lines(logs: Sequence) -> str:
    """One line per log: date, time and the recorded symptom fields."""
    lines = []
    for log in logs:
        time_part = log.log_time.strftime("%H:%M") if log.log_time else ""
        lines.append(
            f"{log.log_date.isoformat()} {time_part}: "
            f"Bristol={_value(log.bristol)}, Bloating={_value(log.bloating)}, "
            f"Gas={_value(log.gas)}, Pain={_value(log.pain)}, "
            f"Reflux={_value(log.reflux)}, Stress={_value(log.stress)}, "
            f"Sleep={_value(log.sleep_hours)}h"
        )
    return "\n".join(lines)


def format_scoring_context(report, limit: int = 5) -> str:
    """Top suspects with their scores and the top safe foods."""
    suspects = ", ".join(
        f"{s.identity}(score:{s.avg_score})" for s in report.top_suspects[:limit]
    )
    safe = ", ".join(s.identity for s in report.safe_foods[:limit])
    return f"Top suspects: {suspects or 'none'}. Safe: {safe or 'none'}"


def build_narrative_user_message(logs: Sequence, report) -> str:
    return (
        f"Logs:\n{format_log_lines(logs)}\n\n"
        f"Scoring summary ({report.period}):\n{format_scoring_context(report)}"
    )
