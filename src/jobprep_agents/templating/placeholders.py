"""Bracket-token placeholder extraction, filling and AI-polished finalize."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import TYPE_CHECKING

import structlog

from jobprep_core.constants import TEXTAREA_LABEL_HINTS
from jobprep_core.models.follow_up import Placeholder, PlaceholderKind, PolishedMessage

if TYPE_CHECKING:
    from jobprep_core.interfaces.polisher import MessagePolisher

logger = structlog.get_logger()

_TOKEN_RE = re.compile(r"\[[^\]]+\]")


def _label_for(token: str) -> str:
    """[SPECIFIC_TOPIC] -> 'Specific Topic'."""
    inner = token.strip("[]")
    return " ".join(word.capitalize() for word in inner.split("_"))


def _kind_for(label: str) -> PlaceholderKind:
    lowered = label.lower()
    if any(hint in lowered for hint in TEXTAREA_LABEL_HINTS):
        return "textarea"
    return "text"


def extract_placeholders(*texts: str) -> list[Placeholder]:
    """Return unique bracket tokens across texts, in first-seen order."""
    seen: dict[str, Placeholder] = {}
    for token in _TOKEN_RE.findall("\n".join(texts)):
        if token not in seen:
            label = _label_for(token)
            seen[token] = Placeholder(key=token, label=label, kind=_kind_for(label))
    return list(seen.values())


def fill_placeholders(template: str, values: Mapping[str, str]) -> str:
    """Replace every occurrence of each token with its value.

    A token whose value is missing or blank keeps its literal text so the
    gap stays visible.
    """

    def _replace(match: re.Match[str]) -> str:
        token = match.group(0)
        value = (values.get(token) or "").strip()
        return value or token

    return _TOKEN_RE.sub(_replace, template)


def unfilled_placeholders(template: str, values: Mapping[str, str]) -> list[str]:
    """Tokens in template that have no usable value."""
    return [
        p.key for p in extract_placeholders(template) if not (values.get(p.key) or "").strip()
    ]


async def finalize_message(
    subject: str,
    content: str,
    values: Mapping[str, str],
    follow_up_type: str,
    polisher: MessagePolisher | None = None,
) -> PolishedMessage:
    """Fill placeholders, then optionally polish via AI.

    Templates without placeholders are returned untouched. A failed polish
    falls back to the merged text instead of blocking the save.
    """
    if not extract_placeholders(subject, content):
        return PolishedMessage(subject=subject, content=content)

    merged = PolishedMessage(
        subject=fill_placeholders(subject, values),
        content=fill_placeholders(content, values),
    )
    if polisher is None:
        return merged

    try:
        polished = await polisher.polish(
            merged.subject, merged.content, follow_up_type, dict(values)
        )
    except Exception as e:
        logger.warning("polish_failed_using_merged_text", error=str(e))
        return merged

    logger.info("message_polished", follow_up_type=follow_up_type)
    return polished
