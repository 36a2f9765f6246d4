"""Utility to extract a JSON object from LLM responses."""

from __future__ import annotations

import json
import logging
import re

from ats_resume.errors import GenerationRefusalError, ResponseFormatError

logger = logging.getLogger(__name__)

REFUSAL_PREFIXES = ("i'm sorry", "i cannot", "i apologize")

_FENCE_PATTERN = re.compile(r"```(?:json|javascript|js|python)?[ \t]*\n?", re.IGNORECASE)
_PREAMBLE_PATTERN = re.compile(r"^(?:here is|here's|this is|the json is):?\s*", re.IGNORECASE)
_TRAILING_COMMA_PATTERN = re.compile(r",(\s*[}\]])")
# A quoted word followed by a colon looks like a key, but a real key is
# always followed by a JSON value. When no value follows, the quotes are
# embedded in a string and need escaping.
_EMBEDDED_KEY_QUOTE_PATTERN = re.compile(
    r'(?<!\\)"([^"\n{}\[\],:]*)":(?!\s*(?:["{\[]|-?\d|true\b|false\b|null\b))'
)


def extract_json(text: str) -> dict:
    """Extract a JSON object from an LLM response.

    Steps, in order:
    1. Reject refusals ("I'm sorry", "I cannot", "I apologize")
    2. Strip fenced code block markers
    3. Strip a leading preamble ("Here is:", "The JSON is", ...)
    4. Slice from the first '{' to the last '}'
    5. Parse; on failure repair once and parse again
    """
    content = text.strip()
    check_refusal(content)
    content = strip_code_fences(content)
    content = strip_preamble(content)
    content = slice_json_object(content)

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        logger.error(
            "JSON parse error: %s (length %d)\nFirst 1000 chars: %s\nLast 500 chars: %s",
            exc.msg,
            len(content),
            content[:1000],
            content[-500:],
        )
        data = _parse_repaired(content, exc)

    return data


def check_refusal(text: str) -> None:
    """Raise if the model declined instead of answering."""
    lowered = text.strip().lower()
    if lowered.startswith(REFUSAL_PREFIXES):
        logger.error("AI is apologizing instead of returning JSON: %s", text[:200])
        raise GenerationRefusalError(f"Model refused: {text[:200]}")


def strip_code_fences(text: str) -> str:
    """Remove markdown code fence markers (```json, ```, ...) anywhere in text."""
    return _FENCE_PATTERN.sub("", text).strip()


def strip_preamble(text: str) -> str:
    """Remove a conversational lead-in such as "Here is the JSON:"."""
    return _PREAMBLE_PATTERN.sub("", text, count=1)


def slice_json_object(text: str) -> str:
    """Return the span from the first '{' to the last '}'."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        logger.error("No JSON object found in response")
        raise ResponseFormatError("No JSON object found", content=text)
    return text[start : end + 1].strip()


def repair_json(text: str) -> str:
    """Fix trailing commas and unescaped quotes around embedded keys.

    Heuristic: only used after a strict parse has failed.
    """
    fixed = _TRAILING_COMMA_PATTERN.sub(r"\1", text)
    fixed = _EMBEDDED_KEY_QUOTE_PATTERN.sub(r'\\"\1\\":', fixed)
    return fixed


def _parse_repaired(content: str, original: json.JSONDecodeError) -> object:
    logger.warning("Retrying JSON parse after repairing common issues")
    try:
        data = json.loads(repair_json(content))
    except json.JSONDecodeError:
        logger.error("Failed to parse even after fixes")
        raise ResponseFormatError(
            f"AI returned invalid JSON: {original.msg}",
            content=content,
            position=original.pos,
        ) from original
    logger.info("Successfully parsed after fixing common issues")
    return data
