"""
Audit report synthesis: signal record -> prompt -> completion -> report.

Provider credentials come from the environment (see providers.py and the
.env notes in config.py). There are no retries and no fallback report: any
failure is raised to the request handler.
"""

import json
import logging
import uuid
from typing import Mapping, Optional

from openai import OpenAIError

from config import MAX_OUTPUT_TOKENS, PARSE_EXCERPT_CHARS
from errors import ParseError, ProviderError
from models import AuditReport, SignalRecord
from prompt_template import PROMPT_VERSION, SYSTEM_MESSAGE, render_audit_prompt
from providers import ProviderClients, ProviderConfig, detect_provider_config

logger = logging.getLogger(__name__)


def new_report_id() -> str:
    return f"audit-{uuid.uuid4().hex}"


def strip_code_fences(text: str) -> str:
    """Remove a leading ```json / ``` fence and a trailing ``` fence."""
    cleaned = text.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[len("```json"):]
    elif cleaned.startswith("```"):
        cleaned = cleaned[len("```"):]
    if cleaned.endswith("```"):
        cleaned = cleaned[: -len("```")]
    return cleaned.strip()


def parse_report_text(text: str, url: str) -> AuditReport:
    """
    Parse raw model output into a report and stamp it with a fresh id and
    the audited url. Raises ParseError on anything but a JSON object.
    """
    cleaned = strip_code_fences(text)
    excerpt = cleaned[:PARSE_EXCERPT_CHARS]
    try:
        report = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.error("Failed to parse AI response (%s): %s", exc, excerpt)
        raise ParseError("Failed to parse AI response as JSON", excerpt=excerpt) from exc

    if not isinstance(report, dict):
        logger.error("AI response is not a JSON object: %s", excerpt)
        raise ParseError("AI response was not a JSON object", excerpt=excerpt)

    report["id"] = new_report_id()
    report["url"] = url
    return report


def _request_completion(client, config: ProviderConfig, prompt: str) -> str:
    try:
        response = client.chat.completions.create(
            model=config.model,
            messages=[
                {"role": "system", "content": SYSTEM_MESSAGE},
                {"role": "user", "content": prompt},
            ],
            response_format={"type": "json_object"},
            max_tokens=MAX_OUTPUT_TOKENS,
        )
    except OpenAIError as exc:
        raise ProviderError(f"AI provider request failed: {exc}") from exc

    choices = getattr(response, "choices", None) or []
    content = choices[0].message.content if choices else None
    if not content:
        raise ProviderError("No response from AI")

    finish_reason = getattr(choices[0], "finish_reason", None)
    if finish_reason == "length":
        logger.warning("AI output hit max_tokens for model=%s", config.model)
    return content


def synthesize_report(
    signals: SignalRecord,
    clients: Optional[ProviderClients] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AuditReport:
    """
    Generate the audit report for one signal record.

    Raises ConfigError when no provider credential is set (before any client
    is built), ProviderError when the completion fails or is empty, and
    ParseError when the output is not a JSON object.
    """
    config = detect_provider_config(environ)
    registry = clients if clients is not None else ProviderClients()
    client = registry.get(config)

    prompt = render_audit_prompt(signals)
    logger.info(
        "Requesting audit report for %s provider=%s model=%s prompt=%s chars=%d",
        signals.url,
        config.provider,
        config.model,
        PROMPT_VERSION,
        len(prompt),
    )
    content = _request_completion(client, config, prompt)
    return parse_report_text(content, signals.url)
