import json

import pytest
from openai import OpenAIError

from ai_service import parse_report_text, strip_code_fences, synthesize_report
from errors import ConfigError, ParseError, ProviderError
from models import SignalRecord, SocialLink
from prompt_template import SYSTEM_MESSAGE

OPENAI_ENV = {"OPENAI_API_KEY": "sk-test"}


def _signals(url: str = "https://acme.example") -> SignalRecord:
    return SignalRecord(
        url=url,
        title="Acme Plumbing",
        menu_items=("Home", "About"),
        social_links=(SocialLink(platform="LinkedIn", url="https://linkedin.com/company/acme"),),
        has_https=True,
    )


def _report_json(**overrides) -> str:
    report = {
        "id": "model-chosen-id",
        "url": "https://somewhere-else.example",
        "companyName": "Acme Plumbing",
        "overallScore": 64,
        "scoreBreakdown": {"technical": 6, "design": 7},
        "recommendations": [
            {"title": "Add reviews", "impact": "High", "effort": "Low", "priority": 1}
        ],
    }
    report.update(overrides)
    return json.dumps(report)


def test_strip_code_fences_variants() -> None:
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('  {"a": 1}  ') == '{"a": 1}'


def test_parse_report_text_strips_json_fence() -> None:
    report = parse_report_text(f"```json\n{_report_json()}\n```", "https://acme.example")

    assert report["companyName"] == "Acme Plumbing"
    assert report["recommendations"][0]["impact"] == "High"


def test_parse_report_text_overwrites_id_and_url() -> None:
    report = parse_report_text(_report_json(), "https://acme.example")

    assert report["url"] == "https://acme.example"
    assert report["id"] != "model-chosen-id"
    assert report["id"].startswith("audit-")


def test_parse_report_text_rejects_invalid_json_with_bounded_excerpt() -> None:
    garbage = "I'm sorry, here is the report: " + "x" * 2000

    with pytest.raises(ParseError) as exc_info:
        parse_report_text(garbage, "https://acme.example")

    assert len(exc_info.value.excerpt) <= 500
    assert exc_info.value.excerpt.startswith("I'm sorry")
    assert "x" * 2000 not in exc_info.value.message


def test_parse_report_text_rejects_non_object_json() -> None:
    with pytest.raises(ParseError):
        parse_report_text("[1, 2, 3]", "https://acme.example")


def test_synthesize_report_returns_report_with_fresh_ids(fake_clients) -> None:
    clients, fake, _ = fake_clients(content=f"```json\n{_report_json()}\n```")
    signals = _signals()

    first = synthesize_report(signals, clients=clients, environ=OPENAI_ENV)
    second = synthesize_report(signals, clients=clients, environ=OPENAI_ENV)

    assert first["url"] == signals.url
    assert second["url"] == signals.url
    assert first["id"] != second["id"]
    assert first["companyName"] == "Acme Plumbing"
    assert len(fake.completions.calls) == 2


def test_synthesize_report_request_parameters(fake_clients) -> None:
    clients, fake, built = fake_clients(content=_report_json())

    synthesize_report(_signals(), clients=clients, environ=OPENAI_ENV)

    call = fake.completions.calls[0]
    assert call["model"] == "gpt-4o"
    assert call["max_tokens"] == 8192
    assert call["response_format"] == {"type": "json_object"}
    assert call["messages"][0] == {"role": "system", "content": SYSTEM_MESSAGE}
    assert call["messages"][1]["role"] == "user"
    assert "Website URL: https://acme.example" in call["messages"][1]["content"]
    assert built[0].provider == "openai"


def test_synthesize_report_uses_groq_model_for_groq_key(fake_clients) -> None:
    clients, fake, built = fake_clients(content=_report_json())

    synthesize_report(_signals(), clients=clients, environ={"OPENAI_API_KEY": "gsk_abc"})

    assert built[0].provider == "groq"
    assert fake.completions.calls[0]["model"] == "llama-3.3-70b-versatile"


def test_synthesize_report_without_credentials_raises_before_client(fake_clients) -> None:
    clients, fake, built = fake_clients(content=_report_json())

    with pytest.raises(ConfigError):
        synthesize_report(_signals(), clients=clients, environ={})

    assert built == []
    assert fake.completions.calls == []


def test_synthesize_report_empty_content_raises_provider_error(fake_clients) -> None:
    clients, _, _ = fake_clients(content="")

    with pytest.raises(ProviderError) as exc_info:
        synthesize_report(_signals(), clients=clients, environ=OPENAI_ENV)

    assert exc_info.value.message == "No response from AI"


def test_synthesize_report_wraps_sdk_errors(fake_clients) -> None:
    clients, _, _ = fake_clients(error=OpenAIError("upstream unavailable"))

    with pytest.raises(ProviderError) as exc_info:
        synthesize_report(_signals(), clients=clients, environ=OPENAI_ENV)

    assert "upstream unavailable" in exc_info.value.message


def test_synthesize_report_invalid_output_is_not_retried(fake_clients) -> None:
    clients, fake, _ = fake_clients(content="not json at all")

    with pytest.raises(ParseError):
        synthesize_report(_signals(), clients=clients, environ=OPENAI_ENV)

    assert len(fake.completions.calls) == 1
