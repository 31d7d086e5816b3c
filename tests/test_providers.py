import pytest

from errors import ConfigError
from providers import (
    GROQ,
    OPENAI,
    PROVIDER_MODELS,
    ProviderClients,
    ProviderConfig,
    _build_client,
    detect_provider_config,
)


@pytest.mark.parametrize(
    ("environ", "provider", "api_key"),
    [
        ({"GROQ_API_KEY": "gsk_groq"}, GROQ, "gsk_groq"),
        ({"GROQ_API_KEY": "gsk_groq", "OPENAI_API_KEY": "sk-openai"}, GROQ, "gsk_groq"),
        ({"OPENAI_API_KEY": "gsk_in_generic_var"}, GROQ, "gsk_in_generic_var"),
        ({"OPENAI_API_KEY": "sk-openai"}, OPENAI, "sk-openai"),
        ({"GROQ_API_KEY": "", "OPENAI_API_KEY": "sk-openai"}, OPENAI, "sk-openai"),
    ],
)
def test_detect_provider_config_rule_table(environ, provider, api_key) -> None:
    config = detect_provider_config(environ)

    assert config.provider == provider
    assert config.api_key == api_key
    assert config.model == PROVIDER_MODELS[provider]


@pytest.mark.parametrize("environ", [{}, {"GROQ_API_KEY": "", "OPENAI_API_KEY": "   "}])
def test_detect_provider_config_without_credentials(environ) -> None:
    with pytest.raises(ConfigError) as exc_info:
        detect_provider_config(environ)

    assert "OPENAI_API_KEY" in exc_info.value.message
    assert "GROQ_API_KEY" in exc_info.value.message


def test_detect_provider_config_reads_process_environment(monkeypatch) -> None:
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")

    assert detect_provider_config().provider == OPENAI


def test_provider_config_repr_hides_key() -> None:
    config = ProviderConfig(provider=OPENAI, api_key="sk-secret", model="gpt-4o")

    assert "sk-secret" not in repr(config)


def test_provider_clients_memoizes_per_provider_and_key() -> None:
    built = []

    def factory(config):
        built.append(config)
        return object()

    clients = ProviderClients(factory=factory)
    groq = ProviderConfig(provider=GROQ, api_key="gsk_a", model=PROVIDER_MODELS[GROQ])
    openai_config = ProviderConfig(provider=OPENAI, api_key="sk-a", model=PROVIDER_MODELS[OPENAI])

    first = clients.get(groq)
    assert clients.get(groq) is first
    assert clients.get(openai_config) is not first
    assert clients.get(groq._replace(api_key="gsk_b")) is not first
    assert len(built) == 3


def test_groq_client_targets_openai_compatible_endpoint() -> None:
    client = _build_client(ProviderConfig(provider=GROQ, api_key="gsk_test", model=PROVIDER_MODELS[GROQ]))

    assert "api.groq.com" in str(client.base_url)


def test_openai_client_uses_default_endpoint(monkeypatch) -> None:
    monkeypatch.delenv("OPENAI_BASE_URL", raising=False)
    client = _build_client(ProviderConfig(provider=OPENAI, api_key="sk-test", model=PROVIDER_MODELS[OPENAI]))

    assert "api.openai.com" in str(client.base_url)
