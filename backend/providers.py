"""AI provider selection and completion client handles.

Provider choice is a rule table read top to bottom; first match wins:

    GROQ_API_KEY    any key        -> groq
    OPENAI_API_KEY  "gsk_" prefix  -> groq   (Groq key stored in the generic variable)
    OPENAI_API_KEY  any key        -> openai

Both providers are reached through the openai SDK; Groq exposes an
OpenAI-compatible endpoint.
"""

import logging
import os
import threading
from typing import Mapping, NamedTuple, Optional

from openai import OpenAI

from errors import ConfigError

logger = logging.getLogger(__name__)

GROQ = "groq"
OPENAI = "openai"

PROVIDER_MODELS = {
    GROQ: "llama-3.3-70b-versatile",
    OPENAI: "gpt-4o",
}

PROVIDER_BASE_URLS = {
    GROQ: "https://api.groq.com/openai/v1",
    OPENAI: None,
}


class ProviderRule(NamedTuple):
    env_var: str
    key_prefix: Optional[str]
    provider: str


PROVIDER_RULES = (
    ProviderRule(env_var="GROQ_API_KEY", key_prefix=None, provider=GROQ),
    ProviderRule(env_var="OPENAI_API_KEY", key_prefix="gsk_", provider=GROQ),
    ProviderRule(env_var="OPENAI_API_KEY", key_prefix=None, provider=OPENAI),
)


class ProviderConfig(NamedTuple):
    provider: str
    api_key: str
    model: str

    def __repr__(self) -> str:
        return f"ProviderConfig(provider={self.provider!r}, model={self.model!r})"


def detect_provider_config(environ: Optional[Mapping[str, str]] = None) -> ProviderConfig:
    """
    Pick the provider from environment credentials using PROVIDER_RULES.
    Raises ConfigError when no rule matches.
    """
    env = os.environ if environ is None else environ
    for rule in PROVIDER_RULES:
        api_key = (env.get(rule.env_var) or "").strip()
        if not api_key:
            continue
        if rule.key_prefix is not None and not api_key.startswith(rule.key_prefix):
            continue
        return ProviderConfig(
            provider=rule.provider,
            api_key=api_key,
            model=PROVIDER_MODELS[rule.provider],
        )

    raise ConfigError(
        "No AI API key configured. Please set OPENAI_API_KEY or GROQ_API_KEY in your environment."
    )


def _build_client(config: ProviderConfig) -> OpenAI:
    client_kwargs: dict = {"api_key": config.api_key}
    base_url = PROVIDER_BASE_URLS.get(config.provider)
    if base_url:
        client_kwargs["base_url"] = base_url
    return OpenAI(**client_kwargs)


class ProviderClients:
    """Constructs one completion client per (provider, key) and reuses it.

    Created once at application startup and shared by all requests; clients
    are read-only after construction.
    """

    def __init__(self, factory=_build_client) -> None:
        self._factory = factory
        self._clients: dict[tuple[str, str], object] = {}
        self._lock = threading.Lock()

    def get(self, config: ProviderConfig):
        key = (config.provider, config.api_key)
        client = self._clients.get(key)
        if client is not None:
            return client
        with self._lock:
            client = self._clients.get(key)
            if client is None:
                logger.info("Creating %s completion client", config.provider)
                client = self._factory(config)
                self._clients[key] = client
        return client
