"""
Static defaults of each supported OpenAI-compatible dialect.

Environment variable names are looked up at request time by the access
resolver; an empty name means the dialect has no such fallback.
"""
from dataclasses import dataclass
from typing import Dict

from ..models.api_models import Dialect

DEFAULT_OPENAI_HOST = "api.openai.com"
DEFAULT_HELICONE_OPENAI_HOST = "oai.hconeai.com"
DEFAULT_MISTRAL_HOST = "https://api.mistral.ai"
DEFAULT_OPENROUTER_HOST = "https://openrouter.ai/api"
DEFAULT_TOGETHERAI_HOST = "https://api.together.xyz"
CLOUDFLARE_GATEWAY_HOST = "https://gateway.ai.cloudflare.com"


@dataclass(frozen=True)
class DialectDefaults:
    default_host: str
    key_env: str
    host_env: str
    org_env: str = ""
    proxy_key_env: str = ""
    # accepts the server-side key when the caller opts in with defaultCheck
    supports_default_key: bool = False


_OPENAI_FAMILY = DialectDefaults(
    default_host=DEFAULT_OPENAI_HOST,
    key_env="OPENAI_API_KEY",
    host_env="OPENAI_API_HOST",
    org_env="OPENAI_API_ORG_ID",
    proxy_key_env="HELICONE_API_KEY",
    supports_default_key=True,
)

DIALECT_DEFAULTS: Dict[Dialect, DialectDefaults] = {
    Dialect.AZURE: DialectDefaults(
        default_host="",
        key_env="AZURE_OPENAI_API_KEY",
        host_env="AZURE_OPENAI_API_ENDPOINT",
    ),
    Dialect.LMSTUDIO: _OPENAI_FAMILY,
    Dialect.LOCALAI: _OPENAI_FAMILY,
    Dialect.OOBABOOGA: _OPENAI_FAMILY,
    Dialect.OPENAI: _OPENAI_FAMILY,
    Dialect.MISTRAL: DialectDefaults(
        default_host=DEFAULT_MISTRAL_HOST,
        key_env="MISTRAL_API_KEY",
        host_env="MISTRAL_API_HOST",
    ),
    Dialect.OPENROUTER: DialectDefaults(
        default_host=DEFAULT_OPENROUTER_HOST,
        key_env="OPENROUTER_API_KEY",
        host_env="OPENROUTER_API_HOST",
        supports_default_key=True,
    ),
    Dialect.TOGETHERAI: DialectDefaults(
        default_host=DEFAULT_TOGETHERAI_HOST,
        key_env="TOGETHERAI_API_KEY",
        host_env="TOGETHERAI_API_HOST",
    ),
}

# dialects served by the OpenAI code path (self-hosted servers speak the same protocol)
OPENAI_FAMILY_DIALECTS = frozenset({Dialect.LMSTUDIO, Dialect.LOCALAI, Dialect.OOBABOOGA, Dialect.OPENAI})


def get_dialect_defaults(dialect: Dialect) -> DialectDefaults:
    return DIALECT_DEFAULTS[dialect]
