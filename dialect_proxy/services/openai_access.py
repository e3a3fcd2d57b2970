"""
Access resolution: which URL to call and with which headers, per dialect.

The resolver is pure apart from reading server-side environment fallbacks,
which happens on every call.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Optional
from urllib.parse import urlparse

from ..core.config import (
    APP_HOME_URL,
    APP_TITLE,
    AZURE_CHAT_API_VERSION,
    get_server_env,
)
from ..core.exceptions import ConfigurationError
from ..models.api_models import AccessConfig, Dialect
from ..utils.helpers import fixup_host
from .dialects import (
    CLOUDFLARE_GATEWAY_HOST,
    DEFAULT_HELICONE_OPENAI_HOST,
    DEFAULT_OPENAI_HOST,
    OPENAI_FAMILY_DIALECTS,
    get_dialect_defaults,
)
from .requests.headers import (
    build_azure_headers,
    build_bearer_json_headers,
    build_openai_headers,
    build_openrouter_headers,
)

logger = logging.getLogger("DialectProxy.Services.OpenAIAccess")


@dataclass(frozen=True)
class ResolvedAccess:
    headers: Dict[str, str]
    url: str


def openai_access(access: AccessConfig, model_ref: Optional[str], api_path: str) -> ResolvedAccess:
    dialect = access.dialect

    if dialect == Dialect.AZURE:
        return _azure_access(access, model_ref, api_path)
    if dialect in OPENAI_FAMILY_DIALECTS:
        return _openai_family_access(access, api_path)
    if dialect == Dialect.MISTRAL:
        return _mistral_access(access, api_path)
    if dialect == Dialect.OPENROUTER:
        return _openrouter_access(access, api_path)
    if dialect == Dialect.TOGETHERAI:
        return _togetherai_access(access, api_path)
    raise ConfigurationError(f"Unsupported OpenAI dialect: {dialect}")


def _caller_or_env(value: str, env_name: str) -> str:
    return value or (get_server_env(env_name) if env_name else "")


def _resolve_key(access: AccessConfig) -> str:
    defaults = get_dialect_defaults(access.dialect)
    if defaults.supports_default_key and access.use_default_key:
        return get_server_env(defaults.key_env)
    if defaults.supports_default_key:
        return access.api_key
    return _caller_or_env(access.api_key, defaults.key_env)


def _resolve_host(access: AccessConfig, api_path: str) -> str:
    defaults = get_dialect_defaults(access.dialect)
    raw_host = _caller_or_env(access.host, defaults.host_env) or defaults.default_host
    return fixup_host(raw_host, api_path)


def _azure_access(access: AccessConfig, model_ref: Optional[str], api_path: str) -> ResolvedAccess:
    azure_key = _resolve_key(access)
    azure_host = _resolve_host(access, api_path)
    if not azure_key or not azure_host:
        raise ConfigurationError("Missing Azure API Key or Host. Add it on the UI (Models Setup) or server side (your deployment).")

    if api_path.startswith("/v1/"):
        if not model_ref:
            raise ConfigurationError("Azure OpenAI API needs a deployment id")
        url = f"{azure_host}/openai/deployments/{model_ref}/{api_path[len('/v1/'):]}?api-version={AZURE_CHAT_API_VERSION}"
    elif api_path.startswith("/openai/deployments"):
        url = azure_host + api_path
    else:
        raise ConfigurationError(f"Azure OpenAI API path not supported: {api_path}")

    return ResolvedAccess(headers=build_azure_headers(azure_key), url=url)


def _openai_family_access(access: AccessConfig, api_path: str) -> ResolvedAccess:
    defaults = get_dialect_defaults(access.dialect)
    oai_key = _resolve_key(access)
    oai_org = _caller_or_env(access.organization_id, defaults.org_env)
    oai_host = _resolve_host(access, api_path)

    # a key is only mandatory for the public endpoint, local servers may run keyless
    if not oai_key and DEFAULT_OPENAI_HOST in oai_host:
        raise ConfigurationError("Missing OpenAI API Key. Add it on the UI (Models Setup) or use default system api key.")

    # Helicone: only rewrite the default host; on any other host the key is ambiguous and dropped
    helicone_key = _caller_or_env(access.proxy_key, defaults.proxy_key_env)
    if helicone_key:
        if DEFAULT_OPENAI_HOST in oai_host:
            oai_host = f"https://{DEFAULT_HELICONE_OPENAI_HOST}"
        elif DEFAULT_HELICONE_OPENAI_HOST not in oai_host:
            logger.warning(f"Helicone key provided but host '{oai_host}' is neither OpenAI nor Helicone; ignoring the Helicone key")
            helicone_key = ""

    # Cloudflare AI Gateway: /v1/<ACCOUNT_TAG>/<GATEWAY_SLUG>/<PROVIDER?>
    if CLOUDFLARE_GATEWAY_HOST in oai_host:
        oai_host, api_path = _cloudflare_gateway_route(oai_host, api_path)

    return ResolvedAccess(
        headers=build_openai_headers(oai_key, oai_org, helicone_key),
        url=oai_host + api_path,
    )


def _cloudflare_gateway_route(gateway_host: str, api_path: str):
    path_segments = [segment for segment in urlparse(gateway_host).path.split("/") if segment]
    if len(path_segments) < 3 or len(path_segments) > 4 or path_segments[0] != "v1":
        raise ConfigurationError("Cloudflare AI Gateway API Host is not valid. Please check the API Host field in the Models Setup page.")

    account_tag, gateway_name = path_segments[1], path_segments[2]
    provider = path_segments[3] if len(path_segments) == 4 else ""
    if provider and provider != "openai":
        raise ConfigurationError("Cloudflare AI Gateway only supports OpenAI as a provider.")

    if api_path.startswith("/v1"):
        api_path = api_path[len("/v1"):]
    return CLOUDFLARE_GATEWAY_HOST, f"/v1/{account_tag}/{gateway_name}/{provider or 'openai'}{api_path}"


def _mistral_access(access: AccessConfig, api_path: str) -> ResolvedAccess:
    # an empty key is let through, the upstream answers with 401
    mistral_key = _resolve_key(access)
    mistral_host = _resolve_host(access, api_path)
    return ResolvedAccess(headers=build_bearer_json_headers(mistral_key), url=mistral_host + api_path)


def _openrouter_access(access: AccessConfig, api_path: str) -> ResolvedAccess:
    or_key = _resolve_key(access)
    or_host = _resolve_host(access, api_path)
    if not or_key or not or_host:
        raise ConfigurationError("Missing OpenRouter API Key or Host. Add it on the UI (Models Setup) or use default system api key.")
    return ResolvedAccess(
        headers=build_openrouter_headers(or_key, APP_HOME_URL, APP_TITLE),
        url=or_host + api_path,
    )


def _togetherai_access(access: AccessConfig, api_path: str) -> ResolvedAccess:
    together_key = _resolve_key(access)
    together_host = _resolve_host(access, api_path)
    if not together_key or not together_host:
        raise ConfigurationError("Missing TogetherAI API Key or Host. Add it on the UI (Models Setup) or server side (your deployment).")
    return ResolvedAccess(headers=build_bearer_json_headers(together_key), url=together_host + api_path)
