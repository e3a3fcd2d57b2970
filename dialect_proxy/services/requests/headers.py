"""
Header builders for each dialect's authentication scheme.
"""

from __future__ import annotations

from typing import Dict, Optional


def build_openai_headers(api_key: str, organization_id: str = "", helicone_key: Optional[str] = None) -> Dict[str, str]:
    """
    OpenAI and the self-hosted servers that mimic it:
      - Authorization: Bearer <api_key> (omitted for keyless local servers)
      - OpenAI-Organization: <org> (if any)
      - Helicone-Auth: Bearer <helicone_key> (if routed through Helicone)
    """
    headers: Dict[str, str] = {"Content-Type": "application/json"}
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    if organization_id:
        headers["OpenAI-Organization"] = organization_id
    if helicone_key:
        headers["Helicone-Auth"] = f"Bearer {helicone_key}"
    return headers


def build_azure_headers(api_key: str) -> Dict[str, str]:
    """Azure OpenAI expects the key in `api-key`, not as a bearer token."""
    return {
        "Content-Type": "application/json",
        "api-key": api_key,
    }


def build_bearer_json_headers(api_key: str) -> Dict[str, str]:
    """Mistral and TogetherAI: bearer token and an explicit JSON Accept."""
    return {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "Authorization": f"Bearer {api_key}",
    }


def build_openrouter_headers(api_key: str, referer: str, title: str) -> Dict[str, str]:
    """OpenRouter asks apps to identify themselves with HTTP-Referer and X-Title."""
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
        "HTTP-Referer": referer,
        "X-Title": title,
    }
