from typing import Optional


def fixup_host(host: str, api_path: str) -> str:
    """
    Normalize a user or env supplied host so that ``host + api_path`` is a valid URL.
    - empty stays empty (callers decide whether that is an error)
    - a missing scheme defaults to https
    - trailing slashes are dropped when the path already starts with one
    """
    if not host:
        return ""
    if not host.startswith("http"):
        host = f"https://{host}"
    if api_path.startswith("/"):
        host = host.rstrip("/")
    return host


def mask_api_key_for_log(api_key: Optional[str]) -> str:
    if not api_key:
        return "(empty)"
    head = api_key[:4]
    tail = api_key[-4:] if len(api_key) > 8 else "****"
    return f"{head}...{tail} (len={len(api_key)})"
