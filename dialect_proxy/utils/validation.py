from typing import Any

from pydantic import TypeAdapter, ValidationError

from ..core.exceptions import UpstreamProtocolError


def validate_wire(shape: Any, value: Any, label: str) -> Any:
    """
    Validate a decoded upstream JSON value against a wire shape (a pydantic model
    or any type pydantic can adapt). Mismatches surface as UpstreamProtocolError
    naming the first offending path.
    """
    try:
        return TypeAdapter(shape).validate_python(value)
    except ValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        path = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
        reason = first.get("msg", "invalid value")
        raise UpstreamProtocolError(
            f"{label}: unexpected response shape at '{path}' ({reason}), {e.error_count()} issue(s)"
        ) from e
