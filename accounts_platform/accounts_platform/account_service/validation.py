"""
Turns pydantic validation errors into the service's ``{field, message}`` list.
"""
from typing import Any, Dict, List, Sequence

PHONE_FORMAT_MESSAGE = 'Phone number must start with a "+" and contain 6 to 15 digits'

# field -> pydantic error type -> message; "*" applies to any error type
FIELD_MESSAGES: Dict[str, Dict[str, str]] = {
    "firstName": {"*": "First name is required"},
    "lastName": {"*": "Last name is required"},
    "email": {
        "missing": "Email is required",
        "*": "Invalid email address",
    },
    "password": {
        "missing": "Password is required",
        "string_too_short": "Password must be at least 6 characters long",
        "string_too_long": "Password must be at most 4096 characters long",
        "*": "Password is required",
    },
    "phone": {"*": PHONE_FORMAT_MESSAGE},
    "name": {"*": "Name is required"},
}


def _field_name(loc: Sequence[Any]) -> str:
    # ("body", "firstName") -> "firstName"; a missing body is reported as "body"
    parts = [str(p) for p in loc]
    if len(parts) > 1 and parts[0] in ("body", "query", "path", "header"):
        parts = parts[1:]
    return ".".join(parts)


def _message_for(field: str, error: dict) -> str:
    messages = FIELD_MESSAGES.get(field)
    if not messages:
        return error.get("msg", "Invalid value")
    return messages.get(error.get("type", ""), messages.get("*", error.get("msg", "Invalid value")))


def collect_field_errors(errors: Sequence[dict]) -> List[dict]:
    """
    One entry per failing field, in the order the fields first failed.
    """
    collected: List[dict] = []
    seen = set()
    for error in errors:
        field = _field_name(error.get("loc", ()))
        if field in seen:
            continue
        seen.add(field)
        collected.append({"field": field, "message": _message_for(field, error)})
    return collected
