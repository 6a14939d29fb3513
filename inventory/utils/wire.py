import re

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def to_snake(name: str) -> str:
    return _CAMEL_RE.sub("_", name).lower()


def snake_keys(data: dict) -> dict:
    """JSON payloads arrive with camelCase keys (loanedQuantity, borrowerName...)."""
    return {to_snake(k): v for k, v in (data or {}).items()}


def camel_keys(data: dict) -> dict:
    return {to_camel(k): v for k, v in data.items()}
