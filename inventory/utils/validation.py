import re
from datetime import date

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_int(value, name: str) -> int:
    """Whole numbers only: rejects booleans and fractional floats."""
    if isinstance(value, bool):
        raise ValueError(f"{name} doit être un entier")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValueError(f"{name} doit être un entier")


def parse_text(value, name: str):
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{name} doit être une chaîne")
    return value.strip()


def parse_iso_date(value, name: str):
    """
    return: the date as a zero-padded YYYY-MM-DD string, or None when empty.
    Overdue checks compare these strings directly.
    """
    if value is None or value == "":
        return None
    if not isinstance(value, str) or not _ISO_DATE_RE.match(value.strip()):
        raise ValueError(f"{name}: date invalide")
    try:
        return date.fromisoformat(value.strip()).isoformat()
    except ValueError:
        raise ValueError(f"{name}: date invalide")


def parse_str_list(value, name: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{name} doit être une liste d'URL")
    return list(value)
