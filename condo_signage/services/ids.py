import json
from typing import Any


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    raw = str(value or "").strip().strip("[]\"' ")
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def parse_id_list(value: Any) -> list[int]:
    """
    Normalize a one-to-many id reference into an ordered, de-duplicated list.

    The console has sent these as native lists, JSON array strings and
    comma separated strings over time. Fragments that are not integers are
    dropped; first occurrence wins the position.
    """
    if value is None:
        return []

    items: list[Any]
    if isinstance(value, (list, tuple, set)):
        items = list(value)
    elif isinstance(value, int) and not isinstance(value, bool):
        items = [value]
    else:
        raw = str(value).strip()
        if not raw:
            return []
        if raw.startswith("[") and raw.endswith("]"):
            try:
                decoded = json.loads(raw)
            except json.JSONDecodeError:
                decoded = None
            items = decoded if isinstance(decoded, list) else raw.split(",")
        else:
            items = raw.split(",")

    output: list[int] = []
    for item in items:
        parsed = _as_int(item)
        if parsed is not None and parsed not in output:
            output.append(parsed)
    return output


def ids_to_csv(ids: list[int]) -> str:
    return ",".join(str(item) for item in ids)


def contains_id(value: Any, target: int) -> bool:
    return target in parse_id_list(value)
