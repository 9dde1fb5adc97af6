from typing import Any, Dict, List

REQUIRED_STR_FIELDS = ["name"]
OPTIONAL_STR_FIELDS = ["position", "team"]
RANK_FIELDS = ["adp", "overallRank"]


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def validate_player_entry(entry: Any, index: int) -> List[str]:
    if not isinstance(entry, dict):
        return [f"players[{index}] must be an object"]

    errors: List[str] = []
    for f in REQUIRED_STR_FIELDS:
        if f not in entry:
            errors.append(f"players[{index}]: missing required field: {f}")
        elif not _is_non_empty_str(entry[f]):
            errors.append(f"players[{index}]: field '{f}' must be a non-empty string")

    # Optional strings: if present, must be strings (null allowed)
    for f in OPTIONAL_STR_FIELDS:
        if entry.get(f) is not None and not isinstance(entry[f], str):
            errors.append(f"players[{index}]: field '{f}' must be a string if provided")

    for f in RANK_FIELDS:
        if entry.get(f) is not None and not _is_number(entry[f]):
            errors.append(f"players[{index}]: field '{f}' must be a number if provided")
    return errors


def validate_roster_payload(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.

    Expected shape: {"players": [{"name", "position", "team", "adp" | "overallRank"}, ...]}
    """
    if not isinstance(data, dict):
        return ["Payload must be a JSON object"]
    if "players" not in data:
        return ["Missing required field: players"]
    if not isinstance(data["players"], list):
        return ["Field 'players' must be a list"]

    errors: List[str] = []
    for i, entry in enumerate(data["players"]):
        errors.extend(validate_player_entry(entry, i))
    return errors
