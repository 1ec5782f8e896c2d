from typing import Any, Dict
import json


def coerce_json_object(value: Any) -> Dict[str, Any]:
    """
    Normalize a JSON column value into a dict.

    Drivers without native JSON support may hand back strings.
    """
    if value is None:
        return {}
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return {}
    return dict(value) if isinstance(value, dict) else {}
