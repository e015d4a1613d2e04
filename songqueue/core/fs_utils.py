import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union


def read_json_object(
    path: Union[str, Path],
    *,
    on_error: Optional[Callable[[Exception], None]] = None,
) -> Dict[str, Any]:
    """
    Load a JSON object from disk.

    A missing file yields {}. Undecodable content, or a top-level value that
    is not an object, is reported through `on_error` and also yields {}.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        if on_error:
            on_error(e)
        return {}

    if not isinstance(data, dict):
        if on_error:
            on_error(ValueError(f"expected a JSON object, got {type(data).__name__}"))
        return {}
    return data
