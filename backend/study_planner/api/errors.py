"""Shape core validation errors like FastAPI's own 422 responses."""
from __future__ import annotations

import re
from typing import Any, Dict, List

from study_planner.scheduling import InputValidationError

_INDEX_RE = re.compile(r"\[(\d+)\]")


def field_location(field: str) -> List[Any]:
    """Turn ``tasks[2].deadline`` into ``["body", "tasks", 2, "deadline"]``."""
    loc: List[Any] = ["body"]
    for part in field.split("."):
        name = _INDEX_RE.split(part)
        loc.append(name[0])
        loc.extend(int(index) for index in name[1::2])
    return loc


def validation_detail(exc: InputValidationError) -> List[Dict[str, Any]]:
    return [{"loc": field_location(exc.field), "msg": exc.message, "type": "value_error"}]
