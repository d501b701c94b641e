"""JSON export of a loaded site: cycle-safe conversion and file writing"""

import datetime
import json
from pathlib import Path
from typing import Any, Optional

from sitegraph.core.models import SiteContent, ValueKind, classify, record_id


def to_jsonable(value: Any, _ancestors: Optional[set[int]] = None) -> Any:
    """Convert a record graph into JSON-safe data.

    Dates become ISO strings. A reference back to a record already on the
    current path (a reference cycle) is written as that record's identifier.
    """
    ancestors = _ancestors if _ancestors is not None else set()
    match classify(value):
        case ValueKind.record:
            if id(value) in ancestors:
                return record_id(value)
            ancestors.add(id(value))
            out = {str(k): to_jsonable(v, ancestors) for k, v in value.items()}
            ancestors.discard(id(value))
            return out
        case ValueKind.sequence:
            return [to_jsonable(v, ancestors) for v in value]
        case _:
            if isinstance(value, (datetime.date, datetime.datetime, datetime.time)):
                return value.isoformat()
            return value


def content_to_dict(content: SiteContent) -> dict[str, Any]:
    return {
        "objects": to_jsonable(content.objects),
        "pages": to_jsonable(content.pages),
        "props": to_jsonable(content.props),
    }


def write_content(content: SiteContent, path: Path) -> Path:
    """Write {objects, pages, props} as indented JSON. Returns path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(content_to_dict(content), indent=2, ensure_ascii=False), encoding='utf-8')
    return path
