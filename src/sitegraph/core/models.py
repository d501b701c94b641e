"""Content record conventions and the loaded-site result model"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


METADATA_KEY = "__metadata"     # reserved bookkeeping field on every record
MARKDOWN_KEY = "markdown_content"

Record = dict[str, Any]


class ValueKind(str, Enum):
    scalar = "scalar"
    sequence = "sequence"
    record = "record"


def classify(value: Any) -> ValueKind:
    """Tag a content value as a scalar, a sequence, or a keyed record."""
    if isinstance(value, dict):
        return ValueKind.record
    if isinstance(value, list):
        return ValueKind.sequence
    return ValueKind.scalar


def metadata(record: Record) -> dict[str, Any]:
    """Return the record's metadata mapping (empty when missing)."""
    return record.get(METADATA_KEY) or {}


def record_id(record: Record) -> Optional[str]:
    return metadata(record).get("id")


def model_name(record: Record) -> Optional[str]:
    return metadata(record).get("modelName")


def url_path(record: Record) -> Optional[str]:
    return metadata(record).get("urlPath")


@dataclass
class SiteContent:
    """Result of one pipeline run, handed to the rendering layer."""
    objects: list[Record] = field(default_factory=list)   # enumeration order
    pages:   list[Record] = field(default_factory=list)   # objects with a urlPath
    site:    Optional[Record] = None                      # configuration singleton

    @property
    def props(self) -> dict[str, Optional[Record]]:
        return {"site": self.site}

    def url_paths(self) -> list[str]:
        return [url_path(p) for p in self.pages]

    def find_page(self, path: str) -> Optional[Record]:
        """Return the page whose urlPath equals path, tolerating a trailing slash."""
        wanted = path.rstrip("/") or "/"
        return next((p for p in self.pages if url_path(p) == wanted), None)

    def page_props(self, path: str) -> dict[str, Optional[Record]]:
        """Props for rendering one page: {"page", "site"}. KeyError for unknown paths."""
        page = self.find_page(path)
        if page is None:
            raise KeyError(path)
        return {"page": page, **self.props}
