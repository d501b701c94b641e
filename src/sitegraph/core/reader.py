"""Content file discovery and parsing into metadata-stamped records"""

import json
import re
from pathlib import Path
from typing import Any, Optional

import yaml

from sitegraph.core.models import MARKDOWN_KEY, METADATA_KEY, Record


FRONTMATTER_RE = re.compile(r'^\ufeff?---[ \t]*\n(.*?)^(?:---|\.\.\.)[ \t]*(?:\n|\Z)', re.DOTALL | re.MULTILINE)
SUPPORTED_FILE_TYPES = ('md', 'json')


class UnhandledFileTypeError(ValueError):
    """Raised when a file with an unsupported extension is read explicitly."""


def _strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def discover_files(directory: Path) -> list[Path]:
    """Return sorted .md/.json files under directory. A missing directory yields []."""
    if not directory.is_dir():
        return []
    suffixes = {f'.{ext}' for ext in SUPPORTED_FILE_TYPES}
    return sorted(p for p in directory.rglob('*') if p.is_file() and p.suffix in suffixes)


def read_content(path: Path, identifier: Optional[str] = None) -> Record:
    """Parse a content file and stamp it with {"id", "modelName"} metadata.

    Markdown frontmatter becomes the record's fields and the body is kept
    under ``markdown_content``; JSON files are the record itself. The
    identifier defaults to the path as given.
    """
    match path.suffix[1:]:
        case 'md':
            fields, body = _strip_frontmatter(path.read_text(encoding='utf-8'))
            content = {**fields, MARKDOWN_KEY: body}
        case 'json':
            content = json.loads(path.read_text(encoding='utf-8'))
            if not isinstance(content, dict):
                raise ValueError(f"Invalid JSON content in {path}: expected an object, got {type(content).__name__}")
        case _:
            raise UnhandledFileTypeError(f"Unhandled file type: {path}")

    content[METADATA_KEY] = {
        "id": identifier if identifier is not None else str(path),
        "modelName": content.get("type"),
    }
    return content
