"""Pipeline orchestration: read -> resolve -> clone -> annotate -> partition"""

import logging
from pathlib import Path
from typing import Any, Optional

from sitegraph.config import Settings
from sitegraph.core.annotate import make_annotator
from sitegraph.core.models import (
    METADATA_KEY,
    Record,
    SiteContent,
    ValueKind,
    classify,
    model_name,
    record_id,
    url_path,
)
from sitegraph.core.reader import discover_files, read_content
from sitegraph.core.resolve import resolve_all
from sitegraph.core.schema import ReferenceIndex, load_reference_index
from sitegraph.core.urls import file_to_url


logger = logging.getLogger(__name__)


def clone_tree(value: Any, _ancestors: Optional[dict[int, Any]] = None) -> Any:
    """Deep-copy a resolved record so that no two positions share an object.

    Every occurrence of an aliased record gets its own copy. A reference back
    to a record already on the current path points at that record's copy, so
    cycles survive without infinite recursion. Scalars are kept as-is.
    """
    ancestors = _ancestors if _ancestors is not None else {}
    match classify(value):
        case ValueKind.record:
            if id(value) in ancestors:
                return ancestors[id(value)]
            out: dict[str, Any] = {}
            ancestors[id(value)] = out
            for k, v in value.items():
                out[k] = clone_tree(v, ancestors)
            del ancestors[id(value)]
            return out
        case ValueKind.sequence:
            if id(value) in ancestors:
                return ancestors[id(value)]
            items: list[Any] = []
            ancestors[id(value)] = items
            items.extend(clone_tree(v, ancestors) for v in value)
            del ancestors[id(value)]
            return items
        case _:
            return value


def load_objects(root: Path, dirs: list[str]) -> list[Record]:
    """Read every content file under root/dir for each dir, in enumeration order."""
    objects = []
    for d in dirs:
        files = discover_files(root / d)
        logger.debug("found %d content file(s) under %s", len(files), d)
        for p in files:
            identifier = p.relative_to(root).as_posix()
            try:
                objects.append(read_content(p, identifier))
            except Exception as e:
                raise RuntimeError(f"Failed to read {identifier}: {e}") from e
    return objects


def all_content(settings: Settings, index: Optional[ReferenceIndex] = None) -> SiteContent:
    """Load, resolve and annotate the whole corpus described by settings.

    Resolution introduces aliasing; cloning removes it before the in-place
    annotation pass. Pass index to use a schema other than the one in
    settings.models_dir.
    """
    root = settings.root
    pages_dir = Path(settings.pages_dir).as_posix()
    if index is None:
        index = load_reference_index(root / settings.models_dir)

    objects = load_objects(root, [settings.data_dir, settings.pages_dir])
    for o in objects:
        o[METADATA_KEY]["urlPath"] = file_to_url(record_id(o), pages_dir)

    resolve_all(objects, index)
    objects = [clone_tree(o) for o in objects]

    annotate = make_annotator(settings.dev_mode, settings.log_annotations)
    for o in objects:
        annotate(o)

    pages = [o for o in objects if url_path(o)]
    site = next((o for o in objects if model_name(o) == settings.config_model), None)
    logger.debug("loaded %d object(s), %d page(s); site config %s",
                 len(objects), len(pages), "found" if site is not None else "missing")
    return SiteContent(objects=objects, pages=pages, site=site)
