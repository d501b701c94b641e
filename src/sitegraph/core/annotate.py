"""Editor annotations: object-id and field-path marks on resolved records"""

import logging
from typing import Any, Callable, Optional

from sitegraph.core.models import METADATA_KEY, ValueKind, classify, record_id


logger = logging.getLogger(__name__)

OBJECT_ID_ATTR = "data-sb-object-id"
FIELD_PATH_ATTR = "data-sb-field-path"
ANNOTATION_ATTRS = frozenset({OBJECT_ID_ATTR, FIELD_PATH_ATTR})
SKIP_FIELDS = frozenset({METADATA_KEY})

Annotator = Callable[[Any], None]


def annotate_content_object(
    o: Any,
    prefix: str = "",
    depth: int = 0,
    log: bool = False,
    _ancestors: Optional[set[int]] = None,
    ) -> None:
    """Mark o and every nested type-tagged record, in place.

    The root gets OBJECT_ID_ATTR (its metadata id); nested typed records get
    FIELD_PATH_ATTR, the dotted path from the root (e.g. "sections.2.items.0").
    Untyped objects are walked through but not marked.
    """
    if classify(o) is ValueKind.scalar:
        return
    ancestors = _ancestors if _ancestors is not None else set()
    if id(o) in ancestors:
        return
    ancestors.add(id(o))

    if classify(o) is ValueKind.sequence:
        for idx, item in enumerate(o):
            annotate_content_object(item, _join(prefix, idx), depth + 1, log, ancestors)
        ancestors.discard(id(o))
        return

    if o.get("type"):
        indent = "--" * depth
        if depth == 0:
            object_id = record_id(o)
            if object_id:
                o[OBJECT_ID_ATTR] = object_id
                if log:
                    logger.debug("added object ID: %s %s", indent, object_id)
            elif log:
                logger.warning("NO object ID: %r", o.get("type"))
        else:
            o[FIELD_PATH_ATTR] = prefix
            if log:
                logger.debug("added field path: %s %s", indent, prefix)

    for key, value in list(o.items()):
        if key in SKIP_FIELDS or classify(value) is ValueKind.scalar:
            continue
        annotate_content_object(value, _join(prefix, key), depth + 1, log, ancestors)
    ancestors.discard(id(o))


def _join(prefix: str, key: Any) -> str:
    return f"{prefix}.{key}" if prefix else str(key)


def _noop(o: Any) -> None:
    return None


def make_annotator(dev_mode: bool, log_annotations: bool = False) -> Annotator:
    """Choose the annotation pass once per run; outside dev mode it is a no-op."""
    if not dev_mode:
        return _noop

    def annotate(o: Any) -> None:
        annotate_content_object(o, log=log_annotations)
    return annotate


def strip_annotations(value: Any, _memo: Optional[dict[int, Any]] = None) -> Any:
    """Return a copy of value with every annotation mark removed."""
    memo = _memo if _memo is not None else {}
    if id(value) in memo:
        return memo[id(value)]
    match classify(value):
        case ValueKind.record:
            out: dict[str, Any] = {}
            memo[id(value)] = out
            for k, v in value.items():
                if k not in ANNOTATION_ATTRS:
                    out[k] = strip_annotations(v, memo)
            return out
        case ValueKind.sequence:
            items: list[Any] = []
            memo[id(value)] = items
            items.extend(strip_annotations(v, memo) for v in value)
            return items
        case _:
            return value
