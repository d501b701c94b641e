"""Replace reference identifiers with the records they point to"""

from typing import Any, Optional

from sitegraph.core.models import METADATA_KEY, Record, ValueKind, classify, record_id
from sitegraph.core.schema import ReferenceIndex


def build_lookup(objects: list[Record]) -> dict[str, Record]:
    """Map each record's identifier to the record itself."""
    return {record_id(o): o for o in objects}


def resolve_references(
    content: Any,
    file_to_content: dict[str, Record],
    index: ReferenceIndex,
    _active: Optional[set[int]] = None,
    ) -> None:
    """Substitute identifier strings in reference fields, in place.

    Only fields the index marks as references are substituted. A sequence is
    classified by its first element alone, so a mixed list is resolved (or
    not) as a whole. A dangling single reference removes the field; a
    dangling list element becomes None. Substituted records are not walked,
    so reference cycles cannot recurse.
    """
    if classify(content) is not ValueKind.record or not content.get("type"):
        return
    active = _active if _active is not None else set()
    if id(content) in active:
        return
    active.add(id(content))

    model = content["type"]
    if not content.get(METADATA_KEY):
        content[METADATA_KEY] = {"modelName": model}

    for name, value in list(content.items()):
        if not value:
            continue
        is_ref = index.is_reference(model, name)
        match classify(value):
            case ValueKind.sequence:
                if is_ref and isinstance(value[0], str):
                    content[name] = [file_to_content.get(v) for v in value]
                elif classify(value[0]) is ValueKind.record:
                    for item in value:
                        resolve_references(item, file_to_content, index, active)
            case ValueKind.record:
                resolve_references(value, file_to_content, index, active)
            case ValueKind.scalar:
                if is_ref and isinstance(value, str):
                    target = file_to_content.get(value)
                    if target is None:
                        del content[name]
                    else:
                        content[name] = target

    active.discard(id(content))


def resolve_all(objects: list[Record], index: ReferenceIndex) -> dict[str, Record]:
    """Resolve every root record against the whole corpus. Returns the id lookup used."""
    file_to_content = build_lookup(objects)
    for o in objects:
        resolve_references(o, file_to_content, index)
    return file_to_content
