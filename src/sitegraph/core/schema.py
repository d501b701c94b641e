"""Content-model schema files and the (model, field) reference index"""

from functools import lru_cache
from pathlib import Path
from typing import Iterable, Optional

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError


MODEL_EXTENSIONS = {'.yaml', '.yml'}


class ModelSchemaError(ValueError):
    """A content-model file could not be parsed or validated."""


class FieldItems(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str


class FieldDef(BaseModel):
    model_config = ConfigDict(extra="allow")

    name:  str
    type:  str
    items: Optional[FieldItems] = None     # element type for "list" fields

    @property
    def is_reference(self) -> bool:
        if self.type == "reference":
            return True
        return self.type == "list" and self.items is not None and self.items.type == "reference"


class ModelDef(BaseModel):
    model_config = ConfigDict(extra="allow")

    name:   str
    type:   str = "object"
    label:  Optional[str] = None
    fields: list[FieldDef] = []


class ReferenceIndex:
    """Immutable lookup of which (model, field) pairs hold references to other records.

    Built once from the content-model schema and passed explicitly to the
    resolver, so a run can be tested against any schema.
    """

    __slots__ = ("_keys",)

    def __init__(self, keys: Iterable[tuple[str, str]] = ()):
        self._keys = frozenset(keys)

    @classmethod
    def from_models(cls, models: Iterable[ModelDef]) -> "ReferenceIndex":
        return cls(
            (model.name, f.name)
            for model in models
            for f in model.fields
            if f.is_reference
        )

    def is_reference(self, model: str, field: str) -> bool:
        return (model, field) in self._keys

    def __contains__(self, key: tuple[str, str]) -> bool:
        return key in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self):
        return iter(sorted(self._keys))

    def __repr__(self) -> str:
        return f"ReferenceIndex({sorted(self._keys)!r})"


def _load_model_file(path: Path) -> ModelDef:
    try:
        raw = yaml.safe_load(path.read_text(encoding='utf-8')) or {}
    except yaml.YAMLError as e:
        raise ModelSchemaError(f"Invalid model file {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ModelSchemaError(f"Invalid model file {path}: expected a mapping, got {type(raw).__name__}")
    raw.setdefault("name", path.stem)
    try:
        return ModelDef.model_validate(raw)
    except ValidationError as e:
        raise ModelSchemaError(f"Invalid model file {path}: {e}") from e


def load_models(models_dir: Path) -> list[ModelDef]:
    """Load one ModelDef per YAML file under models_dir, sorted by path. Missing dir -> []."""
    if not models_dir.is_dir():
        return []
    files = sorted(p for p in models_dir.rglob('*') if p.suffix in MODEL_EXTENSIONS)
    return [_load_model_file(p) for p in files]


@lru_cache(maxsize=None)
def _cached_index(models_dir: Path) -> ReferenceIndex:
    return ReferenceIndex.from_models(load_models(models_dir))


def load_reference_index(models_dir: Path) -> ReferenceIndex:
    """Build (once per directory) the reference index for the models under models_dir."""
    return _cached_index(models_dir.resolve())
