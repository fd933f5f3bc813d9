"""Reflective field walker.

Enumerates the exported fields of a record together with their parsed
directives. Records are dataclass instances or pydantic models; the directive
tag lives in the field's metadata under a configurable key:

    @dataclass
    class User:
        name: str = field(metadata={"validate": "not_empty,max:40"})

    class User(BaseModel):
        name: str = Field(json_schema_extra={"validate": "not_empty,max:40"})

Fields of one pass live in a FieldArena. A Field refers to its parent by
arena handle rather than by object reference, so the dotted path is computed
from the arena and nothing outlives the pass.
"""
from __future__ import annotations

import dataclasses
import typing
import weakref
from dataclasses import dataclass
from typing import Any, Iterator

from pydantic import BaseModel

from tagvalidate.core.config import settings
from tagvalidate.core.errors import AppError, Err, Ok, Result, invalid_record
from tagvalidate.core.logging import validation_logger

from .directives import Directive, parse_tag

log = validation_logger()

PATH_SEPARATOR = "."


@dataclass(frozen=True, slots=True, eq=False)
class Field:
    """One record field as seen by a validation pass."""
    arena: FieldArena = dataclasses.field(repr=False)
    handle: int
    parent: int | None
    name: str
    value: Any
    directives: tuple[Directive, ...] = ()
    declared_type: Any = None
    owner: str = ""

    def full_name(self, *postfix: str) -> str:
        """Dotted path of this field, optionally extended by `postfix` segments.

        Ancestors with an empty name are skipped.
        """
        full_name = self.name
        parent = self.parent

        while parent is not None:
            ancestor = self.arena[parent]
            if ancestor.name:
                full_name = ancestor.name + PATH_SEPARATOR + full_name
            parent = ancestor.parent

        if postfix:
            if full_name:
                full_name += PATH_SEPARATOR
            full_name += PATH_SEPARATOR.join(postfix)

        return full_name


class FieldArena:
    """Append-only store of the Fields built during one pass."""

    def __init__(self) -> None:
        self._fields: list[Field] = []

    def add(
        self,
        name: str,
        value: Any,
        *,
        parent: int | None = None,
        directives: tuple[Directive, ...] = (),
        declared_type: Any = None,
        owner: str = "",
    ) -> Field:
        if parent is not None and not 0 <= parent < len(self._fields):
            raise IndexError(f"Unknown parent handle {parent}")
        field = Field(
            arena=self,
            handle=len(self._fields),
            parent=parent,
            name=name,
            value=value,
            directives=directives,
            declared_type=declared_type,
            owner=owner,
        )
        self._fields.append(field)
        return field

    def __getitem__(self, handle: int) -> Field:
        return self._fields[handle]

    def __len__(self) -> int:
        return len(self._fields)

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields)


def is_record(value: Any) -> bool:
    """True for dataclass instances and pydantic model instances."""
    if isinstance(value, BaseModel):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError):
        # Unresolvable forward references; fall back to raw annotations
        return {}


def _dataclass_members(record: Any, tag_key: str) -> Iterator[tuple[str, Any, str | None, Any]]:
    hints = _type_hints(type(record))
    for member in dataclasses.fields(record):
        yield (
            member.name,
            getattr(record, member.name),
            member.metadata.get(tag_key),
            hints.get(member.name, member.type),
        )


def _model_members(record: BaseModel, tag_key: str) -> Iterator[tuple[str, Any, str | None, Any]]:
    for name, info in type(record).model_fields.items():
        extra = info.json_schema_extra
        tag = extra.get(tag_key) if isinstance(extra, dict) else None
        yield name, getattr(record, name), tag, info.annotation


def walk(
    record: Any,
    tag_key: str | None = None,
    *,
    arena: FieldArena | None = None,
    parent: int | None = None,
) -> Result[list[Field], AppError]:
    """Enumerate the exported fields of `record` with their directives.

    A `weakref.ref` to a record is dereferenced once. Fields whose names start
    with an underscore are not exported and are skipped. A tag parse error
    fails the whole walk; no Field is added to the arena in that case.
    """
    tag_key = tag_key or settings.TAG_KEY
    if isinstance(record, weakref.ref):
        record = record()
    if not is_record(record):
        return invalid_record(record, origin="field_walker")

    members = _model_members(record, tag_key) if isinstance(record, BaseModel) else _dataclass_members(record, tag_key)

    parsed: list[tuple[str, Any, tuple[Directive, ...], Any]] = []
    for name, value, tag, declared_type in members:
        if name.startswith("_"):
            continue
        match parse_tag(tag):
            case Ok(directives):
                parsed.append((name, value, directives, declared_type))
            case Err(error):
                log.warning("tag_parse_failed", record=type(record).__name__, field=name, tag=tag)
                return Err(error.with_metadata(struct=type(record).__name__, field=name))

    arena = arena if arena is not None else FieldArena()
    owner = type(record).__name__
    fields = [
        arena.add(name, value, parent=parent, directives=directives, declared_type=declared_type, owner=owner)
        for name, value, directives, declared_type in parsed
    ]
    log.debug("fields_walked", record=owner, count=len(fields))
    return Ok(fields)
