"""Module: field_information.py

Author: Michael Economou
Date: 2026-10-02

Data field model.

A FieldSet is the ordered list of data fields attached to one group. It is a
value type: copies never share FieldInformation instances, and the owner name
of every field always matches the owner of the set.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from tablegroups.config import DEFAULT_FIELD_SIZE
from tablegroups.core.errors import DuplicateNameError, EmptyNameError, NotFoundError


class InputType(Enum):
    """Input types a data field value can be validated against."""

    TEXT = "Text"
    ALPHANUMERIC = "Alphanumeric"
    INTEGER = "Integer"
    NON_NEGATIVE_INTEGER = "Non-negative integer"
    POSITIVE_INTEGER = "Positive integer"
    FLOAT = "Floating point"
    HEXADECIMAL = "Hexadecimal"
    BOOLEAN = "Boolean"
    MESSAGE_ID = "Message ID"
    MESSAGE_NAME_AND_ID = "Message name & ID"
    SEPARATOR = "Separator"
    BREAK = "Break"

    @classmethod
    def from_value(cls, value: InputType | str) -> InputType:
        """Resolve an InputType from a member, member name or display value."""
        if isinstance(value, cls):
            return value
        try:
            return cls[value]
        except KeyError:
            return cls(value)


@dataclass
class FieldInformation:
    """One data field of a group.

    Attributes:
        owner_name: Name of the owning group
        field_name: Field name, unique within the owner's FieldSet
        description: Field description (tool tip text)
        input_type: Input type of the value
        size: Display width of the value, in characters
        value: Field value
        is_required: True if a value must be supplied
    """

    owner_name: str
    field_name: str
    description: str = ""
    input_type: InputType = InputType.TEXT
    size: int = DEFAULT_FIELD_SIZE
    value: str = ""
    is_required: bool = False

    def __post_init__(self) -> None:
        self.input_type = InputType.from_value(self.input_type)

    def copy(self, owner_name: str | None = None) -> FieldInformation:
        """Return a copy, optionally assigned to another owner."""
        if owner_name is None:
            return replace(self)
        return replace(self, owner_name=owner_name)

    def differs_from(self, other: FieldInformation) -> bool:
        """Check the stored attributes against another field, ignoring the owner.

        Attributes are compared in a fixed order and the check stops at the
        first difference.
        """
        return (
            self.field_name != other.field_name
            or self.description != other.description
            or self.input_type != other.input_type
            or self.size != other.size
            or self.value != other.value
            or self.is_required != other.is_required
        )

    @classmethod
    def from_mapping(cls, owner_name: str, data: Mapping[str, Any]) -> FieldInformation:
        """Build a field from a plain mapping (configuration, store rows)."""
        return cls(
            owner_name=owner_name,
            field_name=data["field_name"],
            description=data.get("description", ""),
            input_type=InputType.from_value(data.get("input_type", InputType.TEXT)),
            size=int(data.get("size", DEFAULT_FIELD_SIZE)),
            value=str(data.get("value", "")),
            is_required=bool(data.get("is_required", False)),
        )


class FieldSet:
    """Ordered collection of data fields owned by one group."""

    def __init__(self, owner_name: str = "", fields: Iterable[FieldInformation] | None = None):
        self._owner_name = owner_name
        self._fields: list[FieldInformation] = []
        for field_info in fields or ():
            self.add_field(field_info)

    @property
    def owner_name(self) -> str:
        return self._owner_name

    def retarget(self, owner_name: str) -> None:
        """Assign the set, and every field in it, to another owner."""
        self._owner_name = owner_name
        for field_info in self._fields:
            field_info.owner_name = owner_name

    def copy(self, owner_name: str | None = None) -> FieldSet:
        """Return a deep copy, optionally assigned to another owner."""
        owner = self._owner_name if owner_name is None else owner_name
        return FieldSet(owner, (field_info.copy(owner) for field_info in self._fields))

    # =====================================
    # Field access
    # =====================================

    def add_field(self, field_info: FieldInformation, index: int | None = None) -> FieldInformation:
        """Add a copy of a field, owned by this set.

        Args:
            field_info: Field to add
            index: Position to insert at; appended when None

        Returns:
            The stored field

        Raises:
            EmptyNameError: If the field name is blank
            DuplicateNameError: If the set already has a field with this name

        """
        field_name = field_info.field_name.strip()
        if not field_name:
            raise EmptyNameError("Field")
        if self.has_field(field_name):
            raise DuplicateNameError(field_name, kind="Field")

        stored = replace(field_info, owner_name=self._owner_name, field_name=field_name)
        if index is None:
            self._fields.append(stored)
        else:
            self._fields.insert(index, stored)
        return stored

    def has_field(self, field_name: str) -> bool:
        return any(f.field_name == field_name for f in self._fields)

    def get_field(self, field_name: str) -> FieldInformation | None:
        for field_info in self._fields:
            if field_info.field_name == field_name:
                return field_info
        return None

    def index_of(self, field_name: str) -> int:
        for index, field_info in enumerate(self._fields):
            if field_info.field_name == field_name:
                return index
        raise NotFoundError(field_name, kind="Field")

    def remove_field(self, field_name: str) -> FieldInformation:
        """Remove a field by name and return it."""
        return self._fields.pop(self.index_of(field_name))

    def set_value(self, field_name: str, value: str) -> None:
        """Set the value of a field by name."""
        self._fields[self.index_of(field_name)].value = value

    def clear_values(self) -> None:
        """Blank the value of every field."""
        for field_info in self._fields:
            field_info.value = ""

    def field_names(self) -> list[str]:
        return [f.field_name for f in self._fields]

    def values(self) -> dict[str, str]:
        """Map of field name to value, in field order."""
        return {f.field_name: f.value for f in self._fields}

    # =====================================
    # Comparison
    # =====================================

    def differs_from(self, other: FieldSet) -> bool:
        """Compare two sets element-wise in list order.

        Sets of different length differ; otherwise the first pair of fields
        at the same position that differ decides. A pure reordering of the
        same fields therefore counts as a difference.
        """
        if len(self._fields) != len(other._fields):
            return True
        return any(mine.differs_from(theirs) for mine, theirs in zip(self._fields, other._fields))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldSet):
            return NotImplemented
        return self._owner_name == other._owner_name and self._fields == other._fields

    def __iter__(self) -> Iterator[FieldInformation]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __getitem__(self, index: int) -> FieldInformation:
        return self._fields[index]

    def __bool__(self) -> bool:
        return bool(self._fields)

    def __repr__(self) -> str:
        return f"FieldSet(owner_name={self._owner_name!r}, fields={self.field_names()!r})"
