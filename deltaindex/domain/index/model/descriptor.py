"""Index descriptors - which fields and attributes of a record type an index reads."""

from enum import Enum
from typing import TYPE_CHECKING, Any

from deltaindex.domain.shared.model.value import ValueObject

if TYPE_CHECKING:
    from deltaindex.domain.index.port.change_oracle import ChangeOracle


class DeltaKind(str, Enum):
    """How an index keeps its delta up to date."""

    FLAG = "flag"  # boolean column on the record, rebuilt on commit
    SCHEDULED = "scheduled"  # timestamp driven, rebuilt by a periodic job


class FieldRef(ValueObject):
    """A full-text field of an index."""

    name: str

    def changed(self, record: Any, oracle: "ChangeOracle") -> bool:
        return oracle.field_changed(record, self)


class AttributeRef(ValueObject):
    """A filter/sort attribute of an index.

    Attributes:
        name: Attribute name on the record.
        public: Whether the attribute is visible to the search surface.
        updatable: Whether the index can refresh the value in place, without
            re-indexing the record.
    """

    name: str
    public: bool = True
    updatable: bool = False

    def changed(self, record: Any, oracle: "ChangeOracle") -> bool:
        return oracle.attribute_changed(record, self)

    @property
    def requires_reindex(self) -> bool:
        """A change to this attribute can only reach the index through a delta."""
        return self.public and not self.updatable


class IndexDescriptor(ValueObject):
    """Static declaration of an index over one record type.

    Descriptors are immutable and shared by every delta operation for the
    record type they describe.
    """

    name: str
    fields: tuple[FieldRef, ...] = ()
    attributes: tuple[AttributeRef, ...] = ()
    delta: DeltaKind | None = None

    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def attribute_names(self) -> list[str]:
        return [a.name for a in self.attributes]

    def delta_attributes(self) -> list[AttributeRef]:
        """Attributes whose changes make a record dirty."""
        return [a for a in self.attributes if a.requires_reindex]

    def has_field(self, name: str) -> bool:
        return any(f.name == name for f in self.fields)

    def has_attribute(self, name: str) -> bool:
        return any(a.name == name for a in self.attributes)

    def indexed_data_changed(self, record: Any, oracle: "ChangeOracle") -> bool:
        """Whether any field, or any public non-updatable attribute, changed.

        Evaluation short-circuits in declaration order: fields first, then
        attributes. Updatable and non-public attributes never reach the oracle.
        """
        if any(f.changed(record, oracle) for f in self.fields):
            return True
        return any(a.changed(record, oracle) for a in self.delta_attributes())
