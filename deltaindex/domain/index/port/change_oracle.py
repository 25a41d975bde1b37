"""ChangeOracle port - per-value change detection on record instances."""

from abc import abstractmethod
from typing import Any, Protocol

from deltaindex.domain.index.model.descriptor import AttributeRef, FieldRef
from deltaindex.domain.shared.port import Port


class ChangeOracle(Port, Protocol):
    """Answers whether a record, or one of its values, changed since it was loaded.

    Implementations compare against whatever baseline the record store keeps
    (loaded snapshot, attribute history, ...). When a comparison is impossible
    they raise ChangeDetectionError rather than guessing.
    """

    @abstractmethod
    def is_new(self, record: Any) -> bool:
        """Whether the record has never been persisted."""
        ...

    @abstractmethod
    def field_changed(self, record: Any, field: FieldRef) -> bool:
        """Whether the value behind an index field changed."""
        ...

    @abstractmethod
    def attribute_changed(self, record: Any, attribute: AttributeRef) -> bool:
        """Whether the value behind an index attribute changed."""
        ...
