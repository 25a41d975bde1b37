"""SQLAlchemy ORM adapter for the ChangeOracle port."""

from typing import Any

from sqlalchemy import inspect
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.orm import InstanceState

from deltaindex.domain.index.model.descriptor import AttributeRef, FieldRef
from deltaindex.domain.index.port.change_oracle import ChangeOracle
from deltaindex.domain.shared.error import ChangeDetectionError


class SqlAlchemyChangeOracle(ChangeOracle):
    """Detects changes from the ORM's attribute history.

    History is only meaningful until the session flushes, so the oracle must
    be consulted from before_flush (see install_delta_hooks) or earlier.
    """

    def is_new(self, record: Any) -> bool:
        state = self._state(record)
        return state.transient or state.pending

    def field_changed(self, record: Any, field: FieldRef) -> bool:
        return self._changed(record, field.name)

    def attribute_changed(self, record: Any, attribute: AttributeRef) -> bool:
        return self._changed(record, attribute.name)

    def _state(self, record: Any) -> InstanceState:
        try:
            return inspect(record)
        except NoInspectionAvailable as e:
            raise ChangeDetectionError(
                f"{type(record).__name__} is not a mapped SQLAlchemy class"
            ) from e

    def _changed(self, record: Any, name: str) -> bool:
        state = self._state(record)
        try:
            attr = state.attrs[name]
        except KeyError as e:
            raise ChangeDetectionError(
                f"{type(record).__name__} has no mapped attribute '{name}'"
            ) from e
        return attr.history.has_changes()
