"""IndexDefinitionProvider port - source of index declarations per record type."""

from abc import abstractmethod
from collections.abc import Sequence
from typing import Protocol

from deltaindex.domain.index.model.descriptor import IndexDescriptor
from deltaindex.domain.shared.port import Port


class IndexDefinitionProvider(Port, Protocol):
    """Supplies the ordered index descriptors configured for a record type."""

    @abstractmethod
    def definitions(self, record_type: type) -> Sequence[IndexDescriptor]:
        """Return the descriptors for a record type, or an empty sequence if none."""
        ...
