"""Ports consumed by the index delta domain."""

from deltaindex.domain.index.port.change_oracle import ChangeOracle
from deltaindex.domain.index.port.definitions import IndexDefinitionProvider
from deltaindex.domain.index.port.rebuild import RebuildExecutor

__all__ = ["ChangeOracle", "IndexDefinitionProvider", "RebuildExecutor"]
