"""SQLAlchemy adapters for delta tracking."""

from deltaindex.infrastructure.persistence.change_oracle import SqlAlchemyChangeOracle
from deltaindex.infrastructure.persistence.hooks import commit_with_deltas, install_delta_hooks

__all__ = ["SqlAlchemyChangeOracle", "commit_with_deltas", "install_delta_hooks"]
