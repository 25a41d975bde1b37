from deltaindex.infrastructure.http.rebuild_executor import HttpRebuildExecutor

__all__ = ["HttpRebuildExecutor"]
