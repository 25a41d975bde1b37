from deltaindex.domain.index.service.delta import DeltaService
from deltaindex.domain.index.service.record_type import RecordTypeDeltas

__all__ = ["DeltaService", "RecordTypeDeltas"]
