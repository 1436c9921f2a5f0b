"""Persistence backends: the local record store and the remote API client."""

from skillflow.storage.api_client import ApiError, SkillFlowApiClient
from skillflow.storage.record_store import MemoryRecordStore, RecordStore, SqlRecordStore

__all__ = [
    "ApiError",
    "MemoryRecordStore",
    "RecordStore",
    "SkillFlowApiClient",
    "SqlRecordStore",
]
