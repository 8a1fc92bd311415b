"""Vector stores, their files and file batches."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .run import Pagination
from .transport import Transport

VECTOR_STORES_SUFFIX = "/vector_stores"
VECTOR_STORES_FILES_SUFFIX = "/files"
VECTOR_STORES_FILE_BATCHES_SUFFIX = "/file_batches"


def _get(data: Mapping, key: str, default: Any) -> Any:
    value = data.get(key)
    return default if value is None else value


@dataclass
class VectorStoreFileCount:
    in_progress: int = 0
    completed: int = 0
    failed: int = 0
    cancelled: int = 0
    total: int = 0

    @classmethod
    def from_dict(cls, data: Mapping) -> VectorStoreFileCount:
        return cls(
            in_progress=_get(data, "in_progress", 0),
            completed=_get(data, "completed", 0),
            failed=_get(data, "failed", 0),
            cancelled=_get(data, "cancelled", 0),
            total=_get(data, "total", 0),
        )


@dataclass
class VectorStoreExpires:
    anchor: str = ""
    days: int = 0

    @classmethod
    def from_dict(cls, data: Mapping) -> VectorStoreExpires:
        return cls(anchor=_get(data, "anchor", ""), days=_get(data, "days", 0))


def _expires_to_dict(expires: VectorStoreExpires) -> dict[str, Any]:
    return {"anchor": expires.anchor, "days": expires.days}


@dataclass
class VectorStore:
    id: str = ""
    object: str = ""
    created_at: int = 0
    name: str = ""
    usage_bytes: int = 0
    file_counts: VectorStoreFileCount = field(default_factory=VectorStoreFileCount)
    status: str = ""
    expires_after: VectorStoreExpires | None = None
    expires_at: int | None = None
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> VectorStore:
        expires = data.get("expires_after")
        return cls(
            id=_get(data, "id", ""),
            object=_get(data, "object", ""),
            created_at=_get(data, "created_at", 0),
            name=_get(data, "name", ""),
            usage_bytes=_get(data, "usage_bytes", 0),
            file_counts=VectorStoreFileCount.from_dict(_get(data, "file_counts", {})),
            status=_get(data, "status", ""),
            expires_after=VectorStoreExpires.from_dict(expires) if expires is not None else None,
            expires_at=data.get("expires_at"),
            metadata=data.get("metadata"),
        )


@dataclass
class VectorStoreRequest:
    """Parameters for creating or modifying a vector store; empty fields are not sent."""

    name: str = ""
    file_ids: list[str] = field(default_factory=list)
    expires_after: VectorStoreExpires | None = None
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if self.name:
            body["name"] = self.name
        if self.file_ids:
            body["file_ids"] = list(self.file_ids)
        if self.expires_after is not None:
            body["expires_after"] = _expires_to_dict(self.expires_after)
        if self.metadata:
            body["metadata"] = self.metadata
        return body


@dataclass
class VectorStoresList:
    vector_stores: list[VectorStore] = field(default_factory=list)
    last_id: str | None = None
    first_id: str | None = None
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: Mapping) -> VectorStoresList:
        return cls(
            vector_stores=[VectorStore.from_dict(s) for s in _get(data, "data", [])],
            last_id=data.get("last_id"),
            first_id=data.get("first_id"),
            has_more=bool(data.get("has_more")),
        )


@dataclass
class VectorStoreDeleteResponse:
    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: Mapping) -> VectorStoreDeleteResponse:
        return cls(
            id=_get(data, "id", ""),
            object=_get(data, "object", ""),
            deleted=bool(data.get("deleted")),
        )


@dataclass
class VectorStoreFile:
    id: str = ""
    object: str = ""
    created_at: int = 0
    vector_store_id: str = ""
    usage_bytes: int = 0
    status: str = ""

    @classmethod
    def from_dict(cls, data: Mapping) -> VectorStoreFile:
        return cls(
            id=_get(data, "id", ""),
            object=_get(data, "object", ""),
            created_at=_get(data, "created_at", 0),
            vector_store_id=_get(data, "vector_store_id", ""),
            usage_bytes=_get(data, "usage_bytes", 0),
            status=_get(data, "status", ""),
        )


@dataclass
class VectorStoreFileRequest:
    file_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"file_id": self.file_id}


@dataclass
class VectorStoreFilesList:
    vector_store_files: list[VectorStoreFile] = field(default_factory=list)
    first_id: str | None = None
    last_id: str | None = None
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: Mapping) -> VectorStoreFilesList:
        return cls(
            vector_store_files=[VectorStoreFile.from_dict(f) for f in _get(data, "data", [])],
            first_id=data.get("first_id"),
            last_id=data.get("last_id"),
            has_more=bool(data.get("has_more")),
        )


@dataclass
class VectorStoreFileBatch:
    id: str = ""
    object: str = ""
    created_at: int = 0
    vector_store_id: str = ""
    status: str = ""
    file_counts: VectorStoreFileCount = field(default_factory=VectorStoreFileCount)

    @classmethod
    def from_dict(cls, data: Mapping) -> VectorStoreFileBatch:
        return cls(
            id=_get(data, "id", ""),
            object=_get(data, "object", ""),
            created_at=_get(data, "created_at", 0),
            vector_store_id=_get(data, "vector_store_id", ""),
            status=_get(data, "status", ""),
            file_counts=VectorStoreFileCount.from_dict(_get(data, "file_counts", {})),
        )


@dataclass
class VectorStoreFileBatchRequest:
    file_ids: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"file_ids": list(self.file_ids)}


class VectorStores:
    """The vector store endpoints."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def _call(self, method: str, suffix: str, body: Any = None) -> Mapping:
        return self._transport.request(method, suffix, body, beta=True) or {}

    @staticmethod
    def _store(vector_store_id: str) -> str:
        return f"{VECTOR_STORES_SUFFIX}/{vector_store_id}"

    def create(self, request: VectorStoreRequest) -> VectorStore:
        return VectorStore.from_dict(self._call("POST", VECTOR_STORES_SUFFIX, request.to_dict()))

    def retrieve(self, vector_store_id: str) -> VectorStore:
        return VectorStore.from_dict(self._call("GET", self._store(vector_store_id)))

    def modify(self, vector_store_id: str, request: VectorStoreRequest) -> VectorStore:
        data = self._call("POST", self._store(vector_store_id), request.to_dict())
        return VectorStore.from_dict(data)

    def delete(self, vector_store_id: str) -> VectorStoreDeleteResponse:
        data = self._call("DELETE", self._store(vector_store_id))
        return VectorStoreDeleteResponse.from_dict(data)

    def list(self, pagination: Pagination) -> VectorStoresList:
        data = self._call("GET", f"{VECTOR_STORES_SUFFIX}{pagination.to_query()}")
        return VectorStoresList.from_dict(data)

    def create_file(self, vector_store_id: str, request: VectorStoreFileRequest) -> VectorStoreFile:
        suffix = f"{self._store(vector_store_id)}{VECTOR_STORES_FILES_SUFFIX}"
        return VectorStoreFile.from_dict(self._call("POST", suffix, request.to_dict()))

    def retrieve_file(self, vector_store_id: str, file_id: str) -> VectorStoreFile:
        suffix = f"{self._store(vector_store_id)}{VECTOR_STORES_FILES_SUFFIX}/{file_id}"
        return VectorStoreFile.from_dict(self._call("GET", suffix))

    def delete_file(self, vector_store_id: str, file_id: str) -> None:
        """Delete a file from a vector store; the response body is not inspected."""
        suffix = f"{self._store(vector_store_id)}{VECTOR_STORES_FILES_SUFFIX}/{file_id}"
        try:
            self._transport.request("DELETE", suffix, beta=True)
        except ValueError:
            # The body carries nothing this call returns, so an undecodable one is fine.
            pass

    def list_files(self, vector_store_id: str, pagination: Pagination) -> VectorStoreFilesList:
        suffix = (
            f"{self._store(vector_store_id)}{VECTOR_STORES_FILES_SUFFIX}{pagination.to_query()}"
        )
        return VectorStoreFilesList.from_dict(self._call("GET", suffix))

    def create_file_batch(
        self, vector_store_id: str, request: VectorStoreFileBatchRequest
    ) -> VectorStoreFileBatch:
        suffix = f"{self._store(vector_store_id)}{VECTOR_STORES_FILE_BATCHES_SUFFIX}"
        return VectorStoreFileBatch.from_dict(self._call("POST", suffix, request.to_dict()))

    def retrieve_file_batch(self, vector_store_id: str, batch_id: str) -> VectorStoreFileBatch:
        suffix = f"{self._store(vector_store_id)}{VECTOR_STORES_FILE_BATCHES_SUFFIX}/{batch_id}"
        return VectorStoreFileBatch.from_dict(self._call("GET", suffix))

    def cancel_file_batch(self, vector_store_id: str, batch_id: str) -> VectorStoreFileBatch:
        suffix = (
            f"{self._store(vector_store_id)}{VECTOR_STORES_FILE_BATCHES_SUFFIX}/{batch_id}/cancel"
        )
        return VectorStoreFileBatch.from_dict(self._call("POST", suffix))

    def list_files_in_batch(
        self, vector_store_id: str, batch_id: str, pagination: Pagination
    ) -> VectorStoreFilesList:
        suffix = (
            f"{self._store(vector_store_id)}{VECTOR_STORES_FILE_BATCHES_SUFFIX}/{batch_id}"
            f"/files{pagination.to_query()}"
        )
        return VectorStoreFilesList.from_dict(self._call("GET", suffix))