"""Assistant threads and their request/response types."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .transport import Transport

THREADS_SUFFIX = "/threads"


class ChunkingStrategyType(str, Enum):
    AUTO = "auto"
    STATIC = "static"


class ThreadMessageRole(str, Enum):
    ASSISTANT = "assistant"
    USER = "user"


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _drop_empty(mapping: Mapping[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in mapping.items() if v is not None and v != "" and v != [] and v != {}}


def _drop_none(mapping: Mapping[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in mapping.items() if v is not None}


@dataclass
class StaticChunkingStrategy:
    max_chunk_size_tokens: int = 0
    chunk_overlap_tokens: int = 0


@dataclass
class ChunkingStrategy:
    type: ChunkingStrategyType | str = ChunkingStrategyType.AUTO
    static: StaticChunkingStrategy | None = None


def _chunking_to_dict(strategy: ChunkingStrategy) -> dict[str, Any]:
    body: dict[str, Any] = {"type": _plain(strategy.type)}
    if strategy.static is not None:
        body["static"] = {
            "max_chunk_size_tokens": strategy.static.max_chunk_size_tokens,
            "chunk_overlap_tokens": strategy.static.chunk_overlap_tokens,
        }
    return body


@dataclass
class VectorStoreToolResources:
    file_ids: list[str] = field(default_factory=list)
    chunking_strategy: ChunkingStrategy | None = None
    metadata: dict[str, Any] | None = None


def _vector_store_to_dict(store: VectorStoreToolResources) -> dict[str, Any]:
    return _drop_empty(
        {
            "file_ids": list(store.file_ids),
            "chunking_strategy": (
                _chunking_to_dict(store.chunking_strategy) if store.chunking_strategy else None
            ),
            "metadata": store.metadata,
        }
    )


@dataclass
class CodeInterpreterToolResources:
    file_ids: list[str] = field(default_factory=list)


@dataclass
class FileSearchToolResources:
    vector_store_ids: list[str] = field(default_factory=list)


@dataclass
class ToolResources:
    code_interpreter: CodeInterpreterToolResources | None = None
    file_search: FileSearchToolResources | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none(
            {
                "code_interpreter": (
                    _drop_empty({"file_ids": list(self.code_interpreter.file_ids)})
                    if self.code_interpreter is not None
                    else None
                ),
                "file_search": (
                    _drop_empty({"vector_store_ids": list(self.file_search.vector_store_ids)})
                    if self.file_search is not None
                    else None
                ),
            }
        )

    @classmethod
    def from_dict(cls, data: Mapping) -> ToolResources:
        code = data.get("code_interpreter")
        search = data.get("file_search")
        return cls(
            code_interpreter=(
                CodeInterpreterToolResources(file_ids=list(code.get("file_ids") or []))
                if code is not None
                else None
            ),
            file_search=(
                FileSearchToolResources(vector_store_ids=list(search.get("vector_store_ids") or []))
                if search is not None
                else None
            ),
        )


@dataclass
class CodeInterpreterToolResourcesRequest:
    file_ids: list[str] = field(default_factory=list)


@dataclass
class FileSearchToolResourcesRequest:
    vector_store_ids: list[str] = field(default_factory=list)
    vector_stores: list[VectorStoreToolResources] = field(default_factory=list)


@dataclass
class ToolResourcesRequest:
    code_interpreter: CodeInterpreterToolResourcesRequest | None = None
    file_search: FileSearchToolResourcesRequest | None = None

    def to_dict(self) -> dict[str, Any]:
        code = self.code_interpreter
        search = self.file_search
        return _drop_none(
            {
                "code_interpreter": (
                    _drop_empty({"file_ids": list(code.file_ids)}) if code is not None else None
                ),
                "file_search": (
                    _drop_empty(
                        {
                            "vector_store_ids": list(search.vector_store_ids),
                            "vector_stores": [_vector_store_to_dict(s) for s in search.vector_stores],
                        }
                    )
                    if search is not None
                    else None
                ),
            }
        )


@dataclass
class ThreadAttachmentTool:
    type: str = ""


@dataclass
class ThreadAttachment:
    file_id: str = ""
    tools: list[ThreadAttachmentTool] = field(default_factory=list)


@dataclass
class ThreadMessage:
    role: ThreadMessageRole | str
    content: str
    file_ids: list[str] = field(default_factory=list)
    attachments: list[ThreadAttachment] = field(default_factory=list)
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"role": _plain(self.role), "content": self.content}
        body.update(
            _drop_empty(
                {
                    "file_ids": list(self.file_ids),
                    "attachments": [
                        {"file_id": a.file_id, "tools": [{"type": t.type} for t in a.tools]}
                        for a in self.attachments
                    ],
                    "metadata": self.metadata,
                }
            )
        )
        return body

    @classmethod
    def from_dict(cls, data: Mapping) -> ThreadMessage:
        role = data.get("role") or ""
        try:
            role = ThreadMessageRole(role)
        except ValueError:
            pass
        return cls(
            role=role,
            content=data.get("content") or "",
            file_ids=list(data.get("file_ids") or []),
            attachments=[
                ThreadAttachment(
                    file_id=a.get("file_id") or "",
                    tools=[ThreadAttachmentTool(type=t.get("type") or "") for t in a.get("tools") or []],
                )
                for a in data.get("attachments") or []
            ],
            metadata=data.get("metadata"),
        )


@dataclass
class ThreadRequest:
    messages: list[ThreadMessage] = field(default_factory=list)
    metadata: dict[str, Any] | None = None
    tool_resources: ToolResourcesRequest | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_empty(
            {
                "messages": [m.to_dict() for m in self.messages],
                "metadata": self.metadata,
                "tool_resources": (
                    self.tool_resources.to_dict() if self.tool_resources is not None else None
                ),
            }
        )


@dataclass
class ModifyThreadRequest:
    metadata: dict[str, Any] | None = None
    tool_resources: ToolResources | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"metadata": self.metadata}
        if self.tool_resources is not None:
            body["tool_resources"] = self.tool_resources.to_dict()
        return body


@dataclass
class Thread:
    id: str = ""
    object: str = ""
    created_at: int = 0
    metadata: dict[str, Any] | None = None
    tool_resources: ToolResources = field(default_factory=ToolResources)

    @classmethod
    def from_dict(cls, data: Mapping) -> Thread:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            metadata=data.get("metadata"),
            tool_resources=ToolResources.from_dict(data.get("tool_resources") or {}),
        )


@dataclass
class ThreadDeleteResponse:
    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: Mapping) -> ThreadDeleteResponse:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            deleted=bool(data.get("deleted")),
        )


class Threads:
    """The assistant threads endpoints."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def create(self, request: ThreadRequest) -> Thread:
        data = self._transport.request("POST", THREADS_SUFFIX, request.to_dict(), beta=True)
        return Thread.from_dict(data or {})

    def retrieve(self, thread_id: str) -> Thread:
        data = self._transport.request("GET", f"{THREADS_SUFFIX}/{thread_id}", beta=True)
        return Thread.from_dict(data or {})

    def modify(self, thread_id: str, request: ModifyThreadRequest) -> Thread:
        data = self._transport.request(
            "POST", f"{THREADS_SUFFIX}/{thread_id}", request.to_dict(), beta=True
        )
        return Thread.from_dict(data or {})

    def delete(self, thread_id: str) -> ThreadDeleteResponse:
        data = self._transport.request("DELETE", f"{THREADS_SUFFIX}/{thread_id}", beta=True)
        return ThreadDeleteResponse.from_dict(data or {})