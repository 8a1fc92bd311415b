"""Listing, retrieving and deleting models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .transport import Transport


def _get(data: Mapping, key: str, default: Any) -> Any:
    value = data.get(key)
    return default if value is None else value


@dataclass
class Permission:
    created_at: int = 0
    id: str = ""
    object: str = ""
    allow_create_engine: bool = False
    allow_sampling: bool = False
    allow_logprobs: bool = False
    allow_search_indices: bool = False
    allow_view: bool = False
    allow_fine_tuning: bool = False
    organization: str = ""
    group: Any = None
    is_blocking: bool = False

    @classmethod
    def from_dict(cls, data: Mapping) -> Permission:
        return cls(
            created_at=_get(data, "created", 0),
            id=_get(data, "id", ""),
            object=_get(data, "object", ""),
            allow_create_engine=_get(data, "allow_create_engine", False),
            allow_sampling=_get(data, "allow_sampling", False),
            allow_logprobs=_get(data, "allow_logprobs", False),
            allow_search_indices=_get(data, "allow_search_indices", False),
            allow_view=_get(data, "allow_view", False),
            allow_fine_tuning=_get(data, "allow_fine_tuning", False),
            organization=_get(data, "organization", ""),
            group=data.get("group"),
            is_blocking=_get(data, "is_blocking", False),
        )


@dataclass
class Model:
    created_at: int = 0
    id: str = ""
    object: str = ""
    owned_by: str = ""
    permission: list[Permission] = field(default_factory=list)
    root: str = ""
    parent: str = ""

    @classmethod
    def from_dict(cls, data: Mapping) -> Model:
        return cls(
            created_at=_get(data, "created", 0),
            id=_get(data, "id", ""),
            object=_get(data, "object", ""),
            owned_by=_get(data, "owned_by", ""),
            permission=[Permission.from_dict(p) for p in _get(data, "permission", [])],
            root=_get(data, "root", ""),
            parent=_get(data, "parent", ""),
        )


@dataclass
class FineTuneModelDeleteResponse:
    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: Mapping) -> FineTuneModelDeleteResponse:
        return cls(
            id=_get(data, "id", ""),
            object=_get(data, "object", ""),
            deleted=_get(data, "deleted", False),
        )


@dataclass
class ModelsList:
    models: list[Model] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping) -> ModelsList:
        return cls(models=[Model.from_dict(m) for m in _get(data, "data", [])])


class Models:
    """The models endpoints."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def list(self) -> ModelsList:
        """List the available models."""
        return ModelsList.from_dict(self._transport.request("GET", "/models") or {})

    def get(self, model_id: str) -> Model:
        """Retrieve one model."""
        return Model.from_dict(self._transport.request("GET", f"/models/{model_id}") or {})

    def delete_fine_tune(self, model_id: str) -> FineTuneModelDeleteResponse:
        """Delete a fine-tuned model."""
        data = self._transport.request("DELETE", f"/models/{model_id}")
        return FineTuneModelDeleteResponse.from_dict(data or {})