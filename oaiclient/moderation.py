"""Content moderation endpoint."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any

from .transport import Transport

MODERATION_OMNI_LATEST = "omni-moderation-latest"
MODERATION_OMNI_20240926 = "omni-moderation-2024-09-26"
MODERATION_TEXT_STABLE = "text-moderation-stable"
MODERATION_TEXT_LATEST = "text-moderation-latest"
# Deprecated: use MODERATION_TEXT_STABLE or MODERATION_TEXT_LATEST.
MODERATION_TEXT_001 = "text-moderation-001"

VALID_MODERATION_MODELS = frozenset(
    {
        MODERATION_OMNI_LATEST,
        MODERATION_OMNI_20240926,
        MODERATION_TEXT_STABLE,
        MODERATION_TEXT_LATEST,
    }
)

_CATEGORY_KEYS = {
    "hate": "hate",
    "hate_threatening": "hate/threatening",
    "harassment": "harassment",
    "harassment_threatening": "harassment/threatening",
    "self_harm": "self-harm",
    "self_harm_intent": "self-harm/intent",
    "self_harm_instructions": "self-harm/instructions",
    "sexual": "sexual",
    "sexual_minors": "sexual/minors",
    "violence": "violence",
    "violence_graphic": "violence/graphic",
}


class InvalidModerationModelError(ValueError):
    def __init__(self) -> None:
        super().__init__(
            "this model is not supported with moderation, please use "
            "text-moderation-stable or text-moderation-latest instead"
        )


def validate_moderation_model(model: str) -> None:
    """Raise InvalidModerationModelError for a non-empty unsupported model."""
    if model and model not in VALID_MODERATION_MODELS:
        raise InvalidModerationModelError()


@dataclass
class ModerationRequest:
    input: str = ""
    model: str = ""

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if self.input:
            body["input"] = self.input
        if self.model:
            body["model"] = self.model
        return body


def _categories_from(cls: type, data: Mapping, default: Any) -> Any:
    values = {}
    for item in fields(cls):
        value = data.get(_CATEGORY_KEYS[item.name])
        values[item.name] = default if value is None else value
    return cls(**values)


@dataclass
class ResultCategories:
    hate: bool = False
    hate_threatening: bool = False
    harassment: bool = False
    harassment_threatening: bool = False
    self_harm: bool = False
    self_harm_intent: bool = False
    self_harm_instructions: bool = False
    sexual: bool = False
    sexual_minors: bool = False
    violence: bool = False
    violence_graphic: bool = False

    @classmethod
    def from_dict(cls, data: Mapping) -> ResultCategories:
        return _categories_from(cls, data, False)


@dataclass
class ResultCategoryScores:
    hate: float = 0.0
    hate_threatening: float = 0.0
    harassment: float = 0.0
    harassment_threatening: float = 0.0
    self_harm: float = 0.0
    self_harm_intent: float = 0.0
    self_harm_instructions: float = 0.0
    sexual: float = 0.0
    sexual_minors: float = 0.0
    violence: float = 0.0
    violence_graphic: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping) -> ResultCategoryScores:
        return _categories_from(cls, data, 0.0)


@dataclass
class Result:
    categories: ResultCategories = field(default_factory=ResultCategories)
    category_scores: ResultCategoryScores = field(default_factory=ResultCategoryScores)
    flagged: bool = False

    @classmethod
    def from_dict(cls, data: Mapping) -> Result:
        return cls(
            categories=ResultCategories.from_dict(data.get("categories") or {}),
            category_scores=ResultCategoryScores.from_dict(data.get("category_scores") or {}),
            flagged=bool(data.get("flagged")),
        )


@dataclass
class ModerationResponse:
    id: str = ""
    model: str = ""
    results: list[Result] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping) -> ModerationResponse:
        return cls(
            id=data.get("id") or "",
            model=data.get("model") or "",
            results=[Result.from_dict(r) for r in data.get("results") or []],
        )


class Moderations:
    """The moderations endpoint."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def create(self, request: ModerationRequest) -> ModerationResponse:
        """Classify the input text against the usage policies."""
        validate_moderation_model(request.model)
        data = self._transport.request("POST", "/moderations", request.to_dict())
        return ModerationResponse.from_dict(data or {})