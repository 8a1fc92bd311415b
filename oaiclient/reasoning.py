"""Parameter checks for reasoning (o-series) chat models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_MAX_TOKENS_MESSAGE = "this model is not supported MaxTokens, please use MaxCompletionTokens"
_LOGPROBS_MESSAGE = "this model has beta-limitations, logprobs not supported"
_FIXED_PARAMETERS_MESSAGE = (
    "this model has beta-limitations, temperature, top_p and n are fixed at 1, "
    "while presence_penalty and frequency_penalty are fixed at 0"
)
_REASONING_PREFIXES = ("o1", "o3", "o4")


class ReasoningModelError(ValueError):
    """A request uses a parameter that reasoning models do not accept."""


class MaxTokensDeprecatedError(ReasoningModelError):
    def __init__(self, message: str = _MAX_TOKENS_MESSAGE) -> None:
        super().__init__(message)


class LogprobsNotSupportedError(ReasoningModelError):
    def __init__(self, message: str = _LOGPROBS_MESSAGE) -> None:
        super().__init__(message)


class FixedParametersError(ReasoningModelError):
    def __init__(self, message: str = _FIXED_PARAMETERS_MESSAGE) -> None:
        super().__init__(message)


def is_reasoning_model(model: str | None) -> bool:
    """Whether the model name belongs to the o1, o3 or o4 series."""
    return (model or "").startswith(_REASONING_PREFIXES)


def _field(request: Any, name: str, default: Any) -> Any:
    if isinstance(request, Mapping):
        value = request.get(name, default)
    else:
        value = getattr(request, name, default)
    return default if value is None else value


class ReasoningValidator:
    """Rejects chat requests whose parameters reasoning models do not support."""

    def validate(self, request: Any) -> None:
        """Raise a ReasoningModelError if the request is invalid for its model.

        The request may be a mapping or any object with the usual chat
        request attributes; absent fields count as unset.
        """
        if not is_reasoning_model(_field(request, "model", "")):
            return None
        if _field(request, "max_tokens", 0) > 0:
            raise MaxTokensDeprecatedError()
        if _field(request, "logprobs", False):
            raise LogprobsNotSupportedError()
        for name in ("temperature", "top_p", "n"):
            value = _field(request, name, 0)
            if value > 0 and value != 1:
                raise FixedParametersError()
        for name in ("presence_penalty", "frequency_penalty"):
            if _field(request, name, 0) > 0:
                raise FixedParametersError()
        return None