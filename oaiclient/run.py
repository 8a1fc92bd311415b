"""Assistant runs, run steps and their request/response types."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar
from urllib.parse import urlencode

from .thread import ThreadMessage, ThreadRequest
from .transport import Transport

E = TypeVar("E", bound=Enum)


class RunStatus(str, Enum):
    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING = "cancelling"
    FAILED = "failed"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class RequiredActionType(str, Enum):
    SUBMIT_TOOL_OUTPUTS = "submit_tool_outputs"


class RunError(str, Enum):
    SERVER_ERROR = "server_error"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"


class TruncationStrategy(str, Enum):
    AUTO = "auto"
    LAST_MESSAGES = "last_messages"


class RunStepStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    CANCELLING = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    EXPIRED = "expired"


class RunStepType(str, Enum):
    MESSAGE_CREATION = "message_creation"
    TOOL_CALLS = "tool_calls"


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _get(data: Mapping, key: str, default: Any) -> Any:
    value = data.get(key)
    return default if value is None else value


def _enum(kind: type[E], value: Any) -> E | str:
    try:
        return kind(value)
    except ValueError:
        return value


@dataclass
class Pagination:
    """Cursor options for list endpoints; unset fields are not sent."""

    limit: int | None = None
    order: str | None = None
    after: str | None = None
    before: str | None = None

    def to_query(self) -> str:
        """The query string, with a leading ``?``, or empty when nothing is set."""
        values = {
            "limit": None if self.limit is None else str(self.limit),
            "order": self.order,
            "after": self.after,
            "before": self.before,
        }
        pairs = sorted((k, v) for k, v in values.items() if v is not None)
        return f"?{urlencode(pairs)}" if pairs else ""


@dataclass
class ThreadTruncationStrategy:
    type: TruncationStrategy | str = ""
    last_messages: int | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if self.type:
            body["type"] = _plain(self.type)
        if self.last_messages is not None:
            body["last_messages"] = self.last_messages
        return body

    @classmethod
    def from_dict(cls, data: Mapping) -> ThreadTruncationStrategy:
        return cls(
            type=_enum(TruncationStrategy, _get(data, "type", "")),
            last_messages=data.get("last_messages"),
        )


@dataclass
class SubmitToolOutputs:
    tool_calls: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class RunRequiredAction:
    type: RequiredActionType | str = ""
    submit_tool_outputs: SubmitToolOutputs | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> RunRequiredAction:
        outputs = data.get("submit_tool_outputs")
        return cls(
            type=_enum(RequiredActionType, _get(data, "type", "")),
            submit_tool_outputs=(
                SubmitToolOutputs(tool_calls=list(_get(outputs, "tool_calls", [])))
                if outputs is not None
                else None
            ),
        )


@dataclass
class RunLastError:
    code: RunError | str = ""
    message: str = ""

    @classmethod
    def from_dict(cls, data: Mapping) -> RunLastError:
        return cls(
            code=_enum(RunError, _get(data, "code", "")),
            message=_get(data, "message", ""),
        )


def _optional(kind: Any, data: Any) -> Any:
    return kind.from_dict(data) if data is not None else None


@dataclass
class Run:
    id: str = ""
    object: str = ""
    created_at: int = 0
    thread_id: str = ""
    assistant_id: str = ""
    status: RunStatus | str = ""
    required_action: RunRequiredAction | None = None
    last_error: RunLastError | None = None
    expires_at: int = 0
    started_at: int | None = None
    cancelled_at: int | None = None
    failed_at: int | None = None
    completed_at: int | None = None
    model: str = ""
    instructions: str = ""
    tools: list[dict[str, Any]] = field(default_factory=list)
    file_ids: list[str] = field(default_factory=list)
    metadata: dict[str, Any] | None = None
    usage: dict[str, Any] = field(default_factory=dict)
    temperature: float | None = None
    max_prompt_tokens: int = 0
    max_completion_tokens: int = 0
    truncation_strategy: ThreadTruncationStrategy | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> Run:
        return cls(
            id=_get(data, "id", ""),
            object=_get(data, "object", ""),
            created_at=_get(data, "created_at", 0),
            thread_id=_get(data, "thread_id", ""),
            assistant_id=_get(data, "assistant_id", ""),
            status=_enum(RunStatus, _get(data, "status", "")),
            required_action=_optional(RunRequiredAction, data.get("required_action")),
            last_error=_optional(RunLastError, data.get("last_error")),
            expires_at=_get(data, "expires_at", 0),
            started_at=data.get("started_at"),
            cancelled_at=data.get("cancelled_at"),
            failed_at=data.get("failed_at"),
            completed_at=data.get("completed_at"),
            model=_get(data, "model", ""),
            instructions=_get(data, "instructions", ""),
            tools=list(_get(data, "tools", [])),
            file_ids=list(_get(data, "file_ids", [])),
            metadata=data.get("metadata"),
            usage=dict(_get(data, "usage", {})),
            temperature=data.get("temperature"),
            max_prompt_tokens=_get(data, "max_prompt_tokens", 0),
            max_completion_tokens=_get(data, "max_completion_tokens", 0),
            truncation_strategy=_optional(
                ThreadTruncationStrategy, data.get("truncation_strategy")
            ),
        )


@dataclass
class RunRequest:
    assistant_id: str = ""
    model: str = ""
    instructions: str = ""
    additional_instructions: str = ""
    additional_messages: list[ThreadMessage] = field(default_factory=list)
    tools: list[dict[str, Any]] = field(default_factory=list)
    metadata: dict[str, Any] | None = None
    temperature: float | None = None
    top_p: float | None = None
    max_prompt_tokens: int = 0
    max_completion_tokens: int = 0
    truncation_strategy: ThreadTruncationStrategy | None = None
    tool_choice: Any = None
    response_format: Any = None
    parallel_tool_calls: Any = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"assistant_id": self.assistant_id}
        for key in ("model", "instructions", "additional_instructions"):
            if getattr(self, key):
                body[key] = getattr(self, key)
        if self.additional_messages:
            body["additional_messages"] = [m.to_dict() for m in self.additional_messages]
        if self.tools:
            body["tools"] = list(self.tools)
        if self.metadata:
            body["metadata"] = self.metadata
        for key in ("temperature", "top_p"):
            if getattr(self, key) is not None:
                body[key] = getattr(self, key)
        for key in ("max_prompt_tokens", "max_completion_tokens"):
            if getattr(self, key):
                body[key] = getattr(self, key)
        if self.truncation_strategy is not None:
            body["truncation_strategy"] = self.truncation_strategy.to_dict()
        for key in ("tool_choice", "response_format", "parallel_tool_calls"):
            if getattr(self, key) is not None:
                body[key] = _plain(getattr(self, key))
        return body


@dataclass
class RunModifyRequest:
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"metadata": self.metadata} if self.metadata else {}


@dataclass
class RunList:
    runs: list[Run] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping) -> RunList:
        return cls(runs=[Run.from_dict(r) for r in _get(data, "data", [])])


@dataclass
class ToolOutput:
    tool_call_id: str = ""
    output: Any = None


@dataclass
class SubmitToolOutputsRequest:
    tool_outputs: list[ToolOutput] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "tool_outputs": [
                {"tool_call_id": o.tool_call_id, "output": o.output} for o in self.tool_outputs
            ]
        }


@dataclass
class CreateThreadAndRunRequest(RunRequest):
    thread: ThreadRequest = field(default_factory=ThreadRequest)

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        body["thread"] = self.thread.to_dict()
        return body


@dataclass
class StepDetailsMessageCreation:
    message_id: str = ""


@dataclass
class StepDetails:
    type: RunStepType | str = ""
    message_creation: StepDetailsMessageCreation | None = None
    tool_calls: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping) -> StepDetails:
        creation = data.get("message_creation")
        return cls(
            type=_enum(RunStepType, _get(data, "type", "")),
            message_creation=(
                StepDetailsMessageCreation(message_id=_get(creation, "message_id", ""))
                if creation is not None
                else None
            ),
            tool_calls=list(_get(data, "tool_calls", [])),
        )


@dataclass
class RunStep:
    id: str = ""
    object: str = ""
    created_at: int = 0
    assistant_id: str = ""
    thread_id: str = ""
    run_id: str = ""
    type: RunStepType | str = ""
    status: RunStepStatus | str = ""
    step_details: StepDetails = field(default_factory=StepDetails)
    last_error: RunLastError | None = None
    expired_at: int | None = None
    cancelled_at: int | None = None
    failed_at: int | None = None
    completed_at: int | None = None
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> RunStep:
        return cls(
            id=_get(data, "id", ""),
            object=_get(data, "object", ""),
            created_at=_get(data, "created_at", 0),
            assistant_id=_get(data, "assistant_id", ""),
            thread_id=_get(data, "thread_id", ""),
            run_id=_get(data, "run_id", ""),
            type=_enum(RunStepType, _get(data, "type", "")),
            status=_enum(RunStepStatus, _get(data, "status", "")),
            step_details=StepDetails.from_dict(_get(data, "step_details", {})),
            last_error=_optional(RunLastError, data.get("last_error")),
            expired_at=data.get("expired_at"),
            cancelled_at=data.get("cancelled_at"),
            failed_at=data.get("failed_at"),
            completed_at=data.get("completed_at"),
            metadata=data.get("metadata"),
        )


@dataclass
class RunStepList:
    run_steps: list[RunStep] = field(default_factory=list)
    first_id: str = ""
    last_id: str = ""
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: Mapping) -> RunStepList:
        return cls(
            run_steps=[RunStep.from_dict(s) for s in _get(data, "data", [])],
            first_id=_get(data, "first_id", ""),
            last_id=_get(data, "last_id", ""),
            has_more=bool(data.get("has_more")),
        )


class Runs:
    """The assistant runs endpoints."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def _call(self, method: str, suffix: str, body: Any = None) -> Mapping:
        return self._transport.request(method, suffix, body, beta=True) or {}

    def create(self, thread_id: str, request: RunRequest) -> Run:
        return Run.from_dict(self._call("POST", f"/threads/{thread_id}/runs", request.to_dict()))

    def retrieve(self, thread_id: str, run_id: str) -> Run:
        return Run.from_dict(self._call("GET", f"/threads/{thread_id}/runs/{run_id}"))

    def modify(self, thread_id: str, run_id: str, request: RunModifyRequest) -> Run:
        data = self._call("POST", f"/threads/{thread_id}/runs/{run_id}", request.to_dict())
        return Run.from_dict(data)

    def list(self, thread_id: str, pagination: Pagination) -> RunList:
        data = self._call("GET", f"/threads/{thread_id}/runs{pagination.to_query()}")
        return RunList.from_dict(data)

    def submit_tool_outputs(
        self, thread_id: str, run_id: str, request: SubmitToolOutputsRequest
    ) -> Run:
        suffix = f"/threads/{thread_id}/runs/{run_id}/submit_tool_outputs"
        return Run.from_dict(self._call("POST", suffix, request.to_dict()))

    def cancel(self, thread_id: str, run_id: str) -> Run:
        return Run.from_dict(self._call("POST", f"/threads/{thread_id}/runs/{run_id}/cancel"))

    def create_thread_and_run(self, request: CreateThreadAndRunRequest) -> Run:
        return Run.from_dict(self._call("POST", "/threads/runs", request.to_dict()))

    def retrieve_step(self, thread_id: str, run_id: str, step_id: str) -> RunStep:
        data = self._call("GET", f"/threads/{thread_id}/runs/{run_id}/steps/{step_id}")
        return RunStep.from_dict(data)

    def list_steps(self, thread_id: str, run_id: str, pagination: Pagination) -> RunStepList:
        suffix = f"/threads/{thread_id}/runs/{run_id}/steps{pagination.to_query()}"
        return RunStepList.from_dict(self._call("GET", suffix))