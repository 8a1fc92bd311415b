import json

import httpx
import pytest

from oaiclient.run import (
    CreateThreadAndRunRequest,
    Pagination,
    Run,
    RunModifyRequest,
    RunRequest,
    Runs,
    RunStatus,
    RunStep,
    RunStepList,
    RunStepStatus,
    RunStepType,
    SubmitToolOutputsRequest,
    ThreadTruncationStrategy,
    ToolOutput,
    TruncationStrategy,
)
from oaiclient.thread import ThreadMessage, ThreadMessageRole, ThreadRequest
from oaiclient.transport import APIError, Transport

ASSISTANT_ID = "asst_abc123"
THREAD_ID = "thread_abc123"
RUN_ID = "run_abc123"
STEP_ID = "step_abc123"
PAGINATION = Pagination(limit=20, order="desc", after="asst_abc122", before="asst_abc124")


def _run(status, metadata=None):
    return {
        "id": RUN_ID,
        "object": "run",
        "created_at": 1234567890,
        "status": status,
        "metadata": metadata,
    }


def _step():
    return {"id": RUN_ID, "object": "run", "created_at": 1234567890, "status": "completed"}


class Recorder:
    def __init__(self):
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        method = request.method
        body = json.loads(request.content) if request.content else None
        base = f"/v1/threads/{THREAD_ID}/runs"
        if path == f"{base}/{RUN_ID}/steps/{STEP_ID}" and method == "GET":
            return httpx.Response(200, json=_step())
        if path == f"{base}/{RUN_ID}/steps" and method == "GET":
            return httpx.Response(200, json={"data": [_step()]})
        if path in (f"{base}/{RUN_ID}/cancel", f"{base}/{RUN_ID}/submit_tool_outputs"):
            return httpx.Response(200, json=_run("cancelling"))
        if path == f"{base}/{RUN_ID}":
            if method == "GET":
                return httpx.Response(200, json=_run("queued"))
            return httpx.Response(200, json=_run("queued", body.get("metadata")))
        if path == base:
            if method == "POST":
                return httpx.Response(200, json=_run("queued"))
            return httpx.Response(200, json={"data": [_run("queued")]})
        if path == "/v1/threads/runs" and method == "POST":
            return httpx.Response(200, json=_run("queued"))
        return httpx.Response(404, json={"error": {"message": "not found", "type": "x"}})


@pytest.fixture
def setup():
    recorder = Recorder()
    client = httpx.Client(transport=httpx.MockTransport(recorder))
    transport = Transport("token", base_url="http://localhost/v1", http_client=client)
    yield Runs(transport), recorder
    client.close()


def test_create_run(setup):
    runs, recorder = setup
    run = runs.create(THREAD_ID, RunRequest(assistant_id=ASSISTANT_ID))
    assert run.id == RUN_ID
    assert run.status == RunStatus.QUEUED
    request = recorder.requests[-1]
    assert json.loads(request.content) == {"assistant_id": ASSISTANT_ID}
    assert request.headers["OpenAI-Beta"] == "assistants=v2"


def test_retrieve_run(setup):
    runs, _ = setup
    run = runs.retrieve(THREAD_ID, RUN_ID)
    assert run.created_at == 1234567890
    assert run.object == "run"


def test_modify_run_echoes_metadata(setup):
    runs, _ = setup
    run = runs.modify(THREAD_ID, RUN_ID, RunModifyRequest(metadata={"key": "value"}))
    assert run.metadata == {"key": "value"}


def test_list_runs_sends_sorted_query(setup):
    runs, recorder = setup
    result = runs.list(THREAD_ID, PAGINATION)
    assert [r.id for r in result.runs] == [RUN_ID]
    assert recorder.requests[-1].url.query == (
        b"after=asst_abc122&before=asst_abc124&limit=20&order=desc"
    )


def test_submit_tool_outputs(setup):
    runs, recorder = setup
    request = SubmitToolOutputsRequest([ToolOutput(tool_call_id="call_1", output="42")])
    run = runs.submit_tool_outputs(THREAD_ID, RUN_ID, request)
    assert run.status == RunStatus.CANCELLING
    assert json.loads(recorder.requests[-1].content) == {
        "tool_outputs": [{"tool_call_id": "call_1", "output": "42"}]
    }


def test_cancel_run(setup):
    runs, recorder = setup
    run = runs.cancel(THREAD_ID, RUN_ID)
    assert run.status == RunStatus.CANCELLING
    assert recorder.requests[-1].method == "POST"


def test_create_thread_and_run(setup):
    runs, recorder = setup
    request = CreateThreadAndRunRequest(
        assistant_id=ASSISTANT_ID,
        thread=ThreadRequest(
            messages=[ThreadMessage(role=ThreadMessageRole.USER, content="Hello, World!")]
        ),
    )
    run = runs.create_thread_and_run(request)
    assert run.status == RunStatus.QUEUED
    assert json.loads(recorder.requests[-1].content) == {
        "assistant_id": ASSISTANT_ID,
        "thread": {"messages": [{"role": "user", "content": "Hello, World!"}]},
    }


def test_retrieve_run_step(setup):
    runs, _ = setup
    step = runs.retrieve_step(THREAD_ID, RUN_ID, STEP_ID)
    assert step.status == RunStepStatus.COMPLETED
    assert step.id == RUN_ID


def test_list_run_steps(setup):
    runs, recorder = setup
    steps = runs.list_steps(THREAD_ID, RUN_ID, PAGINATION)
    assert len(steps.run_steps) == 1
    assert steps.run_steps[0].status == RunStepStatus.COMPLETED
    assert recorder.requests[-1].url.path == f"/v1/threads/{THREAD_ID}/runs/{RUN_ID}/steps"


def test_unknown_run_raises_api_error(setup):
    runs, _ = setup
    with pytest.raises(APIError) as info:
        runs.retrieve(THREAD_ID, "missing")
    assert info.value.status_code == 404


def test_empty_pagination_has_no_query():
    assert Pagination().to_query() == ""
    assert Pagination(limit=5).to_query() == "?limit=5"


def test_run_request_keeps_explicit_zero_and_false():
    body = RunRequest(
        assistant_id=ASSISTANT_ID, temperature=0.0, parallel_tool_calls=False, max_prompt_tokens=0
    ).to_dict()
    assert body == {"assistant_id": ASSISTANT_ID, "temperature": 0.0, "parallel_tool_calls": False}


def test_truncation_strategy_round_trip():
    strategy = ThreadTruncationStrategy(type=TruncationStrategy.LAST_MESSAGES, last_messages=3)
    data = strategy.to_dict()
    assert data == {"type": "last_messages", "last_messages": 3}
    assert ThreadTruncationStrategy.from_dict(data) == strategy


def test_run_from_dict_nested_fields():
    run = Run.from_dict(
        {
            "status": "requires_action",
            "required_action": {
                "type": "submit_tool_outputs",
                "submit_tool_outputs": {"tool_calls": [{"id": "call_1"}]},
            },
            "last_error": {"code": "server_error", "message": "boom"},
            "started_at": 5,
        }
    )
    assert run.status == RunStatus.REQUIRES_ACTION
    assert run.required_action.submit_tool_outputs.tool_calls == [{"id": "call_1"}]
    assert run.last_error.message == "boom"
    assert run.started_at == 5
    assert run.completed_at is None


def test_run_step_details_and_list():
    step = RunStep.from_dict(
        {
            "type": "message_creation",
            "step_details": {
                "type": "message_creation",
                "message_creation": {"message_id": "msg_1"},
            },
        }
    )
    assert step.type == RunStepType.MESSAGE_CREATION
    assert step.step_details.message_creation.message_id == "msg_1"
    listing = RunStepList.from_dict({"data": [], "first_id": "a", "last_id": "b", "has_more": True})
    assert (listing.first_id, listing.last_id, listing.has_more) == ("a", "b", True)


def test_step_status_cancelling_value():
    assert RunStepStatus("cancelled") is RunStepStatus.CANCELLING