# oaiclient

A small synchronous client for an OpenAI-compatible HTTP API, built on
`httpx`. It covers:

- models: listing, retrieving and deleting fine-tuned models (`oaiclient.models`)
- moderations, with the moderation model checked before any request is sent
  (`oaiclient.moderation`)
- text-to-speech, returning the raw audio body (`oaiclient.speech`)
- assistant threads (`oaiclient.thread`), runs and run steps (`oaiclient.run`)
- vector stores, their files and file batches (`oaiclient.vector_store`)
- a reader for server-sent event streams (`oaiclient.stream_reader.StreamReader`)
- rate-limit headers (`oaiclient.ratelimit.RateLimitHeaders`) and a check of
  request parameters for reasoning models (`oaiclient.reasoning.ReasoningValidator`)

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

Every group of endpoints is a small class that takes a shared `Transport`.
The transport sends `Authorization: Bearer <token>` to `base_url` (by default
`https://api.openai.com/v1`); the assistant endpoints also send an
`OpenAI-Beta: assistants=<assistant_version>` header (`v2` by default). An
`httpx.Client` of your own can be passed as `http_client`; otherwise the
transport creates one and closes it on `close()` or on leaving the `with` block.

```python
from oaiclient.transport import Transport
from oaiclient.models import Models
from oaiclient.thread import Threads, ThreadRequest, ThreadMessage, ThreadMessageRole
from oaiclient.run import Runs, RunRequest, Pagination

with Transport(token="placeholder") as transport:
    for model in Models(transport).list().models:
        print(model.id)

    threads = Threads(transport)
    thread = threads.create(
        ThreadRequest(messages=[ThreadMessage(role=ThreadMessageRole.USER, content="Hello, World!")])
    )

    runs = Runs(transport)
    run = runs.create(thread.id, RunRequest(assistant_id="asst_abc123"))
    print(run.status)

    for listed in runs.list(thread.id, Pagination(limit=20, order="desc")).runs:
        print(listed.id, listed.status)
```

`Pagination` fields left as `None` are not sent.

### Moderation

```python
from oaiclient.moderation import Moderations, ModerationRequest, InvalidModerationModelError

moderations = Moderations(transport)
try:
    response = moderations.create(ModerationRequest(input="some text", model="text-moderation-stable"))
except InvalidModerationModelError:
    ...
```

An empty model is accepted and left to the server; any other model outside
`VALID_MODERATION_MODELS` raises `InvalidModerationModelError` without a request.

### Speech

```python
from oaiclient.speech import Speech, CreateSpeechRequest, SpeechModel, SpeechVoice

audio = Speech(transport).create(
    CreateSpeechRequest(model=SpeechModel.TTS_1, input="Hello!", voice=SpeechVoice.ALLOY)
)
with open("hello.mp3", "wb") as out:
    out.write(audio.read())
audio.close()
```

`audio.rate_limits` gives the response's `RateLimitHeaders`.

### Vector stores

```python
from oaiclient.vector_store import VectorStores, VectorStoreRequest, VectorStoreFileRequest

stores = VectorStores(transport)
store = stores.create(VectorStoreRequest(name="TestStore"))
stores.create_file(store.id, VectorStoreFileRequest(file_id="file-abc123"))
```

### Event streams

`StreamReader` reads `data:` lines from any iterable of lines, decodes each
payload (with `json.loads` by default) and stops at `data: [DONE]`:

```python
from oaiclient.stream_reader import StreamReader

with StreamReader([b'data: {"id": "1"}', b"", b"data: [DONE]"]) as reader:
    for message in reader:
        print(message["id"])
```

`recv()` and `recv_raw()` raise `EOFError` at the end of the stream.

### Rate limits and reasoning models

```python
from oaiclient.ratelimit import RateLimitHeaders
from oaiclient.reasoning import ReasoningValidator, ReasoningModelError

limits = RateLimitHeaders.from_headers({"x-ratelimit-remaining-requests": "59",
                                        "x-ratelimit-reset-requests": "1s"})
print(limits.remaining_requests, limits.reset_requests.time())

try:
    ReasoningValidator().validate({"model": "o1-mini", "max_tokens": 10})
except ReasoningModelError as error:
    print(error)
```

### Errors

A response with a status below 200 or from 400 up raises
`oaiclient.transport.APIError`. It carries `status_code`, `status` and, where
the server sent them, the error's `message`, `type`, `code` and `param`. A
stream raises `StreamAPIError` for an error object sent inside it, and
`TooManyEmptyStreamMessagesError` once more than `empty_messages_limit`
(300 by default) non-data lines arrive in a row.

## What it does not do

The package has no chat completion, completion, embedding, file, image or audio
transcription endpoints, and no endpoint that opens an event stream:
`StreamReader` works on lines you supply, and `ReasoningValidator` checks a
request you build yourself. There is no Azure-style URL or key handling and no
command-line program. All calls are synchronous.