import json

import httpx

from oaiclient.speech import (
    CreateSpeechRequest,
    Speech,
    SpeechModel,
    SpeechResponseFormat,
    SpeechVoice,
)
from oaiclient.transport import Transport

AUDIO = b"ID3 fake mp3 data"


def speech_handler(request):
    if request.method != "POST":
        return httpx.Response(405, text="method not allowed")
    if request.headers.get("Content-Type", "").split(";")[0] != "application/json":
        return httpx.Response(400, text="request is not json")
    params = json.loads(request.content)
    for name in ("model", "input", "voice"):
        if name not in params:
            return httpx.Response(400, text=f"no {name} in params")
    return httpx.Response(200, content=AUDIO, headers={"Content-Type": "audio/mpeg"})


def make_speech():
    client = httpx.Client(transport=httpx.MockTransport(speech_handler))
    return Speech(Transport("token", http_client=client))


def test_create_speech_happy_path():
    request = CreateSpeechRequest(model=SpeechModel.TTS_1, input="Hello!", voice=SpeechVoice.ALLOY)
    with make_speech().create(request) as response:
        assert response.read() == AUDIO
        assert response.headers["content-type"] == "audio/mpeg"


def test_request_to_dict_omits_defaults():
    request = CreateSpeechRequest(model=SpeechModel.TTS_1, input="Hello!", voice=SpeechVoice.ALLOY)
    assert request.to_dict() == {"model": "tts-1", "input": "Hello!", "voice": "alloy"}


def test_request_to_dict_with_options():
    request = CreateSpeechRequest(
        model=SpeechModel.GPT_4O_MINI,
        input="Hi",
        voice=SpeechVoice.CORAL,
        instructions="calm",
        response_format=SpeechResponseFormat.WAV,
        speed=1.5,
    )
    body = request.to_dict()
    assert body["response_format"] == "wav"
    assert body["speed"] == 1.5
    assert body["instructions"] == "calm"
    assert json.loads(json.dumps(body))["model"] == "gpt-4o-mini-tts"