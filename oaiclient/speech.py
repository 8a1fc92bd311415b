"""Text-to-speech endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .transport import RawResponse, Transport


class SpeechModel(str, Enum):
    TTS_1 = "tts-1"
    TTS_1_HD = "tts-1-hd"
    CANARY = "canary-tts"
    GPT_4O_MINI = "gpt-4o-mini-tts"


class SpeechVoice(str, Enum):
    ALLOY = "alloy"
    ASH = "ash"
    BALLAD = "ballad"
    CORAL = "coral"
    ECHO = "echo"
    FABLE = "fable"
    ONYX = "onyx"
    NOVA = "nova"
    SHIMMER = "shimmer"
    VERSE = "verse"


class SpeechResponseFormat(str, Enum):
    MP3 = "mp3"
    OPUS = "opus"
    AAC = "aac"
    FLAC = "flac"
    WAV = "wav"
    PCM = "pcm"


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


@dataclass
class CreateSpeechRequest:
    model: SpeechModel | str
    input: str
    voice: SpeechVoice | str
    instructions: str = ""
    response_format: SpeechResponseFormat | str = ""
    speed: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "model": _plain(self.model),
            "input": self.input,
            "voice": _plain(self.voice),
        }
        if self.instructions:
            body["instructions"] = self.instructions
        if self.response_format:
            body["response_format"] = _plain(self.response_format)
        if self.speed:
            body["speed"] = self.speed
        return body


class Speech:
    """The audio speech endpoint."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def create(self, request: CreateSpeechRequest) -> RawResponse:
        """Synthesize speech; the audio is returned undecoded."""
        return self._transport.request_raw("POST", "/audio/speech", request.to_dict())