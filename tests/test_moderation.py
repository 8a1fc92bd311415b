import json

import httpx
import pytest

from oaiclient.moderation import (
    MODERATION_OMNI_20240926,
    MODERATION_OMNI_LATEST,
    MODERATION_TEXT_LATEST,
    MODERATION_TEXT_STABLE,
    InvalidModerationModelError,
    ModerationRequest,
    Moderations,
    ResultCategories,
    validate_moderation_model,
)
from oaiclient.transport import Transport

_RULES = [
    ("hate", "hate", "hate"),
    ("hate more", "hate/threatening", "hate/threatening"),
    ("harass", "harassment", "harassment"),
    ("harass hard", "harassment", "harassment/threatening"),
    ("suicide", "self-harm", "self-harm"),
    ("wanna suicide", "self-harm/intent", "self-harm"),
    ("drink bleach", "self-harm/instructions", "self-harm/instructions"),
    ("porn", "sexual", "sexual"),
    ("child porn", "sexual/minors", "sexual/minors"),
    ("kill", "violence", "violence"),
    ("corpse", "violence/graphic", "violence/graphic"),
]


def moderation_handler(calls):
    def handler(request):
        calls.append(request)
        if request.method != "POST":
            return httpx.Response(405, json={"error": {"message": "Method not allowed"}})
        body = json.loads(request.content)
        text = body.get("input", "")
        categories, scores = {}, {}
        for needle, category, score in _RULES:
            if needle in text:
                categories = {category: True}
                scores = {score: 1}
                break
        result = {"categories": categories, "category_scores": scores, "flagged": True}
        return httpx.Response(
            200, json={"id": "1", "model": body.get("model", ""), "results": [result]}
        )

    return handler


def make_moderations(calls):
    client = httpx.Client(transport=httpx.MockTransport(moderation_handler(calls)))
    return Moderations(Transport("token", http_client=client))


def test_moderations():
    calls = []
    response = make_moderations(calls).create(
        ModerationRequest(model=MODERATION_TEXT_STABLE, input="I want to kill them.")
    )
    assert calls[0].url.path == "/v1/moderations"
    assert response.model == MODERATION_TEXT_STABLE
    result = response.results[0]
    assert result.flagged is True
    assert result.categories.violence is True
    assert result.categories.hate is False
    assert result.category_scores.violence == 1


@pytest.mark.parametrize(
    "model",
    [MODERATION_TEXT_STABLE, MODERATION_TEXT_LATEST, MODERATION_OMNI_20240926, MODERATION_OMNI_LATEST, ""],
)
def test_moderations_with_valid_models(model):
    calls = []
    response = make_moderations(calls).create(
        ModerationRequest(model=model, input="I want to kill them.")
    )
    assert len(calls) == 1
    assert response.model == model


def test_moderations_with_invalid_model():
    calls = []
    with pytest.raises(InvalidModerationModelError):
        make_moderations(calls).create(
            ModerationRequest(model="gpt-3.5-turbo", input="I want to kill them.")
        )
    assert calls == []


def test_validate_moderation_model():
    with pytest.raises(InvalidModerationModelError):
        validate_moderation_model("gpt-3.5-turbo")
    assert validate_moderation_model("") is None


def test_request_omits_empty_fields():
    assert ModerationRequest(input="x").to_dict() == {"input": "x"}
    assert ModerationRequest().to_dict() == {}


def test_categories_read_slashed_keys():
    categories = ResultCategories.from_dict({"self-harm/intent": True, "violence/graphic": True})
    assert categories.self_harm_intent is True
    assert categories.violence_graphic is True
    assert categories.self_harm is False