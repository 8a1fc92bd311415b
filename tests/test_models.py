import httpx
import pytest

from oaiclient.models import Model, Models, ModelsList
from oaiclient.transport import Transport

FINE_TUNE_MODEL_ID = "fine-tune-model-id"


def make_models(routes):
    def handler(request):
        key = (request.method, request.url.path)
        if key not in routes:
            return httpx.Response(404, json={"error": {"message": "not found"}})
        return httpx.Response(200, json=routes[key])

    client = httpx.Client(transport=httpx.MockTransport(handler))
    return Models(Transport("token", http_client=client))


def test_list_models():
    models = make_models({("GET", "/v1/models"): {"data": None}})
    assert models.list() == ModelsList(models=[])


@pytest.mark.parametrize("model_id", ["text-davinci-003", "o3", "o4-mini"])
def test_get_model(model_id):
    models = make_models({("GET", f"/v1/models/{model_id}"): {"id": model_id, "created": 0}})
    assert models.get(model_id).id == model_id


def test_get_model_empty_object():
    models = make_models({("GET", "/v1/models/text-davinci-003"): {}})
    assert models.get("text-davinci-003") == Model()


def test_delete_fine_tune_model():
    models = make_models(
        {
            ("DELETE", f"/v1/models/{FINE_TUNE_MODEL_ID}"): {
                "id": FINE_TUNE_MODEL_ID,
                "object": "model",
                "deleted": True,
            }
        }
    )
    result = models.delete_fine_tune(FINE_TUNE_MODEL_ID)
    assert result.deleted is True
    assert result.id == FINE_TUNE_MODEL_ID


def test_model_from_dict_with_permissions():
    model = Model.from_dict(
        {
            "id": "text-davinci-003",
            "created": 1669599635,
            "owned_by": "openai-internal",
            "permission": [{"id": "perm", "allow_sampling": True, "group": None}],
            "root": "text-davinci-003",
        }
    )
    assert model.created_at == 1669599635
    assert model.permission[0].allow_sampling is True
    assert model.permission[0].allow_view is False
    assert model.root == "text-davinci-003"