import asyncio
import base64
import time
from types import SimpleNamespace

from config.settings import Settings
from models import ResponseSignal
from services.AnalysisService import AnalysisService
from services.PromptService import DEFAULT_TIPS
from stores.llm.LLMExceptions import ProviderHTTPError, ProviderNotConfiguredError
from stores.llm.templates.template_parser import TemplateParser
from tests.conftest import FakeFactory, FakeVisionClient, make_data_uri, make_oversized_png


def post_image(client, image):
    return client.post("/api/analyze", json={"image": image})


def test_options_returns_cors_headers(make_client):
    response = make_client().options("/api/analyze")
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "POST" in response.headers["access-control-allow-methods"]
    assert response.headers["access-control-allow-headers"] == "Content-Type"


def test_health(make_client):
    response = make_client(VISION_BACKEND="OPENAI").get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["vision_backend"] == "OPENAI"


def test_rejects_invalid_images_without_calling_provider(make_client):
    vision_client = FakeVisionClient()
    client = make_client(vision_client=vision_client)

    cases = [
        ({}, ResponseSignal.INVALID_IMAGE_DATA),
        ({"image": ""}, ResponseSignal.INVALID_IMAGE_DATA),
        ({"image": 42}, ResponseSignal.INVALID_IMAGE_DATA),
        ({"image": "hello"}, ResponseSignal.INVALID_IMAGE_FORMAT),
        ({"image": "data:image/gif;base64,R0lGOD"}, ResponseSignal.UNSUPPORTED_IMAGE_FORMAT),
        ({"image": "data:image/png;base64,!!!not-base64!!!"}, ResponseSignal.INVALID_IMAGE_DATA),
    ]
    for body, signal in cases:
        response = client.post("/api/analyze", json=body)
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": signal.value}

    assert vision_client.calls == []


def test_non_json_body_is_a_bad_request(make_client):
    response = make_client().post(
        "/api/analyze", content="not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json()["error"] == ResponseSignal.INVALID_IMAGE_DATA.value


def test_full_response(make_client, template_parser):
    vision_client = FakeVisionClient()
    response = post_image(make_client(vision_client=vision_client), make_data_uri(size=(108, 192)))

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["tips"] == DEFAULT_TIPS
    assert body["analysis"]["style"] == "Studio Photography"
    assert body["analysis"]["imageWidth"] == 108
    assert body["analysis"]["imageHeight"] == 192

    face_lock = template_parser.get("style", "face_lock")
    prompt = body["prompt"]
    assert "studio photography" in prompt
    assert "--ar 9:16" in prompt
    assert prompt.endswith(face_lock)
    assert prompt.count(face_lock) == 1
    assert vision_client.calls == ["analyze"]


def test_prompt_only_response(make_client):
    response = post_image(make_client(vision_client=FakeVisionClient(), RESPONSE_MODE="prompt_only"),
                          make_data_uri())
    assert response.status_code == 200
    assert set(response.json()) == {"success", "prompt"}


def test_direct_prompt_skips_analysis(make_client, template_parser):
    face_lock = template_parser.get("style", "face_lock")
    vision_client = FakeVisionClient(direct=True, prompt=f"A neon portrait of [USER FACE]. {face_lock}")
    client = make_client(vision_client=vision_client, RESPONSE_MODE="prompt_only", PROMPT_STRATEGY="direct")

    response = post_image(client, make_data_uri(size=(400, 400)))

    assert response.status_code == 200
    prompt = response.json()["prompt"]
    assert vision_client.calls == ["generate"]
    assert prompt.startswith("A neon portrait of [USER FACE].")
    assert "--ar 1:1" in prompt
    assert prompt.count(face_lock) == 1
    assert prompt.endswith(face_lock)


def test_direct_strategy_on_label_backend_uses_template(make_client):
    vision_client = FakeVisionClient(direct=False)
    client = make_client(vision_client=vision_client, PROMPT_STRATEGY="direct")

    response = post_image(client, make_data_uri())

    assert response.status_code == 200
    assert vision_client.calls == ["analyze"]


def test_provider_error_is_translated(make_client):
    error = ProviderHTTPError("OpenAI", 429, "Rate limit reached for requests")
    response = post_image(make_client(vision_client=FakeVisionClient(error=error)), make_data_uri())

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": ResponseSignal.QUOTA_EXCEEDED.value}


def test_fallback_on_error(make_client):
    error = ProviderHTTPError("Azure Vision", 500, "Internal")
    client = make_client(vision_client=FakeVisionClient(error=error), FALLBACK_ON_ERROR=True)

    response = post_image(client, make_data_uri())

    assert response.status_code == 200
    assert response.json()["analysis"]["style"] == "Professional portrait photography"


def test_slow_provider_times_out(make_client):
    client = make_client(vision_client=FakeVisionClient(delay=0.3), VISION_TIMEOUT_SECONDS=0.05)

    response = post_image(client, make_data_uri())

    assert response.status_code == 500
    assert response.json()["error"] == ResponseSignal.TIMEOUT.value


def test_client_init_is_retried(make_client):
    factory = FakeFactory(failures=2)
    client = make_client(factory=factory, VISION_INIT_RETRY_ATTEMPTS=3)

    first = post_image(client, make_data_uri())
    second = post_image(client, make_data_uri())

    assert first.status_code == 200
    assert second.status_code == 200
    # Cached after the first successful build
    assert factory.calls == 3


def test_client_init_gives_up_after_attempts(make_client):
    factory = FakeFactory(failures=5)
    response = post_image(make_client(factory=factory, VISION_INIT_RETRY_ATTEMPTS=2), make_data_uri())

    assert response.status_code == 500
    assert response.json()["error"] == ResponseSignal.GENERIC_ERROR.value
    assert factory.calls == 2


def test_missing_configuration_is_not_retried(make_client):
    factory = FakeFactory(error=ProviderNotConfiguredError("Unsupported vision backend: CLIP"))
    response = post_image(make_client(factory=factory), make_data_uri())

    assert response.status_code == 500
    assert response.json()["error"] == ResponseSignal.NOT_CONFIGURED.value
    assert factory.calls == 1


def test_oversized_image_is_analyzed_without_ar(make_client, template_parser):
    vision_client = FakeVisionClient()
    encoded = base64.b64encode(make_oversized_png()).decode("utf-8")

    response = post_image(make_client(vision_client=vision_client), f"data:image/png;base64,{encoded}")

    assert response.status_code == 200
    prompt = response.json()["prompt"]
    assert "--ar" not in prompt
    assert prompt.endswith(template_parser.get("style", "face_lock"))
    assert vision_client.calls == ["analyze"]


class SlowFactory(FakeFactory):

    def create(self, provider):
        time.sleep(0.2)
        return super().create(provider)


def test_concurrent_first_requests_build_one_client():
    factory = SlowFactory()

    async def run():
        app = SimpleNamespace(vision_client=None, vision_factory=factory, vision_client_lock=asyncio.Lock())
        service = AnalysisService(app=app, app_settings=Settings(VISION_INIT_RETRY_BASE_DELAY=0),
                                  template_parser=TemplateParser(language="en"))
        return await asyncio.gather(*[service.get_vision_client() for _ in range(5)])

    clients = asyncio.run(run())

    assert factory.calls == 1
    assert all(client is factory.client for client in clients)
