import json
from types import SimpleNamespace
from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import SleepRecorder, png_bytes
from creative_gen.api.app import app, get_store
from creative_gen.models import JobStatus
from creative_gen.providers.factory import GenerationClients, get_clients
from creative_gen.providers.gemini_provider import GeminiConfig, GeminiProvider
from creative_gen.providers.veo_provider import VeoConfig, VeoProvider
from creative_gen.storage import JobStore

BRAND = {"id": "brand_1", "name": "Acme Coffee", "colors": {"primary": "#6F4E37"}}
PRODUCT = {"id": "prod_1", "name": "Cold Brew Kit", "price": 45}


class FakeVeo:
    """Minimal video service: jobs complete on the second status query."""

    def __init__(self):
        self.status_queries = 0
        self.submitted = []

    def _job(self, status, **extra):
        job = {
            "job_id": "veo_job_1",
            "status": status,
            "metadata": {"prompt": "p", "style_preset": "promotional", "model_version": "veo-3.1"},
        }
        job.update(extra)
        return job

    def __call__(self, request):
        if request.url.path == "/generate/video":
            self.submitted.append(request)
            return httpx.Response(200, json=self._job("pending"))
        if request.url.path == "/jobs/veo_job_1":
            self.status_queries += 1
            if self.status_queries < 2:
                return httpx.Response(200, json=self._job("processing"))
            video = {"url": "https://cdn.example.com/v.mp4", "duration": 10, "aspect_ratio": "9:16"}
            return httpx.Response(200, json=self._job("completed", video=video))
        if request.url.path == "/jobs/veo_job_1/cancel":
            return httpx.Response(200, json={"success": True, "message": "Job cancelled"})
        return httpx.Response(404)


@pytest.fixture
def fake_veo():
    return FakeVeo()


@pytest.fixture
def generate_content():
    image = SimpleNamespace(mime_type="image/png", data=png_bytes())
    response = SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[SimpleNamespace(inline_data=image)]))])
    return AsyncMock(return_value=response)


@pytest.fixture
def clients(fake_veo, generate_content):
    sleep = SleepRecorder()
    gemini = GeminiProvider(
        GeminiConfig(api_key="gemini_key"),
        client=SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate_content))),
        sleep=sleep,
    )
    veo = VeoProvider(
        VeoConfig(api_key="veo_key", api_url="https://veo.example.com"),
        transport=httpx.MockTransport(fake_veo),
        sleep=sleep,
    )
    return GenerationClients(image=gemini, video=veo)


@pytest.fixture
def store(tmp_path):
    return JobStore(tmp_path)


@pytest.fixture
def client(clients, store):
    app.dependency_overrides[get_clients] = lambda: clients
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


class TestImageEndpoint:
    def test_generates_and_stores(self, client, store, generate_content):
        resp = client.post(
            "/generate/image",
            json={"brand": BRAND, "product": PRODUCT, "image_type": "hero_shot", "format_presets": ["instagram_story"]},
        )
        assert resp.status_code == 200
        job = resp.json()["job"]
        assert job["status"] == "completed"
        assert job["images"][0]["format"] == {"name": "instagram_story", "width": 1080, "height": 1920}

        stored = store.read_job(job["job_id"])
        assert stored.kind == "image"
        assert stored.request["brand_id"] == "brand_1"
        assert "[SUBJECT] Cold Brew Kit" in stored.request["prompt"]

    def test_missing_talent(self, client):
        resp = client.post(
            "/generate/image",
            json={"brand": BRAND, "product": PRODUCT, "image_type": "lifestyle", "output_formats": [{"name": "sq", "width": 1080, "height": 1080}]},
        )
        assert resp.status_code == 400
        error = resp.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"]["field"] == "talent"

    def test_unknown_format_preset(self, client):
        resp = client.post("/generate/image", json={"brand": BRAND, "format_presets": ["billboard"]})
        assert resp.status_code == 400
        assert resp.json()["error"]["details"]["field"] == "format_presets"

    def test_image_backend_not_configured(self, client, clients):
        clients.image = None
        resp = client.post("/generate/image", json={"brand": BRAND, "format_presets": ["square_hd"]})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "GEMINI_API_KEY is not set"

    def test_cancel_image_job_is_not_supported(self, client):
        job_id = client.post("/generate/image", json={"brand": BRAND, "format_presets": ["square_hd"]}).json()["job"]["job_id"]
        resp = client.post(f"/jobs/{job_id}/cancel")
        assert resp.status_code == 200
        assert resp.json()["success"] is False


class TestVideoEndpoint:
    def _submit(self, client, **overrides):
        body = {"brand": BRAND, "product": PRODUCT, "video_type": "product_demo", "duration": 10, "aspect_ratio": "9:16"}
        body.update(overrides)
        return client.post("/generate/video", json=body)

    def test_submit_then_refresh(self, client, store, fake_veo):
        resp = self._submit(client)
        assert resp.status_code == 200
        assert resp.json()["job"]["status"] == "pending"

        first = client.get("/jobs/veo_job_1").json()
        assert first["job"]["status"] == "processing"
        second = client.get("/jobs/veo_job_1").json()
        assert second["job"]["status"] == "completed"
        assert second["job"]["video"]["url"] == "https://cdn.example.com/v.mp4"

        # terminal snapshots are served without asking the provider again
        client.get("/jobs/veo_job_1")
        assert fake_veo.status_queries == 2
        assert store.read_job("veo_job_1").job.status == JobStatus.COMPLETED

    def test_too_long(self, client, fake_veo):
        resp = self._submit(client, duration=400)
        assert resp.status_code == 400
        assert resp.json()["error"]["message"] == "duration cannot exceed 300 seconds (5 minutes)"
        assert fake_veo.submitted == []

    def test_cancel_marks_snapshot(self, client, store):
        self._submit(client)
        resp = client.post("/jobs/veo_job_1/cancel")
        assert resp.json() == {"success": True, "message": "Job cancelled"}
        assert store.read_job("veo_job_1").job.status == JobStatus.CANCELLED

    def test_provider_auth_failure(self, client, clients):
        def reject(request):
            return httpx.Response(401, json={"error": {"message": "invalid key"}})

        clients.video = VeoProvider(
            VeoConfig(api_key="veo_key", api_url="https://veo.example.com"),
            transport=httpx.MockTransport(reject),
        )
        resp = self._submit(client)
        assert resp.status_code == 401
        assert resp.json()["error"]["code"] == "AUTHENTICATION_FAILED"

    def test_full_entities_submit_without_reference_images(self, client, fake_veo, store):
        brand = dict(BRAND, logo_url="https://cdn.example.com/logo.png")
        product = dict(
            PRODUCT,
            images=["https://cdn.example.com/p1.png", "https://cdn.example.com/p2.png"],
            processed_images={"background_removed": "https://cdn.example.com/p_clean.png"},
        )
        talent = {
            "id": "talent_1",
            "name": "Maya",
            "reference_images": ["https://cdn.example.com/t1.png", "https://cdn.example.com/t2.png"],
        }
        resp = self._submit(client, brand=brand, product=product, talent=talent, video_type="ugc")

        assert resp.status_code == 200
        sent = json.loads(fake_veo.submitted[0].content)
        assert "reference_images" not in sent
        assert "Maya" in sent["prompt"]
        assert "reference_images" not in store.read_job("veo_job_1").request

    def test_music_and_captions_join_the_prompt(self, client, fake_veo):
        resp = self._submit(client, custom_prompt="warm kitchen light", music_mood="upbeat", include_captions=True)

        assert resp.status_code == 200
        prompt = json.loads(fake_veo.submitted[0].content)["prompt"]
        assert "[ADDITIONAL] warm kitchen light, upbeat background music, with on-screen captions" in prompt

    def test_music_alone(self, client, fake_veo):
        self._submit(client, music_mood="calm")
        prompt = json.loads(fake_veo.submitted[0].content)["prompt"]
        assert "[ADDITIONAL] calm background music" in prompt
        assert "captions" not in prompt

    def test_unknown_music_mood(self, client, fake_veo):
        resp = self._submit(client, music_mood="spooky")
        assert resp.status_code == 422
        assert fake_veo.submitted == []


class TestJobsEndpoints:
    def test_unknown_job(self, client):
        resp = client.get("/jobs/nope")
        assert resp.status_code == 404
        assert resp.json()["error"] == {"code": "JOB_NOT_FOUND", "message": "Job nope not found", "details": {"job_id": "nope"}}

    def test_list_jobs(self, client):
        client.post("/generate/image", json={"brand": BRAND, "format_presets": ["square_hd"]})
        client.post(
            "/generate/video",
            json={"brand": BRAND, "product": PRODUCT, "video_type": "dynamic", "duration": 6, "aspect_ratio": "1:1"},
        )
        assert len(client.get("/jobs").json()["jobs"]) == 2
        assert [j["kind"] for j in client.get("/jobs", params={"kind": "video"}).json()["jobs"]] == ["video"]

    def test_presets(self, client):
        data = client.get("/presets").json()
        assert set(data) == {"output_formats", "video_aspect_ratios", "styles", "image_types", "video_types", "platforms"}
        assert data["output_formats"]["instagram_square"]["width"] == 1080
