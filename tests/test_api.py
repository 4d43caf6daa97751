"""API tests with a fake logo agent."""

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from brandspark.agents.base import LogoServiceError, NoImageReturnedError
from brandspark.api.config import Settings
from brandspark.api.dependencies import get_logo_agent
from brandspark.api.main import create_app
from conftest import FakeLogoAgent, make_data_url, make_png


@pytest.fixture
def settings() -> Settings:
    return Settings(GEMINI_API_KEY="", ACCESS_KEY="", _env_file=None)


@pytest.fixture
def client(settings: Settings, fake_agent: FakeLogoAgent):
    """Create test client with the fake agent injected."""
    app = create_app(settings)
    app.dependency_overrides[get_logo_agent] = lambda: fake_agent
    return TestClient(app)


@pytest.fixture
def session_id(client: TestClient) -> str:
    response = client.post("/api/v1/studio/sessions")
    assert response.status_code == 201
    return response.json()["session_id"]


class TestHealth:
    """Health and info endpoints."""

    def test_health_returns_ok(self, client: TestClient):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data

    def test_api_info(self, client: TestClient):
        response = client.get("/api")
        assert response.status_code == 200
        data = response.json()
        assert data["provider"] == "gemini"
        assert data["docs"] == "/docs"

    def test_root_serves_studio_page(self, client: TestClient):
        response = client.get("/")
        assert response.status_code == 200
        assert "BrandSpark" in response.text

    def test_static_script_served(self, client: TestClient):
        response = client.get("/static/app.js")
        assert response.status_code == 200


class TestLogos:
    """Stateless logo endpoints."""

    def test_generate_returns_four_downloadable_logos(self, client, fake_agent):
        response = client.post(
            "/api/v1/logos/generate",
            json={"brand_name": "Aperture Labs", "prompt": "camera shutter"},
        )

        assert response.status_code == 200
        data = response.json()
        assert [logo["index"] for logo in data["logos"]] == [1, 2, 3, 4]
        assert data["logos"][2]["filename"] == "brandspark-aperture-labs-3.png"
        assert data["logos"][0]["data_url"] == fake_agent.logos[0]

    def test_generate_blank_brand_is_422_without_call(self, client, fake_agent):
        response = client.post("/api/v1/logos/generate", json={"brand_name": "  "})

        assert response.status_code == 422
        assert fake_agent.calls == []

    def test_generate_remote_failure_is_502(self, client, fake_agent):
        fake_agent.error = NoImageReturnedError("The model did not return any images.")

        response = client.post("/api/v1/logos/generate", json={"brand_name": "Acme"})

        assert response.status_code == 502
        assert response.json()["detail"].startswith("Failed to generate logos.")

    def test_enhance_returns_pair(self, client, fake_agent, png_data_url):
        response = client.post(
            "/api/v1/logos/enhance",
            json={"image": png_data_url, "prompt": "make it 3D"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["original"] == png_data_url
        assert data["enhanced"] == fake_agent.enhanced
        assert data["filename"] == "brandspark-logo-1.png"

    def test_enhance_blank_prompt_is_422(self, client, fake_agent, png_data_url):
        response = client.post("/api/v1/logos/enhance", json={"image": png_data_url, "prompt": ""})

        assert response.status_code == 422
        assert fake_agent.calls == []


class TestProviderNotConfigured:
    """Without an API key the provider cannot be built."""

    def test_generate_is_503(self, settings: Settings):
        client = TestClient(create_app(settings))

        response = client.post("/api/v1/logos/generate", json={"brand_name": "Acme"})

        assert response.status_code == 503


class TestStudio:
    """Studio session endpoints."""

    def test_new_session_is_idle(self, client, session_id):
        data = client.get(f"/api/v1/studio/sessions/{session_id}").json()

        assert data["state"] == {"status": "idle"}
        assert data["mode"] == "generate"
        assert data["brand_name"] == ""
        assert data["downloads"] == []

    def test_generate_flow_with_downloads(self, client, session_id, fake_agent):
        base = f"/api/v1/studio/sessions/{session_id}"
        client.patch(base, json={"brand_name": "Aperture Labs", "prompt": "shutter"})

        data = client.post(f"{base}/generate").json()

        assert data["state"]["status"] == "generated"
        assert len(data["state"]["logos"]) == 4
        assert data["downloads"][3] == "brandspark-aperture-labs-4.png"

        response = client.get(f"{base}/downloads/2")
        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert 'filename="brandspark-aperture-labs-2.png"' in response.headers["content-disposition"]

    def test_generate_without_brand_shows_validation(self, client, session_id, fake_agent):
        data = client.post(f"/api/v1/studio/sessions/{session_id}/generate").json()

        assert data["state"]["status"] == "idle"
        assert data["validation_message"] == "Please provide a brand name."
        assert fake_agent.calls == []

    def test_enhance_flow(self, client, session_id, png_data_url, fake_agent):
        base = f"/api/v1/studio/sessions/{session_id}"
        client.patch(base, json={"mode": "enhance", "uploaded_image": png_data_url, "prompt": "3D"})

        data = client.post(f"{base}/enhance").json()

        assert data["state"] == {
            "status": "enhanced",
            "original": png_data_url,
            "enhanced": fake_agent.enhanced,
        }
        assert data["downloads"] == ["brandspark-logo-1.png"]

    def test_error_then_start_over(self, client, session_id, fake_agent):
        fake_agent.error = LogoServiceError("quota exceeded")
        base = f"/api/v1/studio/sessions/{session_id}"
        client.patch(base, json={"brand_name": "Acme"})

        data = client.post(f"{base}/generate").json()
        assert data["state"] == {
            "status": "error",
            "message": "Failed to generate logos. quota exceeded",
        }

        data = client.post(f"{base}/start-over").json()
        assert data["state"] == {"status": "idle"}
        assert data["brand_name"] == ""

    def test_edit_on_result_screen_is_409(self, client, session_id):
        base = f"/api/v1/studio/sessions/{session_id}"
        client.patch(base, json={"brand_name": "Acme"})
        client.post(f"{base}/generate")

        response = client.patch(base, json={"prompt": "again"})

        assert response.status_code == 409

    def test_bad_upload_is_400(self, client, session_id):
        response = client.patch(
            f"/api/v1/studio/sessions/{session_id}",
            json={"mode": "enhance", "uploaded_image": "data:image/png;base64,aGVsbG8="},
        )
        assert response.status_code == 400

    def test_upload_over_limit_is_413(self, fake_agent, png_data_url):
        app = create_app(Settings(MAX_UPLOAD_MB=0, _env_file=None))
        app.dependency_overrides[get_logo_agent] = lambda: fake_agent
        client = TestClient(app)
        session_id = client.post("/api/v1/studio/sessions").json()["session_id"]

        response = client.patch(
            f"/api/v1/studio/sessions/{session_id}",
            json={"mode": "enhance", "uploaded_image": png_data_url},
        )

        assert response.status_code == 413
        assert "too large" in response.json()["detail"]
        data = client.get(f"/api/v1/studio/sessions/{session_id}").json()
        assert data["uploaded_image"] is None

    def test_huge_image_dimensions_are_413(self, client, session_id, monkeypatch):
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

        response = client.patch(
            f"/api/v1/studio/sessions/{session_id}",
            json={"mode": "enhance", "uploaded_image": make_data_url(make_png(size=(20, 20)))},
        )

        assert response.status_code == 413

    def test_malformed_data_url_is_400(self, client, session_id):
        response = client.patch(
            f"/api/v1/studio/sessions/{session_id}",
            json={"uploaded_image": "not-a-data-url"},
        )
        assert response.status_code == 400

    def test_download_before_result_is_404(self, client, session_id):
        response = client.get(f"/api/v1/studio/sessions/{session_id}/downloads/1")
        assert response.status_code == 404

    def test_unknown_session_is_404(self, client):
        response = client.get(f"/api/v1/studio/sessions/{'0' * 32}")
        assert response.status_code == 404

    def test_delete_session(self, client, session_id):
        assert client.delete(f"/api/v1/studio/sessions/{session_id}").status_code == 204
        assert client.get(f"/api/v1/studio/sessions/{session_id}").status_code == 404
