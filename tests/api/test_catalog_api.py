"""
HTTP API tests against an app wired with an in-memory channel.
"""

import pytest
from fastapi.testclient import TestClient

from channel_video_system.api.server import APIServer
from channel_video_system.catalog.integration import CatalogModule
from channel_video_system.core.errors import ExternalServiceError, NotFoundError, RateLimitedError

from tests.conftest import make_record, write_catalog


@pytest.fixture
def seeded(config):
    write_catalog(
        config.storage.catalog_path,
        [
            make_record("1", title="Older", created_at=1_700_000_000),
            make_record("2", title="Newer", thumbnail_handle="thumb-2", created_at=1_700_000_100),
            make_record("3", title="No content", primary_handle=""),
            make_record("demo", title="Demo"),
        ],
    )
    return config


@pytest.fixture
def client(seeded, stub_remote):
    module = CatalogModule(seeded, remote_client=stub_remote)
    return TestClient(APIServer(seeded, module).app)


class TestCatalogReads:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["catalog"]["remote_client"] == "StubRemoteLogClient"
        assert body["catalog"]["admin_routes_enabled"] is False

    def test_list_videos_newest_first(self, client):
        response = client.get("/api/videos")
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert [video["id"] for video in body["videos"]] == ["2", "1"]
        assert body["videos"][0]["thumbnail_url"] == "/api/thumb/2"
        assert body["videos"][1]["thumbnail_url"] == "/placeholder-thumb.svg"

    def test_video_detail(self, client):
        response = client.get("/api/video/2")
        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Newer"
        assert body["video_url"] == "/api/resolve/2"
        assert body["created_at_display"].startswith("2023-11-14")

    @pytest.mark.parametrize("video_id", ["missing", "3", "demo"])
    def test_video_detail_not_found(self, client, video_id):
        assert client.get(f"/api/video/{video_id}").status_code == 404

    def test_empty_catalog(self, config, stub_remote):
        client = TestClient(APIServer(config, CatalogModule(config, remote_client=stub_remote)).app)
        assert client.get("/api/videos").json() == {"videos": [], "total": 0}


class TestResolve:
    def test_redirects_to_content(self, client):
        response = client.get("/api/resolve/1", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "https://cdn.example/x"

    def test_unknown_video(self, client):
        response = client.get("/api/resolve/missing", follow_redirects=False)
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_video_without_content(self, client):
        assert client.get("/api/resolve/3", follow_redirects=False).status_code == 404

    def test_remote_content_gone(self, client, stub_remote):
        stub_remote.resolve_error = NotFoundError("content")
        assert client.get("/api/resolve/1", follow_redirects=False).status_code == 404

    def test_rate_limited(self, client, stub_remote):
        stub_remote.resolve_error = RateLimitedError(60)
        response = client.get("/api/resolve/1", follow_redirects=False)
        assert response.status_code == 429
        assert response.headers["retry-after"] == "60"
        assert response.json()["retry_after_seconds"] == 60

    def test_upstream_failure(self, client, stub_remote):
        stub_remote.resolve_error = ExternalServiceError(500, "Internal Server Error")
        response = client.get("/api/resolve/1", follow_redirects=False)
        assert response.status_code == 502
        assert response.json()["error"] == "upstream_error"


class TestThumbnails:
    def test_redirects_to_thumbnail(self, client, stub_remote):
        response = client.get("/api/thumb/2", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "https://cdn.example/x"
        assert stub_remote.resolved_handles == ["thumb-2"]

    @pytest.mark.parametrize("video_id", ["1", "missing"])
    def test_placeholder_redirect(self, client, video_id):
        response = client.get(f"/api/thumb/{video_id}", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "/placeholder-thumb.svg"

    def test_placeholder_on_remote_failure(self, client, stub_remote):
        stub_remote.resolve_error = RateLimitedError(30)
        response = client.get("/api/thumb/2", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "/placeholder-thumb.svg"

    def test_placeholder_image(self, client):
        response = client.get("/placeholder-thumb.svg")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("image/svg+xml")


class TestAdminRoutes:
    def test_disabled_by_default(self, client):
        assert client.post("/admin/sync").status_code == 404

    def test_sync_endpoint(self, seeded, stub_remote):
        seeded.system.enable_admin_routes = True
        stub_remote.add_event('{"type": "video_meta", "video_msg_id": 9, "file_id": "f9", "title": "Remote", "uploaded_at": 1800000000}')
        client = TestClient(APIServer(seeded, CatalogModule(seeded, remote_client=stub_remote)).app)

        response = client.post("/admin/sync")

        assert response.status_code == 200
        assert response.json()["decoded_events"] == 1
        assert client.get("/api/videos").json()["videos"][0]["id"] == "9"
