"""
Command line tests. The channel is replaced by the in-memory stub.
"""

import json

import pytest

from channel_video_system.main import EXIT_CATALOG_NOT_UPDATED, EXIT_FAILURE, EXIT_OK, run
from channel_video_system.core.errors import ExternalServiceError

from tests.conftest import make_record, write_catalog


@pytest.fixture
def config_file(config):
    return config.config_file


@pytest.fixture
def video(tmp_path):
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"\x00\x00\x00\x18ftypmp42")
    return path


def cli(config_file, *args, remote_client=None, environ=None):
    return run(["--config", config_file, *args], environ=environ if environ is not None else {}, remote_client=remote_client)


class TestPublishCommand:
    def test_publish(self, config_file, config, video, stub_remote, capsys):
        status = cli(config_file, "publish", "--video", str(video), "--title", "T", "--duration", "10", remote_client=stub_remote)

        assert status == EXIT_OK
        assert "Published video 101" in capsys.readouterr().out
        saved = json.loads(config.storage.catalog_path.read_text())
        assert [record["title"] for record in saved["records"]] == ["T"]

    def test_missing_video_file(self, config_file, tmp_path, stub_remote, capsys):
        status = cli(config_file, "publish", "--video", str(tmp_path / "nope.mp4"), "--title", "T", "--duration", "1", remote_client=stub_remote)

        assert status == EXIT_FAILURE
        assert "File not found" in capsys.readouterr().err
        assert stub_remote.uploads == []

    def test_oversized_video(self, config, config_file, video, stub_remote, capsys):
        config.telegram.max_upload_mb = 0
        config.save_config()

        status = cli(config_file, "publish", "--video", str(video), "--title", "T", "--duration", "1", remote_client=stub_remote)

        assert status == EXIT_FAILURE
        assert "limit" in capsys.readouterr().err
        assert stub_remote.uploads == []

    def test_remote_failure(self, config_file, video, stub_remote, capsys):
        stub_remote.upload_error = ExternalServiceError(400, "Bad Request")

        status = cli(config_file, "publish", "--video", str(video), "--title", "T", "--duration", "1", remote_client=stub_remote)

        assert status == EXIT_FAILURE
        assert "publish failed" in capsys.readouterr().err

    def test_catalog_not_updated(self, config, config_file, video, stub_remote, capsys):
        # A directory where the catalog file should be makes every write fail
        config.storage.catalog_path.mkdir(parents=True)

        status = cli(config_file, "publish", "--video", str(video), "--title", "T", "--duration", "1", remote_client=stub_remote)

        assert status == EXIT_CATALOG_NOT_UPDATED
        assert len(stub_remote.published) == 1
        assert "sync" in capsys.readouterr().err


class TestSyncCommand:
    def test_sync(self, config, config_file, stub_remote, capsys):
        write_catalog(config.storage.catalog_path, [make_record("1")])
        stub_remote.add_event('{"type": "video_meta", "video_msg_id": 5, "file_id": "f5", "title": "Remote"}')
        stub_remote.add_event("hello")

        status = cli(config_file, "sync", "--limit", "10", remote_client=stub_remote)

        assert status == EXIT_OK
        assert "1 of 2 log entries" in capsys.readouterr().out
        saved = json.loads(config.storage.catalog_path.read_text())
        assert sorted(record["id"] for record in saved["records"]) == ["1", "5"]


class TestCredentials:
    def test_missing_token(self, tmp_path, capsys):
        config_file = tmp_path / "bare.json"
        config_file.write_text(json.dumps({"storage": {"base_path": str(tmp_path / "data")}, "system": {"log_file": None}}))

        status = cli(str(config_file), "sync")

        assert status == EXIT_FAILURE
        assert "missing credentials" in capsys.readouterr().err

    def test_token_from_environment(self, tmp_path, monkeypatch):
        config_file = tmp_path / "bare.json"
        config_file.write_text(json.dumps({"storage": {"base_path": str(tmp_path / "data")}, "system": {"log_file": None}}))
        created = []

        import channel_video_system.catalog.integration as integration

        class RecordingClient(integration.TelegramRemoteLogClient):
            def __init__(self, telegram_config):
                created.append(telegram_config)
                super().__init__(telegram_config)

        monkeypatch.setattr(integration, "TelegramRemoteLogClient", RecordingClient)

        # Stops at the missing file, before any request
        status = cli(str(config_file), "publish", "--video", str(tmp_path / "nope.mp4"), "--title", "T", environ={"TELEGRAM_BOT_TOKEN": "123:ENV"})

        assert status == EXIT_FAILURE
        assert created[0].bot_token == "123:ENV"
