"""Integration tests for the filesystem endpoints (/fs/*).

Each test runs against a fresh filesystem injected through dependency
overrides (see tests/fixtures/api.py).
"""

from unittest.mock import patch

import pytest

from api.dependencies import get_settings
from main import app
from vfs.config import Settings


class TestNavigation:
    """Tests for GET /fs/pwd and POST /fs/cd."""

    def test_pwd_starts_at_root(self, api_client):
        response = api_client.get("/fs/pwd")

        assert response.status_code == 200
        assert response.json() == {"working_dir": "/"}

    def test_cd_then_pwd(self, api_client, api_fs):
        api_fs.mkdir("a")
        api_fs.mkdir("a/b")

        response = api_client.post("/fs/cd", json={"path": "a/b"})

        assert response.status_code == 200
        data = response.json()
        assert data["working_dir"] == "/a/b"
        assert data["events_logged"] == 0
        assert api_client.get("/fs/pwd").json()["working_dir"] == "/a/b"

    def test_cd_dotdot(self, api_client):
        api_client.post("/fs/mkdir", json={"path": "a"})
        api_client.post("/fs/cd", json={"path": "a"})
        api_client.post("/fs/mkdir", json={"path": "b"})
        api_client.post("/fs/cd", json={"path": "b"})
        api_client.post("/fs/cd", json={"path": ".."})

        assert api_client.get("/fs/pwd").json()["working_dir"] == "/a"

    def test_cd_to_file_is_bad_request(self, api_client, api_fs):
        api_fs.create_file("f.txt")

        response = api_client.post("/fs/cd", json={"path": "f.txt"})

        assert response.status_code == 400
        assert response.json()["type"] == "NotDirectoryError"

    def test_cd_missing_is_not_found(self, api_client):
        response = api_client.post("/fs/cd", json={"path": "nowhere"})

        assert response.status_code == 404


class TestCreate:
    """Tests for POST /fs/mkdir and POST /fs/touch."""

    def test_mkdir(self, api_client, api_fs):
        response = api_client.post("/fs/mkdir", json={"path": "docs"})

        assert response.status_code == 200
        data = response.json()
        assert data["path"] == "/docs"
        assert data["events_logged"] == 1
        assert api_fs.resolve("/docs").is_directory

    def test_touch(self, api_client, api_fs):
        response = api_client.post("/fs/touch", json={"path": "empty.txt"})

        assert response.status_code == 200
        assert api_fs.read_file("empty.txt") == ""

    def test_duplicate_is_conflict(self, api_client):
        api_client.post("/fs/mkdir", json={"path": "docs"})

        response = api_client.post("/fs/touch", json={"path": "docs"})

        assert response.status_code == 409
        body = response.json()
        assert body["type"] == "AlreadyExistsError"
        assert body["path"] == "/docs"

    def test_missing_parent_is_not_found(self, api_client):
        response = api_client.post("/fs/mkdir", json={"path": "a/b/c"})

        assert response.status_code == 404
        assert response.json()["detail"] == "path not found: a"

    def test_invalid_name_is_bad_request(self, api_client):
        response = api_client.post("/fs/mkdir", json={"path": "/"})

        assert response.status_code == 400
        assert response.json()["type"] == "InvalidPathError"

    def test_missing_body_field_is_unprocessable(self, api_client):
        response = api_client.post("/fs/mkdir", json={})

        assert response.status_code == 422


class TestReadWrite:
    """Tests for POST /fs/write and GET /fs/cat."""

    def test_fresh_write_logs_two_events(self, api_client):
        response = api_client.post(
            "/fs/write", json={"path": "notes.txt", "content": "hello"}
        )

        assert response.status_code == 200
        assert response.json()["events_logged"] == 2

    def test_overwrite_logs_one_event(self, api_client):
        api_client.post("/fs/write", json={"path": "notes.txt", "content": "a"})

        response = api_client.post("/fs/write", json={"path": "notes.txt", "content": "b"})

        assert response.json()["events_logged"] == 1

    def test_cat_returns_content_verbatim(self, api_client):
        content = "line one\nline two\n"
        api_client.post("/fs/write", json={"path": "notes.txt", "content": content})

        response = api_client.get("/fs/cat", params={"path": "notes.txt"})

        assert response.status_code == 200
        assert response.json() == {"path": "/notes.txt", "content": content}

    def test_cat_directory_is_bad_request(self, api_client):
        api_client.post("/fs/mkdir", json={"path": "docs"})

        response = api_client.get("/fs/cat", params={"path": "docs"})

        assert response.status_code == 400
        assert response.json()["type"] == "IsDirectoryError"

    def test_cat_requires_path(self, api_client):
        response = api_client.get("/fs/cat")

        assert response.status_code == 422

    def test_write_to_directory_is_bad_request(self, api_client):
        api_client.post("/fs/mkdir", json={"path": "docs"})

        response = api_client.post("/fs/write", json={"path": "docs", "content": "x"})

        assert response.status_code == 400


class TestListing:
    """Tests for GET /fs/ls and GET /fs/snapshot."""

    def test_ls_sorted_entries(self, api_client, api_fs):
        api_fs.mkdir("zeta")
        api_fs.write_file("alpha.txt", "12345")

        response = api_client.get("/fs/ls", params={"path": "/"})

        assert response.status_code == 200
        data = response.json()
        assert data["path"] == "/"
        assert data["count"] == 2
        assert [e["name"] for e in data["entries"]] == ["alpha.txt", "zeta"]
        assert data["entries"][0]["size"] == 5
        assert data["entries"][1]["size"] is None
        assert data["entries"][1]["is_directory"] is True

    def test_ls_defaults_to_working_dir(self, api_client, api_fs):
        api_fs.mkdir("docs")
        api_fs.create_file("docs/a")
        api_fs.change_dir("docs")

        data = api_client.get("/fs/ls").json()

        assert data["path"] == "/docs"
        assert [e["name"] for e in data["entries"]] == ["a"]

    def test_ls_file_is_bad_request(self, api_client, api_fs):
        api_fs.create_file("a")

        response = api_client.get("/fs/ls", params={"path": "a"})

        assert response.status_code == 400
        assert response.json()["type"] == "NotDirectoryError"

    def test_snapshot(self, api_client, api_fs):
        api_fs.mkdir("docs")
        api_fs.write_file("docs/readme.txt", "hi")

        response = api_client.get("/fs/snapshot")

        assert response.status_code == 200
        data = response.json()
        assert data["working_dir"] == "/"
        assert data["event_count"] == 3
        assert data["node_count"] == 3
        docs = data["tree"]["children"][0]
        assert docs["name"] == "docs"
        assert docs["children"][0]["content"] == "hi"


class TestRemove:
    """Tests for POST /fs/rm."""

    def test_remove_file(self, api_client, api_fs):
        api_fs.write_file("a.txt", "x")

        response = api_client.post("/fs/rm", json={"path": "a.txt"})

        assert response.status_code == 200
        assert response.json()["path"] == "/a.txt"
        assert response.json()["events_logged"] == 1
        assert api_fs.tree.structure() == {}

    def test_remove_root_is_bad_request(self, api_client):
        response = api_client.post("/fs/rm", json={"path": "/"})

        assert response.status_code == 400
        assert response.json()["type"] == "RootRemovalError"

    def test_remove_non_empty_is_conflict(self, api_client, api_fs):
        api_fs.mkdir("docs")
        api_fs.create_file("docs/a")

        response = api_client.post("/fs/rm", json={"path": "docs"})

        assert response.status_code == 409
        assert response.json()["type"] == "DirectoryNotEmptyError"

    def test_remove_working_dir_moves_up(self, api_client, api_fs):
        api_fs.mkdir("docs")
        api_fs.change_dir("docs")

        response = api_client.post("/fs/rm", json={"path": "."})

        assert response.status_code == 200
        assert response.json()["working_dir"] == "/"


class TestExec:
    """Tests for POST /fs/exec."""

    def test_disabled_by_default(self, api_client, api_fs):
        api_fs.write_file("run.sh", "exit 0")

        response = api_client.post("/fs/exec", json={"path": "run.sh"})

        assert response.status_code == 403
        assert "VFS_ALLOW_EXEC" in response.json()["suggestion"]

    @pytest.fixture
    def exec_client(self, api_client):
        app.dependency_overrides[get_settings] = lambda: Settings(allow_exec=True)
        return api_client

    def test_returns_exit_code_when_enabled(self, exec_client, api_fs):
        api_fs.write_file("run.sh", "exit 3")

        with patch("vfs.executor.ScriptExecutor.run", return_value=3) as run:
            response = exec_client.post("/fs/exec", json={"path": "run.sh"})

        assert response.status_code == 200
        assert response.json() == {"path": "/run.sh", "exit_code": 3}
        run.assert_called_once_with("run.sh", "exit 3")

    def test_exec_directory_is_bad_request(self, exec_client, api_fs):
        api_fs.mkdir("bin")

        response = exec_client.post("/fs/exec", json={"path": "bin"})

        assert response.status_code == 400
