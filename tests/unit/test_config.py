"""Unit tests for corerpc.config (schema and layered loading)."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from corerpc.config.loader import _overlay, _read_layer, load_config
from corerpc.config.schema import ClientConfig
from corerpc.core.errors import ConfigError
from corerpc.profile.versions import ProtocolVersion
from corerpc.rpc.auth import CookieFile, NoAuth, UserPassword


@pytest.fixture
def fake_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the home directory at an empty temporary directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr(Path, "home", lambda: home)
    return home


def _write_config(directory: Path, data: dict) -> Path:
    config_dir = directory / ".corerpc"
    config_dir.mkdir(parents=True, exist_ok=True)
    path = config_dir / "config.json"
    path.write_text(json.dumps(data))
    return path


class TestClientConfig:
    """Tests for ClientConfig schema."""

    def test_defaults(self):
        config = ClientConfig()
        assert config.url == "http://127.0.0.1:8332"
        assert config.timeout == 60.0
        assert config.protocol_version is ProtocolVersion.latest()
        assert isinstance(config.to_auth(), NoAuth)

    @pytest.mark.parametrize("value", ["v26", "26", "26.0", 26])
    def test_protocol_version_forms(self, value):
        assert ClientConfig(protocol_version=value).protocol_version is ProtocolVersion.V26

    def test_unsupported_protocol_version(self):
        with pytest.raises(ValidationError, match="unsupported protocol version"):
            ClientConfig(protocol_version="v12")

    def test_rejects_unknown_fields(self):
        with pytest.raises(ValidationError):
            ClientConfig(rpcport=8332)

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            ClientConfig(timeout=0)

    def test_user_password_auth(self):
        config = ClientConfig(rpc_user="alice", rpc_password="secret")
        assert config.to_auth() == UserPassword("alice", "secret")
        assert "secret" not in repr(config)

    def test_user_without_password(self):
        with pytest.raises(ValidationError, match="rpc_user requires rpc_password"):
            ClientConfig(rpc_user="alice")

    def test_password_without_user(self):
        with pytest.raises(ValidationError, match="rpc_password requires rpc_user"):
            ClientConfig(rpc_password="secret")

    def test_cookie_file_exclusive_with_user(self, tmp_path):
        with pytest.raises(ValidationError, match="cannot be combined"):
            ClientConfig(cookie_file=tmp_path / ".cookie", rpc_user="a", rpc_password="b")

    def test_cookie_file_auth(self, tmp_path):
        config = ClientConfig(cookie_file=str(tmp_path / ".cookie"))
        assert config.to_auth() == CookieFile(tmp_path / ".cookie")

    def test_cookie_file_expands_user(self, fake_home):
        config = ClientConfig(cookie_file="~/.bitcoin/.cookie")
        assert config.cookie_file == fake_home / ".bitcoin" / ".cookie"


class TestReadLayer:
    """Tests for reading a single config layer."""

    def test_missing_optional_layer(self, tmp_path):
        assert _read_layer(tmp_path / "missing.json") is None

    def test_missing_required_layer(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            _read_layer(tmp_path / "missing.json", required=True)

    def test_empty_file_is_empty_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("  \n")
        assert _read_layer(path) == {}

    def test_utf8_bom_accepted(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_bytes(b'\xef\xbb\xbf{"timeout": 5}')
        assert _read_layer(path) == {"timeout": 5}

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="invalid JSON"):
            _read_layer(path)

    def test_non_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError, match="must hold a JSON object, got list"):
            _read_layer(path)

    def test_directory_is_not_a_layer(self, tmp_path):
        (tmp_path / "config.json").mkdir()
        assert _read_layer(tmp_path / "config.json") is None


class TestOverlay:
    """Tests for merging config layers."""

    def test_upper_wins(self):
        assert _overlay({"url": "a", "timeout": 1}, {"url": "b"}) == {"url": "b", "timeout": 1}

    def test_nested_objects_merge(self):
        lower = {"a": {"x": 1, "y": 2}, "b": 1}
        assert _overlay(lower, {"a": {"y": 3}}) == {"a": {"x": 1, "y": 3}, "b": 1}

    def test_lists_replaced(self):
        assert _overlay({"a": [1, 2]}, {"a": [3]}) == {"a": [3]}

    def test_inputs_unchanged(self):
        lower = {"a": {"x": 1}}
        upper = {"a": {"x": 2}}
        _overlay(lower, upper)
        assert lower == {"a": {"x": 1}}
        assert upper == {"a": {"x": 2}}


class TestLoadConfig:
    """Tests for layered load_config."""

    def test_no_files_gives_defaults(self, fake_home, tmp_path):
        config = load_config(cwd=tmp_path)
        assert config == ClientConfig()

    def test_global_layer(self, fake_home, tmp_path):
        _write_config(fake_home, {"url": "http://10.0.0.2:8332", "protocol_version": "v25"})

        config = load_config(cwd=tmp_path)

        assert config.url == "http://10.0.0.2:8332"
        assert config.protocol_version is ProtocolVersion.V25

    def test_local_overrides_global(self, fake_home, tmp_path):
        _write_config(fake_home, {"url": "http://10.0.0.2:8332", "timeout": 10})
        project = tmp_path / "project"
        _write_config(project, {"url": "http://127.0.0.1:18443"})

        config = load_config(cwd=project)

        assert config.url == "http://127.0.0.1:18443"
        assert config.timeout == 10

    def test_cwd_is_home(self, fake_home):
        """The global file is not applied twice when cwd is the home directory."""
        _write_config(fake_home, {"timeout": 5})
        assert load_config(cwd=fake_home).timeout == 5

    def test_invalid_json_layer(self, fake_home, tmp_path):
        (fake_home / ".corerpc").mkdir()
        (fake_home / ".corerpc" / "config.json").write_text("{oops")

        with pytest.raises(ConfigError, match="invalid JSON"):
            load_config(cwd=tmp_path)

    def test_merged_validation_failure(self, fake_home, tmp_path):
        _write_config(fake_home, {"rpc_user": "alice"})

        with pytest.raises(ConfigError) as exc_info:
            load_config(cwd=tmp_path)

        assert "merged from" in exc_info.value.message

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "node.json"
        path.write_text(json.dumps({"protocol_version": "0.17"}))
        assert load_config(path=path).protocol_version is ProtocolVersion.V17

    def test_explicit_path_missing(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(path=tmp_path / "missing.json")
