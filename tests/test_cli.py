"""End-to-end tests for the whatver command with a stubbed registry."""

import io
import json
from unittest.mock import patch

import pytest
from rich.console import Console

import whatver
from args import parse_args

LATEST = {
    "name": "lodash",
    "_id": "lodash@4.17.21",
    "version": "4.17.21",
    "homepage": "https://lodash.com/",
    "dist": {"shasum": "abc", "tarball": "https://example.com/lodash.tgz", "signatures": []},
}


class _FakeRegistryClient:
    """Stands in for NpmRegistryClient inside whatver.run."""

    versions = {"4.17.20": {}, "3.10.1": {}, "4.17.21": {}, "5.0.0-beta.1": {}}
    versions_status = 200
    instances = []

    def __init__(self, registry_url, timeout):
        self.registry_url = registry_url
        self.timeout = timeout
        _FakeRegistryClient.instances.append(self)

    async def get_versions_document(self, pkg_name):
        if self.versions_status != 200:
            return self.versions_status, "Not Found", None
        return 200, "OK", {"versions": dict(self.versions)}

    async def get_latest_document(self, pkg_name):
        if self.versions_status != 200:
            return self.versions_status, "Not Found", None
        return 200, "OK", dict(LATEST)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None


@pytest.fixture
def fake_registry(monkeypatch):
    _FakeRegistryClient.instances = []
    monkeypatch.setattr(_FakeRegistryClient, "versions_status", 200)
    with patch("whatver.NpmRegistryClient", _FakeRegistryClient):
        yield _FakeRegistryClient


@pytest.fixture
def project(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ("WHATVER_CONFIG", "WHATVER_REGISTRY_URL", "WHATVER_REQUEST_TIMEOUT", "WHATVER_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


def _run(argv):
    out, err = io.StringIO(), io.StringIO()
    code = whatver.main(
        argv,
        console=Console(file=out, width=120, color_system=None),
        err_console=Console(file=err, width=120, color_system=None),
    )
    return code, out.getvalue(), err.getvalue()


class TestArgs:
    def test_defaults(self):
        args = parse_args(["lodash"])
        assert args.package == "lodash"
        assert args.range is None
        assert args.ALL is False
        assert args.SHOW_PRERELEASE is False

    def test_flags(self):
        args = parse_args(["react", "^18", "-a", "-p"])
        assert args.range == "^18"
        assert args.ALL is True
        assert args.SHOW_PRERELEASE is True

    def test_package_is_required(self):
        with pytest.raises(SystemExit) as exc_info:
            parse_args([])
        assert exc_info.value.code == 2


class TestMain:
    def test_explicit_range_lists_satisfied_only(self, fake_registry, project):
        code, out, err = _run(["lodash", "^4.17.0"])

        assert code == 0
        assert err == ""
        assert "lodash | https://lodash.com/" in out
        assert "4.17.20" in out
        assert "4.17.21" in out
        assert "3.10.1" not in out
        assert "5.0.0-beta.1" not in out

    def test_no_range_lists_all(self, fake_registry, project):
        _, out, _ = _run(["lodash"])

        assert "3.10.1" in out
        assert "4.17.21" in out
        assert "5.0.0-beta.1" not in out

    def test_show_prerelease(self, fake_registry, project):
        _, out, _ = _run(["lodash", "--all", "--show-prerelease"])

        assert "5.0.0-beta.1" in out

    def test_local_range_and_installed_version(self, fake_registry, project):
        (project / "package.json").write_text(json.dumps({
            "version": "1.0.0",
            "dependencies": {"lodash": "~4.17.20"},
        }))
        installed = project / "node_modules" / "lodash"
        installed.mkdir(parents=True)
        (installed / "package.json").write_text(json.dumps({"name": "lodash", "version": "4.17.21"}))

        _, out, _ = _run(["lodash"])

        assert "./node_modules/lodash | ✔ 4.17.21 | ~4.17.20" in out
        assert "✔ 4.17.21" in out
        assert "3.10.1" not in out

    def test_explicit_range_overrides_local_range(self, fake_registry, project):
        (project / "package.json").write_text(json.dumps({
            "version": "1.0.0",
            "dependencies": {"lodash": "^3.0.0"},
        }))

        _, out, _ = _run(["lodash", "^4.0.0"])

        assert "4.17.21" in out
        assert "3.10.1" not in out

    def test_no_satisfied_versions(self, fake_registry, project):
        _, out, _ = _run(["lodash", "^9.0.0"])

        assert "No versions found for range: ^9.0.0" in out

    def test_no_versions_at_all(self, fake_registry, project, monkeypatch):
        monkeypatch.setattr(fake_registry, "versions", {})

        _, out, _ = _run(["lodash"])

        assert "No versions found" in out

    def test_invalid_range_printed_to_stderr(self, fake_registry, project):
        code, _, err = _run(["lodash", "^abc"])

        assert code == 0
        assert "Invalid semver range: ^abc" in err

    def test_registry_error_printed_to_stderr(self, fake_registry, project, monkeypatch):
        monkeypatch.setattr(fake_registry, "versions_status", 404)

        code, out, err = _run(["missing-package"])

        assert code == 0
        assert out == ""
        assert "Failed to fetch package info: Package 'missing-package' not found in npm registry" in err

    def test_registry_flag(self, fake_registry, project):
        _run(["lodash", "--registry", "https://npm.example.com/"])

        assert fake_registry.instances[-1].registry_url == "https://npm.example.com/"
