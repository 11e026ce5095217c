"""Tests for local package.json lookups."""

import json
import os

import pytest

from errors import InvalidManifestError, NotDeclaredError
from registry.npm.local import (
    installed_manifest_path,
    local_declared_range,
    local_installed_version,
    try_or_none,
)


def _write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2))


class TestLocalDeclaredRange:
    """Declared range lookup in ./package.json."""

    def test_runtime_dependency(self, tmp_path):
        _write_json(tmp_path / "package.json", {
            "name": "app",
            "version": "1.0.0",
            "dependencies": {"lodash": "^4.17.21"},
        })

        assert local_declared_range("lodash", str(tmp_path)) == "^4.17.21"

    def test_category_order(self, tmp_path):
        _write_json(tmp_path / "package.json", {
            "version": "1.0.0",
            "optionalDependencies": {"react": "^16.0.0"},
            "peerDependencies": {"react": "^17.0.0"},
            "devDependencies": {"react": "^18.0.0"},
        })

        assert local_declared_range("react", str(tmp_path)) == "^18.0.0"

    def test_peer_before_optional(self, tmp_path):
        _write_json(tmp_path / "package.json", {
            "version": "1.0.0",
            "optionalDependencies": {"react": "^16.0.0"},
            "peerDependencies": {"react": "^17.0.0"},
        })

        assert local_declared_range("react", str(tmp_path)) == "^17.0.0"

    def test_scoped_package(self, tmp_path):
        _write_json(tmp_path / "package.json", {
            "version": "0.0.1",
            "devDependencies": {"@types/node": "^18.0.0"},
        })

        assert local_declared_range("@types/node", str(tmp_path)) == "^18.0.0"

    def test_uses_working_directory_by_default(self, tmp_path, monkeypatch):
        _write_json(tmp_path / "package.json", {
            "version": "1.0.0",
            "dependencies": {"express": "~4.18.0"},
        })
        monkeypatch.chdir(tmp_path)

        assert local_declared_range("express") == "~4.18.0"

    def test_not_declared(self, tmp_path):
        _write_json(tmp_path / "package.json", {
            "version": "1.0.0",
            "dependencies": {"lodash": "^4.17.21"},
        })

        with pytest.raises(NotDeclaredError) as exc_info:
            local_declared_range("react", str(tmp_path))

        assert str(exc_info.value) == "Package 'react' not found in package.json"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            local_declared_range("lodash", str(tmp_path))

    def test_missing_version(self, tmp_path):
        _write_json(tmp_path / "package.json", {"dependencies": {"lodash": "^4.17.21"}})

        with pytest.raises(InvalidManifestError):
            local_declared_range("lodash", str(tmp_path))

    def test_non_string_version(self, tmp_path):
        _write_json(tmp_path / "package.json", {"version": 1, "dependencies": {"lodash": "^4"}})

        with pytest.raises(InvalidManifestError):
            local_declared_range("lodash", str(tmp_path))

    def test_invalid_json(self, tmp_path):
        (tmp_path / "package.json").write_text("{ not json")

        with pytest.raises(InvalidManifestError, match="not valid JSON"):
            local_declared_range("lodash", str(tmp_path))


class TestLocalInstalledVersion:
    """Installed version lookup under ./node_modules."""

    def test_unscoped(self, tmp_path):
        _write_json(tmp_path / "node_modules" / "lodash" / "package.json", {
            "name": "lodash",
            "version": "4.17.21",
        })

        assert local_installed_version("lodash", str(tmp_path)) == "4.17.21"

    def test_scoped(self, tmp_path):
        _write_json(tmp_path / "node_modules" / "@types" / "node" / "package.json", {
            "name": "@types/node",
            "version": "18.15.11",
        })

        assert local_installed_version("@types/node", str(tmp_path)) == "18.15.11"

    def test_scoped_path_has_two_segments(self, tmp_path):
        path = installed_manifest_path("@babel/core", str(tmp_path))

        assert path == os.path.join(str(tmp_path), "node_modules", "@babel", "core", "package.json")

    def test_not_installed(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            local_installed_version("lodash", str(tmp_path))

    def test_malformed(self, tmp_path):
        _write_json(tmp_path / "node_modules" / "lodash" / "package.json", {"name": "lodash"})

        with pytest.raises(InvalidManifestError):
            local_installed_version("lodash", str(tmp_path))


class TestTryOrNone:
    def test_returns_result(self):
        assert try_or_none(lambda a, b: a + b, 1, b=2) == 3

    def test_failure_becomes_none(self, tmp_path):
        assert try_or_none(local_declared_range, "lodash", str(tmp_path)) is None
        assert try_or_none(local_installed_version, "lodash", str(tmp_path)) is None
