import json
from pathlib import Path

import pytest

from auto_changeset.workspace.registry import DiscoveryError, NoPackagesFound, Package, discover_packages


def test_discovers_packages_with_manifest(monorepo: Path):
    (monorepo / "packages" / "scratch").mkdir()
    (monorepo / "packages" / "README.md").write_text("not a package")

    packages = discover_packages(monorepo)

    assert packages == [
        Package(name="core", root_path="packages/core"),
        Package(name="ui", root_path="packages/ui"),
    ]


def test_name_comes_from_manifest(tmp_path: Path):
    package_dir = tmp_path / "packages" / "react-hooks"
    package_dir.mkdir(parents=True)
    (package_dir / "package.json").write_text(json.dumps({"name": "@acme/react-hooks"}))

    assert discover_packages(tmp_path) == [Package(name="@acme/react-hooks", root_path="packages/react-hooks")]


def test_custom_layout(tmp_path: Path):
    package_dir = tmp_path / "libs" / "shared"
    package_dir.mkdir(parents=True)
    (package_dir / "manifest.json").write_text(json.dumps({"name": "shared"}))

    packages = discover_packages(tmp_path, packages_dir="libs", manifest="manifest.json")

    assert packages == [Package(name="shared", root_path="libs/shared")]


def test_unreadable_manifest_is_skipped(monorepo: Path, caplog):
    broken = monorepo / "packages" / "broken"
    broken.mkdir()
    (broken / "package.json").write_text("{not json")
    nameless = monorepo / "packages" / "nameless"
    nameless.mkdir()
    (nameless / "package.json").write_text(json.dumps({"version": "1.0.0"}))

    with caplog.at_level("WARNING"):
        names = [p.name for p in discover_packages(monorepo)]

    assert names == ["core", "ui"]
    assert "broken" in caplog.text
    assert "nameless" in caplog.text


def test_missing_packages_dir(tmp_path: Path):
    with pytest.raises(NoPackagesFound):
        discover_packages(tmp_path)


def test_no_manifest_anywhere(tmp_path: Path):
    (tmp_path / "packages" / "empty").mkdir(parents=True)
    with pytest.raises(DiscoveryError):
        discover_packages(tmp_path)
