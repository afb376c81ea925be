import json
import logging
from pathlib import Path

import pytest

from auto_changeset.vcs.git_client import GitError


class FakeHistory:
    """In-memory stand-in for :class:`GitClient` history queries."""

    def __init__(self, commits=None, files=None, merge_bases=None, upstreams=None, refs=(),
                 failing_files=(), fail_log=False):
        self.commits = list(commits or [])
        self.files = dict(files or {})
        self.merge_bases = dict(merge_bases or {})
        self.upstreams = dict(upstreams or {})
        self.refs = set(refs)
        self.failing_files = set(failing_files)
        self.fail_log = fail_log
        self.log_calls = []

    def list_commits(self, lower, upper):
        self.log_calls.append((lower, upper))
        if self.fail_log:
            raise GitError(f"fatal: bad revision '{lower}..{upper}'")
        return list(self.commits)

    def changed_files(self, commit_hash):
        if commit_hash in self.failing_files:
            raise GitError(f"fatal: bad object {commit_hash}")
        return list(self.files.get(commit_hash, []))

    def merge_base(self, first, second):
        try:
            return self.merge_bases[(first, second)]
        except KeyError:
            raise GitError("fatal: no merge base") from None

    def upstream_of(self, branch):
        return self.upstreams.get(branch)

    def ref_exists(self, ref):
        return ref in self.refs


@pytest.fixture
def make_history():
    """Factory for fake histories."""
    return FakeHistory


def write_package(root: Path, directory: str, name: str) -> Path:
    package_dir = root / "packages" / directory
    package_dir.mkdir(parents=True)
    (package_dir / "package.json").write_text(json.dumps({"name": name, "version": "1.0.0"}))
    return package_dir


@pytest.fixture
def monorepo(tmp_path: Path) -> Path:
    """A repository with the packages ``core`` and ``ui``."""
    root = tmp_path / "repo"
    (root / ".git").mkdir(parents=True)
    write_package(root, "core", "core")
    write_package(root, "ui", "ui")
    (root / "package.json").write_text(json.dumps({"name": "root", "private": True}))
    return root


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo ``logging.basicConfig(force=True)`` calls made by the CLI."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
