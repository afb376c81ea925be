from auto_changeset.grouping.attribution import attribute_commits, files_in_package
from auto_changeset.history.commit_loader import Commit
from auto_changeset.workspace.registry import Package


CORE = Package(name="core", root_path="packages/core")
UI = Package(name="ui", root_path="packages/ui")
UI_KIT = Package(name="ui-kit", root_path="packages/ui-kit")


def commit(hash_char, subject, *files):
    return Commit(hash=hash_char * 40, subject=subject, changed_files=tuple(files))


def test_matched_files_are_prefixed_by_package_root():
    commits = [
        commit("a", "feat: shared", "packages/core/src/a.ts", "packages/ui/src/b.ts", "README.md"),
        commit("b", "fix: kit", "packages/ui-kit/index.ts"),
    ]

    attribution = attribute_commits(commits, [CORE, UI, UI_KIT])

    for package in (CORE, UI, UI_KIT):
        for entry in attribution[package.name]:
            assert entry.matched_files
            assert all(f.startswith(package.root_path + "/") for f in entry.matched_files)
            assert entry.matched_files <= set(entry.commit.changed_files)
    # packages/ui-kit must not be mistaken for packages/ui
    assert [e.commit.subject for e in attribution["ui"]] == ["feat: shared"]
    assert [e.commit.subject for e in attribution["ui-kit"]] == ["fix: kit"]


def test_commit_listed_once_per_package():
    shared = commit("a", "refactor: move helpers", "packages/core/x.ts", "packages/core/y.ts", "packages/ui/z.ts")

    attribution = attribute_commits([shared], [CORE, UI])

    assert len(attribution["core"]) == 1
    assert attribution["core"][0].matched_files == frozenset({"packages/core/x.ts", "packages/core/y.ts"})
    assert attribution["ui"][0].matched_files == frozenset({"packages/ui/z.ts"})


def test_root_level_changes_are_not_attributed():
    commits = [
        commit("a", "chore: bump tooling", "package.json", ".github/workflows/ci.yml"),
        commit("b", "chore: nothing", ),
    ]

    assert attribute_commits(commits, [CORE, UI]) == {}


def test_identical_subjects_are_kept():
    commits = [
        commit("a", "fix: typo", "packages/core/a.ts"),
        commit("b", "fix: typo", "packages/core/b.ts"),
    ]

    entries = attribute_commits(commits, [CORE])["core"]

    assert [e.commit.short_hash for e in entries] == ["aaaaaaa", "bbbbbbb"]


def test_files_in_package_ignores_root_itself():
    assert files_in_package(["packages/core", "packages/core/a.ts", "packages/coreutils/b.ts"], CORE) == {
        "packages/core/a.ts"
    }
