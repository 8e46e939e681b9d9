# tests/test_task_service.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from whatdo.application import WhatdoService
from whatdo.domain.shared import Err, Ok
from whatdo.domain.task import CURRENT, find

from .fakes import CountingRepository, FakeGit


def tree_of(service: WhatdoService):
    loaded = service.load()
    assert isinstance(loaded, Ok)
    return loaded.value


# =============================================================================
# Queries
# =============================================================================


def test_get(service: WhatdoService) -> None:
    assert service.get("delete-whatdo").value.summary == "Delete the whatdo"
    missing = service.get("missing")
    assert isinstance(missing, Err)
    assert "not found" in missing.error


def test_status_follows_checked_out_branch(service: WhatdoService, git: FakeGit) -> None:
    assert service.status().value.active is None
    git.branch = "finish-whatdo"
    report = service.status().value
    assert report.active.id == "finish-whatdo"
    assert [w.id for w in report.upcoming] == ["delete-whatdo", "read-back-whatdos"]


def test_upcoming(service: WhatdoService, git: FakeGit) -> None:
    assert [w.id for w in service.upcoming().value] == ["read-back-whatdos", "delete-whatdo"]
    git.branch = "finish-whatdo"
    assert [w.id for w in service.upcoming(amount=1).value] == ["delete-whatdo"]


def test_upcoming_without_git_branch(
    service: WhatdoService, git: FakeGit, caplog: pytest.LogCaptureFixture
) -> None:
    git.fail["current_branch"] = "not a git repository"
    with caplog.at_level(logging.WARNING):
        result = service.upcoming()
    assert [w.id for w in result.value] == ["read-back-whatdos", "delete-whatdo"]
    assert "not a git repository" in caplog.text


def test_upcoming_is_empty_once_only_root_remains(service: WhatdoService) -> None:
    service.delete("basic-functionality")
    assert service.upcoming().value == []
    assert service.status().value.upcoming == []


def test_status_view(service: WhatdoService) -> None:
    assert [line.whatdo.id for line in service.status().value.lines] == [
        "basic-functionality",
        "read-back-whatdos",
        "finish-whatdo",
        "delete-whatdo",
    ]
    report = service.status(tags=["none"]).value
    assert report.lines == []
    assert report.upcoming == []


def test_status_amount(service: WhatdoService) -> None:
    assert [w.id for w in service.status(amount=1).value.upcoming] == ["read-back-whatdos"]


def test_status_and_start_read_the_document_once(whatdo_file: Path, git: FakeGit) -> None:
    repository = CountingRepository()
    service = WhatdoService(whatdo_file, git, repository)

    service.status(amount=3)
    assert repository.loads == 1

    service.start("delete-whatdo")
    assert repository.loads == 2

    git.branch = "main"
    service.start_next()
    assert repository.loads == 3


def test_queries_report_load_errors(tmp_path: Path) -> None:
    service = WhatdoService(tmp_path / "WHATDO.yaml", FakeGit())
    assert isinstance(service.upcoming(), Err)
    assert isinstance(service.status(), Err)
    assert isinstance(service.start_next(), Err)


# =============================================================================
# init
# =============================================================================


def test_init_writes_tutorial(tmp_path: Path) -> None:
    path = tmp_path / "new-project" / "WHATDO.yaml"
    service = WhatdoService(path, FakeGit())

    result = service.init()
    assert isinstance(result, Ok)
    assert result.value.id == "new-project"
    assert tree_of(service) == result.value
    assert service.upcoming(amount=1).value[0].id == "run-start-command"


def test_init_refuses_to_overwrite(service: WhatdoService, whatdo_file: Path) -> None:
    before = whatdo_file.read_text(encoding="utf-8")
    result = service.init()
    assert isinstance(result, Err)
    assert "already exists" in result.error
    assert whatdo_file.read_text(encoding="utf-8") == before


# =============================================================================
# add
# =============================================================================


def test_add_under_root(service: WhatdoService) -> None:
    result = service.add("write-docs", "Write the docs", ["docs"], 2)
    assert isinstance(result, Ok)
    assert result.value.whatdo_id == "write-docs"
    assert result.value.parent_id == "test_data"

    added = find(tree_of(service), "write-docs")
    assert added.summary == "Write the docs"
    assert added.tags == ["docs"]
    assert added.priority == 2


def test_add_under_parent_with_branch_name(service: WhatdoService) -> None:
    result = service.add("sub", parent="finish-whatdo", branch_name="feature/sub")
    assert result.value.parent_id == "finish-whatdo"
    parent = find(tree_of(service), "finish-whatdo")
    assert [c.id for c in parent.children] == ["delete-whatdo", "sub"]
    assert parent.children[-1].branch_name == "feature/sub"


def test_add_under_current(service: WhatdoService, git: FakeGit) -> None:
    git.branch = "read-back-whatdos"
    result = service.add("sub", parent=CURRENT)
    assert result.value.parent_id == "read-back-whatdos"
    assert [c.id for c in find(tree_of(service), "read-back-whatdos").children] == ["sub"]


def test_add_empty_tags_are_not_stored(service: WhatdoService) -> None:
    service.add("no-tags", tags=[])
    assert find(tree_of(service), "no-tags").tags is None


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"whatdo_id": "not valid"}, "Invalid whatdo"),
        ({"whatdo_id": "ok", "tags": ["Bad"]}, "Invalid whatdo"),
        ({"whatdo_id": "delete-whatdo"}, "already exists"),
        ({"whatdo_id": "ok", "parent": "missing"}, "not found"),
        ({"whatdo_id": "ok", "parent": CURRENT}, "No active whatdo"),
    ],
)
def test_add_failure_leaves_file_untouched(
    service: WhatdoService, whatdo_file: Path, kwargs: dict, message: str
) -> None:
    before = whatdo_file.read_text(encoding="utf-8")
    result = service.add(**kwargs)
    assert isinstance(result, Err)
    assert message in result.error
    assert whatdo_file.read_text(encoding="utf-8") == before


# =============================================================================
# start
# =============================================================================


def test_start_creates_branch(service: WhatdoService, git: FakeGit) -> None:
    result = service.start("read-back-whatdos")
    assert isinstance(result, Ok)
    assert result.value.created
    assert result.value.branch == "read-back-whatdos"
    assert git.branch == "read-back-whatdos"
    assert result.value.whatdo.summary == "Ability to invoke `wd` to list the current whatdos"
    assert service.status().value.active.id == "read-back-whatdos"


def test_start_uses_branch_name(service: WhatdoService, git: FakeGit) -> None:
    service.add("login", branch_name="feature/login")
    assert service.start("login").value.branch == "feature/login"
    assert git.branch == "feature/login"


def test_start_checks_out_existing_branch(service: WhatdoService, git: FakeGit) -> None:
    git.branches.add("delete-whatdo")
    result = service.start("delete-whatdo")
    assert isinstance(result, Ok)
    assert not result.value.created
    assert git.branch == "delete-whatdo"


def test_start_missing_whatdo(service: WhatdoService, git: FakeGit) -> None:
    assert isinstance(service.start("missing"), Err)
    assert git.branch == "main"


def test_start_reports_git_failure(service: WhatdoService, git: FakeGit) -> None:
    git.fail["checkout_new_branch"] = "cannot lock ref"
    result = service.start("delete-whatdo")
    assert isinstance(result, Err)
    assert result.error == "cannot lock ref"


def test_start_next_starts_first_upcoming(service: WhatdoService, git: FakeGit) -> None:
    result = service.start_next(amount=2)
    assert isinstance(result, Ok)
    event, rest = result.value
    assert event.whatdo.id == "read-back-whatdos"
    assert event.created
    assert [w.id for w in rest] == ["delete-whatdo"]
    assert git.branch == "read-back-whatdos"


def test_start_next_with_nothing_left(service: WhatdoService, git: FakeGit) -> None:
    service.delete("basic-functionality")
    assert service.start_next().value == (None, [])
    assert git.branch == "main"
    assert git.branches == {"main"}


# =============================================================================
# delete / resolve
# =============================================================================


def test_delete(service: WhatdoService) -> None:
    result = service.delete("finish-whatdo")
    assert isinstance(result, Ok)
    assert not result.value.resolved
    tree = tree_of(service)
    assert find(tree, "finish-whatdo") is None
    assert find(tree, "delete-whatdo") is None
    assert tree.queue == ["read-back-whatdos"]


def test_resolve(service: WhatdoService) -> None:
    result = service.resolve("delete-whatdo")
    assert result.value.resolved
    assert result.value.summary == "Delete the whatdo"
    assert find(tree_of(service), "delete-whatdo") is None


def test_delete_missing_and_root(service: WhatdoService, whatdo_file: Path) -> None:
    before = whatdo_file.read_text(encoding="utf-8")
    assert isinstance(service.delete("missing"), Err)
    assert isinstance(service.delete("test_data"), Err)
    assert whatdo_file.read_text(encoding="utf-8") == before


# =============================================================================
# finish
# =============================================================================


def test_finish_merges_into_default_branch(
    service: WhatdoService, git: FakeGit, whatdo_file: Path
) -> None:
    service.start("delete-whatdo")

    result = service.finish()
    assert isinstance(result, Ok)
    assert result.value.whatdo_id == "delete-whatdo"
    assert result.value.branch == "delete-whatdo"
    assert result.value.merged_into == "main"

    assert git.commits == [([whatdo_file], "Finish delete-whatdo", False)]
    assert git.merges == [("delete-whatdo", "main", False)]
    tree = tree_of(service)
    assert find(tree, "delete-whatdo") is None
    assert tree.queue == ["read-back-whatdos"]


def test_finish_merges_into_nearest_ancestor_branch(service: WhatdoService, git: FakeGit) -> None:
    service.start("finish-whatdo")
    service.start("delete-whatdo")

    result = service.finish(push=True)
    assert result.value.merged_into == "finish-whatdo"
    assert git.merges == [("delete-whatdo", "finish-whatdo", True)]
    assert git.commits[0][2] is True


def test_finish_uses_repository_default_branch(service: WhatdoService, git: FakeGit) -> None:
    git.default_branch = "trunk"
    git.branches.add("trunk")
    service.start("read-back-whatdos")
    assert service.finish().value.merged_into == "trunk"


def test_finish_push_default_comes_from_service(whatdo_file: Path, git: FakeGit) -> None:
    service = WhatdoService(whatdo_file, git, push=True)
    service.start("read-back-whatdos")
    service.finish()
    assert git.merges == [("read-back-whatdos", "main", True)]


def test_finish_without_active_whatdo(service: WhatdoService, git: FakeGit) -> None:
    result = service.finish()
    assert isinstance(result, Err)
    assert "No active whatdo for branch 'main'" in result.error
    assert git.commits == []


def test_finish_refuses_dirty_tree(
    service: WhatdoService, git: FakeGit, whatdo_file: Path
) -> None:
    service.start("delete-whatdo")
    git.dirty = True
    before = whatdo_file.read_text(encoding="utf-8")

    result = service.finish()
    assert isinstance(result, Err)
    assert "uncommitted changes" in result.error
    assert whatdo_file.read_text(encoding="utf-8") == before
    assert git.commits == []
    assert git.merges == []


def test_finish_reports_commit_failure_after_saving(service: WhatdoService, git: FakeGit) -> None:
    service.start("delete-whatdo")
    git.fail["commit"] = "nothing to commit"

    result = service.finish()
    assert isinstance(result, Err)
    assert "commit failed: nothing to commit" in result.error
    assert find(tree_of(service), "delete-whatdo") is None
    assert git.merges == []


def test_finish_reports_merge_failure(service: WhatdoService, git: FakeGit) -> None:
    service.start("delete-whatdo")
    git.fail["merge"] = "conflict"

    result = service.finish()
    assert isinstance(result, Err)
    assert "merge into 'main' failed: conflict" in result.error
    assert len(git.commits) == 1
