# tests/conftest.py

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from whatdo.application import WhatdoService
from whatdo.domain.task import Whatdo

from .fakes import FakeGit

SAMPLE_YAML = """\
summary: A streamlined git-based tool for task tracking of a project
queue:
  - read-back-whatdos
  - delete-whatdo
whatdos:
  basic-functionality:
    summary: |
      Implement the absolute minimum stuff for the tool to get it to be useful
      for tracking the progress of this tool
    priority: 0
    whatdos:
      read-back-whatdos: Ability to invoke `wd` to list the current whatdos
      finish-whatdo:
        summary: Ability to invoke `wd finish` to finish the current whatdo
        whatdos:
          delete-whatdo: Delete the whatdo
"""


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """
    Point the user config at an empty per-test directory and drop any log
    handler a CLI run installed, so tests never see each other's state.
    """
    config_dir = tmp_path / "config"
    monkeypatch.setenv("WHATDO_CONFIG_DIR", str(config_dir))
    monkeypatch.delenv("WHATDO_FILE", raising=False)
    yield config_dir
    logger = logging.getLogger("whatdo")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture()
def sample_tree() -> Whatdo:
    """The sample tree, built directly rather than parsed."""
    return Whatdo(
        id="test_data",
        summary="A streamlined git-based tool for task tracking of a project",
        queue=["read-back-whatdos", "delete-whatdo"],
        children=[
            Whatdo(
                id="basic-functionality",
                summary=(
                    "Implement the absolute minimum stuff for the tool to get it to be useful\n"
                    "for tracking the progress of this tool\n"
                ),
                priority=0,
                children=[
                    Whatdo(
                        id="read-back-whatdos",
                        summary="Ability to invoke `wd` to list the current whatdos",
                    ),
                    Whatdo(
                        id="finish-whatdo",
                        summary="Ability to invoke `wd finish` to finish the current whatdo",
                        children=[Whatdo(id="delete-whatdo", summary="Delete the whatdo")],
                    ),
                ],
            )
        ],
    )


@pytest.fixture()
def whatdo_file(tmp_path: Path) -> Path:
    """A WHATDO.yaml holding the sample tree inside a 'test_data' project directory."""
    project_dir = tmp_path / "test_data"
    project_dir.mkdir()
    path = project_dir / "WHATDO.yaml"
    path.write_text(SAMPLE_YAML, encoding="utf-8")
    return path


@pytest.fixture()
def git() -> FakeGit:
    return FakeGit()


@pytest.fixture()
def service(whatdo_file: Path, git: FakeGit) -> WhatdoService:
    return WhatdoService(whatdo_file, git)
