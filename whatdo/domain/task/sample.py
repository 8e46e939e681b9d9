"""Tutorial tree written by ``wd init``."""

from .models import Whatdo


def initial_whatdo_tree(project: str) -> Whatdo:
    """Build the starter tree for a new project, rooted at ``project``."""
    return Whatdo(
        id=project,
        summary="<description of your project>",
        queue=["setting-up-new-project"],
        children=[
            Whatdo(
                id="setting-up-new-project",
                summary="Things to do to set up your WHATDO.yaml for a project",
                priority=1,
                children=[
                    Whatdo(
                        id="run-start-command",
                        summary="Start this tutorial with `wd start setting-up-new-project`",
                    ),
                    Whatdo(
                        id="use-next-command",
                        summary="View what to do next with `wd next`, or the whole tree with `wd ls`",
                    ),
                    Whatdo(
                        id="add-with-cli",
                        summary='Add some real whatdos: `wd add example-whatdo -m "What to do"`',
                    ),
                    Whatdo(
                        id="add-manually",
                        summary="Add abbreviated whatdos like this one by editing this file",
                    ),
                    Whatdo(
                        id="use-tags",
                        summary="Classify whatdos with tags and priorities: "
                        "`wd add test-tags -t important -t cool -p 1`",
                        tags=["optional"],
                    ),
                    Whatdo(
                        id="nest",
                        summary="Nest whatdos: `wd add sub-whatdo --parent example-whatdo`",
                        tags=["optional"],
                    ),
                    Whatdo(
                        id="run-finish-command",
                        summary="Finish this tutorial and merge it to the default branch: `wd finish`",
                    ),
                ],
            )
        ],
    )
