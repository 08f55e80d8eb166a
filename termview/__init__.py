"""Terminal view runtime and API boundary modules."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from termview.api.application import ApplicationSetup
    from termview.api.terminal import Terminal


def run(*, terminal: "Terminal", setup: "ApplicationSetup | None" = None) -> None:
    """Run one application on ``terminal`` until QUIT."""
    from termview.api.application import run_application

    run_application(terminal, setup=setup)

__all__ = ["run"]
