"""Public application factory and entrypoint contracts."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from termview.api.terminal import Terminal

if TYPE_CHECKING:
    from termview.runtime.application import ApplicationRoot
    from termview.runtime.strips import StripItem

ApplicationSetup = Callable[["ApplicationRoot"], None]


def create_application(
    terminal: Terminal,
    *,
    menu_items: Iterable[StripItem] = (),
    status_items: Iterable[StripItem] | None = None,
) -> ApplicationRoot:
    """Create an application root sized to ``terminal``."""
    from termview.runtime.application import DEFAULT_STATUS_ITEMS, ApplicationRoot

    return ApplicationRoot(
        terminal,
        menu_items=menu_items,
        status_items=DEFAULT_STATUS_ITEMS if status_items is None else status_items,
    )


def run_application(terminal: Terminal, *, setup: ApplicationSetup | None = None) -> None:
    """Configure logging, build the root, let ``setup`` populate it, and run until quit."""
    from termview.runtime.logging import setup_logging

    setup_logging()
    app = create_application(terminal)
    if setup is not None:
        setup(app)
    app.run()
