"""Public view-runtime API contracts."""

from termview.api.application import ApplicationSetup, create_application, run_application
from termview.api.command_dispatch import (
    CommandDispatcher,
    DirectCommandHandler,
    RangedCommandHandler,
    create_command_dispatcher,
)
from termview.api.commands import (
    CLOSING_COMMANDS,
    CommandId,
    CommandRegistry,
    create_command_registry,
    get_command_registry,
)
from termview.api.events import (
    NOTHING,
    BroadcastEvent,
    CommandEvent,
    Event,
    KeyEvent,
    NothingEvent,
    PointerEvent,
    is_consumed,
    is_transformation,
)
from termview.api.geometry import Point, Rect
from termview.api.logging import LoggingConfig, configure_logging, setup_logging, shutdown_logging
from termview.api.surface import Cell, Surface
from termview.api.terminal import Terminal, create_scripted_terminal
from termview.api.view import OptionFlag, StateFlag, ViewNode

__all__ = [
    "ApplicationSetup",
    "BroadcastEvent",
    "CLOSING_COMMANDS",
    "Cell",
    "CommandDispatcher",
    "CommandEvent",
    "CommandId",
    "CommandRegistry",
    "DirectCommandHandler",
    "Event",
    "KeyEvent",
    "LoggingConfig",
    "NOTHING",
    "NothingEvent",
    "OptionFlag",
    "Point",
    "PointerEvent",
    "RangedCommandHandler",
    "Rect",
    "StateFlag",
    "Surface",
    "Terminal",
    "ViewNode",
    "configure_logging",
    "create_application",
    "create_command_dispatcher",
    "create_command_registry",
    "create_scripted_terminal",
    "get_command_registry",
    "is_consumed",
    "is_transformation",
    "run_application",
    "setup_logging",
    "shutdown_logging",
]
