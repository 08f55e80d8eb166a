"""View runtime modules."""

from termview.runtime.application import DEFAULT_STATUS_ITEMS, ApplicationRoot
from termview.runtime.command_dispatch import CommandDispatcher
from termview.runtime.command_set import (
    CommandRegistry,
    apply_default_commands,
    get_command_registry,
    reset_command_registry,
    set_command_registry,
)
from termview.runtime.config import RuntimeConfig, get_runtime_config, load_runtime_config
from termview.runtime.debug_config import DebugConfig, load_debug_config
from termview.runtime.desktop import Background, Desktop
from termview.runtime.group import Group
from termview.runtime.keymap import KeyBindings, map_key_name
from termview.runtime.logging import setup_logging
from termview.runtime.metrics import (
    IterationMetrics,
    MetricsCollector,
    MetricsSnapshot,
    NoopMetricsCollector,
    create_metrics_collector,
)
from termview.runtime.modal import ModalRunner
from termview.runtime.strips import CommandStrip, MenuStrip, StatusLine, StripItem
from termview.runtime.surface import CellSurface
from termview.runtime.terminal import HeadlessTerminal, QueueTerminal, ScriptedTerminal
from termview.runtime.view import View
from termview.runtime.window import Dialog, Frame, Window

__all__ = [
    "ApplicationRoot",
    "Background",
    "CellSurface",
    "CommandDispatcher",
    "CommandRegistry",
    "CommandStrip",
    "DEFAULT_STATUS_ITEMS",
    "DebugConfig",
    "Desktop",
    "Dialog",
    "Frame",
    "Group",
    "HeadlessTerminal",
    "IterationMetrics",
    "KeyBindings",
    "MenuStrip",
    "MetricsCollector",
    "MetricsSnapshot",
    "ModalRunner",
    "NoopMetricsCollector",
    "QueueTerminal",
    "RuntimeConfig",
    "ScriptedTerminal",
    "StatusLine",
    "StripItem",
    "View",
    "Window",
    "apply_default_commands",
    "create_metrics_collector",
    "get_command_registry",
    "get_runtime_config",
    "load_debug_config",
    "load_runtime_config",
    "map_key_name",
    "reset_command_registry",
    "set_command_registry",
    "setup_logging",
]
