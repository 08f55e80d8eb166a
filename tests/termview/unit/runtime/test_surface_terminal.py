from __future__ import annotations

import threading

import pytest

from termview.api import events as ev
from termview.api.surface import text_cells
from termview.api.terminal import create_scripted_terminal
from termview.runtime.config import load_runtime_config, set_runtime_config
from termview.runtime.surface import CellSurface
from termview.runtime.terminal import HeadlessTerminal, QueueTerminal, ScriptedTerminal


def test_surface_write_overwrites_exact_region() -> None:
    surface = CellSurface(8, 2)
    surface.write(2, 0, text_cells("abc", 0x1E))
    assert surface.row_text(0) == "  abc   "
    assert surface.attr_at(3, 0) == 0x1E
    assert surface.attr_at(5, 0) == 0x07


def test_surface_truncates_out_of_bounds_writes() -> None:
    surface = CellSurface(4, 1)
    surface.write(-2, 0, text_cells("xyzw"))
    surface.write(3, 0, text_cells("long"))
    surface.write(0, 5, text_cells("gone"))
    assert surface.row_text(0) == "zw l"


def test_surface_rejects_empty_dimensions() -> None:
    with pytest.raises(ValueError):
        CellSurface(0, 3)


def test_scripted_terminal_replays_then_reports_idle() -> None:
    terminal = ScriptedTerminal(10, 3, events=[ev.char("a")])
    assert terminal.poll(0.02) == ev.char("a")
    assert terminal.poll(0.02) is None
    assert terminal.poll_count == 2
    terminal.feed(ev.key(ev.KB_ENTER))
    assert terminal.pending == 1
    assert terminal.size() == (10, 3)


def test_scripted_terminal_factory() -> None:
    terminal = create_scripted_terminal(20, 5, events=(ev.command(1),))
    assert terminal.poll(0.0) == ev.command(1)


def test_queue_terminal_hands_off_events_between_threads() -> None:
    terminal = QueueTerminal(10, 3)
    producer = threading.Thread(target=terminal.post, args=(ev.char("z"),))
    producer.start()
    producer.join()

    assert terminal.poll(1.0) == ev.char("z")
    assert terminal.poll(0.0) is None
    assert terminal.poll(0.01) is None


def test_default_terminal_size_follows_screen_config() -> None:
    set_runtime_config(load_runtime_config(env={"TERMVIEW_SCREEN_SIZE": "100x30"}))
    assert HeadlessTerminal().size() == (100, 30)
    assert QueueTerminal(width=40).size() == (40, 30)
    assert create_scripted_terminal().size() == (100, 30)
