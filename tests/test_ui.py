"""Smoke tests for the UI module (no display required)."""

from __future__ import annotations

from formica.colony.ant import Task
from formica.ui.pygame_client import _ANT_COLOURS, PygameRenderer


def test_pygame_renderer_importable() -> None:
    """PygameRenderer class is importable without initialising pygame."""
    assert PygameRenderer is not None


def test_every_task_has_a_colour() -> None:
    assert set(_ANT_COLOURS) == set(Task)


def test_main_module_importable() -> None:
    """The __main__ module is importable and exposes main()."""
    from formica.__main__ import main

    assert callable(main)
