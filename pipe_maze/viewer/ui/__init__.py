from __future__ import annotations

from .widgets import Button, draw_label

__all__ = [
    "Button",
    "draw_label",
]
