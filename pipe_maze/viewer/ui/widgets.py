from __future__ import annotations

from typing import Callable, Tuple
import pygame

Color = Tuple[int, int, int]


class Button:
    """Clickable sidebar button; disabled buttons are drawn dimmed and ignore clicks."""

    def __init__(
        self,
        rect: pygame.Rect,
        text: str,
        font: pygame.font.Font,
        on_click: Callable[[], None],
    ) -> None:
        self.rect = rect
        self.text = text
        self.font = font
        self.on_click = on_click
        self.hover: bool = False
        self.enabled: bool = True

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.enabled and self.rect.collidepoint(event.pos):
                self.on_click()

    def _colors(self) -> Tuple[Color, Color]:
        if not self.enabled:
            return (45, 45, 50), (120, 120, 120)
        if self.hover:
            return (100, 100, 120), (240, 240, 240)
        return (70, 70, 80), (240, 240, 240)

    def draw(self, surface: pygame.Surface) -> None:
        fill, text_color = self._colors()

        pygame.draw.rect(surface, fill, self.rect, border_radius=4)
        pygame.draw.rect(surface, (20, 20, 20), self.rect, 1, border_radius=4)

        text_surf = self.font.render(self.text, True, text_color)
        surface.blit(text_surf, text_surf.get_rect(center=self.rect.center))


def draw_label(
    surface: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    x: int,
    y: int,
    color: Color = (220, 220, 220),
) -> None:
    surface.blit(font.render(text, True, color), (x, y))
