from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import pygame

from pipe_maze.core.analysis import LoopAnalyzer
from pipe_maze.core.errors import PipeMazeError
from pipe_maze.core.io import load_grid

from .config import AppConfig
from .renderer import PygameRenderer
from .ui.widgets import Button, draw_label

log = logging.getLogger("pipe_maze.render")


class ViewerApp:
    def __init__(self, config: AppConfig, grid_path: Optional[Path] = None) -> None:
        self.cfg = config
        self.renderer = PygameRenderer(config.render)
        self.analyzer: Optional[LoopAnalyzer] = None
        self.running_analysis = False
        self.error: Optional[str] = None

        pygame.init()
        pygame.display.set_caption(self.cfg.render.window_title)

        self.window = pygame.display.set_mode((1200, 800), pygame.RESIZABLE)
        self.font = pygame.font.SysFont("consolas", 18)

        self.btn_run = Button(
            rect=pygame.Rect(0, 0, 10, 10),
            text="Run",
            font=self.font,
            on_click=self.toggle_run,
        )
        self.btn_step = Button(
            rect=pygame.Rect(0, 0, 10, 10),
            text="Step",
            font=self.font,
            on_click=self.single_step,
        )
        self.btn_restart = Button(
            rect=pygame.Rect(0, 0, 10, 10),
            text="Restart",
            font=self.font,
            on_click=self.restart,
        )
        self.buttons = [self.btn_run, self.btn_step, self.btn_restart]
        self.labels_y = 0

        self._layout_ui()

        # camera dragging
        self.dragging = False

        if grid_path is not None:
            self.load_grid_file(grid_path)

    # ---------------------------------------------------------------- Layout

    def _layout_ui(self) -> None:
        width, _height = self.window.get_size()
        sidebar_width = self.cfg.render.sidebar_width_px

        x = width - sidebar_width + 10
        w = sidebar_width - 20
        y = 10
        h_btn = 32
        gap = 8

        for btn in self.buttons:
            btn.rect = pygame.Rect(x, y, w, h_btn)
            y += h_btn + gap

        self.labels_y = y + gap

    def _map_view_size(self) -> tuple[int, int]:
        width, height = self.window.get_size()
        return max(1, width - self.cfg.render.sidebar_width_px), height

    def _is_in_map(self, x: int, y: int) -> bool:
        return x < self._map_view_size()[0]

    # -------------------------------------------------------------- Analysis

    def load_grid_file(self, path: Path) -> None:
        try:
            grid = load_grid(path)
            self.analyzer = LoopAnalyzer(grid, self.cfg.analysis)
        except (PipeMazeError, FileNotFoundError) as e:
            log.error("Could not load %s: %s", path, e)
            self.error = str(e)
            self.analyzer = None
            return

        self.error = None
        self.running_analysis = False
        self.renderer.set_analyzer(self.analyzer)

    def _advance(self, generations: int) -> None:
        if self.analyzer is None:
            return
        try:
            for _ in range(generations):
                if not self.analyzer.step():
                    self.running_analysis = False
                    break
        except PipeMazeError as e:
            log.error("Analysis failed: %s", e)
            self.error = str(e)
            self.running_analysis = False

    def toggle_run(self) -> None:
        if self.analyzer is None or self.analyzer.finished or self.error:
            return
        self.running_analysis = not self.running_analysis

    def single_step(self) -> None:
        self.running_analysis = False
        if self.error:
            return
        self._advance(1)

    def restart(self) -> None:
        if self.analyzer is None:
            return
        self.analyzer.reset()
        self.error = None
        self.running_analysis = False

    # -------------------------------------------------------------- Events

    def handle_mouse_down(self, event: pygame.event.Event) -> None:
        x, y = event.pos

        if event.button == 1:
            for btn in self.buttons:
                btn.handle_event(event)
            return

        # right or middle button: start camera drag
        if event.button in (2, 3) and self._is_in_map(x, y):
            self.dragging = True

    def handle_mouse_up(self, event: pygame.event.Event) -> None:
        if event.button in (2, 3):
            self.dragging = False

    def handle_mouse_motion(self, event: pygame.event.Event) -> None:
        for btn in self.buttons:
            btn.handle_event(event)

        if self.dragging:
            self.renderer.move_camera(-event.rel[0], -event.rel[1], self._map_view_size())

    def handle_key(self, event: pygame.event.Event) -> bool:
        if event.key == pygame.K_ESCAPE:
            return False
        if event.key == pygame.K_SPACE:
            self.toggle_run()
        elif event.key == pygame.K_n:
            self.single_step()
        elif event.key == pygame.K_r:
            self.restart()
        return True

    def handle_mouse_wheel(self, event: pygame.event.Event) -> None:
        # zoom only when over map, not over sidebar
        x, y = pygame.mouse.get_pos()
        if self._is_in_map(x, y):
            self.renderer.change_zoom(event.y, self._map_view_size())

    # ----------------------------------------------------------- Draw UI

    def draw_ui(self) -> None:
        width, _ = self.window.get_size()
        sidebar_x = width - self.cfg.render.sidebar_width_px
        pygame.draw.rect(
            self.window,
            (10, 10, 10),
            pygame.Rect(sidebar_x, 0, self.cfg.render.sidebar_width_px, self.window.get_height()),
        )
        can_advance = self.analyzer is not None and not self.analyzer.finished and self.error is None
        self.btn_run.enabled = can_advance
        self.btn_run.text = "Pause" if self.running_analysis else "Run"
        self.btn_step.enabled = can_advance
        self.btn_restart.enabled = self.analyzer is not None
        for btn in self.buttons:
            btn.draw(self.window)

        y = self.labels_y
        for line in self.renderer.status_lines():
            draw_label(self.window, self.font, line, sidebar_x + 10, y)
            y += 24
        if self.error:
            draw_label(self.window, self.font, self.error[:40], sidebar_x + 10, y, color=(240, 110, 110))

    # ------------------------------------------------------------- Main loop

    def run(self) -> None:
        clock = pygame.time.Clock()
        running = True

        while running:
            clock.tick(self.cfg.render.fps)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                    break

                if event.type == pygame.VIDEORESIZE:
                    self.window = pygame.display.set_mode(event.size, pygame.RESIZABLE)
                    self._layout_ui()
                    continue

                if event.type == pygame.MOUSEBUTTONDOWN:
                    self.handle_mouse_down(event)

                if event.type == pygame.MOUSEBUTTONUP:
                    self.handle_mouse_up(event)

                if event.type == pygame.MOUSEMOTION:
                    self.handle_mouse_motion(event)

                if event.type == pygame.MOUSEWHEEL:
                    self.handle_mouse_wheel(event)

                if event.type == pygame.KEYDOWN:
                    if not self.handle_key(event):
                        running = False

            if self.running_analysis:
                self._advance(self.cfg.render.steps_per_frame)

            self.renderer.draw(self.window)
            self.draw_ui()
            pygame.display.flip()

        pygame.quit()
        sys.exit()
