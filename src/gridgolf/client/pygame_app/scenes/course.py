from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from gridgolf.engine.actions import QuitAction
from gridgolf.engine.session import describe, prompt_for
from gridgolf.engine.turn import GameState, begin_turn, parse_action, step
from gridgolf.services.content import Course

from ..app import GameContext
from ..scene_base import Scene, SceneTransition
from ..ui import Button, TextInput, draw_text


class CourseScene:
    def __init__(self, ctx: GameContext, state: GameState, course: Course) -> None:
        self.ctx = ctx
        self.state = state
        self.course = course

        self._next: SceneTransition | None = None
        self._message: str = ""
        self._origin = (40, 100)

        self.input = TextInput(rect=pygame.Rect(40, 660, 220, 40), text="", on_submit=self._on_submit)
        self.btn_menu = Button(rect=pygame.Rect(860, 20, 140, 40), text="Menu", on_click=self._on_menu)
        self.btn_continue = Button(rect=pygame.Rect(360, 420, 300, 56), text="Continue", on_click=self._on_continue)

        begin_turn(self.state)

    def _go(self, scene: Scene) -> None:
        self._next = SceneTransition(scene)

    def _finish(self) -> None:
        self.ctx.telemetry.log("session_end", {"phase": self.state.phase, "strokes": self.state.strokes})

    def _on_menu(self) -> None:
        from .main_menu import MainMenuScene

        if not self.state.finished:
            step(self.state, QuitAction())
            self._finish()
        self._go(MainMenuScene(self.ctx))

    def _on_continue(self) -> None:
        from .main_menu import MainMenuScene

        self._go(MainMenuScene(self.ctx))

    def _on_submit(self, text: str) -> None:
        if self.state.finished:
            return
        result = step(self.state, parse_action(text, self.state.rules))
        self.ctx.telemetry.log_turn(self.state, result)
        self._message = describe(self.state, result) or ""
        if self.state.finished:
            self._finish()
            return
        begin_turn(self.state)

    def handle_event(self, event: pygame.event.Event) -> None:
        if self.state.finished:
            self.btn_continue.handle_event(event)
            self.btn_menu.handle_event(event)
            return
        self.btn_menu.handle_event(event)
        self.input.handle_event(event)

    def update(self, dt: float) -> SceneTransition | None:
        return self._next

    def _cell_rect(self, row: int, col: int) -> pygame.Rect:
        size = self.ctx.assets.cell_size
        x0, y0 = self._origin
        return pygame.Rect(x0 + col * size, y0 + row * size, size, size)

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((8, 18, 10))
        fonts = self.ctx.assets.fonts

        draw_text(screen, fonts.big, self.course.name, (40, 30))
        self.btn_menu.draw(screen, fonts.ui)

        for row in self.state.grid.rows():
            for coord, terrain in row:
                screen.blit(self.ctx.assets.tile(terrain), self._cell_rect(coord.row, coord.col).topleft)
        ball = self._cell_rect(self.state.ball.row, self.state.ball.col)
        pygame.draw.circle(screen, (250, 250, 250), ball.center, max(3, ball.width // 5))
        pygame.draw.rect(screen, (240, 240, 120), ball, width=2)

        info_y = 560
        draw_text(screen, fonts.ui, f"Stroke {self.state.strokes}", (40, info_y))
        if self.state.strength is not None:
            draw_text(screen, fonts.ui, f"Strength: {self.state.strength}", (200, info_y))
        draw_text(screen, fonts.small, prompt_for(self.state), (40, 630))
        self.input.draw(screen, fonts.ui)

        if self._message:
            draw_text(screen, fonts.ui, self._message, (300, 670), color=(240, 200, 120))

        if self.state.finished:
            self._draw_game_over(screen)

    def _draw_game_over(self, screen: pygame.Surface) -> None:
        overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 170))
        screen.blit(overlay, (0, 0))

        if self.state.phase == "holed":
            title = f"HOLED IN {self.state.strokes}"
        else:
            title = "ROUND ABANDONED"
        draw_text(screen, self.ctx.assets.fonts.big, title, (360, 320), color=(240, 240, 240))
        self.btn_continue.draw(screen, self.ctx.assets.fonts.ui)
