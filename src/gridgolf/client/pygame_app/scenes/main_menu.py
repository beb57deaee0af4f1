from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from gridgolf.engine.turn import new_game
from gridgolf.services.content import ContentError, Course

from ..app import GameContext
from ..scene_base import SceneTransition
from ..ui import Button, draw_text


class MainMenuScene:
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._buttons: list[Button] = []
        self._next: SceneTransition | None = None
        self._message = ""
        self._build_ui()

    def _build_ui(self) -> None:
        x = 60
        y = 160
        w = 320
        h = 56
        gap = 14

        courses = self.ctx.courses.ordered() if self.ctx.courses is not None else []
        self._buttons = []
        for i, course in enumerate(courses):
            self._buttons.append(
                Button(
                    rect=pygame.Rect(x, y + (h + gap) * i, w, h),
                    text=course.name,
                    on_click=lambda c=course: self._on_course(c),
                )
            )
        self._buttons.append(
            Button(
                rect=pygame.Rect(x, y + (h + gap) * len(courses), w, h),
                text="Quit",
                on_click=lambda: pygame.event.post(pygame.event.Event(pygame.QUIT)),
            )
        )

    def _on_course(self, course: Course) -> None:
        from .course import CourseScene

        try:
            grid = self.ctx.content.load_course_grid(course)
        except ContentError as e:
            self._message = str(e)
            return
        state = new_game(grid, rules=self.ctx.rules, seed=self.ctx.seed)
        self.ctx.telemetry.log("session_start", {"source": course.id, "seed": self.ctx.seed})
        self._next = SceneTransition(CourseScene(self.ctx, state, course))

    def handle_event(self, event: pygame.event.Event) -> None:
        for b in self._buttons:
            if b.handle_event(event):
                return

    def update(self, dt: float) -> SceneTransition | None:
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((10, 24, 12))
        fonts = self.ctx.assets.fonts
        draw_text(screen, fonts.big, "gridgolf", (60, 40))
        draw_text(screen, fonts.ui, "Pick a course", (60, 110))
        for b in self._buttons:
            b.draw(screen, fonts.ui)
        if self._message:
            draw_text(screen, fonts.small, self._message, (60, 700), color=(240, 120, 120))
