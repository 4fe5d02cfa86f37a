"""Pygame preview window. Shows the canvas centred in a resizable window."""

from typing import Callable

import pygame

from heartgarden.canvas import Canvas

PointerFn = Callable[[float, float], None]
ResizeFn = Callable[[int, int], None]
VisibilityFn = Callable[[bool], None]


class Simulator:
    """Opens a window that displays the Canvas and forwards input.

    Pointer positions are translated into canvas-local coordinates before
    `on_pointer` is called; presses outside the canvas are ignored.
    """

    def __init__(self, canvas: Canvas, size: tuple[int, int] = (1024, 760),
                 title: str = "Heart Garden",
                 on_pointer: PointerFn | None = None,
                 on_resize: ResizeFn | None = None,
                 on_visibility: VisibilityFn | None = None):
        self.canvas = canvas
        self.on_pointer = on_pointer
        self.on_resize = on_resize
        self.on_visibility = on_visibility

        pygame.init()
        self.screen = pygame.display.set_mode(size, pygame.RESIZABLE)
        pygame.display.set_caption(title)
        self.clock = pygame.time.Clock()

    @property
    def size(self) -> tuple[int, int]:
        return self.screen.get_size()

    def _offset(self) -> tuple[int, int]:
        w, h = self.size
        return ((w - self.canvas.width) // 2, (h - self.canvas.height) // 2)

    def _pointer(self, x: float, y: float) -> None:
        ox, oy = self._offset()
        cx, cy = x - ox, y - oy
        if self.on_pointer is None:
            return
        if 0 <= cx <= self.canvas.width and 0 <= cy <= self.canvas.height:
            self.on_pointer(cx, cy)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Dispatch one event to the callbacks. Returns False on quit."""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            return False

        # SDL mirrors each touch as a mouse event; FINGERDOWN plants for those
        synthetic = getattr(event, "touch", False)

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if not synthetic:
                self._pointer(*event.pos)
        elif event.type == pygame.MOUSEMOTION and event.buttons[0]:
            if not synthetic:
                self._pointer(*event.pos)
        elif event.type == pygame.FINGERDOWN:
            w, h = self.size
            self._pointer(event.x * w, event.y * h)
        elif event.type == pygame.VIDEORESIZE:
            if self.on_resize is not None:
                self.on_resize(event.w, event.h)
        elif event.type in (pygame.WINDOWMINIMIZED, pygame.WINDOWHIDDEN):
            if self.on_visibility is not None:
                self.on_visibility(False)
        elif event.type in (pygame.WINDOWRESTORED, pygame.WINDOWSHOWN):
            if self.on_visibility is not None:
                self.on_visibility(True)
        return True

    def update(self) -> bool:
        """Handle events and blit canvas to screen. Returns False if window was closed."""
        for event in pygame.event.get():
            if not self.handle_event(event):
                return False

        self.screen.fill((0, 0, 0))
        frame = pygame.image.frombuffer(
            self.canvas.get_buffer(), (self.canvas.width, self.canvas.height), "RGB"
        )
        self.screen.blit(frame, self._offset())
        pygame.display.flip()
        return True

    def tick(self, fps: int = 60) -> None:
        """Limit framerate."""
        self.clock.tick(fps)

    def close(self) -> None:
        pygame.quit()
