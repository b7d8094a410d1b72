"""The game window, its key handling and the command-line entry point."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping, Sequence

import numpy as np

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # noqa: E402

from .movement import Move, apply_move, player_from_grid  # noqa: E402
from .parser import parse_scene  # noqa: E402
from .raycast import SCREEN_HEIGHT, SCREEN_WIDTH, Frame, Renderer  # noqa: E402
from .scene import RED, RESET, CubError, Element, LineError, MapError, Scene  # noqa: E402
from .texture import Texture, load_textures  # noqa: E402
from .validate import check_arguments  # noqa: E402

WINDOW_TITLE = "O&A Dynamics"

_KEY_MOVES = {
    pygame.K_d: Move.STRAFE_RIGHT,
    pygame.K_a: Move.STRAFE_LEFT,
    pygame.K_s: Move.BACKWARD,
    pygame.K_w: Move.FORWARD,
    pygame.K_LEFT: Move.TURN_LEFT,
    pygame.K_RIGHT: Move.TURN_RIGHT,
}


class Game:
    """A scene, a player standing in it and the renderer that shows them."""

    def __init__(
        self,
        scene: Scene,
        textures: Mapping[Element, Texture],
        width: int = SCREEN_WIDTH,
        height: int = SCREEN_HEIGHT,
    ) -> None:
        self.player, scene.grid = player_from_grid(scene.grid)
        self.scene = scene
        self.renderer = Renderer(scene, textures, width, height)
        self.running = True
        self._frame: Frame | None = None

    def handle_key(self, key: int) -> bool:
        """React to a pressed key; return False once the game should stop."""
        if key == pygame.K_ESCAPE:
            self.running = False
            return False
        move = _KEY_MOVES.get(key)
        if move is not None:
            apply_move(self.scene, self.player, move)
            self._frame = None
        return self.running

    def frame(self) -> Frame:
        """The current view, rendered again after every move."""
        if self._frame is None:
            self._frame = self.renderer.cast(self.player)
        return self._frame


def _to_surface(frame: Frame) -> pygame.Surface:
    pixels = frame.pixels
    rgb = np.stack(
        ((pixels >> 16) & 0xFF, (pixels >> 8) & 0xFF, pixels & 0xFF), axis=-1
    ).astype(np.uint8)
    return pygame.surfarray.make_surface(rgb.transpose(1, 0, 2))


def run(scene: Scene) -> None:
    """Open the window and play the scene until it is closed."""
    textures = load_textures(scene)
    pygame.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        pygame.key.set_repeat(200, 30)
        clock = pygame.time.Clock()
        game = Game(scene, textures)
        shown: Frame | None = None
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.running = False
                elif event.type == pygame.KEYDOWN:
                    game.handle_key(event.key)
            if not game.running:
                break
            frame = game.frame()
            if frame is not shown:
                screen.blit(_to_surface(frame), (0, 0))
                pygame.display.flip()
                shown = frame
            clock.tick(60)
    finally:
        pygame.quit()


def _report(exc: CubError) -> None:
    if isinstance(exc, LineError):
        print(f"[{exc.index}] {RED}[{exc.line}]{RESET}")
    sys.stderr.write(f"Error\n{exc.message}\n")
    if isinstance(exc, MapError):
        listing = exc.render()
        if listing:
            print(listing)


def main(argv: Sequence[str] | None = None) -> int:
    """Check the arguments, load the scene and play it."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        path = check_arguments(args)
        scene = parse_scene(path)
        run(scene)
    except CubError as exc:
        _report(exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())