"""Casting rays through the map grid and drawing the walls they hit."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field

import numpy as np

from .scene import CubError, Element, Scene
from .texture import Texture

SCREEN_WIDTH = 1100
SCREEN_HEIGHT = 750
PLAYER_SIGHT = 60
CELL_SIZE = 64

_TWO_PI = 2 * math.pi
_HALF_PI = math.pi / 2
_THREE_HALF_PI = 3 * math.pi / 2
_MIN_DIST = 1e-6


def norm_angle(angle: float) -> float:
    """Bring an angle into the closed range [0, 2*pi]."""
    if not math.isfinite(angle):
        raise ValueError(f"angle must be finite: {angle!r}")
    while not 0 <= angle <= _TWO_PI:
        if angle < 0:
            angle += _TWO_PI
        if angle > _TWO_PI:
            angle -= _TWO_PI
    return angle


def trgb(t: int, r: int, g: int, b: int) -> int:
    """Pack transparency and colour components into one pixel value."""
    return t << 24 | r << 16 | g << 8 | b


def _div(a: float, b: float) -> float:
    if b != 0:
        return a / b
    if a == 0:
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


@dataclass
class Player:
    """The viewer: position in pixels, facing angle and field of view."""

    x_pixel: float
    y_pixel: float
    angle: float = 0.0
    sight: float = PLAYER_SIGHT * (math.pi / 180)


@dataclass
class Ray:
    """One cast ray and what it hit."""

    angle: float = 0.0
    dist: float = 0.0
    hit_vert_wall: bool = False
    wall_hit_x: float = 0.0
    wall_hit_y: float = 0.0
    wall_height: float = 0.0


@dataclass
class Frame:
    """A screen image of packed pixel values, indexed by row then column."""

    width: int = SCREEN_WIDTH
    height: int = SCREEN_HEIGHT
    pixels: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.pixels = np.zeros((self.height, self.width), dtype=np.uint32)

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel; points outside the frame are ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y, x] = color & 0xFFFFFFFF


def is_wall_hit(scene: Scene, x: float, y: float) -> bool:
    """True if the pixel point lies outside the map or inside a wall cell."""
    if not (math.isfinite(x) and math.isfinite(y)):
        return True
    if x < 0 or y < 0 or x > scene.width * CELL_SIZE or y > scene.height * CELL_SIZE:
        return True
    ind_x = math.floor(x / CELL_SIZE)
    ind_y = math.floor(y / CELL_SIZE)
    if ind_y >= scene.height or ind_x >= scene.width:
        return True
    if ind_y >= len(scene.grid):
        return False
    row = scene.grid[ind_y]
    return ind_x < len(row) and row[ind_x] == "1"


def horizontal_intersection(scene: Scene, player: Player, angle: float) -> float:
    """Distance to the first wall met on a horizontal grid line."""
    tangent = math.tan(angle)
    y_step = float(CELL_SIZE)
    x_step = _div(CELL_SIZE, tangent)
    inter_y = math.floor(player.y_pixel / CELL_SIZE) * CELL_SIZE
    if 0 < angle < math.pi:
        inter_y += CELL_SIZE
        corrector = -1
    else:
        y_step = -y_step
        corrector = 1
    inter_x = player.x_pixel + _div(inter_y - player.y_pixel, tangent)
    if (x_step > 0 and _HALF_PI < angle < _THREE_HALF_PI) or (
        x_step < 0 and (angle < _HALF_PI or angle > _THREE_HALF_PI)
    ):
        x_step = -x_step
    while not is_wall_hit(scene, inter_x, inter_y - corrector):
        inter_x += x_step
        inter_y += y_step
    return math.hypot(inter_y - player.y_pixel, inter_x - player.x_pixel)


def vertical_intersection(scene: Scene, player: Player, angle: float) -> float:
    """Distance to the first wall met on a vertical grid line."""
    tangent = math.tan(angle)
    x_step = float(CELL_SIZE)
    y_step = CELL_SIZE * tangent
    inter_x = math.floor(player.x_pixel / CELL_SIZE) * CELL_SIZE
    if angle < _HALF_PI or angle > _THREE_HALF_PI:
        inter_x += CELL_SIZE
        corrector = -1
    else:
        x_step = -x_step
        corrector = 1
    inter_y = player.y_pixel + (inter_x - player.x_pixel) * tangent
    if (y_step > 0 and angle > math.pi) or (y_step < 0 and angle < math.pi):
        y_step = -y_step
    while not is_wall_hit(scene, inter_x - corrector, inter_y):
        inter_x += x_step
        inter_y += y_step
    return math.hypot(inter_y - player.y_pixel, inter_x - player.x_pixel)


def _snap(value: float) -> float:
    up = math.ceil(value)
    down = math.floor(value)
    return float(up) if up - value <= value - down else float(down)


def wall_hit_point(player: Player, ray: Ray) -> tuple[float, float]:
    """Where the ray meets the wall; the grid-line coordinate is snapped."""
    angle = norm_angle(ray.angle)
    hit_y = player.y_pixel + ray.dist * math.sin(angle)
    if not ray.hit_vert_wall:
        hit_y = _snap(hit_y)
    hit_x = player.x_pixel + ray.dist * math.cos(angle)
    if ray.hit_vert_wall:
        hit_x = _snap(hit_x)
    return hit_x, hit_y


def render_floor_ceiling(frame: Frame, scene: Scene) -> None:
    """Paint the upper half of the frame with the ceiling, the rest with the floor."""
    half = frame.height // 2
    frame.pixels[:half, :] = trgb(0, *scene.ceiling)
    frame.pixels[half:, :] = trgb(0, *scene.floor)


class Renderer:
    """Draws frames of a scene as seen by a player."""

    def __init__(
        self,
        scene: Scene,
        textures: Mapping[Element, Texture],
        width: int = SCREEN_WIDTH,
        height: int = SCREEN_HEIGHT,
    ) -> None:
        for element in (Element.NORTH, Element.SOUTH, Element.WEST, Element.EAST):
            if element not in textures:
                raise CubError("Error: One or more textures missing")
        self.scene = scene
        self.textures = dict(textures)
        self.width = width
        self.height = height
        self.ray = Ray()

    def _side_texture(self, ray: Ray) -> Texture:
        ray.angle = norm_angle(ray.angle)
        if ray.hit_vert_wall:
            if _HALF_PI < ray.angle < _THREE_HALF_PI:
                return self.textures[Element.WEST]
            return self.textures[Element.EAST]
        if 0 < ray.angle < math.pi:
            return self.textures[Element.SOUTH]
        return self.textures[Element.NORTH]

    @staticmethod
    def _x_offset(ray: Ray, texture: Texture) -> float:
        hit = ray.wall_hit_y if ray.hit_vert_wall else ray.wall_hit_x
        scale = texture.width // CELL_SIZE
        return math.fmod(math.fmod(hit, CELL_SIZE) * scale, texture.width)

    def draw_column(self, frame: Frame, player: Player, ray: Ray, column: int) -> None:
        """Draw the textured wall slice that ``ray`` hit into one frame column."""
        half = self.height // 2
        ray.dist = abs(ray.dist * math.cos(norm_angle(ray.angle - player.angle)))
        dist = max(ray.dist, _MIN_DIST)
        ray.wall_height = (self.width / (2 * math.tan(player.sight / 2))) * (CELL_SIZE / dist)
        top = half - ray.wall_height / 2
        bot = half + ray.wall_height / 2
        bot = min(bot, self.height)
        top = max(top, 0.0)
        texture = self._side_texture(ray)
        x_text = self._x_offset(ray, texture)
        y_step = texture.height / ray.wall_height
        y_text = max((top - half + ray.wall_height / 2) * y_step, 0.0)
        if not 0 <= column < frame.width or bot <= top:
            return
        offsets = np.arange(math.ceil(bot - top))
        rows = (top + offsets).astype(np.int64)
        tex_rows = np.clip((y_text + offsets * y_step).astype(np.int64), 0, texture.height - 1)
        tex_col = min(max(int(x_text), 0), texture.width - 1)
        inside = (rows >= 0) & (rows < frame.height)
        frame.pixels[rows[inside], column] = texture.pixels[tex_rows[inside], tex_col]

    def cast(self, player: Player) -> Frame:
        """Render one full frame of the scene from the player's point of view."""
        frame = Frame(self.width, self.height)
        render_floor_ceiling(frame, self.scene)
        ray = self.ray
        ray.angle = player.angle - player.sight / 2
        for column in range(self.width):
            angle = norm_angle(ray.angle)
            hor = horizontal_intersection(self.scene, player, angle)
            vert = vertical_intersection(self.scene, player, angle)
            if vert <= hor:
                ray.dist, ray.hit_vert_wall = vert, True
            else:
                ray.dist, ray.hit_vert_wall = hor, False
            ray.wall_hit_x, ray.wall_hit_y = wall_hit_point(player, ray)
            self.draw_column(frame, player, ray, column)
            ray.angle += player.sight / self.width
        return frame