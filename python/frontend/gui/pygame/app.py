"""Pygame GUI frontend — fully self-contained.

Includes the level-select screen, the drag-and-drop play screen, and the
"play again" affordance.  No terminal interaction required.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import pygame

from backend.engine.gameplay import JigsawGame
from backend.engine.interfaces import PointerSample
from backend.errors import InvalidConfiguration
from backend.models.config import MAX_DIFFICULTY, MIN_DIFFICULTY, GameSettings
from backend.models.geometry import PieceSize, Point, UVRect
from backend.models.level import LevelCatalog, SourceImage

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Catppuccin Mocha palette
# ---------------------------------------------------------------------------
COL_BASE = (30, 30, 46)
COL_MANTLE = (24, 24, 37)
COL_SURFACE0 = (49, 50, 68)
COL_SURFACE1 = (69, 71, 90)
COL_OVERLAY0 = (108, 112, 134)
COL_TEXT = (205, 214, 244)
COL_SUBTEXT = (166, 173, 200)
COL_BLUE = (137, 180, 250)
COL_LAVENDER = (180, 190, 254)
COL_GREEN = (166, 227, 161)
COL_PINK = (245, 194, 231)
COL_YELLOW = (249, 226, 175)
COL_RED = (243, 139, 168)

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
WIN_W, WIN_H = 1280, 720
ORTHO_HALF_HEIGHT = 5.0  # world units from screen centre to top edge
PIXELS_PER_UNIT = WIN_H / (2 * ORTHO_HALF_HEIGHT)
THUMB_W, THUMB_H = 200, 130
IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".bmp")


# ---------------------------------------------------------------------------
# Screen enum
# ---------------------------------------------------------------------------
class _Screen(enum.Enum):
    MENU = "menu"
    PLAYING = "playing"


# ---------------------------------------------------------------------------
# Simple clickable button
# ---------------------------------------------------------------------------
class _Btn:
    __slots__ = ("rect", "text", "font", "bg", "hover", "fg", "radius", "image", "_hot")

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        font: pygame.font.Font,
        *,
        bg: tuple = COL_SURFACE0,
        hover: tuple = COL_SURFACE1,
        fg: tuple = COL_TEXT,
        radius: int = 8,
        image: pygame.Surface | None = None,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.hover = hover
        self.fg = fg
        self.radius = radius
        self.image = image
        self._hot = False

    def draw(self, surf: pygame.Surface) -> None:
        c = self.hover if self._hot else self.bg
        pygame.draw.rect(surf, c, self.rect, border_radius=self.radius)
        lbl = self.font.render(self.text, True, self.fg)
        if self.image is not None:
            img_rect = self.image.get_rect(
                centerx=self.rect.centerx, top=self.rect.top + 6
            )
            surf.blit(self.image, img_rect)
            surf.blit(
                lbl,
                (self.rect.centerx - lbl.get_width() // 2, img_rect.bottom + 4),
            )
            return
        surf.blit(
            lbl,
            (
                self.rect.centerx - lbl.get_width() // 2,
                self.rect.centery - lbl.get_height() // 2,
            ),
        )

    def motion(self, pos: tuple[int, int]) -> None:
        self._hot = self.rect.collidepoint(pos)

    def hit(self, pos: tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


# ---------------------------------------------------------------------------
# Centring helpers
# ---------------------------------------------------------------------------
def _cx(w: int) -> int:
    return (WIN_W - w) // 2


def _blit_center(surf: pygame.Surface, rendered: pygame.Surface, y: int) -> None:
    surf.blit(rendered, (_cx(rendered.get_width()), y))


def _world_to_screen(x: float, y: float) -> tuple[float, float]:
    return (
        WIN_W / 2 + x * PIXELS_PER_UNIT,
        WIN_H / 2 - y * PIXELS_PER_UNIT,
    )


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------
class PygameCamera:
    """Orthographic camera centred on the window."""

    def screen_to_world(self, point: Point) -> tuple[float, float, float]:
        sx, sy = point
        return (
            (sx - WIN_W / 2) / PIXELS_PER_UNIT,
            (WIN_H / 2 - sy) / PIXELS_PER_UNIT,
            0.0,
        )

    def viewport_half_extents(self) -> tuple[float, float]:
        return (WIN_W / 2 / PIXELS_PER_UNIT, ORTHO_HALF_HEIGHT)


@dataclass
class _Sprite:
    surface: pygame.Surface
    position: Point = (0.0, 0.0)
    depth: float = 0.0
    enabled: bool = True


class PygameRenderer:
    """Draws each piece as the crop of the texture its UV rectangle selects."""

    def __init__(self, board_scale: float) -> None:
        self._scale = board_scale
        self._sprites: dict[int, _Sprite] = {}
        self._next_handle = 0
        self._outline: tuple[list[Point], float] | None = None

    # -- Renderer protocol ---------------------------------------------------

    def create_piece_visual(
        self, geometry: PieceSize, uv_rect: UVRect, texture: Any
    ) -> int:
        w_px = max(1, round(geometry.width * self._scale * PIXELS_PER_UNIT))
        h_px = max(1, round(geometry.height * self._scale * PIXELS_PER_UNIT))

        if texture is None:
            surface = pygame.Surface((w_px, h_px))
            surface.fill(
                (
                    int(80 + 150 * uv_rect.min_u),
                    int(80 + 150 * uv_rect.min_v),
                    200,
                )
            )
        else:
            tw, th = texture.get_size()
            # Texture v runs bottom-up; surface rows run top-down.
            x0 = int(uv_rect.min_u * tw)
            x1 = int(uv_rect.max_u * tw)
            y0 = int((1 - uv_rect.max_v) * th)
            y1 = int((1 - uv_rect.min_v) * th)
            crop = texture.subsurface(
                pygame.Rect(x0, y0, max(1, x1 - x0), max(1, y1 - y0))
            )
            surface = pygame.transform.smoothscale(crop, (w_px, h_px))

        handle = self._next_handle
        self._next_handle += 1
        self._sprites[handle] = _Sprite(surface=surface)
        return handle

    def set_position(self, handle: int, position: Point, depth: float) -> None:
        sprite = self._sprites[handle]
        sprite.position = position
        sprite.depth = depth

    def set_visual_property(self, handle: int, enabled: bool) -> None:
        self._sprites[handle].enabled = enabled

    def draw_outline(self, points: list[Point], line_width: float) -> None:
        self._outline = (list(points), line_width)

    def hide_outline(self) -> None:
        self._outline = None

    def destroy(self, handle: int) -> None:
        del self._sprites[handle]

    # -- drawing --------------------------------------------------------------

    def draw(self, surf: pygame.Surface, held: int | None) -> None:
        if self._outline is not None:
            points, line_width = self._outline
            screen_pts = [
                _world_to_screen(x * self._scale, y * self._scale) for x, y in points
            ]
            pygame.draw.lines(
                surf,
                COL_OVERLAY0,
                True,
                screen_pts,
                max(1, round(line_width * PIXELS_PER_UNIT)),
            )

        # Locked pieces underneath, loose pieces above, held piece on top.
        order = sorted(
            self._sprites,
            key=lambda h: (self._sprites[h].enabled, h == held, h),
        )
        for handle in order:
            sprite = self._sprites[handle]
            cx, cy = _world_to_screen(
                sprite.position[0] * self._scale, sprite.position[1] * self._scale
            )
            rect = sprite.surface.get_rect(center=(round(cx), round(cy)))
            surf.blit(sprite.surface, rect)
            if sprite.enabled:
                colour = COL_YELLOW if handle == held else COL_SURFACE1
                pygame.draw.rect(surf, colour, rect, width=2)


class PygameInput:
    """Left mouse button as the game's single pointer."""

    def __init__(self) -> None:
        self._pressed = False
        self._released = False

    def handle_event(self, ev: pygame.event.Event) -> None:
        if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            self._pressed = True
        elif ev.type == pygame.MOUSEBUTTONUP and ev.button == 1:
            self._released = True

    def end_step(self) -> None:
        self._pressed = False
        self._released = False

    # -- InputSource protocol -------------------------------------------------

    def current_pointer_position(self) -> Point | None:
        if not pygame.mouse.get_focused():
            return None
        x, y = pygame.mouse.get_pos()
        return (float(x), float(y))

    def was_pressed_this_step(self) -> bool:
        return self._pressed

    def is_press_held(self) -> bool:
        return bool(pygame.mouse.get_pressed()[0])

    def was_released_this_step(self) -> bool:
        return self._released


class PygameShell:
    def __init__(self) -> None:
        self.level_select_visible = True
        self.play_again_visible = False

    def show_level_select(self, visible: bool) -> None:
        self.level_select_visible = visible

    def show_play_again(self, visible: bool) -> None:
        self.play_again_visible = visible


# ---------------------------------------------------------------------------
# Image loading
# ---------------------------------------------------------------------------
def _placeholder_images() -> list[SourceImage]:
    """Procedural images used when the images folder is empty."""
    images: list[SourceImage] = []
    for name, (w, h) in (
        ("stripes-wide", (800, 400)),
        ("stripes-tall", (400, 800)),
        ("stripes-square", (600, 600)),
    ):
        surf = pygame.Surface((w, h))
        bands = 12
        palette = (COL_BLUE, COL_PINK, COL_GREEN, COL_YELLOW, COL_LAVENDER, COL_RED)
        for i in range(bands):
            pygame.draw.rect(
                surf,
                palette[i % len(palette)],
                pygame.Rect(i * w // bands, 0, w // bands + 1, h),
            )
        for i in range(0, h, 40):
            pygame.draw.line(surf, COL_BASE, (0, i), (w, i), 2)
        pygame.draw.circle(surf, COL_MANTLE, (w // 2, h // 2), min(w, h) // 4, 8)
        images.append(SourceImage(name, w, h, texture=surf, label=name))
    return images


def load_levels(images_dir: Path | None) -> LevelCatalog:
    """Build the level catalogue from every image in *images_dir*."""
    catalog = LevelCatalog()
    if images_dir is not None and images_dir.is_dir():
        for path in sorted(images_dir.iterdir()):
            if path.suffix.lower() not in IMAGE_SUFFIXES:
                continue
            try:
                surf = pygame.image.load(str(path)).convert()
            except pygame.error as exc:
                logger.warning("Skipping unreadable image %s: %s", path.name, exc)
                continue
            w, h = surf.get_size()
            catalog.add(SourceImage(path.stem, w, h, texture=surf, label=path.stem))

    if not len(catalog):
        logger.info("No images found in %s; using placeholders", images_dir)
        for image in _placeholder_images():
            catalog.add(image)
    return catalog


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    def __init__(self, settings: GameSettings, images_dir: Path | None) -> None:
        pygame.init()
        self._surf = pygame.display.set_mode((WIN_W, WIN_H))
        pygame.display.set_caption("Jigsaw")
        self._clock = pygame.time.Clock()

        # Fonts
        self._f_big = pygame.font.SysFont("Helvetica", 38, bold=True)
        self._f_title = pygame.font.SysFont("Helvetica", 22, bold=True)
        self._f_body = pygame.font.SysFont("Helvetica", 16)
        self._f_btn = pygame.font.SysFont("Helvetica", 17, bold=True)
        self._f_btn_sm = pygame.font.SysFont("Helvetica", 14, bold=True)
        self._f_small = pygame.font.SysFont("Helvetica", 13)

        self._renderer = PygameRenderer(settings.board_scale)
        self._input = PygameInput()
        self._shell = PygameShell()
        self._game = JigsawGame(
            renderer=self._renderer,
            camera=PygameCamera(),
            ui=self._shell,
            settings=settings,
            levels=load_levels(images_dir),
        )
        self._current_level: str | None = None
        self._status_msg = ""

        self._build_menu_btns()
        self._build_game_btns()

    # ── buttons ─────────────────────────────────────────────────────────────

    def _build_menu_btns(self) -> None:
        bw, bh, gap = 56, 40, 8
        diffs = range(MIN_DIFFICULTY, MAX_DIFFICULTY + 1)
        total_w = len(diffs) * bw + (len(diffs) - 1) * gap
        sx = _cx(total_w)
        self._diff_btns: dict[int, _Btn] = {}
        for i, d in enumerate(diffs):
            self._diff_btns[d] = _Btn(
                (sx + i * (bw + gap), 150, bw, bh), str(d), self._f_btn_sm
            )

        per_row = 5
        cell_w, cell_h = THUMB_W + 20, THUMB_H + 44
        self._level_btns: dict[str, _Btn] = {}
        for i, image in enumerate(self._game.levels):
            r, c = divmod(i, per_row)
            n_in_row = min(per_row, len(self._game.levels) - r * per_row)
            row_x = _cx(n_in_row * cell_w + (n_in_row - 1) * gap)
            thumb = None
            if image.texture is not None:
                scale = min(THUMB_W / image.width, THUMB_H / image.height)
                thumb = pygame.transform.smoothscale(
                    image.texture,
                    (max(1, int(image.width * scale)), max(1, int(image.height * scale))),
                )
            self._level_btns[image.id] = _Btn(
                (row_x + c * (cell_w + gap), 220 + r * (cell_h + gap), cell_w, cell_h),
                image.title,
                self._f_small,
                image=thumb,
            )

        self._quit_btn = _Btn(
            (_cx(220), WIN_H - 70, 220, 46),
            "Q U I T",
            self._f_btn_sm,
            bg=COL_RED,
            hover=(255, 170, 185),
            fg=COL_BASE,
        )
        self._menu_all: list[_Btn] = [
            *self._diff_btns.values(),
            *self._level_btns.values(),
            self._quit_btn,
        ]

    def _build_game_btns(self) -> None:
        self._again_btn = _Btn(
            (_cx(220), WIN_H // 2 - 25, 220, 50),
            "PLAY AGAIN",
            self._f_btn,
            bg=COL_GREEN,
            hover=(190, 240, 190),
            fg=COL_BASE,
        )

    # ── helpers ─────────────────────────────────────────────────────────────

    @staticmethod
    def _fmt(seconds: float) -> str:
        m, s = divmod(int(seconds), 60)
        return f"{m:02d}:{s:02d}"

    @property
    def _screen(self) -> _Screen:
        return _Screen.MENU if self._shell.level_select_visible else _Screen.PLAYING

    # ── drawing ─────────────────────────────────────────────────────────────

    def _draw_menu(self) -> None:
        self._surf.fill(COL_BASE)
        _blit_center(
            self._surf, self._f_big.render("J I G S A W", True, COL_TEXT), 40
        )
        _blit_center(
            self._surf,
            self._f_body.render("Pieces along the short side", True, COL_SUBTEXT),
            118,
        )
        for d, btn in self._diff_btns.items():
            selected = d == self._game.settings.difficulty
            btn.bg = COL_GREEN if selected else COL_SURFACE0
            btn.fg = COL_BASE if selected else COL_TEXT
            btn.draw(self._surf)

        for btn in self._level_btns.values():
            btn.draw(self._surf)
        self._quit_btn.draw(self._surf)

        if self._status_msg:
            _blit_center(
                self._surf,
                self._f_small.render(self._status_msg, True, COL_RED),
                WIN_H - 100,
            )

    def _draw_game(self) -> None:
        self._surf.fill(COL_BASE)
        session = self._game.session
        assert session is not None

        held = None
        if session.dragged_piece_index is not None:
            held = session.piece(session.dragged_piece_index).handle
        self._renderer.draw(self._surf, held)

        header = (
            f"Placed: {session.correct_count}/{session.total_count}    "
            f"Drags: {session.drags}    "
            f"Time: {self._fmt(session.elapsed_time)}"
        )
        _blit_center(self._surf, self._f_body.render(header, True, COL_PINK), 10)
        _blit_center(
            self._surf,
            self._f_small.render(
                "Drag pieces into the frame     R  reshuffle     Esc  menu",
                True,
                COL_OVERLAY0,
            ),
            WIN_H - 24,
        )

        if self._shell.play_again_visible:
            banner = self._f_big.render("★  C O M P L E T E  ★", True, COL_GREEN)
            _blit_center(self._surf, banner, WIN_H // 2 - 90)
            self._again_btn.draw(self._surf)

    # ── event handling ──────────────────────────────────────────────────────

    def _ev_menu(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            for b in self._menu_all:
                b.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            for d, b in self._diff_btns.items():
                if b.hit(ev.pos):
                    self._game.settings = replace(self._game.settings, difficulty=d)
                    return True
            for image_id, b in self._level_btns.items():
                if b.hit(ev.pos):
                    self._start(image_id)
                    return True
            if self._quit_btn.hit(ev.pos):
                return False
        elif ev.type == pygame.KEYDOWN:
            if ev.key in (pygame.K_q, pygame.K_ESCAPE):
                return False
        return True

    def _ev_game(self, ev: pygame.event.Event) -> bool:
        if self._shell.play_again_visible:
            if ev.type == pygame.MOUSEMOTION:
                self._again_btn.motion(ev.pos)
            elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
                if self._again_btn.hit(ev.pos):
                    self._game.restart_game()
                    return True
            elif ev.type == pygame.KEYDOWN and ev.key in (pygame.K_RETURN, pygame.K_r):
                self._game.restart_game()
                return True

        if ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_ESCAPE:
                self._game.restart_game()
                return True
            if ev.key == pygame.K_r and self._current_level is not None:
                self._start(self._current_level)
                return True

        self._input.handle_event(ev)
        return True

    # ── game state ──────────────────────────────────────────────────────────

    def _start(self, image_id: str) -> None:
        try:
            self._game.start_level(image_id)
        except InvalidConfiguration as exc:
            logger.warning("Could not start level %s: %s", image_id, exc)
            self._status_msg = str(exc)
            return
        self._current_level = image_id
        self._status_msg = ""
        self._input.end_step()

    # ── main loop ───────────────────────────────────────────────────────────

    def run_loop(self) -> None:
        running = True
        while running:
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    running = False
                    break
                handler = self._ev_menu if self._screen == _Screen.MENU else self._ev_game
                if not handler(ev):
                    running = False
                    break

            if self._screen == _Screen.PLAYING:
                self._game.step(PointerSample.from_input(self._input))
                self._input.end_step()
                self._draw_game()
            else:
                self._draw_menu()

            pygame.display.flip()
            self._clock.tick(60)

        pygame.quit()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(settings: GameSettings | None = None, images_dir: Path | None = None) -> None:
    """Launch the Pygame GUI (opens directly to level select)."""
    app = PygameApp(settings or GameSettings(), images_dir)
    app.run_loop()
