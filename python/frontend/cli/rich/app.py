"""Rich terminal frontend — drag pieces with a keyboard-driven cursor.

The terminal is treated as a small orthographic viewport: each character
cell is one screen "pixel".  Arrow keys / WASD move a virtual pointer,
the space bar presses and releases it.  Every key press is one step of
the game's interaction state machine.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import pygame
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from backend.engine.gameplay import JigsawGame
from backend.engine.interfaces import PointerSample
from backend.errors import InvalidConfiguration
from backend.models.config import MAX_DIFFICULTY, MIN_DIFFICULTY, GameSettings
from backend.models.geometry import PieceSize, Point, UVRect
from backend.models.level import LevelCatalog, SourceImage
from frontend.cli.input_handler import read_key

logger = logging.getLogger(__name__)

console = Console()

# -- viewport -----------------------------------------------------------------

CANVAS_COLS = 96
CANVAS_ROWS = 30
ORTHO_HALF_HEIGHT = 5.0  # world units from centre to top edge
CELL_ASPECT = 0.5  # a character cell is about half as wide as it is tall
ROW_UNIT = 2 * ORTHO_HALF_HEIGHT / CANVAS_ROWS
COL_UNIT = ROW_UNIT * CELL_ASPECT
BOARD_SCALE = 6.0
FAST_STEP = 4

PRESET_LEVELS = [
    SourceImage("landscape", 800, 400, label="Landscape 2:1"),
    SourceImage("portrait", 400, 800, label="Portrait 1:2"),
    SourceImage("square", 600, 600, label="Square 1:1"),
    SourceImage("widescreen", 1920, 1080, label="Widescreen 16:9"),
    SourceImage("photo", 1000, 600, label="Photo 5:3"),
]


IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".bmp")
MENU_SLOTS = 9  # levels are picked with a single digit key


def build_levels(images_dir: Path | None) -> LevelCatalog:
    """Presets first, then one level per readable image in *images_dir*.

    Only the pixel size matters here; the terminal draws no textures.
    """
    catalog = LevelCatalog(PRESET_LEVELS)
    if images_dir is None or not images_dir.is_dir():
        return catalog
    for path in sorted(images_dir.iterdir()):
        if path.suffix.lower() not in IMAGE_SUFFIXES:
            continue
        if len(catalog) >= MENU_SLOTS:
            logger.info("Level menu is full; ignoring the rest of %s", images_dir)
            break
        if path.stem in catalog.ids():
            logger.warning("Skipping %s: id clashes with a preset level", path.name)
            continue
        try:
            w, h = pygame.image.load(str(path)).get_size()
        except pygame.error as exc:
            logger.warning("Skipping unreadable image %s: %s", path.name, exc)
            continue
        catalog.add(SourceImage(path.stem, w, h, label=path.stem))
    return catalog


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


def _world_to_cell(x: float, y: float) -> tuple[float, float]:
    """World point -> fractional (col, row) on the canvas."""
    return (
        x / COL_UNIT + CANVAS_COLS / 2 - 0.5,
        CANVAS_ROWS / 2 - 0.5 - y / ROW_UNIT,
    )


# -- collaborators ------------------------------------------------------------


class TerminalCamera:
    """Maps canvas cells to world units and back."""

    def screen_to_world(self, point: Point) -> tuple[float, float, float]:
        col, row = point
        return (
            (col + 0.5 - CANVAS_COLS / 2) * COL_UNIT,
            (CANVAS_ROWS / 2 - row - 0.5) * ROW_UNIT,
            0.0,
        )

    def viewport_half_extents(self) -> tuple[float, float]:
        return (CANVAS_COLS / 2 * COL_UNIT, ORTHO_HALF_HEIGHT)


@dataclass
class _Visual:
    size: PieceSize
    uv: UVRect
    position: Point = (0.0, 0.0)
    depth: float = 0.0
    enabled: bool = True

    @property
    def label(self) -> str:
        # Recover the grid cell from the UV rectangle.
        columns = round(1 / (self.uv.max_u - self.uv.min_u))
        col = round(self.uv.min_u * columns)
        row = round(self.uv.min_v / (self.uv.max_v - self.uv.min_v))
        return str(row * columns + col)


class TerminalRenderer:
    """Keeps piece visuals in a dict and paints them onto a character grid."""

    def __init__(self, board_scale: float) -> None:
        self._scale = board_scale
        self._visuals: dict[int, _Visual] = {}
        self._next_handle = 0
        self._outline: list[Point] | None = None

    # -- Renderer protocol ---------------------------------------------------

    def create_piece_visual(self, geometry: PieceSize, uv_rect: UVRect, texture: Any) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._visuals[handle] = _Visual(size=geometry, uv=uv_rect)
        return handle

    def set_position(self, handle: int, position: Point, depth: float) -> None:
        visual = self._visuals[handle]
        visual.position = position
        visual.depth = depth

    def set_visual_property(self, handle: int, enabled: bool) -> None:
        self._visuals[handle].enabled = enabled

    def draw_outline(self, points: list[Point], line_width: float) -> None:
        self._outline = list(points)

    def hide_outline(self) -> None:
        self._outline = None

    def destroy(self, handle: int) -> None:
        del self._visuals[handle]

    # -- painting -------------------------------------------------------------

    def _cell_span(self, visual: _Visual) -> tuple[int, int, int, int]:
        x, y = visual.position
        hw = visual.size.width * self._scale / 2
        hh = visual.size.height * self._scale / 2
        left, top = _world_to_cell(x * self._scale - hw, y * self._scale + hh)
        right, bottom = _world_to_cell(x * self._scale + hw, y * self._scale - hh)
        return (
            math.ceil(left),
            math.floor(right),
            math.ceil(top),
            math.floor(bottom),
        )

    def paint(self, cursor: Point, held: int | None) -> Text:
        grid: list[list[tuple[str, str]]] = [
            [(" ", "") for _ in range(CANVAS_COLS)] for _ in range(CANVAS_ROWS)
        ]

        def put(col: int, row: int, ch: str, style: str) -> None:
            if 0 <= col < CANVAS_COLS and 0 <= row < CANVAS_ROWS:
                grid[row][col] = (ch, style)

        if self._outline is not None:
            cells = [
                _world_to_cell(px * self._scale, py * self._scale)
                for px, py in self._outline
            ]
            # TL, TR, BR, BL
            left = round(cells[0][0]) - 1
            right = round(cells[1][0]) + 1
            top = round(cells[0][1]) - 1
            bottom = round(cells[2][1]) + 1
            for c in range(left, right + 1):
                put(c, top, "─", "dim")
                put(c, bottom, "─", "dim")
            for r in range(top, bottom + 1):
                put(left, r, "│", "dim")
                put(right, r, "│", "dim")
            for c, r, ch in ((left, top, "┌"), (right, top, "┐"),
                             (right, bottom, "┘"), (left, bottom, "└")):
                put(c, r, ch, "dim")

        # Locked pieces sit underneath loose ones; the held piece is on top.
        order = sorted(
            self._visuals,
            key=lambda h: (self._visuals[h].enabled, h == held, h),
        )
        for handle in order:
            visual = self._visuals[handle]
            if not visual.enabled:
                style = "black on green"
            elif handle == held:
                style = "black on yellow"
            else:
                style = "white on blue"
            c0, c1, r0, r1 = self._cell_span(visual)
            for r in range(r0, r1 + 1):
                for c in range(c0, c1 + 1):
                    put(c, r, "░" if visual.enabled else " ", style)
            label = visual.label
            mid_r = (r0 + r1) // 2
            start_c = (c0 + c1) // 2 - len(label) // 2
            for i, ch in enumerate(label):
                put(start_c + i, mid_r, ch, f"bold {style}")

        cx, cy = int(cursor[0]), int(cursor[1])
        put(cx, cy, "✚", "bold red")

        text = Text()
        for r, row in enumerate(grid):
            for ch, style in row:
                text.append(ch, style=style or None)
            if r < CANVAS_ROWS - 1:
                text.append("\n")
        return text


class KeyboardPointer:
    """An input source driven by key actions instead of a mouse."""

    _MOVES: dict[str, tuple[int, int]] = {
        "up": (0, -1),
        "down": (0, 1),
        "left": (-2, 0),
        "right": (2, 0),
    }

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.col = CANVAS_COLS // 2
        self.row = CANVAS_ROWS // 2
        self.held = False
        self._pressed = False
        self._released = False

    def apply(self, key: str) -> None:
        """Update pointer state for one key action."""
        fast = key.startswith("fast_")
        move = self._MOVES.get(key.removeprefix("fast_"))
        if move is not None:
            factor = FAST_STEP if fast else 1
            self.col = min(max(0, self.col + move[0] * factor), CANVAS_COLS - 1)
            self.row = min(max(0, self.row + move[1] * factor), CANVAS_ROWS - 1)
        elif key == "grab":
            if self.held:
                self.held = False
                self._released = True
            else:
                self.held = True
                self._pressed = True

    def end_step(self) -> None:
        self._pressed = False
        self._released = False

    # -- InputSource protocol -------------------------------------------------

    def current_pointer_position(self) -> Point | None:
        return (float(self.col), float(self.row))

    def was_pressed_this_step(self) -> bool:
        return self._pressed

    def is_press_held(self) -> bool:
        return self.held

    def was_released_this_step(self) -> bool:
        return self._released


class TerminalShell:
    """Tracks which screen the terminal should show."""

    def __init__(self) -> None:
        self.level_select_visible = True
        self.play_again_visible = False

    def show_level_select(self, visible: bool) -> None:
        self.level_select_visible = visible

    def show_play_again(self, visible: bool) -> None:
        self.play_again_visible = visible


# -- screens ------------------------------------------------------------------


def _draw_menu(game: JigsawGame, status: str = "") -> None:
    console.clear()

    diffs = Text()
    for d in range(MIN_DIFFICULTY, MAX_DIFFICULTY + 1):
        if d > MIN_DIFFICULTY:
            diffs.append("  ")
        if d == game.settings.difficulty:
            diffs.append(f" {d} ", style="bold green on #313244")
        else:
            diffs.append(f" {d} ", style="dim")
    nav = Text("  ← →  change difficulty", style="dim")

    levels = Text()
    for i, image in enumerate(game.levels, 1):
        levels.append(f"  {i}", style="bold cyan")
        levels.append(f"  {image.title}  ")
        levels.append(f"({image.width}×{image.height})\n", style="dim")
    levels.append("  Q", style="dim bold")
    levels.append("  Quit", style="dim")

    parts = [
        Text(""),
        Align.center(diffs),
        Align.center(nav),
        Text(""),
        Align.center(levels),
    ]
    if status:
        parts.append(Align.center(Text.from_markup(status)))

    panel = Panel(
        Group(*parts),
        title="[bold]J I G S A W[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )
    console.print()
    console.print(Align.center(panel))


def _draw_game(
    game: JigsawGame, renderer: TerminalRenderer, pointer: KeyboardPointer
) -> None:
    session = game.session
    assert session is not None
    console.clear()

    canvas = renderer.paint(
        (pointer.col, pointer.row),
        held=(
            session.piece(session.dragged_piece_index).handle
            if session.dragged_piece_index is not None
            else None
        ),
    )

    dims = session.dimensions
    panel = Panel(
        canvas,
        title=f"[bold cyan]Jigsaw  {dims.columns}×{dims.rows}[/bold cyan]",
        border_style="bold green" if game.is_won else "bright_blue",
        padding=(0, 1),
    )

    stats = Text()
    stats.append("  Placed: ", style="dim")
    stats.append(f"{session.correct_count}/{session.total_count}", style="bold yellow")
    stats.append("    Drags: ", style="dim")
    stats.append(str(session.drags), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(session.elapsed_time), style="bold yellow")

    console.print(Align.center(panel))
    console.print(Align.center(stats))

    if game.is_won:
        congrats = Text()
        congrats.append("\n  ★ ", style="bold yellow")
        congrats.append("COMPLETE!", style="bold green")
        congrats.append("  Press Enter to play again.  ", style="green")
        congrats.append("★\n", style="bold yellow")
        console.print(Align.center(congrats))
        return

    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  move (shift: fast)   ", style="dim")
    controls.append("Space", style="bold cyan")
    controls.append("  grab/drop   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  reshuffle   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  back", style="dim")
    console.print(Align.center(controls))


# -- game loops ---------------------------------------------------------------


def _play_level(
    game: JigsawGame,
    renderer: TerminalRenderer,
    pointer: KeyboardPointer,
    shell: TerminalShell,
    image_id: str,
) -> None:
    game.start_level(image_id)
    pointer.reset()

    while True:
        _draw_game(game, renderer, pointer)

        if shell.play_again_visible:
            while read_key() not in ("enter", "quit"):
                pass
            game.restart_game()
            return

        # Redraw at least once a second so the clock keeps ticking.
        key = read_key(timeout=1.0)
        if key is None:
            continue
        if key == "quit":
            game.restart_game()
            return
        if key == "restart":
            game.start_level(image_id)
            pointer.reset()
            continue

        pointer.apply(key)
        game.step(PointerSample.from_input(pointer))
        pointer.end_step()


def _menu_loop(game: JigsawGame, renderer: TerminalRenderer, pointer: KeyboardPointer,
               shell: TerminalShell) -> None:
    status = ""
    ids = game.levels.ids()

    while True:
        _draw_menu(game, status)
        status = ""
        key = read_key()

        if key == "quit":
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return
        elif key == "left":
            game.settings = replace(
                game.settings, difficulty=max(MIN_DIFFICULTY, game.settings.difficulty - 1)
            )
        elif key == "right":
            game.settings = replace(
                game.settings, difficulty=min(MAX_DIFFICULTY, game.settings.difficulty + 1)
            )
        elif key and key.isdigit() and 1 <= int(key) <= len(ids):
            try:
                _play_level(game, renderer, pointer, shell, ids[int(key) - 1])
            except InvalidConfiguration as exc:
                logger.warning("Could not start level: %s", exc)
                status = f"[red]{exc}[/red]"


# -- public entry point -------------------------------------------------------


def run(
    settings: GameSettings | None = None,
    images_dir: Path | None = None,
) -> None:
    """Launch the Rich terminal frontend.

    The menu lists the aspect-ratio presets followed by the images in
    *images_dir*; only their pixel sizes are used.
    """
    settings = replace(settings or GameSettings(), board_scale=BOARD_SCALE)
    renderer = TerminalRenderer(settings.board_scale)
    pointer = KeyboardPointer()
    shell = TerminalShell()
    game = JigsawGame(
        renderer=renderer,
        camera=TerminalCamera(),
        ui=shell,
        settings=settings,
        levels=build_levels(images_dir),
    )
    _menu_loop(game, renderer, pointer, shell)
