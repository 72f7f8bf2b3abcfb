"""Pygame GUI frontend — fully self-contained.

Includes main menu, size selection, gameplay with animated chain slides,
solver playback, win / time-up screen, and high-score display.  No terminal
interaction required.
"""

from __future__ import annotations

import enum
from datetime import datetime
from pathlib import Path
from typing import Iterator

import pygame

from backend.config import PuzzleSettings, settings as default_settings
from backend.engine.gamegenerator.generator import GameGenerator
from backend.engine.gamemoves.executor import MoveOutcome, TileRelocation
from backend.engine.gameplay.game import GamePlay
from backend.engine.gamesolver.solver import NoSolutionFound
from backend.models.achievements import record_win
from backend.models.grid import BLANK, SIZES, Direction
from backend.models.highscore import HighScoreEntry, HighScoreManager

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
COL_TEAL = (148, 226, 213)

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
WIN_W, WIN_H = 500, 640
TILE_GAP = 4
MARGIN = 20
BOARD_TOP = 76
BOARD_MAX = WIN_W - 2 * MARGIN  # max board width/height in px


class _Screen(enum.Enum):
    MENU = "menu"
    PLAYING = "playing"
    END = "end"
    SCORES = "scores"


# ---------------------------------------------------------------------------
# Simple clickable button
# ---------------------------------------------------------------------------
class _Btn:
    __slots__ = ("rect", "text", "font", "bg", "hover", "fg", "radius", "_hot")

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
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.hover = hover
        self.fg = fg
        self.radius = radius
        self._hot = False

    def draw(self, surf: pygame.Surface) -> None:
        c = self.hover if self._hot else self.bg
        pygame.draw.rect(surf, c, self.rect, border_radius=self.radius)
        lbl = self.font.render(self.text, True, self.fg)
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
# Slide animation
# ---------------------------------------------------------------------------
class _Slide:
    """Tiles in flight from one move; the grid already holds their targets."""

    def __init__(self, relocations: list[TileRelocation], duration_ms: int) -> None:
        self.by_tile = {rel.tile: rel for rel in relocations}
        self.start = pygame.time.get_ticks()
        self.duration = max(1, duration_ms)

    @property
    def progress(self) -> float:
        return min(1.0, (pygame.time.get_ticks() - self.start) / self.duration)

    @property
    def done(self) -> bool:
        return self.progress >= 1.0


# ---------------------------------------------------------------------------
# Centring helpers
# ---------------------------------------------------------------------------
def _cx(w: int) -> int:
    return (WIN_W - w) // 2


def _blit_center(surf: pygame.Surface, rendered: pygame.Surface, y: int) -> None:
    surf.blit(rendered, (_cx(rendered.get_width()), y))


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    def __init__(self, default_size: int, data_dir: Path, settings: PuzzleSettings) -> None:
        self._data_dir = data_dir
        self._settings = settings
        self._hs = HighScoreManager(data_dir / "highscores.json")
        self._sel_size = default_size if default_size in SIZES else SIZES[0]

        pygame.init()
        self._surf = pygame.display.set_mode((WIN_W, WIN_H))
        pygame.display.set_caption("Sliding Puzzle")
        self._clock = pygame.time.Clock()

        self._f_big = pygame.font.SysFont("Helvetica", 38, bold=True)
        self._f_title = pygame.font.SysFont("Helvetica", 22, bold=True)
        self._f_body = pygame.font.SysFont("Helvetica", 16)
        self._f_btn = pygame.font.SysFont("Helvetica", 17, bold=True)
        self._f_btn_sm = pygame.font.SysFont("Helvetica", 14, bold=True)
        self._f_small = pygame.font.SysFont("Helvetica", 13)
        self._f_score = pygame.font.SysFont("Helvetica", 14)

        self._screen = _Screen.MENU
        self._game: GamePlay | None = None
        self._ended = False
        self._study_mode = False
        self._status_msg: str = ""
        self._earned: list[str] = []
        self._hover: tuple[int, int] | None = None
        self._slide: _Slide | None = None
        self._playback: Iterator[MoveOutcome] | None = None

        self._build_menu_btns()
        self._build_score_btns()
        self._build_end_btns()
        self._build_game_btns()

    # ── buttons ─────────────────────────────────────────────────────────────

    def _build_menu_btns(self) -> None:
        bw, bh, gap = 112, 46, 8
        total_w = len(SIZES) * bw + (len(SIZES) - 1) * gap
        sx = _cx(total_w)

        self._size_btns: dict[int, _Btn] = {}
        for i, s in enumerate(SIZES):
            self._size_btns[s] = _Btn(
                (sx + i * (bw + gap), 250, bw, bh), f"{s}×{s}", self._f_btn_sm
            )

        bw_lg = 220
        self._play_btn = _Btn(
            (_cx(bw_lg), 330, bw_lg, 50), "P L A Y", self._f_btn,
            bg=COL_BLUE, hover=COL_LAVENDER, fg=COL_BASE,
        )
        self._study_btn = _Btn(
            (_cx(bw_lg), 394, bw_lg, 42), "S T U D Y", self._f_btn_sm,
            bg=COL_YELLOW, hover=(255, 240, 200), fg=COL_BASE,
        )
        self._hs_btn = _Btn((_cx(bw_lg), 450, bw_lg, 42), "HIGH SCORES", self._f_btn_sm)
        self._quit_btn = _Btn(
            (_cx(bw_lg), 506, bw_lg, 42), "Q U I T", self._f_btn_sm,
            bg=COL_RED, hover=(255, 170, 185), fg=COL_BASE,
        )

        self._menu_all: list[_Btn] = [
            *self._size_btns.values(),
            self._play_btn,
            self._study_btn,
            self._hs_btn,
            self._quit_btn,
        ]

    def _build_score_btns(self) -> None:
        self._score_back = _Btn((_cx(180), WIN_H - 64, 180, 46), "B A C K", self._f_btn_sm)

    def _build_end_btns(self) -> None:
        bw = 220
        self._end_again = _Btn(
            (_cx(bw), 440, bw, 50), "PLAY AGAIN", self._f_btn,
            bg=COL_GREEN, hover=(190, 240, 190), fg=COL_BASE,
        )
        self._end_menu = _Btn((_cx(bw), 508, bw, 46), "M E N U", self._f_btn_sm)

    def _build_game_btns(self) -> None:
        """Build in-game action buttons (placed below the board)."""
        bw, gap = 110, 10

        self._hint_btn = _Btn(
            (0, 0, bw, 36), "HINT (N)", self._f_btn_sm,
            bg=COL_YELLOW, hover=(255, 240, 200), fg=COL_BASE,
        )
        if self._study_mode:
            self._scramble_btn: _Btn | None = _Btn(
                (0, 0, bw, 36), "SCRAMBLE (R)", self._f_btn_sm,
                bg=COL_PINK, hover=(245, 210, 227), fg=COL_BASE,
            )
            self._solve_btn: _Btn | None = _Btn(
                (0, 0, bw, 36), "SOLVE (V)", self._f_btn_sm,
                bg=COL_GREEN, hover=(190, 240, 190), fg=COL_BASE,
            )
            self._game_action_btns = [self._scramble_btn, self._hint_btn, self._solve_btn]
        else:
            self._scramble_btn = None
            self._solve_btn = None
            self._game_action_btns = [self._hint_btn]

        total = len(self._game_action_btns) * bw + (len(self._game_action_btns) - 1) * gap
        sx = _cx(total)
        for i, btn in enumerate(self._game_action_btns):
            btn.rect.x = sx + i * (bw + gap)

    # ── helpers ─────────────────────────────────────────────────────────────

    @staticmethod
    def _fmt(seconds: float) -> str:
        m, s = divmod(int(seconds), 60)
        return f"{m:02d}:{s:02d}"

    def _tile_layout(self) -> tuple[int, int, int, int]:
        """Return (tile_px, origin_x, origin_y, total_px) for current game."""
        sz = self._game.size  # type: ignore[union-attr]
        tile_px = (BOARD_MAX - (sz + 1) * TILE_GAP) // sz
        total = sz * tile_px + (sz + 1) * TILE_GAP
        ox = _cx(total) + TILE_GAP
        oy = BOARD_TOP + TILE_GAP
        return tile_px, ox, oy, total

    def _cell_origin(self, r: float, c: float, tpx: int, ox: int, oy: int) -> tuple[int, int]:
        return (
            round(ox + c * (tpx + TILE_GAP)),
            round(oy + r * (tpx + TILE_GAP)),
        )

    def _cell_at(self, pos: tuple[int, int]) -> tuple[int, int] | None:
        game = self._game
        if game is None:
            return None
        tpx, ox, oy, _ = self._tile_layout()
        for r in range(game.size):
            for c in range(game.size):
                x, y = self._cell_origin(r, c, tpx, ox, oy)
                if pygame.Rect(x, y, tpx, tpx).collidepoint(pos):
                    return (r, c)
        return None

    @property
    def _busy(self) -> bool:
        """True while a slide is animating or a solution is playing back."""
        return self._slide is not None or self._playback is not None

    def _animate(self, relocations: list[TileRelocation]) -> None:
        if relocations:
            self._slide = _Slide(relocations, self._settings.animation_speed)

    # ── drawing ─────────────────────────────────────────────────────────────

    def _draw_menu(self) -> None:
        self._surf.fill(COL_BASE)

        _blit_center(self._surf, self._f_big.render("SLIDING  PUZZLE", True, COL_TEXT), 80)
        _blit_center(self._surf, self._f_body.render("Select grid size", True, COL_SUBTEXT), 210)

        for s, btn in self._size_btns.items():
            btn.bg = COL_GREEN if s == self._sel_size else COL_SURFACE0
            btn.fg = COL_BASE if s == self._sel_size else COL_TEXT
            btn.draw(self._surf)

        self._play_btn.draw(self._surf)
        self._study_btn.draw(self._surf)
        self._hs_btn.draw(self._surf)
        self._quit_btn.draw(self._surf)

    def _draw_header(self, game: GamePlay) -> None:
        sz = game.size
        if self._study_mode:
            _blit_center(
                self._surf,
                self._f_title.render(f"Study  {sz}×{sz}", True, COL_YELLOW),
                14,
            )
            return

        _blit_center(
            self._surf,
            self._f_title.render(f"Sliding Puzzle  {sz}×{sz}", True, COL_TEXT),
            14,
        )
        line = f"Moves: {game.state.moves}    Time: {self._fmt(game.state.elapsed_time)}"
        left = game.state.time_left
        if left is not None:
            line += f"    Left: {self._fmt(left)}"
        colour = COL_RED if left is not None and left < 10 else COL_PINK
        _blit_center(self._surf, self._f_body.render(line, True, colour), 44)

    def _draw_game(self) -> None:
        self._surf.fill(COL_BASE)
        game = self._game
        assert game is not None
        grid = game.grid
        sz = game.size
        tpx, ox, oy, total = self._tile_layout()
        f_tile = pygame.font.SysFont("Helvetica", max(14, tpx // 3), bold=True)

        self._draw_header(game)

        pygame.draw.rect(
            self._surf,
            COL_MANTLE,
            pygame.Rect(_cx(total), BOARD_TOP, total, total),
            border_radius=10,
        )

        preview: set[tuple[int, int]] = set()
        if self._hover is not None and not self._busy:
            preview = set(game.preview(*self._hover))

        slide = self._slide
        t = slide.progress if slide is not None else 1.0
        for r in range(sz):
            for c in range(sz):
                val = grid.tile_at((r, c))
                if val == BLANK:
                    continue
                rel = slide.by_tile.get(val) if slide is not None else None
                if rel is not None:
                    # Interpolate from where the tile was to where it now is.
                    fr = rel.src[0] + (rel.dst[0] - rel.src[0]) * t
                    fc = rel.src[1] + (rel.dst[1] - rel.src[1]) * t
                    x, y = self._cell_origin(fr, fc, tpx, ox, oy)
                else:
                    x, y = self._cell_origin(r, c, tpx, ox, oy)
                rect = pygame.Rect(x, y, tpx, tpx)

                if (r, c) in preview:
                    col = COL_TEAL
                elif grid.is_tile_correct((r, c)):
                    col = COL_GREEN
                else:
                    col = COL_BLUE
                pygame.draw.rect(self._surf, col, rect, border_radius=6)
                lbl = f_tile.render(str(val), True, COL_BASE)
                self._surf.blit(
                    lbl,
                    (
                        rect.centerx - lbl.get_width() // 2,
                        rect.centery - lbl.get_height() // 2,
                    ),
                )

        btn_y = BOARD_TOP + total + 10
        for btn in self._game_action_btns:
            btn.rect.y = btn_y
            btn.draw(self._surf)

        if self._status_msg:
            _blit_center(
                self._surf,
                self._f_small.render(self._status_msg, True, COL_YELLOW),
                btn_y + 44,
            )
            footer_y = btn_y + 64
        else:
            footer_y = btn_y + 44

        if self._study_mode:
            hint_text = "Click  slide row/col     R  scramble     M  menu"
        else:
            best = self._hs.best_moves(sz)
            best_txt = f"     Best  {best} moves" if best is not None else ""
            hint_text = f"Click  slide row/col     R  restart     M  menu{best_txt}"
        _blit_center(
            self._surf,
            self._f_small.render(hint_text, True, COL_OVERLAY0),
            footer_y,
        )

    def _draw_end(self) -> None:
        self._surf.fill(COL_BASE)
        game = self._game
        assert game is not None

        if game.is_won:
            _blit_center(self._surf, self._f_big.render("★  S O L V E D  ★", True, COL_GREEN), 100)
        else:
            _blit_center(self._surf, self._f_big.render("TIME'S  UP", True, COL_RED), 100)

        info = [
            (f"Grid:   {game.size}×{game.size}", COL_SUBTEXT),
            (f"Moves:  {game.state.moves}", COL_YELLOW),
            (f"Time:   {self._fmt(game.state.elapsed_time)}", COL_YELLOW),
        ]
        if game.state.is_optimal_win:
            info.append(("Optimal win!", COL_TEAL))
        y = 190
        for txt, col in info:
            _blit_center(self._surf, self._f_title.render(txt, True, col), y)
            y += 40

        for name in self._earned:
            _blit_center(
                self._surf,
                self._f_body.render(f"Achievement unlocked: {name}", True, COL_PINK),
                y,
            )
            y += 24

        self._end_again.draw(self._surf)
        self._end_menu.draw(self._surf)

    def _draw_scores(self) -> None:
        self._surf.fill(COL_BASE)
        _blit_center(self._surf, self._f_big.render("HIGH  SCORES", True, COL_TEXT), 24)

        sizes = self._hs.get_all_sizes()
        y = 90

        if not sizes:
            _blit_center(
                self._surf,
                self._f_body.render("No high scores yet.", True, COL_OVERLAY0),
                y + 30,
            )
        else:
            for sz in sizes:
                _blit_center(
                    self._surf,
                    self._f_btn_sm.render(f"—  {sz}×{sz}  —", True, COL_BLUE),
                    y,
                )
                y += 28
                for i, e in enumerate(self._hs.get_scores(sz)[:5], 1):
                    row = f"{i}.  {e.moves} moves   {e.time:.1f}s   ({e.date})"
                    self._surf.blit(self._f_score.render(row, True, COL_SUBTEXT), (60, y))
                    y += 22
                y += 14
                if y > WIN_H - 120:
                    break

        if self._hs.achievements:
            _blit_center(
                self._surf,
                self._f_small.render(
                    f"Achievements: {len(self._hs.achievements)}", True, COL_PINK
                ),
                WIN_H - 96,
            )

        self._score_back.draw(self._surf)

    # ── event handling ──────────────────────────────────────────────────────

    def _ev_menu(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            for b in self._menu_all:
                b.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            for s, b in self._size_btns.items():
                if b.hit(ev.pos):
                    self._sel_size = s
                    return True
            if self._play_btn.hit(ev.pos):
                self._start_game()
            elif self._study_btn.hit(ev.pos):
                self._open_study()
            elif self._hs_btn.hit(ev.pos):
                self._hs = HighScoreManager(self._data_dir / "highscores.json")
                self._screen = _Screen.SCORES
            elif self._quit_btn.hit(ev.pos):
                return False
        elif ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_RETURN:
                self._start_game()
            elif ev.key == pygame.K_l:
                self._open_study()
            elif ev.key == pygame.K_LEFT:
                self._sel_size = max(SIZES[0], self._sel_size - 1)
            elif ev.key == pygame.K_RIGHT:
                self._sel_size = min(SIZES[-1], self._sel_size + 1)
            elif ev.key in (pygame.K_q, pygame.K_ESCAPE):
                return False
        return True

    def _ev_game(self, ev: pygame.event.Event) -> bool:
        game = self._game
        assert game is not None
        if ev.type == pygame.MOUSEMOTION:
            for btn in self._game_action_btns:
                btn.motion(ev.pos)
            self._hover = self._cell_at(ev.pos)
        elif ev.type == pygame.KEYDOWN and ev.key in (pygame.K_m, pygame.K_ESCAPE):
            self._playback = None
            self._slide = None
            self._screen = _Screen.MENU
        elif self._busy:
            # No new move until the previous one has finished animating.
            return True
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._scramble_btn and self._scramble_btn.hit(ev.pos):
                self._do_scramble()
            elif self._hint_btn.hit(ev.pos):
                self._do_hint()
            elif self._solve_btn and self._solve_btn.hit(ev.pos):
                self._do_solve()
            else:
                cell = self._cell_at(ev.pos)
                if cell is not None:
                    self._animate(game.click(*cell))
                    self._status_msg = ""
        elif ev.type == pygame.KEYDOWN:
            _dirs = {
                pygame.K_UP: Direction.UP,
                pygame.K_w: Direction.UP,
                pygame.K_DOWN: Direction.DOWN,
                pygame.K_s: Direction.DOWN,
                pygame.K_LEFT: Direction.LEFT,
                pygame.K_a: Direction.LEFT,
                pygame.K_RIGHT: Direction.RIGHT,
                pygame.K_d: Direction.RIGHT,
            }
            if ev.key in _dirs:
                if game.move(_dirs[ev.key]):
                    self._animate(game.last_relocations)
                self._status_msg = ""
            elif ev.key == pygame.K_n:
                self._do_hint()
            elif ev.key == pygame.K_v and self._study_mode:
                self._do_solve()
            elif ev.key == pygame.K_r:
                if self._study_mode:
                    self._do_scramble()
                else:
                    self._start_game()
        return True

    def _ev_end(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            self._end_again.motion(ev.pos)
            self._end_menu.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._end_again.hit(ev.pos):
                self._start_game()
            elif self._end_menu.hit(ev.pos):
                self._screen = _Screen.MENU
        elif ev.type == pygame.KEYDOWN:
            if ev.key in (pygame.K_r, pygame.K_RETURN):
                self._start_game()
            elif ev.key in (pygame.K_m, pygame.K_ESCAPE):
                self._screen = _Screen.MENU
        return True

    def _ev_scores(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            self._score_back.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._score_back.hit(ev.pos):
                self._screen = _Screen.MENU
        elif ev.type == pygame.KEYDOWN:
            if ev.key in (pygame.K_ESCAPE, pygame.K_BACKSPACE, pygame.K_m):
                self._screen = _Screen.MENU
        return True

    # ── solver actions ──────────────────────────────────────────────────────

    def _do_hint(self) -> None:
        game = self._game
        assert game is not None
        if game.is_won:
            self._status_msg = "Already solved!"
            return
        if game.hint() is None:
            self._status_msg = "No hint available"
        else:
            self._animate(game.last_relocations)
            self._status_msg = f"Hint: tile {game.last_relocations[0].tile}"

    def _do_solve(self) -> None:
        game = self._game
        assert game is not None
        if game.is_won:
            self._status_msg = "Already solved!"
            return
        self._status_msg = "Thinking…"
        self._draw_game()
        pygame.display.flip()
        try:
            path = game.solve_path()
        except NoSolutionFound as exc:
            self._status_msg = f"No solution found ({exc.reason})"
            return
        self._playback_total = len(path)
        self._playback_done = 0
        self._playback = game.play_solution(path)

    def _step_playback(self) -> None:
        """Start the next solver move once the previous slide has landed."""
        if self._playback is None or self._slide is not None:
            return
        outcome = next(self._playback, None)
        if outcome is None:
            self._playback = None
            self._status_msg = f"Solved in {self._playback_total} moves!"
            return
        self._playback_done += 1
        self._status_msg = f"Solving… {self._playback_done}/{self._playback_total}"
        self._animate(outcome.relocations)

    def _do_scramble(self) -> None:
        grid = GameGenerator.generate(self._sel_size, self._settings.shuffle_steps)
        self._game = GamePlay.from_grid(grid, self._settings)
        self._ended = False
        self._status_msg = "Scrambled!"

    def _open_study(self) -> None:
        """Enter study mode — starts from solved grid."""
        self._study_mode = True
        self._game = GamePlay.from_grid(GameGenerator.solved(self._sel_size), self._settings)
        self._reset_play()

    # ── game state ──────────────────────────────────────────────────────────

    def _start_game(self) -> None:
        self._study_mode = False
        self._game = GamePlay(self._sel_size, self._settings)
        self._reset_play()

    def _reset_play(self) -> None:
        self._ended = False
        self._status_msg = ""
        self._earned = []
        self._slide = None
        self._playback = None
        self._build_game_btns()
        self._screen = _Screen.PLAYING

    def _check_end(self) -> None:
        game = self._game
        if game is None or self._ended or self._busy:
            return
        if not (game.is_won or game.is_lost):
            return
        self._ended = True
        game.state.pause()
        if game.is_won:
            elapsed = round(game.state.elapsed_time, 2)
            self._hs.add_score(
                game.size,
                HighScoreEntry(
                    moves=game.state.moves,
                    time=elapsed,
                    date=datetime.now().strftime("%Y-%m-%d %H:%M"),
                ),
            )
            self._earned = [
                a.name for a in record_win(self._hs, game.size, game.state.moves, elapsed)
            ]
        self._screen = _Screen.END

    # ── main loop ───────────────────────────────────────────────────────────

    def run_loop(self) -> None:
        _dispatch = {
            _Screen.MENU: self._ev_menu,
            _Screen.PLAYING: self._ev_game,
            _Screen.END: self._ev_end,
            _Screen.SCORES: self._ev_scores,
        }
        _draw = {
            _Screen.MENU: self._draw_menu,
            _Screen.PLAYING: self._draw_game,
            _Screen.END: self._draw_end,
            _Screen.SCORES: self._draw_scores,
        }

        running = True
        while running:
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    running = False
                    break
                handler = _dispatch.get(self._screen)
                if handler and not handler(ev):
                    running = False
                    break

            if self._slide is not None and self._slide.done:
                self._slide = None
            self._step_playback()

            if self._screen == _Screen.PLAYING and not self._study_mode:
                self._check_end()

            drawer = _draw.get(self._screen)
            if drawer:
                drawer()
            pygame.display.flip()
            self._clock.tick(60)

        pygame.quit()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(
    size: int = 4,
    data_dir: Path = Path("data"),
    settings: PuzzleSettings | None = None,
) -> None:
    """Launch the Pygame GUI (opens directly to the menu)."""
    app = PygameApp(size, data_dir, settings or default_settings)
    app.run_loop()
