from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import pygame

from game_types import WALL, Color
from models import GameSnapshot, RenderConfig, RewardConfig
from viewport import Viewport, cell_center, cell_rect, fit_grid

CANDY_GLYPH = "🍬"
PLAYER_GLYPH = "🎀"
HOUSE_GLYPH = "🏚️"
EMOJI_FONTS = "segoeuiemoji,applecoloremoji,notocoloremoji,symbola"


@dataclass
class Toast:
    """Transient advisory notice."""

    text: str
    remaining_ms: float

    def tick(self, dt: float) -> bool:
        """Count down; returns False once expired."""
        self.remaining_ms -= dt * 1000.0
        return self.remaining_ms > 0


@dataclass
class RewardScene:
    """Timed text reveal shown after the maze is finished."""

    reveal_ms: Tuple[int, int]
    elapsed_ms: float = 0.0

    def tick(self, dt: float) -> None:
        self.elapsed_ms += dt * 1000.0

    @property
    def title_visible(self) -> bool:
        return self.elapsed_ms >= self.reveal_ms[0]

    @property
    def message_visible(self) -> bool:
        return self.elapsed_ms >= self.reveal_ms[1]


def _wrap_text(text: str, font: pygame.font.Font, max_width: int) -> List[str]:
    """Word-wrap helper that keeps explicit paragraph breaks."""
    lines: List[str] = []
    for paragraph in text.split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue
        cur = ""
        for word in words:
            candidate = word if not cur else f"{cur} {word}"
            if font.size(candidate)[0] <= max_width:
                cur = candidate
            else:
                if cur:
                    lines.append(cur)
                cur = word
        if cur:
            lines.append(cur)
    return lines


def draw_cells(
    surf: pygame.Surface, snap: GameSnapshot, vp: Viewport, wall: Color, passage: Color
) -> None:
    for y, row in enumerate(snap.rows):
        for x, ch in enumerate(row):
            color = wall if ch == WALL else passage
            pygame.draw.rect(surf, color, cell_rect(x, y, vp))


def draw_cell_badge(
    surf: pygame.Surface,
    x: int,
    y: int,
    text: str,
    vp: Viewport,
    font: pygame.font.Font,
    fill: Color,
    ink: Color,
) -> None:
    """Rounded label over a cell (START / EXIT)."""
    r = cell_rect(x, y, vp)
    pad = max(2, int(vp.cell_size * 0.10))
    h = int(vp.cell_size * 0.58)
    badge = pygame.Rect(r.x + pad, r.y + (vp.cell_size - h) // 2, r.w - pad * 2, h)
    radius = int(h * 0.35)
    pygame.draw.rect(surf, fill, badge, border_radius=radius)
    pygame.draw.rect(surf, ink, badge, width=max(1, int(vp.cell_size * 0.06)), border_radius=radius)
    label = font.render(text, True, ink)
    surf.blit(label, label.get_rect(center=r.center))


def draw_glyph(
    surf: pygame.Surface, x: float, y: float, glyph: str, vp: Viewport, font: pygame.font.Font
) -> None:
    img = font.render(glyph, True, (0, 0, 0))
    surf.blit(img, img.get_rect(center=cell_center(x, y, vp)))


def draw_exit_glow(surf: pygame.Surface, x: int, y: int, vp: Viewport, color: Color) -> None:
    radius = max(2, int(vp.cell_size * 0.95))
    glow = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
    pygame.draw.circle(glow, (*color, 90), (radius, radius), radius)
    cx, cy = cell_center(x, y, vp)
    surf.blit(glow, (cx - radius, cy - radius))


def draw_hud(
    surf: pygame.Surface, font: pygame.font.Font, snap: GameSnapshot, sound_on: bool
) -> None:
    """Objective bar across the top of the window."""
    bar_height = font.get_height() + 12
    bar = pygame.Surface((surf.get_width(), bar_height), pygame.SRCALPHA)
    bar.fill((0, 0, 0, 230))
    surf.blit(bar, (0, 0))

    if snap.has_candy:
        objective = "EXIT unlocked - go to the house!"
    else:
        objective = "Find the candy (far away) to unlock EXIT"
    sound = "on" if sound_on else "off"
    txt = f"{objective} | M: sound {sound} | R: new maze | ESC: quit"
    surf.blit(font.render(txt, True, (255, 255, 255)), (12, 6))


def draw_toast(surf: pygame.Surface, font: pygame.font.Font, toast: Optional[Toast]) -> None:
    if toast is None:
        return
    label = font.render(toast.text, True, (255, 255, 255))
    box = label.get_rect()
    box.inflate_ip(28, 16)
    box.centerx = surf.get_width() // 2
    box.bottom = surf.get_height() - 24
    pygame.draw.rect(surf, (0, 0, 0), box, border_radius=12)
    surf.blit(label, label.get_rect(center=box.center))


class GameRenderer:
    """Draws the maze scene and the reward scene from session snapshots."""

    def __init__(self, window_w: int, window_h: int, cfg: RenderConfig) -> None:
        self.window_w = window_w
        self.window_h = window_h
        self.cfg = cfg
        self.hud_font = pygame.font.SysFont("monospace", 18)
        self.title_font = pygame.font.SysFont("monospace", 40, bold=True)
        self.body_font = pygame.font.SysFont("monospace", 22)
        self._cell_size = 0
        self.badge_font = self.hud_font
        self.glyph_font = self.hud_font

    def update_window_size(self, window_w: int, window_h: int) -> None:
        self.window_w = window_w
        self.window_h = window_h

    def _viewport(self, snap: GameSnapshot) -> Viewport:
        top = self.hud_font.get_height() + 16
        vp = fit_grid(self.window_w, self.window_h, snap.width, snap.height, top_margin=top)
        if vp.cell_size != self._cell_size:
            self._cell_size = vp.cell_size
            self.badge_font = pygame.font.SysFont("sans", max(8, int(vp.cell_size * 0.24)), bold=True)
            self.glyph_font = pygame.font.SysFont(EMOJI_FONTS, max(8, int(vp.cell_size * 0.75)))
        return vp

    def render_maze(
        self, screen: pygame.Surface, snap: GameSnapshot, toast: Optional[Toast], sound_on: bool
    ) -> None:
        vp = self._viewport(snap)
        screen.fill(self.cfg.bg)
        draw_cells(screen, snap, vp, self.cfg.wall, self.cfg.passage)

        keys = snap.key_cells
        draw_cell_badge(screen, *keys.start, "START", vp, self.badge_font, self.cfg.badge, self.cfg.text)
        draw_cell_badge(screen, *keys.exit, "EXIT", vp, self.badge_font, self.cfg.badge, self.cfg.text)

        if not snap.has_candy:
            draw_glyph(screen, *keys.candy, CANDY_GLYPH, vp, self.glyph_font)
        for monster in snap.monsters:
            draw_glyph(screen, *monster.cell, monster.glyph, vp, self.glyph_font)
        if snap.has_candy:
            draw_exit_glow(screen, *keys.exit, vp, self.cfg.glow)
            draw_glyph(screen, *keys.exit, HOUSE_GLYPH, vp, self.glyph_font)

        draw_glyph(screen, *snap.render_pos, PLAYER_GLYPH, vp, self.glyph_font)
        draw_hud(screen, self.hud_font, snap, sound_on)
        draw_toast(screen, self.hud_font, toast)
        pygame.display.flip()

    def render_reward(
        self, screen: pygame.Surface, scene: RewardScene, reward: RewardConfig
    ) -> None:
        screen.fill((30, 10, 24))
        cursor_y = int(self.window_h * 0.18)

        if scene.title_visible:
            title = self.title_font.render(reward.title, True, (255, 200, 230))
            screen.blit(title, title.get_rect(midtop=(self.window_w // 2, cursor_y)))
            cursor_y += title.get_height() + 24

        if scene.message_visible:
            max_w = min(int(self.window_w * 0.8), 900)
            for line in _wrap_text(reward.message, self.body_font, max_w):
                img = self.body_font.render(line, True, (255, 255, 255))
                screen.blit(img, img.get_rect(midtop=(self.window_w // 2, cursor_y)))
                cursor_y += self.body_font.get_height() + 4

        hint = self.hud_font.render(reward.restart_hint, True, (200, 200, 200))
        screen.blit(hint, hint.get_rect(midbottom=(self.window_w // 2, self.window_h - 24)))
        pygame.display.flip()
