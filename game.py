from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional

import pygame

from events import COLLECTIBLE_ACQUIRED, MAZE_FINISHED, MOVE_REJECTED_EXIT_LOCKED
from models import GameConfig
from music_controller import MAZE_SCENE, REWARD_SCENE, MusicController
from rendering import GameRenderer, RewardScene, Toast
from session import GameSession

logger = logging.getLogger(__name__)

ARROW_KEYS: Dict[int, str] = {
    pygame.K_UP: "up",
    pygame.K_w: "up",
    pygame.K_DOWN: "down",
    pygame.K_s: "down",
    pygame.K_LEFT: "left",
    pygame.K_a: "left",
    pygame.K_RIGHT: "right",
    pygame.K_d: "right",
}
DIRECTION_ORDER = ("up", "down", "left", "right")

# Delay between reaching the exit and showing the reward scene.
FINISH_FADE_MS = 520


class Game:
    """Top-level game orchestration (config, loop, input, scenes)."""

    def __init__(self, cfg: GameConfig) -> None:
        self.cfg = cfg
        self.window_w, self.window_h = self.cfg.window_size
        self.windowed_size = (self.window_w, self.window_h)
        self.fullscreen = self.cfg.fullscreen

        self._init_pygame()
        self.renderer = GameRenderer(self.window_w, self.window_h, self.cfg.render)
        self.music_controller = MusicController(self.cfg.music)

        self.session = GameSession(
            self.cfg.maze,
            self.cfg.placement,
            self.cfg.movement,
            rng=random.Random(self.cfg.maze.seed),
        )
        self._subscribe_events()

        self.scene = MAZE_SCENE
        self.toast: Optional[Toast] = None
        self.reward_scene: Optional[RewardScene] = None
        self._finish_delay_ms: Optional[float] = None
        self.held_directions: List[str] = []
        self._repeat_ms = 0.0

        self.session.new_game()
        self.music_controller.set_scene(MAZE_SCENE)

    # ----------------------------
    # Initialization
    # ----------------------------

    def _init_pygame(self) -> None:
        """Initialize pygame and create window + clock."""
        pygame.init()
        self._apply_display_mode()
        self.clock = pygame.time.Clock()

    def _apply_display_mode(self) -> None:
        """Create or recreate the display surface with the current mode."""
        flags = pygame.FULLSCREEN if self.fullscreen else 0
        self.screen = pygame.display.set_mode((self.window_w, self.window_h), flags)
        # Capture the actual size in case the platform adjusted it.
        self.window_w, self.window_h = self.screen.get_size()
        if hasattr(self, "renderer"):
            self.renderer.update_window_size(self.window_w, self.window_h)
        pygame.display.set_caption(self.cfg.title)

    def _subscribe_events(self) -> None:
        events = self.session.events
        events.subscribe(COLLECTIBLE_ACQUIRED, self._on_candy)
        events.subscribe(MOVE_REJECTED_EXIT_LOCKED, self._on_exit_locked)
        events.subscribe(MAZE_FINISHED, self._on_finished)

    # ----------------------------
    # Event handlers (audio/notices)
    # ----------------------------

    def _show_toast(self, text: str) -> None:
        self.toast = Toast(text=text, remaining_ms=float(self.cfg.render.toast_ms))

    def _on_candy(self, cell) -> None:
        self._show_toast("Candy collected! EXIT unlocked")
        self.music_controller.play_cue("candy")

    def _on_exit_locked(self, cell) -> None:
        self._show_toast("Find the candy first!")
        self.music_controller.play_cue("locked")

    def _on_finished(self, cell) -> None:
        self.music_controller.play_cue("finish")
        self._finish_delay_ms = float(FINISH_FADE_MS)

    # ----------------------------
    # Scenes
    # ----------------------------

    def _enter_reward_scene(self) -> None:
        self._finish_delay_ms = None
        self.scene = REWARD_SCENE
        self.reward_scene = RewardScene(reveal_ms=self.cfg.reward.reveal_ms)
        self.music_controller.set_scene(REWARD_SCENE)
        logger.info("reward scene after game %s", self.session.games_started)

    def reset_game(self) -> None:
        """Stop decorative timers, then regenerate the maze."""
        self.toast = None
        self.reward_scene = None
        self._finish_delay_ms = None
        self.held_directions = []
        self._repeat_ms = 0.0
        self.session.reset_game()
        self.scene = MAZE_SCENE
        self.music_controller.set_scene(MAZE_SCENE)

    # ----------------------------
    # Simulation
    # ----------------------------

    def _repeat_held_moves(self, dt: float) -> None:
        """Re-issue held directions at the key-repeat interval."""
        if not self.held_directions:
            self._repeat_ms = 0.0
            return
        self._repeat_ms += dt * 1000.0
        interval = self.cfg.movement.key_repeat_ms
        while self._repeat_ms >= interval:
            self._repeat_ms -= interval
            for direction in DIRECTION_ORDER:
                if direction in self.held_directions:
                    self.session.request_move(direction)

    def update(self, dt: float) -> None:
        """Update one simulation step."""
        if self.scene == MAZE_SCENE:
            self._repeat_held_moves(dt)
            self.session.update(dt)
            if self._finish_delay_ms is not None:
                self._finish_delay_ms -= dt * 1000.0
                if self._finish_delay_ms <= 0:
                    self._enter_reward_scene()
        elif self.reward_scene is not None:
            self.reward_scene.tick(dt)

        if self.toast is not None and not self.toast.tick(dt):
            self.toast = None
        self.music_controller.update()

    # ----------------------------
    # Events / loop
    # ----------------------------

    def _tick_dt(self) -> float:
        """Return delta time in seconds with a 60 FPS cap."""
        return self.clock.tick(60) / 1000.0

    def _handle_keydown(self, key: int) -> bool:
        """Handle KEYDOWN events.

        Returns:
            False if the game should exit, True otherwise.
        """
        if key == pygame.K_ESCAPE:
            return False
        if key == pygame.K_r:
            self.reset_game()
        if key == pygame.K_m:
            self.music_controller.toggle_sound()
        if key in (pygame.K_F11, pygame.K_f):
            self._toggle_fullscreen()

        direction = ARROW_KEYS.get(key)
        if direction is not None and self.scene == MAZE_SCENE:
            if direction not in self.held_directions:
                self.held_directions.append(direction)
            self._repeat_ms = 0.0
            self.session.request_move(direction)
        return True

    def _handle_keyup(self, key: int) -> None:
        direction = ARROW_KEYS.get(key)
        if direction is None:
            return
        pressed = pygame.key.get_pressed()
        still_held = any(
            pressed[k] for k, d in ARROW_KEYS.items() if d == direction and k != key
        )
        if not still_held and direction in self.held_directions:
            self.held_directions.remove(direction)

    def _toggle_fullscreen(self) -> None:
        """Toggle between windowed and fullscreen display modes."""
        self.fullscreen = not self.fullscreen
        if self.fullscreen:
            # Remember the last windowed size so we can restore it.
            self.windowed_size = (self.window_w, self.window_h)
            info = pygame.display.Info()
            self.window_w = info.current_w
            self.window_h = info.current_h
        else:
            self.window_w, self.window_h = self.windowed_size
        self._apply_display_mode()
        logger.debug("fullscreen=%s at %sx%s", self.fullscreen, self.window_w, self.window_h)

    def _handle_events(self) -> bool:
        """Process pygame events.

        Returns:
            False if the game should exit, True otherwise.
        """
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                return False
            if e.type == pygame.KEYDOWN:
                if not self._handle_keydown(e.key):
                    return False
            if e.type == pygame.KEYUP:
                self._handle_keyup(e.key)
        return True

    def render(self) -> None:
        if self.scene == REWARD_SCENE and self.reward_scene is not None:
            self.renderer.render_reward(self.screen, self.reward_scene, self.cfg.reward)
            return
        self.renderer.render_maze(
            self.screen,
            self.session.snapshot(),
            self.toast,
            self.music_controller.sound_on,
        )

    def run(self) -> None:
        """Run the main game loop."""
        running = True
        while running:
            dt = self._tick_dt()
            running = self._handle_events()
            self.update(dt)
            self.render()

        self.music_controller.stop()
        pygame.quit()
