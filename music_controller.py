from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pygame

from models import MusicConfig

logger = logging.getLogger(__name__)

MAZE_SCENE = "maze"
REWARD_SCENE = "reward"


class MusicController:
    """Scene playlists (maze / reward) plus one-shot cue sounds with fades."""

    def __init__(self, cfg: MusicConfig, sound_on: bool = True) -> None:
        self.music_dir = Path(cfg.music_dir)
        self.fade_ms = cfg.fade_ms
        self.scene_playlists: Dict[str, Sequence[str]] = {
            MAZE_SCENE: cfg.maze_playlist,
            REWARD_SCENE: cfg.reward_playlist,
        }
        self.cue_names = dict(cfg.cues)
        self.playlist: List[Path] = []
        self.index = -1
        self.scene: Optional[str] = None
        self.sound_on = sound_on
        self.enabled = self._init_mixer()
        self.cues: Dict[str, pygame.mixer.Sound] = self._load_cues() if self.enabled else {}

    def _init_mixer(self) -> bool:
        """Initialize pygame mixer; return False if unavailable."""
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            return True
        except pygame.error as e:
            logger.warning("pygame mixer disabled: %s", e)
            return False

    def _resolve_track(self, raw: str) -> Optional[Path]:
        """Resolve a track name to a real file path."""
        raw_path = Path(raw)
        candidates = []
        if not raw_path.is_absolute():
            candidates.append(self.music_dir / raw_path)
        candidates.append(raw_path)

        for c in candidates:
            if c.exists() and c.is_file():
                return c
        return None

    def _resolve_playlist(self, names: Sequence[str]) -> List[Path]:
        """Filter/resolve playlist entries into existing file paths."""
        resolved: List[Path] = []
        seen = set()
        for raw in names:
            track = self._resolve_track(raw)
            if not track:
                logger.debug("track not found: %s", raw)
                continue
            key = track.resolve()
            if key in seen:
                continue
            seen.add(key)
            resolved.append(track)
        return resolved

    def _load_cues(self) -> Dict[str, pygame.mixer.Sound]:
        cues: Dict[str, pygame.mixer.Sound] = {}
        for name, raw in self.cue_names.items():
            path = self._resolve_track(raw)
            if path is None:
                logger.debug("cue %s not found: %s", name, raw)
                continue
            try:
                cues[name] = pygame.mixer.Sound(path.as_posix())
            except pygame.error as e:
                logger.warning("could not load cue %s (%s): %s", name, path, e)
        return cues

    def _play_current(self, fade_in: bool) -> None:
        if not self.enabled or not self.sound_on or not self.playlist:
            return
        track = self.playlist[self.index % len(self.playlist)]
        pygame.mixer.music.load(track.as_posix())
        pygame.mixer.music.play(loops=0, fade_ms=self.fade_ms if fade_in else 0)

    def _advance_and_play(self) -> None:
        if not self.playlist:
            return
        self.index = (self.index + 1) % len(self.playlist)
        self._play_current(fade_in=False)

    def set_scene(self, scene: str) -> None:
        """Switch to the playlist of a scene, fading out any current music."""
        self.scene = scene
        if not self.enabled:
            return

        if pygame.mixer.music.get_busy():
            pygame.mixer.music.fadeout(self.fade_ms)

        self.playlist = self._resolve_playlist(self.scene_playlists.get(scene, ()))
        self.index = 0
        self._play_current(fade_in=True)

    def toggle_sound(self) -> bool:
        """Flip sound on/off; returns the new state."""
        self.sound_on = not self.sound_on
        if not self.enabled:
            return self.sound_on
        if self.sound_on:
            self._play_current(fade_in=True)
        else:
            pygame.mixer.music.fadeout(self.fade_ms)
        return self.sound_on

    def play_cue(self, name: str) -> None:
        if not self.enabled or not self.sound_on:
            return
        cue = self.cues.get(name)
        if cue is not None:
            cue.play()

    def stop(self) -> None:
        if self.enabled and pygame.mixer.music.get_busy():
            pygame.mixer.music.stop()

    def update(self) -> None:
        """Advance the playlist when a track finishes."""
        if not self.enabled or not self.sound_on or not self.playlist:
            return
        if not pygame.mixer.music.get_busy():
            self._advance_and_play()
