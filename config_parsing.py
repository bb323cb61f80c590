from __future__ import annotations

from typing import Any, Dict, Tuple

from models import (
    GameConfig,
    MazeConfig,
    MovementConfig,
    MusicConfig,
    PlacementConfig,
    RenderConfig,
    RewardConfig,
)
from utils import as_color, clamp_int, deep_get

DEFAULT_REWARD_MESSAGE = (
    "You found the way through.\n\n"
    "Every twist of the maze led here. Thank you for playing."
)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _section(cfg: Dict[str, Any], key: str) -> Dict[str, Any]:
    raw = cfg.get(key, {})
    return raw if isinstance(raw, dict) else {}


def _str_list(raw: Any) -> Tuple[str, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(str(item) for item in raw if isinstance(item, str))


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _clean_text(value: Any, default: str) -> str:
    if isinstance(value, str):
        txt = value.strip()
        return txt if txt else default
    return default


def parse_maze_config(cfg: Dict[str, Any]) -> MazeConfig:
    """Parse the maze section, falling back to defaults on bad values."""
    try:
        return MazeConfig.from_dict(_section(cfg, "maze"))
    except (TypeError, ValueError):
        return MazeConfig.from_dict({})


def parse_placement_config(cfg: Dict[str, Any]) -> PlacementConfig:
    """Parse placement thresholds and monster decoration settings."""
    try:
        return PlacementConfig.from_dict(_section(cfg, "placement"))
    except (TypeError, ValueError):
        return PlacementConfig.from_dict({})


def parse_movement_config(cfg: Dict[str, Any]) -> MovementConfig:
    raw = _section(cfg, "movement")
    try:
        move_ms = clamp_int(int(raw.get("move_ms", 120)), 0, 2000)
        repeat_ms = clamp_int(int(raw.get("key_repeat_ms", 110)), 10, 2000)
    except (TypeError, ValueError):
        return MovementConfig()
    return MovementConfig(move_ms=move_ms, key_repeat_ms=repeat_ms)


def parse_render_config(cfg: Dict[str, Any]) -> RenderConfig:
    return RenderConfig(
        bg=as_color(deep_get(cfg, "window.bg", [255, 255, 255]), (255, 255, 255)),
        wall=as_color(deep_get(cfg, "render.wall", [0, 0, 0]), (0, 0, 0)),
        passage=as_color(deep_get(cfg, "render.passage", [255, 255, 255]), (255, 255, 255)),
        badge=as_color(deep_get(cfg, "render.badge", [255, 255, 255]), (255, 255, 255)),
        text=as_color(deep_get(cfg, "render.text", [0, 0, 0]), (0, 0, 0)),
        glow=as_color(deep_get(cfg, "render.glow", [255, 79, 184]), (255, 79, 184)),
        toast_ms=max(200, _as_int(deep_get(cfg, "render.toast_ms", 1400), 1400)),
    )


def parse_reward_config(cfg: Dict[str, Any]) -> RewardConfig:
    raw = _section(cfg, "reward")
    reveal_raw = raw.get("reveal_ms", [2500, 5000])
    if isinstance(reveal_raw, list) and len(reveal_raw) >= 2:
        try:
            reveal = (max(0, int(reveal_raw[0])), max(0, int(reveal_raw[1])))
        except (TypeError, ValueError):
            reveal = (2500, 5000)
    else:
        reveal = (2500, 5000)
    return RewardConfig(
        title=_clean_text(raw.get("title"), "You made it!"),
        message=_clean_text(raw.get("message"), DEFAULT_REWARD_MESSAGE),
        reveal_ms=reveal,
        restart_hint=_clean_text(raw.get("restart_hint"), "Press R to play again"),
    )


def parse_music_config(cfg: Dict[str, Any]) -> MusicConfig:
    raw = _section(cfg, "music")
    cues_raw = raw.get("cues", {})
    cues = (
        {str(k): str(v) for k, v in cues_raw.items() if isinstance(v, str)}
        if isinstance(cues_raw, dict)
        else {}
    )
    return MusicConfig(
        music_dir=str(raw.get("dir", "music")),
        fade_ms=max(0, _as_int(raw.get("fade_ms", 800), 800)),
        maze_playlist=_str_list(raw.get("maze_playlist")),
        reward_playlist=_str_list(raw.get("reward_playlist")),
        cues=cues,
    )


def parse_log_level(cfg: Dict[str, Any]) -> str:
    level = cfg.get("log_level", "INFO")
    if isinstance(level, str) and level.upper() in LOG_LEVELS:
        return level.upper()
    return "INFO"


def parse_game_config(cfg: Dict[str, Any]) -> GameConfig:
    """Parse a whole config dict into a GameConfig with defaults applied.

    Args:
        cfg: Raw config (usually loaded from config.json).

    Returns:
        GameConfig; unknown keys are ignored.
    """
    if not isinstance(cfg, dict):
        cfg = {}
    width = clamp_int(_as_int(deep_get(cfg, "window.width", 1000), 1000), 320, 7680)
    height = clamp_int(_as_int(deep_get(cfg, "window.height", 760), 760), 240, 4320)
    return GameConfig(
        maze=parse_maze_config(cfg),
        placement=parse_placement_config(cfg),
        movement=parse_movement_config(cfg),
        render=parse_render_config(cfg),
        reward=parse_reward_config(cfg),
        music=parse_music_config(cfg),
        window_size=(width, height),
        title=str(deep_get(cfg, "window.title", "Candy Maze")),
        fullscreen=bool(deep_get(cfg, "window.fullscreen", False)),
        log_level=parse_log_level(cfg),
    )
