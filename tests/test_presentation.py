import pytest

pygame = pytest.importorskip("pygame")

from config_parsing import parse_game_config  # noqa: E402
from game import FINISH_FADE_MS, Game  # noqa: E402
from models import GameSnapshot, KeyCells  # noqa: E402
from music_controller import MAZE_SCENE, REWARD_SCENE  # noqa: E402
from rendering import RewardScene, Toast, draw_cells  # noqa: E402
from viewport import Viewport, cell_center, cell_rect, fit_grid  # noqa: E402

from conftest import shortest_path  # noqa: E402


@pytest.fixture
def game(tmp_path):
    cfg = {
        "log_level": "DEBUG",
        "window": {"width": 640, "height": 480},
        "maze": {"width": 21, "height": 15, "rewall_attempts": 0, "seed": 3},
        "music": {"dir": str(tmp_path / "music"), "maze_playlist": ["missing.ogg"]},
        "reward": {"reveal_ms": [0, 100]},
    }
    g = Game(parse_game_config(cfg))
    yield g
    g.music_controller.stop()
    pygame.quit()


def test_fit_grid_centers_and_respects_margin():
    vp = fit_grid(1000, 760, 41, 29, top_margin=40)
    assert vp.cell_size == 24
    assert (vp.offset_x, vp.offset_y) == (8, 52)
    assert cell_rect(1, 1, vp) == pygame.Rect(32, 76, 24, 24)
    assert cell_center(0.5, 0, vp) == (32, 64)


def test_toast_expires():
    toast = Toast("hi", remaining_ms=200)
    assert toast.tick(0.1)
    assert not toast.tick(0.1)


def test_reward_reveal_timing():
    scene = RewardScene(reveal_ms=(2500, 5000))
    scene.tick(2.5)
    assert scene.title_visible
    assert not scene.message_visible
    scene.tick(2.5)
    assert scene.message_visible


def test_game_renders_maze_scene(game):
    assert game.scene == MAZE_SCENE
    assert game.session.games_started == 1
    game.render()
    game.update(0.016)
    game.render()


def test_play_to_reward_and_restart(game):
    session = game.session
    keys = session.key_cells
    step = session.movement_cfg.move_duration
    for d in shortest_path(session.grid, keys.start, keys.candy):
        session.request_move(d)
        game.update(step)
    assert session.player.has_candy
    assert game.toast is not None

    for d in shortest_path(session.grid, keys.candy, keys.exit):
        session.request_move(d)
        game.update(step)
    assert session.player.finished
    assert game.scene == MAZE_SCENE

    game.update(FINISH_FADE_MS / 1000.0)
    assert game.scene == REWARD_SCENE
    game.update(0.2)
    assert game.reward_scene.message_visible
    game.render()

    assert game._handle_keydown(pygame.K_r)
    assert game.scene == MAZE_SCENE
    assert game.reward_scene is None
    assert session.games_started == 2
    assert session.player.cell == session.key_cells.start
    game.render()


def test_arrow_keys_move_and_escape_quits(game):
    start = game.session.player.cell
    for key in (pygame.K_UP, pygame.K_RIGHT):
        game._handle_keydown(key)
        if game.session.movement.moving:
            break
    assert game.session.player.cell != start
    assert not game._handle_keydown(pygame.K_ESCAPE)


def test_cells_painted_with_wall_and_passage_colors(serpentine_grid):
    keys = KeyCells(start=(1, 7), exit=(7, 7), candy=(2, 3))
    snap = GameSnapshot(
        rows=tuple(serpentine_grid.rows()),
        width=9,
        height=9,
        key_cells=keys,
        player_cell=(1, 7),
        render_pos=(1.0, 7.0),
        has_candy=False,
        finished=False,
        state="awaiting_candy",
    )
    surf = pygame.Surface((90, 90))
    surf.fill((255, 255, 255))
    draw_cells(surf, snap, Viewport(cell_size=10, offset_x=0, offset_y=0), (0, 0, 0), (10, 200, 30))
    assert tuple(surf.get_at((15, 15)))[:3] == (10, 200, 30)
    assert tuple(surf.get_at((5, 5)))[:3] == (0, 0, 0)
    assert tuple(surf.get_at((15, 25)))[:3] == (0, 0, 0)
