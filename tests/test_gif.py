from PIL import Image

from blockfall.config import GameConfig
from blockfall.game.tetris import TetrisGame
from blockfall.gif import FrameRenderer, record_frames, record_gif


def test_frame_size_follows_board_geometry():
    config = GameConfig(cols=8, rows=16, cell_size=10)
    renderer = FrameRenderer(config)
    image = renderer.render(TetrisGame(config).snapshot())
    assert image.size == (8 * 10 + 140, 16 * 10)


def test_active_piece_is_drawn_in_its_palette_color():
    config = GameConfig(cell_size=10, seed=1)
    game = TetrisGame(config)
    snapshot = game.snapshot()
    row, col = next(iter(snapshot.piece.cells()))
    image = FrameRenderer(config).render(snapshot)
    expected = FrameRenderer(config).colors[snapshot.piece.color]
    # Sample the middle of the cell, away from the shading lines.
    assert image.getpixel((col * 10 + 5, row * 10 + 5)) == expected


def test_record_frames_is_deterministic():
    config = GameConfig(cell_size=8)
    a = record_frames(config, max_frames=40, seed=5)
    b = record_frames(config, max_frames=40, seed=5)
    assert len(a) == len(b) >= 40
    assert list(a[-1].getdata()) == list(b[-1].getdata())


def test_record_gif_writes_an_animated_gif(tmp_path):
    out = record_gif(GameConfig(cell_size=8), tmp_path / "demo" / "out.gif", max_frames=20, seed=2)
    assert out.exists()
    with Image.open(out) as gif:
        assert gif.format == "GIF"
        assert gif.n_frames > 1
