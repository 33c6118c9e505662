"""Tests for the terminal renderer."""
from game_of_squares.components import Position
from game_of_squares.config import ANSI_COLORS
from game_of_squares.engine import BLOCK, DoubleBuffer, GameRenderer
from game_of_squares.simulation import create_simulation

from conftest import FakeTerminal


def row_text(buffer, y):
    return ''.join(cell.char for cell in buffer.front[y])


class TestDoubleBuffer:

    def test_only_changed_cells_are_emitted(self, term):
        buffer = DoubleBuffer(term)
        buffer.put_string(2, 1, 'hi', 9)
        assert buffer.present() == '<2,1>hi'

        buffer.clear_back()
        buffer.put_string(2, 1, 'hi', 9)
        assert buffer.present() == ''

    def test_color_change_starts_a_new_run(self, term):
        buffer = DoubleBuffer(term)
        buffer.put_string(0, 0, 'ab', 9)
        buffer.put(2, 0, 'c', 10)
        assert buffer.present() == '<0,0>ab<2,0>c'

    def test_unchanged_cell_splits_a_run(self, term):
        buffer = DoubleBuffer(term)
        buffer.put_string(0, 0, 'abc', 9)
        buffer.present()

        buffer.clear_back()
        buffer.put_string(0, 0, 'xbz', 9)
        assert buffer.present() == '<0,0>x<2,0>z'

    def test_cleared_cells_are_blanked(self, term):
        buffer = DoubleBuffer(term)
        buffer.put(5, 5, 'x')
        buffer.present()

        buffer.clear_back()
        assert buffer.present() == '<5,5> '

    def test_out_of_range_put_is_ignored(self, term):
        buffer = DoubleBuffer(term)
        buffer.put(-1, 0, 'x')
        buffer.put(0, term.height, 'x')
        assert buffer.present() == ''


class TestGameRenderer:

    def test_world_to_cell(self, term):
        renderer = GameRenderer(term)
        assert renderer.world_to_cell(0.0, 0.0) == (40, 12)
        assert renderer.world_to_cell(-320.0, 320.0) == (0, 0)
        assert renderer.world_to_cell(320.0, -320.0) == (79, 23)

    def test_status_bar_shows_help_and_score(self, term):
        renderer = GameRenderer(term)
        renderer.score_text = '5'
        renderer.render(create_simulation(seed=3).world)

        bottom = row_text(renderer.buffer, term.height - 1)
        assert bottom.startswith(' Controls: WSAD, Arrows.')
        assert bottom.rstrip().endswith('Score: 5')

    def test_player_is_drawn_in_its_color(self, term):
        renderer = GameRenderer(term)
        sim = create_simulation(seed=3)
        renderer.render(sim.world)

        col, row = renderer.world_to_cell(0.0, 0.0)
        cell = renderer.buffer.front[row][col]
        assert cell.char == BLOCK
        assert cell.fg == ANSI_COLORS['green']

    def test_boxes_stay_out_of_status_bar(self):
        term = FakeTerminal(width=40, height=12)
        renderer = GameRenderer(term)
        sim = create_simulation(seed=3)
        pos = sim.world.get_component(sim.player_id(), Position)
        pos.x, pos.y = 0.0, -273.0
        renderer.render(sim.world)

        assert BLOCK not in row_text(renderer.buffer, term.height - 1)

    def test_narrow_terminal_truncates_help(self):
        term = FakeTerminal(width=20, height=12)
        renderer = GameRenderer(term)
        renderer.render(create_simulation(seed=3).world)
        assert row_text(renderer.buffer, term.height - 1).rstrip().endswith('Score: 0')
