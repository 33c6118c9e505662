"""Tests for settings and the game state driven by the main loop."""
import pytest
from blessed.keyboard import Keystroke

from game_of_squares import main as game_main
from game_of_squares.components import Position, PlayerTag, PlaySound
from game_of_squares.config import Settings
from game_of_squares.main import GameState, run

from conftest import FakeTerminal


class RecordingDevices:

    def __init__(self, gamepads=None):
        self.gamepads = gamepads or {}
        self.dispatched = []

    def poll_gamepads(self):
        return dict(self.gamepads)

    def dispatch(self, intents):
        self.dispatched.extend(intents)


def make_game(keys=(), devices=None):
    term = FakeTerminal(keys=keys)
    return GameState(term, Settings(seed=11), devices or RecordingDevices())


def player_pos(game):
    return game.sim.world.single(Position, PlayerTag)[1]


class TestSettings:

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings == Settings()
        assert settings.log_level == 'WARNING'
        assert settings.devices_enabled

    def test_from_env(self):
        settings = Settings.from_env({
            'GAME_OF_SQUARES_SEED': '42',
            'GAME_OF_SQUARES_LOG_LEVEL': 'debug',
            'GAME_OF_SQUARES_LOG_FILE': '/tmp/squares.log',
            'GAME_OF_SQUARES_NO_DEVICES': 'true',
        })
        assert settings.seed == 42
        assert settings.log_level == 'DEBUG'
        assert settings.log_file == '/tmp/squares.log'
        assert not settings.devices_enabled

    @pytest.mark.parametrize('level', ['verbose', 'trace', '10'])
    def test_unknown_log_level_falls_back(self, level):
        settings = Settings.from_env({'GAME_OF_SQUARES_LOG_LEVEL': level})
        assert settings.log_level == 'WARNING'

    def test_blank_log_level_uses_default(self):
        settings = Settings.from_env({'GAME_OF_SQUARES_LOG_LEVEL': '  '})
        assert settings.log_level == 'WARNING'


class TestExitCodes:

    def test_run_returns_zero_on_q(self):
        term = FakeTerminal(keys=[Keystroke('q')])
        assert run(term, Settings(seed=1, devices_enabled=False)) == 0

    def test_main_exits_zero_on_q(self, monkeypatch):
        monkeypatch.setenv('GAME_OF_SQUARES_NO_DEVICES', '1')
        monkeypatch.delenv('GAME_OF_SQUARES_SEED', raising=False)
        monkeypatch.setattr(game_main, 'configure_logging', lambda settings: None)
        monkeypatch.setattr(game_main, 'Terminal', lambda: FakeTerminal(keys=[Keystroke('q')]))

        with pytest.raises(SystemExit) as exc_info:
            game_main.main()
        assert exc_info.value.code == 0

    def test_main_exits_one_on_small_terminal(self, monkeypatch, capsys):
        monkeypatch.setenv('GAME_OF_SQUARES_NO_DEVICES', '1')
        monkeypatch.setattr(game_main, 'configure_logging', lambda settings: None)
        monkeypatch.setattr(game_main, 'Terminal', lambda: FakeTerminal(width=30, height=10))

        with pytest.raises(SystemExit) as exc_info:
            game_main.main()
        assert exc_info.value.code == 1
        assert 'Terminal too small' in capsys.readouterr().out


class TestGameState:

    def test_q_stops_the_loop(self):
        game = make_game(keys=[Keystroke('q'), Keystroke('d')])
        game.handle_input()
        game.update()
        assert not game.running
        assert player_pos(game) == Position(0.0, 0.0)

    def test_held_key_moves_player(self):
        game = make_game(keys=[Keystroke('a')])
        game.handle_input()
        game.update()
        assert game.running
        assert player_pos(game).x < 0.0

    def test_score_text_reaches_renderer(self):
        devices = RecordingDevices()
        game = make_game(devices=devices)
        target = game.sim.target_id()
        game.sim.world.get_component(target, Position).x = 0.0
        game.sim.world.get_component(target, Position).y = 0.0

        game.update()
        assert game.renderer.score_text == '1'
        assert PlaySound() in devices.dispatched

    def test_render_writes_frame(self, capsys):
        game = make_game()
        game.render()
        # Status row is the last of 24; the score label starts at column 71
        assert '<71,23>S' in capsys.readouterr().out

    def test_render_follows_terminal_resize(self, capsys):
        game = make_game()
        game.render()
        game.term.width, game.term.height = 60, 20
        game.render()

        assert (game.renderer.width, game.renderer.height) == (60, 20)
        assert '<51,19>S' in capsys.readouterr().out
