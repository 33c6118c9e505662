"""Exceptions raised by the simulation core."""


class GameError(RuntimeError):
    """Base class for game errors."""


class InvariantError(GameError):
    """The world no longer holds exactly one player and at most one target.

    The simulation cannot continue from this state.
    """


class SpawnExhaustedError(GameError):
    """A capped rejection-sampling loop ran out of attempts."""

    def __init__(self, what: str, attempts: int):
        super().__init__(f'no valid {what} after {attempts} attempts')
        self.what = what
        self.attempts = attempts
