from __future__ import annotations

from falling_blocks.game import Command, GameSession


class FixedChoice:
    """Stands in for random.Random and always draws the same piece letter."""

    def __init__(self, letter: str) -> None:
        self.letter = letter

    def choice(self, seq):
        assert self.letter in seq
        return self.letter


class SequenceChoice:
    def __init__(self, letters: str) -> None:
        self.letters = list(letters)
        self.index = 0

    def choice(self, seq):
        letter = self.letters[self.index % len(self.letters)]
        self.index += 1
        return letter


def drop_until_locked(session: GameSession) -> None:
    before = session.pieces_locked
    while session.pieces_locked == before and session.running:
        session.on_input(Command.SOFT_DROP)


def steer_to_column(session: GameSession, target_x: int) -> None:
    """Move the active piece until its matrix origin sits at `target_x`."""
    while session.controller.x < target_x:
        session.on_input(Command.MOVE_RIGHT)
    while session.controller.x > target_x:
        session.on_input(Command.MOVE_LEFT)
