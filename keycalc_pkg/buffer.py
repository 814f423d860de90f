"""Token buffer holding the equation being edited."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from .tokens import Token, TokenKind
from .undo import Snapshot, UndoLog


class TokenBuffer:
    """Ordered, mutable sequence of tokens backed by an undo log.

    Alongside the tokens it keeps the calculated flag (set by a successful
    evaluation, cleared by any mutation) and the last formatted result.

    Each mutating call records a snapshot. Inside ``batch()`` recording is
    deferred until the outermost batch exits, so a keypress that appends
    several tokens is undone in one step.
    """

    def __init__(self, undo_log: UndoLog):
        self.undo_log = undo_log
        self._tokens: list[Token] = []
        self._batch_depth = 0
        self.calculated = False
        self.last_result = ""

    def __len__(self) -> int:
        return len(self._tokens)

    def get(self) -> list[str]:
        """Token texts in order (a copy)."""
        return [token.text for token in self._tokens]

    def tokens(self) -> Snapshot:
        return tuple(self._tokens)

    def is_empty(self) -> bool:
        return not self._tokens

    def _at(self, index: int, correct: bool) -> Token | None:
        if len(self._tokens) < -index:
            return None
        token = self._tokens[index]
        if correct:
            healed = token.healed()
            if healed != token:
                self._tokens[index] = healed
                token = healed
        return token

    def last(self, correct: bool = False) -> Token | None:
        """Last token, or None.

        With ``correct`` a dangling decimal point is removed from the token
        and the fix is written back into the buffer.
        """
        return self._at(-1, correct)

    def penultimate(self, correct: bool = False) -> Token | None:
        return self._at(-2, correct)

    def count(self, kind: TokenKind) -> int:
        return sum(1 for token in self._tokens if token.kind is kind)

    def replace_last(self, value: Token | str) -> None:
        if self._tokens:
            self._tokens[-1] = _as_token(value)
            self.calculated = False
        self._snapshot()

    def append(self, value: Token | str) -> None:
        self._tokens.append(_as_token(value))
        self.calculated = False
        self._snapshot()

    def pop(self) -> Token | None:
        token = None
        if self._tokens:
            token = self._tokens.pop()
            self.calculated = False
        self._snapshot()
        return token

    def splice_left(self, keep: int, value: Token | str) -> None:
        """Keep the last ``keep`` tokens and put ``value`` in front of them."""
        tail = self._tokens[len(self._tokens) - keep :] if keep else []
        self._tokens = [_as_token(value)] + tail
        self.calculated = False
        self._snapshot()

    def clear(self) -> None:
        self._tokens = []
        self.calculated = False
        self._snapshot()

    def install(self, snapshot: Snapshot) -> None:
        """Replace the whole equation, e.g. with an undo snapshot."""
        self._tokens = list(snapshot)
        self.calculated = False
        self._snapshot()

    @contextmanager
    def batch(self) -> Iterator[TokenBuffer]:
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
            self._snapshot()

    def _snapshot(self) -> None:
        if self._batch_depth == 0:
            self.undo_log.record(self.tokens())


def _as_token(value: Token | str) -> Token:
    return value if isinstance(value, Token) else Token.of(value)
