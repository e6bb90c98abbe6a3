# -*- encoding: utf-8 -*-
# @File   : tokenizer.py
# @Time   : 2024/11/03 10:47:58
# @Author : Kariko Lin

"""Lexer of session settings text.

Reads one character at a time with one character of lookahead,
and emits `ID`, `VALUE` or `SECTION` tokens:

    [SESSION]          ->  SECTION 'SESSION'
    BeginString=FIX.4.2 -> ID 'BeginString', VALUE 'FIX.4.2'
    # comment          ->  (nothing)

Keys are NOT trimmed (`Key =v` gives ID `'Key '`), values are.
An unexpected character (a stray `]` for example) ends the input,
just like the real end of stream does. A leading byte order mark
is skipped.
"""

from io import TextIOBase
from typing import Iterator, NamedTuple

from ..errors import ConfigError
from .consts import BOM, LABEL_STOPS, NEWLINE, TokenType


class Token(NamedTuple):
    type: TokenType
    value: str

    def __str__(self) -> str:
        return f'{self.type.name}: {self.value}'


class Tokenizer:
    def __init__(self, stream: TextIOBase) -> None:
        self._stream = stream
        # None is end of stream, never a character.
        self._ch: str | None = None
        self._primed = False

    def _next(self) -> None:
        c = self._stream.read(1)
        self._ch = c if c else None

    @staticmethod
    def is_label_char(ch: str | None) -> bool:
        return ch is not None and ch not in LABEL_STOPS

    @staticmethod
    def is_value_char(ch: str | None) -> bool:
        return ch is not None and ch not in NEWLINE

    def _skip_whitespace(self) -> None:
        while self._ch is not None and self._ch.isspace():
            self._next()

    def next_token(self) -> Token | None:
        """Get the next token, or `None` when there is nothing more."""
        if not self._primed:
            self._next()
            if self._ch == BOM:
                self._next()
            self._primed = True

        # `[` opened before the token, `[[a]]` is still SECTION 'a'.
        opened = 0
        while True:
            self._skip_whitespace()
            if self.is_label_char(self._ch):
                buf = []
                while self.is_label_char(self._ch):
                    buf.append(self._ch)
                    self._next()
                token = Token(TokenType.ID, ''.join(buf))
                break

            match self._ch:
                case '=':
                    self._next()
                    buf = []
                    while self.is_value_char(self._ch):
                        buf.append(self._ch)
                        self._next()
                    token = Token(TokenType.VALUE, ''.join(buf).strip())
                    break
                case '[':
                    self._next()
                    opened += 1
                case '#':
                    while self.is_value_char(self._ch):
                        self._next()
                case _:
                    if opened:
                        raise ConfigError('malformed section header')
                    return None

        if not opened:
            return token
        for _ in range(opened):
            self._next()  # closing `]`, not checked.
        return Token(TokenType.SECTION, token.value)

    def __iter__(self) -> Iterator[Token]:
        while (token := self.next_token()) is not None:
            yield token
