# Copyright 2026 TinyScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for TINY source text.

Converts raw source text into a sequence of classified tokens. Scanning is
fail-fast: the first malformed lexeme aborts the whole scan with a ScanError.
"""

import enum
from dataclasses import dataclass
from types import MappingProxyType

# ###############
# Public Interface
# ###############


class TokenKind(enum.Enum):
    """All token kinds produced by the TINY scanner."""

    # Literals and names
    NUMBER = "NUMBER"
    IDENTIFIER = "IDENTIFIER"

    # Operators
    ASSIGN = "ASSIGN"
    SEMICOLON = "SEMICOLON"
    LESSTHAN = "LESSTHAN"
    EQUAL = "EQUAL"
    PLUS = "PLUS"
    MINUS = "MINUS"
    MULT = "MULT"
    DIV = "DIV"
    OPENBRACKET = "OPENBRACKET"
    CLOSEDBRACKET = "CLOSEDBRACKET"

    # Reserved words
    IF = "IF"
    THEN = "THEN"
    ELSE = "ELSE"
    END = "END"
    REPEAT = "REPEAT"
    UNTIL = "UNTIL"
    READ = "READ"
    WRITE = "WRITE"


@dataclass(frozen=True)
class Token:
    """A classified lexeme.

    Attributes:
        kind: The kind of token.
        value: The exact text of the lexeme as it appeared in the source.
        position: Zero-based offset of the lexeme's first character.
    """

    kind: TokenKind
    value: str
    position: int


class ScanErrorKind(enum.Enum):
    """The closed set of lexical failures."""

    INVALID_CHARACTER = "invalid character"
    INVALID_ASSIGNMENT = "invalid assignment operator"
    UNCLOSED_COMMENT = "unclosed comment"
    INVALID_TOKEN = "invalid token"


class ScanError(Exception):
    """Raised when the scanner meets malformed input.

    Attributes:
        kind: Which lexical rule was violated.
        position: Zero-based offset of the offending character or lexeme start.
        message: Human-readable description without the position prefix.
    """

    def __init__(self, kind: ScanErrorKind, message: str, position: int) -> None:
        super().__init__(f"Position {position}: {message}")
        self.kind = kind
        self.message = message
        self.position = position


RESERVED_WORDS: tuple[str, ...] = ("if", "then", "else", "end", "repeat", "until", "read", "write")

# '>' is intentionally not a symbol: a bare '>' is an invalid character.
SYMBOLS: MappingProxyType[str, TokenKind] = MappingProxyType(
    {
        ";": TokenKind.SEMICOLON,
        "<": TokenKind.LESSTHAN,
        "=": TokenKind.EQUAL,
        "+": TokenKind.PLUS,
        "-": TokenKind.MINUS,
        "*": TokenKind.MULT,
        "/": TokenKind.DIV,
        "(": TokenKind.OPENBRACKET,
        ")": TokenKind.CLOSEDBRACKET,
    }
)


def tokenize(source: str) -> list[Token]:
    """Tokenize TINY source text into a sequence of tokens.

    Comments and whitespace are consumed and not included in the output.

    Args:
        source: The complete source text.

    Returns:
        The tokens in source order.

    Raises:
        ScanError: On the first invalid character, malformed assignment,
            unclosed comment, or unclassifiable lexeme.
    """
    result = _Scanner(source).run()
    if isinstance(result, ScanError):
        raise result
    return result


def line_and_column(source: str, position: int) -> tuple[int, int]:
    """Translate a zero-based offset into a 1-based (line, column) pair."""
    position = max(0, min(position, len(source)))
    line = source.count("\n", 0, position) + 1
    column = position - (source.rfind("\n", 0, position) + 1) + 1
    return line, column


# ################
# Implementation
# ################

_RESERVED_KINDS: MappingProxyType[str, TokenKind] = MappingProxyType(
    {word: TokenKind[word.upper()] for word in RESERVED_WORDS}
)

_WHITESPACE = frozenset(" \t\r\n")
_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
_DIGITS = frozenset("0123456789")


def _is_letter(ch: str) -> bool:
    return ch in _LETTERS


def _is_digit(ch: str) -> bool:
    return ch in _DIGITS


def _is_identifier(lexeme: str) -> bool:
    return bool(lexeme) and all(_is_letter(ch) for ch in lexeme)


def _is_number(lexeme: str) -> bool:
    return bool(lexeme) and all(_is_digit(ch) for ch in lexeme)


def classify(lexeme: str, position: int) -> Token | ScanError | None:
    """Classify a finished lexeme.

    Returns the token, ``None`` for a comment, or the ScanError describing why
    the lexeme is not a valid token. Never raises.
    """
    if _is_number(lexeme):
        return Token(TokenKind.NUMBER, lexeme, position)
    if len(lexeme) == 1 and lexeme in SYMBOLS:
        return Token(SYMBOLS[lexeme], lexeme, position)
    if lexeme == ":=":
        return Token(TokenKind.ASSIGN, lexeme, position)
    if lexeme.startswith("{"):
        if len(lexeme) > 1 and lexeme.endswith("}"):
            return None
        return ScanError(ScanErrorKind.UNCLOSED_COMMENT, "Unclosed comment", position)
    if lexeme in _RESERVED_KINDS:
        return Token(_RESERVED_KINDS[lexeme], lexeme, position)
    if _is_identifier(lexeme):
        return Token(TokenKind.IDENTIFIER, lexeme, position)
    return ScanError(ScanErrorKind.INVALID_TOKEN, f"Invalid token {lexeme!r}", position)


class _State(enum.Enum):
    START = enum.auto()
    IDENTIFIER = enum.auto()
    NUMBER = enum.auto()
    ASSIGN_PENDING = enum.auto()
    COMMENT = enum.auto()


class _Cursor:
    """Forward cursor over the source with a one-character put-back."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0

    @property
    def position(self) -> int:
        """Offset of the character that ``advance`` would return next."""
        return self._pos

    def at_end(self) -> bool:
        return self._pos >= len(self._source)

    def advance(self) -> str:
        """Consume and return the current character."""
        ch = self._source[self._pos]
        self._pos += 1
        return ch

    def retreat(self) -> None:
        """Put the last consumed character back so it is read again."""
        if self._pos == 0:
            raise RuntimeError("cannot retreat before the start of input")
        self._pos -= 1


class _Scanner:
    """Internal scanner state machine."""

    def __init__(self, source: str) -> None:
        self._cursor = _Cursor(source)
        self._state = _State.START
        self._lexeme: list[str] = []
        self._lexeme_start = 0
        self._tokens: list[Token] = []

    def run(self) -> list[Token] | ScanError:
        """Scan the whole source, returning the tokens or the first error."""
        while not self._cursor.at_end():
            position = self._cursor.position
            ch = self._cursor.advance()

            if ch in SYMBOLS and self._state not in (_State.ASSIGN_PENDING, _State.COMMENT):
                error = self._finish_lexeme()
                if error is not None:
                    return error
                self._tokens.append(Token(SYMBOLS[ch], ch, position))
                continue

            error = self._step(ch, position)
            if error is not None:
                return error

        if self._state is _State.COMMENT:
            return ScanError(
                ScanErrorKind.UNCLOSED_COMMENT,
                "Unclosed comment at end of input",
                self._lexeme_start,
            )
        error = self._finish_lexeme()
        if error is not None:
            return error
        return self._tokens

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    def _step(self, ch: str, position: int) -> ScanError | None:
        """Feed one character to the current state."""
        if self._state is _State.START:
            return self._step_start(ch, position)

        if self._state is _State.IDENTIFIER:
            if _is_letter(ch):
                self._lexeme.append(ch)
                return None
            return self._finish_and_reprocess()

        if self._state is _State.NUMBER:
            if _is_digit(ch):
                self._lexeme.append(ch)
                return None
            return self._finish_and_reprocess()

        if self._state is _State.ASSIGN_PENDING:
            if ch != "=":
                return ScanError(
                    ScanErrorKind.INVALID_ASSIGNMENT,
                    "Invalid assignment operator, expected ':='",
                    self._lexeme_start,
                )
            self._lexeme.append(ch)
            return self._finish_lexeme()

        # COMMENT
        self._lexeme.append(ch)
        if ch == "}":
            return self._finish_lexeme()
        return None

    def _step_start(self, ch: str, position: int) -> ScanError | None:
        if ch in _WHITESPACE:
            return None
        if _is_letter(ch):
            self._begin(_State.IDENTIFIER, ch, position)
        elif _is_digit(ch):
            self._begin(_State.NUMBER, ch, position)
        elif ch == ":":
            self._begin(_State.ASSIGN_PENDING, ch, position)
        elif ch == "{":
            self._begin(_State.COMMENT, ch, position)
        else:
            return ScanError(ScanErrorKind.INVALID_CHARACTER, f"Invalid character {ch!r}", position)
        return None

    def _begin(self, state: _State, ch: str, position: int) -> None:
        self._state = state
        self._lexeme = [ch]
        self._lexeme_start = position

    def _finish_and_reprocess(self) -> ScanError | None:
        """Close the pending lexeme and hand the current character back to START."""
        error = self._finish_lexeme()
        if error is None:
            self._cursor.retreat()
        return error

    def _finish_lexeme(self) -> ScanError | None:
        """Classify the pending lexeme, if any, and reset to START."""
        lexeme = "".join(self._lexeme)
        self._lexeme = []
        self._state = _State.START
        if not lexeme:
            return None
        result = classify(lexeme, self._lexeme_start)
        if isinstance(result, ScanError):
            return result
        if result is not None:
            self._tokens.append(result)
        return None
