#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
lexitree scanner – converts source text into a stream of tokens.
Permissive by design: unterminated strings and comments run to end of input,
unknown characters are kept or dropped per configuration, nothing raises.
"""

import logging
import string
from enum import IntEnum, auto
from typing import Generator, Iterable, Iterator, List, Optional, Tuple, Union

from lexitree.config import DEFAULT_CONFIG, ScannerConfig
from lexitree.errors import ResourceExhaustedError

logger = logging.getLogger(__name__)


class TokenKind(IntEnum):
    """All token kinds produced by the scanner."""

    KEYWORD = auto()
    IDENTIFIER = auto()
    NUMBER = auto()
    STRING = auto()
    OPERATOR = auto()
    DELIMITER = auto()
    COMMENT = auto()
    WHITESPACE = auto()
    EOF = auto()

    @property
    def display_name(self) -> str:
        return self.name.lower()


class Token:
    """A single token with source location."""

    __slots__ = ("kind", "text", "line", "column", "raw")

    def __init__(
        self,
        kind: TokenKind,
        text: str,
        line: int,
        column: int,
        raw: Optional[str] = None,
    ):
        self.kind = kind
        self.text = text  # token text (string contents without quotes)
        self.line = line  # 1‑based line number
        self.column = column  # 1‑based column of the first character
        self.raw = raw if raw is not None else text  # exact source span

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return (self.kind, self.text, self.line, self.column, self.raw) == (
            other.kind,
            other.text,
            other.line,
            other.column,
            other.raw,
        )

    def __hash__(self):
        return hash((self.kind, self.text, self.line, self.column))

    def __repr__(self):
        return f"Token({self.kind.name}, {self.text!r}, {self.line}:{self.column})"


class TokenStream:
    """Read-only, eof-terminated sequence of tokens produced by one scan."""

    __slots__ = ("_tokens",)

    def __init__(self, tokens: Iterable[Token]):
        self._tokens: Tuple[Token, ...] = tuple(tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def __getitem__(self, index: Union[int, slice]):
        return self._tokens[index]

    def __repr__(self):
        return f"TokenStream({list(self._tokens)!r})"

    @property
    def eof(self) -> Token:
        return self._tokens[-1]

    def of_kind(self, kind: TokenKind) -> List[Token]:
        """Return every token of the given kind, in source order."""
        return [tok for tok in self._tokens if tok.kind == kind]

    def token_at(self, line: int, column: int) -> Optional[Token]:
        """Return the token whose source span covers (line, column)."""
        for tok in self._tokens:
            if tok.line == line and tok.column <= column < tok.column + len(tok.raw):
                return tok
        return None

    def texts(self) -> List[str]:
        """Return the text of every token except the end-of-input marker."""
        return [tok.text for tok in self._tokens if tok.kind != TokenKind.EOF]

    def format(self) -> str:
        """Tabular dump: kind, position and quoted text, one token per line."""
        lines = []
        for tok in self._tokens:
            if tok.kind == TokenKind.EOF:
                continue
            lines.append(
                f'{tok.kind.display_name:<12} [{tok.line}:{tok.column}]   "{tok.text}"'
            )
        return "".join(line + "\n" for line in lines)


class Scanner:
    """Configurable scanner. Produces tokens via the tokenize() generator."""

    # C isspace() set
    WHITESPACE = frozenset(" \t\n\r\v\f")
    DIGITS = frozenset(string.digits)
    IDENT_START = frozenset(string.ascii_letters + "_")
    IDENT_CHARS = frozenset(string.ascii_letters + string.digits + "_")
    QUOTES = frozenset("\"'")

    def __init__(self, source: str, config: Optional[ScannerConfig] = None):
        self.source = source
        self.config = config if config is not None else DEFAULT_CONFIG
        self.pos = 0  # current character index
        self.line = 1  # current line (1‑based)
        self.col = 1  # current column (1‑based)
        self.len = len(source)

        if self.config.case_sensitive:
            self._keywords = frozenset(self.config.keywords)
        else:
            self._keywords = frozenset(kw.lower() for kw in self.config.keywords)
        self._delimiters = frozenset(self.config.delimiters)

    def _current(self) -> Optional[str]:
        """Return the current character or None if at EOF."""
        if self.pos >= self.len:
            return None
        return self.source[self.pos]

    def _advance(self, n: int = 1) -> None:
        """Advance the position by n characters, updating line/col."""
        for _ in range(n):
            if self.pos >= self.len:
                return
            ch = self.source[self.pos]
            self.pos += 1
            if ch == "\n":
                self.line += 1
                self.col = 1
            else:
                self.col += 1

    def _peek(self, offset: int = 1) -> Optional[str]:
        """Look ahead without advancing."""
        peek_pos = self.pos + offset
        if peek_pos >= self.len:
            return None
        return self.source[peek_pos]

    def _is_keyword(self, word: str) -> bool:
        if self.config.case_sensitive:
            return word in self._keywords
        return word.lower() in self._keywords

    def _read_whitespace(self) -> Token:
        """Read a maximal run of whitespace, newlines included."""
        start_line, start_col = self.line, self.col
        start_pos = self.pos
        while (ch := self._current()) is not None and ch in self.WHITESPACE:
            self._advance()
        return Token(
            TokenKind.WHITESPACE, self.source[start_pos : self.pos], start_line, start_col
        )

    def _read_line_comment(self) -> Token:
        """Read from // to the end of the line."""
        start_line, start_col = self.line, self.col
        start_pos = self.pos
        self._advance(2)  # skip the '//'
        while (ch := self._current()) is not None and ch != "\n":
            self._advance()
        # Do NOT advance over the newline – it will be handled by the main loop
        return Token(
            TokenKind.COMMENT, self.source[start_pos : self.pos], start_line, start_col
        )

    def _read_block_comment(self) -> Token:
        """Read a /* ... */ comment; an unterminated one runs to end of input."""
        start_line, start_col = self.line, self.col
        start_pos = self.pos
        self._advance(2)  # skip '/*'
        while True:
            ch = self._current()
            if ch is None:
                logger.debug(
                    "unterminated block comment at %d:%d", start_line, start_col
                )
                break
            if ch == "*" and self._peek() == "/":
                self._advance(2)
                break
            self._advance()
        return Token(
            TokenKind.COMMENT, self.source[start_pos : self.pos], start_line, start_col
        )

    def _read_number(self) -> Token:
        """Read digits and dots greedily; '1.2.3' is a single token."""
        start_line, start_col = self.line, self.col
        start_pos = self.pos
        while (ch := self._current()) is not None and (ch in self.DIGITS or ch == "."):
            self._advance()
        return Token(
            TokenKind.NUMBER, self.source[start_pos : self.pos], start_line, start_col
        )

    def _read_identifier_or_keyword(self) -> Token:
        """Read an identifier (or keyword if it matches)."""
        start_line, start_col = self.line, self.col
        start_pos = self.pos
        while (ch := self._current()) is not None and ch in self.IDENT_CHARS:
            self._advance()
        value = self.source[start_pos : self.pos]
        kind = TokenKind.KEYWORD if self._is_keyword(value) else TokenKind.IDENTIFIER
        return Token(kind, value, start_line, start_col)

    def _read_string(self, quote_char: str) -> Token:
        """Read a quoted string. Escapes are copied raw, not decoded."""
        start_line, start_col = self.line, self.col
        start_pos = self.pos
        self._advance()  # skip opening quote

        content = []
        while True:
            ch = self._current()
            if ch is None:
                logger.debug("unterminated string at %d:%d", start_line, start_col)
                break
            if ch == quote_char:
                self._advance()  # skip closing quote
                break
            if ch == "\\" and self._peek() is not None:
                content.append(ch)
                self._advance()
                ch = self._current()
            content.append(ch)
            self._advance()

        raw = self.source[start_pos : self.pos]
        return Token(TokenKind.STRING, "".join(content), start_line, start_col, raw=raw)

    def _read_operator(self) -> Optional[Token]:
        """Read an operator (longest match first)."""
        start_line, start_col = self.line, self.col
        for op in self.config.operators:
            if self.source.startswith(op, self.pos):
                self._advance(len(op))
                return Token(TokenKind.OPERATOR, op, start_line, start_col)
        return None

    def _read_delimiter(self) -> Optional[Token]:
        """Read a single‑character delimiter."""
        ch = self._current()
        if ch in self._delimiters:
            start_line, start_col = self.line, self.col
            self._advance()
            return Token(TokenKind.DELIMITER, ch, start_line, start_col)
        return None

    def tokenize(self) -> Generator[Token, None, None]:
        """Main scanner entry point: yields tokens until EOF."""
        config = self.config
        while True:
            ch = self._current()
            if ch is None:
                break

            if ch in self.WHITESPACE:
                token = self._read_whitespace()
                if config.include_whitespace:
                    yield token
                continue

            if ch == "/":
                next_ch = self._peek()
                if next_ch == "/":
                    token = self._read_line_comment()
                    if config.include_comments:
                        yield token
                    continue
                elif next_ch == "*":
                    token = self._read_block_comment()
                    if config.include_comments:
                        yield token
                    continue

            if ch in self.DIGITS:
                yield self._read_number()
                continue

            if ch in self.IDENT_START:
                yield self._read_identifier_or_keyword()
                continue

            if ch in self.QUOTES:
                yield self._read_string(ch)
                continue

            op_token = self._read_operator()
            if op_token is not None:
                yield op_token
                continue

            delim_token = self._read_delimiter()
            if delim_token is not None:
                yield delim_token
                continue

            # Unknown character
            start_line, start_col = self.line, self.col
            self._advance()
            if config.skip_unknown:
                logger.debug(
                    "skipping unknown character %r at %d:%d", ch, start_line, start_col
                )
                continue
            yield Token(TokenKind.IDENTIFIER, ch, start_line, start_col)

        # End of file
        yield Token(TokenKind.EOF, "", self.line, self.col)

    def scan(self) -> TokenStream:
        """Scan the whole source and return the finished token stream."""
        try:
            stream = TokenStream(self.tokenize())
        except MemoryError as exc:
            raise ResourceExhaustedError(
                f"out of memory while scanning {self.len} characters",
                self.line,
                self.col,
            ) from exc
        logger.debug(
            "scanned %d characters into %d tokens", self.len, len(stream)
        )
        return stream


def scan(source: str, config: Optional[ScannerConfig] = None) -> TokenStream:
    """Scan source with the given (or default) configuration."""
    return Scanner(source, config).scan()
