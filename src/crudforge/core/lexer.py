"""
Lexer/Tokenizer for the Prisma schema language.

Converts raw schema text into a stream of tokens with source location
tracking. Documentation comments (``///``) are kept as tokens so the parser
can attach them to the following declaration; ordinary ``//`` comments are
dropped.
"""

import re
from dataclasses import dataclass
from enum import Enum

from .errors import extract_snippet, make_parse_error

_NUMBER = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")
_ASCII_DIGITS = "0123456789"


class TokenType(Enum):
    """Token types in the schema language."""

    # Literals
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"

    # Punctuation
    LBRACE = "{"
    RBRACE = "}"
    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"
    COMMA = ","
    COLON = ":"
    EQUALS = "="
    QUESTION = "?"
    DOT = "."
    AT = "@"
    AT_AT = "@@"

    # Structure
    DOC_COMMENT = "DOC_COMMENT"
    NEWLINE = "NEWLINE"
    EOF = "EOF"


_PUNCTUATION = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
    "=": TokenType.EQUALS,
    "?": TokenType.QUESTION,
    ".": TokenType.DOT,
}


@dataclass
class Token:
    """
    A single token in the schema.

    Attributes:
        type: Type of token
        value: String value of the token
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    type: TokenType
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r}, {self.line}:{self.column})"


class Lexer:
    """
    Lexer for Prisma schema text.

    Whitespace is insignificant apart from newlines, which are emitted as
    NEWLINE tokens (collapsed, never two in a row).
    """

    def __init__(self, text: str, file: str = "<schema>"):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
            file: Source label (for error reporting)
        """
        self.text = text
        self.file = file
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self) -> None:
        """Move to next character, updating line/column."""
        if self.pos < len(self.text):
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def skip_whitespace(self) -> None:
        """Skip whitespace characters other than newlines."""
        while self.current_char() in (" ", "\t", "\r", "\ufeff"):
            self.advance()

    def read_to_line_end(self) -> str:
        """Consume and return everything up to (not including) the newline."""
        chars = []
        while self.current_char() is not None and self.current_char() != "\n":
            chars.append(self.current_char())
            self.advance()
        return "".join(chars).rstrip("\r")

    def read_string(self) -> str:
        """Read a double-quoted string."""
        start_line = self.line
        start_col = self.column
        self.advance()  # skip opening quote

        chars = []
        while True:
            current = self.current_char()
            if current is None or current == '"' or current == "\n":
                break

            if current == "\\":
                self.advance()
                escape_char = self.current_char()
                if escape_char == "n":
                    chars.append("\n")
                elif escape_char == "t":
                    chars.append("\t")
                elif escape_char is not None:
                    chars.append(escape_char)
                self.advance()
            else:
                chars.append(current)
                self.advance()

        if self.current_char() != '"':
            raise make_parse_error(
                "Unterminated string literal",
                self.file,
                start_line,
                start_col,
                extract_snippet(self.text, start_line),
            )

        self.advance()  # skip closing quote
        return "".join(chars)

    def read_number(self) -> str:
        """Read an ASCII integer or decimal number, with optional leading minus."""
        match = _NUMBER.match(self.text, self.pos)
        value = match.group(0) if match else ""
        for _ in value:
            self.advance()
        return value

    def read_identifier(self) -> str:
        """Read an identifier or keyword."""
        chars = []
        current = self.current_char()
        while current is not None and (current.isalnum() or current == "_"):
            chars.append(current)
            self.advance()
            current = self.current_char()
        return "".join(chars)

    def _emit(self, token_type: TokenType, value: str, line: int, column: int) -> None:
        if token_type == TokenType.NEWLINE and (
            not self.tokens or self.tokens[-1].type == TokenType.NEWLINE
        ):
            return
        self.tokens.append(Token(token_type, value, line, column))

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source text.

        Returns:
            List of tokens ending with EOF

        Raises:
            SchemaParseError: If an unexpected character is encountered
        """
        while True:
            self.skip_whitespace()

            ch = self.current_char()
            if ch is None:
                break

            token_line = self.line
            token_col = self.column

            if ch == "\n":
                self._emit(TokenType.NEWLINE, "\\n", token_line, token_col)
                self.advance()

            elif ch == "/" and self.peek_char() == "/":
                if self.peek_char(2) == "/":
                    self.advance()
                    self.advance()
                    self.advance()
                    text = self.read_to_line_end()
                    if text.startswith(" "):
                        text = text[1:]
                    self.tokens.append(Token(TokenType.DOC_COMMENT, text, token_line, token_col))
                else:
                    self.read_to_line_end()

            elif ch == '"':
                value = self.read_string()
                self.tokens.append(Token(TokenType.STRING, value, token_line, token_col))

            elif ch in _ASCII_DIGITS or (
                ch == "-" and (self.peek_char() or "x") in _ASCII_DIGITS
            ):
                value = self.read_number()
                self.tokens.append(Token(TokenType.NUMBER, value, token_line, token_col))

            elif ch.isalpha() or ch == "_":
                value = self.read_identifier()
                self.tokens.append(Token(TokenType.IDENTIFIER, value, token_line, token_col))

            elif ch == "@":
                self.advance()
                if self.current_char() == "@":
                    self.advance()
                    self.tokens.append(Token(TokenType.AT_AT, "@@", token_line, token_col))
                else:
                    self.tokens.append(Token(TokenType.AT, "@", token_line, token_col))

            elif ch in _PUNCTUATION:
                self.advance()
                self.tokens.append(Token(_PUNCTUATION[ch], ch, token_line, token_col))

            else:
                raise make_parse_error(
                    f"Unexpected character {ch!r}",
                    self.file,
                    token_line,
                    token_col,
                    extract_snippet(self.text, token_line),
                )

        self.tokens.append(Token(TokenType.EOF, "", self.line, self.column))
        return self.tokens


def tokenize(text: str, file: str = "<schema>") -> list[Token]:
    """
    Convenience function to tokenize schema text.

    Args:
        text: Source text
        file: Source label

    Returns:
        List of tokens
    """
    lexer = Lexer(text, file)
    return lexer.tokenize()
