"""
Tokenizer for splitting raw document text into lexical tokens.
Tokens are views into the original string (start/end offsets), not copies.
"""
from enum import Enum
from typing import Iterator, List, NamedTuple

import regex

# Unicode Alphabetic, Number and White_Space properties
_WHITESPACE = regex.compile(r"\p{White_Space}*")
_WORD = regex.compile(r"\p{Alphabetic}\P{White_Space}*")
_NUMBER = regex.compile(r"\p{N}+")
_NON_WHITESPACE = regex.compile(r"\P{White_Space}+")


class TokenType(Enum):
    WORD = "word"
    NUMBER = "number"
    PUNCT = "punct"


class Token(NamedTuple):
    """
    Immutable view of a token inside the buffer it was sliced from.

    Attributes:
        buffer: The original text
        start: Offset of the first character
        end: Offset one past the last character
        token_type: Class of the first character of the token
    """
    buffer: str
    start: int
    end: int
    token_type: TokenType

    @property
    def text(self) -> str:
        return self.buffer[self.start:self.end]

    def __repr__(self) -> str:
        return f"Token({self.text!r}, {self.start}:{self.end}, {self.token_type.name})"


class Tokenizer:
    """
    Forward-only tokenizer over a string.

    Each call to next() skips leading whitespace and then consumes:
      - an alphabetic character followed by every non-whitespace character up
        to the next whitespace,
      - a numeric character followed by every numeric character,
      - any other character on its own.

    Alphabetic, numeric and whitespace follow the Unicode Alphabetic, Number
    and White_Space properties.

    The cursor never moves back. To scan the same text again create a new
    Tokenizer.
    """

    def __init__(self, content: str):
        self.content = content
        self.cursor = 0

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        self.cursor = _WHITESPACE.match(self.content, self.cursor).end()

        if self.cursor >= len(self.content):
            raise StopIteration

        match = _WORD.match(self.content, self.cursor)
        if match:
            return self._chop(match.end() - self.cursor, TokenType.WORD)

        match = _NUMBER.match(self.content, self.cursor)
        if match:
            return self._chop(match.end() - self.cursor, TokenType.NUMBER)

        return self._chop(1, TokenType.PUNCT)

    def _chop(self, n: int, token_type: TokenType) -> Token:
        token = Token(self.content, self.cursor, self.cursor + n, token_type)
        self.cursor += n
        return token

    @classmethod
    def tokenize(cls, content: str) -> List[Token]:
        """
        Tokenize a whole string.

        Args:
            content: Text to tokenize

        Returns:
            List of tokens in left-to-right order
        """
        return list(cls(content))


def split_whitespace(text: str) -> List[str]:
    """Split text on runs of Unicode whitespace, dropping empty pieces."""
    return _NON_WHITESPACE.findall(text)
