"""
Delimiter tokenization for SimpleNER.

Splits text into an ordered list of tokens where every delimiter character is a
token of its own and every maximal run of other characters is one token.
Tokenization is lossless: joining the tokens reproduces the input.
"""

from typing import FrozenSet, Iterable, List

DEFAULT_DELIMITERS = "_+-*/=|#.,:;!?'\"()[] "


class Tokenizer:
    """Splits strings on a fixed set of single-character delimiters."""

    def __init__(self, delimiters: Iterable[str] = DEFAULT_DELIMITERS):
        self.delimiters: FrozenSet[str] = frozenset(delimiters)
        if any(len(d) != 1 for d in self.delimiters):
            raise ValueError("Delimiters must be single characters")

    def tokenize(self, text: str) -> List[str]:
        """
        Tokenize text on the configured delimiters.

        Args:
            text: Input text, possibly empty

        Returns:
            List of tokens whose concatenation equals ``text``
        """
        tokens = []
        start = 0
        for index, char in enumerate(text):
            if char in self.delimiters:
                if start != index:
                    tokens.append(text[start:index])
                tokens.append(char)
                start = index + 1

        if start != len(text):
            tokens.append(text[start:])

        return tokens

    @staticmethod
    def token_lengths(tokens: List[str]) -> List[int]:
        return [len(token) for token in tokens]


_default_tokenizer = Tokenizer()


def tokenize(text: str) -> List[str]:
    """Tokenize with the default delimiter set."""
    return _default_tokenizer.tokenize(text)
