"""
Preprocessing module turning tokens into index terms.
A term is an owned copy of the token text passed through a chain of preprocessors.
"""
from abc import ABC, abstractmethod
import string

from .tokenizer import Token

# Only ASCII letters are folded, other characters are kept as they are
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


class TokenPreprocessor(ABC):
    @abstractmethod
    def preprocess(self, term: str, token: Token) -> str:
        raise NotImplementedError()


class LowercasePreprocessor(TokenPreprocessor):
    def preprocess(self, term: str, token: Token) -> str:
        return term.translate(_ASCII_LOWER)


class PreprocessingPipeline:
    """Pipeline of token preprocessors."""

    def __init__(self, preprocessors=None):
        """
        Initialize a preprocessing pipeline.

        Args:
            preprocessors: List of preprocessor objects (defaults to lowercasing only)
        """
        if preprocessors is None:
            preprocessors = [LowercasePreprocessor()]
        self.preprocessors = preprocessors

    def process(self, token: Token) -> str:
        """
        Produce the term for a single token. An empty term means the token is dropped.

        Args:
            token: Token to convert

        Returns:
            Preprocessed term
        """
        term = token.text
        for preprocessor in self.preprocessors:
            term = preprocessor.preprocess(term, token)
        return term
