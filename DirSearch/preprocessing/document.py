from typing import Dict, Optional

from .tokenizer import Tokenizer
from .preprocess import PreprocessingPipeline

# term -> number of occurrences in one document
TermFreq = Dict[str, int]


def count_terms(text: str, pipeline: Optional[PreprocessingPipeline] = None) -> TermFreq:
    """
    Tokenize text and count occurrences of every normalized term.

    Args:
        text: Raw document text
        pipeline: Preprocessing pipeline (defaults to lowercasing)

    Returns:
        Dictionary mapping terms to their counts (every count >= 1)
    """
    pipeline = pipeline or PreprocessingPipeline()
    tf: TermFreq = {}

    for token in Tokenizer(text):
        term = pipeline.process(token)
        if not term:
            continue
        if term in tf:
            tf[term] += 1
        else:
            tf[term] = 1

    return tf


class Document:
    """
    Represents a document in the search system.
    Stores the document identifier and its extracted text.
    """

    def __init__(self, id: str, text: str = ""):
        """
        Initialize a document with content.

        Args:
            id: Unique identifier for the document (usually its path)
            text: Extracted plain text
        """
        self.id = id
        self.text = text

    def term_frequencies(self, pipeline: PreprocessingPipeline = None) -> TermFreq:
        return count_terms(self.text, pipeline)

    def __repr__(self) -> str:
        return f"Document({self.id!r}, {len(self.text)} chars)"
