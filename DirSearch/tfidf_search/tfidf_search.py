"""
TF-IDF scoring of documents in a term frequency index.

score(d, q) = sum over query terms t present in d of tf(d, t) * ln(N / df(t))

where N is the number of indexed documents and df(t) the number of documents
containing t. Terms contained in no document are skipped.
"""
import math
from typing import Dict, List, Tuple

from ..build_term_index import TermFreqIndex
from ..preprocessing.tokenizer import split_whitespace

# document identifier -> relevance score
ScoreIndex = Dict[str, float]


def tf_idf_search(tf_index: TermFreqIndex, query: str) -> ScoreIndex:
    """
    Score every document of the index against a free-text query.

    Query terms are split on whitespace and matched literally against the
    indexed terms. Index terms are lower-cased, query terms are not, so a
    query term containing upper-case letters matches nothing.

    Args:
        tf_index: Term frequency index
        query: Query string

    Returns:
        Dictionary mapping document identifiers to their scores, documents
        scoring exactly zero left out
    """
    n_docs = len(tf_index)
    scores: ScoreIndex = {doc_id: 0.0 for doc_id in tf_index}

    for term in split_whitespace(query):
        matching_docs = {doc_id: tf[term] for doc_id, tf in tf_index.items() if term in tf}

        n_matches = len(matching_docs)
        if n_matches == 0:
            continue

        idf = math.log(n_docs / n_matches)
        for doc_id, freq in matching_docs.items():
            scores[doc_id] += freq * idf

    return {doc_id: score for doc_id, score in scores.items() if score != 0.0}


def rank_results(scores: ScoreIndex, top_k: int = 5, tie_break: str = "truncate") -> List[Tuple[str, float]]:
    """
    Order scored documents best first.

    Args:
        scores: Scores returned by tf_idf_search
        top_k: Number of top results to return
        tie_break: "truncate" sorts by the integer part of the score (documents
            whose scores differ by less than 1.0 may come in any order),
            "exact" sorts by the full score and then by identifier

    Returns:
        List of (document identifier, score) tuples
    """
    if tie_break == "truncate":
        results = sorted(scores.items(), key=lambda item: int(item[1]))
        results.reverse()
    elif tie_break == "exact":
        results = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
    else:
        raise ValueError(f"unknown tie_break mode: {tie_break!r}")

    return results[:top_k]


class TFIDFSearchEngine:
    """TF-IDF search engine over a loaded term frequency index"""

    def __init__(self, tf_index: TermFreqIndex):
        self.tf_index = tf_index

    @property
    def document_count(self) -> int:
        return len(self.tf_index)

    def score(self, query: str) -> ScoreIndex:
        return tf_idf_search(self.tf_index, query)

    def search(self, query: str, top_k: int = 5, tie_break: str = "truncate") -> Tuple[int, List[Tuple[str, float]]]:
        """
        Search for documents matching the query.

        Args:
            query: Query string
            top_k: Number of top results to return
            tie_break: Ranking mode, see rank_results

        Returns:
            Tuple of (number of matching documents, top (identifier, score) tuples)
        """
        scores = self.score(query)
        return len(scores), rank_results(scores, top_k, tie_break)
