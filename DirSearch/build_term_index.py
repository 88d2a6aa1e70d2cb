import json
import os
import time
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TimeElapsedColumn

from DirSearch.errors import DocumentError, EnumerationError, PersistenceError
from DirSearch.preprocessing.document import Document, TermFreq
from DirSearch.preprocessing.extract import read_document
from DirSearch.preprocessing.preprocess import PreprocessingPipeline

# document identifier -> term frequencies of that document
TermFreqIndex = Dict[str, TermFreq]

err_console = Console(stderr=True)


def index_documents(documents: Iterable[Tuple[str, str]],
                    pipeline: Optional[PreprocessingPipeline] = None) -> TermFreqIndex:
    """
    Build a term frequency index from (identifier, text) pairs.

    Args:
        documents: Iterable of (document identifier, text) pairs
        pipeline: Preprocessing pipeline (defaults to lowercasing)

    Returns:
        Dictionary mapping document identifiers to their term frequencies
    """
    tf_index: TermFreqIndex = {}
    for doc_id, text in documents:
        tf_index[doc_id] = Document(doc_id, text).term_frequencies(pipeline)
    return tf_index


class TermFreqIndexBuilder:
    def __init__(self, pipeline: Optional[PreprocessingPipeline] = None, console: Console = None):
        self.index: TermFreqIndex = {}
        self.pipeline = pipeline or PreprocessingPipeline()
        self.console = console or err_console
        self.skipped = 0

    def list_documents(self, dir_path: str) -> List[str]:
        """
        List every file below a directory, recursively, in sorted order.

        Args:
            dir_path: Directory to scan

        Returns:
            List of file paths

        Raises:
            EnumerationError: If dir_path itself cannot be listed
        """
        try:
            os.listdir(dir_path)
        except OSError as e:
            raise EnumerationError(f"Failed to read directory {dir_path}: {e}") from e

        def warn(error):
            self.console.print(f"[yellow]WARN:[/yellow] could not read directory {escape(str(error.filename))}: {error.strerror}")

        paths = []
        for root, dirs, files in os.walk(dir_path, onerror=warn):
            dirs.sort()
            for file in sorted(files):
                paths.append(os.path.join(root, file))
        return paths

    def _read_documents(self, paths: List[str], progress: Progress, task) -> Iterator[Tuple[str, str]]:
        for path in paths:
            try:
                text = read_document(path)
            except DocumentError as e:
                progress.console.print(f"[yellow]WARN:[/yellow] {escape(str(e))}")
                self.skipped += 1
                progress.advance(task)
                continue

            progress.console.print(f"Indexing file {escape(path)}...", highlight=False)
            yield path, text
            progress.advance(task)

    def build_from_directory(self, dir_path: str) -> TermFreqIndex:
        """
        Build the term frequency index from every supported file below a directory.
        Documents that cannot be read are reported and skipped.

        Args:
            dir_path: Directory with documents

        Returns:
            The built index

        Raises:
            EnumerationError: If the directory cannot be listed
        """
        paths = self.list_documents(dir_path)
        start_time = time.time()

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TimeElapsedColumn(),
            console=self.console,
            transient=True
        ) as progress:
            task = progress.add_task("Indexing documents...", total=len(paths))
            documents = self._read_documents(paths, progress, task)
            self.index.update(index_documents(documents, self.pipeline))

        elapsed = time.time() - start_time
        self.console.print(f"Indexed {len(self.index)} files successfully in {elapsed:.2f} seconds.")
        if self.skipped:
            self.console.print(f"[yellow]Skipped {self.skipped} unreadable or unsupported files.[/yellow]")

        return self.index

    def save_to_json(self, output_file: str) -> None:
        save_index(self.index, output_file)
        self.console.print(f"Written to {escape(output_file)}.", highlight=False)


def save_index(tf_index: TermFreqIndex, path: str) -> None:
    """
    Save a term frequency index as a JSON object of objects.

    Args:
        tf_index: Index to save
        path: Output file path

    Raises:
        PersistenceError: If the file cannot be created or written
    """
    # Write next to the target and rename, an existing index stays intact on failure
    tmp_path = path + ".tmp"
    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(tf_index, f, ensure_ascii=False)
        os.replace(tmp_path, path)
    except (OSError, TypeError, ValueError) as e:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise PersistenceError(f"Failed to write index to {path}: {e}") from e


def _validate_index(data, path: str) -> TermFreqIndex:
    if not isinstance(data, dict):
        raise PersistenceError(f"Invalid index in {path}: expected a JSON object")

    for doc_id, tf in data.items():
        if not isinstance(tf, dict):
            raise PersistenceError(f"Invalid index in {path}: entry for {doc_id!r} is not an object")
        for term, count in tf.items():
            # bool is a subclass of int, reject it explicitly
            if isinstance(count, bool) or not isinstance(count, int) or count < 0:
                raise PersistenceError(
                    f"Invalid index in {path}: count of {term!r} in {doc_id!r} is not a non-negative integer"
                )

    return data


def load_index(path: str) -> TermFreqIndex:
    """
    Load a term frequency index saved by save_index.

    Args:
        path: Path to the JSON index file

    Returns:
        The loaded index

    Raises:
        PersistenceError: If the file cannot be opened or does not hold a valid index
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise PersistenceError(f"could not open index at {path}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise PersistenceError(f"could not parse index at {path}: {e}") from e

    return _validate_index(data, path)
