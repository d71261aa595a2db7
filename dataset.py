"""Loading the positions/skills CSV and holding the built corpus.

The engine modules never touch files or the network; this module reads the
CSV (from disk or over HTTP), hands the rows to build_corpus() and keeps the
result until the next successful reload replaces it wholesale.
"""

import io
import logging
import os
import threading
from typing import Optional

import pandas as pd
import requests as http_requests

from corpus import RoleCorpus, build_corpus

logger = logging.getLogger(__name__)

DEFAULT_DATASET = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'positions-skills.csv')
DATASET_TIMEOUT = float(os.environ.get('DATASET_TIMEOUT', '20'))


class DatasetError(RuntimeError):
    """The dataset could not be fetched or parsed."""


def _is_url(source: str) -> bool:
    return source.lower().startswith(('http://', 'https://'))


def _fetch(url: str, timeout: float) -> io.StringIO:
    try:
        resp = http_requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except http_requests.RequestException as e:
        raise DatasetError(f'Could not download dataset from {url}: {e}') from e
    return io.StringIO(resp.text)


def load_rows(source: str, timeout: float = DATASET_TIMEOUT) -> list[dict]:
    """Read every non-blank CSV line into a dict with trimmed keys and values."""
    handle = _fetch(source, timeout) if _is_url(source) else source
    try:
        frame = pd.read_csv(handle, dtype=str, keep_default_na=False,
                            skipinitialspace=True, skip_blank_lines=True)
    except (OSError, ValueError) as e:
        raise DatasetError(f'Could not read dataset {source}: {e}') from e

    frame.columns = [str(c).strip() for c in frame.columns]
    for column in frame.columns:
        frame[column] = frame[column].str.strip()
    frame = frame[(frame != '').any(axis=1)]
    return frame.to_dict('records')


def load_corpus(source: str, timeout: float = DATASET_TIMEOUT) -> RoleCorpus:
    rows = load_rows(source, timeout)
    logger.info('Loaded %d row(s) from %s', len(rows), source)
    return build_corpus(rows)


class DatasetStore:
    """Lazily loaded corpus that is swapped only after a reload succeeds."""

    def __init__(self, source: Optional[str] = None, timeout: float = DATASET_TIMEOUT):
        self.source = source or os.environ.get('POSITIONS_CSV') or DEFAULT_DATASET
        self.timeout = timeout
        self._corpus: Optional[RoleCorpus] = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._corpus is not None

    def get(self) -> RoleCorpus:
        corpus = self._corpus
        if corpus is not None:
            return corpus
        with self._lock:
            if self._corpus is None:
                self._corpus = load_corpus(self.source, self.timeout)
            return self._corpus

    def reload(self) -> RoleCorpus:
        with self._lock:
            corpus = load_corpus(self.source, self.timeout)
            self._corpus = corpus
        return corpus
