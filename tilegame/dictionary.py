from __future__ import annotations
import logging
from pathlib import Path
from typing import FrozenSet, Iterable, Optional, Union

logger = logging.getLogger(__name__)

# Word list is a plain text file, one word per line. It is read once at
# startup and shared read-only by every game session.


class DictionaryService:
    def __init__(self, words: Optional[Iterable[str]] = None):
        # Store uppercase words
        self._words: FrozenSet[str] = frozenset(
            w.strip().upper() for w in (words or ()) if w and w.strip()
        )

    @classmethod
    def from_file(cls, path: Optional[Union[str, Path]]) -> 'DictionaryService':
        if not path:
            logger.warning('No dictionary configured; word validation is permissive.')
            return cls()
        try:
            raw = Path(path).read_text(encoding='utf-8')
        except OSError as exc:
            logger.warning('Failed to load dictionary from %s; word validation is permissive. (%s)', path, exc)
            return cls()
        service = cls(raw.splitlines())
        logger.info('Loaded %d dictionary words from %s', len(service), path)
        return service

    @property
    def permissive(self) -> bool:
        return not self._words

    def is_valid(self, word: str) -> bool:
        if not word:
            return False
        if self.permissive:
            return True
        return word.upper() in self._words

    def __contains__(self, word: str) -> bool:
        return self.is_valid(word)

    def __len__(self) -> int:
        return len(self._words)
