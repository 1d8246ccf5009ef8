"""Per-session record of which short codes have already counted as unique views.

The set travels in the signed session cookie as codes joined by ``.``.
Codes are alphanumeric, so the separator never occurs inside one, and
membership is decided on whole tokens: having visited ``bc1234`` says
nothing about ``abc123``.

The cookie also carries the login, so the set holds at most
``MAX_VISITED`` codes; past that the oldest entry is forgotten and a later
visit to it counts as unique again.
"""
from typing import Iterable, Iterator

from .ids import CODE_PATTERN

SEPARATOR = "."
SESSION_KEY = "visited"
MAX_VISITED = 300


class VisitedSet:
    def __init__(self, codes: Iterable[str] = (), limit: int = MAX_VISITED):
        self.limit = limit
        # insertion-ordered, oldest first
        self._codes = {}
        for code in codes:
            self._remember(code)

    @classmethod
    def parse(cls, token, limit: int = MAX_VISITED) -> "VisitedSet":
        if not token or not isinstance(token, str):
            return cls(limit=limit)
        return cls((code for code in token.split(SEPARATOR) if CODE_PATTERN.fullmatch(code)), limit=limit)

    def dump(self) -> str:
        return SEPARATOR.join(self._codes)

    def add(self, code: str) -> None:
        if not CODE_PATTERN.fullmatch(code):
            raise ValueError(f"not a short code: {code!r}")
        self._remember(code)

    def _remember(self, code: str) -> None:
        self._codes.pop(code, None)
        self._codes[code] = None
        while len(self._codes) > self.limit:
            del self._codes[next(iter(self._codes))]

    def __contains__(self, code) -> bool:
        return code in self._codes

    def __iter__(self) -> Iterator[str]:
        return iter(self._codes)

    def __len__(self) -> int:
        return len(self._codes)


def load_visited(session) -> VisitedSet:
    return VisitedSet.parse(session.get(SESSION_KEY))


def save_visited(session, visited: VisitedSet) -> None:
    session[SESSION_KEY] = visited.dump()
