"""Label search over a code tree."""

import logging
import re
from dataclasses import dataclass

from pydantic import BaseModel, Field

from claml_codes.models.code import Code

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[\s-]+")


def tokenize(text: str) -> list[str]:
    """Lowercase text and split it on runs of whitespace or hyphens."""
    return [token for token in _SEPARATORS.split(text.lower()) if token]


@dataclass(frozen=True)
class IndexedCode:
    """A code with its precomputed search text."""

    code: Code
    full_label: str
    full_label_segments: tuple[str, ...]

    @classmethod
    def from_code(cls, code: Code) -> "IndexedCode":
        full_label = code.full_label.lower()
        return cls(
            code=code,
            full_label=full_label,
            full_label_segments=tuple(tokenize(full_label)),
        )

    def matches(self, tokens: list[str]) -> bool:
        """Check that every token occurs somewhere in the label."""
        return all(token in self.full_label for token in tokens)

    def score(self, tokens: list[str]) -> int:
        """Count the tokens that start at least one label segment."""
        return sum(
            1
            for token in tokens
            if any(segment.startswith(token) for segment in self.full_label_segments)
        )


class SearchHit(BaseModel):
    """A search result: the matching code and its score."""

    code: Code = Field(..., description="Matching code")
    score: int = Field(..., ge=0, description="Number of prefix-matched tokens")


def flatten_codes(top_level_codes: list[Code]) -> list[Code]:
    """Return every code of the tree in depth-first pre-order."""
    flat: list[Code] = []
    stack = list(reversed(top_level_codes))
    while stack:
        code = stack.pop()
        flat.append(code)
        stack.extend(reversed(code.sub_codes))
    return flat


class CodeSearch:
    """In-memory search index over a code tree.

    Every query scans all codes, so it suits classifications of tens of
    thousands of entries.
    """

    def __init__(self, top_level_codes: list[Code]):
        """Index the tree below the given root codes.

        Args:
            top_level_codes: Root codes of the tree, in display order.
        """
        self._codes = [IndexedCode.from_code(code) for code in flatten_codes(top_level_codes)]
        self._code_map: dict[str, Code] = {
            indexed.code.code: indexed.code for indexed in self._codes
        }
        logger.debug("Indexed %d codes for search", len(self._codes))

    def search(self, query: str, limit: int | None = None) -> list[SearchHit]:
        """Find codes whose label contains every query token.

        Args:
            query: Free-text query; case and hyphens are ignored.
            limit: Optional maximum number of hits to return.

        Returns:
            Hits ordered by descending score. Ties keep tree order.
        """
        tokens = tokenize(query)
        hits = [
            SearchHit(code=indexed.code, score=indexed.score(tokens))
            for indexed in self._codes
            if indexed.matches(tokens)
        ]
        hits.sort(key=lambda hit: hit.score, reverse=True)
        if limit is not None:
            hits = hits[:limit]
        return hits

    def get_code(self, code: str) -> Code | None:
        """Look up a code by identifier; None if unknown."""
        return self._code_map.get(code)

    def get_count(self) -> int:
        """Number of indexed codes."""
        return len(self._codes)
