"""Label search over classification codes."""

from claml_codes.search.index import CodeSearch, SearchHit, flatten_codes, tokenize

__all__ = [
    "CodeSearch",
    "SearchHit",
    "flatten_codes",
    "tokenize",
]
