"""Enumerations for classification codes."""

from enum import Enum


class Sex(str, Enum):
    """Sex restriction of a code (None means unrestricted)."""

    MALE = "male"
    FEMALE = "female"


class ClassKind(str, Enum):
    """Kind attribute of a ClaML Class element."""

    CHAPTER = "chapter"
    BLOCK = "block"
    CATEGORY = "category"  # only kind that becomes a tree node
