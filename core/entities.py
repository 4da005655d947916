# core/entities.py
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ListResult:
    """
    One page of a prefix listing: object keys plus the grouped
    "directories" when a delimiter was supplied.
    """

    keys: List[str] = field(default_factory=list)
    common_prefixes: List[str] = field(default_factory=list)


@dataclass
class ObjectHead:
    content_type: Optional[str]
    size: int = 0


@dataclass
class ArchiveResult:
    timestamp: str
    archived: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)  # already gone


@dataclass
class StoredObject:
    body: bytes
    content_type: str
