"""
Article data model.
"""

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional, Tuple


ARTICLE_FIELDS = (
    "uuid",
    "title",
    "author",
    "language",
    "published",
    "categories",
    "text",
    "url",
)


@dataclass(frozen=True)
class Article:
    """One parsed article record. Immutable once built."""
    uuid: Optional[str]
    title: Optional[str]
    author: Optional[str]
    language: Optional[str]
    published: Optional[str]                    # Sortable date/time string
    categories: Optional[Tuple[str, ...]] = None  # As listed in the record, repeats kept
    text: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Article":
        """
        Build an article from a decoded JSON object.

        Missing fields become None and unknown fields are ignored. No other
        validation happens here.
        """
        categories = data.get("categories")
        if categories is not None:
            categories = tuple(categories)

        return cls(
            uuid=data.get("uuid"),
            title=data.get("title"),
            author=data.get("author"),
            language=data.get("language"),
            published=data.get("published"),
            categories=categories,
            text=data.get("text"),
            url=data.get("url"),
        )

    def category_set(self) -> FrozenSet[str]:
        """Distinct categories of this article (empty when the list is absent)."""
        if self.categories is None:
            return frozenset()
        return frozenset(self.categories)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "uuid": self.uuid,
            "title": self.title,
            "author": self.author,
            "language": self.language,
            "published": self.published,
            "categories": list(self.categories) if self.categories is not None else None,
            "text": self.text,
            "url": self.url,
        }
