"""
Article file reader.

An article file is a JSON array of objects. Text fields must be strings or
null and categories a list of strings or null; unknown fields are ignored.
"""

import json
from pathlib import Path
from typing import List, Union

import jsonschema
from jsonschema import validate

from article_insights.utils.errors import ArticleParseError
from .models import Article, ARTICLE_FIELDS


_RECORD_PROPERTIES = {name: {"type": ["string", "null"]} for name in ARTICLE_FIELDS}
_RECORD_PROPERTIES["categories"] = {"type": ["array", "null"], "items": {"type": "string"}}

ARTICLE_FILE_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": _RECORD_PROPERTIES
    }
}


class ArticleFileReader:
    """Parses one article file into Article records."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def read(self, path: Union[str, Path]) -> List[Article]:
        """
        Read and decode one article file.

        The file is opened, fully consumed and closed within this call.

        Args:
            path: Path of the JSON article file

        Returns:
            Articles in file order (possibly empty)

        Raises:
            ArticleParseError: If the file is unreadable, not JSON, or not an
                array of objects with string fields
        """
        try:
            with open(path, "r", encoding=self.encoding) as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError) as e:
            raise ArticleParseError(f"Cannot read article file {path}: {e}", {"path": str(path)}) from e
        except json.JSONDecodeError as e:
            raise ArticleParseError(
                f"Invalid JSON in article file {path}: {e.msg} (line {e.lineno})",
                {"path": str(path)}
            ) from e

        try:
            validate(instance=data, schema=ARTICLE_FILE_SCHEMA)
        except jsonschema.ValidationError as e:
            raise ArticleParseError(
                f"Unexpected article file layout in {path}: {e.message}",
                {"path": str(path)}
            ) from e

        return [Article.from_dict(record) for record in data]
