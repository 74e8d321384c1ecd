"""
Roster and word-list readers.

Both use the same grammar: the first line holds an integer N, the next N
lines hold one entry each. Roster entries are paths resolved against the
roster's own directory. Lines past the N-th are ignored.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, List, Union

from article_insights.utils.errors import RosterError
from article_insights.utils.logging import get_logger


logger = get_logger(__name__)

AUXILIARY_ENTRY_COUNT = 3


@dataclass(frozen=True)
class AuxiliaryFiles:
    """Paths listed by the auxiliary roster, in roster order."""
    languages: str
    categories: str
    stop_words: str


@dataclass(frozen=True)
class InputVocabulary:
    """Word lists the reports and keyword extraction depend on."""
    languages: FrozenSet[str]
    categories: FrozenSet[str]
    stop_words: FrozenSet[str]


def _read_counted_lines(path: Union[str, Path]) -> List[str]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except OSError as e:
        raise RosterError(f"Cannot read {path}: {e}", {"path": str(path)}) from e

    if not lines:
        raise RosterError(f"{path} is empty, expected an entry count", {"path": str(path)})

    try:
        count = int(lines[0].strip())
    except ValueError:
        raise RosterError(
            f"{path}: first line must be an integer count, got {lines[0]!r}",
            {"path": str(path)}
        ) from None

    if count < 0:
        raise RosterError(f"{path}: negative entry count {count}", {"path": str(path)})

    entries = [line.strip() for line in lines[1:count + 1]]
    if len(entries) < count:
        raise RosterError(
            f"{path} declares {count} entries but lists {len(entries)}",
            {"path": str(path), "declared": count, "found": len(entries)}
        )

    for index, entry in enumerate(entries, start=2):
        if not entry:
            raise RosterError(f"{path}: line {index} is blank", {"path": str(path), "line": index})

    return entries


def read_roster(path: Union[str, Path]) -> List[str]:
    """
    Read a roster file.

    Args:
        path: Roster file path

    Returns:
        Listed paths resolved against the roster's directory, in roster order

    Raises:
        RosterError: If the roster is missing or malformed
    """
    base_dir = Path(path).parent
    entries = _read_counted_lines(path)
    resolved = [str(base_dir / entry) for entry in entries]
    logger.debug(f"Roster {path} lists {len(resolved)} files")
    return resolved


def read_auxiliary_roster(path: Union[str, Path]) -> AuxiliaryFiles:
    """
    Read the auxiliary roster naming the language, category and stop-word lists.

    Raises:
        RosterError: If fewer than three files are listed
    """
    entries = read_roster(path)
    if len(entries) < AUXILIARY_ENTRY_COUNT:
        raise RosterError(
            f"{path} must list {AUXILIARY_ENTRY_COUNT} files "
            "(languages, categories, stop words)",
            {"path": str(path), "found": len(entries)}
        )
    languages, categories, stop_words = entries[:AUXILIARY_ENTRY_COUNT]
    return AuxiliaryFiles(languages=languages, categories=categories, stop_words=stop_words)


def read_word_list(path: Union[str, Path], lowercase: bool = False) -> FrozenSet[str]:
    """
    Read a counted word list.

    Args:
        path: Word-list file path
        lowercase: Lowercase every entry

    Returns:
        Set of trimmed entries
    """
    entries = _read_counted_lines(path)
    if lowercase:
        entries = [entry.lower() for entry in entries]
    return frozenset(entries)


def load_inputs(auxiliary_roster: Union[str, Path]) -> InputVocabulary:
    """Read the auxiliary roster and every word list it names."""
    files = read_auxiliary_roster(auxiliary_roster)
    vocabulary = InputVocabulary(
        languages=read_word_list(files.languages),
        categories=read_word_list(files.categories),
        stop_words=read_word_list(files.stop_words, lowercase=True),
    )
    logger.info(
        f"Loaded {len(vocabulary.languages)} languages, {len(vocabulary.categories)} categories, "
        f"{len(vocabulary.stop_words)} stop words"
    )
    return vocabulary
