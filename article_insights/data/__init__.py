"""
Article records, the shared corpus and input file readers.
"""

from .models import Article
from .corpus import Corpus
from .loader import ArticleFileReader
from .roster import (
    AuxiliaryFiles,
    InputVocabulary,
    load_inputs,
    read_auxiliary_roster,
    read_roster,
    read_word_list
)

__all__ = [
    'Article',
    'Corpus',
    'ArticleFileReader',
    'AuxiliaryFiles',
    'InputVocabulary',
    'load_inputs',
    'read_auxiliary_roster',
    'read_roster',
    'read_word_list'
]
