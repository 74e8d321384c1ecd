"""
Property-based tests for keyword extraction and the keyword index.

**Property: the keyword index is independent of worker count and scheduling**
"""

import re
from pathlib import Path
import sys

from hypothesis import given, strategies as st

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from conftest import build_article
from article_insights.analysis.keywords import extract_keywords
from article_insights.services.keyword_extraction import KeywordExtractionPool


WORDS = ["Fox", "the", "quick", "RUNS", "fox's", "a-b", "42", "jump!", "and", "Über"]

text_strategy = st.lists(st.sampled_from(WORDS), max_size=15).map(" ".join)


def reference_keywords(text, stop_words):
    tokens = re.split(r"\s+", text.lower())
    cleaned = {re.sub(r"[^a-z]", "", token) for token in tokens}
    return {token for token in cleaned if token and token not in stop_words}


class TestExtractKeywords:

    def test_repeated_words_counted_once(self):
        keywords = extract_keywords("The Quick Fox jumps; the Fox runs.", {"the"})

        assert keywords == {"quick", "fox", "jumps", "runs"}

    def test_non_letters_are_stripped_inside_tokens(self):
        assert extract_keywords("e-mail don't 3d 2024") == {"email", "dont", "d"}

    def test_non_ascii_letters_are_removed(self):
        assert extract_keywords("Über café") == {"ber", "caf"}

    def test_stop_words_apply_after_cleaning(self):
        assert extract_keywords("The, AND; of", {"the", "and"}) == {"of"}

    def test_none_and_blank_text(self):
        assert extract_keywords(None) == set()
        assert extract_keywords("   \n\t ") == set()
        assert extract_keywords("123 ... !!!") == set()

    @given(text=text_strategy, stop_words=st.sets(st.sampled_from(["the", "and", "fox", "quick"])))
    def test_matches_reference_tokenizer(self, text, stop_words):
        keywords = extract_keywords(text, stop_words)

        assert keywords == reference_keywords(text, stop_words)
        assert all(re.fullmatch(r"[a-z]+", keyword) for keyword in keywords)
        assert keywords.isdisjoint(stop_words)


class TestKeywordExtractionPool:

    def test_index_maps_keywords_to_article_uuids(self):
        articles = [
            build_article("u1", text="Fox runs fast"),
            build_article("u2", text="the fox sleeps"),
            build_article("u3", text=None),
        ]

        index = KeywordExtractionPool(worker_count=2, stop_words={"the"}).run(articles)

        assert index == {
            "fox": frozenset({"u1", "u2"}),
            "runs": frozenset({"u1"}),
            "fast": frozenset({"u1"}),
            "sleeps": frozenset({"u2"}),
        }

    def test_articles_without_text_are_skipped_not_failed(self):
        pool = KeywordExtractionPool(worker_count=3)

        index = pool.run([build_article(f"n{i}", text=None) for i in range(5)])

        assert index == {}
        assert pool.last_run.items_processed == 5
        assert pool.last_run.items_failed == 0

    @given(
        texts=st.lists(st.one_of(st.none(), text_strategy), max_size=20),
        workers=st.integers(min_value=1, max_value=6)
    )
    def test_index_is_the_same_for_any_worker_count(self, texts, workers):
        articles = [build_article(f"id{i}", text=text) for i, text in enumerate(texts)]
        stop_words = {"the", "and"}

        parallel = KeywordExtractionPool(worker_count=workers, stop_words=stop_words).run(articles)
        sequential = KeywordExtractionPool(worker_count=1, stop_words=stop_words).run(articles)

        assert parallel == sequential

        # uuid in index[k] iff the article has text and k is one of its keywords
        for article in articles:
            expected = extract_keywords(article.text, stop_words)
            present = {keyword for keyword, uuids in parallel.items() if article.uuid in uuids}
            assert present == expected
