"""
Tests for report file generation.
"""

from pathlib import Path
import sys

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from conftest import build_article
from article_insights.analysis.aggregator import Aggregator
from article_insights.analysis.statistics import Statistics
from article_insights.data.corpus import Corpus
from article_insights.services.report_generator import ReportBuilder, ReportFiles, normalize_category
from article_insights.utils.errors import ReportError


def read_lines(path):
    return Path(path).read_text(encoding="utf-8").splitlines()


@pytest.fixture
def statistics():
    articles = [
        build_article("u2", author="Bob", language="english", published="2024-01-02",
                      categories=["World News", "Business, Finance"], url="https://x/u2"),
        build_article("u1", author="Alice", language="english", published="2024-01-02",
                      categories=["World News"], url="https://x/u1"),
        build_article("u3", author="Alice", language="german", published="2024-01-01",
                      categories=["Business,  Finance"], url="https://x/u3"),
        build_article("dup", title="Same"),
        build_article("dup2", title="Same"),
    ]
    aggregation = Aggregator().aggregate(Corpus.from_articles(articles))
    index = {"markets": frozenset({"u1", "u2"}), "storm": frozenset({"u1"}), "alpha": frozenset({"u2"})}
    return Statistics(aggregation, index)


class TestNormalizeCategory:

    @pytest.mark.parametrize("raw, expected", [
        ("World News", "World_News"),
        ("Business, Finance", "Business_Finance"),
        ("Arts,  Culture\tand Entertainment", "Arts_Culture_and_Entertainment"),
        ("Plain", "Plain"),
    ])
    def test_normalization(self, raw, expected):
        assert normalize_category(raw) == expected


class TestReportBuilder:

    def test_all_articles_sorted_by_published_desc_then_uuid(self, statistics, tmp_path):
        builder = ReportBuilder(statistics, languages=set(), categories=set(), output_dir=tmp_path)

        path = builder.write_all_articles()

        assert read_lines(path) == ["u1 2024-01-02", "u2 2024-01-02", "u3 2024-01-01"]

    def test_category_listings_use_normalized_names_and_merge(self, statistics, tmp_path):
        builder = ReportBuilder(
            statistics,
            languages=set(),
            categories={"World News", "Business, Finance", "Business,  Finance", "Sports"},
            output_dir=tmp_path
        )

        paths = builder.write_category_listings()

        assert sorted(Path(p).name for p in paths) == ["Business_Finance.txt", "World_News.txt"]
        assert read_lines(tmp_path / "World_News.txt") == ["u1", "u2"]
        assert read_lines(tmp_path / "Business_Finance.txt") == ["u2", "u3"]
        assert not (tmp_path / "Sports.txt").exists()

    def test_language_listings_only_for_valid_languages(self, statistics, tmp_path):
        builder = ReportBuilder(statistics, languages={"english", "french"}, categories=set(), output_dir=tmp_path)

        paths = builder.write_language_listings()

        assert [Path(p).name for p in paths] == ["english.txt"]
        assert read_lines(tmp_path / "english.txt") == ["u1", "u2"]
        assert not (tmp_path / "german.txt").exists()

    def test_keyword_counts_sorted_by_count_then_keyword(self, statistics, tmp_path):
        builder = ReportBuilder(statistics, languages=set(), categories=set(), output_dir=tmp_path)

        path = builder.write_keyword_counts()

        assert read_lines(path) == ["markets 2", "alpha 1", "storm 1"]

    def test_summary_report(self, statistics, tmp_path):
        builder = ReportBuilder(statistics, languages=set(), categories=set(), output_dir=tmp_path)

        path = builder.write_summary()

        assert read_lines(path) == [
            "duplicates_found - 2",
            "unique_articles - 3",
            "best_author - Alice 2",
            "top_language - english 2",
            "top_category - World_News 2",
            "most_recent_article - 2024-01-02 https://x/u1",
            "top_keyword_en - markets 2",
        ]

    def test_summary_omits_ranked_lines_when_empty(self, tmp_path):
        articles = [build_article("a", title="Same"), build_article("b", title="Same")]
        stats = Statistics(Aggregator().aggregate(Corpus.from_articles(articles)))
        builder = ReportBuilder(stats, languages=set(), categories=set(), output_dir=tmp_path)

        assert builder.summary_lines() == ["duplicates_found - 2", "unique_articles - 0"]

    def test_write_all_uses_configured_file_names(self, statistics, tmp_path):
        out = tmp_path / "reports" / "run1"
        files = ReportFiles(all_articles="articles.out", keywords="kw.out", reports="summary.out")
        builder = ReportBuilder(statistics, {"english"}, {"World News"}, output_dir=out, files=files)

        written = builder.write_all()

        assert {Path(p).name for p in written} == {
            "articles.out", "World_News.txt", "english.txt", "kw.out", "summary.out"
        }
        assert all(Path(p).parent == out for p in written)

    def test_unwritable_output_raises_report_error(self, statistics, tmp_path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("file", encoding="utf-8")
        builder = ReportBuilder(statistics, set(), set(), output_dir=blocker)

        with pytest.raises(ReportError):
            builder.write_summary()
