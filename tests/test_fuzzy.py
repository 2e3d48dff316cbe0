"""Tests for fuzzy matching, ranking and highlighting."""

import pytest

from cmdpal.config.constants import ScoringWeights
from cmdpal.core.fuzzy import FuzzyMatcher
from cmdpal.core.models import ActionEntry, HighlightSegment


@pytest.fixture
def matcher():
    return FuzzyMatcher()


class TestMatch:
    """Tests for FuzzyMatcher.match."""

    def test_first_character_gets_every_bonus(self, matcher) -> None:
        """A hit at index 0 is consecutive, a word start and early."""
        assert matcher.match("p", "Play") == 11

    def test_mid_word_early_character(self, matcher) -> None:
        assert matcher.match("p", "Stop") == 3

    def test_full_word(self, matcher) -> None:
        assert matcher.match("play", "Play") == 35

    def test_case_insensitive(self, matcher) -> None:
        assert matcher.match("PLAY", "play") == matcher.match("play", "PLAY") == 35

    def test_word_boundary_after_separator(self, matcher) -> None:
        assert matcher.match("s", "a s") == 6
        assert matcher.match("s", "a_s") == 6
        assert matcher.match("s", "a-s") == 6

    def test_late_character_scores_base_only(self, matcher) -> None:
        assert matcher.match("z", "abcdefz") == 1

    def test_out_of_order_is_no_match(self, matcher) -> None:
        assert matcher.match("pst", "Stop") is None

    def test_in_order_subsequence_matches(self, matcher) -> None:
        # t at 1 is early only; o and p are consecutive and early
        assert matcher.match("top", "Stop") == 19

    def test_bonuses_favor_contiguous_word_start(self, matcher) -> None:
        assert matcher.match("play", "xPlaYx") == 27
        assert matcher.match("play", "Play") > matcher.match("play", "xPlaYx")

    def test_partial_match_is_no_match(self, matcher) -> None:
        assert matcher.match("playx", "Play") is None

    @pytest.mark.parametrize("query,target", [("", "Play"), ("p", ""), ("", "")])
    def test_empty_input_never_matches(self, matcher, query, target) -> None:
        assert matcher.match(query, target) is None

    def test_custom_weights(self) -> None:
        flat = FuzzyMatcher(ScoringWeights(0, 0, 0, 0, 1))
        assert flat.match("play", "Play") == 4


class TestScoreEntry:
    """Tests for combining title, text and keyword scores."""

    def test_title_score_is_doubled(self, matcher) -> None:
        entry = ActionEntry(id="a", title="Play", action_key="transport.play")
        assert matcher.score_entry("p", entry) == 22

    def test_keyword_score_wins_when_title_misses(self, matcher) -> None:
        entry = ActionEntry(id="z", title="Zed", action_key="z", keywords=("reverb",))
        # keyword: 11 + 8 + 8 + 2 bonus; combined text only reaches 18
        assert matcher.score_entry("rev", entry) == 29

    def test_keyword_scores_accumulate(self, matcher) -> None:
        entry = ActionEntry(id="z", title="Zed", action_key="z", keywords=("rev", "reverb"))
        assert matcher.score_entry("rev", entry) == 29 + 29

    def test_no_match_scores_zero(self, matcher) -> None:
        entry = ActionEntry(id="a", title="Play", action_key="transport.play")
        assert matcher.score_entry("xyz", entry) == 0

    def test_description_and_category_are_searched(self, matcher) -> None:
        entry = ActionEntry(
            id="a", title="Play", action_key="p", description="Start playback", category="Transport"
        )
        assert matcher.score_entry("transport", entry) > 0

    def test_build_search_text(self) -> None:
        entry = ActionEntry(
            id="a",
            title="Play",
            action_key="transport.play",
            keywords=("start", "go"),
            description="Start playback",
            category="Transport",
        )
        assert FuzzyMatcher.build_search_text(entry) == "Play start go Start playback Transport"

    def test_build_search_text_skips_empty_description(self) -> None:
        entry = ActionEntry(id="a", title="Play", action_key="p")
        assert FuzzyMatcher.build_search_text(entry) == "Play Uncategorized"


class TestSearch:
    """Tests for ranking a list of entries."""

    def test_regression_baseline_order(self, matcher, play_stop_registry) -> None:
        """Query 'p': Play scores 22, Stop scores 6."""
        results = matcher.search("p", play_stop_registry.get_all())
        assert [(r.entry.title, r.score) for r in results] == [("Play", 22), ("Stop", 6)]

    @pytest.mark.parametrize("query", ["", "   ", "\t"])
    def test_blank_query_returns_everything_in_order(self, matcher, play_stop_registry, query) -> None:
        results = matcher.search(query, play_stop_registry.get_all())
        assert [r.entry.id for r in results] == ["a", "b"]
        assert all(r.score == 0 for r in results)

    def test_query_is_stripped(self, matcher, play_stop_registry) -> None:
        entries = play_stop_registry.get_all()
        padded = matcher.search("  p ", entries)
        assert [(r.entry.id, r.score) for r in padded] == [("a", 22), ("b", 6)]

    def test_non_matching_entries_are_dropped(self, matcher, play_stop_registry) -> None:
        results = matcher.search("sto", play_stop_registry.get_all())
        assert [r.entry.id for r in results] == ["b"]

    def test_no_results(self, matcher, play_stop_registry) -> None:
        assert matcher.search("qqq", play_stop_registry.get_all()) == []

    def test_ties_keep_input_order(self, matcher) -> None:
        entries = [
            ActionEntry(id=str(i), title="Alpha", action_key=f"a.{i}", category="X")
            for i in range(5)
        ]
        results = matcher.search("alp", entries)
        assert [r.entry.id for r in results] == ["0", "1", "2", "3", "4"]

    def test_results_sorted_descending(self, matcher, builtin_registry) -> None:
        results = matcher.search("del", builtin_registry.get_all())
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)

    def test_empty_catalog(self, matcher) -> None:
        assert matcher.search("p", []) == []

    @pytest.mark.parametrize("query", ["p", "del", "add eq", "rev", "trk", "mute", "zzzzzz"])
    def test_every_result_matches_some_field(self, matcher, builtin_registry, query) -> None:
        for result in matcher.search(query, builtin_registry.get_all()):
            entry = result.entry
            fields = [entry.title, FuzzyMatcher.build_search_text(entry), *entry.keywords]
            assert any(matcher.match(query, field) is not None for field in fields), entry.id

    def test_nothing_in_builtin_catalog_matches_zzzzzz(self, matcher, builtin_registry) -> None:
        assert matcher.search("zzzzzz", builtin_registry.get_all()) == []


class TestHighlight:
    """Tests for splitting titles into matched and unmatched runs."""

    def test_prefix(self, matcher) -> None:
        assert matcher.highlight("pl", "Play") == [
            HighlightSegment("Pl", True),
            HighlightSegment("ay", False),
        ]

    def test_alternating(self, matcher) -> None:
        assert matcher.highlight("pa", "Play") == [
            HighlightSegment("P", True),
            HighlightSegment("l", False),
            HighlightSegment("a", True),
            HighlightSegment("y", False),
        ]

    def test_preserves_original_case(self, matcher) -> None:
        segments = matcher.highlight("eq", "Add EQ Eight")
        assert "".join(s.text for s in segments) == "Add EQ Eight"
        assert [s.text for s in segments if s.matched] == ["EQ"]

    def test_case_folding_that_changes_length(self, matcher) -> None:
        """'İ' lowers to two characters; highlighting must follow match()."""
        assert matcher.match("x", "İx") is not None
        assert matcher.highlight("x", "İx") == [
            HighlightSegment("İ", False),
            HighlightSegment("x", True),
        ]
        assert matcher.highlight("i", "İx") == [
            HighlightSegment("İ", True),
            HighlightSegment("x", False),
        ]

    def test_empty_query(self, matcher) -> None:
        assert matcher.highlight("", "Play") == [HighlightSegment("Play", False)]

    def test_empty_text(self, matcher) -> None:
        assert matcher.highlight("p", "") == []
        assert matcher.highlight("", "") == []
