"""
Fuzzy matching for palette search.

Scores a query as an in-order subsequence of a target string, rewarding
contiguous runs, word starts and matches near the front.
"""

from collections.abc import Sequence

from cmdpal.config.constants import (
    DEFAULT_WEIGHTS,
    EARLY_POSITION_LIMIT,
    WORD_BOUNDARY_CHARS,
    ScoringWeights,
)

from .models import ActionEntry, HighlightSegment, SearchResult


class FuzzyMatcher:
    """Subsequence matcher with position and contiguity bonuses."""

    def __init__(self, weights: ScoringWeights | None = None):
        self.weights = weights or DEFAULT_WEIGHTS

    def match(self, query: str, target: str) -> int | None:
        """
        Score ``query`` against ``target``.

        Args:
            query: Characters to find, in order
            target: Text to search in

        Returns:
            The accumulated score, or None if the query is not a subsequence
            of the target. Empty query or target never matches.
        """
        if not query or not target:
            return None

        query = query.lower()
        target = target.lower()

        score = 0
        query_index = 0
        last_match_index = -1

        for i, char in enumerate(target):
            if query_index == len(query):
                break
            if char != query[query_index]:
                continue

            score += 1

            # last_match_index starts at -1, so a hit on the first character counts too
            if i == last_match_index + 1:
                score += self.weights.consecutive_bonus

            if i == 0 or target[i - 1] in WORD_BOUNDARY_CHARS:
                score += self.weights.word_boundary_bonus

            if i < EARLY_POSITION_LIMIT:
                score += self.weights.early_position_bonus

            last_match_index = i
            query_index += 1

        return score if query_index == len(query) else None

    def score_entry(self, query: str, entry: ActionEntry) -> int:
        """Best of the title, combined-text and keyword scores (0 if none match)."""
        title_score = self.match(query, entry.title)
        if title_score is not None:
            title_score *= self.weights.title_multiplier

        text_score = self.match(query, self.build_search_text(entry))

        keyword_score = None
        for keyword in entry.keywords:
            k_score = self.match(query, keyword)
            if k_score is not None:
                keyword_score = (keyword_score or 0) + k_score + self.weights.keyword_bonus

        return max(title_score or 0, text_score or 0, keyword_score or 0)

    def search(self, query: str, entries: Sequence[ActionEntry]) -> list[SearchResult]:
        """
        Rank entries against a query.

        An empty or whitespace-only query returns every entry with score 0 in
        input order. Otherwise only entries scoring above zero are returned,
        best first; equal scores keep their input order.
        """
        if not query or not query.strip():
            return [SearchResult(entry=entry, score=0) for entry in entries]

        query = query.strip()
        results = []
        for entry in entries:
            score = self.score_entry(query, entry)
            if score > 0:
                results.append(SearchResult(entry=entry, score=score))

        # list.sort is stable, so ties stay in catalog order
        results.sort(key=lambda r: -r.score)
        return results

    @staticmethod
    def build_search_text(entry: ActionEntry) -> str:
        """Title, keywords, description and category joined by single spaces."""
        parts = [entry.title, *entry.keywords]
        if entry.description:
            parts.append(entry.description)
        if entry.category:
            parts.append(entry.category)
        return " ".join(part for part in parts if part)

    def highlight(self, query: str, text: str) -> list[HighlightSegment]:
        """Split ``text`` into runs consumed / not consumed by the match walk."""
        if not query:
            return [HighlightSegment(text=text, matched=False)] if text else []

        query = query.lower()
        segments: list[HighlightSegment] = []
        query_index = 0
        current = ""
        in_match = False

        for char in text:
            # lower() can expand a character, so walk its lowered form
            is_match = False
            for lowered in char.lower():
                if query_index < len(query) and lowered == query[query_index]:
                    query_index += 1
                    is_match = True

            if is_match != in_match:
                if current:
                    segments.append(HighlightSegment(text=current, matched=in_match))
                current = ""
                in_match = is_match

            current += char

        if current:
            segments.append(HighlightSegment(text=current, matched=in_match))

        return segments
