"""
Unit Tests for Note Text Derivation.

Pure functions, no mocks.
"""

from notebook.core.text import UNTITLED_NOTE, derive_title, extract_hashtags


class TestDeriveTitle:
    """Tests for title derivation."""

    def test_uses_first_line(self):
        assert derive_title("Shopping list\nmilk\neggs") == "Shopping list"

    def test_strips_hashtags(self):
        assert derive_title("Buy milk #groceries #today") == "Buy milk"

    def test_leading_hashtag_is_removed_before_taking_first_line(self):
        assert derive_title("#work\nQuarterly report") == "Quarterly report"

    def test_only_hashtags_gives_untitled(self):
        assert derive_title("#a #b") == UNTITLED_NOTE

    def test_whitespace_gives_untitled(self):
        assert derive_title("   \n  ") == UNTITLED_NOTE

    def test_short_line_is_kept_whole(self):
        assert derive_title("Call mom") == "Call mom"

    def test_line_of_exactly_fifty_characters_is_not_truncated(self):
        line = "x" * 50
        assert derive_title(line) == line

    def test_long_line_breaks_at_last_word(self):
        content = "The quick brown fox jumps over the lazy dog and keeps running far away"
        title = derive_title(content)

        assert title == "The quick brown fox jumps over the lazy dog and..."

    def test_long_line_without_late_space_is_hard_cut(self):
        content = "a" * 60
        assert derive_title(content) == "a" * 50

    def test_space_before_position_twenty_is_ignored(self):
        content = "short " + "b" * 60
        assert derive_title(content) == ("short " + "b" * 60)[:50]

    def test_long_body_with_short_first_line(self):
        content = "Title\n" + "word " * 40
        assert derive_title(content) == "Title"

    def test_trailing_spaces_of_first_line_removed(self):
        assert derive_title("Meeting notes   \nagenda") == "Meeting notes"


class TestExtractHashtags:
    """Tests for hashtag extraction."""

    def test_extracts_in_order(self):
        assert extract_hashtags("Buy milk #groceries #today") == ["groceries", "today"]

    def test_lowercases(self):
        assert extract_hashtags("#Work #URGENT") == ["work", "urgent"]

    def test_deduplicates_case_insensitively(self):
        assert extract_hashtags("#A #a #b") == ["a", "b"]

    def test_underscores_and_digits(self):
        assert extract_hashtags("#todo_2 #2024") == ["todo_2", "2024"]

    def test_stops_at_punctuation(self):
        assert extract_hashtags("see #alpha-beta, #gamma.") == ["alpha", "gamma"]

    def test_non_ascii_letters_end_the_tag(self):
        assert extract_hashtags("#café") == ["caf"]

    def test_lone_hash_is_not_a_tag(self):
        assert extract_hashtags("# heading and #") == []

    def test_empty_content(self):
        assert extract_hashtags("") == []
        assert extract_hashtags(None) == []
