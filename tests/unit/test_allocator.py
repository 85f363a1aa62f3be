"""Unit tests for short code allocation."""

from __future__ import annotations

from shortkeys import ShortNameAllocator, short_name_for


class TestShortNameFor:
    """Test candidate selection."""

    def test_first_letter(self) -> None:
        """Test first letter is used when free."""
        used: set[str] = set()
        assert short_name_for("name", used) == "n"
        assert short_name_for("age", used) == "a"

    def test_first_two_letters(self) -> None:
        """Test first two letters on first-letter conflict."""
        assert short_name_for("summary", {"s"}) == "su"

    def test_later_letters(self) -> None:
        """Test first letter plus a later letter when the first two conflict."""
        # samples: s, sa taken -> sa, sm ...
        assert short_name_for("samples", {"s", "sa"}) == "sm"
        assert short_name_for("samples", {"s", "su"}) == "sa"

    def test_numeric_fallback(self) -> None:
        """Test numeric suffix once every letter candidate is taken."""
        assert short_name_for("ab", {"a", "ab"}) == "a1"
        assert short_name_for("ab", {"a", "ab", "a1", "a2"}) == "a3"

    def test_single_character_name(self) -> None:
        """Test single-character names skip the two-letter step."""
        assert short_name_for("x", set()) == "x"
        assert short_name_for("x", {"x"}) == "x1"

    def test_case_insensitive(self) -> None:
        """Test names are lowercased before picking candidates."""
        assert short_name_for("Title", set()) == "t"
        assert short_name_for("TITLE", {"t"}) == "ti"

    def test_empty_name(self) -> None:
        """Test an empty name falls back to digits."""
        assert short_name_for("", set()) == "1"
        assert short_name_for("", {"1"}) == "2"

    def test_does_not_reserve(self) -> None:
        """Test the pure function leaves the set untouched."""
        used = {"s"}
        short_name_for("summary", used)
        assert used == {"s"}


class TestShortNameAllocator:
    """Test scoped allocation."""

    def test_declaration_order(self) -> None:
        """Test summary, samples, source share an initial letter."""
        allocator = ShortNameAllocator()
        codes = [allocator.allocate(name) for name in ("summary", "samples", "source")]
        assert codes == ["s", "sa", "so"]

    def test_reserves_codes(self) -> None:
        """Test allocated codes are reserved."""
        allocator = ShortNameAllocator()
        allocator.allocate("age")
        assert "a" in allocator
        assert allocator.allocate("address") == "ad"
        assert allocator.used == frozenset({"a", "ad"})
        assert len(allocator) == 2

    def test_same_name_twice(self) -> None:
        """Test the same name gets a new code each time."""
        allocator = ShortNameAllocator()
        assert allocator.allocate("city") == "c"
        assert allocator.allocate("city") == "ci"
        assert allocator.allocate("city") == "ct"

    def test_preclaimed_codes(self) -> None:
        """Test codes passed in at construction are respected."""
        allocator = ShortNameAllocator(used=["n"])
        assert allocator.allocate("name") == "na"

    def test_independent_scopes(self) -> None:
        """Test two allocators do not share state."""
        first = ShortNameAllocator()
        second = ShortNameAllocator()
        assert first.allocate("name") == "n"
        assert second.allocate("name") == "n"
