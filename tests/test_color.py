import itertools

import pytest

from manaprism.models.color import (
    COLOR_ORDER,
    COLOR_PAIR_NAMES,
    COLOR_QUAD_NAMES,
    COLOR_TRIO_NAMES,
    Color,
    canonical_key,
    display_name,
    normalize_colors,
    parse_color,
)


class TestColor:
    def test_colors_compare_equal_to_letters(self) -> None:
        assert Color.WHITE == "W"
        assert Color.BLUE == "U"
        assert Color.BLACK == "B"
        assert Color.RED == "R"
        assert Color.GREEN == "G"

    def test_canonical_order_is_wubrg(self) -> None:
        assert "".join(c.value for c in COLOR_ORDER) == "WUBRG"

    def test_display_name(self) -> None:
        assert Color.RED.display_name == "Red"

    def test_parse_color_is_case_insensitive(self) -> None:
        assert parse_color("r") is Color.RED
        assert parse_color(" G ") is Color.GREEN
        assert parse_color(Color.BLUE) is Color.BLUE

    def test_parse_color_rejects_unknown(self) -> None:
        assert parse_color("C") is None
        assert parse_color("X") is None
        assert parse_color("") is None


class TestNormalizeColors:
    def test_sorts_canonically(self) -> None:
        assert normalize_colors(["G", "W", "U"]) == (Color.WHITE, Color.BLUE, Color.GREEN)

    def test_removes_duplicates(self) -> None:
        assert normalize_colors(["R", "R", "r"]) == (Color.RED,)

    def test_none_is_empty(self) -> None:
        assert normalize_colors(None) == ()
        assert normalize_colors([]) == ()

    def test_ignores_unknown_symbols_by_default(self) -> None:
        assert normalize_colors(["R", "X"]) == (Color.RED,)

    def test_strict_rejects_unknown_symbols(self) -> None:
        with pytest.raises(ValueError, match="Unknown color symbol"):
            normalize_colors(["R", "X"], strict=True)

    def test_accepts_generators(self) -> None:
        assert normalize_colors(c for c in "UW") == (Color.WHITE, Color.BLUE)


class TestCanonicalKey:
    def test_empty_set_is_c(self) -> None:
        assert canonical_key([]) == "C"
        assert canonical_key(None) == "C"

    def test_orders_members(self) -> None:
        assert canonical_key(["G", "W", "U"]) == "WUG"
        assert canonical_key([Color.RED, Color.BLACK]) == "BR"

    def test_deduplicates_before_keying(self) -> None:
        assert canonical_key(["U", "W", "U"]) == "WU"

    def test_every_subset_keys_in_wubrg_suborder(self) -> None:
        """Keys are the WUBRG letters in order, or C for the empty set."""
        for size in range(6):
            for combo in itertools.permutations("WUBRG", size):
                key = canonical_key(combo)
                if size == 0:
                    assert key == "C"
                else:
                    assert key == "".join(c for c in "WUBRG" if c in combo)


class TestDisplayName:
    def test_colorless(self) -> None:
        assert display_name([]) == "Colorless"
        assert display_name(None) == "Colorless"

    def test_mono(self) -> None:
        assert display_name(["R"]) == "Mono Red"
        assert display_name(["W"]) == "Mono White"

    def test_guilds_in_any_order(self) -> None:
        assert display_name(["U", "W"]) == "Azorius"
        assert display_name(["G", "R"]) == "Gruul"
        assert display_name(["W", "R"]) == "Boros"

    def test_shards_and_wedges(self) -> None:
        assert display_name(["B", "U", "W"]) == "Esper"
        assert display_name(["W", "R", "U"]) == "Jeskai"
        assert display_name(["G", "B", "R"]) == "Jund"

    def test_four_color_named_by_missing_color(self) -> None:
        assert display_name(["W", "U", "B", "R"]) == "Yore-Tiller (Non-Green)"
        assert "Non-White" in display_name(["U", "B", "R", "G"])

    def test_five_color(self) -> None:
        assert display_name(["G", "R", "B", "U", "W"]) == "Five Color"

    def test_lattice_is_complete(self) -> None:
        assert len(COLOR_PAIR_NAMES) == 10
        assert len(COLOR_TRIO_NAMES) == 10
        assert len(COLOR_QUAD_NAMES) == 5
        for combo in itertools.combinations("WUBRG", 2):
            assert "".join(combo) in COLOR_PAIR_NAMES
        for combo in itertools.combinations("WUBRG", 3):
            assert "".join(combo) in COLOR_TRIO_NAMES
        for combo in itertools.combinations("WUBRG", 4):
            assert "".join(combo) in COLOR_QUAD_NAMES
