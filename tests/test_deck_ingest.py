import pytest

from manaprism.models.color import Color
from manaprism.models.decklist import Deck, DeckEntry
from manaprism.models.failure import EmptyDecklistError, FailureKind, KnownError
from manaprism.services.deck_ingest import DEFAULT_DECK_NAME, ingest_decklist


class TestIngestDecklist:
    @pytest.mark.asyncio
    async def test_builds_deck_from_text(self, sample_decklist, fast_resolver) -> None:
        deck = await ingest_decklist(sample_decklist, fast_resolver)

        assert deck.name == "Imported Deck"
        assert deck.format is None
        assert deck.entries == [
            DeckEntry(name="Lightning Bolt", set_code=None, quantity=4, colors=(Color.RED,)),
            DeckEntry(name="Sol Ring", set_code="C21", quantity=2, colors=()),
            DeckEntry(
                name="Fire // Ice", set_code="MH2", quantity=1, colors=(Color.BLUE, Color.RED)
            ),
            DeckEntry(name="Mountain", set_code=None, quantity=1, colors=()),
        ]

    @pytest.mark.asyncio
    async def test_name_and_format(self, fast_resolver) -> None:
        deck = await ingest_decklist("4 Lightning Bolt", fast_resolver, name="Burn", format="modern")

        assert deck.name == "Burn"
        assert deck.format == "modern"

    @pytest.mark.asyncio
    async def test_blank_name_uses_default(self, fast_resolver) -> None:
        deck = await ingest_decklist("4 Lightning Bolt", fast_resolver, name="")
        assert deck.name == DEFAULT_DECK_NAME

    @pytest.mark.asyncio
    async def test_deck_totals(self, sample_decklist, fast_resolver) -> None:
        deck = await ingest_decklist(sample_decklist, fast_resolver)

        assert deck.total_cards == 8
        assert deck.color_identity == (Color.BLUE, Color.RED)
        assert deck.color_identity_name == "Izzet"

    @pytest.mark.asyncio
    async def test_each_distinct_card_looked_up_once(self, fast_resolver, fake_provider) -> None:
        text = "4 Lightning Bolt\n2 Counterspell\n1 Lightning Bolt (M10)"

        deck = await ingest_decklist(text, fast_resolver)

        assert len(deck.entries) == 3
        assert fake_provider.calls == ["Lightning Bolt", "Counterspell"]
        assert deck.entries[2].colors == (Color.RED,)

    @pytest.mark.asyncio
    async def test_unknown_card_comes_through_colorless(self, fast_resolver) -> None:
        deck = await ingest_decklist("1 Not A Real Card\n1 Counterspell", fast_resolver)

        assert deck.entries[0].colors == ()
        assert deck.entries[1].colors == (Color.BLUE,)

    @pytest.mark.asyncio
    async def test_empty_text_raises(self, fast_resolver, fake_provider) -> None:
        with pytest.raises(EmptyDecklistError) as exc_info:
            await ingest_decklist("// just a comment\n\n", fast_resolver)

        assert exc_info.value.line_count == 3
        assert exc_info.value.kind == FailureKind.EMPTY_RESULT
        assert fake_provider.calls == []

    @pytest.mark.asyncio
    async def test_empty_string_raises_known_error(self, fast_resolver) -> None:
        with pytest.raises(KnownError) as exc_info:
            await ingest_decklist("", fast_resolver)

        detail = exc_info.value.to_detail()
        assert detail.kind == FailureKind.EMPTY_RESULT
        assert detail.suggestion is not None


class TestDeck:
    def test_empty_deck(self) -> None:
        deck = Deck(name="Empty")
        assert deck.total_cards == 0
        assert deck.color_identity == ()
        assert deck.color_identity_name == "Colorless"

    def test_color_identity_is_union(self) -> None:
        deck = Deck(
            name="Boros",
            entries=[
                DeckEntry(name="Lightning Helix", set_code=None, quantity=2, colors=(Color.WHITE, Color.RED)),
                DeckEntry(name="Lightning Bolt", set_code=None, quantity=4, colors=(Color.RED,)),
            ],
        )
        assert deck.color_identity == (Color.WHITE, Color.RED)
        assert deck.color_identity_name == "Boros"
