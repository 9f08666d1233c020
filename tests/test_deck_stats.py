"""Tests for deck summary statistics."""

from deckforge.models.deck import DeckComposition, DeckStats
from deckforge.models.restriction import UNRESTRICTED
from deckforge.services.deck_builder import try_add
from deckforge.services.deck_stats import count_by_type, group_by_type, summarize


class TestSummarize:
    def test_empty_deck_is_all_zero(self) -> None:
        assert summarize(DeckComposition()) == DeckStats(0, 0, 0, 0, 0)

    def test_single_spell(self, pot_of_greed) -> None:
        deck = try_add(DeckComposition(), pot_of_greed, UNRESTRICTED).composition

        stats = summarize(deck)

        assert stats.spell_count == 1
        assert stats.total == 1
        assert stats.monster_count == 0

    def test_counts_by_category(self, make_card, dark_magician, blue_eyes_ultimate) -> None:
        mirror_force = make_card(44095762, "Mirror Force", "Trap Card")
        raigeki = make_card(12580477, "Raigeki", "Spell Card")
        deck = DeckComposition(
            main=(dark_magician, dark_magician, raigeki, mirror_force),
            extra=(blue_eyes_ultimate,),
        )

        stats = summarize(deck)

        assert stats == DeckStats(
            total=4, extra_count=1, monster_count=2, spell_count=1, trap_count=1
        )

    def test_total_excludes_extra_deck(self, blue_eyes_ultimate) -> None:
        deck = DeckComposition(extra=(blue_eyes_ultimate,))

        stats = summarize(deck)

        assert stats.total == 0
        assert stats.extra_count == 1
        assert stats.monster_count == 0

    def test_spell_and_trap_need_exact_type(self, make_card) -> None:
        # Tags that merely contain the word are not counted
        odd = make_card(1, "Odd", "Spell Card Token")
        deck = DeckComposition(main=(odd,))

        assert summarize(deck).spell_count == 0

    def test_pendulum_and_ritual_monsters_count(self, make_card) -> None:
        deck = DeckComposition(
            main=(
                make_card(1, "Pendulum", "Pendulum Effect Monster"),
                make_card(2, "Ritual", "Ritual Monster"),
            )
        )
        assert summarize(deck).monster_count == 2


class TestGrouping:
    def test_count_by_type(self, make_card) -> None:
        cards = [
            make_card(1, "A", "Fusion Monster"),
            make_card(2, "B", "Link Monster"),
            make_card(3, "C", "Fusion Monster"),
        ]
        assert count_by_type(cards) == {"Fusion Monster": 2, "Link Monster": 1}

    def test_group_by_type_keeps_order(self, make_card) -> None:
        a = make_card(1, "A", "XYZ Monster")
        b = make_card(2, "B", "XYZ Monster")

        assert group_by_type([a, b]) == {"XYZ Monster": [a, b]}
