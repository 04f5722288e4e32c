"""
Tests for playoff layouts and advancement tables.
"""

from cricket_league.models.match import TBD, MatchStage
from cricket_league.services.bracket_rules import (
    ADVANCEMENT,
    PLAYOFF_LAYOUTS,
    SEEDING,
    build_playoff_matches,
    playoff_stages,
)


def test_layouts_per_qualifier_count():
    assert playoff_stages(2) == (MatchStage.final,)
    assert playoff_stages(3) == (MatchStage.qualifier_1, MatchStage.eliminator, MatchStage.final)
    assert playoff_stages(4) == (
        MatchStage.qualifier_1,
        MatchStage.eliminator,
        MatchStage.qualifier_2,
        MatchStage.final,
    )


def test_unsupported_counts_are_league_only():
    for count in (0, 1, 5, 8):
        assert playoff_stages(count) == ()
        assert build_playoff_matches(count, 1) == []


def test_build_playoff_matches_numbering_continues():
    matches = build_playoff_matches(4, 11)

    assert [m.match_number for m in matches] == [11, 12, 13, 14]
    assert [m.match_type for m in matches] == ["Qualifier 1", "Eliminator", "Qualifier 2", "Final"]
    assert all(m.player1_id == TBD and m.player2_id == TBD for m in matches)
    assert all(m.winner_id is None for m in matches)


def test_tables_only_reference_stages_in_their_layout():
    for count, layout in PLAYOFF_LAYOUTS.items():
        assert set(SEEDING[count]) <= set(layout)
        for source, routes in ADVANCEMENT[count].items():
            assert source in layout
            for _, target, slot in routes:
                assert target in layout
                assert slot in (1, 2)


def test_final_never_feeds_anything():
    for routes in ADVANCEMENT.values():
        assert MatchStage.final not in routes
