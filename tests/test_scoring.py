"""
Tests for end-of-game scoring, the leaderboard and score resets.
"""

from undercover.core import RejectReason, Role

from conftest import HOST_SID

C, U, W = Role.CIVILIAN, Role.UNDERCOVER, Role.MR_WHITE

SIX_PLAYERS = ("Alice", "Bob", "Carol", "Dave", "Eve", "Frank")


def test_duel_loser_and_winner(engine, make_room, rig):
    """Test that the first duelist out loses 2 points and the other gains 2."""
    room = make_room(SIX_PLAYERS)
    players = rig(room, {"Alice": C, "Bob": C, "Carol": C, "Dave": C, "Eve": U, "Frank": C},
                  duelists=("Alice", "Bob"))

    engine.eliminate_player(room.code, players["Alice"].id)
    result = engine.eliminate_player(room.code, players["Eve"].id)

    assert result.winners == ["Civilian"]
    scores = {line["name"]: line for line in result.score_results}
    assert scores["Alice"]["points_this_game"] == 8
    assert "-2 Lost Duel" in scores["Alice"]["breakdown"]
    assert scores["Bob"]["points_this_game"] == 17
    assert "+2 Won Duel" in scores["Bob"]["breakdown"]
    assert scores["Carol"]["points_this_game"] == 15
    assert scores["Eve"]["points_this_game"] == 0


def test_unresolved_duel_scores_nothing(engine, make_room, rig):
    room = make_room(SIX_PLAYERS)
    players = rig(room, {"Alice": C, "Bob": C, "Carol": C, "Dave": C, "Eve": U, "Frank": C},
                  duelists=("Alice", "Bob"))

    result = engine.eliminate_player(room.code, players["Eve"].id)
    scores = {line["name"]: line["points_this_game"] for line in result.score_results}
    assert scores["Alice"] == 15
    assert scores["Bob"] == 15


def test_joy_fool_first_out_bonus(engine, make_room, rig):
    room = make_room()
    players = rig(room, {"Alice": C, "Bob": C, "Carol": C, "Dave": C, "Eve": U}, joy_fool="Alice")

    engine.eliminate_player(room.code, players["Alice"].id)
    result = engine.eliminate_player(room.code, players["Eve"].id)

    scores = {line["name"]: line for line in result.score_results}
    assert scores["Alice"]["points_this_game"] == 14
    assert "+4 Joy Fool First Out" in scores["Alice"]["breakdown"]


def test_joy_fool_not_first_out(engine, make_room, rig):
    room = make_room()
    players = rig(room, {"Alice": C, "Bob": C, "Carol": C, "Dave": C, "Eve": U}, joy_fool="Alice")

    engine.eliminate_player(room.code, players["Bob"].id)
    engine.eliminate_player(room.code, players["Alice"].id)
    result = engine.eliminate_player(room.code, players["Eve"].id)

    scores = {line["name"]: line["points_this_game"] for line in result.score_results}
    assert scores["Alice"] == 10


def test_score_results_sorted_and_archived(engine, make_room, rig):
    room = make_room()
    players = rig(room, {"Alice": C, "Bob": C, "Carol": C, "Dave": U, "Eve": W})
    engine.eliminate_player(room.code, players["Eve"].id)
    result = engine.mr_white_guess(room.code, "cat")

    points = [line["points_this_game"] for line in result.score_results]
    assert points == sorted(points, reverse=True)
    assert result.leaderboard[0]["name"] == "Eve"

    assert len(room.game_history) == 1
    entry = room.game_history[0]
    assert entry["game"] == 1
    assert entry["winners"] == ["Mr. White"]
    assert entry["word_pair"]["civilian"] == "Cat"


def test_counters_and_cumulative_scores(engine, make_room, rig):
    """Test that scores accumulate across play-again and games are counted."""
    room = make_room()
    roles = {"Alice": C, "Bob": C, "Carol": C, "Dave": C, "Eve": U}

    for _ in range(2):
        players = rig(room, roles)
        engine.eliminate_player(room.code, players["Eve"].id)
        engine.play_again(room.code, HOST_SID)

    alice = room.find_player_by_name("Alice")
    eve = room.find_player_by_name("Eve")
    assert alice.score == 30
    assert alice.games_played == 2
    assert alice.games_won == 2
    assert eve.games_played == 2
    assert eve.games_won == 0
    assert len(room.game_history) == 2


def test_reset_scores(engine, make_room, rig):
    room = make_room()
    players = rig(room, {"Alice": C, "Bob": C, "Carol": C, "Dave": C, "Eve": U})
    engine.eliminate_player(room.code, players["Eve"].id)

    assert engine.reset_scores(room.code, "not-the-host").reason == RejectReason.NOT_HOST
    assert engine.reset_scores(room.code, HOST_SID).success
    assert room.game_history == []
    assert all(p.score == 0 and p.games_played == 0 and p.games_won == 0 for p in room.players)


def test_duelist_taken_by_revenge_loses_the_duel(engine, make_room, rig):
    """Test that a Duelist killed by the Revenger's pick counts as first out."""
    room = make_room(SIX_PLAYERS)
    players = rig(room, {"Alice": C, "Bob": C, "Carol": C, "Dave": C, "Eve": U, "Frank": C},
                  duelists=("Alice", "Bob"), revenger="Carol")

    assert engine.eliminate_player(room.code, players["Carol"].id).revenge_pending
    assert engine.revenger_revenge(room.code, players["Alice"].id).continue_game
    assert room.special_role_state.first_eliminated_duelist_id == players["Alice"].id

    result = engine.eliminate_player(room.code, players["Eve"].id)
    assert result.winners == ["Civilian"]
    scores = {line["name"]: line for line in result.score_results}
    assert scores["Alice"]["points_this_game"] == 8
    assert "-2 Lost Duel" in scores["Alice"]["breakdown"]
    assert scores["Bob"]["points_this_game"] == 17
    assert "+2 Won Duel" in scores["Bob"]["breakdown"]
