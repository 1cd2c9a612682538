"""
Tests for role assignment, special roles, seating and the per-round mime.
"""

import random

import pytest

from undercover.core import Player, Role, Room, RoomSettings, RoomStatus, SpecialRole, RoleAssigner
from undercover.core.roles import build_role_pool, parse_special_role

from conftest import HOST_SID


def _room(player_count, **settings):
    players = [Player(id=f"p{i}", name=f"P{i}") for i in range(player_count)]
    return Room(code="TEST", players=players, settings=RoomSettings(**settings))


def _roles(room):
    return [p.role for p in room.players]


def test_role_pool_counts():
    """Test the role pool has the configured bad roles and civilians for the rest."""
    pool = build_role_pool(5, 1, True)
    assert pool.count(Role.UNDERCOVER) == 1
    assert pool.count(Role.MR_WHITE) == 1
    assert pool.count(Role.CIVILIAN) == 3


def test_parse_special_role():
    assert parse_special_role("Joy Fool") == SpecialRole.JOY_FOOL
    assert parse_special_role("duelist") == SpecialRole.DUELIST
    assert parse_special_role(SpecialRole.LOVER) == SpecialRole.LOVER
    with pytest.raises(ValueError):
        parse_special_role("Sheriff")


def test_start_game_five_players(engine, make_room):
    """Test a 5 player game with one undercover and Mr. White deals 3/1/1."""
    room = make_room()
    engine.update_settings(room.code, HOST_SID, {"undercover_count": 1, "include_mr_white": True})
    result = engine.start_game(room.code, HOST_SID)

    assert result.success
    assert room.status == RoomStatus.ROLE_REVEAL
    assert room.round == 1
    roles = _roles(room)
    assert roles.count(Role.CIVILIAN) == 3
    assert roles.count(Role.UNDERCOVER) == 1
    assert roles.count(Role.MR_WHITE) == 1

    for player in room.players:
        if player.role == Role.CIVILIAN:
            assert player.word == room.word_pair.civilian
        elif player.role == Role.UNDERCOVER:
            assert player.word == room.word_pair.undercover
        else:
            assert player.word is None
    assert room.word_pair.civilian != room.word_pair.undercover


def test_lovers_always_include_a_civilian(game_config):
    """Test that at least one lover is a civilian, for many seeds."""
    for seed in range(40):
        room = _room(6, undercover_count=2, include_mr_white=True, special_roles=[SpecialRole.LOVER])
        RoleAssigner(game_config, random.Random(seed)).assign(room)

        lovers = [p for p in room.players if p.special_role == SpecialRole.LOVER]
        assert len(lovers) == 2
        assert any(p.role == Role.CIVILIAN for p in lovers)
        assert lovers[0].special_role_partner == lovers[1].name
        assert lovers[1].special_role_partner == lovers[0].name
        assert set(room.special_role_state.lover_ids) == {p.id for p in lovers}


def test_revenger_is_never_mr_white(game_config):
    for seed in range(40):
        room = _room(5, undercover_count=1, include_mr_white=True, special_roles=[SpecialRole.REVENGER])
        RoleAssigner(game_config, random.Random(seed)).assign(room)

        revenger = next(p for p in room.players if p.special_role == SpecialRole.REVENGER)
        assert revenger.role != Role.MR_WHITE
        assert room.special_role_state.revenger_id == revenger.id


def test_special_roles_go_to_distinct_players(game_config):
    """Test that every enabled special role lands on a different player."""
    room = _room(
        8,
        special_roles=[SpecialRole.JOY_FOOL, SpecialRole.REVENGER, SpecialRole.LOVER, SpecialRole.DUELIST],
    )
    RoleAssigner(game_config, random.Random(7)).assign(room)
    state = room.special_role_state

    holders = [state.joy_fool_id, state.revenger_id] + state.lover_ids + state.duelist_ids
    assert len(holders) == 6
    assert len(set(holders)) == 6
    assert sum(1 for p in room.players if p.special_role is not None) == 6


def test_zero_chance_never_assigns(game_config):
    for seed in range(20):
        room = _room(6, special_roles=[SpecialRole.JOY_FOOL],
                     special_role_chances={SpecialRole.JOY_FOOL: 0})
        RoleAssigner(game_config, random.Random(seed)).assign(room)
        assert room.special_role_state.joy_fool_id is None


def test_special_role_needs_minimum_players(game_config):
    """Test that pair roles are skipped below their minimum player count."""
    room = _room(4, special_roles=[SpecialRole.DUELIST, SpecialRole.LOVER])
    RoleAssigner(game_config, random.Random(3)).assign(room)
    assert all(p.special_role is None for p in room.players)


def test_fair_start_keeps_mr_white_off_first_seat(game_config):
    for seed in range(40):
        room = _room(4, undercover_count=1, include_mr_white=True, fair_start=True)
        RoleAssigner(game_config, random.Random(seed)).assign(room)
        assert room.players[0].role != Role.MR_WHITE


def test_mr_meme_is_never_mr_white(game_config):
    for seed in range(40):
        room = _room(4, undercover_count=1, include_mr_white=True, special_roles=[SpecialRole.MR_MEME])
        assigner = RoleAssigner(game_config, random.Random(seed))
        assigner.assign(room)
        mime = assigner.draw_mr_meme(room)

        assert mime is not None
        assert mime.role != Role.MR_WHITE
        assert room.special_role_state.mr_meme_id == mime.id


def test_mr_meme_disabled(game_config):
    room = _room(4)
    assigner = RoleAssigner(game_config, random.Random(1))
    assigner.assign(room)
    assert assigner.draw_mr_meme(room) is None
    assert room.special_role_state.mr_meme_id is None


def test_start_game_draws_mr_meme(engine, make_room):
    room = make_room()
    engine.update_settings(room.code, HOST_SID, {"special_roles": ["Mr. Meme"]})
    result = engine.start_game(room.code, HOST_SID)

    assert result.success
    assert result.mr_meme["id"] == room.special_role_state.mr_meme_id


def test_civilian_count_for_every_valid_setup(game_config):
    """Test the civilian count over every player count and bad-role mix that can start."""
    rng = random.Random(11)
    for player_count in range(3, 13):
        for undercover_count in range(1, 5):
            for include_mr_white in (False, True):
                civilians = player_count - undercover_count - (1 if include_mr_white else 0)
                if civilians < 2:
                    continue
                room = _room(player_count, undercover_count=undercover_count, include_mr_white=include_mr_white)
                RoleAssigner(game_config, rng).assign(room)
                assert _roles(room).count(Role.CIVILIAN) == civilians
