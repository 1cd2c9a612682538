"""
Pytest fixtures for Undercover game tests.
"""

import random

import pytest

from undercover.config.game_config import GameConfig
from undercover.core import IdGenerator, RoomRegistry, RoomStatus, SpecialRole, SpecialRoleState, Role
from undercover.core.game_engine import GameEngine
from undercover.words import WordCatalog, WordPair


HOST_SID = "host-sid"

TEST_PAIRS = [
    ("Cat", "Dog", "Animals"),
    ("Lion", "Tiger", "Animals"),
    ("Pizza", "Burger", "Food"),
    ("Coffee", "Tea", "Food"),
]


@pytest.fixture
def game_config():
    """Test game configuration."""
    return GameConfig(
        use_announcements=False,  # Disable for cleaner test output
        custom_words_path=None,
    )


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def catalog():
    """In-memory catalog with a handful of pairs and no persistence."""
    defaults = [
        WordPair(civilian=civilian, undercover=undercover, category=category, id=index + 1, is_default=True)
        for index, (civilian, undercover, category) in enumerate(TEST_PAIRS)
    ]
    return WordCatalog(defaults=defaults, custom_path=None)


@pytest.fixture
def registry(game_config, catalog, rng):
    return RoomRegistry(game_config, IdGenerator(game_config, rng), catalog)


@pytest.fixture
def engine(registry, catalog, game_config, rng):
    return GameEngine(registry, catalog, game_config, rng)


@pytest.fixture
def make_room(registry):
    """Factory creating a lobby hosted by the first name, with the rest added."""
    def _make_room(names=("Alice", "Bob", "Carol", "Dave", "Eve")):
        room = registry.create_room(HOST_SID, names[0]).room
        for name in names[1:]:
            registry.add_player(room.code, HOST_SID, name)
        return room
    return _make_room


def by_name(room):
    """Players of a room keyed by name. Re-read after an undo, which swaps in copies."""
    return {p.name: p for p in room.players}


def rig_game(room, roles, lovers=(), duelists=(), revenger=None, joy_fool=None,
             word_pair=None):
    """
    Put a room straight into PLAYING with fixed roles, skipping the random deal.

    Args:
        roles: Name to Role for every player in the room.
        lovers, duelists: Pairs of names.
        revenger, joy_fool: Single names.
    """
    word_pair = word_pair or WordPair(civilian="Cat", undercover="Dog", category="Animals", id=1, is_default=True)
    players = by_name(room)
    state = SpecialRoleState()

    for name, role in roles.items():
        player = players[name]
        player.reset_for_new_game()
        player.role = role
        player.has_revealed = True
        if role == Role.CIVILIAN:
            player.word = word_pair.civilian
        elif role == Role.UNDERCOVER:
            player.word = word_pair.undercover

    def pair(names, special_role):
        first, second = players[names[0]], players[names[1]]
        first.special_role = second.special_role = special_role
        first.special_role_partner = second.name
        second.special_role_partner = first.name
        return [first.id, second.id]

    if lovers:
        state.lover_ids = pair(lovers, SpecialRole.LOVER)
    if duelists:
        state.duelist_ids = pair(duelists, SpecialRole.DUELIST)
    if revenger:
        players[revenger].special_role = SpecialRole.REVENGER
        state.revenger_id = players[revenger].id
    if joy_fool:
        players[joy_fool].special_role = SpecialRole.JOY_FOOL
        state.joy_fool_id = players[joy_fool].id

    room.word_pair = word_pair
    room.special_role_state = state
    room.status = RoomStatus.PLAYING
    room.round = 1
    room.mr_white_guesser_id = None
    room.undo_stack.clear()
    room.update_speaking_order()
    return players


@pytest.fixture
def rig():
    return rig_game


@pytest.fixture
def names():
    return by_name
