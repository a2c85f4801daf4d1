"""
Domain Model Unit Tests
Tests room state transitions, ranking and remaining time.
"""

import pytest

from clickrace.core.errors import ErrorCode, InvalidStateTransitionError
from clickrace.core.game_states import GameState
from clickrace.core.models import Connection, LeaderboardEntry, Player, Room


def make_room(*names, duration=30):
    room = Room(room_id='r1', created_at=0.0, game_duration=duration)
    for i, name in enumerate(names):
        room.players[name] = Player(name=name, joined_at=float(i), connection_id=f'c{i}')
    return room


class TestGameState:
    """Test forward-only transitions"""

    @pytest.mark.parametrize('current,target,allowed', [
        (GameState.WAITING, GameState.PLAYING, True),
        (GameState.PLAYING, GameState.ENDED, True),
        (GameState.WAITING, GameState.ENDED, False),
        (GameState.PLAYING, GameState.WAITING, False),
        (GameState.ENDED, GameState.PLAYING, False),
        (GameState.ENDED, GameState.WAITING, False),
    ])
    def test_can_transition_to(self, current, target, allowed):
        assert current.can_transition_to(target) is allowed


class TestRoom:
    """Test Room behaviour"""

    def test_new_room_defaults(self):
        room = make_room()

        assert room.game_state == GameState.WAITING
        assert room.started_at is None
        assert room.ends_at is None
        assert room.player_names == []

    def test_start_sets_window(self):
        room = make_room('Ann')

        room.start(100.0)

        assert room.game_state == GameState.PLAYING
        assert room.started_at == 100.0
        assert room.ends_at == 130.0

    def test_start_twice_rejected(self):
        """Test the end timestamp can't be moved once set"""
        room = make_room('Ann')
        room.start(100.0)

        with pytest.raises(InvalidStateTransitionError):
            room.start(200.0)
        assert room.ends_at == 130.0

    def test_backward_transition_rejected(self):
        room = make_room('Ann')
        room.start(0.0)
        room.transition_to(GameState.ENDED)

        with pytest.raises(InvalidStateTransitionError) as exc_info:
            room.transition_to(GameState.PLAYING)

        assert exc_info.value.code == ErrorCode.INVALID_STATE_TRANSITION
        assert exc_info.value.details == {'room_id': 'r1', 'from': 'ended', 'to': 'playing'}

    def test_skip_to_ended_rejected(self):
        with pytest.raises(InvalidStateTransitionError):
            make_room().transition_to(GameState.ENDED)

    def test_ranked_scores_stable_on_ties(self):
        """Test descending order with ties in join order"""
        room = make_room('Ann', 'Bob', 'Cid', 'Dee')
        room.players['Ann'].clicks = 1
        room.players['Bob'].clicks = 3
        room.players['Cid'].clicks = 1
        room.players['Dee'].clicks = 3

        assert room.ranked_scores() == [
            {'name': 'Bob', 'clicks': 3},
            {'name': 'Dee', 'clicks': 3},
            {'name': 'Ann', 'clicks': 1},
            {'name': 'Cid', 'clicks': 1},
        ]

    def test_ranked_scores_empty_room(self):
        assert make_room().ranked_scores() == []

    @pytest.mark.parametrize('elapsed,expected', [
        (0.0, 30),
        (0.1, 30),
        (14.5, 16),
        (29.9, 1),
        (30.0, 0),
        (45.0, 0),
    ])
    def test_time_remaining_rounds_up_and_floors_at_zero(self, elapsed, expected):
        room = make_room('Ann')
        room.start(1000.0)

        assert room.time_remaining(1000.0 + elapsed) == expected

    def test_time_remaining_before_start_is_full_duration(self):
        assert make_room('Ann', duration=45).time_remaining(123.0) == 45

    def test_is_overdue_only_while_playing(self):
        room = make_room('Ann')
        assert room.is_overdue(10_000.0) is False

        room.start(0.0)
        assert room.is_overdue(29.0) is False
        assert room.is_overdue(30.0) is True

        room.transition_to(GameState.ENDED)
        assert room.is_overdue(100.0) is False


class TestConnection:

    def test_is_live(self):
        connection = Connection(connection_id='c1', connected_at=0.0, last_seen=100.0)

        assert connection.is_live(159.0, 60) is True
        assert connection.is_live(160.0, 60) is False


class TestLeaderboardEntry:

    def test_to_dict_uses_wire_names(self):
        entry = LeaderboardEntry(room_id='r1', player_name='Ann', clicks=4)

        assert entry.to_dict() == {'name': 'Ann', 'clicks': 4}
        assert entry.sort_key == 4
