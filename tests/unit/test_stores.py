"""
Store Unit Tests
Tests for the room store, the leaderboard index and the connection directory.
"""

import pytest

from clickrace.core.game_states import GameState
from clickrace.core.models import Player, Room
from clickrace.stores.connection_directory import ConnectionDirectory
from clickrace.stores.leaderboard_index import LeaderboardIndex
from clickrace.stores.room_store import RoomStore


class TestRoomStore:
    """Test RoomStore copy semantics"""

    def setup_method(self):
        self.store = RoomStore()

    def test_get_missing_room(self):
        assert self.store.get('nope') is None

    def test_put_then_get(self):
        """Test a stored room can be loaded back"""
        room = Room(room_id='r1', created_at=1.0, game_duration=30)
        room.players['Ann'] = Player(name='Ann', joined_at=1.0, connection_id='c1')

        self.store.put(room)
        loaded = self.store.get('r1')

        assert loaded == room
        assert self.store.list_room_ids() == ['r1']

    def test_loaded_room_is_detached(self):
        """Test mutating a loaded room doesn't change the store until put"""
        self.store.put(Room(room_id='r1', created_at=1.0, game_duration=30))

        loaded = self.store.get('r1')
        loaded.game_state = GameState.PLAYING
        loaded.players['Ann'] = Player(name='Ann', joined_at=1.0, connection_id='c1')

        fresh = self.store.get('r1')
        assert fresh.game_state == GameState.WAITING
        assert fresh.players == {}

    def test_put_replaces_whole_room(self):
        """Test writes are full replacements"""
        room = Room(room_id='r1', created_at=1.0, game_duration=30)
        self.store.put(room)

        room.start(10.0)
        self.store.put(room)

        assert self.store.get('r1').ends_at == 40.0

    def test_playing_rooms_follow_stored_state(self):
        """Test only rooms stored as playing are listed as playing"""
        waiting = Room(room_id='waiting', created_at=1.0, game_duration=30)
        racing = Room(room_id='racing', created_at=1.0, game_duration=30)
        racing.start(10.0)
        self.store.put(waiting)
        self.store.put(racing)

        assert self.store.list_playing_room_ids() == ['racing']

        racing.transition_to(GameState.ENDED)
        self.store.put(racing)

        assert self.store.list_playing_room_ids() == []
        assert sorted(self.store.list_room_ids()) == ['racing', 'waiting']

    def test_unsaved_start_is_not_listed_as_playing(self):
        """Test a loaded room started but never put stays off the playing list"""
        self.store.put(Room(room_id='r1', created_at=1.0, game_duration=30))

        self.store.get('r1').start(10.0)

        assert self.store.list_playing_room_ids() == []


class TestLeaderboardIndex:
    """Test LeaderboardIndex ranking"""

    def setup_method(self):
        self.index = LeaderboardIndex()

    def test_top_n_orders_by_clicks(self):
        self.index.upsert('r1', 'Ann', 3)
        self.index.upsert('r1', 'Bob', 7)
        self.index.upsert('r1', 'Cid', 5)

        names = [entry.player_name for entry in self.index.top_n('r1', 10)]

        assert names == ['Bob', 'Cid', 'Ann']

    def test_upsert_overwrites_player_entry(self):
        """Test a player has a single entry per room"""
        self.index.upsert('r1', 'Ann', 1)
        self.index.upsert('r1', 'Ann', 4)

        entries = self.index.top_n('r1', 10)

        assert len(entries) == 1
        assert entries[0].clicks == 4
        assert self.index.count('r1') == 1

    def test_ties_keep_first_write_order(self):
        """Test equal click counts keep the order players were first inserted"""
        self.index.upsert('r1', 'Ann', 0)
        self.index.upsert('r1', 'Bob', 0)
        self.index.upsert('r1', 'Bob', 2)
        self.index.upsert('r1', 'Ann', 2)

        names = [entry.player_name for entry in self.index.top_n('r1', 10)]

        assert names == ['Ann', 'Bob']

    def test_top_n_limits_and_scopes_by_room(self):
        for i in range(5):
            self.index.upsert('r1', f'p{i}', i)
        self.index.upsert('r2', 'other', 100)

        entries = self.index.top_n('r1', 3)

        assert [entry.clicks for entry in entries] == [4, 3, 2]
        assert all(entry.room_id == 'r1' for entry in entries)

    @pytest.mark.parametrize('n', [0, -1])
    def test_top_n_non_positive(self, n):
        self.index.upsert('r1', 'Ann', 1)
        assert self.index.top_n('r1', n) == []

    def test_unknown_room_is_empty(self):
        assert self.index.top_n('ghost', 10) == []
        assert self.index.count('ghost') == 0


class TestConnectionDirectory:
    """Test ConnectionDirectory bookkeeping and liveness"""

    @pytest.fixture
    def directory(self, fake_clock):
        return ConnectionDirectory(ttl_seconds=60, clock=fake_clock)

    def test_register_and_get(self, directory, fake_clock):
        directory.register('c1')

        connection = directory.get('c1')

        assert connection.connection_id == 'c1'
        assert connection.connected_at == fake_clock.now
        assert connection.room_id is None

    def test_get_returns_copy(self, directory):
        directory.register('c1')

        directory.get('c1').room_id = 'tampered'

        assert directory.get('c1').room_id is None

    def test_bind_unregistered_connection(self, directory):
        """Test binding creates the record when connect was never seen"""
        connection = directory.bind('c1', 'Ann', 'r1')

        assert connection.player_name == 'Ann'
        assert directory.list_by_room('r1') == {'c1'}

    def test_list_by_room_filters_room(self, directory):
        directory.bind('c1', 'Ann', 'r1')
        directory.bind('c2', 'Bob', 'r1')
        directory.bind('c3', 'Cid', 'r2')
        directory.register('c4')

        assert directory.list_by_room('r1') == {'c1', 'c2'}

    def test_list_by_room_skips_expired(self, directory, fake_clock):
        """Test connections not touched within the TTL are not recipients"""
        directory.bind('c1', 'Ann', 'r1')
        fake_clock.advance(30)
        directory.bind('c2', 'Bob', 'r1')
        fake_clock.advance(40)

        assert directory.list_by_room('r1') == {'c2'}

    def test_touch_refreshes_liveness(self, directory, fake_clock):
        directory.bind('c1', 'Ann', 'r1')
        fake_clock.advance(50)

        assert directory.touch('c1') is True
        fake_clock.advance(50)

        assert directory.list_by_room('r1') == {'c1'}
        assert directory.touch('ghost') is False

    def test_delete(self, directory):
        directory.bind('c1', 'Ann', 'r1')

        removed = directory.delete('c1')

        assert removed.player_name == 'Ann'
        assert directory.get('c1') is None
        assert directory.delete('c1') is None

    def test_cleanup_expired(self, directory, fake_clock):
        directory.register('c1')
        fake_clock.advance(61)
        directory.register('c2')

        assert directory.cleanup_expired() == 1
        assert directory.count() == 1
        assert directory.get('c2') is not None

    def test_debug_info(self, directory):
        directory.bind('c1', 'Ann', 'r1')
        directory.bind('c2', 'Bob', 'r1')
        directory.register('c3')

        info = directory.get_debug_info()

        assert info == {
            'total_connections': 3,
            'connections_by_room': {'r1': 2},
            'active_rooms': 1
        }
