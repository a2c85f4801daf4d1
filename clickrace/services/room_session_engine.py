"""
Room Session Engine - Owns the click race room lifecycle.

This service handles:
- Joining rooms (creating them on first join) and re-binding players
- Counting clicks, starting the contest on the first click
- Ending games when their timer expires or when they are found overdue
- Leaderboard and room state queries

Every mutation loads the room, changes it and stores it back while holding
the room's lock; broadcasts go out after the write has completed.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional

from clickrace.config.game_settings import get_game_settings
from clickrace.core.errors import ErrorCode, InactiveGameError, NotFoundError
from clickrace.core.game_states import GameState
from clickrace.core.models import Player, Room
from clickrace.services.concurrency_control_service import ConcurrencyControlService
from clickrace.services.room_state_presenter import RoomStatePresenter
from clickrace.services.validation_service import ValidationService

logger = logging.getLogger(__name__)


class RoomSessionEngine:
    """Room state machine: waiting -> playing -> ended."""

    def __init__(self, room_store, leaderboard_index, connection_directory, broadcast_service, game_timer,
                 validation_service: Optional[ValidationService] = None,
                 concurrency_control: Optional[ConcurrencyControlService] = None,
                 clock: Callable[[], float] = time.time,
                 game_duration: Optional[int] = None,
                 leaderboard_size: Optional[int] = None):
        """Initialize the engine.

        Args:
            room_store: Room Store collaborator
            leaderboard_index: Leaderboard Index collaborator
            connection_directory: Connection Directory collaborator
            broadcast_service: Room fan-out service
            game_timer: Service arming one-shot game end timers
            validation_service: Identifier validation
            concurrency_control: Per-room lock provider
            clock: Time source returning epoch seconds
            game_duration: Seconds a contest lasts in newly created rooms
            leaderboard_size: Entries returned by leaderboard queries
        """
        settings = get_game_settings()
        self.room_store = room_store
        self.leaderboard_index = leaderboard_index
        self.connection_directory = connection_directory
        self.broadcast_service = broadcast_service
        self.game_timer = game_timer
        self.validation_service = validation_service or ValidationService()
        self.concurrency_control = concurrency_control or ConcurrencyControlService()
        self.presenter = RoomStatePresenter()
        self.clock = clock
        self.game_duration = game_duration or settings.game_duration
        self.leaderboard_size = leaderboard_size or settings.leaderboard_size

    def _new_room(self, room_id: str) -> Room:
        return Room(room_id=room_id, created_at=self.clock(), game_duration=self.game_duration)

    def _load_room(self, room_id: str) -> Room:
        room = self.room_store.get(room_id)
        if room is None:
            raise NotFoundError(ErrorCode.ROOM_NOT_FOUND, "Room not found", {'room_id': room_id})
        return room

    def _end_if_overdue(self, room_id: str) -> bool:
        """Finalize a room whose end time has passed without its timer having fired."""
        room = self.room_store.get(room_id)
        if room is not None and room.is_overdue(self.clock()):
            logger.info(f"Room {room_id} is past its end time, ending game")
            return self.end_game(room_id)
        return False

    def join(self, connection_id: str, player_name: Any, room_id: Any) -> Dict[str, Any]:
        """
        Add a player to a room, creating the room if it doesn't exist.

        A player who joins again under the same name keeps their clicks and
        position; only the connection is re-bound.

        Args:
            connection_id: Connection of the joining player
            player_name: Display name, unique within the room
            room_id: Room to join

        Returns:
            The ``joined`` message for the caller

        Raises:
            ValidationError: If player_name or room_id is missing
        """
        player_name = self.validation_service.validate_player_name(player_name)
        room_id = self.validation_service.validate_room_id(room_id)

        self.connection_directory.bind(connection_id, player_name, room_id)
        self._end_if_overdue(room_id)

        with self.concurrency_control.room_operation(room_id):
            room = self.room_store.get(room_id) or self._new_room(room_id)

            existing = room.players.get(player_name)
            if existing is not None:
                existing.connection_id = connection_id
                clicks = existing.clicks
                logger.info(f"Player {player_name} rejoined room {room_id} with {clicks} clicks")
            else:
                room.players[player_name] = Player(name=player_name, joined_at=self.clock(),
                                                   connection_id=connection_id)
                clicks = 0
                logger.info(f"New player {player_name} joined room {room_id}")

            self.room_store.put(room)
            self.leaderboard_index.upsert(room_id, player_name, clicks)

        self.broadcast_service.broadcast_to_room(
            room_id, self.presenter.create_player_joined(room, player_name), exclude_connection_id=connection_id
        )
        return self.presenter.create_joined(room, player_name)

    def click(self, connection_id: str, room_id: Any, player_name: Any) -> Dict[str, Any]:
        """
        Count one click for a player. The first click in a waiting room starts the game.

        Args:
            connection_id: Connection of the clicking player
            room_id: Room the click belongs to
            player_name: Player who clicked

        Returns:
            The ``clickRegistered`` message for the caller

        Raises:
            NotFoundError: If the room or the player doesn't exist
            InactiveGameError: If the game has ended
        """
        room_id = self.validation_service.validate_room_id(room_id)
        player_name = self.validation_service.validate_player_name(player_name)

        self._end_if_overdue(room_id)

        with self.concurrency_control.room_operation(room_id):
            room = self._load_room(room_id)

            if room.game_state == GameState.ENDED:
                raise InactiveGameError(ErrorCode.GAME_NOT_ACTIVE, "Game is not active", {'room_id': room_id})

            player = room.players.get(player_name)
            if player is None:
                raise NotFoundError(
                    ErrorCode.PLAYER_NOT_IN_ROOM,
                    "Player not found in room",
                    {'room_id': room_id, 'player_name': player_name}
                )

            now = self.clock()
            started = False
            if room.game_state == GameState.WAITING:
                room.start(now)
                started = True

            player.clicks += 1
            self.room_store.put(room)

            # Armed as soon as ends_at is stored so a failed index write cannot leave the game without a timer
            if started:
                logger.info(f"Game started in room {room_id} by {player_name}, ends in {room.game_duration}s")
                self.game_timer.arm(room_id, room.ends_at - now, self.end_game)

            self.leaderboard_index.upsert(room_id, player_name, player.clicks)

        self.broadcast_service.broadcast_to_room(room_id, self.presenter.create_score_update(room, self.clock()))
        return self.presenter.create_click_registered(player.clicks)

    def end_game(self, room_id: str) -> bool:
        """
        End a playing game and broadcast the final ranking.

        Returns:
            True if the game was ended by this call, False if there was nothing to end
        """
        with self.concurrency_control.room_operation(room_id):
            room = self.room_store.get(room_id)
            if room is None or room.game_state != GameState.PLAYING:
                logger.debug(f"Ignoring game end for room {room_id}: not playing")
                return False

            room.transition_to(GameState.ENDED)
            self.room_store.put(room)

        message = self.presenter.create_game_ended(room)
        logger.info(f"Game ended in room {room_id}, winner: {message['winner']}")
        self.broadcast_service.broadcast_to_room(room_id, message)
        return True

    def finalize_overdue_rooms(self) -> int:
        """
        End every room that is still playing after its end time.

        Returns:
            Number of rooms ended
        """
        finalized = 0
        for room_id in self.room_store.list_playing_room_ids():
            try:
                if self._end_if_overdue(room_id):
                    finalized += 1
            except Exception as e:
                logger.error(f"Error finalizing room {room_id}: {e}")
        return finalized

    def get_leaderboard(self, room_id: Any) -> Dict[str, Any]:
        """Top entries of a room's leaderboard index, highest clicks first."""
        room_id = self.validation_service.validate_room_id(room_id)
        entries = self.leaderboard_index.top_n(room_id, self.leaderboard_size)
        return self.presenter.create_leaderboard(room_id, entries)

    def get_room_state(self, room_id: Any) -> Dict[str, Any]:
        """
        Current state, players, ranked scores and remaining time of a room.

        Raises:
            NotFoundError: If the room doesn't exist
        """
        room_id = self.validation_service.validate_room_id(room_id)
        self._end_if_overdue(room_id)
        room = self._load_room(room_id)
        return self.presenter.create_room_state(room, self.clock())
