"""
Inbound action variants.

Client messages are parsed into a closed set of frozen dataclasses. Anything
that is not a recognized action name becomes an UnrecognizedAction so the
router can answer it explicitly.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Type, Union


@dataclass(frozen=True)
class JoinAction:
    player_name: Optional[str]
    room_id: Optional[str]


@dataclass(frozen=True)
class ClickAction:
    room_id: Optional[str]
    player_name: Optional[str]


@dataclass(frozen=True)
class GetLeaderboardAction:
    room_id: Optional[str]


@dataclass(frozen=True)
class GetRoomStateAction:
    room_id: Optional[str]


@dataclass(frozen=True)
class UnrecognizedAction:
    name: Optional[str]


Action = Union[JoinAction, ClickAction, GetLeaderboardAction, GetRoomStateAction, UnrecognizedAction]

# Wire name -> variant
ACTION_NAMES: Dict[str, Type] = {
    'join': JoinAction,
    'click': ClickAction,
    'getLeaderboard': GetLeaderboardAction,
    'getRoomState': GetRoomStateAction,
}

ACTION_TYPES: Tuple[Type, ...] = tuple(ACTION_NAMES.values()) + (UnrecognizedAction,)

# Socket.IO event carrying {"action": "<name>", ...} in a single envelope
ENVELOPE_EVENT = 'action'


def _field(payload: Dict[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    return value if isinstance(value, str) else None


def parse_action(name: Optional[str], payload: Any) -> Action:
    """
    Build the action variant for an inbound event.

    Args:
        name: Event or action name as sent by the client
        payload: Event data, expected to be a dict

    Returns:
        One of the action variants; never raises
    """
    data = payload if isinstance(payload, dict) else {}

    if name == ENVELOPE_EVENT:
        name = data.get('action') if isinstance(data.get('action'), str) else None

    if name == 'join':
        return JoinAction(player_name=_field(data, 'playerName'), room_id=_field(data, 'roomId'))
    if name == 'click':
        return ClickAction(room_id=_field(data, 'roomId'), player_name=_field(data, 'playerName'))
    if name == 'getLeaderboard':
        return GetLeaderboardAction(room_id=_field(data, 'roomId'))
    if name == 'getRoomState':
        return GetRoomStateAction(room_id=_field(data, 'roomId'))
    return UnrecognizedAction(name=name)
