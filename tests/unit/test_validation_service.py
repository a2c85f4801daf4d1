"""
Validation Service Unit Tests
"""

import pytest

from clickrace.core.errors import ErrorCode, ValidationError
from clickrace.services.validation_service import ValidationService


class TestValidationService:
    """Test identifier validation"""

    def setup_method(self):
        self.validation_service = ValidationService(max_room_id_length=10, max_player_name_length=5)

    def test_valid_identifiers_are_stripped(self):
        assert self.validation_service.validate_room_id('  room-1 ') == 'room-1'
        assert self.validation_service.validate_player_name(' Ann ') == 'Ann'

    def test_room_id_case_preserved(self):
        assert self.validation_service.validate_room_id('Lobby') == 'Lobby'

    @pytest.mark.parametrize('room_id', [None, '', '   ', 12, ['r1']])
    def test_missing_room_id(self, room_id):
        with pytest.raises(ValidationError) as exc_info:
            self.validation_service.validate_room_id(room_id)
        assert exc_info.value.code == ErrorCode.MISSING_ROOM_ID

    @pytest.mark.parametrize('player_name', [None, '', '\t', 3.5])
    def test_missing_player_name(self, player_name):
        with pytest.raises(ValidationError) as exc_info:
            self.validation_service.validate_player_name(player_name)
        assert exc_info.value.code == ErrorCode.MISSING_PLAYER_NAME

    def test_room_id_too_long(self):
        with pytest.raises(ValidationError) as exc_info:
            self.validation_service.validate_room_id('r' * 11)

        assert exc_info.value.code == ErrorCode.ROOM_ID_TOO_LONG
        assert exc_info.value.details == {'max_length': 10, 'actual_length': 11}

    def test_player_name_too_long(self):
        with pytest.raises(ValidationError) as exc_info:
            self.validation_service.validate_player_name('Bartholomew')
        assert exc_info.value.code == ErrorCode.PLAYER_NAME_TOO_LONG

    def test_limits_default_from_settings(self):
        service = ValidationService()

        assert service.max_room_id_length == 50
        assert service.max_player_name_length == 20
