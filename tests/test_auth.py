"""
Tests for bearer token handling.
"""

from datetime import timedelta

import pytest

from auth import create_access_token, decode_access_token, get_current_user_id
from utils.exceptions import AuthenticationError


class TestTokens:
    
    def test_round_trip_subject(self):
        token = create_access_token("user-42")
        assert decode_access_token(token)["sub"] == "user-42"
    
    def test_expired_token_rejected(self):
        token = create_access_token("user-42", expires_delta=timedelta(seconds=-10))
        assert decode_access_token(token) is None
    
    def test_garbage_rejected(self):
        assert decode_access_token("not.a.token") is None


class TestCurrentUser:
    
    @pytest.mark.asyncio
    async def test_returns_subject(self):
        assert await get_current_user_id(create_access_token("user-7")) == "user-7"
    
    @pytest.mark.asyncio
    async def test_missing_token(self):
        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user_id(None)
        assert exc_info.value.status_code == 401
