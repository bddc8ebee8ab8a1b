"""Unit tests for CSRF token generation, comparison and the FastAPI dependency."""

import re
from unittest.mock import MagicMock, patch

import pytest

from request_guard.core.csrf import (
    TOKEN_LENGTH,
    generate_token,
    validate_token,
    verify_csrf_token,
)
from request_guard.core.errors import ForbiddenAppError

HEX_64 = re.compile(r"[0-9a-f]{64}")


class TestGenerateToken:
    def test_is_64_lowercase_hex(self) -> None:
        for _ in range(20):
            assert HEX_64.fullmatch(generate_token())

    def test_successive_tokens_differ(self) -> None:
        assert len({generate_token() for _ in range(50)}) == 50

    def test_uses_csprng(self) -> None:
        with patch("request_guard.core.csrf.secrets.token_hex", return_value="ab" * 32) as token_hex:
            assert generate_token() == "ab" * 32
        token_hex.assert_called_once_with(32)


class TestValidateToken:
    def test_same_token_valid(self) -> None:
        token = generate_token()
        assert validate_token(token, token) is True

    def test_different_tokens_invalid(self) -> None:
        assert validate_token(generate_token(), generate_token()) is False

    @pytest.mark.parametrize("length", [0, 1, 32, 63, 65, 128])
    def test_wrong_length_invalid_even_if_equal(self, length: int) -> None:
        token = "a" * length
        assert validate_token(token, token) is False

    def test_any_64_char_value_accepted_when_equal(self) -> None:
        token = "Z" * TOKEN_LENGTH
        assert validate_token(token, token) is True

    def test_non_string_inputs_invalid(self) -> None:
        token = generate_token()
        assert validate_token(None, token) is False  # type: ignore[arg-type]
        assert validate_token(token, None) is False  # type: ignore[arg-type]

    def test_uses_constant_time_comparison(self) -> None:
        token = generate_token()
        with patch("request_guard.core.csrf.hmac.compare_digest", return_value=True) as compare:
            validate_token(token, token)
        compare.assert_called_once()


def _request(header: str | None, cookie: str | None) -> MagicMock:
    request = MagicMock()
    request.headers = {} if header is None else {"X-CSRF-Token": header}
    request.cookies = {} if cookie is None else {"csrf_token": cookie}
    request.url.path = "/v1/feedback"
    return request


class TestVerifyCSRFDependency:
    @pytest.mark.asyncio
    async def test_matching_header_and_cookie_pass(self) -> None:
        token = generate_token()
        await verify_csrf_token(_request(token, token))

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "header,cookie",
        [
            (None, None),
            ("a" * 64, None),
            (None, "a" * 64),
            ("a" * 64, "b" * 64),
        ],
    )
    async def test_rejects_missing_or_mismatched(self, header, cookie) -> None:
        with pytest.raises(ForbiddenAppError) as exc_info:
            await verify_csrf_token(_request(header, cookie))
        assert exc_info.value.code == "csrf_invalid"

    @pytest.mark.asyncio
    @patch("request_guard.core.csrf.settings")
    async def test_skipped_when_disabled(self, mock_settings) -> None:
        mock_settings.app.csrf_enabled = False
        await verify_csrf_token(_request(None, None))
