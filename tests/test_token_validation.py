try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from copypaste.core.errors import TokenValidationError
from copypaste.schemas import TokenInfo
from copypaste.services.token_validation import TokenValidator


class DummyOAuthClient:
    def __init__(self, info: TokenInfo) -> None:
        self.info = info
        self.tokens: list[str] = []

    async def fetch_token_info(self, token: str) -> TokenInfo:
        self.tokens.append(token)
        return self.info


@pytest.mark.anyio
async def test_validate_returns_user_id_for_expected_audience() -> None:
    client = DummyOAuthClient(TokenInfo(audience="ios-client", user_id="u1"))
    validator = TokenValidator(client, expected_audience="ios-client")

    assert await validator.validate("ya29.token") == "u1"
    assert client.tokens == ["ya29.token"]


@pytest.mark.anyio
async def test_validate_strips_bearer_prefix() -> None:
    client = DummyOAuthClient(TokenInfo(audience="ios-client", user_id="u1"))
    validator = TokenValidator(client, expected_audience="ios-client")

    await validator.validate("Bearer ya29.token")

    assert client.tokens == ["ya29.token"]


@pytest.mark.anyio
@pytest.mark.parametrize("audience", ["other-client", "ios-client ", "", None])
async def test_validate_rejects_other_audiences(audience) -> None:
    client = DummyOAuthClient(TokenInfo(audience=audience, user_id="u1"))
    validator = TokenValidator(client, expected_audience="ios-client")

    with pytest.raises(TokenValidationError):
        await validator.validate("ya29.token")


@pytest.mark.anyio
@pytest.mark.parametrize("header", [None, "", "Bearer "])
async def test_validate_rejects_missing_token_without_calling_out(header) -> None:
    client = DummyOAuthClient(TokenInfo(audience="ios-client", user_id="u1"))
    validator = TokenValidator(client, expected_audience="ios-client")

    with pytest.raises(TokenValidationError):
        await validator.validate(header)
    assert client.tokens == []
