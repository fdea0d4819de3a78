"""Precise unit tests for the JSON POST helpers.

Tests focus on argument validation, request encoding, content type selection,
status enforcement, and response ownership.
"""

from __future__ import annotations

import json
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest
from pydantic import BaseModel

from apiclient.jsonapi import (
    ArgumentError,
    PostJsonOptions,
    SerializerOptions,
    post_json,
    post_json_for_response,
    post_json_without_response,
)


class Thing(BaseModel):
    name: str
    other: Optional[str] = None


class Created(BaseModel):
    item_id: int
    display_name: str


def make_response(status: int = 200, body: bytes = b"{}") -> MagicMock:
    response = MagicMock()
    response.status = status
    response.read = AsyncMock(return_value=body)
    if status >= 400:
        response.raise_for_status = MagicMock(
            side_effect=aiohttp.ClientResponseError(
                request_info=MagicMock(), history=(), status=status
            )
        )
    else:
        response.raise_for_status = MagicMock()
    response.__aenter__ = AsyncMock(return_value=response)
    response.__aexit__ = AsyncMock(return_value=None)
    return response


def make_session(response: MagicMock) -> MagicMock:
    session = MagicMock()
    session.closed = False
    session.post = AsyncMock(return_value=response)
    return session


class TestArgumentValidation:
    """Test invalid arguments fail before any network call."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "func", [post_json_for_response, post_json_without_response]
    )
    async def test_none_session(self, func):
        with pytest.raises(ArgumentError) as exc_info:
            await func(None, "https://api.example.com", Thing(name="Foo"))
        assert exc_info.value.param_name == "session"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", [None, "", "   "])
    async def test_blank_url(self, url):
        session = make_session(make_response())

        with pytest.raises(ArgumentError) as exc_info:
            await post_json(session, url, Thing(name="Foo"), Created)

        assert exc_info.value.param_name == "url"
        session.post.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "func", [post_json_for_response, post_json_without_response]
    )
    async def test_none_request(self, func):
        session = make_session(make_response())

        with pytest.raises(ArgumentError) as exc_info:
            await func(session, "https://api.example.com", None)

        assert exc_info.value.param_name == "request"
        session.post.assert_not_called()

    def test_none_serializer_options(self):
        """Test explicitly passing None serializer options is rejected."""
        with pytest.raises(ArgumentError) as exc_info:
            PostJsonOptions(serializer_options=None)  # type: ignore[arg-type]
        assert exc_info.value.param_name == "serializer_options"


class TestPostJsonForResponse:
    """Test the raw-response variant."""

    @pytest.mark.asyncio
    async def test_default_content_type_and_body(self):
        """Test defaults: application/json and the default wire policy."""
        response = make_response()
        session = make_session(response)

        result = await post_json_for_response(session, "https://api.example.com/things", Thing(name="Foo"))

        assert result is response
        args, kwargs = session.post.call_args
        assert args == ("https://api.example.com/things",)
        assert kwargs["data"] == b'{"name":"Foo"}'
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert "timeout" not in kwargs

    @pytest.mark.asyncio
    async def test_charset_content_type(self):
        """Test include_charset adds charset=utf-8."""
        session = make_session(make_response())

        await post_json_for_response(
            session, "https://api.example.com", {"a": 1}, PostJsonOptions(include_charset=True)
        )

        assert session.post.call_args.kwargs["headers"]["Content-Type"] == "application/json; charset=utf-8"

    @pytest.mark.asyncio
    async def test_does_not_check_status_or_release(self):
        """Test the raw response is handed back unchecked and unreleased."""
        response = make_response(status=500)
        session = make_session(response)

        result = await post_json_for_response(session, "https://api.example.com", {"a": 1})

        assert result is response
        response.raise_for_status.assert_not_called()
        response.__aexit__.assert_not_called()

    @pytest.mark.asyncio
    async def test_options_forwarded(self):
        """Test serializer options, headers and timeout reach the request."""
        session = make_session(make_response())
        timeout = aiohttp.ClientTimeout(total=5)
        options = PostJsonOptions(
            serializer_options=SerializerOptions(naming_policy=None, exclude_none=False),
            headers={"Authorization": "Bearer t", "Content-Type": "text/plain"},
            timeout=timeout,
        )

        await post_json_for_response(session, "https://api.example.com", Thing(name="Foo"), options)

        kwargs = session.post.call_args.kwargs
        assert json.loads(kwargs["data"]) == {"name": "Foo", "other": None}
        assert kwargs["headers"] == {"Authorization": "Bearer t", "Content-Type": "application/json"}
        assert kwargs["timeout"] is timeout

    @pytest.mark.asyncio
    async def test_request_type(self):
        """Test request_type serializes only the declared type's fields."""

        class Detailed(Thing):
            extra: str

        session = make_session(make_response())

        await post_json_for_response(
            session,
            "https://api.example.com",
            Detailed(name="Foo", extra="x"),
            PostJsonOptions(request_type=Thing),
        )

        assert session.post.call_args.kwargs["data"] == b'{"name":"Foo"}'


class TestPostJsonWithoutResponse:
    """Test the status-only variant."""

    @pytest.mark.asyncio
    async def test_success_releases_response(self):
        response = make_response(status=204, body=b"")
        session = make_session(response)

        result = await post_json_without_response(session, "https://api.example.com", {"a": 1})

        assert result is None
        response.raise_for_status.assert_called_once()
        response.read.assert_not_called()
        response.__aexit__.assert_called_once()

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        response = make_response(status=404)
        session = make_session(response)

        with pytest.raises(aiohttp.ClientResponseError) as exc_info:
            await post_json_without_response(session, "https://api.example.com", {"a": 1})

        assert exc_info.value.status == 404
        response.__aexit__.assert_called_once()


class TestPostJson:
    """Test the deserializing variant."""

    @pytest.mark.asyncio
    async def test_deserializes_response(self):
        response = make_response(body=b'{"itemId": 5, "displayName": "Foo"}')
        session = make_session(response)

        result = await post_json(session, "https://api.example.com", Thing(name="Foo"), Created)

        assert result == Created(item_id=5, display_name="Foo")
        response.__aexit__.assert_called_once()

    @pytest.mark.asyncio
    async def test_error_status_raises_before_deserialization(self):
        response = make_response(status=500, body=b"not json")
        session = make_session(response)

        with pytest.raises(aiohttp.ClientResponseError):
            await post_json(session, "https://api.example.com", Thing(name="Foo"), Created)

        response.read.assert_not_called()

    @pytest.mark.asyncio
    async def test_malformed_body_propagates(self):
        session = make_session(make_response(body=b"{oops"))

        with pytest.raises(ValueError):
            await post_json(session, "https://api.example.com", Thing(name="Foo"), Created)

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self):
        session = MagicMock()
        session.post = AsyncMock(side_effect=aiohttp.ClientConnectionError("refused"))

        with pytest.raises(aiohttp.ClientConnectionError):
            await post_json(session, "https://api.example.com", Thing(name="Foo"), Created)
