# -*- coding: utf-8 -*-
# pylint: disable=redefined-outer-name
"""
Unit tests for the object store and key-value views over JetStream.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest
from nats.js.api import KeyValueConfig, ObjectStoreConfig

from nats_deployment.messaging import KeyValueContext, ObjectStoreContext


@pytest.fixture
def jetstream():
    js = MagicMock()
    js.create_object_store = AsyncMock(return_value="object-store")
    js.object_store = AsyncMock(return_value="object-store")
    js.delete_object_store = AsyncMock(return_value=True)
    js.create_key_value = AsyncMock(return_value="kv")
    js.key_value = AsyncMock(return_value="kv")
    js.delete_key_value = AsyncMock(return_value=True)
    return js


class TestObjectStoreContext:
    @pytest.mark.asyncio
    async def test_create_bucket_with_limit(self, jetstream):
        context = ObjectStoreContext(jetstream)

        store = await context.create_bucket("orders", max_bytes=1024)

        assert store == "object-store"
        kwargs = jetstream.create_object_store.await_args.kwargs
        assert kwargs["bucket"] == "orders"
        assert isinstance(kwargs["config"], ObjectStoreConfig)
        assert kwargs["config"].bucket == "orders"
        assert kwargs["config"].max_bytes == 1024

    @pytest.mark.asyncio
    async def test_create_bucket_unlimited(self, jetstream):
        context = ObjectStoreContext(jetstream)

        await context.create_bucket("orders")

        config = jetstream.create_object_store.await_args.kwargs["config"]
        assert config.max_bytes is None

    @pytest.mark.asyncio
    async def test_create_bucket_error_propagates(self, jetstream):
        jetstream.create_object_store.side_effect = RuntimeError("denied")
        context = ObjectStoreContext(jetstream)

        with pytest.raises(RuntimeError):
            await context.create_bucket("orders")

    @pytest.mark.asyncio
    async def test_get_and_delete_bucket(self, jetstream):
        context = ObjectStoreContext(jetstream)

        assert await context.get_bucket("orders") == "object-store"
        assert await context.delete_bucket("orders") is True
        jetstream.object_store.assert_awaited_once_with("orders")
        jetstream.delete_object_store.assert_awaited_once_with("orders")


class TestKeyValueContext:
    @pytest.mark.asyncio
    async def test_create_bucket_defaults(self, jetstream):
        context = KeyValueContext(jetstream)

        kv = await context.create_bucket("settings")

        assert kv == "kv"
        config = jetstream.create_key_value.await_args.kwargs["config"]
        assert isinstance(config, KeyValueConfig)
        assert config.bucket == "settings"
        assert config.history == 1
        assert config.ttl is None
        assert config.max_bytes is None

    @pytest.mark.asyncio
    async def test_create_bucket_with_options(self, jetstream):
        context = KeyValueContext(jetstream)

        await context.create_bucket(
            "settings",
            history=5,
            ttl=30.0,
            max_bytes=4096,
        )

        config = jetstream.create_key_value.await_args.kwargs["config"]
        assert config.history == 5
        assert config.ttl == 30.0
        assert config.max_bytes == 4096

    @pytest.mark.asyncio
    async def test_get_and_delete_bucket(self, jetstream):
        context = KeyValueContext(jetstream)

        assert await context.get_bucket("settings") == "kv"
        assert await context.delete_bucket("settings") is True
        jetstream.key_value.assert_awaited_once_with("settings")
        jetstream.delete_key_value.assert_awaited_once_with("settings")
