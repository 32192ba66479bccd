# -*- coding: utf-8 -*-
"""
Typed views over a JetStream context.

Both views share the JetStream context, and through it the NATS connection,
they were created from. They hold no resources of their own.
"""
import logging
from typing import Optional

from nats.js import JetStreamContext
from nats.js.api import KeyValueConfig, ObjectStoreConfig
from nats.js.kv import KeyValue
from nats.js.object_store import ObjectStore

logger = logging.getLogger(__name__)


class ObjectStoreContext:
    """Object store buckets of a JetStream context."""

    def __init__(self, jetstream: JetStreamContext):
        self.jetstream = jetstream

    async def create_bucket(
        self,
        name: str,
        max_bytes: Optional[int] = None,
    ) -> ObjectStore:
        """
        Create an object store bucket.

        Args:
            name: Bucket name
            max_bytes: Bucket size limit in bytes, unlimited when None

        Returns:
            ObjectStore: Handle of the created bucket
        """
        config = ObjectStoreConfig(bucket=name)
        if max_bytes is not None:
            config.max_bytes = max_bytes

        store = await self.jetstream.create_object_store(
            bucket=name,
            config=config,
        )
        limit = "unlimited" if max_bytes is None else f"{max_bytes} bytes"
        logger.info(f"Object store bucket '{name}' created ({limit})")
        return store

    async def get_bucket(self, name: str) -> ObjectStore:
        return await self.jetstream.object_store(name)

    async def delete_bucket(self, name: str) -> bool:
        return await self.jetstream.delete_object_store(name)


class KeyValueContext:
    """Key-value buckets of a JetStream context."""

    def __init__(self, jetstream: JetStreamContext):
        self.jetstream = jetstream

    async def create_bucket(
        self,
        name: str,
        history: int = 1,
        ttl: Optional[float] = None,
        max_bytes: Optional[int] = None,
    ) -> KeyValue:
        config = KeyValueConfig(bucket=name, history=history)
        if ttl is not None:
            config.ttl = ttl
        if max_bytes is not None:
            config.max_bytes = max_bytes

        kv = await self.jetstream.create_key_value(config=config)
        logger.info(f"Key-value bucket '{name}' created")
        return kv

    async def get_bucket(self, name: str) -> KeyValue:
        return await self.jetstream.key_value(name)

    async def delete_bucket(self, name: str) -> bool:
        return await self.jetstream.delete_key_value(name)
