# -*- coding: utf-8 -*-
import logging
import re
from typing import Any, Awaitable, Callable, Optional

import nats
from nats.aio.client import Client as NATS
from nats.js import JetStreamContext

from .constant import (
    DEPLOYMENT_LABEL,
    NATS_CLIENT_PORT,
    NATS_HTTP_MANAGEMENT_PORT,
    SERVER_READY_MESSAGE,
)
from .container_clients import (
    BaseClient,
    BaseContainer,
    ContainerBuilder,
    DockerClient,
)
from .enums import DeploymentState
from .exception import InvalidOperationStateError
from .messaging import KeyValueContext, ObjectStoreContext
from .model import Configuration

logger = logging.getLogger(__name__)

_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]")


def bucket_name_for(deployment_name: str) -> str:
    """Object store bucket name derived from a deployment name."""
    return _NON_ALPHANUMERIC.sub("-", deployment_name)


class NatsServerDeployment:
    """
    NATS server running in a Docker container for the duration of a test.

    A deployment goes through a single build, start and dispose cycle:

        configuration = (
            NatsServerDeployment.named("orders")
            .with_host_client_port(14222)
            .enable_jetstream()
            .add_bucket(ObjectStoreBucket.named("files").of_size(1024))
        )
        async with NatsServerDeployment(configuration) as deployment:
            await deployment.connection.publish("orders.created", b"{}")

    Once started, the deployment exposes the NATS connection and the
    JetStream, object store and key-value contexts derived from it.
    """

    def __init__(
        self,
        configuration: Configuration,
        container_client: Optional[BaseClient] = None,
        connect: Optional[Callable[..., Awaitable[NATS]]] = None,
    ):
        """
        Args:
            configuration: Deployment configuration
            container_client: Client used to run the container, a
                DockerClient is created on build when not provided
            connect: Coroutine function opening the NATS connection,
                nats.connect by default
        """
        self.configuration = configuration
        self._container_client = container_client
        self._connect = connect or nats.connect
        self._state = DeploymentState.CREATED
        self._container: Optional[BaseContainer] = None
        self._connection: Optional[NATS] = None
        self._jetstream_context: Optional[JetStreamContext] = None
        self._object_store_context: Optional[ObjectStoreContext] = None
        self._key_value_context: Optional[KeyValueContext] = None

    @staticmethod
    def named(name: str) -> Configuration:
        """Create a deployment configuration with the name provided."""
        return Configuration.named(name)

    @classmethod
    def from_configuration(
        cls,
        configuration: Configuration,
        **kwargs: Any,
    ) -> "NatsServerDeployment":
        return cls(configuration, **kwargs)

    @property
    def state(self) -> DeploymentState:
        return self._state

    @property
    def container(self) -> Optional[BaseContainer]:
        return self._container

    @property
    def connection(self) -> Optional[NATS]:
        return self._connection

    @property
    def jetstream_context(self) -> Optional[JetStreamContext]:
        return self._jetstream_context

    @property
    def object_store_context(self) -> Optional[ObjectStoreContext]:
        return self._object_store_context

    @property
    def key_value_context(self) -> Optional[KeyValueContext]:
        return self._key_value_context

    @property
    def url(self) -> str:
        return f"nats://localhost:{self.configuration.host_client_port}"

    async def build(self) -> None:
        """Prepare the server container without starting it."""
        if self._state is not DeploymentState.CREATED:
            raise InvalidOperationStateError(
                f"NATS server deployment '{self.configuration.name}' cannot "
                f"be built in state '{self._state.value}'.",
            )

        builder = (
            ContainerBuilder()
            .with_image(self.configuration.image_tag)
            .with_name(self.configuration.container_name)
            .with_port_binding(
                self.configuration.host_client_port,
                NATS_CLIENT_PORT,
            )
            .with_label(DEPLOYMENT_LABEL, self.configuration.name)
            .with_cleanup(True)
            .with_auto_remove(True)
            .with_wait_for_log(
                SERVER_READY_MESSAGE,
                timeout=self.configuration.startup_timeout,
            )
            .with_stop_timeout(self.configuration.stop_timeout)
        )
        builder = self._enable_jetstream_if_required(builder)
        builder = self._map_management_port_if_required(builder)
        builder = self._enable_debug_output_if_required(builder)
        builder = self._enable_trace_output_if_required(builder)
        spec = builder.build()

        if self._container_client is None:
            self._container_client = DockerClient()
        self._container = self._container_client.build(spec)
        self._state = DeploymentState.BUILT
        logger.debug(
            f"NATS server deployment '{self.configuration.name}' built "
            f"with command {spec.command}",
        )

    async def start(self) -> None:
        """
        Start the server container, connect to it and create the configured
        object store buckets.

        Raises:
            InvalidOperationStateError: If the deployment was not built, was
                already started, even unsuccessfully, or was disposed
        """
        if self._state is DeploymentState.CREATED:
            raise InvalidOperationStateError(
                "NATS server deployment is not initialized.",
            )
        if self._state is not DeploymentState.BUILT:
            raise InvalidOperationStateError(
                f"NATS server deployment '{self.configuration.name}' cannot "
                f"be started in state '{self._state.value}'.",
            )

        # A failed start leaves the deployment in STARTING, only dispose()
        # is allowed from there.
        self._state = DeploymentState.STARTING
        await self._container.start()
        await self._connect_to_nats()
        await self._create_buckets()
        self._state = DeploymentState.RUNNING
        logger.info(
            f"NATS server deployment '{self.configuration.name}' is running "
            f"at {self.url}",
        )

    async def dispose(self) -> None:
        """
        Close the connection and remove the server container.

        Safe to call any number of times. The deployment is disposed even if
        the teardown raises.
        """
        if self._container is None:
            return

        container = self._container
        self._container = None
        self._state = DeploymentState.DISPOSED
        try:
            await self._close_connection()
        finally:
            await container.dispose()
            logger.info(
                f"NATS server deployment '{self.configuration.name}' "
                f"disposed",
            )

    async def __aenter__(self) -> "NatsServerDeployment":
        await self.build()
        try:
            await self.start()
        except BaseException:
            await self.dispose()
            raise
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.dispose()

    def _enable_jetstream_if_required(
        self,
        builder: ContainerBuilder,
    ) -> ContainerBuilder:
        if self.configuration.jetstream_enabled:
            builder = builder.with_command("--jetstream")
        return builder

    def _map_management_port_if_required(
        self,
        builder: ContainerBuilder,
    ) -> ContainerBuilder:
        if self.configuration.host_management_port is not None:
            builder = builder.with_port_binding(
                self.configuration.host_management_port,
                NATS_HTTP_MANAGEMENT_PORT,
            ).with_command("--http_port", str(NATS_HTTP_MANAGEMENT_PORT))
        return builder

    def _enable_debug_output_if_required(
        self,
        builder: ContainerBuilder,
    ) -> ContainerBuilder:
        if self.configuration.debug_output_enabled:
            builder = builder.with_command("--debug")
        return builder

    def _enable_trace_output_if_required(
        self,
        builder: ContainerBuilder,
    ) -> ContainerBuilder:
        if self.configuration.trace_output_enabled:
            builder = builder.with_command("--trace")
        return builder

    async def _connect_to_nats(self) -> None:
        try:
            self._connection = await self._connect(
                self.url,
                name=self.configuration.name,
            )
        except Exception as e:
            logger.error(f"Failed to connect to NATS at {self.url}: {e}")
            raise
        logger.info(f"Connected to NATS at {self.url}")

        self._jetstream_context = self._connection.jetstream()
        self._object_store_context = ObjectStoreContext(
            self._jetstream_context,
        )
        self._key_value_context = KeyValueContext(self._jetstream_context)

    async def _create_buckets(self) -> None:
        if not self.configuration.buckets:
            return

        # Every bucket is created under the deployment name, only the size
        # limit comes from the bucket configuration.
        bucket_name = bucket_name_for(self.configuration.name)
        for bucket in self.configuration.buckets:
            await self._object_store_context.create_bucket(
                bucket_name,
                max_bytes=bucket.max_bytes,
            )

    async def _close_connection(self) -> None:
        connection = self._connection
        self._connection = None
        self._jetstream_context = None
        self._object_store_context = None
        self._key_value_context = None
        if connection is None or connection.is_closed:
            return

        try:
            await connection.close()
        except Exception as e:  # pylint: disable=broad-except
            logger.warning(f"Failed to close NATS connection: {e}")


def from_configuration(
    configuration: Configuration,
    **kwargs: Any,
) -> NatsServerDeployment:
    """Create a NATS server deployment from its configuration."""
    return NatsServerDeployment.from_configuration(configuration, **kwargs)
