# -*- coding: utf-8 -*-
import asyncio
import atexit
import logging
import time
import traceback
from typing import Optional

import docker

from .base_client import BaseClient, BaseContainer
from .builder import ContainerSpec
from ..constant import LOG_POLL_INTERVAL
from ..exception import ContainerStartupError, InvalidOperationStateError


logger = logging.getLogger(__name__)


class DockerContainer(BaseContainer):
    """Container handle backed by the Docker Engine API."""

    def __init__(self, client: docker.DockerClient, spec: ContainerSpec):
        super().__init__(spec)
        self.client = client
        self._container = None

    @property
    def container_id(self) -> Optional[str]:
        if self._container is None:
            return None
        return self._container.id

    @property
    def is_running(self) -> bool:
        return self._container is not None

    async def start(self) -> None:
        if self._container is not None:
            raise InvalidOperationStateError(
                f"Container {self.container_id} is already started.",
            )
        await asyncio.to_thread(self._start)

    async def dispose(self) -> None:
        if self._container is None:
            return

        container, self._container = self._container, None
        if self.spec.cleanup:
            atexit.unregister(self._cleanup)
        await asyncio.to_thread(self._stop_and_remove, container)

    def _start(self):
        self._ensure_image()

        ports = {
            f"{container_port}/tcp": host_port
            for container_port, host_port in self.spec.ports.items()
        }
        logger.debug(
            f"Creating container from '{self.spec.image}' with command "
            f"{self.spec.command} and ports {ports}",
        )
        self._container = self.client.containers.create(
            self.spec.image,
            command=self.spec.command or None,
            name=self.spec.name,
            ports=ports,
            labels=self.spec.labels,
            auto_remove=self.spec.auto_remove,
            detach=True,
        )
        if self.spec.cleanup:
            atexit.register(self._cleanup)

        try:
            self._container.start()
        except docker.errors.APIError as e:
            logger.error(
                f"Failed to start container {self._container.id}: {e}",
            )
            raise
        logger.info(
            f"Container {self._container.short_id} "
            f"({self.spec.name or self.spec.image}) started",
        )

        if self.spec.wait_for_log:
            self._wait_for_log(self.spec.wait_for_log)

    def _ensure_image(self):
        image = self.spec.image
        try:
            self.client.images.get(image)
            logger.debug(f"Image '{image}' found locally.")
        except docker.errors.ImageNotFound:
            logger.info(
                f"Image '{image}' not found locally. Pulling it, "
                f"it might take several minutes.",
            )
            self.client.images.pull(image)
            logger.info(f"Image '{image}' successfully pulled.")

    def _wait_for_log(self, message: str):
        container = self._container
        deadline = time.monotonic() + self.spec.startup_timeout
        seen_lines = 0
        output = ""

        while True:
            try:
                output = container.logs(stdout=True, stderr=True).decode(
                    "utf-8",
                    errors="replace",
                )
                lines = output.splitlines()
                for line in lines[seen_lines:]:
                    logger.debug(f"[{container.short_id}] {line}")
                seen_lines = len(lines)

                if message in output:
                    logger.info(
                        f"Container {container.short_id} is ready",
                    )
                    return

                container.reload()
            except docker.errors.NotFound as e:
                # Auto-removed containers disappear as soon as they exit
                raise ContainerStartupError(
                    f"Container {container.id} exited before logging "
                    f"'{message}'.",
                    container_id=container.id,
                    logs=output,
                ) from e

            if container.status in ("exited", "dead"):
                raise ContainerStartupError(
                    f"Container {container.id} exited before logging "
                    f"'{message}'.",
                    container_id=container.id,
                    logs=output,
                )

            if time.monotonic() >= deadline:
                raise ContainerStartupError(
                    f"Container {container.id} did not log '{message}' "
                    f"within {self.spec.startup_timeout} seconds.",
                    container_id=container.id,
                    logs=output,
                )

            time.sleep(LOG_POLL_INTERVAL)

    def _stop_and_remove(self, container):
        try:
            container.stop(timeout=self.spec.stop_timeout)
            if self.spec.auto_remove:
                container.wait(condition="removed")
            else:
                container.remove(force=True)
        except docker.errors.NotFound:
            logger.debug(f"Container {container.id} is already removed.")
        except docker.errors.APIError as e:
            logger.error(
                f"Failed to remove container {container.id}: {e}, "
                f"{traceback.format_exc()}",
            )
            raise
        logger.info(f"Container {container.short_id} removed")

    def _cleanup(self):
        container = self._container
        if container is None:
            return
        try:
            container.remove(force=True)
            logger.info(f"Container {container.short_id} removed at exit")
        except docker.errors.NotFound:
            pass
        except docker.errors.APIError as e:
            logger.warning(
                f"Failed to remove container {container.id} at exit: {e}",
            )


class DockerClient(BaseClient):
    def __init__(self, client: Optional[docker.DockerClient] = None):
        if client is not None:
            self.client = client
            return

        try:
            self.client = docker.from_env()
        except Exception as e:
            raise RuntimeError(
                f"Docker client initialization failed: {str(e)}\n"
                "Solutions:\n"
                "• Ensure Docker is running\n"
                "• Check Docker permissions\n"
                "• For Colima: "
                "export DOCKER_HOST=unix://$HOME/.colima/docker.sock",
            ) from e

    def build(self, spec: ContainerSpec) -> DockerContainer:
        return DockerContainer(self.client, spec)
