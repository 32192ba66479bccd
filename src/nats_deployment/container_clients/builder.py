# -*- coding: utf-8 -*-
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..constant import STARTUP_TIMEOUT, STOP_TIMEOUT


class ContainerSpec(BaseModel):
    """Everything needed to create and start a container."""

    model_config = ConfigDict(frozen=True)

    image: str = Field(
        ...,
        description="Image reference, e.g. 'nats:2.10'",
    )

    name: Optional[str] = Field(
        None,
        description="Container name",
    )

    ports: Dict[int, int] = Field(
        default_factory=dict,
        description="Container TCP port to host port mapping",
    )

    command: List[str] = Field(
        default_factory=list,
        description="Arguments passed to the image entrypoint",
    )

    labels: Dict[str, str] = Field(
        default_factory=dict,
        description="Container labels",
    )

    auto_remove: bool = Field(
        False,
        description="Remove the container once it stops",
    )

    cleanup: bool = Field(
        False,
        description="Remove the container when the interpreter exits",
    )

    wait_for_log: Optional[str] = Field(
        None,
        description="Log message that signals the container is ready",
    )

    startup_timeout: float = Field(
        STARTUP_TIMEOUT,
        description="Seconds to wait for the readiness log message",
        gt=0,
    )

    stop_timeout: int = Field(
        STOP_TIMEOUT,
        description="Seconds to wait for the container to stop",
        ge=0,
    )


class ContainerBuilder:
    """Fluent builder for :class:`ContainerSpec`."""

    def __init__(self):
        self._image = None
        self._name = None
        self._ports = {}
        self._command = []
        self._labels = {}
        self._auto_remove = False
        self._cleanup = False
        self._wait_for_log = None
        self._startup_timeout = STARTUP_TIMEOUT
        self._stop_timeout = STOP_TIMEOUT

    def with_image(self, image: str) -> "ContainerBuilder":
        self._image = image
        return self

    def with_name(self, name: Optional[str]) -> "ContainerBuilder":
        self._name = name
        return self

    def with_port_binding(
        self,
        host_port: int,
        container_port: int,
    ) -> "ContainerBuilder":
        self._ports[container_port] = host_port
        return self

    def with_command(self, *args: str) -> "ContainerBuilder":
        # Cumulative, every call appends to the arguments already set
        self._command.extend(str(arg) for arg in args)
        return self

    def with_label(self, key: str, value: str) -> "ContainerBuilder":
        self._labels[key] = value
        return self

    def with_auto_remove(self, auto_remove: bool) -> "ContainerBuilder":
        self._auto_remove = auto_remove
        return self

    def with_cleanup(self, cleanup: bool) -> "ContainerBuilder":
        self._cleanup = cleanup
        return self

    def with_wait_for_log(
        self,
        message: str,
        timeout: Optional[float] = None,
    ) -> "ContainerBuilder":
        self._wait_for_log = message
        if timeout is not None:
            self._startup_timeout = timeout
        return self

    def with_stop_timeout(self, timeout: int) -> "ContainerBuilder":
        self._stop_timeout = timeout
        return self

    def build(self) -> ContainerSpec:
        if not self._image:
            raise ValueError("Container image is not set.")

        return ContainerSpec(
            image=self._image,
            name=self._name,
            ports=dict(self._ports),
            command=list(self._command),
            labels=dict(self._labels),
            auto_remove=self._auto_remove,
            cleanup=self._cleanup,
            wait_for_log=self._wait_for_log,
            startup_timeout=self._startup_timeout,
            stop_timeout=self._stop_timeout,
        )
