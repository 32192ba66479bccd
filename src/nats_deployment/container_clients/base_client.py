# -*- coding: utf-8 -*-
from abc import ABC, abstractmethod
from typing import Optional

from .builder import ContainerSpec


class BaseContainer(ABC):
    """Handle of a single container created from a :class:`ContainerSpec`."""

    def __init__(self, spec: ContainerSpec):
        self.spec = spec

    @property
    @abstractmethod
    def container_id(self) -> Optional[str]:
        """Identifier of the container, None until it is created."""

    @property
    @abstractmethod
    def is_running(self) -> bool:
        """Whether the container was started and not disposed yet."""

    @abstractmethod
    async def start(self) -> None:
        """
        Create and start the container, then wait until it reports
        readiness.
        """

    @abstractmethod
    async def dispose(self) -> None:
        """Stop and remove the container. Does nothing if never started."""


class BaseClient(ABC):
    @abstractmethod
    def build(self, spec: ContainerSpec) -> BaseContainer:
        """Prepare a container handle without starting it."""
