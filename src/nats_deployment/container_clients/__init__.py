# -*- coding: utf-8 -*-
from .base_client import BaseClient, BaseContainer
from .builder import ContainerBuilder, ContainerSpec
from .docker_client import DockerClient, DockerContainer

__all__ = [
    "BaseClient",
    "BaseContainer",
    "ContainerBuilder",
    "ContainerSpec",
    "DockerClient",
    "DockerContainer",
]
