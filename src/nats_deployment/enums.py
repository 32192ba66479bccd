# -*- coding: utf-8 -*-
from enum import Enum


class DeploymentState(str, Enum):
    """Lifecycle state of a NATS server deployment."""

    CREATED = "created"
    BUILT = "built"
    STARTING = "starting"
    RUNNING = "running"
    DISPOSED = "disposed"
