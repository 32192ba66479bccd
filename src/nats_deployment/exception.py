# -*- coding: utf-8 -*-
"""
Deployment exception definitions.

Errors coming from the Docker SDK or the NATS client are not wrapped and
reach the caller unchanged.
"""

from typing import Optional


class DeploymentError(Exception):
    """Base class for errors raised by this library."""


class InvalidArgumentError(DeploymentError, ValueError):
    """Deployment configuration received an invalid value."""


class InvalidOperationStateError(DeploymentError, RuntimeError):
    """A lifecycle method was called in a state that does not allow it."""


class ContainerStartupError(DeploymentError):
    """
    The container did not report readiness.

    Attributes:
        container_id: Identifier of the container that failed to start
        logs: Container output captured while waiting
    """

    def __init__(
        self,
        message: str,
        container_id: Optional[str] = None,
        logs: str = "",
    ):
        super().__init__(message)
        self.container_id = container_id
        self.logs = logs

    def __str__(self) -> str:
        if not self.logs:
            return super().__str__()
        tail = "\n".join(self.logs.splitlines()[-20:])
        return f"{super().__str__()}\nContainer output (tail):\n{tail}"
