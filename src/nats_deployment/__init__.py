# -*- coding: utf-8 -*-
from .constant import (
    NATS_CLIENT_PORT,
    NATS_CLUSTER_ROUTING_PORT,
    NATS_HTTP_MANAGEMENT_PORT,
)
from .deployment import (
    NatsServerDeployment,
    bucket_name_for,
    from_configuration,
)
from .enums import DeploymentState
from .exception import (
    ContainerStartupError,
    DeploymentError,
    InvalidArgumentError,
    InvalidOperationStateError,
)
from .model import Configuration, ObjectStoreBucket

__all__ = [
    "Configuration",
    "ContainerStartupError",
    "DeploymentError",
    "DeploymentState",
    "InvalidArgumentError",
    "InvalidOperationStateError",
    "NATS_CLIENT_PORT",
    "NATS_CLUSTER_ROUTING_PORT",
    "NATS_HTTP_MANAGEMENT_PORT",
    "NatsServerDeployment",
    "ObjectStoreBucket",
    "bucket_name_for",
    "from_configuration",
]
