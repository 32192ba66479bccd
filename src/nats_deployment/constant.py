# -*- coding: utf-8 -*-
import os

# Container ports exposed by the NATS server image
NATS_CLIENT_PORT = 4222
NATS_CLUSTER_ROUTING_PORT = 6222
NATS_HTTP_MANAGEMENT_PORT = 8222

# Log line printed by nats-server once it accepts client connections
SERVER_READY_MESSAGE = "Server is ready"

# Label attached to every container started for a deployment
DEPLOYMENT_LABEL = "nats-deployment.name"

# Image tag used when the configuration does not set one
DEFAULT_IMAGE_TAG = os.getenv("NATS_DEPLOYMENT_IMAGE_TAG", "nats:latest")

# Timeouts in seconds
STARTUP_TIMEOUT = float(os.getenv("NATS_DEPLOYMENT_STARTUP_TIMEOUT", "60"))
STOP_TIMEOUT = int(os.getenv("NATS_DEPLOYMENT_STOP_TIMEOUT", "10"))

# Interval between two readiness checks of the container output
LOG_POLL_INTERVAL = 0.2
