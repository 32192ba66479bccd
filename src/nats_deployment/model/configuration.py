# -*- coding: utf-8 -*-
# pylint: disable=no-self-argument
from typing import Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from .bucket import ObjectStoreBucket
from ..constant import (
    DEFAULT_IMAGE_TAG,
    NATS_CLIENT_PORT,
    STARTUP_TIMEOUT,
    STOP_TIMEOUT,
)
from ..exception import InvalidArgumentError


class Configuration(BaseModel):
    """
    NATS server deployment configuration.

    Instances are immutable. Every ``with_*``, ``enable_*`` and
    ``add_bucket`` call returns a new configuration with a single field
    changed, so a base configuration can be shared between tests:

        base = Configuration.named("orders").enable_jetstream()
        debug = base.enable_debug_output()
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        description="Deployment name, also used to name object store buckets",
    )

    image_tag: str = Field(
        DEFAULT_IMAGE_TAG,
        description="Docker image tag of the NATS server",
        min_length=1,
    )

    container_name: Optional[str] = Field(
        None,
        description="Docker container name, generated by Docker if not set",
    )

    host_client_port: int = Field(
        NATS_CLIENT_PORT,
        description="Host network port mapped to the NATS client port",
        ge=0,
        le=65535,
    )

    host_management_port: Optional[int] = Field(
        None,
        description="Host network port mapped to the NATS HTTP management "
        "port. The management port is disabled when not set.",
        ge=0,
        le=65535,
    )

    jetstream_enabled: bool = Field(
        False,
        description="Whether JetStream is enabled on the server",
    )

    debug_output_enabled: bool = Field(
        False,
        description="Whether the server writes debug output",
    )

    trace_output_enabled: bool = Field(
        False,
        description="Whether the server writes protocol trace output",
    )

    buckets: Tuple[ObjectStoreBucket, ...] = Field(
        (),
        description="Object store buckets created after the server starts",
    )

    startup_timeout: float = Field(
        STARTUP_TIMEOUT,
        description="Seconds to wait for the server readiness message",
        gt=0,
    )

    stop_timeout: int = Field(
        STOP_TIMEOUT,
        description="Seconds to wait for the server to stop before it is "
        "killed",
        ge=0,
    )

    @field_validator("name")
    def check_name(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Deployment name not specified.")
        return value

    @classmethod
    def named(cls, name: str) -> "Configuration":
        """
        Create a configuration with default settings for the deployment
        named ``name``.

        Raises:
            InvalidArgumentError: If the name is empty or whitespace only
        """
        if name is None or not str(name).strip():
            raise InvalidArgumentError("Deployment name not specified.")
        return cls(name=name)

    def with_image_tag(self, image_tag: str) -> "Configuration":
        return self._with(image_tag=image_tag)

    def with_container_name(self, container_name: str) -> "Configuration":
        return self._with(container_name=container_name)

    def with_host_client_port(self, port: int) -> "Configuration":
        return self._with(host_client_port=port)

    def with_host_management_port(self, port: int) -> "Configuration":
        return self._with(host_management_port=port)

    def enable_jetstream(self) -> "Configuration":
        return self._with(jetstream_enabled=True)

    def enable_debug_output(self) -> "Configuration":
        return self._with(debug_output_enabled=True)

    def enable_trace_output(self) -> "Configuration":
        return self._with(trace_output_enabled=True)

    def add_bucket(self, bucket: ObjectStoreBucket) -> "Configuration":
        """Append a bucket to the list of buckets created on start."""
        return self._with(buckets=(*(self.buckets or ()), bucket))

    def with_startup_timeout(self, seconds: float) -> "Configuration":
        return self._with(startup_timeout=seconds)

    def with_stop_timeout(self, seconds: int) -> "Configuration":
        return self._with(stop_timeout=seconds)

    def _with(self, **changes) -> "Configuration":
        values = {
            field: getattr(self, field) for field in type(self).model_fields
        }
        values.update(changes)
        try:
            return type(self).model_validate(values)
        except ValidationError as e:
            raise InvalidArgumentError(
                f"Invalid deployment configuration: {e}",
            ) from e
