# -*- coding: utf-8 -*-
# pylint: disable=redefined-outer-name
"""
Unit tests for the deployment configuration and bucket models.
"""
import pytest
from pydantic import ValidationError

from nats_deployment import (
    Configuration,
    InvalidArgumentError,
    NatsServerDeployment,
    ObjectStoreBucket,
)
from nats_deployment.constant import DEFAULT_IMAGE_TAG, NATS_CLIENT_PORT


@pytest.fixture
def configuration():
    return Configuration.named("orders")


class TestConfigurationNamed:
    """Test the configuration entry point."""

    def test_defaults(self, configuration):
        assert configuration.name == "orders"
        assert configuration.image_tag == DEFAULT_IMAGE_TAG
        assert configuration.container_name is None
        assert configuration.host_client_port == NATS_CLIENT_PORT
        assert configuration.host_management_port is None
        assert configuration.jetstream_enabled is False
        assert configuration.debug_output_enabled is False
        assert configuration.trace_output_enabled is False
        assert configuration.buckets == ()

    @pytest.mark.parametrize("name", ["", " ", "\t\n", None])
    def test_blank_name_is_rejected(self, name):
        with pytest.raises(InvalidArgumentError):
            Configuration.named(name)

    def test_invalid_argument_error_is_value_error(self):
        with pytest.raises(ValueError):
            NatsServerDeployment.named("   ")

    def test_deployment_named_returns_configuration(self):
        configuration = NatsServerDeployment.named("My Test!")
        assert isinstance(configuration, Configuration)
        assert configuration.name == "My Test!"

    def test_direct_construction_validates_name(self):
        with pytest.raises(ValidationError):
            Configuration(name="  ")

    def test_port_range_is_validated(self):
        with pytest.raises(ValidationError):
            Configuration(name="orders", host_client_port=70000)

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda c: c.with_host_client_port(70000),
            lambda c: c.with_host_client_port(-1),
            lambda c: c.with_host_client_port("abc"),
            lambda c: c.with_host_management_port(65536),
            lambda c: c.with_startup_timeout(0),
            lambda c: c.with_stop_timeout(-1),
            lambda c: c.with_image_tag(""),
        ],
    )
    def test_mutators_validate_values(self, configuration, mutate):
        with pytest.raises(InvalidArgumentError):
            mutate(configuration)

    def test_valid_mutation_keeps_bucket_instances(self, configuration):
        bucket = ObjectStoreBucket.named("a").of_size(100)

        result = configuration.add_bucket(bucket).with_host_client_port(1)

        assert result.buckets == (bucket,)
        assert result.host_client_port == 1


class TestConfigurationMutators:
    """Test the copy-on-write mutators."""

    def test_each_mutator_changes_one_field(self, configuration):
        changed = {
            "image_tag": configuration.with_image_tag("nats:2.10"),
            "container_name": configuration.with_container_name("nats-1"),
            "host_client_port": configuration.with_host_client_port(14222),
            "host_management_port": (
                configuration.with_host_management_port(18222)
            ),
            "jetstream_enabled": configuration.enable_jetstream(),
            "debug_output_enabled": configuration.enable_debug_output(),
            "trace_output_enabled": configuration.enable_trace_output(),
            "startup_timeout": configuration.with_startup_timeout(5),
            "stop_timeout": configuration.with_stop_timeout(1),
        }
        original = configuration.model_dump()
        for field, value in changed.items():
            dumped = value.model_dump()
            assert dumped[field] != original[field], field
            dumped.pop(field)
            expected = dict(original)
            expected.pop(field)
            assert dumped == expected, field

    def test_mutating_copy_leaves_original_untouched(self, configuration):
        derived = (
            configuration.with_image_tag("nats:2.10")
            .enable_jetstream()
            .add_bucket(ObjectStoreBucket.named("files"))
        )

        assert configuration.image_tag == DEFAULT_IMAGE_TAG
        assert configuration.jetstream_enabled is False
        assert configuration.buckets == ()
        assert derived.image_tag == "nats:2.10"
        assert derived.jetstream_enabled is True
        assert len(derived.buckets) == 1

    def test_configurations_are_frozen(self, configuration):
        with pytest.raises(ValidationError):
            configuration.name = "other"

    def test_structural_equality(self):
        first = Configuration.named("orders").enable_debug_output()
        second = Configuration.named("orders").enable_debug_output()
        assert first == second
        assert first != second.enable_trace_output()

    def test_add_bucket_preserves_order(self, configuration):
        first = ObjectStoreBucket.named("a").of_size(100)
        second = ObjectStoreBucket.named("b")

        result = configuration.add_bucket(first).add_bucket(second)

        assert result.buckets == (first, second)

    def test_add_bucket_does_not_touch_previous_value(self, configuration):
        one = configuration.add_bucket(ObjectStoreBucket.named("a"))
        two = one.add_bucket(ObjectStoreBucket.named("b"))

        assert [bucket.name for bucket in one.buckets] == ["a"]
        assert [bucket.name for bucket in two.buckets] == ["a", "b"]


class TestObjectStoreBucket:
    """Test the bucket model."""

    def test_named_has_no_limit(self):
        bucket = ObjectStoreBucket.named("files")
        assert bucket.name == "files"
        assert bucket.max_bytes is None

    def test_of_size_returns_copy(self):
        bucket = ObjectStoreBucket.named("files")
        sized = bucket.of_size(1024)

        assert sized.max_bytes == 1024
        assert bucket.max_bytes is None
        assert sized.name == "files"

    def test_negative_size_is_rejected(self):
        with pytest.raises(ValidationError):
            ObjectStoreBucket(name="files", max_bytes=-1)
