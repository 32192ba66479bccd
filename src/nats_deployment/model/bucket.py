# -*- coding: utf-8 -*-
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ObjectStoreBucket(BaseModel):
    """Object store bucket that should exist once the deployment starts."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        description="Name of the bucket",
    )

    max_bytes: Optional[int] = Field(
        None,
        description="Bucket size limit in bytes, unlimited when not set",
        ge=0,
    )

    @classmethod
    def named(cls, name: str) -> "ObjectStoreBucket":
        return cls(name=name)

    def of_size(self, max_bytes: int) -> "ObjectStoreBucket":
        return self.model_copy(update={"max_bytes": max_bytes})
