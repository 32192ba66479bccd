# -*- coding: utf-8 -*-
from .bucket import ObjectStoreBucket
from .configuration import Configuration

__all__ = [
    "Configuration",
    "ObjectStoreBucket",
]
