# -*- coding: utf-8 -*-
from .contexts import KeyValueContext, ObjectStoreContext

__all__ = [
    "KeyValueContext",
    "ObjectStoreContext",
]
