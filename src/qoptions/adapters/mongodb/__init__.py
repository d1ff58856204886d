"""MongoDB adapter – deferred query source and filter translation.

Works with any async collection exposing ``find(filter, sort=..., skip=...,
limit=...)`` that returns an async-iterable cursor (Motor, PyMongo async).
"""

from qoptions.adapters.mongodb.source import MongoQuerySource
from qoptions.adapters.mongodb.translator import to_mongo_filter, to_mongo_sort

__all__ = [
    "MongoQuerySource",
    "to_mongo_filter",
    "to_mongo_sort",
]
