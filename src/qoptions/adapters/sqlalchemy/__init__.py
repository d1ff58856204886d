"""SQLAlchemy adapter – deferred query source, translator, mapped-class metadata.

Requires the ``sqlalchemy`` extra::

    pip install "qoptions[sqlalchemy]"
"""
from qoptions.adapters.sqlalchemy.metadata import register_mapped
from qoptions.adapters.sqlalchemy.source import SqlAlchemyQuerySource
from qoptions.adapters.sqlalchemy.translator import to_clause

__all__ = [
    "SqlAlchemyQuerySource",
    "register_mapped",
    "to_clause",
]
