"""Compilers – one stage each: search, filter, include, sort, pagination."""
from qoptions.compilers.filter import FilterCompiler
from qoptions.compilers.include import IncludeResolver
from qoptions.compilers.pagination import Window, window_for
from qoptions.compilers.search import SearchCompiler, SearchPlan
from qoptions.compilers.sort import OrderKey, SortResolver

__all__ = [
    "FilterCompiler",
    "IncludeResolver",
    "OrderKey",
    "SearchCompiler",
    "SearchPlan",
    "SortResolver",
    "Window",
    "window_for",
]
