"""
Core backend base components shared by the app APIs.
"""

from .filters import BaseFilterSet
from .pagination import StandardPagination

__all__ = [
    'BaseFilterSet',
    'StandardPagination',
]
