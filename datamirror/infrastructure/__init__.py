"""
Infrastructure package for DataMirror.

Database-driver integration (psycopg 3). Keep this layer a thin bridge between
driver objects and the mapping engine; connection management belongs to the
caller.
"""

from datamirror.infrastructure.psycopg_adapter import compose_where, fetch_into, where_with_params

__all__ = [
    "compose_where",
    "fetch_into",
    "where_with_params",
]
