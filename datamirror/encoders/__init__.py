"""
Encoders package for DataMirror.

Serialize a record into a concurrency-safe map, a query string or flat JSON
text.
"""

from datamirror.encoders.json_text import JsonObjectBuilder, as_json
from datamirror.encoders.mapping import SynchronizedDict, as_map
from datamirror.encoders.query_string import QueryStringBuilder, as_query_string

__all__ = [
    "JsonObjectBuilder",
    "QueryStringBuilder",
    "SynchronizedDict",
    "as_json",
    "as_map",
    "as_query_string",
]
