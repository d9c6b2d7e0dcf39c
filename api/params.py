"""
Array-valued query parameters.

The web client encodes arrays the way qs does, so all of these mean the same
list: ids=1&ids=2, ids[]=1&ids[]=2, ids[0]=1&ids[1]=2.
"""

import re
from typing import Callable, List, Optional
from fastapi import Request
from starlette.datastructures import QueryParams


def query_array(params: QueryParams, key: str, cast: Callable = str) -> Optional[List]:
    """
    Values for key in any supported array form, in order of appearance.

    None when the key is absent. Values that cast rejects are dropped.
    """
    indexed = re.compile(rf"^{re.escape(key)}\[\d*\]$")
    found = False
    values = []

    for name, raw in params.multi_items():
        if name != key and not indexed.match(name):
            continue
        found = True
        try:
            values.append(cast(raw))
        except (TypeError, ValueError):
            continue

    return values if found else None


def int_value(raw: str) -> int:
    return int(raw.strip())


def array_param(key: str, cast: Callable = str):
    """FastAPI dependency reading one array-valued query parameter"""

    def dependency(request: Request) -> Optional[List]:
        return query_array(request.query_params, key, cast)

    return dependency


def int_array_param(key: str):
    return array_param(key, int_value)
