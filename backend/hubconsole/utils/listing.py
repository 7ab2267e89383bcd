from __future__ import annotations
from typing import Any, Callable, Dict, Mapping, Optional, Tuple
from flask import request, abort
from sqlalchemy.orm import Query
from hubconsole.config.settings import normalize_pagination

# {param: {'op': fn(query, value), 'coerce'?: fn(raw), 'validate'?: fn(value) -> bool}}
FilterSpecs = Dict[str, Dict[str, Any]]


def apply_filters(query: Query, specs: FilterSpecs, params: Mapping[str, Any]) -> Query:
    """Apply declared query-string filters; absent params are skipped, bad values abort with 400."""
    for name, meta in specs.items():
        val = params.get(name)
        if val is None:
            continue
        try:
            val = meta.get('coerce', str)(val)
        except (TypeError, ValueError):
            abort(400, description=f'{name} invalid')
        if not meta.get('validate', lambda _v: True)(val):
            abort(400, description=f'{name} invalid')
        query = meta['op'](query, val)
    return query


def paginate(q: Query) -> Tuple[Query, int, int, int]:
    try:
        limit, offset = normalize_pagination(request.args.get('limit'), request.args.get('offset'))
    except ValueError as e:
        abort(400, description=str(e))
    return q.offset(offset).limit(limit), q.count(), limit, offset


def list_response(q: Query, serialize: Callable[[Any], Dict[str, Any]], specs: Optional[FilterSpecs] = None):
    """Filter, page and serialize an already scoped query into the standard list payload."""
    if specs:
        q = apply_filters(q, specs, request.args)
    page, total, limit, offset = paginate(q)
    rows = [serialize(obj) for obj in page.all()]
    return {
        'data': rows,
        'pagination': {'total': total, 'limit': limit, 'offset': offset, 'returned': len(rows)},
    }
