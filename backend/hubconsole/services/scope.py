"""Module scoping of tenant-owned records.

A hub principal sees records tagged ``module_type='hub'`` plus records bound to
its own ``hub_id``; store principals symmetrically. Super admins see everything,
anyone else nothing. Location equality only counts when the principal has a
location id, so untagged records without a location never leak.
"""
from __future__ import annotations
from typing import Any, Iterable, List, Mapping, Optional

from sqlalchemy import false, or_

from hubconsole.constants.roles import MODULE_HUB, MODULE_STORE, SUPER_ADMIN
from hubconsole.services.principal import Principal

_LOCATION_FIELD = {MODULE_HUB: 'hub_id', MODULE_STORE: 'store_id'}


def _field(item: Any, name: str):
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def _location_of(user, login_type: str) -> Optional[str]:
    location_id = getattr(user, _LOCATION_FIELD[login_type], None)
    return location_id if isinstance(location_id, str) else None


def _visible(item: Any, module: str, location_id: Optional[str]) -> bool:
    if _field(item, 'module_type') == module:
        return True
    return location_id is not None and _field(item, _LOCATION_FIELD[module]) == location_id


def filter_data_by_module(items: Iterable[Any], user: Optional[Principal]) -> List[Any]:
    """Return the records of ``items`` visible to ``user``, preserving order."""
    if user is None:
        return []
    login_type = getattr(user, 'login_type', None)
    if login_type == SUPER_ADMIN:
        return list(items)
    if not isinstance(login_type, str) or login_type not in _LOCATION_FIELD:
        return []
    location_id = _location_of(user, login_type)
    return [item for item in items if _visible(item, login_type, location_id)]


def assert_module_access(item: Any, user: Optional[Principal]):
    if not filter_data_by_module([item], user):
        from flask import abort
        abort(403, description='Module access denied')


def filter_query_by_module(query, model, user: Optional[Principal]):
    """SQL counterpart of filter_data_by_module for models with module_type/hub_id/store_id columns."""
    if user is None:
        return query.filter(false())
    login_type = getattr(user, 'login_type', None)
    if login_type == SUPER_ADMIN:
        return query
    if not isinstance(login_type, str) or login_type not in _LOCATION_FIELD:
        return query.filter(false())
    location_id = _location_of(user, login_type)
    conditions = [model.module_type == login_type]
    if location_id is not None:
        conditions.append(getattr(model, _LOCATION_FIELD[login_type]) == location_id)
    return query.filter(or_(*conditions))
