from __future__ import annotations
from typing import FrozenSet, Iterable, List, Optional

from flask import current_app

from hubconsole.constants.permissions import Permission, permission_code
from hubconsole.constants.roles import MODULE_HUB, MODULE_STORE, MODULES, SUPER_ADMIN
from hubconsole.services.principal import Principal
from hubconsole.services.role_table import RoleTable

ALL_ACCESS = Permission.ALL_ACCESS.value

EXTENSION_KEY = 'authz_policy'


def _custom_grants(user) -> FrozenSet[str]:
    # Per-user grants; anything that is not a collection of strings grants nothing
    grants = getattr(user, 'permissions', None)
    if not isinstance(grants, (set, frozenset, list, tuple)):
        return frozenset()
    return frozenset(g for g in (permission_code(p) for p in grants) if g)


class PolicyEvaluator:
    """Pure permission / module predicates over an injected role table.

    Every method is total: an absent user, unknown role or unknown permission
    resolves to a denial, never an exception.
    """

    def __init__(self, table: RoleTable):
        self.table = table

    def _role_bundle(self, user: Principal):
        role = getattr(user, 'role', None)
        definition = self.table.lookup_role(role)
        bundle = set(definition.permissions) if definition else set()
        if role == SUPER_ADMIN:
            bundle.add(ALL_ACCESS)
        return bundle

    def has_permission(self, user: Optional[Principal], permission) -> bool:
        if user is None:
            return False
        code = permission_code(permission)
        if code is None:
            return False
        if code in _custom_grants(user):
            return True
        bundle = self._role_bundle(user)
        if ALL_ACCESS in bundle:
            return True
        return code in bundle

    def can_access_module(self, user: Optional[Principal], module) -> bool:
        if user is None:
            return False
        login_type = getattr(user, 'login_type', None)
        if login_type == SUPER_ADMIN:
            return True
        return isinstance(login_type, str) and login_type == module

    def has_any(self, user: Optional[Principal], permissions: Iterable) -> bool:
        return any(self.has_permission(user, p) for p in permissions)

    def has_all(self, user: Optional[Principal], permissions: Iterable) -> bool:
        if user is None:
            return False
        return all(self.has_permission(user, p) for p in permissions)

    def role_in(self, user: Optional[Principal], roles: Iterable[str]) -> bool:
        role = getattr(user, 'role', None)
        return isinstance(role, str) and any(role == r for r in roles)

    def effective_permissions(self, user: Optional[Principal]) -> List[str]:
        if user is None:
            return []
        bundle = self._role_bundle(user)
        if ALL_ACCESS in bundle:
            return sorted(self.table.all_permissions())
        return sorted(bundle | _custom_grants(user))


def get_accessible_modules(login_type) -> List[str]:
    if login_type == SUPER_ADMIN:
        return list(MODULES)
    if login_type in (MODULE_HUB, MODULE_STORE):
        return [login_type]
    return []


def current_policy() -> PolicyEvaluator:
    return current_app.extensions[EXTENSION_KEY]
