"""Immutable permission catalog + role table.

Built once (``create_app`` stores it in ``app.extensions``) and handed to the
policy evaluator, guards and scope filters. Construction validates the table and
reports every problem at once so a bad bundle never reaches a running process.
"""
from __future__ import annotations
import difflib
import hashlib
import json
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional

from hubconsole.constants.permissions import ALL_PERMISSION_CODES
from hubconsole.constants.roles import (
    MODULES, ROLE_ALIASES, ROLE_DEFINITIONS, SUPER_ADMIN, RoleDefinition,
)


class AuthzConfigError(ValueError):
    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__('Invalid authorization table:\n' + '\n'.join(f' - {p}' for p in self.problems))


class RoleTable:
    def __init__(self, permissions: Iterable[str], roles: Iterable[RoleDefinition],
                 aliases: Optional[Mapping[str, str]] = None):
        problems: List[str] = []

        codes: List[str] = list(permissions)
        seen = set()
        for code in codes:
            if code in seen:
                problems.append(f"Duplicate permission code: {code}")
            seen.add(code)
        catalog = frozenset(codes)

        rows: Dict[str, RoleDefinition] = {}
        for role in roles:
            if role.id == SUPER_ADMIN:
                problems.append(f"'{SUPER_ADMIN}' is reserved and cannot be a role row")
                continue
            if role.id in rows:
                problems.append(f"Duplicate role id: {role.id}")
                continue
            if role.module_type not in MODULES:
                problems.append(f"Role '{role.id}' has invalid module '{role.module_type}'")
            for code in sorted(role.permissions - catalog):
                suggestion = difflib.get_close_matches(code.lower(), catalog, n=1)
                hint = f" (did you mean {suggestion[0]})" if suggestion else ''
                problems.append(f"Role '{role.id}' references undeclared permission: {code}{hint}")
            rows[role.id] = role

        alias_map: Dict[str, str] = {}
        for alias, target in (aliases or {}).items():
            if alias in rows or alias == SUPER_ADMIN:
                problems.append(f"Alias '{alias}' shadows a role name")
            elif target not in rows:
                problems.append(f"Alias '{alias}' points to unknown role '{target}'")
            else:
                alias_map[alias] = target

        if problems:
            raise AuthzConfigError(problems)

        self._catalog: FrozenSet[str] = catalog
        self._roles = MappingProxyType(rows)
        self._aliases = MappingProxyType(alias_map)

    def lookup_role(self, name) -> Optional[RoleDefinition]:
        if not isinstance(name, str):
            return None
        return self._roles.get(self._aliases.get(name, name))

    def all_permissions(self) -> FrozenSet[str]:
        return self._catalog

    def roles(self) -> List[RoleDefinition]:
        return list(self._roles.values())

    @property
    def aliases(self) -> Mapping[str, str]:
        return self._aliases

    def get_roles_by_module(self, module) -> List[RoleDefinition]:
        return [r for r in self._roles.values() if r.module_type == module]

    # Lookup used by login role selection and profile display
    get_role_definition = lookup_role

    def __contains__(self, name) -> bool:
        return self.lookup_role(name) is not None

    def __len__(self) -> int:
        return len(self._roles)


def build_default_role_table() -> RoleTable:
    return RoleTable(ALL_PERMISSION_CODES, ROLE_DEFINITIONS, ROLE_ALIASES)


def get_role_definition(table: RoleTable, name) -> Optional[RoleDefinition]:
    return table.lookup_role(name)


def get_roles_by_module(table: RoleTable, module) -> List[RoleDefinition]:
    return table.get_roles_by_module(module)


def role_permission_map(table: RoleTable) -> Dict[str, List[str]]:
    return {r.id: sorted(r.permissions) for r in table.roles()}


def roles_checksum(table: RoleTable) -> str:
    """sha256 over the canonical role -> permissions JSON; changes whenever a bundle does."""
    canonical = json.dumps(role_permission_map(table), sort_keys=True, separators=(',', ':'))
    return hashlib.sha256(canonical.encode('utf-8')).hexdigest()
