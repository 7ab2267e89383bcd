"""Access requirements as a small closed set of variants.

Every guard flavour (single permission, role allow-list, module match, OR of
role groups, role list plus permission) is one of these values, evaluated by
the single recursive ``evaluate_requirement``.

JSON form accepted by ``parse_requirement``::

    {"permission": "hub_orders_view"}
    {"any_of": [<requirement>, ...]}
    {"all_of": [<requirement>, ...]}
    {"roles": ["hub_main_admin", "hub_packing"]}
    {"module": "hub"}
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from hubconsole.constants.permissions import permission_code
from hubconsole.services.policy import PolicyEvaluator
from hubconsole.services.principal import Principal


@dataclass(frozen=True)
class HasPermission:
    permission: str

    def __init__(self, permission):
        object.__setattr__(self, 'permission', permission_code(permission) or str(permission))


@dataclass(frozen=True)
class AnyOf:
    requirements: Tuple['Requirement', ...]

    def __init__(self, *requirements: 'Requirement'):
        object.__setattr__(self, 'requirements', tuple(requirements))


@dataclass(frozen=True)
class AllOf:
    requirements: Tuple['Requirement', ...]

    def __init__(self, *requirements: 'Requirement'):
        object.__setattr__(self, 'requirements', tuple(requirements))


@dataclass(frozen=True)
class RoleIn:
    roles: Tuple[str, ...]

    def __init__(self, *roles: str):
        object.__setattr__(self, 'roles', tuple(roles))


@dataclass(frozen=True)
class InModule:
    module: str


Requirement = Union[HasPermission, AnyOf, AllOf, RoleIn, InModule]

# Satisfied by any authenticated principal
AUTHENTICATED = AllOf()


def evaluate_requirement(policy: PolicyEvaluator, requirement: Requirement, user: Optional[Principal]) -> bool:
    if user is None:
        return False
    if isinstance(requirement, HasPermission):
        return policy.has_permission(user, requirement.permission)
    if isinstance(requirement, InModule):
        return policy.can_access_module(user, requirement.module)
    if isinstance(requirement, RoleIn):
        return policy.role_in(user, requirement.roles)
    if isinstance(requirement, AnyOf):
        return any(evaluate_requirement(policy, r, user) for r in requirement.requirements)
    if isinstance(requirement, AllOf):
        return all(evaluate_requirement(policy, r, user) for r in requirement.requirements)
    return False


def parse_requirement(data: Any) -> Requirement:
    """Decode the JSON form of a requirement; raises ValueError when malformed."""
    if not isinstance(data, dict) or len(data) != 1:
        raise ValueError('requirement must be an object with exactly one key')
    (kind, value), = data.items()
    if kind == 'permission':
        if not isinstance(value, str) or not value:
            raise ValueError('permission must be a non-empty string')
        return HasPermission(value)
    if kind == 'module':
        if not isinstance(value, str) or not value:
            raise ValueError('module must be a non-empty string')
        return InModule(value)
    if kind == 'roles':
        if not isinstance(value, list) or not all(isinstance(r, str) for r in value):
            raise ValueError('roles must be a list of strings')
        return RoleIn(*value)
    if kind in ('any_of', 'all_of'):
        if not isinstance(value, list):
            raise ValueError(f'{kind} must be a list')
        children = [parse_requirement(v) for v in value]
        return AnyOf(*children) if kind == 'any_of' else AllOf(*children)
    raise ValueError(f'unknown requirement type: {kind}')


def requirement_to_dict(requirement: Requirement) -> Dict[str, Any]:
    if isinstance(requirement, HasPermission):
        return {'permission': requirement.permission}
    if isinstance(requirement, InModule):
        return {'module': requirement.module}
    if isinstance(requirement, RoleIn):
        return {'roles': list(requirement.roles)}
    if isinstance(requirement, AnyOf):
        return {'any_of': [requirement_to_dict(r) for r in requirement.requirements]}
    if isinstance(requirement, AllOf):
        return {'all_of': [requirement_to_dict(r) for r in requirement.requirements]}
    raise TypeError(f'not a requirement: {requirement!r}')
