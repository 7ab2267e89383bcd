"""Guard registry for the console's navigation paths.

The factories below are the guard flavours the console uses (role groups,
optional extra permission, module match, dispatch by permission). A page
guards itself and everything below it: normalised paths are matched by
segment prefix in declaration order, so more specific pages come first.
"""
from __future__ import annotations
from urllib.parse import unquote
from typing import Dict, List, Optional, Set, Tuple

from hubconsole.constants.permissions import Permission as P
from hubconsole.constants.roles import MODULE_HUB, MODULE_STORE
from hubconsole.services.guard import DASHBOARD_ROUTE, LOGIN_REDIRECT, UNAUTHORIZED_ROUTE, Guard
from hubconsole.services.principal import Principal
from hubconsole.services.requirements import (
    AUTHENTICATED, AllOf, AnyOf, HasPermission, InModule, Requirement, RoleIn,
)

MAIN_ADMINS: Tuple[str, ...] = ('hub_main_admin', 'store_main_admin')
PROCUREMENT_ROLES: Tuple[str, ...] = ('hub_procurement', 'store_procurement')
CUTTING_ROLES: Tuple[str, ...] = ('hub_cutting_cleaning', 'store_cutting_cleaning')
PACKING_ROLES: Tuple[str, ...] = ('hub_packing', 'store_packing')
DISPATCH_ROLES: Tuple[str, ...] = ('hub_dispatch', 'store_dispatch')
DELIVERY_ROLES: Tuple[str, ...] = ('hub_delivery', 'store_delivery')


def _with_permission(requirement: Requirement, permission=None) -> Requirement:
    if permission is None:
        return requirement
    return AllOf(requirement, HasPermission(permission))


def protected_route(permission=None, module: Optional[str] = None) -> Guard:
    parts: List[Requirement] = []
    if permission is not None:
        parts.append(HasPermission(permission))
    if module is not None:
        parts.append(InModule(module))
    return Guard(AllOf(*parts))


def multi_role_route(roles, permission=None) -> Guard:
    return Guard(_with_permission(RoleIn(*roles), permission))


def procurement_route(permission=None) -> Guard:
    return multi_role_route(PROCUREMENT_ROLES + MAIN_ADMINS, permission)


def packing_route(permission=None) -> Guard:
    return multi_role_route(PACKING_ROLES + MAIN_ADMINS, permission)


def delivery_route(permission=None) -> Guard:
    return multi_role_route(DELIVERY_ROLES + MAIN_ADMINS, permission)


def cutting_route() -> Guard:
    return multi_role_route(CUTTING_ROLES + MAIN_ADMINS)


def procurement_or_cutting_route() -> Guard:
    return Guard(AnyOf(RoleIn(*PROCUREMENT_ROLES), RoleIn(*CUTTING_ROLES), RoleIn(*MAIN_ADMINS)))


def dispatch_route() -> Guard:
    return Guard(AnyOf(HasPermission(P.DISPATCH_VIEW), HasPermission(P.DISPATCH_MANAGE)), UNAUTHORIZED_ROUTE)


def _module_routes(module: str) -> List[Tuple[str, Guard]]:
    admin = f'{module}_main_admin'
    packer = f'{module}_packing'
    courier = f'{module}_delivery'
    if module == MODULE_HUB:
        orders_create, pre_orders = P.HUB_ORDERS_CREATE, P.HUB_PRE_ORDERS
        team_view, team_manage = P.HUB_TEAM_VIEW, P.HUB_TEAM_MANAGE
        audit, custom_roles = P.HUB_AUDIT_LOGS, P.HUB_CUSTOM_ROLES
    else:
        orders_create, pre_orders = P.STORE_ORDERS_CREATE, P.STORE_ORDERS_CREATE
        team_view, team_manage = P.STORE_TEAM_VIEW, P.STORE_TEAM_MANAGE
        audit, custom_roles = P.STORE_TEAM_MANAGE, P.STORE_TEAM_MANAGE
    settings = protected_route(team_manage)
    routes = [
        (f'{module}/orders/manual', protected_route(orders_create)),
        (f'{module}/orders/pre-orders', protected_route(pre_orders)),
        (f'{module}/orders', multi_role_route([admin, packer, courier])),
        (f'{module}/products/approval', protected_route(P.PRODUCT_APPROVAL)),
        (f'{module}/products/cutting-types', procurement_or_cutting_route()),
        (f'{module}/products', procurement_route()),
        (f'{module}/procurement', procurement_route()),
        (f'{module}/cutting', cutting_route()),
        (f'{module}/packing', packing_route()),
        (f'{module}/dispatch', dispatch_route()),
        (f'{module}/delivery', delivery_route()),
        (f'{module}/labeling', multi_role_route([admin, packer])),
        (f'{module}/team/delivery-agents', multi_role_route([admin, courier])),
        (f'{module}/team/custom-roles', protected_route(custom_roles)),
        (f'{module}/team', protected_route(team_view)),
        (f'{module}/reports/sales', protected_route(P.HUB_REPORTS_SALES)),
        (f'{module}/reports/customer', protected_route(P.HUB_REPORTS_CUSTOMER)),
        (f'{module}/reports/packing', multi_role_route([admin, packer])),
        (f'{module}/reports/delivery', multi_role_route([admin, courier])),
        (f'{module}/reports/stock', procurement_route()),
        (f'{module}/reports/procurement', procurement_route()),
        (f'{module}/audit', protected_route(audit)),
        (f'{module}/settings', settings),
    ]
    for page in ('scratch-card', 'spin-wheel', 'flash-sale', 'subscription', 'offer-notification',
                 'coupon', 'in-app-currency', 'referral', 'marketing'):
        routes.append((f'{module}/{page}', procurement_route()))
    # Anything else under the module prefix still requires the module itself
    routes.append((module, protected_route(module=module)))
    return routes


ROUTE_GUARDS: List[Tuple[str, Guard]] = [
    ('procurement-dashboard', procurement_route()),
    ('packing-dashboard', packing_route()),
    ('delivery-dashboard', delivery_route()),
    *_module_routes(MODULE_HUB),
    *_module_routes(MODULE_STORE),
]

DEFAULT_GUARD = Guard(AUTHENTICATED)


def normalize_path(path) -> Tuple[str, ...]:
    """Console path as lower-case segments: query/fragment dropped, percent-escapes decoded,
    empty and dot segments resolved. Non-string input yields no segments."""
    if not isinstance(path, str):
        return ()
    raw = unquote(path.split('#', 1)[0].split('?', 1)[0])
    segments: List[str] = []
    for part in raw.lower().replace('\\', '/').split('/'):
        if part in ('', '.'):
            continue
        if part == '..':
            if segments:
                segments.pop()
            continue
        segments.append(part)
    return tuple(segments)


_COMPILED_GUARDS: List[Tuple[Tuple[str, ...], Guard]] = [
    (tuple(pattern.split('/')), guard) for pattern, guard in ROUTE_GUARDS
]


def guard_for_path(path) -> Guard:
    """First registered guard whose page is ``path`` or one of its ancestors.

    A registered page guards everything below it; unknown paths only need a session.
    """
    segments = normalize_path(path)
    for prefix, guard in _COMPILED_GUARDS:
        if segments[:len(prefix)] == prefix:
            return guard
    return DEFAULT_GUARD


HOME_ROUTES: Dict[str, str] = {
    'hub_procurement': '/hub/procurement/purchases',
    'store_procurement': '/store/procurement/purchases',
    'hub_cutting_cleaning': '/hub/cutting/management',
    'store_cutting_cleaning': '/store/cutting/management',
    'hub_packing': '/hub/packing/management',
    'store_packing': '/store/packing/management',
    'hub_dispatch': '/hub/dispatch/management',
    'store_dispatch': '/store/dispatch/management',
    'hub_delivery': '/hub/delivery/agent',
    'store_delivery': '/store/delivery/agent',
}


def home_route_for(user: Optional[Principal]) -> str:
    """Landing page after login; absent users go to login, roles without a page to the dashboard."""
    if user is None:
        return LOGIN_REDIRECT
    return HOME_ROUTES.get(getattr(user, 'role', None), DASHBOARD_ROUTE)


REPORT_ACCESS: List[Tuple[Tuple[str, ...], Set[str]]] = [
    (PROCUREMENT_ROLES + MAIN_ADMINS, {'stock', 'procurement'}),
    (PACKING_ROLES + MAIN_ADMINS, {'packing'}),
    (DELIVERY_ROLES + MAIN_ADMINS, {'delivery'}),
]


def accessible_reports(user: Optional[Principal]) -> List[str]:
    role = getattr(user, 'role', None)
    reports: Set[str] = set()
    for roles, allowed in REPORT_ACCESS:
        if role in roles:
            reports |= allowed
    return sorted(reports)


def can_access_report(user: Optional[Principal], report_type: str) -> bool:
    return report_type in accessible_reports(user)


def referenced_roles() -> Set[str]:
    """Every role name the registry, landing pages and report table mention."""
    names: Set[str] = set(HOME_ROUTES)
    for roles, _ in REPORT_ACCESS:
        names.update(roles)

    def walk(req):
        if isinstance(req, RoleIn):
            names.update(req.roles)
        elif isinstance(req, (AnyOf, AllOf)):
            for child in req.requirements:
                walk(child)

    for _, guard in ROUTE_GUARDS:
        walk(guard.requirement)
    return names


__all__ = [
    'ROUTE_GUARDS', 'HOME_ROUTES', 'normalize_path', 'guard_for_path', 'home_route_for', 'accessible_reports',
    'can_access_report', 'referenced_roles', 'protected_route', 'multi_role_route', 'procurement_route',
    'packing_route', 'delivery_route', 'cutting_route', 'procurement_or_cutting_route', 'dispatch_route',
]
