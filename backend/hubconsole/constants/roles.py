"""Role definitions for the hub and store modules.

Each concrete role belongs to exactly one module. ``super_admin`` is not a row:
it is a sentinel login that satisfies every check. ``hub_admin`` / ``store_admin``
are aliases handed out at login when no specific role was picked.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Tuple

from hubconsole.constants.permissions import Permission as P, permission_code

MODULE_HUB = 'hub'
MODULE_STORE = 'store'
MODULES: Tuple[str, ...] = (MODULE_HUB, MODULE_STORE)

SUPER_ADMIN = 'super_admin'
LOGIN_TYPES: Tuple[str, ...] = (MODULE_HUB, MODULE_STORE, SUPER_ADMIN)


@dataclass(frozen=True)
class RoleDefinition:
    id: str
    display_name: str
    description: str
    module_type: str
    permissions: FrozenSet[str] = field(default_factory=frozenset)
    color: str = ''
    icon: str = ''

    @property
    def name(self) -> str:
        return self.id

    def as_dict(self) -> Dict[str, object]:
        return {
            'id': self.id,
            'name': self.name,
            'display_name': self.display_name,
            'description': self.description,
            'module_type': self.module_type,
            'permissions': sorted(self.permissions),
            'color': self.color,
            'icon': self.icon,
        }


def _role(role_id: str, display_name: str, description: str, module_type: str,
          color: str, icon: str, grants: Iterable) -> RoleDefinition:
    # Unknown entries are kept as-is so the table build can report them
    codes = frozenset(permission_code(g) or repr(g) for g in grants)
    return RoleDefinition(role_id, display_name, description, module_type, codes, color, icon)


_HUB_MARKETING = [
    P.HUB_MARKETING_VIEW, P.HUB_MARKETING_MANAGE, P.HUB_SCRATCH_CARD, P.HUB_SPIN_WHEEL,
    P.HUB_FLASH_SALE, P.HUB_SUBSCRIPTION, P.HUB_OFFER_NOTIFICATION, P.HUB_COUPON,
    P.HUB_IN_APP_CURRENCY, P.HUB_REFERRAL,
]
_HUB_REPORTS = [
    P.HUB_REPORTS_SALES, P.HUB_REPORTS_PACKING, P.HUB_REPORTS_DELIVERY,
    P.HUB_REPORTS_STOCK, P.HUB_REPORTS_CUSTOMER, P.HUB_REPORTS_PROCUREMENT,
]
_OPERATIONS = [
    P.PROCUREMENT_VIEW, P.PROCUREMENT_MANAGE,
    P.CUTTING_CLEANING_VIEW, P.CUTTING_CLEANING_MANAGE,
    P.PACKING_VIEW, P.PACKING_MANAGE,
    P.DISPATCH_VIEW, P.DISPATCH_MANAGE,
    P.DELIVERY_VIEW, P.DELIVERY_MANAGE,
]

ROLE_DEFINITIONS: List[RoleDefinition] = [
    # Hub roles
    _role('hub_main_admin', 'Main Admin', 'Full access to hub operations', MODULE_HUB,
          'bg-blue-500', 'Shield', [
              P.HUB_ORDERS_VIEW, P.HUB_ORDERS_CREATE, P.HUB_ORDERS_EDIT, P.HUB_PRE_ORDERS,
              P.HUB_TEAM_VIEW, P.HUB_TEAM_MANAGE, P.HUB_DELIVERY_AGENTS_VIEW,
              P.HUB_DELIVERY_AGENTS_MANAGE, P.HUB_CUSTOM_ROLES,
              P.HUB_PRODUCTS_VIEW, P.HUB_PRODUCTS_MANAGE, P.HUB_PRODUCTS_UPLOAD,
              P.HUB_STOCK_VIEW, P.HUB_STOCK_MANAGE, P.HUB_CATEGORIES_VIEW, P.HUB_CATEGORIES_MANAGE,
              P.HUB_RECIPES_VIEW, P.HUB_RECIPES_MANAGE,
              P.HUB_LABELING_VIEW, P.HUB_LABELING_MANAGE,
              *_HUB_MARKETING, *_HUB_REPORTS,
              P.HUB_AUDIT_LOGS,
              *_OPERATIONS,
          ]),
    _role('hub_procurement', 'Procurement Employee', 'Manage procurement and inventory operations',
          MODULE_HUB, 'bg-green-500', 'Package', [
              P.HUB_PRODUCTS_VIEW, P.HUB_PRODUCTS_MANAGE,
              P.PROCUREMENT_VIEW, P.PROCUREMENT_MANAGE,
          ]),
    _role('hub_cutting_cleaning', 'Cutting & Cleaning Employee', 'Handle cutting and cleaning operations',
          MODULE_HUB, 'bg-teal-500', 'Scissors', [
              P.CUTTING_CLEANING_VIEW, P.CUTTING_CLEANING_MANAGE, P.HUB_PRODUCTS_VIEW,
          ]),
    _role('hub_packing', 'Packing Employee', 'Handle order packing operations',
          MODULE_HUB, 'bg-orange-500', 'Box', [
              P.HUB_ORDERS_VIEW, P.HUB_ORDERS_EDIT, P.PACKING_VIEW, P.PACKING_MANAGE,
              P.HUB_LABELING_VIEW, P.HUB_LABELING_MANAGE,
          ]),
    _role('hub_dispatch', 'Dispatch Employee', 'Handle order dispatch and coordination',
          MODULE_HUB, 'bg-indigo-500', 'Send', [
              P.HUB_ORDERS_VIEW, P.HUB_ORDERS_EDIT, P.DISPATCH_VIEW, P.DISPATCH_MANAGE,
              P.DELIVERY_VIEW, P.DELIVERY_ASSIGN, P.HUB_DELIVERY_AGENTS_VIEW,
          ]),
    _role('hub_delivery', 'Delivery Employee', 'View delivery operations and track orders',
          MODULE_HUB, 'bg-purple-500', 'Truck', [
              P.HUB_ORDERS_VIEW, P.DELIVERY_VIEW, P.HUB_TEAM_VIEW, P.HUB_DELIVERY_AGENTS_VIEW,
          ]),

    # Store roles
    _role('store_main_admin', 'Main Admin', 'Full access to store operations', MODULE_STORE,
          'bg-blue-500', 'Shield', [
              P.STORE_ORDERS_VIEW, P.STORE_ORDERS_CREATE, P.STORE_TEAM_VIEW, P.STORE_TEAM_MANAGE,
              P.STORE_DELIVERY_AGENTS_VIEW, P.STORE_PRODUCTS_VIEW, P.STORE_STOCK_MANAGE,
              P.HUB_CATEGORIES_VIEW, P.HUB_CATEGORIES_MANAGE, P.HUB_RECIPES_VIEW, P.HUB_RECIPES_MANAGE,
              P.HUB_LABELING_VIEW, P.HUB_LABELING_MANAGE,
              *_HUB_MARKETING, *_HUB_REPORTS,
              *_OPERATIONS,
          ]),
    _role('store_procurement', 'Procurement Employee', 'Manage store procurement and inventory',
          MODULE_STORE, 'bg-green-500', 'Package', [
              P.STORE_PRODUCTS_VIEW, P.PROCUREMENT_VIEW, P.PROCUREMENT_MANAGE,
          ]),
    _role('store_cutting_cleaning', 'Cutting & Cleaning Employee', 'Handle store cutting and cleaning operations',
          MODULE_STORE, 'bg-teal-500', 'Scissors', [
              P.CUTTING_CLEANING_VIEW, P.CUTTING_CLEANING_MANAGE, P.STORE_PRODUCTS_VIEW,
          ]),
    _role('store_packing', 'Packing Employee', 'Handle store order packing',
          MODULE_STORE, 'bg-orange-500', 'Box', [
              P.STORE_ORDERS_VIEW, P.PACKING_VIEW, P.PACKING_MANAGE,
              P.HUB_LABELING_VIEW, P.HUB_LABELING_MANAGE,
          ]),
    _role('store_dispatch', 'Dispatch Employee', 'Handle store order dispatch and coordination',
          MODULE_STORE, 'bg-indigo-500', 'Send', [
              P.STORE_ORDERS_VIEW, P.DISPATCH_VIEW, P.DISPATCH_MANAGE,
              P.DELIVERY_VIEW, P.DELIVERY_ASSIGN, P.STORE_DELIVERY_AGENTS_VIEW,
          ]),
    _role('store_delivery', 'Delivery Employee', 'View store delivery operations',
          MODULE_STORE, 'bg-purple-500', 'Truck', [
              P.STORE_ORDERS_VIEW, P.DELIVERY_VIEW, P.STORE_TEAM_VIEW, P.STORE_DELIVERY_AGENTS_VIEW,
          ]),
]

# Login fallback names -> concrete role ids
ROLE_ALIASES: Dict[str, str] = {
    'hub_admin': 'hub_main_admin',
    'store_admin': 'store_main_admin',
}

DEFAULT_ROLE_FOR_LOGIN: Dict[str, str] = {
    MODULE_HUB: 'hub_admin',
    MODULE_STORE: 'store_admin',
}
