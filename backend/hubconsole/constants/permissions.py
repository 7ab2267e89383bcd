"""Closed catalog of permission identifiers used across the console.
Values are the wire strings stored in tokens and role bundles; never rename one
silently, add a new member and migrate holders instead.
"""
from __future__ import annotations
from enum import Enum
from typing import List


class Permission(str, Enum):
    # Hub orders
    HUB_ORDERS_VIEW = 'hub_orders_view'
    HUB_ORDERS_CREATE = 'hub_orders_create'
    HUB_ORDERS_EDIT = 'hub_orders_edit'
    HUB_PRE_ORDERS = 'hub_pre_orders'

    # Hub team
    HUB_TEAM_VIEW = 'hub_team_view'
    HUB_TEAM_MANAGE = 'hub_team_manage'
    HUB_DELIVERY_AGENTS_VIEW = 'hub_delivery_agents_view'
    HUB_DELIVERY_AGENTS_MANAGE = 'hub_delivery_agents_manage'
    HUB_CUSTOM_ROLES = 'hub_custom_roles'

    # Hub products
    HUB_PRODUCTS_VIEW = 'hub_products_view'
    HUB_PRODUCTS_MANAGE = 'hub_products_manage'
    HUB_PRODUCTS_UPLOAD = 'hub_products_upload'
    HUB_STOCK_VIEW = 'hub_stock_view'
    HUB_STOCK_MANAGE = 'hub_stock_manage'
    HUB_CATEGORIES_VIEW = 'hub_categories_view'
    HUB_CATEGORIES_MANAGE = 'hub_categories_manage'
    HUB_RECIPES_VIEW = 'hub_recipes_view'
    HUB_RECIPES_MANAGE = 'hub_recipes_manage'

    # Hub labeling
    HUB_LABELING_VIEW = 'hub_labeling_view'
    HUB_LABELING_MANAGE = 'hub_labeling_manage'

    # Hub marketing
    HUB_MARKETING_VIEW = 'hub_marketing_view'
    HUB_MARKETING_MANAGE = 'hub_marketing_manage'
    HUB_SCRATCH_CARD = 'hub_scratch_card'
    HUB_SPIN_WHEEL = 'hub_spin_wheel'
    HUB_FLASH_SALE = 'hub_flash_sale'
    HUB_SUBSCRIPTION = 'hub_subscription'
    HUB_OFFER_NOTIFICATION = 'hub_offer_notification'
    HUB_COUPON = 'hub_coupon'
    HUB_IN_APP_CURRENCY = 'hub_in_app_currency'
    HUB_REFERRAL = 'hub_referral'

    # Hub reports
    HUB_REPORTS_SALES = 'hub_reports_sales'
    HUB_REPORTS_PACKING = 'hub_reports_packing'
    HUB_REPORTS_DELIVERY = 'hub_reports_delivery'
    HUB_REPORTS_STOCK = 'hub_reports_stock'
    HUB_REPORTS_CUSTOMER = 'hub_reports_customer'
    HUB_REPORTS_PROCUREMENT = 'hub_reports_procurement'

    # Hub audit
    HUB_AUDIT_LOGS = 'hub_audit_logs'

    # Store orders
    STORE_ORDERS_VIEW = 'store_orders_view'
    STORE_ORDERS_CREATE = 'store_orders_create'

    # Store team
    STORE_TEAM_VIEW = 'store_team_view'
    STORE_TEAM_MANAGE = 'store_team_manage'

    # Store products
    STORE_PRODUCTS_VIEW = 'store_products_view'
    STORE_STOCK_MANAGE = 'store_stock_manage'

    # Store delivery agents
    STORE_DELIVERY_AGENTS_VIEW = 'store_delivery_agents_view'

    # Super admin
    PRODUCT_APPROVAL = 'product_approval'
    ALL_ACCESS = 'all_access'

    # Operations shared by both modules
    PROCUREMENT_VIEW = 'procurement_view'
    PROCUREMENT_MANAGE = 'procurement_manage'
    CUTTING_CLEANING_VIEW = 'cutting_cleaning_view'
    CUTTING_CLEANING_MANAGE = 'cutting_cleaning_manage'
    PACKING_VIEW = 'packing_view'
    PACKING_MANAGE = 'packing_manage'
    DISPATCH_VIEW = 'dispatch_view'
    DISPATCH_MANAGE = 'dispatch_manage'
    DELIVERY_VIEW = 'delivery_view'
    DELIVERY_MANAGE = 'delivery_manage'
    DELIVERY_ASSIGN = 'delivery_assign'


def permission_code(value) -> str | None:
    """Return the wire string for a Permission member or plain string, else None."""
    if isinstance(value, Permission):
        return value.value
    if isinstance(value, str):
        return value
    return None


def build_all_permission_codes() -> List[str]:
    return [p.value for p in Permission]


ALL_PERMISSION_CODES = build_all_permission_codes()
