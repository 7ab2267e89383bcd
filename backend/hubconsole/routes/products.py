from __future__ import annotations
from flask import Blueprint, abort
from sqlalchemy import select
from hubconsole import get_db
from hubconsole.constants.permissions import Permission as P
from hubconsole.decorators.auth import require
from hubconsole.models.product import Product
from hubconsole.services.principal import current_principal
from hubconsole.services.requirements import AnyOf, HasPermission
from hubconsole.services.scope import assert_module_access, filter_query_by_module
from hubconsole.utils.listing import list_response

products_bp = Blueprint('products', __name__)

PRODUCTS_VIEW = AnyOf(HasPermission(P.HUB_PRODUCTS_VIEW), HasPermission(P.STORE_PRODUCTS_VIEW))


@products_bp.get('/products')
@require(PRODUCTS_VIEW)
def list_products():
    session = get_db()
    q = filter_query_by_module(session.query(Product), Product, current_principal())
    filter_specs = {
        'name': {'op': lambda qu, v: qu.filter(Product.name.ilike(f'%{v}%'))},
        'sku': {'op': lambda qu, v: qu.filter(Product.sku == v)},
        'min_quantity': {'coerce': int, 'op': lambda qu, v: qu.filter(Product.quantity >= v)},
    }
    return list_response(q.order_by(Product.id.asc()), _product_json, filter_specs)


@products_bp.get('/products/<int:product_id>')
@require(PRODUCTS_VIEW)
def get_product(product_id: int):
    session = get_db()
    p = session.execute(select(Product).where(Product.id == product_id)).scalar_one_or_none()
    if not p:
        abort(404)
    assert_module_access(p, current_principal())
    return _product_json(p)


def _product_json(p: Product):
    return {
        'id': p.id,
        'name': p.name,
        'sku': p.sku,
        'module_type': p.module_type,
        'hub_id': p.hub_id,
        'store_id': p.store_id,
        'quantity': p.quantity,
    }
