from __future__ import annotations
from flask import Blueprint, abort
from sqlalchemy import select
from hubconsole import get_db
from hubconsole.constants.permissions import Permission as P
from hubconsole.constants.roles import MODULES, SUPER_ADMIN
from hubconsole.decorators.auth import require
from hubconsole.models.order import Order
from hubconsole.services.principal import current_principal
from hubconsole.services.requirements import AnyOf, HasPermission
from hubconsole.services.scope import assert_module_access, filter_query_by_module
from hubconsole.utils.listing import list_response
from hubconsole.utils.validation import json_object, optional_str

orders_bp = Blueprint('orders', __name__)

ORDERS_VIEW = AnyOf(HasPermission(P.HUB_ORDERS_VIEW), HasPermission(P.STORE_ORDERS_VIEW))
ORDERS_CREATE = AnyOf(HasPermission(P.HUB_ORDERS_CREATE), HasPermission(P.STORE_ORDERS_CREATE))

FILTER_SPECS = {
    'customer_name': {'op': lambda qu, v: qu.filter(Order.customer_name.ilike(f'%{v}%'))},
    'status': {'op': lambda qu, v: qu.filter(Order.status == v), 'validate': lambda v: v in Order.ALL_STATUSES},
}


@orders_bp.get('/orders')
@require(ORDERS_VIEW)
def list_orders():
    session = get_db()
    q = filter_query_by_module(session.query(Order), Order, current_principal())
    return list_response(q.order_by(Order.id.asc()), _order_json, FILTER_SPECS)


@orders_bp.get('/orders/<int:order_id>')
@require(ORDERS_VIEW)
def get_order(order_id: int):
    session = get_db()
    o = session.execute(select(Order).where(Order.id == order_id)).scalar_one_or_none()
    if not o:
        abort(404)
    assert_module_access(o, current_principal())
    return _order_json(o)


@orders_bp.post('/orders')
@require(ORDERS_CREATE)
def create_order():
    user = current_principal()
    data = json_object()
    customer_name = optional_str(data, 'customer_name')
    if not customer_name:
        abort(400, description='customer_name required')
    try:
        total_cents = int(data.get('total_cents', 0))
    except (TypeError, ValueError):
        abort(400, description='total_cents must be int')

    module_type = optional_str(data, 'module_type')
    if module_type is not None and module_type not in MODULES:
        abort(400, description=f'module_type must be one of {list(MODULES)}')
    if user.login_type == SUPER_ADMIN:
        hub_id, store_id = optional_str(data, 'hub_id'), optional_str(data, 'store_id')
        if not (module_type or hub_id or store_id):
            abort(400, description='module_type, hub_id or store_id required')
    else:
        # Non super admins create records inside their own module and location
        if module_type is not None and module_type != user.login_type:
            abort(403, description='Module access denied')
        hub_id, store_id = user.hub_id, user.store_id
        if not (hub_id or store_id):
            module_type = user.login_type

    o = Order(customer_name=customer_name, total_cents=total_cents, module_type=module_type,
              hub_id=hub_id, store_id=store_id, created_by=user.user_id)
    session = get_db()
    session.add(o)
    session.commit()
    return _order_json(o), 201


def _order_json(o: Order):
    return {
        'id': o.id,
        'module_type': o.module_type,
        'hub_id': o.hub_id,
        'store_id': o.store_id,
        'customer_name': o.customer_name,
        'total_cents': o.total_cents,
        'status': o.status
    }
