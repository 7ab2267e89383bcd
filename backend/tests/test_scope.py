from types import SimpleNamespace
from hubconsole.constants.roles import SUPER_ADMIN
from hubconsole.models.order import Order
from hubconsole.services.principal import Principal
from hubconsole.services.scope import filter_data_by_module, filter_query_by_module
from tests.test_utils_seed import create_order, make_principal

ITEMS = [
    {'id': 1, 'hub_id': 'hub_1'},
    {'id': 2, 'hub_id': 'hub_2'},
    {'id': 3, 'module_type': 'hub'},
    {'id': 4, 'store_id': 'store_1'},
    {'id': 5, 'module_type': 'store'},
    {'id': 6},
]


def _ids(items):
    return [i['id'] for i in items]


def test_hub_user_sees_module_and_own_hub():
    user = make_principal('hub_packing', hub_id='hub_1')
    assert _ids(filter_data_by_module(ITEMS, user)) == [1, 3]


def test_store_user_sees_module_and_own_store():
    user = make_principal('store_delivery', store_id='store_1')
    assert _ids(filter_data_by_module(ITEMS, user)) == [4, 5]


def test_super_admin_sees_everything_in_order():
    result = filter_data_by_module(ITEMS, make_principal(SUPER_ADMIN))
    assert result == ITEMS
    assert result is not ITEMS


def test_absent_or_unknown_login_type_sees_nothing():
    assert filter_data_by_module(ITEMS, None) == []
    assert filter_data_by_module(ITEMS, Principal(role='hub_packing', login_type='warehouse')) == []
    assert filter_data_by_module(ITEMS, Principal(role='hub_packing', login_type=None)) == []


def test_missing_location_never_matches_missing_field():
    user = Principal(role='hub_packing', login_type='hub', hub_id=None)
    assert _ids(filter_data_by_module(ITEMS, user)) == [3]


def test_malformed_records_are_excluded():
    user = make_principal('hub_packing', hub_id='hub_1')
    items = [{}, {'module_type': None}, {'hub_id': None}, {'store_id': 'hub_1'}, {'hub_id': 'hub_1'}]
    assert filter_data_by_module(items, user) == [{'hub_id': 'hub_1'}]


def test_works_with_objects():
    user = make_principal('store_packing', store_id='store_9')
    items = [SimpleNamespace(module_type=None, store_id='store_9'), SimpleNamespace(module_type='hub')]
    assert filter_data_by_module(items, user) == [items[0]]


def test_accepts_any_iterable():
    user = make_principal('hub_packing', hub_id='hub_2')
    assert _ids(filter_data_by_module(iter(ITEMS), user)) == [2, 3]


def test_query_filter_matches_in_memory_filter(clean_db):
    for item in ITEMS:
        create_order(f"customer {item['id']}", module_type=item.get('module_type'),
                     hub_id=item.get('hub_id'), store_id=item.get('store_id'))
    orders = clean_db.query(Order).order_by(Order.id).all()
    users = [
        make_principal('hub_packing', hub_id='hub_1'),
        make_principal('store_delivery', store_id='store_1'),
        Principal(role='hub_packing', login_type='hub'),
        make_principal(SUPER_ADMIN),
        Principal(role=None, login_type='warehouse'),
        None,
    ]
    for user in users:
        q = filter_query_by_module(clean_db.query(Order), Order, user).order_by(Order.id)
        assert [o.id for o in q.all()] == [o.id for o in filter_data_by_module(orders, user)]


def test_non_string_login_type_sees_nothing():
    for login_type in (['hub'], {'hub': 1}, ('hub',)):
        user = Principal(role='hub_packing', login_type=login_type, hub_id='hub_1')
        assert filter_data_by_module(ITEMS, user) == []
    from_claims = Principal.from_mapping({'role': 'hub_packing', 'login_type': ['hub'], 'hub_id': 'hub_1'})
    assert filter_data_by_module(ITEMS, from_claims) == []


def test_non_string_location_only_sees_module_records():
    user = Principal(role='hub_packing', login_type='hub', hub_id=['hub_1'])
    assert _ids(filter_data_by_module(ITEMS, user)) == [3]


def test_query_filter_with_malformed_principal(clean_db):
    for item in ITEMS:
        create_order(f"customer {item['id']}", module_type=item.get('module_type'),
                     hub_id=item.get('hub_id'), store_id=item.get('store_id'))
    listed = Principal(role='hub_packing', login_type=['hub'], hub_id='hub_1')
    assert filter_query_by_module(clean_db.query(Order), Order, listed).all() == []
    odd_location = Principal(role='hub_packing', login_type='hub', hub_id={'id': 'hub_1'})
    q = filter_query_by_module(clean_db.query(Order), Order, odd_location)
    assert [o.module_type for o in q.all()] == ['hub']
