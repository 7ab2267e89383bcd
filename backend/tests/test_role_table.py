import dataclasses
import pytest
from hubconsole.constants.permissions import ALL_PERMISSION_CODES, Permission
from hubconsole.constants.roles import (
    DEFAULT_ROLE_FOR_LOGIN, MODULE_HUB, MODULE_STORE, ROLE_ALIASES, ROLE_DEFINITIONS, SUPER_ADMIN, RoleDefinition,
)
from hubconsole.services.role_table import (
    AuthzConfigError, RoleTable, build_default_role_table, get_role_definition, get_roles_by_module,
    role_permission_map, roles_checksum,
)
from hubconsole.services.route_guards import referenced_roles


def _row(role_id, module=MODULE_HUB, perms=('hub_orders_view',)):
    return RoleDefinition(role_id, role_id.title(), '', module, frozenset(perms))


def test_default_table_builds(role_table):
    assert len(role_table) == 12
    assert role_table.all_permissions() == frozenset(p.value for p in Permission)


def test_permission_codes_are_unique():
    # an Enum silently turns a duplicated value into an alias member
    assert len(Permission.__members__) == len(list(Permission))
    assert len(ALL_PERMISSION_CODES) == len(set(ALL_PERMISSION_CODES))


def test_every_bundle_uses_declared_permissions(role_table):
    catalog = role_table.all_permissions()
    for role in role_table.roles():
        assert role.permissions <= catalog, role.id


def test_modules_partition_roles(role_table):
    hub = {r.id for r in get_roles_by_module(role_table, MODULE_HUB)}
    store = {r.id for r in get_roles_by_module(role_table, MODULE_STORE)}
    assert hub and store
    assert hub.isdisjoint(store)
    assert hub | store == {r.id for r in role_table.roles()}
    assert SUPER_ADMIN not in hub | store
    assert get_roles_by_module(role_table, 'warehouse') == []


def test_roles_used_by_routes_exist(role_table):
    for name in referenced_roles():
        assert name in role_table, name
    for alias in DEFAULT_ROLE_FOR_LOGIN.values():
        assert alias in role_table


def test_lookup_is_total(role_table):
    assert get_role_definition(role_table, 'hub_packing').display_name == 'Packing Employee'
    assert role_table.lookup_role('unknown_role') is None
    assert role_table.lookup_role(None) is None
    assert role_table.lookup_role(42) is None
    assert role_table.lookup_role(SUPER_ADMIN) is None


def test_aliases_resolve_to_main_admins(role_table):
    assert role_table.lookup_role('hub_admin').id == 'hub_main_admin'
    assert role_table.lookup_role('store_admin').id == 'store_main_admin'
    assert dict(role_table.aliases) == ROLE_ALIASES


def test_table_is_immutable(role_table):
    role = role_table.lookup_role('hub_delivery')
    with pytest.raises(dataclasses.FrozenInstanceError):
        role.permissions = frozenset()
    with pytest.raises(TypeError):
        role_table.aliases['x'] = 'hub_main_admin'
    listed = role_table.roles()
    listed.clear()
    assert len(role_table) == 12


def test_duplicate_permission_rejected():
    with pytest.raises(AuthzConfigError) as exc:
        RoleTable(['hub_orders_view', 'hub_orders_view'], [])
    assert 'Duplicate permission code: hub_orders_view' in exc.value.problems


def test_undeclared_permission_reported_with_hint():
    row = _row('hub_labeler', perms=('HUB_LABELING_VIEW',))
    with pytest.raises(AuthzConfigError) as exc:
        RoleTable(ALL_PERMISSION_CODES, [row])
    (problem,) = exc.value.problems
    assert 'undeclared permission: HUB_LABELING_VIEW' in problem
    assert 'did you mean hub_labeling_view' in problem


def test_all_problems_reported_at_once():
    rows = [
        _row('hub_x'),
        _row('hub_x'),
        _row('warehouse_x', module='warehouse'),
        _row(SUPER_ADMIN),
    ]
    with pytest.raises(AuthzConfigError) as exc:
        RoleTable(ALL_PERMISSION_CODES, rows, {'hub_x': 'hub_x', 'ghost': 'nobody'})
    problems = exc.value.problems
    assert len(problems) == 5
    assert any('Duplicate role id: hub_x' in p for p in problems)
    assert any("invalid module 'warehouse'" in p for p in problems)
    assert any('reserved' in p for p in problems)
    assert any("Alias 'hub_x' shadows" in p for p in problems)
    assert any("unknown role 'nobody'" in p for p in problems)


def test_checksum_tracks_bundles():
    first = build_default_role_table()
    second = build_default_role_table()
    assert roles_checksum(first) == roles_checksum(second)
    changed = [_row('hub_main_admin', perms=('hub_orders_view',)) if r.id == 'hub_main_admin' else r
               for r in ROLE_DEFINITIONS]
    assert roles_checksum(RoleTable(ALL_PERMISSION_CODES, changed)) != roles_checksum(first)
    assert role_permission_map(first)['hub_delivery'] == sorted(first.lookup_role('hub_delivery').permissions)
