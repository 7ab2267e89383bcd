import json, pathlib, importlib.util, sys
import pytest

from hubconsole.constants.permissions import Permission as P
from hubconsole.routes.orders import ORDERS_CREATE, ORDERS_VIEW
from hubconsole.routes.products import PRODUCTS_VIEW
from hubconsole.services.requirements import AllOf, AnyOf, HasPermission
from hubconsole.services.role_table import roles_checksum
from hubconsole.services.route_guards import ROUTE_GUARDS

SCRIPT = pathlib.Path(__file__).resolve().parents[1] / 'scripts' / 'authz_catalog.py'
# Only reachable through super_admin
SUPER_ADMIN_ONLY = {P.PRODUCT_APPROVAL.value, P.ALL_ACCESS.value}


def _permissions(req, out):
    if isinstance(req, HasPermission):
        out.add(req.permission)
    elif isinstance(req, (AnyOf, AllOf)):
        for child in req.requirements:
            _permissions(child, out)
    return out


def _referenced_permissions():
    perms = set()
    for _, guard in ROUTE_GUARDS:
        _permissions(guard.requirement, perms)
    for req in (ORDERS_VIEW, ORDERS_CREATE, PRODUCTS_VIEW):
        _permissions(req, perms)
    return perms


def test_guard_permissions_are_declared(role_table):
    missing = sorted(_referenced_permissions() - role_table.all_permissions())
    assert not missing, f"Guards reference undeclared permissions: {missing}"


def test_guard_permissions_exist_in_some_role(role_table):
    all_role_perms = set().union(*(r.permissions for r in role_table.roles()))
    missing = sorted(p for p in _referenced_permissions() - SUPER_ADMIN_ONLY if p not in all_role_perms)
    assert not missing, f"Guard permissions not present in any concrete role: {missing}"


@pytest.fixture()
def catalog_cli(monkeypatch):
    spec = importlib.util.spec_from_file_location('authz_catalog', SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    def run(*argv):
        monkeypatch.setattr(sys, 'argv', ['authz_catalog.py', *argv])
        module.main()
    return run


def test_cli_validate_and_export(catalog_cli, role_table, tmp_path, capsys):
    out = tmp_path / 'roles.json'
    catalog_cli('--validate', '--export-json', str(out))
    assert '[VALIDATION] OK: 12 roles' in capsys.readouterr().out
    payload = json.loads(out.read_text(encoding='utf-8'))
    assert payload['meta']['roles_checksum_sha256'] == roles_checksum(role_table)
    assert payload['aliases'] == {'hub_admin': 'hub_main_admin', 'store_admin': 'store_main_admin'}
    assert 'hub_labeling_view' in payload['roles']['hub_packing']


def test_cli_checksum_guard(catalog_cli, role_table, capsys):
    catalog_cli('--fail-if-changed', roles_checksum(role_table))
    assert '[CHECKSUM] OK' in capsys.readouterr().out
    with pytest.raises(SystemExit) as exc:
        catalog_cli('--fail-if-changed', 'deadbeef')
    assert exc.value.code == 4
