from flask import Blueprint, request, abort, current_app
from hubconsole.constants.roles import MODULES
from hubconsole.decorators.auth import require
from hubconsole.services.guard import evaluate_guard
from hubconsole.services.policy import current_policy
from hubconsole.services.principal import current_principal
from hubconsole.services.requirements import parse_requirement
from hubconsole.services.route_guards import guard_for_path
from hubconsole.utils.validation import json_object, optional_str

access_bp = Blueprint('access', __name__)


# Role selection happens before login, so role lookups are public
@access_bp.get('/roles')
def list_roles():
    table = current_policy().table
    module = request.args.get('module')
    if module is None:
        roles = table.roles()
    elif module in MODULES:
        roles = table.get_roles_by_module(module)
    else:
        abort(400, description=f'module must be one of {list(MODULES)}')
    return {'data': [r.as_dict() for r in roles]}


@access_bp.get('/roles/<name>')
def get_role(name: str):
    role = current_policy().table.get_role_definition(name)
    if not role:
        abort(404, description='Unknown role')
    return role.as_dict()


@access_bp.get('/permissions')
@require()
def list_permissions():
    return {'data': sorted(current_policy().table.all_permissions())}


@access_bp.post('/check')
def check_access():
    """Evaluate an arbitrary requirement for the caller; the decision is the response body."""
    data = json_object()
    if 'requirement' not in data:
        abort(400, description='requirement required')
    try:
        requirement = parse_requirement(data['requirement'])
    except ValueError as e:
        abort(400, description=str(e))
    fallback = optional_str(data, 'fallback') or current_app.config['AUTHZ_DEFAULT_FALLBACK']
    decision = evaluate_guard(current_policy(), requirement, current_principal(), fallback)
    return decision.as_dict()


@access_bp.get('/route')
def check_route():
    path = request.args.get('path')
    if not path:
        abort(400, description='path required')
    decision = guard_for_path(path).evaluate(current_policy(), current_principal())
    return decision.as_dict()
