from flask import Blueprint, abort, current_app
from hubconsole.constants.roles import DEFAULT_ROLE_FOR_LOGIN, LOGIN_TYPES, MODULE_HUB, MODULE_STORE, SUPER_ADMIN
from hubconsole.decorators.auth import require
from hubconsole.services.policy import current_policy, get_accessible_modules
from hubconsole.services.principal import Principal, current_principal, issue_access_token
from hubconsole.services.route_guards import home_route_for
from hubconsole.utils.validation import json_object, optional_str

auth_bp = Blueprint('auth', __name__)


@auth_bp.post('/login')
def login():
    """Issue a session token for an already-verified user.

    The password check belongs to the deployment: ``CREDENTIAL_VERIFIER`` receives
    (email, password, login_type) and returns a bool.
    """
    data = json_object()
    email = optional_str(data, 'email'); password = optional_str(data, 'password')
    login_type = optional_str(data, 'login_type')
    if not email or not password:
        abort(400, description='email & password required')
    if login_type not in LOGIN_TYPES:
        abort(400, description=f'login_type must be one of {list(LOGIN_TYPES)}')
    verifier = current_app.config.get('CREDENTIAL_VERIFIER')
    if verifier is None:
        abort(503, description='credential verification not configured')
    if not verifier(email, password, login_type):
        abort(401, description='invalid credentials')

    table = current_policy().table
    role_name = optional_str(data, 'role')
    if login_type == SUPER_ADMIN:
        role_name = SUPER_ADMIN
    elif role_name:
        role = table.lookup_role(role_name)
        if not role:
            abort(400, description='unknown role')
        if role.module_type != login_type:
            abort(400, description=f'role {role_name} does not belong to the {login_type} module')
    else:
        role_name = DEFAULT_ROLE_FOR_LOGIN[login_type]

    location_id = optional_str(data, 'location_id')
    principal = Principal(
        role=role_name,
        login_type=login_type,
        hub_id=(location_id or current_app.config['AUTH_DEFAULT_HUB_ID']) if login_type == MODULE_HUB else None,
        store_id=(location_id or current_app.config['AUTH_DEFAULT_STORE_ID']) if login_type == MODULE_STORE else None,
        user_id=email,
        name=optional_str(data, 'name'),
        email=email,
    )
    return {'access_token': issue_access_token(principal), 'home_route': home_route_for(principal)}


@auth_bp.get('/me')
@require()
def me():
    user = current_principal()
    policy = current_policy()
    role = policy.table.lookup_role(user.role)
    return {
        **user.as_dict(),
        'role_definition': role.as_dict() if role else None,
        'effective_permissions': policy.effective_permissions(user),
        'modules': get_accessible_modules(user.login_type),
        'home_route': home_route_for(user),
    }
