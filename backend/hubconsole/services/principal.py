from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Mapping, Optional

from flask_jwt_extended import create_access_token, get_jwt, get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from hubconsole.constants.permissions import permission_code


def _text(value) -> Optional[str]:
    # Claims come from outside; integers are read as ids, other non-strings as absent
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return None


@dataclass(frozen=True)
class Principal:
    """Already-authenticated user as seen by the authorization core.

    ``permissions`` holds per-user grants that are unioned with the role bundle.
    """
    role: Optional[str]
    login_type: Optional[str]
    hub_id: Optional[str] = None
    store_id: Optional[str] = None
    permissions: FrozenSet[str] = field(default_factory=frozenset)
    user_id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'Principal':
        raw_perms = data.get('permissions') or data.get('perms') or ()
        if isinstance(raw_perms, str):
            raw_perms = (raw_perms,)
        elif not isinstance(raw_perms, (list, tuple, set, frozenset)):
            raw_perms = ()
        perms = frozenset(c for c in (permission_code(p) for p in raw_perms) if c)
        return cls(
            role=_text(data.get('role')),
            login_type=_text(data.get('login_type')),
            hub_id=_text(data.get('hub_id')),
            store_id=_text(data.get('store_id')),
            permissions=perms,
            user_id=_text(data.get('user_id', data.get('id'))),
            name=_text(data.get('name')),
            email=_text(data.get('email')),
        )

    @classmethod
    def from_claims(cls, claims: Mapping[str, Any]) -> 'Principal':
        data = dict(claims)
        data['user_id'] = claims.get('sub')
        return cls.from_mapping(data)

    def to_claims(self) -> Dict[str, Any]:
        return {
            'role': self.role,
            'login_type': self.login_type,
            'hub_id': self.hub_id,
            'store_id': self.store_id,
            'perms': sorted(self.permissions),
            'name': self.name,
            'email': self.email,
        }

    def as_dict(self) -> Dict[str, Any]:
        out = self.to_claims()
        out['id'] = self.user_id
        out['permissions'] = out.pop('perms')
        return out


def issue_access_token(principal: Principal) -> str:
    # JWT identity must be a string (flask-jwt-extended v4 requirement)
    return create_access_token(identity=principal.user_id or principal.email or '0',
                               additional_claims=principal.to_claims())


def current_principal() -> Optional[Principal]:
    """Principal of the current request, or None when no valid session token is present.

    Missing, malformed and expired tokens all resolve to None.
    """
    try:
        verify_jwt_in_request(optional=True)
    except (JWTExtendedException, PyJWTError):
        return None
    if get_jwt_identity() is None:
        return None
    return Principal.from_claims(get_jwt())
