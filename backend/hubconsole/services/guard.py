"""Render-or-redirect decision for a protected view.

Order is fixed and short-circuits: no principal (or no valid session) ->
UNAUTHENTICATED, requirement not met -> UNAUTHORIZED, else AUTHORIZED. Each
evaluation is independent; nothing is retained between calls.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from hubconsole.services.policy import PolicyEvaluator
from hubconsole.services.principal import Principal
from hubconsole.services.requirements import AUTHENTICATED, Requirement, evaluate_requirement

LOGIN_REDIRECT = 'login'
DASHBOARD_ROUTE = '/dashboard'
UNAUTHORIZED_ROUTE = '/unauthorized'


class GuardState(Enum):
    UNAUTHENTICATED = 'UNAUTHENTICATED'
    UNAUTHORIZED = 'UNAUTHORIZED'
    AUTHORIZED = 'AUTHORIZED'


@dataclass(frozen=True)
class GuardDecision:
    state: GuardState
    redirect: Optional[str] = None

    @property
    def render(self) -> bool:
        return self.state is GuardState.AUTHORIZED

    def as_dict(self) -> Dict[str, Any]:
        if self.render:
            return {'render': True}
        return {'redirect': self.redirect}


@dataclass(frozen=True)
class Guard:
    requirement: Requirement = AUTHENTICATED
    fallback: str = DASHBOARD_ROUTE

    def evaluate(self, policy: PolicyEvaluator, user: Optional[Principal],
                 session_valid: bool = True) -> GuardDecision:
        if user is None or not session_valid:
            return GuardDecision(GuardState.UNAUTHENTICATED, LOGIN_REDIRECT)
        if not evaluate_requirement(policy, self.requirement, user):
            return GuardDecision(GuardState.UNAUTHORIZED, self.fallback)
        return GuardDecision(GuardState.AUTHORIZED)


def evaluate_guard(policy: PolicyEvaluator, requirement: Requirement, user: Optional[Principal],
                   fallback: str = DASHBOARD_ROUTE, session_valid: bool = True) -> GuardDecision:
    return Guard(requirement, fallback).evaluate(policy, user, session_valid)
