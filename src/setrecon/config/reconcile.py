"""Engine policy defaults resolved from the environment."""

from __future__ import annotations

from setrecon.domain.reconciliation import (
    CollisionPolicy,
    ProjectionErrorPolicy,
    ReconciliationOptions,
)

from .env import env_choice

PROJECTION_ERROR_ENV = "SETRECON_ON_PROJECTION_ERROR"
KEY_COLLISION_ENV = "SETRECON_ON_KEY_COLLISION"


def get_reconciliation_options() -> ReconciliationOptions:
    on_projection_error = env_choice(
        PROJECTION_ERROR_ENV,
        [policy.value for policy in ProjectionErrorPolicy],
        default=ProjectionErrorPolicy.ABORT.value,
    )
    on_collision = env_choice(
        KEY_COLLISION_ENV,
        [policy.value for policy in CollisionPolicy],
        default=CollisionPolicy.REPORT.value,
    )
    return ReconciliationOptions(
        on_projection_error=ProjectionErrorPolicy(on_projection_error),
        on_collision=CollisionPolicy(on_collision),
    )
