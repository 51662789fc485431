"""Service modules."""

from task_tracker.services.identity import (
    IdentityVerifier,
    JWTIdentityVerifier,
    SupabaseIdentityVerifier,
    create_verifier,
    generate_token,
)
from task_tracker.services.tasks import TaskService


__all__ = [
    "TaskService",
    "IdentityVerifier",
    "JWTIdentityVerifier",
    "SupabaseIdentityVerifier",
    "create_verifier",
    "generate_token",
]
