"""Access control for user-owned resources."""

from habit_service.core.acl.guard import AccessGuard, Decision, DenyReason, Requirement

__all__ = ["AccessGuard", "Decision", "DenyReason", "Requirement"]
