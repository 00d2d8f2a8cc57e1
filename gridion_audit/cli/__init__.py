"""CLI entry points for the run audit."""

from .run_audit import audit_gridion_run, main

__all__ = [
    'audit_gridion_run',
    'main',
]
