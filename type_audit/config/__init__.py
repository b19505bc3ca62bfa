"""
Audit run configuration.
"""

from .audit_config import AuditConfig, AuditConfigLoader

__all__ = [
    "AuditConfig",
    "AuditConfigLoader",
]
