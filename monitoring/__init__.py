"""
Monitoring Module.

Structured audit records for every assembled prompt.

Usage:
    from monitoring import ContextAuditLogger

    audit = ContextAuditLogger(log_file="context_audit.log")
    audit.log_assembly(query, pools, context_truncated, len(prompt))
"""

from .assembly_audit import ContextAuditLogger

__all__ = ["ContextAuditLogger"]
