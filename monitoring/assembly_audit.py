"""
Audit logging for context assembly.

One JSON line per assembled prompt: which items each pool used, how
large each block was, and whether anything was truncated.
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Dict, Optional

from shared.models import PoolContext


class ContextAuditLogger:
    """
    Audit logger for context assembly.

    Logs:
    - Per-pool item ids, sizes and truncation flags
    - The aggregated truncation signal
    """

    def __init__(self, log_file: Optional[str] = None):
        """
        Args:
            log_file: Optional file path for audit logs
        """
        self.logger = logging.getLogger("context_audit")
        self.log_file = log_file

        if log_file and not self._has_file_handler(log_file):
            handler = logging.FileHandler(log_file)
            handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s"))
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def _has_file_handler(self, log_file: str) -> bool:
        # The "context_audit" logger is process-wide; attach each file once
        path = os.path.abspath(log_file)
        return any(
            isinstance(h, logging.FileHandler) and h.baseFilename == path
            for h in self.logger.handlers
        )

    def build_entry(
        self,
        query: str,
        pools: Dict[str, PoolContext],
        context_truncated: bool,
        prompt_chars: int,
    ) -> Dict:
        return {
            "event": "context_assembly",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "query_chars": len(query),
            "prompt_chars": prompt_chars,
            "context_truncated": context_truncated,
            "pools": {
                name: {
                    "chars": len(pool.text),
                    "truncated": pool.truncated,
                    "item_ids": [u.id for u in pool.used_items],
                }
                for name, pool in pools.items()
            },
        }

    def log_assembly(
        self,
        query: str,
        pools: Dict[str, PoolContext],
        context_truncated: bool,
        prompt_chars: int,
    ) -> Dict:
        """Log one assembly; truncated assemblies are logged at WARNING."""
        entry = self.build_entry(query, pools, context_truncated, prompt_chars)
        level = logging.WARNING if context_truncated else logging.INFO
        self.logger.log(level, json.dumps(entry))
        return entry
