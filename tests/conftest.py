"""
Pytest configuration and fixtures for the context engine tests
"""
import sys
from pathlib import Path

import pytest

# Make the top-level packages importable without installing the project
ROOT_DIR = Path(__file__).parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from shared.config import Settings
from shared.models import Category, ContextItem


@pytest.fixture
def make_item():
    """Factory for ContextItems with sensible defaults"""

    def _make(id, content="", title=None, category=Category.SKILL):
        return ContextItem(id=id, title=f"Item {id}" if title is None else title, content=content, category=category)

    return _make


@pytest.fixture
def skill_pool(make_item):
    """15 skills of 2,000 characters each"""
    return [make_item(f"s{i}", "word " * 400) for i in range(15)]


@pytest.fixture
def settings():
    """Settings with defaults, independent of the process environment"""
    return Settings(
        SKILLS_CONTEXT_LIMIT=100000,
        DOCUMENTS_CONTEXT_LIMIT=80000,
        URLS_CONTEXT_LIMIT=30000,
        CUSTOMERS_CONTEXT_LIMIT=40000,
        SUMMARY_LENGTH=500,
        MIN_SNIPPET_CHARS=0,
        AUDIT_LOG_FILE=None,
    )
