"""
Issue Tracker Core Library.

Members, projects, project roles, and issues with a role-gated lifecycle.

Usage:
    # Database
    from core.db import db, get_db
    from core.models import Issue, Member, Project
    from core.repositories import IssueRepository

    # Business logic
    from core.services import IssueService, SqlIssueStore

    # Config
    from core.config import get_settings

    # Logging
    from core.logging import get_logger, configure_logging
"""

__version__ = "1.0.0"

# Users should import directly from submodules to keep import order explicit.
