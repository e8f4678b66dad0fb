"""initial schema

Revision ID: 20261017_0001
Revises:
Create Date: 2026-10-17
"""

from alembic import op
import sqlalchemy as sa


revision = "20261017_0001"
down_revision = None
branch_labels = None
depends_on = None

member_role = sa.Enum("PL", "DEV", "TESTER", name="member_role")
issue_priority = sa.Enum("TRIVIAL", "MINOR", "MAJOR", "CRITICAL", "BLOCKER", name="issue_priority")
issue_state = sa.Enum("NEW", "ASSIGNED", "FIXED", "RESOLVED", "CLOSED", "REOPEN", name="issue_state")


def upgrade() -> None:
    op.create_table(
        "members",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("mail", sa.String(length=255), nullable=False),
        sa.Column("password", sa.String(length=255), nullable=False),
    )

    op.create_table(
        "projects",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "member_projects",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("member_id", sa.String(length=64), sa.ForeignKey("members.id"), nullable=False),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("projects.id"), nullable=False),
        sa.Column("role", member_role, nullable=False),
        sa.UniqueConstraint("member_id", "project_id", name="uq_member_projects_member_project"),
    )
    op.create_index("ix_member_projects_member_id", "member_projects", ["member_id"])
    op.create_index("ix_member_projects_project_id", "member_projects", ["project_id"])

    op.create_table(
        "issues",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("projects.id"), nullable=False),
        sa.Column("reporter_id", sa.String(length=64), sa.ForeignKey("members.id"), nullable=False),
        sa.Column("assignee_id", sa.String(length=64), sa.ForeignKey("members.id")),
        sa.Column("fixer_id", sa.String(length=64), sa.ForeignKey("members.id")),
        sa.Column("title", sa.String(length=512), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("priority", issue_priority, nullable=False),
        sa.Column("state", issue_state, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("modified_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_issues_project_id", "issues", ["project_id"])
    op.create_index("ix_issues_reporter_id", "issues", ["reporter_id"])
    op.create_index("ix_issues_assignee_id", "issues", ["assignee_id"])


def downgrade() -> None:
    op.drop_index("ix_issues_assignee_id", table_name="issues")
    op.drop_index("ix_issues_reporter_id", table_name="issues")
    op.drop_index("ix_issues_project_id", table_name="issues")
    op.drop_table("issues")
    op.drop_index("ix_member_projects_project_id", table_name="member_projects")
    op.drop_index("ix_member_projects_member_id", table_name="member_projects")
    op.drop_table("member_projects")
    op.drop_table("projects")
    op.drop_table("members")

    bind = op.get_bind()
    for enum in (issue_state, issue_priority, member_role):
        enum.drop(bind, checkfirst=True)
