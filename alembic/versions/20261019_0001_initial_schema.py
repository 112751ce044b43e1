"""initial schema

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "student_profiles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("first_name", sa.String(length=255)),
        sa.Column("last_name", sa.String(length=255)),
        sa.Column("country", sa.String(length=128)),
        sa.Column("city", sa.String(length=128)),
        sa.Column("grade_level", sa.String(length=64)),
        sa.Column("gpa", sa.Float()),
        sa.Column("language_level", sa.String(length=128)),
        sa.Column("skills", sa.JSON(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column("interests", sa.JSON(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column("hobbies", sa.JSON(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column("needs_recalculation", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_student_profiles_country", "student_profiles", ["country"])
    op.create_index(
        "ix_student_profiles_needs_recalculation", "student_profiles", ["needs_recalculation"]
    )

    op.create_table(
        "university_profiles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("university_name", sa.String(length=255), nullable=False),
        sa.Column("country", sa.String(length=128)),
        sa.Column("city", sa.String(length=128)),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("preferred_skills", sa.JSON(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column("preferred_interests", sa.JSON(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_university_profiles_country", "university_profiles", ["country"])
    op.create_index("ix_university_profiles_verified", "university_profiles", ["verified"])

    op.create_table(
        "programs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "university_id",
            sa.Integer(),
            sa.ForeignKey("university_profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("degree_level", sa.String(length=64)),
        sa.Column("field", sa.String(length=255), nullable=False),
        sa.Column("language", sa.String(length=128)),
        sa.Column("tuition_fee", sa.Numeric(12, 2)),
    )
    op.create_index("ix_programs_university_id", "programs", ["university_id"])
    op.create_index("ix_programs_field", "programs", ["field"])

    op.create_table(
        "scholarships",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "university_id",
            sa.Integer(),
            sa.ForeignKey("university_profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("coverage_percent", sa.Integer()),
        sa.Column("eligibility", sa.Text()),
    )
    op.create_index("ix_scholarships_university_id", "scholarships", ["university_id"])

    op.create_table(
        "recommendations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "student_id",
            sa.Integer(),
            sa.ForeignKey("student_profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "university_id",
            sa.Integer(),
            sa.ForeignKey("university_profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("match_score", sa.Float(), nullable=False),
        sa.Column("breakdown", sa.JSON(), nullable=False),
        sa.Column("scoring_version", sa.String(length=32), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
        sa.UniqueConstraint(
            "student_id", "university_id", name="uq_recommendations_student_university"
        ),
    )
    op.create_index("ix_recommendations_student_id", "recommendations", ["student_id"])
    op.create_index("ix_recommendations_university_id", "recommendations", ["university_id"])


def downgrade() -> None:
    op.drop_table("recommendations")
    op.drop_table("scholarships")
    op.drop_table("programs")
    op.drop_table("university_profiles")
    op.drop_table("student_profiles")
