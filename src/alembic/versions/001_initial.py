"""Initial migration

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # 1. Users
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("hashed_password", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("full_name", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # 2. Public form submissions
    op.create_table(
        "site_personalizacoes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("office_nome", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column(
            "responsavel_nome", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False
        ),
        sa.Column("telefone", sqlmodel.sql.sqltypes.AutoString(length=40), nullable=False),
        sa.Column("email", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("endereco", sqlmodel.sql.sqltypes.AutoString(length=500), nullable=False),
        sa.Column("redes_sociais", sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column("fonte", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column("paleta_cores", sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column("descricao", sqlmodel.sql.sqltypes.AutoString(length=5000), nullable=False),
        sa.Column("slogan", sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column("possui_planos", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("planos", sqlmodel.sql.sqltypes.AutoString(length=5000), nullable=True),
        sa.Column("servicos", sqlmodel.sql.sqltypes.AutoString(length=5000), nullable=False),
        sa.Column("depoimentos", sqlmodel.sql.sqltypes.AutoString(length=5000), nullable=True),
        sa.Column("botao_whatsapp", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("possui_mapa", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("link_mapa", sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column("modelo", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=True),
        sa.Column("logo_url", sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column("depoimento_urls", sa.JSON(), nullable=True),
        sa.Column("midia_urls", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    # 3. Projects
    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("client_name", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column("template", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=True),
        sa.Column("responsible_name", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=True),
        sa.Column("domain", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column("client_type", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column("partner_link", sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column("blaster_link", sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column("personalization_id", sa.Uuid(), nullable=True),
        sa.Column(
            "status",
            sqlmodel.sql.sqltypes.AutoString(length=50),
            nullable=False,
            server_default="Recebido",
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["personalization_id"], ["site_personalizacoes.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_projects_client_name", "projects", ["client_name"], unique=False)
    op.create_index("ix_projects_status", "projects", ["status"], unique=False)
    op.create_index("ix_projects_created_at", "projects", ["created_at"], unique=False)
    op.create_index(
        "ix_projects_personalization_id", "projects", ["personalization_id"], unique=False
    )

    # 4. Customization requests
    op.create_table(
        "project_customizations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("description", sqlmodel.sql.sqltypes.AutoString(length=2000), nullable=False),
        sa.Column("priority", sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column("status", sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column("requested_at", sa.DateTime(), nullable=False),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        sa.Column("notes", sqlmodel.sql.sqltypes.AutoString(length=2000), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_project_customizations_project_id",
        "project_customizations",
        ["project_id"],
        unique=False,
    )

    # 5. Model templates
    op.create_table(
        "model_templates",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column("description", sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column("image_url", sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column("custom_url", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_model_templates_name", "model_templates", ["name"], unique=False)
    op.create_index(
        "ix_model_templates_custom_url", "model_templates", ["custom_url"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_model_templates_custom_url", table_name="model_templates")
    op.drop_index("ix_model_templates_name", table_name="model_templates")
    op.drop_table("model_templates")
    op.drop_index("ix_project_customizations_project_id", table_name="project_customizations")
    op.drop_table("project_customizations")
    op.drop_index("ix_projects_personalization_id", table_name="projects")
    op.drop_index("ix_projects_created_at", table_name="projects")
    op.drop_index("ix_projects_status", table_name="projects")
    op.drop_index("ix_projects_client_name", table_name="projects")
    op.drop_table("projects")
    op.drop_table("site_personalizacoes")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
