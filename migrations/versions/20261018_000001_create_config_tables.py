"""create config tables

Revision ID: 20261018_000001
Revises: 
Create Date: 2026-10-18 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa

revision = "20261018_000001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "source_connection_table",
        sa.Column("connection_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("connection_name", sa.String(length=255), nullable=False),
        sa.Column("connection_type", sa.String(length=100), nullable=False),
        sa.Column("host", sa.String(length=255), nullable=True),
        sa.Column("port", sa.Integer(), nullable=True),
        sa.Column("username", sa.String(length=100), nullable=True),
        sa.Column("password", sa.String(length=255), nullable=True),
        sa.Column("database_name", sa.String(length=100), nullable=True),
        sa.Column("file_path", sa.String(length=500), nullable=True),
        sa.Column("api_key", sa.String(length=255), nullable=True),
        sa.Column("cloud_provider", sa.String(length=100), nullable=True),
        sa.Column("status", sa.String(length=50), nullable=True, server_default="Pending"),
        sa.Column("last_sync", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True, server_default=sa.text("now()")),
    )

    op.create_table(
        "config_table",
        sa.Column("config_key", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("execution_layer", sa.String(length=50), nullable=True),
        sa.Column("source_system", sa.String(length=100), nullable=True),
        sa.Column("source_type", sa.String(length=50), nullable=True),
        sa.Column("source_file_path", sa.String(length=255), nullable=True),
        sa.Column("source_file_name", sa.String(length=255), nullable=True),
        sa.Column("source_file_delimiter", sa.String(length=10), nullable=True),
        sa.Column("source_schema_name", sa.String(length=100), nullable=True),
        sa.Column("source_table_name", sa.String(length=100), nullable=True),
        sa.Column("target_type", sa.String(length=50), nullable=True),
        sa.Column("target_file_path", sa.String(length=255), nullable=True),
        sa.Column("target_file_delimiter", sa.String(length=10), nullable=True),
        sa.Column("target_schema_name", sa.String(length=100), nullable=True),
        sa.Column("temporary_target_table", sa.String(length=100), nullable=True),
        sa.Column("target_table_name", sa.String(length=100), nullable=True),
        sa.Column("load_type", sa.String(length=50), nullable=True),
        sa.Column("primary_key", sa.String(length=255), nullable=True),
        sa.Column("effective_date_column", sa.String(length=50), nullable=True),
        sa.Column("md5_columns", sa.String(length=255), nullable=True),
        sa.Column("custom_code", sa.String(length=500), nullable=True),
        sa.Column("execution_sequence", sa.String(length=20), nullable=True),
        sa.Column("enable_dynamic_schema", sa.String(length=1), nullable=True, server_default="N"),
        sa.Column("active_flag", sa.String(length=1), nullable=True, server_default="Y"),
        sa.Column("full_data_refresh_flag", sa.String(length=1), nullable=True, server_default="N"),
        sa.Column("source_connection_id", sa.Integer(), nullable=True),
        sa.Column("target_layer", sa.String(length=50), nullable=True),
        sa.Column("target_system", sa.String(length=100), nullable=True),
        sa.Column("target_connection_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True, server_default=sa.text("now()")),
    )

    op.create_table(
        "data_dictionary_table",
        sa.Column("data_dictionary_key", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("config_key", sa.Integer(), nullable=False),
        sa.Column("execution_layer", sa.String(length=50), nullable=False),
        sa.Column("schema_name", sa.String(length=50), nullable=True),
        sa.Column("table_name", sa.String(length=50), nullable=True),
        sa.Column("attribute_name", sa.String(length=100), nullable=False),
        sa.Column("data_type", sa.String(length=50), nullable=False),
        sa.Column("length", sa.Integer(), nullable=True),
        sa.Column("precision_value", sa.Integer(), nullable=True),
        sa.Column("scale", sa.Integer(), nullable=True),
        sa.Column("insert_date", sa.DateTime(timezone=True), nullable=True, server_default=sa.text("now()")),
        sa.Column("update_date", sa.DateTime(timezone=True), nullable=True, server_default=sa.text("now()")),
        sa.Column("column_description", sa.String(length=150), nullable=True),
        sa.Column("created_by", sa.String(length=100), nullable=True),
        sa.Column("updated_by", sa.String(length=100), nullable=True),
        sa.Column("is_not_null", sa.CHAR(length=1), nullable=True),
        sa.Column("is_primary_key", sa.CHAR(length=1), nullable=True),
        sa.Column("is_foreign_key", sa.CHAR(length=1), nullable=True),
        sa.Column("active_flag", sa.CHAR(length=1), nullable=True),
    )

    op.create_table(
        "reconciliation_config",
        sa.Column("recon_key", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("config_key", sa.Integer(), nullable=True),
        sa.Column("execution_layer", sa.String(length=20), nullable=False),
        sa.Column("source_schema", sa.String(length=20), nullable=True),
        sa.Column("source_table", sa.String(length=50), nullable=True),
        sa.Column("target_schema", sa.String(length=50), nullable=True),
        sa.Column("target_table", sa.String(length=50), nullable=True),
        sa.Column("recon_type", sa.String(length=50), nullable=False),
        sa.Column("attribute", sa.String(length=20), nullable=True),
        sa.Column("source_query", sa.Text(), nullable=True),
        sa.Column("target_query", sa.Text(), nullable=True),
        sa.Column("threshold_percentage", sa.Integer(), nullable=True),
        sa.Column("active_flag", sa.String(length=2), nullable=False, server_default="Y"),
    )

    op.create_table(
        "data_quality_config_table",
        sa.Column("data_quality_key", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("config_key", sa.Integer(), nullable=False),
        sa.Column("execution_layer", sa.String(length=100), nullable=False),
        sa.Column("table_name", sa.String(length=25), nullable=False),
        sa.Column("attribute_name", sa.String(length=250), nullable=False),
        sa.Column("validation_type", sa.String(length=50), nullable=False),
        sa.Column("reference_table_name", sa.String(length=25), nullable=True),
        sa.Column("default_value", sa.String(length=25), nullable=True),
        sa.Column("error_table_transfer_flag", sa.String(length=5), nullable=True, server_default="N"),
        sa.Column("threshold_percentage", sa.Integer(), nullable=True),
        sa.Column("active_flag", sa.String(length=5), nullable=True, server_default="Y"),
        sa.Column("custom_query", sa.String(length=500), nullable=True),
        sa.Column("source_system", sa.String(length=50), nullable=True),
        sa.Column("source_connection_id", sa.Integer(), nullable=True),
        sa.Column("source_type", sa.String(length=50), nullable=True),
        sa.Column("source_schema", sa.String(length=50), nullable=True),
        sa.Column("source_table_name", sa.String(length=50), nullable=True),
        sa.Column("target_system", sa.String(length=50), nullable=True),
        sa.Column("target_connection_id", sa.Integer(), nullable=True),
        sa.Column("target_type", sa.String(length=50), nullable=True),
        sa.Column("target_schema", sa.String(length=50), nullable=True),
        sa.Column("target_table_name", sa.String(length=50), nullable=True),
    )

    op.create_table(
        "audit_table",
        sa.Column("audit_key", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("config_key", sa.Integer(), nullable=True),
        sa.Column("code_name", sa.String(length=60), nullable=True),
        sa.Column("run_id", sa.String(length=100), nullable=True),
        sa.Column("source_system", sa.String(length=20), nullable=True),
        sa.Column("schema_name", sa.String(length=30), nullable=True),
        sa.Column("target_table_name", sa.String(length=30), nullable=True),
        sa.Column("source_file_name", sa.String(length=50), nullable=True),
        sa.Column("start_time", sa.DateTime(), nullable=True),
        sa.Column("end_time", sa.DateTime(), nullable=True),
        sa.Column("inserted_row_count", sa.Integer(), nullable=True),
        sa.Column("updated_row_count", sa.Integer(), nullable=True),
        sa.Column("deleted_row_count", sa.Integer(), nullable=True),
        sa.Column("no_change_row_count", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(length=10), nullable=True),
        sa.Column("last_pulled_time", sa.String(length=40), nullable=True),
    )
    op.create_index("ix_audit_table_start_time", "audit_table", ["start_time"])

    op.create_table(
        "error_table",
        sa.Column("error_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("config_key", sa.Integer(), nullable=True),
        sa.Column("audit_key", sa.Integer(), nullable=True),
        sa.Column("code_name", sa.String(length=60), nullable=True),
        sa.Column("run_id", sa.String(length=100), nullable=True),
        sa.Column("source_system", sa.String(length=20), nullable=True),
        sa.Column("schema_name", sa.String(length=30), nullable=True),
        sa.Column("target_table_name", sa.String(length=30), nullable=True),
        sa.Column("source_file_name", sa.String(length=50), nullable=True),
        sa.Column("execution_time", sa.DateTime(), nullable=True),
        sa.Column("error_details", sa.Text(), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("error_table")
    op.drop_index("ix_audit_table_start_time", table_name="audit_table")
    op.drop_table("audit_table")
    op.drop_table("data_quality_config_table")
    op.drop_table("reconciliation_config")
    op.drop_table("data_dictionary_table")
    op.drop_table("config_table")
    op.drop_table("source_connection_table")
