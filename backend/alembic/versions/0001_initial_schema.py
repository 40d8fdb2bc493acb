"""Create accounts, pets and adoption applications."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

# Enum columns store member names, matching sqlalchemy.Enum(<PythonEnum>).
account_role = sa.Enum("MEMBER", "ADMINISTRATOR", name="accountrole")
pet_species = sa.Enum("DOG", "CAT", "BIRD", "RABBIT", "OTHER", name="petspecies")
pet_gender = sa.Enum("MALE", "FEMALE", name="petgender")
pet_size = sa.Enum("SMALL", "MEDIUM", "LARGE", name="petsize")
pet_status = sa.Enum("AVAILABLE", "PENDING", "ADOPTED", name="petstatus")
application_status = sa.Enum(
    "PENDING", "APPROVED", "REJECTED", name="applicationstatus"
)
living_space = sa.Enum("APARTMENT", "HOUSE", "FARM", name="livingspace")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("phone", sa.String(length=32), nullable=True),
        sa.Column("address", sa.String(length=255), nullable=True),
        sa.Column("role", account_role, nullable=False),
        sa.Column("reset_token_hash", sa.String(length=64), nullable=True),
        sa.Column(
            "reset_token_expires_at", sa.DateTime(timezone=True), nullable=True
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_accounts"),
        sa.UniqueConstraint("email", name="uq_accounts_email"),
        sa.UniqueConstraint("reset_token_hash", name="uq_accounts_reset_token_hash"),
    )

    op.create_table(
        "pets",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("species", pet_species, nullable=False),
        sa.Column("breed", sa.String(length=120), nullable=False),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("gender", pet_gender, nullable=False),
        sa.Column("size", pet_size, nullable=True),
        sa.Column("color", sa.String(length=120), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("photo", sa.String(length=1024), nullable=False),
        sa.Column("status", pet_status, nullable=False),
        sa.Column("vaccinated", sa.Boolean(), nullable=False),
        sa.Column("neutered", sa.Boolean(), nullable=False),
        sa.Column("added_by_id", sa.Uuid(as_uuid=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_pets"),
        sa.ForeignKeyConstraint(
            ["added_by_id"],
            ["accounts.id"],
            name="fk_pets_added_by_id_accounts",
            ondelete="SET NULL",
        ),
    )
    op.create_index("ix_pets_species_status", "pets", ["species", "status"])
    op.create_index("ix_pets_created_at", "pets", ["created_at"])

    op.create_table(
        "adoption_applications",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("pet_id", sa.Uuid(as_uuid=True), nullable=True),
        sa.Column("applicant_id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("status", application_status, nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("experience", sa.Text(), nullable=False),
        sa.Column("living_space", living_space, nullable=False),
        sa.Column("has_other_pets", sa.Boolean(), nullable=False),
        sa.Column("admin_notes", sa.Text(), nullable=True),
        sa.Column("reviewed_by_id", sa.Uuid(as_uuid=True), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_adoption_applications"),
        sa.ForeignKeyConstraint(
            ["pet_id"],
            ["pets.id"],
            name="fk_adoption_applications_pet_id_pets",
            ondelete="SET NULL",
        ),
        sa.ForeignKeyConstraint(
            ["applicant_id"],
            ["accounts.id"],
            name="fk_adoption_applications_applicant_id_accounts",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["reviewed_by_id"],
            ["accounts.id"],
            name="fk_adoption_applications_reviewed_by_id_accounts",
            ondelete="SET NULL",
        ),
        sa.UniqueConstraint(
            "pet_id", "applicant_id", name="uq_adoption_applications_pet_applicant"
        ),
    )
    op.create_index(
        "ix_adoption_applications_pet_status",
        "adoption_applications",
        ["pet_id", "status"],
    )


def downgrade() -> None:
    op.drop_index(
        "ix_adoption_applications_pet_status", table_name="adoption_applications"
    )
    op.drop_table("adoption_applications")
    op.drop_index("ix_pets_created_at", table_name="pets")
    op.drop_index("ix_pets_species_status", table_name="pets")
    op.drop_table("pets")
    op.drop_table("accounts")
    bind = op.get_bind()
    for enum_type in (
        living_space,
        application_status,
        pet_status,
        pet_size,
        pet_gender,
        pet_species,
        account_role,
    ):
        enum_type.drop(bind, checkfirst=True)
