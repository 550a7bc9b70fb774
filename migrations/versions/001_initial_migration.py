"""Initial migration

Revision ID: 001
Revises: 
Create Date: 2024-04-26 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create profiles table
    op.create_table('profiles',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=True),
        sa.Column('full_name', sa.String(length=100), nullable=True),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='anggota'),
        sa.Column('tingkatan', sa.String(length=20), nullable=True),
        sa.Column('jabatan', sa.String(length=20), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('instagram', sa.String(length=100), nullable=True),
        sa.Column('motto', sa.String(length=200), nullable=True),
        sa.Column('avatar_url', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    # Create izin table
    op.create_table('izin',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('nama', sa.String(length=100), nullable=False),
        sa.Column('absen', sa.Integer(), nullable=False),
        sa.Column('kelas', sa.String(length=4), nullable=False),
        sa.Column('alasan', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('is_archived', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('archive_date', sa.Date(), nullable=True),
        sa.Column('archived_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint("status IN ('pending', 'approved')", name='ck_izin_status'),
        sa.CheckConstraint(
            "(is_archived AND archive_date IS NOT NULL AND archived_at IS NOT NULL) OR "
            "(NOT is_archived AND archive_date IS NULL AND archived_at IS NULL)",
            name='ck_izin_archive_fields'
        ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_izin_id'), 'izin', ['id'], unique=False)
    op.create_index(op.f('ix_izin_is_archived'), 'izin', ['is_archived'], unique=False)
    op.create_index(op.f('ix_izin_archive_date'), 'izin', ['archive_date'], unique=False)

    # Create agendas table
    op.create_table('agendas',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('location', sa.String(length=200), nullable=True),
        sa.Column('starts_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('ends_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_by', sa.String(length=64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['created_by'], ['profiles.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_agendas_id'), 'agendas', ['id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_agendas_id'), table_name='agendas')
    op.drop_table('agendas')
    op.drop_index(op.f('ix_izin_archive_date'), table_name='izin')
    op.drop_index(op.f('ix_izin_is_archived'), table_name='izin')
    op.drop_index(op.f('ix_izin_id'), table_name='izin')
    op.drop_table('izin')
    op.drop_table('profiles')
