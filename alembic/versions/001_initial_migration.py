"""Initial migration

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
    ]


def upgrade() -> None:
    user_type = sa.Enum('ADMIN', 'EMPLOYEE', 'DOCTOR', name='usertype')
    transaction_category = sa.Enum('INCOME', 'EXPENSE', name='transactioncategory')
    appointment_status = sa.Enum('SCHEDULED', 'COMPLETED', 'CANCELLED', name='appointmentstatus')
    procedure_status = sa.Enum('IN_PROGRESS', 'COMPLETED', name='procedurestatus')
    transaction_status = sa.Enum('PENDING', 'PAID', 'OVERDUE', 'CANCELLED', name='transactionstatus')

    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('profile_image_url', sa.String(length=500), nullable=True),
        sa.Column('user_type', user_type, nullable=False),
        sa.Column('specialties', sa.JSON(), nullable=True),
        sa.Column('contact_info', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('must_change_password', sa.Boolean(), nullable=False),
        sa.Column('password_reset_token', sa.Text(), nullable=True),
        sa.Column('working_days', sa.JSON(), nullable=True),
        sa.Column('working_hours', sa.JSON(), nullable=True),
        sa.Column('daily_schedules', sa.JSON(), nullable=True),
        sa.Column('consultation_types', sa.JSON(), nullable=True),
        sa.Column('procedure_types', sa.JSON(), nullable=True),
        *_timestamps(),
        sa.Column('last_login_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # Create user_type_configs table
    op.create_table(
        'user_type_configs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('user_type', user_type, nullable=False),
        sa.Column('permissions', sa.JSON(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.create_index('ix_user_type_configs_user_type', 'user_type_configs', ['user_type'], unique=False)

    # Create patients table
    op.create_table(
        'patients',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('di', sa.String(length=50), nullable=True),
        sa.Column('nif', sa.String(length=50), nullable=True),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_patients_name', 'patients', ['name'], unique=False)
    op.create_index('ix_patients_di', 'patients', ['di'], unique=True)
    op.create_index('ix_patients_nif', 'patients', ['nif'], unique=True)

    # Create catalogue tables
    op.create_table(
        'consultation_types',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'procedure_types',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('specialty', sa.String(length=100), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'transaction_types',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('category', transaction_category, nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    # Create appointments table
    op.create_table(
        'appointments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('patient_id', sa.Uuid(), nullable=False),
        sa.Column('doctor_id', sa.Uuid(), nullable=False),
        sa.Column('consultation_type_id', sa.Uuid(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', sa.String(length=5), nullable=False),
        sa.Column('status', appointment_status, nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['patient_id'], ['patients.id'], ),
        sa.ForeignKeyConstraint(['doctor_id'], ['users.id'], ),
        sa.ForeignKeyConstraint(['consultation_type_id'], ['consultation_types.id'], ),
    )
    op.create_index('ix_appointments_patient_id', 'appointments', ['patient_id'], unique=False)
    op.create_index('ix_appointments_doctor_id', 'appointments', ['doctor_id'], unique=False)
    op.create_index('ix_appointments_date', 'appointments', ['date'], unique=False)

    # Create procedures table
    op.create_table(
        'procedures',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('appointment_id', sa.Uuid(), nullable=True),
        sa.Column('patient_id', sa.Uuid(), nullable=False),
        sa.Column('doctor_id', sa.Uuid(), nullable=False),
        sa.Column('procedure_type_id', sa.Uuid(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('cost', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('status', procedure_status, nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['appointment_id'], ['appointments.id'], ),
        sa.ForeignKeyConstraint(['patient_id'], ['patients.id'], ),
        sa.ForeignKeyConstraint(['doctor_id'], ['users.id'], ),
        sa.ForeignKeyConstraint(['procedure_type_id'], ['procedure_types.id'], ),
    )
    op.create_index('ix_procedures_appointment_id', 'procedures', ['appointment_id'], unique=False)
    op.create_index('ix_procedures_patient_id', 'procedures', ['patient_id'], unique=False)
    op.create_index('ix_procedures_doctor_id', 'procedures', ['doctor_id'], unique=False)

    # Create transactions table
    op.create_table(
        'transactions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('patient_id', sa.Uuid(), nullable=True),
        sa.Column('appointment_id', sa.Uuid(), nullable=True),
        sa.Column('procedure_id', sa.Uuid(), nullable=True),
        sa.Column('transaction_type_id', sa.Uuid(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('status', transaction_status, nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('transaction_date', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('due_date', sa.DateTime(), nullable=True),
        sa.Column('paid_date', sa.DateTime(), nullable=True),
        sa.Column('cancelled_date', sa.DateTime(), nullable=True),
        sa.Column('cancellation_reason', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['patient_id'], ['patients.id'], ),
        sa.ForeignKeyConstraint(['appointment_id'], ['appointments.id'], ),
        sa.ForeignKeyConstraint(['procedure_id'], ['procedures.id'], ),
        sa.ForeignKeyConstraint(['transaction_type_id'], ['transaction_types.id'], ),
    )
    op.create_index('ix_transactions_patient_id', 'transactions', ['patient_id'], unique=False)
    op.create_index('ix_transactions_appointment_id', 'transactions', ['appointment_id'], unique=False)
    op.create_index('ix_transactions_procedure_id', 'transactions', ['procedure_id'], unique=False)


def downgrade() -> None:
    # Drop all tables in reverse order of creation
    op.drop_table('transactions')
    op.drop_table('procedures')
    op.drop_table('appointments')
    op.drop_table('transaction_types')
    op.drop_table('procedure_types')
    op.drop_table('consultation_types')
    op.drop_table('patients')
    op.drop_table('user_type_configs')
    op.drop_table('users')

    # Drop enums
    bind = op.get_bind()
    for enum_name in ('transactionstatus', 'procedurestatus', 'appointmentstatus',
                      'transactioncategory', 'usertype'):
        sa.Enum(name=enum_name).drop(bind, checkfirst=True)
