"""initial schema

Revision ID: a3f1c9d2e7b4
Revises:
Create Date: 2026-10-19 09:12:37.418203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a3f1c9d2e7b4'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.Enum('AGENT', 'ADMIN', 'SUPERVISOR', name='userrole'), nullable=False),
        sa.Column('avatar', sa.String(length=500), nullable=False),
        sa.Column('department', sa.String(length=100), nullable=False),
        sa.Column('phone_number', sa.String(length=30), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'patients',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('mobile_number', sa.String(length=30), nullable=False),
        sa.Column('parent_guardian_number', sa.String(length=30), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('emergency_contact', sa.JSON(), nullable=True),
        sa.Column('medications', sa.JSON(), nullable=False),
        sa.Column('reminder_preferences', sa.JSON(), nullable=False),
        sa.Column('status', sa.Enum('ACTIVE', 'PAUSED', 'COMPLETED', name='patientstatus'), nullable=False),
        sa.Column('avatar', sa.String(length=500), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('prescription_images', sa.JSON(), nullable=False),
        sa.Column('last_reminder_sent', sa.DateTime(timezone=True), nullable=True),
        sa.Column('next_reminder_due', sa.DateTime(timezone=True), nullable=True),
        sa.Column('allergies', sa.JSON(), nullable=False),
        sa.Column('medical_history', sa.Text(), nullable=True),
        sa.Column('insurance_info', sa.JSON(), nullable=True),
        sa.Column('primary_care_physician', sa.JSON(), nullable=True),
        sa.Column('created_by_id', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['created_by_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_patients_email'), 'patients', ['email'], unique=True)
    op.create_index(op.f('ix_patients_mobile_number'), 'patients', ['mobile_number'], unique=False)
    op.create_index(op.f('ix_patients_status'), 'patients', ['status'], unique=False)
    op.create_index(op.f('ix_patients_created_by_id'), 'patients', ['created_by_id'], unique=False)
    op.create_index(op.f('ix_patients_created_at'), 'patients', ['created_at'], unique=False)

    op.create_table(
        'doctors',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone_number', sa.String(length=30), nullable=False),
        sa.Column('specialty', sa.String(length=100), nullable=False),
        sa.Column('department', sa.String(length=100), nullable=False),
        sa.Column('license_number', sa.String(length=100), nullable=False),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('avatar', sa.String(length=500), nullable=False),
        sa.Column('availability_status', sa.Enum('ONLINE', 'OFFLINE', 'ON_LEAVE', name='availabilitystatus'), nullable=False),
        sa.Column('schedule', sa.JSON(), nullable=False),
        sa.Column('consultation_fee', sa.Float(), nullable=True),
        sa.Column('experience', sa.Integer(), nullable=False),
        sa.Column('qualifications', sa.JSON(), nullable=False),
        sa.Column('voice_id', sa.String(length=100), nullable=True),
        sa.Column('voice_clone_status', sa.Enum('PENDING', 'COMPLETED', 'FAILED', name='voiceclonestatus'), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_by_id', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['created_by_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('license_number'),
    )
    op.create_index(op.f('ix_doctors_email'), 'doctors', ['email'], unique=True)
    op.create_index(op.f('ix_doctors_specialty'), 'doctors', ['specialty'], unique=False)

    op.create_table(
        'bookings',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('patient_id', sa.Uuid(), nullable=True),
        sa.Column('doctor_id', sa.Uuid(), nullable=True),
        sa.Column('appointment_date', sa.Date(), nullable=False),
        sa.Column('appointment_time', sa.String(length=5), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('status', sa.Enum('SCHEDULED', 'COMPLETED', 'CANCELLED', 'NO_SHOW', name='bookingstatus'), nullable=False),
        sa.Column('consultation_type', sa.Enum('IN_PERSON', 'VIDEO', 'PHONE', name='consultationtype'), nullable=False),
        sa.Column('symptoms', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('fee', sa.Float(), nullable=True),
        sa.Column('payment_status', sa.Enum('PENDING', 'PAID', 'REFUNDED', name='paymentstatus'), nullable=False),
        sa.Column('reminder_sent', sa.Boolean(), nullable=False),
        sa.Column('cancel_reason', sa.Text(), nullable=True),
        sa.Column('created_by_id', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['patient_id'], ['patients.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['doctor_id'], ['doctors.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['created_by_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_bookings_patient_id'), 'bookings', ['patient_id'], unique=False)
    op.create_index(op.f('ix_bookings_doctor_id'), 'bookings', ['doctor_id'], unique=False)
    op.create_index(op.f('ix_bookings_appointment_date'), 'bookings', ['appointment_date'], unique=False)

    op.create_table(
        'call_logs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('patient_id', sa.Uuid(), nullable=True),
        sa.Column('agent_id', sa.Uuid(), nullable=True),
        sa.Column('call_type', sa.Enum('REMINDER', 'APPOINTMENT', 'EMERGENCY', 'FOLLOW_UP', name='calltype'), nullable=False),
        sa.Column('outcome', sa.Enum('COMPLETED', 'NO_ANSWER', 'BUSY', 'TRANSFERRED_EMERGENCY', 'APPOINTMENT_REQUESTED', name='calloutcome'), nullable=False),
        sa.Column('duration', sa.Float(), nullable=True),
        sa.Column('transcript', sa.Text(), nullable=True),
        sa.Column('audio_recording', sa.String(length=500), nullable=True),
        sa.Column('call_date_time', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('bland_ai_call_id', sa.String(length=100), nullable=True),
        sa.Column('emergency_transfer_details', sa.JSON(), nullable=True),
        sa.Column('appointment_details', sa.JSON(), nullable=True),
        sa.Column('reminder_details', sa.JSON(), nullable=True),
        sa.Column('remarks', sa.Text(), nullable=True),
        sa.Column('follow_up_required', sa.Boolean(), nullable=False),
        sa.Column('follow_up_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['patient_id'], ['patients.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['agent_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_call_logs_patient_id'), 'call_logs', ['patient_id'], unique=False)
    op.create_index(op.f('ix_call_logs_agent_id'), 'call_logs', ['agent_id'], unique=False)
    op.create_index(op.f('ix_call_logs_call_date_time'), 'call_logs', ['call_date_time'], unique=False)
    op.create_index(op.f('ix_call_logs_bland_ai_call_id'), 'call_logs', ['bland_ai_call_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_call_logs_bland_ai_call_id'), table_name='call_logs')
    op.drop_index(op.f('ix_call_logs_call_date_time'), table_name='call_logs')
    op.drop_index(op.f('ix_call_logs_agent_id'), table_name='call_logs')
    op.drop_index(op.f('ix_call_logs_patient_id'), table_name='call_logs')
    op.drop_table('call_logs')

    op.drop_index(op.f('ix_bookings_appointment_date'), table_name='bookings')
    op.drop_index(op.f('ix_bookings_doctor_id'), table_name='bookings')
    op.drop_index(op.f('ix_bookings_patient_id'), table_name='bookings')
    op.drop_table('bookings')

    op.drop_index(op.f('ix_doctors_specialty'), table_name='doctors')
    op.drop_index(op.f('ix_doctors_email'), table_name='doctors')
    op.drop_table('doctors')

    op.drop_index(op.f('ix_patients_created_at'), table_name='patients')
    op.drop_index(op.f('ix_patients_created_by_id'), table_name='patients')
    op.drop_index(op.f('ix_patients_status'), table_name='patients')
    op.drop_index(op.f('ix_patients_mobile_number'), table_name='patients')
    op.drop_index(op.f('ix_patients_email'), table_name='patients')
    op.drop_table('patients')

    op.drop_table('users')

    # Postgres keeps enum types after their tables are gone
    bind = op.get_bind()
    for enum_name in (
        'calloutcome', 'calltype', 'paymentstatus', 'consultationtype', 'bookingstatus',
        'voiceclonestatus', 'availabilitystatus', 'patientstatus', 'userrole',
    ):
        sa.Enum(name=enum_name).drop(bind, checkfirst=True)
