# common/utils/global_messages.py

class GlobalMessages:
    # Auth Messages
    INVALID_CREDENTIALS = "Invalid email or password."
    UNAUTHENTICATED = "Could not validate credentials. Please log in again."
    FORBIDDEN = "You do not have permission to perform this action."
    ADMIN_REQUIRED = "Unauthorized - Admin access required"
    ACCOUNT_CREATED = "Account created successfully"
    ACCOUNT_DEACTIVATED = "This account has been deactivated."
    LOGOUT_SUCCESS = "Logout successful"

    # Generic errors
    VALIDATION_ERROR = "Validation error"
    DUPLICATE_RECORD = "A record with the same unique value already exists"
    INTERNAL_ERROR = "An unexpected error occurred"

    # User Messages
    USER_NOT_FOUND = "User not found"
    USER_EMAIL_EXISTS = "User with this email already exists"
    USER_DELETED = "User deleted successfully"
    CANNOT_DELETE_SELF = "Cannot delete your own account"

    # Patient Messages
    PATIENT_NOT_FOUND = "Patient not found"
    PATIENT_EMAIL_EXISTS = "A patient with this email already exists"
    PATIENT_DELETED = "Patient deleted successfully"

    # Doctor Messages
    DOCTOR_NOT_FOUND = "Doctor not found"
    DOCTOR_CONFLICT = "Doctor with this email or license number already exists"
    DOCTOR_DEACTIVATED = "Doctor deactivated successfully"
    DOCTOR_ACTIVATED = "Doctor activated successfully"
    DOCTOR_DELETED = "Doctor deleted successfully"
    VOICE_CLONED = "Voice cloned successfully"
    VOICE_CLONE_FAILED = "Failed to clone voice"
    VOICE_REMOVED = "Voice clone removed"
    VOICE_REMOVE_FAILED = "Failed to remove voice clone"
    AUDIO_REQUIRED = "Audio file is required"

    # Booking Messages
    BOOKING_NOT_FOUND = "Booking not found"
    BOOKING_DELETED = "Booking deleted successfully"

    # Call log Messages
    CALL_LOG_NOT_FOUND = "Call log not found"
    CALL_LOG_DELETED = "Call log deleted successfully"
    CALL_DISPATCHED = "Call initiated successfully"
    CALL_DISPATCH_FAILED = "Failed to initiate call"
    WEBHOOK_PROCESSED = "Webhook processed successfully"
    PATIENT_NOT_ACTIVE = "Calls can only be placed to active patients"
    VOICE_CALLS_DISABLED = "Patient has opted out of voice calls"
    BOOKING_REQUIRED = "bookingId is required for appointment calls"
    BOOKING_PATIENT_MISMATCH = "Booking does not belong to this patient"
    MEDICATION_NOT_FOUND = "Patient has no medication at that index"

    # Upload Messages
    FILE_UPLOADED = "File uploaded successfully"
    NO_FILE = "No file uploaded"
