from .common.verification_code import VerificationCode, CodePurpose

from .users.user import User

from .biometric.location import BiometricLocation
from .biometric.time_slot import AppointmentTimeSlot
from .biometric.appointment import BiometricAppointment, AppointmentStatus
