from .user import User
from .profile import Profile
from .health_log import HealthLog
from .prescription import Prescription
from .reminder_dismissal import ReminderDismissal
