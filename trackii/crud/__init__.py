from .user import user
from .profile import profile
from .health_log import health_log
from .prescription import prescription

__all__ = ["user", "profile", "health_log", "prescription"]
