from .common import DataResponse, PageMeta, PageResponse
from .user import User, UserCreate, UserEnvelope, Token, TokenPayload
from .profile import Profile, ProfileCreate, ProfileUpdate
from .health_log import (
    HealthLog,
    HealthLogCreate,
    HealthLogUpdate,
    WeightPoint,
    WeightStats,
    WeightStatsResponse,
    CategorySummary,
)
from .prescription import Prescription, PrescriptionCreate, PrescriptionUpdate
from .reminder import Occurrence, DismissalResult
from .assistant import AskRequest, AskAnswer
