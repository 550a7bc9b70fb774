from .leave import LeaveRequest
from .profile import Profile
from .agenda import Agenda
from .material import Material

__all__ = ["LeaveRequest", "Profile", "Agenda", "Material"]
