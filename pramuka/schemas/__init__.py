from .leave import LeaveStatus, Kelas, LeaveBase, LeaveCreate, LeaveResponse, DashboardSummary
from .archive import ArchiveStatusFilter, ArchiveWindow, SweepResult, ArchiveBatch
from .profile import DashboardRole, Tingkatan, Jabatan, ProfileResponse, ProfileUpdate, MemberUpdate
from .agenda import AgendaCreate, AgendaAuthor, AgendaResponse
from .material import MaterialBase, MaterialCreate, MaterialUpdate, MaterialResponse

__all__ = [
    "LeaveStatus", "Kelas", "LeaveBase", "LeaveCreate", "LeaveResponse", "DashboardSummary",
    "ArchiveStatusFilter", "ArchiveWindow", "SweepResult", "ArchiveBatch",
    "DashboardRole", "Tingkatan", "Jabatan", "ProfileResponse", "ProfileUpdate", "MemberUpdate",
    "AgendaCreate", "AgendaAuthor", "AgendaResponse",
    "MaterialBase", "MaterialCreate", "MaterialUpdate", "MaterialResponse"
]
