from .report_status import ReportStatus
from .cadets import Cadet
from .mentoring_logs import MentoringLog
from .mentors import Mentor
from .reports import Report


__all__ = ["Cadet", "Mentor", "MentoringLog", "Report", "ReportStatus"]
