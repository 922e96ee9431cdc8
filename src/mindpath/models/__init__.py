from mindpath.models.analysis_log import AnalysisLog
from mindpath.models.note import Note

__all__ = [
    "AnalysisLog",
    "Note",
]
