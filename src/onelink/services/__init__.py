from .file_service import FileService
from .priority_service import PriorityService

__all__ = ["FileService", "PriorityService"]
