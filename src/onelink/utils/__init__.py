from .convert_utils import ConvertUtils
from .path_utils import make_path, directory_of, backup_path_for

__all__ = ["ConvertUtils", "make_path", "directory_of", "backup_path_for"]
