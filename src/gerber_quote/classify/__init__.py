"""File role classification by filename convention and content sniffing."""

from .classifier import classify_file, classify_files
from .rules import FILENAME_RULES, FilenameRule, match_filename, role_from_file_function

__all__ = [
    "FILENAME_RULES",
    "FilenameRule",
    "classify_file",
    "classify_files",
    "match_filename",
    "role_from_file_function",
]
