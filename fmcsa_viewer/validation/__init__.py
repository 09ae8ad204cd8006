from .errors import ValidationError, ValidationIssue
from .snapshot_validation import validate_snapshot_dict, validate_view_name

__all__ = ["ValidationError", "ValidationIssue", "validate_snapshot_dict", "validate_view_name"]
