from .math_tools import MathTools
from .column_rules import Capabilities, FieldKind, legal_fields, prune_set

__all__ = ["MathTools", "Capabilities", "FieldKind", "legal_fields", "prune_set"]
