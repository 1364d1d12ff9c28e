from .panel import CrudPanel, FieldDefinition
from .field import CrudField
from .context import bind_panel, current_panel

__all__ = [
    "CrudPanel",
    "CrudField",
    "FieldDefinition",
    "bind_panel",
    "current_panel",
]
