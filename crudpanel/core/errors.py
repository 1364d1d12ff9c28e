from __future__ import annotations


class CrudPanelError(Exception):
    """Base class for field registry and builder errors."""


class AmbiguousAmbientRegistry(CrudPanelError, RuntimeError):
    """No panel is bound to the current context, so CrudField.name() cannot resolve one."""


class MissingNameAttribute(CrudPanelError, ValueError):
    def __init__(self, message: str = "field has no 'name' attribute"):
        super().__init__(message)


class ReservedAttributeError(CrudPanelError, ValueError):
    def __init__(self, attribute: str, action: str = "forgotten"):
        self.attribute = attribute
        super().__init__(f"attribute '{attribute}' is reserved and cannot be {action}")


class FieldNotFound(CrudPanelError, KeyError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"field not found: {self.name}"
