from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from crudpanel.core.errors import MissingNameAttribute, ReservedAttributeError

from .context import current_panel
from .panel import CrudPanel

log = logging.getLogger("crudpanel.fields")


class CrudField:
    """
    Fluent syntax for panel fields.

    In addition to the mapping form:
      panel.add_field({"name": "price", "type": "number"})

    fields can be configured one attribute at a time:
      panel.field("price").type("number").label("Price")
      CrudField.name("price").type("number")      # ambient panel, see bind_panel()

    Every call saves the working attributes back into the panel immediately.
    Any unknown method name is treated as an attribute key; use ``set()`` for
    attributes whose name collides with a method here.
    """

    def __init__(self, panel: CrudPanel, name: str):
        if name is None or name == "":
            raise MissingNameAttribute("a field needs a non-empty name")

        self._panel = panel

        existing = panel.first_field_where("name", name)
        if existing is not None:
            # use all existing attributes
            self._attributes: Dict[str, Any] = existing
        else:
            # creating the field now, so at the very least set the name
            self._attributes = {"name": name}
            log.debug("creating field operation=%s name=%s", panel.operation, name)

        self._save()

    @classmethod
    def name(cls, field_name: str, *, panel: Optional[CrudPanel] = None) -> "CrudField":
        """Create a CrudField named ``field_name`` on ``panel`` or the ambient panel."""
        return cls(panel if panel is not None else current_panel(), field_name)

    @property
    def panel(self) -> CrudPanel:
        return self._panel

    @property
    def attributes(self) -> Dict[str, Any]:
        return dict(self._attributes)

    def set(self, attribute: str, value: Any) -> "CrudField":
        # renaming would clone the record or overwrite another field
        if attribute == "name":
            raise ReservedAttributeError(attribute, action="set")

        self._attributes[attribute] = value
        return self._save()

    def remove(self) -> None:
        """Remove this field from the panel. The builder keeps its (now stale) attributes."""
        self._panel.remove_field(self._key())

    def forget(self, attribute: str) -> "CrudField":
        """Remove one attribute from the stored field and from this builder."""
        if attribute == "name":
            raise ReservedAttributeError(attribute)

        self._panel.remove_field_attribute(self._key(), attribute)
        self._attributes.pop(attribute, None)
        return self

    # ---------------
    # Internals
    # ---------------
    def _key(self) -> str:
        name = self._attributes.get("name")
        if name is None or name == "":
            raise MissingNameAttribute()
        return name

    def _save(self) -> "CrudField":
        key = self._key()

        if self._panel.has_field_where("name", key):
            self._panel.modify_field(key, self._attributes)
        else:
            self._panel.add_field(self._attributes)

        return self

    def __getattr__(self, attribute: str) -> Callable[..., "CrudField"]:
        # type("number") sets the "type" attribute to "number"
        if attribute.startswith("_"):
            raise AttributeError(attribute)

        def setter(*args: Any) -> "CrudField":
            if not args:
                raise TypeError(f"{attribute}() expects a value for attribute '{attribute}'")
            return self.set(attribute, args[0])

        setter.__name__ = attribute
        return setter

    def __repr__(self) -> str:
        return f"CrudField({self._attributes!r})"
