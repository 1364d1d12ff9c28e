from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Union

from crudpanel.core.errors import FieldNotFound, MissingNameAttribute
from crudpanel.core.observability.metrics import inc_mutation

if TYPE_CHECKING:
    from .field import CrudField

log = logging.getLogger("crudpanel.fields")

FieldDefinition = Dict[str, Any]


def _field_name(field: Mapping[str, Any]) -> str:
    name = field.get("name")
    if name is None or name == "":
        raise MissingNameAttribute()
    return name


class CrudPanel:
    """
    Ordered field definitions for one CRUD operation.

    Field records are plain dicts keyed by a unique ``name``. Records handed
    out by the panel are copies; mutate them through the panel (or a
    ``CrudField`` bound to it) so the stored definitions stay authoritative.
    """

    def __init__(self, operation: str = "create", fields: Optional[Iterable[Union[str, Mapping[str, Any]]]] = None):
        self.operation = operation
        self._fields: List[FieldDefinition] = []
        if fields:
            self.add_fields(fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, name: object) -> bool:
        return self._index_of(name) is not None

    def __repr__(self) -> str:
        return f"CrudPanel(operation={self.operation!r}, fields={[f['name'] for f in self._fields]!r})"

    # ----------------------------------------
    # Lookup
    # ----------------------------------------
    def _index_where(self, attribute: str, value: Any) -> Optional[int]:
        for i, field in enumerate(self._fields):
            if attribute in field and field[attribute] == value:
                return i
        return None

    def _index_of(self, name: object) -> Optional[int]:
        return self._index_where("name", name)

    def first_field_where(self, attribute: str, value: Any) -> Optional[FieldDefinition]:
        i = self._index_where(attribute, value)
        if i is None:
            return None
        return copy.deepcopy(self._fields[i])

    def has_field_where(self, attribute: str, value: Any) -> bool:
        return self._index_where(attribute, value) is not None

    def fields(self) -> List[FieldDefinition]:
        return copy.deepcopy(self._fields)

    def field(self, name: str) -> "CrudField":
        """Fluent entry point: ``panel.field("price").type("number")``."""
        from .field import CrudField

        return CrudField(self, name)

    # ----------------------------------------
    # Mutation
    # ----------------------------------------
    def set_operation(self, operation: str) -> None:
        self.operation = operation

    def add_field(self, field: Union[str, Mapping[str, Any]]) -> None:
        if isinstance(field, str):
            field = {"name": field}
        name = _field_name(field)
        stored = copy.deepcopy(dict(field))

        i = self._index_of(name)
        if i is None:
            self._fields.append(stored)
        else:
            # keep names unique: re-adding a field replaces it in place
            self._fields[i] = stored

        log.debug("field added operation=%s name=%s", self.operation, name)
        inc_mutation(self.operation, "add")

    def add_fields(self, fields: Iterable[Union[str, Mapping[str, Any]]]) -> None:
        for field in fields:
            self.add_field(field)

    def modify_field(self, name: str, attributes: Mapping[str, Any]) -> None:
        """Replace the stored attribute set of ``name``, keeping its position."""
        i = self._index_of(name)
        if i is None:
            raise FieldNotFound(name)

        stored = copy.deepcopy(dict(attributes))
        # the key is authoritative; a different name here would duplicate a field
        stored["name"] = name
        self._fields[i] = stored

        log.debug("field modified operation=%s name=%s", self.operation, name)
        inc_mutation(self.operation, "modify")

    def remove_field(self, name: str) -> None:
        i = self._index_of(name)
        if i is None:
            return
        del self._fields[i]

        log.debug("field removed operation=%s name=%s", self.operation, name)
        inc_mutation(self.operation, "remove")

    def remove_fields(self, names: Iterable[str]) -> None:
        for name in names:
            self.remove_field(name)

    def remove_all_fields(self) -> None:
        for field in list(self._fields):
            self.remove_field(field["name"])

    def remove_field_attribute(self, name: str, attribute: str) -> None:
        i = self._index_of(name)
        if i is None or attribute not in self._fields[i]:
            return
        del self._fields[i][attribute]

        log.debug("field attribute removed operation=%s name=%s attribute=%s", self.operation, name, attribute)
        inc_mutation(self.operation, "forget")

    # ----------------------------------------
    # Ordering
    # ----------------------------------------
    def _move_last(self, target: str, offset: int) -> None:
        if self._index_of(target) is None:
            raise FieldNotFound(target)
        if not self._fields or self._fields[-1]["name"] == target:
            return

        moved = self._fields.pop()
        i = self._index_of(target)
        self._fields.insert(i + offset, moved)

    def before_field(self, target: str) -> None:
        """Move the most recently added field directly before ``target``."""
        self._move_last(target, 0)

    def after_field(self, target: str) -> None:
        """Move the most recently added field directly after ``target``."""
        self._move_last(target, 1)
