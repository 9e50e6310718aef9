"""Attribute parsing and schema derivation.

Turns raw ``name:type`` tokens from the command line into an ordered,
duplicate-free :class:`AttributeSchema`, then derives the snippets the
templates need from it: the model's field declarations, the deduplicated
list of type constructors to import, and the field names used by the
controller's query and the view.

Example::

    schema = parse_attributes(["title:string", "body:string"])
    derived = derive_schema(schema)
    derived.field_declarations  # "title: string(),\\n  body: string()"
    derived.imported_types      # ["string"]
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import DuplicateAttributeError, MalformedAttributeError

# Separator between field declarations inside ``model('<name>', { ... })``.
FIELD_SEPARATOR = ",\n  "


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class Attribute(BaseModel):
    """A single named, typed field of a generated module."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Field identifier, e.g. 'title'")
    type: str = Field(..., min_length=1, description="Schema-builder name, e.g. 'string'")


class AttributeSchema(BaseModel):
    """Ordered collection of attributes with unique names.

    Order is significant: it controls field order in every rendered file.
    An empty schema is valid and produces a module without fields.
    """

    model_config = ConfigDict(frozen=True)

    attributes: tuple[Attribute, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def _check_unique_names(self) -> "AttributeSchema":
        seen: set[str] = set()
        for attr in self.attributes:
            if attr.name in seen:
                raise ValueError(f"duplicate attribute name: {attr.name}")
            seen.add(attr.name)
        return self

    def __len__(self) -> int:
        return len(self.attributes)

    @property
    def is_empty(self) -> bool:
        return not self.attributes

    @property
    def names(self) -> list[str]:
        return [attr.name for attr in self.attributes]

    @property
    def types(self) -> list[str]:
        return [attr.type for attr in self.attributes]

    def as_dict(self) -> dict[str, str]:
        """Return an insertion-ordered ``{name: type}`` mapping."""
        return {attr.name: attr.type for attr in self.attributes}


class SchemaDerivation(BaseModel):
    """Template-ready snippets derived from an :class:`AttributeSchema`."""

    model_config = ConfigDict(frozen=True)

    field_declarations: str = Field(default="", description="Body of the model schema")
    imported_types: list[str] = Field(default_factory=list, description="Types to import")
    field_names: list[str] = Field(default_factory=list, description="Names in schema order")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_attribute(token: str) -> Attribute:
    """Parse one ``name:type`` token.

    The token is split on the first colon only, so ``"meta:a:b"`` yields the
    type ``"a:b"``.

    Raises:
        MalformedAttributeError: If the colon is missing or either side is
            empty.
    """
    name, sep, type_name = token.partition(":")
    if not sep:
        raise MalformedAttributeError(token, "missing ':' between name and type")
    name = name.strip()
    type_name = type_name.strip()
    if not name:
        raise MalformedAttributeError(token, "attribute name is empty")
    if not type_name:
        raise MalformedAttributeError(token, "attribute type is empty")
    return Attribute(name=name, type=type_name)


def parse_attributes(tokens: Iterable[str]) -> AttributeSchema:
    """Parse an ordered sequence of tokens into an :class:`AttributeSchema`.

    Raises:
        MalformedAttributeError: For the first token that is not ``name:type``.
        DuplicateAttributeError: If a name appears more than once.
    """
    attributes: list[Attribute] = []
    seen: set[str] = set()
    for token in tokens:
        attr = parse_attribute(token)
        if attr.name in seen:
            raise DuplicateAttributeError(attr.name)
        seen.add(attr.name)
        attributes.append(attr)
    return AttributeSchema(attributes=tuple(attributes))


# ---------------------------------------------------------------------------
# Derivation
# ---------------------------------------------------------------------------


def unique_in_order(values: Iterable[str]) -> list[str]:
    """Drop later duplicates, keeping the order of first appearance."""
    return list(dict.fromkeys(values))


def field_declaration(attr: Attribute) -> str:
    return f"{attr.name}: {attr.type}()"


def derive_schema(schema: AttributeSchema) -> SchemaDerivation:
    """Compute the field declarations, imports and names for *schema*."""
    return SchemaDerivation(
        field_declarations=FIELD_SEPARATOR.join(field_declaration(a) for a in schema.attributes),
        imported_types=unique_in_order(schema.types),
        field_names=schema.names,
    )


def build_query(module_name: str, field_names: list[str]) -> str:
    """Build the GraphQL query requesting exactly *field_names*.

    ``build_query("article", ["title", "body"])`` returns
    ``"{ article { title body } }"``.  With no fields the selection block
    is omitted.
    """
    if not field_names:
        return f"{{ {module_name} }}"
    return f"{{ {module_name} {{ {' '.join(field_names)} }} }}"
