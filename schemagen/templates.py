# File: schemagen/templates.py
"""
schemagen - Class Assembler
============================
Render a ``GeneratedClassSpec`` into MagicObject class source text.

Three flavours share one layout:

    1. ``<?php`` header and namespace declaration
    2. imports
    3. class-level docblock
    4. class declaration
    5. property docblocks + ``protected $name;``
    6. (DTO only) static ``valueOf($input)`` factory

**Output contract:**
    - All string assembly uses ``List[str]`` + one ``join`` per file.
    - Exactly one line terminator (``\\n`` or ``\\r\\n``) appears in the
      output, and identical specs always produce identical bytes.
    - The assembler holds no mutable state.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from schemagen.models import (
    AnnotationBlock,
    ApplyKey,
    BareLiteral,
    ClassKind,
    GeneratedClassSpec,
    GeneratedProperty,
)
from schemagen.properties import TAG_VAR
from schemagen.rules import rule_signature
from schemagen.utils import resolve_line_ending

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemagen.templates")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_INDENT: str = "\t"
_DOUBLE_INDENT: str = "\t\t"

MAGIC_OBJECT_IMPORT: str = "MagicObject\\MagicObject"
SETTER_GETTER_IMPORT: str = "MagicObject\\SetterGetter"
ORM_TUTORIAL_URL: str = "https://github.com/Planetbiru/MagicObject/blob/main/tutorial.md#orm"
TUTORIAL_URL: str = "https://github.com/Planetbiru/MagicObject/blob/main/tutorial.md"

_ANY_NEWLINE_RE: re.Pattern[str] = re.compile(r"\r\n|\r|\n")


# ---------------------------------------------------------------------------
# Accessor map
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AccessorPair:
    property_name: str
    getter: str
    setter: str


@dataclass(frozen=True, slots=True)
class AccessorMap:
    """
    Property → getter/setter names for one class, built once.

    MagicObject resolves ``getFooBar()``/``setFooBar()`` for ``$fooBar``;
    the DTO ``valueOf`` body is written from these pairs.
    """

    pairs: Tuple[AccessorPair, ...] = ()

    @classmethod
    def for_properties(cls, properties: Tuple[GeneratedProperty, ...]) -> "AccessorMap":
        pairs: List[AccessorPair] = []
        for prop in properties:
            suffix: str = prop.property_name[:1].upper() + prop.property_name[1:]
            pairs.append(AccessorPair(prop.property_name, f"get{suffix}", f"set{suffix}"))
        return cls(tuple(pairs))

    def getter(self, property_name: str) -> str:
        return self._pair(property_name).getter

    def setter(self, property_name: str) -> str:
        return self._pair(property_name).setter

    def _pair(self, property_name: str) -> AccessorPair:
        for pair in self.pairs:
            if pair.property_name == property_name:
                return pair
        raise KeyError(property_name)

    def __len__(self) -> int:
        return len(self.pairs)


# ---------------------------------------------------------------------------
# ClassAssembler
# ---------------------------------------------------------------------------


class ClassAssembler:
    """
    Stateless renderer for entity, DTO and validator classes.

    Args:
        line_ending: ``"lf"`` (default) or ``"crlf"``.
    """

    def __init__(self, line_ending: str = "lf") -> None:
        self._eol: str = resolve_line_ending(line_ending)
        self._dispatch: Dict[str, Callable[[GeneratedClassSpec], List[str]]] = {
            ClassKind.ENTITY.value: self._entity_lines,
            ClassKind.DTO.value: self._dto_lines,
            ClassKind.VALIDATOR.value: self._validator_lines,
        }
        logger.debug("ClassAssembler initialised (eol=%r).", self._eol)

    @property
    def line_ending(self) -> str:
        return self._eol

    def assemble(self, spec: GeneratedClassSpec) -> str:
        """Render *spec* to source text terminated by a single line ending."""
        render: Callable[[GeneratedClassSpec], List[str]] = self._dispatch[spec.kind]
        lines: List[str] = render(spec)
        # values can carry newlines of their own; fold them into one style
        text: str = _ANY_NEWLINE_RE.sub("\n", "\n".join(lines)) + "\n"
        if self._eol != "\n":
            text = text.replace("\n", self._eol)
        logger.debug(
            "Assembled %s %s (%d properties, %d chars).",
            spec.kind,
            spec.class_name,
            len(spec.properties),
            len(text),
        )
        return text

    # ===================================================================
    # Shared pieces
    # ===================================================================

    @staticmethod
    def _header(namespace: str, imports: List[str]) -> List[str]:
        lines: List[str] = ["<?php", ""]
        if namespace:
            lines.extend([f"namespace {namespace};", ""])
        for name in imports:
            lines.append(f"use {name};")
        lines.append("")
        return lines

    @staticmethod
    def _json_block(spec: GeneratedClassSpec) -> AnnotationBlock:
        return AnnotationBlock(
            "JSON",
            (
                ("propertyNamingStrategy", BareLiteral(spec.naming_strategy)),
                ("prettify", spec.prettify),
            ),
        )

    @staticmethod
    def _doc_line(text: str = "", indent: str = "") -> str:
        return f"{indent} * {text}" if text else f"{indent} *"

    def _property_lines(self, prop: GeneratedProperty, with_label: bool = True) -> List[str]:
        lines: List[str] = [f"{_INDENT}/**"]
        if with_label:
            lines.append(self._doc_line(prop.label, _INDENT))
            lines.append(self._doc_line("", _INDENT))
        for block in prop.annotations:
            lines.append(self._doc_line(block.render(), _INDENT))
        lines.append(f"{_INDENT} */")
        lines.append(f"{_INDENT}protected ${prop.property_name};")
        return lines

    def _class_body(self, chunks: List[List[str]]) -> List[str]:
        """Chunks separated by one blank line, wrapped in braces."""
        lines: List[str] = ["{"]
        for index, chunk in enumerate(chunks):
            if index:
                lines.append("")
            lines.extend(chunk)
        lines.append("}")
        return lines

    # ===================================================================
    # 1. Entity
    # ===================================================================

    def _entity_lines(self, spec: GeneratedClassSpec) -> List[str]:
        table: str = spec.table_or_module_name
        lines: List[str] = self._header(spec.namespace, [MAGIC_OBJECT_IMPORT])

        lines.append("/**")
        lines.append(self._doc_line(f'The {spec.class_name} class represents an entity in the "{table}" table.'))
        lines.append(self._doc_line())
        lines.append(self._doc_line(
            f'This entity maps to the "{table}" table in the database and supports '
            "ORM (Object-Relational Mapping) operations."
        ))
        lines.append(self._doc_line(
            "You can establish relationships with other entities using the JoinColumn annotation."
        ))
        lines.append(self._doc_line(
            'Ensure to include the appropriate "use" statement if related entities '
            "are defined in a different namespace."
        ))
        lines.append(self._doc_line())
        lines.append(self._doc_line(
            "For detailed guidance on using the MagicObject ORM, refer to the official tutorial:"
        ))
        lines.append(self._doc_line(f"@link {ORM_TUTORIAL_URL}"))
        lines.append(self._doc_line())
        if spec.namespace:
            lines.append(self._doc_line(AnnotationBlock("package", text=spec.namespace).render()))
        lines.append(self._doc_line(AnnotationBlock("Entity").render()))
        lines.append(self._doc_line(self._json_block(spec).render()))
        lines.append(self._doc_line(AnnotationBlock("Table", (("name", table),)).render()))
        lines.append(" */")

        lines.append(f"class {spec.class_name} extends MagicObject")
        lines.extend(self._class_body([self._property_lines(p) for p in spec.properties]))
        return lines

    # ===================================================================
    # 2. DTO
    # ===================================================================

    def _dto_lines(self, spec: GeneratedClassSpec) -> List[str]:
        entity_name: str = spec.entity_name or ""
        entity_fqn: str = (
            f"{spec.entity_namespace}\\{entity_name}" if spec.entity_namespace else entity_name
        )
        lines: List[str] = self._header(spec.namespace, [SETTER_GETTER_IMPORT, entity_fqn])

        lines.append("/**")
        lines.append(self._doc_line(
            f"{spec.class_name} is a Data Transfer Object used to transfer {entity_name} "
            "via API or to serialize into files or databases."
        ))
        lines.append(self._doc_line(f"Visit {TUTORIAL_URL}"))
        lines.append(self._doc_line())
        lines.append(self._doc_line(self._json_block(spec).render()))
        lines.append(" */")

        lines.append(f"class {spec.class_name} extends SetterGetter")
        chunks: List[List[str]] = [self._property_lines(p) for p in spec.properties]
        chunks.append(self._value_of_lines(spec, AccessorMap.for_properties(spec.properties)))
        lines.extend(self._class_body(chunks))
        return lines

    def _value_of_lines(self, spec: GeneratedClassSpec, accessors: AccessorMap) -> List[str]:
        entity_name: str = spec.entity_name or ""
        lines: List[str] = [
            f"{_INDENT}/**",
            self._doc_line(
                f"Construct {spec.class_name} from {entity_name} and not copy other properties",
                _INDENT,
            ),
            self._doc_line("", _INDENT),
            self._doc_line(f"@param {entity_name} $input", _INDENT),
            self._doc_line("@return self", _INDENT),
            f"{_INDENT} */",
            f"{_INDENT}public static function valueOf($input)",
            f"{_INDENT}{{",
            f"{_DOUBLE_INDENT}$output = new {spec.class_name}();",
        ]
        for pair in accessors.pairs:
            lines.append(f"{_DOUBLE_INDENT}$output->{pair.setter}($input->{pair.getter}());")
        lines.append(f"{_DOUBLE_INDENT}return $output;")
        lines.append(f"{_INDENT}}}")
        return lines

    # ===================================================================
    # 3. Validator
    # ===================================================================

    def _validator_lines(self, spec: GeneratedClassSpec) -> List[str]:
        apply_key: ApplyKey = ApplyKey.parse(spec.apply_key or ApplyKey.INSERT)
        lines: List[str] = self._header(spec.namespace, [MAGIC_OBJECT_IMPORT])

        lines.append("/**")
        lines.append(self._doc_line(
            f"Represents a validator class for the `{spec.table_or_module_name}` module."
        ))
        lines.append(self._doc_line())
        lines.append(self._doc_line(
            f"This class is auto-generated and intended for {apply_key.operation} validation."
        ))
        lines.append(self._doc_line("You can add additional validation rules as needed."))
        lines.append(self._doc_line())
        lines.append(self._doc_line("Validated properties:"))
        for number, prop in enumerate(spec.properties, start=1):
            signatures: List[str] = []
            for block in prop.annotations:
                if block.tag == TAG_VAR:
                    continue
                signature: str = rule_signature(block)
                if signature not in signatures:
                    signatures.append(signature)
            lines.append(self._doc_line(
                f"{number}. **`${prop.property_name}`** ( {', '.join(signatures)} )"
            ))
        if spec.namespace:
            lines.append(self._doc_line())
            lines.append(self._doc_line(AnnotationBlock("package", text=spec.namespace).render()))
        lines.append(" */")

        lines.append(f"class {spec.class_name} extends MagicObject")
        lines.extend(self._class_body(
            [self._property_lines(p, with_label=False) for p in spec.properties]
        ))
        return lines


__all__: List[str] = [
    "MAGIC_OBJECT_IMPORT",
    "SETTER_GETTER_IMPORT",
    "AccessorPair",
    "AccessorMap",
    "ClassAssembler",
]

logger.debug("schemagen.templates loaded — %d public symbols.", len(__all__))
