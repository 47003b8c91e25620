"""
tests/test_rules.py
Unit tests for schemagen.rules (validator rule compilation).
"""

from __future__ import annotations

from typing import Any, Dict, List

import pytest

from schemagen.models import AnnotationBlock, ApplyKey, BareLiteral, ClassKind, FieldValidation, ValidationRule
from schemagen.rules import compile_validators, resolve_field_type, rule_block, rule_signature


# ===========================================================================
# Field type resolution
# ===========================================================================


class TestResolveFieldType:

    @pytest.mark.parametrize(
        "field_type, expected",
        [
            ("tinyint(1)", "bool"),
            ("bool", "bool"),
            ("boolean", "bool"),
            ("varchar(50)", "string"),
            ("int(11)", "int"),
            ("int", "int"),
            ("decimal(10,2)", "float"),
            ("json", "array"),
            ("", "string"),
        ],
    )
    def test_resolve(self, field_type: str, expected: str) -> None:
        assert resolve_field_type(field_type) == expected


# ===========================================================================
# Rule blocks & signatures
# ===========================================================================


class TestRuleBlock:

    def test_attributes_keep_declared_order(self) -> None:
        rule = ValidationRule.model_validate(
            {"type": "Length", "max": 50, "min": 3, "message": "Too long", "applyInsert": True}
        )
        block = rule_block(rule)
        assert block.tag == "Length"
        assert block.keys == ("max", "min", "message")
        assert block.render() == '@Length(max=50, min=3, message="Too long")'

    def test_routing_keys_are_not_attributes(self) -> None:
        rule = ValidationRule.model_validate({"type": "Required", "applyInsert": True, "applyUpdate": False})
        assert rule.attributes == ()
        assert rule_block(rule).render() == "@Required()"

    def test_none_becomes_empty_string(self) -> None:
        rule = ValidationRule.model_validate({"type": "Pattern", "regexp": None, "applyInsert": True})
        assert rule_block(rule).get("regexp") == ""


class TestRuleSignature:

    def test_numbers_bare_and_empty_dropped(self) -> None:
        block = AnnotationBlock("Length", (("min", "3"), ("message", "")))
        assert rule_signature(block) == "Length(min=3)"

    def test_strings_quoted(self) -> None:
        block = AnnotationBlock("Required", (("message", "Name is required"),))
        assert rule_signature(block) == 'Required(message="Name is required")'

    def test_no_attributes(self) -> None:
        assert rule_signature(AnnotationBlock("NotNull")) == "NotNull"
        assert rule_signature(AnnotationBlock("Email", (("message", ""),))) == "Email"

    def test_booleans_ints_and_literals(self) -> None:
        block = AnnotationBlock(
            "Range",
            (("min", 1), ("max", 2.5), ("inclusive", True), ("mode", BareLiteral("Mode.STRICT"))),
        )
        assert rule_signature(block) == "Range(min=1, max=2.5, inclusive=true, mode=Mode.STRICT)"


# ===========================================================================
# Compiler
# ===========================================================================


class TestCompileValidators:
    """compile_validators over mapping and model definitions."""

    def test_insert_keeps_applicable_fields(self, field_definitions: List[Dict[str, Any]]) -> None:
        spec = compile_validators(field_definitions, "insert", class_name="UserInsertValidator", module_code="user")
        assert spec.kind == ClassKind.VALIDATOR.value
        assert spec.apply_key == ApplyKey.INSERT.value
        assert spec.property_names == ["username", "isActive"]
        assert spec.table_or_module_name == "user"

        username = spec.properties[0]
        assert username.tags == ("Required", "Length", "var")
        assert username.annotation("Length").attributes == (("min", 3), ("max", 50))
        assert username.canonical_type == "string"
        assert username.length == 50

    def test_update_routing(self, field_validations: List[FieldValidation]) -> None:
        spec = compile_validators(field_validations, ApplyKey.UPDATE)
        assert spec.property_names == ["username", "userId"]
        assert spec.properties[0].tags == ("Required", "var")

    def test_apply_flag_names_accepted(self, field_definitions: List[Dict[str, Any]]) -> None:
        by_flag = compile_validators(field_definitions, "applyUpdate")
        by_word = compile_validators(field_definitions, "update")
        assert by_flag == by_word

    def test_unknown_apply_key_raises(self, field_definitions: List[Dict[str, Any]]) -> None:
        with pytest.raises(ValueError):
            compile_validators(field_definitions, "delete")

    def test_bool_field_emits_var_bool(self, field_definitions: List[Dict[str, Any]]) -> None:
        spec = compile_validators(field_definitions, "insert")
        is_active = spec.properties[1]
        assert is_active.annotation("var").render() == "@var bool"

    def test_fields_sharing_a_property_merge(self) -> None:
        definitions = [
            {"fieldName": "user_name", "fieldType": "int", "validation": [{"type": "Required", "applyInsert": True}]},
            {"fieldName": "user-name", "fieldType": "varchar(20)", "validation": [{"type": "Length", "max": 20, "applyInsert": True}]},
        ]
        spec = compile_validators(definitions, "insert")
        assert spec.property_names == ["userName"]
        prop = spec.properties[0]
        assert prop.tags == ("Required", "Length", "var")
        # last declaration decides the type
        assert prop.canonical_type == "string"

    def test_no_applicable_rules_gives_empty_class(self, field_definitions: List[Dict[str, Any]]) -> None:
        only_update = [d for d in field_definitions if d["fieldName"] == "user_id"]
        spec = compile_validators(only_update, "insert")
        assert spec.properties == ()

    def test_namespace_and_class_name(self, field_definitions: List[Dict[str, Any]]) -> None:
        spec = compile_validators(
            field_definitions, "insert", namespace="App\\Validator", class_name="UserInsertValidator"
        )
        assert spec.namespace == "App\\Validator"
        assert spec.class_name == "UserInsertValidator"
