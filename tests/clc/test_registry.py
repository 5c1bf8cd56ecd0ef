"""Tests for the registry of built-in names."""

import pytest

from clc import CLCEnvironment, CLCFunctionKind, CLCHistory, CLCInteger, CLCRegistry
from clc.clc_unit import FAHRENHEIT, KILOBYTE


class TestRegistry:
    """Test lookups in the default registry."""

    def test_default_registry_is_shared(self):
        """The default registry is built once."""
        assert CLCRegistry.default() is CLCRegistry.default()

    def test_namespaces_are_read_only(self):
        """Neither namespace can be modified."""
        registry = CLCRegistry.default()
        with pytest.raises(TypeError):
            registry.constants["ANSWER"] = None  # type: ignore[index]

        with pytest.raises(TypeError):
            registry.functions["answer"] = None  # type: ignore[index]

    @pytest.mark.parametrize("name,kind,arity", [
        ("sqrt", CLCFunctionKind.UNARY, 1),
        ("abs", CLCFunctionKind.UNARY, 1),
        ("pow", CLCFunctionKind.BINARY, 2),
        ("min", CLCFunctionKind.BINARY, 2),
        ("u8", CLCFunctionKind.CAST, 1),
        ("f64", CLCFunctionKind.CAST, 1),
        ("kilobyte", CLCFunctionKind.UNIT, 1),
        ("celsius", CLCFunctionKind.UNIT, 1),
    ])
    def test_function_kinds(self, name, kind, arity):
        """Functions are grouped by kind with a fixed arity."""
        function = CLCRegistry.default().lookup_function(name)
        assert function is not None
        assert function.kind == kind
        assert function.arity == arity

    def test_lookups_are_case_sensitive(self):
        """Names must match exactly."""
        registry = CLCRegistry.default()
        assert registry.lookup_constant("PI") is not None
        assert registry.lookup_constant("pi") is None
        assert registry.lookup_function("SQRT") is None

    def test_every_integer_type_has_limits(self):
        """MIN_ and MAX_ constants exist for every integer type."""
        names = CLCRegistry.default().constant_names()
        for type_name in ("U8", "U16", "U32", "U64", "I8", "I16", "I32", "I64"):
            assert f"MIN_{type_name}" in names
            assert f"MAX_{type_name}" in names

    def test_unit_lookup(self):
        """Units are found by suffix or by name."""
        registry = CLCRegistry.default()
        assert registry.lookup_unit("K") == KILOBYTE
        assert registry.lookup_unit("fahrenheit") == FAHRENHEIT
        assert registry.lookup_unit("parsec") is None
        assert len(registry.units()) == 9

    def test_names_cover_both_namespaces(self):
        """names() lists constants and functions for suggestions."""
        names = CLCRegistry.default().names()
        assert "PI" in names
        assert "sqrt" in names


class TestEnvironment:
    """Test the evaluation environment."""

    def test_lookups_delegate(self):
        """The environment reads from its history and registry."""
        env = CLCEnvironment(CLCHistory(2, [CLCInteger(9)]))
        assert env.lookup_history(0) == CLCInteger(9)
        assert env.lookup_history(1) is None
        assert env.lookup_constant("E") is not None
        assert env.lookup_function("ln") is not None
        assert env.lookup_unit("°F") == FAHRENHEIT
