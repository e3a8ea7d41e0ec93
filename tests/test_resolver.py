"""Tests for visit dispatch.

These tests verify:
- Dispatch by type name, with default and custom prefixes
- Dispatch by property value
- Prefix override and context forwarding in every argument shape
- Fallback to the unknown-visited handler and the silent no-handler case
"""

from __future__ import annotations

import pytest

from tests.handlers.visited import Abc, Bar, Foo, Mah, Operator, Xyz
from visitable import HandlerTable, Visitable, visit


# =============================================================================
# Dispatch by type name
# =============================================================================


class TestVisitByType:
    """Tests for objects dispatched by their class name."""

    @pytest.mark.parametrize(
        "visited_class,expected",
        [
            (Foo, "acceptFoo"),
            (Bar, "acceptBar"),
            (Mah, "acceptUnknownVisited"),
        ],
    )
    def test_default_prefix(self, visitor, visited_class, expected):
        """Test prefix + class name, falling back to acceptUnknownVisited."""
        visited = visited_class()

        result = visited.visit(visitor)

        assert result == expected
        assert visitor.last == (expected, visited, None)

    @pytest.mark.parametrize(
        "visited_class,expected",
        [
            (Foo, "acceptThingFoo"),
            (Bar, "acceptThingBar"),
            (Mah, "acceptThingUnknownVisited"),
        ],
    )
    def test_prefix_override(self, visitor, visited_class, expected):
        """Test a prefix override applies to primary and fallback lookups."""
        visited = visited_class()

        visited.visit(visitor, "acceptThing")

        assert visitor.last == (expected, visited, None)

    @pytest.mark.parametrize(
        "visited_class,expected",
        [
            (Foo, "acceptFoo"),
            (Bar, "acceptBar"),
            (Mah, "acceptUnknownVisited"),
        ],
    )
    def test_context_only(self, visitor, visited_class, expected):
        """Test a sole mapping argument is forwarded as context."""
        visited = visited_class()
        context = {"value": 100}

        visited.visit(visitor, context)

        name, seen, seen_context = visitor.last
        assert name == expected
        assert seen is visited
        assert seen_context is context

    @pytest.mark.parametrize(
        "visited_class,expected",
        [
            (Foo, "acceptThingFoo"),
            (Bar, "acceptThingBar"),
            (Mah, "acceptThingUnknownVisited"),
        ],
    )
    def test_prefix_and_context(self, visitor, visited_class, expected):
        """Test prefix override followed by context."""
        visited = visited_class()
        context = {"value": 100}

        visited.visit(visitor, "acceptThing", context)

        name, seen, seen_context = visitor.last
        assert name == expected
        assert seen is visited
        assert seen_context is context

    def test_scenario_foo_invokes_accept_foo(self, visitor, foo):
        """Test Foo with default prefix invokes acceptFoo(foo, None)."""
        assert visit(foo, visitor) == "acceptFoo"
        assert visitor.calls == [("acceptFoo", foo, None)]

    def test_scenario_mah_invokes_unknown_visited(self, visitor, mah):
        """Test Mah without acceptMah invokes acceptUnknownVisited."""
        assert visit(mah, visitor) == "acceptUnknownVisited"
        assert visitor.calls == [("acceptUnknownVisited", mah, None)]


class TestVisitByTypeWithCustomPrefix:
    """Tests for classes that configure their own default prefix."""

    def test_custom_default_prefix(self, visitor):
        """Test visit_prefix replaces 'accept'."""
        abc = Abc()
        abc.visit(visitor)
        assert visitor.last == ("_acceptAbc", abc, None)

    def test_custom_default_prefix_fallback(self, visitor):
        """Test the fallback uses the custom default prefix."""
        xyz = Xyz()
        xyz.visit(visitor)
        assert visitor.last == ("_acceptUnknownVisited", xyz, None)

    def test_override_beats_custom_default(self, visitor):
        """Test a per-call prefix wins over visit_prefix."""
        abc = Abc()
        abc.visit(visitor, "_acceptStuff")
        assert visitor.last == ("_acceptStuffAbc", abc, None)

    def test_override_fallback_with_context(self, visitor):
        """Test fallback uses the override, never the default prefix."""
        xyz = Xyz()
        context = {"value": 100}
        xyz.visit(visitor, "_acceptStuff", context)
        assert visitor.last == ("_acceptStuffUnknownVisited", xyz, context)


# =============================================================================
# Dispatch by property value
# =============================================================================


class TestVisitByProperty:
    """Tests for objects dispatched by the value of visit_key."""

    def test_scenario_add(self, visitor, add):
        """Test value 'add' invokes acceptAdd."""
        add.visit(visitor)
        assert visitor.last == ("acceptAdd", add, None)

    def test_subtract(self, visitor, subtract):
        """Test value 'subtract' invokes acceptSubtract."""
        subtract.visit(visitor)
        assert visitor.last == ("acceptSubtract", subtract, None)

    def test_unknown_value_falls_back(self, visitor, multiply):
        """Test value without handler invokes acceptUnknownVisited."""
        multiply.visit(visitor)
        assert visitor.last == ("acceptUnknownVisited", multiply, None)

    def test_scenario_prefix_override(self, visitor, add):
        """Test override 'acceptOperator' invokes acceptOperatorAdd, not acceptAdd."""
        add.visit(visitor, "acceptOperator")
        assert visitor.calls == [("acceptOperatorAdd", add, None)]

    def test_prefix_override_fallback(self, visitor, multiply):
        """Test fallback uses the override prefix."""
        multiply.visit(visitor, "acceptOperator")
        assert visitor.last == ("acceptOperatorUnknownVisited", multiply, None)

    def test_scenario_prefix_and_context(self, visitor, subtract):
        """Test acceptOperatorSubtract receives (entity, {'x': 1})."""
        context = {"x": 1}
        subtract.visit(visitor, "acceptOperator", context)
        assert visitor.calls == [("acceptOperatorSubtract", subtract, {"x": 1})]
        assert visitor.last[2] is context

    def test_only_first_character_is_capitalized(self):
        """Test 'aBC' dispatches to acceptABC and 'abc' to acceptAbc."""
        table = HandlerTable("accept")
        table.register("ABC", lambda op, ctx: "upper")
        table.register("Abc", lambda op, ctx: "title")

        assert visit(Operator("aBC"), table) == "upper"
        assert visit(Operator("abc"), table) == "title"


# =============================================================================
# No handler
# =============================================================================


class TestNoHandler:
    """Tests for visitors lacking both the primary and fallback handler."""

    def test_returns_none_without_invocation(self):
        """Test a visitor without handlers yields None silently."""

        class Silent:
            called = False

            def acceptSomethingElse(self, visited, context):
                Silent.called = True

        assert visit(Foo(), Silent()) is None
        assert Silent.called is False

    def test_non_callable_attribute_is_not_a_handler(self):
        """Test a data attribute named like a handler is ignored."""

        class DataVisitor:
            acceptFoo = "not callable"

            def acceptUnknownVisited(self, visited, context):
                return "fallback"

        assert visit(Foo(), DataVisitor()) == "fallback"

    def test_handler_returning_none(self, foo):
        """Test a handler's None result is passed through."""

        class NoneVisitor:
            def acceptFoo(self, visited, context):
                return None

        assert visit(foo, NoneVisitor()) is None


# =============================================================================
# Visited objects that are not Visitable
# =============================================================================


class TestPlainVisitedObjects:
    """Tests for visited objects that do not inherit the trait."""

    def test_plain_object_dispatches_by_class_name(self):
        """Test any object dispatches by its class name and 'accept'."""

        class Widget:
            pass

        class Visitor:
            def acceptWidget(self, visited, context):
                return "widget"

        assert visit(Widget(), Visitor()) == "widget"

    def test_plain_object_with_visit_attributes(self):
        """Test visit_key and visit_prefix are read as plain attributes."""

        class Token:
            visit_key = "kind"
            visit_prefix = "on"

            def __init__(self, kind):
                self.kind = kind

        class Lexer:
            def onNumber(self, visited, context):
                return "number"

        assert visit(Token("number"), Lexer()) == "number"

    def test_mapping_visited_reads_property_by_key(self):
        """Test a mapping subclass with visit_key reads the property by key."""

        class Event(dict):
            visit_key = "type"

        class Listener:
            def acceptClick(self, visited, context):
                return visited["x"]

        assert visit(Event(type="click", x=3), Listener()) == 3

    def test_tagged_variant_overrides_class_name(self):
        """Test visit_tag provides the discriminant instead of the class name."""

        class Node(Visitable):
            visit_tag = "Leaf"

        class Walker:
            def acceptLeaf(self, visited, context):
                return "leaf"

            def acceptNode(self, visited, context):
                return "node"

        assert visit(Node(), Walker()) == "leaf"


class TestAsyncHandlers:
    """Tests that awaitables returned by handlers are passed through."""

    def test_coroutine_returned_unawaited(self, add):
        import asyncio

        class AsyncVisitor:
            async def acceptAdd(self, visited, context):
                return context["x"] + 1

        pending = visit(add, AsyncVisitor(), {"x": 1})

        assert asyncio.iscoroutine(pending)
        assert asyncio.run(pending) == 2
