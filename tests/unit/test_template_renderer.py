"""Placeholder substitution in action configs."""

from types import MappingProxyType

from bookflow.application.services.template_renderer import (
    placeholders,
    render_config,
    render_string,
)


def test_renders_customer_name() -> None:
    assert render_string("Hello {{customer.name}}", {"customer": {"name": "Jane"}}) == "Hello Jane"


def test_missing_path_renders_empty() -> None:
    assert render_string("Hello {{customer.name}}", {}) == "Hello "
    assert render_string("Hi {{customer.name}}!", {"customer": {"name": None}}) == "Hi !"


def test_whitespace_inside_braces_is_allowed() -> None:
    assert render_string("{{ payment.amount }} USD", {"payment": {"amount": 250}}) == "250 USD"


def test_value_formatting() -> None:
    context = {"v": {"flag": True, "n": 12.5, "tags": ["a", "b"], "obj": {"k": 1}}}
    assert render_string("{{v.flag}}", context) == "true"
    assert render_string("{{v.n}}", context) == "12.5"
    assert render_string("{{v.tags}}", context) == '["a", "b"]'
    assert render_string("{{v.obj}}", context) == '{"k": 1}'


def test_multiple_placeholders_in_one_string() -> None:
    context = {"customer": {"name": "Jane"}, "payment": {"amount": 99}}
    result = render_string("{{customer.name}} paid ${{payment.amount}}", context)
    assert result == "Jane paid $99"


def test_render_config_walks_nested_structures() -> None:
    config = {
        "to": "{{customer.email}}",
        "variables": {"customerName": "{{customer.name}}", "items": ["{{appointment.type}}", 3]},
        "retries": 2,
        "enabled": False,
    }
    context = {
        "customer": {"email": "jane@example.com", "name": "Jane"},
        "appointment": {"type": "consultation"},
    }
    rendered = render_config(config, context)
    assert rendered == {
        "to": "jane@example.com",
        "variables": {"customerName": "Jane", "items": ["consultation", 3]},
        "retries": 2,
        "enabled": False,
    }


def test_render_config_does_not_mutate_input() -> None:
    config = {"message": "Hi {{customer.name}}", "nested": {"x": "{{a}}"}}
    render_config(config, {"customer": {"name": "Jane"}, "a": 1})
    assert config == {"message": "Hi {{customer.name}}", "nested": {"x": "{{a}}"}}


def test_keys_are_not_substituted() -> None:
    assert render_config({"{{a}}": "{{a}}"}, {"a": "x"}) == {"{{a}}": "x"}


def test_read_only_context_is_supported() -> None:
    context = MappingProxyType({"customer": MappingProxyType({"name": "Jane"})})
    assert render_string("{{customer.name}}", context) == "Jane"


def test_unbalanced_braces_are_left_alone() -> None:
    assert render_string("{{customer.name} and {x}}", {"customer": {"name": "J"}}) == "{{customer.name} and {x}}"


def test_placeholders_collects_paths() -> None:
    config = {"to": "{{customer.email}}", "v": ["{{ payment.amount }}", {"k": "{{customer.email}}"}]}
    assert placeholders(config) == {"customer.email", "payment.amount"}
