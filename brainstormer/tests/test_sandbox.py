"""Tests for the restricted module evaluator."""

import pytest

from brainstormer.content.errors import UnparseableSource
from brainstormer.content.sandbox import ModuleSandbox, evaluate_module, tokenize


def test_es_module_with_unquoted_keys_and_trailing_commas():
    text = """
    // Activities
    export default [
      { name: 'Sketch', desc: "Quick lines", },
      { label: `Walk` },
    ];
    """
    assert evaluate_module(text) == [
        {"name": "Sketch", "desc": "Quick lines"},
        {"label": "Walk"},
    ]


def test_const_binding_exported_later():
    text = "'use strict';\nconst ITEMS = ['a', 'b'];\nexport default ITEMS;"
    assert evaluate_module(text) == ["a", "b"]


def test_export_list_with_default_alias():
    text = "const list = ['x'];\nexport { list as default };"
    assert evaluate_module(text) == ["x"]


def test_commonjs_module_exports():
    assert evaluate_module("module.exports = [1, 2, 3];") == [1, 2, 3]


def test_exports_default_property():
    assert evaluate_module("exports.default = ['d'];") == ["d"]


def test_module_exports_default_property():
    assert evaluate_module("module.exports = {}; module.exports.default = ['m'];") == ["m"]


def test_first_list_property_of_exported_object():
    text = "export default { title: 'Thoughts', items: [{ name: 'T1' }] };"
    assert evaluate_module(text) == [{"name": "T1"}]


def test_named_export_only():
    assert evaluate_module("export const thoughts = ['t'];") == ["t"]


def test_object_freeze_is_identity_and_comments_are_skipped():
    text = "/* header */ const L = Object.freeze([ 'a', /* inline */ 'b' ]);\nmodule.exports = L;"
    assert evaluate_module(text) == ["a", "b"]


def test_window_assignment_is_sandboxed():
    sandbox = ModuleSandbox()
    result = sandbox.evaluate("window.LISTS = ['w']; var x = window.LISTS; export default x;")
    assert result == ["w"]
    assert sandbox.bindings["globalThis"]["LISTS"] == ["w"]


def test_literals_and_numbers():
    text = "export default [0x10, -2, 1.5e1, .5, true, null, undefined, [ , 'e']];"
    assert evaluate_module(text) == [16, -2, 15.0, 0.5, True, None, None, [None, "e"]]


def test_string_escapes():
    text = r"export default ['a\nb', 'tab\there', 'é', '\x41', 'it\'s'];"
    assert evaluate_module(text) == ["a\nb", "tab\there", "é", "A", "it's"]


def test_nothing_exported_returns_none():
    assert evaluate_module("const a = 1;") is None


@pytest.mark.parametrize(
    "text",
    [
        "fetch('http://example.com');",
        "export default [`${danger}`];",
        "export default [unknownName];",
        "export default ['unterminated];",
        "/* never closed",
        "const a = 1; a();",
        "export default ['bad \\u12'];",
    ],
)
def test_unsupported_code_raises(text):
    with pytest.raises(UnparseableSource):
        evaluate_module(text)


def test_tokenize_ends_with_eof():
    tokens = tokenize("a = [1];")
    assert [t.kind for t in tokens] == ["ident", "punct", "punct", "number", "punct", "punct", "eof"]


@pytest.mark.parametrize("text", ["x²", "export default [²];", "export default [１];"])
def test_non_ascii_digits_are_rejected(text):
    with pytest.raises(UnparseableSource):
        evaluate_module(text)


def test_deep_nesting_is_rejected():
    with pytest.raises(UnparseableSource):
        evaluate_module("export default " + "[" * 100000)
