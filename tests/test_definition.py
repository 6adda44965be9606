import json
from pathlib import Path

from templ.core.errors import DefinitionLoadError
from templ.core.io.definition import load_definition, save_definition
from templ.core.model import TemplateDefinition


def test_load_missing_definition_is_empty(tmp_path: Path):
    d = load_definition(tmp_path)
    assert d == TemplateDefinition()
    assert d.vars == {}


def test_save_then_load(tmp_path: Path):
    root = tmp_path / "tpl"
    d = TemplateDefinition(
        description="demo",
        author="me",
        vars={"_Prompted": "", "N": 1, "L": ["a", 2], "M": {"k": "v"}},
    )
    p = save_definition(root, d)

    raw = json.loads(p.read_text(encoding="utf-8"))
    assert list(raw.keys()) == ["desc", "author", "vars"]
    assert raw["desc"] == "demo"

    loaded = load_definition(root)
    assert loaded == d
    assert list(loaded.vars.keys()) == ["_Prompted", "N", "L", "M"]


def test_load_invalid_json(tmp_path: Path):
    (tmp_path / "template.json").write_text("{nope", encoding="utf-8")
    try:
        load_definition(tmp_path)
        assert False, "expected DefinitionLoadError"
    except DefinitionLoadError as e:
        assert e.code == "E_DEF_JSON_PARSE"


def test_load_bad_shapes(tmp_path: Path):
    p = tmp_path / "template.json"

    p.write_text("[]", encoding="utf-8")
    try:
        load_definition(tmp_path)
        assert False, "expected DefinitionLoadError"
    except DefinitionLoadError as e:
        assert e.code == "E_DEF_INVALID"

    p.write_text('{"vars": ["a"]}', encoding="utf-8")
    try:
        load_definition(tmp_path)
        assert False, "expected DefinitionLoadError"
    except DefinitionLoadError as e:
        assert e.code == "E_DEF_INVALID"
        assert e.path == "vars"


def test_load_partial_definition(tmp_path: Path):
    (tmp_path / "template.json").write_text('{"desc": "only desc"}', encoding="utf-8")
    d = load_definition(tmp_path)
    assert d.description == "only desc"
    assert d.author == ""
    assert d.vars == {}
