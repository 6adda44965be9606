from pathlib import Path

from templ.core.apply.apply_template import apply_template
from templ.core.catalog import list_templates
from templ.core.errors import ScaffoldError
from templ.core.io.definition import load_definition
from templ.core.scaffold.generate import generate_template
from templ.core.validate.validate_template import validate_template


def test_generate_sample_template(tmp_path: Path):
    root = tmp_path / "home" / "demo"
    template = generate_template(root)

    assert template.name == "demo"
    assert (root / "template.json").exists()
    assert (root / "this_is_based_on" / "file_{{ SampleStr }}_{{ SampleNum }}.txt").exists()

    definition = load_definition(root)
    assert definition.author == "author"
    assert "_SampleStrPrompted" in definition.vars


def test_sample_template_checks_clean_and_applies(tmp_path: Path):
    root = tmp_path / "home" / "demo"
    generate_template(root)
    vars = load_definition(root).vars

    assert validate_template(root, dict(vars)) == []

    dest = tmp_path / "out"
    dest.mkdir()
    apply_template(root, dest, dict(vars))

    out = (dest / "this_is_based_on" / "file_value1_100.txt").read_text(encoding="utf-8")
    assert "SampleList:\n  - a\n  - b\n  - 100\n" in out
    assert "  key1 : a\n  key2 : 100\n" in out
    assert f"into {dest}" in out
    assert not (dest / "template.json").exists()


def test_generate_refuses_existing_template(tmp_path: Path):
    root = tmp_path / "demo"
    generate_template(root)
    try:
        generate_template(root)
        assert False, "expected ScaffoldError"
    except ScaffoldError as e:
        assert e.code == "E_TEMPLATE_EXISTS"


def test_list_templates(tmp_path: Path):
    home = tmp_path / "home"
    generate_template(home / "beta")
    generate_template(home / "alpha")
    (home / "broken").mkdir()
    (home / "broken" / "template.json").write_text("{", encoding="utf-8")
    (home / "stray.txt").write_text("not a template", encoding="utf-8")

    summaries = list_templates(home)

    assert [s.name for s in summaries] == ["alpha", "beta", "broken"]
    assert summaries[0].error is None
    assert summaries[0].template.definition.description == "description of this template."
    assert summaries[2].error is not None
    assert summaries[2].error.code == "E_DEF_JSON_PARSE"


def test_list_templates_missing_home(tmp_path: Path):
    assert list_templates(tmp_path / "nope") == []
