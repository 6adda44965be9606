from pathlib import Path

from templ.core.errors import VarsLoadError
from templ.core.io.load_vars import load_vars_file


def _write(tmp_path: Path, name: str, text: str) -> str:
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return str(p)


def _code(path: str) -> VarsLoadError:
    try:
        load_vars_file(path)
    except VarsLoadError as e:
        return e
    assert False, f"expected VarsLoadError for {path}"


def test_load_yaml_vars(tmp_path: Path):
    p = _write(tmp_path, "vars.yaml", "Name: Ada\nItems:\n  - a\n  - b\nCount: 3\n")
    assert load_vars_file(p) == {"Name": "Ada", "Items": ["a", "b"], "Count": 3}


def test_load_json_vars(tmp_path: Path):
    p = _write(tmp_path, "vars.json", '{"Name": "Ada", "Map": {"k": 1}}')
    assert load_vars_file(p) == {"Name": "Ada", "Map": {"k": 1}}


def test_load_empty_yaml_is_empty(tmp_path: Path):
    assert load_vars_file(_write(tmp_path, "vars.yml", "")) == {}


def test_load_vars_file_errors(tmp_path: Path):
    assert _code(str(tmp_path / "missing.yaml")).code == "E_VARS_NOT_FOUND"
    assert _code(_write(tmp_path, "vars.txt", "Name=Ada")).code == "E_VARS_FORMAT"
    assert _code(_write(tmp_path, "bad.json", "{")).code == "E_VARS_PARSE"
    assert _code(_write(tmp_path, "bad.yaml", "a: [1, 2")).code == "E_VARS_PARSE"
    assert _code(_write(tmp_path, "list.yaml", "- a\n- b\n")).code == "E_VARS_NOT_MAPPING"


def test_load_rejects_unusable_names(tmp_path: Path):
    e = _code(_write(tmp_path, "dash.yaml", "my-name: x\n"))
    assert e.code == "E_VARS_BAD_NAME"
    assert e.path == "my-name"

    e = _code(_write(tmp_path, "int.yaml", "1: x\n"))
    assert e.code == "E_VARS_BAD_NAME"

    e = _code(_write(tmp_path, "dest.json", '{"DEST_PATH": "/tmp"}'))
    assert e.code == "E_VARS_RESERVED"


def test_load_rejects_non_json_values(tmp_path: Path):
    e = _code(_write(tmp_path, "date.yaml", "Released: 2024-01-02\n"))
    assert e.code == "E_VARS_BAD_VALUE"
    assert e.path == "Released"

    e = _code(_write(tmp_path, "nested.yaml", "Cfg:\n  tags: !!set {a: null}\n"))
    assert e.code == "E_VARS_BAD_VALUE"
    assert e.path == "Cfg.tags"

    e = _code(_write(tmp_path, "listed.yaml", "L:\n  - ok\n  - 2024-01-02\n"))
    assert e.path == "L[1]"


def test_quoted_date_stays_text(tmp_path: Path):
    p = _write(tmp_path, "quoted.yaml", "Released: '2024-01-02'\n")
    assert load_vars_file(p) == {"Released": "2024-01-02"}
