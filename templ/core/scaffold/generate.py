"""Sample template written by ``templ generate``."""
from __future__ import annotations

from pathlib import Path

from templ.core.errors import ScaffoldError
from templ.core.io.definition import definition_path, save_definition
from templ.core.model import Template, TemplateDefinition


SAMPLE_DIR = "this_is_based_on"
SAMPLE_FILE = "file_{{ SampleStr }}_{{ SampleNum }}.txt"

SAMPLE_CONTENT = """\
SampleList:
{% for item in SampleList %}
{{- "" }}  - {{ item }}
{% endfor %}

Map:
{% for key, value in SampleMap.items() %}
{{- "" }}  {{ key }} : {{ value }}
{% endfor %}

Prompted:
  - _SampleStrPrompted : {{ _SampleStrPrompted }}
  - _SampleNumPrompted : {{ _SampleNumPrompted }}

Generated at {{ time("%Y-%m-%d") }} into {{ DEST_PATH }}
"""


def sample_definition() -> TemplateDefinition:
    return TemplateDefinition(
        description="description of this template.",
        author="author",
        vars={
            "_SampleStrPrompted": "",
            "_SampleNumPrompted": 0,
            "SampleStr": "value1",
            "SampleNum": 100,
            "SampleList": ["a", "b", 100],
            "SampleMap": {"key1": "a", "key2": 100},
        },
    )


def generate_template(root: str | Path) -> Template:
    root = Path(root)
    if definition_path(root).exists():
        raise ScaffoldError(
            code="E_TEMPLATE_EXISTS",
            message=f"template already exists: {root}",
            file=str(root),
        )

    template = Template(root=root, definition=sample_definition())
    save_definition(root, template.definition)

    sample_dir = root / SAMPLE_DIR
    sample_dir.mkdir(parents=True, exist_ok=True)
    (sample_dir / SAMPLE_FILE).write_text(SAMPLE_CONTENT, encoding="utf-8")
    return template
