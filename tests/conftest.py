from pathlib import Path

import pytest

from tests.infrastructure.file_utils import write, write_yaml


@pytest.fixture
def tmpsite(tmp_path: Path):
    """Минимальный сайт: templates/ с тремя шаблонами и minitpl.yaml в корне."""
    root = tmp_path
    write(root / "templates" / "header.html", "<h1>{{title}}</h1>\n")
    write(
        root / "templates" / "body.html",
        "{{if user}}<p>Hello, {{user}}!</p>\n{{endif}}<p>{{site}}</p>\n",
    )
    write(root / "templates" / "footer.html", "<footer>{{root_folder}}/{{templates_folder}}</footer>\n")
    write_yaml(root / "minitpl.yaml", """
    globals:
      site: Example
    """)
    return root
