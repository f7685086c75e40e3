from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .builder import TemplateBuilder, read_template
from .config import CONFIG_FILE, config_path, load_config, load_variables
from .errors import MinitplUserError
from .jsonic import dumps as jdumps
from .report import RenderReport, TemplateReport
from .template import format_ast_tree, parse_template
from .version import tool_version

_LOG = logging.getLogger("minitpl")


def _setup_logging() -> None:
    if getattr(_setup_logging, "_inited", False):
        return
    _setup_logging._inited = True  # type: ignore[attr-defined]
    level = logging.DEBUG if os.environ.get("MINITPL_DEBUG") else logging.WARNING
    _LOG.setLevel(level)
    if not _LOG.handlers:
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        _LOG.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="minitpl",
        description="Minimal template renderer ({{var}} and {{if cond}}...{{endif}})",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Общие аргументы для всех подкоманд
    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--config",
            metavar="FILE",
            help=f"файл конфигурации (по умолчанию ./{CONFIG_FILE}, если существует)",
        )
        sp.add_argument("--root", metavar="DIR", help="корневая папка (root_folder)")
        sp.add_argument("--templates", metavar="DIR", help="папка шаблонов относительно корня (templates_folder)")
        sp.add_argument(
            "--var",
            action="append",
            metavar="NAME=VALUE",
            help="локальная переменная (можно указать несколько)",
        )
        sp.add_argument(
            "--global",
            dest="global_vars",
            action="append",
            metavar="NAME=VALUE",
            help="глобальная переменная, перекрывает локальную с тем же именем",
        )
        sp.add_argument("--vars", metavar="FILE", help="YAML-файл с локальными переменными")
        sp.add_argument(
            "--strict",
            action="store_true",
            help="незакрытый if и лишний endif считаются фатальными ошибками",
        )

    sp_render = sub.add_parser("render", help="Отрендерить шаблоны и склеить результат (текст)")
    sp_render.add_argument("files", nargs="+", metavar="FILE", help="файлы шаблонов в папке шаблонов")
    add_common(sp_render)

    sp_report = sub.add_parser("report", help="JSON-отчёт: текст и диагностика по каждому шаблону")
    sp_report.add_argument("files", nargs="+", metavar="FILE", help="файлы шаблонов в папке шаблонов")
    sp_report.add_argument("--pretty", action="store_true", help="форматированный JSON")
    add_common(sp_report)

    sp_ast = sub.add_parser("ast", help="Показать AST шаблона")
    sp_ast.add_argument("file", metavar="FILE", help="файл шаблона в папке шаблонов")
    add_common(sp_ast)

    return p


def _parse_assignments(items: Optional[List[str]], option: str) -> Dict[str, str]:
    """Парсит список 'NAME=VALUE' в словарь."""
    result: Dict[str, str] = {}
    if not items:
        return result

    for item in items:
        if "=" not in item:
            raise ValueError(f"Invalid {option} format '{item}'. Expected 'NAME=VALUE'")
        name, value = item.split("=", 1)
        name = name.strip()
        if not name:
            raise ValueError(f"Invalid {option} format '{item}'. Empty variable name")
        result[name] = value

    return result


def _make_builder(ns: argparse.Namespace) -> TemplateBuilder:
    cfg_path = Path(ns.config) if ns.config else config_path(Path.cwd())
    if ns.config and not cfg_path.is_file():
        raise ValueError(f"Config file not found: {cfg_path}")
    cfg = load_config(cfg_path)

    global_variables: Dict[str, Any] = dict(cfg.globals)
    global_variables.update(_parse_assignments(ns.global_vars, "--global"))

    return TemplateBuilder(
        root_folder=ns.root or cfg.root_folder,
        templates_folder=ns.templates or cfg.templates_folder,
        global_variables=global_variables,
        strict=ns.strict,
    )


def _local_variables(ns: argparse.Namespace) -> Dict[str, Any]:
    variables: Dict[str, Any] = {}
    if ns.vars:
        variables.update(load_variables(Path(ns.vars)))
    variables.update(_parse_assignments(ns.var, "--var"))
    return variables


def main(argv: list[str] | None = None) -> int:
    _setup_logging()
    ns = _build_parser().parse_args(argv)

    try:
        local_variables = _local_variables(ns)

        with _make_builder(ns) as builder:
            if ns.cmd == "render":
                for file in ns.files:
                    builder.add(file, local_variables)
                builder.update(sys.stdout)
                return 0

            if ns.cmd == "report":
                for file in ns.files:
                    builder.add(file, local_variables)
                items = [
                    TemplateReport.from_result(file, result)
                    for file, result in zip(ns.files, builder.results())
                ]
                report = RenderReport.build(items)
                sys.stdout.write(jdumps(report.model_dump(mode="json"), pretty=ns.pretty))
                return 0

            if ns.cmd == "ast":
                source = read_template(builder.template_path(ns.file))
                tree = parse_template(source, strict=ns.strict)
                sys.stdout.write(format_ast_tree(tree) + "\n")
                return 0

    except MinitplUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
