"""
Сборщик документов из файлов шаблонов.

Шаблоны читаются по соглашению <root_folder>/<templates_folder>/<file>.
Каждый add() ставит в пул потоков одну независимую единицу работы
«прочитать и отрендерить»; update() дожидается завершения всех единиц и
выдаёт результаты в порядке добавления, а не в порядке завершения.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, TextIO

from .config.paths import DEFAULT_ROOT_FOLDER, DEFAULT_TEMPLATES_FOLDER, template_path
from .errors import MinitplUserError
from .template.diagnostics import RenderResult
from .template.processor import render_template

logger = logging.getLogger(__name__)


class TemplateNotFoundError(MinitplUserError):
    """Файл шаблона не удалось прочитать."""

    def __init__(self, path: Path, cause: Optional[Exception] = None):
        if cause is None or isinstance(cause, (FileNotFoundError, IsADirectoryError)):
            message = f"Template not found: {path}"
        else:
            message = f"Cannot read template {path}: {getattr(cause, 'strerror', None) or cause}"
        super().__init__(message)
        self.path = path
        self.cause = cause


def read_template(path: Path) -> str:
    """Читает исходный текст шаблона."""
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateNotFoundError(path, e) from e


class TemplateBuilder:
    """
    Сборщик нескольких шаблонов в один документ.

    Глобальные переменные всегда содержат root_folder и templates_folder,
    поэтому шаблоны могут ссылаться на них как на {{root_folder}}.
    """

    def __init__(
        self,
        root_folder: str = DEFAULT_ROOT_FOLDER,
        templates_folder: str = DEFAULT_TEMPLATES_FOLDER,
        global_variables: Optional[Mapping[str, Any]] = None,
        *,
        strict: bool = False,
        max_workers: Optional[int] = None,
    ):
        self.global_variables: Dict[str, Any] = dict(global_variables or {})
        self.global_variables["root_folder"] = root_folder or DEFAULT_ROOT_FOLDER
        self.global_variables["templates_folder"] = templates_folder or DEFAULT_TEMPLATES_FOLDER
        self.strict = strict

        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="minitpl")
        self._pending: List[Future] = []

    @property
    def root_folder(self) -> str:
        return self.global_variables["root_folder"]

    @property
    def templates_folder(self) -> str:
        return self.global_variables["templates_folder"]

    def template_path(self, file: str) -> Path:
        return template_path(self.root_folder, self.templates_folder, file)

    def add(self, file: str, variables: Optional[Mapping[str, Any]] = None) -> int:
        """
        Ставит шаблон в очередь на рендеринг.

        Args:
            file: Имя файла относительно каталога шаблонов
            variables: Локальные переменные шаблона

        Returns:
            Индекс слота результата (порядок добавления)
        """
        path = self.template_path(file)
        local_variables = dict(variables or {})
        # Снимок глобальных переменных на момент добавления
        global_variables = dict(self.global_variables)

        slot = len(self._pending)
        logger.debug("queued template #%d: %s", slot, path)
        self._pending.append(
            self._executor.submit(self._load_and_render, path, local_variables, global_variables)
        )
        return slot

    def results(self) -> List[RenderResult]:
        """
        Дожидается завершения всех добавленных шаблонов.

        Returns:
            Результаты в порядке добавления

        Raises:
            TemplateNotFoundError: Если хотя бы один шаблон не удалось прочитать
            TemplateParseError: При структурной ошибке в строгом режиме
        """
        wait(self._pending)
        return [future.result() for future in self._pending]

    def update(self, target: Optional[TextIO] = None) -> str:
        """
        Собирает документ из всех добавленных шаблонов и очищает очередь.

        Args:
            target: Поток, в который записывается собранный документ

        Returns:
            Склеенный в порядке добавления текст
        """
        try:
            document = "".join(result.text for result in self.results())
        finally:
            self._pending = []

        if target is not None:
            target.write(document)
        return document

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> TemplateBuilder:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _load_and_render(
        self,
        path: Path,
        local_variables: Dict[str, Any],
        global_variables: Dict[str, Any],
    ) -> RenderResult:
        source = read_template(path)
        result = render_template(source, local_variables, global_variables, strict=self.strict)
        if not result.clean:
            logger.info("%s: rendered with %d diagnostic(s)", path, len(result.diagnostics))
        return result


__all__ = ["TemplateBuilder", "TemplateNotFoundError", "read_template"]
