from __future__ import annotations

import logging

_DEFAULT_LOGGER = logging.getLogger("tablegrid")


class RenderLog:
    def __init__(self, logger: logging.Logger | None = None, warnings: list[str] | None = None) -> None:
        self.logger = logger or _DEFAULT_LOGGER
        self.warnings: list[str] = warnings if warnings is not None else []

    def warn(self, message: str, *args: object) -> None:
        text = message % args if args else message
        self.logger.warning(text)
        self.warnings.append(text)

    def debug(self, message: str, *args: object) -> None:
        self.logger.debug(message, *args)
