"""Application bootstrap helpers for the Code Alchemy desktop app."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import logging.handlers
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, cast

from . import APP_NAME, __version__
from .services.clipboard import QtClipboardProvider, QtSelectionCopyProvider
from .services.settings import Settings, SettingsStore, ThemePreference
from .ui.domain import WorkspaceCoordinator, default_registry
from .ui.events import EventBus
from .ui.scheduling import AsyncioScheduler, Scheduler

_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}
_LOGGER = logging.getLogger(__name__)

_DEFAULT_LOG_DIR = Path.home() / ".codealchemy" / "logs"
_LOG_FILE_NAME = "codealchemy.log"
_LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)-7s %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%H:%M:%S"
_QUIET_LOGGERS = ("asyncio", "qasync")
_log_path: Path | None = None


@dataclass(slots=True)
class QtRuntime:
    """Container returned by :func:`create_qapp`."""

    app: Any
    loop: asyncio.AbstractEventLoop


def configure_logging(
    debug: bool = False,
    *,
    log_dir: Path | str | None = None,
    force: bool = False,
) -> Path | None:
    """Send workspace logs to a rotating file and warnings to stderr.

    The console only shows warnings unless ``debug`` is set; the file always
    records at the configured level. Returns the log file, or ``None`` when
    the log directory cannot be created.
    """

    global _log_path
    if _log_path is not None and not force:
        return _log_path

    level = logging.DEBUG if debug else logging.INFO
    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)

    console = logging.StreamHandler()
    console.setLevel(logging.DEBUG if debug else logging.WARNING)
    console.setFormatter(formatter)
    handlers: list[logging.Handler] = [console]

    target_dir = Path(log_dir or os.environ.get("CODEALCHEMY_LOG_DIR") or _DEFAULT_LOG_DIR).expanduser()
    log_path: Path | None = target_dir / _LOG_FILE_NAME
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
        )
    except OSError as exc:
        log_path = None
        file_error: OSError | None = exc
    else:
        file_error = None
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    if file_error is not None:
        _LOGGER.warning("Logging to console only; cannot use %s: %s", target_dir, file_error)

    _log_path = log_path
    _LOGGER.debug("Logging configured (level=%s, file=%s)", logging.getLevelName(level), log_path)
    _install_qt_message_handler()
    return log_path


def load_settings(path: Optional[Path] = None, *, store: SettingsStore | None = None) -> Settings:
    """Load persisted settings or fall back to defaults."""

    active_store = store or SettingsStore(path)
    try:
        settings = active_store.load()
    except OSError as exc:
        _LOGGER.warning("Failed to load settings from %s: %s", active_store.path, exc)
        settings = Settings()
    return settings


def create_qapp() -> QtRuntime:
    """Create a qasync-powered QApplication instance."""

    from PySide6.QtWidgets import QApplication
    from qasync import QEventLoop

    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")
    app = cast(Any, QApplication.instance() or QApplication(sys.argv))
    app.setApplicationName(APP_NAME)
    app.setApplicationDisplayName(APP_NAME)
    app.setApplicationVersion(__version__)

    loop = QEventLoop(app)
    asyncio.set_event_loop(loop)
    app.aboutToQuit.connect(loop.stop)
    return QtRuntime(app=app, loop=loop)


def build_coordinator(
    settings: Settings,
    *,
    scheduler: Scheduler,
    event_bus: EventBus,
    store: SettingsStore | None = None,
) -> WorkspaceCoordinator:
    """Wire the workspace coordinator with the default tools and Qt clipboard."""

    return WorkspaceCoordinator(
        default_registry(),
        event_bus,
        scheduler=scheduler,
        settings=settings,
        theme_preference=ThemePreference(store, settings),
        clipboard_provider=QtClipboardProvider(),
        clipboard_fallback=QtSelectionCopyProvider(),
    )


def main() -> None:
    """Entry point invoked by the `codealchemy` console script."""

    debug = _env_flag("CODEALCHEMY_DEBUG", default=False)
    configure_logging(debug)

    settings_path = os.environ.get("CODEALCHEMY_SETTINGS_PATH")
    store = SettingsStore(Path(settings_path).expanduser() if settings_path else None)
    settings = load_settings(store=store)
    if settings.debug_logging and not debug:
        configure_logging(True, force=True)

    runtime = create_qapp()
    loop = runtime.loop
    event_bus: EventBus = EventBus()
    coordinator = build_coordinator(
        settings,
        scheduler=AsyncioScheduler(loop),
        event_bus=event_bus,
        store=store,
    )

    from .ui.presentation import MainWindow

    window = MainWindow(coordinator, event_bus)
    window.show()
    _LOGGER.info("%s %s started (theme=%s)", APP_NAME, __version__, coordinator.theme)

    try:
        loop.run_forever()
    except KeyboardInterrupt:  # pragma: no cover - manual shutdown path
        _LOGGER.info("Shutdown requested by user.")
    finally:
        coordinator.shutdown()
        _drain_event_loop(loop)
        loop.close()


def _env_flag(name: str, *, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _drain_event_loop(loop: asyncio.AbstractEventLoop) -> None:
    """Cancel outstanding copy tasks before the loop closes."""

    if loop.is_closed():
        return

    async def _cleanup() -> None:
        current_task = None
        with contextlib.suppress(RuntimeError):
            current_task = asyncio.current_task(loop=loop)

        tasks = [
            task
            for task in asyncio.all_tasks(loop)
            if not task.done() and task is not current_task
        ]
        if tasks:
            _LOGGER.debug("Canceling %s pending asyncio task(s) before shutdown.", len(tasks))
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
        with contextlib.suppress(RuntimeError, NotImplementedError):
            await loop.shutdown_asyncgens()

    try:
        loop.run_until_complete(_cleanup())
    except RuntimeError as exc:  # pragma: no cover - loop already stopped elsewhere
        _LOGGER.debug("Unable to drain asyncio loop: %s", exc)


def _install_qt_message_handler() -> None:
    """Redirect Qt warnings to the Python logging stack."""

    from PySide6.QtCore import QtMsgType, qInstallMessageHandler

    level_map = {
        QtMsgType.QtDebugMsg: logging.DEBUG,
        QtMsgType.QtInfoMsg: logging.INFO,
        QtMsgType.QtWarningMsg: logging.WARNING,
        QtMsgType.QtCriticalMsg: logging.ERROR,
        QtMsgType.QtFatalMsg: logging.CRITICAL,
    }

    def _handler(mode, context, message):  # type: ignore[no-untyped-def]
        del context
        level = level_map.get(mode, logging.INFO)
        logging.getLogger("PySide6").log(level, message)

    qInstallMessageHandler(_handler)
