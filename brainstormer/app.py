import sys, threading, traceback, os
import asyncio
import logging
import qasync
from PyQt6.QtWidgets import QApplication
from PyQt6.QtCore import QtMsgType, qInstallMessageHandler
from .config import BrainstormerConfig
from .ui.brainstormer_widget import BrainstormerWidget
from .qss import QSS
from . import __app_name__, __version__
from .logging_utils import get_log_mode, setup_logging

_DIAG_INSTALLED = False
_TRUTHY = ("1", "true", "True", "yes")


def _install_diagnostics():
    global _DIAG_INSTALLED
    if _DIAG_INSTALLED:
        return
    if os.environ.get("BRAINSTORMER_NO_DIAG", "0") in _TRUTHY:
        return
    _DIAG_INSTALLED = True
    log = logging.getLogger("diag")

    def _excepthook(t, v, tb):
        log.error("UNCAUGHT %s: %s", t.__name__, v)
        for line in traceback.format_tb(tb):
            log.error(line.rstrip())
    sys.excepthook = _excepthook

    def _thread_excepthook(args):
        log.error("THREAD EXC in %s: %s", getattr(args, "thread", None), args.exc_value)
        for line in traceback.format_tb(args.exc_traceback):
            log.error(line.rstrip())
    threading.excepthook = _thread_excepthook

    def _qt_msg_handler(mode, ctx, msg):  # type: ignore[unused-argument]
        if mode in (QtMsgType.QtCriticalMsg, QtMsgType.QtFatalMsg):
            log.error("QT: %s", msg)
        elif mode == QtMsgType.QtWarningMsg:
            log.warning("QT: %s", msg)
        else:
            log.debug("QT: %s", msg)
    qInstallMessageHandler(_qt_msg_handler)
    log.info("DIAG Qt message handler installed")


def run(config: BrainstormerConfig | None = None) -> int:
    # Ensure logging is configured when launching GUI directly
    log_mode_env = os.environ.get("BRAINSTORMER_LOG_MODE")
    debug_mode = os.environ.get("BRAINSTORMER_DEBUG", "0") in _TRUTHY
    log_level = "DEBUG" if debug_mode else "WARNING"
    if not logging.getLogger().handlers:
        setup_logging(level=log_level, add_console=True, log_mode=log_mode_env)
    _install_diagnostics()
    logging.getLogger("diag").info("DIAG log mode %s", get_log_mode().value)

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName(__app_name__)
    app.setApplicationVersion(__version__)

    # qasync event loop so the loaders can be awaited from Qt
    loop = qasync.QEventLoop(app)
    asyncio.set_event_loop(loop)

    app.setStyleSheet(QSS)
    win = BrainstormerWidget(config or BrainstormerConfig.resolve())
    win.setWindowTitle(f"{__app_name__} {__version__}")
    win.resize(760, 520)
    app.aboutToQuit.connect(lambda: logging.getLogger("diag").info("DIAG aboutToQuit"))
    win.show()

    startup = loop.create_task(win.start())

    with loop:
        loop.run_forever()
    ok = startup.done() and not startup.cancelled() and startup.result()
    return 0 if ok else 2


if __name__ == "__main__":
    raise SystemExit(run())
