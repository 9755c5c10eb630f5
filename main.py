# ===== Part 1: Imports & Logging ============================================
import logging
import sys

from PySide6.QtWidgets import QApplication

from modules.checklist import create_window
from utils.app_settings import db_path, dev_mode, export_dir
from utils.kvstore import open_default_store

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.DEBUG if dev_mode() else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


# ===== Part 2: Application bootstrap ========================================
def main(argv: list[str] | None = None) -> int:
    _configure_logging()
    app = QApplication.instance() or QApplication(argv if argv is not None else sys.argv)

    store = open_default_store(db_path())
    logger.info("Using local store %s, exports go to %s", db_path(), export_dir())

    window = create_window(store, export_dir())
    window.resize(1100, 860)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
