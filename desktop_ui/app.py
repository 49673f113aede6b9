import sys
import os
import logging
from pathlib import Path
from typing import Optional
from PySide6.QtGui import QGuiApplication
from PySide6.QtQml import QQmlApplicationEngine
from config import ConfigurationError, DesktopConfiguration
from desktop_ui.coordinator import BoardCoordinator

logger = logging.getLogger(__name__)


def main(env_file: Optional[Path] = None) -> int:
    # Set Qt Quick Controls style to Basic to allow background customization
    os.environ["QT_QUICK_CONTROLS_STYLE"] = "Basic"

    try:
        config = DesktopConfiguration(env_file)
        logging.basicConfig(
            level=config.log_level,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        )
        config.validate()
    except ConfigurationError as e:
        print(f"Invalid configuration: {e}")
        return 1

    app = QGuiApplication(sys.argv)
    engine = QQmlApplicationEngine()

    coordinator = BoardCoordinator(config)

    engine.rootContext().setContextProperty("cardModel", coordinator.card_model)
    engine.rootContext().setContextProperty("coordinator", coordinator)

    qml_file = Path(__file__).parent / "qml" / "MainWindow.qml"
    engine.load(qml_file)

    if not engine.rootObjects():
        logger.error("Failed to load QML")
        coordinator.cleanup()
        return 1

    try:
        return app.exec()
    finally:
        coordinator.cleanup()
