import sys
from PySide6.QtWidgets import QApplication
from BackEnd.core import paths
from BackEnd.core.logging_config import setup_logging
from FrontEnd.ui_main import MainWindow

def main():
    setup_logging(log_file=paths.log_path())
    app = QApplication(sys.argv)
    # Keep running in the tray when the window is closed
    app.setQuitOnLastWindowClosed(False)
    win = MainWindow()
    if win.tray is None:
        app.setQuitOnLastWindowClosed(True)
    win.show()
    sys.exit(app.exec())

if __name__ == "__main__":
    main()
