"""
Main Application Window
=======================
The primary GUI container that holds the menu bar and the two mode tabs.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects global actions (cheat sheet, exit) to the tabs and
   makes sure both plotters are closed on exit.
"""
import logging
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QTabBar, QStackedWidget
from PySide6.QtGui import QAction, QCloseEvent

from quadricexplorer.config import VISIBLE_APP_NAME
from quadricexplorer.controller.persistence import StreakStore
from quadricexplorer.view.dialogs.cheat_sheet_dialog import CheatSheetDialog
from quadricexplorer.view.tabs.tab_quiz import QuizTab
from quadricexplorer.view.tabs.tab_visualizer import VisualizerTab

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, streak_store: Optional[StreakStore] = None) -> None:
        super().__init__()
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 900)

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)

        # Vertical Layout: Tabs on Top, Stack Below
        main_layout = QVBoxLayout(main_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        # --- 1. TOP TAB BAR ---
        self.tab_bar = QTabBar()
        self.tab_bar.setDrawBase(True)
        self.tab_bar.setShape(QTabBar.RoundedNorth)
        self.tab_bar.setExpanding(True)

        self.tab_bar.addTab("Visualizer")
        self.tab_bar.addTab("Quiz")

        self.tab_bar.setStyleSheet("""
                    QTabBar::tab { height: 35px; min-width: 100px; }
                    QTabBar::tab:selected { font-weight: bold; }
                """)

        main_layout.addWidget(self.tab_bar)

        # --- 2. MODES (Stacked), each with its own 3D view ---
        self.stack = QStackedWidget()
        self.visualizer_tab = VisualizerTab()
        self.quiz_tab = QuizTab(streak_store)

        # Order must match Tab Bar order
        self.stack.addWidget(self.visualizer_tab)  # Index 0
        self.stack.addWidget(self.quiz_tab)  # Index 1
        main_layout.addWidget(self.stack)

        self.tab_bar.currentChanged.connect(self.stack.setCurrentIndex)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        # Initial content
        self.visualizer_tab.draw_initial()
        self.quiz_tab.start()

    def _create_actions(self) -> None:
        self.act_cheat_sheet = QAction("Cheat Sheet", self)
        self.act_cheat_sheet.setShortcut("F1")
        self.act_cheat_sheet.triggered.connect(self.on_cheat_sheet)

        self.act_exit = QAction("Exit", self)
        self.act_exit.setShortcut("Ctrl+Q")
        self.act_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_exit)

        help_menu = menu_bar.addMenu("&Help")
        help_menu.addAction(self.act_cheat_sheet)

    def on_cheat_sheet(self) -> None:
        CheatSheetDialog(self).exec()

    def closeEvent(self, event: QCloseEvent, /) -> None:
        # Close the PyVista plotters safely
        logger.info("Closing main window.")
        self.visualizer_tab.close_plot()
        self.quiz_tab.close_plot()
        event.accept()
