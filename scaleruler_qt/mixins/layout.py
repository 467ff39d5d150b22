from PySide6.QtCore import Qt
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QPushButton, QStackedWidget, QVBoxLayout, QWidget

from scaleruler.constants import APP_NAME
from scaleruler_qt.constants import (
    ROOT_LAYOUT_MARGINS,
    ROOT_LAYOUT_SPACING,
    TOP_BAR_MARGINS,
    TOP_BAR_SPACING,
    TOP_BAR_TITLE_SPACING,
    ZOOM_BUTTON_WIDTH,
)
from scaleruler_qt.image_view import ImageView


class LayoutMixin:
    def _build_ui(self):
        self.setWindowTitle(APP_NAME)
        container = QWidget()
        root_layout = QVBoxLayout(container)
        root_layout.setContentsMargins(*ROOT_LAYOUT_MARGINS)
        root_layout.setSpacing(ROOT_LAYOUT_SPACING)

        top_bar = QFrame()
        top_bar.setObjectName("topBar")
        top_layout = QHBoxLayout(top_bar)
        top_layout.setContentsMargins(*TOP_BAR_MARGINS)
        top_layout.setSpacing(TOP_BAR_SPACING)

        title_lbl = QLabel(APP_NAME)
        title_lbl.setObjectName("appTitle")
        self.status_lbl = QLabel("Open an image to start")
        self.status_lbl.setObjectName("statusLabel")
        self._cal_status = QLabel("Not calibrated")
        self._cal_status.setObjectName("calStatus")
        self._total_label = QLabel("Total: 0′ 0″")
        self._total_label.setObjectName("totalLabel")

        open_btn = QPushButton("Open Image")
        open_btn.setObjectName("primaryButton")
        fit_btn = QPushButton("Fit")
        zoom_in_btn = QPushButton("+")
        zoom_in_btn.setFixedWidth(ZOOM_BUTTON_WIDTH)
        zoom_out_btn = QPushButton("-")
        zoom_out_btn.setFixedWidth(ZOOM_BUTTON_WIDTH)

        top_layout.addWidget(title_lbl)
        top_layout.addSpacing(TOP_BAR_TITLE_SPACING)
        top_layout.addWidget(open_btn)
        top_layout.addWidget(fit_btn)
        top_layout.addWidget(zoom_in_btn)
        top_layout.addWidget(zoom_out_btn)
        top_layout.addSpacing(TOP_BAR_TITLE_SPACING)
        top_layout.addWidget(self.status_lbl, 1)
        top_layout.addWidget(self._cal_status)
        top_layout.addSpacing(TOP_BAR_TITLE_SPACING)
        top_layout.addWidget(self._total_label)
        root_layout.addWidget(top_bar)

        self._canvas_stack = QStackedWidget()
        self._placeholder = QLabel("Open an image to view it here.")
        self._placeholder.setObjectName("placeholderLabel")
        self._placeholder.setAlignment(Qt.AlignCenter)
        self.image_view = ImageView()
        self._canvas_stack.addWidget(self._placeholder)
        self._canvas_stack.addWidget(self.image_view)
        root_layout.addWidget(self._canvas_stack, 1)
        self.setCentralWidget(container)

        open_btn.clicked.connect(self._open_image_dialog)
        fit_btn.clicked.connect(self._on_fit)
        zoom_in_btn.clicked.connect(self._on_zoom_in)
        zoom_out_btn.clicked.connect(self._on_zoom_out)

        self.image_view.pointClicked.connect(self._on_image_point_clicked)
        self.image_view.secondaryClicked.connect(self._on_image_secondary_clicked)
        self.image_view.labelSecondaryClicked.connect(self._on_measurement_delete_requested)
        self.image_view.pointerMoved.connect(self._on_image_pointer_moved)
        self.image_view.pointerLeft.connect(self._on_image_pointer_left)
        self.image_view.zoomRequested.connect(self._on_zoom_requested)

    def _show_canvas(self):
        self._canvas_stack.setCurrentWidget(self.image_view)


__all__ = ["LayoutMixin"]
