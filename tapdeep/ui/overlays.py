"""Custom in-window overlays (award earned, awards list, reset confirm)."""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from PySide6.QtCore import QEvent, Qt, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from tapdeep.core.awards import Award
from tapdeep.ui.colors import HomeColors
from tapdeep.ui.models import AwardState


def _card_container(object_name: str, radius: int = 20) -> QFrame:
    container = QFrame()
    container.setObjectName(object_name)
    container.setMinimumWidth(360)
    container.setMaximumWidth(460)
    container.setStyleSheet(
        f"""
        QFrame#{object_name} {{
            background: #ffffff;
            border: 1px solid {HomeColors.CARD_BORDER};
            border-radius: {radius}px;
        }}
        """
    )
    shadow = QGraphicsDropShadowEffect(container)
    shadow.setBlurRadius(20)
    shadow.setOffset(0, 6)
    shadow.setColor(QColor(60, 35, 10, 40))
    container.setGraphicsEffect(shadow)
    return container


def _dim_background(parent: QWidget, on_click: Callable[[], None]) -> QWidget:
    bg = QWidget(parent)
    bg.setStyleSheet("background: rgba(0, 0, 0, 0.25);")
    bg.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
    bg.setMinimumSize(1, 1)
    bg.mousePressEvent = lambda e: on_click()
    return bg


def _button(text: str, primary: bool) -> QPushButton:
    btn = QPushButton(text)
    if primary:
        style = f"""
            QPushButton {{
                background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
                    stop:0 {HomeColors.PRIMARY_LIGHT}, stop:1 {HomeColors.PRIMARY});
                color: white; padding: 10px 16px; border: none;
                border-radius: 12px; font-weight: 600; font-size: 13px;
            }}
            QPushButton:hover {{ background: {HomeColors.PRIMARY}; }}
        """
    else:
        style = f"""
            QPushButton {{
                background: #fafafa; color: {HomeColors.TEXT_PRIMARY};
                padding: 10px 16px; border: 1px solid #e0e0e0;
                border-radius: 12px; font-weight: 600; font-size: 13px;
            }}
            QPushButton:hover {{ border-color: {HomeColors.PRIMARY}; color: {HomeColors.PRIMARY}; }}
        """
    btn.setStyleSheet(style)
    btn.setCursor(Qt.CursorShape.PointingHandCursor)
    btn.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
    return btn


def _header(icon_text: str, title_text: str) -> tuple[QHBoxLayout, QLabel, QLabel]:
    header = QHBoxLayout()
    header.setSpacing(12)
    icon_box = QFrame()
    icon_box.setFixedSize(44, 44)
    icon_box.setStyleSheet(
        f"QFrame {{ background: {HomeColors.BG_TOP}; border-radius: 12px; }}"
    )
    icon_layout = QVBoxLayout(icon_box)
    icon_layout.setContentsMargins(0, 0, 0, 0)
    icon = QLabel(icon_text)
    icon.setStyleSheet(f"color: {HomeColors.PRIMARY}; font-size: 22px; font-weight: 900;")
    icon.setAlignment(Qt.AlignCenter)
    icon_layout.addWidget(icon)
    header.addWidget(icon_box, 0)

    title = QLabel(title_text)
    title.setStyleSheet(f"color: {HomeColors.PRIMARY}; font-size: 18px; font-weight: 800;")
    header.addWidget(title, 0)
    header.addStretch(1)
    return header, icon, title


class _InWindowOverlay(QWidget):
    """Full-parent overlay that dims the window and centres a card."""

    def __init__(self, object_name: str, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        grid = QGridLayout(self)
        grid.setContentsMargins(0, 0, 0, 0)
        grid.setSpacing(0)
        grid.setRowStretch(0, 1)
        grid.setColumnStretch(0, 1)
        grid.addWidget(_dim_background(self, self._dismiss), 0, 0)

        self._card = _card_container(object_name)
        self._content = QVBoxLayout(self._card)
        self._content.setContentsMargins(28, 24, 28, 24)
        self._content.setSpacing(18)
        grid.addWidget(self._card, 0, 0, 1, 1, Qt.AlignCenter)
        self.hide()

    def open(self) -> None:
        self._update_geometry()
        self.raise_()
        self.show()

    def _dismiss(self) -> None:
        self.hide()

    def _update_geometry(self) -> None:
        parent = self.parentWidget()
        if parent is not None:
            self.setGeometry(parent.rect())

    def eventFilter(self, obj: QWidget, event: QEvent) -> bool:
        if obj is self.parentWidget() and event.type() == QEvent.Type.Resize:
            self._update_geometry()
        return super().eventFilter(obj, event)

    def showEvent(self, event) -> None:
        super().showEvent(event)
        self._update_geometry()
        parent = self.parentWidget()
        if parent is not None:
            parent.installEventFilter(self)

    def hideEvent(self, event) -> None:
        parent = self.parentWidget()
        if parent is not None:
            parent.removeEventFilter(self)
        super().hideEvent(event)


class AwardEarnedOverlay(_InWindowOverlay):
    """Celebration card shown when a tap lands on an award threshold."""

    closed = Signal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__("awardEarnedContainer", parent)
        header, self._icon, _ = _header("★", "Award unlocked")
        self._content.addLayout(header)

        self._name = QLabel("")
        self._name.setStyleSheet(f"color: {HomeColors.TEXT_PRIMARY}; font-size: 20px; font-weight: 800;")
        self._name.setAlignment(Qt.AlignCenter)
        self._content.addWidget(self._name)

        self._message = QLabel("")
        self._message.setStyleSheet(f"color: {HomeColors.TEXT_SECONDARY}; font-size: 14px;")
        self._message.setWordWrap(True)
        self._message.setAlignment(Qt.AlignCenter)
        self._content.addWidget(self._message)

        ok_btn = _button("Keep digging", primary=True)
        ok_btn.clicked.connect(self._dismiss)
        self._content.addWidget(ok_btn)

    def show_award(self, award: Award) -> None:
        self._icon.setText(award.symbol or "★")
        self._name.setText(award.name)
        self._message.setText(f"You reached a depth of {award.threshold}.")
        self.open()

    def _dismiss(self) -> None:
        self.hide()
        self.closed.emit()


class AwardsListOverlay(_InWindowOverlay):
    """Read-only list of every award with its earned state."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__("awardsListContainer", parent)
        header, _, self._title = _header("🏆", "Awards")
        self._content.addLayout(header)

        rows_host = QWidget()
        self._rows = QVBoxLayout(rows_host)
        self._rows.setContentsMargins(0, 0, 0, 0)
        self._rows.setSpacing(8)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.NoFrame)
        scroll.setMinimumHeight(280)
        scroll.setWidget(rows_host)
        self._content.addWidget(scroll, 1)

        close_btn = _button("Close", primary=False)
        close_btn.clicked.connect(self._dismiss)
        self._content.addWidget(close_btn)

    def set_states(self, states: Sequence[AwardState]) -> None:
        while self._rows.count():
            item = self._rows.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()
        earned = sum(1 for s in states if s.earned)
        self._title.setText(f"Awards  {earned}/{len(states)}")
        for state in states:
            self._rows.addWidget(self._build_row(state))
        self._rows.addStretch(1)

    def _build_row(self, state: AwardState) -> QWidget:
        row = QFrame()
        if state.earned:
            border = HomeColors.PRIMARY
        elif state.is_next:
            border = HomeColors.EMBER
        else:
            border = "#e0e0e0"
        row.setStyleSheet(f"QFrame {{ border: 1px solid {border}; border-radius: 10px; }}")
        layout = QHBoxLayout(row)
        layout.setContentsMargins(12, 8, 12, 8)

        symbol = QLabel(state.award.symbol if state.earned else "🔒")
        symbol.setStyleSheet("border: none; font-size: 20px;")
        layout.addWidget(symbol, 0)

        name = QLabel(state.award.name)
        color = HomeColors.TEXT_PRIMARY if state.earned else HomeColors.TEXT_MUTED
        name.setStyleSheet(f"border: none; color: {color}; font-size: 14px; font-weight: 600;")
        layout.addWidget(name, 1)

        depth = QLabel(str(state.award.threshold))
        depth.setStyleSheet(f"border: none; color: {HomeColors.TEXT_SECONDARY}; font-size: 13px;")
        layout.addWidget(depth, 0, Qt.AlignRight)
        return row


class ResetConfirmOverlay(_InWindowOverlay):
    """In-window overlay to confirm resetting depth."""

    closed = Signal(bool)  # True if user confirmed reset

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__("resetContainer", parent)
        header, _, _ = _header("↻", "Reset depth")
        self._content.addLayout(header)

        msg = QLabel("Start over from the surface? Earned awards will be locked again.")
        msg.setStyleSheet(f"color: {HomeColors.TEXT_PRIMARY}; font-size: 14px; font-weight: 500;")
        msg.setWordWrap(True)
        self._content.addWidget(msg)

        row = QHBoxLayout()
        row.setSpacing(10)
        cancel_btn = _button("Cancel", primary=False)
        cancel_btn.clicked.connect(self._dismiss)
        row.addWidget(cancel_btn, 1)
        confirm_btn = _button("Reset", primary=True)
        confirm_btn.clicked.connect(lambda: (self.hide(), self.closed.emit(True)))
        row.addWidget(confirm_btn, 1)
        self._content.addLayout(row)

    def _dismiss(self) -> None:
        self.hide()
        self.closed.emit(False)
