"""Main window: depth counter, progress bar, tap control and particle burst."""

from __future__ import annotations

import logging
import time
from typing import Optional

from PySide6.QtCore import QPointF, QRectF, Qt, QTimer, Signal
from PySide6.QtGui import QCloseEvent, QColor, QKeySequence, QPainter, QPen, QShortcut
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from tapdeep.core.particles import ParticleSimulator
from tapdeep.core.session import TapSession
from tapdeep.core.store import CounterStore
from tapdeep.ui.colors import HomeColors, blend_hex
from tapdeep.ui.models import build_award_states
from tapdeep.ui.overlays import AwardEarnedOverlay, AwardsListOverlay, ResetConfirmOverlay
from tapdeep.ui.particle_canvas import ParticleCanvas

logger = logging.getLogger(__name__)

FRAME_INTERVAL_MS = 16
SPIN_DURATION = 0.35
DEFAULT_SYMBOL = "⛏️"
BURST_REFERENCE_SIZE = 220.0


class TapButton(QWidget):
    """Round tap target that paints a symbol and can spin it."""

    tapped = Signal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._symbol = DEFAULT_SYMBOL
        self._angle = 0.0
        self.setMinimumSize(180, 180)
        self.setCursor(Qt.PointingHandCursor)

    def set_symbol(self, symbol: str) -> None:
        self._symbol = symbol or DEFAULT_SYMBOL
        self.update()

    def set_angle(self, degrees: float) -> None:
        self._angle = degrees
        self.update()

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.LeftButton:
            self.tapped.emit()
        super().mousePressEvent(event)

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        side = min(self.width(), self.height()) - 8
        rect = QRectF((self.width() - side) / 2, (self.height() - side) / 2, side, side)
        painter.setBrush(QColor(blend_hex(HomeColors.PRIMARY_LIGHT, HomeColors.BG_MIDDLE, 0.35)))
        painter.setPen(QPen(QColor(HomeColors.PRIMARY), 4))
        painter.drawEllipse(rect)

        painter.translate(QPointF(self.width() / 2, self.height() / 2))
        painter.rotate(self._angle)
        font = painter.font()
        font.setPixelSize(max(24, int(side * 0.42)))
        painter.setFont(font)
        painter.setPen(QColor(HomeColors.TEXT_PRIMARY))
        painter.drawText(QRectF(-side / 2, -side / 2, side, side), Qt.AlignCenter, self._symbol)
        painter.end()


class MainWindow(QMainWindow):
    def __init__(
        self,
        session: TapSession,
        simulator: ParticleSimulator,
        store: Optional[CounterStore] = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._simulator = simulator
        self._store = store
        self._spin_started: Optional[float] = None

        self.setWindowTitle("TapDeep")
        self._build_ui()

        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(FRAME_INTERVAL_MS)
        self._frame_timer.timeout.connect(self._on_frame)

        tap_shortcut = QShortcut(QKeySequence(Qt.Key_Space), self)
        tap_shortcut.activated.connect(self._on_tap)
        self._refresh()

    def _build_ui(self) -> None:
        root = QWidget()
        root.setObjectName("root")
        root.setStyleSheet(
            f"""
            QWidget#root {{
                background: qlineargradient(x1:0, y1:0, x2:0, y2:1,
                    stop:0 {HomeColors.BG_TOP}, stop:0.5 {HomeColors.BG_MIDDLE},
                    stop:1 {HomeColors.BG_BOTTOM});
            }}
            """
        )
        layout = QVBoxLayout(root)
        layout.setContentsMargins(24, 16, 24, 24)
        layout.setSpacing(14)

        top = QHBoxLayout()
        self._awards_btn = QPushButton("🏆 Awards")
        self._awards_btn.setFocusPolicy(Qt.NoFocus)
        self._awards_btn.clicked.connect(self._show_awards)
        top.addWidget(self._awards_btn, 0)
        top.addStretch(1)
        self._badge = QLabel("")
        self._badge.setStyleSheet(f"color: {HomeColors.TEXT_SECONDARY}; font-weight: 700;")
        top.addWidget(self._badge, 0)
        self._reset_btn = QPushButton("↻ Reset")
        self._reset_btn.setFocusPolicy(Qt.NoFocus)
        self._reset_btn.clicked.connect(self._confirm_reset)
        top.addWidget(self._reset_btn, 0)
        layout.addLayout(top)

        self._depth_label = QLabel("0")
        self._depth_label.setAlignment(Qt.AlignCenter)
        self._depth_label.setStyleSheet(
            f"color: {HomeColors.PRIMARY_DARK}; font-size: 56px; font-weight: 900;"
        )
        layout.addWidget(self._depth_label)

        self._progress_bar = QProgressBar()
        self._progress_bar.setRange(0, 1000)
        self._progress_bar.setTextVisible(False)
        self._progress_bar.setFixedHeight(12)
        self._progress_bar.setStyleSheet(
            f"""
            QProgressBar {{ background: {HomeColors.PROGRESS_TRACK}; border: none; border-radius: 6px; }}
            QProgressBar::chunk {{ background: {HomeColors.PROGRESS_FILL}; border-radius: 6px; }}
            """
        )
        layout.addWidget(self._progress_bar)

        self._caption = QLabel("")
        self._caption.setAlignment(Qt.AlignCenter)
        self._caption.setStyleSheet(f"color: {HomeColors.TEXT_MUTED}; font-size: 13px;")
        layout.addWidget(self._caption)

        stage = QWidget()
        stage_layout = QVBoxLayout(stage)
        stage_layout.setContentsMargins(0, 0, 0, 0)
        self._tap_button = TapButton()
        self._tap_button.tapped.connect(self._on_tap)
        stage_layout.addWidget(self._tap_button, 1, Qt.AlignCenter)
        self._canvas = ParticleCanvas(stage)
        layout.addWidget(stage, 1)
        self._stage = stage

        self.setCentralWidget(root)
        self._award_overlay = AwardEarnedOverlay(root)
        self._awards_overlay = AwardsListOverlay(root)
        self._reset_overlay = ResetConfirmOverlay(root)
        self._reset_overlay.closed.connect(self._on_reset_closed)

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self._canvas.setGeometry(self._stage.rect())
        self._canvas.raise_()

    def _on_tap(self) -> None:
        result = self._session.tap()
        logger.debug("Tap to depth %d", result.count)
        scale = self._tap_button.width() / BURST_REFERENCE_SIZE
        self._simulator.spawn_burst(scale, time.monotonic())
        self._spin_started = time.monotonic()
        if not self._frame_timer.isActive():
            self._frame_timer.start()
        self._refresh()

        event = self._session.consume_award_event()
        if event is not None:
            self._award_overlay.show_award(event.award)

    def _on_frame(self) -> None:
        now = time.monotonic()
        self._canvas.setGeometry(self._stage.rect())
        self._canvas.set_particles(self._simulator.advance_and_cull(now))

        spinning = False
        if self._spin_started is not None:
            t = (now - self._spin_started) / SPIN_DURATION
            if t >= 1.0:
                self._spin_started = None
                self._tap_button.set_angle(0.0)
            else:
                # ease-out cubic
                eased = 1.0 - (1.0 - t) ** 3
                self._tap_button.set_angle(360.0 * eased)
                spinning = True

        if not spinning and len(self._simulator) == 0:
            self._frame_timer.stop()

    def _refresh(self) -> None:
        snap = self._session.progress()
        self._depth_label.setText(str(snap.count))
        self._progress_bar.setValue(int(round(snap.fraction * 1000)))
        self._badge.setText(f"{snap.earned}/{snap.total}")
        if snap.is_deepest:
            self._caption.setText("Deepest depth reached")
        else:
            self._caption.setText(f"Next award at {snap.next_threshold}")

        earned = [a for a in self._session.catalog.all() if a.threshold <= snap.count]
        self._tap_button.set_symbol(earned[-1].symbol if earned else DEFAULT_SYMBOL)

    def _show_awards(self) -> None:
        states = build_award_states(self._session.catalog.all(), self._session.count)
        self._awards_overlay.set_states(states)
        self._awards_overlay.open()

    def _confirm_reset(self) -> None:
        self._reset_overlay.open()

    def _on_reset_closed(self, confirmed: bool) -> None:
        if not confirmed:
            return
        self._session.reset()
        self._simulator.clear()
        self._canvas.set_particles([])
        self._refresh()

    def closeEvent(self, event: QCloseEvent) -> None:
        """Persist depth when closing the app."""
        if self._store is not None:
            self._store.save()
        super().closeEvent(event)
