"""Transparent widget that paints the live tap burst."""

from __future__ import annotations

from typing import Optional, Sequence

from PySide6.QtCore import QPointF, Qt
from PySide6.QtGui import QColor, QPainter
from PySide6.QtWidgets import QWidget

from tapdeep.core.particles import MAX_OPACITY, SPARK, RenderedParticle
from tapdeep.ui.colors import HomeColors, blend_hex, particle_color, with_alpha


class ParticleCanvas(QWidget):
    """Draws rendered particles as circles offset from the widget centre."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._particles: list[RenderedParticle] = []
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self.setAttribute(Qt.WidgetAttribute.WA_NoSystemBackground, True)

    def set_particles(self, particles: Sequence[RenderedParticle]) -> None:
        self._particles = list(particles)
        self.update()

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        if not self._particles:
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setPen(Qt.NoPen)
        origin = QPointF(self.width() / 2.0, self.height() / 2.0)
        for p in self._particles:
            color = particle_color(p.kind)
            if p.kind == SPARK:
                # sparks cool from gold towards ember as they fade
                color = blend_hex(color, HomeColors.EMBER, 1.0 - p.opacity / MAX_OPACITY)
            painter.setBrush(QColor(*with_alpha(color, p.opacity)))
            painter.drawEllipse(QPointF(origin.x() + p.dx, origin.y() + p.dy), p.radius, p.radius)
        painter.end()
