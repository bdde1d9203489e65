"""
Model widget: draws the selected wireframe mesh posed by the rendered transform.
"""
from typing import Optional
from PyQt5.QtWidgets import QWidget
from PyQt5.QtCore import Qt, QPointF
from PyQt5.QtGui import QPainter, QPen, QColor

from interaction.transform import RenderedTransform

from .meshes import Mesh, get_mesh, project


class ModelWidget(QWidget):
    """Wireframe view of one mesh. Nearer edges are drawn brighter."""

    BACKGROUND = QColor(7, 10, 15)
    NEAR_COLOR = (0, 255, 255)
    FROZEN_COLOR = (170, 120, 255)

    def __init__(self, model: str = "torus", parent=None):
        super().__init__(parent)
        self._mesh: Mesh = get_mesh(model)
        self._transform: Optional[RenderedTransform] = None
        self._frozen = False
        self.setMinimumSize(320, 240)

    def set_model(self, model: str):
        self._mesh = get_mesh(model)
        self.update()

    def set_transform(self, transform: RenderedTransform, frozen: bool = False):
        self._transform = transform
        self._frozen = frozen
        self.update()

    @property
    def mesh(self) -> Mesh:
        return self._mesh

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.fillRect(self.rect(), self.BACKGROUND)

        transform = self._transform or RenderedTransform()
        screen, depth = project(
            self._mesh.vertices,
            transform.display_rotation,
            transform.position,
            transform.scale,
            self.width(),
            self.height(),
        )

        near, far = depth.min(), depth.max()
        span = max(far - near, 1e-6)
        r, g, b = self.FROZEN_COLOR if self._frozen else self.NEAR_COLOR

        for i, j in self._mesh.edges:
            # 1.0 at the nearest vertex, 0.0 at the farthest
            closeness = 1.0 - ((depth[i] + depth[j]) / 2 - near) / span
            pen = QPen(QColor(r, g, b, int(60 + 195 * closeness)))
            pen.setWidthF(1.0 + closeness)
            painter.setPen(pen)
            painter.drawLine(
                QPointF(screen[i][0], screen[i][1]),
                QPointF(screen[j][0], screen[j][1]),
            )

        if self._frozen:
            painter.setPen(QColor(*self.FROZEN_COLOR))
            painter.drawText(self.rect().adjusted(0, 10, 0, 0),
                             Qt.AlignHCenter | Qt.AlignTop, "FROZEN")
        painter.end()
