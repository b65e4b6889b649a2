"""
#WHERE
    Used by render_engine (projecting sprites), pipeline.py and
    test_viewport.py.

#WHAT
    Fixed perspective camera looking down -Z at the origin.  Instead of
    mutating a camera object, compute_camera_params() returns everything a
    renderer needs, including view/projection matrices.

#INPUT
    Output pixel width / height.

#OUTPUT
    CameraParams with look-at view matrix, OpenGL-style projection matrix
    and a world → pixel projection helper.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from fallscene.shared.constants import CAMERA_DISTANCE, CAMERA_FAR, CAMERA_NEAR
from .geometry import check_dimensions, fov_for_half_height


def look_at(eye, target, up) -> np.ndarray:
    eye = np.asarray(eye, dtype=np.float64)
    target = np.asarray(target, dtype=np.float64)
    up = np.asarray(up, dtype=np.float64)
    fwd = eye - target
    fwd /= np.linalg.norm(fwd)
    right = np.cross(up, fwd)
    right /= np.linalg.norm(right)
    true_up = np.cross(fwd, right)
    rot = np.eye(4)
    rot[0, :3], rot[1, :3], rot[2, :3] = right, true_up, fwd
    trans = np.eye(4)
    trans[:3, 3] = -eye
    return rot @ trans


def perspective(fov_degrees: float, aspect: float, near: float, far: float) -> np.ndarray:
    f = 1.0 / np.tan(np.radians(fov_degrees) / 2.0)
    return np.array([
        [f / aspect, 0, 0, 0],
        [0, f, 0, 0],
        [0, 0, (far + near) / (near - far), (2 * far * near) / (near - far)],
        [0, 0, -1, 0],
    ], dtype=np.float64)


@dataclass(frozen=True)
class CameraParams:
    position: Tuple[float, float, float]
    target: Tuple[float, float, float]
    up: Tuple[float, float, float]
    near: float
    far: float
    fov_degrees: float
    aspect: float

    def view_matrix(self) -> np.ndarray:
        return look_at(self.position, self.target, self.up)

    def projection_matrix(self) -> np.ndarray:
        return perspective(self.fov_degrees, self.aspect, self.near, self.far)

    def view_projection(self) -> np.ndarray:
        return self.projection_matrix() @ self.view_matrix()

    def project(self, points: Sequence, width: int, height: int) -> np.ndarray:
        """World points (N, 3) → pixel coordinates (N, 2), y pointing down."""
        pts = np.atleast_2d(np.asarray(points, dtype=np.float64))
        homo = np.hstack([pts, np.ones((len(pts), 1))])
        clip = homo @ self.view_projection().T
        w = clip[:, 3:4]
        w = np.where(w == 0, 1e-9, w)
        ndc = clip[:, :2] / w
        px = (ndc[:, 0] + 1.0) * (width / 2.0)
        py = height - (ndc[:, 1] + 1.0) * (height / 2.0)
        return np.stack([px, py], axis=1)

    def pixels_per_unit(self, height: int) -> float:
        """Pixel length of one world unit on the z=0 plane."""
        distance = float(np.linalg.norm(np.subtract(self.position, self.target)))
        visible_height = 2.0 * distance * np.tan(np.radians(self.fov_degrees) / 2.0)
        return height / visible_height


def compute_camera_params(width: int, height: int) -> CameraParams:
    check_dimensions(width, height)
    return CameraParams(
        position=(0.0, 0.0, CAMERA_DISTANCE),
        target=(0.0, 0.0, 0.0),
        up=(0.0, 1.0, 0.0),
        near=CAMERA_NEAR,
        far=CAMERA_FAR,
        fov_degrees=fov_for_half_height(),
        aspect=width / height,
    )
