# renderer.py
from pathlib import Path

import moderngl
import numpy as np
import pygame

from sierpinski import config
from sierpinski.models import Mode, PointCloud
from sierpinski.types import PROJ, VIEW

# ------------------------
# Matrix helpers
# ------------------------


def perspective(fov_y: float, aspect: float, near: float, far: float) -> PROJ:
    f = 1.0 / np.tan(fov_y * 0.5)
    return np.array(
        [
            [f / aspect, 0.0, 0.0, 0.0],
            [0.0, f, 0.0, 0.0],
            [0.0, 0.0, (far + near) / (near - far), (2.0 * far * near) / (near - far)],
            [0.0, 0.0, -1.0, 0.0],
        ],
        dtype=np.float32,
    ).T


def rotation_x(angle: float) -> PROJ:
    c, s = np.cos(angle), np.sin(angle)
    return np.array(
        [
            [1, 0, 0, 0],
            [0, c, -s, 0],
            [0, s, c, 0],
            [0, 0, 0, 1],
        ],
        dtype=np.float32,
    ).T


def rotation_y(angle: float) -> PROJ:
    c, s = np.cos(angle), np.sin(angle)
    return np.array(
        [
            [c, 0, s, 0],
            [0, 1, 0, 0],
            [-s, 0, c, 0],
            [0, 0, 0, 1],
        ],
        dtype=np.float32,
    ).T


def translate(x: float, y: float, z: float) -> PROJ:
    m = np.eye(4, dtype=np.float32)
    m[0, 3] = x
    m[1, 3] = y
    m[2, 3] = z
    return m.T


def orbit_from_position(position: tuple[float, float, float]) -> tuple[list[float], float]:
    """Pitch/yaw and distance of a camera at ``position`` looking at the origin."""
    x, y, z = position
    distance = float(np.sqrt(x * x + y * y + z * z))
    pitch = float(np.arcsin(y / distance))
    yaw = float(np.arctan2(x, z))
    return [pitch, yaw], distance


def grid_vertices(size: float = config.GRID_SIZE, divisions: int = config.GRID_DIVISIONS) -> np.ndarray:
    """Line segments of a square grid in the y=0 plane as (M, 6) rows of x, y, z, r, g, b."""
    half = size / 2
    rows = []
    for i in range(divisions + 1):
        k = -half + i * size / divisions
        shade = 0.27 if i == divisions // 2 else 0.53
        rows.append([-half, 0.0, k, shade, shade, shade])
        rows.append([half, 0.0, k, shade, shade, shade])
        rows.append([k, 0.0, -half, shade, shade, shade])
        rows.append([k, 0.0, half, shade, shade, shade])
    return np.array(rows, dtype=np.float32)


# ------------------------
# Renderer
# ------------------------


class PointCloudRenderer:
    def __init__(
        self,
        ctx: moderngl.Context,
        width: int = 800,
        height: int = 600,
    ):
        self.ctx = ctx
        self.ctx.enable(moderngl.DEPTH_TEST | moderngl.PROGRAM_POINT_SIZE)

        self.width = width
        self.height = height

        pygame.font.init()
        self.font = pygame.font.SysFont("monospace", 18)

        base = Path(__file__).parent / "shaders"

        # 3D program (points and grid lines)
        self.prog = self.ctx.program(
            vertex_shader=(base / "points.vert").read_text(),
            fragment_shader=(base / "points.frag").read_text(),
        )

        # UI program
        self.ui_prog = self.ctx.program(
            vertex_shader=(base / "ui.vert").read_text(),
            fragment_shader=(base / "ui.frag").read_text(),
        )

        # UI quad (updated every frame)
        self.ui_vbo = self.ctx.buffer(reserve=4 * 4 * 4)
        self.ui_vao = self.ctx.vertex_array(
            self.ui_prog,
            [(self.ui_vbo, "2f 2f", "in_pos", "in_uv")],
        )
        self.ui_texture: moderngl.Texture | None = None

        # Grid (static)
        self.grid_vbo = self.ctx.buffer(grid_vertices().tobytes())
        self.grid_vao = self.ctx.vertex_array(
            self.prog,
            [(self.grid_vbo, "3f 3f", "in_position", "in_color")],
        )

        # One vertex buffer per cloud, replaced wholesale on regeneration
        self.clouds: dict[Mode, tuple[moderngl.Buffer, moderngl.VertexArray]] = {}

        print(f"Renderer initialized: {width}x{height}")

    # ------------------------
    # Clouds
    # ------------------------

    def set_cloud(self, cloud: PointCloud) -> None:
        self.release_cloud(cloud.mode)
        if cloud.count == 0:
            return

        vbo = self.ctx.buffer(cloud.interleaved().tobytes())
        vao = self.ctx.vertex_array(
            self.prog,
            [(vbo, "3f 3f", "in_position", "in_color")],
        )
        self.clouds[cloud.mode] = (vbo, vao)

    def release_cloud(self, mode: Mode) -> None:
        old = self.clouds.pop(mode, None)
        if old is not None:
            vbo, vao = old
            vao.release()
            vbo.release()

    # ------------------------
    # Draw
    # ------------------------

    def draw(
        self,
        camera_rot: list[float],
        distance: float,
        visible: dict[Mode, bool],
        status_lines: list[str],
    ) -> None:
        self.ctx.clear(0.0, 0.0, 0.0, 1.0)
        self.ctx.enable(moderngl.DEPTH_TEST)

        view, proj = self._get_matrices(camera_rot, distance)
        self.prog["u_view"].write(view.tobytes())  # type: ignore
        self.prog["u_proj"].write(proj.tobytes())  # type: ignore
        self.prog["u_point_size"].value = config.POINT_SIZE  # type: ignore

        self.grid_vao.render(mode=moderngl.LINES)

        for mode, (_, vao) in self.clouds.items():
            if visible.get(mode, True):
                vao.render(mode=moderngl.POINTS)

        self._draw_ui_overlay(status_lines)
        pygame.display.flip()

    # ------------------------
    # Camera
    # ------------------------

    def _get_matrices(self, camera_rot: list[float], distance: float) -> tuple[VIEW, PROJ]:
        pitch, yaw = camera_rot

        # Orbit around the origin
        view = rotation_y(-yaw) @ rotation_x(pitch) @ translate(0.0, 0.0, -distance)

        proj = perspective(
            np.radians(config.CAMERA_FOV),
            self.width / self.height,
            config.CAMERA_NEAR,
            config.CAMERA_FAR,
        )
        return view, proj

    # ------------------------
    # UI Overlay
    # ------------------------

    def _surface_to_texture(self, surface: pygame.Surface) -> moderngl.Texture:
        surface = pygame.transform.flip(surface, False, True)
        data = pygame.image.tobytes(surface, "RGBA", False)

        tex = self.ctx.texture(surface.get_size(), 4, data)
        tex.filter = (moderngl.NEAREST, moderngl.NEAREST)
        tex.swizzle = "RGBA"
        return tex

    def _draw_ui_overlay(self, lines: list[str]) -> None:
        if not lines:
            return

        self.ctx.disable(moderngl.DEPTH_TEST)
        self.ctx.enable(moderngl.BLEND)
        self.ctx.blend_func = moderngl.SRC_ALPHA, moderngl.ONE_MINUS_SRC_ALPHA

        line_h = self.font.get_height()
        w = max(self.font.size(line)[0] for line in lines)
        h = line_h * len(lines)

        surface = pygame.Surface((w, h), pygame.SRCALPHA)

        y = 0
        for line in lines:
            surface.blit(self.font.render(line, True, (220, 220, 220)), (0, y))
            y += line_h

        if self.ui_texture:
            self.ui_texture.release()
        self.ui_texture = self._surface_to_texture(surface)
        self.ui_texture.use(0)

        # --- Compute top-left quad ---
        margin = 10
        ndc_w = 2.0 * w / self.width
        ndc_h = 2.0 * h / self.height
        mx = 2.0 * margin / self.width
        my = 2.0 * margin / self.height

        x0 = -1.0 + mx
        y0 = 1.0 - my
        x1 = x0 + ndc_w
        y1 = y0 - ndc_h

        quad = np.array(
            [
                [x0, y0, 0.0, 1.0],
                [x0, y1, 0.0, 0.0],
                [x1, y0, 1.0, 1.0],
                [x1, y1, 1.0, 0.0],
            ],
            dtype="f4",
        )

        self.ui_vbo.write(quad.tobytes())
        self.ui_prog["u_texture"].value = 0  # type: ignore
        self.ui_vao.render(mode=moderngl.TRIANGLE_STRIP)
        self.ctx.disable(moderngl.BLEND)

    def release(self) -> None:
        for mode in list(self.clouds):
            self.release_cloud(mode)
        if self.ui_texture:
            self.ui_texture.release()
        self.grid_vao.release()
        self.grid_vbo.release()
