"""
OpenGL-based renderer: draws atlas cells as textured quads in world space.
"""

from __future__ import annotations
import ctypes
import logging
from itertools import groupby
from typing import TYPE_CHECKING, Iterable, List, Sequence, Tuple

import numpy as np
import pygame

try:
    import OpenGL.GL as gl  # noqa: N811
except ImportError:
    raise ImportError(
        "PyOpenGL is required to run this renderer. "
        "Please install via: pip install PyOpenGL PyOpenGL_accelerate"
    )
from .config import BACKGROUND_COLOR
from .gl_resources import GLResourceManager, delete_buffer, delete_texture
from .gl_utils import SheetTexture, ShaderProgram, load_texture, setup_opengl

if TYPE_CHECKING:
    from .atlas import AtlasEntry, AtlasSprite
    from .camera import Camera
    from .tile import Transform

logger = logging.getLogger(__name__)

SPRITE_VS = """
#version 120
attribute vec2 aPos;
attribute vec2 aUV;
varying vec2 vUV;
void main() {
    gl_Position = vec4(aPos, 0.0, 1.0);
    vUV = aUV;
}
"""

SPRITE_FS = """
#version 120
uniform sampler2D uTex;
varying vec2 vUV;
void main() {
    vec4 color = texture2D(uTex, vUV);
    if (color.a < 0.01) {
        discard;
    }
    gl_FragColor = color;
}
"""


def _bind_array_buffer(obj_id: int) -> None:
    gl.glBindBuffer(gl.GL_ARRAY_BUFFER, obj_id)


def _bind_texture_2d(obj_id: int) -> None:
    gl.glBindTexture(gl.GL_TEXTURE_2D, obj_id)


def cell_uv(
    atlas: AtlasEntry,
    index: int,
    flip_x: bool,
    flip_y: bool,
    texture_size: Tuple[int, int],
) -> Tuple[float, float, float, float]:
    """
    Texture coordinates (u_left, v_bottom, u_right, v_top) of an atlas cell
    on a texture uploaded bottom row first. Flips swap the edges of an axis.
    """
    tex_w, tex_h = texture_size
    left, top, cell_w, cell_h = atlas.cell_rect(index)
    u0 = left / tex_w
    u1 = (left + cell_w) / tex_w
    v_top = 1.0 - top / tex_h
    v_bottom = 1.0 - (top + cell_h) / tex_h
    if flip_x:
        u0, u1 = u1, u0
    if flip_y:
        v_top, v_bottom = v_bottom, v_top
    return u0, v_bottom, u1, v_top


def sprite_quad(
    sprite: AtlasSprite,
    transform: Transform,
    camera: Camera,
    texture_size: Tuple[int, int],
) -> List[List[float]]:
    """
    Two triangles covering the cell, centered on the transform's translation.
    A cell of N pixels at scale 1/N spans one world unit.
    """
    cell_w, cell_h = sprite.atlas.cell_size
    sx, sy = transform.scale
    half_w = cell_w * sx * 0.5
    half_h = cell_h * sy * 0.5
    cx, cy = transform.translation[0], transform.translation[1]
    x0, y0 = camera.world_to_ndc(cx - half_w, cy - half_h)
    x1, y1 = camera.world_to_ndc(cx + half_w, cy + half_h)
    u0, v0, u1, v1 = cell_uv(
        sprite.atlas, sprite.index, sprite.flip_x, sprite.flip_y, texture_size
    )
    return [
        [x0, y0, u0, v0],
        [x1, y0, u1, v0],
        [x1, y1, u1, v1],
        [x0, y0, u0, v0],
        [x1, y1, u1, v1],
        [x0, y1, u0, v1],
    ]


def in_view(sprite: AtlasSprite, transform: Transform, camera: Camera) -> bool:
    """True if any part of the sprite's quad falls inside the camera's view."""
    view_w, view_h = camera.visible_half_extent()
    cell_w, cell_h = sprite.atlas.cell_size
    sx, sy = transform.scale
    tx, ty = transform.translation[0], transform.translation[1]
    return (
        abs(tx - camera.x) <= view_w + cell_w * sx * 0.5
        and abs(ty - camera.y) <= view_h + cell_h * sy * 0.5
    )


def draw_order(
    sprites: Iterable[Tuple[AtlasSprite, Transform]],
) -> List[Tuple[AtlasSprite, Transform]]:
    """
    Sort sprites back to front: lower layers first, then from the top of the
    screen down so that lower sprites overlap the ones behind them.
    """
    return sorted(
        sprites,
        key=lambda item: (item[1].translation[2], -item[1].translation[1]),
    )


class Renderer:
    """OpenGL sprite renderer: one textured-quad batch per layer and sheet."""

    def __init__(self, screen_width: int, screen_height: int) -> None:
        self.w = screen_width
        self.h = screen_height
        # GL resource manager to track and clean up GL objects
        self._res = GLResourceManager()
        setup_opengl(self.w, self.h)
        self.shader = ShaderProgram(
            vertex_source=SPRITE_VS, fragment_source=SPRITE_FS
        )
        self.posAttr = self.shader.get_attrib("aPos")
        self.uvAttr = self.shader.get_attrib("aUV")
        self.uTexLoc = self.shader.get_uniform("uTex")
        self.vbo = self._res.gen(lambda: gl.glGenBuffers(1), delete_buffer)
        logger.info("Sprite renderer ready (%dx%d)", self.w, self.h)

    def load_sheet(self, path: str) -> SheetTexture:
        """Asset loader for the atlas registry: upload a sheet and track it."""
        sheet = load_texture(path)
        self._res.track(sheet.tex_id, delete_texture)
        return sheet

    def render(
        self,
        sprites: Sequence[Tuple[AtlasSprite, Transform]],
        camera: Camera,
    ) -> None:
        gl.glClearColor(*BACKGROUND_COLOR, 1.0)
        gl.glClear(gl.GL_COLOR_BUFFER_BIT)
        self.shader.use()
        gl.glActiveTexture(gl.GL_TEXTURE0)
        gl.glUniform1i(self.uTexLoc, 0)
        ordered = draw_order(s for s in sprites if in_view(s[0], s[1], camera))
        with self._res.bind(_bind_array_buffer, self.vbo):
            # Consecutive sprites on the same layer and sheet share one draw call
            for (_, sheet), batch in groupby(
                ordered,
                key=lambda item: (item[1].translation[2], item[0].atlas.sheet),
            ):
                verts: List[List[float]] = []
                for sprite, transform in batch:
                    verts.extend(
                        sprite_quad(
                            sprite, transform, camera, (sheet.width, sheet.height)
                        )
                    )
                self._draw_batch(sheet.tex_id, np.array(verts, dtype=np.float32))
        self.shader.stop()
        pygame.display.flip()

    def _draw_batch(self, tex_id: int, verts: np.ndarray) -> None:
        gl.glBufferData(
            gl.GL_ARRAY_BUFFER, verts.nbytes, verts, gl.GL_DYNAMIC_DRAW
        )
        stride = verts.strides[0]
        gl.glEnableVertexAttribArray(self.posAttr)
        gl.glVertexAttribPointer(
            self.posAttr, 2, gl.GL_FLOAT, gl.GL_FALSE, stride, ctypes.c_void_p(0)
        )
        gl.glEnableVertexAttribArray(self.uvAttr)
        gl.glVertexAttribPointer(
            self.uvAttr, 2, gl.GL_FLOAT, gl.GL_FALSE, stride, ctypes.c_void_p(8)
        )
        with self._res.bind(_bind_texture_2d, tex_id):
            gl.glDrawArrays(gl.GL_TRIANGLES, 0, len(verts))
        gl.glDisableVertexAttribArray(self.posAttr)
        gl.glDisableVertexAttribArray(self.uvAttr)

    def shutdown(self) -> None:
        """Free tracked GL resources."""
        self.shader.delete()
        self._res.shutdown()
