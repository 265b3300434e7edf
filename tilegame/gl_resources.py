from __future__ import annotations

import contextlib
import logging
import OpenGL.GL as gl
from collections import defaultdict
from typing import Callable, DefaultDict, List

logger = logging.getLogger(__name__)


def delete_buffer(obj_id: int) -> None:
    """Deletes a single GL buffer."""
    gl.glDeleteBuffers(1, [obj_id])


def delete_texture(obj_id: int) -> None:
    """Deletes a single GL texture."""
    gl.glDeleteTextures(1, [obj_id])


class GLResourceManager:
    """
    Tracks every GL object created at runtime and frees it on shutdown.

    Usage:
        mgr = GLResourceManager()
        vbo = mgr.gen(lambda: gl.glGenBuffers(1), delete_buffer)
        tex = mgr.track(load_texture_id(...), delete_texture)
        ...
        mgr.shutdown()
    """

    def __init__(self) -> None:
        self._objs: DefaultDict[Callable[[int], None], List[int]] = defaultdict(list)

    def gen(self, creator: Callable[[], int], deleter: Callable[[int], None]) -> int:
        """Wraps any glGen* that returns ONE uint id."""
        return self.track(creator(), deleter)

    def track(self, obj_id: int, deleter: Callable[[int], None]) -> int:
        """Adopt an id created elsewhere (e.g. a texture from an image loader)."""
        self._objs[deleter].append(obj_id)
        return obj_id

    def count(self) -> int:
        return sum(len(ids) for ids in self._objs.values())

    @contextlib.contextmanager
    def bind(self, binder: Callable[[int], None], obj_id: int):
        """Context-manager for glBind*, auto-unbinds to 0."""
        binder(obj_id)
        try:
            yield
        finally:
            binder(0)

    def shutdown(self) -> None:
        """Call at program exit **WITH A VALID GL CONTEXT**."""
        logger.debug("Releasing %d GL objects", self.count())
        for deleter, ids in self._objs.items():
            for obj_id in ids:
                deleter(int(obj_id))
        self._objs.clear()
