"""Graphics for FLAPSTER: numpy drawing primitives and the scene renderer."""

from flapster.graphics.renderer import SceneRenderer

__all__ = ["SceneRenderer"]
