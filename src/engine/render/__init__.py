"""
どこで: `engine.render` サブパッケージ。
何を: SceneSnapshot → RGBA8 フレームバッファの画素分類。ShadowRenderer とバッファ補助を提供。
なぜ: 状態（core）と描画の責務を分離し、並列カーネルと表示を独立させるため。
"""

from .framebuffer import allocate_frame, as_pixel_view
from .renderer import ShadowRenderer

__all__ = ["ShadowRenderer", "allocate_frame", "as_pixel_view"]
