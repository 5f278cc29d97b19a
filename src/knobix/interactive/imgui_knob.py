# どこで: `src/knobix/interactive/imgui_knob.py`。
# 何を: pyimgui の draw list でノブを描画し、ImGui のマウス状態を PointerEvent へ変換する。
# なぜ: 既存の ImGui パネルにノブを 1 行で埋め込めるようにするため。

from __future__ import annotations

from knobix.core.angle import polar_point
from knobix.core.knob import Knob
from knobix.core.pointer import (
    POINTER_DOWN,
    POINTER_MOVE,
    POINTER_UP,
    Bounds,
    PointerEvent,
)
from knobix.core.runtime_config import hex_to_rgb255, runtime_config
from knobix.export.svg import tick_angles

# ImGui の active item がキャプチャ相当なので、ポインタ id は固定でよい。
IMGUI_POINTER_ID = 1


class ImguiKnobSurface:
    """即時モード描画のために、RenderSync から受け取った回転角/文字列を保持する描画面。"""

    def __init__(self) -> None:
        self.rotation = 0.0
        self.text: str | None = None

    def set_rotation(self, degrees: float) -> None:
        self.rotation = float(degrees)

    def set_text(self, text: str | None) -> None:
        self.text = text


def _rgba01(color: str) -> tuple[float, float, float, float]:
    r, g, b = hex_to_rgb255(color)
    return r / 255.0, g / 255.0, b / 255.0, 1.0


def imgui_knob(label: str, knob: Knob, *, radius: float = 40.0) -> tuple[bool, float]:
    """ノブを描画し、(changed, value) を返す。

    Parameters
    ----------
    label : str
        ImGui の item id（`##` 付きで非表示にできる）。
    knob : Knob
        操作対象。初回呼び出し時に ImguiKnobSurface を mount する。
    radius : float
        ノブの半径（px）。

    Returns
    -------
    changed : bool
        このフレームで値が変わった場合 True。
    value : float
        変更後の値。
    """

    import imgui  # type: ignore[import-untyped]

    surface = knob.surface
    if not isinstance(surface, ImguiKnobSurface):
        surface = ImguiKnobSurface()
        knob.mount(surface)

    cfg = runtime_config()
    size = float(radius) * 2.0
    x0, y0 = imgui.get_cursor_screen_pos()
    imgui.invisible_button(str(label), size, size)
    knob.set_bounds(Bounds(left=float(x0), top=float(y0), width=size, height=size))

    mx, my = imgui.get_mouse_pos()
    changed = False
    if imgui.is_item_activated():
        changed = knob.handle_pointer(
            PointerEvent(type=POINTER_DOWN, x=float(mx), y=float(my), pointer_id=IMGUI_POINTER_ID)
        )
    elif imgui.is_item_active():
        changed = knob.handle_pointer(
            PointerEvent(type=POINTER_MOVE, x=float(mx), y=float(my), pointer_id=IMGUI_POINTER_ID)
        )
    # 同一フレーム内のクリック（activated かつ deactivated）でも必ずキャプチャを解放する
    if imgui.is_item_deactivated():
        knob.handle_pointer(
            PointerEvent(
                type=POINTER_UP,
                x=float(mx),
                y=float(my),
                pointer_id=IMGUI_POINTER_ID,
                buttons=0,
            )
        )

    # ImGui は y 下向きなので、polar_point の y 成分を反転して使う。
    draw_list = imgui.get_window_draw_list()
    cx = float(x0) + float(radius)
    cy = float(y0) + float(radius)
    scale = size / 100.0
    tick_col = imgui.get_color_u32_rgba(*_rgba01(cfg.tick_color))
    for deg in tick_angles(cfg.tick_count):
        px1, py1 = polar_point(0.0, 0.0, 45.0 * scale, float(deg))
        px2, py2 = polar_point(0.0, 0.0, 38.0 * scale, float(deg))
        draw_list.add_line(cx + px1, cy - py1, cx + px2, cy - py2, tick_col, 0.8 * scale)

    ind_col = imgui.get_color_u32_rgba(*_rgba01(cfg.indicator_color))
    px1, py1 = polar_point(0.0, 0.0, 45.0 * scale, surface.rotation)
    px2, py2 = polar_point(0.0, 0.0, 32.0 * scale, surface.rotation)
    draw_list.add_line(cx + px1, cy - py1, cx + px2, cy - py2, ind_col, 4.0 * scale)

    if surface.text is not None:
        tw, th = imgui.calc_text_size(surface.text)
        text_col = imgui.get_color_u32_rgba(1.0, 1.0, 1.0, 1.0)
        draw_list.add_text(cx - float(tw) / 2.0, cy - float(th) / 2.0, text_col, surface.text)

    return changed, knob.value


__all__ = ["ImguiKnobSurface", "imgui_knob"]
