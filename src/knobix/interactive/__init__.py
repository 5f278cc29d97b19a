# どこで: `src/knobix/interactive/__init__.py`。
# 何を: interactive（pyglet / pyimgui backend）パッケージを定義する。
# なぜ: pyglet/imgui の import を使用時まで遅らせ、ヘッドレス環境でも core/export を使えるようにするため。

from .pointer_router import PointerRouter

__all__ = ["PointerRouter"]
