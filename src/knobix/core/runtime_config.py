# どこで: `src/knobix/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: ノブの見た目やウィンドウ配置を、コードを変えずにユーザーが指定できるようにするため。

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

_HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """knobix の実行時設定。"""

    config_path: Path | None
    knob_size: int
    tick_count: int
    indicator_color: str
    tick_color: str
    window_size: tuple[int, int]
    window_pos: tuple[int, int]


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    `path` を None にすると明示指定を解除し、既定の探索に戻る。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        _CONFIG_CACHE = None
        return
    _EXPLICIT_CONFIG_PATH = Path(os.path.expandvars(str(path))).expanduser()
    _CONFIG_CACHE = None


def _default_config_candidates() -> tuple[Path, ...]:
    cwd = Path.cwd()
    home = Path.home()
    return (
        cwd / ".knobix" / "config.yaml",
        home / ".config" / "knobix" / "config.yaml",
    )


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_int_pair(value: Any, *, key: str) -> tuple[int, int] | None:
    if value is None:
        return None
    try:
        seq = list(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}") from exc
    if len(seq) != 2:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}")
    try:
        x = int(seq[0])
        y = int(seq[1])
    except Exception as exc:
        raise RuntimeError(f"{key} は [x, y] の整数配列である必要があります: got={value!r}") from exc
    return (x, y)


def _as_int(value: Any, *, key: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}")
    try:
        return int(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}") from exc


def _as_hex_color(value: Any, *, key: str) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    if not _HEX_COLOR_RE.match(text):
        raise RuntimeError(f"{key} は #RRGGBB 形式である必要があります: got={value!r}")
    return text.upper()


def _require(value: Any, *, key: str) -> Any:
    if value is None:
        raise RuntimeError(f"{key} が未設定です（同梱 default_config.yaml を確認してください）")
    return value


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """mapping を再帰的にマージして返す（override 側が勝つ）。"""

    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    import yaml

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")

    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    return _load_yaml_text(text, source=str(path))


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。"""

    try:
        blob = (
            resources.files("knobix")
            .joinpath("resource", "default_config.yaml")
            .read_text(encoding="utf-8")
        )
    except OSError as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc

    return _load_yaml_text(blob, source="knobix/resource/default_config.yaml")


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    上書き順（後勝ち）:
    1) 同梱 default_config.yaml
    2) `./.knobix/config.yaml` / `~/.config/knobix/config.yaml`（先に見つかった方）
    3) `set_config_path()` で指定した config
    """

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    if discovered_path is not None:
        payload = _merge(payload, _load_yaml_config(discovered_path))
    if explicit_path is not None:
        payload = _merge(payload, _load_yaml_config(explicit_path))

    version = _as_int(_require(payload.get("version"), key="version"), key="version")
    if version != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version}")

    knob = _as_mapping(payload.get("knob"), key="knob")
    knob_size = _require(_as_int(knob.get("size"), key="knob.size"), key="knob.size")
    if knob_size <= 0:
        raise ValueError(f"knob.size は正の値である必要があります: got={knob_size}")
    tick_count = _require(_as_int(knob.get("tick_count"), key="knob.tick_count"), key="knob.tick_count")
    if tick_count < 0:
        raise ValueError(f"knob.tick_count は 0 以上である必要があります: got={tick_count}")
    indicator_color = _require(
        _as_hex_color(knob.get("indicator_color"), key="knob.indicator_color"),
        key="knob.indicator_color",
    )
    tick_color = _require(
        _as_hex_color(knob.get("tick_color"), key="knob.tick_color"),
        key="knob.tick_color",
    )

    ui = _as_mapping(payload.get("ui"), key="ui")
    window_size = _require(_as_int_pair(ui.get("window_size"), key="ui.window_size"), key="ui.window_size")
    window_pos = _require(_as_int_pair(ui.get("window_pos"), key="ui.window_pos"), key="ui.window_pos")

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        knob_size=int(knob_size),
        tick_count=int(tick_count),
        indicator_color=str(indicator_color),
        tick_color=str(tick_color),
        window_size=window_size,
        window_pos=window_pos,
    )
    _CONFIG_CACHE = cfg
    return cfg


def hex_to_rgb255(color: str) -> tuple[int, int, int]:
    """`#RRGGBB` を (r, g, b)（0..255）に変換して返す。"""

    text = str(color).strip()
    if not _HEX_COLOR_RE.match(text):
        raise ValueError(f"#RRGGBB 形式ではありません: {color!r}")
    return int(text[1:3], 16), int(text[3:5], 16), int(text[5:7], 16)


__all__ = ["RuntimeConfig", "hex_to_rgb255", "runtime_config", "set_config_path"]
