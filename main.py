"""
どこで: リポジトリ直下 `main.py`。
何を: ノブを 3 つ（単体 1 + 合成 2）並べたウィンドウを開き、操作した値をログへ出す。
なぜ: 動作確認用の最小エントリポイントとして利用するため。
"""

import logging
import sys

sys.path.append("src")

from knobix import combine, export_knob_svg
from knobix.core import Knob
from knobix.interactive.knob_window import run_knobs

_logger = logging.getLogger("main")


def main() -> None:
    volume = Knob(range(0, 241, 5))
    pan = Knob({"min": -1, "max": 1, "step": 0.1}, default=0)
    gain = Knob({"min": 0, "max": 12, "step": 0.5}, default=6, show_value=False)

    pair = combine(pan, gain)
    pair.add_event_listener("input", lambda e: _logger.info("pair: %s", pair.value))

    try:
        run_knobs(volume, pan, gain, caption="knobix demo")
    finally:
        path = export_knob_svg(volume, "data/output/svg/volume.svg")
        _logger.info("saved: %s", path)
        pair.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    main()
