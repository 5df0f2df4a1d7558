"""语音意图数据结构。

每条语音命令解析为以下闭集中的恰好一个变体。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class LightOn:
    room: str | None = None
    device_name: str | None = None

    kind = "light_on"


@dataclass(frozen=True)
class LightOff:
    room: str | None = None
    device_name: str | None = None

    kind = "light_off"


@dataclass(frozen=True)
class Dim:
    """调光意图，level 为 [0, 100] 的百分比。"""

    level: int
    room: str | None = None
    device_name: str | None = None

    kind = "dim"


@dataclass(frozen=True)
class AllOff:
    room: str | None = None

    kind = "all_off"


@dataclass(frozen=True)
class SceneActivate:
    scene_name: str

    kind = "scene_activate"


@dataclass(frozen=True)
class Temperature:
    """温度意图。

    is_relative 为 True 时 degrees 是带符号的增量，否则是目标温度。
    """

    degrees: float
    is_relative: bool = False
    room: str | None = None

    kind = "temperature"


@dataclass(frozen=True)
class Unknown:
    original_text: str = ""

    kind = "unknown"


Intent = Union[LightOn, LightOff, Dim, AllOff, SceneActivate, Temperature, Unknown]

INTENT_TYPES = (LightOn, LightOff, Dim, AllOff, SceneActivate, Temperature, Unknown)
