"""核心数据模型定义。

包含设备、区域（房间）、场景（flow）、匹配结果与执行结果等数据结构。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal, Mapping

logger = logging.getLogger(__name__)

MatchType = Literal["exact", "contains", "token_set", "fuzzy", "compound"]

# 设备主 capability 的优先级，取第一个出现在设备 capability 集合中的
CAPABILITY_PRIORITY = (
    "target_temperature",
    "onoff",
    "dim",
    "speaker_playing",
    "button",
)
DEFAULT_CAPABILITY = "onoff"

# 在 onoff 意图下也视为可开关的 capability
ONOFF_ADJACENT_CAPABILITIES = frozenset({"button", "speaker_playing"})


@dataclass(frozen=True)
class MatchResult:
    """模糊匹配结果。"""

    score: float
    match_type: MatchType
    matched_id: str


@dataclass
class Device:
    """智能家居设备快照。

    除 `zone_name`（加载时回填）与 `cached_target_temperature` 外，
    执行器不修改设备字段。
    """

    id: str
    name: str
    capability: str = DEFAULT_CAPABILITY
    on: bool = True
    zone_id: str | None = None
    zone_name: str | None = None
    cached_target_temperature: float | None = None

    @classmethod
    def from_capabilities(
        cls,
        id: str,
        name: str,
        capabilities: Mapping[str, Mapping[str, Any] | None],
        zone_id: str | None = None,
    ) -> "Device":
        """根据 API 返回的 capabilitiesObj 构造设备。

        Args:
            id: 设备 ID
            name: 设备名称
            capabilities: capability -> {"value": ...} 的映射
            zone_id: 所在区域 ID

        Returns:
            Device，主 capability 按 CAPABILITY_PRIORITY 选取，默认 onoff
        """
        capability = next(
            (cap for cap in CAPABILITY_PRIORITY if cap in capabilities),
            None,
        )
        if capability is None:
            return cls(id=id, name=name, capability=DEFAULT_CAPABILITY, on=True, zone_id=zone_id)

        device = cls(id=id, name=name, capability=capability, zone_id=zone_id)
        if capability == "button":
            # button 没有状态值
            device.on = True
            return device

        value = _capability_value(capabilities.get(capability))
        if value is None:
            logger.warning(
                "capability_value_missing device=%s capability=%s",
                name,
                capability,
            )
            device.on = False
            return device

        if capability == "target_temperature":
            device.on = True
            device.cached_target_temperature = float(value)
        elif capability == "dim":
            device.on = float(value) > 0
        else:
            device.on = _as_bool(value)
        return device


@dataclass
class Zone:
    """区域（房间）。"""

    id: str
    name: str
    parent_id: str | None = None


@dataclass
class Scene:
    """可触发的自动化场景（Homey flow）。"""

    id: str
    name: str
    enabled: bool = True
    triggerable: bool = True
    folder: str | None = None


@dataclass(frozen=True)
class ExecutionResult:
    """命令执行结果。

    hint 取值：no_targets / partial_failure / total_failure / no_change /
    unrecognized_command，完全成功时为 None。
    """

    success: bool
    message: str
    affected_count: int = 0
    hint: str | None = None


def _capability_value(data: Mapping[str, Any] | None) -> Any:
    if not isinstance(data, Mapping):
        return None
    return data.get("value")


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)
