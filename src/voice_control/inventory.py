"""设备清单与动作接口。

执行器只通过 HomeyClient 协议读取设备/区域/场景并下发动作，
真实网络客户端由外部应用提供。
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Protocol

import yaml

from voice_control.models import Device, Scene, Zone

logger = logging.getLogger(__name__)


class ActionTransportError(RuntimeError):
    """动作调用或数据读取在传输层失败。"""


class HomeyClient(Protocol):
    """Homey 客户端协议。"""

    def load_devices(self) -> dict[str, Device]:
        """读取全部设备，key 为设备 ID。"""
        ...

    def load_zones(self) -> dict[str, Zone]:
        """读取全部区域，key 为区域 ID。"""
        ...

    def load_scenes(self) -> dict[str, Scene]:
        """读取全部场景（flow），key 为场景 ID。"""
        ...

    def set_capability_value(self, device_id: str, capability: str, value: Any) -> None:
        """设置设备 capability 的值，失败时抛出异常。"""
        ...

    def trigger_scene(self, scene_id: str) -> None:
        """触发场景，失败时抛出异常。"""
        ...

    def refresh_device(self, device_id: str) -> Device | None:
        """重新读取单个设备的最新状态。"""
        ...


class FakeHomey(HomeyClient):
    """用于测试和离线 demo 的内存 Homey。

    读取接口返回副本，执行器拿到的是时间点快照；写入会更新内部状态并记录调用。
    """

    def __init__(
        self,
        devices: list[Device] | None = None,
        zones: list[Zone] | None = None,
        scenes: list[Scene] | None = None,
        failing_ids: set[str] | None = None,
    ):
        """初始化。

        Args:
            devices: 设备列表
            zones: 区域列表
            scenes: 场景列表
            failing_ids: 调用时抛出 ActionTransportError 的设备或场景 ID
        """
        self.devices = {d.id: copy.deepcopy(d) for d in devices or []}
        self.zones = {z.id: copy.deepcopy(z) for z in zones or []}
        self.scenes = {s.id: copy.deepcopy(s) for s in scenes or []}
        self.failing_ids = set(failing_ids or ())
        self.calls: list[tuple[Any, ...]] = []

    def load_devices(self) -> dict[str, Device]:
        return copy.deepcopy(self.devices)

    def load_zones(self) -> dict[str, Zone]:
        return copy.deepcopy(self.zones)

    def load_scenes(self) -> dict[str, Scene]:
        return copy.deepcopy(self.scenes)

    def set_capability_value(self, device_id: str, capability: str, value: Any) -> None:
        self.calls.append(("set_capability_value", device_id, capability, value))
        if device_id in self.failing_ids:
            raise ActionTransportError(f"设备调用失败: {device_id}")

        device = self.devices.get(device_id)
        if device is None:
            raise ActionTransportError(f"设备不存在: {device_id}")

        if capability == "target_temperature":
            device.cached_target_temperature = float(value)
        elif capability == "dim":
            device.on = float(value) > 0
        else:
            device.on = bool(value)

    def trigger_scene(self, scene_id: str) -> None:
        self.calls.append(("trigger_scene", scene_id))
        if scene_id in self.failing_ids or scene_id not in self.scenes:
            raise ActionTransportError(f"场景触发失败: {scene_id}")

    def refresh_device(self, device_id: str) -> Device | None:
        self.calls.append(("refresh_device", device_id))
        device = self.devices.get(device_id)
        return copy.deepcopy(device) if device is not None else None


def load_inventory_yaml(text: str) -> FakeHomey:
    """从 YAML 文档构建 FakeHomey。

    文档结构::

        zones:
          - {id: z1, name: Wohnzimmer}
        devices:
          - id: d1
            name: Stehlampe
            zone: z1
            capabilities: {onoff: {value: false}}
        scenes:
          - {id: s1, name: Gute Nacht}

    Args:
        text: YAML 文本

    Returns:
        FakeHomey

    Raises:
        ValueError: 文档结构不合法
    """
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError("inventory 文档必须是映射")

    zones = [
        Zone(id=str(item["id"]), name=str(item["name"]), parent_id=item.get("parent"))
        for item in _entries(data, "zones")
    ]
    devices = [
        Device.from_capabilities(
            id=str(item["id"]),
            name=str(item["name"]),
            capabilities=item.get("capabilities") or {},
            zone_id=item.get("zone"),
        )
        for item in _entries(data, "devices")
    ]
    scenes = [
        Scene(
            id=str(item["id"]),
            name=str(item["name"]),
            enabled=bool(item.get("enabled", True)),
            triggerable=bool(item.get("triggerable", True)),
            folder=item.get("folder"),
        )
        for item in _entries(data, "scenes")
    ]

    logger.info(
        "inventory_loaded devices=%s zones=%s scenes=%s",
        len(devices),
        len(zones),
        len(scenes),
    )
    return FakeHomey(devices=devices, zones=zones, scenes=scenes)


def _entries(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    items = data.get(key) or []
    if not isinstance(items, list):
        raise ValueError(f"{key} 必须是列表")
    for item in items:
        if not isinstance(item, dict) or "id" not in item or "name" not in item:
            raise ValueError(f"{key} 条目缺少 id 或 name: {item!r}")
    return items
