"""语音意图执行器。

加载一次设备/区域/场景快照，用模糊匹配把意图解析为具体目标，
逐个下发动作并把结果汇总为一个 ExecutionResult。
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from typing import Callable, Literal

from intent_parser.intents import (
    AllOff,
    Dim,
    Intent,
    LightOff,
    LightOn,
    SceneActivate,
    Temperature,
)
from voice_control.inventory import HomeyClient
from voice_control.matching import find_best_match, matches
from voice_control.models import (
    ONOFF_ADJACENT_CAPABILITIES,
    Device,
    ExecutionResult,
    Scene,
    Zone,
)

logger = logging.getLogger(__name__)

ItemOutcome = Literal["changed", "unchanged", "failed"]

_ENV_PREFIX = "VOICE_"


@dataclass
class ExecutorConfig:
    default_temperature: float = 20.0
    min_temperature: float = 5.0
    max_temperature: float = 30.0

    @classmethod
    def from_env(cls) -> "ExecutorConfig":
        """从 VOICE_DEFAULT_TEMPERATURE 等环境变量读取配置，非法值忽略。"""
        config = cls()
        for item in fields(cls):
            env_name = _ENV_PREFIX + item.name.upper()
            raw = os.getenv(env_name)
            if raw is None or not raw.strip():
                continue
            try:
                setattr(config, item.name, float(raw.replace(",", ".")))
            except ValueError:
                logger.warning("config_invalid name=%s value=%r", env_name, raw)
        return config


@dataclass
class BatchOutcome:
    """一批设备动作的汇总。"""

    targets: int = 0
    changed: int = 0
    failed: int = 0

    @property
    def attempted(self) -> int:
        return self.changed + self.failed

    @classmethod
    def collect(cls, outcomes: list[ItemOutcome]) -> "BatchOutcome":
        return cls(
            targets=len(outcomes),
            changed=sum(1 for o in outcomes if o == "changed"),
            failed=sum(1 for o in outcomes if o == "failed"),
        )


class CommandExecutor:
    """把解析后的意图作用到设备上。

    快照只在构造（或显式 reload）时读取一次，同一实例内不会刷新；
    每个设备的调用按顺序执行，单个设备失败不会中断其余设备。
    """

    def __init__(self, client: HomeyClient, config: ExecutorConfig | None = None):
        """初始化并加载快照。

        Args:
            client: Homey 客户端
            config: 执行配置，缺省使用默认温度范围
        """
        self.client = client
        self.config = config or ExecutorConfig()
        self.devices: dict[str, Device] = {}
        self.zones: dict[str, Zone] = {}
        self.scenes: dict[str, Scene] = {}
        self._handlers: dict[type, Callable[..., ExecutionResult]] = {
            LightOn: self._execute_light_on,
            LightOff: self._execute_light_off,
            Dim: self._execute_dim,
            AllOff: self._execute_all_off,
            SceneActivate: self._execute_scene_activate,
            Temperature: self._execute_temperature,
        }
        self.reload()

    def reload(self) -> None:
        """重新读取设备、区域与场景，并回填设备所在区域名。"""
        self.devices = self._load("devices", self.client.load_devices)
        self.zones = self._load("zones", self.client.load_zones)
        self.scenes = self._load("scenes", self.client.load_scenes)

        for device in self.devices.values():
            zone = self.zones.get(device.zone_id) if device.zone_id else None
            if zone is not None:
                device.zone_name = zone.name

        logger.info(
            "snapshot_loaded devices=%s zones=%s scenes=%s",
            len(self.devices),
            len(self.zones),
            len(self.scenes),
        )

    def _load(self, label: str, loader: Callable[[], dict | None]) -> dict:
        try:
            return dict(loader() or {})
        except Exception:
            logger.exception("snapshot_load_failed kind=%s", label)
            return {}

    def execute(self, intent: Intent | None) -> ExecutionResult:
        """执行意图。

        Args:
            intent: 解析得到的意图

        Returns:
            ExecutionResult，任何路径都不会向外抛出异常
        """
        handler = self._handlers.get(type(intent))
        if handler is None:
            logger.info("intent_not_executable intent=%s", intent)
            return ExecutionResult(
                success=False,
                message="Befehl nicht verstanden",
                affected_count=0,
                hint="unrecognized_command",
            )

        try:
            result = handler(intent)
        except Exception:
            logger.exception("execute_failed intent=%s", intent)
            return ExecutionResult(
                success=False,
                message="Fehler beim Ausführen",
                affected_count=0,
                hint="total_failure",
            )

        logger.info(
            "intent=%s success=%s affected=%s hint=%s",
            intent.kind,
            result.success,
            result.affected_count,
            result.hint,
        )
        return result

    def _execute_light_on(self, intent: LightOn) -> ExecutionResult:
        targets = self.find_target_devices(intent.room, intent.device_name, "onoff")
        outcome = self._run_batch(targets, lambda d: self._switch(d, True), "turn_on")
        return _switch_result(
            outcome,
            single="1 Licht eingeschaltet",
            plural="{count} Lichter eingeschaltet",
            failure="Fehler beim Einschalten",
        )

    def _execute_light_off(self, intent: LightOff) -> ExecutionResult:
        targets = self.find_target_devices(intent.room, intent.device_name, "onoff")
        outcome = self._run_batch(targets, lambda d: self._switch(d, False), "turn_off")
        return _switch_result(
            outcome,
            single="1 Licht ausgeschaltet",
            plural="{count} Lichter ausgeschaltet",
            failure="Fehler beim Ausschalten",
        )

    def _execute_all_off(self, intent: AllOff) -> ExecutionResult:
        targets = self.find_target_devices(intent.room, None, "onoff")
        outcome = self._run_batch(targets, lambda d: self._switch(d, False), "all_off")
        return _switch_result(
            outcome,
            single="Alles ausgeschaltet (1 Gerät)",
            plural="Alles ausgeschaltet ({count} Geräte)",
            failure="Fehler beim Ausschalten",
        )

    def _execute_dim(self, intent: Dim) -> ExecutionResult:
        targets = self.find_target_devices(intent.room, intent.device_name, "dim")
        if not targets:
            return _no_targets("Keine dimmbaren Geräte gefunden")

        value = intent.level / 100.0

        def dim(device: Device) -> bool:
            self.client.set_capability_value(device.id, "dim", value)
            return True

        outcome = self._run_batch(targets, dim, "dim")
        return _batch_result(
            outcome,
            f"Helligkeit auf {intent.level}% gesetzt",
            "Fehler beim Dimmen",
        )

    def _execute_scene_activate(self, intent: SceneActivate) -> ExecutionResult:
        available = [s for s in self.scenes.values() if s.enabled and s.triggerable]
        if not available:
            return _no_targets("Keine Szenen gefunden")

        match = find_best_match(
            intent.scene_name,
            [s.name for s in available],
            [s.id for s in available],
        )
        if match is None:
            return _no_targets("Szene nicht gefunden")

        scene = self.scenes[match.matched_id]
        try:
            self.client.trigger_scene(scene.id)
        except Exception:
            logger.exception("trigger_scene_failed scene=%s", scene.name)
            return ExecutionResult(
                success=False,
                message="Fehler beim Aktivieren",
                affected_count=0,
                hint="total_failure",
            )

        logger.info(
            "scene_triggered scene=%s score=%.3f match_type=%s",
            scene.name,
            match.score,
            match.match_type,
        )
        return ExecutionResult(
            success=True,
            message=f"Szene aktiviert: {scene.name}",
            affected_count=1,
        )

    def _execute_temperature(self, intent: Temperature) -> ExecutionResult:
        targets = self.find_target_devices(intent.room, None, "target_temperature")
        if not targets:
            return _no_targets("Keine Heizgeräte gefunden")

        def set_temperature(device: Device) -> bool:
            if intent.is_relative:
                target = self._current_target_temperature(device) + intent.degrees
            else:
                target = intent.degrees
            target = self.clamp_temperature(target)

            self.client.set_capability_value(device.id, "target_temperature", target)
            device.cached_target_temperature = target
            return True

        outcome = self._run_batch(targets, set_temperature, "set_temperature")
        if intent.is_relative:
            message = "Temperatur angepasst"
        else:
            message = f"Temperatur auf {intent.degrees:.1f}°C gesetzt"
        return _batch_result(outcome, message, "Fehler beim Einstellen")

    def clamp_temperature(self, value: float) -> float:
        """把目标温度截断到配置的范围。"""
        return max(self.config.min_temperature, min(self.config.max_temperature, value))

    def _current_target_temperature(self, device: Device) -> float:
        """相对调节的基准：缓存值 -> 重新读取设备 -> 默认温度。"""
        current = device.cached_target_temperature
        if current is None:
            refreshed = self.client.refresh_device(device.id)
            if refreshed is not None:
                current = refreshed.cached_target_temperature
        if current is None:
            logger.info(
                "target_temperature_default device=%s default=%s",
                device.name,
                self.config.default_temperature,
            )
            current = self.config.default_temperature
        return current

    def _switch(self, device: Device, on: bool) -> bool:
        if device.on == on:
            return False
        self.client.set_capability_value(device.id, "onoff", on)
        return True

    def _run_batch(
        self,
        targets: list[Device],
        action: Callable[[Device], bool],
        label: str,
    ) -> BatchOutcome:
        outcomes = [self._apply(device, action, label) for device in targets]
        return BatchOutcome.collect(outcomes)

    def _apply(
        self,
        device: Device,
        action: Callable[[Device], bool],
        label: str,
    ) -> ItemOutcome:
        try:
            changed = action(device)
        except Exception:
            logger.exception("device_action_failed action=%s device=%s", label, device.name)
            return "failed"
        return "changed" if changed else "unchanged"

    def find_target_devices(
        self,
        room: str | None,
        device_name: str | None,
        capability: str,
    ) -> list[Device]:
        """按设备名或房间查找支持指定 capability 的目标设备。

        - 指定设备名：在兼容设备中模糊匹配，最多返回一个
        - 指定房间：所有达到匹配阈值的区域中的兼容设备
        - 都未指定：全部兼容设备

        Args:
            room: 房间名
            device_name: 显式设备名
            capability: 需要的 capability

        Returns:
            目标设备列表
        """
        if not self.devices:
            return []

        compatible = [d for d in self.devices.values() if has_capability(d, capability)]

        if device_name:
            match = find_best_match(
                device_name,
                [d.name for d in compatible],
                [d.id for d in compatible],
            )
            if match is None:
                return []
            device = self.devices.get(match.matched_id)
            return [device] if device is not None else []

        if not room:
            return compatible

        zone_ids = {
            zone.id for zone in self.zones.values() if matches(room, zone.name)
        }
        logger.debug("room=%s matched_zones=%s", room, sorted(zone_ids))
        return [d for d in compatible if d.zone_id is not None and d.zone_id in zone_ids]


def has_capability(device: Device | None, capability: str | None) -> bool:
    """判断设备主 capability 是否满足需求，onoff 兼容 button/speaker_playing。"""
    if device is None or capability is None or device.capability is None:
        return False
    if device.capability == capability:
        return True
    return capability == "onoff" and device.capability in ONOFF_ADJACENT_CAPABILITIES


def _no_targets(message: str) -> ExecutionResult:
    return ExecutionResult(success=False, message=message, affected_count=0, hint="no_targets")


def _batch_result(outcome: BatchOutcome, message: str, failure: str) -> ExecutionResult:
    if outcome.changed > 0:
        hint = "partial_failure" if outcome.failed else None
        return ExecutionResult(
            success=True,
            message=message,
            affected_count=outcome.changed,
            hint=hint,
        )
    hint = "total_failure" if outcome.attempted else "no_change"
    return ExecutionResult(success=False, message=failure, affected_count=0, hint=hint)


def _switch_result(
    outcome: BatchOutcome,
    *,
    single: str,
    plural: str,
    failure: str,
) -> ExecutionResult:
    if outcome.targets == 0:
        return _no_targets("Keine Geräte gefunden")
    message = single if outcome.changed == 1 else plural.format(count=outcome.changed)
    return _batch_result(outcome, message, failure)
