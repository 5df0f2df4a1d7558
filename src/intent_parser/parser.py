"""Rule-based parser for German voice commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from intent_parser.intents import (
    AllOff,
    Dim,
    Intent,
    LightOff,
    LightOn,
    SceneActivate,
    Temperature,
    Unknown,
)
from intent_parser.vocabulary import (
    ABSOLUTE_TEMPERATURE_PATTERN,
    ALL_OFF_PATTERN,
    BRIGHTNESS_PATTERN,
    COLDER_PATTERN,
    DEVICE_NAME_STOP_WORDS,
    DIM_PATTERN,
    LEVEL_TOKEN_PATTERN,
    LIGHT_OFF_PATTERN,
    LIGHT_ON_PATTERN,
    NUMBER_PATTERN,
    RELATIVE_TEMPERATURE_PATTERN,
    ROOM_ALIASES,
    ROOM_PATTERN,
    ROOM_PHRASE_PATTERN,
    SCENE_PATTERN,
    WARMER_PATTERN,
)

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE_STEP = 1.0
MIN_DIM_LEVEL = 0
MAX_DIM_LEVEL = 100
MIN_DEVICE_NAME_LENGTH = 3


@dataclass
class ParserMetrics:
    total_commands: int = 0
    unknown_commands: int = 0

    @property
    def unknown_ratio(self) -> float:
        if self.total_commands == 0:
            return 0.0
        return self.unknown_commands / self.total_commands

    def record(self, *, unknown: bool) -> None:
        self.total_commands += 1
        if unknown:
            self.unknown_commands += 1


class IntentParser:
    """Parse transcripts into intents and keep simple hit statistics."""

    def __init__(self, logger_override: logging.Logger | None = None) -> None:
        self.metrics = ParserMetrics()
        self._logger = logger_override or logger

    def parse(self, raw_command: str | None) -> Intent:
        """将语音转写文本解析为意图。"""
        intent = parse_intent(raw_command)
        self.metrics.record(unknown=isinstance(intent, Unknown))
        self._logger.info("command=%r intent=%s", raw_command, intent)
        return intent


def parse_intent(raw_command: str | None) -> Intent:
    """解析德语语音命令。

    规则按固定优先级依次尝试，第一个命中的规则决定结果：
    全部关闭 -> 场景 -> 温度 -> 调光 -> 开关灯 -> Unknown。

    Args:
        raw_command: 语音转写文本

    Returns:
        恰好一个 Intent 变体，不会抛出异常
    """
    if raw_command is None or not raw_command.strip():
        return Unknown("")

    command = raw_command.lower().strip()
    room = extract_room(command)

    if is_all_off_command(command):
        return AllOff(room=room)

    intent = parse_scene_activation(command)
    if intent is not None:
        return intent

    intent = parse_temperature(command, room)
    if intent is not None:
        return intent

    intent = parse_dimming(command, room)
    if intent is not None:
        return intent

    intent = parse_light_command(command, room)
    if intent is not None:
        return intent

    logger.debug("unknown_command command=%r", raw_command)
    return Unknown(raw_command)


def extract_room(command: str) -> str | None:
    """从命令中提取房间名并做别名归一。

    优先匹配 "im/in der/in <词>"，否则检查命令是否以已知房间别名结尾
    或包含独立的别名词。
    """
    match = ROOM_PATTERN.search(command)
    if match:
        return normalize_room(match.group(1))

    tokens = command.split()
    for alias, room in ROOM_ALIASES.items():
        if command.endswith(alias) or alias in tokens:
            return room

    return None


def normalize_room(room: str | None) -> str | None:
    """将房间名映射为规范写法，未知房间原样返回（小写）。"""
    if room is None:
        return None
    normalized = room.lower().strip()
    return ROOM_ALIASES.get(normalized, normalized)


def is_all_off_command(command: str) -> bool:
    return ALL_OFF_PATTERN.search(command) is not None


def parse_scene_activation(command: str) -> SceneActivate | None:
    """解析场景激活命令，场景名中的房间短语会被移除。"""
    match = SCENE_PATTERN.search(command)
    if not match:
        return None

    scene_name = ROOM_PHRASE_PATTERN.sub("", match.group(1))
    scene_name = " ".join(scene_name.split())
    if not scene_name:
        return None
    return SceneActivate(scene_name=scene_name)


def parse_temperature(command: str, room: str | None) -> Temperature | None:
    """解析温度命令。

    绝对："auf 21 grad"、"temperatur 20"；
    相对："wärmer"、"2 grad wärmer"、"kälter"、"1 grad weniger"。
    """
    if not BRIGHTNESS_PATTERN.search(command):
        match = ABSOLUTE_TEMPERATURE_PATTERN.search(command)
        if match:
            return Temperature(degrees=_to_float(match.group(1)), is_relative=False, room=room)

    if WARMER_PATTERN.search(command):
        degrees = _extract_number(command) or DEFAULT_TEMPERATURE_STEP
        return Temperature(degrees=degrees, is_relative=True, room=room)

    if COLDER_PATTERN.search(command):
        degrees = _extract_number(command) or DEFAULT_TEMPERATURE_STEP
        return Temperature(degrees=-degrees, is_relative=True, room=room)

    match = RELATIVE_TEMPERATURE_PATTERN.search(command)
    if match:
        degrees = _to_float(match.group(1))
        if match.group(2) == "weniger":
            degrees = -degrees
        return Temperature(degrees=degrees, is_relative=True, room=room)

    return None


def parse_dimming(command: str, room: str | None = None) -> Dim | None:
    """解析调光命令，亮度截断到 [0, 100]。"""
    match = DIM_PATTERN.search(command)
    if not match:
        return None

    level = max(MIN_DIM_LEVEL, min(MAX_DIM_LEVEL, int(match.group(1))))
    return Dim(level=level, room=room, device_name=extract_device_name(command))


def parse_light_command(command: str, room: str | None) -> LightOn | LightOff | None:
    """解析开灯/关灯命令，开灯短语优先判断。"""
    if LIGHT_ON_PATTERN.search(command):
        return LightOn(room=room, device_name=extract_device_name(command))
    if LIGHT_OFF_PATTERN.search(command):
        return LightOff(room=room, device_name=extract_device_name(command))
    return None


def extract_device_name(command: str) -> str | None:
    """去掉命令词、房间词和数值后，剩余部分视为显式设备名。"""
    remaining = [
        token
        for token in command.lower().split()
        if token not in DEVICE_NAME_STOP_WORDS
        and token not in ROOM_ALIASES
        and not LEVEL_TOKEN_PATTERN.match(token)
    ]
    cleaned = " ".join(remaining)

    if len(cleaned) >= MIN_DEVICE_NAME_LENGTH and cleaned not in ROOM_ALIASES:
        return cleaned
    return None


def _extract_number(command: str) -> float:
    match = NUMBER_PATTERN.search(command)
    if match:
        return _to_float(match.group(1))
    return 0.0


def _to_float(value: str) -> float:
    return float(value.replace(",", "."))
