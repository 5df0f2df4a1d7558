"""离线语音命令 demo。

用法:
    python src/main.py "mach das licht an im wohnzimmer"

设置 VOICE_INVENTORY_FILE 指向 YAML 清单时使用该清单，否则使用内置演示数据。
"""

import logging
import os
import sys
from pathlib import Path

from intent_parser import IntentParser
from voice_control.demo_data import DEMO_DEVICES, DEMO_SCENES, DEMO_ZONES
from voice_control.executor import CommandExecutor, ExecutorConfig
from voice_control.inventory import FakeHomey, load_inventory_yaml

DEMO_COMMANDS = [
    "mach das licht an im wohnzimmer",
    "dimme leselampe auf 30 prozent",
    "2 grad wärmer im wohnzimmer",
    "aktiviere gute nacht",
    "alles aus",
]


def build_client() -> FakeHomey:
    inventory_file = os.getenv("VOICE_INVENTORY_FILE")
    if inventory_file:
        return load_inventory_yaml(Path(inventory_file).read_text(encoding="utf-8"))
    return FakeHomey(devices=DEMO_DEVICES, zones=DEMO_ZONES, scenes=DEMO_SCENES)


def main(argv: list[str]) -> int:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    client = build_client()
    parser = IntentParser()
    executor = CommandExecutor(client, ExecutorConfig.from_env())

    commands = [" ".join(argv)] if argv else DEMO_COMMANDS
    for command in commands:
        intent = parser.parse(command)
        result = executor.execute(intent)
        print(f"{command!r} -> {intent}")
        print(f"  success={result.success} affected={result.affected_count} message={result.message}")

    for call in client.calls:
        print(f"  call: {call}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
