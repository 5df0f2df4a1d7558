"""德语命令词表。

房间别名、停用词与各类命令短语的正则，在导入时构建一次，运行期不修改。
"""

import re
from types import MappingProxyType

# 别名 -> 规范房间名（统一 ASCII 替写与变音写法）
ROOM_ALIASES = MappingProxyType(
    {
        "wohnzimmer": "wohnzimmer",
        "schlafzimmer": "schlafzimmer",
        "küche": "küche",
        "kueche": "küche",
        "badezimmer": "bad",
        "bad": "bad",
        "flur": "flur",
        "büro": "büro",
        "buero": "büro",
        "keller": "keller",
        "garage": "garage",
        "kinderzimmer": "kinderzimmer",
        "esszimmer": "esszimmer",
        "garten": "garten",
    }
)

# 用于剥离设备名的停用词：灯/开/关/切换/调光等动词、冠词、房间介词
DEVICE_NAME_STOP_WORDS = frozenset(
    {
        "licht",
        "lichter",
        "an",
        "aus",
        "ein",
        "schalte",
        "schalten",
        "mach",
        "mache",
        "machen",
        "anmachen",
        "ausmachen",
        "einschalten",
        "ausschalten",
        "auf",
        "helligkeit",
        "dimme",
        "dimmen",
        "im",
        "in",
        "der",
        "die",
        "das",
        "den",
        "bitte",
        "prozent",
        "%",
    }
)

ROOM_PATTERN = re.compile(r"\b(?:im|in der|in)\s+(\w+)")
ROOM_PHRASE_PATTERN = re.compile(r"\b(?:im|in der|in)\s+\w+")

ALL_OFF_PATTERN = re.compile(r"alles aus|alle aus|komplett aus")

SCENE_PATTERN = re.compile(r"(?:aktiviere|starte|scene|szene)\s+(.+)")

_NUMBER = r"(\d+(?:[.,]\d+)?)"

ABSOLUTE_TEMPERATURE_PATTERN = re.compile(
    r"(?:auf|temperatur)\s+" + _NUMBER + r"(?!\d|[.,]\d|\s*(?:%|prozent))(?:\s*grad)?"
)
WARMER_PATTERN = re.compile(r"wärmer|waermer")
COLDER_PATTERN = re.compile(r"kälter|kaelter|kühler|kuehler")
RELATIVE_TEMPERATURE_PATTERN = re.compile(_NUMBER + r"\s*grad\s*(mehr|weniger)")
NUMBER_PATTERN = re.compile(_NUMBER)

# 出现这些词时 "auf N" 表示亮度而不是温度
BRIGHTNESS_PATTERN = re.compile(r"\b(?:helligkeit|dimme|dimmen)\b")

DIM_PATTERN = re.compile(
    r"(?:auf|helligkeit|dimme auf|dimmen auf)\s*(\d+)\s*(?:%|prozent)?"
)

LIGHT_ON_PATTERN = re.compile(
    r"licht an|licht ein|schalte licht ein|mach.*licht an|licht anmachen"
)
LIGHT_OFF_PATTERN = re.compile(
    r"licht aus|schalte licht aus|mach.*licht aus|licht ausmachen"
)

LEVEL_TOKEN_PATTERN = re.compile(r"^\d+(?:[.,]\d+)?%?$")
