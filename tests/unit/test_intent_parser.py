"""测试德语语音命令解析。"""

import logging
import unittest

from intent_parser import (
    AllOff,
    Dim,
    IntentParser,
    LightOff,
    LightOn,
    SceneActivate,
    Temperature,
    Unknown,
    normalize_room,
    parse_dimming,
    parse_intent,
)
from intent_parser.parser import extract_device_name, extract_room


class TestLightCommands(unittest.TestCase):
    """测试开关灯命令。"""

    def test_light_on_with_room(self):
        self.assertEqual(
            parse_intent("Mach das Licht an im Wohnzimmer"),
            LightOn(room="wohnzimmer", device_name=None),
        )

    def test_light_off_with_room(self):
        self.assertEqual(
            parse_intent("licht aus in der küche"),
            LightOff(room="küche", device_name=None),
        )

    def test_light_on_with_device_name(self):
        self.assertEqual(
            parse_intent("licht an stehlampe"),
            LightOn(room=None, device_name="stehlampe"),
        )

    def test_room_alias_without_preposition(self):
        """无介词时按别名词识别房间。"""
        self.assertEqual(parse_intent("kueche licht an"), LightOn(room="küche"))

    def test_on_checked_before_off(self):
        self.assertIsInstance(parse_intent("schalte licht ein"), LightOn)
        self.assertIsInstance(parse_intent("licht ausmachen"), LightOff)


class TestAllOff(unittest.TestCase):
    def test_all_off(self):
        self.assertEqual(parse_intent("Alles aus"), AllOff(room=None))

    def test_all_off_with_room(self):
        self.assertEqual(parse_intent("komplett aus im büro"), AllOff(room="büro"))

    def test_all_off_wins_over_light(self):
        """全部关闭优先于开关灯规则。"""
        self.assertEqual(parse_intent("alles aus licht aus"), AllOff())


class TestSceneActivation(unittest.TestCase):
    def test_activate(self):
        self.assertEqual(parse_intent("Aktiviere Gute Nacht"), SceneActivate("gute nacht"))

    def test_room_phrase_removed(self):
        self.assertEqual(
            parse_intent("aktiviere gute nacht im schlafzimmer"),
            SceneActivate("gute nacht"),
        )

    def test_szene_keyword(self):
        self.assertEqual(parse_intent("szene filmabend"), SceneActivate("filmabend"))

    def test_empty_scene_name_not_scene(self):
        """去掉房间短语后为空时不生成场景意图。"""
        self.assertNotIsInstance(parse_intent("starte im wohnzimmer"), SceneActivate)


class TestTemperature(unittest.TestCase):
    """测试温度命令。"""

    def test_absolute(self):
        self.assertEqual(
            parse_intent("Temperatur auf 21 Grad"),
            Temperature(degrees=21.0, is_relative=False, room=None),
        )

    def test_absolute_decimal_comma(self):
        self.assertEqual(
            parse_intent("heizung auf 21,5 grad im bad"),
            Temperature(degrees=21.5, is_relative=False, room="bad"),
        )

    def test_warmer_default_step(self):
        self.assertEqual(parse_intent("wärmer"), Temperature(degrees=1.0, is_relative=True))

    def test_warmer_with_number(self):
        self.assertEqual(
            parse_intent("2 grad wärmer im wohnzimmer"),
            Temperature(degrees=2.0, is_relative=True, room="wohnzimmer"),
        )

    def test_colder(self):
        self.assertEqual(
            parse_intent("kälter im bad"),
            Temperature(degrees=-1.0, is_relative=True, room="bad"),
        )

    def test_grad_weniger(self):
        self.assertEqual(
            parse_intent("2 grad weniger im schlafzimmer"),
            Temperature(degrees=-2.0, is_relative=True, room="schlafzimmer"),
        )

    def test_grad_mehr(self):
        self.assertEqual(
            parse_intent("3 grad mehr"),
            Temperature(degrees=3.0, is_relative=True),
        )

    def test_percent_is_not_temperature(self):
        """auf N% 表示亮度而不是温度。"""
        self.assertNotIsInstance(parse_intent("stehlampe auf 30%"), Temperature)


class TestDimming(unittest.TestCase):
    """测试调光命令。"""

    def test_dim_with_room(self):
        self.assertEqual(
            parse_intent("dimme licht auf 50 prozent im wohnzimmer"),
            Dim(level=50, room="wohnzimmer", device_name=None),
        )

    def test_dim_with_device_name(self):
        self.assertEqual(
            parse_intent("stehlampe auf 30%"),
            Dim(level=30, room=None, device_name="stehlampe"),
        )

    def test_brightness_keyword(self):
        self.assertEqual(parse_intent("helligkeit 70"), Dim(level=70))

    def test_level_clamped(self):
        """亮度截断到 [0, 100]。"""
        self.assertEqual(parse_dimming("dimme auf 150%").level, 100)
        self.assertEqual(parse_dimming("dimme auf 0").level, 0)

    def test_no_number(self):
        self.assertIsNone(parse_dimming("dimme das licht"))


class TestUnknown(unittest.TestCase):
    def test_empty(self):
        self.assertEqual(parse_intent(""), Unknown(""))
        self.assertEqual(parse_intent("   "), Unknown(""))
        self.assertEqual(parse_intent(None), Unknown(""))

    def test_unrecognized_keeps_original_text(self):
        self.assertEqual(parse_intent("Was ist das Wetter"), Unknown("Was ist das Wetter"))


class TestHelpers(unittest.TestCase):
    def test_normalize_room(self):
        self.assertEqual(normalize_room("Buero"), "büro")
        self.assertEqual(normalize_room("badezimmer"), "bad")
        self.assertEqual(normalize_room("Dachboden"), "dachboden")
        self.assertIsNone(normalize_room(None))

    def test_extract_room(self):
        self.assertEqual(extract_room("licht an im kinderzimmer"), "kinderzimmer")
        self.assertIsNone(extract_room("licht an"))

    def test_extract_device_name(self):
        self.assertEqual(extract_device_name("schalte die stehlampe ein"), "stehlampe")
        self.assertIsNone(extract_device_name("licht an"))
        self.assertIsNone(extract_device_name("licht an ab"))
        self.assertIsNone(extract_device_name("licht an im wohnzimmer"))


class TestIntentParser(unittest.TestCase):
    """测试带统计的解析器。"""

    def test_metrics(self):
        parser = IntentParser()
        parser.parse("licht an")
        parser.parse("wie spät ist es")

        self.assertEqual(parser.metrics.total_commands, 2)
        self.assertEqual(parser.metrics.unknown_commands, 1)
        self.assertAlmostEqual(parser.metrics.unknown_ratio, 0.5)

    def test_empty_ratio(self):
        self.assertEqual(IntentParser().metrics.unknown_ratio, 0.0)

    def test_logs_intent(self):
        custom = logging.getLogger("voice.test")
        parser = IntentParser(logger_override=custom)
        with self.assertLogs("voice.test", level="INFO") as captured:
            parser.parse("alles aus")
        self.assertIn("AllOff", captured.output[0])


if __name__ == "__main__":
    unittest.main()
