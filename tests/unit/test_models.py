"""测试数据模型。"""

import unittest

from voice_control.models import Device, ExecutionResult, MatchResult, Scene, Zone


class TestDeviceFromCapabilities(unittest.TestCase):
    """测试按 capabilitiesObj 构造设备。"""

    def test_thermostat_priority_over_onoff(self):
        """target_temperature 优先于 onoff。"""
        device = Device.from_capabilities(
            id="t1",
            name="Heizung",
            capabilities={
                "onoff": {"value": True},
                "target_temperature": {"value": 21},
            },
        )
        self.assertEqual(device.capability, "target_temperature")
        self.assertTrue(device.on)
        self.assertEqual(device.cached_target_temperature, 21.0)

    def test_onoff_priority_over_dim(self):
        device = Device.from_capabilities(
            id="l1",
            name="Stehlampe",
            capabilities={"dim": {"value": 0.5}, "onoff": {"value": False}},
        )
        self.assertEqual(device.capability, "onoff")
        self.assertFalse(device.on)

    def test_dim_value_zero_is_off(self):
        device = Device.from_capabilities(
            id="d1", name="Leselampe", capabilities={"dim": {"value": 0.0}}
        )
        self.assertEqual(device.capability, "dim")
        self.assertFalse(device.on)

    def test_dim_value_positive_is_on(self):
        device = Device.from_capabilities(
            id="d1", name="Leselampe", capabilities={"dim": {"value": 0.4}}
        )
        self.assertTrue(device.on)

    def test_button_always_on(self):
        device = Device.from_capabilities(id="b1", name="Pumpe", capabilities={"button": {}})
        self.assertEqual(device.capability, "button")
        self.assertTrue(device.on)

    def test_string_boolean(self):
        device = Device.from_capabilities(
            id="s1", name="Radio", capabilities={"speaker_playing": {"value": "true"}}
        )
        self.assertEqual(device.capability, "speaker_playing")
        self.assertTrue(device.on)

    def test_unknown_capabilities_default_onoff(self):
        device = Device.from_capabilities(
            id="x1", name="Sensor", capabilities={"measure_temperature": {"value": 19.5}}
        )
        self.assertEqual(device.capability, "onoff")
        self.assertTrue(device.on)

    def test_missing_value_logs_warning(self):
        """缺少取值时视为关闭并记录警告。"""
        with self.assertLogs("voice_control.models", level="WARNING") as captured:
            device = Device.from_capabilities(
                id="t2", name="Heizung Bad", capabilities={"target_temperature": {"value": None}}
            )
        self.assertFalse(device.on)
        self.assertIsNone(device.cached_target_temperature)
        self.assertIn("capability_value_missing", captured.output[0])

    def test_zone_id_kept(self):
        device = Device.from_capabilities(
            id="l1", name="Stehlampe", capabilities={"onoff": {"value": True}}, zone_id="z1"
        )
        self.assertEqual(device.zone_id, "z1")
        self.assertIsNone(device.zone_name)


class TestValueObjects(unittest.TestCase):
    def test_execution_result_defaults(self):
        result = ExecutionResult(success=True, message="ok")
        self.assertEqual(result.affected_count, 0)
        self.assertIsNone(result.hint)

    def test_match_result_frozen(self):
        result = MatchResult(score=1.0, match_type="exact", matched_id="z1")
        with self.assertRaises(AttributeError):
            result.score = 0.5  # type: ignore[misc]

    def test_scene_defaults(self):
        scene = Scene(id="s1", name="Gute Nacht")
        self.assertTrue(scene.enabled)
        self.assertTrue(scene.triggerable)

    def test_zone_parent(self):
        self.assertIsNone(Zone(id="z1", name="Wohnzimmer").parent_id)


if __name__ == "__main__":
    unittest.main()
