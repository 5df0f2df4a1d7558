"""演示数据。"""

from voice_control.models import Device, Scene, Zone


DEMO_ZONES = [
    Zone(id="zone-wohnzimmer", name="Wohnzimmer"),
    Zone(id="zone-kueche", name="Küche"),
    Zone(id="zone-bad", name="Bad"),
    Zone(id="zone-garten", name="Garten"),
]

DEMO_DEVICES = [
    Device.from_capabilities(
        id="lamp-1",
        name="Stehlampe",
        capabilities={"onoff": {"value": False}},
        zone_id="zone-wohnzimmer",
    ),
    Device.from_capabilities(
        id="lamp-2",
        name="Deckenlicht",
        capabilities={"onoff": {"value": True}},
        zone_id="zone-wohnzimmer",
    ),
    Device.from_capabilities(
        id="dimmer-1",
        name="Leselampe",
        capabilities={"dim": {"value": 0.4}},
        zone_id="zone-kueche",
    ),
    Device.from_capabilities(
        id="lamp-3",
        name="Spiegellicht",
        capabilities={"onoff": {"value": False}},
        zone_id="zone-bad",
    ),
    Device.from_capabilities(
        id="thermostat-1",
        name="Heizung Wohnzimmer",
        capabilities={"target_temperature": {"value": 21.0}, "measure_temperature": {"value": 20.4}},
        zone_id="zone-wohnzimmer",
    ),
    Device.from_capabilities(
        id="thermostat-2",
        name="Heizung Bad",
        capabilities={"target_temperature": {"value": None}},
        zone_id="zone-bad",
    ),
    Device.from_capabilities(
        id="speaker-1",
        name="Küchenradio",
        capabilities={"speaker_playing": {"value": True}, "volume_set": {"value": 0.3}},
        zone_id="zone-kueche",
    ),
    Device.from_capabilities(
        id="button-1",
        name="Gartenpumpe",
        capabilities={"button": {}},
        zone_id="zone-garten",
    ),
]

DEMO_SCENES = [
    Scene(id="flow-1", name="Gute Nacht"),
    Scene(id="flow-2", name="Guten Morgen"),
    Scene(id="flow-3", name="Filmabend", folder="Wohnzimmer"),
    Scene(id="flow-4", name="Urlaub", enabled=False),
]
