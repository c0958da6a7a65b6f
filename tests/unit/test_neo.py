import unittest
from datetime import date

import httpx

from impactsim import neo

FEED = {
    "element_count": 3,
    "near_earth_objects": {
        "2025-10-19": [
            {
                "id": "3542519",
                "name": "(2010 PK9)",
                "estimated_diameter": {"meters": {"estimated_diameter_min": 100.0, "estimated_diameter_max": 300.0}},
                "is_potentially_hazardous_asteroid": True,
                "close_approach_data": [{
                    "close_approach_date": "2025-10-19",
                    "relative_velocity": {"kilometers_per_second": "12.5"},
                    "miss_distance": {"kilometers": "7000000.0"},
                }],
            },
            {"id": "999", "name": "no approaches", "close_approach_data": []},
            {
                "id": "54321",
                "name": "(2025 XX1)",
                "close_approach_data": [{
                    "close_approach_date": "2025-10-19",
                    "relative_velocity": {"kilometers_per_second": "9.0"},
                    "miss_distance": {"kilometers": "1000.0"},
                }],
            },
        ],
        "2025-10-20": [
            {
                "id": "2000433",
                "name": "433 Eros (A898 PA)",
                "estimated_diameter": {"meters": {"estimated_diameter_min": 13000.0,
                                                  "estimated_diameter_max": 29000.0}},
                "close_approach_data": [{
                    "close_approach_date": "2025-10-20",
                    "relative_velocity": {"kilometers_per_second": "not-a-number"},
                    "miss_distance": {"kilometers": "26000.5"},
                }],
            },
        ],
    },
}


class TestNeoFeed(unittest.TestCase):
    def test_clean_asteroid_name(self):
        self.assertEqual(neo.clean_asteroid_name("433 Eros (A898 PA)"), "433 Eros")
        self.assertEqual(neo.clean_asteroid_name("(2010 PK9)"), "2010 PK9")
        self.assertEqual(neo.clean_asteroid_name(None), "Unknown Asteroid")
        self.assertEqual(neo.clean_asteroid_name(""), "Unknown Asteroid")

    def test_parse_sorts_by_distance(self):
        presets = neo.parse_neo_feed(FEED)
        self.assertEqual([p.id for p in presets], ["2000433", "3542519"])
        eros, pk9 = presets
        self.assertEqual(eros.name, "433 Eros")
        self.assertEqual(eros.velocity_kmps, neo.DEFAULT_VELOCITY_KMPS)
        self.assertFalse(eros.is_potentially_hazardous)
        self.assertEqual(pk9.name, "2010 PK9")
        self.assertEqual(pk9.diameter_avg_m, 200.0)
        self.assertEqual(pk9.velocity_kmps, 12.5)
        self.assertTrue(pk9.is_potentially_hazardous)

    def test_parse_skips_objects_without_diameter(self):
        presets = neo.parse_neo_feed(FEED)
        self.assertNotIn("54321", [p.id for p in presets])
        for preset in presets:
            self.assertGreater(preset.to_asteroid().diameter_m, 0.0)

    def test_fetch_sends_window_and_key(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(dict(request.url.params))
            return httpx.Response(200, json=FEED)

        with httpx.Client(transport=httpx.MockTransport(handler)) as client:
            presets = neo.fetch_neo_feed(client, "secret", start=date(2025, 10, 19))
        self.assertEqual(len(presets), 2)
        self.assertEqual(seen["start_date"], "2025-10-19")
        self.assertEqual(seen["end_date"], "2025-10-26")
        self.assertEqual(seen["api_key"], "secret")

    def test_fetch_falls_back_on_http_error(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(503, text="down"))
        with httpx.Client(transport=transport) as client:
            with self.assertLogs("impactsim.neo", level="WARNING"):
                presets = neo.fetch_neo_feed(client, "k", start=date(2025, 10, 19))
        self.assertEqual(presets, list(neo.FAMOUS_ASTEROIDS))

    def test_fetch_falls_back_on_bad_json(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>"))
        with httpx.Client(transport=transport) as client:
            presets = neo.fetch_neo_feed(client, "k", start=date(2025, 10, 19))
        self.assertEqual(presets[0].name, "Apophis")

    def test_preset_to_asteroid(self):
        apophis = neo.FAMOUS_ASTEROIDS[0]
        asteroid = apophis.to_asteroid(angle_deg=30.0, density_kgpm3=2600.0)
        self.assertEqual(asteroid.diameter_m, 505.0)
        self.assertEqual(asteroid.velocity_kmps, 7.4)
        self.assertEqual(asteroid.distance_km, 31600.0)
        self.assertEqual(asteroid.angle_deg, 30.0)


if __name__ == '__main__':
    unittest.main()
