import json
import tempfile
import unittest
from pathlib import Path

from mensa.domain.Catalog import Canteen, Catalog, Line, canonical_name


def _catalog():
    return Catalog([
        Canteen(id="adenauerring", name="Mensa Am Adenauerring", alternative_names=["Mensa Adenauerring"], lines=[
            Line(id="l1", name="Linie 1"),
            Line(id="l45", name="Linie 4/5", alternative_names=["Linie 4"]),
        ]),
        Canteen(id="moltke", name="Mensa Moltke", lines=[
            Line(id="wahl1", name="Wahlessen 1"),
        ]),
        Canteen(id="twin-a", name="Mensa  Twin"),
        Canteen(id="twin-b", name="mensa twin"),
    ])


class TestCatalogMatching(unittest.TestCase):

    def setUp(self):
        self.catalog = _catalog()

    def test_matches_canteen_by_exact_name(self):
        self.assertEqual(self.catalog.match_canteen_by_name("Mensa Moltke"), "moltke")
        self.assertEqual(self.catalog.match_canteen_by_name("Mensa Adenauerring"), "adenauerring")

    def test_matches_canteen_by_canonical_name(self):
        self.assertEqual(self.catalog.match_canteen_by_name("  mensa   MOLTKE "), "moltke")

    def test_exact_name_wins_over_ambiguous_canonical_name(self):
        self.assertEqual(self.catalog.match_canteen_by_name("mensa twin"), "twin-b")
        self.assertIsNone(self.catalog.match_canteen_by_name("MENSA TWIN"))

    def test_unknown_canteen_name(self):
        self.assertIsNone(self.catalog.match_canteen_by_name("unknown canteen name"))
        self.assertIsNone(self.catalog.match_canteen_by_name(""))
        self.assertIsNone(self.catalog.match_canteen_by_name(None))

    def test_matches_line_within_canteen_only(self):
        self.assertEqual(self.catalog.match_line_by_name("adenauerring", "Linie 4"), "l45")
        self.assertEqual(self.catalog.match_line_by_name("adenauerring", "linie 1"), "l1")
        self.assertIsNone(self.catalog.match_line_by_name("moltke", "Linie 1"))
        self.assertIsNone(self.catalog.match_line_by_name("nowhere", "Linie 1"))

    def test_lookup_by_id(self):
        self.assertEqual(self.catalog.get_canteen("moltke").name, "Mensa Moltke")
        self.assertIsNone(self.catalog.get_canteen("foo"))
        self.assertEqual(self.catalog.get_line("adenauerring", "l45").name, "Linie 4/5")
        self.assertIsNone(self.catalog.get_line("adenauerring", "bar"))
        self.assertIsNone(self.catalog.get_line("foo", "l1"))

    def test_canonical_name(self):
        self.assertEqual(canonical_name("  Gut &\tGünstig "), "gut & günstig")
        self.assertEqual(canonical_name("Erzbergerstraße"), canonical_name("ERZBERGERSTRASSE"))


class TestCatalogLoading(unittest.TestCase):

    def test_bundled_catalog(self):
        catalog = Catalog.default()
        self.assertGreaterEqual(len(catalog.canteens), 2)
        self.assertGreaterEqual(len(catalog.canteens[0].lines), 2)
        self.assertIn("adenauerring", catalog.canteen_ids)
        self.assertTrue(catalog.legend)
        for canteen in catalog.canteens:
            self.assertEqual(catalog.match_canteen_by_name(canteen.name), canteen.id)
            for line in canteen.lines:
                self.assertEqual(catalog.match_line_by_name(canteen.id, line.name), line.id)

    def test_load_from_files(self):
        with tempfile.TemporaryDirectory() as tmp:
            canteens_file = Path(tmp) / "canteens.json"
            canteens_file.write_text(json.dumps([{"id": "c", "name": "C", "lines": [{"id": "x", "name": "X"}]}]),
                                     encoding="utf-8")
            catalog = Catalog.load(canteens_file, None)
        self.assertEqual(catalog.canteen_ids, ["c"])
        self.assertEqual(catalog.legend, [])
        self.assertEqual(catalog.get_line("c", "x").alternative_names, [])


if __name__ == '__main__':
    unittest.main()
