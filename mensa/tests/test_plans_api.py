import unittest

from fastapi.testclient import TestClient

from mensa.api.api_run import create_app
from mensa.domain.DateKey import DateKey
from mensa.infra.Plan_Cache import PlanCache
from mensa.infra.storage import MemoryAdapter
from mensa.tests.fakes import BrokenReadAdapter, default_catalog

MEALS = [{
    "name": "foo bar baz",
    "price": "1,50 €",
    "additives": ["We", "So"],
    "classifiers": ["VG"],
}]


class PlansApiTestCase(unittest.TestCase):

    def setUp(self):
        self.catalog = default_catalog()
        self.cache = PlanCache(MemoryAdapter())

    @property
    def client(self):
        return TestClient(create_app(self.cache, self.catalog))


class TestPlansList(PlansApiTestCase):

    def test_empty_cache(self):
        resp = self.client.get('/plans')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"success": True, "data": []})

    def test_lists_cached_dates_in_order(self):
        for date in (DateKey(2023, 3, 3), DateKey(2022, 2, 17), DateKey(2023, 2, 14), DateKey(2023, 2, 13)):
            self.cache.put(date, [])
        resp = self.client.get('/plans')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {
            "success": True,
            "data": [
                {"date": {"year": 2022, "month": 2, "day": 17}},
                {"date": {"year": 2023, "month": 2, "day": 13}},
                {"date": {"year": 2023, "month": 2, "day": 14}},
                {"date": {"year": 2023, "month": 3, "day": 3}},
            ],
        })


class TestPlanDetail(PlansApiTestCase):

    def setUp(self):
        super().setUp()
        canteen = self.catalog.canteens[0]
        self.cache.put(DateKey(2023, 2, 13), [])
        self.cache.put(DateKey(2023, 2, 14), [
            {
                "id": canteen.id,
                "date": {"year": 2023, "month": 2, "day": 14},
                "name": canteen.name,
                "lines": [{"id": line.id, "name": line.name, "meals": MEALS} for line in canteen.lines],
            },
            {
                "id": None,
                "date": {"year": 2023, "month": 2, "day": 14},
                "name": "unknown canteen",
                "lines": [],
            },
        ])

    def test_non_date_paths_are_unknown_routes(self):
        client = self.client
        for value in ('foo', '2021-02-17T12:00:00Z', '--', 'YYYY-MM-DD'):
            resp = client.get(f'/plans/{value}')
            self.assertEqual(resp.status_code, 404, value)
            self.assertEqual(resp.json(), {"error": "route not found"}, value)

    def test_invalid_dates_are_bad_requests(self):
        client = self.client
        for value in ('0000-00-00', '2023-00-01', '2023-13-01', '2023-04-00', '2023-04-32', '2023-02-29'):
            resp = client.get(f'/plans/{value}')
            self.assertEqual(resp.status_code, 400, value)
            self.assertEqual(resp.json(), {"error": "malformed date"}, value)

    def test_not_cached_date(self):
        resp = self.client.get('/plans/2023-03-15')
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"error": "plan not found"})

    def test_empty_plan_is_found(self):
        resp = self.client.get('/plans/2023-03-13')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"success": True, "data": []})

    def test_returns_the_plan(self):
        canteen = self.catalog.canteens[0]
        resp = self.client.get('/plans/2023-03-14')
        self.assertEqual(resp.status_code, 200)
        data = resp.json()["data"]
        self.assertEqual(len(data), 2)
        self.assertEqual(data[0], {
            "canteen": {"id": canteen.id, "name": canteen.name},
            "date": {"year": 2023, "month": 2, "day": 14},
            "lines": [{"id": line.id, "name": line.name, "meals": MEALS} for line in canteen.lines],
        })
        self.assertEqual(data[1]["canteen"], {"id": None, "name": "unknown canteen"})

    def test_canteens_filter(self):
        canteen = self.catalog.canteens[0]
        other = self.catalog.canteens[1]
        resp = self.client.get('/plans/2023-03-14', params={"canteens": f"{other.id},{canteen.id},{canteen.id}"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([p["canteen"]["id"] for p in resp.json()["data"]], [canteen.id])

        resp = self.client.get('/plans/2023-03-14', params={"canteens": other.id})
        self.assertEqual(resp.json(), {"success": True, "data": []})

    def test_invalid_canteens_filter(self):
        client = self.client
        for query in ('?canteens=', '?canteens=foo', f'?canteens={self.catalog.canteens[0].id},foo',
                      f'?canteens={self.catalog.canteens[0].id}&canteens={self.catalog.canteens[1].id}'):
            resp = client.get(f'/plans/2023-03-14{query}')
            self.assertEqual(resp.status_code, 400, query)
            self.assertEqual(resp.json(), {"error": "invalid filter: canteens"}, query)

    def test_storage_faults_are_internal_errors(self):
        self.cache = PlanCache(BrokenReadAdapter({"2023-03-14.json": "[]"}, broken={"2023-03-14.json"}))
        client = TestClient(create_app(self.cache, self.catalog), raise_server_exceptions=False)
        with self.assertLogs("mensa.api.responses", level="ERROR"):
            resp = client.get('/plans/2023-03-14')
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "internal_server_error"})

    def test_non_list_cache_file_is_an_internal_error(self):
        self.cache = PlanCache(MemoryAdapter({"2023-03-14.json": "null"}))
        client = TestClient(create_app(self.cache, self.catalog), raise_server_exceptions=False)
        with self.assertLogs("mensa.api.responses", level="ERROR"):
            resp = client.get('/plans/2023-03-14')
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "internal_server_error"})


if __name__ == '__main__':
    unittest.main()
