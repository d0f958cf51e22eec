import unittest

from mealplanner.tests.db_helpers import add_meal, clear_overrides, make_client, make_session_factory


class TestStepsApi(unittest.TestCase):

    def setUp(self):
        self.Session = make_session_factory()
        self.client = make_client(self.Session)
        with self.Session() as db:
            self.meal_id = add_meal(db, "Pancakes", 2, steps=["Whisk", "Rest"])
        self.base = f'/api/meals/{self.meal_id}/steps'

    def tearDown(self):
        clear_overrides()

    def _instructions(self):
        return [s["instruction"] for s in self.client.get(self.base).json()]

    def test_list_steps(self):
        resp = self.client.get(self.base)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([(s["stepNumber"], s["instruction"]) for s in resp.json()],
                         [(1, "Whisk"), (2, "Rest")])
        self.assertEqual(self.client.get('/api/meals/999/steps').status_code, 404)

    def test_add_step(self):
        resp = self.client.post(self.base, json={"instruction": "Fry"})
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["stepNumber"], 3)
        self.assertEqual(self.client.post(self.base, json={"instruction": "  "}).status_code, 400)

    def test_explicit_step_numbers(self):
        resp = self.client.post(self.base, json={"instruction": "Sift flour", "stepNumber": 1})
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(self._instructions(), ["Sift flour", "Whisk", "Rest"])

        self.assertEqual(self.client.post(self.base, json={"instruction": "X", "stepNumber": 7}).status_code, 400)
        rest = self.client.get(self.base).json()[2]["id"]
        resp = self.client.put(f'{self.base}/{rest}', json={"instruction": "Rest", "stepNumber": 9})
        self.assertEqual(resp.status_code, 400)
        resp = self.client.put(f'{self.base}/{rest}', json={"instruction": "Rest", "stepNumber": 1})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([(s["stepNumber"], s["instruction"]) for s in self.client.get(self.base).json()],
                         [(1, "Rest"), (2, "Sift flour"), (3, "Whisk")])

    def test_bulk_json_text(self):
        resp = self.client.post(f'{self.base}/bulk', json={"text": "1. Heat pan\n2. Fry\n3. Flip"})
        self.assertEqual(resp.status_code, 201)
        self.assertEqual([s["stepNumber"] for s in resp.json()], [3, 4, 5])
        self.assertEqual(self._instructions(), ["Whisk", "Rest", "Heat pan", "Fry", "Flip"])

    def test_bulk_json_instructions(self):
        resp = self.client.post(f'{self.base}/bulk', json={"instructions": ["Serve", " ", "Eat"]})
        self.assertEqual(resp.status_code, 201)
        self.assertEqual([s["instruction"] for s in resp.json()], ["Serve", "Eat"])

    def test_bulk_plain_text(self):
        resp = self.client.post(f'{self.base}/bulk', content="- Plate up\n- Add syrup",
                                headers={"Content-Type": "text/plain"})
        self.assertEqual(resp.status_code, 201)
        self.assertEqual([s["instruction"] for s in resp.json()], ["Plate up", "Add syrup"])

    def test_bulk_rejects_empty_input(self):
        self.assertEqual(self.client.post(f'{self.base}/bulk', json={}).status_code, 400)
        resp = self.client.post(f'{self.base}/bulk', content="   ", headers={"Content-Type": "text/plain"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Empty request body")

    def test_reorder(self):
        ids = [s["id"] for s in self.client.get(self.base).json()]
        resp = self.client.put(f'{self.base}/reorder', json={"stepIds": list(reversed(ids))})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([(s["stepNumber"], s["instruction"]) for s in resp.json()],
                         [(1, "Rest"), (2, "Whisk")])

    def test_reorder_validation(self):
        resp = self.client.put(f'{self.base}/reorder', json={"stepIds": []})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "No step IDs provided")
        ids = [s["id"] for s in self.client.get(self.base).json()]
        self.assertEqual(self.client.put(f'{self.base}/reorder', json={"stepIds": ids[:1]}).status_code, 400)

    def test_update_and_delete_step(self):
        first = self.client.get(self.base).json()[0]["id"]
        resp = self.client.put(f'{self.base}/{first}', json={"instruction": "Whisk thoroughly"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["instruction"], "Whisk thoroughly")

        self.assertEqual(self.client.delete(f'{self.base}/{first}').status_code, 200)
        steps = self.client.get(self.base).json()
        self.assertEqual([(s["stepNumber"], s["instruction"]) for s in steps], [(1, "Rest")])
        self.assertEqual(self.client.delete(f'{self.base}/{first}').status_code, 404)

    def test_delete_all_steps(self):
        resp = self.client.delete(self.base)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["deleted"], 2)
        self.assertEqual(self._instructions(), [])


if __name__ == '__main__':
    unittest.main()
