import unittest
from datetime import datetime, timedelta

from mealplanner.tests.db_helpers import (
    add_meal,
    add_week_of_meals,
    clear_overrides,
    make_client,
    make_session_factory,
)

WEEK = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


class TestMealPlanApi(unittest.TestCase):

    def setUp(self):
        self.Session = make_session_factory()
        self.client = make_client(self.Session)
        with self.Session() as db:
            self.ids = add_week_of_meals(db)

    def tearDown(self):
        clear_overrides()

    def test_generate(self):
        resp = self.client.post('/api/mealplan/generate')
        self.assertEqual(resp.status_code, 200)
        plan = resp.json()
        self.assertEqual(list(plan), WEEK)
        self.assertEqual(plan["Friday"]["mealName"], "Eating out")
        self.assertEqual(plan["Friday"]["id"], 0)
        self.assertEqual(plan["Monday"]["id"], self.ids["easy"])

    def test_generate_with_skip_days(self):
        resp = self.client.post('/api/mealplan/generate', json={"skip_days": ["Monday", "Sunday"]})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(list(resp.json()), WEEK[1:6])

    def test_generate_rejects_unknown_day(self):
        resp = self.client.post('/api/mealplan/generate', json={"skip_days": ["Caturday"]})
        self.assertEqual(resp.status_code, 400)

    def test_generate_failure_names_day(self):
        with self.Session() as db:
            add_meal(db, "Leftovers", 6, last_planned=datetime.now())
        self.client.post('/api/mealplan/finalize', json={"plan": {"Sunday": self.ids["hard"]}})
        resp = self.client.post('/api/mealplan/generate')
        self.assertEqual(resp.status_code, 500)
        self.assertTrue(resp.json()["detail"].startswith("Error generating meal plan: failed picking Sunday meal"))

    def test_finalize_then_get_restores_plan(self):
        plan = self.client.post('/api/mealplan/generate').json()
        resp = self.client.post('/api/mealplan/finalize', json={"plan": plan})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["updated"], 6)

        restored = self.client.get('/api/mealplan').json()
        self.assertEqual(len(restored), 7)
        self.assertEqual(restored["Friday"]["mealName"], "Eating out")
        self.assertEqual({d: m["id"] for d, m in restored.items()}, {d: m["id"] for d, m in plan.items()})

    def test_get_without_history_generates(self):
        resp = self.client.get('/api/mealplan')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(list(resp.json()), WEEK)

    def test_finalize_unknown_meal(self):
        resp = self.client.post('/api/mealplan/finalize', json={"plan": {"Monday": 9999}})
        self.assertEqual(resp.status_code, 404)

    def test_swap_and_replace(self):
        resp = self.client.post('/api/mealplan/swap', json={"meal_id": self.ids["easy"], "day": "Monday"})
        self.assertEqual(resp.status_code, 200)
        self.assertNotEqual(resp.json()["id"], self.ids["easy"])

        resp = self.client.post('/api/mealplan/replace', json={"day": "Monday", "new_meal_id": self.ids["hard"]})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["mealName"], "Roast Chicken")

        resp = self.client.post('/api/mealplan/replace', json={"day": "Monday", "new_meal_id": 9999})
        self.assertEqual(resp.status_code, 404)

    def test_ics(self):
        resp = self.client.get('/api/mealplan/ics?monday=2024-05-20')
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.headers["content-type"].startswith("text/calendar"))
        self.assertIn("attachment", resp.headers["content-disposition"])
        body = resp.text
        self.assertTrue(body.startswith("BEGIN:VCALENDAR\r\n"))
        self.assertEqual(body.count("BEGIN:VEVENT"), 7)
        self.assertIn("DTSTART;VALUE=DATE:20240524", body)

    def test_ics_bad_date(self):
        self.assertEqual(self.client.get('/api/mealplan/ics?monday=next-week').status_code, 400)

    def test_pdf(self):
        resp = self.client.get('/api/mealplan/pdf')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers["content-type"], "application/pdf")
        self.assertTrue(resp.content.startswith(b"%PDF"))

    def test_shopping_list(self):
        resp = self.client.post('/api/shoppinglist',
                                json={"plan": [self.ids["easy"], self.ids["hard"], 0]})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), ["chicken", "onion", "potatoes", "tomatoes"])

    def test_recently_finalized_meals_are_not_regenerated(self):
        old = datetime.now() - timedelta(days=30)
        with self.Session() as db:
            spare = add_meal(db, "Cheese Toastie", 2, last_planned=old)
        self.client.post('/api/mealplan/finalize', json={"plan": {"Monday": self.ids["easy"]}})
        for _ in range(5):
            plan = self.client.post('/api/mealplan/generate').json()
            self.assertEqual(plan["Monday"]["id"], spare)


class TestFinalizeKeepsDays(unittest.TestCase):
    """Meals inserted hardest first, so ids run against the weekday order."""

    def setUp(self):
        self.Session = make_session_factory()
        self.client = make_client(self.Session)
        with self.Session() as db:
            self.sunday = add_meal(db, "Sunday Roast", 7)
            for name, effort in [("Lasagne", 5), ("Fish Pie", 4), ("Stir Fry", 3), ("Risotto", 4)]:
                add_meal(db, name, effort)
            self.monday = add_meal(db, "Beans on Toast", 1)

    def tearDown(self):
        clear_overrides()

    def _restored_ids(self):
        resp = self.client.get('/api/mealplan')
        self.assertEqual(resp.status_code, 200)
        return {d: m["id"] for d, m in resp.json().items()}

    def test_generated_plan_comes_back_day_for_day(self):
        plan = self.client.post('/api/mealplan/generate').json()
        self.assertGreater(plan["Monday"]["id"], plan["Sunday"]["id"])
        self.assertEqual(self.client.post('/api/mealplan/finalize', json={"plan": plan}).status_code, 200)
        self.assertEqual(self._restored_ids(), {d: m["id"] for d, m in plan.items()})

    def test_day_keys_sent_out_of_order(self):
        ids = {d: m["id"] for d, m in self.client.post('/api/mealplan/generate').json().items()}
        shuffled = {d: ids[d] for d in reversed(WEEK)}
        resp = self.client.post('/api/mealplan/finalize', json={"plan": shuffled})
        self.assertEqual(resp.json()["updated"], 6)
        restored = self._restored_ids()
        self.assertEqual(list(restored), WEEK)
        self.assertEqual(restored, ids)
        self.assertEqual(restored["Monday"], self.monday)
        self.assertEqual(restored["Sunday"], self.sunday)


if __name__ == '__main__':
    unittest.main()
