import unittest

from mealplanner.domain.errors import InvalidStepOrderError, MealNotFoundError, StepNotFoundError
from mealplanner.infra.Step_Repository import StepRepository
from mealplanner.tests.db_helpers import add_meal, make_session_factory


class TestStepRepository(unittest.TestCase):

    def setUp(self):
        self.session = make_session_factory()()
        self.repo = StepRepository(self.session)
        self.meal_id = add_meal(self.session, "Pancakes", 2, steps=["Whisk", "Rest", "Fry"])

    def tearDown(self):
        self.session.close()

    def _numbers(self):
        return [(s.step_number, s.instruction) for s in self.repo.get_steps(self.meal_id)]

    def test_get_steps_ordered(self):
        self.assertEqual(self._numbers(), [(1, "Whisk"), (2, "Rest"), (3, "Fry")])

    def test_unknown_meal(self):
        with self.assertRaises(MealNotFoundError):
            self.repo.get_steps(999)
        with self.assertRaises(MealNotFoundError):
            self.repo.add_step(999, "Nope")

    def test_add_step_takes_next_number(self):
        step = self.repo.add_step(self.meal_id, "Serve with lemon")
        self.assertEqual(step.step_number, 4)
        self.assertEqual(step.meal_id, self.meal_id)

    def test_add_step_at_position_shifts_later_steps(self):
        step = self.repo.add_step(self.meal_id, "Sift flour", step_number=1)
        self.assertEqual(step.step_number, 1)
        self.assertEqual(self._numbers(), [(1, "Sift flour"), (2, "Whisk"), (3, "Rest"), (4, "Fry")])
        self.repo.add_step(self.meal_id, "Serve", step_number=5)
        self.assertEqual(self._numbers()[-1], (5, "Serve"))

    def test_add_step_out_of_range(self):
        for bad in (5, 9, -1):
            with self.assertRaises(InvalidStepOrderError):
                self.repo.add_step(self.meal_id, "Nope", step_number=bad)
        self.assertEqual(self._numbers(), [(1, "Whisk"), (2, "Rest"), (3, "Fry")])

    def test_add_steps_continue_numbering(self):
        steps = self.repo.add_steps(self.meal_id, ["Flip", "Plate up"])
        self.assertEqual([s.step_number for s in steps], [4, 5])
        self.assertEqual(self.repo.add_steps(self.meal_id, []), [])

    def test_update_step(self):
        step_id = self.repo.get_steps(self.meal_id)[1].id
        step = self.repo.update_step(self.meal_id, step_id, "Rest for 20 minutes")
        self.assertEqual(step.instruction, "Rest for 20 minutes")
        self.assertEqual(step.step_number, 2)

    def test_update_step_moves_it(self):
        whisk = self.repo.get_steps(self.meal_id)[0].id
        step = self.repo.update_step(self.meal_id, whisk, "Whisk well", step_number=3)
        self.assertEqual(step.step_number, 3)
        self.assertEqual(self._numbers(), [(1, "Rest"), (2, "Fry"), (3, "Whisk well")])

    def test_update_step_out_of_range(self):
        whisk = self.repo.get_steps(self.meal_id)[0].id
        for bad in (4, 99, -2):
            with self.assertRaises(InvalidStepOrderError):
                self.repo.update_step(self.meal_id, whisk, "Whisk", step_number=bad)
        self.assertEqual(self._numbers(), [(1, "Whisk"), (2, "Rest"), (3, "Fry")])

    def test_delete_step_closes_gap(self):
        first = self.repo.get_steps(self.meal_id)[0].id
        self.repo.delete_step(self.meal_id, first)
        self.assertEqual(self._numbers(), [(1, "Rest"), (2, "Fry")])
        with self.assertRaises(StepNotFoundError):
            self.repo.delete_step(self.meal_id, first)

    def test_reorder(self):
        ids = [s.id for s in self.repo.get_steps(self.meal_id)]
        steps = self.repo.reorder_steps(self.meal_id, [ids[2], ids[0], ids[1]])
        self.assertEqual([(s.step_number, s.instruction) for s in steps],
                         [(1, "Fry"), (2, "Whisk"), (3, "Rest")])

    def test_reorder_requires_every_step_once(self):
        ids = [s.id for s in self.repo.get_steps(self.meal_id)]
        for bad in ([ids[0], ids[1]], [ids[0], ids[0], ids[1]], ids + [999]):
            with self.assertRaises(InvalidStepOrderError):
                self.repo.reorder_steps(self.meal_id, bad)
        self.assertEqual(self._numbers(), [(1, "Whisk"), (2, "Rest"), (3, "Fry")])

    def test_steps_belong_to_their_meal(self):
        other = add_meal(self.session, "Toast", 1, steps=["Toast bread"])
        other_step = self.repo.get_steps(other)[0].id
        with self.assertRaises(StepNotFoundError):
            self.repo.update_step(self.meal_id, other_step, "Hijack")

    def test_delete_all_steps(self):
        self.assertEqual(self.repo.delete_all_steps(self.meal_id), 3)
        self.assertEqual(self.repo.get_steps(self.meal_id), [])


if __name__ == '__main__':
    unittest.main()
