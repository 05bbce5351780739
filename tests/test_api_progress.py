import unittest

from tests.helpers import ApiClientMixin


class ProgressApiTests(ApiClientMixin, unittest.TestCase):
    def setUp(self):
        self.start_client()
        trainer = self.auth_headers("coach@example.com", role="TRAINER")
        workout = self.client.post("/api/v1/workouts/", headers=trainer, json={
            "title": "Base", "type": "CARDIO", "duration": 20, "total_calories": 100,
        })
        self.assertEqual(workout.status_code, 201, workout.text)
        self.workout_id = workout.json()["id"]
        exercise = self.client.post("/api/v1/exercises/", headers=trainer, json={
            "name": "Burpee", "difficulty": "INTERMEDIATE", "duration": 3, "calories": 30,
        })
        self.exercise_id = exercise.json()["id"]
        self.user = self.auth_headers("runner@example.com")

    def _record(self, headers=None, **fields):
        body = {"workout_id": self.workout_id}
        body.update(fields)
        return self.client.post("/api/v1/progress/", headers=headers or self.user, json=body)

    def test_value_ranges(self):
        self.assertEqual(self._record(progress=101).status_code, 400)
        self.assertEqual(self._record(duration=0).status_code, 400)
        self.assertEqual(self._record(calories_burned=-1).status_code, 400)
        self.assertEqual(self._record(progress=100, duration=20, calories_burned=0).status_code, 201)

    def test_unknown_workout(self):
        resp = self.client.post("/api/v1/progress/", headers=self.user, json={"workout_id": 999})
        self.assertEqual(resp.status_code, 404)

    def test_stats(self):
        self._record(completed=True, progress=100, duration=20, calories_burned=150,
                     completed_at="2026-10-01T10:00:00Z")
        self._record(completed=False, progress=50, duration=10, calories_burned=60)
        self._record(exercise_id=self.exercise_id, completed=True, progress=100, duration=3, calories_burned=30)
        stats = self.client.get("/api/v1/progress/stats", headers=self.user).json()
        self.assertEqual(stats["total_workouts"], 2)
        self.assertEqual(stats["completed_workouts"], 1)
        self.assertAlmostEqual(stats["completion_rate"], 50.0)
        self.assertEqual(stats["total_duration"], 33)
        self.assertEqual(stats["total_calories"], 240)
        self.assertAlmostEqual(stats["average_progress"], 250 / 3)

        completed = self.client.get("/api/v1/progress/completed", headers=self.user).json()
        self.assertEqual(len(completed), 1)
        self.assertIsNone(completed[0]["exercise_id"])

    def test_empty_stats(self):
        stats = self.client.get("/api/v1/progress/stats", headers=self.user).json()
        self.assertEqual(stats["completion_rate"], 0)
        self.assertEqual(stats["average_progress"], 0)

    def test_listing_filters_and_isolation(self):
        self._record(completed=True)
        self._record(completed=False)
        other = self.auth_headers("other@example.com")
        self._record(headers=other, completed=True)
        mine = self.client.get("/api/v1/progress/", headers=self.user).json()
        self.assertEqual(len(mine), 2)
        done = self.client.get("/api/v1/progress/", headers=self.user, params={"completed": "true"}).json()
        self.assertEqual(len(done), 1)

    def test_only_owner_can_change(self):
        rid = self._record(progress=10).json()["id"]
        other = self.auth_headers("intruder@example.com")
        self.assertEqual(self.client.put(f"/api/v1/progress/{rid}", headers=other, json={"progress": 90}).status_code, 403)
        self.assertEqual(self.client.delete(f"/api/v1/progress/{rid}", headers=other).status_code, 403)

        updated = self.client.put(f"/api/v1/progress/{rid}", headers=self.user, json={"progress": 90, "completed": True})
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["progress"], 90)
        self.assertEqual(self.client.delete(f"/api/v1/progress/{rid}", headers=self.user).status_code, 204)
        self.assertEqual(self.client.delete(f"/api/v1/progress/{rid}", headers=self.user).status_code, 404)


if __name__ == "__main__":
    unittest.main()
