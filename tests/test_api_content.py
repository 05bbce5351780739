import unittest
from datetime import datetime, timedelta, timezone

from fitness_api.services.workouts import WorkoutService, workout_type_for_day
from tests.helpers import ApiClientMixin


def _workout(title, tier="FREE", premium=False, type_="CARDIO", duration=20):
    return {
        "title": title,
        "type": type_,
        "duration": duration,
        "total_calories": 150,
        "required_tier": tier,
        "is_premium": premium,
    }


class ContentApiTests(ApiClientMixin, unittest.TestCase):
    def setUp(self):
        self.start_client()
        self.trainer = self.auth_headers("coach@example.com", role="TRAINER")
        self.member = self.auth_headers("member@example.com")
        self.admin = self.auth_headers("admin@example.com", role="ADMIN")

    def _create(self, body):
        resp = self.client.post("/api/v1/workouts/", headers=self.trainer, json=body)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def _give_tier(self, headers, tier):
        now = datetime.now(timezone.utc)
        resp = self.client.post("/api/v1/memberships/", headers=headers, json={
            "tier": tier,
            "start_date": (now - timedelta(days=1)).isoformat(),
            "end_date": (now + timedelta(days=30)).isoformat(),
            "amount": 150,
        })
        self.assertEqual(resp.status_code, 201, resp.text)
        activated = self.client.patch(f"/api/v1/memberships/{resp.json()['id']}/status",
                                      headers=self.admin, json={"status": "ACTIVE"})
        self.assertEqual(activated.status_code, 200, activated.text)

    def _titles(self, resp):
        self.assertEqual(resp.status_code, 200, resp.text)
        return [w["title"] for w in resp.json()]

    def test_free_user_sees_only_free_non_premium(self):
        self._create(_workout("Alpha"))
        self._create(_workout("Bravo", tier="BASIC"))
        self._create(_workout("Charlie", premium=True))
        self._create(_workout("Delta", tier="VIP"))
        titles = self._titles(self.client.get("/api/v1/workouts/", headers=self.member))
        self.assertEqual(titles, ["Alpha"])

    def test_membership_raises_effective_tier(self):
        self._create(_workout("Alpha"))
        self._create(_workout("Bravo", tier="BASIC"))
        self._create(_workout("Charlie", premium=True))
        self._create(_workout("Delta", tier="VIP"))
        self._give_tier(self.member, "BASIC")
        titles = self._titles(self.client.get("/api/v1/workouts/available", headers=self.member))
        self.assertEqual(titles, ["Alpha", "Bravo", "Charlie"])

    def test_gated_detail_is_forbidden(self):
        premium = self._create(_workout("Locked", premium=True))
        resp = self.client.get(f"/api/v1/workouts/{premium['id']}", headers=self.member)
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["code"], "FORBIDDEN")

        self._give_tier(self.member, "PREMIUM")
        resp = self.client.get(f"/api/v1/workouts/{premium['id']}", headers=self.member)
        self.assertEqual(resp.status_code, 200)

    def test_missing_workout_is_404(self):
        self.assertEqual(self.client.get("/api/v1/workouts/999", headers=self.member).status_code, 404)

    def test_tier_route_rejects_unknown_tier(self):
        resp = self.client.get("/api/v1/workouts/tier/GOLD", headers=self.member)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["code"], "VALIDATION_ERROR")

    def test_tier_route_is_still_gated(self):
        self._create(_workout("Basic one", tier="BASIC"))
        self.assertEqual(self._titles(self.client.get("/api/v1/workouts/tier/BASIC", headers=self.member)), [])
        self._give_tier(self.member, "VIP")
        self.assertEqual(self._titles(self.client.get("/api/v1/workouts/tier/BASIC", headers=self.member)),
                         ["Basic one"])

    def test_filters(self):
        self._create(_workout("Run", type_="CARDIO", duration=10))
        self._create(_workout("Lift", type_="STRENGTH", duration=45))
        self._create(_workout("Sprint", type_="CARDIO", duration=40))
        resp = self.client.get("/api/v1/workouts/", headers=self.member,
                               params={"type": "CARDIO", "duration_max": 30})
        self.assertEqual(self._titles(resp), ["Run"])
        resp = self.client.get("/api/v1/workouts/", headers=self.member, params={"search": "lif"})
        self.assertEqual(self._titles(resp), ["Lift"])
        resp = self.client.get("/api/v1/workouts/type/CARDIO", headers=self.member)
        self.assertEqual(self._titles(resp), ["Run", "Sprint"])

    def test_trending_limits_and_filters(self):
        for i in range(8):
            self._create(_workout(f"T{i}", duration=15))
        self._create(_workout("Long", duration=60))
        self._create(_workout("Fancy", premium=True, duration=15))
        titles = self._titles(self.client.get("/api/v1/workouts/trending", headers=self.member))
        self.assertEqual(len(titles), 6)
        self.assertNotIn("Long", titles)
        self.assertNotIn("Fancy", titles)

    def test_membership_info(self):
        self._create(_workout("Alpha"))
        self._create(_workout("Delta", tier="VIP"))
        resp = self.client.get("/api/v1/workouts/membership-info", headers=self.member)
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["current_tier"], "FREE")
        self.assertEqual(body["content_by_tier"]["VIP"], 1)
        self.assertEqual(body["accessible"], 1)

    def test_clients_cannot_write(self):
        resp = self.client.post("/api/v1/workouts/", headers=self.member, json=_workout("Nope"))
        self.assertEqual(resp.status_code, 403)

    def test_workout_validation(self):
        resp = self.client.post("/api/v1/workouts/", headers=self.trainer, json=_workout("Zero", duration=0))
        self.assertEqual(resp.status_code, 400)
        body = _workout("Neg")
        body["total_calories"] = -1
        self.assertEqual(self.client.post("/api/v1/workouts/", headers=self.trainer, json=body).status_code, 400)

    def test_update_and_delete(self):
        w = self._create(_workout("Old"))
        resp = self.client.put(f"/api/v1/workouts/{w['id']}", headers=self.trainer, json={"title": "New"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["title"], "New")
        self.assertEqual(self.client.delete(f"/api/v1/workouts/{w['id']}", headers=self.trainer).status_code, 204)
        self.assertEqual(self.client.get(f"/api/v1/workouts/{w['id']}", headers=self.member).status_code, 404)

    def test_exercise_links(self):
        w = self._create(_workout("Circuit"))
        ex = self.client.post("/api/v1/exercises/", headers=self.trainer, json={
            "name": "Squat", "difficulty": "BEGINNER", "duration": 5, "calories": 40,
        })
        self.assertEqual(ex.status_code, 201, ex.text)
        ex_id = ex.json()["id"]
        path = f"/api/v1/workouts/{w['id']}/exercises/{ex_id}"

        added = self.client.post(path, headers=self.trainer, json={"order": 1, "sets": 3, "reps": 12})
        self.assertEqual(added.status_code, 201, added.text)
        links = added.json()["workout_exercises"]
        self.assertEqual([(l["exercise_id"], l["order"]) for l in links], [(ex_id, 1)])

        self.assertEqual(self.client.post(path, headers=self.trainer, json={"order": 2}).status_code, 409)
        self.assertEqual(self.client.post(f"/api/v1/workouts/{w['id']}/exercises/999",
                                          headers=self.trainer).status_code, 404)

        removed = self.client.delete(path, headers=self.trainer)
        self.assertEqual(removed.status_code, 200)
        self.assertEqual(removed.json()["workout_exercises"], [])

    def test_linked_exercise_above_tier_is_locked(self):
        w = self._create(_workout("Open circuit"))
        ex = self.client.post("/api/v1/exercises/", headers=self.trainer, json={
            "name": "Secret", "difficulty": "ADVANCED", "duration": 5, "calories": 60,
            "video_url": "https://vip.example.com/secret.mp4", "required_tier": "VIP", "is_premium": True,
        }).json()
        added = self.client.post(f"/api/v1/workouts/{w['id']}/exercises/{ex['id']}", headers=self.trainer)
        self.assertEqual(added.status_code, 201, added.text)
        self.assertEqual(self.client.get(f"/api/v1/exercises/{ex['id']}", headers=self.member).status_code, 403)

        for path in (f"/api/v1/workouts/{w['id']}", "/api/v1/workouts/", "/api/v1/workouts/available"):
            resp = self.client.get(path, headers=self.member)
            self.assertEqual(resp.status_code, 200, resp.text)
            body = resp.json()
            workout = body if isinstance(body, dict) else body[0]
            [link] = workout["workout_exercises"]
            self.assertEqual(link["exercise_id"], ex["id"])
            self.assertIsNone(link["exercise"])
            self.assertTrue(link["locked"])
            self.assertNotIn("secret.mp4", resp.text)

        self._give_tier(self.member, "VIP")
        [link] = self.client.get(f"/api/v1/workouts/{w['id']}", headers=self.member).json()["workout_exercises"]
        self.assertFalse(link["locked"])
        self.assertEqual(link["exercise"]["name"], "Secret")

    def test_exercise_gating(self):
        created = self.client.post("/api/v1/exercises/", headers=self.trainer, json={
            "name": "Pistol squat", "difficulty": "ADVANCED", "duration": 5, "calories": 60,
            "required_tier": "PREMIUM",
        })
        self.assertEqual(created.status_code, 201)
        ex_id = created.json()["id"]
        self.assertEqual(self.client.get(f"/api/v1/exercises/{ex_id}", headers=self.member).status_code, 403)
        self.assertEqual(self.client.get("/api/v1/exercises/", headers=self.member).json(), [])
        self.assertEqual(self.client.get(f"/api/v1/exercises/{ex_id}", headers=self.trainer).status_code, 403)


class TodayTests(ApiClientMixin, unittest.TestCase):
    def setUp(self):
        self.start_client()

    def test_weekday_mapping(self):
        monday = datetime(2026, 10, 19, tzinfo=timezone.utc)
        self.assertEqual(workout_type_for_day(monday).value, "STRENGTH")
        self.assertEqual(workout_type_for_day(monday - timedelta(days=1)).value, "CARDIO")
        self.assertEqual(workout_type_for_day(monday + timedelta(days=5)).value, "FLEXIBILITY")

    def test_today_picks_up_to_three_of_the_day_type(self):
        headers = self.auth_headers("coach@example.com", role="TRAINER")
        for i in range(4):
            self.client.post("/api/v1/workouts/", headers=headers, json=_workout(f"S{i}", type_="STRENGTH"))
        self.client.post("/api/v1/workouts/", headers=headers, json=_workout("Yoga", type_="YOGA"))
        monday = datetime(2026, 10, 19, 8, tzinfo=timezone.utc)
        with self.app.state.db.session() as db:
            picked = WorkoutService(db).today("FREE", now=monday)
        self.assertEqual([w.title for w in picked], ["S0", "S1", "S2"])


if __name__ == "__main__":
    unittest.main()
