"""End-to-end tests for the HTTP API."""

from datetime import date

import pytest

from gymflow.models import day_of_week
from gymflow.models.exercises import COMMON_EXERCISES

MEMBER = {"X-User-Id": "member-1"}
COACH = {"X-User-Id": "coach-1", "X-Gym-Id": "gym-1"}


def _today() -> int:
    return day_of_week(date.today())


@pytest.fixture
def squat_id():
    # a fresh catalog is seeded in list order starting at id 1
    return next(i for i, ex in enumerate(COMMON_EXERCISES, start=1) if ex.name == "Squat")


@pytest.fixture
def coach_routine(client, squat_id):
    response = client.post(
        "/professional/routines",
        json={"name": "Coach legs", "exercises": [{"exercise_id": squat_id, "sets": 5, "reps": 5}]},
        headers=COACH,
    )
    assert response.status_code == 201
    return response.json()


class TestIdentity:
    """Tests for caller resolution and error bodies."""

    def test_health(self, client):
        """Test health check endpoint."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_missing_header(self, client):
        """Test that requests without X-User-Id are rejected."""
        assert client.get("/schedule/today").status_code == 401

    def test_unknown_user(self, client):
        """Test that a user without a profile gets a not_found body."""
        response = client.get("/schedule/today", headers={"X-User-Id": "ghost"})
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_professional_needs_gym(self, client):
        """Test that professional routes require X-Gym-Id."""
        assert client.get("/professional/routines", headers=MEMBER).status_code == 401


class TestSchedule:
    """Tests for own and assigned routines on the schedule."""

    def test_own_and_assigned_today(self, client, profile_ids, squat_id, coach_routine):
        """Test that today merges both origins with ownership flags."""
        own = client.post(
            "/routines/my",
            json={"name": "My push", "exercises": [{"exercise_id": squat_id}], "days": [_today()]},
            headers=MEMBER,
        )
        assert own.status_code == 201
        assert own.json()["days"] == [_today()]

        assign_url = f"/professional/clients/{profile_ids['member-1']}/day-assignment"
        body = {"routine_id": coach_routine["id"], "day_of_week": _today()}
        first = client.post(assign_url, json=body, headers=COACH)
        again = client.post(assign_url, json=body, headers=COACH)
        assert (first.status_code, first.json()["created"]) == (201, True)
        assert (again.status_code, again.json()["created"]) == (200, False)
        assert again.json()["assignment"]["id"] == first.json()["assignment"]["id"]

        today = client.get("/schedule/today", headers=MEMBER).json()
        assert [(r["routine"]["name"], r["is_own"]) for r in today["routines"]] == [
            ("My push", True),
            ("Coach legs", False),
        ]
        assert today["is_completed"] is False

        week = client.get("/schedule/week", headers=MEMBER).json()["days"]
        assert len(week) == 7
        assert len(week[_today()]["routines"]) == 2

        view = client.get(f"/routines/{coach_routine['id']}", headers=MEMBER).json()
        assert view["is_own"] is False
        assert view["days"] == [_today()]

    def test_assign_to_other_gym_member(self, client, profile_ids, coach_routine):
        """Test that coaches only reach members of their gym."""
        response = client.post(
            f"/professional/clients/{profile_ids['member-2']}/day-assignment",
            json={"routine_id": coach_routine["id"], "day_of_week": 1},
            headers=COACH,
        )
        assert response.status_code == 404

    def test_invalid_day(self, client, profile_ids, coach_routine):
        """Test that an out-of-range day is a validation error."""
        response = client.post(
            f"/professional/clients/{profile_ids['member-1']}/day-assignment",
            json={"routine_id": coach_routine["id"], "day_of_week": 7},
            headers=COACH,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_replace_week_and_unassign(self, client, profile_ids, coach_routine):
        """Test bulk week replacement followed by removing one assignment."""
        url = f"/professional/clients/{profile_ids['member-1']}/week"
        response = client.put(url, json={"days": {"1": [coach_routine["id"]], "4": [coach_routine["id"]]}}, headers=COACH)
        assignments = response.json()["assignments"]
        assert [a["day_of_week"] for a in assignments] == [1, 4]
        assert all(a["assigned_by"] == "professional" for a in assignments)

        deleted = client.delete(f"/professional/day-assignment/{assignments[0]['id']}", headers=COACH)
        assert deleted.status_code == 200
        week = client.get("/schedule/week", headers=MEMBER).json()["days"]
        assert week[1]["routines"] == []
        assert len(week[4]["routines"]) == 1

    def test_unrelated_routine_hidden(self, client, coach_routine):
        """Test that an unassigned coach routine is not visible to the member."""
        assert client.get(f"/routines/{coach_routine['id']}", headers=MEMBER).status_code == 404


class TestWorkouts:
    """Tests for the session lifecycle over HTTP."""

    def test_full_session(self, client, squat_id):
        """Test start, log, complete, duplicate complete and detail."""
        routine = client.post(
            "/routines/my",
            json={"name": "Legs", "exercises": [{"exercise_id": squat_id}], "days": [_today()]},
            headers=MEMBER,
        ).json()

        started = client.post("/workouts/start", json={}, headers=MEMBER)
        assert started.status_code == 201
        session = started.json()["session"]
        assert session["routine_ids"] == [routine["id"]]

        resumed = client.post("/workouts/start", headers=MEMBER)
        assert resumed.status_code == 200
        assert resumed.json()["session"]["id"] == session["id"]

        logged = client.put(
            f"/workouts/{session['id']}/exercise",
            json={"exercise_id": squat_id, "series_data": [{"set_number": 1, "reps": 5, "weight": 100}]},
            headers=MEMBER,
        )
        assert logged.status_code == 200
        assert len(logged.json()["session"]["exercises_completed"]) == 1

        bad = client.put(
            f"/workouts/{session['id']}/exercise",
            json={"exercise_id": squat_id, "series_data": "5x100"},
            headers=MEMBER,
        )
        assert bad.status_code == 400

        done = client.put(
            f"/workouts/{session['id']}/complete",
            json={"duration_minutes": 50, "calories_burned": 420},
            headers=MEMBER,
        )
        assert done.json()["is_duplicate"] is False
        again = client.put(f"/workouts/{session['id']}/complete", json={}, headers=MEMBER)
        assert again.status_code == 200
        assert again.json()["is_duplicate"] is True
        assert again.json()["session"]["duration_minutes"] == 50

        late = client.put(
            f"/workouts/{session['id']}/exercise",
            json={"exercise_id": squat_id, "sets": 3, "reps": 5},
            headers=MEMBER,
        )
        assert late.status_code == 409
        assert late.json()["error"] == "invalid_state"

        detail = client.get(f"/workouts/{session['id']}", headers=MEMBER).json()
        assert detail["total_volume"] == 500
        assert detail["routines"][0]["name"] == "Legs"

        history = client.get("/workouts/history", headers=MEMBER).json()
        assert history["sessions"][0]["session_name"] == "Legs"
        assert history["stats"]["total_sessions"] == 1
        assert history["stats"]["current_streak"] == 1

        today = client.get("/schedule/today", headers=MEMBER).json()
        assert today["is_completed"] is True

        # frozen once completed, but days and deletion stay available
        update = client.put(f"/routines/my/{routine['id']}", json={"name": "Legs v2"}, headers=MEMBER)
        assert update.status_code == 409
        moved = client.put(f"/routines/my/{routine['id']}/days", json={"days": [0]}, headers=MEMBER)
        assert moved.json()["days"] == [0]
        assert client.delete(f"/routines/my/{routine['id']}", headers=MEMBER).status_code == 200

    def test_other_members_session(self, client):
        """Test that sessions are private to their member."""
        session = client.post("/workouts/start", headers=MEMBER).json()["session"]
        response = client.get(f"/workouts/{session['id']}", headers={"X-User-Id": "member-2"})
        assert response.status_code == 404

    def test_start_unrelated_routine(self, client, coach_routine):
        """Test that a member cannot start a routine that is neither own nor assigned."""
        response = client.post(
            "/workouts/start", json={"routine_id": coach_routine["id"]}, headers=MEMBER
        )
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_negative_duration(self, client):
        """Test that a negative duration is rejected."""
        session = client.post("/workouts/start", headers=MEMBER).json()["session"]
        response = client.put(
            f"/workouts/{session['id']}/complete", json={"duration_minutes": -5}, headers=MEMBER
        )
        assert response.status_code == 400

    def test_free_workout(self, client, squat_id):
        """Test logging a free workout, its duplicate and the free history."""
        body = {
            "exercises": [{"exercise_id": squat_id, "sets": 3, "reps": 10}],
            "duration_minutes": 25,
            "name": "Quick legs",
            "save_as_routine": True,
        }
        first = client.post("/workouts/free", json=body, headers=MEMBER)
        again = client.post("/workouts/free", json=body, headers=MEMBER)

        assert first.status_code == 201
        assert first.json()["saved_routine"]["name"] == "Quick legs"
        assert again.status_code == 200
        assert again.json()["is_duplicate"] is True
        assert again.json()["session"]["id"] == first.json()["session"]["id"]

        history = client.get("/workouts/free/history", headers=MEMBER).json()["sessions"]
        assert [s["session_name"] for s in history] == ["Quick legs"]

        mine = client.get("/routines/my", headers=MEMBER).json()["routines"]
        assert [r["name"] for r in mine] == ["Quick legs"]


class TestProgress:
    """Tests for the progress endpoint."""

    def test_progress_shape(self, client):
        """Test the dashboard for the current and a past year."""
        session = client.post("/workouts/start", headers=MEMBER).json()["session"]
        client.put(f"/workouts/{session['id']}/complete", json={"duration_minutes": 30}, headers=MEMBER)

        data = client.get("/progress", headers=MEMBER).json()
        assert data["overview"]["total_sessions"] == 1
        assert len(data["weekly_data"]) == 8
        assert data["weekly_data"][-1]["sessions"] == 1
        assert data["last_session"]["id"] == session["id"]
        assert set(data["top_calorie_exercises"]) == {"week", "by_month", "year"}

        past = client.get("/progress", params={"year": date.today().year - 1}, headers=MEMBER).json()
        assert len(past["monthly_data"]) == 12
        assert past["recent_sessions"]["year"] == []
