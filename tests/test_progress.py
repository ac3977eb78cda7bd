"""Tests for history and progress aggregation."""

from datetime import date, datetime, timedelta

from gymflow.services.progress import ProgressAggregator, month_bounds, monthly_buckets, weekly_buckets

TODAY = date(2026, 10, 19)  # Monday of ISO week 43


def _at(day: date, hour: int = 18) -> datetime:
    return datetime(day.year, day.month, day.day, hour)


class TestBuckets:
    """Tests for weekly and monthly bucketing."""

    def test_month_bounds(self):
        """Test month edges including December and leap February."""
        assert month_bounds(2026, 12) == (date(2026, 12, 1), date(2026, 12, 31))
        assert month_bounds(2028, 2) == (date(2028, 2, 1), date(2028, 2, 29))

    def test_weekly_buckets_empty(self):
        """Test eight ISO weeks ending with the current one."""
        buckets = weekly_buckets([], TODAY)

        assert len(buckets) == 8
        assert buckets[-1].label == "2026-W43"
        assert buckets[0].label == "2026-W36"
        assert all(b.sessions == 0 and b.growth == 0 for b in buckets)

    def test_monthly_buckets_stop_at_current_month(self):
        """Test that the current year only runs to the current month."""
        assert [b.label for b in monthly_buckets([], 2026, TODAY)][-1] == "Oct"
        assert len(monthly_buckets([], 2026, TODAY)) == 10
        assert len(monthly_buckets([], 2025, TODAY)) == 12


class TestHistory:
    """Tests for the history view."""

    async def test_names_and_stats(self, db_path, member, make_routine, make_session):
        """Test display names, totals, streak and rolling weekly calories."""
        push = await make_routine("Push", member.user_id)
        pull = await make_routine("Pull", member.user_id)
        await make_session(member, _at(TODAY), routine_ids=[push.id, pull.id], duration_minutes=50, calories_burned=400)
        await make_session(member, _at(TODAY - timedelta(days=1)), routine_ids=[push.id], duration_minutes=40, calories_burned=300)
        await make_session(member, _at(TODAY - timedelta(days=9)), is_free_workout=True, calories_burned=100)
        await make_session(member, _at(TODAY - timedelta(days=2)), completed=False)

        result = await ProgressAggregator(db_path).history(member, TODAY)

        assert [s["session_name"] for s in result["sessions"]] == ["Push + Pull", "Push", "Free workout"]
        stats = result["stats"]
        assert stats["total_sessions"] == 3
        assert stats["total_minutes"] == 90
        assert stats["total_calories"] == 800
        assert stats["current_streak"] == 2
        assert stats["calories_by_week"] == [0, 0, 100, 700]
        assert stats["sessions_by_day"] == {0: 1, 1: 1, 6: 1}

    async def test_deleted_routine_falls_back(self, db_path, member, make_session):
        """Test a session whose routines no longer exist."""
        await make_session(member, _at(TODAY), routine_ids=[404])
        result = await ProgressAggregator(db_path).history(member, TODAY)
        assert result["sessions"][0]["session_name"] == "Workout"

    async def test_empty_history(self, db_path, member):
        """Test a member who never trained."""
        result = await ProgressAggregator(db_path).history(member, TODAY)

        assert result["sessions"] == []
        assert result["stats"]["total_sessions"] == 0
        assert result["stats"]["current_streak"] == 0
        assert result["stats"]["calories_by_week"] == [0, 0, 0, 0]


class TestProgress:
    """Tests for the progress dashboard."""

    async def test_overview(self, db_path, member, make_session):
        """Test streaks, averages and month-over-month growth."""
        for offset in (0, 1, 2):
            await make_session(member, _at(TODAY - timedelta(days=offset)), duration_minutes=60, calories_burned=500)
        for day in (3, 4, 5, 6, 20):
            await make_session(member, _at(date(2026, 9, day)), duration_minutes=30, calories_burned=200)

        data = await ProgressAggregator(db_path).progress(member, today=TODAY)
        overview = data["overview"]

        assert overview["total_sessions"] == 8
        assert overview["current_streak"] == 3
        assert overview["best_streak"] == 4
        assert overview["avg_session_duration"] == 41
        assert overview["avg_calories_per_session"] == 312
        assert overview["this_month_sessions"] == 3
        assert overview["monthly_growth"] == -40

    async def test_weekly_and_monthly_rollups(self, db_path, member, make_session):
        """Test session counts and growth per ISO week and per month."""
        await make_session(member, _at(TODAY), calories_burned=300, duration_minutes=45)
        await make_session(member, _at(TODAY - timedelta(days=1)), calories_burned=200)
        await make_session(member, _at(TODAY - timedelta(days=2)), calories_burned=100)

        data = await ProgressAggregator(db_path).progress(member, today=TODAY)

        this_week, last_week = data["weekly_data"][-1], data["weekly_data"][-2]
        assert (this_week["label"], this_week["sessions"], this_week["calories"]) == ("2026-W43", 1, 300)
        assert this_week["minutes"] == 45
        assert (last_week["sessions"], last_week["growth"]) == (2, 100)
        assert this_week["growth"] == -50

        october = data["monthly_data"][-1]
        assert (october["label"], october["year"], october["sessions"]) == ("Oct", 2026, 3)
        assert october["growth"] == 100

    async def test_selected_year(self, db_path, member, make_session):
        """Test that an earlier year shows all twelve months."""
        await make_session(member, _at(date(2025, 12, 31)))
        await make_session(member, _at(date(2025, 3, 2)))

        data = await ProgressAggregator(db_path).progress(member, year=2025, today=TODAY)

        months = {m["label"]: m["sessions"] for m in data["monthly_data"]}
        assert len(months) == 12
        assert months["Mar"] == 1 and months["Dec"] == 1
        assert len(data["recent_sessions"]["year"]) == 2
        assert data["recent_sessions"]["week"] == []
        assert len(data["recent_sessions"]["by_month"]["Dec"]) == 1

    async def test_calories_and_muscle_groups(self, db_path, member, make_session):
        """Test calorie leaders and heatmap from logged exercises."""
        await make_session(
            member,
            _at(TODAY),
            exercises=[("Squat", [(10, 100), (10, 100)]), ("Bench Press", [(10, 80)])],
        )
        await make_session(
            member,
            _at(TODAY - timedelta(days=30)),
            exercises=[("Squat", [(10, 100)]), ("Plank", [(20, 0)])],
        )

        data = await ProgressAggregator(db_path).progress(member, today=TODAY)

        week = data["top_calorie_exercises"]["week"]
        assert [(e["name"], e["calories"]) for e in week] == [("Squat", 18), ("Bench Press", 6)]
        year = data["top_calorie_exercises"]["year"]
        assert year[0] == {"name": "Squat", "calories": 27, "avg_calories": 14}
        assert ("Plank", 10) in [(e["name"], e["calories"]) for e in year]
        september = data["top_calorie_exercises"]["by_month"]["Sep"]
        assert [e["name"] for e in september] == ["Plank", "Squat"]

        groups = {g["name"]: (g["count"], g["intensity"]) for g in data["top_muscle_groups"]}
        assert groups == {"legs": (2, 100), "chest": (1, 50), "abs": (1, 50)}
        week_groups = {g["name"]: g["intensity"] for g in data["muscle_heatmap"]["week"]}
        assert week_groups == {"legs": 100, "chest": 100}
        assert len(data["muscle_heatmap"]["year"]) == 3

    async def test_last_session_and_empty(self, db_path, member, make_session):
        """Test the last session summary and an empty dashboard."""
        aggregator = ProgressAggregator(db_path)
        empty = await aggregator.progress(member, today=TODAY)
        assert empty["last_session"] is None
        assert empty["overview"]["avg_session_duration"] == 0
        assert empty["top_muscle_groups"] == []

        latest = await make_session(member, _at(TODAY - timedelta(days=3)), duration_minutes=30)
        await make_session(member, _at(TODAY - timedelta(days=10)))
        data = await aggregator.progress(member, today=TODAY)
        assert data["last_session"]["id"] == latest.id
        assert data["last_session"]["duration_minutes"] == 30
