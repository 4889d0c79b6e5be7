from datetime import datetime, timedelta, timezone

import pytest

from projectkit_cli.utils import get_date_string, make_dir, stat_path, time_since


NOW = datetime(2024, 10, 4, 12, 0, 0, tzinfo=timezone.utc)


class TestTimeSince:
    @pytest.mark.parametrize(
        ("delta", "expected"),
        [
            (timedelta(seconds=30), "30 seconds"),
            (timedelta(minutes=5), "5 minutes"),
            (timedelta(hours=3), "3 hours"),
            (timedelta(days=3), "3 days"),
            (timedelta(days=90), "3 months"),
            (timedelta(days=800), "2 years"),
        ],
    )
    def test_picks_largest_unit(self, delta, expected):
        assert time_since(NOW - delta, now=NOW) == expected

    def test_exactly_one_unit_falls_through(self):
        # "1 minute" is reported in seconds
        assert time_since(NOW - timedelta(minutes=1), now=NOW) == "60 seconds"


def test_get_date_string_format():
    text = get_date_string(NOW)
    local = NOW.astimezone()
    assert text.startswith(local.strftime("%Y/%m/%d %H:%M:%S"))


@pytest.mark.asyncio
async def test_make_dir_creates_parents(tmp_path):
    target = tmp_path / "a" / "b"

    assert await make_dir(target) is True
    assert target.is_dir()
    assert await make_dir(target) is True


@pytest.mark.asyncio
async def test_make_dir_reports_failure(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("")

    assert await make_dir(blocker / "child") is False


@pytest.mark.asyncio
async def test_stat_path(tmp_path):
    assert await stat_path(tmp_path / "missing") is None
    assert (await stat_path(tmp_path)) is not None
