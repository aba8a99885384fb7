from __future__ import annotations

from unittest.mock import patch

from docparser.services.progress import ProgressTracker


def test_progress_disabled_without_tty():
    with patch("docparser.services.progress.is_tty_enabled", return_value=False):
        tracker = ProgressTracker(3)
    assert tracker.pbar is None
    tracker.start_job("pv.xlsx")
    tracker.finish_job(success=True)
    tracker.set_postfix(ok=1)
    tracker.close()
    assert tracker.current_job == 1


def test_progress_enabled_with_tty():
    with patch("docparser.services.progress.is_tty_enabled", return_value=True):
        with ProgressTracker(2, description="Parsing") as tracker:
            assert tracker.pbar is not None
            tracker.start_job("a.xlsx")
            tracker.finish_job()
            tracker.start_job("b.xlsx")
            tracker.finish_job(success=False)
            assert tracker.pbar.n == 2
    assert tracker.pbar is None
