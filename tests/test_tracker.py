"""Tests for the checkpointed build tracker."""

from __future__ import annotations

import json
import subprocess
from datetime import datetime, timedelta, timezone

import pytest

from frontfix import tracker as tracker_mod
from frontfix.tracker import (
    CHECKPOINTS,
    LOG_FILENAME,
    BuildTracker,
    declared_dependencies,
    run_tracked_verification,
)

TSC_FAILURE = """\
src/App.tsx(3,7): error TS2322: Type 'string' is not assignable to type 'number'.
src/App.tsx(9,1): error TS2304: Cannot find name 'foo'.
"""


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += timedelta(seconds=seconds)


def _runner(tsc_out="", tsc_code=0, build_out="", build_code=0, calls=None):
    def run(argv, **kwargs):
        if calls is not None:
            calls.append(argv)
        if "tsc" in argv:
            return subprocess.CompletedProcess(argv, tsc_code, stdout=tsc_out, stderr="")
        return subprocess.CompletedProcess(argv, build_code, stdout=build_out, stderr="")

    return run


def _healthy_project(root):
    (root / "src").mkdir()
    (root / "package.json").write_text(
        json.dumps({"dependencies": {"react": "^18.2.0"}, "devDependencies": {"vite": "^5.0.0"}})
    )
    (root / "tsconfig.json").write_text("{}")
    (root / "vite.config.ts").write_text("export default {};\n")
    for name in ("react", "vite"):
        (root / "node_modules" / name).mkdir(parents=True)


# ---------------------------------------------------------------------------
# BuildTracker
# ---------------------------------------------------------------------------


class TestBuildTracker:
    def test_log_written_on_creation(self, tmp_path):
        tracker = BuildTracker(tmp_path, clock=FakeClock(), echo=False)
        log = (tmp_path / LOG_FILENAME).read_text()
        assert tracker.log_path == tmp_path / LOG_FILENAME
        assert log.startswith("FRONTFIX BUILD TRACKER\n")
        assert f"Project Root: {tmp_path}" in log
        assert "Started: 2024-05-01T12:00:00+00:00" in log
        assert log.count("(None yet)") == 2
        assert "PROGRESS: 0% (0/4 checkpoints)" in log
        assert "Status: IN PROGRESS" in log

    def test_checkpoints_keep_declared_order(self, tmp_path):
        tracker = BuildTracker(tmp_path, clock=FakeClock(), echo=False)
        assert list(tracker.checkpoints) == list(CHECKPOINTS)

    def test_unknown_status_rejected(self, tmp_path):
        tracker = BuildTracker(tmp_path, clock=FakeClock(), echo=False)
        with pytest.raises(ValueError):
            tracker.update_checkpoint(CHECKPOINTS[0], "done")

    def test_details_fixes_and_errors_rendered(self, tmp_path):
        clock = FakeClock()
        tracker = BuildTracker(tmp_path, clock=clock, echo=False)
        clock.advance(42)
        tracker.update_checkpoint(CHECKPOINTS[0], "success", "All present")
        tracker.add_auto_fix("Created missing file: tsconfig.json")
        tracker.add_error("Missing: src", "Structure Audit")
        log = (tmp_path / LOG_FILENAME).read_text()
        assert "[✅] Project structure audit\n     └─ All present" in log
        assert "[2024-05-01T12:00:42+00:00] Created missing file: tsconfig.json" in log
        assert "[2024-05-01T12:00:42+00:00] Missing: src\n     └─ Context: Structure Audit" in log
        assert "(None yet)" not in log
        assert "Runtime: 42s" in log
        assert "PROGRESS: 25% (1/4 checkpoints)" in log

    @pytest.mark.parametrize(
        "statuses,expected",
        [
            (["success"] * 4, "COMPLETE"),
            (["success", "warning", "success", "success"], "COMPLETE WITH WARNINGS"),
            (["success", "warning", "error", "success"], "FAILED"),
            (["error", "pending", "success", "success"], "IN PROGRESS"),
            (["success", "in_progress", "success", "success"], "IN PROGRESS"),
        ],
    )
    def test_overall_status(self, tmp_path, statuses, expected):
        tracker = BuildTracker(tmp_path, clock=FakeClock(), echo=False)
        for name, status in zip(CHECKPOINTS, statuses):
            tracker.update_checkpoint(name, status)
        assert tracker.status == expected
        assert tracker.succeeded is expected.startswith("COMPLETE")

    def test_progress_rounds_half_up(self, tmp_path):
        tracker = BuildTracker(tmp_path, checkpoints=("a", "b", "c"), clock=FakeClock(), echo=False)
        tracker.update_checkpoint("a", "success")
        tracker.update_checkpoint("b", "success")
        assert tracker.progress == 67

    def test_echo_prints_progress(self, tmp_path, capsys):
        tracker = BuildTracker(tmp_path, clock=FakeClock())
        tracker.update_checkpoint(CHECKPOINTS[1], "warning", "1 missing")
        assert "Dependencies verification - 1 missing" in capsys.readouterr().out

    def test_log_write_failure_warns_once(self, tmp_path, monkeypatch, capsys):
        def fail(path, text):
            raise OSError("disk full")

        monkeypatch.setattr(tracker_mod, "safe_write_text", fail)
        tracker = BuildTracker(tmp_path, clock=FakeClock(), echo=False)
        tracker.update_checkpoint(CHECKPOINTS[0], "success")
        tracker.add_error("boom")
        err = capsys.readouterr().err
        assert err.count("Could not write") == 1
        assert tracker.completed == 1


# ---------------------------------------------------------------------------
# Verification run
# ---------------------------------------------------------------------------


class TestRunTrackedVerification:
    def test_declared_dependencies(self):
        package = {"dependencies": {"react": "1"}, "devDependencies": {"vite": "1"}, "scripts": {"x": "y"}}
        assert declared_dependencies(package) == ["react", "vite"]
        assert declared_dependencies({"dependencies": []}) == []

    def test_healthy_project_completes(self, tmp_path):
        _healthy_project(tmp_path)
        calls = []
        tracker = run_tracked_verification(
            tmp_path, run_subprocess=_runner(calls=calls), clock=FakeClock(), echo=False
        )
        assert tracker.status == "COMPLETE"
        assert tracker.errors == []
        assert calls == [["npx", "tsc", "--noEmit"], ["npm", "run", "build"]]
        assert "Status: COMPLETE" in (tmp_path / LOG_FILENAME).read_text()

    def test_missing_packages_warn(self, tmp_path):
        _healthy_project(tmp_path)
        (tmp_path / "node_modules" / "vite").rmdir()
        tracker = run_tracked_verification(tmp_path, run_subprocess=_runner(), clock=FakeClock(), echo=False)
        checkpoint = tracker.checkpoints["Dependencies verification"]
        assert checkpoint.status == "warning"
        assert "vite" in checkpoint.details
        assert tracker.status == "COMPLETE WITH WARNINGS"

    def test_every_checkpoint_runs_after_failures(self, tmp_path):
        tracker = run_tracked_verification(
            tmp_path,
            run_subprocess=_runner(
                tsc_out=TSC_FAILURE,
                tsc_code=2,
                build_out="error: Could not resolve './missing'\n",
                build_code=1,
            ),
            clock=FakeClock(),
            echo=False,
        )
        statuses = {name: cp.status for name, cp in tracker.checkpoints.items()}
        assert set(statuses.values()) == {"error"}
        assert tracker.status == "FAILED"
        assert tracker.checkpoints["TypeScript compilation"].details == "2 type error(s): TS2304 x1, TS2322 x1"
        assert tracker.checkpoints["Build compilation"].details == "1 build error(s): Could not resolve './missing'"
        messages = [e.message for e in tracker.errors]
        assert "Missing: src, package.json, tsconfig.json" in messages
        assert "package.json not found" in messages
        assert any("TS2322" in m for m in messages)

    def test_missing_tool_is_reported(self, tmp_path):
        _healthy_project(tmp_path)

        def missing(argv, **kwargs):
            raise FileNotFoundError("npx")

        tracker = run_tracked_verification(tmp_path, run_subprocess=missing, clock=FakeClock(), echo=False)
        assert tracker.checkpoints["TypeScript compilation"].details.startswith("tool_not_found")
        assert tracker.status == "FAILED"

    def test_repair_generates_missing_configs(self, tmp_path):
        _healthy_project(tmp_path)
        (tmp_path / "tsconfig.json").unlink()
        (tmp_path / "vite.config.ts").unlink()
        tracker = run_tracked_verification(
            tmp_path, repair=True, run_subprocess=_runner(), clock=FakeClock(), echo=False
        )
        assert (tmp_path / "tsconfig.json").exists()
        assert (tmp_path / "vite.config.ts").exists()
        assert [f.description for f in tracker.auto_fixes] == [
            "Created missing file: tsconfig.json",
            "Created missing file: vite.config.ts",
            "Updated package.json scripts",
        ]
        assert tracker.checkpoints["Project structure audit"].status == "success"

    def test_without_repair_missing_vite_config_warns(self, tmp_path):
        _healthy_project(tmp_path)
        (tmp_path / "vite.config.ts").unlink()
        tracker = run_tracked_verification(tmp_path, run_subprocess=_runner(), clock=FakeClock(), echo=False)
        assert tracker.checkpoints["Project structure audit"].status == "warning"
        assert not (tmp_path / "vite.config.ts").exists()

    def test_repair_adds_missing_package_scripts(self, tmp_path):
        _healthy_project(tmp_path)
        package = json.loads((tmp_path / "package.json").read_text())
        package["scripts"] = {"build": "tsc && vite build", "lint": "eslint ."}
        (tmp_path / "package.json").write_text(json.dumps(package))
        tracker = run_tracked_verification(
            tmp_path, repair=True, run_subprocess=_runner(), clock=FakeClock(), echo=False
        )
        written = (tmp_path / "package.json").read_text()
        assert json.loads(written)["scripts"] == {
            "build": "tsc && vite build",
            "lint": "eslint .",
            "dev": "vite",
        }
        assert written.endswith("}\n")
        assert [(f.description, f.details) for f in tracker.auto_fixes] == [
            ("Updated package.json scripts", "Added missing scripts: dev"),
        ]
        assert "Updated package.json scripts\n     └─ Added missing scripts: dev" in (
            tmp_path / LOG_FILENAME
        ).read_text()

    def test_scripts_left_alone_without_repair(self, tmp_path):
        _healthy_project(tmp_path)
        before = (tmp_path / "package.json").read_text()
        tracker = run_tracked_verification(tmp_path, run_subprocess=_runner(), clock=FakeClock(), echo=False)
        assert (tmp_path / "package.json").read_text() == before
        assert tracker.auto_fixes == []

    def test_checkpoint_marked_in_progress_while_running(self, tmp_path):
        _healthy_project(tmp_path)
        seen = []

        def run(argv, **kwargs):
            name = "TypeScript compilation" if "tsc" in argv else "Build compilation"
            seen.append(f"[🔄] {name}" in (tmp_path / LOG_FILENAME).read_text())
            return subprocess.CompletedProcess(argv, 0, stdout="", stderr="")

        tracker = run_tracked_verification(tmp_path, run_subprocess=run, clock=FakeClock(), echo=False)
        assert seen == [True, True]
        assert "Status: IN PROGRESS" not in (tmp_path / LOG_FILENAME).read_text()
        assert tracker.status == "COMPLETE"
