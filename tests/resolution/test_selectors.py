"""Tests for base file selection over synthetic and live stacks."""

import os

import pytest
from wisp.resolution import selectors
from wisp.resolution.selectors import select_fallback
from wisp.resolution.selectors import select_primary
from wisp.resolution.stack import CallFrame


def frames_for(*locations):
    return [CallFrame(location=location, index=i) for i, location in enumerate(locations)]


@pytest.fixture
def project_boundary(monkeypatch):
    monkeypatch.setattr(selectors, "package_boundary", lambda: "/project")
    return "/project"


@pytest.fixture
def no_boundary(monkeypatch):
    monkeypatch.setattr(selectors, "package_boundary", lambda: None)


class TestSelectPrimary:
    """Primary selection returns the first frame that leaves the source tree."""

    def test_first_frame_outside_src_is_returned(self, project_boundary):
        frames = frames_for(
            "/project/src/lib/resolve.py",
            "/project/src/wisp.py",
            "/project/index.py",
            "/home/user/app/main.py",
        )

        assert select_primary(frames) == "/project/index.py"

    def test_dist_counts_as_source_tree(self, project_boundary):
        frames = frames_for("/project/dist/wisp.py", "/home/user/app/main.py")

        assert select_primary(frames) == "/home/user/app/main.py"

    def test_no_transition_returns_none(self, project_boundary):
        frames = frames_for("/home/user/app/a.py", "/home/user/app/b.py")

        assert select_primary(frames) is None

    def test_entry_file_transition_alone_does_not_decide(self, project_boundary):
        """Leaving index.* without leaving src/dist returns nothing."""
        frames = frames_for("/project/index.py", "/project/tools/run.py", "/home/user/app.py")

        assert select_primary(frames) is None

    def test_skipped_frames_do_not_reset_state(self, project_boundary):
        frames = frames_for(
            selectors.THIS_FILE,
            "/project/src/wisp.py",
            "<frozen importlib._bootstrap>",
            None,
            "<string>",
            "/home/user/app/main.py",
        )

        assert select_primary(frames) == "/home/user/app/main.py"

    def test_own_package_is_source_tree_without_boundary(self, no_boundary):
        """Installed wheels have no manifest; the import package still counts."""
        loader_file = os.path.join(selectors.PACKAGE_DIR, "loading", "loader.py")
        frames = frames_for(loader_file, "/srv/service/settings.py")

        assert select_primary(frames) == "/srv/service/settings.py"

    def test_files_outside_boundary_are_not_in_tree(self, project_boundary):
        frames = frames_for("/elsewhere/src/a.py", "/home/user/app.py")

        assert select_primary(frames) is None

    def test_entry_transition_is_logged(self, project_boundary, caplog):
        frames = frames_for("/project/index.py", "/project/src/a.py", "/home/user/app.py")

        with caplog.at_level("DEBUG", logger="wisp.resolution.selectors"):
            result = select_primary(frames)

        assert result == "/home/user/app.py"
        assert "Left entry file at /project/src/a.py" in caplog.text


class TestSelectFallback:
    """Fallback selection returns the first usable frame."""

    def test_skips_internal_and_own_frames(self):
        frames = frames_for(
            selectors.THIS_FILE,
            os.path.join(selectors.RESOLUTION_DIR, "resolvers.py"),
            "<frozen importlib._bootstrap_external>",
            "/home/user/app/a.py",
            "/home/user/app/b.py",
        )

        assert select_fallback(frames) == "/home/user/app/a.py"

    def test_last_resort_is_own_file(self):
        frames = frames_for(selectors.THIS_FILE, "<string>", None)

        assert select_fallback(frames) == selectors.THIS_FILE

    def test_empty_stack(self):
        assert select_fallback([]) == selectors.THIS_FILE

    def test_live_stack_returns_calling_test_file(self):
        assert select_fallback() == os.path.abspath(__file__)


def test_live_primary_without_library_frames_finds_nothing():
    """Called straight from a test, no frame ever leaves the library tree."""
    assert select_primary() is None
