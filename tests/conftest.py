"""Shared pytest fixtures for contextmenu tests."""

from collections.abc import Sequence

import pytest

from contextmenu import MenuController
from contextmenu.errors import HostInteractionError
from contextmenu.host import WindowHandle
from contextmenu.screen import ScreenHost


class CallbackRecorder:
    """Records the completion callbacks of a menu."""

    def __init__(self) -> None:
        self.submitted: list[int] = []
        self.closes = 0

    def on_submit(self, index: int) -> None:
        self.submitted.append(index)

    def on_close(self) -> None:
        self.closes += 1

    @property
    def calls(self) -> int:
        return len(self.submitted) + self.closes


class FailingOptionHost(ScreenHost):
    """Host whose window options can never be set."""

    def set_window_option(self, window: WindowHandle, name: str, value: object) -> None:
        raise HostInteractionError(f"cannot set {name}")


class BrokenCloseHost(ScreenHost):
    """Host that refuses to close floating windows."""

    def close_window(self, window: WindowHandle) -> None:
        raise HostInteractionError(f"cannot close window {window}")


class FrameHost(ScreenHost):
    """Host without native border support."""

    native_border = False


SAMPLE_LINES: Sequence[str] = ("first line", "hello world", "third")


@pytest.fixture
def host() -> ScreenHost:
    """A 40x12 screen with the cursor on the 'w' of 'hello world'."""
    return ScreenHost(SAMPLE_LINES, width=40, height=12, cursor=(2, 6))


@pytest.fixture
def controller(host: ScreenHost) -> MenuController:
    """A controller bound to the sample host."""
    return MenuController(host)


@pytest.fixture
def recorder() -> CallbackRecorder:
    """Fresh callback recorder."""
    return CallbackRecorder()


@pytest.fixture
def failing_host() -> FailingOptionHost:
    return FailingOptionHost(SAMPLE_LINES, width=40, height=12, cursor=(2, 6))


@pytest.fixture
def broken_close_host() -> BrokenCloseHost:
    return BrokenCloseHost(SAMPLE_LINES, width=40, height=12, cursor=(2, 6))


@pytest.fixture
def frame_host() -> FrameHost:
    return FrameHost(SAMPLE_LINES, width=40, height=12, cursor=(2, 6))
