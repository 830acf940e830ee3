import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest
import requests

# Make the repo root importable (pwned/ and check_passwords.py live there).
repo_root = Path(__file__).resolve().parents[1]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

PASSWORD_SHA1 = "5BAA61E4C9B93F3F0682250B6CF8331B7EE68FD8"


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "", reason: str = ""):
        self.status_code = status_code
        self.text = text
        self.reason = reason


class FakeSession:
    """Stands in for requests.Session; replies are queued per range prefix."""

    def __init__(self, replies: Optional[Dict[str, List]] = None):
        self.replies = {k: list(v) for k, v in (replies or {}).items()}
        self.calls: List[dict] = []
        self.closed = False

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": dict(headers or {}), "timeout": timeout})
        prefix = url.rsplit("/", 1)[-1]
        queue = self.replies.get(prefix)
        if not queue:
            return FakeResponse(200, "")
        reply = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(reply, BaseException):
            raise reply
        return reply

    def close(self):
        self.closed = True


class SleepRecorder:
    def __init__(self):
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def sleeps():
    return SleepRecorder()


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def connection_error():
    return requests.ConnectionError("connection refused")
