import pytest
from pydantic import ValidationError

from webhook_tunnel.common.models import (
    CommentFrame,
    ConsoleTarget,
    DataFrame,
    Delivered,
    Failed,
    Ignored,
    RemoteTarget,
    Suppressed,
)


class TestFrames:

    def test_equality_by_variant_and_value(self):
        """Test that frames compare by variant and content."""
        assert DataFrame(payload="x") == DataFrame(payload="x")
        assert DataFrame(payload="x") != DataFrame(payload="y")
        assert DataFrame(payload="x") != CommentFrame(text="x")
        assert Ignored() == Ignored()

    def test_frames_are_immutable(self):
        """Test that a frame cannot be changed once built."""
        frame = DataFrame(payload="x")
        with pytest.raises(ValidationError):
            frame.payload = "y"


class TestTargets:

    def test_remote_target_keeps_url_verbatim(self):
        """Test that the tunnel URL is not normalised."""
        target = RemoteTarget(url="http://localhost:3000")
        assert target.url == "http://localhost:3000"

    def test_console_target(self):
        assert ConsoleTarget() != RemoteTarget(url="http://localhost:3000")


class TestOutcomes:

    def test_delivered_status(self):
        assert Delivered().status is None
        assert Delivered(status=200).status == 200

    def test_failure_reasons(self):
        """Test that failed and suppressed outcomes are distinct."""
        assert Failed(reason="reset") != Suppressed(reason="reset")
        assert Failed(reason="timeout").reason == "timeout"
