"""Tests for the core models module."""

import json

import pytest
from pydantic import ValidationError

from mediawalk.models.core import MediaCategory, WalkOptions, WalkOutcome, WalkResult


class TestEnums:
    """Tests for MediaCategory and WalkOutcome."""

    def test_category_values(self) -> None:
        """Category values double as MIME prefixes."""
        assert MediaCategory.AUDIO.value == "audio"
        assert MediaCategory.IMAGE.value == "image"
        assert MediaCategory.VIDEO.value == "video"
        assert len(MediaCategory) == 3

    def test_outcome_values(self) -> None:
        assert WalkOutcome.MATCHED.value == "matched"
        assert WalkOutcome.NO_MATCH.value == "no_match"
        assert WalkOutcome.FAILED.value == "failed"


class TestWalkResult:
    """Tests for the WalkResult model and its invariants."""

    def test_matched(self) -> None:
        result = WalkResult(path="a/b.png", outcome=WalkOutcome.MATCHED, mime="image/png")

        assert result.is_media
        assert result.category is MediaCategory.IMAGE
        assert result.error is None

    def test_no_match_defaults_to_empty_mime(self) -> None:
        result = WalkResult(path="notes.md", outcome=WalkOutcome.NO_MATCH)

        assert result.mime == ""
        assert not result.is_media
        assert result.category is None

    def test_failed_keeps_the_error(self) -> None:
        error = PermissionError(13, "Permission denied")
        result = WalkResult(path="locked.bin", outcome=WalkOutcome.FAILED, error=error)

        assert result.error is error
        assert result.category is None

    def test_empty_path_rejected(self) -> None:
        with pytest.raises(ValidationError):
            WalkResult(path="", outcome=WalkOutcome.NO_MATCH)

    def test_matched_requires_mime(self) -> None:
        with pytest.raises(ValidationError):
            WalkResult(path="x.png", outcome=WalkOutcome.MATCHED)

    def test_no_match_rejects_mime(self) -> None:
        with pytest.raises(ValidationError):
            WalkResult(path="x.md", outcome=WalkOutcome.NO_MATCH, mime="text/markdown")

    def test_failed_requires_error(self) -> None:
        with pytest.raises(ValidationError):
            WalkResult(path="x.bin", outcome=WalkOutcome.FAILED)

    def test_failed_rejects_mime(self) -> None:
        with pytest.raises(ValidationError):
            WalkResult(
                path="x.bin",
                outcome=WalkOutcome.FAILED,
                mime="image/png",
                error=OSError("boom"),
            )

    def test_results_are_immutable(self) -> None:
        result = WalkResult(path="x.md", outcome=WalkOutcome.NO_MATCH)

        with pytest.raises(ValidationError):
            result.path = "y.md"  # type: ignore[misc]

    def test_to_dict_is_json_serializable(self) -> None:
        result = WalkResult(
            path="locked.bin",
            outcome=WalkOutcome.FAILED,
            error=PermissionError("denied"),
        )

        parsed = json.loads(json.dumps(result.to_dict()))

        assert parsed == {
            "path": "locked.bin",
            "outcome": "failed",
            "mime": "",
            "error": "PermissionError: denied",
        }

    def test_to_dict_without_error(self) -> None:
        result = WalkResult(path="a.mp3", outcome=WalkOutcome.MATCHED, mime="audio/mpeg")

        assert result.to_dict()["error"] is None
        assert result.to_dict()["outcome"] == "matched"


class TestWalkOptions:
    """Tests for WalkOptions defaults and validation."""

    def test_defaults(self) -> None:
        options = WalkOptions(root="media")

        assert options.follow_links is True
        assert options.queue_size == 0

    def test_negative_queue_size_rejected(self) -> None:
        with pytest.raises(ValidationError):
            WalkOptions(root="media", queue_size=-5)

    def test_root_keeps_its_spelling(self) -> None:
        assert WalkOptions(root="./media/").root == "./media/"
