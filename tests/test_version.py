"""Test version import works correctly.

Guards against packaging errors where __version__ is missing or not set.
"""

from mediawalk import __version__


def test_version() -> None:
    """Test that version is a string and non-empty."""
    assert isinstance(__version__, str)
    assert len(__version__) > 0


def test_public_api() -> None:
    """The streaming entry point is importable from the package root."""
    import mediawalk

    assert callable(mediawalk.start_walking)
    assert callable(mediawalk.classify)
    assert {"WalkResult", "WalkOutcome", "MediaCategory"} <= set(mediawalk.__all__)
