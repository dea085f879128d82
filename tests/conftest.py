"""Shared fixtures for the mediawalk test suite.

Media files are synthesized from the leading "magic" bytes that content
sniffers look at, so no binary fixtures need to be checked in.
"""

import os
from pathlib import Path
from typing import Callable, Dict, Tuple

import pytest

# name -> (leading bytes, expected MIME type)
MEDIA_SAMPLES: Dict[str, Tuple[bytes, str]] = {
    "photo.png": (b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR", "image/png"),
    "photo.jpg": (b"\xff\xd8\xff\xe0\x00\x10JFIF\x00", "image/jpeg"),
    "anim.gif": (b"GIF89a\x01\x00\x01\x00", "image/gif"),
    "song.mp3": (b"ID3\x03\x00\x00\x00\x00\x00\x00", "audio/mpeg"),
    "sound.wav": (b"RIFF\x24\x00\x00\x00WAVEfmt ", "audio/x-wav"),
    "clip.mp4": (b"\x00\x00\x00\x18ftypisom\x00\x00\x02\x00isommp41", "video/mp4"),
    "clip.avi": (b"RIFF\x24\x00\x00\x00AVI LIST", "video/x-msvideo"),
}

MARKDOWN_TEXT = "# Notes\n\nNothing to see here, just *markdown*.\n"


@pytest.fixture
def media_samples() -> Dict[str, Tuple[bytes, str]]:
    """The table of synthesized media samples."""
    return MEDIA_SAMPLES


@pytest.fixture
def write_media() -> Callable[[Path, str], Path]:
    """Return a helper writing the sample called *name* into *directory*."""

    def _write(directory: Path, name: str) -> Path:
        header, _mime = MEDIA_SAMPLES[name]
        path = directory / name
        path.write_bytes(header + b"\x00" * 64)
        return path

    return _write


@pytest.fixture
def media_tree(tmp_path: Path, write_media: Callable[[Path, str], Path]) -> Path:
    """Create a small library: seven media files, one Markdown file and one
    file that the tests treat as unreadable (``locked.bin``).

    Layout::

        library/
          README.md
          audio/song.mp3, audio/sound.wav
          images/anim.gif, images/photo.jpg, images/photo.png
          locked.bin
          video/clip.avi, video/clip.mp4
    """
    root = tmp_path / "library"
    layout = {
        "audio": ["song.mp3", "sound.wav"],
        "images": ["anim.gif", "photo.jpg", "photo.png"],
        "video": ["clip.avi", "clip.mp4"],
    }
    for folder, names in layout.items():
        (root / folder).mkdir(parents=True)
        for name in names:
            write_media(root / folder, name)
    (root / "README.md").write_text(MARKDOWN_TEXT)
    (root / "locked.bin").write_bytes(b"\x00" * 32)
    return root


@pytest.fixture
def deny_reading(monkeypatch: pytest.MonkeyPatch) -> Callable[[str], None]:
    """Make the content sniffer fail with PermissionError for given file names.

    Running as root makes ``chmod 000`` ineffective, so the failure is
    injected at the ``filetype`` boundary instead.
    """
    import filetype

    original = filetype.guess
    denied = set()

    def _guess(path):  # type: ignore[no-untyped-def]
        if os.path.basename(str(path)) in denied:
            raise PermissionError(13, "Permission denied", str(path))
        return original(path)

    monkeypatch.setattr(filetype, "guess", _guess)
    return denied.add


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config file at a temporary location and clear overrides."""
    from mediawalk.utils import config as cfg

    config_dir = tmp_path / "config" / "mediawalk"
    monkeypatch.setattr(cfg, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(cfg, "CONFIG_FILE", config_dir / "config.toml")
    for name in list(os.environ):
        if name.startswith("MEDIAWALK_"):
            monkeypatch.delenv(name, raising=False)
    return config_dir
