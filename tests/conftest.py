"""Shared pytest fixtures for chaptermark tests."""

from __future__ import annotations

import logging

import pytest

from chaptermark.config.models import ChapterConfig
from chaptermark.utils.logger import LOGGER_PREFIX

DAVINCI_EDL = """TITLE: Episode 12
FCM: NON-DROP FRAME

001  001      V     C        01:00:02:00 01:00:02:01 01:00:02:00 01:00:02:01
 |C:ResolveColorBlue |M:Intro |D:1
002  001      V     C        01:00:07:00 01:00:07:01 01:00:07:00 01:00:07:01
 |C:ResolveColorGreen |M:Main topic |D:1
003  001      V     C        01:00:15:00 01:00:15:01 01:00:15:00 01:00:15:01
 |C:ResolveColorRed |M:Wrap up |D:1
"""

PREMIERE_LOCATOR_EDL = """TITLE: Sequence 01
FCM: NON-DROP FRAME

001  AX       V     C        00:00:00:00 00:00:30:00 00:00:00:00 00:00:30:00
* FROM CLIP NAME: interview_a.mov
* LOC: 00:00:00:00 RED     Cold open
* LOC: 00:00:12:15 BLUE    Guest introduction
* LOC: 00:00:45:00 GREEN   Closing thoughts
"""

PREMIERE_CLIP_EDL = """TITLE: Rough cut
FCM: NON-DROP FRAME

001  AX       V     C        00:00:00:00 00:00:10:00 00:00:00:00 00:00:10:00
* FROM CLIP NAME: opening_titles.mov

002  AX       V     C        00:01:00:00 00:01:20:00 00:00:10:00 00:00:30:00
* FROM CLIP NAME: interview_a.mxf

003  AX       V     C        00:05:00:00 00:05:30:00 00:00:30:00 00:01:00:00
* FROM CLIP NAME: b_roll
"""

MARKER_TEXT = """# Chapters for episode 12
00:00:00:00 Intro
00:00:05:00 Body

00:00:12:00 Outro
"""

MARKER_CSV = """Marker Name,Description,In,Out,Duration,Marker Type
Intro,,00:00:00:00,00:00:00:00,00:00:00:00,Comment
,Guest arrives,00:00:20:00,00:00:20:00,00:00:00:00,Comment
Questions,Audience,00:01:00:00,00:01:00:00,00:00:00:00,Chapter
"""


@pytest.fixture
def davinci_edl() -> str:
    """DaVinci Resolve marker EDL with markers at 2s, 7s and 15s."""
    return DAVINCI_EDL


@pytest.fixture
def premiere_locator_edl() -> str:
    """Premiere EDL with three LOC sequence markers."""
    return PREMIERE_LOCATOR_EDL


@pytest.fixture
def premiere_clip_edl() -> str:
    """Premiere EDL with clip events only."""
    return PREMIERE_CLIP_EDL


@pytest.fixture
def marker_text() -> str:
    """Frame-based marker text at 0s, 5s and 12s."""
    return MARKER_TEXT


@pytest.fixture
def marker_csv() -> str:
    """Premiere marker panel CSV export."""
    return MARKER_CSV


@pytest.fixture
def config() -> ChapterConfig:
    """Default configuration."""
    return ChapterConfig()


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by CLI tests so later tests start clean."""
    yield
    package_logger = logging.getLogger(LOGGER_PREFIX)
    for handler in package_logger.handlers:
        handler.close()
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
