"""
APIC picture types (0x00 - 0x14).
"""

from __future__ import annotations

from enum import Enum


class PictureType(int, Enum):
    """
    Picture type byte of an attached picture frame.

    Values outside this range are kept as the raw int by the decoder.
    """

    OTHER = 0x00
    FILE_ICON_32X32 = 0x01
    OTHER_FILE_ICON = 0x02
    COVER_FRONT = 0x03
    COVER_BACK = 0x04
    LEAFLET_PAGE = 0x05
    MEDIA = 0x06
    LEAD_ARTIST = 0x07
    ARTIST = 0x08
    CONDUCTOR = 0x09
    BAND_ORCHESTRA = 0x0A
    COMPOSER = 0x0B
    LYRICIST = 0x0C
    RECORDING_LOCATION = 0x0D
    DURING_RECORDING = 0x0E
    DURING_PERFORMANCE = 0x0F
    MOVIE_SCREEN_CAPTURE = 0x10
    BRIGHT_COLOURED_FISH = 0x11
    ILLUSTRATION = 0x12
    BAND_ARTIST_LOGOTYPE = 0x13
    PUBLISHER_LOGOTYPE = 0x14

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS: dict[PictureType, str] = {
    PictureType.OTHER: "Other",
    PictureType.FILE_ICON_32X32: "32x32 pixels 'file icon' (PNG only)",
    PictureType.OTHER_FILE_ICON: "Other file icon",
    PictureType.COVER_FRONT: "Cover (front)",
    PictureType.COVER_BACK: "Cover (back)",
    PictureType.LEAFLET_PAGE: "Leaflet page",
    PictureType.MEDIA: "Media (e.g. label side of CD)",
    PictureType.LEAD_ARTIST: "Lead artist/lead performer/soloist",
    PictureType.ARTIST: "Artist/performer",
    PictureType.CONDUCTOR: "Conductor",
    PictureType.BAND_ORCHESTRA: "Band/Orchestra",
    PictureType.COMPOSER: "Composer",
    PictureType.LYRICIST: "Lyricist/text writer",
    PictureType.RECORDING_LOCATION: "Recording Location",
    PictureType.DURING_RECORDING: "During recording",
    PictureType.DURING_PERFORMANCE: "During performance",
    PictureType.MOVIE_SCREEN_CAPTURE: "Movie/video screen capture",
    PictureType.BRIGHT_COLOURED_FISH: "A bright coloured fish",
    PictureType.ILLUSTRATION: "Illustration",
    PictureType.BAND_ARTIST_LOGOTYPE: "Band/artist logotype",
    PictureType.PUBLISHER_LOGOTYPE: "Publisher/Studio logotype",
}
