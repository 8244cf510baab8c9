# pylint: disable=missing-module-docstring,missing-function-docstring

import base64
import json

from id3.reader import parse_tag
from serialization.tag_dict import (
    CHAPTERS_KEY,
    chapters_to_list,
    picture_type_label,
    tag_to_dict,
    tag_to_jsonable,
)

from builders import chapter_body, frame, link_body, picture_body, tag, text_body

ART = b"\xff\xd8\xff" + b"\x07" * 20


def podcast_tag():
    buf = tag(
        frame("TIT2", text_body("Episode 12")),
        frame("TIT2", text_body("duplicate")),
        frame("APIC", picture_body("image/jpeg", 3, "cover", ART)),
        frame("PRIV", b"owner\x00data"),
        frame(
            "CHAP",
            chapter_body(
                "chp0",
                0,
                61_500,
                frame("TIT2", text_body("Intro")),
                frame("WXXX", link_body("notes", "https://example.com/intro")),
            ),
        ),
        frame("CHAP", chapter_body("chp1", 61_500, 120_000, frame("APIC", picture_body("image/png", 8, "", b"png")))),
    )
    result = parse_tag(buf)
    assert result.tag is not None
    return result.tag


def test_top_level_frames_first_wins():
    rendered = tag_to_dict(podcast_tag())

    assert rendered["TIT2"] == "Episode 12"
    assert rendered["PRIV"]["size"] == len(b"owner\x00data")
    assert rendered["PRIV"]["flags"]["compressed"] is False


def test_picture_rendering():
    rendered = tag_to_dict(podcast_tag())

    assert rendered["APIC"] == {
        "Description": "cover",
        "Type": "Cover (front)",
        "MIME type": "image/jpeg",
        "Data": ART,
    }


def test_chapters_grouped_by_element_id():
    rendered = tag_to_dict(podcast_tag())

    chapters = rendered[CHAPTERS_KEY]
    assert list(chapters) == ["chp0", "chp1"]
    intro = chapters["chp0"]
    assert intro["timeScale"] == "seconds"
    assert intro["startTime"] == 0.0
    assert intro["endTime"] == 61.5
    assert intro["TIT2"] == "Intro"
    assert intro["WXXX"] == {"Description": "notes", "Url": "https://example.com/intro"}
    assert chapters["chp1"]["APIC"]["Type"] == "Artist/performer"


def test_no_chapters_key_without_chapters():
    result = parse_tag(tag(frame("TIT2", text_body("plain"))))
    assert result.tag is not None

    assert CHAPTERS_KEY not in tag_to_dict(result.tag)


def test_jsonable_encodes_image_bytes():
    rendered = tag_to_jsonable(podcast_tag())

    json.dumps(rendered)
    assert base64.b64decode(rendered["APIC"]["Data"]) == ART


def test_chapters_to_list():
    summary = chapters_to_list(podcast_tag())

    assert summary == [
        {
            "elementId": "chp0",
            "title": "Intro",
            "startTimeMs": 0,
            "endTimeMs": 61_500,
            "url": "https://example.com/intro",
            "hasImage": False,
        },
        {
            "elementId": "chp1",
            "title": None,
            "startTimeMs": 61_500,
            "endTimeMs": 120_000,
            "url": None,
            "hasImage": True,
        },
    ]


def test_picture_type_label_for_unknown_values():
    assert picture_type_label(0x42) == "Unknown (0x42)"
    assert picture_type_label(None) == ""


def test_content_group_also_rendered_as_title():
    result = parse_tag(tag(
        frame("TIT1", text_body("Season 2")),
        frame("CHAP", chapter_body("c0", 0, 1, frame("TIT1", text_body("Part A")))),
    ))
    assert result.tag is not None

    rendered = tag_to_dict(result.tag)

    assert rendered["TIT1"] == rendered["Title"] == "Season 2"
    assert rendered[CHAPTERS_KEY]["c0"]["Title"] == "Part A"


def test_other_text_frames_have_no_alias():
    result = parse_tag(tag(frame("TIT2", text_body("Episode"))))
    assert result.tag is not None

    assert tag_to_dict(result.tag) == {"TIT2": "Episode"}
