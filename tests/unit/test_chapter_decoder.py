# pylint: disable=missing-module-docstring,missing-function-docstring

from constants import MAX_CHAPTER_DEPTH_LIMIT
from id3.decoders import DecodeContext, decode_frame
from id3.enums.issue_kind import IssueKind
from id3.enums.picture_type import PictureType
from id3.frames import (
    ChapterFrame,
    GenericFrame,
    LinkFrame,
    PictureFrame,
    TextFrame,
)
from id3.header import parse_frame_header
from id3.reader import parse_tag

from builders import (
    UNSET_OFFSET,
    chapter_body,
    frame,
    link_body,
    picture_body,
    tag,
    text_body,
)


def decode(raw: bytes, *, version: int = 4, max_depth: int = 4):
    ctx = DecodeContext(version=version, max_depth=max_depth)
    header = parse_frame_header(raw, 0, version=version)
    assert header is not None
    return decode_frame(raw, 0, header, ctx), ctx


# ---------------------------------------------------------------------
# Element id + timings
# ---------------------------------------------------------------------

def test_chapter_with_nested_title():
    raw = frame("CHAP", chapter_body("chp0", 0, 61_500, frame("TIT2", text_body("Intro"))))

    chapter, ctx = decode(raw)

    assert isinstance(chapter, ChapterFrame)
    assert chapter.element_id == "chp0"
    assert chapter.start_time_ms == 0
    assert chapter.end_time_ms == 61_500
    assert chapter.start_byte_offset == UNSET_OFFSET
    assert chapter.end_byte_offset == UNSET_OFFSET
    assert len(chapter.children) == 1
    child = chapter.children[0]
    assert isinstance(child, TextFrame)
    assert child.information == "Intro"
    assert chapter.title == "Intro"
    assert ctx.issues == []


def test_chapter_byte_offsets():
    raw = frame(
        "CHAP",
        chapter_body("c1", 1_000, 2_000, start_offset=4_096, end_offset=8_192),
    )

    chapter, _ = decode(raw)

    assert isinstance(chapter, ChapterFrame)
    assert chapter.start_byte_offset == 4_096
    assert chapter.end_byte_offset == 8_192
    assert chapter.children == ()


def test_timings_are_plain_big_endian_in_v24():
    # 200 has the high bit of its low byte set; synchsafe would misread it
    raw = frame("CHAP", chapter_body("c", 200, 0x01020380))

    chapter, _ = decode(raw)

    assert isinstance(chapter, ChapterFrame)
    assert chapter.start_time_ms == 200
    assert chapter.end_time_ms == 0x01020380


def test_utf16_element_id():
    raw = frame("CHAP", chapter_body("kapitel-1", 0, 10, encoding=1))

    chapter, _ = decode(raw)

    assert isinstance(chapter, ChapterFrame)
    assert chapter.element_id == "kapitel-1"
    assert chapter.end_time_ms == 10


# ---------------------------------------------------------------------
# Sub-frames
# ---------------------------------------------------------------------

def test_chapter_with_title_link_and_artwork_in_order():
    image = b"\xff\xd8" + b"\x01" * 64
    raw = frame(
        "CHAP",
        chapter_body(
            "chp1",
            61_500,
            120_000,
            frame("TIT2", text_body("Main topic")),
            frame("WXXX", link_body("", "https://example.com/topic")),
            frame("APIC", picture_body("image/jpeg", 0x03, "art", image)),
        ),
    )

    chapter, ctx = decode(raw)

    assert isinstance(chapter, ChapterFrame)
    assert [child.frame_id for child in chapter.children] == ["TIT2", "WXXX", "APIC"]
    link = chapter.children[1]
    picture = chapter.children[2]
    assert isinstance(link, LinkFrame) and link.url == "https://example.com/topic"
    assert isinstance(picture, PictureFrame)
    assert picture.picture_type is PictureType.COVER_FRONT
    assert picture.image_bytes == image
    assert ctx.issues == []


def test_subframes_use_parent_version():
    raw = frame(
        "CHAP",
        chapter_body("c", 0, 1, frame("TIT2", text_body("v3 title", 0), version=3)),
        version=3,
    )

    chapter, _ = decode(raw, version=3)

    assert isinstance(chapter, ChapterFrame)
    assert chapter.title == "v3 title"


def test_short_trailing_bytes_are_padding():
    raw = frame("CHAP", chapter_body("c", 0, 1, frame("TIT2", text_body("t"))) + b"\x01\x02\x03")

    chapter, ctx = decode(raw)

    assert isinstance(chapter, ChapterFrame)
    assert len(chapter.children) == 1
    assert ctx.issues == []


def test_zero_padding_inside_chapter_stops_subframes():
    raw = frame("CHAP", chapter_body("c", 0, 1, frame("TIT2", text_body("t"))) + b"\x00" * 12)

    chapter, ctx = decode(raw)

    assert isinstance(chapter, ChapterFrame)
    assert len(chapter.children) == 1
    assert ctx.issues == []


def test_truncated_subframe_keeps_earlier_children():
    raw = frame(
        "CHAP",
        chapter_body(
            "c",
            0,
            1,
            frame("TIT2", text_body("kept")),
            frame("TIT3", text_body("lost"), size=99),
        ),
    )

    chapter, ctx = decode(raw)

    assert isinstance(chapter, ChapterFrame)
    assert [child.frame_id for child in chapter.children] == ["TIT2"]
    assert [issue.kind for issue in ctx.issues] == [IssueKind.TRUNCATED_FRAME]
    assert ctx.issues[0].frame_id == "TIT3"


# ---------------------------------------------------------------------
# Degraded chapters
# ---------------------------------------------------------------------

def test_truncated_chapter_header():
    raw = frame("CHAP", b"\x00chp0\x00" + b"\x00" * 10)

    chapter, ctx = decode(raw)

    assert isinstance(chapter, ChapterFrame)
    assert chapter.element_id == "chp0"
    assert chapter.start_time_ms == 0
    assert chapter.end_time_ms == 0
    assert chapter.children == ()
    assert [issue.kind for issue in ctx.issues] == [IssueKind.TRUNCATED_CHAPTER_HEADER]


def test_empty_chapter_body():
    chapter, ctx = decode(frame("CHAP", b""))

    assert isinstance(chapter, ChapterFrame)
    assert chapter.element_id == ""
    assert ctx.issues[0].kind is IssueKind.TRUNCATED_CHAPTER_HEADER


# ---------------------------------------------------------------------
# Nesting
# ---------------------------------------------------------------------

def test_nested_chapter_within_limit():
    inner = frame("CHAP", chapter_body("inner", 5, 6, frame("TIT2", text_body("deep"))))
    raw = frame("CHAP", chapter_body("outer", 0, 10, inner))

    chapter, ctx = decode(raw, max_depth=2)

    assert isinstance(chapter, ChapterFrame)
    nested = chapter.children[0]
    assert isinstance(nested, ChapterFrame)
    assert nested.element_id == "inner"
    assert nested.title == "deep"
    assert ctx.issues == []


def test_nesting_past_limit_becomes_generic():
    inner_body = chapter_body("inner", 5, 6)
    raw = frame("CHAP", chapter_body("outer", 0, 10, frame("CHAP", inner_body)))

    chapter, ctx = decode(raw, max_depth=1)

    assert isinstance(chapter, ChapterFrame)
    nested = chapter.children[0]
    assert isinstance(nested, GenericFrame)
    assert nested.body == inner_body
    assert [issue.kind for issue in ctx.issues] == [IssueKind.CHAPTER_DEPTH_EXCEEDED]


def test_adversarial_nesting_is_bounded():
    raw = frame("TIT2", text_body("bottom"))
    for level in range(50):
        raw = frame("CHAP", chapter_body(f"c{level}", 0, 1, raw))

    chapter, ctx = decode(raw, max_depth=4)

    depth = 0
    node = chapter
    while isinstance(node, ChapterFrame):
        depth += 1
        node = node.children[0]

    assert depth == 4
    assert isinstance(node, GenericFrame)
    assert ctx.issues[0].kind is IssueKind.CHAPTER_DEPTH_EXCEEDED


def test_depth_setting_is_capped():
    assert DecodeContext(version=4, max_depth=1_000).max_depth == MAX_CHAPTER_DEPTH_LIMIT
    assert DecodeContext(version=4, max_depth=-3).max_depth == 0


def test_huge_depth_setting_cannot_exhaust_the_stack():
    raw = frame("TIT2", text_body("bottom"))
    for level in range(600):
        raw = frame("CHAP", chapter_body(f"c{level}", 0, 1, raw))

    result = parse_tag(tag(raw), max_depth=1_000)

    assert result.tag is not None
    depth = 0
    node = result.tag.frames[0]
    while isinstance(node, ChapterFrame):
        depth += 1
        node = node.children[0]

    assert depth == MAX_CHAPTER_DEPTH_LIMIT
    assert isinstance(node, GenericFrame)
    assert [issue.kind for issue in result.issues] == [IssueKind.CHAPTER_DEPTH_EXCEEDED]
