# core/sniff.py
"""
Content-type sniffing over the first 512 bytes of a file.

Same signature table and ordering as Go's net/http.DetectContentType (itself a
subset of https://mimesniff.spec.whatwg.org/), so values written by this tool
match the ones older uploads already carry.
"""
import struct
from typing import Callable, List, Optional
from util.constants import SNIFF_LEN

DEFAULT_CONTENT_TYPE = "application/octet-stream"
TEXT_PLAIN = "text/plain; charset=utf-8"
TEXT_HTML = "text/html; charset=utf-8"

_WS = b"\t\n\x0c\r "
_TT = b" >"

# (data, first_non_ws) -> content type or None
Matcher = Callable[[bytes, int], Optional[str]]


def _exact(sig: bytes, ct: str) -> Matcher:
    def match(data: bytes, first_non_ws: int) -> Optional[str]:
        return ct if data.startswith(sig) else None

    return match


def _masked(mask: bytes, pat: bytes, ct: str, skip_ws: bool = False) -> Matcher:
    def match(data: bytes, first_non_ws: int) -> Optional[str]:
        if len(pat) != len(mask):
            return None
        if skip_ws:
            data = data[first_non_ws:]
        if len(data) < len(pat):
            return None
        for i, pb in enumerate(pat):
            if data[i] & mask[i] != pb:
                return None
        return ct

    return match


def _html(tag: bytes) -> Matcher:
    def match(data: bytes, first_non_ws: int) -> Optional[str]:
        data = data[first_non_ws:]
        if len(data) < len(tag) + 1:
            return None
        for i, b in enumerate(tag):
            db = data[i]
            if ord("A") <= b <= ord("Z"):
                db &= 0xDF
            if b != db:
                return None
        # Next byte must close or space-separate the tag
        if data[len(tag)] not in _TT:
            return None
        return TEXT_HTML

    return match


def _mp4(data: bytes, first_non_ws: int) -> Optional[str]:
    if len(data) < 12:
        return None
    (box_size,) = struct.unpack(">I", data[:4])
    if len(data) < box_size or box_size % 4 != 0:
        return None
    if data[4:8] != b"ftyp":
        return None
    for st in range(8, box_size, 4):
        if st == 12:
            # major brand version number
            continue
        if data[st : st + 3] == b"mp4":
            return "video/mp4"
    return None


def _text(data: bytes, first_non_ws: int) -> Optional[str]:
    for b in data[first_non_ws:]:
        if b <= 0x08 or b == 0x0B or 0x0E <= b <= 0x1A or 0x1C <= b <= 0x1F:
            return None
    return TEXT_PLAIN


_SIGNATURES: List[Matcher] = [
    *(
        _html(tag)
        for tag in (
            b"<!DOCTYPE HTML",
            b"<HTML",
            b"<HEAD",
            b"<SCRIPT",
            b"<IFRAME",
            b"<H1",
            b"<DIV",
            b"<FONT",
            b"<TABLE",
            b"<A",
            b"<STYLE",
            b"<TITLE",
            b"<B",
            b"<BODY",
            b"<BR",
            b"<P",
            b"<!--",
        )
    ),
    _masked(b"\xFF\xFF\xFF\xFF\xFF", b"<?xml", "text/xml; charset=utf-8", skip_ws=True),
    _exact(b"%PDF-", "application/pdf"),
    _exact(b"%!PS-Adobe-", "application/postscript"),
    # UTF BOMs
    _masked(b"\xFF\xFF\x00\x00", b"\xFE\xFF\x00\x00", "text/plain; charset=utf-16be"),
    _masked(b"\xFF\xFF\x00\x00", b"\xFF\xFE\x00\x00", "text/plain; charset=utf-16le"),
    _masked(b"\xFF\xFF\xFF\x00", b"\xEF\xBB\xBF\x00", TEXT_PLAIN),
    # Images
    _exact(b"\x00\x00\x01\x00", "image/x-icon"),
    _exact(b"\x00\x00\x02\x00", "image/x-icon"),
    _exact(b"BM", "image/bmp"),
    _exact(b"GIF87a", "image/gif"),
    _exact(b"GIF89a", "image/gif"),
    _masked(
        b"\xFF\xFF\xFF\xFF\x00\x00\x00\x00\xFF\xFF\xFF\xFF\xFF\xFF",
        b"RIFF\x00\x00\x00\x00WEBPVP",
        "image/webp",
    ),
    _exact(b"\x89PNG\x0D\x0A\x1A\x0A", "image/png"),
    _exact(b"\xFF\xD8\xFF", "image/jpeg"),
    # Audio and video, in mimesniff order
    _masked(b"\xFF\xFF\xFF\xFF", b".snd", "audio/basic"),
    _masked(
        b"\xFF\xFF\xFF\xFF\x00\x00\x00\x00\xFF\xFF\xFF\xFF",
        b"FORM\x00\x00\x00\x00AIFF",
        "audio/aiff",
    ),
    _masked(b"\xFF\xFF\xFF", b"ID3", "audio/mpeg"),
    _masked(b"\xFF\xFF\xFF\xFF\xFF", b"OggS\x00", "application/ogg"),
    _masked(b"\xFF" * 8, b"MThd\x00\x00\x00\x06", "audio/midi"),
    _masked(
        b"\xFF\xFF\xFF\xFF\x00\x00\x00\x00\xFF\xFF\xFF\xFF",
        b"RIFF\x00\x00\x00\x00AVI ",
        "video/avi",
    ),
    _masked(
        b"\xFF\xFF\xFF\xFF\x00\x00\x00\x00\xFF\xFF\xFF\xFF",
        b"RIFF\x00\x00\x00\x00WAVE",
        "audio/wave",
    ),
    _mp4,
    _exact(b"\x1A\x45\xDF\xA3", "video/webm"),
    # Fonts; EOT is 34 ignored bytes followed by "LP"
    _masked(b"\x00" * 34 + b"\xFF\xFF", b"\x00" * 34 + b"LP", "application/vnd.ms-fontobject"),
    _exact(b"\x00\x01\x00\x00", "font/ttf"),
    _exact(b"OTTO", "font/otf"),
    _exact(b"ttcf", "font/collection"),
    _exact(b"wOFF", "font/woff"),
    _exact(b"wOF2", "font/woff2"),
    # Archives
    _exact(b"\x1F\x8B\x08", "application/x-gzip"),
    _exact(b"PK\x03\x04", "application/zip"),
    _exact(b"Rar!\x1A\x07\x00", "application/x-rar-compressed"),
    _exact(b"Rar!\x1A\x07\x01\x00", "application/x-rar-compressed"),
    _exact(b"\x00\x61\x73\x6D", "application/wasm"),
    _text,  # must stay last
]


def detect_content_type(data: bytes) -> str:
    """
    Return the MIME type of `data`, always a valid value.
    Only the first 512 bytes are inspected; unknown content is application/octet-stream.
    """
    data = bytes(data[:SNIFF_LEN])
    first_non_ws = 0
    while first_non_ws < len(data) and data[first_non_ws] in _WS:
        first_non_ws += 1

    for match in _SIGNATURES:
        ct = match(data, first_non_ws)
        if ct:
            return ct
    return DEFAULT_CONTENT_TYPE
