from __future__ import annotations

import codecs
from pathlib import Path
from typing import List, Union

import chardet  # type: ignore

from .exceptions import FileReadError


def normalize_path(path: Union[str, Path]) -> str:
    """Return ``path`` as a string using forward slashes only."""
    return str(path).replace("\\", "/")


def is_likely_binary(data: bytes) -> bool:
    if not data:
        return False
    if data.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        return False
    return b"\x00" in data


def decode_source(data: bytes) -> str:
    """
    Decode source bytes. UTF-8 (with or without BOM) is tried first, then
    UTF-16 when a UTF-16 BOM is present, then whatever chardet guesses.
    Raises ``ValueError`` when nothing fits.
    """
    if data.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        return data.decode("utf-16")
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass
    enc = chardet.detect(data).get("encoding")
    if enc:
        try:
            return data.decode(enc, errors="strict")
        except (LookupError, UnicodeDecodeError):
            pass
    raise ValueError(f"undecodable content (guessed encoding: {enc})")


def read_source_text(path: Path) -> str:
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise FileReadError(path, exc.strerror or str(exc)) from exc
    if is_likely_binary(data):
        raise FileReadError(path, "file looks binary")
    try:
        return decode_source(data)
    except ValueError as exc:
        raise FileReadError(path, str(exc)) from exc


def split_lines(text: str) -> List[str]:
    # Split on LF only; a trailing CR stays on the line until trimming.
    return text.split("\n")
