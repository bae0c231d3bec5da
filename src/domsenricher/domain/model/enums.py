"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class NodeType(StrEnum):
    """Kinds of node in a newspaper batch tree."""

    BATCH = "batch"
    WORKSHIFT_ISO_TARGET = "workshift_iso_target"
    WORKSHIFT_TARGET = "workshift_target"
    TARGET_IMAGE = "target_image"
    FILM = "film"
    FILM_ISO_TARGET = "film_iso_target"
    FILM_TARGET = "film_target"
    ISO_TARGET_IMAGE = "iso_target_image"
    UNMATCHED = "unmatched"
    EDITION = "edition"
    PAGE = "page"
    BRIK = "brik"
    BRIK_IMAGE = "brik_image"
    PAGE_IMAGE = "page_image"
