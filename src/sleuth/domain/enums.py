"""Shared enums for cards and beliefs."""

from __future__ import annotations

from enum import StrEnum


class Category(StrEnum):
    SUSPECT = "suspect"
    WEAPON = "weapon"
    ROOM = "room"


CATEGORIES: tuple[Category, ...] = (Category.SUSPECT, Category.WEAPON, Category.ROOM)


class Certainty(StrEnum):
    YES = "yes"
    NO = "no"
    MAYBE = "maybe"
