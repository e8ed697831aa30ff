from __future__ import annotations

from datetime import date

MONTH_NAMES_TR = {
    1: "Ocak",
    2: "Şubat",
    3: "Mart",
    4: "Nisan",
    5: "Mayıs",
    6: "Haziran",
    7: "Temmuz",
    8: "Ağustos",
    9: "Eylül",
    10: "Ekim",
    11: "Kasım",
    12: "Aralık",
}

# Monday first, matching the week grid
WEEKDAY_NAMES_TR = ("Pazartesi", "Salı", "Çarşamba", "Perşembe", "Cuma", "Cumartesi", "Pazar")
WEEKDAY_SHORT_TR = ("Pzt", "Sal", "Çar", "Per", "Cum", "Cmt", "Paz")

CATEGORY_PREFIX = {
    "men": "E",
    "women": "K",
}


def format_month_label(day: date) -> str:
    """'Şubat 2024'"""
    return f"{MONTH_NAMES_TR[day.month]} {day.year}"


def format_day_label(day: date) -> str:
    """'01.02.2024'"""
    return f"{day.day:02d}.{day.month:02d}.{day.year:04d}"


def format_range_label(first: date, last: date) -> str:
    return f"{format_day_label(first)} – {format_day_label(last)}"


def format_short_day(day: date) -> str:
    """'Per 01.02'"""
    return f"{WEEKDAY_SHORT_TR[day.weekday()]} {day.day:02d}.{day.month:02d}"


def format_long_day(day: date) -> str:
    """'Perşembe, 01 Şubat 2024'"""
    return f"{WEEKDAY_NAMES_TR[day.weekday()]}, {day.day:02d} {MONTH_NAMES_TR[day.month]} {day.year}"
