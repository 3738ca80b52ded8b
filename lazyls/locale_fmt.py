"""Locale-aware number and date-name formatting.

Both formatters default to English conventions. ``load_user_locale`` reads
the process locale through the stdlib ``locale`` module and falls back to
English when the environment names a locale that is not installed.
"""

from __future__ import annotations

import calendar
import locale
import logging
import threading
from dataclasses import dataclass

logger = logging.getLogger(__name__)

ENGLISH_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# ``setlocale`` is process-global; only one loader may touch it at a time.
_LOCALE_LOCK = threading.Lock()


@dataclass(frozen=True)
class Numeric:
    """Decimal point and thousands grouping for rendered integers and floats."""

    decimal_point: str = "."
    thousands_sep: str = ","
    grouping: int = 3

    @classmethod
    def english(cls) -> Numeric:
        return cls()

    @classmethod
    def load_user_locale(cls) -> Numeric:
        with _LOCALE_LOCK:
            try:
                previous = locale.setlocale(locale.LC_NUMERIC)
                locale.setlocale(locale.LC_NUMERIC, "")
                try:
                    conv = locale.localeconv()
                finally:
                    locale.setlocale(locale.LC_NUMERIC, previous)
            except locale.Error as exc:
                logger.debug("falling back to English number format: %s", exc)
                return cls.english()
        grouping = conv.get("grouping") or []
        group_size = grouping[0] if grouping and grouping[0] > 0 else 3
        return cls(
            decimal_point=conv.get("decimal_point") or ".",
            thousands_sep=conv.get("thousands_sep", ""),
            grouping=group_size,
        )

    def format_int(self, value: int) -> str:
        """Render ``value`` with thousands separators."""
        value = int(value)
        sign = "-" if value < 0 else ""
        digits = str(abs(value))
        if not self.thousands_sep or len(digits) <= self.grouping:
            return sign + digits
        head = len(digits) % self.grouping or self.grouping
        parts = [digits[:head]]
        for start in range(head, len(digits), self.grouping):
            parts.append(digits[start : start + self.grouping])
        return sign + self.thousands_sep.join(parts)

    def format_float(self, value: float, places: int) -> str:
        """Render ``value`` rounded to ``places`` decimals."""
        text = f"{value:.{places}f}"
        if places <= 0:
            return self.format_int(int(text))
        whole, _, fraction = text.partition(".")
        return f"{self.format_int(int(whole))}{self.decimal_point}{fraction}"


@dataclass(frozen=True)
class TimeLocale:
    """Abbreviated month names, January first."""

    short_months: tuple[str, ...] = ENGLISH_MONTHS

    @classmethod
    def english(cls) -> TimeLocale:
        return cls()

    @classmethod
    def load_user_locale(cls) -> TimeLocale:
        with _LOCALE_LOCK:
            try:
                previous = locale.setlocale(locale.LC_TIME)
                locale.setlocale(locale.LC_TIME, "")
                try:
                    months = tuple(calendar.month_abbr[index] for index in range(1, 13))
                finally:
                    locale.setlocale(locale.LC_TIME, previous)
            except locale.Error as exc:
                logger.debug("falling back to English month names: %s", exc)
                return cls.english()
        if not all(months):
            return cls.english()
        return cls(short_months=months)

    def short_month_name(self, month: int) -> str:
        return self.short_months[month - 1]


__all__ = ["ENGLISH_MONTHS", "Numeric", "TimeLocale"]
