"""Notification routing and unread badge aggregation.

Two classifiers share one interface but apply different strictness:

* ``RouteClassifier`` decides where a notification leads. Links are matched by
  prefix, then title/message text by word-boundary patterns.
* ``BadgeClassifier`` decides which sidebar badge a notification bumps. Links
  are matched by substring, then title/message text by plain keywords, and
  only the four tracked buckets can be produced.
"""
from __future__ import annotations

import re
from typing import Iterable, Protocol, Sequence

from ..schemas.notifications import Notification, RouteBucket, UnreadCounts

LINK_PREFIX_ORDER: tuple[RouteBucket, ...] = (
    RouteBucket.CHAT,
    RouteBucket.INQUIRIES,
    RouteBucket.TRIPPINGS,
    RouteBucket.DEALS,
    RouteBucket.PROPERTIES,
)

TEXT_PATTERNS: tuple[tuple[re.Pattern[str], RouteBucket], ...] = (
    (re.compile(r"(inquiry|lead)\b"), RouteBucket.INQUIRIES),
    (re.compile(r"(tripping|visit|site\s*visit|schedule(d)?\s*tripping)\b"), RouteBucket.TRIPPINGS),
    (re.compile(r"(deal|offer|agreement|reservation|closed\s*deal)\b"), RouteBucket.DEALS),
    (re.compile(r"(message|chat|replied|responded)\b"), RouteBucket.CHAT),
    (re.compile(r"(property|listing|new\s*property)\b"), RouteBucket.PROPERTIES),
)

TRACKED_BUCKETS: tuple[RouteBucket, ...] = (
    RouteBucket.CHAT,
    RouteBucket.INQUIRIES,
    RouteBucket.TRIPPINGS,
    RouteBucket.DEALS,
)

BADGE_LINK_ORDER: tuple[RouteBucket, ...] = (
    RouteBucket.INQUIRIES,
    RouteBucket.CHAT,
    RouteBucket.TRIPPINGS,
    RouteBucket.DEALS,
)

BADGE_KEYWORDS: tuple[tuple[str, RouteBucket], ...] = (
    ("inquiry", RouteBucket.INQUIRIES),
    ("tripping", RouteBucket.TRIPPINGS),
    ("deal", RouteBucket.DEALS),
    ("message", RouteBucket.CHAT),
)

_SEGMENT_TERMINATORS = ("/", "?", "#")


class NotificationClassifier(Protocol):
    def classify(self, notification: Notification) -> RouteBucket | None: ...


def notification_link(notification: Notification) -> str:
    """Return the notification's link, or an empty string."""

    if notification.data is None:
        return ""
    return notification.data.link or ""


def notification_text(notification: Notification) -> tuple[str, str]:
    """Return the lowercased (title, message) pair.

    Values nested under ``data`` win over the top-level fields.
    """

    data = notification.data
    title = (data.title if data else None) or notification.title or ""
    message = (data.message if data else None) or notification.message or ""
    return title.lower(), message.lower()


def link_matches(link: str, path: str, *, segment_boundary: bool = False) -> bool:
    """Return True if ``link`` points at ``path``.

    The default is a bare prefix test, so ``/inquiries-archive`` matches
    ``/inquiries``. With ``segment_boundary`` the next character must end the
    path segment.
    """

    if not link.startswith(path):
        return False
    if not segment_boundary:
        return True
    rest = link[len(path):]
    return not rest or rest.startswith(_SEGMENT_TERMINATORS)


class RouteClassifier:
    """Prefix-then-pattern classifier used for navigation."""

    def __init__(self, *, segment_boundary: bool = False) -> None:
        self.segment_boundary = segment_boundary

    def classify(self, notification: Notification) -> RouteBucket | None:
        link = notification_link(notification)
        if link:
            for bucket in LINK_PREFIX_ORDER:
                if link_matches(link, bucket.path, segment_boundary=self.segment_boundary):
                    return bucket

        title, message = notification_text(notification)
        text = f"{title} {message}"
        for pattern, bucket in TEXT_PATTERNS:
            if pattern.search(text):
                return bucket
        return None


class BadgeClassifier:
    """Substring-then-keyword classifier used for unread badges."""

    def classify(self, notification: Notification) -> RouteBucket | None:
        link = notification_link(notification)
        for bucket in BADGE_LINK_ORDER:
            if bucket.path in link:
                return bucket

        title, message = notification_text(notification)
        for keyword, bucket in BADGE_KEYWORDS:
            if keyword in title or keyword in message:
                return bucket
        return None


def classify(notification: Notification, *, segment_boundary: bool = False) -> RouteBucket | None:
    """Return the sidebar bucket a notification leads to, or None."""

    return RouteClassifier(segment_boundary=segment_boundary).classify(notification)


def build_counts(
    notifications: Iterable[Notification],
    classifier: NotificationClassifier | None = None,
) -> UnreadCounts:
    """Count unread notifications per tracked sidebar bucket.

    Each notification bumps at most one bucket; untracked buckets are dropped.
    """

    classifier = classifier or BadgeClassifier()
    counts = {bucket.value: 0 for bucket in TRACKED_BUCKETS}
    for notification in notifications:
        bucket = classifier.classify(notification)
        if bucket is None or bucket.value not in counts:
            continue
        counts[bucket.value] += 1
    return UnreadCounts(**counts)


def counts_by_path(counts: UnreadCounts) -> dict[str, int]:
    """Key an unread-count map by sidebar path (``/chat`` …)."""

    return {bucket.path: getattr(counts, bucket.value) for bucket in TRACKED_BUCKETS}


def unread_ids_for_path(
    notifications: Sequence[Notification],
    path: str,
    *,
    segment_boundary: bool = False,
) -> list[str | int]:
    """Return ids of notifications that navigate to ``path``."""

    classifier = RouteClassifier(segment_boundary=segment_boundary)
    ids: list[str | int] = []
    for notification in notifications:
        if notification.id is None:
            continue
        bucket = classifier.classify(notification)
        if bucket is not None and bucket.path == path:
            ids.append(notification.id)
    return ids
