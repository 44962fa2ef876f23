"""Aggregate sentiment statistics for the dashboard."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from sqlalchemy.orm import Session

from vibe_feed.db.time import as_utc, utcnow
from vibe_feed.models import Post
from vibe_feed.schemas.dashboard import DashboardResponse, DashboardStats, LabelShare, TrendPoint

DEFAULT_LABEL = "neutral"

# Polarity used to fold the eight labels into the three trend series.
LABEL_POLARITY: dict[str, str] = {
    "happy": "positive",
    "excited": "positive",
    "peaceful": "positive",
    "sad": "negative",
    "angry": "negative",
    "anxious": "negative",
    "neutral": "neutral",
    "thoughtful": "neutral",
}

SentimentRow = tuple[str | None, float | None, datetime]


def day_label(day: date) -> str:
    """Format a day the way the dashboard axis shows it, e.g. 'Oct 18'."""
    return f"{day:%b} {day.day}"


def build_distribution(labels: Iterable[str]) -> list[LabelShare]:
    """Count labels and express each as a rounded percentage of the total."""
    counts = Counter(labels)
    total = sum(counts.values())
    if total == 0:
        return []
    # Stable sort: ties keep first-seen order; load_sentiment_rows yields oldest first.
    ordered = sorted(counts.items(), key=lambda item: -item[1])
    return [
        LabelShare(label=label, count=count, percentage=round(count / total * 100))
        for label, count in ordered
    ]


def build_trends(rows: Iterable[SentimentRow], *, days: int, today: date) -> list[TrendPoint]:
    """Bucket posts into per-day polarity counts for the last `days` days."""
    buckets: dict[date, TrendPoint] = {}
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        buckets[day] = TrendPoint(date=day_label(day))

    for label, _score, created_at in rows:
        point = buckets.get(as_utc(created_at).date())
        if point is None:
            continue
        polarity = LABEL_POLARITY.get(label or DEFAULT_LABEL, "neutral")
        setattr(point, polarity, getattr(point, polarity) + 1)

    return list(buckets.values())


def summarize(rows: list[SentimentRow], *, days: int, now: datetime | None = None) -> DashboardResponse:
    """Compute the full dashboard payload from (label, score, created_at) rows."""
    today = as_utc(now or utcnow()).date()
    distribution = build_distribution(label or DEFAULT_LABEL for label, _, _ in rows)
    trends = build_trends(rows, days=days, today=today)

    total = len(rows)
    if total:
        avg_score = sum(score or 0.0 for _, score, _ in rows) / total
        stats = DashboardStats(
            total_posts=total,
            avg_sentiment=round(avg_score, 2),
            most_common=distribution[0].label,
        )
    else:
        stats = DashboardStats(total_posts=0, avg_sentiment=0.0, most_common=DEFAULT_LABEL)

    return DashboardResponse(stats=stats, distribution=distribution, trends=trends)


def load_sentiment_rows(db: Session) -> list[SentimentRow]:
    """Fetch label, score and creation time of every labelled post, oldest first."""
    rows = (
        db.query(Post.sentiment_label, Post.sentiment_score, Post.created_at)
        .filter(Post.sentiment_label.isnot(None))
        .order_by(Post.created_at, Post.id)
        .all()
    )
    return [(label, score, created_at) for label, score, created_at in rows]
