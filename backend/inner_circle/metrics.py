from __future__ import annotations

from prometheus_client import Counter

lessons_created_total = Counter(
    "lessons_created_total",
    "Number of lessons stored through the API or the import script.",
)
lesson_toggles_total = Counter(
    "lesson_toggles_total",
    "Like/favorite toggles applied to lessons.",
    ["kind", "direction"],
)
lesson_reports_filed_total = Counter(
    "lesson_reports_filed_total",
    "Moderation reports filed against lessons.",
)
premium_upgrades_total = Counter(
    "premium_upgrades_total",
    "Users flipped to premium after a confirmed payment.",
)
store_failures_total = Counter(
    "store_failures_total",
    "Requests that failed because the document store raised.",
)
