from .utils import lesson_payload


def test_grouped_by_lesson_orders_by_count(reports):
    for reporter in ("a@x.com", "b@x.com", "a@x.com"):
        reports.file("L1", reporter, "offensive", title="Lesson one")
    reports.file("L2", "c@x.com", "spam", title="Lesson two")

    grouped = reports.list_grouped_by_lesson()

    assert [group["lessonId"] for group in grouped] == ["L1", "L2"]
    assert [group["reportCount"] for group in grouped] == [3, 1]
    assert grouped[0]["title"] == "Lesson one"
    assert len(grouped[0]["reports"]) == 3
    assert {entry["reporterEmail"] for entry in grouped[0]["reports"]} == {"a@x.com", "b@x.com"}


def test_same_reporter_can_file_repeatedly(reports, store):
    reports.file("L1", "a@x.com", "spam")
    reports.file("L1", "a@x.com", "spam")

    assert store.lesson_reports.count_documents({"lessonId": "L1"}) == 2


def test_group_takes_first_title_seen(reports, store):
    first = reports.file("L1", "a@x.com", "spam", title="Original", category="Career")
    second = reports.file("L1", "b@x.com", "spam", title="Renamed")
    store.lesson_reports.update_one({"_id": first["_id"]}, {"$set": {"timestamp": 1}})
    store.lesson_reports.update_one({"_id": second["_id"]}, {"$set": {"timestamp": 2}})

    grouped = reports.list_grouped_by_lesson()

    assert grouped[0]["title"] == "Original"
    assert grouped[0]["category"] == "Career"


def test_clear_for_lesson(reports, store):
    reports.file("L1", "a@x.com", "spam")
    reports.file("L1", "b@x.com", "spam")
    reports.file("L2", "c@x.com", "spam")

    assert reports.clear_for_lesson("L1") == 2
    assert store.lesson_reports.count_documents({}) == 1
    assert reports.count() == 1


def test_reports_outlive_deleted_lesson(lessons, reports):
    lesson_id = str(lessons.create(lesson_payload())["_id"])
    reports.file(lesson_id, "a@x.com", "spam", title="Letting go of perfect")

    lessons.delete(lesson_id)

    grouped = reports.list_grouped_by_lesson()
    assert grouped[0]["lessonId"] == lesson_id
    assert grouped[0]["reportCount"] == 1
