import asyncio
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as SchemaValidationError
from pytest_mock import MockerFixture

from conftest import MemoryReportStore
from mentoring.exceptions.api_exception import AuthorizationError, ConflictError, NotFoundError, ValidationError
from mentoring.exceptions.reports import (
    IncompleteReportError,
    InvalidTransitionError,
    MeetingNotEligibleError,
    MentoringLogNotFoundError,
    NotReportOwnerError,
    ReportAlreadyCompletedError,
    ReportAlreadyExistsError,
    ReportNotEditableError,
    ReportNotFoundError,
)
from mentoring.models.report_status import ReportStatus
from mentoring.schemas.reports import CompletedReport, Report, UpdateReport
from mentoring.services.reports import ReportLifecycle, is_entered_report, missing_fields
from mentoring.settings import settings


FULL_PATCH = UpdateReport(
    topic="Pointers",
    content="Went through linked lists",
    place="Cluster 2",
    image_urls=["images/1.png"],
    signature_url="signatures/1.png",
    feedback1=5,
    feedback2=4,
    feedback3=3,
)


async def filled_report(store: MemoryReportStore, lifecycle: ReportLifecycle, **kwargs: object) -> str:
    log = store.add_log(**kwargs)  # type: ignore[arg-type]
    report_id = await lifecycle.create_report(log.id)
    await lifecycle.update_report(report_id, FULL_PATCH, log.mentor_id)
    return report_id


async def test__create_report(store: MemoryReportStore, lifecycle: ReportLifecycle) -> None:
    log = store.add_log()

    report_id = await lifecycle.create_report(log.id, "mentor")

    report = await lifecycle.get_report(report_id)
    assert report.mentoring_log_id == log.id
    assert report.mentor_id == "mentor"
    assert report.cadet_id == "cadet"
    assert report.status == ReportStatus.IN_PROGRESS
    assert report.topic is None
    assert store.logs[log.id].report_status == ReportStatus.IN_PROGRESS
    assert store.logs[log.id].report_id == report_id


async def test__create_report__not_found(lifecycle: ReportLifecycle) -> None:
    with pytest.raises(MentoringLogNotFoundError):
        await lifecycle.create_report("nope")


async def test__create_report__twice(store: MemoryReportStore, lifecycle: ReportLifecycle) -> None:
    log = store.add_log()
    await lifecycle.create_report(log.id)

    with pytest.raises(ReportAlreadyExistsError):
        await lifecycle.create_report(log.id)

    assert len(store.reports) == 1


@pytest.mark.parametrize("status", [ReportStatus.IN_PROGRESS, ReportStatus.COMPLETED])
async def test__create_report__not_ready(
    store: MemoryReportStore, lifecycle: ReportLifecycle, status: ReportStatus
) -> None:
    log = store.add_log(status=status)

    with pytest.raises(MeetingNotEligibleError) as exc_info:
        await lifecycle.create_report(log.id)

    assert isinstance(exc_info.value, ConflictError)
    assert store.logs[log.id] == log
    assert not store.reports


async def test__create_report__other_mentor(store: MemoryReportStore, lifecycle: ReportLifecycle) -> None:
    log = store.add_log()

    with pytest.raises(NotReportOwnerError):
        await lifecycle.create_report(log.id, "someone-else")

    assert store.logs[log.id].report_status == ReportStatus.READY


async def test__create_report__concurrent(store: MemoryReportStore, lifecycle: ReportLifecycle) -> None:
    log = store.add_log()

    results = await asyncio.gather(
        lifecycle.create_report(log.id), lifecycle.create_report(log.id), return_exceptions=True
    )

    assert len([r for r in results if isinstance(r, str)]) == 1
    assert len([r for r in results if isinstance(r, ConflictError)]) == 1
    assert len(store.reports) == 1


async def test__update_report__partial(store: MemoryReportStore, lifecycle: ReportLifecycle) -> None:
    log = store.add_log()
    report_id = await lifecycle.create_report(log.id)

    await lifecycle.update_report(report_id, UpdateReport(topic="Pointers", feedback1=5), "mentor")
    await lifecycle.update_report(report_id, UpdateReport(place="Cluster 2", feedback2=3), "mentor")

    report = await lifecycle.get_report(report_id)
    assert report.topic == "Pointers"
    assert report.place == "Cluster 2"
    assert report.feedback1 == 5
    assert report.feedback2 == 3
    assert report.feedback3 is None
    assert report.status == ReportStatus.IN_PROGRESS


async def test__update_report__not_found(lifecycle: ReportLifecycle) -> None:
    with pytest.raises(ReportNotFoundError) as exc_info:
        await lifecycle.update_report("nope", FULL_PATCH, "mentor")

    assert isinstance(exc_info.value, NotFoundError)


async def test__update_report__not_owner(store: MemoryReportStore, lifecycle: ReportLifecycle) -> None:
    log = store.add_log()
    report_id = await lifecycle.create_report(log.id)

    with pytest.raises(NotReportOwnerError) as exc_info:
        await lifecycle.update_report(report_id, FULL_PATCH, "someone-else")

    assert isinstance(exc_info.value, AuthorizationError)
    assert (await lifecycle.get_report(report_id)).topic is None


async def test__update_report__completed(store: MemoryReportStore, lifecycle: ReportLifecycle) -> None:
    report_id = await filled_report(store, lifecycle)
    await lifecycle.complete_report(report_id)

    with pytest.raises(ReportNotEditableError):
        await lifecycle.update_report(report_id, UpdateReport(topic="Something else"), "mentor")

    assert (await lifecycle.get_report(report_id)).topic == "Pointers"


async def test__update_report__is_done(store: MemoryReportStore, lifecycle: ReportLifecycle) -> None:
    log = store.add_log(hours=3)
    report_id = await lifecycle.create_report(log.id)

    result = await lifecycle.update_report(report_id, FULL_PATCH.model_copy(update={"is_done": True}), "mentor")

    assert result == CompletedReport(hours=3, money=3 * settings.hourly_rate)
    assert store.logs[log.id].report_status == ReportStatus.COMPLETED


async def test__update_report__without_is_done(store: MemoryReportStore, lifecycle: ReportLifecycle) -> None:
    log = store.add_log()
    report_id = await lifecycle.create_report(log.id)

    assert await lifecycle.update_report(report_id, FULL_PATCH, "mentor") is None
    assert store.logs[log.id].report_status == ReportStatus.IN_PROGRESS


async def test__complete_report(store: MemoryReportStore, lifecycle: ReportLifecycle) -> None:
    report_id = await filled_report(store, lifecycle, hours=2.5)

    result = await lifecycle.complete_report(report_id)

    assert result == CompletedReport(hours=2, money=2 * settings.hourly_rate)
    report = await lifecycle.get_report(report_id)
    assert report.status == ReportStatus.COMPLETED
    assert store.logs[report.mentoring_log_id].money == 2 * settings.hourly_rate  # type: ignore[index]


async def test__complete_report__uses_history(store: MemoryReportStore, lifecycle: ReportLifecycle) -> None:
    day = datetime(2022, 10, 21, tzinfo=timezone.utc)
    store.add_log(start=day.replace(hour=8), hours=3, status=ReportStatus.COMPLETED)
    store.add_log(start=day.replace(hour=12), hours=4, status=ReportStatus.IN_PROGRESS)
    store.add_log(start=day.replace(hour=8), hours=4, mentor_id="other", status=ReportStatus.COMPLETED)

    report_id = await filled_report(store, lifecycle, start=day.replace(hour=18), hours=2)

    assert await lifecycle.complete_report(report_id) == CompletedReport(hours=1, money=settings.hourly_rate)


async def test__complete_report__twice(store: MemoryReportStore, lifecycle: ReportLifecycle) -> None:
    report_id = await filled_report(store, lifecycle)
    await lifecycle.complete_report(report_id)

    with pytest.raises(ReportAlreadyCompletedError):
        await lifecycle.complete_report(report_id)

    assert len(store.payouts) == 1


async def test__complete_report__not_owner(store: MemoryReportStore, lifecycle: ReportLifecycle) -> None:
    report_id = await filled_report(store, lifecycle)

    with pytest.raises(NotReportOwnerError):
        await lifecycle.complete_report(report_id, "someone-else")

    assert not store.payouts


async def test__complete_report__from_ready(store: MemoryReportStore, lifecycle: ReportLifecycle) -> None:
    report_id = await filled_report(store, lifecycle)
    log_id = store.reports[report_id].mentoring_log_id
    store.logs[log_id] = store.logs[log_id].model_copy(update={"report_status": ReportStatus.READY})  # type: ignore

    with pytest.raises(InvalidTransitionError):
        await lifecycle.complete_report(report_id)


@pytest.mark.parametrize(
    "field,value",
    [
        ("cadet_id", None),
        ("mentor_id", None),
        ("image_urls", []),
        ("topic", None),
        ("topic", ""),
        ("place", None),
        ("content", None),
        ("feedback1", None),
        ("feedback2", 0),
        ("feedback3", None),
    ],
)
async def test__complete_report__incomplete(
    store: MemoryReportStore, lifecycle: ReportLifecycle, field: str, value: object
) -> None:
    report_id = await filled_report(store, lifecycle)
    report = store.reports[report_id]
    store.reports[report_id] = report.model_copy(update={field: value})

    with pytest.raises(IncompleteReportError) as exc_info:
        await lifecycle.complete_report(report_id)

    assert isinstance(exc_info.value, ValidationError)
    assert exc_info.value.detail["msg"] == "Incomplete submission"
    assert exc_info.value.detail["missing"] == [field.removesuffix("_id")]
    assert store.logs[report.mentoring_log_id].report_status == ReportStatus.IN_PROGRESS  # type: ignore[index]
    assert not store.payouts


async def test__complete_report__concurrent(store: MemoryReportStore, lifecycle: ReportLifecycle) -> None:
    report_id = await filled_report(store, lifecycle, hours=3)

    results = await asyncio.gather(
        lifecycle.complete_report(report_id), lifecycle.complete_report(report_id), return_exceptions=True
    )

    assert [r for r in results if isinstance(r, CompletedReport)] == [
        CompletedReport(hours=3, money=3 * settings.hourly_rate)
    ]
    assert len([r for r in results if isinstance(r, ConflictError)]) == 1
    assert len(store.payouts) == 1


def test__missing_fields() -> None:
    report = Report(
        id="r", mentoring_log_id="l", mentor_id="m", cadet_id="c", status=ReportStatus.IN_PROGRESS, topic="t"
    )

    assert missing_fields(report) == ["image_urls", "place", "content", "feedback1", "feedback2", "feedback3"]
    assert not is_entered_report(report)

    entered = report.model_copy(update=FULL_PATCH.values)
    assert is_entered_report(entered)
    assert missing_fields(entered.model_copy(update={"mentoring_log_id": None})) == ["mentoring_log"]


@pytest.mark.parametrize("field,value", [("topic", ""), ("content", ""), ("place", ""), ("image_urls", [])])
def test__update_report__cannot_clear_required_fields(field: str, value: object) -> None:
    with pytest.raises(SchemaValidationError):
        UpdateReport.model_validate({field: value})


async def test__complete_report__concurrent_update(store: MemoryReportStore, lifecycle: ReportLifecycle) -> None:
    report_id = await filled_report(store, lifecycle)
    patch = UpdateReport(topic="Linked lists", image_urls=["images/2.png"])

    results = await asyncio.gather(
        lifecycle.complete_report(report_id),
        lifecycle.update_report(report_id, patch, "mentor"),
        return_exceptions=True,
    )

    assert results[0] == CompletedReport(hours=2, money=2 * settings.hourly_rate)
    report = await lifecycle.get_report(report_id)
    assert report.status == ReportStatus.COMPLETED
    assert is_entered_report(report)


async def test__complete_report__history_unavailable(
    store: MemoryReportStore, lifecycle: ReportLifecycle, mocker: MockerFixture
) -> None:
    report_id = await filled_report(store, lifecycle)
    mocker.patch.object(store, "completed_meetings", side_effect=RuntimeError("database unavailable"))

    with pytest.raises(RuntimeError):
        await lifecycle.complete_report(report_id)

    log = store.logs[store.reports[report_id].mentoring_log_id]  # type: ignore[index]
    assert log.report_status == ReportStatus.IN_PROGRESS
    assert log.money is None
    assert not store.payouts
