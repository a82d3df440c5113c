"""Integration tests for JobStore and StatusReporter."""

from __future__ import annotations

import asyncio

import pytest

from roomgen.domain.generations import GenerationStatus, JobNotFoundError, JobStore, StatusReporter


@pytest.fixture
async def user_id(ledger) -> str:
    account = await ledger.open_account(credits=1)
    return account.user_id


async def create_job(job_store: JobStore, user_id: str):
    return await job_store.create(
        user_id=user_id,
        image_url="https://img.test/room.jpg",
        style="industrial",
        room_type="kitchen",
        prompt="Beautiful industrial kitchen",
    )


class TestCreate:
    async def test_new_job_is_processing(self, job_store: JobStore, user_id: str):
        job = await create_job(job_store, user_id)
        assert job.status is GenerationStatus.PROCESSING
        assert job.generated_image_url is None
        assert job.created_at is not None

    async def test_list_for_user(self, job_store: JobStore, user_id: str):
        await create_job(job_store, user_id)
        await create_job(job_store, user_id)
        assert len(await job_store.list_for_user(user_id)) == 2
        assert await job_store.list_for_user("someone-else") == []


class TestUpdate:
    async def test_completion_sets_result(self, job_store: JobStore, user_id: str):
        job = await create_job(job_store, user_id)
        updated = await job_store.update(job.id, GenerationStatus.COMPLETED, result_url="https://out.test/1.png")
        assert updated.status is GenerationStatus.COMPLETED
        assert updated.generated_image_url == "https://out.test/1.png"

    async def test_failure_never_sets_result(self, job_store: JobStore, user_id: str):
        job = await create_job(job_store, user_id)
        updated = await job_store.update(
            job.id, GenerationStatus.FAILED, result_url="https://out.test/ignored.png", error_message="boom"
        )
        assert updated.status is GenerationStatus.FAILED
        assert updated.generated_image_url is None
        assert updated.error_message == "boom"

    async def test_terminal_state_is_final(self, job_store: JobStore, user_id: str):
        job = await create_job(job_store, user_id)
        await job_store.update(job.id, GenerationStatus.COMPLETED, result_url="https://out.test/first.png")

        late_failure = await job_store.update(job.id, GenerationStatus.FAILED, error_message="late")
        late_success = await job_store.update(job.id, GenerationStatus.COMPLETED, result_url="https://out.test/late.png")
        reprocess = await job_store.update(job.id, GenerationStatus.PROCESSING)

        for record in (late_failure, late_success, reprocess):
            assert record.status is GenerationStatus.COMPLETED
            assert record.generated_image_url == "https://out.test/first.png"

    async def test_racing_terminal_writes_keep_first(self, job_store: JobStore, user_id: str):
        job = await create_job(job_store, user_id)
        await asyncio.gather(
            job_store.update(job.id, GenerationStatus.COMPLETED, result_url="https://out.test/a.png"),
            job_store.update(job.id, GenerationStatus.FAILED, error_message="b"),
        )
        stored = await job_store.get(job.id)
        assert stored.status in (GenerationStatus.COMPLETED, GenerationStatus.FAILED)
        if stored.status is GenerationStatus.COMPLETED:
            assert stored.error_message is None
        else:
            assert stored.generated_image_url is None

    async def test_update_unknown_job(self, job_store: JobStore):
        with pytest.raises(JobNotFoundError):
            await job_store.update("missing", GenerationStatus.FAILED)


class TestStatusReporter:
    async def test_repeated_reads_are_identical(self, job_store: JobStore, status_reporter: StatusReporter, user_id: str):
        job = await create_job(job_store, user_id)
        first = await status_reporter.get(job.id)
        second = await status_reporter.get(job.id)
        assert first == second

    async def test_reflects_latest_state(self, job_store: JobStore, status_reporter: StatusReporter, user_id: str):
        job = await create_job(job_store, user_id)
        await job_store.update(job.id, GenerationStatus.COMPLETED, result_url="https://out.test/1.png")
        assert (await status_reporter.get(job.id)).status is GenerationStatus.COMPLETED

    async def test_unknown_job(self, status_reporter: StatusReporter):
        with pytest.raises(JobNotFoundError):
            await status_reporter.get("missing")


class TestRecordPrediction:
    async def test_sets_prediction_without_changing_status(self, job_store: JobStore, user_id: str):
        job = await create_job(job_store, user_id)
        updated = await job_store.record_prediction(job.id, "pred-42")
        assert updated.prediction_id == "pred-42"
        assert updated.status is GenerationStatus.PROCESSING
        assert (await job_store.get(job.id)).prediction_id == "pred-42"

    async def test_unknown_job(self, job_store: JobStore):
        with pytest.raises(JobNotFoundError):
            await job_store.record_prediction("missing", "pred-42")
