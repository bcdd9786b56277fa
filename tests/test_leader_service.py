import pytest

from spanpaxos.follower_manager import FollowerManager
from spanpaxos.leader_operator import LeaderOperator
from spanpaxos.leader_service import LeaderService
from spanpaxos.leader_state import LeaderState
from spanpaxos.messages import SaveWriteRequest, SaveWriteResponse, ServiceError
from spanpaxos.true_time import TrueTimeService
from spanpaxos.wal import WriteAheadLogService


class RecordingOperator:
    def __init__(self, error=None):
        self.entries = []
        self.error = error

    async def save_write(self, entry):
        self.entries.append(entry)
        if self.error is not None:
            raise self.error


@pytest.mark.asyncio
async def test_successful_write_returns_response():
    operator = RecordingOperator()
    service = LeaderService(operator)
    response = await service.save_write(SaveWriteRequest(payload="x"))
    assert response == SaveWriteResponse()
    assert operator.entries == ["x"]


@pytest.mark.asyncio
async def test_failure_becomes_internal_error():
    operator = RecordingOperator(error=ValueError("boom"))
    service = LeaderService(operator)
    with pytest.raises(ServiceError) as excinfo:
        await service.save_write(SaveWriteRequest(payload="x"))
    assert excinfo.value.code == "internal"
    assert excinfo.value.message == "boom"
    assert isinstance(excinfo.value.__cause__, ValueError)


@pytest.mark.asyncio
async def test_unstarted_followers_reported_to_client(tmp_path):
    operator = LeaderOperator(
        LeaderState(),
        FollowerManager(),
        TrueTimeService(),
        WriteAheadLogService(tmp_path / "wal.log"),
    )
    service = LeaderService(operator)
    with pytest.raises(ServiceError, match="Followers handles not started") as excinfo:
        await service.save_write(SaveWriteRequest(payload="x"))
    assert excinfo.value.code == "internal"