"""The service that clients call to save writes through the leader."""

from __future__ import annotations

from spanpaxos.leader_operator import LeaderOperator
from spanpaxos.messages import SaveWriteRequest, SaveWriteResponse, ServiceError


class LeaderService:
    """Answers client requests addressed to the Paxos group leader."""

    def __init__(self, leader_operator: LeaderOperator) -> None:
        self.leader_operator = leader_operator

    async def save_write(self, request: SaveWriteRequest) -> SaveWriteResponse:
        """Save the request's payload; failures become an internal service error."""
        try:
            await self.leader_operator.save_write(request.payload)
        except Exception as exc:
            raise ServiceError(str(exc), code="internal") from exc
        return SaveWriteResponse()