"""Judge protocol — an opaque scoring capability returning a structured verdict."""

from typing import Protocol

from change_eval.judge.domain.verdict import JudgeRequest, JudgeVerdict


class Judge(Protocol):
    async def judge(self, request: JudgeRequest) -> JudgeVerdict:
        """
        Raises:
            JudgeInvocationError: if the judge cannot produce a valid verdict.
        """
        ...
