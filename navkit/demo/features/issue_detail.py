"""Issue detail screen."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from navkit.shared.domain.issues import IssueDetailRepositoryProtocol, IssueDetailUIModel

from .base import Action, Effect, Feature


class IssueDetailState(BaseModel):
    model_config = ConfigDict(frozen=True)

    issue_id: str
    issue_detail: Optional[IssueDetailUIModel] = None
    is_loading: bool = False
    error_message: Optional[str] = None


class OnAppear(Action):
    pass


class IssueDetailResponse(Action):
    issue_detail: Optional[IssueDetailUIModel] = None


class ErrorOccurred(Action):
    message: str


class IssueDetailFeature(Feature[IssueDetailState]):
    name = "issue_detail"

    def __init__(self, issue_id: str, repository: IssueDetailRepositoryProtocol):
        super().__init__(IssueDetailState(issue_id=issue_id))
        self.repository = repository

    def reduce(self, action: Action) -> Optional[Effect]:
        if isinstance(action, OnAppear):
            self._set_state(is_loading=True, error_message=None)
            issue_id = self.state.issue_id

            async def load() -> None:
                async for detail in self.repository.get_issue_detail(issue_id):
                    await self.send(IssueDetailResponse(issue_detail=detail))

            return load

        if isinstance(action, IssueDetailResponse):
            if action.issue_detail is None:
                self._set_state(is_loading=False, error_message="Issue not found")
            else:
                self._set_state(is_loading=False, issue_detail=action.issue_detail)
        elif isinstance(action, ErrorOccurred):
            self._set_state(is_loading=False, error_message=action.message)
        return None
