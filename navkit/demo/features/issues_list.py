"""Issues list screen (browse mode).

Tapping an issue is a plain action; the app layer decides where it leads.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from navkit.shared.domain.issues import IssuesListRepositoryProtocol, IssueUIModel

from .base import Action, Effect, Feature


class IssuesListState(BaseModel):
    model_config = ConfigDict(frozen=True)

    issues: List[IssueUIModel] = []
    is_loading: bool = False
    error_message: Optional[str] = None


class OnAppear(Action):
    pass


class IssuesResponse(Action):
    issues: List[IssueUIModel]


class ErrorOccurred(Action):
    message: str


class IssueTapped(Action):
    issue_id: str


class IssuesListFeature(Feature[IssuesListState]):
    name = "issues_list"

    def __init__(self, repository: IssuesListRepositoryProtocol):
        super().__init__(IssuesListState())
        self.repository = repository

    def find_issue(self, issue_id: str) -> Optional[IssueUIModel]:
        return next((issue for issue in self.state.issues if issue.id == issue_id), None)

    def reduce(self, action: Action) -> Optional[Effect]:
        if isinstance(action, OnAppear):
            self._set_state(is_loading=True, error_message=None)

            async def load() -> None:
                async for issues in self.repository.get_all_issues():
                    await self.send(IssuesResponse(issues=issues))

            return load

        if isinstance(action, IssuesResponse):
            self._set_state(is_loading=False, issues=action.issues)
        elif isinstance(action, ErrorOccurred):
            self._set_state(is_loading=False, error_message=action.message)
        return None
