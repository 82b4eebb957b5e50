"""
User Directory Adapters - Implementations of UserDirectoryPort.

MattermostUserDirectory: resolves users through the chat server's REST API
StaticUserDirectory: fixed set of users, for the CLI and tests
"""

import logging
from typing import Iterable, Optional

from ...core.exceptions import NotFoundError
from ...core.ports.user_directory import UserDirectoryPort, UserInfo
from .client import MattermostApiClient


class MattermostUserDirectory(UserDirectoryPort):
    """
    Mattermost implementation of the UserDirectoryPort.

    A user is an administrator when their roles include system_admin.
    """

    ADMIN_ROLE = "system_admin"

    def __init__(
        self,
        base_url: str,
        token: str,
        client: Optional[MattermostApiClient] = None,
    ):
        self._client = client or MattermostApiClient(base_url=base_url, token=token)
        self.logger = logging.getLogger("MattermostUserDirectory")

    @property
    def name(self) -> str:
        return "Mattermost"

    def get_user(self, user_id: str) -> UserInfo:
        return self._parse_user(self._client.get_user(user_id))

    def get_user_by_username(self, username: str) -> UserInfo:
        return self._parse_user(self._client.get_user_by_username(username.lstrip("@")))

    def _parse_user(self, data: dict) -> UserInfo:
        roles = data.get("roles", "").split()
        return UserInfo(
            id=data["id"],
            username=data.get("username", ""),
            is_admin=self.ADMIN_ROLE in roles,
        )


class StaticUserDirectory(UserDirectoryPort):
    """
    Directory over a fixed set of usernames.

    Usernames double as user ids.
    """

    def __init__(self, usernames: Iterable[str] = (), admins: Iterable[str] = ()):
        self._admins = {a.lstrip("@") for a in admins}
        self._users: dict[str, UserInfo] = {}
        for username in list(usernames) + sorted(self._admins):
            self.add_user(username)

    @property
    def name(self) -> str:
        return "Static"

    def add_user(self, username: str, is_admin: bool = False) -> UserInfo:
        username = username.lstrip("@")
        user = UserInfo(
            id=username,
            username=username,
            is_admin=is_admin or username in self._admins,
        )
        self._users[username] = user
        return user

    def get_user(self, user_id: str) -> UserInfo:
        user = self._users.get(user_id)
        if user is None:
            raise NotFoundError(f"Unknown user: {user_id}")
        return user

    def get_user_by_username(self, username: str) -> UserInfo:
        return self.get_user(username.lstrip("@"))
