"""Google OpenID userinfo lookup."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"


@dataclass
class UserInfo:
    """Profile of the identity behind an access token."""

    sub: str = ""
    name: str = ""
    given_name: str = ""
    family_name: str = ""
    profile: str = ""
    picture: str = ""
    email: str = ""
    email_verified: bool = False
    gender: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserInfo:
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


def fetch_user_info(session: Any) -> UserInfo:
    """Ask Google who the session is authenticated as.

    Args:
        session: An authorized ``requests`` session.

    Raises:
        requests.HTTPError: If the userinfo endpoint rejects the token.
    """
    response = session.get(USERINFO_URL)
    response.raise_for_status()
    return UserInfo.from_dict(response.json())
