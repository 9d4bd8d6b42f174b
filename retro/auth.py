from typing import Optional
from urllib.parse import unquote

from fastapi import Cookie

IDENTITY_COOKIE = "retroUser"


def get_identity(retro_user: Optional[str] = Cookie(default=None, alias=IDENTITY_COOKIE)) -> str:
    """Return the caller's identity from the ``retroUser`` cookie.

    The value is taken as-is: there is no session or signature behind it.
    An empty string means the caller did not identify themselves.
    """
    return unquote(retro_user or "").strip()
