"""Decoding of the router's ``<SessionInfo>`` login reply."""

from dataclasses import dataclass, field

from bs4 import BeautifulSoup

from ..exceptions import TransportFailure
from .sid import INVALID_SID

# lxml's XML parser; keeps tag case (SID, BlockTime, ...).
_XML_PARSER = "xml"


@dataclass
class User:
    name: str
    last: bool = False


@dataclass
class SessionInfo:
    """Decoded ``login_sid.lua`` reply."""

    sid: str = INVALID_SID
    challenge: str = ""
    block_time: int = 0
    users: list[User] = field(default_factory=list)
    rights: dict[str, int] = field(default_factory=dict)

    @property
    def last_user(self) -> str | None:
        """Name of the user the router flags as last logged in, if any."""
        return next((u.name for u in self.users if u.last), None)


def _text(node) -> str:
    return node.get_text(strip=True) if node is not None else ""


def parse_session_info(xml: str | bytes) -> SessionInfo:
    """
    Decode a ``<SessionInfo>`` document.

    Example reply::

        <SessionInfo>
          <SID>0000000000000000</SID>
          <Challenge>2$60000$c5b7...$6000$d19c...</Challenge>
          <BlockTime>0</BlockTime>
          <Rights/>
          <Users><User last="1">fritz1234</User></Users>
        </SessionInfo>

    Raises TransportFailure when the document has no ``<SessionInfo>``
    root, i.e. the router (or something in between) answered with anything
    but a login reply.
    """
    soup = BeautifulSoup(xml, _XML_PARSER)
    root = soup.find("SessionInfo")
    if root is None:
        raise TransportFailure("router reply is not a SessionInfo document")

    block_time = _text(root.find("BlockTime", recursive=False))
    try:
        block_time = int(block_time) if block_time else 0
    except ValueError:
        block_time = 0

    users = [
        User(name=_text(node), last=node.get("last") == "1")
        for node in root.find_all("User")
    ]

    # <Rights><Name>Dial</Name><Access>2</Access>...</Rights>
    rights: dict[str, int] = {}
    rights_node = root.find("Rights", recursive=False)
    if rights_node is not None:
        for name in rights_node.find_all("Name"):
            access = name.find_next_sibling("Access")
            try:
                rights[_text(name)] = int(_text(access))
            except ValueError:
                rights[_text(name)] = 0

    return SessionInfo(
        sid=_text(root.find("SID", recursive=False)) or INVALID_SID,
        challenge=_text(root.find("Challenge", recursive=False)),
        block_time=block_time,
        users=users,
        rights=rights,
    )
