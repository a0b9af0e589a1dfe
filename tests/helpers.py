"""Helpers shared by the unit tests."""

from async_webdriver.core.types import ELEMENT_KEY


def element_ref(element_id: str) -> dict:
    """W3C element reference as the remote end returns it."""
    return {ELEMENT_KEY: element_id}


def sent_command(transport, index: int = -1):
    """Return the Command passed to the transport on call ``index``."""
    return transport.execute.call_args_list[index].args[0]
