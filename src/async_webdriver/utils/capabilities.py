"""Build W3C new-session capability payloads."""

import copy
from typing import Any, Mapping, Optional

# browserName and vendor options key per supported browser
BROWSERS: dict[str, tuple[str, str]] = {
    "chrome": ("chrome", "goog:chromeOptions"),
    "firefox": ("firefox", "moz:firefoxOptions"),
    "edge": ("MicrosoftEdge", "ms:edgeOptions"),
}


def build_capabilities(
    browser: str = "chrome",
    headless: bool = True,
    window_size: Optional[tuple[int, int]] = None,
    extra_capabilities: Optional[Mapping[str, Any]] = None,
) -> dict:
    """
    Build browser-specific capabilities.

    Args:
        browser: Browser type (chrome, firefox, edge)
        headless: Run browser in headless mode
        window_size: Optional (width, height) for the initial window
        extra_capabilities: Additional capabilities merged over the defaults

    Returns:
        Capabilities dict suitable for ``session_request``

    Raises:
        ValueError: If browser type is not supported
    """
    key = browser.lower()
    if key not in BROWSERS:
        raise ValueError(
            f"Unsupported browser: {browser}. "
            f"Supported browsers: {list(BROWSERS.keys())}"
        )

    browser_name, options_key = BROWSERS[key]
    args: list[str] = []

    # Common arguments for stability
    if key == "chrome":
        args += ["--no-sandbox", "--disable-dev-shm-usage", "--disable-gpu"]
        if headless:
            args.append("--headless=new")
        if window_size:
            args.append(f"--window-size={window_size[0]},{window_size[1]}")

    elif key == "firefox":
        if headless:
            args.append("-headless")
        if window_size:
            args += ["-width", str(window_size[0]), "-height", str(window_size[1])]

    elif key == "edge":
        args += ["--no-sandbox", "--disable-dev-shm-usage"]
        if headless:
            args.append("--headless=new")
        if window_size:
            args.append(f"--window-size={window_size[0]},{window_size[1]}")

    capabilities: dict[str, Any] = {
        "browserName": browser_name,
        options_key: {"args": args},
    }

    # Apply extra capabilities
    if extra_capabilities:
        for name, value in extra_capabilities.items():
            capabilities[name] = copy.deepcopy(value)

    return capabilities


def session_request(capabilities: Mapping[str, Any]) -> dict:
    """
    Wrap capabilities in the new-session request body.

    A mapping that already has a top-level ``capabilities`` key is treated
    as a complete request body and passed through unchanged.
    """
    if "capabilities" in capabilities:
        return copy.deepcopy(dict(capabilities))
    return {
        "capabilities": {
            "alwaysMatch": copy.deepcopy(dict(capabilities)),
            "firstMatch": [{}],
        }
    }
