"""
Redirect probing: navigation engines and the deadline-bounded probe.
"""

from redirect_scanner.probe.navigators import (
    BrowserNavigator,
    HttpNavigator,
    Navigator,
    build_navigator,
)
from redirect_scanner.probe.redirect_probe import RedirectProbe, same_location

__all__ = [
    "BrowserNavigator",
    "HttpNavigator",
    "Navigator",
    "RedirectProbe",
    "build_navigator",
    "same_location",
]
