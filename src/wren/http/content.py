"""Content-type header table.

Each entry is a one-item header mapping, ready to pass as the
``header`` argument of ``send()``::

    await ctx.send(200, "<h1>hi</h1>", CONTENT_HEADERS["html"])
"""

from collections.abc import Mapping
from types import MappingProxyType

HTML: Mapping[str, str] = MappingProxyType({"content-type": "text/html"})
CSS: Mapping[str, str] = MappingProxyType({"content-type": "text/css"})
JAVASCRIPT: Mapping[str, str] = MappingProxyType({"content-type": "application/javascript"})
JSON: Mapping[str, str] = MappingProxyType({"content-type": "application/json"})

CONTENT_HEADERS: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "html": HTML,
        "css": CSS,
        "javascript": JAVASCRIPT,
        "json": JSON,
    }
)
