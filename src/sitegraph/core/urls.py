"""Public URL paths for records stored under the pages root"""

from pathlib import PurePosixPath
from typing import Optional


def file_to_url(identifier: str, pages_dir: str = "content/pages") -> Optional[str]:
    """Map a record identifier to its URL path, or None outside pages_dir.

    content/pages/about.md -> /about, content/pages/blog/index.md -> /blog,
    content/pages/index.md -> /
    """
    root = pages_dir.rstrip("/")
    if not identifier.startswith(root + "/"):
        return None

    rel = PurePosixPath(identifier[len(root):])
    url = str(rel.with_suffix("")) if rel.suffix else str(rel)
    if url.endswith("/index"):
        url = url[:-len("/index")] or "/"
    return url
