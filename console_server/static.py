"""Static asset resolution and file responses for the console bundle."""

import errno
import os
import stat
from typing import NamedTuple, Optional, Tuple

from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from console_server.caching import cache_control_for

# Second mount point; the bundle is also served at the root.
CONSOLE_PREFIX = "/console"

INDEX_FILE = "index.html"

# stat errors that mean "no such asset" rather than a server fault
_MISS_ERRNOS = {errno.ENOENT, errno.ENOTDIR, errno.ENAMETOOLONG}

Asset = Tuple[str, os.stat_result]


class StaticMatch(NamedTuple):
    full_path: str
    stat_result: os.stat_result
    # set when a directory was requested without its trailing slash
    redirect_to: Optional[str] = None


class ConsoleStaticFiles(StaticFiles):
    """StaticFiles for the console bundle.

    Dotfiles are never exposed, responses carry no ETag/Last-Modified,
    and Cache-Control follows the asset's content type.
    """

    def find(self, relative_path: str) -> Optional[Asset]:
        """Stat ``relative_path`` under the asset root, or None on a miss."""
        parts = [part for part in relative_path.split("/") if part]
        if any(part.startswith(".") for part in parts):
            return None
        try:
            full_path, stat_result = self.lookup_path(os.path.join("", *parts))
        except ValueError:
            # embedded NUL byte
            return None
        except OSError as exc:
            if exc.errno in _MISS_ERRNOS:
                return None
            raise
        if stat_result is None:
            return None
        return full_path, stat_result

    def find_file(self, relative_path: str) -> Optional[Asset]:
        asset = self.find(relative_path)
        if asset is None or not stat.S_ISREG(asset[1].st_mode):
            return None
        return asset

    def file_response(self, full_path, stat_result, scope=None, status_code=200):
        response = FileResponse(full_path, status_code=status_code, stat_result=stat_result)
        # stat headers are set eagerly when stat_result is given
        del response.headers["etag"]
        del response.headers["last-modified"]
        response.headers["cache-control"] = cache_control_for(response.media_type)
        return response


def _strip_console_prefix(url_path: str) -> Optional[str]:
    if url_path == CONSOLE_PREFIX:
        return ""
    if url_path.startswith(CONSOLE_PREFIX + "/"):
        return url_path[len(CONSOLE_PREFIX):]
    return None


def _match_mount(files: ConsoleStaticFiles, relative_path: str, url_path: str) -> Optional[StaticMatch]:
    asset = files.find(relative_path)
    if asset is None:
        return None
    full_path, stat_result = asset
    if stat.S_ISREG(stat_result.st_mode):
        return StaticMatch(full_path, stat_result)
    if not stat.S_ISDIR(stat_result.st_mode):
        return None
    if not url_path.endswith("/"):
        return StaticMatch(full_path, stat_result, redirect_to=url_path + "/")
    index = files.find_file(f"{relative_path}/{INDEX_FILE}")
    if index is None:
        return None
    return StaticMatch(*index)


def resolve_static(files: ConsoleStaticFiles, url_path: str) -> Optional[StaticMatch]:
    """Match a request path against the ``/`` and ``/console`` mount points.

    The root mount is tried first, so ``/console/app.js`` prefers
    ``<root>/console/app.js`` over ``<root>/app.js`` when both exist.
    Directories serve their own index.html, and are redirected to the
    slash-terminated path when requested without it.
    """
    match = _match_mount(files, url_path, url_path)
    if match is not None:
        return match
    remainder = _strip_console_prefix(url_path)
    if remainder is None:
        return None
    return _match_mount(files, remainder, url_path)
